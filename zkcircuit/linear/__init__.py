"""
R1CS 선형 결합 제약 빌더
========================

선형 결합 위의 연산(덧셈, 뺄셈, 상수배, 계수별 곱, 거듭제곱)을 합성하고,
각 연산이 부과하는 관계를 Rank-1 제약으로 기록하여 R1CS를 만든다.

사용 예시:
    >>> from zkcircuit.linear import LinearComb
    >>> a = LinearComb(17, [1, 2, 3], [3, 2, 1])
    >>> b = LinearComb(17, [1, 2, 3], [9, 5, 3])
    >>> g = a.ladd(b).wmul(9).lpow(3)
    >>> r1cs = g.r1cs()
    >>> len(r1cs)   # depth + 1
    3
"""

from zkcircuit.linear.errors import (
    LinearCombError, ModulusMismatch, ShapeMismatch, NotInvertible,
)
from zkcircuit.linear.field import DEFAULT_MODULUS, FR, ModMath, prime_field
from zkcircuit.linear.constraint import Constraint
from zkcircuit.linear.r1cs import R1CS
from zkcircuit.linear.ops import ConstraintOp, LinearOp, AddLC, SubLC, SmulLC, PowLC
from zkcircuit.linear.combination import CONSTANT_WIRE, LinearComb

__all__ = [
    "LinearCombError", "ModulusMismatch", "ShapeMismatch", "NotInvertible",
    "DEFAULT_MODULUS", "FR", "ModMath", "prime_field",
    "Constraint", "R1CS",
    "ConstraintOp", "LinearOp", "AddLC", "SubLC", "SmulLC", "PowLC",
    "CONSTANT_WIRE", "LinearComb",
]
