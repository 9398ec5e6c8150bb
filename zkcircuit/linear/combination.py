"""
선형 결합 (Linear Combination)
==============================

R1CS 제약의 기본 값 타입. 변수 인덱스(배선)별 계수를 가진 희소 벡터이며,
정의된 유한체의 법(modulus)을 함께 가진다.

    L(w) = Σ cᵢ · wᵢ   (mod m)

**불변 조건**:
  - 인덱스 0은 상수 배선(constant wire)으로 예약되어 있다.
    상수 k는 {0: k}로 표현한다. 예: one(m) = {0: 1}
  - 모든 계수는 생성 시점에 mod m으로 축약된다.
  - 항(terms)은 항상 인덱스 오름차순으로 저장된다.
    같은 입력이면 항상 같은 순서의 제약 시스템이 만들어진다.
  - 두 선형 결합의 덧셈/뺄셈은 법과 인덱스 집합이 모두 같아야 한다.
  - 모든 연산은 새 LinearComb를 반환한다 (제자리 변경 없음).

**텍스트 표현**:
    x1 * 10 + x2 * 2 + x3 * 1 | mod 17
  - 인덱스 오름차순, 계수가 0인 항은 생략
  - 인덱스 0은 계수만 표시 (예: "5 + x1 * 3 | mod 17")

사용 예시:
    >>> a = LinearComb(17, [1, 2, 3], [3, 2, 1])
    >>> b = LinearComb.from_terms(17, {1: 9, 2: 5, 3: 3})
    >>> str(a + b)
    'x1 * 12 + x2 * 7 + x3 * 4 | mod 17'
"""

from zkcircuit.linear.errors import ModulusMismatch, ShapeMismatch
from zkcircuit.linear.field import ModMath
from zkcircuit.linear.ops import ConstraintOp
from zkcircuit.linear.constraint import Constraint


CONSTANT_WIRE = 0


def _check_index(index):
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"변수 인덱스는 정수여야 합니다: {index!r}")
    if index < 0:
        raise ValueError(f"변수 인덱스는 0 이상이어야 합니다: {index}")
    return index


class LinearComb(ConstraintOp):
    """유한체 위의 선형 결합. 연산 체인의 기저(depth 0)이기도 하다.

    속성:
        modulus: 체의 법 (생성 후 변하지 않음)
        terms: {인덱스: 계수} (인덱스 오름차순)
    """

    def __init__(self, modulus, indexes, scalars):
        """인덱스 리스트와 계수 리스트로 선형 결합을 만든다.

        Args:
            modulus: 체의 법
            indexes: 변수 인덱스 리스트 (중복 불가)
            scalars: 각 인덱스의 계수 리스트 (mod m으로 축약됨)

        Raises:
            ShapeMismatch: 두 리스트의 길이가 다르거나 인덱스가 중복될 때
        """
        indexes = list(indexes)
        scalars = list(scalars)
        if len(indexes) != len(scalars):
            raise ShapeMismatch(
                f"인덱스와 계수의 개수가 다릅니다: {len(indexes)} != {len(scalars)}"
            )
        if len(set(indexes)) != len(indexes):
            raise ShapeMismatch(f"중복된 인덱스가 있습니다: {indexes}")

        math = ModMath(modulus)
        pairs = sorted(
            ((_check_index(i), math.reduce(s)) for i, s in zip(indexes, scalars)),
            key=lambda pair: pair[0],
        )
        self._modulus = modulus
        self._math = math
        self._terms = dict(pairs)

    @classmethod
    def from_terms(cls, modulus, terms):
        """{인덱스: 계수} 매핑으로 선형 결합을 만든다."""
        terms = dict(terms)
        indexes = list(terms.keys())
        scalars = list(terms.values())
        # 매핑은 키가 중복될 수 없으므로 방어적 검사일 뿐이다
        if len(indexes) != len(scalars):
            raise ShapeMismatch("인덱스와 계수의 개수가 다릅니다")
        return cls(modulus, indexes, scalars)

    @classmethod
    def one(cls, modulus):
        """상수 1: {0: 1}. 곱셈 항등원 쪽 기록용 제약에 사용한다."""
        return cls(modulus, [CONSTANT_WIRE], [1])

    @classmethod
    def _reduced(cls, math, pairs):
        # pairs는 이미 축약되어 있고 인덱스 오름차순이다
        obj = cls.__new__(cls)
        obj._modulus = math.modulus
        obj._math = math
        obj._terms = dict(pairs)
        return obj

    # ── 조회 ──

    @property
    def modulus(self):
        return self._modulus

    @property
    def math(self):
        """이 선형 결합의 체 산술 엔진 (ModMath)."""
        return self._math

    @property
    def terms(self):
        return dict(self._terms)

    @property
    def indexes(self):
        return list(self._terms.keys())

    @property
    def scalars(self):
        return list(self._terms.values())

    def is_constant(self):
        """상수 배선만 가진 선형 결합인지 확인."""
        return list(self._terms) == [CONSTANT_WIRE]

    def get(self, values):
        """witness 조각에 대해 Σ cᵢ · valuesᵢ (mod m)를 계산한다.

        Args:
            values: 항 개수와 같은 길이의 값 리스트 (인덱스 오름차순)

        Returns:
            int: 평가 결과

        Raises:
            ShapeMismatch: values의 길이가 항 개수와 다를 때
        """
        values = list(values)
        if len(values) != len(self._terms):
            raise ShapeMismatch(
                f"값의 개수가 항의 개수와 다릅니다: {len(values)} != {len(self._terms)}"
            )
        math = self._math
        acc = 0
        for scalar, value in zip(self._terms.values(), values):
            acc = math.add(acc, math.mul(value, scalar))
        return acc

    # ── 선형 결합 연산 ──

    def _check_compatible(self, other):
        if not isinstance(other, LinearComb):
            raise TypeError(f"LinearComb가 아닙니다: {type(other).__name__}")
        if self._modulus != other._modulus:
            raise ModulusMismatch(self._modulus, other._modulus)
        if list(self._terms) != list(other._terms):
            raise ShapeMismatch(
                f"인덱스 집합이 다릅니다: {self.indexes} != {other.indexes}"
            )

    def add(self, other):
        """항별 덧셈: self + other."""
        self._check_compatible(other)
        math = self._math
        return LinearComb._reduced(math, (
            (i, math.add(s, other._terms[i])) for i, s in self._terms.items()
        ))

    def sub(self, other):
        """항별 뺄셈: self - other."""
        self._check_compatible(other)
        math = self._math
        return LinearComb._reduced(math, (
            (i, math.sub(s, other._terms[i])) for i, s in self._terms.items()
        ))

    def __add__(self, other):
        if not isinstance(other, LinearComb):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, LinearComb):
            return NotImplemented
        return self.sub(other)

    def elem_wise_mul(self, scalar):
        """모든 계수에 상수 scalar를 곱한다."""
        math = self._math
        factor = math.reduce(scalar)
        return LinearComb._reduced(math, (
            (i, math.mul(s, factor)) for i, s in self._terms.items()
        ))

    def elem_wise_div(self, scalar):
        """모든 계수를 상수 scalar로 나눈다 (scalar⁻¹ 곱).

        Raises:
            NotInvertible: scalar의 역원이 mod m에서 존재하지 않을 때
        """
        inverse = self._math.inverse(scalar)
        return self.elem_wise_mul(inverse)

    def elem_wise_product(self, other):
        """두 선형 결합의 계수별 곱.

        Raises:
            ModulusMismatch: 법이 다를 때
            ShapeMismatch: 인덱스 집합이 다를 때
        """
        if not isinstance(other, LinearComb):
            raise TypeError(f"LinearComb가 아닙니다: {type(other).__name__}")
        if self._modulus != other._modulus:
            raise ModulusMismatch(self._modulus, other._modulus)
        self._check_compatible(other)
        math = self._math
        return LinearComb._reduced(math, (
            (i, math.mul(s, other._terms[i])) for i, s in self._terms.items()
        ))

    # ── 연산 체인 (depth 0) ──

    @property
    def linear_comb(self):
        return self

    @property
    def constraint(self):
        """기저 단계의 대표 제약: (L, L, L)."""
        return Constraint(self, self, self)

    @property
    def inner(self):
        return None

    @property
    def depth(self):
        return 0

    def _rescaled(self, linear_comb):
        return linear_comb

    # ── 비교 / 표현 ──

    def __eq__(self, other):
        if not isinstance(other, LinearComb):
            return NotImplemented
        return self._modulus == other._modulus and self._terms == other._terms

    def __hash__(self):
        return hash((self._modulus, tuple(self._terms.items())))

    def __len__(self):
        return len(self._terms)

    def format_terms(self):
        """법 표시 없이 항 부분만 렌더링한다. 모든 계수가 0이면 "0"."""
        parts = []
        for index, scalar in self._terms.items():
            if scalar == 0:
                continue
            if index == CONSTANT_WIRE:
                parts.append(str(scalar))
            else:
                parts.append(f"x{index} * {scalar}")
        return " + ".join(parts) if parts else "0"

    def __str__(self):
        return f"{self.format_terms()} | mod {self._modulus}"

    def __repr__(self):
        return f"LinearComb({self._modulus}, {self._terms})"
