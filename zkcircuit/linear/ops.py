"""
연산 체인 (Operation Chain)
===========================

선형 결합 위의 대수 연산을 하나씩 감싸며, 각 단계가 부과하는 관계를
Rank-1 제약으로 기록한다.

**체인 구조**:
  각 노드는 직전 노드(inner)를 단독으로 소유하는 역방향 연결 리스트이다.

    g = f.lpow(13)          PowLC  depth 3
      └ f = e.ldiv(123)     SubLC  depth 2  (e를 스케일한 것, 깊이 그대로)
          └ inner = d       AddLC  depth 1
              └ inner = a   LinearComb depth 0

  depth(node) = depth(inner) + 1, 기저 LinearComb의 depth = 0.
  깊이는 생성 시점에 정해지고 이후 바뀌지 않는다.

**연산별 제약**:
  | 연산          | 결과 L            | 제약 (A, B, C)        | depth |
  |---------------|-------------------|-----------------------|-------|
  | ladd(r)       | L + r             | (L, 1, L)             | +1    |
  | lsub(r)       | L - r             | (L, 1, L)             | +1    |
  | wmul/wdiv(k)  | k·L, L/k          | (기존 제약 유지)      | +0    |
  | scalar_mul(r) | L ⊙ r (계수별 곱) | (self, r, L⊙r)        | +1    |
  | lpow(e)       | L^e (e번 곱셈)    | (L^e, 1, 1)           | +1    |

  상수배(wmul/wdiv)는 컴파일 시점 상수와의 곱이므로 곱셈 게이트가 필요 없다.
  따라서 새 제약이나 깊이를 만들지 않고 선형 결합만 바꾼다.

**R1CS 평탄화**:
  r1cs()는 가장 바깥 노드에서 기저까지 한 단계씩 내려가며
  각 단계의 대표 제약과 변수 인덱스를 모은다 (depth + 1개 제약).
  lpow의 전개된 곱셈 제약은 포함되지 않는다. 필요하면
  r1cs.extend_constraints(pow_handle.sub_constraints)로 직접 합친다.

사용 예시:
    >>> c = a.ladd(b)
    >>> d = c.wmul(9)
    >>> g = d.lsub(c).ldiv(123).lpow(13)
    >>> g.depth, len(g.sub_constraints)
    (3, 13)
"""

import copy

from zkcircuit.linear.constraint import Constraint
from zkcircuit.linear.r1cs import R1CS


class ConstraintOp:
    """연산 체인 핸들의 공통 인터페이스.

    LinearComb(기저)와 모든 연산 노드가 이 클래스를 상속한다.
    서브클래스는 linear_comb, constraint, inner, depth, _rescaled를 제공한다.
    """

    @property
    def linear_comb(self):
        raise NotImplementedError

    @property
    def constraint(self):
        raise NotImplementedError

    @property
    def inner(self):
        raise NotImplementedError

    @property
    def depth(self):
        raise NotImplementedError

    def _rescaled(self, linear_comb):
        raise NotImplementedError

    @property
    def modulus(self):
        return self.linear_comb.modulus

    @property
    def indexes(self):
        return self.linear_comb.indexes

    @property
    def scalars(self):
        return self.linear_comb.scalars

    @property
    def terms(self):
        return self.linear_comb.terms

    def ladd(self, rhs):
        """덧셈: self + rhs. 제약 (결과, 1, 결과)를 기록한다."""
        result = self.linear_comb + _operand(rhs).linear_comb
        one = result.one(result.modulus)
        return AddLC(self, result, Constraint(result, one, result))

    def lsub(self, rhs):
        """뺄셈: self - rhs. 제약 (결과, 1, 결과)를 기록한다."""
        result = self.linear_comb - _operand(rhs).linear_comb
        one = result.one(result.modulus)
        return SubLC(self, result, Constraint(result, one, result))

    def wmul(self, scalar):
        """상수배. 같은 타입, 같은 깊이, 같은 제약의 핸들을 반환한다."""
        return self._rescaled(self.linear_comb.elem_wise_mul(scalar))

    def wdiv(self, scalar):
        """상수 나눗셈. wmul과 마찬가지로 새 제약을 만들지 않는다.

        Raises:
            NotInvertible: scalar의 역원이 없을 때
        """
        return self._rescaled(self.linear_comb.elem_wise_div(scalar))

    ldiv = wdiv

    def scalar_mul(self, rhs):
        """계수별 곱: self ⊙ rhs. 실제 곱셈 게이트 (self, rhs, 결과)를 기록한다.

        Raises:
            ModulusMismatch: 법이 다를 때
            ShapeMismatch: 인덱스 집합이 다를 때
        """
        lhs = self.linear_comb
        rhs = _operand(rhs).linear_comb
        result = lhs.elem_wise_product(rhs)
        return SmulLC(self, result, Constraint(lhs, rhs, result))

    def lpow(self, exponent):
        """거듭제곱을 exponent번의 순차 곱셈으로 전개한다.

        상수 1에서 시작해 매 단계 원래 피연산자(self)를 곱하고,
        각 곱셈의 제약 (누적값, self, 새 누적값)을 순서대로 보관한다.
        제곱 반복(repeated squaring)은 사용하지 않는다.

        Args:
            exponent: 0 이상의 정수

        Returns:
            PowLC: sub_constraints에 exponent개의 곱셈 제약을 가진 핸들
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"지수는 정수여야 합니다: {exponent!r}")
        if exponent < 0:
            raise ValueError(f"지수는 0 이상이어야 합니다: {exponent}")

        base = self.linear_comb
        one = base.one(base.modulus)
        result = one
        sub_constraints = []
        for _ in range(exponent):
            product = _power_step(result, base)
            sub_constraints.append(Constraint(result, base, product))
            result = product

        return PowLC(self, result, Constraint(result, one, one), sub_constraints)

    def r1cs(self):
        """체인 전체를 R1CS로 평탄화한다.

        현재 노드에서 시작해 매번 그 노드의 inner로 내려가며
        기저(depth 0)까지 정확히 depth + 1개 단계를 방문한다.
        """
        r1cs = R1CS()
        node = self
        while node is not None:
            r1cs.add_constraint(node.constraint)
            r1cs.extend_variables(node.indexes)
            node = node.inner
        return r1cs


def _operand(value):
    if not isinstance(value, ConstraintOp):
        raise TypeError(f"선형 결합 또는 연산 핸들이 아닙니다: {type(value).__name__}")
    return value


def _power_step(running, base):
    # 누적값이 상수 {0: k}이면 상수 배선 값이 1이므로 곱은 base의 k배이다
    if running.is_constant() and not base.is_constant():
        return base.elem_wise_mul(running.scalars[0])
    return running.elem_wise_product(base)


class LinearOp(ConstraintOp):
    """연산 노드: 직전 핸들, 이번 단계의 선형 결합, 이번 단계의 제약."""

    def __init__(self, inner, linear_comb, constraint):
        self._inner = _operand(inner)
        self._linear_comb = linear_comb
        self._constraint = constraint
        self._depth = inner.depth + 1

    @property
    def linear_comb(self):
        return self._linear_comb

    @property
    def constraint(self):
        return self._constraint

    @property
    def inner(self):
        return self._inner

    @property
    def depth(self):
        return self._depth

    def _rescaled(self, linear_comb):
        node = copy.copy(self)
        node._linear_comb = linear_comb
        return node

    def __repr__(self):
        return f"{type(self).__name__}(depth={self._depth}, linear_comb={self._linear_comb})"


class AddLC(LinearOp):
    """ladd의 결과 노드."""


class SubLC(LinearOp):
    """lsub의 결과 노드."""


class SmulLC(LinearOp):
    """scalar_mul의 결과 노드."""


class PowLC(LinearOp):
    """lpow의 결과 노드. 전개된 곱셈 제약을 함께 가진다."""

    def __init__(self, inner, linear_comb, constraint, sub_constraints):
        super().__init__(inner, linear_comb, constraint)
        self._sub_constraints = tuple(sub_constraints)

    @property
    def sub_constraints(self):
        """전개된 곱셈 제약 리스트 (곱셈 순서대로, 지수와 같은 개수)."""
        return list(self._sub_constraints)
