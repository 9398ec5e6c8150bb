"""
선형 결합 연산 오류 (Linear Combination Errors)
================================================

회로 구성 시점(construction time)에 발생하는 오류 분류.
모든 오류는 호출 지점에서 즉시 발생하며 코어 내부에서 복구하지 않는다.

  | 오류              | 원인                                           |
  |-------------------|------------------------------------------------|
  | ModulusMismatch   | 두 피연산자의 법(modulus)이 다름               |
  | ShapeMismatch     | 인덱스/계수 길이 불일치, 인덱스 집합 불일치,   |
  |                   | 평가 값 개수 불일치                            |
  | NotInvertible     | 주어진 법에서 모듈러 역원이 존재하지 않음      |
"""


class LinearCombError(ValueError):
    """선형 결합 연산 오류의 공통 기반 클래스."""


class ModulusMismatch(LinearCombError):
    """두 피연산자가 서로 다른 유한체 위에 정의되어 있다."""

    def __init__(self, lhs, rhs):
        self.lhs = lhs
        self.rhs = rhs
        super().__init__(f"법(modulus)이 일치하지 않습니다: {lhs} != {rhs}")


class ShapeMismatch(LinearCombError):
    """인덱스 구성 또는 값 개수가 맞지 않는다."""


class NotInvertible(LinearCombError, ZeroDivisionError):
    """스칼라의 모듈러 역원이 존재하지 않는다 (0 또는 법과 서로소가 아님)."""

    def __init__(self, scalar, modulus):
        self.scalar = scalar
        self.modulus = modulus
        super().__init__(f"{scalar}은(는) mod {modulus}에서 역원이 없습니다")
