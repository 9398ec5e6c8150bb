"""
선형 결합 기반 모듈: 유한체 산술 엔진 (Field Arithmetic Engine)
================================================================

선형 결합(LinearComb)의 모든 계수 연산은 이 모듈을 거친다.

**법(modulus)별 유한체**:
  py_ecc의 FQ 클래스는 클래스 속성 field_modulus로 체를 정한다.
  bn128 스칼라 필드처럼 고정된 체뿐 아니라 임의의 법 m에 대해서도
  FQ를 상속한 클래스를 만들어 같은 방식으로 +, -, *, / 연산을 수행한다.
  최근에 쓴 법의 클래스는 캐시해 두고 재사용한다 (최대 FIELD_CACHE_SIZE개).

**ModMath**:
  법 하나에 묶인 산술 엔진. 정수(int)를 받아 정수를 돌려준다.
  - reduce(v)    : v mod m
  - add/sub/mul  : 체 위의 덧셈/뺄셈/곱셈
  - div(a, b)    : a · b⁻¹  (b의 역원이 없으면 NotInvertible)

사용 예시:
    >>> math = ModMath(17)
    >>> math.mul(12, 9)      # 108 mod 17 = 6
    >>> math.div(11, 123)    # 123 ≡ 4, 4⁻¹ ≡ 13 → 11·13 mod 17 = 7
"""

from functools import lru_cache
from math import gcd

from py_ecc import bn128
from py_ecc.fields.field_elements import FQ

from zkcircuit.linear.errors import NotInvertible


# 기본 법: bn128 곡선 위수 (PLONK/Groth16 스칼라 필드와 동일)
DEFAULT_MODULUS = bn128.curve_order

# prime_field가 보관하는 법별 FQ 클래스의 최대 개수
FIELD_CACHE_SIZE = 128


class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소."""
    field_modulus = DEFAULT_MODULUS


@lru_cache(maxsize=FIELD_CACHE_SIZE, typed=True)
def prime_field(modulus):
    """법 modulus에 대한 FQ 서브클래스를 반환한다.

    Args:
        modulus: 체의 위수 (2 이상의 정수)

    Returns:
        type: field_modulus = modulus 인 FQ 서브클래스

    Raises:
        ValueError: modulus < 2
    """
    if not isinstance(modulus, int) or isinstance(modulus, bool):
        raise TypeError(f"법은 정수여야 합니다: {modulus!r}")
    if modulus < 2:
        raise ValueError(f"법은 2 이상이어야 합니다: {modulus}")
    if modulus == DEFAULT_MODULUS:
        return FR
    return type(f"F{modulus}", (FQ,), {"field_modulus": modulus})


def _as_int(value):
    if isinstance(value, FQ):
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"체 원소는 정수여야 합니다: {value!r}")
    return value


class ModMath:
    """법 하나에 대한 유한체 산술.

    모든 메서드는 정수 또는 FQ 원소를 받아 [0, modulus) 범위의 정수를 반환한다.
    """

    def __init__(self, modulus):
        self.field = prime_field(modulus)
        self.modulus = modulus

    def element(self, value):
        """정수를 이 체의 FQ 원소로 변환한다."""
        return self.field(_as_int(value))

    def reduce(self, value):
        return int(self.element(value))

    def add(self, a, b):
        return int(self.element(a) + self.element(b))

    def sub(self, a, b):
        return int(self.element(a) - self.element(b))

    def mul(self, a, b):
        return int(self.element(a) * self.element(b))

    def inverse(self, value):
        """모듈러 역원 value⁻¹ mod m.

        py_ecc의 prime_field_inv는 역원이 없을 때 0이나 잘못된 값을
        돌려주므로, 먼저 gcd(value, m) = 1인지 확인한다.

        Raises:
            NotInvertible: value ≡ 0 이거나 m과 서로소가 아닐 때
        """
        reduced = self.reduce(value)
        if gcd(reduced, self.modulus) != 1:
            raise NotInvertible(_as_int(value), self.modulus)
        return int(self.field(1) / self.field(reduced))

    def div(self, a, b):
        """a / b = a · b⁻¹ mod m."""
        return self.mul(a, self.inverse(b))

    def __eq__(self, other):
        return isinstance(other, ModMath) and self.modulus == other.modulus

    def __hash__(self):
        return hash(self.modulus)

    def __repr__(self):
        return f"ModMath({self.modulus})"
