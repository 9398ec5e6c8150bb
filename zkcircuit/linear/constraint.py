"""
Rank-1 제약 (Rank-1 Constraint)
===============================

세 선형 결합 A, B, C로 이루어진 하나의 관계:

    (A · w) × (B · w) = (C · w)   (mod m)

w는 변수 인덱스별 값을 가진 witness 벡터이다.
생성 후에는 변경할 수 없다.
"""

from zkcircuit.linear.errors import ModulusMismatch


class Constraint:
    """R1CS의 한 행 (A, B, C).

    A, B, C는 모두 같은 법 위의 선형 결합이어야 한다.
    연산 체인 핸들을 넘기면 그 핸들이 가진 선형 결합을 사용한다.
    """

    __slots__ = ("_a", "_b", "_c")

    def __init__(self, a, b, c):
        a, b, c = a.linear_comb, b.linear_comb, c.linear_comb
        for other in (b, c):
            if other.modulus != a.modulus:
                raise ModulusMismatch(a.modulus, other.modulus)
        self._a = a
        self._b = b
        self._c = c

    @property
    def a(self):
        return self._a

    @property
    def b(self):
        return self._b

    @property
    def c(self):
        return self._c

    @property
    def modulus(self):
        return self._a.modulus

    @property
    def indexes(self):
        """A, B, C에 등장하는 모든 인덱스 (오름차순)."""
        return sorted(set(self._a.indexes) | set(self._b.indexes) | set(self._c.indexes))

    def __iter__(self):
        return iter((self._a, self._b, self._c))

    def __eq__(self, other):
        if not isinstance(other, Constraint):
            return NotImplemented
        return (self._a, self._b, self._c) == (other._a, other._b, other._c)

    def __hash__(self):
        return hash((self._a, self._b, self._c))

    def __str__(self):
        return (
            f"({self._a.format_terms()}) * ({self._b.format_terms()})"
            f" = ({self._c.format_terms()}) | mod {self.modulus}"
        )

    def __repr__(self):
        return f"Constraint(a={self._a!r}, b={self._b!r}, c={self._c!r})"
