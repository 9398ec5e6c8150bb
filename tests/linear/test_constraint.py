import pytest

from zkcircuit.linear.combination import LinearComb
from zkcircuit.linear.constraint import Constraint
from zkcircuit.linear.errors import ModulusMismatch


class TestConstraint:
    def test_fields(self, a, b, one):
        c = Constraint(a, one, b)
        assert c.a == a
        assert c.b == one
        assert c.c == b
        assert c.modulus == 17

    def test_unpack(self, a, b, one):
        lhs, rhs, out = Constraint(a, b, one)
        assert (lhs, rhs, out) == (a, b, one)

    def test_accepts_chain_handles(self, a, b, one):
        """연산 핸들을 넘기면 그 핸들의 선형 결합을 사용한다."""
        c = a.ladd(b)
        constraint = Constraint(c, one, c)
        assert constraint.a == c.linear_comb
        assert isinstance(constraint.a, LinearComb)

    def test_modulus_mismatch(self, a, one):
        with pytest.raises(ModulusMismatch):
            Constraint(a, LinearComb.one(19), a)

    def test_indexes(self, a, one):
        assert Constraint(a, one, a).indexes == [0, 1, 2, 3]

    def test_equality_and_hash(self, a, b, one):
        assert Constraint(a, one, b) == Constraint(a, one, b)
        assert Constraint(a, one, b) != Constraint(b, one, a)
        assert len({Constraint(a, one, b), Constraint(a, one, b)}) == 1

    def test_display(self, a, one):
        assert str(Constraint(a, one, a)) == (
            "(x1 * 3 + x2 * 2 + x3 * 1) * (1) = (x1 * 3 + x2 * 2 + x3 * 1) | mod 17"
        )
