"""
LinearComb 모듈 테스트.

테스트 대상:
  - 생성: 리스트/매핑, 축약, 정렬, 형태 검사
  - get: witness 조각 평가
  - 덧셈/뺄셈, 상수배/상수 나눗셈, 계수별 곱
  - 텍스트 표현
"""

import pytest

from zkcircuit.linear.combination import LinearComb
from zkcircuit.linear.errors import ModulusMismatch, ShapeMismatch, NotInvertible


# ─────────────────────────────────────────────────────────────────────
# 생성
# ─────────────────────────────────────────────────────────────────────

class TestConstruction:
    def test_from_lists(self):
        lc = LinearComb(17, [1, 2, 3], [3, 2, 1])
        assert lc.modulus == 17
        assert lc.terms == {1: 3, 2: 2, 3: 1}

    def test_from_terms(self, a):
        assert LinearComb.from_terms(17, {3: 1, 1: 3, 2: 2}) == a

    def test_coefficients_reduced(self):
        lc = LinearComb(17, [1, 2, 3], [214, 12412, 5645])
        assert lc.scalars == [10, 2, 1]

    def test_negative_coefficient_reduced(self):
        assert LinearComb(17, [1], [-1]).scalars == [16]

    def test_indexes_sorted(self):
        """인덱스는 항상 오름차순으로 저장된다."""
        lc = LinearComb(17, [3, 1, 2], [1, 3, 2])
        assert lc.indexes == [1, 2, 3]
        assert lc.scalars == [3, 2, 1]

    def test_length_mismatch(self):
        with pytest.raises(ShapeMismatch):
            LinearComb(17, [1, 2, 3], [1, 2])

    def test_duplicate_index(self):
        with pytest.raises(ShapeMismatch):
            LinearComb(17, [1, 1], [1, 2])

    def test_negative_index(self):
        with pytest.raises(ValueError):
            LinearComb(17, [-1], [1])

    def test_non_integer_coefficient(self):
        with pytest.raises(TypeError):
            LinearComb(17, [1], [1.5])

    def test_one(self):
        one = LinearComb.one(17)
        assert one.terms == {0: 1}
        assert one.is_constant()

    def test_not_constant(self, a):
        assert not a.is_constant()

    def test_terms_is_copy(self, a):
        terms = a.terms
        terms[1] = 0
        assert a.terms[1] == 3


# ─────────────────────────────────────────────────────────────────────
# get
# ─────────────────────────────────────────────────────────────────────

class TestGet:
    def test_evaluate(self, a):
        # 3·1 + 2·2 + 1·3 = 10
        assert a.get([1, 2, 3]) == 10

    def test_evaluate_wraps(self, a):
        # 3·5 + 2·5 + 1·5 = 30 ≡ 13
        assert a.get([5, 5, 5]) == 13

    def test_wrong_length(self, a):
        with pytest.raises(ShapeMismatch):
            a.get([1, 2])


# ─────────────────────────────────────────────────────────────────────
# 덧셈 / 뺄셈
# ─────────────────────────────────────────────────────────────────────

class TestAddSub:
    def test_add(self, a, b):
        assert (a + b).terms == {1: 12, 2: 7, 3: 4}

    def test_sub(self, a, b):
        # 3-9, 2-5, 1-3 (mod 17)
        assert (a - b).terms == {1: 11, 2: 14, 3: 15}

    def test_method_aliases(self, a, b):
        assert a.add(b) == a + b
        assert a.sub(b) == a - b

    def test_operands_unchanged(self, a, b):
        a + b
        assert a.terms == {1: 3, 2: 2, 3: 1}
        assert b.terms == {1: 9, 2: 5, 3: 3}

    def test_modulus_mismatch(self, a):
        other = LinearComb(19, [1, 2, 3], [1, 1, 1])
        with pytest.raises(ModulusMismatch):
            a + other

    def test_index_mismatch(self, a):
        other = LinearComb(17, [1, 2, 4], [1, 1, 1])
        with pytest.raises(ShapeMismatch):
            a - other

    def test_add_non_linear_comb(self, a):
        with pytest.raises(TypeError):
            a + 1


# ─────────────────────────────────────────────────────────────────────
# 상수배 / 상수 나눗셈 / 계수별 곱
# ─────────────────────────────────────────────────────────────────────

class TestScaling:
    def test_elem_wise_mul(self):
        c = LinearComb(17, [1, 2, 3], [12, 7, 4])
        # 108, 63, 36 mod 17
        assert c.elem_wise_mul(9).terms == {1: 6, 2: 12, 3: 2}

    def test_elem_wise_div(self):
        e = LinearComb(17, [1, 2, 3], [11, 5, 15])
        assert e.elem_wise_div(123).terms == {1: 7, 2: 14, 3: 8}

    def test_div_by_zero(self, a):
        with pytest.raises(NotInvertible):
            a.elem_wise_div(0)

    def test_div_not_coprime(self):
        lc = LinearComb(12, [1], [5])
        with pytest.raises(NotInvertible):
            lc.elem_wise_div(6)

    def test_mul_returns_new_value(self, a):
        scaled = a.elem_wise_mul(2)
        assert scaled is not a
        assert a.terms == {1: 3, 2: 2, 3: 1}

    def test_elem_wise_product(self, a, b):
        # 27, 10, 3 mod 17
        assert a.elem_wise_product(b).terms == {1: 10, 2: 10, 3: 3}

    def test_product_with_constant_rejected(self, a):
        """상수 {0: k}도 인덱스 집합이 다르면 계수별 곱이 불가능하다."""
        three = LinearComb(17, [0], [3])
        with pytest.raises(ShapeMismatch):
            three.elem_wise_product(a)
        with pytest.raises(ShapeMismatch):
            a.elem_wise_product(three)

    def test_product_constants(self):
        assert LinearComb(17, [0], [3]).elem_wise_product(LinearComb(17, [0], [6])).terms == {0: 1}

    def test_product_index_mismatch(self, a):
        with pytest.raises(ShapeMismatch):
            a.elem_wise_product(LinearComb(17, [1, 2], [1, 1]))

    def test_product_modulus_mismatch(self, a):
        with pytest.raises(ModulusMismatch):
            a.elem_wise_product(LinearComb(19, [1, 2, 3], [1, 1, 1]))


# ─────────────────────────────────────────────────────────────────────
# 비교 / 표현
# ─────────────────────────────────────────────────────────────────────

class TestEqualityAndDisplay:
    def test_equal_after_reduction(self):
        assert LinearComb(17, [1], [20]) == LinearComb(17, [1], [3])

    def test_different_modulus_not_equal(self):
        assert LinearComb(17, [1], [3]) != LinearComb(19, [1], [3])

    def test_hash(self):
        assert hash(LinearComb(17, [1], [20])) == hash(LinearComb(17, [1], [3]))

    def test_display(self):
        lc = LinearComb.from_terms(17, {1: 214, 2: 12412, 3: 5645})
        assert str(lc) == "x1 * 10 + x2 * 2 + x3 * 1 | mod 17"

    def test_display_skips_zero(self):
        lc = LinearComb(17, [1, 2], [17, 5])
        assert str(lc) == "x2 * 5 | mod 17"

    def test_display_constant_wire(self):
        lc = LinearComb(17, [0, 1], [5, 3])
        assert str(lc) == "5 + x1 * 3 | mod 17"

    def test_display_all_zero(self):
        assert str(LinearComb(17, [1, 2], [0, 0])) == "0 | mod 17"

    def test_display_deterministic_order(self):
        lhs = LinearComb(17, [3, 1, 2], [1, 3, 2])
        rhs = LinearComb(17, [1, 2, 3], [3, 2, 1])
        assert str(lhs) == str(rhs)

    def test_repr(self, a):
        assert repr(a) == "LinearComb(17, {1: 3, 2: 2, 3: 1})"
