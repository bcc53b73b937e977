"""Tests for rational matrices and the matrix algebra."""

from __future__ import annotations

import pytest

from rowsofb.core import matrix as mx
from rowsofb.core.errors import DimensionError, SingularMatrixError
from rowsofb.core.matrix import Matrix
from rowsofb.core.rational import Rational

M = Matrix.from_rows


# ============================================================================
# Construction and access
# ============================================================================


class TestConstruction:
    def test_zeros(self) -> None:
        z = mx.zeros(2, 3)
        assert z.shape == (2, 3)
        assert z.is_zero()

    def test_identity(self) -> None:
        assert mx.identity(2) == M([[1, 0], [0, 1]])

    def test_identity_zero_size(self) -> None:
        assert mx.identity(0).shape == (0, 0)

    def test_from_rows_accepts_strings(self) -> None:
        m = M([["1/2", 3]])
        assert m.get(1, 1) == Rational(1, 2)
        assert m.get(1, 2) == 3

    def test_from_rows_uneven(self) -> None:
        with pytest.raises(DimensionError):
            M([[1, 2], [3]])

    def test_empty(self) -> None:
        assert M([]).shape == (0, 0)

    def test_value_count_checked(self) -> None:
        with pytest.raises(DimensionError):
            Matrix(2, 2, [Rational(1)])

    def test_negative_size(self) -> None:
        with pytest.raises(DimensionError):
            Matrix(-1, 2)


class TestAccess:
    def test_one_indexed(self) -> None:
        m = M([[1, 2], [3, 4]])
        assert m.get(1, 1) == 1
        assert m.get(2, 1) == 3

    def test_out_of_range(self) -> None:
        m = M([[1, 2], [3, 4]])
        with pytest.raises(IndexError):
            m.get(0, 1)
        with pytest.raises(IndexError):
            m.get(1, 3)

    def test_set(self) -> None:
        m = mx.zeros(2, 2)
        m.set(2, 2, Rational(5))
        assert m == M([[0, 0], [0, 5]])

    def test_copy_is_independent(self) -> None:
        m = M([[1, 2]])
        c = m.copy()
        c.set(1, 1, Rational(9))
        assert m.get(1, 1) == 1

    def test_column_slice(self) -> None:
        m = M([[1, 2, 3, 4], [5, 6, 7, 8]])
        assert m.column_slice(2, 3) == M([[2, 3], [6, 7]])

    def test_str(self) -> None:
        assert str(M([[1, "1/2"], [0, -3]])) == "[[1, 1/2], [0, -3]]"

    def test_equality_ignores_form(self) -> None:
        assert Matrix(1, 1, [Rational(2, 4)]) == M([["1/2"]])
        assert M([[1, 2]]) != M([[1], [2]])


class TestRowOperations:
    def test_swap_rows(self) -> None:
        m = M([[1, 2], [3, 4]])
        m.swap_rows(1, 2)
        assert m == M([[3, 4], [1, 2]])

    def test_scale_row_reduces(self) -> None:
        m = M([[2, 4]])
        m.scale_row(1, Rational(1, 2))
        entry = m.get(1, 2)
        assert (entry.numerator, entry.denominator) == (2, 1)

    def test_add_scaled_row(self) -> None:
        m = M([[1, 2], [3, 4]])
        m.add_scaled_row(1, Rational(-3), 2)
        assert m == M([[1, 2], [0, -2]])


# ============================================================================
# Reduction
# ============================================================================


class TestLeadingEntry:
    def test_first_nonzero(self) -> None:
        m = M([[0, 3, 1]])
        assert mx.is_leading_entry(m, 1, 2)
        assert not mx.is_leading_entry(m, 1, 1)
        assert not mx.is_leading_entry(m, 1, 3)


class TestRef:
    def test_known_result(self) -> None:
        m = M([[3, 0, -5], [1, -5, 0], [1, 1, -2]])
        assert mx.ref(m) == M([[1, 0, "-5/3"], [0, 1, "-1/3"], [0, 0, 0]])

    def test_operand_untouched(self) -> None:
        m = M([[2, 4], [1, 3]])
        mx.ref(m)
        assert m == M([[2, 4], [1, 3]])

    def test_zero_matrix(self) -> None:
        assert mx.ref(mx.zeros(2, 2)) == mx.zeros(2, 2)

    def test_swaps_to_find_pivot(self) -> None:
        m = M([[0, 1], [2, 0]])
        assert mx.ref(m) == M([[1, 0], [0, 1]])

    def test_more_rows_than_columns(self) -> None:
        m = M([[1], [2], [3]])
        assert mx.ref(m) == M([[1], [0], [0]])

    def test_leading_ones_step_right(self) -> None:
        result = mx.ref(M([[2, 4, 6], [1, 5, 9], [0, 0, 0]]))
        assert result.get(1, 1) == 1
        assert result.get(2, 1) == 0
        assert result.get(2, 2) == 1


class TestRref:
    def test_rank_one(self) -> None:
        m = M([[-12, 2, -6], [18, -3, 9], [-2, "1/3", -1]])
        assert mx.rref(m) == M([[1, "-1/6", "1/2"], [0, 0, 0], [0, 0, 0]])

    def test_invertible_gives_identity(self) -> None:
        m = M([[-1, 0, 1], [-1, 3, 0], [-4, 12, -1]])
        assert mx.rref(m) == mx.identity(3)

    def test_nonzero_determinant_gives_identity(self) -> None:
        m = M([[1, 2, 3], [2, 3, 4], ["5/2", 2, "7/8"]])
        assert mx.rref(m) == mx.identity(3)

    def test_rectangular(self) -> None:
        m = M([[1, 2, 3], [4, 5, 6]])
        assert mx.rref(m) == M([[1, 0, -1], [0, 1, 2]])

    def test_idempotent(self) -> None:
        m = M([[2, 1, -1, 8], [-3, -1, 2, -11], [-2, 1, 2, -3]])
        once = mx.rref(m)
        assert mx.rref(once) == once
        assert once == M([[1, 0, 0, 2], [0, 1, 0, 3], [0, 0, 1, -1]])


class TestInverse:
    def test_known_inverse(self) -> None:
        m = M([[2, 6, 8], [6, 18, 25], [6, 17, 32]])
        assert mx.inverse(m) == M([["151/2", -28, 3], [-21, 8, -1], [-3, 1, 0]])

    def test_product_is_identity(self) -> None:
        m = M([[2, 6, 8], [6, 18, 25], [6, 17, 32]])
        assert mx.multiply(m, mx.inverse(m)) == mx.identity(3)

    def test_singular(self) -> None:
        with pytest.raises(SingularMatrixError, match="matrix has no inverse"):
            mx.inverse(M([[1, 2], [2, 4]]))

    def test_zero_matrix_singular(self) -> None:
        with pytest.raises(SingularMatrixError):
            mx.inverse(mx.zeros(3, 3))

    def test_non_square(self) -> None:
        with pytest.raises(DimensionError, match="non-square"):
            mx.inverse(M([[1, 2, 3], [4, 5, 6]]))


# ============================================================================
# Combination
# ============================================================================


class TestAugment:
    def test_columns_joined(self) -> None:
        a = M([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        b = M([[10, 11], [12, 13], [14, 15]])
        assert mx.augment(a, b) == M(
            [[1, 2, 3, 10, 11], [4, 5, 6, 12, 13], [7, 8, 9, 14, 15]]
        )

    def test_row_counts_must_match(self) -> None:
        with pytest.raises(DimensionError, match="equal row counts"):
            mx.augment(mx.zeros(2, 2), mx.zeros(3, 2))


class TestAddScaleMultiply:
    def test_add(self) -> None:
        a = M([[1, 2, 3], [4, 5, 6]])
        b = M([[4, 5, 6], [2, 2, 6]])
        assert mx.add(a, b) == M([[5, 7, 9], [6, 7, 12]])

    def test_add_shape_mismatch(self) -> None:
        with pytest.raises(DimensionError):
            mx.add(mx.zeros(2, 3), mx.zeros(3, 2))

    def test_scale(self) -> None:
        m = M([[1, 2, 2], [7, 1, -1], [2, "3/2", 0]])
        assert mx.scale(Rational(2), m) == M([[2, 4, 4], [14, 2, -2], [4, 3, 0]])

    def test_negate(self) -> None:
        assert mx.negate(M([[1, -2]])) == M([[-1, 2]])

    def test_multiply(self) -> None:
        a = M([[1, 2, 1, 1], [7, 1, 2, 0], [3, -1, 1, 0]])
        b = M([[1, 0, 1], [0, 2, 0], [1, 7, 0], [0, 0, -1]])
        assert mx.multiply(a, b) == M([[2, 11, 0], [9, 16, 7], [4, 5, 3]])

    def test_multiply_shape(self) -> None:
        assert mx.multiply(mx.zeros(2, 3), mx.zeros(3, 4)).shape == (2, 4)

    def test_multiply_mismatch(self) -> None:
        with pytest.raises(DimensionError, match="cannot multiply a 2x3 matrix by a 2x3 matrix"):
            mx.multiply(mx.zeros(2, 3), mx.zeros(2, 3))

    def test_transpose(self) -> None:
        assert mx.transpose(M([[1, 2, 3], [4, 5, 6]])) == M([[1, 4], [2, 5], [3, 6]])
