"""Tests for MatrixSquare: identity, determinant and reciprocal."""

import logging

import pytest

from xmath.errors import DimensionMismatchError, DomainError, UndefinedOperationError
from xmath.matrix import Matrix, MatrixSquare


IDENTITY_3 = [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
# det = -306
INVERTIBLE_3 = [[6, 1, 1], [4, -2, 5], [2, 8, 7]]


class TestMatrixSquareInstantiation:
    """Test construction and row repair."""

    def test_square_input_unchanged(self):
        """Test already-square input keeps its cells."""
        square = MatrixSquare([[1, 2], [3, 4]])
        assert square.size == 2
        assert square.raw == ((1.0, 2.0), (3.0, 4.0))

    def test_short_rows_are_padded_with_zero(self):
        """Test that short rows are padded to the row count."""
        assert MatrixSquare([[1, 2], [3]]).raw == ((1.0, 2.0), (3.0, 0.0))

    def test_long_rows_are_truncated(self):
        """Test that long rows are cut to the row count."""
        assert MatrixSquare([[1, 2, 3], [4, 5, 6]]).raw == ((1.0, 2.0), (4.0, 5.0))

    def test_tall_input_is_padded(self):
        """Test a single column grows to a square."""
        square = MatrixSquare([[1], [2], [3]])
        assert square.shape == (3, 3)
        assert square.raw[2] == (3.0, 0.0, 0.0)

    def test_from_rectangular_matrix(self):
        """Test repairing a rectangular Matrix."""
        square = MatrixSquare(Matrix([[1, 2, 3], [4, 5, 6]]))
        assert square == Matrix([[1, 2], [4, 5]])

    def test_single_empty_row(self):
        """Test one empty row becomes a 1x1 zero matrix."""
        assert MatrixSquare([[]]).raw == ((0.0,),)

    def test_default_is_empty(self):
        """Test the no-argument constructor."""
        assert MatrixSquare().shape == (0, 0)

    def test_repr(self):
        """Test debug representation."""
        assert repr(MatrixSquare([[1, 2], [3]])) == "MatrixSquare([[1, 2], [3, 0]])"

    def test_access_delegates_to_matrix(self):
        """Test at and indexing."""
        square = MatrixSquare([[1, 2], [3, 4]])
        assert square.at(1, 0) == 3.0
        assert square[0, 1] == 2.0
        assert square[1] == (3.0, 4.0)


class TestMultiplicativeIdentity:
    """Test MatrixSquare.mult_iden."""

    def test_identity_3x3(self):
        """Test the 3x3 identity."""
        assert MatrixSquare.mult_iden(3) == MatrixSquare(IDENTITY_3)

    def test_identity_default_size_is_empty(self):
        """Test mult_iden() returns the empty matrix."""
        assert MatrixSquare.mult_iden().size == 0

    def test_identity_1x1(self):
        """Test the 1x1 identity."""
        assert MatrixSquare.mult_iden(1).raw == ((1.0,),)

    def test_negative_size_raises(self):
        """Test that a negative size is rejected."""
        with pytest.raises(DomainError):
            MatrixSquare.mult_iden(-1)

    def test_non_integer_size_raises(self):
        """Test that a fractional size is rejected."""
        with pytest.raises(TypeError):
            MatrixSquare.mult_iden(1.5)

    @pytest.mark.parametrize("size", [1, 2, 3, 4])
    def test_identity_is_neutral_on_both_sides(self, size):
        """Test I.A == A == A.I."""
        a = MatrixSquare([[i * size + j - 3 for j in range(size)] for i in range(size)])
        identity = MatrixSquare.mult_iden(size)
        assert identity.times(a) == a
        assert a.times(identity) == a


class TestDeterminant:
    """Test MatrixSquare.det."""

    def test_det_2x2(self):
        """Test ad - bc."""
        assert MatrixSquare([[1, 2], [3, 4]]).det == -2.0

    def test_det_3x3(self):
        """Test a 3x3 cofactor expansion."""
        assert MatrixSquare(INVERTIBLE_3).det == -306.0

    def test_det_1x1(self):
        """Test the determinant of a single cell."""
        assert MatrixSquare([[7]]).det == 7.0

    @pytest.mark.parametrize("size", [1, 2, 3, 4])
    def test_det_of_identity_is_one(self, size):
        """Test det(I) == 1."""
        assert MatrixSquare.mult_iden(size).det == 1.0

    def test_det_of_empty_matrix_raises(self):
        """Test the empty matrix has no determinant."""
        with pytest.raises(UndefinedOperationError):
            MatrixSquare().det

    def test_det_of_singular_matrix_is_zero(self):
        """Test linearly dependent rows."""
        assert MatrixSquare([[1, 2], [2, 4]]).det == 0.0

    def test_det_of_transposition(self):
        """Test det(A^T) == det(A)."""
        square = MatrixSquare(INVERTIBLE_3)
        assert square.transposition.det == square.det

    def test_det_is_multiplicative(self):
        """Test det(A.B) == det(A) * det(B)."""
        a = MatrixSquare([[1, 2], [3, 4]])
        b = MatrixSquare([[2, 0], [1, 2]])
        assert a.times(b).det == a.det * b.det


class TestReciprocal:
    """Test MatrixSquare.reciprocal."""

    def test_reciprocal_2x2(self):
        """Test the inverse of [[1, 2], [3, 4]]."""
        assert MatrixSquare([[1, 2], [3, 4]]).reciprocal == MatrixSquare([[-2, 1], [1.5, -0.5]])

    def test_reciprocal_1x1(self):
        """Test the inverse of a single cell."""
        assert MatrixSquare([[4]]).reciprocal == MatrixSquare([[0.25]])

    def test_reciprocal_of_empty_matrix_is_empty(self):
        """Test the empty matrix is its own reciprocal."""
        assert MatrixSquare().reciprocal == MatrixSquare()

    def test_reciprocal_of_identity(self):
        """Test I^-1 == I."""
        assert MatrixSquare.mult_iden(3).reciprocal == MatrixSquare(IDENTITY_3)

    def test_product_with_reciprocal_is_identity(self, assert_matrix_close):
        """Test A.A^-1 == I == A^-1.A."""
        square = MatrixSquare(INVERTIBLE_3)
        inverse = square.reciprocal
        assert_matrix_close(square.times(inverse), IDENTITY_3)
        assert_matrix_close(inverse.times(square), IDENTITY_3)

    def test_reciprocal_of_reciprocal(self, assert_matrix_close):
        """Test (A^-1)^-1 == A."""
        square = MatrixSquare(INVERTIBLE_3)
        assert_matrix_close(square.reciprocal.reciprocal, square)

    @pytest.mark.parametrize("rows", [[[1, 2], [2, 4]], [[0]], [[1, 2, 3], [4, 5, 6], [7, 8, 9]]])
    def test_singular_matrix_raises(self, rows):
        """Test that a zero determinant has no reciprocal."""
        with pytest.raises(UndefinedOperationError):
            MatrixSquare(rows).reciprocal

    def test_singular_matrix_logs_rejection(self, caplog):
        """Test the rejection is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="xmath.matrix"):
            with pytest.raises(UndefinedOperationError):
                MatrixSquare([[1, 2], [2, 4]]).reciprocal
        assert "singular" in caplog.text


class TestClosedOperations:
    """Test that square operations stay square."""

    def test_transposition_is_square(self):
        """Test transposition keeps the type."""
        transposition = MatrixSquare([[1, 2], [3, 4]]).transposition
        assert isinstance(transposition, MatrixSquare)
        assert transposition.raw == ((1.0, 3.0), (2.0, 4.0))

    def test_minor_is_square(self):
        """Test minor keeps the type."""
        minor = MatrixSquare(INVERTIBLE_3).minor(0, 0)
        assert isinstance(minor, MatrixSquare)
        assert minor.raw == ((-2.0, 5.0), (8.0, 7.0))

    def test_scale_is_square(self):
        """Test scale and the * operator keep the type."""
        square = MatrixSquare([[1, 2], [3, 4]])
        assert isinstance(square.scale(2), MatrixSquare)
        assert (square * 2).raw == ((2.0, 4.0), (6.0, 8.0))
        assert (2 * square) == square.scale(2)
        assert isinstance(-square, MatrixSquare)

    def test_times_is_square(self):
        """Test multiplying squares of the same size."""
        product = MatrixSquare([[1, 2], [3, 4]]) @ MatrixSquare([[2, 0], [1, 2]])
        assert isinstance(product, MatrixSquare)
        assert product.raw == ((4.0, 4.0), (10.0, 8.0))

    def test_times_non_square_product_raises(self):
        """Test a product that is not square is rejected."""
        with pytest.raises(DimensionMismatchError):
            MatrixSquare([[1, 2], [3, 4]]).times(Matrix([[1, 2, 3], [4, 5, 6]]))

    def test_times_different_size_raises(self):
        """Test multiplying squares of different size."""
        with pytest.raises(DimensionMismatchError):
            MatrixSquare([[1, 2], [3, 4]]).times(MatrixSquare.mult_iden(3))

    def test_zero_matrix_absorbs(self):
        """Test Z.A == Z."""
        zero = MatrixSquare([[0, 0], [0, 0]])
        assert zero.times(MatrixSquare([[1, 2], [3, 4]])) == zero


class TestMatrixSquareComparison:
    """Test equality and conversions."""

    def test_equal_to_matrix(self):
        """Test equality across Matrix and MatrixSquare."""
        assert MatrixSquare([[1, 2], [3, 4]]) == Matrix([[1, 2], [3, 4]])
        assert MatrixSquare([[1, 2], [3, 4]]).equals(Matrix([[1, 2], [3, 4]]))

    def test_hashable(self):
        """Test equal squares hash equally."""
        assert len({MatrixSquare([[1]]), MatrixSquare([[1.0]])}) == 1

    def test_fuzzy_compare(self):
        """Test compare within the context tolerance."""
        assert MatrixSquare([[1, 2], [3, 4]]).compare(MatrixSquare([[1, 2], [3, 4.0001]]))

    def test_conversions_delegate(self):
        """Test string, TeX and Python output."""
        square = MatrixSquare([[1, 2], [3, 4]])
        assert square.to_string() == "[[1, 2], [3, 4]]"
        assert square.to_tex() == "\\begin{pmatrix} 1 & 2 \\\\ 3 & 4 \\end{pmatrix}"
        assert square.to_python() == [[1.0, 2.0], [3.0, 4.0]]
        assert square.to_numpy().shape == (2, 2)
