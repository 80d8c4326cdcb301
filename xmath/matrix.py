"""
Matrix value types: Matrix and MatrixSquare.

A Matrix is an immutable rectangular grid of finite reals. A MatrixSquare
wraps a Matrix whose rows and columns are equal in number and adds the
operations only square matrices have: determinant, identity and inverse.

Square matrices of one size are closed under multiplication, have a unique
multiplicative identity (``MatrixSquare.mult_iden(size)``), a multiplicative
absorber (the zero matrix), and every matrix with a non-zero determinant has
a unique multiplicative inverse (``reciprocal``).
"""

from __future__ import annotations

import logging
import operator
from functools import reduce
from numbers import Real
from typing import Any, Iterable

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .errors import (
    DimensionMismatchError,
    DomainError,
    IndexRangeError,
    UndefinedOperationError,
)
from .geometric import Vector
from .value import MathValue, coerce_real, format_real, fuzzy_compare

logger = logging.getLogger(__name__)


def _raw_grid(data: Any) -> list[list[float]]:
    """
    Convert matrix-like input into a list of rows of finite floats.

    Accepts a Matrix, a MatrixSquare, a 2-D NumPy array, or an iterable of
    rows where each row is a Vector or an iterable of numbers.
    """
    if isinstance(data, MatrixSquare):
        data = data.matrix
    if isinstance(data, Matrix):
        return [list(row) for row in data.rows]

    if isinstance(data, np.ndarray):
        if data.ndim != 2 and data.size:
            raise DimensionMismatchError("Matrix arrays must be 2-dimensional", expected=2, actual=data.ndim)
        data = data.tolist()

    if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
        raise TypeError("Matrix rows must be iterable sequences")

    grid: list[list[float]] = []
    for row in data:
        if isinstance(row, Vector):
            row = row.components
        elif isinstance(row, np.ndarray):
            row = row.tolist()
        if isinstance(row, (str, bytes)) or not isinstance(row, Iterable):
            raise TypeError("Matrix rows must be iterable sequences")
        grid.append([coerce_real(cell, "matrix cell") for cell in row])
    return grid


def _sign(index: int) -> int:
    """+1 for even positions, -1 for odd ones."""
    return 1 if index % 2 == 0 else -1


class Matrix(MathValue, BaseModel):
    """
    Matrix (2D grid) with matrix operations.

    Supports transposition, minors, scaling and matrix multiplication.
    Every operation returns a new Matrix.

    Examples:
        >>> Matrix([[1, 2], [3, 4]]).transposition
        Matrix([[1, 3], [2, 4]])
        >>> Matrix([[1, 2, 3]]).times([[1], [1], [1]])
        Matrix([[6]])
    """

    model_config = ConfigDict(frozen=True)

    rows: tuple[tuple[float, ...], ...] = Field(default_factory=tuple)

    def __init__(
        self,
        rows: Matrix | MatrixSquare | np.ndarray | Iterable[Iterable[float] | Vector] = (),
        **kwargs: Any,
    ) -> None:
        """
        Initialize a Matrix ensuring rectangular structure.

        Raises:
            TypeError: If rows or cells are not numeric sequences
            DomainError: If a cell is not finite
            DimensionMismatchError: If rows have different lengths
        """
        super().__init__(rows=self._coerce_rows(rows), **kwargs)

    @staticmethod
    def _coerce_rows(raw_rows: Any) -> tuple[tuple[float, ...], ...]:
        """Convert raw row iterables into a rectangular tuple grid."""
        grid = _raw_grid(raw_rows)
        if grid:
            row_len = len(grid[0])
            for row in grid:
                if len(row) != row_len:
                    raise DimensionMismatchError(
                        "Matrix rows must all have same length", expected=row_len, actual=len(row)
                    )
        return tuple(tuple(row) for row in grid)

    # Dimensions and access

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    @property
    def width(self) -> int:
        """Number of columns (0 for a matrix without rows)."""
        return len(self.rows[0]) if self.rows else 0

    @property
    def shape(self) -> tuple[int, int]:
        """Get matrix dimensions (rows, cols)."""
        return (self.height, self.width)

    @property
    def raw(self) -> tuple[tuple[float, ...], ...]:
        """The cells as a tuple of row tuples."""
        return self.rows

    def _check_index(self, row: int, col: int) -> None:
        if not 0 <= row < self.height:
            raise IndexRangeError(f"Row index {row} out of range for height {self.height}")
        if not 0 <= col < self.width:
            raise IndexRangeError(f"Column index {col} out of range for width {self.width}")

    def at(self, row: int, col: int) -> float:
        """
        Return the value of the cell at the given row and column.

        Raises:
            IndexRangeError: If either index is negative or too large
        """
        self._check_index(row, col)
        return self.rows[row][col]

    def __getitem__(self, index: tuple[int, int] | int) -> float | tuple[float, ...]:
        """Get element by (row, col) or an entire row."""
        if isinstance(index, tuple):
            return self.at(*index)
        if not 0 <= index < self.height:
            raise IndexRangeError(f"Row index {index} out of range for height {self.height}")
        return self.rows[index]

    # Matrix operations

    @property
    def transposition(self) -> Matrix:
        """
        Return the transpose of the matrix.

        Cell ``[i][j]`` of the result is cell ``[j][i]`` of this matrix.
        """
        return Matrix([
            [self.rows[i][j] for i in range(self.height)] for j in range(self.width)
        ])

    def minor(self, row: int, col: int) -> Matrix:
        """
        Return the submatrix formed by deleting the given row and column.

        Raises:
            UndefinedOperationError: If the matrix has no rows or no columns
            IndexRangeError: If either index is out of range
        """
        if self.height == 0 or self.width == 0:
            raise UndefinedOperationError(f"No minor exists for a {self.height}x{self.width} matrix")
        self._check_index(row, col)
        return Matrix([
            r[:col] + r[col + 1:] for i, r in enumerate(self.rows) if i != row
        ])

    def scale(self, scalar: float = 1) -> Matrix:
        """Return a new Matrix with every cell multiplied by ``scalar``."""
        scalar = coerce_real(scalar, "scalar")
        return Matrix([[cell * scalar for cell in row] for row in self.rows])

    def times(self, multiplier: Matrix | MatrixSquare | Iterable[Iterable[float]]) -> Matrix:
        """
        Multiply this matrix (the multiplicand) by another (the multiplier).

        Returns:
            a new ``self.height x multiplier.width`` Matrix

        Raises:
            DimensionMismatchError: If ``self.width != multiplier.height``
        """
        other = _as_matrix(multiplier)
        if self.width != other.height:
            raise DimensionMismatchError(
                "Multiplier height must equal multiplicand width",
                expected=self.width,
                actual=other.height,
            )
        return Matrix([
            [
                sum(self.rows[i][k] * other.rows[k][j] for k in range(self.width))
                for j in range(other.width)
            ]
            for i in range(self.height)
        ])

    # Comparison

    def equals(self, other: Any) -> bool:
        """Exact cell-wise equality with a Matrix or MatrixSquare."""
        if isinstance(other, MatrixSquare):
            other = other.matrix
        return isinstance(other, Matrix) and self.rows == other.rows

    def compare(
        self, other: Any, tolerance: float | None = None, mode: str | None = None
    ) -> bool:
        """Compare matrices element-wise."""
        if isinstance(other, MatrixSquare):
            other = other.matrix
        if not isinstance(other, Matrix) or self.shape != other.shape:
            return False

        for row1, row2 in zip(self.rows, other.rows):
            for el1, el2 in zip(row1, row2):
                if not fuzzy_compare(el1, el2, tolerance, mode):
                    return False
        return True

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, (Matrix, MatrixSquare)):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.rows)

    # Output formats

    def to_string(self) -> str:
        """Convert to string."""
        rows_str = ", ".join(
            "[" + ", ".join(format_real(el) for el in row) + "]" for row in self.rows
        )
        return f"[{rows_str}]"

    def to_tex(self) -> str:
        """Convert to LaTeX (pmatrix)."""
        rows_tex = " \\\\ ".join(
            " & ".join(format_real(el) for el in row) for row in self.rows
        )
        return f"\\begin{{pmatrix}} {rows_tex} \\end{{pmatrix}}"

    def to_python(self) -> list[list[float]]:
        """Convert to Python nested list."""
        return [list(row) for row in self.rows]

    def to_numpy(self) -> np.ndarray:
        """Convert to a ``height x width`` NumPy array."""
        return np.array(self.to_python(), dtype=float).reshape(self.shape)

    # Arithmetic operators

    def __matmul__(self, other: Any) -> Matrix:
        """Matrix multiplication: self @ other."""
        if not isinstance(other, (Matrix, MatrixSquare)):
            return NotImplemented
        return self.times(other)

    def __mul__(self, other: Any) -> Matrix:
        """Scalar multiplication."""
        if isinstance(other, bool) or not isinstance(other, Real):
            return NotImplemented
        return self.scale(other)

    def __rmul__(self, other: Any) -> Matrix:
        """Right scalar multiplication."""
        return self.__mul__(other)

    def __neg__(self) -> Matrix:
        """Unary negation."""
        return self.scale(-1)


def _as_matrix(data: Any) -> Matrix:
    if isinstance(data, MatrixSquare):
        return data.matrix
    if isinstance(data, Matrix):
        return data
    return Matrix(data)


class MatrixSquare(MathValue, BaseModel):
    """
    A Matrix whose rows and columns are equal in number.

    Construction repairs ragged or non-square input: every row is padded
    with ``0`` (or truncated) to the number of rows.

    Examples:
        >>> MatrixSquare([[1, 2], [3, 4]]).det
        -2.0
        >>> MatrixSquare([[1, 2], [3]])
        MatrixSquare([[1, 2], [3, 0]])
    """

    model_config = ConfigDict(frozen=True)

    matrix: Matrix = Field(default_factory=Matrix)

    def __init__(
        self,
        matrix: Matrix | MatrixSquare | np.ndarray | Iterable[Iterable[float] | Vector] = (),
        **kwargs: Any,
    ) -> None:
        """Initialize a MatrixSquare, padding or truncating rows to the row count."""
        super().__init__(matrix=Matrix(self._square_rows(matrix)), **kwargs)

    @staticmethod
    def _square_rows(data: Any) -> list[list[float]]:
        grid = _raw_grid(data)
        size = len(grid)
        return [row[:size] + [0.0] * (size - len(row)) for row in grid]

    @classmethod
    def mult_iden(cls, size: int = 0) -> MatrixSquare:
        """
        Return the multiplicative identity matrix of the given size.

        Cells on the main diagonal are 1, every other cell is 0.

        Raises:
            DomainError: If size is negative
        """
        if isinstance(size, bool) or not isinstance(size, int):
            raise TypeError(f"Matrix size must be an integer, got {type(size).__name__}")
        if size < 0:
            raise DomainError(f"Matrix size must be non-negative, got {size}")
        return cls([[1 if i == j else 0 for j in range(size)] for i in range(size)])

    # Dimensions and access

    @property
    def size(self) -> int:
        """Number of rows, which equals the number of columns."""
        return self.matrix.height

    @property
    def height(self) -> int:
        return self.matrix.height

    @property
    def width(self) -> int:
        return self.matrix.width

    @property
    def shape(self) -> tuple[int, int]:
        return self.matrix.shape

    @property
    def raw(self) -> tuple[tuple[float, ...], ...]:
        return self.matrix.rows

    def at(self, row: int, col: int) -> float:
        """Return the value of the cell at the given row and column."""
        return self.matrix.at(row, col)

    def __getitem__(self, index: tuple[int, int] | int) -> float | tuple[float, ...]:
        return self.matrix[index]

    # Square-only operations

    @property
    def det(self) -> float:
        """
        Get the determinant, by cofactor expansion along the first row.

        Raises:
            UndefinedOperationError: If this matrix is empty
        """
        if self.size == 0:
            raise UndefinedOperationError("Determinant of an empty matrix is undefined")
        if self.size == 1:
            return self.at(0, 0)
        return reduce(operator.add, (
            _sign(j) * cell * self.minor(0, j).det for j, cell in enumerate(self.raw[0])
        ))

    @property
    def reciprocal(self) -> MatrixSquare:
        """
        Get the multiplicative inverse: the adjugate scaled by ``1 / det``.

        The cofactors are taken from minors of the transposition, which
        yields the adjugate directly.

        Raises:
            UndefinedOperationError: If the determinant is 0
        """
        if self.size == 0:
            return MatrixSquare()
        det = self.det
        if det == 0:
            logger.debug("Rejecting reciprocal of singular %dx%d matrix", self.size, self.size)
            raise UndefinedOperationError("A matrix whose determinant is 0 has no reciprocal")
        if self.size == 1:
            return MatrixSquare([[1 / det]])

        logger.debug("Computing reciprocal of %dx%d matrix (det=%r)", self.size, self.size, det)
        transposition = self.transposition
        cofactors = [
            [_sign(i + j) * transposition.minor(i, j).det for j in range(self.size)]
            for i in range(self.size)
        ]
        return MatrixSquare(cofactors).scale(1 / det)

    # Closed operations, delegated to Matrix

    @property
    def transposition(self) -> MatrixSquare:
        """The transposition of a square matrix is always a square matrix."""
        return MatrixSquare(self.matrix.transposition)

    def minor(self, row: int, col: int) -> MatrixSquare:
        """The minor of a square matrix is always a square matrix."""
        return MatrixSquare(self.matrix.minor(row, col))

    def scale(self, scalar: float = 1) -> MatrixSquare:
        """Scaling a square matrix always yields a square matrix."""
        return MatrixSquare(self.matrix.scale(scalar))

    def times(self, multiplier: Matrix | MatrixSquare | Iterable[Iterable[float]]) -> MatrixSquare:
        """
        Multiply by another square matrix of the same size.

        Raises:
            DimensionMismatchError: If the product would not be square;
                use ``Matrix.times`` for rectangular products
        """
        product = self.matrix.times(multiplier)
        if product.width != product.height:
            raise DimensionMismatchError(
                "Product of square matrices must be square",
                expected=(self.size, self.size),
                actual=product.shape,
            )
        return MatrixSquare(product)

    # Comparison

    def equals(self, other: Any) -> bool:
        """Exact cell-wise equality with a Matrix or MatrixSquare."""
        return self.matrix.equals(other)

    def compare(
        self, other: Any, tolerance: float | None = None, mode: str | None = None
    ) -> bool:
        """Compare matrices element-wise."""
        return self.matrix.compare(other, tolerance, mode)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, (Matrix, MatrixSquare)):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.matrix)

    # Output formats

    def to_string(self) -> str:
        return self.matrix.to_string()

    def to_tex(self) -> str:
        return self.matrix.to_tex()

    def to_python(self) -> list[list[float]]:
        return self.matrix.to_python()

    def to_numpy(self) -> np.ndarray:
        return self.matrix.to_numpy()

    # Arithmetic operators

    def __matmul__(self, other: Any) -> MatrixSquare:
        """Matrix multiplication: self @ other."""
        if not isinstance(other, (Matrix, MatrixSquare)):
            return NotImplemented
        return self.times(other)

    def __mul__(self, other: Any) -> MatrixSquare:
        """Scalar multiplication."""
        if isinstance(other, bool) or not isinstance(other, Real):
            return NotImplemented
        return self.scale(other)

    def __rmul__(self, other: Any) -> MatrixSquare:
        return self.__mul__(other)

    def __neg__(self) -> MatrixSquare:
        return self.scale(-1)
