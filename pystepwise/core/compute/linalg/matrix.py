"""
Dense floating-point matrix.

Matrix owns a C-contiguous (m x n) float64 buffer with m, n >= 1.

Value semantics: transpose(), inverse() and every arithmetic operator
return new matrices. Only the explicit mutators (fill, fill_as_identity,
set_row, set_column, insert_column, remove_column, swap_rows and item
assignment) change the receiver, and they require exclusive access to it.

Operators:
    A @ B      matrix product (A.cols_number == B.rows_number)
    A @ v      matrix-vector product, returns a Vector
    A + B      elementwise, equal shapes
    A - B      elementwise, equal shapes
    A * s      scalar scale (also s * A, A / s, -A)
"""

from __future__ import annotations

import numbers
from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystepwise.core.exceptions import DimensionError
from pystepwise.core.validation import (
    check_array,
    check_2d,
    check_finite,
    check_not_empty,
)
from pystepwise.core.compute.linalg.vector import Vector


class Matrix:
    """
    2-D dense container of floats.

    Args:
        values: Rectangular 2-D array-like of a primitive numeric type
            (nested lists, numpy arrays, another Matrix). The data is
            copied.

    Raises:
        ValidationError: If values is None, empty, ragged or non-finite
        DimensionError: If values is not 2-D
        InvalidElementTypeError: If the element type is not primitive numeric

    Examples:
        >>> A = Matrix([[4.0, 3.0], [6.0, 3.0]])
        >>> A.determinant()
        -6.0
        >>> (A @ A.inverse()).allclose(Matrix.identity(2))
        True
    """

    __slots__ = ('_data',)

    # NumPy scalars on the left must defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, values: ArrayLike | Matrix):
        if isinstance(values, Matrix):
            values = values._data
        data = check_array(values, 'matrix')
        check_2d(data, 'matrix')
        check_not_empty(data, 'matrix')
        check_finite(data, 'matrix')
        self._data: NDArray[np.float64] = np.ascontiguousarray(data)

    @classmethod
    def _wrap(cls, data: NDArray[np.float64]) -> Matrix:
        """Adopt an already-validated 2-D float64 buffer without copying."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    # === Constructors ===

    @classmethod
    def zeros(cls, m: int, n: int) -> Matrix:
        """m x n matrix of zeros."""
        if m < 1 or n < 1:
            raise DimensionError(f"matrix shape must be at least 1 x 1, got {m} x {n}")
        return cls._wrap(np.zeros((m, n), dtype=np.float64))

    @classmethod
    def identity(cls, n: int) -> Matrix:
        """n x n identity matrix."""
        result = cls.zeros(n, n)
        result.fill_as_identity()
        return result

    @classmethod
    def from_columns(cls, columns: Iterable[Vector]) -> Matrix:
        """Stack equal-length vectors as the columns of a new matrix."""
        columns = list(columns)
        if not columns:
            raise DimensionError("from_columns: at least one column is required")
        m = len(columns[0])
        for j, column in enumerate(columns):
            if len(column) != m:
                raise DimensionError(
                    f"from_columns: column {j} has length {len(column)}, expected {m}"
                )
        return cls._wrap(np.column_stack([c._data for c in columns]))

    # === Shape and element access ===

    @property
    def rows_number(self) -> int:
        return self._data.shape[0]

    @property
    def cols_number(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape[0], self._data.shape[1]

    @property
    def is_square(self) -> bool:
        return self._data.shape[0] == self._data.shape[1]

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return float(self._data[i, j])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        i, j = index
        self._data[i, j] = value

    def get_row(self, i: int) -> Vector:
        """Copy of row i."""
        return Vector._wrap(self._data[i, :].copy())

    def get_column(self, j: int) -> Vector:
        """Copy of column j."""
        return Vector._wrap(self._data[:, j].copy())

    def diagonal(self) -> Vector:
        """Copy of the main diagonal."""
        return Vector._wrap(np.diagonal(self._data).copy())

    # === In-place mutators ===

    def set_row(self, row: Vector | ArrayLike, i: int) -> None:
        """Overwrite row i."""
        values = _as_vector(row)
        if len(values) != self.cols_number:
            raise DimensionError(
                f"set_row: row has length {len(values)}, expected {self.cols_number}"
            )
        self._data[i, :] = values._data

    def set_column(self, column: Vector | ArrayLike, j: int) -> None:
        """Overwrite column j."""
        values = _as_vector(column)
        if len(values) != self.rows_number:
            raise DimensionError(
                f"set_column: column has length {len(values)}, expected {self.rows_number}"
            )
        self._data[:, j] = values._data

    def insert_column(self, column: Vector | ArrayLike, j: int) -> None:
        """
        Insert a new column at position j.

        Columns previously at j and above shift right by one;
        cols_number grows by 1. j == cols_number appends.
        """
        values = _as_vector(column)
        if len(values) != self.rows_number:
            raise DimensionError(
                f"insert_column: column has length {len(values)}, expected {self.rows_number}"
            )
        if not 0 <= j <= self.cols_number:
            raise IndexError(
                f"insert_column: position {j} out of range [0, {self.cols_number}]"
            )
        self._data = np.ascontiguousarray(np.insert(self._data, j, values._data, axis=1))

    def remove_column(self, j: int) -> None:
        """
        Delete column j.

        Columns above j shift left by one; row order and the values of the
        remaining columns are untouched. cols_number shrinks by 1.

        Raises:
            IndexError: If j is out of range
            DimensionError: If this is the only column
        """
        if not 0 <= j < self.cols_number:
            raise IndexError(
                f"remove_column: column {j} out of range [0, {self.cols_number})"
            )
        if self.cols_number == 1:
            raise DimensionError("remove_column: cannot remove the only column of a matrix")
        self._data = np.ascontiguousarray(np.delete(self._data, j, axis=1))

    def swap_rows(self, i1: int, i2: int) -> None:
        """Exchange rows i1 and i2."""
        if i1 != i2:
            self._data[[i1, i2], :] = self._data[[i2, i1], :]

    def fill(self, value: float) -> None:
        """Set every element to value."""
        self._data.fill(value)

    def fill_as_identity(self) -> None:
        """Set to the Kronecker delta pattern (ones on the main diagonal)."""
        self._data[...] = np.eye(self.rows_number, self.cols_number, dtype=np.float64)

    # === Value-returning operations ===

    def transpose(self) -> Matrix:
        """New n x m matrix with result[j, i] == self[i, j]."""
        return Matrix._wrap(np.ascontiguousarray(self._data.T))

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def inverse(self) -> Matrix:
        """
        Matrix inverse via LU decomposition with partial pivoting.

        Raises:
            DimensionError: If the matrix is not square
            SingularMatrixError: If an LU pivot is exactly zero
        """
        from pystepwise.core.compute.linalg.lu import lu_inverse
        return lu_inverse(self)

    def determinant(self) -> float:
        """
        Determinant as toggle * prod(diag(LU)).

        Singular matrices give 0.0 rather than raising.

        Raises:
            DimensionError: If the matrix is not square
        """
        from pystepwise.core.compute.linalg.lu import lu_decompose
        return lu_decompose(self, check_singular=False).determinant()

    def clone(self) -> Matrix:
        """Independent deep copy."""
        return Matrix._wrap(self._data.copy())

    def to_numpy(self) -> NDArray[np.float64]:
        """Copy of the underlying buffer."""
        return self._data.copy()

    def __array__(self, dtype: Any = None, copy: Any = None) -> NDArray[Any]:
        # np.asarray(A) and numpy.testing helpers see the values, never the buffer
        return self._data.astype(dtype if dtype is not None else np.float64, copy=True)

    def allclose(self, other: Matrix | ArrayLike, rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        """Elementwise comparison within tolerance; False on shape mismatch."""
        other_data = other._data if isinstance(other, Matrix) else np.asarray(other, dtype=np.float64)
        if other_data.shape != self._data.shape:
            return False
        return bool(np.allclose(self._data, other_data, rtol=rtol, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    # === Operators ===

    def __matmul__(self, other: Any) -> Matrix | Vector:
        if isinstance(other, Matrix):
            if self.cols_number != other.rows_number:
                raise DimensionError(
                    f"matrix product: {self.rows_number}x{self.cols_number} @ "
                    f"{other.rows_number}x{other.cols_number} (inner dimensions differ)"
                )
            return Matrix._wrap(self._data @ other._data)
        if isinstance(other, Vector):
            if self.cols_number != len(other):
                raise DimensionError(
                    f"matrix-vector product: {self.rows_number}x{self.cols_number} @ "
                    f"vector of length {len(other)}"
                )
            return Vector._wrap(self._data @ other._data)
        return NotImplemented

    def __rmatmul__(self, other: Any) -> Vector:
        # row vector times matrix: v @ A == A.T @ v
        if isinstance(other, Vector):
            if len(other) != self.rows_number:
                raise DimensionError(
                    f"vector-matrix product: vector of length {len(other)} @ "
                    f"{self.rows_number}x{self.cols_number}"
                )
            return Vector._wrap(other._data @ self._data)
        return NotImplemented

    def __add__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, 'addition')
        return Matrix._wrap(self._data + other._data)

    def __sub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, 'subtraction')
        return Matrix._wrap(self._data - other._data)

    def __mul__(self, scalar: Any) -> Matrix:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Matrix._wrap(self._data * float(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: Any) -> Matrix:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        if scalar == 0:
            raise ZeroDivisionError("matrix division by zero")
        return Matrix._wrap(self._data / float(scalar))

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._data)

    def _check_same_shape(self, other: Matrix, operation: str) -> None:
        if self.shape != other.shape:
            raise DimensionError(
                f"{operation}: shapes differ ({self.rows_number}x{self.cols_number} "
                f"vs {other.rows_number}x{other.cols_number})"
            )


def _as_vector(values: Vector | ArrayLike) -> Vector:
    if isinstance(values, Vector):
        return values
    return Vector(values)
