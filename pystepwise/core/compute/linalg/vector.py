"""
Dense floating-point vector.

Vector owns a 1-D float64 buffer. It is immutable by convention apart
from indexed assignment: arithmetic returns new vectors and never
touches its operands.

Dot products use the matrix-multiplication operator, so ``v @ w`` is
``sum(v_i * w_i)``. ``*`` and ``/`` are reserved for scalars.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystepwise.core.exceptions import DimensionError, RankDeficientError
from pystepwise.core.validation import (
    check_array,
    check_1d,
    check_finite,
    check_not_empty,
)


class Vector:
    """
    Fixed-length ordered sequence of floats.

    Args:
        values: 1-D array-like of a primitive numeric type. The data is
            copied, so later changes to ``values`` do not leak in.

    Raises:
        ValidationError: If values is None, empty or contains NaN/Inf
        DimensionError: If values is not 1-D
        InvalidElementTypeError: If the element type is not primitive numeric

    Examples:
        >>> v = Vector([3.0, 4.0])
        >>> v.norm()
        5.0
        >>> v @ Vector([1.0, 1.0])
        7.0
    """

    __slots__ = ('_data',)

    # NumPy scalars on the left must defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, values: ArrayLike | Vector):
        if isinstance(values, Vector):
            values = values._data
        data = check_array(values, 'vector')
        check_1d(data, 'vector')
        check_not_empty(data, 'vector')
        check_finite(data, 'vector')
        self._data: NDArray[np.float64] = data

    @classmethod
    def _wrap(cls, data: NDArray[np.float64]) -> Vector:
        """Adopt an already-validated float64 buffer without copying."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def zeros(cls, n: int) -> Vector:
        """Vector of n zeros."""
        if n < 1:
            raise DimensionError(f"vector length must be >= 1, got {n}")
        return cls._wrap(np.zeros(n, dtype=np.float64))

    # === Container protocol ===

    @property
    def length(self) -> int:
        return self._data.shape[0]

    def __len__(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __setitem__(self, index: int, value: float) -> None:
        self._data[index] = value

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()!r})"

    def clone(self) -> Vector:
        """Independent deep copy."""
        return Vector._wrap(self._data.copy())

    def to_numpy(self) -> NDArray[np.float64]:
        """Copy of the underlying buffer."""
        return self._data.copy()

    def __array__(self, dtype: Any = None, copy: Any = None) -> NDArray[Any]:
        # np.asarray(v) and numpy.testing helpers see the values, never the buffer
        return self._data.astype(dtype if dtype is not None else np.float64, copy=True)

    def allclose(self, other: Vector | ArrayLike, rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        """Elementwise comparison within tolerance."""
        other_data = other._data if isinstance(other, Vector) else np.asarray(other, dtype=np.float64)
        if other_data.shape != self._data.shape:
            return False
        return bool(np.allclose(self._data, other_data, rtol=rtol, atol=atol))

    # === Linear algebra ===

    def norm(self) -> float:
        """Euclidean norm sqrt(sum(e_i^2))."""
        return math.sqrt(float(self._data @ self._data))

    def dot(self, other: Vector) -> float:
        """Dot product sum(v1_i * v2_i)."""
        self._check_same_length(other, 'dot product')
        return float(self._data @ other._data)

    def normalized(self, tol: float = 0.0) -> Vector:
        """
        Unit vector in the direction of self.

        Args:
            tol: Norms at or below this value are rejected

        Raises:
            RankDeficientError: If the norm is <= tol
        """
        norm = self.norm()
        if norm <= tol:
            raise RankDeficientError(
                f"Cannot normalize vector with norm {norm:.3e} (threshold {tol:.3e})",
                norm=norm,
            )
        return Vector._wrap(self._data / norm)

    def _check_same_length(self, other: Vector, operation: str) -> None:
        if len(other) != len(self):
            raise DimensionError(
                f"{operation}: vector lengths differ ({len(self)} vs {len(other)})"
            )

    # === Operators ===

    def __matmul__(self, other: Any) -> float:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dot(other)

    def __add__(self, other: Any) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_same_length(other, 'addition')
        return Vector._wrap(self._data + other._data)

    def __sub__(self, other: Any) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_same_length(other, 'subtraction')
        return Vector._wrap(self._data - other._data)

    def __mul__(self, scalar: Any) -> Vector:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Vector._wrap(self._data * float(scalar))

    __rmul__ = __mul__

    def __truediv__(self, scalar: Any) -> Vector:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        if scalar == 0:
            raise ZeroDivisionError("vector division by zero")
        return Vector._wrap(self._data / float(scalar))

    def __neg__(self) -> Vector:
        return Vector._wrap(-self._data)
