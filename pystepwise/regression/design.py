"""
Regression Design.

Design holds the validated design matrix X and response y. It is the
boundary between user input and the numerical code: everything past
this point trusts the shapes and values it is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
from numpy.typing import ArrayLike

from pystepwise.core.compute.linalg import Matrix, Vector
from pystepwise.core.exceptions import DimensionError
from pystepwise.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_not_empty,
    check_consistent_length,
    check_min_samples,
)


@dataclass(frozen=True)
class RegressionDesign:
    """
    Regression design matrix specification.

    Immutable after construction; the matrices are private copies.

    The design never adds an intercept. Callers who want beta_0 prepend
    a column of ones (see add_intercept).

    Construction:
        RegressionDesign.build(X, y)        # arrays, nested lists or Matrix/Vector
    """
    _X: Matrix
    _y: Vector
    _n: int
    _p: int

    @classmethod
    def build(cls, X: ArrayLike | Matrix, y: ArrayLike | Vector) -> RegressionDesign:
        """
        Validate inputs and build a design.

        Args:
            X: Design matrix (n x p). A 1-D input is treated as one column.
            y: Response vector (n,). An (n x 1) input is flattened.

        Raises:
            ValidationError: If X or y is None, empty or non-finite
            InvalidElementTypeError: If X or y is not primitive numeric
            DimensionError: If shapes are inconsistent or n < p
        """
        X_arr = X.to_numpy() if isinstance(X, Matrix) else check_array(X, 'X')
        y_arr = y.to_numpy() if isinstance(y, Vector) else check_array(y, 'y')

        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()

        check_2d(X_arr, 'X')
        check_1d(y_arr, 'y')
        check_not_empty(X_arr, 'X')
        check_not_empty(y_arr, 'y')
        check_finite(X_arr, 'X')
        check_finite(y_arr, 'y')
        check_consistent_length(X_arr, y_arr, names=('X', 'y'))

        n, p = X_arr.shape
        check_min_samples(X_arr, p, 'X')

        return cls(
            _X=Matrix._wrap(np.ascontiguousarray(X_arr)),
            _y=Vector._wrap(y_arr),
            _n=n,
            _p=p,
        )

    # === Properties ===

    @property
    def X(self) -> Matrix:
        """Design matrix (n x p). Returns a copy."""
        return self._X.clone()

    @property
    def y(self) -> Vector:
        """Response vector (n,). Returns a copy."""
        return self._y.clone()

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of predictor columns (including any intercept column)."""
        return self._p

    def XtX(self) -> Matrix:
        """Compute X'X."""
        return self._X.T @ self._X

    def Xty(self) -> Vector:
        """Compute X'y."""
        return self._X.T @ self._y

    def without_columns(self, positions: Iterable[int]) -> RegressionDesign:
        """
        New design with the given column positions removed.

        Raises:
            IndexError: If a position is out of range
            DimensionError: If no column would remain
        """
        doomed = sorted(set(positions), reverse=True)
        if len(doomed) >= self._p:
            raise DimensionError(
                f"cannot remove {len(doomed)} of {self._p} columns: "
                f"a design needs at least one column"
            )
        X = self._X.clone()
        # highest first, so earlier positions stay valid
        for j in doomed:
            X.remove_column(j)
        return RegressionDesign(_X=X, _y=self._y, _n=self._n, _p=X.cols_number)


def add_intercept(X: ArrayLike | Matrix) -> Matrix:
    """
    Prepend a column of ones to X.

    Args:
        X: Design matrix without intercept (n x p), or a 1-D predictor

    Returns:
        New (n x (p + 1)) Matrix whose column 0 is all ones
    """
    matrix = X.clone() if isinstance(X, Matrix) else _as_matrix(X)
    ones = Vector._wrap(np.ones(matrix.rows_number, dtype=np.float64))
    matrix.insert_column(ones, 0)
    return matrix


def _as_matrix(X: ArrayLike) -> Matrix:
    arr = check_array(X, 'X')
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    return Matrix(arr)
