"""
QR decomposition via modified Gram-Schmidt.

Factors an m x n matrix X (m >= n, linearly independent columns) as
X = Q R where Q (m x n) has orthonormal columns and R (n x n) is upper
triangular. Used by the regression engine to solve least squares
without forming X'X.

The strictly upper part of R is filled while orthogonalizing: the
projection coefficient of column j on basis vector e_p is exactly R[p, j].
The diagonal is filled afterwards as R[j, j] = X[:, j] . e_j.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from pystepwise.core.exceptions import (
    DimensionError,
    RankDeficientError,
    SingularMatrixError,
)
from pystepwise.core.compute.tolerances import GRAM_SCHMIDT_RANK_TOL
from pystepwise.core.compute.linalg.matrix import Matrix
from pystepwise.core.compute.linalg.vector import Vector


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthonormal-column matrix (m x n)
        R: Upper triangular matrix (n x n), R[j, j] > 0
    """
    Q: Matrix
    R: Matrix

    @property
    def rank(self) -> int:
        # Gram-Schmidt refuses dependent columns, so a result is full rank
        return self.R.cols_number


def qr_decompose(X: Matrix, tol: float | None = None) -> QRResult:
    """
    Modified Gram-Schmidt QR decomposition.

    Algorithm, for each column j:
        1. u = X[:, j]
        2. for every earlier basis vector e_p:
               dot = u . e_p;  u -= dot * e_p;  R[p, j] = dot
        3. e_j = u / ||u||, stored as Q[:, j]
    then R[j, j] = X[:, j] . e_j for every j.

    Args:
        X: Matrix to decompose (not modified)
        tol: Relative rank threshold. Column j is rejected when
             ||u|| <= tol * ||X[:, j]||. Defaults to GRAM_SCHMIDT_RANK_TOL.

    Returns:
        QRResult with Q and R

    Raises:
        DimensionError: If X has fewer rows than columns
        RankDeficientError: If a column is (numerically) a linear
            combination of the preceding ones
    """
    m, n = X.shape
    if m < n:
        raise DimensionError(
            f"QR decomposition requires rows >= columns, got {m}x{n}"
        )
    if tol is None:
        tol = GRAM_SCHMIDT_RANK_TOL

    q = Matrix.zeros(m, n)
    r = Matrix.zeros(n, n)
    basis: list[Vector] = []

    for j in range(n):
        column = X.get_column(j)
        u = column.clone()

        for p, e in enumerate(basis):
            dot = u @ e
            u = u - e * dot
            r[p, j] = dot

        threshold = tol * column.norm()
        try:
            e_j = u.normalized(threshold)
        except RankDeficientError as err:
            raise RankDeficientError(
                f"Column {j} is linearly dependent on the preceding columns: "
                f"orthogonalized norm {err.norm:.3e} <= {threshold:.3e}. "
                f"This indicates perfect multicollinearity.",
                column=j,
                norm=err.norm,
            ) from err

        basis.append(e_j)
        q.set_column(e_j, j)

    for j, e in enumerate(basis):
        r[j, j] = X.get_column(j) @ e

    return QRResult(Q=q, R=r)


def back_substitute(R: Matrix, b: Vector | ArrayLike) -> Vector:
    """
    Solve R x = b for upper-triangular R by back substitution.

    O(n^2); only the upper triangle of R is read.

    Raises:
        DimensionError: If R is not square or len(b) != R.rows_number
        SingularMatrixError: If R has a zero on its diagonal
    """
    if not R.is_square:
        raise DimensionError(
            f"back substitution requires a square matrix, got {R.rows_number}x{R.cols_number}"
        )
    rhs = b if isinstance(b, Vector) else Vector(b)
    n = R.rows_number
    if len(rhs) != n:
        raise DimensionError(
            f"back substitution: right-hand side has length {len(rhs)}, expected {n}"
        )

    upper = R._data
    x = rhs.to_numpy()
    for i in range(n - 1, -1, -1):
        if upper[i, i] == 0.0:
            raise SingularMatrixError(
                f"Triangular matrix is singular: zero on the diagonal at position {i}",
                matrix_name='R',
                pivot_index=i,
            )
        x[i] = (x[i] - upper[i, i + 1:] @ x[i + 1:]) / upper[i, i]

    return Vector._wrap(x)


def qr_solve(X: Matrix, y: Vector, tol: float | None = None) -> Vector:
    """
    Least-squares solution of min ||y - X beta|| via Gram-Schmidt QR.

    X = QR, beta solves R beta = Q'y.

    Raises:
        DimensionError: If len(y) != X.rows_number or X is wide
        RankDeficientError: If X has linearly dependent columns
    """
    if len(y) != X.rows_number:
        raise DimensionError(
            f"qr_solve: y has length {len(y)}, expected {X.rows_number}"
        )
    qr = qr_decompose(X, tol=tol)
    return back_substitute(qr.R, qr.Q.T @ y)
