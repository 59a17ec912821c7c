"""
LU decomposition with partial pivoting (Crout's method).

The factors are stored compactly in a single n x n matrix ``lum``: the
strict lower triangle holds the elimination multipliers (the unit
diagonal of L is implicit) and the upper triangle including the diagonal
holds U. Row exchanges are recorded in ``perm`` so that

    M[perm[i], :] == (L @ U)[i, :]

and ``toggle`` is the parity (+1 / -1) of the permutation, which gives

    det(M) == toggle * prod(diag(lum))

Used by Matrix.inverse() and Matrix.determinant().
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystepwise.core.exceptions import DimensionError, SingularMatrixError
from pystepwise.core.compute.linalg.matrix import Matrix
from pystepwise.core.compute.linalg.vector import Vector


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU decomposition.

    Attributes:
        lum: Combined lower/upper factors (n x n)
        perm: perm[i] is the original row now at position i
        toggle: +1 for an even number of row swaps, -1 for odd
    """
    lum: Matrix
    perm: tuple[int, ...]
    toggle: int

    @property
    def n(self) -> int:
        return self.lum.rows_number

    def determinant(self) -> float:
        """toggle * product of the U diagonal."""
        return float(self.toggle * np.prod(np.diagonal(self.lum._data)))

    def lower(self) -> Matrix:
        """Unit lower-triangular factor L."""
        lower = np.tril(self.lum._data, k=-1)
        np.fill_diagonal(lower, 1.0)
        return Matrix._wrap(lower)

    def upper(self) -> Matrix:
        """Upper-triangular factor U."""
        return Matrix._wrap(np.triu(self.lum._data))

    def permutation(self) -> Matrix:
        """Permutation matrix P with P @ M == L @ U."""
        p = np.zeros((self.n, self.n), dtype=np.float64)
        p[np.arange(self.n), list(self.perm)] = 1.0
        return Matrix._wrap(p)

    def solve_permuted(self, b: NDArray[np.float64]) -> NDArray[np.float64]:
        """
        Solve L U x = b for a right-hand side already in pivoted row order.

        Forward substitution through the implicit unit-diagonal L, then
        back substitution through U.

        Raises:
            SingularMatrixError: If U has a zero on its diagonal
        """
        lum = self.lum._data
        n = lum.shape[0]
        diag = np.diagonal(lum)
        zero = np.flatnonzero(diag == 0.0)
        if zero.size:
            raise SingularMatrixError(
                f"Cannot solve: zero pivot at position {int(zero[0])}",
                matrix_name='U',
                pivot_index=int(zero[0]),
            )

        x = np.array(b, dtype=np.float64, copy=True)
        for i in range(1, n):
            x[i] -= lum[i, :i] @ x[:i]

        x[n - 1] /= lum[n - 1, n - 1]
        for i in range(n - 2, -1, -1):
            x[i] = (x[i] - lum[i, i + 1:] @ x[i + 1:]) / lum[i, i]

        return x

    def solve(self, b: Vector | ArrayLike) -> Vector:
        """
        Solve M x = b for b given in the original row order.

        Raises:
            DimensionError: If len(b) != n
            SingularMatrixError: If M is singular
        """
        rhs = b._data if isinstance(b, Vector) else Vector(b)._data
        if rhs.shape[0] != self.n:
            raise DimensionError(
                f"LU solve: right-hand side has length {rhs.shape[0]}, expected {self.n}"
            )
        return Vector._wrap(self.solve_permuted(rhs[list(self.perm)]))

    def inverse(self) -> Matrix:
        """
        Assemble M^-1 column by column.

        Each column j solves M x = e_j, i.e. L U x = P e_j.
        """
        n = self.n
        perm = list(self.perm)
        inverse = np.empty((n, n), dtype=np.float64)
        for j in range(n):
            unit = np.zeros(n, dtype=np.float64)
            unit[j] = 1.0
            inverse[:, j] = self.solve_permuted(unit[perm])
        return Matrix._wrap(inverse)


def lu_decompose(matrix: Matrix, check_singular: bool = True) -> LUResult:
    """
    Crout LU decomposition with partial pivoting.

    For each pivot column j (0 .. n-2) the row with the largest absolute
    value in column j among rows j..n-1 is swapped into place, then every
    row below is eliminated; the multiplier overwrites the eliminated entry.

    Args:
        matrix: Square matrix to factor (not modified)
        check_singular: If True, raise on an exactly zero pivot. If False,
            skip elimination for that column and return the factors (the
            determinant is then 0.0).

    Returns:
        LUResult with combined factors, permutation and parity

    Raises:
        DimensionError: If matrix is not square
        SingularMatrixError: If a pivot is exactly zero and check_singular
    """
    if not matrix.is_square:
        raise DimensionError(
            f"LU decomposition requires a square matrix, got "
            f"{matrix.rows_number}x{matrix.cols_number}"
        )

    lum = matrix.to_numpy()
    n = lum.shape[0]
    perm = list(range(n))
    toggle = 1

    for j in range(n - 1):
        # argmax keeps the first maximum, so ties leave row j in place
        piv = j + int(np.argmax(np.abs(lum[j:, j])))

        if piv != j:
            lum[[j, piv], :] = lum[[piv, j], :]
            perm[j], perm[piv] = perm[piv], perm[j]
            toggle = -toggle

        pivot = lum[j, j]
        if pivot == 0.0:
            if check_singular:
                raise _singular(j, n)
            continue

        factors = lum[j + 1:, j] / pivot
        lum[j + 1:, j] = factors
        lum[j + 1:, j + 1:] -= np.outer(factors, lum[j, j + 1:])

    if check_singular and lum[n - 1, n - 1] == 0.0:
        raise _singular(n - 1, n)

    return LUResult(lum=Matrix._wrap(lum), perm=tuple(perm), toggle=toggle)


def lu_solve(matrix: Matrix, b: Vector | ArrayLike) -> Vector:
    """Solve matrix @ x = b with one LU decomposition."""
    return lu_decompose(matrix).solve(b)


def lu_inverse(matrix: Matrix) -> Matrix:
    """
    Inverse of a square, non-singular matrix.

    One LU decomposition, then n triangular solves (one per permuted unit
    basis vector). O(n^3) overall.

    Raises:
        DimensionError: If matrix is not square
        SingularMatrixError: If matrix is singular
    """
    return lu_decompose(matrix).inverse()


def _singular(pivot_index: int, n: int) -> SingularMatrixError:
    return SingularMatrixError(
        f"Matrix is singular: zero pivot at position {pivot_index} "
        f"during LU decomposition of a {n}x{n} matrix",
        matrix_name='M',
        pivot_index=pivot_index,
        expected_rank=n,
    )
