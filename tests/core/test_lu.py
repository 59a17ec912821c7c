"""
Tests for LU decomposition with partial pivoting.
"""

import numpy as np
import pytest

from pystepwise.core.compute.linalg import (
    Matrix,
    Vector,
    lu_decompose,
    lu_inverse,
    lu_solve,
)
from pystepwise.core.compute.tolerances import EXACT
from pystepwise.core.exceptions import DimensionError, SingularMatrixError


@pytest.fixture
def well_conditioned(rng):
    return Matrix(rng.standard_normal((6, 6)) + 6 * np.eye(6))


class TestLUFactors:

    def test_permuted_reconstruction(self, well_conditioned):
        lu = lu_decompose(well_conditioned)
        P, L, U = lu.permutation(), lu.lower(), lu.upper()
        np.testing.assert_allclose(
            (P @ well_conditioned).to_numpy(), (L @ U).to_numpy(),
            rtol=EXACT.rtol, atol=EXACT.atol,
        )

    def test_perm_rows(self, rng):
        M = Matrix(rng.standard_normal((5, 5)))
        lu = lu_decompose(M)
        LU = (lu.lower() @ lu.upper()).to_numpy()
        for i, row in enumerate(lu.perm):
            np.testing.assert_allclose(LU[i], M.to_numpy()[row], atol=1e-12)

    def test_lower_is_unit_triangular(self, well_conditioned):
        L = lu_decompose(well_conditioned).lower().to_numpy()
        np.testing.assert_array_equal(np.diagonal(L), np.ones(6))
        np.testing.assert_array_equal(np.triu(L, k=1), np.zeros((6, 6)))

    def test_partial_pivoting_bounds_multipliers(self, rng):
        lu = lu_decompose(Matrix(rng.standard_normal((8, 8))))
        assert np.all(np.abs(np.tril(lu.lum.to_numpy(), k=-1)) <= 1.0)

    def test_input_not_modified(self, well_conditioned):
        before = well_conditioned.clone()
        lu_decompose(well_conditioned)
        assert well_conditioned == before

    def test_requires_square(self):
        with pytest.raises(DimensionError, match="square"):
            lu_decompose(Matrix.zeros(2, 3))


class TestLUDeterminant:

    def test_matches_numpy(self, rng):
        M = rng.standard_normal((6, 6))
        assert lu_decompose(Matrix(M)).determinant() == pytest.approx(np.linalg.det(M), rel=1e-10)

    def test_row_swap_flips_sign(self, rng):
        M = Matrix(rng.standard_normal((4, 4)))
        swapped = M.clone()
        swapped.swap_rows(0, 3)
        assert swapped.determinant() == pytest.approx(-M.determinant(), rel=1e-10)

    def test_toggle_tracks_parity(self):
        # one swap needed: the largest entry of column 0 is in row 1
        lu = lu_decompose(Matrix([[1.0, 2.0], [3.0, 4.0]]))
        assert lu.perm == (1, 0)
        assert lu.toggle == -1
        assert lu.determinant() == pytest.approx(-2.0)

    def test_no_swap_when_pivot_in_place(self):
        lu = lu_decompose(Matrix([[5.0, 1.0], [1.0, 3.0]]))
        assert lu.perm == (0, 1)
        assert lu.toggle == 1

    def test_singular_determinant_without_check(self):
        lu = lu_decompose(Matrix([[1.0, 1.0, 1.0], [2.0, 2.0, 2.0], [0.0, 1.0, 3.0]]),
                          check_singular=False)
        assert lu.determinant() == 0.0


class TestLUSolveAndInverse:

    def test_solve(self, well_conditioned, rng):
        b = rng.standard_normal(6)
        x = lu_solve(well_conditioned, b)
        np.testing.assert_allclose((well_conditioned @ x).to_numpy(), b, atol=1e-10)

    def test_solve_matches_numpy(self, well_conditioned, rng):
        b = rng.standard_normal(6)
        x = lu_decompose(well_conditioned).solve(Vector(b))
        np.testing.assert_allclose(x.to_numpy(), np.linalg.solve(well_conditioned.to_numpy(), b),
                                   rtol=1e-10)

    def test_solve_length_mismatch(self, well_conditioned):
        with pytest.raises(DimensionError):
            lu_decompose(well_conditioned).solve([1.0, 2.0])

    def test_inverse_identity_both_sides(self, well_conditioned):
        inv = lu_inverse(well_conditioned)
        I = Matrix.identity(6)
        assert (well_conditioned @ inv).allclose(I, atol=1e-10)
        assert (inv @ well_conditioned).allclose(I, atol=1e-10)

    def test_inverse_of_inverse(self, well_conditioned):
        assert well_conditioned.inverse().inverse().allclose(well_conditioned, rtol=1e-9, atol=1e-9)

    def test_inverse_matches_numpy(self, well_conditioned):
        np.testing.assert_allclose(
            well_conditioned.inverse().to_numpy(),
            np.linalg.inv(well_conditioned.to_numpy()),
            rtol=1e-9, atol=1e-12,
        )

    def test_one_by_one(self):
        assert Matrix([[4.0]]).inverse() == Matrix([[0.25]])

    def test_singular_raises_with_pivot(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            lu_inverse(Matrix([[1.0, 2.0], [2.0, 4.0]]))
        assert exc_info.value.pivot_index == 1
        assert exc_info.value.expected_rank == 2

    def test_zero_column_raises_early(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            lu_decompose(Matrix([[0.0, 1.0], [0.0, 2.0]]))
        assert exc_info.value.pivot_index == 0
