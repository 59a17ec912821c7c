"""
Tests for regression fit() and predict().

Tests the complete pipeline: RegressionDesign construction, backend
selection, and solution properties.
"""

import pytest
import numpy as np

from pystepwise.core.compute.linalg import Matrix, Vector
from pystepwise.core.exceptions import (
    DimensionError,
    InvalidElementTypeError,
    RankDeficientError,
    ValidationError,
)
from pystepwise.regression import (
    LinearSolution,
    RegressionDesign,
    add_intercept,
    fit,
    predict,
)


class TestFitBasic:
    """Basic fit() functionality tests."""

    def test_fit_from_arrays(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert isinstance(result, LinearSolution)
        assert isinstance(result.coefficients, Vector)
        assert len(result.coefficients) == 3

    def test_fit_from_matrix_and_vector(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(Matrix(X), Vector(y))
        np.testing.assert_allclose(result.coefficients, fit(X, y).coefficients)

    def test_fit_from_design(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(RegressionDesign.build(X, y))
        assert isinstance(result, LinearSolution)

    def test_fit_requires_y_with_arrays(self, simple_regression_data):
        X, _, _ = simple_regression_data
        with pytest.raises(ValueError, match="y required"):
            fit(X)

    def test_fit_rejects_y_with_design(self, simple_regression_data):
        X, y, _ = simple_regression_data
        with pytest.raises(ValueError, match="y must be None"):
            fit(RegressionDesign.build(X, y), y)

    def test_noise_free_recovery(self, rng):
        X = rng.standard_normal((30, 4))
        beta = np.array([2.0, -1.0, 0.5, 4.0])
        result = fit(X, X @ beta)
        np.testing.assert_allclose(result.coefficients, beta, atol=1e-10)

    def test_coefficients_close_to_truth(self, simple_regression_data):
        X, y, beta_true = simple_regression_data
        result = fit(X, y)
        # With low noise (sigma=0.1), coefficients should be close to truth
        np.testing.assert_allclose(result.coefficients, beta_true, atol=0.1)

    def test_matches_lstsq(self, simple_regression_data):
        X, y, _ = simple_regression_data
        expected = np.linalg.lstsq(X, y, rcond=None)[0]
        np.testing.assert_allclose(fit(X, y).coefficients, expected, rtol=1e-8, atol=1e-10)

    def test_single_predictor_1d(self, rng):
        x = rng.standard_normal(20)
        result = fit(x, 3.0 * x)
        assert result.coefficients[0] == pytest.approx(3.0)

    def test_column_vector_y(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y.reshape(-1, 1))
        np.testing.assert_allclose(result.coefficients, fit(X, y).coefficients)

    def test_residuals_sum_to_near_zero_with_intercept(self, rng):
        """For models with intercept, residuals should sum to ~0."""
        n = 100
        X = add_intercept(rng.standard_normal((n, 2)))
        y = X.to_numpy() @ [1.0, 2.0, -0.5] + rng.standard_normal(n) * 0.1
        result = fit(X, y)
        assert abs(result.residuals.to_numpy().sum()) < 1e-10

    def test_inputs_not_modified(self, simple_regression_data):
        X, y, _ = simple_regression_data
        X_copy, y_copy = X.copy(), y.copy()
        fit(X, y)
        np.testing.assert_array_equal(X, X_copy)
        np.testing.assert_array_equal(y, y_copy)


class TestHouseholderExample:
    """Overdetermined 5 x 3 system with non-zero residuals."""

    def test_coefficients_match_lstsq(self, householder_example):
        X, y = householder_example
        expected = np.linalg.lstsq(X, y, rcond=None)[0]
        np.testing.assert_allclose(fit(X, y).coefficients, expected, rtol=1e-9, atol=1e-12)

    def test_predict_gives_least_squares_fit(self, householder_example):
        X, y = householder_example
        beta = fit(X, y).coefficients
        expected = X @ np.linalg.lstsq(X, y, rcond=None)[0]
        np.testing.assert_allclose(predict(X, beta), expected, rtol=1e-9, atol=1e-10)

    def test_residuals_orthogonal_to_columns(self, householder_example):
        X, y = householder_example
        result = fit(X, y)
        np.testing.assert_allclose(X.T @ result.residuals.to_numpy(), np.zeros(3), atol=1e-8)


class TestFitValidation:

    def test_zero_columns(self):
        with pytest.raises(ValidationError, match="empty"):
            fit(np.zeros((5, 0)), np.ones(5))

    def test_length_mismatch(self, rng):
        with pytest.raises(DimensionError, match="Inconsistent lengths"):
            fit(rng.standard_normal((10, 2)), rng.standard_normal(9))

    def test_fewer_rows_than_columns(self, rng):
        with pytest.raises(DimensionError, match="requires at least 4 rows"):
            fit(rng.standard_normal((3, 4)), rng.standard_normal(3))

    def test_nan_rejected(self):
        X = np.array([[1.0, 2.0], [np.nan, 1.0], [0.0, 1.0]])
        with pytest.raises(ValidationError, match="non-finite"):
            fit(X, np.ones(3))

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidElementTypeError):
            fit([["a", "b"], ["c", "d"]], [1.0, 2.0])

    def test_none_rejected(self):
        with pytest.raises(ValidationError):
            fit(None, [1.0])

    def test_collinear_raises(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(RankDeficientError) as exc_info:
            fit(X, y)
        assert exc_info.value.column == 2

    def test_unknown_backend(self, simple_regression_data):
        X, y, _ = simple_regression_data
        with pytest.raises(ValidationError, match="Unknown backend"):
            fit(X, y, backend='gpu')

    @pytest.mark.parametrize("backend", ['auto', 'cpu', 'gram_schmidt'])
    def test_backend_aliases(self, simple_regression_data, backend):
        X, y, _ = simple_regression_data
        assert fit(X, y, backend=backend).backend_name == 'cpu_gram_schmidt'


class TestFitProperties:
    """Test derived properties of LinearSolution."""

    def test_fitted_plus_residuals_equals_y(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        np.testing.assert_allclose(result.fitted_values + result.residuals, y, atol=1e-12)

    def test_rss_matches_residuals(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert result.rss == pytest.approx(result.residuals @ result.residuals, rel=1e-12)

    def test_r_squared_formula(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert result.r_squared == pytest.approx(1.0 - result.rss / result.tss)
        assert 0.0 <= result.r_squared <= 1.0

    def test_adjusted_r_squared_below_r_squared(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert result.adjusted_r_squared < result.r_squared

    def test_residual_std_error(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert result.residual_std_error == pytest.approx(np.sqrt(result.rss / 97))

    def test_metadata(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert result.rank == 3
        assert result.df_residual == 97
        assert result.info == {'method': 'gram_schmidt_qr', 'rank': 3, 'n': 100, 'p': 3}
        assert result.warnings == ()

    def test_timing_sections(self, simple_regression_data):
        X, y, _ = simple_regression_data
        timing = fit(X, y).timing
        for key in ('total_seconds', 'qr_decomposition', 'solve', 'residuals', 'statistics'):
            assert key in timing
            assert timing[key] >= 0.0

    def test_design_accessible(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert result.design.n == 100
        assert result.design.p == 3

    def test_summary_runs(self, simple_regression_data):
        X, y, _ = simple_regression_data
        s = fit(X, y).summary()
        assert "R-squared" in s
        assert "Pr(>|t|)" in s
        assert "Backend: cpu_gram_schmidt" in s

    def test_repr(self, simple_regression_data):
        X, y, _ = simple_regression_data
        assert repr(fit(X, y)).startswith("LinearSolution(n=100, p=3, rank=3")


class TestExactlyDetermined:
    """n == p: coefficients exist, inference does not."""

    def test_fit_warns_in_result(self):
        X = np.array([[2.0, 1.0], [1.0, 3.0]])
        result = fit(X, [3.0, 5.0])
        np.testing.assert_allclose(result.coefficients, [0.8, 1.4], atol=1e-12)
        assert result.df_residual == 0
        assert any("no residual degrees of freedom" in w for w in result.warnings)

    def test_summary_shows_na(self):
        result = fit(np.array([[2.0, 1.0], [1.0, 3.0]]), [3.0, 5.0])
        s = result.summary()
        assert "NA" in s
        assert "Warning: no residual degrees of freedom" in s


class TestPredict:

    def test_predict_new_rows(self, simple_regression_data, rng):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        X_new = rng.standard_normal((5, 3))
        np.testing.assert_allclose(
            result.predict(X_new), X_new @ result.coefficients.to_numpy(), rtol=1e-12
        )

    def test_predict_matches_fitted(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        np.testing.assert_allclose(predict(X, result.coefficients), result.fitted_values, rtol=1e-12)

    def test_predict_accepts_lists(self):
        assert predict([[1.0, 2.0], [3.0, 4.0]], [1.0, 1.0]) == Vector([3.0, 7.0])

    def test_predict_length_mismatch(self):
        with pytest.raises(DimensionError, match="beta has length 3, expected 2"):
            predict([[1.0, 2.0]], [1.0, 2.0, 3.0])
