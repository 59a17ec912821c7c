"""
Tests for PyStepwise exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyStepwiseError)
    - Diagnostic attributes on SingularMatrixError, RankDeficientError,
      InvalidDegreesOfFreedomError, NoSignificantPredictorsError,
      ConvergenceError
    - Default attribute values (None for optional attributes)
"""

import numpy as np
import pytest

from pystepwise.core.exceptions import (
    ConvergenceError,
    DimensionError,
    InvalidDegreesOfFreedomError,
    InvalidElementTypeError,
    NoSignificantPredictorsError,
    NumericalError,
    PyStepwiseError,
    RankDeficientError,
    SingularDesignError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyStepwiseError."""

    @pytest.mark.parametrize("exc_type", [
        DimensionError,
        InvalidElementTypeError,
        InvalidDegreesOfFreedomError,
    ])
    def test_input_errors_are_validation_errors(self, exc_type):
        with pytest.raises(ValidationError):
            raise exc_type("bad input")

    @pytest.mark.parametrize("exc_type", [
        SingularMatrixError,
        SingularDesignError,
        RankDeficientError,
    ])
    def test_numerical_errors(self, exc_type):
        with pytest.raises(NumericalError):
            raise exc_type("computation failed")

    def test_singular_design_is_singular_matrix(self):
        with pytest.raises(SingularMatrixError):
            raise SingularDesignError("X'X is singular", matrix_name="X'X")

    def test_no_significant_predictors_is_pystepwise_error(self):
        err = NoSignificantPredictorsError("all gone")
        assert isinstance(err, PyStepwiseError)
        assert not isinstance(err, NumericalError)
        assert not isinstance(err, ValidationError)

    def test_convergence_error_is_not_numerical_error(self):
        """ConvergenceError inherits from PyStepwiseError, not NumericalError."""
        err = ConvergenceError("did not converge", iterations=3)
        assert isinstance(err, PyStepwiseError)
        assert not isinstance(err, NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:

    def test_all_attributes(self):
        err = SingularMatrixError(
            "zero pivot",
            matrix_name="M",
            pivot_index=2,
            rank=2,
            expected_rank=3,
        )
        assert str(err) == "zero pivot"
        assert err.matrix_name == "M"
        assert err.pivot_index == 2
        assert err.rank == 2
        assert err.expected_rank == 3

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.pivot_index is None
        assert err.rank is None
        assert err.expected_rank is None


class TestRankDeficientError:

    def test_attributes(self):
        err = RankDeficientError("column 2 is dependent", column=2, norm=1e-14)
        assert err.column == 2
        assert err.norm == 1e-14

    def test_defaults_are_none(self):
        err = RankDeficientError("dependent")
        assert err.column is None
        assert err.norm is None


class TestInvalidElementTypeError:

    def test_dtype_attribute(self):
        err = InvalidElementTypeError("strings", dtype=np.dtype('<U3'))
        assert err.dtype == np.dtype('<U3')


class TestInvalidDegreesOfFreedomError:

    def test_df_attribute(self):
        err = InvalidDegreesOfFreedomError("df must be positive", df=0)
        assert err.df == 0

    def test_default_df(self):
        assert InvalidDegreesOfFreedomError("bad").df is None


class TestNoSignificantPredictorsError:

    def test_attributes(self):
        err = NoSignificantPredictorsError(
            "nothing significant", eliminated=(1, 0), history=("step",)
        )
        assert err.eliminated == (1, 0)
        assert err.history == ("step",)

    def test_defaults_are_empty(self):
        err = NoSignificantPredictorsError("nothing significant")
        assert err.eliminated == ()
        assert err.history == ()


class TestConvergenceError:

    def test_attributes(self):
        err = ConvergenceError("stopped", iterations=5, reason="max_steps")
        assert err.iterations == 5
        assert err.reason == "max_steps"

    def test_default_reason(self):
        assert ConvergenceError("stopped", iterations=1).reason is None
