"""
Exception hierarchy for pystepwise.

All exceptions inherit from PyStepwiseError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from __future__ import annotations

from typing import Any


class PyStepwiseError(Exception):
    """Base exception for all pystepwise errors."""
    pass


class ValidationError(PyStepwiseError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when operand shapes are incompatible (matrix product with
    mismatched inner dimensions, dot product of vectors with different
    lengths, response vector not matching the design rows, ...).
    """
    pass


class InvalidElementTypeError(ValidationError):
    """
    Container built from a non-primitive element type.

    Matrix and Vector only hold primitive numbers (bool, integer or
    floating point). Object, string, complex and datetime data are
    rejected at construction.

    Attributes:
        dtype: The offending dtype, as reported by NumPy
    """

    def __init__(self, message: str, dtype: Any = None):
        super().__init__(message)
        self.dtype = dtype


class InvalidDegreesOfFreedomError(ValidationError):
    """
    Residual degrees of freedom are not positive.

    Raised by the significance test when there are no more observations
    than predictors, and by distribution lookups given df < 1.

    Attributes:
        df: The offending degrees of freedom
    """

    def __init__(self, message: str, df: float | None = None):
        super().__init__(message)
        self.df = df


class NumericalError(PyStepwiseError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when LU decomposition meets an exactly zero pivot, i.e. an
    inverse or solve was requested for a non-invertible matrix.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Diagonal position of the zero pivot, if known
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically n for an n x n matrix)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.rank = rank
        self.expected_rank = expected_rank


class SingularDesignError(SingularMatrixError):
    """
    X'X is not invertible.

    Raised by the significance test when the predictors are perfectly
    collinear, so the coefficient covariance matrix does not exist.
    """
    pass


class RankDeficientError(NumericalError):
    """
    Design matrix columns are linearly dependent.

    Raised by Gram-Schmidt QR when, after removing the projections on
    the previous basis vectors, a column has (numerically) zero norm.

    Attributes:
        column: Index of the dependent column
        norm: Norm of the orthogonalized column
    """

    def __init__(
        self,
        message: str,
        column: int | None = None,
        norm: float | None = None
    ):
        super().__init__(message)
        self.column = column
        self.norm = norm


class NoSignificantPredictorsError(PyStepwiseError):
    """
    Stepwise elimination removed every predictor.

    Attributes:
        eliminated: Original column indices in the order they were removed
        history: Step records produced before giving up
    """

    def __init__(
        self,
        message: str,
        eliminated: tuple[int, ...] = (),
        history: tuple[Any, ...] = ()
    ):
        super().__init__(message)
        self.eliminated = eliminated
        self.history = history


class ConvergenceError(PyStepwiseError):
    """
    Iterative procedure stopped before reaching a terminal state.

    Raised when stepwise selection hits a caller-imposed step limit.

    Attributes:
        iterations: Number of iterations completed
        reason: Why the procedure stopped (e.g., 'max_steps')
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        reason: str | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.reason = reason
