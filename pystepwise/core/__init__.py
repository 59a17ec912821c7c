"""
Core infrastructure for pystepwise.

This module provides shared abstractions, utilities and numeric
primitives used by the regression and stepwise submodules.

Key components:
    protocols: DistributionTables, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, dense linear algebra (Vector, Matrix, LU, QR)
"""

from pystepwise.core.protocols import DistributionTables, Backend
from pystepwise.core.result import Result
from pystepwise.core.exceptions import (
    PyStepwiseError,
    ValidationError,
    DimensionError,
    InvalidElementTypeError,
    InvalidDegreesOfFreedomError,
    NumericalError,
    SingularMatrixError,
    SingularDesignError,
    RankDeficientError,
    NoSignificantPredictorsError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "DistributionTables",
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyStepwiseError",
    "ValidationError",
    "DimensionError",
    "InvalidElementTypeError",
    "InvalidDegreesOfFreedomError",
    "NumericalError",
    "SingularMatrixError",
    "SingularDesignError",
    "RankDeficientError",
    "NoSignificantPredictorsError",
    "ConvergenceError",
]
