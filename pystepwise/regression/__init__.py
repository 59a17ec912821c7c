"""
Ordinary least squares regression.

Public API:
    fit(X, y, ...) -> LinearSolution
    predict(X, beta) -> Vector
    significance_test(X, y, beta, ...) -> list[SignificanceResult]
    add_intercept(X) -> Matrix

The fit() function handles:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from pystepwise.regression import fit
    >>> result = fit(X, y)
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from pystepwise.regression._common import SignificanceResult
from pystepwise.regression.design import RegressionDesign, add_intercept
from pystepwise.regression.solution import LinearSolution, LinearParams
from pystepwise.regression.solvers import fit, predict, significance_test

__all__ = [
    "fit",
    "predict",
    "significance_test",
    "add_intercept",
    "RegressionDesign",
    "LinearSolution",
    "LinearParams",
    "SignificanceResult",
]
