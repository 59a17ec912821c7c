"""
PyStepwise: least squares regression with backward stepwise selection.

Fits OLS through its own Gram-Schmidt QR decomposition, tests every
coefficient with a Student-t test (covariance from an LU inverse of X'X)
and prunes insignificant predictors until the survivors are significant.

Submodules:
    core: Vector, Matrix, LU and QR decompositions, exceptions, validation
    distributions: Student-t critical values and p-values
    regression: fit, predict, significance_test
    stepwise: backward elimination
"""

__version__ = "0.1.0"

from pystepwise import core
from pystepwise import distributions
from pystepwise import regression
from pystepwise.core.compute.linalg import Matrix, Vector
from pystepwise.regression import fit, predict, significance_test, add_intercept
from pystepwise.stepwise import stepwise

__all__ = [
    "__version__",
    "core",
    "distributions",
    "regression",
    "fit",
    "predict",
    "significance_test",
    "add_intercept",
    "stepwise",
    "Matrix",
    "Vector",
]
