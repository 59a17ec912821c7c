"""
Solver dispatch for regression.

This module provides the public regression API:
    fit()               - OLS coefficients via Gram-Schmidt QR
    predict()           - X @ beta
    significance_test() - per-coefficient Student-t test
"""

from __future__ import annotations

from typing import Literal

from numpy.typing import ArrayLike

from pystepwise.core.compute.linalg import Matrix, Vector
from pystepwise.core.compute.tolerances import DEFAULT_ALPHA
from pystepwise.core.exceptions import DimensionError, ValidationError
from pystepwise.core.protocols import DistributionTables
from pystepwise.core.validation import check_alpha, check_array, check_1d, check_2d
from pystepwise.regression._common import SignificanceResult
from pystepwise.regression._inference import evaluate_significance
from pystepwise.regression.design import RegressionDesign
from pystepwise.regression.solution import LinearSolution
from pystepwise.regression.backends.cpu import GramSchmidtBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'gram_schmidt']


def fit(
    X: ArrayLike | Matrix | RegressionDesign,
    y: ArrayLike | Vector | None = None,
    *,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit a linear regression model.

    Solves the ordinary least squares problem:
        min_β ||y - Xβ||²
    by X = QR (modified Gram-Schmidt) and back substitution of R β = Q'y.

    No intercept is added. To estimate β₀, prepend a column of ones
    (see add_intercept); it is then an ordinary coefficient at index 0.

    Args:
        X: Design matrix (n x p), or a prebuilt RegressionDesign
        y: Response vector (n,). Required unless X is a RegressionDesign.
        backend: Computational backend to use:
            - 'auto': Select the default backend
            - 'cpu' / 'gram_schmidt': Gram-Schmidt QR on the CPU

    Returns:
        LinearSolution with coefficients, diagnostics, and summary methods

    Raises:
        ValidationError: If inputs are invalid (including a 0-column X)
        DimensionError: If X and y have inconsistent dimensions or n < p
        RankDeficientError: If X has linearly dependent columns

    Example:
        >>> import numpy as np
        >>> from pystepwise.regression import fit, add_intercept
        >>>
        >>> X = add_intercept(np.random.randn(100, 2))
        >>> y = X.to_numpy() @ [1, 2, 3] + np.random.randn(100) * 0.1
        >>>
        >>> result = fit(X, y)
        >>> print(result.coefficients)
        >>> print(result.summary())
    """
    if isinstance(X, RegressionDesign):
        if y is not None:
            raise ValueError("y must be None when X is a RegressionDesign")
        design = X
    else:
        if y is None:
            raise ValueError("y required when X is not a RegressionDesign")
        design = RegressionDesign.build(X, y)

    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design)
    return LinearSolution(_result=result, _design=design)


def predict(X: ArrayLike | Matrix, beta: ArrayLike | Vector) -> Vector:
    """
    Predictions ŷ_i = Σ_j β_j · X[i, j].

    Args:
        X: Design matrix (n x p) with the same column layout used to fit beta
        beta: Coefficients (p,)

    Returns:
        Vector of n predictions

    Raises:
        DimensionError: If len(beta) != number of columns of X
    """
    matrix = _as_matrix(X)
    coefficients = beta if isinstance(beta, Vector) else Vector(beta)
    if len(coefficients) != matrix.cols_number:
        raise DimensionError(
            f"predict: beta has length {len(coefficients)}, "
            f"expected {matrix.cols_number} (one per column of X)"
        )
    return matrix @ coefficients


def significance_test(
    X: ArrayLike | Matrix,
    y: ArrayLike | Vector,
    beta: ArrayLike | Vector,
    *,
    alpha: float = DEFAULT_ALPHA,
    tables: DistributionTables | None = None,
) -> list[SignificanceResult]:
    """
    Student-t significance test for every coefficient.

    Computes H = X(X'X)⁻¹X', SSe = y'(I - H)y, df = n - p, MSe = SSe/df,
    C = (X'X)⁻¹·MSe and t_i = β_i / sqrt(C[i, i]). The p-value comes from
    the distribution tables at df; a coefficient is significant when its
    p-value is below alpha.

    Args:
        X: Design matrix (n x p)
        y: Response vector (n,)
        beta: Fitted coefficients (p,)
        alpha: Significance level in (0, 1), default 0.05
        tables: DistributionTables implementation, defaults to StudentTTable

    Returns:
        One SignificanceResult per column, in column order

    Raises:
        ValidationError: If alpha is not in (0, 1)
        DimensionError: If shapes are inconsistent
        InvalidDegreesOfFreedomError: If n - p <= 0
        SingularDesignError: If X'X is singular (perfectly collinear predictors)
    """
    alpha = check_alpha(alpha)
    matrix = _as_matrix(X)
    response = y if isinstance(y, Vector) else Vector(y)
    coefficients = beta if isinstance(beta, Vector) else Vector(beta)

    if tables is None:
        from pystepwise.distributions import default_table
        tables = default_table()

    results, _ = evaluate_significance(matrix, response, coefficients, alpha, tables)
    return results


def _as_matrix(X: ArrayLike | Matrix) -> Matrix:
    if isinstance(X, Matrix):
        return X
    arr = check_array(X, 'X')
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    check_2d(arr, 'X')
    return Matrix(arr)


def _get_backend(choice: BackendChoice) -> GramSchmidtBackend:
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: User's backend preference

    Returns:
        Backend instance ready to solve

    Raises:
        ValidationError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'gram_schmidt'):
        return GramSchmidtBackend()

    raise ValidationError(
        f"Unknown backend: {choice!r}. Use 'auto', 'cpu' or 'gram_schmidt'."
    )
