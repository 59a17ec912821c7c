"""
Hat-matrix based inference for ordinary least squares.

    H     = X (X'X)^-1 X'
    SSe   = y' (I - H) y
    SSr   = y' (H - J/n) y          (J = n x n matrix of ones)
    df    = n - p
    MSe   = SSe / df
    C     = (X'X)^-1 * MSe          (coefficient covariance)
    t_i   = beta_i / sqrt(C[i, i])

(X'X)^-1 comes from Matrix.inverse(), i.e. one LU decomposition.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import warnings

import numpy as np

from pystepwise.core.compute.linalg import Matrix, Vector
from pystepwise.core.compute.tolerances import PERFECT_FIT_RTOL
from pystepwise.core.exceptions import (
    DimensionError,
    InvalidDegreesOfFreedomError,
    SingularDesignError,
    SingularMatrixError,
)
from pystepwise.core.protocols import DistributionTables
from pystepwise.regression._common import SignificanceResult


@dataclass(frozen=True)
class Inference:
    """Intermediate quantities of the significance test."""
    xtx_inv: Matrix
    hat: Matrix
    sse: float
    ssr: float
    df: int
    mse: float
    covariance: Matrix

    @property
    def standard_errors(self) -> np.ndarray:
        return np.sqrt(np.diagonal(self.covariance._data))


def compute_inference(X: Matrix, y: Vector) -> Inference:
    """
    Compute H, SSe, SSr, MSe and the coefficient covariance.

    Raises:
        InvalidDegreesOfFreedomError: If n - p <= 0
        SingularDesignError: If X'X is singular (perfect collinearity)
    """
    n, p = X.shape
    df = n - p
    if df <= 0:
        raise InvalidDegreesOfFreedomError(
            f"residual degrees of freedom must be positive: "
            f"{n} observations - {p} predictors = {df}",
            df=df,
        )

    Xt = X.T
    try:
        xtx_inv = (Xt @ X).inverse()
    except SingularMatrixError as e:
        raise SingularDesignError(
            f"X'X is singular ({p}x{p}): the predictors are perfectly collinear",
            matrix_name="X'X",
            pivot_index=e.pivot_index,
            expected_rank=p,
        ) from e

    hat = X @ xtx_inv @ Xt

    identity = Matrix.zeros(n, n)
    identity.fill_as_identity()
    ones = Matrix.zeros(n, n)
    ones.fill(1.0)

    # rounding can push an exact fit slightly below zero
    sse = max(0.0, y @ ((identity - hat) @ y))
    ssr = y @ ((hat - ones / n) @ y)
    mse = sse / df

    return Inference(
        xtx_inv=xtx_inv,
        hat=hat,
        sse=sse,
        ssr=ssr,
        df=df,
        mse=mse,
        covariance=xtx_inv * mse,
    )


def t_statistics(beta: Vector, inference: Inference) -> np.ndarray:
    """beta_i / sqrt(C[i, i]); inf or NaN when the fit is exact."""
    se = inference.standard_errors
    with np.errstate(divide='ignore', invalid='ignore'):
        return beta._data / se


def is_perfect_fit(inference: Inference, y: Vector) -> bool:
    """SSe indistinguishable from zero relative to y'y."""
    return inference.sse <= PERFECT_FIT_RTOL * (y @ y)


def evaluate_significance(
    X: Matrix,
    y: Vector,
    beta: Vector,
    alpha: float,
    tables: DistributionTables,
) -> tuple[list[SignificanceResult], Inference]:
    """
    Run the t-test for every coefficient.

    A NaN t-statistic (zero coefficient on an exact fit) is reported with
    p-value 1.0 and is never significant.

    Raises:
        DimensionError: If len(beta) != X.cols_number
        InvalidDegreesOfFreedomError: If n - p <= 0
        SingularDesignError: If X'X is singular
    """
    if len(beta) != X.cols_number:
        raise DimensionError(
            f"beta has length {len(beta)}, expected {X.cols_number} (one per column of X)"
        )
    if len(y) != X.rows_number:
        raise DimensionError(
            f"y has length {len(y)}, expected {X.rows_number} (one per row of X)"
        )

    inference = compute_inference(X, y)
    if is_perfect_fit(inference, y):
        warnings.warn(
            "Residual sum of squares is numerically zero (perfect fit): "
            "t-statistics are infinite or unreliably large and p-values degenerate.",
            RuntimeWarning,
            stacklevel=3,
        )

    se = inference.standard_errors
    t = t_statistics(beta, inference)

    results = []
    for i in range(X.cols_number):
        t_i = float(t[i])
        p_i = 1.0 if math.isnan(t_i) else float(tables.p_value(inference.df, t_i))
        results.append(SignificanceResult(
            index=i,
            beta=beta[i],
            std_error=float(se[i]),
            t_statistic=t_i,
            p_value=p_i,
            is_significant=p_i < alpha,
        ))
    return results, inference
