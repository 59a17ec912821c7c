"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystepwise.core.result import Result
from pystepwise.core.compute.linalg import Matrix, Vector
from pystepwise.core.compute.tolerances import DEFAULT_ALPHA
from pystepwise.core.protocols import DistributionTables
from pystepwise.core.validation import check_alpha
from pystepwise.regression._common import SignificanceResult
from pystepwise.regression._inference import Inference, compute_inference, evaluate_significance

if TYPE_CHECKING:
    from pystepwise.regression.design import RegressionDesign


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends.
    """
    coefficients: Vector
    residuals: Vector
    fitted_values: Vector
    rss: float
    tss: float
    rank: int
    df_residual: int


@dataclass
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides convenient accessors for all
    regression outputs. Inference quantities (hat matrix, covariance,
    standard errors, t-statistics, p-values) are computed on first use
    and cached; they require n > p.
    """
    _result: Result[LinearParams]
    _design: 'RegressionDesign'

    # Cached computations
    _inference: Inference | None = None
    _significance: list[SignificanceResult] | None = None

    @property
    def coefficients(self) -> Vector:
        return self._result.params.coefficients

    @property
    def residuals(self) -> Vector:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> Vector:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def r_squared(self) -> float:
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - (self.rss / self.tss)

    @property
    def adjusted_r_squared(self) -> float:
        n = self._design.n
        p = self._result.params.rank
        if n - p <= 0 or self.tss == 0:
            return self.r_squared
        return 1.0 - (1.0 - self.r_squared) * (n - 1) / (n - p)

    @property
    def residual_std_error(self) -> float:
        df = self._result.params.df_residual
        if df <= 0:
            return 0.0
        return float(np.sqrt(self.rss / df))

    # === Hat-matrix inference ===

    def _get_inference(self) -> Inference:
        if self._inference is None:
            self._inference = compute_inference(self._design._X, self._design._y)
        return self._inference

    @property
    def hat_matrix(self) -> Matrix:
        """H = X (X'X)^-1 X' (n x n)."""
        return self._get_inference().hat.clone()

    @property
    def covariance(self) -> Matrix:
        """Coefficient covariance C = (X'X)^-1 * MSe (p x p)."""
        return self._get_inference().covariance.clone()

    @property
    def sse(self) -> float:
        """Error sum of squares y'(I - H)y."""
        return self._get_inference().sse

    @property
    def ssr(self) -> float:
        """Regression sum of squares y'(H - J/n)y."""
        return self._get_inference().ssr

    @property
    def mse(self) -> float:
        """Mean squared error SSe / (n - p)."""
        return self._get_inference().mse

    def significance(
        self,
        alpha: float = DEFAULT_ALPHA,
        tables: DistributionTables | None = None,
    ) -> list[SignificanceResult]:
        """
        Per-coefficient t-test.

        Args:
            alpha: Significance level in (0, 1)
            tables: Distribution lookups, defaults to the bundled StudentTTable

        Raises:
            InvalidDegreesOfFreedomError: If n - p <= 0
            SingularDesignError: If X'X is singular
        """
        alpha = check_alpha(alpha)
        use_cache = tables is None and alpha == DEFAULT_ALPHA
        if use_cache and self._significance is not None:
            return list(self._significance)

        if tables is None:
            from pystepwise.distributions import default_table
            tables = default_table()

        results, inference = evaluate_significance(
            self._design._X, self._design._y, self.coefficients, alpha, tables
        )
        self._inference = inference
        if use_cache:
            self._significance = results
        return list(results)

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """
        Standard errors of coefficients.

        Computed as SE(beta) = sqrt(diag((X'X)^-1 * MSe)).
        """
        return self._get_inference().standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        """t-statistics for coefficients."""
        return np.array([r.t_statistic for r in self.significance()])

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values from the default StudentTTable."""
        return np.array([r.p_value for r in self.significance()])

    # === Prediction ===

    def predict(self, X: ArrayLike | Matrix) -> Vector:
        """Predictions X_new @ beta for new rows with the same columns."""
        from pystepwise.regression.solvers import predict
        return predict(X, self.coefficients)

    # === Metadata ===

    @property
    def design(self) -> 'RegressionDesign':
        return self._design

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self, alpha: float = DEFAULT_ALPHA) -> str:
        """Generate R-style summary output."""
        lines = [
            "Linear Regression Results",
            "=" * 72,
            f"Observations: {self._design.n}",
            f"Predictors: {self._design.p}",
            f"Rank: {self.rank}",
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"Residual Std. Error: {self.residual_std_error:.6f} on {self.df_residual} DF",
            "",
            "Coefficients:",
            "-" * 72,
            f"{'Index':<8} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>|t|)':>12}",
            "-" * 72,
        ]

        if self.df_residual > 0:
            results = self.significance(alpha=alpha)
            for r in results:
                lines.append(
                    f"  β[{r.index}]: {r.beta:14.6f} {r.std_error:12.6f} "
                    f"{r.t_statistic:10.3f} {_format_p(r.p_value):>12}{_stars(r.p_value)}"
                )
        else:
            for i, coef in enumerate(self.coefficients):
                lines.append(f"  β[{i}]: {coef:14.6f}           NA         NA           NA")

        lines.append("-" * 72)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self._design.n}, p={self._design.p}, "
            f"rank={self.rank}, r_squared={self.r_squared:.4f})"
        )


def _format_p(p: float) -> str:
    return f"{p:.4f}" if p >= 0.0001 else "<.0001"


def _stars(p: float) -> str:
    if p < 0.001:
        return ' ***'
    if p < 0.01:
        return ' **'
    if p < 0.05:
        return ' *'
    if p < 0.1:
        return ' .'
    return ''
