"""
CPU reference backend for linear regression.

Uses the package's own modified Gram-Schmidt QR decomposition and solves
R beta = Q'y by back substitution. X'X is never formed for the
coefficients; it only appears later, in the significance test.
"""

from typing import Any

from pystepwise.core.result import Result
from pystepwise.core.compute.timing import Timer
from pystepwise.core.compute.linalg import qr_decompose, back_substitute
from pystepwise.regression.design import RegressionDesign
from pystepwise.regression.solution import LinearParams


class GramSchmidtBackend:
    """
    CPU backend using Gram-Schmidt QR decomposition.

    Implements the Backend protocol for RegressionDesign -> LinearParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_gram_schmidt'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve OLS via QR decomposition.

        Algorithm:
            1. Compute QR decomposition: X = QR
            2. Solve: R beta = Q'y by back substitution
            3. Compute residuals, fitted values, and sums of squares

        Args:
            design: Validated regression design

        Returns:
            Result containing LinearParams

        Raises:
            RankDeficientError: If X has linearly dependent columns
        """
        timer = Timer()
        timer.start()

        X = design.X
        y = design.y
        n, p = design.n, design.p

        # === QR Decomposition and Solve ===
        with timer.section('qr_decomposition'):
            qr = qr_decompose(X)

        with timer.section('solve'):
            coefficients = back_substitute(qr.R, qr.Q.T @ y)

        # === Compute Residuals and Fitted Values ===
        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values

        # === Compute Summary Statistics ===
        with timer.section('statistics'):
            rss = residuals @ residuals
            centered = y.to_numpy() - y.to_numpy().mean()
            tss = float(centered @ centered)

        timer.stop()

        warnings: list[str] = []
        df_residual = n - qr.rank
        if df_residual == 0:
            warnings.append(
                "no residual degrees of freedom: the system is exactly determined, "
                "significance testing is unavailable"
            )

        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            tss=tss,
            rank=qr.rank,
            df_residual=df_residual,
        )

        info: dict[str, Any] = {
            'method': 'gram_schmidt_qr',
            'rank': qr.rank,
            'n': n,
            'p': p,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings),
        )
