"""
Core protocols for pystepwise.

These define structural interfaces that collaborators must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
that any object with the right methods can be plugged in, e.g. a
hand-maintained lookup table in place of the bundled StudentTTable.

Design Principles:
    - Minimal contracts: prescribe only what the engine calls
    - Pure functions: implementations must not depend on call order
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable, TYPE_CHECKING

from pystepwise.core.result import Result

if TYPE_CHECKING:
    from pystepwise.distributions._common import Alpha

P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # Design type


@runtime_checkable
class DistributionTables(Protocol):
    """
    Student-t reference distribution lookups.

    The regression engine only needs two-sided p-values; critical values
    are used by callers that prefer a fixed-threshold decision rule.

    Both lookups must interpolate linearly between tabulated degrees of
    freedom and must return the asymptotic (largest df) entry for any df
    beyond the largest tabulated one.
    """

    def critical_value(self, df: int, alpha: Alpha) -> float:
        """
        Two-sided critical value t such that P(|T_df| > t) = alpha.

        Args:
            df: Degrees of freedom (>= 1)
            alpha: Two-sided significance level

        Returns:
            Positive critical value
        """
        ...

    def p_value(self, df: int, t_statistic: float) -> float:
        """
        Two-sided p-value P(|T_df| >= |t_statistic|).

        Args:
            df: Degrees of freedom (>= 1)
            t_statistic: Observed t-statistic

        Returns:
            Probability in [0, 1]
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Computational backend turning a validated design into a Result.

    Backends do not validate inputs (the design did that) and do not
    select themselves (the solver dispatch does that).
    """

    @property
    def name(self) -> str:
        """Backend identifier, e.g. 'cpu_gram_schmidt'."""
        ...

    def solve(self, design: D) -> Result[P]:
        """Run the computation for the given design."""
        ...
