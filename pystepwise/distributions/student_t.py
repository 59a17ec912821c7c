"""
Student-t distribution tables.

StudentTTable implements the DistributionTables protocol with the
lookup rules of a printed t table:

    - df equal to a tabulated breakpoint: the tabulated value
    - df strictly between two breakpoints: linear interpolation in df
    - df beyond the largest finite breakpoint: the asymptotic
      (standard normal) entry

Critical values come from the static table in _tables. Two-sided
p-values follow the same breakpoint rules; the tail probability at each
breakpoint is evaluated with scipy.stats so the table carries no
p-value data of its own.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from typing import Callable

from scipy import stats as sp_stats

from pystepwise.core.exceptions import InvalidDegreesOfFreedomError, ValidationError
from pystepwise.distributions._common import Alpha
from pystepwise.distributions._tables import (
    DF_BREAKPOINTS,
    CRITICAL_VALUES,
    ASYMPTOTIC_CRITICAL_VALUES,
)


class StudentTTable:
    """
    Tabulated Student-t critical values and two-sided p-values.

    Args:
        breakpoints: Tabulated degrees of freedom, strictly increasing.
            Defaults to 1..30, 35, 40, 50, 60, 120.

    Examples:
        >>> table = StudentTTable()
        >>> table.critical_value(10, Alpha.P05)
        2.228
        >>> round(table.p_value(10, 2.228), 3)
        0.05
    """

    def __init__(self, breakpoints: tuple[int, ...] = DF_BREAKPOINTS):
        if not breakpoints:
            raise ValidationError("breakpoints must contain at least one degree of freedom")
        if list(breakpoints) != sorted(set(breakpoints)) or breakpoints[0] < 1:
            raise ValidationError(
                f"breakpoints must be strictly increasing and >= 1, got {breakpoints}"
            )
        missing = [df for df in breakpoints if df not in CRITICAL_VALUES[Alpha.P05]]
        if missing:
            raise ValidationError(
                f"breakpoints {missing} have no tabulated critical values"
            )
        self._breakpoints = tuple(breakpoints)

    @property
    def breakpoints(self) -> tuple[int, ...]:
        return self._breakpoints

    @property
    def max_df(self) -> int:
        """Largest finite tabulated degrees of freedom."""
        return self._breakpoints[-1]

    def critical_value(self, df: int, alpha: Alpha | float) -> float:
        """
        Two-sided critical value t with P(|T_df| > t) = alpha.

        Args:
            df: Degrees of freedom (>= 1)
            alpha: One of the tabulated levels (Alpha member or 0.10/0.05/0.01)

        Raises:
            InvalidDegreesOfFreedomError: If df < 1 or below the first breakpoint
            ValidationError: If alpha has no tabulated column
        """
        level = _as_alpha(alpha)
        column = CRITICAL_VALUES[level]
        return self._lookup(
            df,
            value_at=lambda k: column[k],
            asymptotic=ASYMPTOTIC_CRITICAL_VALUES[level],
        )

    def p_value(self, df: int, t_statistic: float) -> float:
        """
        Two-sided p-value P(|T_df| >= |t_statistic|).

        Args:
            df: Degrees of freedom (>= 1)
            t_statistic: Observed t-statistic; NaN propagates

        Raises:
            InvalidDegreesOfFreedomError: If df < 1 or below the first breakpoint
        """
        if math.isnan(t_statistic):
            self._check_range(df)
            return math.nan
        abs_t = abs(t_statistic)
        p = self._lookup(
            df,
            value_at=lambda k: 2.0 * float(sp_stats.t.sf(abs_t, k)),
            asymptotic=2.0 * float(sp_stats.norm.sf(abs_t)),
        )
        return min(1.0, max(0.0, p))

    def significant(self, df: int, t_statistic: float, alpha: Alpha | float) -> bool:
        """Fixed-threshold decision: |t| exceeds the critical value."""
        return abs(t_statistic) > self.critical_value(df, alpha)

    def _check_range(self, df: float) -> float:
        df = _check_df(df)
        if df < self._breakpoints[0]:
            raise InvalidDegreesOfFreedomError(
                f"df={df} is below the smallest tabulated breakpoint {self._breakpoints[0]}",
                df=df,
            )
        return df

    def _lookup(
        self,
        df: float,
        value_at: Callable[[int], float],
        asymptotic: float,
    ) -> float:
        df = self._check_range(df)
        keys = self._breakpoints

        if df > keys[-1]:
            return asymptotic

        i = bisect_left(keys, df)
        if keys[i] == df:
            return value_at(keys[i])

        lo, hi = keys[i - 1], keys[i]
        v_lo, v_hi = value_at(lo), value_at(hi)
        slope = (v_hi - v_lo) / (hi - lo)
        return v_lo + slope * (df - lo)


def _check_df(df: float) -> float:
    try:
        value = float(df)
    except (TypeError, ValueError) as e:
        raise InvalidDegreesOfFreedomError(
            f"degrees of freedom must be a number, got {df!r}", df=None
        ) from e
    if math.isnan(value) or value < 1:
        raise InvalidDegreesOfFreedomError(
            f"degrees of freedom must be >= 1, got {df}", df=value
        )
    return value


def _as_alpha(alpha: Alpha | float) -> Alpha:
    try:
        return Alpha(alpha)
    except ValueError as e:
        levels = ", ".join(str(a.value) for a in Alpha)
        raise ValidationError(
            f"alpha={alpha!r} has no tabulated column (available: {levels})"
        ) from e


_DEFAULT_TABLE: StudentTTable | None = None


def default_table() -> StudentTTable:
    """Shared StudentTTable instance (the table is immutable)."""
    global _DEFAULT_TABLE
    if _DEFAULT_TABLE is None:
        _DEFAULT_TABLE = StudentTTable()
    return _DEFAULT_TABLE
