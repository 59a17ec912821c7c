"""
Common types for regression significance testing.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SignificanceResult:
    """
    t-test outcome for one coefficient.

    Attributes
    ----------
    index : int
        Column position of the coefficient in the tested design matrix.
        Stepwise results rewrite this to the caller's original column.
    beta : float
        Estimated coefficient.
    std_error : float
        sqrt(C[i, i]) with C = (X'X)^-1 * MSe.
    t_statistic : float
        beta / std_error. Infinite for a perfect fit with beta != 0.
    p_value : float
        Two-sided p-value at df = n - p.
    is_significant : bool
        p_value < alpha.
    """
    index: int
    beta: float
    std_error: float
    t_statistic: float
    p_value: float
    is_significant: bool
