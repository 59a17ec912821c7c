"""
Common types for distribution lookups.
"""

from enum import Enum


class Alpha(float, Enum):
    """
    Two-sided significance levels with a tabulated critical-value column.

    Members compare equal to their float value, so ``Alpha(0.05)`` and
    ``Alpha.P05 == 0.05`` both work.
    """
    P10 = 0.10
    P05 = 0.05
    P01 = 0.01
