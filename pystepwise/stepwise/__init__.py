"""
Backward stepwise selection.

Public API:
    stepwise(X, y, ...) -> StepwiseSolution

Example:
    >>> from pystepwise.stepwise import stepwise
    >>> result = stepwise(X, y, alpha=0.05)
    >>> print(result.selected)
    >>> print(result.summary())
"""

from pystepwise.stepwise._index_map import IndexMap
from pystepwise.stepwise.solution import (
    StepRecord,
    StepState,
    StepwiseParams,
    StepwiseSolution,
)
from pystepwise.stepwise.solvers import stepwise

__all__ = [
    "stepwise",
    "IndexMap",
    "StepRecord",
    "StepState",
    "StepwiseParams",
    "StepwiseSolution",
]
