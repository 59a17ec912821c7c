"""
Stepwise selection solution types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pystepwise.core.result import Result
from pystepwise.core.compute.linalg import Vector
from pystepwise.regression._common import SignificanceResult
from pystepwise.regression.solution import LinearSolution


class StepState(Enum):
    """States of the backward elimination loop."""
    FITTING = 'fitting'
    TESTING = 'testing'
    PRUNING = 'pruning'
    CONVERGED = 'converged'


@dataclass(frozen=True)
class StepRecord:
    """
    One fit-and-test round.

    Attributes:
        step: 1-based iteration number
        original_indices: Original columns present in this round
        results: Significance results, index rewritten to original columns
        removed: Original columns pruned after this round (empty when converged)
        outcome: StepState.PRUNING or StepState.CONVERGED
    """
    step: int
    original_indices: tuple[int, ...]
    results: tuple[SignificanceResult, ...]
    removed: tuple[int, ...]
    outcome: StepState


@dataclass(frozen=True)
class StepwiseParams:
    """
    Parameter payload for stepwise selection.

    Attributes:
        selected: Original indices of the surviving columns, in column order
        coefficients: Final coefficients, aligned with selected
        results: Final significance results (original indices)
        eliminated: Original indices in the order they were pruned
        history: Every fit-and-test round
        policy: Pruning policy used
        alpha: Significance level used
    """
    selected: tuple[int, ...]
    coefficients: Vector
    results: tuple[SignificanceResult, ...]
    eliminated: tuple[int, ...]
    history: tuple[StepRecord, ...]
    policy: str
    alpha: float


@dataclass
class StepwiseSolution:
    """
    User-facing stepwise selection results.

    Wraps Result[StepwiseParams] together with the LinearSolution of the
    final (converged) fit.
    """
    _result: Result[StepwiseParams]
    _final: LinearSolution

    @property
    def selected(self) -> tuple[int, ...]:
        return self._result.params.selected

    @property
    def coefficients(self) -> Vector:
        return self._result.params.coefficients

    @property
    def results(self) -> tuple[SignificanceResult, ...]:
        return self._result.params.results

    @property
    def eliminated(self) -> tuple[int, ...]:
        return self._result.params.eliminated

    @property
    def history(self) -> tuple[StepRecord, ...]:
        return self._result.params.history

    @property
    def n_steps(self) -> int:
        return len(self._result.params.history)

    @property
    def policy(self) -> str:
        return self._result.params.policy

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def final(self) -> LinearSolution:
        """Regression fit on the selected columns."""
        return self._final

    def coefficient_for(self, original: int) -> float:
        """
        Final coefficient of an original column.

        Raises:
            KeyError: If the column was eliminated
        """
        try:
            position = self.selected.index(original)
        except ValueError:
            raise KeyError(f"column {original} was eliminated") from None
        return self.coefficients[position]

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

    def summary(self) -> str:
        """Selection path followed by the final coefficient table."""
        lines = [
            "Backward Stepwise Selection",
            "=" * 72,
            f"Policy: {self.policy}",
            f"Alpha: {self.alpha}",
            f"Steps: {self.n_steps}",
            f"Selected columns: {list(self.selected)}",
            f"Eliminated columns: {list(self.eliminated)}",
            "",
            "Path:",
        ]
        for record in self.history:
            if record.outcome is StepState.CONVERGED:
                action = "converged"
            else:
                action = f"removed {list(record.removed)}"
            lines.append(
                f"  step {record.step}: columns {list(record.original_indices)} -> {action}"
            )
        lines.append("")
        lines.append(
            f"{'Column':<8} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>|t|)':>12}"
        )
        lines.append("-" * 72)
        for r in self.results:
            lines.append(
                f"  x[{r.index}]: {r.beta:14.6f} {r.std_error:12.6f} "
                f"{r.t_statistic:10.3f} {r.p_value:12.4g}"
            )
        lines.append("-" * 72)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"StepwiseSolution(selected={list(self.selected)}, "
            f"eliminated={list(self.eliminated)}, steps={self.n_steps})"
        )
