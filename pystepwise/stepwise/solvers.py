"""
Backward stepwise selection.

Repeatedly fits OLS, tests every coefficient and prunes insignificant
columns until all survivors are significant:

    FITTING -> TESTING -> CONVERGED
                       -> PRUNING -> FITTING -> ...

The working design is rebuilt (never mutated in place) on every prune and
an IndexMap travels with it, so results always refer to the caller's
original column indices.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Literal

from numpy.typing import ArrayLike

from pystepwise.core.result import Result
from pystepwise.core.compute.timing import Timer
from pystepwise.core.compute.linalg import Matrix, Vector
from pystepwise.core.compute.tolerances import DEFAULT_ALPHA
from pystepwise.core.exceptions import (
    ConvergenceError,
    NoSignificantPredictorsError,
    ValidationError,
)
from pystepwise.core.protocols import DistributionTables
from pystepwise.core.validation import check_alpha
from pystepwise.regression._common import SignificanceResult
from pystepwise.regression.design import RegressionDesign
from pystepwise.regression.solvers import BackendChoice, fit
from pystepwise.stepwise._index_map import IndexMap
from pystepwise.stepwise.solution import (
    StepRecord,
    StepState,
    StepwiseParams,
    StepwiseSolution,
)


PruningPolicy = Literal['least_significant', 'all_insignificant']

_POLICIES = ('least_significant', 'all_insignificant')


def stepwise(
    X: ArrayLike | Matrix | RegressionDesign,
    y: ArrayLike | Vector | None = None,
    *,
    alpha: float = DEFAULT_ALPHA,
    policy: PruningPolicy = 'least_significant',
    tables: DistributionTables | None = None,
    max_steps: int | None = None,
    backend: BackendChoice = 'auto',
) -> StepwiseSolution:
    """
    Backward stepwise elimination of insignificant predictors.

    Every column of X is a candidate for removal, including an intercept
    column prepended with add_intercept.

    Args:
        X: Design matrix (n x p), or a prebuilt RegressionDesign
        y: Response vector (n,). Required unless X is a RegressionDesign.
        alpha: Significance level in (0, 1)
        policy: Which insignificant columns to drop per round:
            - 'least_significant': the single column with the largest
              p-value (ties go to the lowest position)
            - 'all_insignificant': every insignificant column at once
        tables: DistributionTables implementation, defaults to StudentTTable
        max_steps: Maximum number of fit-and-test rounds (None = unbounded)
        backend: Regression backend, see regression.fit

    Returns:
        StepwiseSolution with the selected columns and the selection path

    Raises:
        ValidationError: If alpha, policy or max_steps is invalid
        NoSignificantPredictorsError: If every column would be eliminated
        ConvergenceError: If max_steps rounds pass without converging
        RankDeficientError: If a round's design has dependent columns
        InvalidDegreesOfFreedomError: If a round has n - p <= 0

    Example:
        >>> from pystepwise import stepwise, add_intercept
        >>> result = stepwise(add_intercept(X), y)
        >>> result.selected
        (0, 1, 3)
        >>> print(result.summary())
    """
    alpha = check_alpha(alpha)
    if policy not in _POLICIES:
        raise ValidationError(
            f"Unknown pruning policy: {policy!r}. Use one of {_POLICIES}."
        )
    if max_steps is not None and max_steps < 1:
        raise ValidationError(f"max_steps must be >= 1, got {max_steps}")

    if isinstance(X, RegressionDesign):
        if y is not None:
            raise ValueError("y must be None when X is a RegressionDesign")
        design = X
    else:
        if y is None:
            raise ValueError("y required when X is not a RegressionDesign")
        design = RegressionDesign.build(X, y)

    if tables is None:
        from pystepwise.distributions import default_table
        tables = default_table()

    timer = Timer()
    timer.start()

    index_map = IndexMap.identity(design.p)
    history: list[StepRecord] = []
    eliminated: list[int] = []
    step = 0

    while True:
        if max_steps is not None and step >= max_steps:
            raise ConvergenceError(
                f"stepwise selection did not converge within {max_steps} steps; "
                f"{len(index_map)} columns remain",
                iterations=step,
                reason='max_steps',
            )
        step += 1

        # FITTING
        with timer.section('fit'):
            solution = fit(design, backend=backend)

        # TESTING
        with timer.section('test'):
            results = solution.significance(alpha=alpha, tables=tables)
        originals = tuple(index_map)
        mapped = tuple(_to_original(r, index_map) for r in results)

        if all(r.is_significant for r in results):
            history.append(StepRecord(
                step=step,
                original_indices=originals,
                results=mapped,
                removed=(),
                outcome=StepState.CONVERGED,
            ))
            break

        # PRUNING
        positions = _positions_to_prune(results, policy)
        removed = tuple(index_map.original(pos) for pos in positions)
        history.append(StepRecord(
            step=step,
            original_indices=originals,
            results=mapped,
            removed=removed,
            outcome=StepState.PRUNING,
        ))
        eliminated.extend(removed)

        if len(positions) == design.p:
            raise NoSignificantPredictorsError(
                f"no predictor is significant at alpha={alpha}: "
                f"all {len(eliminated)} columns were eliminated",
                eliminated=tuple(eliminated),
                history=tuple(history),
            )

        design = design.without_columns(positions)
        index_map = index_map.remove(positions)

    timer.stop()

    params = StepwiseParams(
        selected=tuple(index_map),
        coefficients=solution.coefficients,
        results=mapped,
        eliminated=tuple(eliminated),
        history=tuple(history),
        policy=policy,
        alpha=alpha,
    )
    info = {
        'method': 'backward_elimination',
        'policy': policy,
        'alpha': alpha,
        'steps': step,
        'n': design.n,
        'p_initial': len(index_map) + len(eliminated),
        'p_final': len(index_map),
    }
    result = Result(
        params=params,
        info=info,
        timing=timer.result(),
        backend_name=solution.backend_name,
        warnings=solution.warnings,
    )
    return StepwiseSolution(_result=result, _final=solution)


def _positions_to_prune(
    results: list[SignificanceResult],
    policy: PruningPolicy,
) -> list[int]:
    """Current positions to drop, in ascending order."""
    insignificant = [r for r in results if not r.is_significant]
    if policy == 'all_insignificant':
        return sorted(r.index for r in insignificant)
    # max() keeps the first of equal keys, i.e. the lowest position
    worst = max(insignificant, key=lambda r: r.p_value)
    return [worst.index]


def _to_original(result: SignificanceResult, index_map: IndexMap) -> SignificanceResult:
    return replace(result, index=index_map.original(result.index))
