"""
Numerical stability research sweep.

Cross-validates several methods on progressively injured copies of one
pool. Task k maps every feature to feature·d^k + d^-k (d = degrade
factor), shrinking the spread and growing the offset, which is where
raw-sum solvers lose precision and the Welford family does not.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence
import numpy as np

from pylinreg.core.exceptions import ValidationError
from pylinreg.evaluation.crossval import CrossValidationResult, cross_validation
from pylinreg.pool.pool import Pool


def injure_factors_and_offsets(tasks: int, degrade: float) -> list[tuple[float, float]]:
    """
    (factor, offset) per task, starting at (1, 1).

    Each next task multiplies the factor by degrade and divides the
    offset by it.
    """
    if tasks < 0:
        raise ValidationError(f"tasks: must be >= 0, got {tasks}")
    if degrade == 0:
        raise ValidationError("degrade: must be non-zero")

    pairs = []
    factor, offset = 1.0, 1.0
    for _ in range(tasks):
        pairs.append((factor, offset))
        factor *= degrade
        offset /= degrade
    return pairs


@dataclass(frozen=True)
class ResearchTask:
    """Cross-validation results of every method on one injured pool."""
    injure_factor: float
    injure_offset: float
    results: dict[str, CrossValidationResult]


@dataclass(frozen=True)
class ResearchResult:
    tasks: tuple[ResearchTask, ...]
    methods: tuple[str, ...]

    def total_learning_time(self, method: str) -> float:
        """Learning seconds of one method summed over all tasks."""
        return sum(task.results[method].learning_time_seconds for task in self.tasks)

    def scores(self, method: str) -> list[float]:
        """Mean cross-validation R² of one method, per task."""
        return [task.results[method].mean_determination_coefficient for task in self.tasks]


def research(
    pool: Pool,
    methods: Sequence[str],
    *,
    tasks: int = 5,
    degrade: float = 0.1,
    folds: int = 5,
    runs: int = 1,
    seed: int | None = None,
) -> ResearchResult:
    """
    Run the injure sweep.

    The same seed is used for every (task, method) pair, so all methods
    see identical folds. Without a seed one is drawn for the whole sweep.
    """
    if seed is None:
        seed = np.random.SeedSequence().entropy

    research_tasks = []
    for factor, offset in injure_factors_and_offsets(tasks, degrade):
        injured = pool.injured(factor, offset)
        results = {
            method: cross_validation(injured, folds, runs, method, seed=seed)
            for method in methods
        }
        research_tasks.append(ResearchTask(factor, offset, results))
    return ResearchResult(tasks=tuple(research_tasks), methods=tuple(methods))
