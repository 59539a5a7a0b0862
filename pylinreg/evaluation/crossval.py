"""
K-fold cross-validation over a pool.

Fold assignment: instance positions are shuffled with a seeded
np.random.Generator and the instance at shuffled position k lands in fold
k mod F. Every instance is in exactly one test fold; a fold's learn set is
the complement of its test set. Folds differ in size by at most one.

Each run reshuffles. The reported score is the mean over runs of the mean
test R² over folds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.exceptions import ValidationError
from pylinreg.core.methods import DEFAULT_METHOD
from pylinreg.core.compute.timing import Timer
from pylinreg.core.compute.welford import MeanCalculator
from pylinreg.evaluation.metrics import RegressionMetricsCalculator
from pylinreg.pool.pool import Pool
from pylinreg.regression.solvers import learn, make_solver


class FoldAssignment:
    """
    Shuffled assignment of n instances to F folds.

    Usage:
        folds = FoldAssignment(len(pool), 5, seed=0)
        for fold in range(folds.folds_count):
            learn_idx = folds.learn_indices(fold)
            test_idx = folds.test_indices(fold)
        folds.reshuffle()    # next run
    """

    def __init__(
        self,
        instances_count: int,
        folds_count: int,
        *,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ):
        if folds_count < 1:
            raise ValidationError(f"folds: must be >= 1, got {folds_count}")
        self._instances_count = instances_count
        self._folds_count = folds_count
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._fold_numbers: NDArray[np.intp] = np.empty(instances_count, dtype=np.intp)
        self.reshuffle()

    def reshuffle(self) -> None:
        """Draw a new assignment from the generator."""
        order = self._rng.permutation(self._instances_count)
        self._fold_numbers[order] = np.arange(self._instances_count) % self._folds_count

    @property
    def folds_count(self) -> int:
        return self._folds_count

    @property
    def fold_numbers(self) -> NDArray[np.intp]:
        """Fold of every instance, indexed by instance position."""
        return self._fold_numbers.copy()

    def test_indices(self, fold: int) -> NDArray[np.intp]:
        """Ascending positions of the instances in fold."""
        return np.flatnonzero(self._fold_numbers == fold)

    def learn_indices(self, fold: int) -> NDArray[np.intp]:
        """Ascending positions of the instances outside fold."""
        return np.flatnonzero(self._fold_numbers != fold)

    def splits(self) -> Iterator[tuple[NDArray[np.intp], NDArray[np.intp]]]:
        """(learn, test) index pairs for every fold of the current shuffle."""
        for fold in range(self._folds_count):
            yield self.learn_indices(fold), self.test_indices(fold)


@dataclass(frozen=True)
class CrossValidationResult:
    """
    Outcome of cross_validation().

    Attributes:
        mean_determination_coefficient: Mean over runs of the mean fold R²
        learning_time_seconds: Wall time spent inside learn(), all folds
        fold_scores: Test R² per fold, one tuple per run
        run_scores: Mean fold R² per run
        method: Learning method name
    """
    mean_determination_coefficient: float
    learning_time_seconds: float
    fold_scores: tuple[tuple[float, ...], ...]
    run_scores: tuple[float, ...]
    method: str


def cross_validation(
    pool: Pool,
    folds: int = 5,
    runs: int = 1,
    method: str = DEFAULT_METHOD,
    *,
    seed: int | None = None,
) -> CrossValidationResult:
    """
    Cross-validate a learning method on a pool.

    Args:
        pool: Instances to split
        folds: Number of folds, at least 2 and at most len(pool)
        runs: Number of reshuffled repetitions, at least 1
        method: Learning method name
        seed: Seed of the fold shuffle; None draws fresh entropy

    Returns:
        CrossValidationResult

    Raises:
        ValidationError: On bad folds/runs/method
    """
    make_solver(method)
    if folds < 2:
        raise ValidationError(f"folds: must be >= 2, got {folds}")
    if runs < 1:
        raise ValidationError(f"runs: must be >= 1, got {runs}")
    if len(pool) < folds:
        raise ValidationError(
            f"folds: pool has {len(pool)} instances, fewer than {folds} folds"
        )

    assignment = FoldAssignment(len(pool), folds, seed=seed)
    timer = Timer()

    mean_score = MeanCalculator()
    fold_scores: list[tuple[float, ...]] = []
    run_scores: list[float] = []
    for run in range(runs):
        if run:
            assignment.reshuffle()

        mean_fold_score = MeanCalculator()
        scores: list[float] = []
        for learn_indices, test_indices in assignment.splits():
            with timer.section('learn'):
                model = learn(pool.subset(learn_indices), method)
            score = RegressionMetricsCalculator.build(
                pool.subset(test_indices), model
            ).determination_coefficient()
            scores.append(score)
            mean_fold_score.add(score)

        fold_scores.append(tuple(scores))
        run_scores.append(mean_fold_score.mean)
        mean_score.add(mean_fold_score.mean)

    return CrossValidationResult(
        mean_determination_coefficient=mean_score.mean,
        learning_time_seconds=timer.section_seconds('learn'),
        fold_scores=tuple(fold_scores),
        run_scores=tuple(run_scores),
        method=method,
    )
