"""
Multi-feature OLS solvers over streamed normal equations.

Each solver accumulates a packed symmetric matrix and a right-hand side
vector from weighted observations, then hands them to the LDL^T solver.

    FastLRSolver
        Raw Gram matrix of the augmented vector [features, 1]. The
        constant column makes the last solution element the intercept,
        so no centring is needed. Cancels when features have a large
        offset relative to their spread.
    WelfordLRSolver
        Mean-centred cross products, updated with the pre-update and
        post-update differences of every feature (the covariance update
        of welford.py applied to all pairs at once). The intercept is
        reconstructed from the means after solving.
    NormalizedWelfordLRSolver
        As Welford, with every second moment kept per unit weight so its
        magnitude stays bounded on huge or badly scaled pools.

Feature count is fixed by the first add(). A cumulative weight of
exactly zero turns that add() into a no-op.
"""

from __future__ import annotations

from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.compute.kahan import KahanAccumulator
from pylinreg.core.compute.linalg.ldl import ldl_solve
from pylinreg.core.compute.linalg.packed import (
    packed_size,
    add_outer_product,
    triangle_indices,
    quadratic_form,
)
from pylinreg.core.validation import check_feature_count
from pylinreg.regression.model import LinearModel


def _sum_squared_errors(
    ols_matrix: NDArray[np.floating[Any]],
    ols_vector: NDArray[np.floating[Any]],
    solution: NDArray[np.floating[Any]],
    goals_deviation: float,
) -> float:
    """
    Σw·(y - prediction)² expanded over the normal equations:
    goals_deviation + cᵀMc - 2cᵀb, clamped at zero.
    """
    sse = goals_deviation + quadratic_form(ols_matrix, solution) - 2.0 * float(solution @ ols_vector)
    return max(0.0, sse)


class FastLRSolver:
    """OLS over the raw augmented normal equations."""

    name = 'fast lr'

    def __init__(self):
        self._sum_squared_goals = KahanAccumulator()
        self._ols_matrix: NDArray[np.float64] | None = None
        self._ols_vector: NDArray[np.float64] | None = None

    def add(self, features: Sequence[float], goal: float, weight: float = 1.0) -> None:
        features = np.asarray(features, dtype=np.float64)
        if self._ols_vector is None:
            augmented_count = len(features) + 1
            self._ols_matrix = np.zeros(packed_size(augmented_count), dtype=np.float64)
            self._ols_vector = np.zeros(augmented_count, dtype=np.float64)
        else:
            check_feature_count(len(self._ols_vector) - 1, len(features), 'features')

        augmented = np.append(features, 1.0)
        add_outer_product(self._ols_matrix, weight * augmented, augmented)
        self._ols_vector += (goal * weight) * augmented
        self._sum_squared_goals += goal * goal * weight

    def solve(self) -> LinearModel:
        if self._ols_vector is None:
            return LinearModel.zeros(0)
        solution = ldl_solve(self._ols_matrix, self._ols_vector)
        return LinearModel(solution[:-1], solution[-1])

    def sum_squared_errors(self) -> float:
        if self._ols_vector is None:
            return 0.0
        solution = ldl_solve(self._ols_matrix, self._ols_vector)
        return _sum_squared_errors(
            self._ols_matrix, self._ols_vector, solution, float(self._sum_squared_goals)
        )

    @property
    def n_features(self) -> int:
        return 0 if self._ols_vector is None else len(self._ols_vector) - 1


class WelfordLRSolver:
    """OLS over mean-centred normal equations."""

    name = 'welford lr'

    def __init__(self):
        self._goals_mean = 0.0
        self._goals_deviation = 0.0

        self._feature_means: NDArray[np.float64] | None = None
        self._ols_matrix: NDArray[np.float64] | None = None
        self._ols_vector: NDArray[np.float64] | None = None

        self._sum_weights = KahanAccumulator()

    def add(self, features: Sequence[float], goal: float, weight: float = 1.0) -> None:
        features = np.asarray(features, dtype=np.float64)
        if self._feature_means is None:
            features_count = len(features)
            self._feature_means = np.zeros(features_count, dtype=np.float64)
            self._ols_matrix = np.zeros(packed_size(features_count), dtype=np.float64)
            self._ols_vector = np.zeros(features_count, dtype=np.float64)
        else:
            check_feature_count(len(self._feature_means), len(features), 'features')

        self._sum_weights += weight
        sum_weights = float(self._sum_weights)
        if not sum_weights:
            return
        share = weight / sum_weights

        last_diffs = features - self._feature_means
        self._feature_means += share * last_diffs
        new_diffs = features - self._feature_means

        goal_diff = goal - self._goals_mean
        self._goals_mean += share * goal_diff
        new_goal_diff = goal - self._goals_mean

        self._accumulate(weight, share, last_diffs, new_diffs, goal_diff, new_goal_diff)

    def _accumulate(
        self,
        weight: float,
        share: float,
        last_diffs: NDArray[np.float64],
        new_diffs: NDArray[np.float64],
        goal_diff: float,
        new_goal_diff: float,
    ) -> None:
        add_outer_product(self._ols_matrix, weight * last_diffs, new_diffs)
        self._ols_vector += (weight * goal_diff) * new_diffs
        self._goals_deviation += weight * goal_diff * new_goal_diff

    def _coefficients(self) -> NDArray[np.float64]:
        return ldl_solve(self._ols_matrix, self._ols_vector)

    def solve(self) -> LinearModel:
        if self._feature_means is None:
            return LinearModel.zeros(0)
        coefficients = self._coefficients()
        intercept = self._goals_mean - float(self._feature_means @ coefficients)
        return LinearModel(coefficients, intercept)

    def sum_squared_errors(self) -> float:
        if self._feature_means is None:
            return 0.0
        return self._fit_errors() * self._error_scale()

    def _fit_errors(self) -> float:
        return _sum_squared_errors(
            self._ols_matrix, self._ols_vector, self._coefficients(), self._goals_deviation
        )

    def _error_scale(self) -> float:
        return 1.0

    @property
    def n_features(self) -> int:
        return 0 if self._feature_means is None else len(self._feature_means)

    @property
    def sum_weights(self) -> float:
        return float(self._sum_weights)


class NormalizedWelfordLRSolver(WelfordLRSolver):
    """
    Welford OLS with second moments stored per unit weight.

    Each stored quantity q moves as q += (w/Σw)·(increment/w - q), which
    keeps q equal to the raw Welford value divided by Σw. Scaling matrix
    and vector alike leaves the solution unchanged, while the LDL pivot
    threshold now applies to covariances rather than co-deviations.
    """

    name = 'normalized welford lr'

    def _accumulate(
        self,
        weight: float,
        share: float,
        last_diffs: NDArray[np.float64],
        new_diffs: NDArray[np.float64],
        goal_diff: float,
        new_goal_diff: float,
    ) -> None:
        rows, cols = triangle_indices(len(new_diffs))
        self._ols_matrix += share * (last_diffs[rows] * new_diffs[cols] - self._ols_matrix)
        self._ols_vector += share * (goal_diff * new_diffs - self._ols_vector)
        self._goals_deviation += share * (goal_diff * new_goal_diff - self._goals_deviation)

    def mean_squared_error(self) -> float:
        """Weighted mean of squared errors of the current fit."""
        if self._feature_means is None:
            return 0.0
        return self._fit_errors()

    def _error_scale(self) -> float:
        return float(self._sum_weights)
