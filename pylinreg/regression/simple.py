"""
Simple (one-feature) linear regression solvers.

Fit goal = factor·feature + intercept from a stream of weighted
(feature, goal) pairs. Three numeric strategies share one contract:

    TypedFastSLRSolver
        Six raw weighted sums (Σw·x, Σw·x², Σw·y, Σw·y², Σw·x·y, Σw).
        Deviations are recovered algebraically at solve time, which
        cancels catastrophically when |mean| >> spread. The storage type
        is a class attribute: float for FastSLRSolver, KahanAccumulator
        for KahanSLRSolver.
    WelfordSLRSolver
        Online means, deviations and co-deviation; no raw-sum algebra.
    NormalizedWelfordSLRSolver
        As Welford, with deviations kept divided by the running sum of
        weights so their magnitude stays bounded.

BestSLRSolver holds one of these per feature and selects the feature
whose one-feature fit has the smallest sum of squared errors.

The regularization argument is a numerical-stability epsilon added to
the feature deviation in the denominator. It only keeps near-constant
features from producing huge factors; it is not a statistical penalty.
"""

from __future__ import annotations

from typing import Sequence
import numpy as np

from pylinreg.core.compute.kahan import KahanAccumulator
from pylinreg.core.validation import check_feature_count
from pylinreg.regression.model import LinearModel

DEFAULT_REGULARIZATION = 1e-10

# Raw-sum feature deviations at or below this fraction of Σw·x² are
# rounding residue of a constant feature and count as zero
CANCELLATION_TOLERANCE = 1e-12


class TypedFastSLRSolver:
    """
    One-feature regression over raw weighted sums.

    Subclasses pick the storage type for the sums; anything supporting
    ``+=`` with floats and ``float()`` works.
    """

    store_type: type = float
    name = 'fast'

    def __init__(self):
        store = self.store_type
        self._sum_features = store()
        self._sum_squared_features = store()
        self._sum_goals = store()
        self._sum_squared_goals = store()
        self._sum_products = store()
        self._sum_weights = store()

    def add(self, feature: float, goal: float, weight: float = 1.0) -> None:
        weighted_feature = feature * weight
        self._sum_features += weighted_feature
        self._sum_squared_features += feature * weighted_feature

        weighted_goal = goal * weight
        self._sum_goals += weighted_goal
        self._sum_squared_goals += goal * weighted_goal

        self._sum_products += feature * weighted_goal

        self._sum_weights += weight

    def solve(self, regularization: float = DEFAULT_REGULARIZATION) -> tuple[float, float]:
        """
        Returns:
            (factor, intercept). (0, 0) before any weight is seen;
            (0, mean goal) for a constant feature.
        """
        sum_weights = float(self._sum_weights)
        if not sum_weights:
            return 0.0, 0.0

        goals_mean = float(self._sum_goals) / sum_weights
        products_deviation, features_deviation = self._solution_factors()
        if not features_deviation:
            return 0.0, goals_mean

        factor = products_deviation / (features_deviation + regularization)
        intercept = goals_mean - factor * float(self._sum_features) / sum_weights
        return factor, intercept

    def sum_squared_errors(self, regularization: float = DEFAULT_REGULARIZATION) -> float:
        sum_weights = float(self._sum_weights)
        if not sum_weights:
            return 0.0

        sum_goals = float(self._sum_goals)
        goals_deviation = float(self._sum_squared_goals) - sum_goals / sum_weights * sum_goals

        products_deviation, features_deviation = self._solution_factors()
        if not features_deviation:
            return max(0.0, goals_deviation)

        factor = products_deviation / (features_deviation + regularization)
        sse = factor * factor * features_deviation - 2.0 * factor * products_deviation + goals_deviation
        return max(0.0, sse)

    def _solution_factors(self) -> tuple[float, float]:
        """(Σw·(x-x̄)(y-ȳ), Σw·(x-x̄)²) recovered from the raw sums."""
        sum_weights = float(self._sum_weights)
        sum_features = float(self._sum_features)

        sum_squared_features = float(self._sum_squared_features)
        features_deviation = sum_squared_features - sum_features / sum_weights * sum_features
        if features_deviation <= CANCELLATION_TOLERANCE * sum_squared_features:
            return 0.0, 0.0

        products_deviation = (
            float(self._sum_products) - sum_features / sum_weights * float(self._sum_goals)
        )
        return products_deviation, features_deviation


class FastSLRSolver(TypedFastSLRSolver):
    """Raw float sums: fastest, least stable."""
    store_type = float
    name = 'fast'


class KahanSLRSolver(TypedFastSLRSolver):
    """Compensated sums: same algebra, far less accumulated rounding."""
    store_type = KahanAccumulator
    name = 'kahan'


class WelfordSLRSolver:
    """
    One-feature regression over online moments.

    Each add() moves the feature and goal means by w·(v - mean)/Σw and
    grows the deviations and the co-deviation by products of the
    pre-update and post-update differences.
    """

    name = 'welford'

    def __init__(self):
        self._features_mean = 0.0
        self._features_deviation = 0.0

        self._goals_mean = 0.0
        self._goals_deviation = 0.0

        self._covariation = 0.0

        self._sum_weights = KahanAccumulator()

    def add(self, feature: float, goal: float, weight: float = 1.0) -> None:
        self._sum_weights += weight
        sum_weights = float(self._sum_weights)
        if not sum_weights:
            return

        # share is exactly 1 on the first weighted add, so a constant
        # feature leaves its mean exact and every later difference zero
        share = weight / sum_weights
        feature_diff = feature - self._features_mean
        goal_diff = goal - self._goals_mean

        self._features_mean += share * feature_diff
        self._features_deviation += weight * feature_diff * (feature - self._features_mean)

        self._goals_mean += share * goal_diff
        self._goals_deviation += weight * goal_diff * (goal - self._goals_mean)

        self._covariation += weight * feature_diff * (goal - self._goals_mean)

    def solve(self, regularization: float = DEFAULT_REGULARIZATION) -> tuple[float, float]:
        """
        Returns:
            (factor, intercept). (0, mean goal) for a constant feature,
            which is (0, 0) before any weight is seen.
        """
        if not self._features_deviation:
            return 0.0, self._goals_mean

        factor = self._covariation / (self._features_deviation + regularization)
        intercept = self._goals_mean - factor * self._features_mean
        return factor, intercept

    def sum_squared_errors(self, regularization: float = DEFAULT_REGULARIZATION) -> float:
        return self._fit_errors(regularization) * self._error_scale()

    def _fit_errors(self, regularization: float) -> float:
        factor, _ = self.solve(regularization)
        errors = (
            factor * factor * self._features_deviation
            - 2.0 * factor * self._covariation
            + self._goals_deviation
        )
        return max(0.0, errors)

    def _error_scale(self) -> float:
        return 1.0

    @property
    def features_mean(self) -> float:
        return self._features_mean

    @property
    def goals_mean(self) -> float:
        return self._goals_mean

    @property
    def sum_weights(self) -> float:
        return float(self._sum_weights)


class NormalizedWelfordSLRSolver(WelfordSLRSolver):
    """
    Welford solver with deviations stored per unit weight.

    Every stored second moment q moves as q += (w/Σw)·(increment/w - q),
    i.e. it always equals the raw Welford value divided by Σw. Factor and
    intercept are unchanged by the common scale; sum_squared_errors()
    multiplies back by Σw. The regularization epsilon applies to the
    normalized deviation.
    """

    name = 'normalized welford'

    def add(self, feature: float, goal: float, weight: float = 1.0) -> None:
        self._sum_weights += weight
        sum_weights = float(self._sum_weights)
        if not sum_weights:
            return

        share = weight / sum_weights
        feature_diff = feature - self._features_mean
        goal_diff = goal - self._goals_mean

        self._features_mean += share * feature_diff
        self._goals_mean += share * goal_diff

        new_goal_diff = goal - self._goals_mean
        self._features_deviation += share * (
            feature_diff * (feature - self._features_mean) - self._features_deviation
        )
        self._goals_deviation += share * (goal_diff * new_goal_diff - self._goals_deviation)
        self._covariation += share * (feature_diff * new_goal_diff - self._covariation)

    def mean_squared_error(self, regularization: float = DEFAULT_REGULARIZATION) -> float:
        """Weighted mean of squared errors of the current fit."""
        return self._fit_errors(regularization)

    def _error_scale(self) -> float:
        return float(self._sum_weights)


class BestSLRSolver:
    """
    Best single-feature regression.

    Holds one single-feature solver per feature (count fixed by the first
    add()) and, at solve time, keeps only the feature whose one-feature
    fit has the smallest sum of squared errors. Ties go to the lowest
    feature index.
    """

    solver_type: type = WelfordSLRSolver
    name = 'welford bslr'

    def __init__(self):
        self._solvers: list = []

    def add(self, features: Sequence[float], goal: float, weight: float = 1.0) -> None:
        if not self._solvers:
            self._solvers = [self.solver_type() for _ in range(len(features))]
        else:
            check_feature_count(len(self._solvers), len(features), 'features')

        for solver, feature in zip(self._solvers, map(float, features)):
            solver.add(feature, goal, weight)

    def solve(self, regularization: float = DEFAULT_REGULARIZATION) -> LinearModel:
        """
        Model that uses only the best feature.

        All coefficients are zero except the winner's factor. With no
        features recorded the result is the zero model.
        """
        best = self.best_feature(regularization)
        if best is None:
            return LinearModel.zeros(0)

        factor, intercept = self._solvers[best].solve(regularization)
        coefficients = np.zeros(len(self._solvers), dtype=np.float64)
        coefficients[best] = factor
        return LinearModel(coefficients, intercept)

    def sum_squared_errors(self, regularization: float = DEFAULT_REGULARIZATION) -> float:
        if not self._solvers:
            return 0.0
        return min(solver.sum_squared_errors(regularization) for solver in self._solvers)

    def best_feature(self, regularization: float = DEFAULT_REGULARIZATION) -> int | None:
        """Index of the selected feature, or None before any add()."""
        if not self._solvers:
            return None
        errors = [solver.sum_squared_errors(regularization) for solver in self._solvers]
        return int(np.argmin(errors))

    @property
    def n_features(self) -> int:
        return len(self._solvers)


class FastBestSLRSolver(BestSLRSolver):
    solver_type = FastSLRSolver
    name = 'fast bslr'


class KahanBestSLRSolver(BestSLRSolver):
    solver_type = KahanSLRSolver
    name = 'kahan bslr'


class WelfordBestSLRSolver(BestSLRSolver):
    solver_type = WelfordSLRSolver
    name = 'welford bslr'


class NormalizedWelfordBestSLRSolver(BestSLRSolver):
    solver_type = NormalizedWelfordSLRSolver
    name = 'normalized welford bslr'
