"""
Weighted regression quality metrics.

RegressionMetricsCalculator streams (prediction, target, weight) triples
through the same online calculators the solvers use, so evaluating a
model costs one pass and no storage.
"""

from __future__ import annotations

import math
from typing import Iterable

from pylinreg.core.compute.welford import MeanCalculator, DeviationCalculator
from pylinreg.core.protocols import Observation
from pylinreg.regression.model import LinearModel


class RegressionMetricsCalculator:
    """
    Weighted RMSE and coefficient of determination.

    R² = 1 - MSE / Var(target), both weighted. When the targets have no
    variance, R² is 1.0 for a perfect fit and 0.0 otherwise.
    """

    def __init__(self):
        self._squared_errors = MeanCalculator()
        self._targets = DeviationCalculator()

    @classmethod
    def build(
        cls,
        observations: Iterable[Observation],
        model: LinearModel,
    ) -> RegressionMetricsCalculator:
        """Calculator filled with the model's predictions on observations."""
        calculator = cls()
        for observation in observations:
            calculator.add(model.prediction(observation.features), observation.goal, observation.weight)
        return calculator

    def add(self, prediction: float, target: float, weight: float = 1.0) -> None:
        diff = prediction - target
        self._squared_errors.add(diff * diff, weight)
        self._targets.add(target, weight)

    def mean_squared_error(self) -> float:
        return max(0.0, self._squared_errors.mean)

    def rmse(self) -> float:
        return math.sqrt(self.mean_squared_error())

    def determination_coefficient(self) -> float:
        mse = self.mean_squared_error()
        variance = self._targets.variance
        if variance == 0:
            return 1.0 if mse == 0 else 0.0
        return 1.0 - mse / variance

    @property
    def sum_weights(self) -> float:
        return self._targets.sum_weights
