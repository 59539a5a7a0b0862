"""
Online weighted moments (Welford's method).

Running mean, sum of squared deviations and co-deviation of weighted
value streams, updated one observation at a time without ever forming
raw sums of squares. This avoids the catastrophic cancellation of
Σw·x² - (Σw·x)²/Σw when the values are large compared to their spread.

All calculators share one policy: when the cumulative weight after an
add() is exactly zero the update is skipped and the outputs keep their
previous values. Nothing here raises.

References:
    Welford, B. P. (1962). Note on a method for calculating corrected
    sums of squares and products. Technometrics, 4(3), 419-420.
    West, D. H. D. (1979). Updating mean and variance estimates: an
    improved method. Communications of the ACM, 22(9), 532-535.
"""

from pylinreg.core.compute.kahan import KahanAccumulator


class MeanCalculator:
    """
    Weighted mean (w_1·x_1 + ... + w_n·x_n) / (w_1 + ... + w_n).

    The sum of weights is compensated; the mean itself moves by
    w·(x - mean) / Σw on each add.
    """

    __slots__ = ('_mean', '_sum_weights')

    def __init__(self):
        self._mean = 0.0
        self._sum_weights = KahanAccumulator()

    def add(self, value: float, weight: float = 1.0) -> None:
        self._sum_weights += weight
        sum_weights = float(self._sum_weights)
        if sum_weights:
            self._mean += weight / sum_weights * (value - self._mean)

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def sum_weights(self) -> float:
        return float(self._sum_weights)


class DeviationCalculator:
    """
    Weighted sum of squared deviations Σ w_i·(x_i - mean)².

    Each add() straddles the mean update: the increment is
    w·(x - old_mean)·(x - new_mean). The result is unnormalized; divide
    by sum_weights for the (population) variance.
    """

    __slots__ = ('_deviation', '_mean_calculator')

    def __init__(self):
        self._deviation = 0.0
        self._mean_calculator = MeanCalculator()

    def add(self, value: float, weight: float = 1.0) -> None:
        last_mean = self._mean_calculator.mean
        self._mean_calculator.add(value, weight)
        if not self._mean_calculator.sum_weights:
            return
        self._deviation += weight * (value - last_mean) * (value - self._mean_calculator.mean)

    @property
    def mean(self) -> float:
        return self._mean_calculator.mean

    @property
    def deviation(self) -> float:
        return self._deviation

    @property
    def sum_weights(self) -> float:
        return self._mean_calculator.sum_weights

    @property
    def variance(self) -> float:
        """Weighted population variance; 0.0 before any weight is seen."""
        sum_weights = self.sum_weights
        if not sum_weights:
            return 0.0
        return self._deviation / sum_weights


class CovariationCalculator:
    """
    Weighted co-deviation Σ w_i·(x_i - mean_x)·(y_i - mean_y).

    Update order: the first mean moves, the term
    w·(x - new_mean_x)·(y - old_mean_y) is added, then the second mean
    moves. Since x - new_mean_x = (x - old_mean_x)·(1 - w/Σw), this is
    the same increment as the textbook w·(x - old_mean_x)·(y - new_mean_y).
    """

    __slots__ = ('_covariation', '_first_mean_calculator', '_second_mean_calculator')

    def __init__(self):
        self._covariation = 0.0
        self._first_mean_calculator = MeanCalculator()
        self._second_mean_calculator = MeanCalculator()

    def add(self, first_value: float, second_value: float, weight: float = 1.0) -> None:
        self._first_mean_calculator.add(first_value, weight)
        if self._first_mean_calculator.sum_weights:
            self._covariation += (
                weight
                * (first_value - self._first_mean_calculator.mean)
                * (second_value - self._second_mean_calculator.mean)
            )
        self._second_mean_calculator.add(second_value, weight)

    @property
    def first_mean(self) -> float:
        return self._first_mean_calculator.mean

    @property
    def second_mean(self) -> float:
        return self._second_mean_calculator.mean

    @property
    def covariation(self) -> float:
        return self._covariation

    @property
    def sum_weights(self) -> float:
        return self._first_mean_calculator.sum_weights
