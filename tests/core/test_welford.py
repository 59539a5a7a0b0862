"""
Tests for the online weighted moment calculators.

Validates:
    - Agreement with two-pass numpy formulas (weighted)
    - Zero-weight observations leave state untouched
    - Stability when the mean is far larger than the spread
"""

import numpy as np
import pytest

from pylinreg.core.compute.welford import (
    CovariationCalculator,
    DeviationCalculator,
    MeanCalculator,
)


def _weighted_mean(values, weights):
    return float(np.sum(values * weights) / np.sum(weights))


class TestMeanCalculator:

    def test_empty(self):
        calc = MeanCalculator()
        assert calc.mean == 0.0
        assert calc.sum_weights == 0.0

    def test_weighted_mean(self, rng):
        values = rng.standard_normal(1000)
        weights = rng.uniform(0.1, 3.0, size=1000)
        calc = MeanCalculator()
        for value, weight in zip(values, weights):
            calc.add(value, weight)
        assert calc.mean == pytest.approx(_weighted_mean(values, weights), rel=1e-12)
        assert calc.sum_weights == pytest.approx(weights.sum(), rel=1e-14)

    def test_zero_weights_skip(self):
        calc = MeanCalculator()
        calc.add(100.0, 0.0)
        calc.add(5.0, 0.0)
        assert calc.mean == 0.0
        calc.add(2.0, 1.0)
        calc.add(100.0, 0.0)
        assert calc.mean == 2.0


class TestDeviationCalculator:

    def test_matches_two_pass(self, rng):
        values = rng.standard_normal(1000) * 3.0 + 7.0
        weights = rng.uniform(0.1, 3.0, size=1000)
        calc = DeviationCalculator()
        for value, weight in zip(values, weights):
            calc.add(value, weight)

        mean = _weighted_mean(values, weights)
        deviation = float(np.sum(weights * (values - mean) ** 2))
        assert calc.mean == pytest.approx(mean, rel=1e-12)
        assert calc.deviation == pytest.approx(deviation, rel=1e-10)
        assert calc.variance == pytest.approx(deviation / weights.sum(), rel=1e-10)

    def test_variance_empty(self):
        assert DeviationCalculator().variance == 0.0

    def test_large_offset(self, rng):
        spread = rng.standard_normal(1000)
        calc = DeviationCalculator()
        for value in 1e9 + spread:
            calc.add(value)
        expected = float(np.sum((spread - spread.mean()) ** 2))
        assert calc.deviation == pytest.approx(expected, rel=1e-6)

    def test_constant_values(self):
        calc = DeviationCalculator()
        for _ in range(10):
            calc.add(3.0, 2.0)
        assert calc.deviation == 0.0
        assert calc.mean == 3.0


class TestCovariationCalculator:

    def test_matches_two_pass(self, rng):
        x = rng.standard_normal(1000)
        y = 2.0 * x + rng.standard_normal(1000)
        w = rng.uniform(0.1, 3.0, size=1000)
        calc = CovariationCalculator()
        for xi, yi, wi in zip(x, y, w):
            calc.add(xi, yi, wi)

        mx = _weighted_mean(x, w)
        my = _weighted_mean(y, w)
        expected = float(np.sum(w * (x - mx) * (y - my)))
        assert calc.first_mean == pytest.approx(mx, rel=1e-12)
        assert calc.second_mean == pytest.approx(my, rel=1e-12)
        assert calc.covariation == pytest.approx(expected, rel=1e-10)

    def test_symmetric(self, rng):
        x = rng.standard_normal(200)
        y = rng.standard_normal(200)
        forward = CovariationCalculator()
        backward = CovariationCalculator()
        for xi, yi in zip(x, y):
            forward.add(xi, yi)
            backward.add(yi, xi)
        assert forward.covariation == pytest.approx(backward.covariation, rel=1e-12)

    def test_self_covariation_equals_deviation(self, rng):
        values = rng.standard_normal(300)
        cov = CovariationCalculator()
        dev = DeviationCalculator()
        for value in values:
            cov.add(value, value)
            dev.add(value)
        assert cov.covariation == pytest.approx(dev.deviation, rel=1e-12)

    def test_zero_weight_first(self):
        calc = CovariationCalculator()
        calc.add(5.0, 7.0, 0.0)
        assert calc.covariation == 0.0
        assert calc.first_mean == 0.0
        assert calc.second_mean == 0.0
