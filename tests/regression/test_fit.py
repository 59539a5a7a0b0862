"""
Tests for regression fit() and learn().

Tests the complete pipeline: validation, design construction, method
dispatch, streaming and solution properties.
"""

import pytest
import numpy as np

from pylinreg.core.exceptions import DimensionError, ValidationError
from pylinreg.core.methods import ALL_METHODS, METHOD_FAST_LR, METHOD_WELFORD_BSLR
from pylinreg.core.protocols import IncrementalSolver
from pylinreg.regression import (
    LinearModel,
    LinearSolution,
    RegressionDesign,
    SOLVERS,
    fit,
    learn,
    make_solver,
)
from pylinreg.regression.design import DesignRow


class TestFitBasic:
    """Basic fit() functionality tests."""

    def test_fit_from_arrays(self, noisy_linear_data):
        X, y, _ = noisy_linear_data
        result = fit(X, y)
        assert isinstance(result, LinearSolution)
        assert result.coefficients.shape == (3,)
        assert result.backend_name == 'welford_lr'

    def test_coefficients_close_to_truth(self, noisy_linear_data):
        X, y, w = noisy_linear_data
        result = fit(X, y, w)
        np.testing.assert_allclose(result.coefficients, [1.0, -2.0, 0.5], atol=0.1)
        assert result.intercept == pytest.approx(0.25, abs=0.1)

    def test_exact_data(self, exact_linear_data):
        X, y, coefficients, intercept = exact_linear_data
        result = fit(X, y)
        np.testing.assert_allclose(result.coefficients, coefficients, rtol=1e-8)
        assert result.intercept == pytest.approx(intercept, rel=1e-8)
        assert result.r_squared == pytest.approx(1.0, abs=1e-10)
        assert result.rmse == pytest.approx(0.0, abs=1e-6)

    def test_one_dimensional_x(self, rng):
        x = rng.standard_normal(50)
        result = fit(x, 2.0 * x + 1.0)
        assert result.coefficients.shape == (1,)
        assert result.coefficients[0] == pytest.approx(2.0, rel=1e-8)

    def test_column_y(self, rng):
        x = rng.standard_normal((50, 2))
        y = (x @ [1.0, 1.0]).reshape(-1, 1)
        assert fit(x, y).coefficients.shape == (2,)

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_every_method(self, method, noisy_linear_data):
        X, y, w = noisy_linear_data
        result = fit(X, y, w, method=method)
        assert result.backend_name == method
        assert result.info['method'] == method
        assert result.info['solver'] == SOLVERS[method].name
        assert 0.0 <= result.r_squared <= 1.0

    def test_weights_change_the_fit(self, rng):
        x = rng.standard_normal(100)
        y = np.where(np.arange(100) < 50, 2.0 * x, -2.0 * x)
        weights = np.where(np.arange(100) < 50, 1.0, 0.0)
        result = fit(x, y, weights)
        assert result.coefficients[0] == pytest.approx(2.0, rel=1e-8)


class TestFitProperties:
    """Derived properties of LinearSolution."""

    def test_predicted_sse_matches_rss(self, noisy_linear_data):
        X, y, w = noisy_linear_data
        result = fit(X, y, w)
        assert result.sum_squared_errors == pytest.approx(result.rss, rel=1e-8)

    def test_r_squared_definition(self, noisy_linear_data):
        X, y, w = noisy_linear_data
        result = fit(X, y, w)
        assert result.r_squared == pytest.approx(1.0 - result.rss / result.tss)

    def test_rmse_definition(self, noisy_linear_data):
        X, y, w = noisy_linear_data
        result = fit(X, y, w)
        assert result.rmse == pytest.approx(np.sqrt(result.rss / w.sum()))

    def test_timing_sections(self, noisy_linear_data):
        X, y, _ = noisy_linear_data
        timing = fit(X, y).timing
        assert {'total_seconds', 'add', 'solve'} <= set(timing)

    def test_predict(self, exact_linear_data):
        X, y, _, _ = exact_linear_data
        result = fit(X, y)
        np.testing.assert_allclose(result.predict(X), y, atol=1e-8)

    def test_summary(self, noisy_linear_data):
        X, y, _ = noisy_linear_data
        text = fit(X, y, method=METHOD_FAST_LR).summary()
        assert "fast_lr" in text
        assert "R-squared" in text
        assert "(Intercept)" in text

    def test_repr(self, noisy_linear_data):
        X, y, _ = noisy_linear_data
        assert "welford_lr" in repr(fit(X, y))


class TestFitEdgeCases:

    def test_no_observations(self):
        result = fit(np.zeros((0, 3)), np.zeros(0))
        assert result.model == LinearModel.zeros(3)
        assert len(result.warnings) == 1
        assert "no observations" in result.warnings[0]

    def test_all_weights_zero(self, noisy_linear_data):
        X, y, _ = noisy_linear_data
        result = fit(X, y, np.zeros(len(y)))
        assert any("weights are zero" in w for w in result.warnings)
        assert np.all(np.isfinite(result.coefficients))

    def test_unknown_method(self, noisy_linear_data):
        X, y, _ = noisy_linear_data
        with pytest.raises(ValidationError, match="unknown method"):
            fit(X, y, method='ridge')

    def test_negative_weights(self, noisy_linear_data):
        X, y, w = noisy_linear_data
        w = w.copy()
        w[3] = -1.0
        with pytest.raises(ValidationError, match="negative"):
            fit(X, y, w)

    def test_inconsistent_lengths(self, noisy_linear_data):
        X, y, _ = noisy_linear_data
        with pytest.raises(DimensionError):
            fit(X, y[:-1])

    def test_non_finite(self, noisy_linear_data):
        X, y, _ = noisy_linear_data
        X = X.copy()
        X[0, 0] = np.nan
        with pytest.raises(ValidationError, match="non-finite"):
            fit(X, y)

    def test_non_numeric(self):
        with pytest.raises(ValidationError):
            fit([["a", "b"]], [1.0])


class TestLearn:

    def test_learn_matches_fit(self, noisy_linear_data):
        X, y, w = noisy_linear_data
        design = RegressionDesign.build(X, y, w)
        model = learn(design.observations(), METHOD_WELFORD_BSLR)
        result = fit(X, y, w, method=METHOD_WELFORD_BSLR)
        assert model == result.model

    def test_learn_from_any_observations(self):
        rows = [DesignRow(np.array([float(i)]), 3.0 * i + 1.0, 1.0) for i in range(10)]
        model = learn(rows)
        assert model.coefficients[0] == pytest.approx(3.0, rel=1e-10)
        assert model.intercept == pytest.approx(1.0, rel=1e-10)

    def test_learn_empty(self):
        assert learn([]) == LinearModel.zeros(0)

    def test_learn_feature_count_change(self):
        rows = [DesignRow(np.array([1.0]), 1.0, 1.0), DesignRow(np.array([1.0, 2.0]), 1.0, 1.0)]
        with pytest.raises(DimensionError):
            learn(rows)


class TestRegistry:

    def test_every_method_registered(self):
        assert set(SOLVERS) == set(ALL_METHODS)

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_solvers_satisfy_protocol(self, method):
        assert isinstance(make_solver(method), IncrementalSolver)

    def test_fresh_instances(self):
        assert make_solver('welford_lr') is not make_solver('welford_lr')

    def test_design_total_sum_of_squares(self):
        design = RegressionDesign.build(np.zeros((3, 1)), np.array([1.0, 2.0, 3.0]))
        assert design.total_sum_of_squares() == pytest.approx(2.0)
        assert design.n == 3
        assert design.p == 1
