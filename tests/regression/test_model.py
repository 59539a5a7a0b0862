"""
Tests for LinearModel: prediction, immutability and the text dump.
"""

import numpy as np
import pytest

from pylinreg.core.exceptions import ModelFormatError
from pylinreg.regression.model import LinearModel


class TestPrediction:

    def test_prediction(self):
        model = LinearModel([2.0, -1.0], 0.5)
        assert model.prediction([3.0, 4.0]) == 0.5 + 6.0 - 4.0

    def test_predict_rows(self):
        model = LinearModel([2.0, -1.0], 0.5)
        X = np.array([[3.0, 4.0], [0.0, 0.0]])
        np.testing.assert_allclose(model.predict(X), [2.5, 0.5])

    def test_predict_single_row(self):
        model = LinearModel([1.0, 1.0], 0.0)
        np.testing.assert_allclose(model.predict([1.0, 2.0]), [3.0])

    def test_zeros(self):
        model = LinearModel.zeros(3)
        assert model.n_features == 3
        assert model.intercept == 0.0
        assert model.prediction([1.0, 2.0, 3.0]) == 0.0

    def test_empty_model_predicts_intercept(self):
        assert LinearModel([], 4.0).prediction([]) == 4.0


class TestImmutability:

    def test_coefficients_read_only(self):
        model = LinearModel([1.0, 2.0])
        with pytest.raises(ValueError):
            model.coefficients[0] = 5.0

    def test_source_array_not_shared(self):
        source = np.array([1.0, 2.0])
        model = LinearModel(source)
        source[0] = 9.0
        assert model.coefficients[0] == 1.0

    def test_equality(self):
        assert LinearModel([1.0, 2.0], 3.0) == LinearModel(np.array([1.0, 2.0]), 3.0)
        assert LinearModel([1.0, 2.0], 3.0) != LinearModel([1.0, 2.0], 3.5)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(LinearModel([1.0]))


class TestTextDump:

    def test_format(self):
        text = LinearModel([0.5, -2.0], 1.25).to_text()
        assert text == "2 1.25 0.5 -2 "

    def test_round_trip_preserves_values(self, rng):
        model = LinearModel(rng.standard_normal(5), float(rng.standard_normal()))
        restored = LinearModel.from_text(model.to_text())
        assert restored == model

    def test_zero_features(self):
        restored = LinearModel.from_text(LinearModel([], 3.0).to_text())
        assert restored.n_features == 0
        assert restored.intercept == 3.0

    def test_save_load(self, tmp_path):
        model = LinearModel([1.0 / 3.0, 7.0], -0.1)
        path = tmp_path / "model.txt"
        model.save(path)
        assert LinearModel.load(path) == model

    def test_extra_tokens_ignored(self):
        model = LinearModel.from_text("1 0.5 2.0 trailing garbage")
        assert model == LinearModel([2.0], 0.5)

    @pytest.mark.parametrize("text, message", [
        ("", "empty"),
        ("two 1.0 2.0 3.0", "integer"),
        ("-1 0.0", "negative"),
        ("3 1.0 2.0", "expected intercept and 3 coefficients"),
        ("1 0.0 abc", "non-numeric"),
    ])
    def test_malformed(self, text, message):
        with pytest.raises(ModelFormatError, match=message):
            LinearModel.from_text(text)
