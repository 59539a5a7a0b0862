"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def exact_linear_data(rng):
    """Noise-free data: goal = 1.5 + X @ [2, -3, 0.5, 4]."""
    n, p = 200, 4
    X = rng.uniform(-5.0, 5.0, size=(n, p))
    coefficients = np.array([2.0, -3.0, 0.5, 4.0])
    intercept = 1.5
    y = intercept + X @ coefficients
    return X, y, coefficients, intercept


@pytest.fixture
def noisy_linear_data(rng):
    """Linear data with Gaussian noise and random positive weights."""
    n, p = 500, 3
    X = rng.standard_normal((n, p))
    coefficients = np.array([1.0, -2.0, 0.5])
    y = 0.25 + X @ coefficients + rng.standard_normal(n) * 0.3
    weights = rng.uniform(0.5, 2.0, size=n)
    return X, y, weights


@pytest.fixture
def features_file(tmp_path, rng):
    """Small features file: query_id goal url weight f0 f1."""
    n = 60
    X = rng.uniform(0.0, 10.0, size=(n, 2))
    y = 3.0 + 2.0 * X[:, 0] - X[:, 1] + rng.standard_normal(n) * 0.05
    lines = [
        f"q{i // 10}\t{float(goal)!r}\turl{i}\t{1.0 + (i % 3)}\t{float(x0)!r}\t{float(x1)!r}"
        for i, (goal, (x0, x1)) in enumerate(zip(y, X))
    ]
    path = tmp_path / "features.tsv"
    path.write_text("\n".join(lines) + "\n")
    return path
