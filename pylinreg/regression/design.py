"""
Regression Design.

RegressionDesign holds validated arrays (features X, goals y, weights w)
and replays them as a stream of observations for the incremental
solvers. It knows it's feeding a regression; the solvers never see the
arrays, only one row at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, NamedTuple
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.validation import (
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_non_negative,
)


class DesignRow(NamedTuple):
    """One row of a design, shaped as an Observation."""
    features: NDArray[np.floating[Any]]
    goal: float
    weight: float


@dataclass(frozen=True)
class RegressionDesign:
    """
    Validated regression inputs.

    Immutable after construction. Unlike a batch design there is no
    minimum sample count: an empty design yields the zero model.

    Construction:
        RegressionDesign.build(X, y)              # unit weights
        RegressionDesign.build(X, y, weights)     # explicit weights
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _weights: NDArray[np.floating[Any]]
    _n: int
    _p: int

    @classmethod
    def build(
        cls,
        X: NDArray,
        y: NDArray,
        weights: NDArray | None = None,
    ) -> RegressionDesign:
        """
        Build a design from arrays that already passed check_array().

        A 1D X is taken as a single feature column; a (n, 1) y is
        flattened.

        Raises:
            DimensionError: On wrong dimensionality or inconsistent lengths
            ValidationError: On non-finite values or negative weights
        """
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        if weights is None:
            weights = np.ones(len(y), dtype=np.float64)
        else:
            weights = np.asarray(weights, dtype=np.float64)

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_1d(weights, 'weights')
        check_finite(X, 'X')
        check_finite(y, 'y')
        check_finite(weights, 'weights')
        check_non_negative(weights, 'weights')
        check_consistent_length(X, y, weights, names=('X', 'y', 'weights'))

        n, p = X.shape
        return cls(_X=X, _y=y, _weights=weights, _n=n, _p=p)

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Feature matrix (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Goal vector (n,)."""
        return self._y

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        """Observation weights (n,)."""
        return self._weights

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of features."""
        return self._p

    @property
    def sum_weights(self) -> float:
        return float(self._weights.sum())

    def observations(self) -> Iterator[DesignRow]:
        """Rows in order, as observations."""
        for features, goal, weight in zip(self._X, self._y, self._weights):
            yield DesignRow(features, float(goal), float(weight))

    def total_sum_of_squares(self) -> float:
        """Weighted Σw·(y - ȳ)²; 0 when the total weight is 0."""
        total = self.sum_weights
        if not total:
            return 0.0
        mean = float(self._weights @ self._y) / total
        centred = self._y - mean
        return float(self._weights @ (centred * centred))
