"""
Linear model value type.

Every solver's solve() returns a LinearModel: a coefficient vector and an
intercept. It also knows its flat text dump,

    <featureCount> <intercept> <coef_0> <coef_1> ... <coef_{n-1}>

whitespace separated, with 20 significant digits per number.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.exceptions import ModelFormatError

_PRECISION = 20


@dataclass(frozen=True, eq=False)
class LinearModel:
    """
    Linear model: prediction = intercept + Σ coefficients[i]·features[i].

    Immutable after construction. Coefficients are stored as a read-only
    float64 array.
    """
    coefficients: NDArray[np.floating[Any]]
    intercept: float = 0.0

    def __post_init__(self):
        coefficients = np.array(self.coefficients, dtype=np.float64).reshape(-1)
        coefficients.setflags(write=False)
        object.__setattr__(self, 'coefficients', coefficients)
        object.__setattr__(self, 'intercept', float(self.intercept))

    @classmethod
    def zeros(cls, n_features: int = 0) -> LinearModel:
        """All-zero model with n_features coefficients and zero intercept."""
        return cls(np.zeros(n_features, dtype=np.float64), 0.0)

    @property
    def n_features(self) -> int:
        return len(self.coefficients)

    def prediction(self, features: Sequence[float]) -> float:
        """
        Predict one observation.

        The caller guarantees len(features) == n_features.
        """
        return self.intercept + float(np.dot(self.coefficients, features))

    def predict(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """Predict every row of an (n, n_features) matrix."""
        X = np.asarray(X, dtype=np.float64)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        return X @ self.coefficients + self.intercept

    # === Persistence ===

    def to_text(self) -> str:
        """Flat text dump: count, intercept, then the coefficients."""
        values = [repr(self.n_features), _format(self.intercept)]
        values.extend(_format(c) for c in self.coefficients)
        return " ".join(values) + " "

    @classmethod
    def from_text(cls, text: str) -> LinearModel:
        """
        Parse the flat text dump written by to_text().

        Raises:
            ModelFormatError: If the count is missing or not an integer,
                or fewer numbers follow than the count announces
        """
        tokens = text.split()
        if not tokens:
            raise ModelFormatError("model: empty input, expected a feature count")

        try:
            n_features = int(tokens[0])
        except ValueError as e:
            raise ModelFormatError(
                f"model: feature count must be an integer, got {tokens[0]!r}"
            ) from e
        if n_features < 0:
            raise ModelFormatError(f"model: negative feature count {n_features}")

        expected = n_features + 1
        numbers = tokens[1:1 + expected]
        if len(numbers) < expected:
            raise ModelFormatError(
                f"model: expected intercept and {n_features} coefficients, "
                f"got {len(numbers)} numbers"
            )
        try:
            values = [float(v) for v in numbers]
        except ValueError as e:
            raise ModelFormatError(f"model: non-numeric value: {e}") from e

        return cls(np.array(values[1:], dtype=np.float64), values[0])

    def save(self, path: str | Path) -> None:
        """Write the flat text dump to path."""
        Path(path).write_text(self.to_text())

    @classmethod
    def load(cls, path: str | Path) -> LinearModel:
        """Read a model written by save()."""
        return cls.from_text(Path(path).read_text())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearModel):
            return NotImplemented
        return (
            self.intercept == other.intercept
            and np.array_equal(self.coefficients, other.coefficients)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"LinearModel(n_features={self.n_features}, "
            f"intercept={self.intercept:.6g})"
        )


def _format(value: float) -> str:
    return f"{value:.{_PRECISION}g}"
