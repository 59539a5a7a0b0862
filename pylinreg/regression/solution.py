"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.result import Result
from pylinreg.regression.model import LinearModel

if TYPE_CHECKING:
    from pylinreg.regression.design import RegressionDesign


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for an incremental linear regression.

    sum_squared_errors is the solver's own estimate from its sufficient
    statistics; rss is measured by predicting the design.
    """
    model: LinearModel
    sum_squared_errors: float
    rss: float
    tss: float
    n_observations: int
    sum_weights: float


@dataclass
class LinearSolution:
    """
    User-facing regression results.

    Wraps the solver Result and provides convenient accessors for the
    model and its fit diagnostics.
    """
    _result: Result[LinearParams]
    _design: 'RegressionDesign'

    @property
    def model(self) -> LinearModel:
        return self._result.params.model

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.model.coefficients

    @property
    def intercept(self) -> float:
        return self._result.params.model.intercept

    @property
    def sum_squared_errors(self) -> float:
        return self._result.params.sum_squared_errors

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def rmse(self) -> float:
        """Weighted root mean squared error on the training data."""
        sum_weights = self._result.params.sum_weights
        if not sum_weights:
            return 0.0
        return float(np.sqrt(self.rss / sum_weights))

    @property
    def r_squared(self) -> float:
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - (self.rss / self.tss)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def predict(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        return self.model.predict(X)

    def summary(self) -> str:
        """Plain-text summary of the fit."""
        lines = [
            "Incremental Linear Regression Results",
            "=" * 60,
            f"Method: {self.backend_name}",
            f"Observations: {self._design.n}",
            f"Features: {self._design.p}",
            f"Sum of weights: {self._result.params.sum_weights:.6g}",
            f"RMSE: {self.rmse:.6f}",
            f"R-squared: {self.r_squared:.6f}",
            "",
            "Coefficients:",
            f"{'':>12} {'Estimate':>20}",
            f"{'(Intercept)':>12} {self.intercept:>20.10g}",
        ]
        for i, coef in enumerate(self.coefficients):
            lines.append(f"{'x' + str(i):>12} {coef:>20.10g}")

        if self.timing is not None:
            lines.append("")
            lines.append(f"Time: {self.timing['total_seconds']:.4f}s")

        for warning in self.warnings:
            lines.append(f"Warning: {warning}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(method={self.backend_name!r}, "
            f"n_features={len(self.coefficients)}, r_squared={self.r_squared:.4f})"
        )
