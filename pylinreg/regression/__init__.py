"""
Incremental linear regression.

Solvers consume weighted observations one at a time and solve for a
LinearModel from sufficient statistics only.

Public API:
    fit(X, y, weights=None, method=...) -> LinearSolution
    learn(observations, method=...) -> LinearModel
    make_solver(method) -> solver with add() / solve() / sum_squared_errors()

Example:
    >>> from pylinreg.regression import fit
    >>> result = fit(X, y, method='welford_lr')
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from pylinreg.regression.model import LinearModel
from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.solution import LinearSolution, LinearParams
from pylinreg.regression.simple import (
    DEFAULT_REGULARIZATION,
    FastSLRSolver,
    KahanSLRSolver,
    WelfordSLRSolver,
    NormalizedWelfordSLRSolver,
    BestSLRSolver,
    FastBestSLRSolver,
    KahanBestSLRSolver,
    WelfordBestSLRSolver,
    NormalizedWelfordBestSLRSolver,
)
from pylinreg.regression.multiple import (
    FastLRSolver,
    WelfordLRSolver,
    NormalizedWelfordLRSolver,
)
from pylinreg.regression.solvers import SOLVERS, make_solver, learn, fit

__all__ = [
    "fit",
    "learn",
    "make_solver",
    "SOLVERS",
    "LinearModel",
    "RegressionDesign",
    "LinearSolution",
    "LinearParams",
    "DEFAULT_REGULARIZATION",
    "FastSLRSolver",
    "KahanSLRSolver",
    "WelfordSLRSolver",
    "NormalizedWelfordSLRSolver",
    "BestSLRSolver",
    "FastBestSLRSolver",
    "KahanBestSLRSolver",
    "WelfordBestSLRSolver",
    "NormalizedWelfordBestSLRSolver",
    "FastLRSolver",
    "WelfordLRSolver",
    "NormalizedWelfordLRSolver",
]
