"""
Solver dispatch for regression.

This module provides the method registry, learn() (stream entry point)
and fit() (array entry point, public API).
"""

from typing import Iterable, Literal
import numpy as np
from numpy.typing import ArrayLike

from pylinreg.core.exceptions import ValidationError
from pylinreg.core.methods import (
    METHOD_FAST_BSLR,
    METHOD_KAHAN_BSLR,
    METHOD_WELFORD_BSLR,
    METHOD_NORMALIZED_WELFORD_BSLR,
    METHOD_FAST_LR,
    METHOD_WELFORD_LR,
    METHOD_NORMALIZED_WELFORD_LR,
    DEFAULT_METHOD,
    ALL_METHODS,
)
from pylinreg.core.protocols import Observation, IncrementalSolver
from pylinreg.core.result import Result
from pylinreg.core.validation import check_array
from pylinreg.core.compute.timing import Timer
from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.model import LinearModel
from pylinreg.regression.multiple import (
    FastLRSolver,
    WelfordLRSolver,
    NormalizedWelfordLRSolver,
)
from pylinreg.regression.simple import (
    FastBestSLRSolver,
    KahanBestSLRSolver,
    WelfordBestSLRSolver,
    NormalizedWelfordBestSLRSolver,
)
from pylinreg.regression.solution import LinearParams, LinearSolution


# Type alias for method selection
MethodChoice = Literal[
    'fast_bslr',
    'kahan_bslr',
    'welford_bslr',
    'normalized_welford_bslr',
    'fast_lr',
    'welford_lr',
    'normalized_welford_lr',
]

SOLVERS: dict[str, type] = {
    METHOD_FAST_BSLR: FastBestSLRSolver,
    METHOD_KAHAN_BSLR: KahanBestSLRSolver,
    METHOD_WELFORD_BSLR: WelfordBestSLRSolver,
    METHOD_NORMALIZED_WELFORD_BSLR: NormalizedWelfordBestSLRSolver,
    METHOD_FAST_LR: FastLRSolver,
    METHOD_WELFORD_LR: WelfordLRSolver,
    METHOD_NORMALIZED_WELFORD_LR: NormalizedWelfordLRSolver,
}


def make_solver(method: MethodChoice = DEFAULT_METHOD) -> IncrementalSolver:
    """
    Fresh, empty solver for a method name.

    Raises:
        ValidationError: If the method is unknown
    """
    try:
        solver_type = SOLVERS[method]
    except KeyError:
        raise ValidationError(
            f"method: unknown method {method!r}, expected one of {', '.join(ALL_METHODS)}"
        ) from None
    return solver_type()


def learn(
    observations: Iterable[Observation],
    method: MethodChoice = DEFAULT_METHOD,
) -> LinearModel:
    """
    Feed every observation into a fresh solver and return its model.

    Args:
        observations: Any iterable of objects with features, goal and
            weight attributes (pool instances, design rows, ...)
        method: Learning method name, see pylinreg.core.methods

    Returns:
        The solved LinearModel; the zero model for no observations

    Raises:
        ValidationError: If the method is unknown
        DimensionError: If feature vectors differ in length
    """
    solver = make_solver(method)
    for observation in observations:
        solver.add(observation.features, observation.goal, observation.weight)
    return solver.solve()


def fit(
    X: ArrayLike,
    y: ArrayLike,
    weights: ArrayLike | None = None,
    *,
    method: MethodChoice = DEFAULT_METHOD,
) -> LinearSolution:
    """
    Fit a linear model by streaming the rows of X into an incremental solver.

    Minimizes Σ w_i·(y_i - intercept - x_iᵀβ)². The intercept is always
    fitted; do not add a column of ones to X.

    This is the array-level public API. All input validation, solver
    selection and result wrapping happens here.

    Args:
        X: Feature matrix (n x p), or a 1D array for a single feature
        y: Goal vector (n,)
        weights: Non-negative observation weights (n,); unit weights if None
        method: Learning method:
            - 'welford_lr': mean-centred normal equations (default)
            - 'normalized_welford_lr': same, per-unit-weight moments
            - 'fast_lr': raw normal equations; fast, cancels on offset data
            - '*_bslr': best single feature only

    Returns:
        LinearSolution with the model, fit diagnostics and timing

    Raises:
        ValidationError: If inputs are invalid or the method is unknown
        DimensionError: If X, y and weights have inconsistent dimensions

    Example:
        >>> import numpy as np
        >>> from pylinreg.regression import fit
        >>>
        >>> X = np.random.randn(100, 2)
        >>> y = 1.0 + X @ [2, 3] + np.random.randn(100) * 0.1
        >>>
        >>> result = fit(X, y)
        >>> print(result.intercept, result.coefficients)
        >>> print(result.summary())
    """
    # === Input Validation ===
    # This is the boundary - validate here, trust everywhere else
    X_arr = check_array(X, 'X')
    y_arr = check_array(y, 'y')
    w_arr = None if weights is None else check_array(weights, 'weights')

    solver = make_solver(method)

    # === Construct Design ===
    design = RegressionDesign.build(X_arr, y_arr, w_arr)

    # === Solve ===
    timer = Timer()
    timer.start()
    with timer.section('add'):
        for row in design.observations():
            solver.add(row.features, row.goal, row.weight)
    with timer.section('solve'):
        model = solver.solve()
        sum_squared_errors = solver.sum_squared_errors()
    timer.stop()

    if model.n_features != design.p:
        # No observations: keep the feature count of the design
        model = LinearModel(np.zeros(design.p), model.intercept)

    warnings = []
    sum_weights = design.sum_weights
    if design.n == 0:
        warnings.append("no observations: returning the zero model")
    elif not sum_weights:
        warnings.append("all weights are zero: returning the zero model")

    residuals = design.y - model.predict(design.X)
    rss = float(design.weights @ (residuals * residuals))

    params = LinearParams(
        model=model,
        sum_squared_errors=sum_squared_errors,
        rss=rss,
        tss=design.total_sum_of_squares(),
        n_observations=design.n,
        sum_weights=sum_weights,
    )
    result = Result(
        params=params,
        info={
            'method': method,
            'solver': solver.name,
            'n_features': design.p,
        },
        timing=timer.result(),
        backend_name=method,
        warnings=tuple(warnings),
    )

    # === Wrap and Return ===
    return LinearSolution(_result=result, _design=design)
