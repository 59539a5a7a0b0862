"""
Generic result container for pylinreg computations.

The Result class provides a standardized envelope around a parameter
payload. It carries timing and non-fatal diagnostics next to the payload
so that callers (the command line, cross-validation) can report them
without the numeric code having to print anything.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, feature count, weights)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a solver run.

    Type Parameters:
        P: The parameter payload type

    Attributes:
        params: Parameters (model, sum of squared errors, ...)
        info: Structured metadata (method, n_features, sum_weights)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the solver method that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LinearParams(model=model, sum_squared_errors=0.5, ...),
        ...     info={'method': 'welford_lr', 'n_features': 3},
        ...     timing={'total_seconds': 0.01, 'add': 0.009, 'solve': 0.001},
        ...     backend_name='welford_lr'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
