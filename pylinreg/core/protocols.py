"""
Core protocols for pylinreg.

These define structural interfaces that solver and data implementations
must satisfy. We use Protocol (structural typing) rather than ABC (nominal
typing) so that the closed set of solver variants can share one contract
without a common base class.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Streaming: observations are consumed one at a time, never stored
"""

from typing import Protocol, Sequence, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from pylinreg.regression.model import LinearModel


@runtime_checkable
class Observation(Protocol):
    """
    One weighted observation: a feature vector, a goal and a weight.

    Anything with these three attributes can be fed to a solver
    (pool instances, named tuples, dataclasses). The feature vector length
    must stay the same for every observation given to one solver.
    """

    @property
    def features(self) -> Sequence[float]:
        ...

    @property
    def goal(self) -> float:
        ...

    @property
    def weight(self) -> float:
        ...


@runtime_checkable
class IncrementalSolver(Protocol):
    """
    Protocol for incremental linear model solvers.

    Lifecycle: constructed empty, repeatedly add()-ed, then solve()-d zero
    or more times. solve() and sum_squared_errors() never mutate the
    accumulated state, so they can be interleaved with further add() calls.

    The order of observations affects only floating-point rounding, never
    the mathematical result.
    """

    name: str

    def add(self, features: Sequence[float], goal: float, weight: float = 1.0) -> None:
        """Ingest one observation."""
        ...

    def solve(self) -> 'LinearModel':
        """Build a fresh model from the current accumulated state."""
        ...

    def sum_squared_errors(self) -> float:
        """
        Weighted residual sum of squares of the model solve() would return,
        computed from sufficient statistics without materializing the model.
        """
        ...
