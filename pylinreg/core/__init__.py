"""
Core infrastructure for pylinreg.

This module provides shared abstractions and numeric utilities used by
the regression solvers and the evaluation tools built on them.

Key components:
    protocols: Observation and IncrementalSolver protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators for the array and file boundaries
    methods: Learning method name constants
    compute: Kahan/Welford accumulators, packed LDL^T solver, timing
"""

from pylinreg.core.protocols import Observation, IncrementalSolver
from pylinreg.core.result import Result
from pylinreg.core.exceptions import (
    PyLinRegError,
    ValidationError,
    DimensionError,
    FormatError,
    ModelFormatError,
)

__all__ = [
    # Protocols
    "Observation",
    "IncrementalSolver",
    # Result
    "Result",
    # Exceptions
    "PyLinRegError",
    "ValidationError",
    "DimensionError",
    "FormatError",
    "ModelFormatError",
]
