"""
Numeric building blocks shared by all solvers.

Submodules:
    kahan: Compensated summation
    welford: Online weighted mean, deviation and co-deviation
    linalg: Packed symmetric storage and the LDL^T solver
    timing: Wall-clock timing of learning runs
"""

from pylinreg.core.compute.kahan import KahanAccumulator
from pylinreg.core.compute.welford import (
    MeanCalculator,
    DeviationCalculator,
    CovariationCalculator,
)
from pylinreg.core.compute.timing import Timer, timed

__all__ = [
    "KahanAccumulator",
    "MeanCalculator",
    "DeviationCalculator",
    "CovariationCalculator",
    "Timer",
    "timed",
]
