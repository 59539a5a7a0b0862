"""
pylinreg: incremental, numerically stable linear regression.

Ordinary least squares fitted from a stream of weighted observations,
with competing accumulation strategies (raw sums, Kahan-compensated
sums, Welford online moments) and an LDL^T solver with adaptive
regularization.

Submodules:
    regression: Solvers, LinearModel, fit() and learn()
    pool: Features files and export formats
    evaluation: Metrics, cross-validation, injure research
"""

__version__ = "0.1.0"

from pylinreg import regression
from pylinreg.regression import fit, learn, LinearModel

__all__ = [
    "__version__",
    "regression",
    "fit",
    "learn",
    "LinearModel",
]
