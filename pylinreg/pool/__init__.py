"""
Observation pools and their text formats.

Public API:
    Pool.from_features_file(path, use_weights=False) -> Pool
    Instance: one row, usable directly as a solver observation
"""

from pylinreg.pool.instance import Instance
from pylinreg.pool.pool import Pool

__all__ = [
    "Instance",
    "Pool",
]
