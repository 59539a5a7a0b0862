"""
Linear algebra kernels for pylinreg.

All functions work on packed symmetric matrices (upper triangle,
row-major) as accumulated by the normal-equation solvers.

Submodules:
    packed: Packed storage layout and in-place updates
    ldl: LDL^T decomposition with automatic diagonal regularization
"""

from pylinreg.core.compute.linalg.packed import (
    packed_size,
    packed_index,
    triangle_indices,
    add_outer_product,
    pack,
    unpack,
    quadratic_form,
)
from pylinreg.core.compute.linalg.ldl import (
    LDLResult,
    LDL_THRESHOLD,
    LDL_INITIAL_REGULARIZATION,
    ldl_decompose,
    ldl_substitute,
    ldl_solve,
)

__all__ = [
    # Packed storage
    "packed_size",
    "packed_index",
    "triangle_indices",
    "add_outer_product",
    "pack",
    "unpack",
    "quadratic_form",
    # LDL^T
    "LDLResult",
    "LDL_THRESHOLD",
    "LDL_INITIAL_REGULARIZATION",
    "ldl_decompose",
    "ldl_substitute",
    "ldl_solve",
]
