"""
Packed (linearized) symmetric matrix storage.

A symmetric n x n matrix is stored as its upper triangle, row-major, in a
flat float64 array of length n(n+1)/2:

    row 0: (0,0) (0,1) ... (0,n-1)
    row 1:       (1,1) ... (1,n-1)
    ...
    row n-1:                (n-1,n-1)

Read column-major this is also the lower triangle, which is the order the
LDL^T decomposition consumes it in. The normal-equation solvers only ever
add to these arrays, so the full square is never materialized on the hot
path.
"""

from __future__ import annotations

from functools import lru_cache
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.exceptions import DimensionError


def packed_size(n: int) -> int:
    """Number of stored entries for an n x n symmetric matrix."""
    return n * (n + 1) // 2


def packed_index(row: int, col: int, n: int) -> int:
    """
    Flat position of entry (row, col) of an n x n packed matrix.

    The arguments may be given in either order.
    """
    if row > col:
        row, col = col, row
    return row * n - row * (row - 1) // 2 + (col - row)


@lru_cache(maxsize=64)
def triangle_indices(n: int) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    """
    Row and column indices of the packed entries, in storage order.

    Cached per size; the returned arrays are read-only.
    """
    rows, cols = np.triu_indices(n)
    rows.setflags(write=False)
    cols.setflags(write=False)
    return rows, cols


def add_outer_product(
    packed: NDArray[np.float64],
    left: NDArray[np.float64],
    right: NDArray[np.float64],
) -> None:
    """
    In place: packed[(i, j)] += left[i] * right[j] for every stored i <= j.

    With left == right * weight this accumulates the weighted Gram matrix
    of a feature vector. Callers scale one side, not the result.
    """
    rows, cols = triangle_indices(len(left))
    packed += left[rows] * right[cols]


def unpack(packed: NDArray[np.float64], n: int) -> NDArray[np.float64]:
    """Expand a packed matrix into a dense symmetric n x n array."""
    if len(packed) != packed_size(n):
        raise DimensionError(
            f"packed: expected {packed_size(n)} entries for n={n}, got {len(packed)}",
            expected=packed_size(n),
            actual=len(packed),
        )
    rows, cols = triangle_indices(n)
    dense = np.zeros((n, n), dtype=np.float64)
    dense[rows, cols] = packed
    dense[cols, rows] = packed
    return dense


def pack(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    """Pack the upper triangle of a square matrix."""
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise DimensionError(f"matrix: expected a square 2D array, got shape {matrix.shape}")
    rows, cols = triangle_indices(matrix.shape[0])
    return matrix[rows, cols].copy()


def quadratic_form(packed: NDArray[np.float64], x: NDArray[np.float64]) -> float:
    """
    xᵀ M x for a packed symmetric M.

    Diagonal entries count once, off-diagonal entries twice.
    """
    rows, cols = triangle_indices(len(x))
    terms = packed * x[rows] * x[cols]
    return float(2.0 * terms.sum() - terms[rows == cols].sum())
