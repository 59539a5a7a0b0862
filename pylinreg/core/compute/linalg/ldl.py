"""
LDL^T solver for packed symmetric systems.

Solves M x = b where M is symmetric positive semi-definite and stored
packed (see packed.py). This is how the normal-equation solvers turn
their accumulated sufficient statistics into coefficients.

M is factored as L D Lᵀ with L unit lower triangular and D diagonal
(Cholesky without square roots). A pivot |d_i| below LDL_THRESHOLD
aborts the factorization, which is then retried with a ridge added to
every diagonal entry: first LDL_INITIAL_REGULARIZATION, doubling on
each further failure. Singular inputs (constant, duplicated or linearly
dependent features) therefore always produce a finite solution; the
ridge that was needed is reported on LDLResult.regularization.

The loop terminates for any finite M: the ridge grows geometrically until
it dominates every pivot.

References:
    Golub, G. H. & Van Loan, C. F. (2013). Matrix Computations, 4th ed.
    Section 4.1 (LDLᵀ).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pylinreg.core.exceptions import DimensionError
from pylinreg.core.compute.linalg.packed import packed_size

# Pivots smaller than this in absolute value trigger regularization
LDL_THRESHOLD = 1e-5

# First ridge added to the diagonal; doubled on every failed attempt
LDL_INITIAL_REGULARIZATION = 1e-5


@dataclass(frozen=True)
class LDLResult:
    """
    Result of an LDL^T decomposition.

    Attributes:
        lower: Unit lower triangular factor L (n x n)
        diagonal: Diagonal of D (n,)
        regularization: Ridge added to the diagonal of M (0.0 if none)
        attempts: Number of factorizations tried
    """
    lower: NDArray[np.floating[Any]]
    diagonal: NDArray[np.floating[Any]]
    regularization: float
    attempts: int

    @property
    def regularized(self) -> bool:
        return self.regularization > 0.0


def _try_decompose(
    packed: NDArray[np.float64],
    n: int,
    threshold: float,
    regularization: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]] | None:
    """One factorization attempt; None if a pivot falls below threshold."""
    lower = np.eye(n, dtype=np.float64)
    diagonal = np.zeros(n, dtype=np.float64)

    position = 0
    for row in range(n):
        row_factors = lower[row, :row]
        scaled = row_factors * diagonal[:row]

        pivot = packed[position] + regularization - float(row_factors @ scaled)
        if abs(pivot) < threshold:
            return None
        diagonal[row] = pivot
        position += 1

        # Packed row `row` continues with (row, row+1) ... (row, n-1)
        tail = n - row - 1
        if tail:
            below = packed[position:position + tail] - lower[row + 1:, :row] @ scaled
            lower[row + 1:, row] = below / pivot
            position += tail

    return lower, diagonal


def ldl_decompose(
    packed: NDArray[np.floating[Any]],
    n: int,
    *,
    threshold: float = LDL_THRESHOLD,
    initial_regularization: float = LDL_INITIAL_REGULARIZATION,
) -> LDLResult:
    """
    Factor a packed symmetric matrix as L D Lᵀ, regularizing as needed.

    Args:
        packed: Upper triangle of M, row-major, length n(n+1)/2
        n: Matrix dimension
        threshold: Minimum acceptable |pivot|
        initial_regularization: First ridge tried after a failure

    Returns:
        LDLResult with the factors of M + regularization·I

    Raises:
        DimensionError: If packed does not hold n(n+1)/2 entries
    """
    packed = np.asarray(packed, dtype=np.float64)
    if len(packed) != packed_size(n):
        raise DimensionError(
            f"packed: expected {packed_size(n)} entries for n={n}, got {len(packed)}",
            expected=packed_size(n),
            actual=len(packed),
        )

    regularization = 0.0
    attempts = 1
    factors = _try_decompose(packed, n, threshold, regularization)
    while factors is None:
        regularization = 2.0 * regularization if regularization else initial_regularization
        attempts += 1
        factors = _try_decompose(packed, n, threshold, regularization)

    lower, diagonal = factors
    return LDLResult(
        lower=lower,
        diagonal=diagonal,
        regularization=regularization,
        attempts=attempts,
    )


def ldl_substitute(
    decomposition: LDLResult,
    vector: NDArray[np.floating[Any]],
) -> NDArray[np.float64]:
    """
    Solve L D Lᵀ x = b given the factors.

    Forward substitution through L, scaling by D, back substitution
    through Lᵀ.
    """
    vector = np.asarray(vector, dtype=np.float64)
    if len(vector) == 0:
        return np.zeros(0, dtype=np.float64)

    lower = decomposition.lower
    forward = solve_triangular(
        lower, vector, lower=True, unit_diagonal=True, check_finite=False
    )
    scaled = forward / decomposition.diagonal
    return solve_triangular(
        lower.T, scaled, lower=False, unit_diagonal=True, check_finite=False
    )


def ldl_solve(
    packed: NDArray[np.floating[Any]],
    vector: NDArray[np.floating[Any]],
) -> NDArray[np.float64]:
    """
    Solve M x = b for a packed symmetric M.

    Deterministic for identical inputs. An empty system yields an empty
    solution.

    Args:
        packed: Upper triangle of M, row-major, length n(n+1)/2
        vector: Right-hand side b, length n

    Returns:
        Solution x of (M + regularization·I) x = b, length n
    """
    vector = np.asarray(vector, dtype=np.float64)
    decomposition = ldl_decompose(packed, len(vector))
    return ldl_substitute(decomposition, vector)
