"""
Learning method name constants for pylinreg.

This module is the SINGLE SOURCE OF TRUTH for method strings.
Import from here, never use raw strings.

Usage:
    from pylinreg.core.methods import METHOD_WELFORD_LR, ALL_METHODS

    model = learn(pool, METHOD_WELFORD_LR)
"""

# Best single feature regression over raw float sums
METHOD_FAST_BSLR = 'fast_bslr'

# Best single feature regression over Kahan-compensated sums
METHOD_KAHAN_BSLR = 'kahan_bslr'

# Best single feature regression over Welford moments
METHOD_WELFORD_BSLR = 'welford_bslr'

# Best single feature regression over weight-normalized Welford moments
METHOD_NORMALIZED_WELFORD_BSLR = 'normalized_welford_bslr'

# Multi-feature OLS over raw normal equations
METHOD_FAST_LR = 'fast_lr'

# Multi-feature OLS over mean-centred normal equations
METHOD_WELFORD_LR = 'welford_lr'

# Multi-feature OLS over mean-centred, weight-normalized normal equations
METHOD_NORMALIZED_WELFORD_LR = 'normalized_welford_lr'

DEFAULT_METHOD = METHOD_WELFORD_LR

# In the order the command line lists them
ALL_METHODS = (
    METHOD_FAST_BSLR,
    METHOD_KAHAN_BSLR,
    METHOD_WELFORD_BSLR,
    METHOD_NORMALIZED_WELFORD_BSLR,
    METHOD_FAST_LR,
    METHOD_WELFORD_LR,
    METHOD_NORMALIZED_WELFORD_LR,
)

__all__ = [
    'METHOD_FAST_BSLR',
    'METHOD_KAHAN_BSLR',
    'METHOD_WELFORD_BSLR',
    'METHOD_NORMALIZED_WELFORD_BSLR',
    'METHOD_FAST_LR',
    'METHOD_WELFORD_LR',
    'METHOD_NORMALIZED_WELFORD_LR',
    'DEFAULT_METHOD',
    'ALL_METHODS',
]
