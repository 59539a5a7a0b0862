"""
Kahan (compensated) summation.

A running sum that tracks the low-order bits lost by each floating-point
addition and adds them back when the value is read. Every weight and mean
accumulator in pylinreg sums its weights through this class.

The update is Neumaier's refinement of Kahan's scheme: the lost bits are
computed from whichever operand is larger in magnitude, so an addend that
is larger than the running sum cannot wipe out the compensation. Plain
Kahan returns 0.0 for 1e16 + 1.0 - 1e16; this version returns 1.0.

References:
    Kahan, W. (1965). Further remarks on reducing truncation errors.
    Communications of the ACM, 8(1), 40.
    Neumaier, A. (1974). Rundungsfehleranalyse einiger Verfahren zur
    Summation endlicher Summen. ZAMM, 54(1), 39-51.
"""

from __future__ import annotations


class KahanAccumulator:
    """
    Compensated floating-point accumulator.

    Supports ``acc += value`` (a float or another accumulator) and
    ``float(acc)``. The exposed value is ``sum + compensation``.

    For sequences of one or two values the result equals the naive sum;
    for long sequences it is much closer to the exact sum:

        >>> acc = KahanAccumulator()
        >>> for v in (1e16, 1.0, -1e16):
        ...     acc += v
        >>> float(acc)
        1.0
    """

    __slots__ = ('_sum', '_compensation')

    def __init__(self, value: float = 0.0):
        self._sum = float(value)
        self._compensation = 0.0

    def __iadd__(self, value: float | KahanAccumulator) -> KahanAccumulator:
        value = float(value)
        total = self._sum + value
        if abs(self._sum) >= abs(value):
            self._compensation += (self._sum - total) + value
        else:
            self._compensation += (value - total) + self._sum
        self._sum = total
        return self

    def __float__(self) -> float:
        return self._sum + self._compensation

    def __bool__(self) -> bool:
        return float(self) != 0.0

    @property
    def value(self) -> float:
        """Current compensated sum."""
        return float(self)

    def __repr__(self) -> str:
        return f"KahanAccumulator({float(self)!r})"
