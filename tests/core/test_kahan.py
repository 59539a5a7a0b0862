"""
Tests for compensated summation.
"""

import math

import numpy as np
import pytest

from pylinreg.core.compute.kahan import KahanAccumulator


class TestKahanAccumulator:

    def test_starts_at_zero(self):
        acc = KahanAccumulator()
        assert float(acc) == 0.0
        assert not acc

    def test_initial_value(self):
        assert float(KahanAccumulator(2.5)) == 2.5

    def test_recovers_absorbed_addend(self):
        acc = KahanAccumulator()
        for value in (1e16, 1.0, -1e16):
            acc += value
        assert float(acc) == 1.0

    @pytest.mark.parametrize("values", [(0.1,), (0.1, 0.2), (1e300, -1e-300), (3.0, -3.0)])
    def test_short_sequences_equal_naive_sum(self, values):
        acc = KahanAccumulator()
        for value in values:
            acc += value
        assert float(acc) == sum(values)

    def test_many_small_values(self):
        acc = KahanAccumulator()
        naive = 0.0
        for _ in range(100_000):
            acc += 0.1
            naive += 0.1
        exact = math.fsum([0.1] * 100_000)
        assert abs(float(acc) - exact) <= abs(naive - exact)
        assert float(acc) == pytest.approx(exact, rel=1e-15)

    def test_random_sequence_matches_fsum(self, rng):
        values = rng.standard_normal(10_000) * 10.0 ** rng.integers(-8, 8, size=10_000)
        acc = KahanAccumulator()
        for value in values:
            acc += value
        assert float(acc) == pytest.approx(math.fsum(values), rel=1e-12, abs=1e-12)

    def test_add_accumulator(self):
        acc = KahanAccumulator(1.0)
        acc += KahanAccumulator(2.0)
        assert acc.value == 3.0

    def test_iadd_returns_same_object(self):
        acc = KahanAccumulator()
        same = acc
        acc += 1.0
        assert acc is same

    def test_repr(self):
        assert repr(KahanAccumulator(1.5)) == "KahanAccumulator(1.5)"

    def test_numpy_scalars(self):
        acc = KahanAccumulator()
        acc += np.float64(0.5)
        acc += np.float32(0.25)
        assert float(acc) == 0.75
