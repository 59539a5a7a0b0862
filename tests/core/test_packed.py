"""
Tests for packed symmetric matrix storage.
"""

import numpy as np
import pytest

from pylinreg.core.compute.linalg.packed import (
    add_outer_product,
    pack,
    packed_index,
    packed_size,
    quadratic_form,
    triangle_indices,
    unpack,
)
from pylinreg.core.exceptions import DimensionError


class TestLayout:

    @pytest.mark.parametrize("n, size", [(0, 0), (1, 1), (2, 3), (3, 6), (10, 55)])
    def test_packed_size(self, n, size):
        assert packed_size(n) == size

    def test_index_is_row_major_upper_triangle(self):
        n = 4
        rows, cols = triangle_indices(n)
        for position, (row, col) in enumerate(zip(rows, cols)):
            assert packed_index(row, col, n) == position

    def test_index_symmetric(self):
        assert packed_index(3, 1, 5) == packed_index(1, 3, 5)

    def test_triangle_indices_read_only(self):
        rows, _ = triangle_indices(3)
        with pytest.raises(ValueError):
            rows[0] = 5


class TestPackUnpack:

    def test_unpack_pack(self, rng):
        a = rng.standard_normal((5, 5))
        symmetric = a + a.T
        np.testing.assert_array_equal(unpack(pack(symmetric), 5), symmetric)

    def test_unpack_wrong_size(self):
        with pytest.raises(DimensionError):
            unpack(np.zeros(5), 3)

    def test_pack_rejects_non_square(self):
        with pytest.raises(DimensionError):
            pack(np.zeros((2, 3)))


class TestUpdates:

    def test_add_outer_product_accumulates_gram(self, rng):
        X = rng.standard_normal((50, 4))
        w = rng.uniform(0.5, 2.0, size=50)
        packed = np.zeros(packed_size(4))
        for row, weight in zip(X, w):
            add_outer_product(packed, weight * row, row)
        np.testing.assert_allclose(unpack(packed, 4), X.T @ (w[:, None] * X), rtol=1e-12)

    def test_quadratic_form(self, rng):
        a = rng.standard_normal((4, 4))
        matrix = a @ a.T
        x = rng.standard_normal(4)
        assert quadratic_form(pack(matrix), x) == pytest.approx(x @ matrix @ x, rel=1e-12)

    def test_quadratic_form_empty(self):
        assert quadratic_form(np.zeros(0), np.zeros(0)) == 0.0
