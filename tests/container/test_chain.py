"""
Tests for the product chain.

Validates:
    - chain_order finds the textbook optimal parenthesizations
    - optimise_mult matches left-to-right multiplication
    - Empty chain -> [[1.0]], singleton -> unchanged copy
    - 1x1 grids act as scalars
    - Resolution and dimension errors
"""

import numpy as np
import pytest

from pynumeric.container.chain import chain_order, optimise_mult
from pynumeric.container.products import contraction
from pynumeric.core.exceptions import DimensionError, ResolutionError
from pynumeric.core.tolerances import DOUBLE


class TestChainOrder:

    def test_three_matrices(self):
        cost, split = chain_order([10, 100, 5, 50])
        assert cost == 7500
        assert split[0][2] == 1  # (A @ B) @ C

    def test_textbook_six_matrices(self):
        cost, _ = chain_order([30, 35, 15, 5, 10, 20, 25])
        assert cost == 15125

    def test_single_matrix_costs_nothing(self):
        cost, _ = chain_order([4, 7])
        assert cost == 0


class TestOptimiseMult:

    def test_empty_is_identity(self):
        result = optimise_mult([])
        np.testing.assert_array_equal(result, [[1.0]])
        assert result.dtype == np.float64

    def test_singleton_unchanged_copy(self, matrix_3x4):
        result = optimise_mult([matrix_3x4])
        np.testing.assert_array_equal(result, matrix_3x4)
        assert result is not matrix_3x4
        result[0, 0] = -1.0
        assert matrix_3x4[0, 0] == 1.0

    def test_two(self, rng):
        A, B = rng.standard_normal((3, 4)), rng.standard_normal((4, 2))
        np.testing.assert_allclose(optimise_mult([A, B]), A @ B, rtol=DOUBLE.rtol, atol=DOUBLE.atol)

    def test_three_matches_left_fold(self, rng):
        A = rng.standard_normal((10, 100))
        B = rng.standard_normal((100, 5))
        C = rng.standard_normal((5, 50))
        expected = contraction(contraction(A, B), C)
        np.testing.assert_allclose(optimise_mult([A, B, C]), expected, rtol=1e-9, atol=1e-9)

    def test_long_chain(self, rng):
        dims = [30, 35, 15, 5, 10, 20, 25]
        grids = [rng.standard_normal((dims[i], dims[i + 1])) for i in range(6)]
        expected = grids[0]
        for g in grids[1:]:
            expected = expected @ g
        result = optimise_mult(grids)
        assert result.shape == (30, 25)
        np.testing.assert_allclose(result, expected, rtol=1e-9, atol=1e-9)

    def test_lists_accepted(self):
        np.testing.assert_array_equal(optimise_mult([[[1.0, 2.0]], [[3.0], [4.0]]]), [[11.0]])

    def test_integral_exact(self):
        A = np.arange(6).reshape(2, 3)
        B = np.arange(12).reshape(3, 4)
        C = np.arange(4).reshape(4, 1)
        np.testing.assert_array_equal(optimise_mult([A, B, C]), A @ B @ C)

    def test_mixed_integer_widths_widened(self):
        A = np.full((2, 3), 100, dtype=np.int8)
        B = np.ones((3, 2), dtype=np.int16)
        result = optimise_mult([A, B])
        assert result.dtype == np.int64
        np.testing.assert_array_equal(result, np.full((2, 2), 300))


class TestScalarAbsorption:

    def test_scalar_in_middle(self, rng):
        A, B = rng.standard_normal((3, 4)), rng.standard_normal((4, 2))
        result = optimise_mult([A, np.array([[2.0]]), B])
        np.testing.assert_allclose(result, 2.0 * (A @ B), rtol=DOUBLE.rtol, atol=DOUBLE.atol)

    def test_scalar_with_single_grid(self, matrix_3x4):
        result = optimise_mult([np.array([[3.0]]), matrix_3x4])
        np.testing.assert_array_equal(result, 3.0 * matrix_3x4)

    def test_scalars_only(self):
        result = optimise_mult([np.array([[2.0]]), np.array([[3.0]]), np.array([[0.5]])])
        np.testing.assert_array_equal(result, [[3.0]])

    def test_scalar_between_nonconformable_neighbours(self):
        """A 1x1 grid is a scalar, not a 1x1 factor in the chain."""
        A, B = np.ones((2, 3)), np.ones((3, 2))
        result = optimise_mult([A, np.array([[5.0]]), B])
        np.testing.assert_array_equal(result, np.full((2, 2), 15.0))


class TestOptimiseMultErrors:

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionError, match="optimise_mult"):
            optimise_mult([np.ones((2, 3)), np.ones((4, 2))])

    def test_sequence_rejected(self):
        with pytest.raises(ResolutionError, match=r"grids\[1\] is a sequence"):
            optimise_mult([np.ones((2, 2)), np.ones(2)])

    def test_mixed_domains(self):
        with pytest.raises(ResolutionError, match="differ in element domain"):
            optimise_mult([np.ones((2, 2)), np.ones((2, 2), dtype=np.float32)])
