"""
Tests for least-squares division.

Validates:
    - Recovery of a known solution for sequence and grid right-hand sides
    - Agreement with np.linalg.lstsq on noisy overdetermined systems
    - Minimum-norm solutions for underdetermined and rank-deficient systems
    - RankDeficiencyWarning vs SingularMatrixError (check_rank)
    - Integral systems fail to resolve; dimension and finiteness errors
"""

import warnings

import numpy as np
import pytest

from pynumeric.container.backends.cpu import CPUKernels
from pynumeric.container.products import mul
from pynumeric.container.solvers import lsdiv
from pynumeric.core.exceptions import (
    DimensionError,
    RankDeficiencyWarning,
    ResolutionError,
    SingularMatrixError,
    ValidationError,
)
from pynumeric.core.tolerances import DOUBLE, SINGLE


# ═══════════════════════════════════════════════════════════════════════
# Full-rank systems
# ═══════════════════════════════════════════════════════════════════════


class TestFullRank:

    def test_recovers_known_solution(self, full_rank_system):
        A, x0, b = full_rank_system
        np.testing.assert_allclose(lsdiv(A, b), x0, rtol=DOUBLE.rtol, atol=DOUBLE.atol)

    def test_right_side_built_with_mul(self, full_rank_system):
        A, x0, _ = full_rank_system
        b = mul(A, x0)
        np.testing.assert_allclose(lsdiv(A, b), x0, rtol=DOUBLE.rtol, atol=DOUBLE.atol)

    def test_sequence_result_shape(self, full_rank_system):
        A, _, b = full_rank_system
        assert lsdiv(A, b).shape == (4,)

    def test_grid_right_side(self, rng):
        A = rng.standard_normal((10, 3))
        X0 = rng.standard_normal((3, 4))
        result = lsdiv(A, A @ X0)
        assert result.shape == (3, 4)
        np.testing.assert_allclose(result, X0, rtol=DOUBLE.rtol, atol=DOUBLE.atol)

    def test_grid_columns_match_sequence_solves(self, rng):
        A = rng.standard_normal((8, 3))
        B = rng.standard_normal((8, 2))
        X = lsdiv(A, B)
        for j in range(2):
            np.testing.assert_allclose(X[:, j], lsdiv(A, B[:, j]), rtol=DOUBLE.rtol, atol=DOUBLE.atol)

    def test_noisy_matches_numpy(self, rng):
        A = rng.standard_normal((50, 3))
        b = A @ np.array([1.0, 2.0, 3.0]) + rng.normal(0, 0.1, 50)
        expected, _, _, _ = np.linalg.lstsq(A, b, rcond=None)
        np.testing.assert_allclose(lsdiv(A, b), expected, rtol=DOUBLE.rtol)

    def test_square_system(self):
        A = np.array([[2.0, 1.0], [1.0, 3.0]])
        np.testing.assert_allclose(lsdiv(A, np.array([3.0, 5.0])), [0.8, 1.4])

    def test_documented_example(self):
        A = np.array([[1.0, 0.0], [0.0, 2.0], [0.0, 0.0]])
        np.testing.assert_allclose(lsdiv(A, np.array([1.0, 4.0, 0.0])), [1.0, 2.0])

    def test_complex_system(self, rng):
        A = rng.standard_normal((6, 3)) + 1j * rng.standard_normal((6, 3))
        x0 = np.array([1 + 1j, -2.0, 0.5j])
        result = lsdiv(A, A @ x0)
        assert result.dtype == np.complex128
        np.testing.assert_allclose(result, x0, rtol=DOUBLE.rtol, atol=DOUBLE.atol)

    def test_float32_preserved(self, rng):
        A = rng.standard_normal((10, 3)).astype(np.float32)
        x0 = np.array([1.0, -1.0, 2.0], dtype=np.float32)
        result = lsdiv(A, A @ x0)
        assert result.dtype == np.float32
        np.testing.assert_allclose(result, x0, rtol=SINGLE.rtol, atol=SINGLE.atol)

    def test_full_rank_does_not_warn(self, full_rank_system):
        A, _, b = full_rank_system
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            lsdiv(A, b)

    def test_inputs_not_modified(self, full_rank_system):
        A, _, b = full_rank_system
        A_copy, b_copy = A.copy(), b.copy()
        lsdiv(A, b)
        np.testing.assert_array_equal(A, A_copy)
        np.testing.assert_array_equal(b, b_copy)


# ═══════════════════════════════════════════════════════════════════════
# Underdetermined and rank-deficient systems
# ═══════════════════════════════════════════════════════════════════════


class TestMinimumNorm:

    def test_underdetermined_minimum_norm(self, rng):
        A = rng.standard_normal((2, 4))
        b = np.array([1.0, -1.0])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            x = lsdiv(A, b)
        np.testing.assert_allclose(A @ x, b, rtol=DOUBLE.rtol, atol=DOUBLE.atol)
        np.testing.assert_allclose(x, np.linalg.pinv(A) @ b, rtol=1e-8, atol=1e-10)

    def test_rank_deficient_warns(self):
        A = np.ones((3, 2))
        with pytest.warns(RankDeficiencyWarning, match="rank=1, expected=2"):
            x = lsdiv(A, np.array([2.0, 2.0, 2.0]))
        np.testing.assert_allclose(x, [1.0, 1.0])

    def test_rank_deficient_check_rank_raises(self):
        A = np.ones((3, 2))
        with pytest.raises(SingularMatrixError) as exc:
            lsdiv(A, np.array([2.0, 2.0, 2.0]), check_rank=True)
        assert exc.value.rank == 1
        assert exc.value.expected_rank == 2
        assert exc.value.matrix_name == 'm'
        assert exc.value.condition_number > 1e10


# ═══════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════


class TestErrors:

    def test_integral_fails_to_resolve(self, monkeypatch):
        def forbidden(self, m, b, rcond):
            raise AssertionError("kernel must not run")

        monkeypatch.setattr(CPUKernels, 'lstsq', forbidden)
        with pytest.raises(ResolutionError, match="lacks required capabilities"):
            lsdiv(np.eye(2, dtype=np.int64), np.array([1, 2]))

    def test_sequence_system_matrix_fails_to_resolve(self):
        with pytest.raises(ResolutionError, match=r"no instance for \(sequence, sequence\)"):
            lsdiv(np.ones(3), np.ones(3))

    def test_mixed_domains(self):
        with pytest.raises(ResolutionError, match="m=real64, b=complex128"):
            lsdiv(np.eye(2), np.ones(2, dtype=np.complex128))

    def test_row_mismatch(self):
        with pytest.raises(DimensionError, match="lstsq"):
            lsdiv(np.ones((4, 2)), np.ones(3))

    def test_nan_rejected(self):
        A = np.eye(2)
        A[0, 1] = np.nan
        with pytest.raises(ValidationError, match="lsdiv: m"):
            lsdiv(A, np.ones(2))

    def test_inf_in_right_side_rejected(self):
        with pytest.raises(ValidationError, match="lsdiv: b"):
            lsdiv(np.eye(2), np.array([1.0, np.inf]))

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            lsdiv(np.eye(2), np.ones(2), backend='tpu')
