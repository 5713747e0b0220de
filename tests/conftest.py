"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def matrix_3x4():
    """The 3x4 matrix [1..12] used throughout the product examples."""
    return np.arange(1.0, 13.0).reshape(3, 4)


@pytest.fixture
def complex_pair(rng):
    """Two random complex128 sequences of length 6."""
    u = rng.standard_normal(6) + 1j * rng.standard_normal(6)
    v = rng.standard_normal(6) + 1j * rng.standard_normal(6)
    return u, v


@pytest.fixture
def full_rank_system(rng):
    """Overdetermined full-column-rank system with a known exact solution."""
    A = rng.standard_normal((20, 4))
    x0 = np.array([1.0, -2.0, 0.5, 3.0])
    return A, x0, A @ x0


@pytest.fixture
def gpu_available():
    """Skip if no GPU is available."""
    try:
        import torch
        has_cuda = torch.cuda.is_available()
        has_mps = hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()
        if not (has_cuda or has_mps):
            pytest.skip("No GPU available")
        return 'cuda' if has_cuda else 'mps'
    except ImportError:
        pytest.skip("PyTorch not installed")
