"""
Numerical precision constants and utilities.

Provides machine epsilon and the singular-value cutoffs used by the
least-squares kernels.
"""

import numpy as np
from numpy.typing import NDArray, DTypeLike
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = np.finfo(np.float64).eps  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = np.finfo(np.float32).eps  # ~1.19e-7


def machine_epsilon(dtype: DTypeLike = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Complex dtypes report the epsilon of their real component.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def default_rcond(shape: tuple[int, int], dtype: DTypeLike) -> float:
    """
    Relative singular-value cutoff for rank determination.

    Uses max(rows, cols) * eps, the LAPACK/NumPy convention.
    """
    return max(max(shape), 1) * machine_epsilon(dtype)


def condition_number(singular_values: NDArray[np.floating[Any]]) -> float:
    """
    Condition number from singular values (descending order).

    Args:
        singular_values: Singular values as returned by an SVD

    Returns:
        Ratio of largest to smallest singular value.
        Returns inf if the matrix is singular or empty.
    """
    if len(singular_values) == 0 or singular_values[-1] == 0:
        return float(np.inf)
    return float(singular_values[0] / singular_values[-1])
