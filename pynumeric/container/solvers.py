"""
Least-squares division.

lsdiv(m, b) solves m @ x ~= b in the least-squares sense, like the
backslash operator of Matlab/Octave, using an SVD-based kernel:

    (grid, sequence) -> sequence   one right-hand side
    (grid, grid)     -> grid       one right-hand side per column

The element domain must be a field (real or complex floating point);
integral systems fail to resolve and never reach a kernel.
"""

import warnings
from typing import Any

from numpy.typing import ArrayLike, NDArray

from pynumeric.core.capabilities import CAPABILITY_FIELD
from pynumeric.core.dispatch import DispatchRelation
from pynumeric.core.exceptions import RankDeficiencyWarning, SingularMatrixError
from pynumeric.core.precision import condition_number, default_rcond
from pynumeric.core.protocols import Kernels
from pynumeric.core.traits import SHAPE_GRID, SHAPE_SEQUENCE
from pynumeric.core.validation import check_finite
from pynumeric.container.backends import BackendChoice, select_kernels
from pynumeric.container.construction import as_column, flatten


_least_squares = DispatchRelation(
    'lsdiv',
    select_kernels,
    requires=frozenset({CAPABILITY_FIELD}),
    operand_names=('m', 'b'),
)


def _solve(
    kernels: Kernels,
    m: NDArray[Any],
    b: NDArray[Any],
    check_rank: bool,
) -> NDArray[Any]:
    """
    Minimum-norm least-squares solve with rank diagnostics.

    Raises:
        ValidationError: If m or b contain NaN/Inf
        SingularMatrixError: If m is rank-deficient and check_rank=True
    """
    check_finite(m, 'lsdiv: m')
    check_finite(b, 'lsdiv: b')

    x, rank, singular_values = kernels.lstsq(m, b, default_rcond(m.shape, m.dtype))

    expected_rank = min(m.shape)
    if rank < expected_rank:
        message = (
            f"lsdiv: system matrix is rank-deficient: rank={rank}, "
            f"expected={expected_rank}"
        )
        if check_rank:
            raise SingularMatrixError(
                f"{message}.",
                matrix_name='m',
                condition_number=condition_number(singular_values),
                rank=rank,
                expected_rank=expected_rank,
            )
        warnings.warn(
            f"{message}; returning the minimum-norm solution",
            RankDeficiencyWarning,
        )
    return x


@_least_squares.instance(SHAPE_GRID, SHAPE_SEQUENCE, SHAPE_SEQUENCE)
def _solve_sequence(
    kernels: Kernels,
    m: NDArray[Any],
    v: NDArray[Any],
    check_rank: bool,
) -> NDArray[Any]:
    return flatten(_solve(kernels, m, as_column(v), check_rank))


@_least_squares.instance(SHAPE_GRID, SHAPE_GRID, SHAPE_GRID)
def _solve_grid(
    kernels: Kernels,
    m: NDArray[Any],
    b: NDArray[Any],
    check_rank: bool,
) -> NDArray[Any]:
    return _solve(kernels, m, b, check_rank)


def lsdiv(
    m: ArrayLike,
    b: ArrayLike,
    *,
    check_rank: bool = False,
    backend: BackendChoice = 'cpu',
) -> NDArray[Any]:
    """
    Least-squares solution of m @ x = b (Matlab/Octave backslash).

    Overdetermined systems give the least-squares fit, underdetermined
    ones the minimum-norm solution. The result has the shape kind of b:
    a sequence for a sequence, a grid (one column per right-hand side)
    for a grid.

    Args:
        m: System matrix (rows x cols), real or complex floating point
        b: Right-hand side: sequence of length rows, or rows x k grid
        check_rank: If True, raise SingularMatrixError when m is
            numerically rank-deficient instead of warning
        backend: 'cpu' (default), 'gpu' or 'auto'

    Returns:
        Solution x: sequence of length cols, or cols x k grid

    Raises:
        ResolutionError: Integral domain, mixed domains, or m not a grid
        DimensionError: rows of m differ from rows of b
        ValidationError: NaN/Inf in m or b
        SingularMatrixError: Rank-deficient m with check_rank=True
        NumericalError: SVD failed to converge

    Warns:
        RankDeficiencyWarning: Rank-deficient m with check_rank=False

    Example:
        >>> A = np.array([[1.0, 0.0], [0.0, 2.0], [0.0, 0.0]])
        >>> lsdiv(A, np.array([1.0, 4.0, 0.0]))
        array([1., 2.])
    """
    return _least_squares(m, b, backend=backend, check_rank=check_rank)
