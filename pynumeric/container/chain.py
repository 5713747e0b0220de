"""
Product chain: multiply a list of grids into one.

The association order is chosen by the classic matrix-chain dynamic
program so that the number of scalar multiplications is minimal. Any
order gives the same product; only the cost differs.

1x1 grids behave as scalars: they are taken out of the chain and applied
as a scale factor at the end. This makes [[1]] the identity of the chain,
which is what an empty chain returns.
"""

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumeric.core.exceptions import ResolutionError
from pynumeric.core.protocols import Kernels
from pynumeric.core.traits import INTEGRAL, SHAPE_GRID, as_integral, domain_of, shape_of
from pynumeric.core.validation import check_array, check_conformable
from pynumeric.container.backends import BackendChoice, select_kernels


def chain_order(dims: Sequence[int]) -> tuple[int, list[list[int]]]:
    """
    Optimal parenthesization of a matrix chain.

    Matrix i has shape (dims[i], dims[i + 1]).

    Args:
        dims: Chain dimensions, length = number of matrices + 1

    Returns:
        (minimal scalar multiplication count, split table) where
        split[i][j] = k means the product of matrices i..j is computed
        as (i..k) @ (k+1..j)
    """
    n = len(dims) - 1
    cost = [[0] * n for _ in range(n)]
    split = [[0] * n for _ in range(n)]

    for length in range(1, n):
        for i in range(n - length):
            j = i + length
            best_cost = None
            for k in range(i, j):
                c = cost[i][k] + cost[k + 1][j] + dims[i] * dims[k + 1] * dims[j + 1]
                if best_cost is None or c < best_cost:
                    best_cost = c
                    split[i][j] = k
            cost[i][j] = best_cost

    return (cost[0][n - 1] if n > 0 else 0), split


def _multiply(
    kernels: Kernels,
    factors: list[NDArray[Any]],
    split: list[list[int]],
    i: int,
    j: int,
) -> NDArray[Any]:
    if i == j:
        return factors[i]
    k = split[i][j]
    return kernels.mxm(
        _multiply(kernels, factors, split, i, k),
        _multiply(kernels, factors, split, k + 1, j),
    )


def optimise_mult(
    grids: Sequence[ArrayLike],
    *,
    backend: BackendChoice = 'cpu',
) -> NDArray[Any]:
    """
    Product of a chain of grids in the cheapest association order.

    Args:
        grids: Grids to multiply, left to right
        backend: 'cpu' (default), 'gpu' or 'auto'

    Returns:
        The product grid. An empty chain gives [[1.0]]; a single grid is
        returned as an unchanged copy.

    Raises:
        ResolutionError: A non-grid operand, or grids from different domains
        DimensionError: Adjacent grids (ignoring 1x1 grids) not conformable

    Example:
        >>> A, B, C = np.ones((10, 100)), np.ones((100, 5)), np.ones((5, 50))
        >>> optimise_mult([A, B, C]).shape   # computed as (A @ B) @ C
        (10, 50)
    """
    arrays = [check_array(g, f"optimise_mult: grids[{i}]") for i, g in enumerate(grids)]

    if not arrays:
        return np.ones((1, 1))

    for i, arr in enumerate(arrays):
        if shape_of(arr) != SHAPE_GRID:
            raise ResolutionError(
                f"optimise_mult: grids[{i}] is a {shape_of(arr)}, expected a grid",
                relation='optimise_mult',
                shapes=(shape_of(arr),),
            )

    domains = [domain_of(arr) for arr in arrays]
    if len(set(domains)) > 1:
        raise ResolutionError(
            f"optimise_mult: grids differ in element domain "
            f"({', '.join(d.name for d in domains)})",
            relation='optimise_mult',
            domains=tuple(d.name for d in domains),
        )

    if domains[0] is INTEGRAL:
        arrays = [as_integral(arr, f"optimise_mult: grids[{i}]") for i, arr in enumerate(arrays)]

    if len(arrays) == 1:
        return arrays[0].copy()

    scalars = [arr for arr in arrays if arr.shape == (1, 1)]
    factors = [arr for arr in arrays if arr.shape != (1, 1)]

    for left, right in zip(factors, factors[1:]):
        check_conformable(left.shape, right.shape, (left.shape[1], right.shape[0]), 'optimise_mult')

    if not factors:
        result = scalars[0].copy()
        for s in scalars[1:]:
            result = result * s
        return result

    kernels = select_kernels(backend, domains[0])
    dims = [f.shape[0] for f in factors] + [factors[-1].shape[1]]
    _, split = chain_order(dims)
    result = _multiply(kernels, factors, split, 0, len(factors) - 1)

    # a lone factor always has at least one scalar after it, so result is never an input
    for s in scalars:
        result = result * s[0, 0]
    return result
