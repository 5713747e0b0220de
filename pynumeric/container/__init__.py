"""
Generic operations on sequences (1-D) and grids (2-D).

Public API:
    contraction(a, b)        Hermitian-aware dot / matvec / vecmat / matmul
    mul(a, b)                plain algebraic matvec / vecmat / matmul
    dot, udot, mxm, mxv, vxm single-kernel products
    lsdiv(m, b)              SVD least squares, sequence or grid right side
    optimise_mult(grids)     product chain in the cheapest order
    konst, build, linspace   construction
    as_row, as_column, flatten

Every product and solve takes backend='cpu' | 'gpu' | 'auto'.

Example:
    >>> from pynumeric.container import contraction, lsdiv, linspace
    >>> contraction(np.eye(2), np.array([1.0, 2.0]))
    array([1., 2.])
"""

from pynumeric.container.construction import (
    konst,
    build,
    linspace,
    as_row,
    as_column,
    flatten,
)
from pynumeric.container.products import (
    contraction,
    mul,
    dot,
    udot,
    mxm,
    mxv,
    vxm,
)
from pynumeric.container.solvers import lsdiv
from pynumeric.container.chain import optimise_mult

__all__ = [
    # Construction
    "konst",
    "build",
    "linspace",
    "as_row",
    "as_column",
    "flatten",
    # Products
    "contraction",
    "mul",
    "dot",
    "udot",
    "mxm",
    "mxv",
    "vxm",
    # Least squares
    "lsdiv",
    # Product chain
    "optimise_mult",
]
