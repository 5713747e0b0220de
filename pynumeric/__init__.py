"""
PyNumeric: shape- and domain-dispatched dense linear algebra for Python.

One function name per operation (product, contraction, least-squares
division, constant fill, generator construction) resolves to the right
BLAS/LAPACK kernel from the operand shapes (scalar, sequence, grid) and
element domains (real/complex, single/double precision, integral).

Submodules:
    core: traits, dispatch relations, exceptions, validation
    container: the public operations
"""

__version__ = "0.1.0"

from pynumeric.container import (
    konst,
    build,
    linspace,
    as_row,
    as_column,
    flatten,
    contraction,
    mul,
    dot,
    udot,
    mxm,
    mxv,
    vxm,
    lsdiv,
    optimise_mult,
)
from pynumeric.core.traits import conj

__all__ = [
    "__version__",
    "konst",
    "build",
    "linspace",
    "as_row",
    "as_column",
    "flatten",
    "contraction",
    "mul",
    "dot",
    "udot",
    "mxm",
    "mxv",
    "vxm",
    "lsdiv",
    "optimise_mult",
    "conj",
]
