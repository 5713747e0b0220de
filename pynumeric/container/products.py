"""
Product relations.

Two relations with different semantics, kept as separate tables so a
caller chooses the semantics by choosing the function:

contraction: Hermitian-aware generalized product
    (sequence, sequence) -> scalar     conj(u) . v
    (grid,     sequence) -> sequence   matrix-vector
    (sequence, grid)     -> sequence   conj(v) as a row, times the grid
    (grid,     grid)     -> grid       matrix-matrix

mul: plain algebraic product, no conjugation, no scalar results
    (grid,     grid)     -> grid       matrix-matrix
    (grid,     sequence) -> sequence   via a one-column grid
    (sequence, grid)     -> sequence   via a one-row grid

Both relations share the matrix-matrix kernel function, so they cannot
drift apart on the case where they overlap.

The one-row relations dot, udot, mxm, mxv and vxm call a single kernel
directly.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pynumeric.core.dispatch import DispatchRelation
from pynumeric.core.protocols import Kernels
from pynumeric.core.traits import SHAPE_GRID, SHAPE_SCALAR, SHAPE_SEQUENCE, conj
from pynumeric.container.backends import select_kernels
from pynumeric.container.construction import as_column, as_row, flatten


# === Kernel functions ===

def _conj_dot(kernels: Kernels, u: NDArray[Any], v: NDArray[Any]) -> np.generic:
    return kernels.udot(conj(u), v)


def _plain_dot(kernels: Kernels, u: NDArray[Any], v: NDArray[Any]) -> np.generic:
    return kernels.udot(u, v)


def _matrix_vector(kernels: Kernels, m: NDArray[Any], v: NDArray[Any]) -> NDArray[Any]:
    return kernels.mxv(m, v)


def _conj_vector_matrix(kernels: Kernels, v: NDArray[Any], m: NDArray[Any]) -> NDArray[Any]:
    return kernels.vxm(conj(v), m)


def _plain_vector_matrix(kernels: Kernels, v: NDArray[Any], m: NDArray[Any]) -> NDArray[Any]:
    return kernels.vxm(v, m)


def _matrix_matrix(kernels: Kernels, a: NDArray[Any], b: NDArray[Any]) -> NDArray[Any]:
    return kernels.mxm(a, b)


def _column_promoted(kernels: Kernels, m: NDArray[Any], v: NDArray[Any]) -> NDArray[Any]:
    return flatten(_matrix_matrix(kernels, m, as_column(v)))


def _row_promoted(kernels: Kernels, v: NDArray[Any], m: NDArray[Any]) -> NDArray[Any]:
    return flatten(_matrix_matrix(kernels, as_row(v), m))


# === contraction ===

contraction = DispatchRelation(
    'contraction',
    select_kernels,
    doc="""
    Matrix product, matrix-vector product and dot product.

    A sequence on the LEFT of a dot-style contraction is conjugated first
    (Hermitian inner product); the right operand never is. For real and
    integral domains conjugation is the identity.

    Args:
        a: Left operand (sequence or grid)
        b: Right operand (sequence or grid)
        backend: 'cpu' (default), 'gpu' or 'auto'

    Returns:
        Scalar, sequence or grid as given by the operand shapes

    Raises:
        ResolutionError: Scalar operands, rank > 2, or mixed domains
        DimensionError: Operands not conformable

    Example:
        >>> contraction([1, 1j], [2j + 1, 3])
        (1-1j)
        >>> contraction(np.ones((3, 4)), np.array([1.0, 0.0, 2.0, -1.0]))
        array([2., 2., 2.])
    """,
)

contraction.instance(SHAPE_SEQUENCE, SHAPE_SEQUENCE, SHAPE_SCALAR)(_conj_dot)
contraction.instance(SHAPE_GRID, SHAPE_SEQUENCE, SHAPE_SEQUENCE)(_matrix_vector)
contraction.instance(SHAPE_SEQUENCE, SHAPE_GRID, SHAPE_SEQUENCE)(_conj_vector_matrix)
contraction.instance(SHAPE_GRID, SHAPE_GRID, SHAPE_GRID)(_matrix_matrix)


# === mul ===

mul = DispatchRelation(
    'mul',
    select_kernels,
    doc="""
    Matrix-matrix, matrix-vector and vector-matrix algebraic product.

    No conjugation. A sequence is promoted to a one-column grid (right
    operand) or one-row grid (left operand), multiplied, and flattened.
    Two sequences have no instance here; use contraction or dot.

    Args:
        a: Left operand (sequence or grid)
        b: Right operand (sequence or grid)
        backend: 'cpu' (default), 'gpu' or 'auto'

    Raises:
        ResolutionError: Two sequences, scalars, rank > 2, or mixed domains
        DimensionError: Operands not conformable
    """,
)

mul.instance(SHAPE_GRID, SHAPE_GRID, SHAPE_GRID)(_matrix_matrix)
mul.instance(SHAPE_GRID, SHAPE_SEQUENCE, SHAPE_SEQUENCE)(_column_promoted)
mul.instance(SHAPE_SEQUENCE, SHAPE_GRID, SHAPE_SEQUENCE)(_row_promoted)


# === Single-kernel relations ===

dot = DispatchRelation('dot', select_kernels, operand_names=('u', 'v'), doc="""
    Hermitian dot product of two sequences: udot(conj(u), v).
    """)
dot.instance(SHAPE_SEQUENCE, SHAPE_SEQUENCE, SHAPE_SCALAR)(_conj_dot)

udot = DispatchRelation('udot', select_kernels, operand_names=('u', 'v'), doc="""
    Unconjugated dot product of two sequences: sum(u * v).
    """)
udot.instance(SHAPE_SEQUENCE, SHAPE_SEQUENCE, SHAPE_SCALAR)(_plain_dot)

mxm = DispatchRelation('mxm', select_kernels, doc="Matrix-matrix product.")
mxm.instance(SHAPE_GRID, SHAPE_GRID, SHAPE_GRID)(_matrix_matrix)

mxv = DispatchRelation('mxv', select_kernels, operand_names=('m', 'v'), doc="Matrix-vector product.")
mxv.instance(SHAPE_GRID, SHAPE_SEQUENCE, SHAPE_SEQUENCE)(_matrix_vector)

vxm = DispatchRelation('vxm', select_kernels, operand_names=('v', 'm'), doc="""
    Vector-matrix product, v as a row. No conjugation.
    """)
vxm.instance(SHAPE_SEQUENCE, SHAPE_GRID, SHAPE_SEQUENCE)(_plain_vector_matrix)
