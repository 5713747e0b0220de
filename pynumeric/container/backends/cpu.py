"""
CPU reference kernels.

Floating domains go straight to the precision-specific BLAS routine
(sgemm/dgemm/cgemm/zgemm, ?gemv) chosen by SciPy from the operand dtype.
Integral operands, which BLAS does not cover, and zero-size operands use
NumPy. Least squares is LAPACK ?gelsd: SVD-based, minimum-norm.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import LinAlgError, lstsq
from scipy.linalg.blas import get_blas_funcs

from pynumeric.core.exceptions import NumericalError
from pynumeric.core.traits import Domain, DOMAINS
from pynumeric.core.validation import check_conformable


def _blas_eligible(*arrays: NDArray[Any]) -> bool:
    """True if BLAS has a routine for the dtype and no operand is empty."""
    return arrays[0].dtype.kind in ('f', 'c') and all(x.size > 0 for x in arrays)


class CPUKernels:
    """
    CPU kernel set backed by BLAS/LAPACK.

    Implements the Kernels protocol for every element domain.
    """

    @property
    def name(self) -> str:
        return 'cpu_blas'

    @property
    def domains(self) -> frozenset[Domain]:
        return frozenset(DOMAINS.values())

    def udot(self, u: NDArray[Any], v: NDArray[Any]) -> np.generic:
        check_conformable(u.shape, v.shape, (u.shape[0], v.shape[0]), 'udot')
        return np.dot(u, v)

    def mxv(self, m: NDArray[Any], v: NDArray[Any]) -> NDArray[Any]:
        check_conformable(m.shape, v.shape, (m.shape[1], v.shape[0]), 'mxv')
        if _blas_eligible(m, v):
            gemv, = get_blas_funcs(('gemv',), (m, v))
            return gemv(1.0, m, v)
        return m @ v

    def vxm(self, v: NDArray[Any], m: NDArray[Any]) -> NDArray[Any]:
        check_conformable(v.shape, m.shape, (v.shape[0], m.shape[0]), 'vxm')
        if _blas_eligible(m, v):
            # trans=1: plain transpose, v is already conjugated if it should be
            gemv, = get_blas_funcs(('gemv',), (m, v))
            return gemv(1.0, m, v, trans=1)
        return v @ m

    def mxm(self, a: NDArray[Any], b: NDArray[Any]) -> NDArray[Any]:
        check_conformable(a.shape, b.shape, (a.shape[1], b.shape[0]), 'mxm')
        if _blas_eligible(a, b):
            gemm, = get_blas_funcs(('gemm',), (a, b))
            return gemm(1.0, a, b)
        return a @ b

    def lstsq(
        self,
        m: NDArray[Any],
        b: NDArray[Any],
        rcond: float,
    ) -> tuple[NDArray[Any], int, NDArray[Any]]:
        check_conformable(m.shape, b.shape, (m.shape[0], b.shape[0]), 'lstsq')
        try:
            x, _, rank, s = lstsq(
                m, b,
                cond=rcond,
                lapack_driver='gelsd',
                check_finite=False,
            )
        except LinAlgError as e:
            raise NumericalError(f"lstsq: SVD did not converge: {e}") from e
        return x, int(rank), s
