"""
Core protocols for PyNumeric.

These define structural interfaces that kernel libraries must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
any object with the right methods can serve as a kernel set.

Design Principles:
    - Minimal contracts: only the raw products and the solve
    - Kernels never conjugate, promote or reshape; dispatch does that
    - Kernels never mutate their inputs and always return fresh storage
"""

from typing import Protocol, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from pynumeric.core.traits import Domain


@runtime_checkable
class Kernels(Protocol):
    """
    Raw numeric kernels a dispatch relation selects from.

    Kernels receive operands that have already been classified: shapes
    match the kernel, both operands share one domain, and that domain is
    in `domains`. Dimension conformability is the kernel's to check.
    """

    @property
    def name(self) -> str:
        """
        Kernel set identifier.

        Convention: '{device}_{library}'
        Examples: 'cpu_blas', 'gpu_torch'
        """
        ...

    @property
    def domains(self) -> frozenset[Domain]:
        """Element domains this kernel set can execute."""
        ...

    def udot(self, u: NDArray[Any], v: NDArray[Any]) -> np.generic:
        """Unconjugated dot product of two sequences."""
        ...

    def mxv(self, m: NDArray[Any], v: NDArray[Any]) -> NDArray[Any]:
        """Matrix-vector product."""
        ...

    def vxm(self, v: NDArray[Any], m: NDArray[Any]) -> NDArray[Any]:
        """Vector-matrix product (v as a row)."""
        ...

    def mxm(self, a: NDArray[Any], b: NDArray[Any]) -> NDArray[Any]:
        """Matrix-matrix product."""
        ...

    def lstsq(
        self,
        m: NDArray[Any],
        b: NDArray[Any],
        rcond: float,
    ) -> tuple[NDArray[Any], int, NDArray[Any]]:
        """
        SVD-based minimum-norm least-squares solve of m @ x = b.

        Args:
            m: System matrix (rows x cols)
            b: Right-hand sides as columns (rows x k)
            rcond: Relative cutoff for small singular values

        Returns:
            (solution of shape (cols, k), numerical rank, singular values)
        """
        ...
