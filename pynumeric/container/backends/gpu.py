"""
GPU kernels using PyTorch.

Operands are copied to the device, multiplied there, and copied back as
NumPy arrays, so callers never see a tensor. CUDA runs every floating
domain; MPS runs real32 only. Least squares uses the SVD pseudo-inverse,
which (unlike torch.linalg.lstsq on CUDA) handles rank-deficient and
underdetermined systems.
"""

from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pynumeric.core.compute.device import DeviceInfo
from pynumeric.core.exceptions import NumericalError
from pynumeric.core.traits import Domain
from pynumeric.core.validation import check_conformable

if TYPE_CHECKING:
    import torch


class GPUKernels:
    """
    GPU kernel set.

    Implements the Kernels protocol for the domains the device supports.

    Args:
        device: A GPU DeviceInfo from select_device('gpu')
    """

    def __init__(self, device: DeviceInfo):
        import torch

        self._info = device
        self._device = torch.device(device.device_type, device.device_index)

    @property
    def name(self) -> str:
        return f'gpu_torch_{self._info.device_type}'

    @property
    def domains(self) -> frozenset[Domain]:
        return self._info.domains

    def _to_device(self, x: NDArray[Any]) -> 'torch.Tensor':
        import torch
        return torch.from_numpy(np.ascontiguousarray(x)).to(self._device)

    def udot(self, u: NDArray[Any], v: NDArray[Any]) -> np.generic:
        import torch

        check_conformable(u.shape, v.shape, (u.shape[0], v.shape[0]), 'udot')
        result = torch.dot(self._to_device(u), self._to_device(v))
        return result.cpu().numpy()[()]

    def mxv(self, m: NDArray[Any], v: NDArray[Any]) -> NDArray[Any]:
        import torch

        check_conformable(m.shape, v.shape, (m.shape[1], v.shape[0]), 'mxv')
        return torch.mv(self._to_device(m), self._to_device(v)).cpu().numpy()

    def vxm(self, v: NDArray[Any], m: NDArray[Any]) -> NDArray[Any]:
        import torch

        check_conformable(v.shape, m.shape, (v.shape[0], m.shape[0]), 'vxm')
        return torch.mv(self._to_device(m).T, self._to_device(v)).cpu().numpy()

    def mxm(self, a: NDArray[Any], b: NDArray[Any]) -> NDArray[Any]:
        import torch

        check_conformable(a.shape, b.shape, (a.shape[1], b.shape[0]), 'mxm')
        return torch.mm(self._to_device(a), self._to_device(b)).cpu().numpy()

    def lstsq(
        self,
        m: NDArray[Any],
        b: NDArray[Any],
        rcond: float,
    ) -> tuple[NDArray[Any], int, NDArray[Any]]:
        import torch

        check_conformable(m.shape, b.shape, (m.shape[0], b.shape[0]), 'lstsq')
        m_t = self._to_device(m)
        b_t = self._to_device(b)
        try:
            s = torch.linalg.svdvals(m_t)
            x = torch.linalg.pinv(m_t, rtol=rcond) @ b_t
        except RuntimeError as e:
            raise NumericalError(f"lstsq: SVD failed on {self._info}: {e}") from e

        if s.numel() > 0:
            rank = int(torch.sum(s > rcond * s[0]).item())
        else:
            rank = 0
        return x.cpu().numpy(), rank, s.cpu().numpy()
