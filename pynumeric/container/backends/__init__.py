"""
Kernel sets and backend selection.

    'cpu':  BLAS/LAPACK through SciPy and NumPy (every domain)
    'gpu':  PyTorch on CUDA or MPS (floating domains the device supports)
    'auto': GPU when present and able to run the domain, else CPU
"""

from typing import Literal

from pynumeric.core.compute.device import select_device
from pynumeric.core.exceptions import ResolutionError
from pynumeric.core.protocols import Kernels
from pynumeric.core.traits import Domain
from pynumeric.container.backends.cpu import CPUKernels


BackendChoice = Literal['auto', 'cpu', 'gpu']


def select_kernels(choice: BackendChoice, domain: Domain) -> Kernels:
    """
    Select and instantiate the kernel set for a backend choice and domain.

    Args:
        choice: User's backend preference
        domain: Element domain the kernels must execute

    Returns:
        Kernel set ready to run

    Raises:
        ValueError: If unknown backend specified
        RuntimeError: If 'gpu' requested but unavailable
        ResolutionError: If 'gpu' requested for a domain the device cannot run
    """
    if choice == 'cpu':
        return CPUKernels()

    elif choice == 'auto':
        device = select_device('auto')
        if device.is_gpu and device.can_execute(domain):
            from pynumeric.container.backends.gpu import GPUKernels
            return GPUKernels(device)
        return CPUKernels()

    elif choice == 'gpu':
        device = select_device('gpu')
        if not device.can_execute(domain):
            raise ResolutionError(
                f"backend 'gpu': {device} cannot execute element domain {domain}",
                domains=(domain.name,),
            )
        from pynumeric.container.backends.gpu import GPUKernels
        return GPUKernels(device)

    else:
        raise ValueError(f"Unknown backend: {choice!r}")


__all__ = [
    "BackendChoice",
    "CPUKernels",
    "select_kernels",
]
