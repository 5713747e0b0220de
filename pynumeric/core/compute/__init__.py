"""
Shared compute infrastructure for PyNumeric.

Hardware detection lives here. Kernel implementations do NOT: those are
in pynumeric/container/backends/.
"""

from pynumeric.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)

__all__ = [
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
]
