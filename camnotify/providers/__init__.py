"""
Platform-specific device state providers.

This package contains the provider interface and its implementations:
- Linux: Uses /dev/video* nodes and procfs to find cameras held open
"""

from .base import DeviceStateProvider, get_platform_provider
from .linux import LinuxProvider

__all__ = [
    "DeviceStateProvider",
    "get_platform_provider",
    "LinuxProvider",
]
