"""
Base classes and interfaces for platform-specific device state providers.
"""

import platform
from abc import ABC, abstractmethod

from ..models import CameraState
from ..exceptions import UnsupportedPlatformError


class DeviceStateProvider(ABC):
    """
    Abstract source of raw camera-activity truth.

    Each platform implements this interface using OS-specific APIs. The
    monitor only ever sees the ``CameraState`` a query returns.
    """

    @abstractmethod
    def query_state(self) -> CameraState:
        """
        Report whether any camera is currently in use.

        When several cameras are active, the first one in the provider's
        enumeration order is reported.

        Returns:
            CameraState: In-use flag plus the active device's name, if any

        Raises:
            ProviderQueryError: If the query fails
        """
        pass

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Get the name of the platform this provider supports."""
        pass


def get_platform_provider() -> DeviceStateProvider:
    """
    Select and instantiate the appropriate provider for the current platform.

    Returns:
        DeviceStateProvider: Platform-specific provider instance

    Raises:
        ProviderInitError: If the provider cannot be initialized
        UnsupportedPlatformError: If the current platform is not supported
    """
    system = platform.system().lower()

    if system == "linux":
        from .linux import LinuxProvider
        return LinuxProvider()
    raise UnsupportedPlatformError(f"Unsupported platform: {system}", platform=system)
