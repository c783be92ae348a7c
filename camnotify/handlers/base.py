"""
Common interface for camera state handlers.

A handler reacts to camera state changes: notifications, state sync with
external devices, triggers and so on. New handlers implement this interface
and are registered with the ``HandlerRegistry``.
"""

import logging
from abc import ABC, abstractmethod

from ..models import StateChangeEvent


class CameraStateHandler(ABC):
    """Abstract base class for camera state handlers."""

    #: Human-readable name, used in log lines and error messages
    name: str = "handler"

    @property
    def logger(self) -> logging.Logger:
        """Logger whose name carries this handler's name."""
        return logging.getLogger(f"camnotify.handlers.{self.name}")

    @abstractmethod
    def configure(self) -> None:
        """
        Configure the handler from its settings.

        Raises:
            HandlerConfigError: If configuration is invalid or required settings are missing
        """
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """Whether this handler is currently configured and able to handle events."""
        pass

    @abstractmethod
    def handle(self, event: StateChangeEvent) -> None:
        """
        Handle a camera state change event.

        Must not block for long and must not raise; failures are logged.
        """
        pass

    def cleanup(self) -> None:
        """Release resources when the handler is no longer needed."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} enabled={self.is_enabled()}>"
