"""
Camera state handlers and the registry that dispatches to them.

New handlers implement ``CameraStateHandler`` and are added to
``AVAILABLE_HANDLERS`` under the name used in ``CAMERA_HANDLERS``.
"""

from .base import CameraStateHandler
from .registry import HandlerRegistry
from .switchbot import HandlerState, SwitchBotSyncHandler

AVAILABLE_HANDLERS = {
    "switchbot": SwitchBotSyncHandler,
}

__all__ = [
    "AVAILABLE_HANDLERS",
    "CameraStateHandler",
    "HandlerRegistry",
    "HandlerState",
    "SwitchBotSyncHandler",
]
