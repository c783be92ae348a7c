"""
Camera Notifier - react to camera usage with pluggable handlers.

Polls the host's camera state, detects when usage starts or stops, and fans
the change out to handlers such as the SwitchBot plug sync.
"""

from .models import CameraState, StateChangeEvent, PlugCommand
from .monitor import StateMonitor
from .handlers import CameraStateHandler, HandlerRegistry, SwitchBotSyncHandler
from .switchbot import SwitchBotClient, sign_request
from .providers import DeviceStateProvider, get_platform_provider

__version__ = "1.0.0"
__all__ = [
    "CameraState",
    "StateChangeEvent",
    "PlugCommand",
    "StateMonitor",
    "CameraStateHandler",
    "HandlerRegistry",
    "SwitchBotSyncHandler",
    "SwitchBotClient",
    "sign_request",
    "DeviceStateProvider",
    "get_platform_provider",
]
