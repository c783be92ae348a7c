"""
Core data models for camera-notifier.

This module defines the value types passed between the state monitor, the
handler registry and the SwitchBot client.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CameraState:
    """Raw result of a single device state provider query."""
    in_use: bool
    device_name: Optional[str] = None


@dataclass(frozen=True)
class StateChangeEvent:
    """
    A detected camera usage transition.

    Created once per transition by the state monitor and delivered to every
    enabled handler. ``device_name`` is always None for a stop transition.
    """
    is_running: bool
    device_name: Optional[str] = None

    @classmethod
    def from_state(cls, state: CameraState) -> "StateChangeEvent":
        """Build an event from a provider reading."""
        if not state.in_use:
            return cls(is_running=False, device_name=None)
        return cls(is_running=True, device_name=state.device_name)

    @property
    def action(self) -> str:
        return "started" if self.is_running else "stopped"


class PlugCommand(Enum):
    """Commands understood by SwitchBot plug devices."""
    TURN_ON = "turnOn"
    TURN_OFF = "turnOff"

    @classmethod
    def for_event(cls, event: StateChangeEvent) -> "PlugCommand":
        return cls.TURN_ON if event.is_running else cls.TURN_OFF


@dataclass
class SwitchBotDevice:
    """A device entry returned by the SwitchBot device list endpoint."""
    device_id: str
    device_name: str
    device_type: str
    enable_cloud_service: Optional[bool] = None
    hub_device_id: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SwitchBotDevice":
        """
        Build a device from one element of the API's device list.

        Infrared remotes report ``remoteType`` instead of ``deviceType``.

        Raises:
            KeyError: If ``deviceId`` or ``deviceName`` is missing
        """
        return cls(
            device_id=data["deviceId"],
            device_name=data["deviceName"],
            device_type=data.get("deviceType") or data.get("remoteType") or "",
            enable_cloud_service=data.get("enableCloudService"),
            hub_device_id=data.get("hubDeviceId"),
        )

    def is_plug(self) -> bool:
        """Check if this device belongs to the plug category."""
        return "Plug" in self.device_type


@dataclass
class DeviceList:
    """Physical and infrared devices known to a SwitchBot account."""
    devices: List[SwitchBotDevice] = field(default_factory=list)
    infrared_remotes: List[SwitchBotDevice] = field(default_factory=list)

    def plugs(self) -> List[SwitchBotDevice]:
        """Physical devices of the plug category, in API order."""
        return [device for device in self.devices if device.is_plug()]


@dataclass
class CommandResult:
    """Decoded response of a device control command."""
    status_code: int
    message: str
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status_code == 100
