"""
Unit tests for camera-notifier data models.
"""

import dataclasses

import pytest

from camnotify.models import (
    CameraState,
    CommandResult,
    DeviceList,
    PlugCommand,
    StateChangeEvent,
    SwitchBotDevice,
)


class TestStateChangeEvent:
    """Test cases for StateChangeEvent."""

    def test_immutable(self):
        """Test that events cannot be modified after creation."""
        event = StateChangeEvent(is_running=True, device_name="Cam A")

        with pytest.raises(dataclasses.FrozenInstanceError):
            event.is_running = False

    def test_value_equality(self):
        assert StateChangeEvent(True, "Cam A") == StateChangeEvent(True, "Cam A")
        assert StateChangeEvent(True, "Cam A") != StateChangeEvent(True, "Cam B")

    def test_from_running_state(self):
        event = StateChangeEvent.from_state(CameraState(in_use=True, device_name="Cam A"))

        assert event == StateChangeEvent(True, "Cam A")
        assert event.action == "started"

    def test_from_idle_state_drops_name(self):
        """Test that a stop event never names a device."""
        event = StateChangeEvent.from_state(CameraState(in_use=False, device_name="Cam A"))

        assert event.device_name is None
        assert event.action == "stopped"


class TestPlugCommand:
    """Test cases for mapping events to commands."""

    def test_values(self):
        assert PlugCommand.TURN_ON.value == "turnOn"
        assert PlugCommand.TURN_OFF.value == "turnOff"

    def test_for_event(self):
        assert PlugCommand.for_event(StateChangeEvent(True, "Cam")) is PlugCommand.TURN_ON
        assert PlugCommand.for_event(StateChangeEvent(False)) is PlugCommand.TURN_OFF


class TestSwitchBotDevice:
    """Test cases for SwitchBot device decoding."""

    def test_from_api(self):
        device = SwitchBotDevice.from_api({
            "deviceId": "ABC",
            "deviceName": "Lamp",
            "deviceType": "Plug Mini (JP)",
            "enableCloudService": True,
            "hubDeviceId": "HUB",
        })

        assert device.device_id == "ABC"
        assert device.enable_cloud_service is True
        assert device.hub_device_id == "HUB"
        assert device.is_plug()

    def test_infrared_remote_uses_remote_type(self):
        device = SwitchBotDevice.from_api({"deviceId": "IR", "deviceName": "TV", "remoteType": "TV"})

        assert device.device_type == "TV"
        assert not device.is_plug()

    def test_missing_id_raises(self):
        with pytest.raises(KeyError):
            SwitchBotDevice.from_api({"deviceName": "nameless"})

    def test_device_list_plugs_in_order(self):
        devices = DeviceList(devices=[
            SwitchBotDevice("1", "Bot", "Bot"),
            SwitchBotDevice("2", "Plug A", "Plug"),
            SwitchBotDevice("3", "Plug B", "Plug Mini (US)"),
        ])

        assert [d.device_id for d in devices.plugs()] == ["2", "3"]


def test_command_result_success():
    assert CommandResult(status_code=100, message="success").success
    assert not CommandResult(status_code=161, message="device offline").success
