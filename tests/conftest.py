"""
Pytest configuration and shared fixtures for camera-notifier tests.

This module provides scripted providers, recording handlers and a mock
SwitchBot API used across the test modules.
"""

import json
import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional

import httpx
import pytest

# Add the project root to Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from camnotify.exceptions import HandlerConfigError
from camnotify.handlers.base import CameraStateHandler
from camnotify.logging_config import NotifierLogger
from camnotify.models import CameraState
from camnotify.providers.base import DeviceStateProvider


# Test markers configuration
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "linux: marks tests that require Linux platform")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file names."""
    for item in items:
        if "test_integration" in item.fspath.basename:
            item.add_marker(pytest.mark.integration)


class ScriptedProvider(DeviceStateProvider):
    """
    Provider returning a fixed sequence of readings.

    Exception instances in the sequence are raised instead of returned. Once
    the sequence is exhausted the last reading repeats; after ``tail`` more
    repeats the optional stop event is set.
    """

    platform_name = "scripted"

    def __init__(self, readings, stop_event: Optional[threading.Event] = None, tail: int = 0):
        self.readings = list(readings)
        self.stop_event = stop_event
        self.tail = tail
        self.calls = 0

    def query_state(self) -> CameraState:
        index = min(self.calls, len(self.readings) - 1)
        self.calls += 1
        if self.stop_event is not None and self.calls >= len(self.readings) + self.tail:
            self.stop_event.set()
        reading = self.readings[index]
        if isinstance(reading, Exception):
            raise reading
        return reading


class RecordingHandler(CameraStateHandler):
    """Handler that records every event it receives."""

    def __init__(self, name: str = "recorder", config_error: Optional[Exception] = None,
                 handle_error: Optional[Exception] = None, block: Optional[threading.Event] = None,
                 environ=None):
        self.name = name
        self.config_error = config_error
        self.handle_error = handle_error
        self.block = block
        self.enabled = False
        self.configured = 0
        self.cleaned = 0
        self.events: List = []
        self.received = threading.Event()

    def configure(self) -> None:
        self.configured += 1
        if self.config_error is not None:
            raise self.config_error
        self.enabled = True

    def is_enabled(self) -> bool:
        return self.enabled

    def handle(self, event) -> None:
        if self.block is not None:
            self.block.wait(timeout=5)
        self.events.append(event)
        self.received.set()
        if self.handle_error is not None:
            raise self.handle_error

    def cleanup(self) -> None:
        self.cleaned += 1
        self.enabled = False


@pytest.fixture
def recording_handler():
    return RecordingHandler()


@pytest.fixture
def failing_config_handler():
    return RecordingHandler(
        name="broken", config_error=HandlerConfigError("bad settings", handler="broken")
    )


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo any logging configuration a test applies."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    yield
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
    NotifierLogger._configured = False
    NotifierLogger._log_file_path = None


# SwitchBot API fixtures

PLUG_DEVICE = {
    "deviceId": "PLUG1",
    "deviceName": "Desk Lamp",
    "deviceType": "Plug Mini (US)",
    "enableCloudService": True,
    "hubDeviceId": "",
}

HUB_DEVICE = {
    "deviceId": "HUB1",
    "deviceName": "Living Room Hub",
    "deviceType": "Hub Mini",
    "enableCloudService": False,
    "hubDeviceId": "",
}

IR_REMOTE = {
    "deviceId": "IR1",
    "deviceName": "TV",
    "remoteType": "TV",
    "hubDeviceId": "HUB1",
}


def device_list_payload(devices=None, remotes=None) -> dict:
    return {
        "statusCode": 100,
        "message": "success",
        "body": {
            "deviceList": [HUB_DEVICE, PLUG_DEVICE] if devices is None else devices,
            "infraredRemoteList": [IR_REMOTE] if remotes is None else remotes,
        },
    }


def command_payload() -> dict:
    return {"statusCode": 100, "message": "success", "body": {}}


class FakeSwitchBotAPI:
    """Records requests and answers like the SwitchBot cloud API."""

    def __init__(self, devices=None):
        self.devices = devices
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET" and request.url.path.endswith("/devices"):
            return httpx.Response(200, json=device_list_payload(self.devices))
        if request.method == "POST" and request.url.path.endswith("/commands"):
            return httpx.Response(200, json=command_payload())
        return httpx.Response(404, json={"message": "not found"})

    @property
    def commands(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_api():
    return FakeSwitchBotAPI()


@pytest.fixture
def switchbot_env():
    return {
        "SWITCHBOT_TOKEN": "test-token",
        "SWITCHBOT_SECRET": "test-secret",
    }
