"""
SwitchBot sync handler - turns a SwitchBot plug on and off with the camera.

The target plug is either given explicitly or auto-detected as the first
plug-category device on the account.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from enum import Enum
from typing import Callable, Mapping, Optional

from .base import CameraStateHandler
from ..config import (
    ENV_SWITCHBOT_SECRET,
    ENV_SWITCHBOT_TOKEN,
    SECRET_PLACEHOLDER,
    TOKEN_PLACEHOLDER,
    SwitchBotSettings,
)
from ..exceptions import (
    DetectionTransportFailure,
    MissingCredentialError,
    NoEligibleDeviceFoundError,
    TransportError,
)
from ..models import PlugCommand, StateChangeEvent
from ..switchbot import SwitchBotClient

ClientFactory = Callable[[str, str], SwitchBotClient]


class HandlerState(Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    ENABLED = "enabled"
    DISABLED = "disabled"


class SwitchBotSyncHandler(CameraStateHandler):
    """
    Synchronizes a SwitchBot plug with camera usage.

    Commands are sent from a single background worker so ``handle`` returns
    immediately and commands reach the API in event order. At most
    ``max_pending`` commands are queued or in flight; further ones are dropped
    with a warning. Outcomes are logged, never raised.
    """

    name = "switchbot"

    def __init__(
        self,
        settings: Optional[SwitchBotSettings] = None,
        environ: Optional[Mapping[str, str]] = None,
        client_factory: ClientFactory = SwitchBotClient,
        max_pending: int = 8,
    ):
        """
        Initialize an unconfigured handler.

        Args:
            settings: Explicit settings; read from the environment when None
            environ: Environment mapping used when ``settings`` is None
            client_factory: Builds the API client from token and secret
            max_pending: Commands allowed queued or in flight before new ones are dropped
        """
        self._settings = settings
        self._environ = environ
        self._client_factory = client_factory
        self._pending = threading.BoundedSemaphore(max_pending)

        self.state = HandlerState.UNCONFIGURED
        self.client: Optional[SwitchBotClient] = None
        self.target_device_id: Optional[str] = None

        self._executor: Optional[ThreadPoolExecutor] = None
        self._last_future: Optional[Future] = None

    def is_enabled(self) -> bool:
        return self.client is not None and self.target_device_id is not None

    def configure(self) -> None:
        """
        Read credentials and resolve the target device.

        Blocks while auto-detection runs.

        Raises:
            MissingCredentialError: If the token or secret is absent or a placeholder
            NoEligibleDeviceFoundError: If auto-detection finds no plug
            DetectionTransportFailure: If the device list request fails
        """
        self.state = HandlerState.CONFIGURING
        settings = self._settings or SwitchBotSettings.from_env(self._environ)

        try:
            if not settings.token or settings.token == TOKEN_PLACEHOLDER:
                raise MissingCredentialError(ENV_SWITCHBOT_TOKEN, handler=self.name)
            if not settings.secret or settings.secret == SECRET_PLACEHOLDER:
                raise MissingCredentialError(ENV_SWITCHBOT_SECRET, handler=self.name)

            client = self._client_factory(settings.token, settings.secret)

            if settings.device_id:
                target_device_id = settings.device_id
                self.logger.info(f"Using specified device: {target_device_id}")
            else:
                self.logger.info("No device ID specified, attempting auto-detection...")
                try:
                    target_device_id = self._auto_detect_device(client)
                except Exception:
                    client.close()
                    raise
        except Exception:
            self.state = HandlerState.DISABLED
            raise

        self.client = client
        self.target_device_id = target_device_id
        self.state = HandlerState.ENABLED

    def _auto_detect_device(self, client: SwitchBotClient) -> str:
        try:
            device_list = client.list_devices()
        except TransportError as e:
            raise DetectionTransportFailure(
                f"Failed to get device list: {e}", handler=self.name, cause=e
            )

        plugs = device_list.plugs()
        if not plugs:
            raise NoEligibleDeviceFoundError("No Plug devices found", handler=self.name)

        device = plugs[0]
        self.logger.info(f"Auto-detected device: {device.device_name} ({device.device_id})")
        return device.device_id

    def handle(self, event: StateChangeEvent) -> None:
        if not self.is_enabled():
            self.logger.warning("Handler not properly configured")
            return

        command = PlugCommand.for_event(event)
        self.logger.info(
            f"Camera {event.action}: {event.device_name or 'Unknown device'}, "
            f"sending {command.value} command"
        )

        if not self._pending.acquire(blocking=False):
            self.logger.warning(f"Command backlog full, dropping {command.value} command")
            return

        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="switchbot")
        future = self._executor.submit(self._send_command, command)
        future.add_done_callback(lambda _: self._pending.release())
        self._last_future = future

    def _send_command(self, command: PlugCommand) -> None:
        client, device_id = self.client, self.target_device_id
        if client is None or device_id is None:
            self.logger.warning(f"Handler cleaned up, dropping {command.value} command")
            return
        try:
            result = client.send_command(device_id, command)
            self.logger.info(f"Device control success: {result.message}")
        except TransportError as e:
            self.logger.error(f"Device control failed: {e}")
        except Exception as e:
            self.logger.error(f"Unexpected error sending {command.value}: {e}")

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait for the most recently issued command. Returns False on timeout."""
        if self._last_future is None:
            return True
        done, _ = wait([self._last_future], timeout=timeout)
        return bool(done)

    def cleanup(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None
        if self.client is not None:
            self.client.close()
        self.client = None
        self.target_device_id = None
