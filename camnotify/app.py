"""
Camera notifier application - wires the provider, monitor and handlers.

Startup order: register handlers, configure them, require at least one
enabled handler, initialize the provider, then monitor until stopped.
"""

import logging
import os
import threading
from typing import Callable, Dict, Mapping, Optional

from .config import AppConfig, SwitchBotSettings
from .exceptions import ConfigurationError
from .handlers import AVAILABLE_HANDLERS, CameraStateHandler, HandlerRegistry
from .monitor import StateMonitor
from .providers import DeviceStateProvider, get_platform_provider

logger = logging.getLogger(__name__)

CONFIGURATION_HELP = """
Configuration Help:

Environment Variables:
- CAMERA_HANDLERS: Comma-separated list of handlers to enable (default: "switchbot")
- CAMERA_POLL_INTERVAL: Seconds between camera checks (default: 1)
- VERBOSE: Set to "1" for verbose logging

SwitchBot Handler:
- SWITCHBOT_TOKEN: Your SwitchBot API token (required)
- SWITCHBOT_SECRET: Your SwitchBot API secret (required)
- SWITCHBOT_DEVICE_ID: Target device ID (optional, auto-detects if not set)

Example:
export CAMERA_HANDLERS="switchbot"
export SWITCHBOT_TOKEN="your_token_here"
export SWITCHBOT_SECRET="your_secret_here"
camera-notifier run
"""


class CameraNotifierApp:
    """
    Main application class.

    The stop event is the only shutdown signal: setting it ends the
    monitoring loop, after which handlers are cleaned up.
    """

    def __init__(
        self,
        config: AppConfig,
        environ: Optional[Mapping[str, str]] = None,
        provider_factory: Callable[[], DeviceStateProvider] = get_platform_provider,
        handler_factories: Optional[Dict[str, Callable[..., CameraStateHandler]]] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        self.config = config
        self.environ = os.environ if environ is None else environ
        self.provider_factory = provider_factory
        self.handler_factories = AVAILABLE_HANDLERS if handler_factories is None else handler_factories
        self.stop_event = stop_event or threading.Event()

        self.registry = HandlerRegistry()
        self.monitor: Optional[StateMonitor] = None

        self._register_available_handlers()

    def _register_available_handlers(self) -> None:
        for name in self.config.enabled_handlers:
            factory = self.handler_factories.get(name)
            if factory is None:
                logger.warning(f"Unknown handler '{name}' ignored")
                continue
            self.registry.register(factory(environ=self.environ))

    def start(self) -> None:
        """
        Configure handlers and initialize the provider.

        Raises:
            HandlerConfigError: The first handler configuration failure
            ConfigurationError: If no handler ended up enabled
            ProviderInitError: If the device state provider cannot be created
        """
        logger.info("Camera Notifier starting...")
        logger.info(f"Process ID: {os.getpid()}")
        logger.info(f"Working directory: {os.getcwd()}")
        logger.info(f"Enabled handlers: {', '.join(self.config.enabled_handlers)}")
        logger.info(f"Verbose logging: {self.config.verbose}")
        logger.info(f"Registered handlers: {', '.join(self.registry.handler_names)}")

        if self.config.verbose:
            logger.info("Environment check:")
            for key, value in SwitchBotSettings.from_env(self.environ).describe().items():
                logger.info(f"  {key}: {value}")

        self.registry.configure_all()

        enabled = self.registry.enabled_handler_names
        if not enabled:
            raise ConfigurationError("No handlers are enabled and configured", config_key="CAMERA_HANDLERS")
        logger.info(f"Active handlers: {', '.join(enabled)}")

        provider = self.provider_factory()
        self.monitor = StateMonitor(
            provider, initial_state=None if self.config.emit_initial_idle else False
        )

    def run(self) -> None:
        """Start up, then monitor until the stop event is set."""
        if self.monitor is None:
            self.start()

        logger.info("Camera monitoring started. Press Ctrl+C to stop.")
        try:
            self.monitor.run(self.config.poll_interval, self.registry.dispatch, self.stop_event)
        finally:
            self.shutdown()

    def stop(self) -> None:
        self.stop_event.set()

    def shutdown(self) -> None:
        """Clean up handlers without waiting for in-flight deliveries."""
        self.registry.cleanup()
        logger.info("Camera Notifier stopped")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        self.shutdown()
