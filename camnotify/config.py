"""
Process configuration for camera-notifier.

Values come from command-line options first, then environment variables,
then defaults. The environment is passed in as a mapping so it can be
replaced in tests.
"""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .exceptions import ConfigurationError

DEFAULT_HANDLERS = "switchbot"
DEFAULT_POLL_INTERVAL = 1.0

ENV_HANDLERS = "CAMERA_HANDLERS"
ENV_VERBOSE = "VERBOSE"
ENV_POLL_INTERVAL = "CAMERA_POLL_INTERVAL"

ENV_SWITCHBOT_TOKEN = "SWITCHBOT_TOKEN"
ENV_SWITCHBOT_SECRET = "SWITCHBOT_SECRET"
ENV_SWITCHBOT_DEVICE_ID = "SWITCHBOT_DEVICE_ID"

TOKEN_PLACEHOLDER = "YOUR_TOKEN_HERE"
SECRET_PLACEHOLDER = "YOUR_SECRET_HERE"


def parse_handler_names(value: str) -> Tuple[str, ...]:
    """
    Split a comma-separated handler list into trimmed lower-case names.

    Listed order is kept and repeated names are dropped.
    """
    names = (name.strip().lower() for name in value.split(","))
    return tuple(dict.fromkeys(name for name in names if name))


@dataclass(frozen=True)
class AppConfig:
    """Top-level application settings."""
    enabled_handlers: Tuple[str, ...]
    verbose: bool = False
    poll_interval: float = DEFAULT_POLL_INTERVAL
    emit_initial_idle: bool = False
    log_file: Optional[Path] = None

    @classmethod
    def load(
        cls,
        handlers: Optional[str] = None,
        verbose: bool = False,
        poll_interval: Optional[float] = None,
        emit_initial_idle: bool = False,
        log_file: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AppConfig":
        """
        Resolve settings from options and the environment.

        Raises:
            ConfigurationError: If the poll interval is not a positive number
        """
        env = os.environ if environ is None else environ

        handler_spec = handlers if handlers is not None else env.get(ENV_HANDLERS, DEFAULT_HANDLERS)

        if poll_interval is None:
            raw_interval = env.get(ENV_POLL_INTERVAL)
            if raw_interval:
                try:
                    poll_interval = float(raw_interval)
                except ValueError as e:
                    raise ConfigurationError(
                        f"Invalid poll interval: {raw_interval!r}", config_key=ENV_POLL_INTERVAL, cause=e
                    )
            else:
                poll_interval = DEFAULT_POLL_INTERVAL
        if not math.isfinite(poll_interval) or poll_interval <= 0:
            raise ConfigurationError(
                f"Poll interval must be a positive finite number, got {poll_interval}",
                config_key=ENV_POLL_INTERVAL,
            )

        return cls(
            enabled_handlers=parse_handler_names(handler_spec),
            verbose=verbose or env.get(ENV_VERBOSE) == "1",
            poll_interval=poll_interval,
            emit_initial_idle=emit_initial_idle,
            log_file=log_file,
        )


@dataclass(frozen=True)
class SwitchBotSettings:
    """Credentials and target device for the SwitchBot handler."""
    token: Optional[str] = None
    secret: Optional[str] = None
    device_id: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SwitchBotSettings":
        env = os.environ if environ is None else environ
        return cls(
            token=env.get(ENV_SWITCHBOT_TOKEN),
            secret=env.get(ENV_SWITCHBOT_SECRET),
            # Empty means auto-detect
            device_id=env.get(ENV_SWITCHBOT_DEVICE_ID) or None,
        )

    def describe(self) -> dict:
        """Summarize which settings are present without exposing secrets."""
        return {
            ENV_SWITCHBOT_TOKEN: "set" if self.token else "not set",
            ENV_SWITCHBOT_SECRET: "set" if self.secret else "not set",
            ENV_SWITCHBOT_DEVICE_ID: self.device_id or "not set",
        }
