"""
Command-line interface for camera-notifier.

``run`` monitors the camera and drives the configured handlers; ``status``
and ``devices`` are one-shot diagnostics.
"""

import json
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Optional

import click

from .app import CONFIGURATION_HELP, CameraNotifierApp
from .config import SECRET_PLACEHOLDER, TOKEN_PLACEHOLDER, AppConfig, SwitchBotSettings
from .exceptions import ConfigurationError, ProviderError, ProviderInitError, TransportError
from .logging_config import setup_logging
from .providers import get_platform_provider
from .switchbot import SwitchBotClient

__version__ = "1.0.0"

logger = logging.getLogger(__name__)


def _install_signal_handlers(stop_event: threading.Event) -> None:
    """Turn SIGINT and SIGTERM into a set stop event."""
    names = {signal.SIGINT: "interrupt", signal.SIGTERM: "termination"}

    def _handler(signum, frame):
        logger.info(f"Received {names.get(signum, 'shutdown')} signal, shutting down...")
        stop_event.set()

    for signum in names:
        signal.signal(signum, _handler)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    Camera Notifier - camera usage monitoring with extensible handlers.

    Watches the host's cameras and notifies handlers (such as a SwitchBot
    plug) whenever camera usage starts or stops.
    """
    pass


@cli.command()
@click.option('--handlers', help='Comma-separated list of handlers to enable (default: switchbot)')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging')
@click.option('--interval', type=float, help='Seconds between camera checks (default: 1)')
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path),
              help='Also write logs to this rotating file')
@click.option('--emit-initial-idle/--no-emit-initial-idle', default=False,
              help='Report an idle camera on the first check (default: off)')
def run(handlers: Optional[str], verbose: bool, interval: Optional[float],
        log_file: Optional[Path], emit_initial_idle: bool):
    """
    Monitor camera usage and dispatch changes to handlers.

    Runs until interrupted. Exits with status 1 if no handler can be
    configured or the camera state provider fails to start.
    """
    try:
        config = AppConfig.load(
            handlers=handlers,
            verbose=verbose,
            poll_interval=interval,
            emit_initial_idle=emit_initial_idle,
            log_file=log_file,
        )
    except ConfigurationError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)

    setup_logging(verbose=config.verbose, log_file=config.log_file, force=True)

    app = CameraNotifierApp(config)
    _install_signal_handlers(app.stop_event)

    try:
        app.start()
    except ProviderInitError as e:
        logger.error(f"Failed to initialize camera monitor: {e}")
        app.shutdown()
        sys.exit(1)
    except ConfigurationError as e:
        logger.error(str(e))
        click.echo(CONFIGURATION_HELP, err=True)
        app.shutdown()
        sys.exit(1)
    except Exception as e:
        logger.error(f"Handler configuration failed: {e}")
        click.echo(CONFIGURATION_HELP, err=True)
        app.shutdown()
        sys.exit(1)

    app.run()


@cli.command()
def status():
    """
    Check once whether a camera is in use.
    """
    try:
        provider = get_platform_provider()
        state = provider.query_state()
    except ProviderError as e:
        click.echo(f"Camera state query failed: {e}", err=True)
        sys.exit(1)

    if state.in_use:
        click.echo(f"Camera: ON - Device: {state.device_name or 'unknown'}")
    else:
        click.echo("Camera: OFF")


@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Output the device list as JSON')
def devices(as_json: bool):
    """
    List devices on the SwitchBot account.

    Plug devices, the ones eligible for auto-detection, are marked with '*'.
    """
    settings = SwitchBotSettings.from_env()
    if not settings.token or settings.token == TOKEN_PLACEHOLDER:
        click.echo("SWITCHBOT_TOKEN is not set.", err=True)
        sys.exit(1)
    if not settings.secret or settings.secret == SECRET_PLACEHOLDER:
        click.echo("SWITCHBOT_SECRET is not set.", err=True)
        sys.exit(1)

    try:
        with SwitchBotClient(settings.token, settings.secret) as client:
            device_list = client.list_devices()
    except TransportError as e:
        click.echo(f"Failed to get device list: {e}", err=True)
        sys.exit(1)

    if as_json:
        device_data = [
            {
                'device_id': device.device_id,
                'device_name': device.device_name,
                'device_type': device.device_type,
                'is_plug': device.is_plug(),
            }
            for device in device_list.devices
        ]
        click.echo(json.dumps(device_data, indent=2))
        return

    if not device_list.devices:
        click.echo("No devices found.")
        return

    click.echo(f"Found {len(device_list.devices)} device(s):\n")
    click.echo(f"  {'Device ID':<20} {'Type':<20} {'Name':<30}")
    click.echo("-" * 74)
    for device in device_list.devices:
        marker = "*" if device.is_plug() else " "
        click.echo(f"{marker} {device.device_id:<20} {device.device_type:<20} {device.device_name:<30}")


def main(args=None):
    """Main entry point for the CLI."""
    cli(args)


if __name__ == '__main__':
    main()
