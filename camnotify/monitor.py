"""
Camera state monitor - debounced polling of a device state provider.

The monitor repeatedly queries a provider and turns raw readings into
``StateChangeEvent`` objects, emitting only when the in-use flag differs from
the previously reported one.
"""

import logging
import threading
from typing import Callable, Optional

from .models import CameraState, StateChangeEvent
from .providers import DeviceStateProvider
from .exceptions import ProviderError

logger = logging.getLogger(__name__)

StateChangeCallback = Callable[[StateChangeEvent], None]


class StateMonitor:
    """
    Polls a device state provider and reports transitions.

    ``last_known_running`` starts unset (None), so the first reading always
    produces an event. Passing ``initial_state=False`` instead makes a first
    "not running" reading silent.
    """

    def __init__(self, provider: DeviceStateProvider, initial_state: Optional[bool] = None):
        """
        Initialize the monitor.

        Args:
            provider: Source of camera in-use readings
            initial_state: Starting value of the last known state
        """
        self.provider = provider
        self.last_known_running: Optional[bool] = initial_state

    def query(self) -> CameraState:
        """
        Query the provider once, failing open.

        A failed query is logged and treated as "no camera running".
        """
        try:
            return self.provider.query_state()
        except ProviderError as e:
            logger.warning(f"Camera state query failed, assuming no camera running: {e}")
        except Exception as e:
            logger.error(f"Unexpected error querying camera state: {e}")
        return CameraState(in_use=False)

    def _detect_change(self, state: CameraState) -> Optional[StateChangeEvent]:
        if self.last_known_running is not None and self.last_known_running == state.in_use:
            return None
        event = StateChangeEvent.from_state(state)
        logger.info(
            f"Camera state changed: {'ON' if event.is_running else 'OFF'} - "
            f"Device: {event.device_name or 'unknown'}"
        )
        return event

    def poll_once(self) -> Optional[StateChangeEvent]:
        """
        Perform a single non-blocking check.

        For callers that drive their own scheduling loop.

        Returns:
            Optional[StateChangeEvent]: The transition detected by this check, if any
        """
        state = self.query()
        event = self._detect_change(state)
        if event is not None:
            self.last_known_running = state.in_use
        return event

    def run(self, poll_interval: float, on_change: StateChangeCallback,
            stop_event: Optional[threading.Event] = None) -> None:
        """
        Poll until ``stop_event`` is set, calling ``on_change`` per transition.

        ``on_change`` runs synchronously, before the last known state is
        updated. Its exceptions are logged and never end the loop. Without a
        stop event the loop runs forever.

        Args:
            poll_interval: Seconds to wait between queries
            on_change: Callback receiving each StateChangeEvent
            stop_event: Event signalling the loop to exit
        """
        if stop_event is None:
            stop_event = threading.Event()

        logger.info(
            f"Camera monitoring loop started with {self.provider.platform_name} provider, "
            f"interval {poll_interval}s"
        )

        while not stop_event.is_set():
            state = self.query()
            event = self._detect_change(state)
            if event is not None:
                try:
                    on_change(event)
                except Exception as e:
                    logger.error(f"Error in state change callback: {e}")
                self.last_known_running = state.in_use

            if stop_event.wait(timeout=poll_interval):
                break

        logger.info("Camera monitoring loop stopped")
