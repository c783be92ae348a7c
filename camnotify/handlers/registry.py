"""
Handler registry - configures handlers and fans out state change events.

Dispatch is fire-and-forget: each enabled handler's ``handle`` call is
submitted to a bounded thread pool and ``dispatch`` returns without waiting.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from .base import CameraStateHandler
from ..models import StateChangeEvent

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """
    Owns the registered handlers and delivers events to the enabled ones.

    The handler list is only mutated by ``register`` and ``cleanup``; those
    serialize with ``dispatch`` through an internal lock. Handlers never
    share state with each other.
    """

    def __init__(self, max_workers: int = 4, max_pending: int = 64):
        """
        Initialize an empty registry.

        Args:
            max_workers: Threads available for concurrent handler delivery
            max_pending: Deliveries allowed in flight before new ones are dropped
        """
        self._handlers: List[CameraStateHandler] = []
        self._max_workers = max_workers
        self._max_pending = max_pending
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending = threading.BoundedSemaphore(max_pending)
        self._lock = threading.Lock()

    def register(self, handler: CameraStateHandler) -> None:
        """Append a handler. Duplicate names are allowed."""
        with self._lock:
            self._handlers.append(handler)
        logger.debug(f"Registered handler: {handler.name}")

    @property
    def handlers(self) -> List[CameraStateHandler]:
        with self._lock:
            return list(self._handlers)

    @property
    def handler_names(self) -> List[str]:
        return [handler.name for handler in self.handlers]

    def enabled_handlers(self) -> List[CameraStateHandler]:
        """
        Get handlers that are enabled right now, in registration order.

        Evaluated on every call; nothing is cached.
        """
        return [handler for handler in self.handlers if handler.is_enabled()]

    @property
    def enabled_handler_names(self) -> List[str]:
        return [handler.name for handler in self.enabled_handlers()]

    def configure_all(self) -> None:
        """
        Configure every registered handler in registration order.

        A handler that fails stays disabled and is skipped during dispatch;
        the remaining handlers are still configured.

        Raises:
            Exception: The first configuration error, after all handlers were tried
        """
        errors: List[Exception] = []

        for handler in self.handlers:
            try:
                handler.configure()
                logger.debug(f"Configured handler: {handler.name}")
            except Exception as e:
                logger.error(f"[{handler.name}] Configuration failed: {e}")
                errors.append(e)

        if errors:
            raise errors[0]

    def dispatch(self, event: StateChangeEvent) -> List[Future]:
        """
        Deliver an event to every enabled handler without waiting.

        One handler's failure or latency never affects another's delivery.
        When ``max_pending`` deliveries are already in flight, further ones
        are dropped with a warning.

        Args:
            event: The state change to deliver

        Returns:
            List[Future]: One future per scheduled delivery, never waited on here
        """
        futures = []

        with self._lock:
            handlers = [handler for handler in self._handlers if handler.is_enabled()]
            if not handlers:
                logger.debug("No enabled handlers to dispatch to")
                return futures
            executor = self._get_executor()

            for handler in handlers:
                if not self._pending.acquire(blocking=False):
                    logger.warning(f"[{handler.name}] Dispatch backlog full, dropping event")
                    continue
                future = executor.submit(self._deliver, handler, event)
                future.add_done_callback(self._on_delivery_done)
                futures.append(future)

        logger.debug(f"Dispatched {event.action} event to {len(futures)} handler(s)")
        return futures

    def cleanup(self) -> None:
        """
        Clean up every registered handler, enabled or not, then clear the registry.

        In-flight deliveries are not drained. Safe to call more than once.
        """
        with self._lock:
            handlers = self._handlers
            self._handlers = []
            executor = self._executor
            self._executor = None

        for handler in handlers:
            try:
                handler.cleanup()
            except Exception as e:
                logger.error(f"[{handler.name}] Cleanup failed: {e}")

        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)
            logger.debug("Handler dispatch pool shut down")

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="handler"
            )
        return self._executor

    @staticmethod
    def _deliver(handler: CameraStateHandler, event: StateChangeEvent) -> None:
        try:
            handler.handle(event)
        except Exception as e:
            logger.error(f"[{handler.name}] Error handling camera state change: {e}")

    def _on_delivery_done(self, future: Future) -> None:
        self._pending.release()
        if not future.cancelled() and future.exception() is not None:
            logger.error(f"Handler delivery failed: {future.exception()}")
