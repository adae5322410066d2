"""
ElmWatch Debouncer.

Debounces rapid file system events.
Requires Python 3.11+.
"""

import threading
from collections.abc import Callable
from typing import Any

from utils.logger import LoggerMixin
from watcher.models import RawEvent


class Debouncer(LoggerMixin):
    """
    Debounces rapid file changes.

    Accumulates raw events and triggers the callback once no new event
    has arrived for the full delay. Every new event restarts the timer,
    so a continuous burst of writes postpones emission until the writes
    stop. Each emitted batch holds every event of one window.
    """

    def __init__(
        self,
        delay_ms: int = 50,
        callback: Callable[[list[RawEvent]], Any] | None = None,
        on_error: Callable[[Exception], Any] | None = None,
    ) -> None:
        """
        Initialize the debouncer.

        Args:
            delay_ms: Quiet period in milliseconds before emitting a batch
            callback: Function to call with each batch of raw events
            on_error: Function to call when the callback raises
        """
        self._delay = delay_ms / 1000.0
        self._callback = callback
        self._on_error = on_error
        self._pending: list[RawEvent] = []
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._lock = threading.Lock()
        # Held while a batch is handed to the callback; batches go out in window order
        self._emit_lock = threading.Lock()

    def set_callback(self, callback: Callable[[list[RawEvent]], Any]) -> None:
        """Set or update the callback function."""
        self._callback = callback

    def debounce(self, event: RawEvent) -> None:
        """
        Add a raw event to the current window.

        The callback will be triggered after delay_ms milliseconds
        of no new events.

        Args:
            event: Raw event from the filesystem source
        """
        with self._lock:
            # Cancel existing timer
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

            self._pending.append(event)
            self._generation += 1

            # Start new timer
            self._timer = threading.Timer(
                self._delay, self._process_pending, args=(self._generation,)
            )
            self._timer.daemon = True
            self._timer.start()

    def _process_pending(self, generation: int) -> None:
        """Emit the pending window if no newer event restarted the timer."""
        with self._lock:
            # A timer that already fired can lose the race against a new event
            if generation != self._generation or not self._pending:
                return

            batch = self._pending
            self._pending = []
            self._timer = None
            self._emit_lock.acquire()

        try:
            self.log.debug("processing_debounced_changes", count=len(batch))
            self._dispatch(batch)
        finally:
            self._emit_lock.release()

    def _dispatch(self, batch: list[RawEvent]) -> None:
        """Hand a batch to the callback, routing failures to on_error."""
        if self._callback is None:
            return
        try:
            self._callback(batch)
        except Exception as e:
            self.log.error("debounce_callback_failed", error=str(e))
            if self._on_error is not None:
                self._on_error(e)

    def flush(self) -> list[RawEvent]:
        """
        Immediately emit all pending events.

        Returns:
            The raw events that were pending
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

            batch = self._pending
            self._pending = []
            self._generation += 1
            self._emit_lock.acquire()

        try:
            if batch:
                self._dispatch(batch)
        finally:
            self._emit_lock.release()

        return batch

    def clear(self) -> None:
        """Clear all pending events without emitting them."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = []
            self._generation += 1

    @property
    def delay_ms(self) -> int:
        """Debounce window in milliseconds."""
        return round(self._delay * 1000)

    @property
    def pending_count(self) -> int:
        """Get number of pending raw events."""
        return len(self._pending)

    @property
    def pending_paths(self) -> list[str]:
        """Get the paths touched by pending events, in arrival order."""
        return [path for event in self._pending for path in event.paths]
