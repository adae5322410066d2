"""
ElmWatch Change Aggregator.

Turns debounced batches of raw events into ChangeSets and publishes
them, together with source failures, on the rebuild channel.
Requires Python 3.11+.
"""

import queue
from collections.abc import Iterable
from pathlib import Path

from utils.logger import LoggerMixin
from watcher.models import ChangeSet, RawEvent, WatchFailure, WatchMessage
from watcher.paths import relativize


class ChangeAggregator(LoggerMixin):
    """
    Coalesces raw event batches into ChangeSets.

    The aggregator is the producer end of an unbounded FIFO channel.
    The rebuild loop is its single consumer.
    """

    def __init__(
        self,
        cwd: Path,
        channel: "queue.Queue[WatchMessage] | None" = None,
    ) -> None:
        """
        Initialize the aggregator.

        Args:
            cwd: Working directory snapshot used to relativize paths
            channel: Queue to publish on (a fresh unbounded queue by default)
        """
        self._cwd = cwd
        self._channel: queue.Queue[WatchMessage] = channel if channel is not None else queue.Queue()

    @property
    def cwd(self) -> Path:
        """Working directory paths are displayed relative to."""
        return self._cwd

    @property
    def channel(self) -> "queue.Queue[WatchMessage]":
        """The queue ChangeSets and failures are published on."""
        return self._channel

    def aggregate(self, batch: Iterable[RawEvent]) -> ChangeSet | None:
        """
        Collapse a batch of raw events into one ChangeSet.

        Args:
            batch: Raw events observed within one debounce window

        Returns:
            ChangeSet of distinct relativized paths, or None if the
            batch touched no paths
        """
        paths = {
            relativize(self._cwd, path)
            for event in batch
            for path in event.paths
        }
        if not paths:
            return None
        return ChangeSet.from_paths(paths)

    def on_batch(self, batch: list[RawEvent]) -> None:
        """Debouncer callback: publish the ChangeSet for a batch."""
        change_set = self.aggregate(batch)
        if change_set is None:
            return

        self.log.debug(
            "change_set_ready",
            events=len(batch),
            paths=list(change_set.paths),
        )
        self._channel.put(change_set)

    def report_error(self, error: BaseException, path: str | None = None) -> None:
        """Publish a filesystem source failure without stopping the stream."""
        self._channel.put(WatchFailure(error=error, path=path))

    def get(self, timeout: float | None = None) -> WatchMessage:
        """
        Block until the next message is available.

        Raises:
            queue.Empty: If timeout elapses first
        """
        return self._channel.get(timeout=timeout)
