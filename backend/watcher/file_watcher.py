"""
ElmWatch File Watcher.

Cross-platform file system monitoring using watchdog.
Requires Python 3.11+.
"""

import os
from collections.abc import Callable, Sequence
from typing import Any

from watchdog.events import (
    EVENT_TYPE_CLOSED_NO_WRITE,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MOVED,
    EVENT_TYPE_OPENED,
    DirModifiedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from utils.logger import LoggerMixin
from watcher.debouncer import Debouncer
from watcher.errors import WatchRegistrationError, WatchSourceError
from watcher.models import RawEvent

# Read-only access; the build tool itself produces these
_IGNORED_EVENT_TYPES = frozenset({EVENT_TYPE_OPENED, EVENT_TYPE_CLOSED_NO_WRITE})

ErrorCallback = Callable[[Exception, str | None], Any]


class ChangeEventHandler(FileSystemEventHandler, LoggerMixin):
    """
    Forwards every change-worthy file system event to the debouncer.

    Event kinds are not interpreted: creations, modifications,
    deletions and moves all count as changes.
    """

    def __init__(
        self,
        debouncer: Debouncer,
        roots: Sequence[str] = (),
        on_error: ErrorCallback | None = None,
    ) -> None:
        """
        Initialize the event handler.

        Args:
            debouncer: Debouncer to accumulate events
            roots: Absolute watched paths, used to detect root removal
            on_error: Callback for source failures
        """
        super().__init__()
        self._debouncer = debouncer
        self._roots = frozenset(roots)
        self._on_error = on_error

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Handle every event type watchdog dispatches."""
        if event.event_type in _IGNORED_EVENT_TYPES:
            return
        # Parent directories are touched whenever an entry inside changes
        if isinstance(event, DirModifiedEvent):
            return

        paths = [os.fsdecode(event.src_path)]
        if event.event_type == EVENT_TYPE_MOVED and event.dest_path:
            paths.append(os.fsdecode(event.dest_path))

        self.log.debug("file_event", kind=event.event_type, paths=paths)
        self._debouncer.debounce(RawEvent(paths=tuple(paths), kind=event.event_type))

        if event.event_type in (EVENT_TYPE_DELETED, EVENT_TYPE_MOVED) and paths[0] in self._roots:
            self._report_root_lost(paths[0])

    def _report_root_lost(self, path: str) -> None:
        self.log.warning("watched_path_removed", path=path)
        if self._on_error is not None:
            self._on_error(WatchSourceError(path, "watched path removed"), path)


class FileWatcher(LoggerMixin):
    """
    Watches a set of paths for changes.

    Uses watchdog for cross-platform file system monitoring. Raw events
    are funnelled through the debouncer so a burst of writes produces a
    single batch.
    """

    def __init__(
        self,
        paths: Sequence[str],
        debouncer: Debouncer,
        recursive: bool = True,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """
        Initialize the file watcher.

        Args:
            paths: Paths to watch, in the order given by the user
            debouncer: Debouncer receiving raw events
            recursive: Whether to watch subdirectories
            on_error: Callback for failures reported while running
        """
        self._paths = list(paths)
        self._recursive = recursive
        self._debouncer = debouncer

        self._handler = ChangeEventHandler(
            debouncer=debouncer,
            roots=[os.path.abspath(path) for path in self._paths],
            on_error=on_error,
        )

        self._observer: Observer | None = None
        self._running = False

    def start(self) -> None:
        """
        Register every watch and start delivering events.

        Raises:
            WatchRegistrationError: If any path cannot be watched
        """
        if self._running:
            return

        self._observer = Observer()
        self._observer.start()
        self._running = True

        try:
            for path in self._paths:
                self._register(path)
        except WatchRegistrationError:
            self.stop()
            raise

        self.log.debug(
            "file_watcher_started",
            paths=self._paths,
            recursive=self._recursive,
            debounce_ms=self._debouncer.delay_ms,
        )

    def _register(self, path: str) -> None:
        """Schedule a watch on one path."""
        assert self._observer is not None
        absolute = os.path.abspath(path)

        if not os.path.exists(absolute):
            raise WatchRegistrationError(path, FileNotFoundError(f"No such file or directory: {absolute}"))

        try:
            self._observer.schedule(self._handler, absolute, recursive=self._recursive)
        except OSError as e:
            raise WatchRegistrationError(path, e) from e

        self.log.debug("watch_registered", path=absolute)

    def stop(self) -> None:
        """Stop watching for file changes, dropping any pending window."""
        if not self._running:
            return

        self._debouncer.clear()

        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None

        self._running = False
        self.log.debug("file_watcher_stopped")

    @property
    def paths(self) -> list[str]:
        """Watched paths as given."""
        return list(self._paths)

    @property
    def is_running(self) -> bool:
        """Check if the watcher is running."""
        return self._running

    def __enter__(self) -> "FileWatcher":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.stop()
