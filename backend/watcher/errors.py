"""
ElmWatch Watcher Errors.

Requires Python 3.11+.
"""


class WatchError(Exception):
    """Base class for filesystem watch errors."""


class WatchRegistrationError(WatchError):
    """A watch could not be registered on a path."""

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to watch {path}: {cause}")


class WatchSourceError(WatchError):
    """The filesystem source failed while running (e.g. a watched path vanished)."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")
