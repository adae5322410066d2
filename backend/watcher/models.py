"""
ElmWatch Watcher Data Models.

Messages flowing from the filesystem watch source to the rebuild loop.
Requires Python 3.11+.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RawEvent:
    """
    A single notification from the filesystem source.

    The kind is carried for logging only; every raw event is treated
    as a change.
    """

    paths: tuple[str, ...]
    kind: str = "modified"


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """The deduplicated, relativized paths that triggered one rebuild."""

    paths: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.paths:
            raise ValueError("ChangeSet must contain at least one path")

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> "ChangeSet":
        """Build a ChangeSet with duplicates removed and paths sorted."""
        return cls(paths=tuple(sorted(set(paths))))

    def summary(self) -> str:
        """Human-readable list used in the ``Changed:`` header line."""
        return ", ".join(self.paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __contains__(self, path: object) -> bool:
        return path in self.paths


@dataclass(frozen=True, slots=True)
class WatchFailure:
    """An error reported by the filesystem source mid-run."""

    error: BaseException
    path: str | None = None

    @property
    def message(self) -> str:
        """Describe the failure, including the underlying error type."""
        detail = f"{type(self.error).__name__}: {self.error}"
        if self.path is not None:
            return f"{self.path}: {detail}"
        return detail


# Anything the rebuild loop can receive from the channel
WatchMessage = ChangeSet | WatchFailure
