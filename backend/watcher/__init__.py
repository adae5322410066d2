"""
ElmWatch File Watcher Package.

Change aggregation: raw file system events in, debounced ChangeSets out.
Requires Python 3.11+.
"""

from watcher.aggregator import ChangeAggregator
from watcher.debouncer import Debouncer
from watcher.errors import WatchError, WatchRegistrationError, WatchSourceError
from watcher.file_watcher import FileWatcher
from watcher.models import ChangeSet, RawEvent, WatchFailure, WatchMessage
from watcher.paths import relativize

__all__ = [
    "ChangeAggregator",
    "ChangeSet",
    "Debouncer",
    "FileWatcher",
    "RawEvent",
    "WatchError",
    "WatchFailure",
    "WatchMessage",
    "WatchRegistrationError",
    "WatchSourceError",
    "relativize",
]
