"""
ElmWatch Rebuild Errors.

Fatal startup and environment errors. A failing build is not an error;
its diagnostics are rendered like any other output.
Requires Python 3.11+.
"""

from collections.abc import Sequence


class RebuildError(Exception):
    """Base class for fatal rebuild loop errors."""


class ConfigurationError(RebuildError):
    """The startup configuration cannot be used."""


class NoWatchPathsError(ConfigurationError):
    """No path to watch was given."""

    def __init__(self) -> None:
        super().__init__("Please provide a path to watch")


class WorkingDirectoryError(RebuildError):
    """The current working directory cannot be determined."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to get current directory: {cause}")


class BuildSpawnError(RebuildError):
    """The build tool could not be started."""

    def __init__(self, argv: Sequence[str], cause: BaseException) -> None:
        self.argv = list(argv)
        self.cause = cause
        super().__init__(f"Failed to run {' '.join(self.argv[:2])}: {cause}")
