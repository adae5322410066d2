"""
ElmWatch Run Configuration.

Everything the rebuild loop needs, captured once at startup.
Requires Python 3.11+.
"""

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from rebuild.errors import NoWatchPathsError, WorkingDirectoryError
from utils.config import Settings, get_settings


@dataclass(frozen=True, slots=True)
class RunConfig:
    """
    Immutable configuration for one process lifetime.

    Built from the command line, the settings and a snapshot of the
    working directory. Components receive this object instead of
    reading process globals.
    """

    main: str
    paths: tuple[str, ...]
    cwd: Path
    single: bool = False
    debounce_delay_ms: int = 50
    recursive: bool = True
    build_tool: str = "elm"
    build_command: str = "make"
    output_flag: str = "--output"
    discard_path: str = os.devnull

    def __post_init__(self) -> None:
        if not self.paths:
            raise NoWatchPathsError()

    @classmethod
    def from_args(
        cls,
        main: str,
        paths: Sequence[str],
        single: bool = False,
        settings: Settings | None = None,
        cwd: Path | None = None,
    ) -> "RunConfig":
        """
        Combine command-line arguments with settings.

        Args:
            main: Build entry point, passed verbatim to the build tool
            paths: Paths to watch
            single: Only show the first diagnostic block
            settings: Application settings (cached settings by default)
            cwd: Working directory (the process working directory by default)

        Raises:
            NoWatchPathsError: If paths is empty
            WorkingDirectoryError: If the working directory is unavailable
        """
        settings = settings or get_settings()
        if cwd is None:
            try:
                cwd = Path.cwd()
            except OSError as e:
                raise WorkingDirectoryError(e) from e

        return cls(
            main=main,
            paths=tuple(paths),
            cwd=cwd,
            single=single,
            debounce_delay_ms=settings.watcher.debounce_delay_ms,
            recursive=settings.watcher.recursive,
            build_tool=settings.build.tool,
            build_command=settings.build.command,
            output_flag=settings.build.output_flag,
            discard_path=settings.build.discard_path,
        )

    def build_argv(self) -> list[str]:
        """Command line of the build subprocess."""
        argv = [self.build_tool]
        if self.build_command:
            argv.append(self.build_command)
        argv.append(self.main)
        if self.output_flag:
            argv.append(f"{self.output_flag}={self.discard_path}")
        return argv
