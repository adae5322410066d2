"""
ElmWatch Build Runner.

Runs the external build command and selects what to display.
Requires Python 3.11+.
"""

import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass

from rebuild.errors import BuildSpawnError
from utils.logger import LoggerMixin

# Blank-line run separating diagnostics in the build tool's output
SINGLE_ERROR_SEPARATOR = "\n\n\n"


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Captured output of one build invocation."""

    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def failed(self) -> bool:
        """Anything on stderr counts as a failed build."""
        return bool(self.stderr)

    def selected_output(self) -> str:
        """
        The stream to display.

        stderr when it has any content, stdout otherwise. Invalid UTF-8
        is replaced rather than raising.
        """
        stream = self.stderr if self.stderr else self.stdout
        return stream.decode("utf-8", errors="replace")


def first_error_block(output: str) -> str:
    """Keep everything before the first triple newline."""
    return output.split(SINGLE_ERROR_SEPARATOR, 1)[0]


def select_body(result: BuildResult, single: bool = False) -> str:
    """
    Pick the display body for a build result.

    Args:
        result: Captured build output
        single: Only keep the first diagnostic block

    Returns:
        Text to render below the header
    """
    output = result.selected_output()
    if single:
        return first_error_block(output)
    return output


class BuildRunner(LoggerMixin):
    """
    Invokes the build tool as a synchronous subprocess.

    There is no timeout: a hung build blocks the caller until it exits.
    """

    def __init__(self, argv: Sequence[str]) -> None:
        """
        Initialize the runner.

        Args:
            argv: Full command line of the build
        """
        self._argv = list(argv)

    @property
    def argv(self) -> list[str]:
        """Command line of the build."""
        return list(self._argv)

    def run(self) -> BuildResult:
        """
        Run the build and capture its output.

        Raises:
            BuildSpawnError: If the build tool cannot be started
        """
        self.log.debug("build_started", argv=self._argv)
        start_time = time.perf_counter()

        try:
            completed = subprocess.run(
                self._argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise BuildSpawnError(self._argv, e) from e

        result = BuildResult(
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
        self.log.debug(
            "build_finished",
            returncode=result.returncode,
            failed=result.failed,
            time_seconds=round(time.perf_counter() - start_time, 2),
        )
        return result
