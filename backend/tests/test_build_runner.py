"""
Tests for the build runner and output selection.

Requires Python 3.11+.
"""

import sys

import pytest

from rebuild.build_runner import BuildResult, BuildRunner, first_error_block, select_body
from rebuild.errors import BuildSpawnError


class TestBuildResult:
    """Test cases for BuildResult output selection."""

    def test_stderr_wins_over_stdout(self):
        result = BuildResult(returncode=1, stdout=b"Compiling ...\n", stderr=b"-- TYPE MISMATCH --\n")

        assert result.selected_output() == "-- TYPE MISMATCH --\n"
        assert result.failed

    def test_stdout_when_stderr_empty(self):
        result = BuildResult(returncode=0, stdout=b"Success! Compiled 3 modules.\n")

        assert result.selected_output() == "Success! Compiled 3 modules.\n"
        assert not result.failed

    def test_invalid_utf8_is_replaced(self):
        result = BuildResult(returncode=0, stdout=b"ok \xff\n")

        assert result.selected_output() == "ok �\n"

    def test_stderr_decides_failure_not_exit_code(self):
        """Warnings on stderr are displayed like errors."""
        result = BuildResult(returncode=0, stdout=b"done\n", stderr=b"warning\n")

        assert result.failed
        assert result.selected_output() == "warning\n"


class TestSingleErrorMode:
    """Test cases for first-error truncation."""

    def test_first_error_block(self):
        assert first_error_block("line A\n\n\nline B") == "line A"

    def test_only_first_separator_matters(self):
        assert first_error_block("A\n\n\nB\n\n\nC") == "A"

    def test_without_separator_keeps_everything(self):
        assert first_error_block("line A\n\nline B") == "line A\n\nline B"

    def test_select_body_single(self):
        result = BuildResult(returncode=1, stderr=b"line A\n\n\nline B")

        assert select_body(result, single=True) == "line A"

    def test_select_body_full(self):
        result = BuildResult(returncode=1, stderr=b"line A\n\n\nline B")

        assert select_body(result, single=False) == "line A\n\n\nline B"


class TestBuildRunner:
    """Test cases for BuildRunner with real subprocesses."""

    def test_captures_stdout(self):
        runner = BuildRunner([sys.executable, "-c", "print('Success!')"])

        result = runner.run()

        assert result.returncode == 0
        assert result.stdout.strip() == b"Success!"
        assert result.stderr == b""

    def test_captures_stderr_and_exit_status(self):
        script = "import sys; print('partial'); sys.stderr.write('ERROR\\n'); sys.exit(1)"
        runner = BuildRunner([sys.executable, "-c", script])

        result = runner.run()

        assert result.returncode == 1
        assert result.stderr.strip() == b"ERROR"
        assert result.selected_output().strip() == "ERROR"

    def test_build_does_not_read_terminal_input(self):
        runner = BuildRunner([sys.executable, "-c", "import sys; print(repr(sys.stdin.read()))"])

        result = runner.run()

        assert result.stdout.strip() == b"''"

    def test_missing_tool_raises_spawn_error(self):
        runner = BuildRunner(["elmwatch-no-such-build-tool", "make", "src/Main.elm"])

        with pytest.raises(BuildSpawnError) as exc_info:
            runner.run()

        assert exc_info.value.argv[0] == "elmwatch-no-such-build-tool"
        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert "Failed to run elmwatch-no-such-build-tool make" in str(exc_info.value)

    def test_argv_copy(self):
        argv = ["elm", "make", "src/Main.elm"]
        runner = BuildRunner(argv)
        argv.append("--debug")

        assert runner.argv == ["elm", "make", "src/Main.elm"]
