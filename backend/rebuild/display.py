"""
ElmWatch Terminal Display.

Redraws the whole terminal for every build.
Requires Python 3.11+.
"""

import sys
from dataclasses import dataclass
from typing import TextIO

from watcher.models import ChangeSet

CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"
OUTPUT_ENCODING = "utf-8"


@dataclass(frozen=True, slots=True)
class DisplayFrame:
    """Contents of one full-screen redraw."""

    main: str
    paths: tuple[str, ...]
    body: str
    changed: ChangeSet | None = None

    def header_lines(self) -> list[str]:
        lines = [f"Main: {self.main}. Path(s): {', '.join(self.paths)}"]
        if self.changed is not None:
            lines.append(f"Changed: {self.changed.summary()}")
        return lines

    def text(self) -> str:
        """Frame text without terminal control sequences."""
        return "".join(f"{line}\n" for line in self.header_lines()) + self.body


class TerminalDisplay:
    """Owns the output stream; every render replaces the previous frame."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._frames_rendered = 0

    def _write(self, text: str) -> None:
        # Build output is arbitrary; bypass the stream's own encoding when it has one
        buffer = getattr(self._stream, "buffer", None)
        if buffer is None:
            self._stream.write(text)
            self._stream.flush()
            return
        self._stream.flush()
        buffer.write(text.encode(OUTPUT_ENCODING, errors="replace"))
        buffer.flush()

    def clear(self) -> None:
        """Clear the screen and move the cursor to the origin."""
        self._write(CLEAR_SCREEN + CURSOR_HOME)

    def render(self, frame: DisplayFrame) -> None:
        self._write(CLEAR_SCREEN + CURSOR_HOME + frame.text())
        self._frames_rendered += 1

    @property
    def frames_rendered(self) -> int:
        return self._frames_rendered
