"""
ElmWatch Path Normalization.

Displays changed paths relative to the working directory.
Requires Python 3.11+.
"""

import os
from pathlib import Path, PurePath


def relativize(cwd: Path | str, path: str | bytes | os.PathLike[str]) -> str:
    """
    Display a path relative to the working directory when possible.

    Paths outside ``cwd`` (or relative paths) are returned unchanged,
    character for character.

    Args:
        cwd: Working directory captured at startup
        path: Path reported by the filesystem source

    Returns:
        Display string for the path
    """
    raw = os.fsdecode(path)
    try:
        return str(PurePath(raw).relative_to(cwd))
    except ValueError:
        return raw
