#!/usr/bin/env python3
"""
ElmWatch Runner Script.

Runs the watcher from a source checkout without installing it.
Requires Python 3.11+.

Usage:
    python scripts/watch.py [--single] src/Main.elm src/
"""

import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from rebuild.cli import main


if __name__ == "__main__":
    main()
