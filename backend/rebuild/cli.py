"""
ElmWatch Command Line Interface.

Watch paths and rerun the build on every change.
Requires Python 3.11+.

Usage:
    elm-watch [--single] src/Main.elm src/
"""

import argparse
import sys

from rebuild.config import RunConfig
from rebuild.errors import RebuildError
from rebuild.orchestrator import RebuildOrchestrator
from utils.config import get_settings
from utils.logger import configure_logging, get_logger
from watcher.errors import WatchError


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="elm-watch",
        description="Rerun the build whenever a watched path changes",
    )
    parser.add_argument(
        "main",
        help="Build entry point, passed to the build tool",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to watch (at least one)",
    )
    parser.add_argument(
        "-s",
        "--single",
        action="store_true",
        help="Only show the first error of the build output",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {settings.app_version}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    configure_logging()
    logger = get_logger("elm_watch")

    try:
        config = RunConfig.from_args(args.main, args.paths, single=args.single)
        RebuildOrchestrator(config).run()
    except KeyboardInterrupt:
        print("\nStopped", file=sys.stderr)
        sys.exit(130)
    except (RebuildError, WatchError) as e:
        logger.debug("fatal_error", error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
