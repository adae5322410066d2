"""
ElmWatch Rebuild Package.

Runs the build once at startup and again for every ChangeSet.
Requires Python 3.11+.
"""

from rebuild.build_runner import BuildResult, BuildRunner, first_error_block, select_body
from rebuild.config import RunConfig
from rebuild.display import DisplayFrame, TerminalDisplay
from rebuild.errors import (
    BuildSpawnError,
    ConfigurationError,
    NoWatchPathsError,
    RebuildError,
    WorkingDirectoryError,
)
from rebuild.orchestrator import OrchestratorState, RebuildOrchestrator

__all__ = [
    # Configuration
    "RunConfig",
    # Build
    "BuildResult",
    "BuildRunner",
    "first_error_block",
    "select_body",
    # Display
    "DisplayFrame",
    "TerminalDisplay",
    # Orchestration
    "OrchestratorState",
    "RebuildOrchestrator",
    # Errors
    "RebuildError",
    "ConfigurationError",
    "NoWatchPathsError",
    "WorkingDirectoryError",
    "BuildSpawnError",
]
