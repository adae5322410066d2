"""
ElmWatch Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

import io
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from fakes import BatchCollector, FakeWatcher
from rebuild.config import RunConfig
from rebuild.display import TerminalDisplay
from utils.config import get_settings
from utils.logger import configure_logging


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Re-read settings from the environment and route logs to the current stderr."""
    get_settings.cache_clear()
    configure_logging()
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_fake_watchers() -> None:
    FakeWatcher.instances.clear()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a small Elm project layout."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "Main.elm").write_text("module Main exposing (main)\n")
    (src / "Page").mkdir()
    (src / "Page" / "Home.elm").write_text("module Page.Home exposing (view)\n")
    return tmp_path


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., RunConfig]:
    """Factory for run configurations rooted at tmp_path."""

    def _make(**overrides) -> RunConfig:
        values = {
            "main": "src/Main.elm",
            "paths": ("src", "tests"),
            "cwd": tmp_path,
        }
        values.update(overrides)
        return RunConfig(**values)

    return _make


@pytest.fixture
def screen() -> io.StringIO:
    """In-memory terminal."""
    return io.StringIO()


@pytest.fixture
def display(screen: io.StringIO) -> TerminalDisplay:
    return TerminalDisplay(stream=screen)


@pytest.fixture
def collector() -> BatchCollector:
    return BatchCollector()
