"""
ElmWatch Rebuild Orchestrator.

Owns the watches and drives the build-and-render cycle.
Requires Python 3.11+.
"""

from collections.abc import Callable
from enum import Enum
from typing import Protocol

from rebuild.build_runner import BuildRunner, select_body
from rebuild.config import RunConfig
from rebuild.display import DisplayFrame, TerminalDisplay
from utils.logger import LoggerMixin
from watcher.aggregator import ChangeAggregator
from watcher.debouncer import Debouncer
from watcher.file_watcher import FileWatcher
from watcher.models import ChangeSet, WatchFailure, WatchMessage


class OrchestratorState(str, Enum):
    """The two states of the rebuild loop."""

    AWAITING_EVENT = "awaiting-event"
    BUILDING = "building"


class WatchSource(Protocol):
    """What the orchestrator needs from a watcher."""

    def start(self) -> None: ...

    def stop(self) -> None: ...


WatcherFactory = Callable[..., WatchSource]


class RebuildOrchestrator(LoggerMixin):
    """
    Runs one build per ChangeSet.

    Startup registers watches on every configured path and runs a
    single unconditional build. After that the loop blocks on the
    aggregator's channel. Builds are strictly serial: ChangeSets that
    arrive during a build wait in the channel and are each handled, in
    order, once the current frame has been rendered.
    """

    def __init__(
        self,
        config: RunConfig,
        runner: BuildRunner | None = None,
        display: TerminalDisplay | None = None,
        aggregator: ChangeAggregator | None = None,
        watcher_factory: WatcherFactory = FileWatcher,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            config: Startup configuration
            runner: Build runner (built from config by default)
            display: Display surface (stdout by default)
            aggregator: Change aggregator (relative to config.cwd by default)
            watcher_factory: Creates the watch source from
                (paths, debouncer, recursive, on_error)
        """
        self._config = config
        self._runner = runner or BuildRunner(config.build_argv())
        self._display = display or TerminalDisplay()
        self._aggregator = aggregator or ChangeAggregator(cwd=config.cwd)
        self._watcher_factory = watcher_factory

        self._debouncer = Debouncer(
            delay_ms=config.debounce_delay_ms,
            callback=self._aggregator.on_batch,
            on_error=self._aggregator.report_error,
        )
        self._watcher: WatchSource | None = None
        self._state = OrchestratorState.AWAITING_EVENT
        self._build_count = 0

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def build_count(self) -> int:
        """Number of completed build cycles."""
        return self._build_count

    @property
    def aggregator(self) -> ChangeAggregator:
        return self._aggregator

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    def start(self) -> None:
        """
        Register watches, then run the initial build.

        Raises:
            WatchRegistrationError: If a path cannot be watched
            BuildSpawnError: If the build tool cannot be started
        """
        self._watcher = self._watcher_factory(
            self._config.paths,
            self._debouncer,
            recursive=self._config.recursive,
            on_error=self._aggregator.report_error,
        )
        self._watcher.start()

        self.log.debug(
            "watching",
            main=self._config.main,
            paths=list(self._config.paths),
            single=self._config.single,
        )
        self.build_cycle()

    def stop(self) -> None:
        """Stop the watch source."""
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None

    def build_cycle(self, changed: ChangeSet | None = None) -> None:
        """
        Run the build once and render its output.

        Args:
            changed: Paths that triggered this build, None for the initial build
        """
        self._state = OrchestratorState.BUILDING
        try:
            result = self._runner.run()
            frame = DisplayFrame(
                main=self._config.main,
                paths=self._config.paths,
                body=select_body(result, single=self._config.single),
                changed=changed,
            )
            self._display.render(frame)
            self._build_count += 1
        finally:
            self._state = OrchestratorState.AWAITING_EVENT

    def handle(self, message: WatchMessage) -> None:
        """Process one message from the channel."""
        if isinstance(message, ChangeSet):
            self.log.debug("change_set_received", paths=list(message.paths))
            self.build_cycle(message)
        elif isinstance(message, WatchFailure):
            self.log.error("watch_source_error", error=message.message)
        else:
            raise TypeError(f"Unexpected watch message: {message!r}")

    def run(self, max_messages: int | None = None) -> None:
        """
        Start watching and process messages until interrupted.

        Args:
            max_messages: Return after this many messages (runs forever if None)
        """
        try:
            self.start()
            handled = 0
            while max_messages is None or handled < max_messages:
                self.handle(self._aggregator.get())
                handled += 1
        finally:
            self.stop()
