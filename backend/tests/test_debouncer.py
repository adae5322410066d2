"""
Tests for the sliding-window Debouncer.

Requires Python 3.11+.
"""

import time

import pytest

from watcher.debouncer import Debouncer
from watcher.models import RawEvent


def _event(path: str) -> RawEvent:
    return RawEvent(paths=(path,), kind="modified")


class TestDebouncer:
    """Test cases for Debouncer."""

    def test_single_change_yields_one_batch(self, collector):
        debouncer = Debouncer(delay_ms=30, callback=collector)

        debouncer.debounce(_event("/p/a.elm"))

        assert collector.wait_for(1)
        time.sleep(0.2)
        assert len(collector.batches) == 1
        assert collector.batches[0] == [_event("/p/a.elm")]

    def test_burst_within_window_is_coalesced(self, collector):
        debouncer = Debouncer(delay_ms=200, callback=collector)

        for name in ["a", "b", "a", "c", "b"]:
            debouncer.debounce(_event(f"/p/{name}.elm"))

        assert collector.wait_for(1)
        time.sleep(0.4)
        assert len(collector.batches) == 1
        assert len(collector.batches[0]) == 5

    def test_spaced_changes_yield_separate_batches(self, collector):
        debouncer = Debouncer(delay_ms=20, callback=collector)

        for name in ["a", "b", "c"]:
            debouncer.debounce(_event(f"/p/{name}.elm"))
            time.sleep(0.25)

        assert collector.wait_for(3)
        assert [batch[0].paths[0] for batch in collector.batches] == [
            "/p/a.elm",
            "/p/b.elm",
            "/p/c.elm",
        ]

    def test_continuous_writes_delay_emission(self, collector):
        """The timer restarts on every event instead of ticking."""
        debouncer = Debouncer(delay_ms=300, callback=collector)

        for _ in range(12):
            debouncer.debounce(_event("/p/a.elm"))
            time.sleep(0.03)

        # 360ms of writes, longer than the window, but never quiet for 300ms
        assert collector.batches == []
        assert collector.wait_for(1)
        assert len(collector.batches[0]) == 12

    def test_flush_emits_pending_immediately(self, collector):
        debouncer = Debouncer(delay_ms=5000, callback=collector)
        debouncer.debounce(_event("/p/a.elm"))
        debouncer.debounce(_event("/p/b.elm"))

        flushed = debouncer.flush()

        assert [e.paths[0] for e in flushed] == ["/p/a.elm", "/p/b.elm"]
        assert len(collector.batches) == 1
        assert debouncer.pending_count == 0

    def test_flush_without_pending_does_not_call_back(self, collector):
        debouncer = Debouncer(delay_ms=50, callback=collector)

        assert debouncer.flush() == []
        assert collector.batches == []

    def test_clear_drops_pending(self, collector):
        debouncer = Debouncer(delay_ms=50, callback=collector)
        debouncer.debounce(_event("/p/a.elm"))

        debouncer.clear()
        time.sleep(0.2)

        assert collector.batches == []
        assert debouncer.pending_count == 0

    def test_pending_paths(self):
        debouncer = Debouncer(delay_ms=5000)
        debouncer.debounce(RawEvent(paths=("/p/old.elm", "/p/new.elm"), kind="moved"))

        assert debouncer.pending_paths == ["/p/old.elm", "/p/new.elm"]
        debouncer.clear()

    def test_callback_error_is_reported(self):
        errors: list[Exception] = []

        def failing(batch):
            raise RuntimeError("callback blew up")

        debouncer = Debouncer(delay_ms=5000, callback=failing, on_error=errors.append)
        debouncer.debounce(_event("/p/a.elm"))
        debouncer.flush()

        assert len(errors) == 1
        assert str(errors[0]) == "callback blew up"

    @pytest.mark.parametrize("delay_ms", [1, 50, 500])
    def test_delay_ms(self, delay_ms):
        assert Debouncer(delay_ms=delay_ms).delay_ms == delay_ms
