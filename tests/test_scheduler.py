"""Tests for the frame clock and the start/stop/tick scheduler."""
from __future__ import annotations

import pytest

from invaders.clock import FrameClock
from invaders.scheduler import FrameScheduler
from invaders.types import TickContext

SESSION = object()


# --- FrameClock ---

def test_clock_first_frame_has_zero_delta() -> None:
    clock = FrameClock()
    assert clock.previous_timestamp is None
    assert clock.advance(1234.0) == 0.0
    assert clock.tick_number == 1
    assert clock.previous_timestamp == 1234.0


def test_clock_delta_between_frames() -> None:
    clock = FrameClock()
    clock.advance(100.0)
    assert clock.advance(116.5) == 16.5
    assert clock.tick_number == 2


def test_clock_rejects_backwards_time() -> None:
    clock = FrameClock()
    clock.advance(100.0)
    with pytest.raises(ValueError, match="must not go backwards"):
        clock.advance(99.0)


def test_clock_reset() -> None:
    clock = FrameClock()
    clock.advance(100.0)
    clock.reset()
    assert clock.tick_number == 0
    assert clock.previous_timestamp is None


def test_clock_context() -> None:
    clock = FrameClock()
    clock.advance(10.0)
    ctx = clock.context(10.0, 0.0, lambda: None)
    assert isinstance(ctx, TickContext)
    assert ctx.tick_number == 1
    assert ctx.now == 10.0


# --- FrameScheduler ---

def _recording_scheduler():
    scheduler = FrameScheduler(SESSION)
    calls: list[tuple[str, int, float]] = []

    def first(session, ctx):
        assert session is SESSION
        calls.append(("first", ctx.tick_number, ctx.dt))

    def second(session, ctx):
        calls.append(("second", ctx.tick_number, ctx.dt))

    scheduler.add_system(first)
    scheduler.add_system(second)
    return scheduler, calls


class TestScheduler:
    def test_tick_before_start_is_dropped(self) -> None:
        scheduler, calls = _recording_scheduler()
        assert scheduler.tick(0.0) is False
        assert calls == []

    def test_systems_run_in_order(self) -> None:
        scheduler, calls = _recording_scheduler()
        scheduler.start()
        assert scheduler.tick(0.0) is True
        assert scheduler.tick(16.0) is True
        assert calls == [
            ("first", 1, 0.0),
            ("second", 1, 0.0),
            ("first", 2, 16.0),
            ("second", 2, 16.0),
        ]

    def test_stop_prevents_dispatch(self) -> None:
        scheduler, calls = _recording_scheduler()
        scheduler.start()
        scheduler.stop()
        assert scheduler.running is False
        assert scheduler.tick(0.0) is False
        assert calls == []

    def test_stale_generation_dropped_after_restart(self) -> None:
        scheduler, calls = _recording_scheduler()
        stale = scheduler.start()
        scheduler.stop()
        fresh = scheduler.start()
        assert fresh != stale
        assert scheduler.tick(0.0, stale) is False
        assert scheduler.tick(0.0, fresh) is True
        assert len(calls) == 2

    def test_start_twice_keeps_generation(self) -> None:
        scheduler = FrameScheduler(SESSION)
        assert scheduler.start() == scheduler.start()

    def test_restart_resets_clock(self) -> None:
        scheduler, calls = _recording_scheduler()
        scheduler.start()
        scheduler.tick(500.0)
        scheduler.stop()
        scheduler.start()
        scheduler.tick(100.0)
        assert calls[-1] == ("second", 1, 0.0)

    def test_request_stop_skips_remaining_systems(self) -> None:
        scheduler = FrameScheduler(SESSION)
        calls = []
        scheduler.add_system(lambda s, ctx: ctx.request_stop())
        scheduler.add_system(lambda s, ctx: calls.append("late"))
        scheduler.start()
        assert scheduler.tick(0.0) is True
        assert calls == []
        assert scheduler.running is False
        assert scheduler.tick(16.0) is False

    def test_hooks(self) -> None:
        scheduler = FrameScheduler(SESSION)
        events = []
        scheduler.on_start(lambda s, ctx: events.append(("start", ctx.now)))
        scheduler.on_stop(lambda s, ctx: events.append(("stop", ctx.now)))
        scheduler.start(5.0)
        scheduler.tick(20.0)
        scheduler.stop()
        scheduler.stop()
        assert events == [("start", 5.0), ("stop", 20.0)]
