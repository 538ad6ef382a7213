"""FrameScheduler - start/stop/tick dispatch of systems against a session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from invaders.clock import FrameClock
from invaders.types import System, TickContext

if TYPE_CHECKING:
    from invaders.game import Session

Hook = Callable[["Session", TickContext], None]


class FrameScheduler:
    """Runs registered systems, in order, once per frame while started.

    ``start()`` returns a generation token. A frontend that queues frame
    callbacks can pass it back to ``tick()``; callbacks queued before the
    latest ``stop()`` are then dropped even if the scheduler was restarted
    in between. Without a token, ticks are dropped whenever the scheduler
    is stopped.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._clock = FrameClock()
        self._systems: list[System] = []
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._running = False
        self._generation = 0
        self._stop_requested = False

    @property
    def clock(self) -> FrameClock:
        return self._clock

    @property
    def running(self) -> bool:
        return self._running

    @property
    def generation(self) -> int:
        return self._generation

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def start(self, now: float = 0.0) -> int:
        if self._running:
            return self._generation
        self._running = True
        self._stop_requested = False
        self._clock.reset()
        ctx = self._clock.context(now, 0.0, self._request_stop)
        for hook in self._start_hooks:
            hook(self._session, ctx)
        return self._generation

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._generation += 1
        ctx = self._clock.context(
            self._clock.previous_timestamp or 0.0, 0.0, self._request_stop
        )
        for hook in self._stop_hooks:
            hook(self._session, ctx)

    def tick(self, now: float, generation: int | None = None) -> bool:
        """Dispatch one frame. Returns False if the frame was dropped."""
        if not self._running:
            return False
        if generation is not None and generation != self._generation:
            return False

        self._stop_requested = False
        dt = self._clock.advance(now)
        ctx = self._clock.context(now, dt, self._request_stop)
        for system in self._systems:
            system(self._session, ctx)
            if self._stop_requested:
                break
        if self._stop_requested:
            self.stop()
        return True
