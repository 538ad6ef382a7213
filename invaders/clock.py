"""FrameClock - turns externally supplied timestamps into tick contexts."""

from typing import Callable

from invaders.types import TickContext


class FrameClock:
    """Counts frames and derives deltas from monotonically increasing timestamps.

    Timestamps are milliseconds, as handed out by an animation-frame callback
    or ``time.monotonic() * 1000``. The first frame has a delta of zero.
    """

    def __init__(self) -> None:
        self._tick_number = 0
        self._previous: float | None = None

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def previous_timestamp(self) -> float | None:
        return self._previous

    def advance(self, now: float) -> float:
        """Record a frame at ``now`` and return the delta since the previous one."""
        if self._previous is not None and now < self._previous:
            raise ValueError(
                f"timestamps must not go backwards: {now} < {self._previous}"
            )
        dt = 0.0 if self._previous is None else now - self._previous
        self._previous = now
        self._tick_number += 1
        return dt

    def context(self, now: float, dt: float, stop_fn: Callable[[], None]) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            now=now,
            dt=dt,
            request_stop=stop_fn,
        )

    def reset(self) -> None:
        self._tick_number = 0
        self._previous = None
