"""Shooter controller - horizontal position driven by sampled input."""

from __future__ import annotations

from invaders.config import GameConfig
from invaders.input import InputState


class ShooterController:
    """Moves the shooter along the bottom edge on its own input cadence.

    Movement is evaluated every ``shooter_tick`` milliseconds, independently
    of the formation's tick period, and scaled by the time since the last
    evaluation.
    """

    def __init__(self, config: GameConfig) -> None:
        self._config = config
        self._offset_x = 0.0
        self._last_sample: float | None = None

    @property
    def offset_x(self) -> float:
        return self._offset_x

    @property
    def offset_y(self) -> float:
        return self._config.shooter_y

    def update(self, now: float, intent: InputState) -> float:
        if self._last_sample is None:
            self._last_sample = now
        elapsed = now - self._last_sample
        if elapsed < self._config.shooter_tick:
            return self._offset_x
        self._last_sample = now

        # speed is expressed per centisecond
        step = self._config.shooter_speed * elapsed * 0.01
        limit = self._config.shooter_range
        if intent.left:
            self._offset_x = max(-limit, self._offset_x - step)
        elif intent.right:
            self._offset_x = min(limit, self._offset_x + step)
        return self._offset_x

    def reset(self) -> None:
        self._offset_x = 0.0
        self._last_sample = None
