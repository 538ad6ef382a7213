"""Formation - the three enemy grids and their shared motion state machine."""

from __future__ import annotations

import logging
from enum import Enum

from invaders.config import GameConfig
from invaders.grid import EntityGrid, layout_offsets
from invaders.types import DEPTH_ORDER, Direction, EntityClass, Offset

logger = logging.getLogger(__name__)


class StepResult(str, Enum):
    NONE = "none"
    ADVANCED = "advanced"
    REVERSED = "reversed"


class Formation:
    """Moves all enemies as one rigid body.

    Every ``tick_period`` milliseconds the formation either advances
    horizontally (scaled by the elapsed time) or, once its outermost active
    entity reaches the side bound, reverses, drops by ``downward_shift`` and
    speeds up.
    """

    def __init__(self, config: GameConfig) -> None:
        self._config = config
        self._grids: dict[EntityClass, EntityGrid] = {
            entity_class: EntityGrid.from_config(entity_class, config)
            for entity_class in EntityClass
        }
        self._direction = Direction.RIGHT
        self._tick_period = config.tick_period
        self._shift_factor = config.shift_factor
        self._last_step: float | None = None

    @property
    def grids(self) -> dict[EntityClass, EntityGrid]:
        return self._grids

    def grid(self, entity_class: EntityClass) -> EntityGrid:
        return self._grids[entity_class]

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def tick_period(self) -> float:
        return self._tick_period

    @property
    def shift_factor(self) -> float:
        return self._shift_factor

    @property
    def downward_shift(self) -> float:
        return self._config.downward_shift

    @property
    def last_step(self) -> float | None:
        return self._last_step

    def active_count(self) -> int:
        return sum(grid.active_count() for grid in self._grids.values())

    # --- Extremities across all classes ---

    def leftmost(self) -> float | None:
        values = [x for x in (g.leftmost() for g in self._grids.values()) if x is not None]
        return min(values, default=None)

    def rightmost(self) -> float | None:
        values = [x for x in (g.rightmost() for g in self._grids.values()) if x is not None]
        return max(values, default=None)

    def bottommost(self) -> Offset | None:
        """Lowest active offset, scanning back row, mid row, then front row."""
        lowest: Offset | None = None
        for entity_class in DEPTH_ORDER:
            candidate = self._grids[entity_class].bottommost()
            if candidate is None:
                continue
            if lowest is None or candidate[1] < lowest[1]:
                lowest = candidate
        return lowest

    # --- Motion ---

    def update(self, now: float) -> StepResult:
        """Run a step if a full tick period has elapsed since the last one."""
        if self._last_step is None:
            self._last_step = now
            return StepResult.NONE
        elapsed = now - self._last_step
        if elapsed < self._tick_period:
            return StepResult.NONE
        self._last_step = now
        return self.step(elapsed)

    def step(self, elapsed: float) -> StepResult:
        """Apply exactly one step for ``elapsed`` milliseconds."""
        bound = self._config.reversal_bound
        if self._direction is Direction.RIGHT:
            edge = self.rightmost()
            reached = edge is not None and edge >= bound
        else:
            edge = self.leftmost()
            reached = edge is not None and edge <= -bound

        if reached:
            self._reverse()
            return StepResult.REVERSED

        dx = self._direction.sign * self._shift_factor * elapsed * 0.001
        for grid in self._grids.values():
            grid.shift(dx=dx)
        return StepResult.ADVANCED

    def _reverse(self) -> None:
        cfg = self._config
        self._direction = self._direction.flipped()
        self._tick_period = max(cfg.tick_period_floor, self._tick_period - cfg.tick_period_decrement)
        self._shift_factor = min(cfg.shift_cap, self._shift_factor + cfg.shift_increment)
        for grid in self._grids.values():
            grid.shift(dy=-cfg.downward_shift)
        logger.debug(
            "formation reversed to %s (tick_period=%.0f ms, shift_factor=%.3f)",
            self._direction.value, self._tick_period, self._shift_factor,
        )

    def reset(self) -> None:
        for entity_class, grid in self._grids.items():
            grid.reset(layout_offsets(entity_class, self._config))
        self._direction = Direction.RIGHT
        self._tick_period = self._config.tick_period
        self._shift_factor = self._config.shift_factor
        self._last_step = None
