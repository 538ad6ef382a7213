"""Shared enums, tick context, and error types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

Offset = tuple[float, float]


class EntityClass(str, Enum):
    """Enemy tiers, listed in collision priority order (nearest the player first)."""

    FRONT = "front"
    MID = "mid"
    BACK = "back"


# Hit testing prefers the rows nearest the player.
HIT_ORDER: tuple[EntityClass, ...] = (EntityClass.FRONT, EntityClass.MID, EntityClass.BACK)
# Extremity scans for the game-over line walk the classes the other way round.
DEPTH_ORDER: tuple[EntityClass, ...] = (EntityClass.BACK, EntityClass.MID, EntityClass.FRONT)


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def sign(self) -> float:
        return -1.0 if self is Direction.LEFT else 1.0

    def flipped(self) -> Direction:
        return Direction.RIGHT if self is Direction.LEFT else Direction.LEFT


class GameState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    OVER = "over"


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    now: float
    dt: float
    request_stop: Callable[[], None]


class InvadersError(Exception):
    """Base class for errors raised by the simulation."""


class GridShapeError(InvadersError, ValueError):
    """Raised when an entity grid's buffers do not match rows * cols."""

    def __init__(self, entity_class: EntityClass, expected: int, message: str) -> None:
        self.entity_class = entity_class
        self.expected = expected
        super().__init__(message)


class ConfigError(InvadersError, ValueError):
    """Raised on invalid tunables."""


class SignalError(InvadersError, ValueError):
    """Raised when a signal name or payload is not part of the game's catalogue."""


# Signal names published on the game's SignalBus.
GAME_STARTED = "game_started"
PROJECTILE_FIRED = "projectile_fired"
ENEMY_DESTROYED = "enemy_destroyed"
FORMATION_REVERSED = "formation_reversed"
GAME_OVER = "game_over"
GAME_RESET = "game_reset"

# Payload fields carried by each signal.
SIGNAL_FIELDS: dict[str, frozenset[str]] = {
    GAME_STARTED: frozenset({"enemies"}),
    PROJECTILE_FIRED: frozenset({"x", "y"}),
    ENEMY_DESTROYED: frozenset({"entity_class", "index", "score", "total"}),
    FORMATION_REVERSED: frozenset({"direction", "tick_period", "shift_factor"}),
    GAME_OVER: frozenset({"score", "reason"}),
    GAME_RESET: frozenset(),
}


if TYPE_CHECKING:
    from invaders.game import Session

System = Callable[["Session", TickContext], None]
