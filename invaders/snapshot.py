"""Immutable per-frame state handed to renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from invaders.types import Direction, EntityClass, GameState, Offset

if TYPE_CHECKING:
    from invaders.game import Session


@dataclass(frozen=True)
class GridSnapshot:
    entity_class: EntityClass
    rows: int
    cols: int
    offsets: tuple[Offset, ...]
    active: tuple[bool, ...]


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs to draw one frame. Never read back by the core."""

    state: GameState
    score: int
    tick_number: int
    direction: Direction
    tick_period: float
    shift_factor: float
    shooter: Offset
    grids: tuple[GridSnapshot, ...]
    projectiles: tuple[Offset, ...]

    def grid(self, entity_class: EntityClass) -> GridSnapshot:
        for grid in self.grids:
            if grid.entity_class is entity_class:
                return grid
        raise KeyError(entity_class)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible form, e.g. for logging or a remote viewer."""
        return {
            "state": self.state.value,
            "score": self.score,
            "tick_number": self.tick_number,
            "direction": self.direction.value,
            "tick_period": self.tick_period,
            "shift_factor": self.shift_factor,
            "shooter": list(self.shooter),
            "grids": {
                g.entity_class.value: {
                    "rows": g.rows,
                    "cols": g.cols,
                    "offsets": [list(o) for o in g.offsets],
                    "active": list(g.active),
                }
                for g in self.grids
            },
            "projectiles": [list(p) for p in self.projectiles],
        }


class Renderer(Protocol):
    def render(self, snapshot: Snapshot) -> None: ...


def take_snapshot(session: Session, tick_number: int) -> Snapshot:
    formation = session.formation
    return Snapshot(
        state=session.state,
        score=session.score,
        tick_number=tick_number,
        direction=formation.direction,
        tick_period=formation.tick_period,
        shift_factor=formation.shift_factor,
        shooter=(session.shooter.offset_x, session.shooter.offset_y),
        grids=tuple(
            GridSnapshot(
                entity_class=grid.entity_class,
                rows=grid.rows,
                cols=grid.cols,
                offsets=grid.offsets,
                active=grid.active,
            )
            for grid in formation.grids.values()
        ),
        projectiles=tuple((p.x, p.y) for p in session.projectiles.visible()),
    )
