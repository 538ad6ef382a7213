"""EntityGrid - per-class offsets and active flags for one enemy tier."""

from __future__ import annotations

from typing import Iterator

from invaders.config import ClassGeometry, GameConfig
from invaders.types import EntityClass, GridShapeError, Offset


def layout_offsets(entity_class: EntityClass, config: GameConfig) -> list[Offset]:
    """Initial row-major offsets of a class within the full formation."""
    spec = config.spec(entity_class)
    first = config.first_row(entity_class)
    offsets: list[Offset] = []
    for r in range(spec.rows):
        y = config.origin_y - (first + r) * config.spacing_y
        for c in range(config.cols):
            offsets.append((config.origin_x + c * config.spacing_x, y))
    return offsets


class EntityGrid:
    """Index-aligned offsets and active flags of a rows x cols block of enemies.

    The length is fixed for the lifetime of the grid. Destroyed enemies stay
    in place (and keep descending with the formation) but are skipped by
    hit tests and extremity searches.
    """

    def __init__(
        self,
        entity_class: EntityClass,
        rows: int,
        cols: int,
        geometry: ClassGeometry,
        score: int,
        offsets: list[Offset],
        active: list[bool] | None = None,
    ) -> None:
        expected = rows * cols
        if len(offsets) != expected:
            raise GridShapeError(
                entity_class,
                expected,
                f"{entity_class.value} grid expects {expected} offsets "
                f"({rows}x{cols}), got {len(offsets)}",
            )
        if active is None:
            active = [True] * expected
        elif len(active) != expected:
            raise GridShapeError(
                entity_class,
                expected,
                f"{entity_class.value} grid expects {expected} active flags "
                f"({rows}x{cols}), got {len(active)}",
            )
        self._class = entity_class
        self._rows = rows
        self._cols = cols
        self._geometry = geometry
        self._score = score
        self._offsets: list[Offset] = [(float(x), float(y)) for x, y in offsets]
        self._active: list[bool] = [bool(a) for a in active]

    @classmethod
    def from_config(cls, entity_class: EntityClass, config: GameConfig) -> EntityGrid:
        spec = config.spec(entity_class)
        return cls(
            entity_class,
            spec.rows,
            config.cols,
            spec.geometry,
            spec.score,
            layout_offsets(entity_class, config),
        )

    @property
    def entity_class(self) -> EntityClass:
        return self._class

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def geometry(self) -> ClassGeometry:
        return self._geometry

    @property
    def score(self) -> int:
        return self._score

    @property
    def offsets(self) -> tuple[Offset, ...]:
        return tuple(self._offsets)

    @property
    def active(self) -> tuple[bool, ...]:
        return tuple(self._active)

    def __len__(self) -> int:
        return len(self._offsets)

    def offset(self, index: int) -> Offset:
        return self._offsets[index]

    def is_active(self, index: int) -> bool:
        return self._active[index]

    def active_count(self) -> int:
        return sum(self._active)

    def iter_active(self) -> Iterator[tuple[int, Offset]]:
        """Yield ``(index, offset)`` for every active entity in row-major order."""
        for i, alive in enumerate(self._active):
            if alive:
                yield i, self._offsets[i]

    def deactivate(self, index: int) -> bool:
        """Mark an entity destroyed. Returns False if it already was."""
        if not self._active[index]:
            return False
        self._active[index] = False
        return True

    def shift(self, dx: float = 0.0, dy: float = 0.0) -> None:
        """Move every entity, active or not."""
        self._offsets = [(x + dx, y + dy) for x, y in self._offsets]

    def reset(self, offsets: list[Offset]) -> None:
        """Restore offsets and re-activate every entity."""
        if len(offsets) != len(self._offsets):
            raise GridShapeError(
                self._class,
                len(self._offsets),
                f"{self._class.value} grid cannot be reset with "
                f"{len(offsets)} offsets, expected {len(self._offsets)}",
            )
        self._offsets = [(float(x), float(y)) for x, y in offsets]
        self._active = [True] * len(self._offsets)

    # --- Extremities (None when nothing is active) ---

    def leftmost(self) -> float | None:
        return min((x for _, (x, _y) in self.iter_active()), default=None)

    def rightmost(self) -> float | None:
        return max((x for _, (x, _y) in self.iter_active()), default=None)

    def bottommost(self) -> Offset | None:
        """Offset of the lowest active entity; the first one found wins ties."""
        lowest: Offset | None = None
        for _, offset in self.iter_active():
            if lowest is None or offset[1] < lowest[1]:
                lowest = offset
        return lowest
