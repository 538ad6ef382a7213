"""Axis-aligned bounding-box collision between projectiles and the formation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping

from invaders.config import ClassGeometry
from invaders.types import HIT_ORDER, EntityClass, Offset

if TYPE_CHECKING:
    from invaders.grid import EntityGrid
    from invaders.projectiles import Projectile


@dataclass(frozen=True, slots=True)
class Box:
    left: float
    right: float
    bottom: float
    top: float


def boxes_overlap(a: Box, b: Box) -> bool:
    """Closed-interval AABB test: touching edges count as an overlap."""
    if a.right < b.left or b.right < a.left:
        return False
    if a.top < b.bottom or b.top < a.bottom:
        return False
    return True


def entity_box(offset: Offset, geometry: ClassGeometry) -> Box:
    x, y = offset
    cy = y + geometry.origin_y
    return Box(
        left=x - geometry.half_width,
        right=x + geometry.half_width,
        bottom=cy - geometry.half_height,
        top=cy + geometry.half_height,
    )


def projectile_box(x: float, y: float, width: float, height: float) -> Box:
    """Box of a projectile anchored at its bottom-centre."""
    half = width / 2.0
    return Box(left=x - half, right=x + half, bottom=y, top=y + height)


@dataclass(frozen=True)
class Hit:
    """Result of a successful hit test. Not stored anywhere."""

    entity_class: EntityClass
    index: int
    score: int


class CollisionResolver:
    """Tests projectiles against the active entities of every class.

    Classes are scanned front row first so that, when boxes from different
    tiers overlap the same projectile, the tier nearest the player is hit.
    """

    def __init__(
        self,
        grids: Mapping[EntityClass, EntityGrid],
        projectile_width: float,
        projectile_height: float,
    ) -> None:
        self._grids = grids
        self._width = projectile_width
        self._height = projectile_height

    def resolve(self, projectile: Projectile) -> Hit | None:
        """Deactivate the first entity the projectile overlaps and report it."""
        pbox = projectile_box(projectile.x, projectile.y, self._width, self._height)
        for entity_class in HIT_ORDER:
            grid = self._grids[entity_class]
            for index, offset in grid.iter_active():
                if boxes_overlap(pbox, entity_box(offset, grid.geometry)):
                    grid.deactivate(index)
                    return Hit(entity_class, index, grid.score)
        return None
