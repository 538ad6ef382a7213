"""Tests for AABB helpers and the class-priority collision resolver."""
from __future__ import annotations

from invaders.collision import (
    Box,
    CollisionResolver,
    Hit,
    boxes_overlap,
    entity_box,
    projectile_box,
)
from invaders.config import ClassGeometry
from invaders.grid import EntityGrid
from invaders.projectiles import Projectile
from invaders.types import EntityClass

# Dyadic sizes keep edge comparisons exact.
GEOM = ClassGeometry(half_width=0.25, half_height=0.125, origin_y=0.125)
SCORES = {EntityClass.FRONT: 30, EntityClass.MID: 20, EntityClass.BACK: 10}
FAR = (8.0, 8.0)


def _grids(**offsets) -> dict[EntityClass, EntityGrid]:
    grids = {}
    for entity_class in EntityClass:
        cells = offsets.get(entity_class.value, [FAR])
        grids[entity_class] = EntityGrid(
            entity_class, 1, len(cells), GEOM, SCORES[entity_class], cells
        )
    return grids


def _resolver(grids) -> CollisionResolver:
    return CollisionResolver(grids, projectile_width=0.25, projectile_height=0.25)


# ── boxes_overlap ─────────────────────────────────────────────


class TestBoxesOverlap:
    def test_separate_horizontally(self) -> None:
        assert not boxes_overlap(Box(0.0, 1.0, 0.0, 1.0), Box(2.0, 3.0, 0.0, 1.0))
        assert not boxes_overlap(Box(2.0, 3.0, 0.0, 1.0), Box(0.0, 1.0, 0.0, 1.0))

    def test_separate_vertically(self) -> None:
        assert not boxes_overlap(Box(0.0, 1.0, 0.0, 1.0), Box(0.0, 1.0, 2.0, 3.0))
        assert not boxes_overlap(Box(0.0, 1.0, 2.0, 3.0), Box(0.0, 1.0, 0.0, 1.0))

    def test_touching_edge_counts(self) -> None:
        assert boxes_overlap(Box(0.0, 1.0, 0.0, 1.0), Box(1.0, 2.0, 0.0, 1.0))
        assert boxes_overlap(Box(0.0, 1.0, 0.0, 1.0), Box(0.0, 1.0, 1.0, 2.0))

    def test_touching_corner_counts(self) -> None:
        assert boxes_overlap(Box(0.0, 1.0, 0.0, 1.0), Box(1.0, 2.0, 1.0, 2.0))

    def test_contained(self) -> None:
        assert boxes_overlap(Box(-5.0, 5.0, -5.0, 5.0), Box(0.0, 1.0, 0.0, 1.0))

    def test_partial(self) -> None:
        assert boxes_overlap(Box(0.0, 1.0, 0.0, 1.0), Box(0.5, 1.5, 0.5, 1.5))


class TestBoxes:
    def test_entity_box_uses_origin(self) -> None:
        box = entity_box((1.0, 2.0), GEOM)
        assert box == Box(left=0.75, right=1.25, bottom=2.0, top=2.25)

    def test_circle_class_extends_below_anchor(self) -> None:
        circle = ClassGeometry(half_width=0.375, half_height=0.375, origin_y=0.25)
        box = entity_box((0.0, 0.0), circle)
        assert box.bottom == -0.125
        assert box.top == 0.625

    def test_projectile_box_anchored_bottom_centre(self) -> None:
        assert projectile_box(0.0, 0.5, 0.25, 0.25) == Box(-0.125, 0.125, 0.5, 0.75)


# ── CollisionResolver ─────────────────────────────────────────


class TestResolver:
    def test_miss_returns_none(self) -> None:
        resolver = _resolver(_grids())
        assert resolver.resolve(Projectile(0.0, 0.0, 0.01)) is None

    def test_front_row_wins_over_back_row(self) -> None:
        grids = _grids(front=[(0.0, 0.5)], back=[(0.0, 0.5)])
        hit = _resolver(grids).resolve(Projectile(0.0, 0.5, 0.01))
        assert hit == Hit(EntityClass.FRONT, 0, 30)
        assert grids[EntityClass.FRONT].is_active(0) is False
        assert grids[EntityClass.BACK].is_active(0) is True

    def test_mid_row_wins_over_back_row(self) -> None:
        grids = _grids(mid=[(0.0, 0.5)], back=[(0.0, 0.5)])
        hit = _resolver(grids).resolve(Projectile(0.0, 0.5, 0.01))
        assert hit is not None
        assert hit.entity_class is EntityClass.MID
        assert hit.score == 20

    def test_at_most_one_kill(self) -> None:
        grids = _grids(front=[(0.0, 0.5), (0.125, 0.5)])
        hit = _resolver(grids).resolve(Projectile(0.0, 0.5, 0.01))
        assert hit == Hit(EntityClass.FRONT, 0, 30)
        assert grids[EntityClass.FRONT].active == (False, True)

    def test_inactive_entity_is_skipped(self) -> None:
        grids = _grids(front=[(0.0, 0.5)], back=[(0.0, 0.5)])
        grids[EntityClass.FRONT].deactivate(0)
        hit = _resolver(grids).resolve(Projectile(0.0, 0.5, 0.01))
        assert hit == Hit(EntityClass.BACK, 0, 10)

    def test_same_entity_cannot_be_hit_twice(self) -> None:
        grids = _grids(back=[(0.0, 0.5)])
        resolver = _resolver(grids)
        assert resolver.resolve(Projectile(0.0, 0.5, 0.01)) is not None
        assert resolver.resolve(Projectile(0.0, 0.5, 0.01)) is None

    def test_touching_back_row_entity_is_hit(self) -> None:
        # projectile box spans y 0.5..0.75; entity box bottom sits at 0.75
        grids = _grids(back=[(0.0, 0.75)])
        hit = _resolver(grids).resolve(Projectile(0.0, 0.5, 0.01))
        assert hit == Hit(EntityClass.BACK, 0, 10)

    def test_just_out_of_reach_is_missed(self) -> None:
        grids = _grids(back=[(0.0, 0.8125)])
        assert _resolver(grids).resolve(Projectile(0.0, 0.5, 0.01)) is None

    def test_touching_side_is_hit(self) -> None:
        # projectile right edge 0.125, entity left edge 0.375 - 0.25 = 0.125
        grids = _grids(mid=[(0.375, 0.5)])
        hit = _resolver(grids).resolve(Projectile(0.0, 0.5, 0.01))
        assert hit == Hit(EntityClass.MID, 0, 20)
