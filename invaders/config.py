"""Game tunables: formation layout, class geometry, tempo, shooter and projectiles."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from invaders.types import ConfigError, EntityClass


@dataclass(frozen=True)
class ClassGeometry:
    """Bounding box of one entity class, relative to an entity's offset.

    Attributes:
        half_width: Horizontal half-extent around the offset.
        half_height: Vertical half-extent around the box centre.
        origin_y: Distance from the offset anchor up to the box centre.
    """

    half_width: float
    half_height: float
    origin_y: float = 0.0

    def __post_init__(self) -> None:
        if self.half_width <= 0 or self.half_height <= 0:
            raise ConfigError(
                f"geometry extents must be positive, got "
                f"{self.half_width!r} x {self.half_height!r}"
            )


@dataclass(frozen=True)
class ClassSpec:
    """Rows, geometry and score value of one enemy tier."""

    rows: int
    geometry: ClassGeometry
    score: int

    def __post_init__(self) -> None:
        if self.rows < 0:
            raise ConfigError(f"rows must be >= 0, got {self.rows}")
        if self.score < 0:
            raise ConfigError(f"score must be >= 0, got {self.score}")


# Shapes are drawn at 0.1 scale: rectangle 0.75 x 0.5, circle radius 0.35
# centred 0.25 up, triangle 0.5 wide and 0.5 tall.
_FRONT = ClassSpec(rows=2, geometry=ClassGeometry(0.0375, 0.025, 0.025), score=30)
_MID = ClassSpec(rows=2, geometry=ClassGeometry(0.035, 0.035, 0.025), score=20)
_BACK = ClassSpec(rows=1, geometry=ClassGeometry(0.025, 0.025, 0.025), score=10)


@dataclass(frozen=True)
class GameConfig:
    # Formation layout. Rows are counted from the top: back, then mid, then front.
    cols: int = 11
    front: ClassSpec = field(default=_FRONT)
    mid: ClassSpec = field(default=_MID)
    back: ClassSpec = field(default=_BACK)
    origin_x: float = -0.5
    origin_y: float = 0.5
    spacing_x: float = 0.1
    spacing_y: float = 0.1

    # Formation tempo (milliseconds) and motion (normalized units).
    tick_period: float = 650.0
    tick_period_decrement: float = 75.0
    tick_period_floor: float = 300.0
    shift_factor: float = 0.03
    shift_increment: float = 0.03
    shift_cap: float = 0.15
    downward_shift: float = 0.05
    reversal_bound: float = 0.92
    game_over_line: float = -0.87

    # Shooter
    shooter_y: float = -0.9
    shooter_range: float = 0.9
    shooter_speed: float = 0.05
    shooter_tick: float = 35.0

    # Projectiles
    max_projectiles: int = 20
    projectile_velocity: float = 0.01
    projectile_width: float = 0.01
    projectile_height: float = 0.04
    muzzle_offset: float = 0.05
    forward_bound: float = 1.0

    auto_reset: bool = False

    def __post_init__(self) -> None:
        if self.cols <= 0:
            raise ConfigError(f"cols must be positive, got {self.cols}")
        if self.tick_period_floor <= 0:
            raise ConfigError("tick_period_floor must be positive")
        if self.tick_period < self.tick_period_floor:
            raise ConfigError(
                f"tick_period {self.tick_period} is below its floor "
                f"{self.tick_period_floor}"
            )
        if self.tick_period_decrement < 0 or self.shift_increment < 0:
            raise ConfigError("tempo increments must be >= 0")
        if self.shift_factor < 0 or self.shift_cap < self.shift_factor:
            raise ConfigError(
                f"shift_factor must lie in [0, {self.shift_cap}], got {self.shift_factor}"
            )
        if self.downward_shift < 0:
            raise ConfigError("downward_shift must be >= 0")
        if self.shooter_range <= 0 or self.shooter_tick <= 0:
            raise ConfigError("shooter_range and shooter_tick must be positive")
        if self.max_projectiles <= 0:
            raise ConfigError(f"max_projectiles must be positive, got {self.max_projectiles}")
        if self.projectile_width <= 0 or self.projectile_height <= 0:
            raise ConfigError("projectile extents must be positive")

    def spec(self, entity_class: EntityClass) -> ClassSpec:
        return getattr(self, entity_class.value)

    def first_row(self, entity_class: EntityClass) -> int:
        """Index of the class's top row within the whole formation."""
        if entity_class is EntityClass.BACK:
            return 0
        if entity_class is EntityClass.MID:
            return self.back.rows
        return self.back.rows + self.mid.rows

    @property
    def total_rows(self) -> int:
        return self.front.rows + self.mid.rows + self.back.rows

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameConfig:
        """Build a config from a plain mapping, e.g. parsed CLI or JSON settings.

        Class entries (``front``, ``mid``, ``back``) may be partial mappings;
        missing values fall back to the defaults.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

        kwargs = dict(data)
        for entity_class in EntityClass:
            raw = kwargs.get(entity_class.value)
            if isinstance(raw, dict):
                kwargs[entity_class.value] = _class_spec_from_dict(
                    raw, getattr(cls, entity_class.value)
                )
        return cls(**kwargs)


def _class_spec_from_dict(data: dict[str, Any], default: ClassSpec) -> ClassSpec:
    unknown = set(data) - {"rows", "score", "geometry"}
    if unknown:
        raise ConfigError(f"Unknown class keys: {sorted(unknown)}")
    geometry = data.get("geometry", default.geometry)
    if isinstance(geometry, dict):
        unknown = set(geometry) - {f.name for f in dataclasses.fields(ClassGeometry)}
        if unknown:
            raise ConfigError(f"Unknown geometry keys: {sorted(unknown)}")
        geometry = dataclasses.replace(default.geometry, **geometry)
    return ClassSpec(
        rows=data.get("rows", default.rows),
        geometry=geometry,
        score=data.get("score", default.score),
    )
