"""invaders - a fixed-formation shooter simulation driven one frame at a time."""

from invaders.collision import Box, CollisionResolver, Hit, boxes_overlap
from invaders.config import ClassGeometry, ClassSpec, GameConfig
from invaders.formation import Formation, StepResult
from invaders.game import Game, Session
from invaders.grid import EntityGrid
from invaders.input import InputSampler, InputState, Key, KeyState
from invaders.projectiles import Projectile, ProjectileManager
from invaders.scheduler import FrameScheduler
from invaders.shooter import ShooterController
from invaders.signals import SignalBus
from invaders.snapshot import Renderer, Snapshot
from invaders.systems import game_over_reason, is_game_over
from invaders.types import (
    ConfigError,
    Direction,
    EntityClass,
    GameState,
    GridShapeError,
    InvadersError,
    SignalError,
    TickContext,
)

__all__ = [
    "Game",
    "Session",
    "GameConfig",
    "ClassSpec",
    "ClassGeometry",
    "EntityGrid",
    "EntityClass",
    "Formation",
    "StepResult",
    "Direction",
    "GameState",
    "CollisionResolver",
    "Hit",
    "Box",
    "boxes_overlap",
    "Projectile",
    "ProjectileManager",
    "ShooterController",
    "InputSampler",
    "InputState",
    "Key",
    "KeyState",
    "FrameScheduler",
    "SignalBus",
    "Snapshot",
    "Renderer",
    "TickContext",
    "is_game_over",
    "game_over_reason",
    "InvadersError",
    "GridShapeError",
    "ConfigError",
    "SignalError",
]
