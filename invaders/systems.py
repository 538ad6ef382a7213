"""System factories for the per-tick game pipeline.

Systems run in registration order; the game registers them so that the
shooter moves before projectiles are resolved, and kills are applied before
the formation looks for its outermost active entities.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from invaders.formation import Formation, StepResult
from invaders.types import (
    ENEMY_DESTROYED,
    FORMATION_REVERSED,
    GAME_OVER,
    PROJECTILE_FIRED,
    GameState,
    System,
)

if TYPE_CHECKING:
    from invaders.game import Session
    from invaders.types import TickContext

logger = logging.getLogger(__name__)


def game_over_reason(formation: Formation, line: float) -> str | None:
    """Return why the game is over, or None while it is still on.

    ``"cleared"`` when no entity is active, ``"invaded"`` when the lowest
    active entity has reached the player line.
    """
    lowest = formation.bottommost()
    if lowest is None:
        return "cleared"
    if lowest[1] <= line:
        return "invaded"
    return None


def is_game_over(formation: Formation, line: float) -> bool:
    return game_over_reason(formation, line) is not None


def make_input_system() -> System:
    """Sample the input collaborator once per tick."""

    def input_system(session: Session, ctx: TickContext) -> None:
        session.intent = session.sampler.sample()

    return input_system


def make_shooter_system() -> System:
    def shooter_system(session: Session, ctx: TickContext) -> None:
        session.shooter.update(ctx.now, session.intent)

    return shooter_system


def make_fire_system() -> System:
    """Spawn a projectile at the shooter's nose on fire intent, capacity permitting."""

    def fire_system(session: Session, ctx: TickContext) -> None:
        if not session.intent.fire:
            return
        cfg = session.config
        x = session.shooter.offset_x
        y = session.shooter.offset_y + cfg.muzzle_offset
        if session.projectiles.fire(x, y, cfg.projectile_velocity):
            session.bus.publish(PROJECTILE_FIRED, x=x, y=y)

    return fire_system


def make_projectile_system() -> System:
    def projectile_system(session: Session, ctx: TickContext) -> None:
        for hit in session.projectiles.advance(session.resolver):
            session.score += hit.score
            logger.debug(
                "%s #%d destroyed (+%d, total %d)",
                hit.entity_class.value, hit.index, hit.score, session.score,
            )
            session.bus.publish(
                ENEMY_DESTROYED,
                entity_class=hit.entity_class,
                index=hit.index,
                score=hit.score,
                total=session.score,
            )

    return projectile_system


def make_formation_system() -> System:
    def formation_system(session: Session, ctx: TickContext) -> None:
        formation = session.formation
        if formation.update(ctx.now) is StepResult.REVERSED:
            session.bus.publish(
                FORMATION_REVERSED,
                direction=formation.direction,
                tick_period=formation.tick_period,
                shift_factor=formation.shift_factor,
            )

    return formation_system


def make_game_over_system() -> System:
    """Flag the session as over and stop ticking once the predicate holds."""

    def game_over_system(session: Session, ctx: TickContext) -> None:
        reason = game_over_reason(session.formation, session.config.game_over_line)
        if reason is None:
            return
        session.state = GameState.OVER
        logger.info("game over (%s) at tick %d, score %d", reason, ctx.tick_number, session.score)
        session.bus.publish(GAME_OVER, score=session.score, reason=reason)
        ctx.request_stop()

    return game_over_system
