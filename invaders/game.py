"""Game - lifecycle and per-tick orchestration of the simulation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from invaders.collision import CollisionResolver
from invaders.config import GameConfig
from invaders.formation import Formation
from invaders.input import IDLE_INPUT, InputSampler, InputState
from invaders.projectiles import ProjectileManager
from invaders.scheduler import FrameScheduler
from invaders.shooter import ShooterController
from invaders.signals import SignalBus
from invaders.snapshot import Renderer, Snapshot, take_snapshot
from invaders.systems import (
    make_fire_system,
    make_formation_system,
    make_game_over_system,
    make_input_system,
    make_projectile_system,
    make_shooter_system,
)
from invaders.types import GAME_RESET, GAME_STARTED, GameState, TickContext

logger = logging.getLogger(__name__)


class _NoInput:
    def sample(self) -> InputState:
        return IDLE_INPUT

    def clear(self) -> None:
        pass


@dataclass
class Session:
    """All mutable state of one game. Systems receive it every tick."""

    config: GameConfig
    sampler: InputSampler = field(default_factory=_NoInput)
    bus: SignalBus = field(default_factory=SignalBus)
    state: GameState = GameState.IDLE
    score: int = 0
    intent: InputState = IDLE_INPUT
    formation: Formation = field(init=False)
    shooter: ShooterController = field(init=False)
    projectiles: ProjectileManager = field(init=False)
    resolver: CollisionResolver = field(init=False)

    def __post_init__(self) -> None:
        self.formation = Formation(self.config)
        self.shooter = ShooterController(self.config)
        self.projectiles = ProjectileManager(self.config.max_projectiles, self.config.forward_bound)
        self.resolver = CollisionResolver(
            self.formation.grids,
            self.config.projectile_width,
            self.config.projectile_height,
        )

    @property
    def started(self) -> bool:
        return self.state is not GameState.IDLE

    @property
    def over(self) -> bool:
        return self.state is GameState.OVER

    def restore_defaults(self) -> None:
        self.formation.reset()
        self.shooter.reset()
        self.projectiles.clear()
        self.score = 0
        self.intent = IDLE_INPUT
        # input gathered between games must not leak into the next one
        self.sampler.clear()


class Game:
    """Drives a Session through Idle -> Running -> Over -> Idle.

    Call ``start()`` from the UI's start action, then ``tick(now)`` from every
    animation frame with a millisecond timestamp. Once the game is over,
    further ticks are dropped until ``reset()`` and a new ``start()``.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        sampler: InputSampler | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self._session = Session(config or GameConfig())
        if sampler is not None:
            self._session.sampler = sampler
        self._renderer = renderer

        scheduler = FrameScheduler(self._session)
        scheduler.add_system(make_input_system())
        scheduler.add_system(make_shooter_system())
        scheduler.add_system(make_fire_system())
        scheduler.add_system(make_projectile_system())
        scheduler.add_system(make_formation_system())
        scheduler.add_system(make_game_over_system())
        scheduler.on_start(self._announce_start)
        scheduler.on_stop(self._log_stop)
        self._scheduler = scheduler

    @property
    def session(self) -> Session:
        return self._session

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def config(self) -> GameConfig:
        return self._session.config

    @property
    def state(self) -> GameState:
        return self._session.state

    @property
    def score(self) -> int:
        return self._session.score

    @property
    def generation(self) -> int:
        """Token for ``tick(now, generation)``; changes whenever the game stops."""
        return self._scheduler.generation

    @property
    def bus(self) -> SignalBus:
        return self._session.bus

    def subscribe(self, name: str, handler: Callable[[str, dict[str, Any]], None]) -> None:
        self._session.bus.subscribe(name, handler)

    def start(self, now: float = 0.0) -> bool:
        """Idle -> Running. Returns False, changing nothing, from any other state."""
        if self._session.state is not GameState.IDLE:
            return False
        self._session.restore_defaults()
        self._session.state = GameState.RUNNING
        self._scheduler.start(now)
        self._session.bus.flush()
        return True

    def tick(self, now: float, generation: int | None = None) -> bool:
        """Run one frame. Returns False if the frame was dropped."""
        dispatched = self._scheduler.tick(now, generation)
        if not dispatched:
            return False
        self._session.bus.flush()
        if self._session.over and self.config.auto_reset:
            self.reset()
        if self._renderer is not None:
            self._renderer.render(self.snapshot())
        return True

    def reset(self) -> None:
        """Any state -> Idle, with every grid, timer and counter at its initial value."""
        self._scheduler.stop()
        self._scheduler.clock.reset()
        self._session.restore_defaults()
        self._session.state = GameState.IDLE
        self._session.bus.publish(GAME_RESET)
        self._session.bus.flush()
        self._session.bus.clear()
        logger.info("game reset")

    def snapshot(self) -> Snapshot:
        return take_snapshot(self._session, self._scheduler.clock.tick_number)

    def _announce_start(self, session: Session, ctx: TickContext) -> None:
        logger.info(
            "game started: %d enemies, tick period %.0f ms",
            session.formation.active_count(), session.formation.tick_period,
        )
        session.bus.publish(GAME_STARTED, enemies=session.formation.active_count())

    def _log_stop(self, session: Session, ctx: TickContext) -> None:
        logger.debug("ticking stopped after %d frames (%s)", ctx.tick_number, session.state.value)
