"""Pygame renderer: draws a Snapshot in normalized [-1, 1] device space."""
from __future__ import annotations

import pygame

from invaders import EntityClass, GameConfig, GameState, Snapshot

BG_COLOR = (10, 10, 24)
HUD_COLOR = (200, 200, 220)
SHOOTER_COLOR = (80, 220, 120)
PROJECTILE_COLOR = (255, 255, 160)
CLASS_COLORS = {
    EntityClass.FRONT: (0, 200, 255),
    EntityClass.MID: (255, 0, 200),
    EntityClass.BACK: (255, 160, 0),
}

# Shooter body, in normalized units around its offset.
SHOOTER_HALF_WIDTH = 0.05
SHOOTER_HEIGHT = 0.05


class PygameRenderer:
    """Implements the Renderer protocol on top of a pygame surface."""

    def __init__(self, surface: pygame.Surface, config: GameConfig) -> None:
        self._surface = surface
        self._config = config
        self._font = pygame.font.SysFont("monospace", 16)
        self._big_font = pygame.font.SysFont("monospace", 32, bold=True)

    def to_screen(self, x: float, y: float) -> tuple[int, int]:
        w, h = self._surface.get_size()
        return int((x + 1.0) * 0.5 * w), int((1.0 - y) * 0.5 * h)

    def _extent(self, dx: float, dy: float) -> tuple[int, int]:
        w, h = self._surface.get_size()
        return max(1, int(dx * 0.5 * w)), max(1, int(dy * 0.5 * h))

    def render(self, snapshot: Snapshot) -> None:
        self._surface.fill(BG_COLOR)
        for grid in snapshot.grids:
            self._draw_grid(grid.entity_class, grid.offsets, grid.active)
        self._draw_shooter(*snapshot.shooter)
        for x, y in snapshot.projectiles:
            self._draw_rect(x, y + self._config.projectile_height * 0.5,
                            self._config.projectile_width * 0.5,
                            self._config.projectile_height * 0.5,
                            PROJECTILE_COLOR)
        self._draw_hud(snapshot)
        pygame.display.flip()

    # --- Entities ---

    def _draw_grid(self, entity_class, offsets, active) -> None:
        geometry = self._config.spec(entity_class).geometry
        color = CLASS_COLORS[entity_class]
        for (x, y), alive in zip(offsets, active):
            if not alive:
                continue
            cy = y + geometry.origin_y
            if entity_class is EntityClass.BACK:
                apex = self.to_screen(x, cy + geometry.half_height)
                left = self.to_screen(x - geometry.half_width, cy - geometry.half_height)
                right = self.to_screen(x + geometry.half_width, cy - geometry.half_height)
                pygame.draw.polygon(self._surface, color, [apex, left, right])
            elif entity_class is EntityClass.MID:
                rx, _ = self._extent(geometry.half_width, geometry.half_height)
                pygame.draw.circle(self._surface, color, self.to_screen(x, cy), rx)
            else:
                self._draw_rect(x, cy, geometry.half_width, geometry.half_height, color)

    def _draw_shooter(self, x: float, y: float) -> None:
        base_left = self.to_screen(x - SHOOTER_HALF_WIDTH, y)
        base_right = self.to_screen(x + SHOOTER_HALF_WIDTH, y)
        nose = self.to_screen(x, y + SHOOTER_HEIGHT)
        pygame.draw.polygon(self._surface, SHOOTER_COLOR, [base_left, nose, base_right])

    def _draw_rect(self, cx: float, cy: float, hw: float, hh: float, color) -> None:
        left, top = self.to_screen(cx - hw, cy + hh)
        w, h = self._extent(hw * 2, hh * 2)
        pygame.draw.rect(self._surface, color, pygame.Rect(left, top, w, h))

    # --- HUD ---

    def _draw_hud(self, snapshot: Snapshot) -> None:
        text = self._font.render(
            f"Score {snapshot.score}   period {snapshot.tick_period:.0f} ms   "
            f"shift {snapshot.shift_factor:.2f}",
            True, HUD_COLOR,
        )
        self._surface.blit(text, (10, 8))

        banner = {
            GameState.IDLE: "Press Enter to start",
            GameState.OVER: "GAME OVER - Enter to reset",
        }.get(snapshot.state)
        if banner is None:
            return
        w, h = self._surface.get_size()
        label = self._big_font.render(banner, True, (255, 255, 255))
        self._surface.blit(label, label.get_rect(center=(w // 2, h // 2)))
