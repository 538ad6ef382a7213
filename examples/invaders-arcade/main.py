"""
invaders Arcade
Pygame front end for the invaders simulation: arrows move, Space fires,
Enter starts or resets, Escape quits.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

import pygame

from invaders import Game, GameConfig, GameState, Key, KeyState
from invaders.types import ENEMY_DESTROYED, GAME_OVER
from ui.renderer import PygameRenderer

# --- Configuration ---
WINDOW_SIZE = 800
FPS = 60
TITLE = "invaders Arcade"

KEY_BINDINGS = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_a: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_d: Key.RIGHT,
    pygame.K_SPACE: Key.FIRE,
}

logger = logging.getLogger("invaders.arcade")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=TITLE)
    parser.add_argument("--config", help="JSON file of GameConfig overrides")
    parser.add_argument("--auto-reset", action="store_true",
                        help="return to Idle as soon as a game ends")
    parser.add_argument("--size", type=int, default=WINDOW_SIZE, help="window edge in pixels")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> GameConfig:
    overrides: dict = {}
    if args.config:
        with open(args.config, encoding="utf-8") as fh:
            overrides = json.load(fh)
    if args.auto_reset:
        overrides["auto_reset"] = True
    return GameConfig.from_dict(overrides)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    config = load_config(args)

    pygame.init()
    screen = pygame.display.set_mode((args.size, args.size))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()

    keys = KeyState()
    renderer = PygameRenderer(screen, config)
    game = Game(config, sampler=keys)

    def _on_kill(signal: str, data: dict) -> None:
        logger.debug("%s #%d down, score %d", data["entity_class"].value, data["index"], data["total"])

    def _on_over(signal: str, data: dict) -> None:
        logger.info("final score %d (%s)", data["score"], data["reason"])

    game.subscribe(ENEMY_DESTROYED, _on_kill)
    game.subscribe(GAME_OVER, _on_over)

    running = True
    while running:
        clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_RETURN:
                    if game.state is GameState.OVER:
                        game.reset()
                    elif game.state is GameState.IDLE:
                        game.start(pygame.time.get_ticks())
                elif event.key in KEY_BINDINGS:
                    keys.press(KEY_BINDINGS[event.key])
            elif event.type == pygame.KEYUP and event.key in KEY_BINDINGS:
                keys.release(KEY_BINDINGS[event.key])

        # --- Tick and render ---
        game.tick(pygame.time.get_ticks())
        renderer.render(game.snapshot())

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
