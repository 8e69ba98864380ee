from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from blockfall.game import Action, BoardEngine, EngineListener, GameConfig
from .renderer import Renderer


logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.ROTATE_RIGHT,
    pygame.K_UP: Action.ROTATE_LEFT,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_d: Action.SOFT_DROP,
    pygame.K_p: Action.PAUSE,
}


class PygameListener(EngineListener):
    """Turns engine callbacks into a pygame timer and a dirty flag."""

    def __init__(self) -> None:
        self.dirty = True
        self.status_text = "0"

    def on_repaint(self) -> None:
        self.dirty = True

    def on_status(self, text: str) -> None:
        self.status_text = text
        self.dirty = True

    def on_timer_started(self, interval_ms: int) -> None:
        pygame.time.set_timer(TICK_EVENT, interval_ms)

    def on_timer_stopped(self) -> None:
        pygame.time.set_timer(TICK_EVENT, 0)


def run(config: Optional[GameConfig] = None, cell_size: int = 24) -> None:
    pygame.init()
    try:
        config = config or GameConfig()
        listener = PygameListener()
        engine = BoardEngine(config, listener=listener)
        renderer = Renderer(cell_size=cell_size)
        renderer.layout_buttons(config.width, config.height)

        screen = pygame.display.set_mode(renderer.window_size(config.width, config.height))
        pygame.display.set_caption("Blockfall")
        font = pygame.font.SysFont(None, 24)
        clock = pygame.time.Clock()

        engine.start()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == TICK_EVENT:
                    engine.tick()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            engine.handle_action(action)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if renderer.quit_button is not None and renderer.quit_button.collidepoint(event.pos):
                        running = False
                    elif renderer.pause_button is not None and renderer.pause_button.collidepoint(event.pos):
                        engine.toggle_pause()

            if listener.dirty:
                renderer.draw(screen, font, engine.get_state(), listener.status_text)
                listener.dirty = False

            clock.tick(60)
        logger.info("window closed with score %d", engine.score)
    finally:
        pygame.time.set_timer(TICK_EVENT, 0)
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Blockfall in a desktop window")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=22)
    p.add_argument("--interval-ms", type=int, default=300, help="milliseconds between ticks")
    p.add_argument("--cell-size", type=int, default=24)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = GameConfig(
        width=args.width,
        height=args.height,
        tick_interval_ms=args.interval_ms,
        random_seed=args.seed,
    )
    run(config, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
