from __future__ import annotations

from typing import Callable, Dict

import pygame

from falling_blocks.game import EVENT_GAME_OVER, EVENT_LINES_CLEARED, FallingBlocksGame, GameConfig
from falling_blocks.utils.logging import setup_logger
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Callable[[FallingBlocksGame], object]] = {
    pygame.K_LEFT: lambda game: game.move("left"),
    pygame.K_RIGHT: lambda game: game.move("right"),
    pygame.K_UP: lambda game: game.rotate(),
    pygame.K_SPACE: lambda game: game.hard_drop(),
}


def run(config: GameConfig | None = None, cell_size: int = 30, fps: int = 60) -> None:
    log = setup_logger(name="falling_blocks")
    game = FallingBlocksGame(config)
    game.events.subscribe(EVENT_LINES_CLEARED, lambda sender, event: log.info("Cleared %d line(s)", event.count))
    game.events.subscribe(
        EVENT_GAME_OVER,
        lambda sender, event: log.info("Game over! Score: %d  Lines: %d  Level: %d", event.score, event.lines, event.level),
    )

    pygame.init()
    try:
        clock = pygame.time.Clock()
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                        game.start()
                    elif event.key == pygame.K_p:
                        game.toggle_pause()
                    elif game.is_running:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            command(game)

            # Gravity: the engine only advances when told how much time passed
            elapsed = clock.tick(fps)
            soft_drop = bool(pygame.key.get_pressed()[pygame.K_DOWN])
            game.tick(elapsed, soft_drop=soft_drop)

            renderer.draw(screen, game.snapshot(), ghost_y=game.ghost_y())
            pygame.display.flip()
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
