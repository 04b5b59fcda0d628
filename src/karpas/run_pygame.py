"""Simple pygame front-end for the engine.

This module is an example of an external driver: it turns key presses into
:class:`~karpas.commands.Command` values, calls
:meth:`~karpas.session.GameSession.tick` once per frame and draws the returned
snapshot.  It is intentionally lightweight; install the ``pygame`` extra to
use it and run ``python -m karpas.run_pygame``.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

import pygame

from .commands import Command
from .config import EngineConfig
from .pieces import CELL_COLORS, PIECE_DEFINITIONS
from .session import GameSession, Snapshot

# Size of a single grid cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60

LOGGER = logging.getLogger(__name__)

KEY_COMMANDS = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_c: Command.HOLD,
}


def command_for_key(key: int) -> Command:
    """Return the command bound to ``key`` or :attr:`Command.NONE`."""

    return KEY_COMMANDS.get(key, Command.NONE)


def _draw_cell(screen: pygame.Surface, col: int, row: int, color) -> None:
    rect = pygame.Rect(col * CELL_SIZE, row * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)
    pygame.draw.rect(screen, (50, 50, 50), rect, 1)


def draw_snapshot(screen: pygame.Surface, snapshot: Snapshot) -> None:
    """Render the locked cells, the ghost and the active piece."""

    for row, values in enumerate(snapshot.cells.tolist()):
        for col, value in enumerate(values):
            _draw_cell(screen, col, row, CELL_COLORS[value])
    for col, row in snapshot.ghost_cells:
        if row >= 0:
            _draw_cell(screen, col, row, (70, 70, 70))
    if snapshot.active_kind is not None:
        color = PIECE_DEFINITIONS[snapshot.active_kind].rgb
        for col, row in snapshot.active_cells:
            if row >= 0:
                _draw_cell(screen, col, row, color)


def main(config: Optional[EngineConfig] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    session = GameSession(config)
    session.start()

    pygame.init()
    width = session.grid.width * CELL_SIZE
    height = session.grid.height * CELL_SIZE
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption("Karpas")
    clock = pygame.time.Clock()

    running = True
    while running:
        dt = clock.tick(FPS)
        command = Command.NONE
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_r and session.game_over:
                    LOGGER.info("Restarting after %d lines", session.lines)
                    session.reset(seed=random.randrange(2**32))
                else:
                    command = command_for_key(event.key)

        result = session.tick(dt / 1000.0, command)
        screen.fill((0, 0, 0))
        draw_snapshot(screen, result.snapshot)
        status = "Game over - press R" if result.snapshot.game_over else f"Lines: {result.snapshot.lines}"
        pygame.display.set_caption(f"Karpas - {status}")
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
