"""Headless ASCII demo for the engine.

Run with: `python -m karpas`

Drives a session with a seeded stream of random commands, logs every line
clear and the game-over event, then prints the final frame.  Pass ``--help``
to see the available options.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from . import Command, EngineConfig, GameSession, render_ascii


LOGGER = logging.getLogger("karpas")

# Weighted so pieces mostly travel sideways before being dropped.
_DEMO_COMMANDS = [
    Command.NONE,
    Command.NONE,
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE_CW,
    Command.ROTATE_CCW,
    Command.SOFT_DROP,
    Command.HARD_DROP,
]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="karpas", description=__doc__)
    parser.add_argument("--seed", type=int, default=0, help="Seed for pieces and commands.")
    parser.add_argument("--ticks", type=int, default=2000, help="Maximum number of ticks to run.")
    parser.add_argument(
        "--step",
        type=float,
        default=1 / 60,
        help="Seconds of game time per tick.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def run(seed: int, ticks: int, step: float) -> GameSession:
    """Play ``ticks`` steps with random input and return the session."""

    commands = random.Random(seed)
    session = GameSession(EngineConfig(seed=seed))
    session.start()
    for _ in range(ticks):
        result = session.tick(step, commands.choice(_DEMO_COMMANDS))
        if result.lines_cleared:
            LOGGER.info("Tick %d: cleared %d row(s)", result.snapshot.tick, result.lines_cleared)
        if result.game_over_event:
            LOGGER.info("Tick %d: game over", result.snapshot.tick)
            break
    return session


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    session = run(args.seed, args.ticks, args.step)
    print(render_ascii(session.snapshot()))
    print(f"pieces={session.pieces} lines={session.lines} game_over={session.game_over}")


if __name__ == "__main__":
    main()
