"""Record a seeded game, then verify that its transcript replays exactly.

Run with::

    PYTHONPATH=src python examples/replay_transcript.py --seed 7 --ticks 3000

Pass ``--output`` to also write the transcript as JSON, or ``--input`` to
replay a previously written transcript instead of recording a new one.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
from pathlib import Path
from typing import Optional

from karpas import Command, EngineConfig, GameSession, Transcript, replay, snapshots_equal


LOGGER = logging.getLogger(__name__)


def record(seed: int, ticks: int, step: float) -> GameSession:
    rng = random.Random(seed)
    commands = list(Command)
    session = GameSession(EngineConfig(seed=seed))
    for _ in range(ticks):
        result = session.tick(step, rng.choice(commands))
        if result.game_over_event:
            break
    return session


def verify(transcript: Transcript, expected: Optional[GameSession] = None) -> bool:
    """Replay ``transcript`` and log whether it matches ``expected``."""

    replayed = replay(transcript)
    LOGGER.info(
        "Replayed %d steps: pieces=%d lines=%d game_over=%s",
        len(transcript),
        replayed.pieces,
        replayed.lines,
        replayed.game_over,
    )
    if expected is None:
        return True
    matches = snapshots_equal(replayed.snapshot(), expected.snapshot())
    if matches:
        LOGGER.info("Replay matches the recorded session")
    else:
        LOGGER.error("Replay diverged from the recorded session")
    return matches


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=7, help="Seed for pieces and commands.")
    parser.add_argument("--ticks", type=int, default=3000, help="Maximum ticks to record.")
    parser.add_argument("--step", type=float, default=0.05, help="Seconds per tick.")
    parser.add_argument("--output", type=Path, help="Write the recorded transcript here.")
    parser.add_argument("--input", type=Path, help="Replay this transcript instead of recording.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    if args.input is not None:
        transcript = Transcript.from_dict(json.loads(args.input.read_text()))
        verify(transcript)
        return

    session = record(args.seed, args.ticks, args.step)
    assert session.transcript is not None
    if args.output is not None:
        args.output.write_text(json.dumps(session.transcript.as_dict()))
        LOGGER.info("Wrote %d steps to %s", len(session.transcript), args.output)
    if not verify(session.transcript, session):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
