"""Replayable record of a session's inputs.

The engine is deterministic for a given configuration (including its seed)
and starting grid, so the ordered ``(elapsed, command)`` steps are enough to
rebuild every intermediate state.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

from .commands import Command
from .config import EngineConfig
from .grid import Grid

if TYPE_CHECKING:  # pragma: no cover
    from .session import GameSession

Step = Tuple[float, Command]


@dataclass
class Transcript:
    config: EngineConfig
    initial_rows: List[List[int]]
    steps: List[Step] = field(default_factory=list)

    @property
    def seed(self):
        return self.config.seed

    def record(self, elapsed: float, command: Command) -> None:
        self.steps.append((float(elapsed), Command(command)))

    def __len__(self) -> int:
        return len(self.steps)

    def as_dict(self) -> Dict[str, Any]:
        """Return the transcript as JSON-compatible values."""

        return {
            "config": asdict(self.config),
            "initial_rows": [list(row) for row in self.initial_rows],
            "steps": [[elapsed, command.value] for elapsed, command in self.steps],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transcript":
        return cls(
            config=EngineConfig(**data["config"]),
            initial_rows=[list(row) for row in data["initial_rows"]],
            steps=[(float(elapsed), Command(command)) for elapsed, command in data["steps"]],
        )


def replay(transcript: Transcript) -> "GameSession":
    """Rebuild a session by re-applying every recorded step."""

    from .session import GameSession

    session = GameSession(transcript.config, grid=Grid.from_rows(transcript.initial_rows))
    session.start()
    for elapsed, command in transcript.steps:
        session.tick(elapsed, command)
    return session
