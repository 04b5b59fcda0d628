"""Engine configuration and default timings."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


# Dimensions of the standard playfield.
WIDTH = 10
HEIGHT = 20

# Seconds between automatic downward moves.
GRAVITY_INTERVAL = 1.0
# Seconds a landed piece may sit before it locks.
LOCK_DELAY = 0.5
# How many times moving/rotating a landed piece may restart the lock timer.
MAX_LOCK_RESETS = 15
# Number of upcoming pieces exposed in the snapshot.
PREVIEW_COUNT = 5


@dataclass(frozen=True)
class EngineConfig:
    """Static settings for a :class:`~karpas.session.GameSession`."""

    width: int = WIDTH
    height: int = HEIGHT
    gravity_interval: float = GRAVITY_INTERVAL
    lock_delay: float = LOCK_DELAY
    max_lock_resets: int = MAX_LOCK_RESETS
    preview_count: int = PREVIEW_COUNT
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError("Field must be at least 4x4")
        if self.gravity_interval <= 0:
            raise ValueError("gravity_interval must be positive")
        if self.lock_delay <= 0:
            raise ValueError("lock_delay must be positive")
        if self.max_lock_resets < 0:
            raise ValueError("max_lock_resets must not be negative")
        if self.preview_count < 1:
            raise ValueError("preview_count must be at least 1")

    def replace(self, **changes) -> "EngineConfig":
        """Return a copy with ``changes`` applied."""

        return replace(self, **changes)
