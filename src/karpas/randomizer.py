"""Seven-bag piece randomizer."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Sequence
import random

from .pieces import PieceKind

# A twelve-draw window can reach back into the bag two before the current one
# by this many positions at most.
_WINDOW_OVERLAP = 3


def _spaced(earlier: Sequence[PieceKind], bag: Sequence[PieceKind]) -> bool:
    """Return ``True`` if no kind of ``bag`` comes too early after ``earlier``.

    ``earlier`` is the bag dealt two bags before ``bag``.  A kind at position
    ``p`` there must sit later than ``p - 3`` in ``bag``; otherwise a twelve
    draw window covering the tail of ``earlier``, the whole middle bag and the
    head of ``bag`` would hold it three times.
    """

    positions = {kind: index for index, kind in enumerate(bag)}
    return all(positions[kind] > index - _WINDOW_OVERLAP for index, kind in enumerate(earlier))


class SevenBag:
    """Deal pieces from shuffled bags holding each kind exactly once.

    Each bag is reshuffled until it is spaced against the bag dealt two
    before it, so no kind appears more than twice in any twelve consecutive
    draws.  The sequence depends only on the seed.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)
        self._pending: Deque[PieceKind] = deque()
        self._recent: Deque[List[PieceKind]] = deque(maxlen=2)
        self.bags_drawn = 0

    def reseed(self, seed: Optional[int]) -> None:
        """Restart the sequence from ``seed``, discarding any partial bag."""

        self._rng.seed(seed)
        self._pending.clear()
        self._recent.clear()
        self.bags_drawn = 0

    def _refill(self) -> None:
        bag = list(PieceKind)
        self._rng.shuffle(bag)
        if len(self._recent) == 2:
            while not _spaced(self._recent[0], bag):
                self._rng.shuffle(bag)
        self._recent.append(bag)
        self._pending.extend(bag)
        self.bags_drawn += 1

    def draw(self) -> PieceKind:
        """Return the next piece kind."""

        if not self._pending:
            self._refill()
        return self._pending.popleft()

    def peek(self, count: int = 1) -> List[PieceKind]:
        """Return the next ``count`` kinds without consuming them."""

        while len(self._pending) < count:
            self._refill()
        return list(self._pending)[:count]

    def __iter__(self):
        while True:
            yield self.draw()
