"""Gravity and lock-delay state machine for the active piece."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from .collision import can_move, drop_distance
from .config import EngineConfig
from .grid import Grid
from .pieces import ActivePiece


class LockPhase(str, Enum):
    FALLING = "falling"
    LANDED = "landed"
    LOCKING = "locking"
    LOCKED = "locked"


_GROUNDED = (LockPhase.LANDED, LockPhase.LOCKING)


def _bottom_row(piece: ActivePiece) -> int:
    return max(row for _, row in piece.cells())


class GravityAndLockController:
    """Track how the active piece falls and when it locks.

    The controller never writes to the grid.  It only decides where the piece
    goes next and reports :attr:`phase`; once the phase is
    :attr:`LockPhase.LOCKED` the owner is expected to merge the piece into the
    grid and call :meth:`start` for the next one.

    Lock delay follows the "move reset" rule: a successful move or rotation
    while the piece rests on the stack restarts the lock timer, at most
    ``max_lock_resets`` times.  Bringing its lowest block below any row it
    reached before gives the piece a fresh reset budget.  Once the budget is
    spent, touching down again locks the piece immediately.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self.phase = LockPhase.FALLING
        self.gravity_accum = 0.0
        self.lock_timer = 0.0
        self.lock_resets = 0
        self.lowest_row = 0

    @property
    def grounded(self) -> bool:
        return self.phase in _GROUNDED

    @property
    def locked(self) -> bool:
        return self.phase is LockPhase.LOCKED

    def start(self, piece: ActivePiece) -> None:
        """Reset all timers for a freshly spawned ``piece``."""

        self.phase = LockPhase.FALLING
        self.gravity_accum = 0.0
        self.lock_timer = 0.0
        self.lock_resets = 0
        self.lowest_row = _bottom_row(piece)

    # Internal helpers -------------------------------------------------
    def _track_lowest(self, piece: ActivePiece) -> None:
        row = _bottom_row(piece)
        if row > self.lowest_row:
            self.lowest_row = row
            self.lock_resets = 0

    def _land(self) -> None:
        self.gravity_accum = 0.0
        self.lock_timer = 0.0
        if self.lock_resets > self.config.max_lock_resets:
            self.phase = LockPhase.LOCKED
        else:
            self.phase = LockPhase.LANDED

    def _step_down(self, grid: Grid, piece: ActivePiece) -> Tuple[ActivePiece, bool]:
        if can_move(grid, piece, 0, 1):
            piece = piece.moved(0, 1)
            self._track_lowest(piece)
            return piece, True
        return piece, False

    # Public API -------------------------------------------------------
    def on_moved(self, grid: Grid, piece: ActivePiece) -> None:
        """Update the lock state after ``piece`` moved sideways or rotated."""

        self._track_lowest(piece)
        if not self.grounded:
            return
        self.lock_resets += 1
        if can_move(grid, piece, 0, 1):
            # Slid off the ledge.
            self.phase = LockPhase.FALLING
            self.gravity_accum = 0.0
            self.lock_timer = 0.0
        elif self.lock_resets <= self.config.max_lock_resets:
            self.phase = LockPhase.LANDED
            self.lock_timer = 0.0

    def soft_drop(self, grid: Grid, piece: ActivePiece) -> ActivePiece:
        """Move ``piece`` down one row now, using the normal landing rule."""

        if self.locked:
            return piece
        piece, moved = self._step_down(grid, piece)
        if moved:
            self.phase = LockPhase.FALLING
        elif not self.grounded:
            self._land()
        return piece

    def hard_drop(self, grid: Grid, piece: ActivePiece) -> Tuple[ActivePiece, int]:
        """Drop ``piece`` as far as it goes and lock it without delay.

        Returns the dropped piece and the number of rows it fell.
        """

        distance = drop_distance(grid, piece)
        piece = piece.moved(0, distance)
        self._track_lowest(piece)
        self.phase = LockPhase.LOCKED
        return piece, distance

    def advance(self, grid: Grid, piece: ActivePiece, elapsed: float) -> ActivePiece:
        """Advance gravity and the lock timer by ``elapsed`` seconds."""

        if self.locked:
            return piece

        if self.phase is LockPhase.FALLING:
            self.gravity_accum += elapsed
            interval = self.config.gravity_interval
            while self.gravity_accum >= interval:
                self.gravity_accum -= interval
                piece, moved = self._step_down(grid, piece)
                if not moved:
                    self._land()
                    break
            return piece

        if can_move(grid, piece, 0, 1):
            # The surface under the piece disappeared.
            self.phase = LockPhase.FALLING
            self.lock_timer = 0.0
            return piece

        self.lock_timer += elapsed
        if self.lock_timer >= self.config.lock_delay:
            self.phase = LockPhase.LOCKED
        elif self.lock_timer > 0:
            self.phase = LockPhase.LOCKING
        return piece
