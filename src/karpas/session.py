"""Game session orchestrating the grid, the active piece and the queue.

A :class:`GameSession` is driven by calling :meth:`GameSession.tick` once per
discrete step with the time elapsed since the previous step and the player's
command.  Within a tick the command is applied first, then gravity and the
lock timer advance, and finally a locked piece is merged, rows are cleared and
the next piece spawns.  Renderers read the immutable :class:`Snapshot`
returned with every tick.

Gameplay failures never escape :meth:`tick`: a rejected rotation is simply a
no-op and a blocked spawn ends the game by setting :attr:`game_over`.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple
import logging
import random

import numpy as np

from .collision import can_move, drop_distance, fits
from .commands import Command, CommandInput, normalize_commands
from .config import EngineConfig
from .errors import RotationRejected, SpawnBlocked
from .gravity import GravityAndLockController, LockPhase
from .grid import Cells, Grid
from .line_clear import ClearResult, clear_completed_rows, lock_piece
from .pieces import ActivePiece, Cell, PieceKind, RotationState
from .randomizer import SevenBag
from .rotation import Direction, resolve_rotation
from .transcript import Transcript


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Read-only view of a session taken between ticks."""

    cells: Cells
    active_kind: Optional[PieceKind]
    active_rotation: Optional[RotationState]
    active_cells: Tuple[Cell, ...]
    active_color: int
    ghost_cells: Tuple[Cell, ...]
    next_kinds: Tuple[PieceKind, ...]
    held: Optional[PieceKind]
    lock_phase: LockPhase
    game_over: bool
    tick: int
    lines: int

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])


@dataclass(frozen=True, eq=False)
class TickResult:
    snapshot: Snapshot
    lines_cleared: int = 0
    locked: bool = False
    game_over_event: bool = False


class GameSession:
    """Mutable state for one game, advanced one tick at a time."""

    def __init__(self, config: Optional[EngineConfig] = None, grid: Optional[Grid] = None) -> None:
        self.config = config or EngineConfig()
        if grid is not None and (grid.width, grid.height) != (self.config.width, self.config.height):
            raise ValueError("Grid size does not match the configuration")
        self.grid = grid or Grid(self.config.width, self.config.height)
        self.bag = SevenBag()
        self.queue: Deque[PieceKind] = deque()
        self.controller = GravityAndLockController(self.config)
        self.active: Optional[ActivePiece] = None
        self.held: Optional[PieceKind] = None
        self.hold_used = False
        self.game_over = False
        self.ticks = 0
        self.lines = 0
        self.pieces = 0
        self.transcript: Optional[Transcript] = None
        self._over_reported = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def started(self) -> bool:
        return self.transcript is not None

    def start(self) -> None:
        """Spawn the first piece if the session has not started yet."""

        if not self.started:
            self._begin()

    def reset(self, *, seed: Optional[int] = None) -> None:
        """Empty the grid and start a new game.

        ``seed`` replaces the configured seed when given.
        """

        if seed is not None:
            self.config = self.config.replace(seed=seed)
        self.grid.clear()
        self._begin()

    def _begin(self) -> None:
        if self.config.seed is None:
            self.config = self.config.replace(seed=random.randrange(2**32))
        self.controller = GravityAndLockController(self.config)
        self.bag.reseed(self.config.seed)
        self.queue.clear()
        self.active = None
        self.held = None
        self.hold_used = False
        self.game_over = False
        self._over_reported = False
        self.ticks = 0
        self.lines = 0
        self.pieces = 0
        self.transcript = Transcript(config=self.config, initial_rows=self.grid.rows_as_lists())
        LOGGER.info("Game started (seed=%s)", self.config.seed)
        try:
            self._spawn_next()
        except SpawnBlocked as exc:
            self._end_game(exc)

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------
    def _fill_queue(self) -> None:
        while len(self.queue) < self.config.preview_count:
            self.queue.append(self.bag.draw())

    def _place(self, kind: PieceKind) -> None:
        piece = ActivePiece.spawn(kind, self.grid.width)
        if not fits(self.grid, piece):
            self.active = None
            raise SpawnBlocked(f"{kind.value} blocked at spawn {piece.anchor}")
        self.active = piece
        self.controller.start(piece)

    def _spawn_next(self) -> None:
        self._fill_queue()
        kind = self.queue.popleft()
        self._fill_queue()
        self.hold_used = False
        self._place(kind)

    def _end_game(self, reason: Exception) -> None:
        self.game_over = True
        self.active = None
        LOGGER.info("Game over after %d pieces and %d lines: %s", self.pieces, self.lines, reason)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def _shift(self, dx: int) -> None:
        piece = self.active
        if piece is not None and can_move(self.grid, piece, dx, 0):
            self.active = piece.moved(dx, 0)
            self.controller.on_moved(self.grid, self.active)

    def _rotate(self, direction: Direction) -> None:
        if self.active is None:
            return
        try:
            self.active = resolve_rotation(self.grid, self.active, direction)
        except RotationRejected as exc:
            LOGGER.debug("Rotation rejected: %s", exc)
            return
        self.controller.on_moved(self.grid, self.active)

    def _hold(self) -> None:
        """Swap the active piece with the held one.

        The swap may only happen once per spawned piece; further requests are
        ignored until the next piece spawns.  The first hold stores the active
        kind and takes the next piece from the queue.
        """

        if self.active is None or self.hold_used:
            return
        current = self.active.kind
        try:
            if self.held is None:
                self.held = current
                self._spawn_next()
            else:
                swapped, self.held = self.held, current
                self._place(swapped)
        except SpawnBlocked as exc:
            self._end_game(exc)
            return
        self.hold_used = True
        LOGGER.debug("Held %s", current.value)

    def _apply_input(self, command: Command) -> None:
        if self.active is None:
            return
        if command is Command.MOVE_LEFT:
            self._shift(-1)
        elif command is Command.MOVE_RIGHT:
            self._shift(1)
        elif command is Command.ROTATE_CW:
            self._rotate(Direction.CW)
        elif command is Command.ROTATE_CCW:
            self._rotate(Direction.CCW)
        elif command is Command.SOFT_DROP:
            self.active = self.controller.soft_drop(self.grid, self.active)
        elif command is Command.HARD_DROP:
            self.active, distance = self.controller.hard_drop(self.grid, self.active)
            LOGGER.debug("Hard drop of %s rows", distance)
        elif command is Command.HOLD:
            self._hold()

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------
    def _lock_active(self) -> Optional[ClearResult]:
        """Merge the active piece and spawn the next one.

        Returns ``None`` when the piece locked out above the field and was
        never written to the grid.
        """

        piece = self.active
        assert piece is not None
        try:
            lock_piece(self.grid, piece)
        except SpawnBlocked as exc:
            self._end_game(exc)
            return None
        self.pieces += 1
        self.active = None
        result = clear_completed_rows(self.grid)
        self.lines += result.count
        LOGGER.debug("Locked %s at %s, cleared rows %s", piece.kind.value, piece.anchor, list(result.rows))
        try:
            self._spawn_next()
        except SpawnBlocked as exc:
            self._end_game(exc)
        return result

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def tick(self, elapsed: float = 0.0, commands: CommandInput = None) -> TickResult:
        """Advance the game by one step.

        Parameters
        ----------
        elapsed:
            Seconds since the previous tick; negative values count as zero.
        commands:
            The player's input for this tick (see :func:`normalize_commands`).
        """

        self.start()
        command = normalize_commands(commands)
        elapsed = max(0.0, float(elapsed))
        lines_cleared = 0
        locked = False

        if not self.game_over:
            assert self.transcript is not None
            self.transcript.record(elapsed, command)
            self.ticks += 1
            self._apply_input(command)
            if self.active is not None and not self.controller.locked:
                self.active = self.controller.advance(self.grid, self.active, elapsed)
            if self.active is not None and self.controller.locked:
                cleared = self._lock_active()
                if cleared is not None:
                    lines_cleared = cleared.count
                    locked = True

        event = self.game_over and not self._over_reported
        if event:
            self._over_reported = True
        return TickResult(
            snapshot=self.snapshot(),
            lines_cleared=lines_cleared,
            locked=locked,
            game_over_event=event,
        )

    @property
    def next_kinds(self) -> Tuple[PieceKind, ...]:
        return tuple(self.queue)

    def ghost_cells(self) -> Tuple[Cell, ...]:
        """Return the cells the active piece would occupy after a hard drop."""

        if self.active is None:
            return ()
        landing = self.active.moved(0, drop_distance(self.grid, self.active))
        return tuple(landing.cells())

    def snapshot(self) -> Snapshot:
        """Return an immutable view of the current state."""

        piece = self.active
        return Snapshot(
            cells=self.grid.cells(),
            active_kind=piece.kind if piece else None,
            active_rotation=piece.rotation if piece else None,
            active_cells=tuple(piece.cells()) if piece else (),
            active_color=piece.color if piece else 0,
            ghost_cells=self.ghost_cells(),
            next_kinds=self.next_kinds,
            held=self.held,
            lock_phase=self.controller.phase,
            game_over=self.game_over,
            tick=self.ticks,
            lines=self.lines,
        )


def snapshots_equal(a: Snapshot, b: Snapshot) -> bool:
    """Return ``True`` if two snapshots describe the same state."""

    return (
        np.array_equal(a.cells, b.cells)
        and a.active_kind == b.active_kind
        and a.active_rotation == b.active_rotation
        and a.active_cells == b.active_cells
        and a.next_kinds == b.next_kinds
        and a.held == b.held
        and a.lock_phase == b.lock_phase
        and a.game_over == b.game_over
        and a.tick == b.tick
        and a.lines == b.lines
    )
