"""Deterministic falling-block puzzle engine."""

from .config import EngineConfig
from .errors import EngineError, OutOfBounds, RotationRejected, SpawnBlocked
from .grid import Grid
from .pieces import (
    PIECE_DEFINITIONS,
    ActivePiece,
    PieceDefinition,
    PieceKind,
    RotationState,
    piece_cells,
)
from .collision import can_move, collides, drop_distance
from .rotation import KICK_TABLE, Direction, kicks, resolve_rotation
from .gravity import GravityAndLockController, LockPhase
from .line_clear import clear_completed_rows, lock_piece
from .randomizer import SevenBag
from .commands import Command, normalize_commands
from .session import GameSession, Snapshot, TickResult, snapshots_equal
from .transcript import Transcript, replay
from .render import render_ascii, render_grid

__all__ = [
    "EngineConfig",
    "EngineError",
    "OutOfBounds",
    "RotationRejected",
    "SpawnBlocked",
    "Grid",
    "PIECE_DEFINITIONS",
    "ActivePiece",
    "PieceDefinition",
    "PieceKind",
    "RotationState",
    "piece_cells",
    "can_move",
    "collides",
    "drop_distance",
    "KICK_TABLE",
    "Direction",
    "kicks",
    "resolve_rotation",
    "GravityAndLockController",
    "LockPhase",
    "clear_completed_rows",
    "lock_piece",
    "SevenBag",
    "Command",
    "normalize_commands",
    "GameSession",
    "Snapshot",
    "TickResult",
    "snapshots_equal",
    "Transcript",
    "replay",
    "render_ascii",
    "render_grid",
]
