"""Rotation with wall kicks.

Kick offsets follow the Super Rotation System guideline tables.  They are
written below exactly as published, with ``y`` pointing up, and converted once
to grid offsets (``y`` pointing down) when the lookup table is built.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, List, Sequence, Tuple

from .collision import collides
from .errors import RotationRejected
from .grid import Grid
from .pieces import ActivePiece, Offset, PieceKind, RotationState


class Direction(IntEnum):
    CW = 1
    CCW = -1


class KickCategory(str, Enum):
    O = "O"
    I = "I"
    JLSTZ = "JLSTZ"


_R0, _R90, _R180, _R270 = RotationState

_JLSTZ_KICKS: Dict[Tuple[RotationState, RotationState], List[Offset]] = {
    (_R0, _R90): [(0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)],
    (_R90, _R0): [(0, 0), (1, 0), (1, -1), (0, 2), (1, 2)],
    (_R90, _R180): [(0, 0), (1, 0), (1, -1), (0, 2), (1, 2)],
    (_R180, _R90): [(0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)],
    (_R180, _R270): [(0, 0), (1, 0), (1, 1), (0, -2), (1, -2)],
    (_R270, _R180): [(0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)],
    (_R270, _R0): [(0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)],
    (_R0, _R270): [(0, 0), (1, 0), (1, 1), (0, -2), (1, -2)],
}

_I_KICKS: Dict[Tuple[RotationState, RotationState], List[Offset]] = {
    (_R0, _R90): [(0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)],
    (_R90, _R0): [(0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)],
    (_R90, _R180): [(0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)],
    (_R180, _R90): [(0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)],
    (_R180, _R270): [(0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)],
    (_R270, _R180): [(0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)],
    (_R270, _R0): [(0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)],
    (_R0, _R270): [(0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)],
}

KickKey = Tuple[KickCategory, RotationState, RotationState]


def _build_kick_table() -> Dict[KickKey, Tuple[Offset, ...]]:
    table: Dict[KickKey, Tuple[Offset, ...]] = {}
    for category, source in ((KickCategory.JLSTZ, _JLSTZ_KICKS), (KickCategory.I, _I_KICKS)):
        for (start, end), offsets in source.items():
            table[(category, start, end)] = tuple((dx, -dy) for dx, dy in offsets)
    for start in RotationState:
        for end in (start.cw(), start.ccw()):
            table[(KickCategory.O, start, end)] = ((0, 0),)
    return table


KICK_TABLE: Dict[KickKey, Tuple[Offset, ...]] = _build_kick_table()


def kick_category(kind: PieceKind) -> KickCategory:
    if kind is PieceKind.O:
        return KickCategory.O
    if kind is PieceKind.I:
        return KickCategory.I
    return KickCategory.JLSTZ


def kicks(kind: PieceKind, start: RotationState, end: RotationState) -> Sequence[Offset]:
    """Return the ordered grid offsets to try when rotating ``start`` -> ``end``."""

    return KICK_TABLE[(kick_category(kind), RotationState(start), RotationState(end))]


def resolve_rotation(grid: Grid, piece: ActivePiece, direction: int = Direction.CW) -> ActivePiece:
    """Return ``piece`` rotated one step in ``direction``.

    Each kick offset is tried in order and the first placement that does not
    collide wins.  ``piece`` itself is never modified.

    Raises:
        RotationRejected: If every kick offset collides.
    """

    target = piece.rotation.cw() if direction > 0 else piece.rotation.ccw()
    for offset in kicks(piece.kind, piece.rotation, target):
        candidate = piece.rotated(target, offset)
        if not collides(grid, candidate.kind, candidate.rotation, candidate.anchor):
            return candidate
    raise RotationRejected(
        f"{piece.kind.value} cannot rotate {piece.rotation.name} -> {target.name} at {piece.anchor}"
    )
