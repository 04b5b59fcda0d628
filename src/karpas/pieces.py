"""Piece kinds, rotation geometry and the active piece.

Every kind is described once by its spawn shape inside a square bounding box.
The remaining rotation states are derived by turning that box clockwise, which
yields the usual SRS geometry (the I piece in a 4x4 box, O in 2x2, the rest in
3x3).  Offsets are ``(dx, dy)`` pairs relative to the top-left corner of the
box with ``dy`` growing downwards, matching the grid's row order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .config import WIDTH

Offset = Tuple[int, int]
Cell = Tuple[int, int]  # (col, row)
Shape = Tuple[Offset, ...]


class PieceKind(str, Enum):
    """Enumeration of the seven standard piece shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


class RotationState(IntEnum):
    """Clockwise-ordered rotation states."""

    R0 = 0
    R90 = 1
    R180 = 2
    R270 = 3

    def cw(self) -> "RotationState":
        return RotationState((self + 1) % 4)

    def ccw(self) -> "RotationState":
        return RotationState((self - 1) % 4)


def _rotate(shape: Shape, size: int) -> Shape:
    """Return ``shape`` turned 90 degrees clockwise inside a ``size`` box."""

    return tuple(sorted((size - 1 - dy, dx) for dx, dy in shape))


def _generate_rotations(shape: Shape, size: int) -> Dict[RotationState, Shape]:
    """Generate the four rotation states starting from the spawn ``shape``."""

    states: Dict[RotationState, Shape] = {}
    current = tuple(sorted(shape))
    for state in RotationState:
        states[state] = current
        current = _rotate(current, size)
    return states


# Spawn orientation and bounding box size for each kind.
_BASE_SHAPES: Dict[PieceKind, Tuple[Shape, int]] = {
    PieceKind.I: (((0, 1), (1, 1), (2, 1), (3, 1)), 4),
    PieceKind.O: (((0, 0), (1, 0), (0, 1), (1, 1)), 2),
    PieceKind.T: (((1, 0), (0, 1), (1, 1), (2, 1)), 3),
    PieceKind.S: (((1, 0), (2, 0), (0, 1), (1, 1)), 3),
    PieceKind.Z: (((0, 0), (1, 0), (1, 1), (2, 1)), 3),
    PieceKind.J: (((0, 0), (0, 1), (1, 1), (2, 1)), 3),
    PieceKind.L: (((2, 0), (0, 1), (1, 1), (2, 1)), 3),
}

# Display colours for each kind.
SHAPE_COLORS: Dict[PieceKind, Tuple[int, int, int]] = {
    PieceKind.I: (0, 255, 255),
    PieceKind.O: (255, 255, 0),
    PieceKind.T: (128, 0, 128),
    PieceKind.S: (0, 255, 0),
    PieceKind.Z: (255, 0, 0),
    PieceKind.J: (0, 0, 255),
    PieceKind.L: (255, 165, 0),
}

# Mapping from ``PieceKind`` to the tag stored in the grid.  ``0`` is reserved
# for empty cells.
PIECE_VALUES: Dict[PieceKind, int] = {kind: i + 1 for i, kind in enumerate(PieceKind)}


@dataclass(frozen=True)
class PieceDefinition:
    """Static geometry and colour for one piece kind."""

    kind: PieceKind
    color: int
    rgb: Tuple[int, int, int]
    box_size: int
    offsets: Mapping[RotationState, Shape]

    def spawn_column(self, width: int = WIDTH) -> int:
        """Return the left column of the bounding box at spawn."""

        return (width - self.box_size) // 2


def _build_definitions() -> Mapping[PieceKind, PieceDefinition]:
    table = {}
    for kind, (shape, size) in _BASE_SHAPES.items():
        table[kind] = PieceDefinition(
            kind=kind,
            color=PIECE_VALUES[kind],
            rgb=SHAPE_COLORS[kind],
            box_size=size,
            offsets=MappingProxyType(_generate_rotations(shape, size)),
        )
    return MappingProxyType(table)


PIECE_DEFINITIONS: Mapping[PieceKind, PieceDefinition] = _build_definitions()

# Reverse lookup used by renderers to colour grid tags.
CELL_COLORS: Dict[int, Tuple[int, int, int]] = {0: (0, 0, 0)}
for _kind, _value in PIECE_VALUES.items():
    CELL_COLORS[_value] = SHAPE_COLORS[_kind]


def shape_offsets(kind: PieceKind, rotation: RotationState) -> Shape:
    """Return the block offsets for ``kind`` at ``rotation``."""

    return PIECE_DEFINITIONS[kind].offsets[RotationState(rotation)]


def piece_cells(kind: PieceKind, rotation: RotationState, anchor: Cell) -> List[Cell]:
    """Return the absolute ``(col, row)`` cells of a placement."""

    col, row = anchor
    return [(col + dx, row + dy) for dx, dy in shape_offsets(kind, rotation)]


@dataclass(frozen=True)
class ActivePiece:
    """The currently falling piece.

    Instances are immutable; transitions produce new values so a rejected
    move never leaves a half-updated piece behind.
    """

    kind: PieceKind
    rotation: RotationState = RotationState.R0
    anchor: Cell = (0, 0)  # (col, row) of the bounding box's top-left

    @classmethod
    def spawn(cls, kind: PieceKind, width: int = WIDTH) -> "ActivePiece":
        """Return ``kind`` at its canonical spawn anchor and rotation."""

        column = PIECE_DEFINITIONS[kind].spawn_column(width)
        return cls(kind, RotationState.R0, (column, 0))

    @property
    def color(self) -> int:
        return PIECE_DEFINITIONS[self.kind].color

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        """Return the piece translated by ``dx`` columns and ``dy`` rows."""

        col, row = self.anchor
        return ActivePiece(self.kind, self.rotation, (col + dx, row + dy))

    def rotated(self, rotation: RotationState, offset: Offset = (0, 0)) -> "ActivePiece":
        """Return the piece in ``rotation`` with its anchor shifted by ``offset``."""

        col, row = self.anchor
        dx, dy = offset
        return ActivePiece(self.kind, RotationState(rotation), (col + dx, row + dy))

    def cells(self) -> List[Cell]:
        """Return the absolute cells covered by this piece."""

        return piece_cells(self.kind, self.rotation, self.anchor)
