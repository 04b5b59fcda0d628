"""Collision checks between pieces and the grid."""

from __future__ import annotations

from .grid import Grid
from .pieces import ActivePiece, Cell, PieceKind, RotationState, piece_cells


def collides(grid: Grid, kind: PieceKind, rotation: RotationState, anchor: Cell) -> bool:
    """Return ``True`` if the placement overlaps a wall, the floor or a locked cell.

    The check has no side effects so it can be used to probe any number of
    candidate placements, e.g. every kick of a rotation attempt.  Cells above
    the visible top of the grid are allowed.
    """

    for col, row in piece_cells(kind, rotation, anchor):
        if grid.is_occupied(col, row):
            return True
    return False


def fits(grid: Grid, piece: ActivePiece) -> bool:
    """Return ``True`` if ``piece`` can occupy its current cells."""

    return not collides(grid, piece.kind, piece.rotation, piece.anchor)


def can_move(grid: Grid, piece: ActivePiece, dx: int, dy: int) -> bool:
    """Return ``True`` if ``piece`` can be translated by ``dx`` and ``dy``."""

    col, row = piece.anchor
    return not collides(grid, piece.kind, piece.rotation, (col + dx, row + dy))


def drop_distance(grid: Grid, piece: ActivePiece) -> int:
    """Return how many rows ``piece`` can fall before it collides."""

    distance = 0
    while can_move(grid, piece, 0, distance + 1):
        distance += 1
    return distance
