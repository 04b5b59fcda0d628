"""Locking pieces into the grid and clearing completed rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import SpawnBlocked
from .grid import Grid
from .pieces import ActivePiece


@dataclass(frozen=True)
class ClearResult:
    rows: Tuple[int, ...] = ()

    @property
    def count(self) -> int:
        return len(self.rows)


def lock_piece(grid: Grid, piece: ActivePiece) -> None:
    """Write ``piece``'s blocks into ``grid`` with the piece's colour.

    Raises:
        SpawnBlocked: If any block rests above the visible field.  Nothing is
            written in that case.
    """

    cells = piece.cells()
    if any(row < 0 for _, row in cells):
        raise SpawnBlocked(f"{piece.kind.value} locked above the field at {piece.anchor}")
    for col, row in cells:
        grid.set(col, row, piece.color)


def clear_completed_rows(grid: Grid) -> ClearResult:
    """Remove every full row from ``grid`` and report which ones were cleared."""

    rows = grid.full_rows()
    if rows:
        grid.clear_rows(rows)
    return ClearResult(tuple(rows))
