"""Grid representation for the playfield."""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import HEIGHT, WIDTH
from .errors import OutOfBounds


Cells = NDArray[np.uint8]

EMPTY = 0


class Grid:
    """Fixed-size matrix of locked cells.

    Cells are stored row-major (``cells[row, col]``) with row ``0`` at the top
    of the field.  ``0`` marks an empty cell; any other value is the colour tag
    of the piece that was locked there.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self._cells: Cells = np.zeros((self.height, self.width), dtype=np.uint8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from a list of rows, top row first."""

        if not rows:
            raise ValueError("Grid needs at least one row")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid width mismatch")
        grid = cls(width=width, height=len(rows))
        grid._cells[:, :] = np.asarray(rows, dtype=np.uint8)
        return grid

    def _check(self, col: int, row: int) -> None:
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise OutOfBounds(f"Cell ({col}, {row}) out of bounds")

    def get(self, col: int, row: int) -> int:
        """Return the colour tag at ``(col, row)``.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
        """
        self._check(col, row)
        return int(self._cells[row, col])

    def set(self, col: int, row: int, color: int) -> None:
        """Write ``color`` into the cell at ``(col, row)``.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
        """
        self._check(col, row)
        self._cells[row, col] = np.uint8(color)

    def is_occupied(self, col: int, row: int) -> bool:
        """Return ``True`` if the cell at ``(col, row)`` blocks a piece.

        Columns outside the grid and rows below the floor act as solid walls.
        Rows above the visible top are open so pieces can spawn and rotate
        there.
        """

        if not 0 <= col < self.width or row >= self.height:
            return True
        if row < 0:
            return False
        return bool(self._cells[row, col] != EMPTY)

    def full_rows(self) -> List[int]:
        """Return the indices of completely filled rows, ascending."""

        full = np.all(self._cells != EMPTY, axis=1)
        return [int(row) for row in np.flatnonzero(full)]

    def clear_rows(self, rows: Iterable[int]) -> int:
        """Remove ``rows`` and compact everything above them.

        All rows are removed in a single pass, so non-contiguous selections
        shift each surviving row down by exactly the number of cleared rows
        beneath it.  Returns how many rows were removed.
        """

        targets = set(rows)
        for row in targets:
            if not 0 <= row < self.height:
                raise OutOfBounds(f"Row {row} out of bounds")
        if not targets:
            return 0

        keep = np.ones(self.height, dtype=bool)
        keep[sorted(targets)] = False
        remaining = self._cells[keep]
        fresh = np.zeros((len(targets), self.width), dtype=self._cells.dtype)
        self._cells = np.vstack((fresh, remaining))
        return len(targets)

    def clear(self) -> None:
        """Empty every cell."""

        self._cells.fill(EMPTY)

    def cells(self) -> Cells:
        """Return a read-only copy of the cell matrix."""

        copy = self._cells.copy()
        copy.setflags(write=False)
        return copy

    def rows_as_lists(self) -> List[List[int]]:
        return self._cells.tolist()

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
