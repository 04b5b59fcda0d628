"""Plain-text rendering helpers for snapshots."""

from __future__ import annotations

from typing import List

from .session import Snapshot


def render_grid(snapshot: Snapshot) -> List[List[int]]:
    """Return a copy of the grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw.
    Cells covered by the active piece receive the piece's colour tag; cells of
    the piece above the visible field are skipped.
    """

    grid = snapshot.cells.tolist()
    for col, row in snapshot.active_cells:
        if 0 <= row < snapshot.height and 0 <= col < snapshot.width:
            grid[row][col] = snapshot.active_color
    return grid


def render_ascii(snapshot: Snapshot) -> str:
    """Return a text frame: ``#`` locked, ``@`` active, ``+`` ghost."""

    rows = [["#" if cell else " " for cell in row] for row in snapshot.cells.tolist()]
    for col, row in snapshot.ghost_cells:
        if 0 <= row < snapshot.height and rows[row][col] == " ":
            rows[row][col] = "+"
    for col, row in snapshot.active_cells:
        if 0 <= row < snapshot.height:
            rows[row][col] = "@"
    lines = ["|" + "".join(row) + "|" for row in rows]
    lines.append("+" + "-" * snapshot.width + "+")
    return "\n".join(lines)
