from __future__ import annotations

import pytest

from karpas.errors import RotationRejected
from karpas.grid import Grid
from karpas.pieces import ActivePiece, PieceKind, RotationState
from karpas.rotation import KICK_TABLE, Direction, kicks, resolve_rotation


def test_every_transition_has_kicks_starting_with_zero() -> None:
    for kind in PieceKind:
        for start in RotationState:
            for end in (start.cw(), start.ccw()):
                offsets = kicks(kind, start, end)
                assert len(offsets) >= 1
                assert offsets[0] == (0, 0)
    # 8 transitions for each of the three categories.
    assert len(KICK_TABLE) == 24


def test_o_kicks_are_trivial() -> None:
    for start in RotationState:
        assert tuple(kicks(PieceKind.O, start, start.cw())) == ((0, 0),)


def test_guideline_offsets_are_flipped_to_grid_rows() -> None:
    # Published as (-1, +1) with y up: one column left, one row up.
    assert kicks(PieceKind.T, RotationState.R0, RotationState.R90)[2] == (-1, -1)
    assert kicks(PieceKind.I, RotationState.R0, RotationState.R90)[4] == (1, -2)


@pytest.mark.parametrize("kind", list(PieceKind))
@pytest.mark.parametrize("direction", [Direction.CW, Direction.CCW])
def test_rotation_on_empty_grid_uses_zero_offset(kind: PieceKind, direction: Direction) -> None:
    grid = Grid()
    piece = ActivePiece(kind, RotationState.R0, (3, 5))
    rotated = resolve_rotation(grid, piece, direction)
    expected = RotationState.R90 if direction is Direction.CW else RotationState.R270
    assert rotated.rotation is expected
    assert rotated.anchor == piece.anchor


def test_o_piece_four_rotations_return_to_start() -> None:
    grid = Grid()
    piece = ActivePiece.spawn(PieceKind.O)
    assert piece.anchor == (4, 0)
    current = piece
    for _ in range(4):
        current = resolve_rotation(grid, current, Direction.CW)
    assert current.rotation is RotationState.R0
    assert current.anchor == (4, 0)
    assert current == piece


def test_t_kicks_off_left_wall() -> None:
    grid = Grid()
    piece = ActivePiece(PieceKind.T, RotationState.R90, (-1, 5))
    assert all(col >= 0 for col, _ in piece.cells())
    rotated = resolve_rotation(grid, piece, Direction.CCW)
    assert rotated.rotation is RotationState.R0
    assert rotated.anchor == (0, 5)


def test_i_kicks_off_right_wall() -> None:
    grid = Grid()
    piece = ActivePiece(PieceKind.I, RotationState.R90, (7, 5))
    assert {col for col, _ in piece.cells()} == {9}
    rotated = resolve_rotation(grid, piece, Direction.CW)
    assert rotated.rotation is RotationState.R180
    assert rotated.anchor == (6, 5)


def test_rotation_rejected_when_every_kick_collides() -> None:
    piece = ActivePiece(PieceKind.T, RotationState.R0, (3, 5))
    grid = Grid()
    free = set(piece.cells())
    for row in range(grid.height):
        for col in range(grid.width):
            if (col, row) not in free:
                grid.set(col, row, 1)

    with pytest.raises(RotationRejected):
        resolve_rotation(grid, piece, Direction.CW)
    with pytest.raises(RotationRejected):
        resolve_rotation(grid, piece, Direction.CCW)
    assert piece.rotation is RotationState.R0
    assert piece.anchor == (3, 5)
