from __future__ import annotations

import dataclasses

import pytest

from karpas.pieces import (
    PIECE_DEFINITIONS,
    ActivePiece,
    PieceKind,
    RotationState,
    piece_cells,
    shape_offsets,
)


def test_every_state_has_four_distinct_blocks() -> None:
    for kind, definition in PIECE_DEFINITIONS.items():
        assert set(definition.offsets) == set(RotationState)
        for state, offsets in definition.offsets.items():
            assert len(offsets) == 4
            assert len(set(offsets)) == 4, (kind, state)
            assert all(0 <= dx < definition.box_size for dx, _ in offsets)
            assert all(0 <= dy < definition.box_size for _, dy in offsets)


def test_o_piece_rotation_states_are_identical() -> None:
    states = {shape_offsets(PieceKind.O, state) for state in RotationState}
    assert len(states) == 1


def test_other_pieces_have_distinct_states() -> None:
    for kind in (PieceKind.I, PieceKind.T, PieceKind.J, PieceKind.L):
        states = {shape_offsets(kind, state) for state in RotationState}
        assert len(states) == 4, kind


def test_srs_geometry_samples() -> None:
    assert set(shape_offsets(PieceKind.I, RotationState.R0)) == {(0, 1), (1, 1), (2, 1), (3, 1)}
    assert set(shape_offsets(PieceKind.I, RotationState.R90)) == {(2, 0), (2, 1), (2, 2), (2, 3)}
    assert set(shape_offsets(PieceKind.I, RotationState.R180)) == {(0, 2), (1, 2), (2, 2), (3, 2)}
    assert set(shape_offsets(PieceKind.T, RotationState.R90)) == {(1, 0), (1, 1), (1, 2), (2, 1)}
    assert set(shape_offsets(PieceKind.J, RotationState.R90)) == {(1, 0), (2, 0), (1, 1), (1, 2)}


def test_colors_are_unique_and_non_zero() -> None:
    colors = [definition.color for definition in PIECE_DEFINITIONS.values()]
    assert 0 not in colors
    assert len(set(colors)) == len(PieceKind)


def test_rotation_state_cycles() -> None:
    assert RotationState.R0.cw() is RotationState.R90
    assert RotationState.R270.cw() is RotationState.R0
    assert RotationState.R0.ccw() is RotationState.R270
    state = RotationState.R180
    for _ in range(4):
        state = state.cw()
    assert state is RotationState.R180


@pytest.mark.parametrize(
    "kind,anchor",
    [
        (PieceKind.I, (3, 0)),
        (PieceKind.O, (4, 0)),
        (PieceKind.T, (3, 0)),
        (PieceKind.S, (3, 0)),
        (PieceKind.Z, (3, 0)),
        (PieceKind.J, (3, 0)),
        (PieceKind.L, (3, 0)),
    ],
)
def test_spawn_anchor(kind: PieceKind, anchor: tuple) -> None:
    piece = ActivePiece.spawn(kind)
    assert piece.anchor == anchor
    assert piece.rotation is RotationState.R0
    assert all(0 <= row <= 1 for _, row in piece.cells())


def test_active_piece_transitions_return_new_values() -> None:
    piece = ActivePiece(PieceKind.T, RotationState.R0, (3, 5))
    moved = piece.moved(-1, 2)
    assert moved.anchor == (2, 7)
    assert piece.anchor == (3, 5)
    rotated = piece.rotated(RotationState.R90, (1, -1))
    assert rotated.rotation is RotationState.R90
    assert rotated.anchor == (4, 4)
    with pytest.raises(dataclasses.FrozenInstanceError):
        piece.anchor = (0, 0)  # type: ignore[misc]


def test_piece_cells_are_anchor_relative() -> None:
    cells = piece_cells(PieceKind.O, RotationState.R0, (4, 18))
    assert sorted(cells) == [(4, 18), (4, 19), (5, 18), (5, 19)]


def test_definition_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        PIECE_DEFINITIONS[PieceKind.I] = PIECE_DEFINITIONS[PieceKind.O]  # type: ignore[index]
