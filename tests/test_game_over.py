from __future__ import annotations

import logging

import numpy as np

from karpas.commands import Command
from karpas.config import EngineConfig
from karpas.grid import Grid
from karpas.pieces import ActivePiece, PieceKind, RotationState
from karpas.session import GameSession


def _block_spawn_rows(grid: Grid) -> None:
    for row in (0, 1):
        for col in range(3, 7):
            grid.set(col, row, 1)


def test_blocked_spawn_after_lock_ends_game(caplog) -> None:
    session = GameSession(EngineConfig(seed=7))
    session.start()
    _block_spawn_rows(session.grid)

    with caplog.at_level(logging.INFO, logger="karpas.session"):
        result = session.tick(0.0, Command.HARD_DROP)

    assert result.locked
    assert result.game_over_event
    assert result.snapshot.game_over
    assert result.snapshot.active_kind is None
    assert result.snapshot.active_cells == ()
    assert session.active is None
    assert any("Game over" in message for message in caplog.messages)


def test_game_over_event_fires_once_and_freezes_state() -> None:
    session = GameSession(EngineConfig(seed=7))
    session.start()
    _block_spawn_rows(session.grid)
    session.tick(0.0, Command.HARD_DROP)
    frozen = session.grid.cells()
    ticks = session.ticks

    for command in (Command.MOVE_LEFT, Command.HARD_DROP, Command.HOLD, None):
        result = session.tick(1.0, command)
        assert not result.game_over_event
        assert result.snapshot.game_over
        assert not result.locked
        assert result.lines_cleared == 0

    assert session.ticks == ticks
    assert session.active is None
    assert np.array_equal(frozen, session.grid.cells())


def test_spawn_blocked_at_start_reports_on_first_tick() -> None:
    grid = Grid()
    _block_spawn_rows(grid)
    session = GameSession(EngineConfig(seed=3), grid=grid)

    result = session.tick(0.0)

    assert result.game_over_event
    assert result.snapshot.game_over
    assert not session.tick(0.0).game_over_event


def test_clearing_top_rows_is_not_game_over() -> None:
    session = GameSession(EngineConfig(seed=2))
    session.start()
    grid = session.grid
    for row in range(4, 8):
        for col in range(1, grid.width):
            grid.set(col, row, 1)
    grid.set(0, 8, 3)
    session.active = ActivePiece(PieceKind.I, RotationState.R90, (-2, 0))
    session.controller.start(session.active)

    result = session.tick(0.0, Command.HARD_DROP)

    assert result.lines_cleared == 4
    assert not result.snapshot.game_over
    assert int(np.count_nonzero(result.snapshot.cells)) == 1
    assert result.snapshot.cells[8, 0] == 3


def test_piece_locked_above_field_ends_game() -> None:
    session = GameSession(EngineConfig(seed=5))
    session.start()
    for row in range(session.grid.height):
        session.grid.set(5, row, 1)
    session.active = ActivePiece(PieceKind.I, RotationState.R90, (3, -4))
    session.controller.start(session.active)
    before = session.grid.cells()

    result = session.tick(0.0, Command.HARD_DROP)

    assert result.game_over_event
    assert not result.locked
    assert result.lines_cleared == 0
    assert session.pieces == 0
    assert np.array_equal(before, result.snapshot.cells)


def test_hold_into_blocked_spawn_ends_game() -> None:
    session = GameSession(EngineConfig(seed=8))
    session.start()
    session.active = ActivePiece(PieceKind.T, RotationState.R0, (3, 10))
    session.controller.start(session.active)
    _block_spawn_rows(session.grid)

    result = session.tick(0.0, Command.HOLD)

    assert result.game_over_event
    assert session.held is PieceKind.T
