from __future__ import annotations

import dataclasses
import logging

import pytest

from blockfall.errors import ContractViolation
from blockfall.game_state import TICK_MS, GameState, SessionConfig, SessionStatus
from blockfall.geometry import Point
from blockfall.piece import DropResult
from blockfall.randomizer import BagRandomizer
from blockfall.tetromino import TetrominoType


class FixedRandomizer:
    """Deals the same kind forever."""

    def __init__(self, kind: TetrominoType) -> None:
        self.kind = kind

    def peek(self) -> TetrominoType:
        return self.kind

    def next(self) -> TetrominoType:
        return self.kind


def _state(kind: TetrominoType = TetrominoType.O) -> GameState:
    return GameState(randomizer=FixedRandomizer(kind))


def test_spawn_centres_piece_above_board():
    state = _state(TetrominoType.O)
    assert state.status is SessionStatus.EMPTY
    piece = state.spawn()
    assert piece is state.active
    assert piece.position == Point(4, -2)
    assert state.status is SessionStatus.FALLING
    assert state.active_identity == 4

    state = _state(TetrominoType.I)
    assert state.spawn().position == Point(5, -4)


def test_spawn_while_active_is_a_contract_violation():
    state = _state()
    state.spawn()
    with pytest.raises(ContractViolation):
        state.spawn()
    assert not state.spawn_if_empty()


def test_tick_cycle_spawns_falls_and_locks():
    state = _state(TetrominoType.O)
    assert state.tick() is None
    assert state.status is SessionStatus.FALLING
    results = [state.tick() for _ in range(21)]
    assert results[-1] is DropResult.LOCKED
    assert all(r is DropResult.MOVED for r in results[:-1])
    assert state.status is SessionStatus.EMPTY
    assert state.pieces == 1
    assert state.cell(19, 4) == 4
    assert state.spawn_if_empty()


def test_commands_are_noops_without_active_piece():
    state = _state()
    assert not state.move_left()
    assert not state.move_right()
    assert not state.rotate_cw()
    assert not state.rotate_ccw()
    assert not state.soft_drop()
    assert state.hard_drop() == 0
    assert state.advance() is None
    assert state.active_cells() == []
    assert state.ghost_cells() == []
    assert state.ghost_y() is None


def test_moves_and_rotations_delegate_to_piece():
    state = _state(TetrominoType.T)
    state.spawn()
    start = state.active.position
    assert state.move_left()
    assert state.active.position == Point(start.x - 1, start.y)
    assert state.move_right()
    assert state.rotate_cw()
    assert state.rotate_ccw()
    assert state.active.position == start
    assert state.soft_drop()
    assert state.active.position == Point(start.x, start.y + 1)


def test_hard_drop_clears_completed_row(caplog):
    state = _state(TetrominoType.O)
    for col in range(state.board.width):
        if col not in (4, 5):
            state.board.set_cell(19, col, 1)
    state.spawn()
    assert state.ghost_y() == 18

    with caplog.at_level(logging.INFO, logger="blockfall.game_state"):
        assert state.hard_drop() == 20

    assert state.status is SessionStatus.EMPTY
    assert state.lines == 1
    # The upper half of the O fell into the cleared row.
    assert [state.cell(19, c) for c in range(10)] == [0, 0, 0, 0, 4, 4, 0, 0, 0, 0]
    assert not state.board.grid[:19].any()
    assert "Cleared 1 row(s)" in caplog.text


def test_lock_above_board_ends_session(caplog):
    state = GameState(SessionConfig(seed=3))
    for row in range(state.board.height):
        state.board.set_cell(row, 4, 1)
        state.board.set_cell(row, 5, 1)

    with caplog.at_level(logging.INFO, logger="blockfall.game_state"):
        state.tick()
        assert state.status is SessionStatus.FALLING
        assert state.tick() is DropResult.LOCKED

    assert state.game_over
    assert state.status is SessionStatus.TERMINATED
    assert state.active is None
    assert state.tick() is None
    assert not state.spawn_if_empty()
    with pytest.raises(ContractViolation):
        state.spawn()
    assert "topped out" in caplog.text


def test_spawn_that_cannot_fit_ends_session():
    state = GameState(SessionConfig(width=1, height=4), randomizer=FixedRandomizer(TetrominoType.O))
    assert state.spawn() is None
    assert state.game_over


def test_reset_starts_fresh():
    state = GameState(SessionConfig(seed=11))
    state.tick()
    state.hard_drop()
    assert state.pieces == 1
    state.reset(seed=11)
    assert state.pieces == 0
    assert state.lines == 0
    assert state.status is SessionStatus.EMPTY
    assert not state.board.grid.any()


def test_upcoming_previews_next_spawn():
    state = GameState(SessionConfig(seed=42))
    for _ in range(4):
        upcoming = state.upcoming
        state.spawn()
        assert state.active.kind is upcoming
        state.hard_drop()


def test_reset_keeps_injected_randomizer():
    rand = FixedRandomizer(TetrominoType.S)
    state = GameState(randomizer=rand)
    state.tick()
    state.reset()
    assert state.randomizer is rand
    state.spawn()
    assert state.active.kind is TetrominoType.S


def test_reset_with_seed_replaces_randomizer():
    rand = FixedRandomizer(TetrominoType.S)
    state = GameState(randomizer=rand)
    state.reset(seed=4)
    assert state.randomizer is not rand
    fresh = BagRandomizer(seed=4)
    assert [state.randomizer.next() for _ in range(14)] == [fresh.next() for _ in range(14)]


def test_elapsed_time_follows_tick_cadence():
    state = GameState(SessionConfig(tick_ms=50), randomizer=FixedRandomizer(TetrominoType.O))
    assert SessionConfig().tick_ms == TICK_MS
    for _ in range(3):
        state.tick()
    assert state.ticks == 3
    assert state.elapsed_ms == 150
    state.reset()
    assert state.elapsed_ms == 0


def test_game_state_is_a_dataclass():
    state = GameState(SessionConfig(width=6, height=8), randomizer=FixedRandomizer(TetrominoType.O))
    assert dataclasses.is_dataclass(state)
    assert state.board.grid.shape == (8, 6)
    assert state.pieces == state.lines == state.ticks == 0
