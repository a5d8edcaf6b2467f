"""Tests for the models package."""

import dataclasses
import datetime as dt

import pytest

from ppt_game.models import (
    CellState,
    CellStatus,
    GameState,
    GameStatus,
    SessionRecordError,
)


class TestEnums:
    def test_terminal_statuses(self):
        assert not CellStatus.UNANSWERED.is_terminal
        assert CellStatus.CORRECT.is_terminal
        assert CellStatus.INCORRECT.is_terminal

    def test_values(self):
        assert GameStatus.PLAYING.value == "playing"
        assert GameStatus.COMPLETED.value == "completed"


class TestPuzzleCell:
    def test_frozen(self, puzzle):
        with pytest.raises(dataclasses.FrozenInstanceError):
            puzzle.cell(0, 0).answer = "Mozart"

    def test_with_id_copies(self, puzzle):
        renumbered = puzzle.with_id(77)
        assert renumbered.id == 77
        assert puzzle.id == 1
        assert renumbered.rows is puzzle.rows


class TestCellState:
    def test_to_dict(self):
        cell = CellState(guesses=["a"], guesses_remaining=1)
        assert cell.to_dict() == {"guesses": ["a"], "status": "unanswered", "guessesRemaining": 1}

    @pytest.mark.parametrize("data", [
        {"guesses": "a", "status": "unanswered", "guessesRemaining": 1},
        {"guesses": [1], "status": "unanswered", "guessesRemaining": 1},
        {"guesses": [], "status": "unanswered", "guessesRemaining": 0},
        {"guesses": ["a"], "status": "incorrect", "guessesRemaining": 1},
        {"guesses": [], "status": "correct", "guessesRemaining": 2},
        {"guesses": [], "status": "unanswered", "guessesRemaining": True},
        {"guesses": [], "status": "unanswered"},
        "not a dict",
    ])
    def test_rejects_invalid(self, data):
        with pytest.raises(SessionRecordError):
            CellState.from_dict(data)


class TestGameState:
    def test_fresh(self):
        state = GameState.fresh(5, grid_size=3, max_attempts=3)
        assert state.puzzle_id == 5
        assert len(state.cells) == 3
        assert all(cell.guesses_remaining == 3 for row in state.cells for cell in row)
        # Rows must not share CellState objects
        state.cells[0][0].guesses.append("x")
        assert state.cells[1][0].guesses == []

    def test_round_trip_with_completion(self):
        state = GameState.fresh(2)
        state.game_status = GameStatus.COMPLETED
        state.completed_at = dt.datetime(2025, 1, 2, tzinfo=dt.timezone.utc)
        restored = GameState.from_dict(state.to_dict())
        assert restored == state

    def test_accepts_javascript_timestamps(self):
        record = GameState.fresh(2).to_dict()
        record["startedAt"] = "2025-01-01T05:00:00.000Z"
        assert GameState.from_dict(record).started_at.year == 2025

    def test_rejects_non_dict(self):
        with pytest.raises(SessionRecordError):
            GameState.from_dict(["nope"])

    def test_rejects_bad_id(self):
        record = GameState.fresh(2).to_dict()
        record["puzzleId"] = "2"
        with pytest.raises(SessionRecordError):
            GameState.from_dict(record)
