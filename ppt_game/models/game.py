"""
Game Data Models

Contains all session-related data structures and enums, and the
serialization used by the session persistence layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional


class CellStatus(Enum):
    """Per-cell status. CORRECT and INCORRECT are terminal."""
    UNANSWERED = "unanswered"
    CORRECT = "correct"
    INCORRECT = "incorrect"

    @property
    def is_terminal(self) -> bool:
        return self is not CellStatus.UNANSWERED


class GameStatus(Enum):
    """Session status. COMPLETED is terminal."""
    PLAYING = "playing"
    COMPLETED = "completed"


class Tier(Enum):
    """Share-grid classification of a cell."""
    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"


class SessionRecordError(ValueError):
    """A persisted session record is malformed."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CellState:
    """Guess history and status of one cell within a session."""
    guesses: List[str] = field(default_factory=list)
    guesses_remaining: int = 2
    status: CellStatus = CellStatus.UNANSWERED

    def to_dict(self) -> Dict:
        return {
            "guesses": list(self.guesses),
            "status": self.status.value,
            "guessesRemaining": self.guesses_remaining,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "CellState":
        try:
            guesses = data["guesses"]
            remaining = data["guessesRemaining"]
            status = CellStatus(data["status"])
        except (KeyError, TypeError, ValueError) as e:
            raise SessionRecordError(f"Invalid cell state: {e}")

        if not isinstance(guesses, list) or not all(isinstance(g, str) for g in guesses):
            raise SessionRecordError("Cell guesses must be a list of strings")
        if isinstance(remaining, bool) or not isinstance(remaining, int) or remaining < 0:
            raise SessionRecordError(f"Invalid guessesRemaining: {remaining!r}")
        # Status must agree with the attempt counter
        if status is CellStatus.UNANSWERED and remaining == 0:
            raise SessionRecordError("Unanswered cell has no attempts remaining")
        if status is CellStatus.INCORRECT and remaining != 0:
            raise SessionRecordError("Incorrect cell still has attempts remaining")
        if status is CellStatus.CORRECT and not guesses:
            raise SessionRecordError("Correct cell has no guesses")

        return cls(guesses=list(guesses), guesses_remaining=remaining, status=status)


@dataclass
class GameState:
    """Persistable state of one player's session on one puzzle."""
    puzzle_id: int
    cells: List[List[CellState]]
    game_status: GameStatus = GameStatus.PLAYING
    started_at: datetime = field(default_factory=utc_now)
    completed_at: Optional[datetime] = None

    @classmethod
    def fresh(cls, puzzle_id: int, grid_size: int = 3, max_attempts: int = 2) -> "GameState":
        cells = [
            [CellState(guesses_remaining=max_attempts) for _ in range(grid_size)]
            for _ in range(grid_size)
        ]
        return cls(puzzle_id=puzzle_id, cells=cells)

    def to_dict(self) -> Dict:
        record = {
            "puzzleId": self.puzzle_id,
            "cells": [[cell.to_dict() for cell in row] for row in self.cells],
            "gameStatus": self.game_status.value,
            "startedAt": self.started_at.isoformat(),
        }
        if self.completed_at is not None:
            record["completedAt"] = self.completed_at.isoformat()
        return record

    @classmethod
    def from_dict(cls, data: Dict, grid_size: int = 3) -> "GameState":
        """
        Rebuild a state from a persisted record.

        Raises:
            SessionRecordError: If any field is missing or has the wrong shape
        """
        if not isinstance(data, dict):
            raise SessionRecordError("Session record must be an object")

        try:
            puzzle_id = data["puzzleId"]
            raw_cells = data["cells"]
            game_status = GameStatus(data["gameStatus"])
            started_at = datetime.fromisoformat(data["startedAt"])
            completed_raw = data.get("completedAt")
            completed_at = datetime.fromisoformat(completed_raw) if completed_raw else None
        except (KeyError, TypeError, ValueError) as e:
            raise SessionRecordError(f"Invalid session record: {e}")

        if isinstance(puzzle_id, bool) or not isinstance(puzzle_id, int):
            raise SessionRecordError(f"Invalid puzzleId: {puzzle_id!r}")
        if (not isinstance(raw_cells, list) or len(raw_cells) != grid_size
                or any(not isinstance(row, list) or len(row) != grid_size for row in raw_cells)):
            raise SessionRecordError(f"Cells must be a {grid_size}x{grid_size} grid")

        cells = [[CellState.from_dict(cell) for cell in row] for row in raw_cells]
        return cls(
            puzzle_id=puzzle_id,
            cells=cells,
            game_status=game_status,
            started_at=started_at,
            completed_at=completed_at,
        )


@dataclass
class ShareResult:
    """Derived score view of a session."""
    puzzle_number: int
    grid: List[List[Tier]]
    correct_count: int
    total_cells: int = 9

    def to_dict(self) -> Dict:
        return {
            "puzzleNumber": self.puzzle_number,
            "grid": [[tier.value for tier in row] for row in self.grid],
            "correctCount": self.correct_count,
            "totalCells": self.total_cells,
        }
