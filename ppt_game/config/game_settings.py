"""
Game Configuration Constants Module

This module defines all game configuration constants and the puzzle
content loader. Matching policy and attempt limits live here so they can
be tuned without touching the matching or session logic.
"""

import json
import os
from datetime import date
from typing import Dict, Final, Optional

from ..models.puzzle import COLUMN_ORDER, Puzzle, PuzzleContentError, PuzzleData
from ..models.game import Tier

# Grid shape
GRID_SIZE: Final[int] = 3
TOTAL_CELLS: Final[int] = GRID_SIZE * GRID_SIZE

MAX_ATTEMPTS_PER_CELL: Final[int] = 2
"""
Guesses allowed per cell. Also selects the tier scale: with 2 attempts a
second-try answer is YELLOW, with 3 the third try is ORANGE.
"""

# Answer matching policy
EDIT_DISTANCE_CEILING: Final[int] = 2
MIN_LENGTH_RATIO: Final[float] = 0.7

# Persistence
STORAGE_KEY: Final[str] = "ppt-game-state"
SESSION_CACHE_SIZE: Final[int] = 1024  # sessions held in memory per service

# Sharing
SHARE_TITLE: Final[str] = "People, Places & Things"
TIER_GLYPHS: Final[Dict[Tier, str]] = {
    Tier.GREEN: "\U0001F7E9",
    Tier.YELLOW: "\U0001F7E8",
    Tier.ORANGE: "\U0001F7E7",
    Tier.RED: "\U0001F7E5",
}

DEFAULT_PUZZLE_FILE: Final[str] = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'puzzles.json'
)


def load_puzzle_data(path: Optional[str] = None) -> PuzzleData:
    """
    Load puzzle content from a JSON file.

    Args:
        path: Content file; defaults to the bundled puzzles.json

    Returns:
        PuzzleData: Validated puzzles numbered from 1 by position

    Raises:
        FileNotFoundError: If the content file is not found
        PuzzleContentError: If the content is malformed
    """
    path = path or DEFAULT_PUZZLE_FILE

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Puzzle file not found: {path}")
    except json.JSONDecodeError as e:
        raise PuzzleContentError(f"Invalid JSON in {path}: {e}")

    return parse_puzzle_data(raw)


def parse_puzzle_data(raw: Dict) -> PuzzleData:
    """Build and validate PuzzleData from the decoded content document."""
    if not isinstance(raw, dict):
        raise PuzzleContentError("Puzzle content must be a JSON object")

    try:
        start_date = date.fromisoformat(str(raw["startDate"])[:10])
    except KeyError:
        raise PuzzleContentError("Puzzle content is missing startDate")
    except ValueError as e:
        raise PuzzleContentError(f"Invalid startDate: {e}")

    raw_puzzles = raw.get("puzzles")
    if not isinstance(raw_puzzles, list) or not raw_puzzles:
        raise PuzzleContentError("Puzzle list cannot be empty")

    puzzles = []
    for index, raw_puzzle in enumerate(raw_puzzles):
        _check_shape(raw_puzzle, index)
        try:
            puzzles.append(Puzzle.from_dict(raw_puzzle, puzzle_id=index + 1))
        except (KeyError, TypeError) as e:
            raise PuzzleContentError(f"Puzzle {index + 1} is missing field {e}")

    data = PuzzleData(start_date=start_date, puzzles=puzzles)
    validate_puzzle_data(data)
    return data


def _check_shape(raw_puzzle: Dict, index: int) -> None:
    rows = raw_puzzle.get("rows") if isinstance(raw_puzzle, dict) else None
    if not isinstance(rows, list) or len(rows) != GRID_SIZE:
        raise PuzzleContentError(f"Puzzle {index + 1} must have exactly {GRID_SIZE} rows")
    for row_index, row in enumerate(rows):
        cells = row.get("cells") if isinstance(row, dict) else None
        if not isinstance(cells, list) or len(cells) != GRID_SIZE:
            raise PuzzleContentError(
                f"Puzzle {index + 1} row {row_index + 1} must have exactly {GRID_SIZE} cells"
            )


def validate_puzzle_data(data: PuzzleData) -> bool:
    """
    Validates the integrity of loaded puzzle content.

    This function checks:
    1. The puzzle list is not empty
    2. Every puzzle is a 3x3 grid
    3. Columns follow the People/Places/Things order
    4. Every cell has a non-blank clue and answer

    Returns:
        bool: True if the content passes all checks

    Raises:
        PuzzleContentError: If any check fails with a detailed message
    """
    if not data.puzzles:
        raise PuzzleContentError("Puzzle list cannot be empty")

    for puzzle in data.puzzles:
        if len(puzzle.rows) != GRID_SIZE:
            raise PuzzleContentError(f"Puzzle {puzzle.id} must have exactly {GRID_SIZE} rows")

        for row_index, row in enumerate(puzzle.rows):
            if len(row.cells) != GRID_SIZE:
                raise PuzzleContentError(
                    f"Puzzle {puzzle.id} row {row_index + 1} must have exactly {GRID_SIZE} cells"
                )
            for col_index, cell in enumerate(row.cells):
                where = f"Puzzle {puzzle.id} row {row_index + 1} column {col_index + 1}"
                if cell.category is not COLUMN_ORDER[col_index]:
                    raise PuzzleContentError(
                        f"{where} must be {COLUMN_ORDER[col_index].value}, got {cell.category.value}"
                    )
                if not cell.answer.strip():
                    raise PuzzleContentError(f"{where} has a blank answer")
                if not cell.clue.strip():
                    raise PuzzleContentError(f"{where} has a blank clue")

    return True


if __name__ == "__main__":

    try:
        puzzle_data = load_puzzle_data()
        print(f" Loaded {len(puzzle_data.puzzles)} puzzles starting {puzzle_data.start_date}")
        print(" All configuration validation checks passed")
    except (FileNotFoundError, PuzzleContentError) as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
