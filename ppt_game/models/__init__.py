"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import CellState, CellStatus, GameState, GameStatus, SessionRecordError, ShareResult, Tier
from .puzzle import (
    COLUMN_ORDER, Category, Cell, Puzzle, PuzzleContentError, PuzzleData,
    PuzzleNotAvailableError, Row,
)

__all__ = [
    'CellState', 'CellStatus', 'GameState', 'GameStatus', 'SessionRecordError', 'ShareResult', 'Tier',
    'COLUMN_ORDER', 'Category', 'Cell', 'Puzzle', 'PuzzleContentError', 'PuzzleData',
    'PuzzleNotAvailableError', 'Row',
]
