"""
Puzzle Data Models

Contains the immutable puzzle content structures: categories, cells, rows
and whole puzzles, plus the errors raised while loading or selecting them.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Dict, List, Tuple


class Category(Enum):
    """Fixed column classification, in column order."""
    PEOPLE = "people"
    PLACES = "places"
    THINGS = "things"


COLUMN_ORDER: Tuple[Category, ...] = (Category.PEOPLE, Category.PLACES, Category.THINGS)


class PuzzleContentError(ValueError):
    """Puzzle content does not follow the 3x3 content schema."""


class PuzzleNotAvailableError(LookupError):
    """No puzzle has been released yet for the requested day."""


_MISSING = object()


def _require_str(data: Dict, key: str, default=_MISSING) -> str:
    """Reads a text field, raising KeyError when absent and no default is given."""
    value = data[key] if default is _MISSING else data.get(key, default)
    if not isinstance(value, str):
        raise PuzzleContentError(f"{key} must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class Cell:
    """A single grid position: clues plus the canonical and alternate answers."""
    category: Category
    clue: str
    clue2: str
    answer: str
    acceptable_answers: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict) -> "Cell":
        try:
            category = Category(str(data["category"]).lower())
        except ValueError:
            raise PuzzleContentError(f"Unknown category: {data['category']!r}")

        acceptable = data.get("acceptableAnswers")
        if acceptable is None:
            acceptable = []
        if not isinstance(acceptable, list) or not all(isinstance(alt, str) for alt in acceptable):
            raise PuzzleContentError(f"acceptableAnswers must be a list of strings, got {acceptable!r}")

        return cls(
            category=category,
            clue=_require_str(data, "clue"),
            clue2=_require_str(data, "clue2", ""),
            answer=_require_str(data, "answer"),
            acceptable_answers=tuple(acceptable),
        )

    def public_view(self, reveal_clue2: bool = False) -> Dict:
        """Client-safe view of the cell; never includes answers."""
        return {
            "category": self.category.value,
            "clue": self.clue,
            "clue2": self.clue2 if reveal_clue2 else None,
        }


@dataclass(frozen=True)
class Row:
    """A constraint label and one cell per category."""
    constraint: str
    cells: Tuple[Cell, Cell, Cell]

    @classmethod
    def from_dict(cls, data: Dict) -> "Row":
        return cls(
            constraint=_require_str(data, "constraint"),
            cells=tuple(Cell.from_dict(cell) for cell in data["cells"]),
        )


@dataclass(frozen=True)
class Puzzle:
    """
    A full 3x3 puzzle.

    ``id`` is the externally visible puzzle number. Content files number
    puzzles by position; daily selection replaces it with the day number.
    """
    id: int
    rows: Tuple[Row, Row, Row]

    @classmethod
    def from_dict(cls, data: Dict, puzzle_id: int) -> "Puzzle":
        return cls(id=puzzle_id, rows=tuple(Row.from_dict(row) for row in data["rows"]))

    def with_id(self, puzzle_id: int) -> "Puzzle":
        return replace(self, id=puzzle_id)

    def cell(self, row: int, col: int) -> Cell:
        return self.rows[row].cells[col]

    def public_view(self) -> Dict:
        return {
            "id": self.id,
            "rows": [
                {
                    "constraint": row.constraint,
                    "cells": [cell.public_view() for cell in row.cells],
                }
                for row in self.rows
            ],
        }


@dataclass(frozen=True)
class PuzzleData:
    """Loaded puzzle content plus the calendar date of puzzle #1."""
    start_date: date
    puzzles: List[Puzzle] = field(default_factory=list)
