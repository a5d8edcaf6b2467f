"""
Daily Puzzle Selection

Maps the current instant to today's puzzle. "Today" is the calendar date in
one fixed reference timezone, so every player sees the same puzzle on the
same day wherever they are.
"""

import datetime as dt
from typing import Optional, Union

import pytz

from ..models.puzzle import Puzzle, PuzzleData, PuzzleNotAvailableError

DEFAULT_TIMEZONE = "America/New_York"

TimezoneArg = Union[str, dt.tzinfo, None]


def _resolve_tz(tz: TimezoneArg) -> dt.tzinfo:
    if isinstance(tz, dt.tzinfo):
        return tz
    return pytz.timezone(tz or DEFAULT_TIMEZONE)


def reference_date(now: Optional[dt.datetime] = None, tz: TimezoneArg = None) -> dt.date:
    """
    Calendar date of ``now`` in the reference timezone.

    Naive datetimes are taken as UTC.
    """
    if now is None:
        now = dt.datetime.now(pytz.utc)
    elif now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(_resolve_tz(tz)).date()


def days_elapsed(start_date: dt.date, now: Optional[dt.datetime] = None, tz: TimezoneArg = None) -> int:
    """Whole days from puzzle #1's date to today; negative before the start."""
    return (reference_date(now, tz) - start_date).days


def puzzle_index(days: int, total_puzzles: int) -> int:
    """Wraparound content index for a day offset, non-negative in both directions."""
    if total_puzzles <= 0:
        raise ValueError("total_puzzles must be positive")
    return ((days % total_puzzles) + total_puzzles) % total_puzzles


def get_today_puzzle_number(start_date: dt.date, now: Optional[dt.datetime] = None, tz: TimezoneArg = None) -> int:
    """Human-facing puzzle number for today. Not clamped."""
    return days_elapsed(start_date, now, tz) + 1


def get_daily_puzzle(puzzle_data: PuzzleData, now: Optional[dt.datetime] = None, tz: TimezoneArg = None) -> Puzzle:
    """
    Gets the current puzzle based on days elapsed since the start date.

    Puzzles cycle through the available content; the returned puzzle's id
    is the day number, not its position in the content.

    Raises:
        PuzzleNotAvailableError: If today is before puzzle #1's date
    """
    days = days_elapsed(puzzle_data.start_date, now, tz)
    puzzle_number = days + 1
    if puzzle_number < 1:
        raise PuzzleNotAvailableError(
            f"Puzzle #1 is released on {puzzle_data.start_date.isoformat()}"
        )

    puzzle = puzzle_data.puzzles[puzzle_index(days, len(puzzle_data.puzzles))]
    return puzzle.with_id(puzzle_number)
