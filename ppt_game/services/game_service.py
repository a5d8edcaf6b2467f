"""
Game Service

Contains the puzzle session state machine and the service that owns
per-player sessions and hands them to the session store.
"""

import logging
from collections import OrderedDict
from typing import Callable, Dict, List, Optional, Tuple

from ..config.game_settings import (
    GRID_SIZE, MAX_ATTEMPTS_PER_CELL, SESSION_CACHE_SIZE, STORAGE_KEY, TOTAL_CELLS,
)
from ..models.game import (
    CellState, CellStatus, GameState, GameStatus, SessionRecordError, ShareResult, Tier, utc_now,
)
from ..models.puzzle import Puzzle
from ..utils.game_logger import game_logger
from .answer_matcher import is_correct_answer
from .session_store import SessionStore, SessionStoreError


class GameSession:
    """
    One player's play-through of one puzzle.

    States are PLAYING -> COMPLETED. Cells only change through submit_guess,
    and a cell that is CORRECT or INCORRECT never changes again.
    """

    def __init__(self,
                 puzzle: Puzzle,
                 state: Optional[GameState] = None,
                 max_attempts: int = MAX_ATTEMPTS_PER_CELL,
                 clock: Callable = utc_now):
        self.puzzle = puzzle
        self.max_attempts = max_attempts
        self.clock = clock
        if state is None:
            state = GameState.fresh(puzzle.id, GRID_SIZE, max_attempts)
            state.started_at = clock()
        self.state = state

    @classmethod
    def restore(cls,
                puzzle: Puzzle,
                record: Dict,
                max_attempts: int = MAX_ATTEMPTS_PER_CELL,
                clock: Callable = utc_now) -> "GameSession":
        """
        Rebuild a session from a persisted record.

        Raises:
            SessionRecordError: If the record is malformed, inconsistent with
                the attempt policy, or belongs to a different puzzle
        """
        state = GameState.from_dict(record, GRID_SIZE)
        if state.puzzle_id != puzzle.id:
            raise SessionRecordError(
                f"Record is for puzzle {state.puzzle_id}, expected {puzzle.id}"
            )

        for row in state.cells:
            for cell in row:
                if len(cell.guesses) + cell.guesses_remaining != max_attempts:
                    raise SessionRecordError("Cell attempts do not match the attempt limit")

        session = cls(puzzle, state, max_attempts, clock)
        all_terminal = session._all_cells_terminal()
        if state.game_status is GameStatus.COMPLETED and not all_terminal:
            raise SessionRecordError("Completed session has unanswered cells")
        if all_terminal and state.game_status is GameStatus.PLAYING:
            # Sync completion status in case it's out of sync with cell states
            state.game_status = GameStatus.COMPLETED
            state.completed_at = clock()
        return session

    @property
    def puzzle_id(self) -> int:
        return self.state.puzzle_id

    @property
    def status(self) -> GameStatus:
        return self.state.game_status

    @property
    def is_completed(self) -> bool:
        return self.state.game_status is GameStatus.COMPLETED

    def cell_state(self, row: int, col: int) -> CellState:
        return self.state.cells[row][col]

    def _in_grid(self, row, col) -> bool:
        return (isinstance(row, int) and isinstance(col, int)
                and not isinstance(row, bool) and not isinstance(col, bool)
                and 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE)

    def _all_cells_terminal(self) -> bool:
        return all(cell.status.is_terminal for row in self.state.cells for cell in row)

    def submit_guess(self, row: int, col: int, guess_text: str) -> Optional[CellState]:
        """
        Records a guess for one cell.

        A guess on a completed session, a resolved cell, a position outside
        the grid, or blank text is ignored without using an attempt.

        Returns:
            The updated CellState, or None if the guess was ignored
        """
        if self.is_completed or not self._in_grid(row, col):
            return None
        if not isinstance(guess_text, str) or not guess_text.strip():
            return None

        cell_state = self.state.cells[row][col]
        if cell_state.status.is_terminal:
            return None

        guess = guess_text.strip()
        cell = self.puzzle.cell(row, col)

        cell_state.guesses.append(guess)
        cell_state.guesses_remaining -= 1

        if is_correct_answer(guess, cell.answer, cell.acceptable_answers, cell.category):
            cell_state.status = CellStatus.CORRECT
        elif cell_state.guesses_remaining <= 0:
            cell_state.guesses_remaining = 0
            cell_state.status = CellStatus.INCORRECT

        if self._all_cells_terminal():
            self.state.game_status = GameStatus.COMPLETED
            self.state.completed_at = self.clock()

        return cell_state

    def _tier_for(self, cell_state: CellState) -> Tier:
        if cell_state.status is not CellStatus.CORRECT:
            return Tier.RED
        attempts = len(cell_state.guesses)
        if attempts <= 1:
            return Tier.GREEN
        if attempts >= 3:
            return Tier.ORANGE
        return Tier.YELLOW

    def get_share_result(self) -> ShareResult:
        """Score grid for sharing. Unresolved cells count as RED."""
        grid = [[self._tier_for(cell) for cell in row] for row in self.state.cells]
        correct_count = sum(
            1 for row in self.state.cells for cell in row if cell.status is CellStatus.CORRECT
        )
        return ShareResult(
            puzzle_number=self.puzzle.id,
            grid=grid,
            correct_count=correct_count,
            total_cells=TOTAL_CELLS,
        )

    def to_dict(self) -> Dict:
        return self.state.to_dict()

    def public_view(self) -> Dict:
        """
        Client view of the session merged with the puzzle's clues.

        The second clue appears once the cell has a wrong guess; the answer
        appears once the cell is resolved.
        """
        rows: List[Dict] = []
        for row_index, row in enumerate(self.puzzle.rows):
            cells = []
            for col_index, cell in enumerate(row.cells):
                cell_state = self.state.cells[row_index][col_index]
                wrong_guesses = len(cell_state.guesses) - (1 if cell_state.status is CellStatus.CORRECT else 0)
                view = cell.public_view(reveal_clue2=wrong_guesses > 0)
                view.update(cell_state.to_dict())
                view["answer"] = cell.answer if cell_state.status.is_terminal else None
                cells.append(view)
            rows.append({"constraint": row.constraint, "cells": cells})

        record = self.state.to_dict()
        record["rows"] = rows
        return record


class GameService:
    """
    Owns one session per player and persists it after every change.

    The in-memory session is authoritative: store failures are logged and
    never undo or block a guess. At most ``cache_size`` sessions are kept in
    memory; the least recently used one is dropped first and is restored
    from the store on its next request.
    """

    def __init__(self,
                 store: SessionStore,
                 max_attempts: int = MAX_ATTEMPTS_PER_CELL,
                 cache_size: int = SESSION_CACHE_SIZE):
        if cache_size < 1:
            raise ValueError(f"cache_size must be at least 1, got {cache_size}")
        self.store = store
        self.max_attempts = max_attempts
        self.cache_size = cache_size
        self.sessions: "OrderedDict[str, GameSession]" = OrderedDict()

    @staticmethod
    def storage_key(player: str) -> str:
        return f"{STORAGE_KEY}:{player}"

    def get_session(self, puzzle: Puzzle, player: str) -> GameSession:
        """
        Returns the player's session for ``puzzle``, restoring or creating it.

        A stored session for another puzzle, or one that cannot be read,
        is replaced by a fresh session.
        """
        key = self.storage_key(player)
        session = self.sessions.get(key)
        if session is not None and session.puzzle_id == puzzle.id:
            self.sessions.move_to_end(key)
            return session

        session = self._load(key, puzzle)
        if session is None:
            session = GameSession(puzzle, max_attempts=self.max_attempts)
            self._persist(key, session)

        self._cache(key, session)
        return session

    def _cache(self, key: str, session: GameSession) -> None:
        self.sessions[key] = session
        self.sessions.move_to_end(key)
        while len(self.sessions) > self.cache_size:
            self.sessions.popitem(last=False)

    def _load(self, key: str, puzzle: Puzzle) -> Optional[GameSession]:
        try:
            record = self.store.load(key)
        except SessionStoreError as e:
            game_logger.log_game_event(
                puzzle.id, 'session_load_failed', key, level=logging.WARNING, error=str(e)
            )
            return None

        if record is None:
            return None

        try:
            return GameSession.restore(puzzle, record, self.max_attempts)
        except SessionRecordError as e:
            game_logger.log_game_event(
                puzzle.id, 'session_discarded', key, level=logging.WARNING, reason=str(e)
            )
            return None

    def _persist(self, key: str, session: GameSession) -> bool:
        try:
            self.store.save(key, session.to_dict())
        except SessionStoreError as e:
            game_logger.log_game_event(
                session.puzzle_id, 'session_save_failed', key, level=logging.WARNING, error=str(e)
            )
            return False
        return True

    def submit_guess(self,
                     puzzle: Puzzle,
                     player: str,
                     row: int,
                     col: int,
                     guess: str) -> Tuple[GameSession, Optional[CellState]]:
        """
        Applies a guess to the player's session and saves it.

        Returns:
            The session and the updated cell, or None for an ignored guess
        """
        key = self.storage_key(player)
        session = self.get_session(puzzle, player)
        was_completed = session.is_completed

        cell_state = session.submit_guess(row, col, guess)
        if cell_state is None:
            return session, None

        game_logger.log_game_event(
            puzzle.id, 'guess_submitted', key,
            row=row, col=col, attempt=len(cell_state.guesses), status=cell_state.status.value
        )
        if cell_state.status.is_terminal:
            game_logger.log_game_event(
                puzzle.id, 'cell_resolved', key,
                row=row, col=col, status=cell_state.status.value
            )
        if session.is_completed and not was_completed:
            result = session.get_share_result()
            game_logger.log_game_event(
                puzzle.id, 'game_completed', key,
                correct_count=result.correct_count, total_cells=result.total_cells
            )

        self._persist(key, session)
        return session, cell_state

    def reset_session(self, puzzle: Puzzle, player: str) -> GameSession:
        """Replaces the player's session with a fresh one."""
        key = self.storage_key(player)
        session = GameSession(puzzle, max_attempts=self.max_attempts)
        self._cache(key, session)
        self._persist(key, session)
        return session

    def get_share_result(self, puzzle: Puzzle, player: str) -> ShareResult:
        return self.get_session(puzzle, player).get_share_result()


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(store: SessionStore,
                            max_attempts: int = MAX_ATTEMPTS_PER_CELL,
                            cache_size: int = SESSION_CACHE_SIZE) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(store, max_attempts, cache_size)
    return _game_service
