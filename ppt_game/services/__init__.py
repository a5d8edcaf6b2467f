"""
Services Package

Contains all business logic and service classes.
"""

from .answer_matcher import edit_distance, is_correct_answer, normalize, plural_variants
from .daily_puzzle import get_daily_puzzle, get_today_puzzle_number, puzzle_index
from .game_service import GameService, GameSession, get_game_service, initialize_game_service
from .session_store import (
    InMemorySessionStore, JsonFileSessionStore, MongoSessionStore, SessionStore,
    SessionStoreError, build_session_store,
)

__all__ = [
    'edit_distance', 'is_correct_answer', 'normalize', 'plural_variants',
    'get_daily_puzzle', 'get_today_puzzle_number', 'puzzle_index',
    'GameService', 'GameSession', 'get_game_service', 'initialize_game_service',
    'InMemorySessionStore', 'JsonFileSessionStore', 'MongoSessionStore', 'SessionStore',
    'SessionStoreError', 'build_session_store',
]
