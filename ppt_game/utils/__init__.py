"""
Utilities Package

Contains utility functions and the game logger.
"""

from .helpers import format_share_text, get_player_id, get_score_message
from .game_logger import game_logger

__all__ = ['format_share_text', 'get_player_id', 'get_score_message', 'game_logger']
