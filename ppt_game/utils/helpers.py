"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Optional
from flask import request

from ..config.game_settings import SHARE_TITLE, TIER_GLYPHS
from ..models.game import ShareResult


def get_player_id(request_obj=None) -> str:
    """Player identity from the X-Player-Id header, else the remote address."""
    if request_obj is None:
        request_obj = request

    player_id = (request_obj.headers.get('X-Player-Id') or '').strip()
    return player_id or request_obj.remote_addr or 'unknown'


def format_share_text(result: ShareResult, game_url: Optional[str] = None) -> str:
    """Render a share result as copyable text with one glyph per cell."""
    emoji_grid = '\n'.join(
        ''.join(TIER_GLYPHS[tier] for tier in row) for row in result.grid
    )
    score = f"{result.correct_count}/{result.total_cells} correct"
    if game_url:
        score += f" — play at {game_url}"

    return f"{SHARE_TITLE} #{result.puzzle_number}\n\n{emoji_grid}\n\n{score}"


def get_score_message(result: ShareResult) -> str:
    percentage = result.correct_count / result.total_cells * 100
    if percentage == 100:
        return 'Perfect!'
    if percentage >= 75:
        return 'Great job!'
    if percentage >= 50:
        return 'Nice work!'
    if percentage >= 25:
        return 'Good effort!'
    return 'Better luck next time!'
