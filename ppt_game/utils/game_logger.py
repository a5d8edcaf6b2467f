"""
Game Logger Module

This module provides structured logging for player actions, server
responses, and game events (guesses, resolved cells, completions, and
persistence problems).
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config import Config


class GameLogger:
    """
    Centralized logging system for the game server.

    Features:
    - Player action tracking with IP/player identification
    - Server response logging
    - Game event logging
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: Optional[str] = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper())
        if not isinstance(self.level, int):
            self.level = logging.INFO

        # Setup main game logger
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file and console handlers."""
        logger = logging.getLogger('ppt_game')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        # Dated log file for detailed logs; disabled when no log dir is set
        if self.log_dir is not None:
            log_file = self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(self.level)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(levelname)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            logger.addHandler(file_handler)

        # Console handler for only important messages (WARNING and above)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(console_handler)

        return logger

    def _get_player_identity(self, request) -> Dict[str, Optional[str]]:
        """Extract player identity information from request."""
        return {
            'user_ip': request.remote_addr or 'unknown',
            'player_id': request.headers.get('X-Player-Id'),
        }

    def _create_log_entry(self,
                         event_type: str,
                         action: str,
                         user_info: Dict[str, Optional[str]],
                         details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self,
                       request,
                       action: str,
                       puzzle_id: Optional[int] = None,
                       **kwargs):
        """
        Log player actions with full context.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'get_puzzle', 'submit_guess', 'get_share')
            puzzle_id: Puzzle number if applicable
            **kwargs: Additional details to log
        """
        details = {
            'puzzle_id': puzzle_id,
            'endpoint': request.endpoint,
            'method': request.method,
            'url': request.url,
            **kwargs
        }

        log_message = self._create_log_entry(
            'USER_ACTION', action, self._get_player_identity(request), details
        )
        self.logger.info(log_message)

    def log_server_response(self,
                           request,
                           action: str,
                           success: bool,
                           response_data: Dict[str, Any],
                           puzzle_id: Optional[int] = None,
                           **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            puzzle_id: Puzzle number if applicable
            **kwargs: Additional details to log
        """
        details = {
            'puzzle_id': puzzle_id,
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(
            event_type, action, self._get_player_identity(request), details
        )

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_game_event(self,
                      puzzle_id: Optional[int],
                      event: str,
                      player: str,
                      level: int = logging.INFO,
                      **kwargs):
        """
        Log game-specific events.

        Args:
            puzzle_id: Puzzle number
            event: Type of game event (e.g., 'cell_resolved', 'game_completed')
            player: Storage key of the player's session
            level: Logging level for the entry
            **kwargs: Additional game details
        """
        user_info = {'user_ip': None, 'player_id': player}
        details = {
            'puzzle_id': puzzle_id,
            **kwargs
        }

        log_message = self._create_log_entry('GAME_EVENT', event, user_info, details)
        self.logger.log(level, log_message)

    def log_error(self,
                 request,
                 error: Exception,
                 action: str,
                 puzzle_id: Optional[int] = None):
        """
        Log errors with full context.

        Args:
            request: Flask request object
            error: Exception that occurred
            action: Action that was being performed
            puzzle_id: Puzzle number if applicable
        """
        details = {
            'puzzle_id': puzzle_id,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }

        log_message = self._create_log_entry(
            'ERROR', action, self._get_player_identity(request), details
        )
        self.logger.error(log_message)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Limit the size of logged response data."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        # Create a copy to avoid modifying original
        sanitized = data.copy()

        # Keep the session summary, not every cell's guess history
        if 'state' in sanitized and isinstance(sanitized['state'], dict):
            state = sanitized['state']
            cells = [cell for row in state.get('cells', []) for cell in row]
            sanitized['state'] = {
                'puzzle_id': state.get('puzzleId'),
                'game_status': state.get('gameStatus'),
                'cells_resolved': sum(1 for cell in cells if cell.get('status') != 'unanswered'),
                'guesses_count': sum(len(cell.get('guesses', [])) for cell in cells),
            }

        return sanitized


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
