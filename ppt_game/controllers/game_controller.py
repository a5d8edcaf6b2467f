"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, current_app, request, jsonify
from ..models.game import CellStatus
from ..models.puzzle import PuzzleNotAvailableError
from ..services.daily_puzzle import get_daily_puzzle
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import format_share_text, get_player_id, get_score_message

game_bp = Blueprint('game', __name__)


def _todays_puzzle():
    return get_daily_puzzle(
        current_app.puzzle_data, tz=current_app.config['REFERENCE_TIMEZONE']
    )


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _not_available(action, error):
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response)
    return jsonify(error_response), 404


def _internal_error(action, error, puzzle=None):
    puzzle_id = puzzle.id if puzzle is not None else None
    game_logger.log_error(request, error, action, puzzle_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, puzzle_id)
    return jsonify(error_response), 500


@game_bp.route('/puzzle/today', methods=['GET'])
def get_puzzle():
    """Get today's clue grid, without answers."""
    puzzle = None
    try:
        puzzle = _todays_puzzle()
        game_logger.log_user_action(request, 'get_puzzle', puzzle.id)

        response_data = {
            'success': True,
            'puzzle': puzzle.public_view()
        }
        game_logger.log_server_response(request, 'get_puzzle', True, response_data, puzzle.id)
        return jsonify(response_data)

    except PuzzleNotAvailableError as e:
        return _not_available('get_puzzle', e)
    except Exception as e:
        return _internal_error('get_puzzle', e, puzzle)


@game_bp.route('/game/state', methods=['GET'])
def get_state():
    """Get the player's session for today's puzzle."""
    puzzle = None
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        puzzle = _todays_puzzle()
        game_logger.log_user_action(request, 'get_state', puzzle.id)

        session = game_service.get_session(puzzle, get_player_id())
        response_data = {
            'success': True,
            'state': session.public_view()
        }
        game_logger.log_server_response(
            request, 'get_state', True, response_data, puzzle.id,
            game_status=session.status.value
        )
        return jsonify(response_data)

    except PuzzleNotAvailableError as e:
        return _not_available('get_state', e)
    except Exception as e:
        return _internal_error('get_state', e, puzzle)


@game_bp.route('/game/guess', methods=['POST'])
def make_guess():
    """
    Submit a guess for one cell.

    Out-of-range cells, blank guesses and guesses on resolved cells are
    ignored: the unchanged state comes back with ``accepted`` false.
    """
    puzzle = None
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        row = data.get('row')
        col = data.get('col')
        guess = data.get('guess')

        puzzle = _todays_puzzle()
        game_logger.log_user_action(
            request, 'submit_guess', puzzle.id,
            row=row, col=col, guess_length=len(guess) if isinstance(guess, str) else None
        )

        session, cell_state = game_service.submit_guess(puzzle, get_player_id(), row, col, guess)

        response_data = {
            'success': True,
            'accepted': cell_state is not None,
            'correct': cell_state is not None and cell_state.status is CellStatus.CORRECT,
            'state': session.public_view()
        }
        if session.is_completed:
            response_data['share'] = session.get_share_result().to_dict()

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, puzzle.id,
            accepted=response_data['accepted'], correct=response_data['correct']
        )
        return jsonify(response_data)

    except PuzzleNotAvailableError as e:
        return _not_available('submit_guess', e)
    except Exception as e:
        return _internal_error('submit_guess', e, puzzle)


@game_bp.route('/game/share', methods=['GET'])
def get_share():
    """Get the score grid and share text for the player's session."""
    puzzle = None
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        puzzle = _todays_puzzle()
        game_logger.log_user_action(request, 'get_share', puzzle.id)

        session = game_service.get_session(puzzle, get_player_id())
        result = session.get_share_result()

        response_data = {
            'success': True,
            'completed': session.is_completed,
            'result': result.to_dict(),
            'message': get_score_message(result),
            'text': format_share_text(result, current_app.config.get('GAME_URL'))
        }
        game_logger.log_server_response(request, 'get_share', True, response_data, puzzle.id)
        return jsonify(response_data)

    except PuzzleNotAvailableError as e:
        return _not_available('get_share', e)
    except Exception as e:
        return _internal_error('get_share', e, puzzle)


@game_bp.route('/game/reset', methods=['POST'])
def reset_game():
    """Start today's puzzle over."""
    puzzle = None
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        puzzle = _todays_puzzle()
        game_logger.log_user_action(request, 'reset_game', puzzle.id)

        session = game_service.reset_session(puzzle, get_player_id())
        response_data = {
            'success': True,
            'state': session.public_view()
        }
        game_logger.log_server_response(request, 'reset_game', True, response_data, puzzle.id)
        return jsonify(response_data)

    except PuzzleNotAvailableError as e:
        return _not_available('reset_game', e)
    except Exception as e:
        return _internal_error('reset_game', e, puzzle)
