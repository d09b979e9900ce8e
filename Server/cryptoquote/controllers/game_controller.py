"""
Game Controller

Handles the HTTP endpoints for server-hosted puzzle sessions.
"""

from flask import Blueprint, request, jsonify
from ..exceptions import InvalidGuessError, RoundOverError
from ..services.game_service import GAME_NOT_FOUND, ROUND_OVER, get_game_service
from ..utils.decorators import require_service
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _game_not_found(action, game_id):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _log_outcome(game_id, state):
    """Log a game event when a round reaches a terminal state."""
    if state.is_solved:
        game_logger.log_game_event(
            game_id, 'game_solved', request.remote_addr,
            lives_left=state.lives, max_lives=state.max_lives
        )
    elif state.is_lost:
        game_logger.log_game_event(
            game_id, 'game_lost', request.remote_addr,
            max_lives=state.max_lives
        )


@game_bp.route('/games', methods=['POST'])
@require_service(get_game_service, 'Game')
def new_game(service):
    """Start a new round."""
    try:
        data = request.get_json(silent=True) or {}
        lives = data.get('lives')

        if lives is not None and (not isinstance(lives, int) or isinstance(lives, bool) or lives < 1):
            return jsonify({
                'success': False,
                'error': 'Lives must be a positive integer'
            }), 400

        game_logger.log_user_action(request, 'new_game', lives=lives)

        game_id = service.create_new_game(lives)
        state = service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            max_lives=state.max_lives, fields_count=state.fields_count
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')

        error_response = {
            'success': False,
            'error': str(e)
        }

        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/games/<game_id>', methods=['GET'])
@require_service(get_game_service, 'Game')
def get_state(game_id, service):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = service.get_game_state(game_id)
        if state is None:
            return _game_not_found('get_state', game_id)

        response_data = {
            'success': True,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            lives=state.lives, is_game_over=state.is_game_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/games/<game_id>/guess', methods=['POST'])
@require_service(get_game_service, 'Game')
def set_guess(game_id, service):
    """Set the guess for one cipher letter."""
    try:
        data = request.get_json(silent=True)
        if not data or 'letter' not in data or 'value' not in data:
            error_response = {
                'success': False,
                'error': 'Letter and value are required'
            }
            game_logger.log_server_response(request, 'set_guess', False, error_response, game_id)
            return jsonify(error_response), 400

        letter = data['letter']
        value = data['value']
        if isinstance(letter, str):
            letter = letter.strip().upper()
        if isinstance(value, str):
            value = value.strip().upper()

        game_logger.log_user_action(request, 'set_guess', game_id, letter=letter)

        # Validate guess first
        is_valid, error = service.is_valid_guess(game_id, letter, value)
        if not is_valid:
            if error == GAME_NOT_FOUND:
                return _game_not_found('set_guess', game_id)
            error_response = {
                'success': False,
                'error': error
            }
            game_logger.log_server_response(
                request, 'set_guess', False, error_response, game_id,
                validation_error=error
            )
            return jsonify(error_response), 409 if error == ROUND_OVER else 400

        state = service.make_guess(game_id, letter, value)
        if state is None:
            return _game_not_found('set_guess', game_id)

        response_data = {
            'success': True,
            'state': state.to_dict()
        }

        game_logger.log_server_response(request, 'set_guess', True, response_data, game_id)

        return jsonify(response_data)

    except InvalidGuessError as e:
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'set_guess', False, error_response, game_id)
        return jsonify(error_response), 400

    except RoundOverError as e:
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'set_guess', False, error_response, game_id)
        return jsonify(error_response), 409

    except Exception as e:
        game_logger.log_error(request, e, 'set_guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'set_guess', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/games/<game_id>/decrypt', methods=['POST'])
@require_service(get_game_service, 'Game')
def decrypt(game_id, service):
    """Check the current guesses and settle the round."""
    try:
        game_logger.log_user_action(request, 'decrypt', game_id)

        state = service.decrypt(game_id)
        if state is None:
            return _game_not_found('decrypt', game_id)

        response_data = {
            'success': True,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'decrypt', True, response_data, game_id,
            lives=state.lives, is_game_over=state.is_game_over
        )

        _log_outcome(game_id, state)

        return jsonify(response_data)

    except RoundOverError as e:
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'decrypt', False, error_response, game_id)
        return jsonify(error_response), 409

    except Exception as e:
        game_logger.log_error(request, e, 'decrypt', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'decrypt', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/games/<game_id>', methods=['DELETE'])
@require_service(get_game_service, 'Game')
def delete_game(game_id, service):
    """Discard a session."""
    try:
        game_logger.log_user_action(request, 'delete_game', game_id)

        success = service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if not success:
            return jsonify(response_data), 404

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_game', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'catalog_size': len(game_service.cipher_service.catalog) if game_service else 0
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
