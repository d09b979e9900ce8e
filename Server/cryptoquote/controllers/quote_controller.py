"""
Quote Controller

Serves freshly enciphered quotes.
"""

from flask import Blueprint, request, jsonify
from ..services.cipher_service import get_cipher_service
from ..utils.decorators import require_service
from ..utils.game_logger import game_logger

quote_bp = Blueprint('quote', __name__)


@quote_bp.route('/quotes', methods=['GET', 'POST'])
@require_service(get_cipher_service, 'Cipher')
def get_encrypted_quote(service):
    """
    Return a new encrypted quote.

    The `map` field is oriented plaintext letter -> ciphertext letter.
    Any query string (such as a `dt` cache buster) is ignored.
    """
    try:
        game_logger.log_user_action(request, 'get_quote')

        encrypted = service.generate()
        response_data = encrypted.to_dict()

        game_logger.log_server_response(
            request, 'get_quote', True, response_data,
            text_length=len(encrypted.text), distinct_letters=len(encrypted.map)
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_quote')

        error_response = {
            'success': False,
            'error': str(e)
        }

        game_logger.log_server_response(request, 'get_quote', False, error_response)
        return jsonify(error_response), 500
