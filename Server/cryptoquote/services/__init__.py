"""
Services Package

Contains all business logic and service classes.
"""

from .cipher_service import CipherService, get_cipher_service, initialize_cipher_service
from .game_service import GameService, get_game_service, initialize_game_service
from .puzzle_service import PuzzleEngine

__all__ = [
    'CipherService', 'get_cipher_service', 'initialize_cipher_service',
    'GameService', 'get_game_service', 'initialize_game_service',
    'PuzzleEngine'
]
