"""
Game Service

Hosts server-side puzzle sessions, one PuzzleEngine per game id.
"""

import uuid
from typing import Dict, Optional, Tuple

from ..models.game import GameOptions, GameState
from . import puzzle_service
from .cipher_service import CipherService
from .puzzle_service import PuzzleEngine

GAME_NOT_FOUND = "Game not found"
ROUND_OVER = "Round is already over"


class GameService:
    """
    Session registry for puzzles played through the HTTP API.

    This class handles:
    - Session management with unique game IDs
    - Drawing an encrypted quote for every new round
    - Guess and decrypt requests routed to the session's engine
    - Keeping the solution on the server until the round is over
    """

    def __init__(self, cipher_service: CipherService, default_lives: Optional[int] = None):
        self.cipher_service = cipher_service
        self.default_lives = default_lives
        self.games: Dict[str, PuzzleEngine] = {}  # Active sessions by game_id

    def create_new_game(self, lives: Optional[int] = None) -> str:
        """
        Creates a new session with a freshly enciphered quote.

        Args:
            lives: Lives for the round; falls back to the service default

        Returns:
            str: Unique game ID for this session
        """
        game_id = str(uuid.uuid4())

        engine = PuzzleEngine(GameOptions(lives=lives if lives is not None else self.default_lives))
        engine.init(self.cipher_service.generate())

        self.games[game_id] = engine
        return game_id

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current state for a session.

        Args:
            game_id: Unique game identifier

        Returns:
            GameState object or None if game not found
        """
        engine = self.games.get(game_id)
        if engine is None:
            return None
        return engine.state

    def is_valid_guess(self, game_id: str, cipher_letter: str, value: str) -> Tuple[bool, str]:
        """
        Validates a guess for a specific session.

        Returns:
            Tuple of (is_valid, error_message)
        """
        state = self.get_game_state(game_id)
        if state is None:
            return False, GAME_NOT_FOUND

        if state.is_game_over:
            return False, ROUND_OVER

        return puzzle_service.is_valid_guess(state, cipher_letter, value)

    def make_guess(self, game_id: str, cipher_letter: str, value: str) -> Optional[GameState]:
        """
        Applies a guess to every occurrence of a cipher letter.

        Returns:
            Updated GameState or None if game not found

        Raises:
            InvalidGuessError: Malformed guess
            RoundOverError: Round already solved or lost
        """
        engine = self.games.get(game_id)
        if engine is None:
            return None
        return engine.set_guess(cipher_letter, value)

    def decrypt(self, game_id: str) -> Optional[GameState]:
        """
        Validates the current guesses of a session.

        Returns:
            Updated GameState or None if game not found

        Raises:
            RoundOverError: Round already solved or lost
        """
        engine = self.games.get(game_id)
        if engine is None:
            return None
        return engine.validate()

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        if game_id in self.games:
            del self.games[game_id]
            return True
        return False


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(cipher_service: CipherService, default_lives: Optional[int] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(cipher_service, default_lives)
    return _game_service
