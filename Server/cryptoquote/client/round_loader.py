"""
Round Loader

Starts puzzle rounds from fetched quotes. Each round start gets a new,
increasing round id; a response is applied only if its id is still the
latest, so a slow earlier request can never overwrite a newer round.
"""

from typing import Optional

from ..exceptions import FetchError
from ..models.quote import EncryptedQuote
from ..services.puzzle_service import PuzzleEngine
from ..utils.game_logger import game_logger
from .quote_client import QuoteClient

USER_ERROR_MESSAGE = "Something went wrong while loading a new quote. Please try again."


class RoundLoader:
    """Connects a QuoteClient to a PuzzleEngine."""

    def __init__(self, client: QuoteClient, engine: Optional[PuzzleEngine] = None):
        self.client = client
        self.engine = engine or PuzzleEngine()
        self.is_loading = False
        self.last_error: Optional[str] = None
        self._round_id = 0

    @property
    def current_round_id(self) -> int:
        return self._round_id

    def begin_round(self) -> int:
        """Marks a round start as in flight and returns its id."""
        self._round_id += 1
        self.is_loading = True
        self.last_error = None
        return self._round_id

    def is_stale(self, round_id: int) -> bool:
        return round_id != self._round_id

    def resolve(self, round_id: int, encrypted: EncryptedQuote) -> bool:
        """
        Applies a fetched quote if round_id is still current.

        Returns:
            bool: True if the engine was initialized with the quote

        Raises:
            ValueError: If the quote cannot start a round; the previous
                state is kept
        """
        if self.is_stale(round_id):
            game_logger.logger.info(f"Discarding stale quote for round {round_id} (current {self._round_id})")
            return False

        self.is_loading = False
        self.engine.init(encrypted)
        return True

    def fail(self, round_id: int, error: Exception) -> bool:
        """
        Records a failed round start if round_id is still current.

        Returns:
            bool: True if the failure was recorded
        """
        if self.is_stale(round_id):
            return False

        self.is_loading = False
        self.last_error = USER_ERROR_MESSAGE
        game_logger.logger.warning(f"Round {round_id} failed to start: {error}")
        return True

    def cancel(self) -> None:
        """Invalidates any in-flight round start."""
        self._round_id += 1
        self.is_loading = False

    def start_new_game(self) -> bool:
        """
        Fetches a quote and starts a round with it.

        A failure leaves the previous (or empty) state untouched and sets
        last_error; it is not retried.

        Returns:
            bool: True if a new round was started
        """
        round_id = self.begin_round()
        try:
            encrypted = self.client.get_encrypted_quote()
            return self.resolve(round_id, encrypted)
        except (FetchError, ValueError) as e:
            self.fail(round_id, e)
            return False
