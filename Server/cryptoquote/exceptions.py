"""
Cryptoquote Exceptions

Error kinds raised by the cipher generator, the puzzle state engine
and the quote client.
"""


class CryptoquoteError(Exception):
    """Base class for all cryptoquote errors."""


class EmptyCatalogError(CryptoquoteError):
    """No quotes are configured. Fatal at startup."""


class FetchError(CryptoquoteError):
    """The quote endpoint could not be reached or returned a failure."""


class InvalidGuessError(CryptoquoteError):
    """A guess is not a single A-Z letter (or empty) or targets an unknown cipher letter."""


class RoundOverError(CryptoquoteError):
    """A guess or decrypt was attempted on a round that is already solved or lost."""
