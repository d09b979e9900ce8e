"""
Cipher Service

Contains the cipher generator: quote selection, random substitution
alphabet, pruning and encryption.
"""

import random
from typing import Dict, List, Optional, Sequence, Union

from ..config.game_settings import ALPHABET
from ..exceptions import EmptyCatalogError
from ..models.quote import EncryptedQuote, Quote

CatalogEntry = Union[Quote, Dict[str, str]]


def build_permutation(rng: random.Random) -> Dict[str, str]:
    """
    Builds a full substitution alphabet, plaintext letter -> cipher letter.

    Uses rng.shuffle (Fisher-Yates), so every permutation of the 26 letters
    is equally likely.
    """
    permutation = list(ALPHABET)
    rng.shuffle(permutation)
    return dict(zip(ALPHABET, permutation))


def prune_mapping(mapping: Dict[str, str], text: str) -> Dict[str, str]:
    """Keeps only the entries whose plaintext letter occurs in text."""
    present = set(text)
    return {letter: cipher for letter, cipher in mapping.items() if letter in present}


def encrypt(text: str, mapping: Dict[str, str]) -> str:
    """Substitutes letters through mapping; other characters pass through."""
    return "".join(mapping.get(char, char) if char in ALPHABET else char for char in text)


def invert_mapping(mapping: Dict[str, str]) -> Dict[str, str]:
    """
    Inverts a substitution mapping.

    Raises:
        ValueError: If two keys map to the same letter
    """
    inverse = {}
    for key, value in mapping.items():
        if value in inverse:
            raise ValueError(f"Mapping is not injective: '{inverse[value]}' and '{key}' both map to '{value}'")
        inverse[value] = key
    return inverse


def decrypt(ciphertext: str, inverse: Dict[str, str]) -> str:
    """Applies a cipher letter -> plaintext letter mapping to ciphertext."""
    return "".join(inverse.get(char, char) for char in ciphertext)


def _as_quote(entry: CatalogEntry) -> Quote:
    if isinstance(entry, Quote):
        return entry
    return Quote.from_dict(entry)


def generate(catalog: Sequence[CatalogEntry], rng: Optional[random.Random] = None) -> EncryptedQuote:
    """
    Picks a quote and enciphers it with a fresh random alphabet.

    Args:
        catalog: Quotes to choose from
        rng: Random source; a new SystemRandom when omitted

    Returns:
        EncryptedQuote with the uppercased ciphertext and the pruned
        plaintext -> ciphertext map

    Raises:
        EmptyCatalogError: If the catalog is empty
    """
    if not catalog:
        raise EmptyCatalogError("Quote catalog is empty")

    if rng is None:
        rng = random.SystemRandom()

    quote = _as_quote(rng.choice(list(catalog)))
    text = quote.text.upper()

    mapping = prune_mapping(build_permutation(rng), text)
    ciphertext = encrypt(text, mapping)

    return EncryptedQuote(text=ciphertext, author=quote.author, map=mapping)


class CipherService:
    """
    Serves encrypted quotes from a read-only catalog.

    Holds no per-request state: every call draws its own quote and alphabet.
    """

    def __init__(self, catalog: Sequence[CatalogEntry], rng: Optional[random.Random] = None):
        if not catalog:
            raise EmptyCatalogError("Quote catalog is empty")
        self.catalog: List[Quote] = [_as_quote(entry) for entry in catalog]
        self.rng = rng or random.SystemRandom()

    def generate(self) -> EncryptedQuote:
        """Returns a freshly enciphered quote."""
        return generate(self.catalog, self.rng)


# Global service instance
_cipher_service = None


def get_cipher_service() -> Optional[CipherService]:
    """Get the global cipher service instance."""
    return _cipher_service


def initialize_cipher_service(catalog: Sequence[CatalogEntry], rng: Optional[random.Random] = None) -> CipherService:
    """Initialize the global cipher service instance."""
    global _cipher_service
    _cipher_service = CipherService(catalog, rng)
    return _cipher_service
