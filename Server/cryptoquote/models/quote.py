"""
Quote Data Models

Contains the source quote and the encrypted wire payload.
"""

import string
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Quote:
    """A catalog entry."""
    text: str
    author: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Quote":
        return cls(text=data["text"], author=data["author"])


@dataclass
class EncryptedQuote:
    """
    Wire payload returned by the quote endpoint.

    `map` is oriented plaintext letter -> ciphertext letter and only holds
    letters that occur in the quote. Clients invert it to validate guesses.
    """
    text: str
    author: str
    map: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "author": self.author, "map": dict(self.map)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EncryptedQuote":
        if not isinstance(data, dict):
            raise ValueError("Encrypted quote payload must be an object")
        text = data.get("text")
        author = data.get("author")
        mapping = data.get("map")
        if not isinstance(text, str):
            raise ValueError("Encrypted quote payload has no text")
        if not isinstance(mapping, dict):
            raise ValueError("Encrypted quote payload has no map")
        return cls(text=text, author=author or "", map=normalize_mapping(mapping))


def normalize_mapping(mapping: Dict[Any, Any]) -> Dict[str, str]:
    """
    Uppercases a letter mapping.

    Raises:
        ValueError: If a key or value is not a single A-Z letter
    """
    normalized = {}
    for key, value in mapping.items():
        for letter in (key, value):
            if not isinstance(letter, str) or len(letter) != 1 or letter.upper() not in string.ascii_uppercase:
                raise ValueError(f"Map entry {key!r}: {value!r} is not a pair of letters A-Z")
        normalized[key.upper()] = value.upper()
    if len(normalized) != len(mapping):
        raise ValueError("Map has duplicate letters")
    return normalized
