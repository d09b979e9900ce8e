"""
Game Configuration Constants Module

This module defines the cryptoquote game constants and the quote catalog.
The catalog is read-only: it is loaded once at process start, either from
the built-in list below or from a JSON file, and validated before the
server accepts requests.

"""

import json
import string
from pathlib import Path
from typing import Dict, Final, List, Optional

from ..exceptions import EmptyCatalogError

# Core Game Configuration Constants
ALPHABET: Final[str] = string.ascii_uppercase
"""
Cipher alphabet. Only ASCII A-Z letters are substituted.
"""

DEFAULT_LIVES: Final[int] = 5
"""
Number of mistakes a player may make before the round is lost.
Type: Final[int] - Immutable to prevent accidental modification
"""

# Curated Quote Catalog
QUOTES: Final[List[Dict[str, str]]] = [
    {"text": "The only way to do great work is to love what you do.", "author": "Steve Jobs"},
    {"text": "Whether you think you can or you think you can't, you're right.", "author": "Henry Ford"},
    {"text": "In the middle of difficulty lies opportunity.", "author": "Albert Einstein"},
    {"text": "It does not matter how slowly you go as long as you do not stop.", "author": "Confucius"},
    {"text": "Simplicity is the ultimate sophistication.", "author": "Leonardo da Vinci"},
    {"text": "Well done is better than well said.", "author": "Benjamin Franklin"},
    {"text": "The best time to plant a tree was 20 years ago. The second best time is now.", "author": "Chinese Proverb"},
    {"text": "Be yourself; everyone else is already taken.", "author": "Oscar Wilde"},
    {"text": "What we think, we become.", "author": "Buddha"},
    {"text": "Life is what happens when you're busy making other plans.", "author": "John Lennon"},
    {"text": "Stay hungry, stay foolish.", "author": "Stewart Brand"},
    {"text": "Not all those who wander are lost.", "author": "J. R. R. Tolkien"},
]


def load_quote_catalog(path: Optional[str] = None) -> List[Dict[str, str]]:
    """
    Loads the quote catalog used by the cipher generator.

    Args:
        path: Optional JSON file holding either a list of {text, author}
            objects or an object with a "quotes" list. When omitted the
            built-in catalog is used.

    Returns:
        list: Copy of the catalog entries

    Raises:
        EmptyCatalogError: If the catalog holds no quotes
        ValueError: If an entry is malformed
    """
    if not path:
        catalog = [dict(quote) for quote in QUOTES]
    else:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("quotes", [])
        catalog = [{"text": entry.get("text"), "author": entry.get("author")} for entry in data]

    validate_quote_catalog(catalog)
    return catalog


def validate_quote_catalog(catalog: List[Dict[str, str]]) -> bool:
    """
    Validates the integrity of a quote catalog.

    This function performs validation to ensure:
    1. The catalog is not empty
    2. Every entry has a non-empty text
    3. Every entry has an author string
    4. Every text contains at least one letter to encipher

    Returns:
        bool: True if the catalog passes all validation checks

    Raises:
        EmptyCatalogError: If the catalog is empty
        ValueError: If any entry fails validation
    """
    if not catalog:
        raise EmptyCatalogError("Quote catalog cannot be empty")

    for index, quote in enumerate(catalog):
        text = quote.get("text")
        author = quote.get("author")

        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"Quote at index {index} has no text")

        if not isinstance(author, str):
            raise ValueError(f"Quote at index {index} has no author")

        if not any(char in ALPHABET for char in text.upper()):
            raise ValueError(f"Quote at index {index} '{text}' contains no letters to encipher")

    return True


def get_catalog_statistics(catalog: Optional[List[Dict[str, str]]] = None) -> dict:
    """
    Analyzes the quote catalog and returns statistical information.

    Returns:
        dict: Statistical analysis including:
            - total_quotes: Number of quotes in the catalog
            - avg_distinct_letters: Average cipher alphabet size per quote
            - most_common_letters: Top letters across all quotes
    """
    if catalog is None:
        catalog = QUOTES

    if not catalog:
        return {"error": "Quote catalog is empty"}

    letter_frequency = {}
    distinct_counts = []
    for quote in catalog:
        text = quote["text"].upper()
        distinct_counts.append(len({char for char in text if char in ALPHABET}))
        for char in text:
            if char in ALPHABET:
                letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_quotes": len(catalog),
        "avg_distinct_letters": round(sum(distinct_counts) / len(catalog), 2),
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }
