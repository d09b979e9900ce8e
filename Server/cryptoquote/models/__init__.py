"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import CharacterField, FieldKind, GameOptions, GameState, WordField
from .quote import EncryptedQuote, Quote

__all__ = [
    'CharacterField', 'FieldKind', 'GameOptions', 'GameState', 'WordField',
    'EncryptedQuote', 'Quote'
]
