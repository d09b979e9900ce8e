"""
Client Package

Contains the quote endpoint client and the round loader that guards
round starts against stale responses.
"""

from .quote_client import QuoteClient
from .round_loader import RoundLoader

__all__ = ['QuoteClient', 'RoundLoader']
