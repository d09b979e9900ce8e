"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game constants and the quote catalog (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ALPHABET, DEFAULT_LIVES, QUOTES,
    load_quote_catalog, validate_quote_catalog, get_catalog_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'ALPHABET', 'DEFAULT_LIVES', 'QUOTES',
    'load_quote_catalog', 'validate_quote_catalog', 'get_catalog_statistics'
]
