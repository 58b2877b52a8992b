"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, display layout and word lists
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ALLOWED_GUESSES, MAX_GUESSES, WORD_LENGTH, WORD_LIST,
    get_word_statistics, validate_word_list_integrity
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'WORD_LIST', 'ALLOWED_GUESSES', 'WORD_LENGTH', 'MAX_GUESSES',
    'validate_word_list_integrity', 'get_word_statistics'
]
