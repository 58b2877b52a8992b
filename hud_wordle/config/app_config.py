"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv('hud_wordle/config/config.env')


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_flag('DEBUG', 'False')

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 3000))
    PACKAGE_NAME = os.getenv('PACKAGE_NAME', 'com.example.hudwordle')

    # Game Settings
    MAX_GUESSES = int(os.getenv('MAX_GUESSES', 6))
    REJECT_REPEATED_GUESSES = _env_flag('REJECT_REPEATED_GUESSES', 'True')

    # Display Settings
    CANVAS_WIDTH = int(os.getenv('CANVAS_WIDTH', 526))
    CANVAS_HEIGHT = int(os.getenv('CANVAS_HEIGHT', 100))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
