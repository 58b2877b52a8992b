"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_game_service, websocket_user_required
from .helpers import parse_transcription, sanitize_user_id
from .game_logger import game_logger

__all__ = [
    'require_game_service', 'websocket_user_required',
    'parse_transcription', 'sanitize_user_id', 'game_logger'
]
