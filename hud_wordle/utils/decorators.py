"""
Endpoint Decorators

Contains decorators shared by the HTTP and WebSocket session adapters.
"""

from functools import wraps
from flask import jsonify
from flask_socketio import emit

from .helpers import sanitize_user_id


def require_game_service(f):
    """
    Decorator that resolves the game service for HTTP endpoints.

    Responds 500 when the service has not been initialized, otherwise passes
    it to the view as ``game_service``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        kwargs['game_service'] = game_service
        return f(*args, **kwargs)

    return decorated_function


def websocket_user_required(f):
    """Decorator for WebSocket events that act on behalf of a display user."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        data = args[0] if args else None
        if not isinstance(data, dict) or 'user_id' not in data:
            emit('error', {'error': 'User ID is required'})
            return

        try:
            user_id = sanitize_user_id(data['user_id'])
        except ValueError as e:
            emit('error', {'error': str(e)})
            return

        kwargs['user_id'] = user_id
        kwargs['game_service'] = game_service
        return f(*args, **kwargs)

    return decorated_function
