"""
WebSocket Event Handlers

Handles the real-time session events sent by the display host: session
start, streaming transcriptions and session end.
"""

from flask import request
from flask_socketio import emit

from ..utils.decorators import websocket_user_required
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_transcription

# Simple tracking of connected display sessions
connected_users = {}  # socket_id -> user_id


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Forget the socket; the game survives until the host ends the session."""
        user_id = connected_users.pop(request.sid, None)
        if user_id:
            game_logger.logger.info(f"WebSocket disconnect for user {user_id}")

    @socketio.on('start_session')
    @websocket_user_required
    def handle_start_session(data, user_id=None, game_service=None):
        """Attach a socket to a user's game and push the current frame."""
        try:
            connected_users[request.sid] = user_id
            game_logger.log_user_action(request, 'start_session', user_id)

            emit('display_update', {
                'user_id': user_id,
                'bitmap': game_service.render(user_id)
            })

        except Exception as e:
            game_logger.log_error(request, e, 'start_session', user_id)
            emit('error', {'error': 'Failed to start session'})

    @socketio.on('transcription')
    @websocket_user_required
    def handle_transcription(data, user_id=None, game_service=None):
        """Apply a transcription and push a new frame only when the game changed."""
        try:
            payload = parse_transcription(data)
        except ValueError as e:
            emit('error', {'error': str(e)})
            return

        try:
            game_logger.log_user_action(
                request, 'transcription', user_id,
                text=payload['text'], is_final=payload['is_final']
            )

            if game_service.process_input(user_id, payload['text'], payload['is_final']):
                emit('display_update', {
                    'user_id': user_id,
                    'bitmap': game_service.render(user_id)
                })

        except Exception as e:
            game_logger.log_error(request, e, 'transcription', user_id)
            emit('error', {'error': 'Failed to process transcription'})

    @socketio.on('end_session')
    @websocket_user_required
    def handle_end_session(data, user_id=None, game_service=None):
        """Drop the user's game when the host tears the session down."""
        try:
            connected_users.pop(request.sid, None)
            deleted = game_service.delete_session(user_id)
            game_logger.log_user_action(request, 'end_session', user_id, deleted=deleted)
            emit('session_ended', {'user_id': user_id, 'deleted': deleted})

        except Exception as e:
            game_logger.log_error(request, e, 'end_session', user_id)
            emit('error', {'error': 'Failed to end session'})
