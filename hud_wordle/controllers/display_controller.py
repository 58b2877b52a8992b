"""
Display Controller

Handles the HTTP endpoints the display host uses to feed transcripts in and
pull rendered frames out.
"""

from dataclasses import asdict
from flask import Blueprint, Response, current_app, jsonify, request

from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_transcription, sanitize_user_id

display_bp = Blueprint('display', __name__)
health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health():
    """Report that the server is up."""
    return jsonify({'status': 'healthy', 'app': current_app.config.get('PACKAGE_NAME')})


@display_bp.route('/sessions/<user_id>/transcription', methods=['POST'])
@require_game_service
def submit_transcription(user_id, game_service=None):
    """Apply a transcription to the user's game; returns a new frame if it changed."""
    try:
        user_id = sanitize_user_id(user_id)
        payload = parse_transcription(request.get_json(silent=True))

        game_logger.log_user_action(
            request, 'transcription', user_id,
            text=payload['text'], is_final=payload['is_final']
        )

        state_changed = game_service.process_input(user_id, payload['text'], payload['is_final'])

        response_data = {
            'success': True,
            'state_changed': state_changed
        }
        if state_changed:
            response_data['bitmap'] = game_service.render(user_id)

        game_logger.log_server_response(request, 'transcription', True, response_data, user_id)
        return jsonify(response_data)

    except ValueError as e:
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'transcription', False, error_response, user_id)
        return jsonify(error_response), 400

    except Exception as e:
        game_logger.log_error(request, e, 'transcription', user_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'transcription', False, error_response, user_id)
        return jsonify(error_response), 500


@display_bp.route('/sessions/<user_id>/display', methods=['GET'])
@require_game_service
def get_display(user_id, game_service=None):
    """Return the user's current frame as base64 BMP text."""
    try:
        user_id = sanitize_user_id(user_id)
        game_logger.log_user_action(request, 'render', user_id)

        response_data = {
            'success': True,
            'bitmap': game_service.render(user_id)
        }

        game_logger.log_server_response(request, 'render', True, response_data, user_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'render', user_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'render', False, error_response, user_id)
        return jsonify(error_response), 500


@display_bp.route('/sessions/<user_id>/display.bmp', methods=['GET'])
@require_game_service
def get_display_bitmap(user_id, game_service=None):
    """Return the user's current frame as a raw BMP file, for previewing in a browser."""
    try:
        user_id = sanitize_user_id(user_id)
        game_logger.log_user_action(request, 'render_bmp', user_id)
        return Response(game_service.render_bitmap(user_id), mimetype='image/bmp')

    except Exception as e:
        game_logger.log_error(request, e, 'render_bmp', user_id)
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@display_bp.route('/sessions/<user_id>/state', methods=['GET'])
@require_game_service
def get_state(user_id, game_service=None):
    """Get current game state."""
    try:
        user_id = sanitize_user_id(user_id)
        game_logger.log_user_action(request, 'get_state', user_id)

        state = game_service.get_game_state(user_id)
        if state is None:
            error_response = {
                'success': False,
                'error': 'Game not found'
            }
            game_logger.log_server_response(request, 'get_state', False, error_response, user_id)
            return jsonify(error_response), 404

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, user_id,
            current_row=state.current_row, game_over=state.game_over
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', user_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, user_id)
        return jsonify(error_response), 500


@display_bp.route('/sessions/<user_id>', methods=['DELETE'])
@require_game_service
def end_session(user_id, game_service=None):
    """End the user's display session and drop their game."""
    try:
        user_id = sanitize_user_id(user_id)
        game_logger.log_user_action(request, 'end_session', user_id)

        response_data = {
            'success': True,
            'deleted': game_service.delete_session(user_id)
        }

        game_logger.log_server_response(request, 'end_session', True, response_data, user_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'end_session', user_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'end_session', False, error_response, user_id)
        return jsonify(error_response), 500
