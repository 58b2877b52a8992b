"""
HUD Wordle Server - Main Entry Point

This is the main entry point for the HUD Wordle server.
It initializes the game service and starts the Flask-SocketIO application.
"""

from hud_wordle import create_app
from hud_wordle.config import Config, get_word_statistics, validate_word_list_integrity
from hud_wordle.services.game_service import initialize_game_service
from hud_wordle.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        validate_word_list_integrity()
        stats = get_word_statistics()
        print(f"✓ Word lists loaded: {stats['total_words']} targets, {stats['total_guesses']} accepted guesses")

        game_service = initialize_game_service(Config)
        if game_service:
            print("✓ Game service initialized successfully")
        else:
            print("✗ Failed to initialize game service")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info(f"HUD Wordle Server starting as {Config.PACKAGE_NAME}")

        print(f"\nStarting HUD Wordle Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Canvas: {Config.CANVAS_WIDTH}x{Config.CANVAS_HEIGHT}, max guesses: {Config.MAX_GUESSES}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("HUD Wordle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
