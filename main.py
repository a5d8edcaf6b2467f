"""
People, Places & Things Server - Main Entry Point

This is the main entry point for the game server.
It initializes all services and starts the Flask application.
"""

from ppt_game import create_app
from ppt_game.config import Config
from ppt_game.services.game_service import initialize_game_service
from ppt_game.services.session_store import build_session_store
from ppt_game.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")
        
        # Initialize session persistence
        store = build_session_store(Config)
        print(f"✓ Session store initialized ({Config.SESSION_STORE})")
        
        # Initialize game service
        game_service = initialize_game_service(store, cache_size=Config.SESSION_CACHE_SIZE)
        if game_service:
            print("✓ Game service initialized successfully")
        else:
            print("✗ Failed to initialize game service")
        
        # Create Flask app
        print("Creating Flask application...")
        app = create_app(Config)
        print(f"✓ Flask application created with {len(app.puzzle_data.puzzles)} puzzles")
        
        # Log server startup
        game_logger.logger.info("People, Places & Things Server Starting")
        
        print(f"\nStarting server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Reference timezone: {Config.REFERENCE_TIMEZONE}")
        print("=" * 50)
        
        # Start the server
        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)
        
    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
