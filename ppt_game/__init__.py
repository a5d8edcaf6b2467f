"""
People, Places & Things Game Server Application Package

This package contains the daily 3x3 word-association puzzle: answer
matching, daily puzzle rotation, the per-player session state machine, and
the Flask HTTP layer that exposes them.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config, load_puzzle_data


def create_app(config_class=Config, puzzle_data=None):
    """
    Application factory pattern for creating Flask app instances.
    
    Args:
        config_class: Configuration class to use
        puzzle_data: Preloaded PuzzleData; loaded from PUZZLE_FILE if omitted
        
    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    
    # Initialize extensions
    CORS(app)
    
    # Register blueprints
    from .controllers.game_controller import game_bp
    
    app.register_blueprint(game_bp, url_prefix='/api')
    
    # Puzzle content is immutable for the life of the app
    app.puzzle_data = puzzle_data or load_puzzle_data(app.config.get('PUZZLE_FILE'))
    
    return app
