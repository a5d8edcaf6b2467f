"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""
    
    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False
    
    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))
    
    # Puzzle Content Settings
    PUZZLE_FILE = os.getenv('PUZZLE_FILE')  # None means the bundled puzzles.json
    REFERENCE_TIMEZONE = os.getenv('REFERENCE_TIMEZONE', 'America/New_York')
    GAME_URL = os.getenv('GAME_URL', '')
    
    # Session Persistence Settings
    SESSION_STORE = os.getenv('SESSION_STORE', 'file')  # "memory", "file" or "mongo"
    SESSION_FILE = os.getenv('SESSION_FILE', 'data/sessions.json')
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB = os.getenv('MONGO_DB', 'ppt_game')
    SESSION_CACHE_SIZE = int(os.getenv('SESSION_CACHE_SIZE', 1024))
    
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
    SESSION_STORE = 'memory'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
