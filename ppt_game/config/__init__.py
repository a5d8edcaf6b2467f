"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and puzzle content loading
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    EDIT_DISTANCE_CEILING, GRID_SIZE, MAX_ATTEMPTS_PER_CELL, MIN_LENGTH_RATIO,
    STORAGE_KEY, TOTAL_CELLS, load_puzzle_data, parse_puzzle_data, validate_puzzle_data,
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'EDIT_DISTANCE_CEILING', 'GRID_SIZE', 'MAX_ATTEMPTS_PER_CELL', 'MIN_LENGTH_RATIO',
    'STORAGE_KEY', 'TOTAL_CELLS', 'load_puzzle_data', 'parse_puzzle_data', 'validate_puzzle_data',
]
