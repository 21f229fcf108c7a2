"""Configuration management for the Sokoban solver.

This module provides Hydra-based configuration loading with command-line
overrides and validation.
"""

from .config_manager import ConfigManager, load_config, get_config, get_parameter, clear_config
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'load_config',
    'get_config',
    'get_parameter',
    'clear_config',
    'validate_config',
    'ConfigValidationError'
]
