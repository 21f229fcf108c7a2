"""Command-line interface for the Sokoban solver.

This module provides CLI commands for solving level files and the built-in levels.
"""

from .main import main_cli
from .commands import solve_command, demo_command, config_command
from .utils import setup_logging, format_duration, save_results

__all__ = [
    'main_cli',
    'solve_command',
    'demo_command',
    'config_command',
    'setup_logging',
    'format_duration',
    'save_results'
]
