"""Sokoban solver: A* search over board configurations."""

__version__ = "0.1.0"
