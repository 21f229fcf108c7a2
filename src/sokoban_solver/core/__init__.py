"""Board representation for the Sokoban solver."""

from .board import Board, InvalidBoardError
from .data_models import Cell, Direction, Position

__all__ = ['Board', 'InvalidBoardError', 'Cell', 'Direction', 'Position']
