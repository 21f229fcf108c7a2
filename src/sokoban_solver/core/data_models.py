"""Core data models for the Sokoban solver."""

from enum import Enum, IntEnum
from typing import Tuple


class Cell(IntEnum):
    """Semantic content of one grid position."""

    WALL = 0
    FLOOR = 1
    TARGET = 2
    PLAYER = 3
    PLAYER_ON_TARGET = 4
    BOX = 5
    BOX_ON_TARGET = 6

    @property
    def is_box(self) -> bool:
        return self in (Cell.BOX, Cell.BOX_ON_TARGET)

    @property
    def is_player(self) -> bool:
        return self in (Cell.PLAYER, Cell.PLAYER_ON_TARGET)

    @property
    def is_target(self) -> bool:
        """True for every cell with a target underneath."""
        return self in (Cell.TARGET, Cell.PLAYER_ON_TARGET, Cell.BOX_ON_TARGET)

    @property
    def is_passable(self) -> bool:
        """True for empty cells a player can step into or a box can slide into."""
        return self in (Cell.FLOOR, Cell.TARGET)

    def without_occupant(self) -> 'Cell':
        """Return the cell left behind when its player or box moves away."""
        return Cell.TARGET if self.is_target else Cell.FLOOR

    def with_player(self) -> 'Cell':
        """Return this (emptied) cell with the player standing on it."""
        return Cell.PLAYER_ON_TARGET if self.is_target else Cell.PLAYER

    def with_box(self) -> 'Cell':
        """Return this (emptied) cell with a box resting on it."""
        return Cell.BOX_ON_TARGET if self.is_target else Cell.BOX


class Direction(Enum):
    """The four player actions, in successor generation order."""

    UP = (-1, 0, "U")
    DOWN = (1, 0, "D")
    LEFT = (0, -1, "L")
    RIGHT = (0, 1, "R")

    def __init__(self, d_row: int, d_col: int, code: str):
        self.d_row = d_row
        self.d_col = d_col
        self.code = code

    def step(self, pos: 'Position', times: int = 1) -> 'Position':
        """Return the position ``times`` steps away from ``pos``."""
        return (pos[0] + self.d_row * times, pos[1] + self.d_col * times)

    @classmethod
    def from_code(cls, code: str) -> 'Direction':
        """Look up a direction by its U/D/L/R letter (case-insensitive)."""
        upper = code.upper()
        for direction in cls:
            if direction.code == upper:
                return direction
        raise ValueError(f"Unknown direction code: {code!r}")

    def __str__(self) -> str:
        return self.code


# Type aliases for clarity
Position = Tuple[int, int]  # (row, col) position in the grid
