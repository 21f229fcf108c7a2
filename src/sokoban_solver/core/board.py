"""Immutable Sokoban board.

A board is a rectangular grid of :class:`Cell` values. The player position and
the box positions are derived once at construction. Two boards are the same
search state exactly when their cell grids are identical, regardless of how
they were reached.
"""

from typing import Dict, FrozenSet, Iterable, Sequence, Tuple, Union

import numpy as np

from sokoban_solver.core.data_models import Cell, Position


class InvalidBoardError(ValueError):
    """Raised when a board cannot be built from the given cells."""
    pass


CellGrid = Union[np.ndarray, Sequence[Sequence[Union[Cell, int]]]]


class Board:
    """Rectangular cell grid with derived player and box positions."""

    __slots__ = ('cells', 'player', 'boxes', '_hash')

    def __init__(self, cells: CellGrid):
        """Build a board.

        Args:
            cells: 2-D array or nested rows of cells. Short rows are padded
                with ``Cell.FLOOR``.

        Raises:
            InvalidBoardError: If the grid is empty or does not hold exactly
                one player cell.
        """
        grid = self._to_array(cells)
        grid.setflags(write=False)
        self.cells: np.ndarray = grid

        players = np.argwhere((grid == Cell.PLAYER) | (grid == Cell.PLAYER_ON_TARGET))
        if len(players) == 0:
            raise InvalidBoardError("Board has no player cell")
        if len(players) > 1:
            raise InvalidBoardError(
                f"Board has {len(players)} player cells, expected exactly one"
            )
        self.player: Position = (int(players[0][0]), int(players[0][1]))

        # argwhere walks the grid in row-major order
        box_positions = np.argwhere((grid == Cell.BOX) | (grid == Cell.BOX_ON_TARGET))
        self.boxes: Tuple[Position, ...] = tuple((int(r), int(c)) for r, c in box_positions)

        self._hash = hash((grid.shape, grid.tobytes()))

    @staticmethod
    def _to_array(cells: CellGrid) -> np.ndarray:
        if isinstance(cells, np.ndarray):
            if cells.ndim != 2 or cells.size == 0:
                raise InvalidBoardError(f"Board must be a non-empty 2-D grid, got shape {cells.shape}")
            invalid = ~np.isin(cells, [int(cell) for cell in Cell])
            if invalid.any():
                r, c = (int(i) for i in np.argwhere(invalid)[0])
                raise InvalidBoardError(f"Invalid cell value {cells[r, c]!r} at ({r}, {c})")
            return np.array(cells, dtype=np.int8)

        rows = [list(row) for row in cells]
        if not rows:
            raise InvalidBoardError("Board is empty")
        width = max(len(row) for row in rows)
        if width == 0:
            raise InvalidBoardError("Board is empty")

        grid = np.full((len(rows), width), Cell.FLOOR, dtype=np.int8)
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                try:
                    grid[r, c] = Cell(value)
                except ValueError:
                    raise InvalidBoardError(f"Invalid cell value {value!r} at ({r}, {c})")
        return grid

    @property
    def shape(self) -> Tuple[int, int]:
        return self.cells.shape

    @property
    def height(self) -> int:
        return self.cells.shape[0]

    @property
    def width(self) -> int:
        return self.cells.shape[1]

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.cells.shape[0] and 0 <= col < self.cells.shape[1]

    def cell(self, pos: Position) -> Cell:
        """Return the cell at ``pos``. The position must be in bounds."""
        return Cell(int(self.cells[pos]))

    def is_wall(self, pos: Position) -> bool:
        """Walls and everything outside the grid."""
        return not self.in_bounds(pos) or self.cells[pos] == Cell.WALL

    def is_blocked(self, pos: Position) -> bool:
        """Walls, boxes and everything outside the grid."""
        if not self.in_bounds(pos):
            return True
        return self.cell(pos) in (Cell.WALL, Cell.BOX, Cell.BOX_ON_TARGET)

    def target_positions(self) -> FrozenSet[Position]:
        """Coordinates of every cell with a target underneath."""
        mask = (
            (self.cells == Cell.TARGET)
            | (self.cells == Cell.BOX_ON_TARGET)
            | (self.cells == Cell.PLAYER_ON_TARGET)
        )
        return frozenset((int(r), int(c)) for r, c in np.argwhere(mask))

    def is_goal(self) -> bool:
        """True when every box rests on a target and there is at least one box."""
        if not self.boxes:
            return False
        return all(self.cells[pos] == Cell.BOX_ON_TARGET for pos in self.boxes)

    def with_cells(self, updates: Dict[Position, Cell]) -> 'Board':
        """Return a new board with the given cells replaced."""
        grid = self.cells.copy()
        for pos, value in updates.items():
            grid[pos] = value
        return Board(grid)

    def rows(self) -> Iterable[Tuple[Cell, ...]]:
        """Iterate over the grid as tuples of cells."""
        for row in self.cells:
            yield tuple(Cell(int(value)) for value in row)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._hash == other._hash and np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"Board(shape={self.shape}, player={self.player}, boxes={list(self.boxes)})"
