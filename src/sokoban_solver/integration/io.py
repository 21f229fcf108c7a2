"""Text I/O for Sokoban boards.

Boards are written as rows of glyphs. Two glyph sets are understood:

- ``xsb``: the common Sokoban level format (``#`` wall, ``.`` target, ...)
- ``unicode``: ``■`` wall, ``□`` floor, ``T`` target, as used by the bundled
  demo grids
"""

import logging
from pathlib import Path
from typing import Dict, List, Sequence, Union

from sokoban_solver.core.board import Board, InvalidBoardError
from sokoban_solver.core.data_models import Cell

logger = logging.getLogger(__name__)


SYMBOL_SETS: Dict[str, Dict[str, Cell]] = {
    'xsb': {
        '#': Cell.WALL,
        ' ': Cell.FLOOR,
        '-': Cell.FLOOR,
        '_': Cell.FLOOR,
        '.': Cell.TARGET,
        '@': Cell.PLAYER,
        '+': Cell.PLAYER_ON_TARGET,
        '$': Cell.BOX,
        '*': Cell.BOX_ON_TARGET,
    },
    'unicode': {
        '■': Cell.WALL,
        '□': Cell.FLOOR,
        ' ': Cell.FLOOR,
        'T': Cell.TARGET,
        '@': Cell.PLAYER,
        '+': Cell.PLAYER_ON_TARGET,
        '$': Cell.BOX,
        '*': Cell.BOX_ON_TARGET,
    },
}

# First glyph listed per cell wins when rendering
RENDER_SYMBOLS: Dict[str, Dict[Cell, str]] = {
    name: {cell: glyph for glyph, cell in reversed(list(table.items()))}
    for name, table in SYMBOL_SETS.items()
}


def get_symbol_table(symbols: str) -> Dict[str, Cell]:
    """Return the glyph-to-cell table for a symbol set name."""
    try:
        return SYMBOL_SETS[symbols]
    except KeyError:
        raise ValueError(f"Unknown symbol set {symbols!r}, expected one of {sorted(SYMBOL_SETS)}")


def parse_board(rows: Sequence[str], symbols: str = 'xsb') -> Board:
    """Build a board from text rows.

    Short rows are padded with floor. Trailing newlines are ignored.

    Raises:
        InvalidBoardError: If the rows are empty, hold an unknown glyph, or do
            not contain exactly one player.
    """
    table = get_symbol_table(symbols)
    lines = [row.rstrip('\r\n') for row in rows]
    if not lines:
        raise InvalidBoardError("Board is empty")

    cells: List[List[Cell]] = []
    for r, line in enumerate(lines):
        row_cells = []
        for c, glyph in enumerate(line):
            if glyph not in table:
                raise InvalidBoardError(f"Unknown glyph {glyph!r} at ({r}, {c}) for symbol set {symbols!r}")
            row_cells.append(table[glyph])
        cells.append(row_cells)

    return Board(cells)


def render_board(board: Board, symbols: str = 'xsb') -> List[str]:
    """Render a board as text rows in the given glyph set."""
    get_symbol_table(symbols)
    glyphs = RENDER_SYMBOLS[symbols]
    return ["".join(glyphs[cell] for cell in row) for row in board.rows()]


def load_levels(path: Union[str, Path]) -> List[List[str]]:
    """Read levels from a text file.

    Lines starting with ';' are comments or level titles; blank lines separate
    levels.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Level file not found: {path}")

    levels: List[List[str]] = []
    current: List[str] = []
    with open(path, 'r', encoding='utf-8') as f:
        for raw in f:
            line = raw.rstrip('\r\n')
            if line.startswith(';'):
                continue
            if not line.strip():
                if current:
                    levels.append(current)
                    current = []
                continue
            current.append(line)
    if current:
        levels.append(current)

    logger.debug(f"Loaded {len(levels)} levels from {path}")
    return levels


def load_board(path: Union[str, Path], index: int = 0, symbols: str = 'xsb') -> Board:
    """Load level ``index`` of a level file as a board.

    Raises:
        FileNotFoundError: If the file doesn't exist
        IndexError: If the file holds fewer than ``index + 1`` levels
        InvalidBoardError: If the level is malformed
    """
    levels = load_levels(path)
    if not 0 <= index < len(levels):
        raise IndexError(f"Level index {index} out of range, {path} holds {len(levels)} levels")
    return parse_board(levels[index], symbols=symbols)
