"""Built-in Sokoban levels.

Each entry maps a name to ``(symbol set, rows)``.
"""

from typing import Dict, List, Tuple

from sokoban_solver.core.board import Board
from sokoban_solver.integration.io import parse_board

LEVELS: Dict[str, Tuple[str, List[str]]] = {}

# ------------------------------------------------------------------
# Demo grids (unicode glyphs)
# ------------------------------------------------------------------

LEVELS["grid1"] = ("unicode", [
    "■■■■■■■■■■",
    "■□□□□□□□□■",
    "■□■■□■■□□■",
    "■□$□T□$□□■",
    "■□■□@□■□□■",
    "■□$□T□$□□■",
    "■□■■□■■□□■",
    "■□□T□□T□□■",
    "■□□□□□□□□■",
    "■■■■■■■■■■",
])

LEVELS["grid2"] = ("unicode", [
    "■■■■■■■■■■",
    "■T□■□□■□T■",
    "■□■$□□$■□■",
    "■□■□□□□■□■",
    "■□□□@□□□□■",
    "■□■□□□□■□■",
    "■□■$□□$■□■",
    "■T□■□□■□T■",
    "■□□□□□□□□■",
    "■■■■■■■■■■",
])

# ------------------------------------------------------------------
# Small XSB levels
# ------------------------------------------------------------------

LEVELS["one-push"] = ("xsb", [
    "#####",
    "#   #",
    "#@$.#",
    "#   #",
    "#####",
])

LEVELS["two-push"] = ("xsb", [
    "######",
    "#.   #",
    "# $  #",
    "#  @ #",
    "######",
])

LEVELS["two-boxes"] = ("xsb", [
    "#######",
    "#     #",
    "# $$  #",
    "# ..@ #",
    "#     #",
    "#######",
])


def get_level_names() -> List[str]:
    """Names of the built-in levels, in definition order."""
    return list(LEVELS)


def get_level(name: str) -> Board:
    """Parse a built-in level.

    Raises:
        KeyError: If no level has that name
    """
    if name not in LEVELS:
        raise KeyError(f"Unknown level {name!r}, available: {', '.join(LEVELS)}")
    symbols, rows = LEVELS[name]
    return parse_board(rows, symbols=symbols)
