"""Tests for board text I/O and the built-in levels."""

import pytest

from sokoban_solver.core.board import InvalidBoardError
from sokoban_solver.core.data_models import Cell
from sokoban_solver.integration.io import (
    get_symbol_table, load_board, load_levels, parse_board, render_board
)
from sokoban_solver.integration.levels import LEVELS, get_level, get_level_names


LEVEL_FILE = """; Two small levels
; Level 1
#####
#@$.#
#####

; Level 2
######
#.   #
# $  #
#  @ #
######
"""


@pytest.fixture
def level_file(tmp_path):
    path = tmp_path / "levels.txt"
    path.write_text(LEVEL_FILE, encoding="utf-8")
    return path


class TestParsing:
    """Test parsing text rows into boards."""

    def test_xsb_glyphs(self):
        board = parse_board(["#-_.", "@$* "])
        assert board.cell((0, 0)) == Cell.WALL
        assert board.cell((0, 1)) == Cell.FLOOR
        assert board.cell((0, 2)) == Cell.FLOOR
        assert board.cell((0, 3)) == Cell.TARGET
        assert board.cell((1, 0)) == Cell.PLAYER
        assert board.cell((1, 1)) == Cell.BOX
        assert board.cell((1, 2)) == Cell.BOX_ON_TARGET
        assert board.cell((1, 3)) == Cell.FLOOR

    def test_unicode_glyphs(self):
        board = parse_board(["■■■■", "■@$T", "■■■■"], symbols="unicode")
        assert board.player == (1, 1)
        assert board.boxes == ((1, 2),)
        assert board.target_positions() == frozenset({(1, 3)})

    def test_trailing_newlines_ignored(self):
        board = parse_board(["#####\n", "#@$.#\r\n", "#####\n"])
        assert board.shape == (3, 5)

    def test_ragged_rows_padded(self):
        board = parse_board(["#####", "#@$.#", "##"])
        assert board.shape == (3, 5)
        assert board.cell((2, 4)) == Cell.FLOOR

    def test_unknown_glyph(self):
        with pytest.raises(InvalidBoardError, match="Unknown glyph"):
            parse_board(["#@$.x"])

    def test_unicode_glyph_in_xsb(self):
        with pytest.raises(InvalidBoardError):
            parse_board(["■@$T"])

    def test_empty_rows(self):
        with pytest.raises(InvalidBoardError):
            parse_board([])

    def test_unknown_symbol_set(self):
        with pytest.raises(ValueError):
            get_symbol_table("ascii-art")
        with pytest.raises(ValueError):
            parse_board(["@"], symbols="ascii-art")


class TestRendering:
    """Test rendering boards back to text."""

    def test_render_xsb(self):
        rows = ["######", "#+$ *#", "#  . #", "######"]
        assert render_board(parse_board(rows)) == rows

    def test_render_normalizes_floor(self):
        board = parse_board(["#@-_$.#"])
        assert render_board(board) == ["#@  $.#"]

    def test_render_unicode(self):
        board = parse_board(["#####", "#@$.#", "#####"])
        assert render_board(board, "unicode") == ["■■■■■", "■@$T■", "■■■■■"]


class TestLevelFiles:
    """Test reading level files."""

    def test_load_levels(self, level_file):
        levels = load_levels(level_file)
        assert len(levels) == 2
        assert levels[0] == ["#####", "#@$.#", "#####"]
        assert len(levels[1]) == 5

    def test_load_board_by_index(self, level_file):
        board = load_board(level_file, index=1)
        assert board.player == (3, 3)
        assert board.boxes == ((2, 2),)

    def test_index_out_of_range(self, level_file):
        with pytest.raises(IndexError):
            load_board(level_file, index=2)
        with pytest.raises(IndexError):
            load_board(level_file, index=-1)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_levels(tmp_path / "missing.txt")


class TestBuiltinLevels:
    """Test the bundled levels."""

    def test_every_level_parses(self):
        for name in get_level_names():
            board = get_level(name)
            assert len(board.boxes) >= 1
            assert len(board.target_positions()) >= len(board.boxes)

    def test_demo_grids(self):
        for name in ("grid1", "grid2"):
            board = get_level(name)
            assert LEVELS[name][0] == "unicode"
            assert board.shape == (10, 10)
            assert board.player == (4, 4)
            assert len(board.boxes) == 4
            assert len(board.target_positions()) == 4

    def test_unknown_level(self):
        with pytest.raises(KeyError):
            get_level("no-such-level")
