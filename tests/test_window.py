import curses

import pytest

from htmlstorage.ui.window import (
    line_col_to_offset,
    nearest_curses_color,
    offset_to_line_col,
    xterm_color_index,
)


def test_nearest_curses_color():
    assert nearest_curses_color("#FF0000") == curses.COLOR_RED
    assert nearest_curses_color("#AAAAAA") == curses.COLOR_WHITE
    assert nearest_curses_color("#0075B6") == curses.COLOR_CYAN
    assert nearest_curses_color("#000") == curses.COLOR_BLACK


def test_nearest_curses_color_rejects_invalid_color():
    with pytest.raises(ValueError):
        nearest_curses_color("blue")


def test_xterm_color_index():
    assert xterm_color_index("#000000") == 16
    assert xterm_color_index("#FFFFFF") == 231
    assert xterm_color_index("#FF0000") == 196


@pytest.mark.parametrize("offset,expected", [
    (0, (0, 0)), (2, (0, 2)), (3, (1, 0)), (5, (1, 2)), (6, (2, 0)),
])
def test_offset_to_line_col(offset, expected):
    assert offset_to_line_col("ab\ncd\n", offset) == expected


def test_line_col_to_offset_clamps():
    text = "ab\ncdef\n"
    assert line_col_to_offset(text, 1, 2) == 5
    assert line_col_to_offset(text, 0, 10) == 2
    assert line_col_to_offset(text, 9, 3) == len(text)
    assert line_col_to_offset(text, -1, 1) == 1
