"""
Window management module for the HTML editor UI.
"""

import curses
import logging
import os
import time
from typing import Dict, Final, List, Optional, Tuple

from ..core.buffer import EditEvent, EditMask, TextBuffer
from ..core.styles import FOREGROUND_COLOR, color_to_rgb

logger = logging.getLogger(__name__)

# Approximate RGB values of the eight basic terminal colors.
BASIC_COLORS: Final[Dict[int, Tuple[int, int, int]]] = {
    curses.COLOR_BLACK: (0, 0, 0),
    curses.COLOR_RED: (205, 0, 0),
    curses.COLOR_GREEN: (0, 205, 0),
    curses.COLOR_YELLOW: (205, 205, 0),
    curses.COLOR_BLUE: (0, 0, 238),
    curses.COLOR_MAGENTA: (205, 0, 205),
    curses.COLOR_CYAN: (0, 205, 205),
    curses.COLOR_WHITE: (229, 229, 229),
}

LINE_NUMBER_PAIR: Final[int] = 1
STATUS_PAIR: Final[int] = 2
FIRST_TEXT_PAIR: Final[int] = 3


def safe_addstr(window: 'curses.window', y: int, x: int, string: str, attr: int = 0) -> None:
    """Safely add a string to a window, truncating if necessary."""

    height, width = window.getmaxyx()
    if y >= height or x >= width:
        return

    available = width - x
    if available <= 0:
        return

    if len(string) > available:
        string = string[:available]

    try:
        window.addstr(y, x, string, attr)
    except curses.error:
        pass


def nearest_curses_color(color: str) -> int:
    """Map a hex color to the closest of the eight basic curses colors."""

    red, green, blue = color_to_rgb(color)

    def distance(item: Tuple[int, Tuple[int, int, int]]) -> int:
        r, g, b = item[1]
        return (red - r) ** 2 + (green - g) ** 2 + (blue - b) ** 2

    return min(BASIC_COLORS.items(), key=distance)[0]


def xterm_color_index(color: str) -> int:
    """Map a hex color to the 6x6x6 color cube of a 256-color terminal."""

    red, green, blue = (round(component / 255 * 5) for component in color_to_rgb(color))
    return 16 + 36 * red + 6 * green + blue


def offset_to_line_col(text: str, offset: int) -> Tuple[int, int]:
    """Convert a character offset to a (line, column) pair."""

    before = text[:offset]
    return before.count('\n'), offset - (before.rfind('\n') + 1)


def line_col_to_offset(text: str, line: int, column: int) -> int:
    """Convert a (line, column) pair to a character offset, clamping to the text."""

    lines = text.split('\n')
    line = max(0, min(line, len(lines) - 1))
    start = sum(len(previous) + 1 for previous in lines[:line])

    return start + max(0, min(column, len(lines[line])))


class ColorPairs:
    """Allocates curses color pairs for the hex colors found in the buffer."""

    def __init__(self, extended: bool = False) -> None:
        self.extended = extended
        self.pairs: Dict[str, int] = {}
        self.next_pair = FIRST_TEXT_PAIR

    def attr_for(self, color: Optional[str]) -> int:
        """Get the curses attribute drawing text in a hex color."""

        if color is None:
            return curses.A_NORMAL

        if color not in self.pairs:
            if self.next_pair >= curses.COLOR_PAIRS:
                return curses.A_NORMAL

            terminal_color = xterm_color_index(color) if self.extended else nearest_curses_color(color)
            curses.init_pair(self.next_pair, terminal_color, -1)
            self.pairs[color] = self.next_pair
            self.next_pair += 1

        return curses.color_pair(self.pairs[color])


class EditorWindow:
    """Draws a TextBuffer in a curses screen, one color per style run."""

    STATUS_MESSAGE_DURATION = 3
    LINE_NUMBER_WIDTH = 6

    def __init__(self, stdscr: 'curses.window', buffer: TextBuffer, filename: Optional[str] = None):
        self.stdscr = stdscr
        self.height, self.width = stdscr.getmaxyx()

        if self.height < 5 or self.width < 20:
            raise ValueError(f"Terminal too small. Minimum size: 20x5, Current size: {self.width}x{self.height}")

        self.buffer = buffer
        self.filename = filename
        self.cursor = 0
        self.top_line = 0
        self.modified = False
        self.status_message: Optional[str] = None
        self.status_message_time = 0.0

        self.code_window: Optional['curses.window'] = None
        self.line_numbers_window: Optional['curses.window'] = None
        self.status_window: Optional['curses.window'] = None

        curses.start_color()
        curses.init_pair(LINE_NUMBER_PAIR, 8 if curses.COLORS > 8 else curses.COLOR_WHITE, -1)
        curses.init_pair(STATUS_PAIR, curses.COLOR_WHITE, -1)
        self.color_pairs = ColorPairs(extended=curses.COLORS >= 256)

        self.buffer.add_observer(self._on_edit)
        self.setup_windows()

    def _on_edit(self, event: EditEvent) -> None:
        if event.mask & EditMask.CHARACTERS:
            self.modified = True

    @property
    def visible_lines(self) -> int:
        return self.height - 1

    def setup_windows(self) -> None:
        """Create and position all windows."""

        self.line_numbers_window = curses.newwin(self.visible_lines, self.LINE_NUMBER_WIDTH, 0, 0)
        self.code_window = curses.newwin(
            self.visible_lines,
            self.width - self.LINE_NUMBER_WIDTH,
            0,
            self.LINE_NUMBER_WIDTH
        )
        self.status_window = curses.newwin(1, self.width, self.height - 1, 0)

    def resize(self) -> None:
        """Handle terminal resize."""

        self.height, self.width = self.stdscr.getmaxyx()
        self.stdscr.clear()
        self.setup_windows()

    def set_status(self, message: str) -> None:
        self.status_message = message
        self.status_message_time = time.time()

    def refresh_all(self) -> None:
        """Refresh all windows."""

        self._scroll_to_cursor()
        self.draw_line_numbers()
        self.draw_code_view()
        self.draw_status()
        curses.doupdate()

    def _scroll_to_cursor(self) -> None:
        cursor_line, _ = offset_to_line_col(self.buffer.text, self.cursor)

        if cursor_line < self.top_line:
            self.top_line = cursor_line
        elif cursor_line >= self.top_line + self.visible_lines:
            self.top_line = cursor_line - self.visible_lines + 1

    def _colors_by_offset(self) -> List[Optional[str]]:
        colors: List[Optional[str]] = []
        for run in self.buffer.runs():
            colors.extend([run.attributes.get(FOREGROUND_COLOR)] * run.length)

        return colors

    def draw_line_numbers(self) -> None:
        """Draw line numbers for the visible lines."""

        if not self.line_numbers_window:
            return

        self.line_numbers_window.clear()

        line_count = self.buffer.text.count('\n') + 1
        cursor_line, _ = offset_to_line_col(self.buffer.text, self.cursor)

        for i in range(self.visible_lines):
            line_num = self.top_line + i
            if line_num >= line_count:
                break

            attr = curses.color_pair(LINE_NUMBER_PAIR)
            if line_num == cursor_line:
                attr |= curses.A_BOLD

            safe_addstr(self.line_numbers_window, i, 0, f"{line_num + 1:4d} ", attr)

        self.line_numbers_window.noutrefresh()

    def draw_code_view(self) -> None:
        """Draw the buffer text, colored by its style runs."""

        if not self.code_window:
            return

        self.code_window.clear()

        text = self.buffer.text
        colors = self._colors_by_offset()
        lines = text.split('\n')

        offset = sum(len(line) + 1 for line in lines[:self.top_line])

        for i in range(self.visible_lines):
            line_num = self.top_line + i
            if line_num >= len(lines):
                break

            line = lines[line_num]
            column = 0
            while column < len(line):
                color = colors[offset + column]
                end = column
                while end < len(line) and colors[offset + end] == color:
                    end += 1

                safe_addstr(self.code_window, i, column, line[column:end], self.color_pairs.attr_for(color))
                column = end

            if offset <= self.cursor <= offset + len(line):
                cursor_column = self.cursor - offset
                cursor_char = line[cursor_column] if cursor_column < len(line) else ' '
                safe_addstr(self.code_window, i, cursor_column, cursor_char, curses.A_REVERSE)

            offset += len(line) + 1

        self.code_window.noutrefresh()

    def draw_status(self) -> None:
        """Draw the status bar."""

        if not self.status_window:
            return

        self.status_window.clear()

        if self.status_message and time.time() - self.status_message_time < self.STATUS_MESSAGE_DURATION:
            safe_addstr(self.status_window, 0, 0, self.status_message, curses.color_pair(STATUS_PAIR))
            self.status_window.noutrefresh()
            return

        line, column = offset_to_line_col(self.buffer.text, self.cursor)
        name = os.path.basename(self.filename) if self.filename else "[New File]"
        status = f"{name}{' [+]' if self.modified else ''} | Ln {line + 1}, Col {column + 1} | ^W Save  ^X Quit"

        safe_addstr(self.status_window, 0, 0, status, curses.color_pair(STATUS_PAIR) | curses.A_BOLD)
        self.status_window.noutrefresh()

    def load_file(self, filename: str) -> None:
        """Load a file into the buffer."""

        with open(filename, 'r', encoding='utf-8', errors='replace') as f:
            content = f.read()

        self.buffer.set_text(content)
        self.filename = filename
        self.cursor = 0
        self.top_line = 0
        self.modified = False

        logger.info("Loaded %s (%d characters)", filename, len(content))

    def save_file(self, filename: Optional[str] = None) -> bool:
        """
        Save the buffer text to a file.

        Args:
            filename: Optional filename to save to. If None, uses current filename.

        Returns:
            bool: True if save was successful, False otherwise
        """

        save_filename = filename or self.filename
        if not save_filename:
            self.set_status("No file name. Start the editor with a file path to save.")
            return False

        try:
            with open(save_filename, 'w', encoding='utf-8') as f:
                f.write(self.buffer.text)
        except OSError as e:
            logger.error("Failed to save %s: %s", save_filename, e)
            self.set_status(f"Failed to save file: {e}")
            return False

        self.filename = save_filename
        self.modified = False
        self.set_status(f"Saved {save_filename}")
        logger.info("Saved %s (%d characters)", save_filename, len(self.buffer))

        return True
