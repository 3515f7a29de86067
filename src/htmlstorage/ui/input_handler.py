"""
Input handler module translating keyboard events into buffer edits.
"""

import curses
from typing import Callable, Dict, Final

from ..core.ranges import TextRange
from .window import EditorWindow, line_col_to_offset, offset_to_line_col

TAB_TEXT: Final[str] = '    '

UNSAVED_CHANGES_STATUS_MESSAGE: Final[str] = "Buffer has unsaved changes. Press Ctrl+W to save or Ctrl+X again to discard changes."


class InputHandler:
    """Handles keyboard input and executes corresponding actions."""

    def __init__(self, window: EditorWindow) -> None:
        self.window = window
        self.quit_requested = False
        self.command_handlers: Dict[int, Callable[[], None]] = self._setup_handlers()

    def _setup_handlers(self) -> Dict[int, Callable[[], None]]:
        """Set up the keyboard command handlers."""

        return {
            curses.KEY_LEFT: self._move_left,
            curses.KEY_RIGHT: self._move_right,
            curses.KEY_UP: self._move_up,
            curses.KEY_DOWN: self._move_down,
            curses.KEY_HOME: self._move_line_start,
            curses.KEY_END: self._move_line_end,
            curses.KEY_PPAGE: self._page_up,
            curses.KEY_NPAGE: self._page_down,

            curses.KEY_DC: self._delete_char,
            curses.KEY_BACKSPACE: self._backspace,
            127: self._backspace,
            8: self._backspace,
            curses.KEY_ENTER: self._handle_enter,
            ord('\n'): self._handle_enter,
            ord('\t'): self._handle_tab,

            ord('w') & 0x1f: self._save,  # Ctrl + W (save key)
        }

    def handle_input(self, ch: int) -> bool:
        """Handle a single keyboard input. Returns False if should quit."""

        if ch == ord('x') & 0x1f:  # Ctrl + X (quit key)
            return not self._quit()

        self.quit_requested = False

        if 32 <= ch <= 126:  # Printable characters
            self._insert_text(chr(ch))
            return True

        if ch in self.command_handlers:
            self.command_handlers[ch]()

        return True

    def _insert_text(self, text: str) -> None:
        """Insert text at the cursor and move past it."""

        self.window.buffer.replace_characters(TextRange(self.window.cursor, 0), text)
        self.window.cursor += len(text)

    def _handle_enter(self) -> None:
        self._insert_text('\n')

    def _handle_tab(self) -> None:
        self._insert_text(TAB_TEXT)

    def _delete_char(self) -> None:
        """Delete character at cursor."""

        buf = self.window.buffer
        if self.window.cursor < len(buf):
            buf.replace_characters(TextRange(self.window.cursor, 1), '')

    def _backspace(self) -> None:
        """Delete character before cursor."""

        if self.window.cursor == 0:
            return

        self.window.cursor -= 1
        self.window.buffer.replace_characters(TextRange(self.window.cursor, 1), '')

    def _move_left(self) -> None:
        self.window.cursor = max(0, self.window.cursor - 1)

    def _move_right(self) -> None:
        self.window.cursor = min(len(self.window.buffer), self.window.cursor + 1)

    def _move_lines(self, count: int) -> None:
        """Move the cursor up or down, keeping its column where possible."""

        text = self.window.buffer.text
        line, column = offset_to_line_col(text, self.window.cursor)
        self.window.cursor = line_col_to_offset(text, max(0, line + count), column)

    def _move_up(self) -> None:
        self._move_lines(-1)

    def _move_down(self) -> None:
        self._move_lines(1)

    def _page_up(self) -> None:
        self._move_lines(-self.window.visible_lines)

    def _page_down(self) -> None:
        self._move_lines(self.window.visible_lines)

    def _move_line_start(self) -> None:
        text = self.window.buffer.text
        line, _ = offset_to_line_col(text, self.window.cursor)
        self.window.cursor = line_col_to_offset(text, line, 0)

    def _move_line_end(self) -> None:
        text = self.window.buffer.text
        line, _ = offset_to_line_col(text, self.window.cursor)
        self.window.cursor = line_col_to_offset(text, line, len(text))

    def _save(self) -> None:
        self.window.save_file()

    def _quit(self) -> bool:
        """Returns True if the editor should exit."""

        if self.window.modified and not self.quit_requested:
            self.quit_requested = True
            self.window.set_status(UNSAVED_CHANGES_STATUS_MESSAGE)
            return False

        return True
