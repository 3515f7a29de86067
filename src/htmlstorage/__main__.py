"""
Entry point for the HTMLStorage editor.
"""

import argparse
import curses
import logging
import os
import sys
from typing import List, Optional

from .core.buffer import TextBuffer
from .core.styles import DEFAULT_FONT
from .ui.input_handler import InputHandler
from .ui.window import EditorWindow
from .utils.logging_config import setup_logger

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="HTMLStorage - Terminal editor with live HTML highlighting"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=str,
        help="File to open"
    )
    parser.add_argument("--tag-color", type=str, help="Color of HTML tags (#RRGGBB)")
    parser.add_argument("--quoted-color", type=str, help="Color of quoted values inside tags (#RRGGBB)")
    parser.add_argument("--comment-color", type=str, help="Color of HTML comments (#RRGGBB)")
    parser.add_argument("--log-file", type=str, default="htmlstorage.log", help="Log file path")
    return parser.parse_args(argv)


def build_buffer(args: argparse.Namespace) -> TextBuffer:
    """Create a buffer styled from the command line options."""

    buffer = TextBuffer(font=DEFAULT_FONT)

    if args.tag_color:
        buffer.tag_color = args.tag_color
    if args.quoted_color:
        buffer.quoted_color = args.quoted_color
    if args.comment_color:
        buffer.comment_color = args.comment_color

    return buffer


def main_with_args(stdscr: 'curses.window', args: argparse.Namespace, buffer: TextBuffer) -> None:
    """Main loop with parsed command line arguments."""

    curses.use_default_colors()
    curses.curs_set(0)
    stdscr.timeout(100)

    window = EditorWindow(stdscr, buffer, args.file)
    input_handler = InputHandler(window)

    if args.file and os.path.exists(args.file):
        window.load_file(args.file)
    elif args.file:
        window.set_status(f"Created new file: {args.file}")

    while True:
        current_height, current_width = stdscr.getmaxyx()
        if (current_height, current_width) != (window.height, window.width):
            window.resize()

        window.refresh_all()

        try:
            ch = stdscr.getch()
            if ch != -1 and not input_handler.handle_input(ch):
                break
        except KeyboardInterrupt:
            break
        except curses.error:
            continue


def main() -> None:
    """Entry point for the application."""

    args = parse_args()
    setup_logger("htmlstorage", args.log_file)

    try:
        buffer = build_buffer(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        curses.wrapper(main_with_args, args, buffer)
    except (OSError, ValueError) as e:
        logger.exception("Editor terminated")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
