"""
UI package for the curses editing surface.

This package adapts a TextBuffer to a terminal: the EditorWindow draws the
buffer with the colors of its style runs, and the InputHandler turns key
presses into buffer edits.
"""

from .window import EditorWindow
from .input_handler import InputHandler

__all__ = ['EditorWindow', 'InputHandler']
