"""
HTMLStorage: a text buffer that keeps inline HTML source highlighted as it is edited.
"""

from .core import TextBuffer, TextRange, StyledText, Font

__version__ = "0.1.0"

__all__ = ['TextBuffer', 'TextRange', 'StyledText', 'Font']
