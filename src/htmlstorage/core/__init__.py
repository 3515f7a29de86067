"""
Core package for the highlighting text buffer.

This package implements the core functionality: the TextBuffer holding HTML
source and its style runs, the patterns classifying tags, quoted values and
comments, and the HTMLColorizer that recomputes colors after every edit.
"""

from .buffer import (
    TextBuffer,
    StyledText,
    EditEvent,
    EditMask,
    HTMLStorageError,
    UnsupportedRepresentationError,
)
from .ranges import TextRange, StyleRun
from .styles import Font, FONT, FOREGROUND_COLOR
from .syntax import HTMLColorizer

__all__ = [
    'TextBuffer',
    'StyledText',
    'EditEvent',
    'EditMask',
    'HTMLStorageError',
    'UnsupportedRepresentationError',
    'TextRange',
    'StyleRun',
    'Font',
    'FONT',
    'FOREGROUND_COLOR',
    'HTMLColorizer',
]
