"""
Utility package for rendering and logging support.
"""

from .export import build_style, iter_tokens, highlight, to_html, to_terminal
from .logging_config import setup_logger

__all__ = [
    'build_style',
    'iter_tokens',
    'highlight',
    'to_html',
    'to_terminal',
    'setup_logger'
]
