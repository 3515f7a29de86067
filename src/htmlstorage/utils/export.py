"""
Rendering of a highlighted buffer through Pygments formatters.
"""

from itertools import groupby
from typing import Any, Dict, Final, Iterator, List, Optional, Tuple, Type

from pygments import format as format_tokens
from pygments.formatter import Formatter
from pygments.formatters import HtmlFormatter, Terminal256Formatter
from pygments.style import Style
from pygments.token import Comment, Name, String, Text, Token

from ..core.buffer import TextBuffer
from ..core.syntax import SPAN_COMMENT, SPAN_QUOTED, SPAN_TAG

SPAN_TOKENS: Final[Dict[str, Any]] = {
    SPAN_TAG: Name.Tag,
    SPAN_QUOTED: String,
    SPAN_COMMENT: Comment,
}


def build_style(buffer: TextBuffer) -> Type[Style]:
    """Build a Pygments style from the buffer's current colors."""

    return type('TextBufferStyle', (Style,), {
        'styles': {
            Token: '',
            Name.Tag: buffer.tag_color,
            String: buffer.quoted_color,
            Comment: buffer.comment_color,
        },
    })


def iter_tokens(buffer: TextBuffer) -> Iterator[Tuple[Any, str]]:
    """
    Split the buffer text into Pygments tokens.

    Overlapping spans resolve the same way colorization does: the last
    classified span covering a character decides its token.
    """

    text = buffer.text
    kinds: List[Optional[str]] = [None] * len(text)

    for span, kind in buffer.colorizer.classify(text):
        kinds[span.location:span.end] = [kind] * span.length

    for kind, group in groupby(zip(kinds, text), key=lambda pair: pair[0]):
        yield SPAN_TOKENS.get(kind, Text), ''.join(char for _, char in group)


def highlight(buffer: TextBuffer, formatter: Formatter) -> str:
    """Render the buffer with any Pygments formatter."""

    return format_tokens(iter_tokens(buffer), formatter)


def to_html(buffer: TextBuffer, full: bool = False) -> str:
    """
    Render the buffer as highlighted HTML.

    Args:
        buffer: The buffer to render
        full: Whether to produce a standalone document with embedded CSS

    Returns:
        The HTML markup
    """

    return highlight(buffer, HtmlFormatter(style=build_style(buffer), full=full))


def to_terminal(buffer: TextBuffer) -> str:
    """Render the buffer with 256-color terminal escapes."""

    return highlight(buffer, Terminal256Formatter(style=build_style(buffer)))
