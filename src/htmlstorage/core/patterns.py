"""
Textual patterns classifying inline HTML: tags, quoted values and comments.
"""

import re
from typing import Final, List, Optional

from .ranges import TextRange

TAG_PATTERN: Final[str] = r'<[^>]+>'
QUOTED_PATTERN: Final[str] = r'".*?"'
COMMENT_PATTERN: Final[str] = r'<!--.+?-->'


class PatternMatcher:
    """Finds the non-overlapping matches of one pattern in a piece of text."""

    def __init__(self, name: str, pattern: str, flags: int = 0) -> None:
        self.name = name
        self.regex = re.compile(pattern, flags | re.IGNORECASE)

    def find_all(self, text: str, search_range: Optional[TextRange] = None) -> List[TextRange]:
        """
        Find every match of the pattern inside a search range.

        Args:
            text: The text to search
            search_range: Part of the text to search; the whole text if None

        Returns:
            The match ranges, in text order
        """

        if search_range is None:
            start, end = 0, len(text)
        else:
            start = min(search_range.location, len(text))
            end = min(search_range.end, len(text))

        return [
            TextRange(match.start(), match.end() - match.start())
            for match in self.regex.finditer(text, start, end)
        ]

    def __repr__(self) -> str:
        return f"PatternMatcher({self.name!r}, {self.regex.pattern!r})"


TAG_MATCHER: Final[PatternMatcher] = PatternMatcher('tag', TAG_PATTERN)
QUOTED_MATCHER: Final[PatternMatcher] = PatternMatcher('quoted', QUOTED_PATTERN)
# Comment bodies may span lines and contain '<' or '>'.
COMMENT_MATCHER: Final[PatternMatcher] = PatternMatcher('comment', COMMENT_PATTERN, re.DOTALL)
