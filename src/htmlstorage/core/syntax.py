"""
HTML colorization pass for the text buffer.

Every pass runs over the entire text. Colors are layered in a fixed order,
each layer overriding the previous one where they overlap:

    base (no color) < tags < quoted values inside tags < comments

Comments go last because their bodies may contain '<' and '>' characters the
tag pattern would pick up.
"""

import logging
from typing import Dict, Final, List, Optional, Tuple, TYPE_CHECKING

from .patterns import PatternMatcher, TAG_MATCHER, QUOTED_MATCHER, COMMENT_MATCHER
from .ranges import TextRange
from .styles import FONT, FOREGROUND_COLOR

if TYPE_CHECKING:
    from .buffer import TextBuffer

logger = logging.getLogger(__name__)

SPAN_TAG: Final[str] = 'tag'
SPAN_QUOTED: Final[str] = 'quoted'
SPAN_COMMENT: Final[str] = 'comment'

SPAN_KINDS: Final[Tuple[str, ...]] = (SPAN_TAG, SPAN_QUOTED, SPAN_COMMENT)


class HTMLColorizer:
    """Applies tag, quote and comment colors to a TextBuffer."""

    def __init__(self,
                 tag_matcher: PatternMatcher = TAG_MATCHER,
                 quoted_matcher: PatternMatcher = QUOTED_MATCHER,
                 comment_matcher: PatternMatcher = COMMENT_MATCHER) -> None:
        self.tag_matcher = tag_matcher
        self.quoted_matcher = quoted_matcher
        self.comment_matcher = comment_matcher

    def classify(self, text: str) -> List[Tuple[TextRange, str]]:
        """
        Classify the spans of a text in the order their colors are applied.

        Later entries override earlier ones where they overlap.

        Args:
            text: The text to classify

        Returns:
            A list of (range, kind) tuples, kind being one of SPAN_KINDS
        """

        spans = []

        for tag in self.tag_matcher.find_all(text):
            spans.append((tag, SPAN_TAG))

            for quote in self.quoted_matcher.find_all(text, tag):
                spans.append((quote, SPAN_QUOTED))

        for comment in self.comment_matcher.find_all(text):
            spans.append((comment, SPAN_COMMENT))

        return spans

    def colorize(self, buffer: 'TextBuffer') -> int:
        """
        Recompute the color attributes of the whole buffer.

        Uses the buffer's low-level attribute mutators, so it can run in the
        middle of an edit transaction without opening another one. The
        layered spans are resolved into one color per offset first, and
        written back in a single pass over the style runs.

        Returns:
            The number of colored spans applied
        """

        full_range = TextRange(0, len(buffer))

        buffer.add_attribute(FONT, buffer.font, full_range)

        colors: Dict[str, str] = {
            SPAN_TAG: buffer.tag_color,
            SPAN_QUOTED: buffer.quoted_color,
            SPAN_COMMENT: buffer.comment_color,
        }

        # None leaves an offset uncolored
        layered: List[Optional[str]] = [None] * full_range.length

        spans = self.classify(buffer.text)
        for span, kind in spans:
            layered[span.location:span.end] = [colors[kind]] * span.length

        buffer.assign_attribute(FOREGROUND_COLOR, layered)

        logger.debug("Colorized %d characters: %d spans", full_range.length, len(spans))

        return len(spans)
