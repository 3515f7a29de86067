"""
Buffer module holding HTML source text and its live highlighting attributes.
"""

import enum
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .ranges import RangeLike, RunList, StyleRun, TextRange, as_range
from .styles import (
    DEFAULT_COMMENT_COLOR,
    DEFAULT_QUOTED_COLOR,
    DEFAULT_TAG_COLOR,
    FALLBACK_FONT,
    Font,
    parse_color,
)
from .syntax import HTMLColorizer

logger = logging.getLogger(__name__)


class HTMLStorageError(Exception):
    """Base class for errors raised by htmlstorage."""


class UnsupportedRepresentationError(HTMLStorageError, NotImplementedError):
    """Raised when building a buffer from a representation with no defined mapping."""


class EditMask(enum.IntFlag):
    """What an edit transaction changed."""
    ATTRIBUTES = 1
    CHARACTERS = 2


@dataclass(frozen=True)
class EditEvent:
    """Notification sent to observers when an edit transaction completes."""
    mask: EditMask
    range: TextRange
    delta: int


@dataclass(frozen=True)
class StyledText:
    """Text carrying the attribute set it should be inserted with."""
    text: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.text)


EditObserver = Callable[[EditEvent], None]


class TextBuffer:
    """
    Text buffer that colorizes the HTML it contains after every edit.

    Mutations run inside edit transactions. When the outermost transaction
    ends, the buffer runs one colorization pass over its whole text and then
    notifies observers of the edited range and the change in length.
    """

    def __init__(self, font: Optional[Font] = None, colorizer: Optional[HTMLColorizer] = None) -> None:
        self._text = ''
        self._runs = RunList()

        self.font = font if font is not None else FALLBACK_FONT
        self._tag_color = DEFAULT_TAG_COLOR
        self._quoted_color = DEFAULT_QUOTED_COLOR
        self._comment_color = DEFAULT_COMMENT_COLOR

        self.colorizer = colorizer or HTMLColorizer()
        self._observers: List[EditObserver] = []

        self._edit_depth = 0
        self._pending_mask = EditMask(0)
        self._pending_range: Optional[TextRange] = None
        self._pending_delta = 0

    @classmethod
    def from_archive(cls, data: bytes) -> 'TextBuffer':
        """Archived buffers cannot be restored."""

        logger.warning("Refusing to restore TextBuffer from archive (%d bytes)", len(data))
        raise UnsupportedRepresentationError("TextBuffer cannot be restored from an archive")

    @classmethod
    def from_item_provider(cls, data: bytes, type_identifier: str) -> 'TextBuffer':
        """Pasted item payloads cannot be turned into a buffer."""

        logger.warning("Refusing to build TextBuffer from pasted item of type %s", type_identifier)
        raise UnsupportedRepresentationError(
            f"TextBuffer cannot be built from a pasted item of type {type_identifier!r}"
        )

    # Style configuration. Changing a value does not recolor the buffer;
    # it takes effect on the next pass.

    @property
    def tag_color(self) -> str:
        return self._tag_color

    @tag_color.setter
    def tag_color(self, value: str) -> None:
        self._tag_color = parse_color(value)

    @property
    def quoted_color(self) -> str:
        return self._quoted_color

    @quoted_color.setter
    def quoted_color(self, value: str) -> None:
        self._quoted_color = parse_color(value)

    @property
    def comment_color(self) -> str:
        return self._comment_color

    @comment_color.setter
    def comment_color(self, value: str) -> None:
        self._comment_color = parse_color(value)

    # Queries

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def attributes_at(self, offset: int) -> Tuple[Dict[str, Any], TextRange]:
        """
        Get the attributes at an offset.

        Args:
            offset: Character offset to query

        Returns:
            The attribute set and the maximal range sharing it. An empty
            buffer yields an empty set and an empty range.
        """

        if not self._text:
            return {}, TextRange(0, 0)

        return self._runs.attributes_at(offset)

    def runs(self) -> List[StyleRun]:
        """Get the current style runs, in text order."""

        return self._runs.runs()

    # Observers

    def add_observer(self, observer: EditObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: EditObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # Edit transactions

    def begin_editing(self) -> None:
        self._edit_depth += 1

    def end_editing(self) -> None:
        """Close a transaction, processing pending edits if it was the outermost one."""

        if self._edit_depth == 0:
            raise RuntimeError("end_editing() called without a matching begin_editing()")

        self._edit_depth -= 1
        if self._edit_depth or not self._pending_mask:
            return

        event = EditEvent(self._pending_mask, self._pending_range or TextRange(0, 0), self._pending_delta)
        self._pending_mask = EditMask(0)
        self._pending_range = None
        self._pending_delta = 0

        self.process_editing()

        logger.debug("Edit processed: mask=%s range=%s delta=%d", event.mask, event.range, event.delta)

        for observer in list(self._observers):
            observer(event)

    @contextmanager
    def editing(self) -> Iterator['TextBuffer']:
        """Run a block inside one edit transaction."""

        self.begin_editing()
        try:
            yield self
        finally:
            self.end_editing()

    def edited(self, mask: EditMask, text_range: TextRange, delta: int) -> None:
        """
        Record an edit in the current transaction.

        Args:
            mask: What was changed
            text_range: The range that was changed, in pre-edit coordinates
            delta: Change in text length caused by the edit
        """

        new_length = text_range.length + delta
        edited_range = TextRange(text_range.location, new_length)

        def map_offset(offset: int) -> int:
            # Offsets inside the replaced span collapse into the new text
            if offset <= text_range.location:
                return offset
            if offset >= text_range.end:
                return offset + delta
            return min(offset, text_range.location + new_length)

        if self._pending_range is not None:
            start = map_offset(self._pending_range.location)
            end = map_offset(self._pending_range.end)
            edited_range = edited_range.union(TextRange(start, end - start))

        self._pending_mask |= mask
        self._pending_range = edited_range
        self._pending_delta += delta

    def process_editing(self) -> None:
        """Recolorize the whole buffer; runs once per completed transaction."""

        self.colorizer.colorize(self)

    def recolorize(self) -> None:
        """Apply the current style configuration without editing the text."""

        with self.editing():
            self.edited(EditMask.ATTRIBUTES, TextRange(0, len(self._text)), 0)

    # Attribute mutators

    def set_attributes(self, text_range: RangeLike, attributes: Optional[Dict[str, Any]]) -> None:
        """Replace the attribute set over a range, as its own transaction."""

        text_range = as_range(text_range)
        self._check_range(text_range)

        with self.editing():
            self._runs.set_attributes(text_range, attributes)
            self.edited(EditMask.ATTRIBUTES, text_range, 0)

    def add_attribute(self, name: str, value: Any, text_range: RangeLike) -> None:
        self._runs.add_attribute(name, value, as_range(text_range))

    def remove_attribute(self, name: str, text_range: RangeLike) -> None:
        self._runs.remove_attribute(name, as_range(text_range))

    def assign_attribute(self, name: str, values: Sequence[Optional[Any]]) -> None:
        """Set one attribute per offset across the whole buffer; None removes it."""

        self._runs.assign_attribute(name, values)

    # Character mutators

    def replace_characters(self, text_range: RangeLike, replacement: Union[str, StyledText]) -> None:
        """
        Replace the characters in a range.

        Plain text inherits the attributes of the first replaced character,
        or of its neighbour when inserting. Styled text keeps its own.

        Args:
            text_range: The range to replace
            replacement: Plain or styled text to put in its place
        """

        text_range = as_range(text_range)
        self._check_range(text_range)

        if isinstance(replacement, StyledText):
            new_text = replacement.text
            attributes = replacement.attributes
        else:
            new_text = replacement
            attributes = self._inherited_attributes(text_range)

        with self.editing():
            self._text = self._text[:text_range.location] + new_text + self._text[text_range.end:]
            self._runs.replace(text_range, len(new_text), attributes)
            self.edited(EditMask.ATTRIBUTES | EditMask.CHARACTERS, text_range, len(new_text) - text_range.length)

    def insert(self, offset: int, text: Union[str, StyledText]) -> None:
        self.replace_characters(TextRange(offset, 0), text)

    def delete(self, text_range: RangeLike) -> None:
        self.replace_characters(text_range, '')

    def append(self, text: Union[str, StyledText]) -> None:
        self.insert(len(self._text), text)

    def set_text(self, text: str) -> None:
        """Replace the entire content of the buffer."""

        self.replace_characters(TextRange(0, len(self._text)), text)

    def _inherited_attributes(self, text_range: TextRange) -> Dict[str, Any]:
        if not self._text:
            return {}

        if text_range.length:
            offset = text_range.location
        elif text_range.location > 0:
            offset = text_range.location - 1
        else:
            offset = 0

        attributes, _ = self._runs.attributes_at(offset)
        return attributes

    def _check_range(self, text_range: TextRange) -> None:
        if text_range.end > len(self._text):
            raise IndexError(
                f"Range {text_range.location}..{text_range.end} out of bounds for length {len(self._text)}"
            )
