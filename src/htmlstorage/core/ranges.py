"""
Range and style run primitives backing the attributed text buffer.
"""

from dataclasses import dataclass, field
from bisect import bisect_right
from itertools import groupby
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class TextRange:
    """A contiguous span of characters: ``length`` characters from ``location``."""
    location: int
    length: int

    def __post_init__(self) -> None:
        if self.location < 0 or self.length < 0:
            raise ValueError(f"Invalid range: location={self.location}, length={self.length}")

    @property
    def end(self) -> int:
        return self.location + self.length

    def contains(self, offset: int) -> bool:
        return self.location <= offset < self.end

    def union(self, other: 'TextRange') -> 'TextRange':
        start = min(self.location, other.location)
        return TextRange(start, max(self.end, other.end) - start)


RangeLike = Union[TextRange, Tuple[int, int]]


def as_range(value: RangeLike) -> TextRange:
    """Coerce a ``(location, length)`` tuple into a TextRange."""

    if isinstance(value, TextRange):
        return value

    location, length = value
    return TextRange(location, length)


@dataclass
class StyleRun:
    """A contiguous range of characters sharing one attribute set."""
    location: int
    length: int
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def end(self) -> int:
        return self.location + self.length

    @property
    def range(self) -> TextRange:
        return TextRange(self.location, self.length)


class RunList:
    """
    Ordered list of style runs covering ``[0, length)``.

    Runs never overlap, are never empty, and adjacent runs never share an
    identical attribute set, so every run is a maximal effective range.
    """

    def __init__(self) -> None:
        self._runs: List[StyleRun] = []
        self._starts: List[int] = []
        self.length = 0

    def __len__(self) -> int:
        return self.length

    def runs(self) -> List[StyleRun]:
        """Get a copy of the current runs."""

        return [StyleRun(run.location, run.length, dict(run.attributes)) for run in self._runs]

    def attributes_at(self, offset: int) -> Tuple[Dict[str, Any], TextRange]:
        """Get the attributes at an offset and the run containing it."""

        if not 0 <= offset < self.length:
            raise IndexError(f"Offset {offset} out of bounds for length {self.length}")

        run = self._runs[self._index_at(offset)]

        return dict(run.attributes), run.range

    def set_attributes(self, text_range: TextRange, attributes: Optional[Dict[str, Any]]) -> None:
        """Replace the attribute set over a range."""

        self._check_range(text_range)
        if not text_range.length:
            return

        start, end = self._slice(text_range)
        self._runs[start:end] = [StyleRun(text_range.location, text_range.length, dict(attributes or {}))]
        self._coalesce()

    def add_attribute(self, name: str, value: Any, text_range: TextRange) -> None:
        """Set a single attribute over a range, keeping the others."""

        self._check_range(text_range)
        if not text_range.length:
            return

        start, end = self._slice(text_range)
        for run in self._runs[start:end]:
            run.attributes[name] = value

        self._coalesce()

    def remove_attribute(self, name: str, text_range: TextRange) -> None:
        """Drop a single attribute over a range."""

        self._check_range(text_range)
        if not text_range.length:
            return

        start, end = self._slice(text_range)
        for run in self._runs[start:end]:
            run.attributes.pop(name, None)

        self._coalesce()

    def assign_attribute(self, name: str, values: Sequence[Optional[Any]]) -> None:
        """
        Set one attribute for every offset in a single pass.

        Args:
            name: The attribute to assign
            values: One value per offset; None removes the attribute there
        """

        if len(values) != self.length:
            raise ValueError(f"Expected {self.length} values, got {len(values)}")

        rebuilt: List[StyleRun] = []
        for run in self._runs:
            location = run.location
            for value, group in groupby(values[run.location:run.end]):
                length = sum(1 for _ in group)
                attributes = dict(run.attributes)
                if value is None:
                    attributes.pop(name, None)
                else:
                    attributes[name] = value

                rebuilt.append(StyleRun(location, length, attributes))
                location += length

        self._runs = rebuilt
        self._coalesce()

    def replace(self, text_range: TextRange, new_length: int, attributes: Optional[Dict[str, Any]]) -> None:
        """
        Replace the characters of a range with ``new_length`` characters.

        Args:
            text_range: The range being replaced
            new_length: Number of characters replacing it
            attributes: Attribute set carried by the new characters
        """

        self._check_range(text_range)

        start, end = self._slice(text_range)
        inserted = []
        if new_length:
            inserted.append(StyleRun(text_range.location, new_length, dict(attributes or {})))

        self._runs[start:end] = inserted
        self.length += new_length - text_range.length
        self._coalesce()

    def _check_range(self, text_range: TextRange) -> None:
        if text_range.end > self.length:
            raise IndexError(
                f"Range {text_range.location}..{text_range.end} out of bounds for length {self.length}"
            )

    def _index_at(self, offset: int) -> int:
        return bisect_right(self._starts, offset) - 1

    def _split(self, offset: int) -> int:
        """Ensure a run boundary at offset and return the index of the run starting there."""

        if offset >= self.length:
            return len(self._runs)

        index = self._index_at(offset)
        run = self._runs[index]
        if run.location == offset:
            return index

        head_length = offset - run.location
        tail = StyleRun(offset, run.length - head_length, dict(run.attributes))
        run.length = head_length
        self._runs.insert(index + 1, tail)
        self._starts.insert(index + 1, offset)

        return index + 1

    def _slice(self, text_range: TextRange) -> Tuple[int, int]:
        start = self._split(text_range.location)
        end = self._split(text_range.end)
        return start, end

    def _coalesce(self) -> None:
        merged: List[StyleRun] = []
        location = 0

        for run in self._runs:
            if not run.length:
                continue

            if merged and merged[-1].attributes == run.attributes:
                merged[-1].length += run.length
            else:
                merged.append(StyleRun(location, run.length, run.attributes))

            location += run.length

        self._runs = merged
        self._starts = [run.location for run in merged]
