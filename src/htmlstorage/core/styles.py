"""
Attribute names, fonts and colors used by the highlighting buffer.
"""

import re
from dataclasses import dataclass
from typing import Final, Tuple

FONT: Final[str] = 'font'
FOREGROUND_COLOR: Final[str] = 'color'


@dataclass(frozen=True)
class Font:
    """A font description; the host decides how to realize it."""
    family: str = 'monospace'
    size: float = 14.0


DEFAULT_FONT: Final[Font] = Font()

# Some hosts instantiate a second, throwaway editing surface during paste and
# draw it on top of the active one. A tiny base font keeps that surface from
# rendering anything visible.
FALLBACK_FONT: Final[Font] = Font('system', 4.0)

DEFAULT_TAG_COLOR: Final[str] = '#0075B6'
DEFAULT_QUOTED_COLOR: Final[str] = '#6E96B1'
DEFAULT_COMMENT_COLOR: Final[str] = '#AAAAAA'  # Light gray

HEX_COLOR_PATTERN: Final[str] = r'#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})'


def parse_color(value: str) -> str:
    """
    Validate and normalize a hex color.

    Args:
        value: Color in ``#RGB`` or ``#RRGGBB`` notation

    Returns:
        The color as upper-case ``#RRGGBB``

    Raises:
        ValueError: If the value is not a hex color
    """

    if not isinstance(value, str) or not re.fullmatch(HEX_COLOR_PATTERN, value):
        raise ValueError(f"Invalid color: {value!r}. Expected #RGB or #RRGGBB")

    digits = value[1:]
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)

    return '#' + digits.upper()


def color_to_rgb(value: str) -> Tuple[int, int, int]:
    """Split a hex color into its red, green and blue components."""

    digits = parse_color(value)[1:]
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
