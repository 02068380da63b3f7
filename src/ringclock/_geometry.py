"""Integer geometry value objects shared by the rasterizer and the face.

All coordinates are whole screen pixels: x grows to the right, y grows
downwards.  Nothing here does sub-pixel math.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """Integer ``(x, y)`` position or offset."""

    x: int
    y: int

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def offset(self, dx: int, dy: int) -> Point:
        """Return a copy shifted by ``(dx, dy)``."""
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: int
    y: int
    w: int
    h: int

    @classmethod
    def centered(cls, center: Point, half: int) -> Rect:
        """Square of side ``2 * half`` centred on *center*."""
        return cls(center.x - half, center.y - half, 2 * half, 2 * half)

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h


class Color(enum.IntEnum):
    """Two-tone palette; values are 8-bit grayscale levels."""

    BLACK = 0
    WHITE = 255


class TextOverflow(enum.Enum):
    """How text that does not fit its box is laid out."""

    WORD_WRAP = "word_wrap"
    TRAILING_ELLIPSIS = "trailing_ellipsis"
    FILL = "fill"


class TextAlignment(enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
