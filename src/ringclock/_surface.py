"""Draw surface port and adapters.

Provides DrawSurface (Protocol) and two implementations:

- ImageSurface — Pillow-backed 8-bit grayscale canvas
- RecordingSurface — test double that records every call

The rasterizer only ever calls ``set_pixel``; the face renderer uses the
full surface.  Pixels outside the canvas are clipped silently, the way
a display driver clips.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from PIL import Image, ImageDraw, ImageFont, ImageOps

from ringclock._geometry import Color, Point, Rect, TextAlignment, TextOverflow

logger = logging.getLogger(__name__)

_ELLIPSIS = "..."

FontHandle = Any
"""Opaque font handle; for :class:`ImageSurface` a Pillow font or ``None``."""

# ---------------------------------------------------------------------------
# Port (Protocol)
# ---------------------------------------------------------------------------


@runtime_checkable
class DrawSurface(Protocol):
    """Port contract for a render target borrowed for one render pass."""

    def set_pixel(self, point: Point, color: Color) -> None: ...

    def fill_circle(self, center: Point, radius: int, color: Color) -> None: ...

    def fill_rect(self, rect: Rect, corner_radius: int, color: Color) -> None: ...

    def draw_text(
        self,
        text: str,
        font: FontHandle,
        rect: Rect,
        overflow: TextOverflow,
        alignment: TextAlignment,
        color: Color = Color.WHITE,
    ) -> None: ...


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------


def load_font(path: str | None, size: int) -> FontHandle:
    """Load a TrueType font, or Pillow's built-in font when *path* is unset."""
    if path is None:
        return ImageFont.load_default()
    logger.debug("Loading font %s at %dpx", path, size)
    return ImageFont.truetype(path, size)


# ---------------------------------------------------------------------------
# Pillow adapter
# ---------------------------------------------------------------------------


class ImageSurface:
    """Grayscale Pillow canvas implementing :class:`DrawSurface`.

    Usage::

        surface = ImageSurface(144, 168)
        draw_arc(surface, Point(72, 74), 55, 55, 270, 360)
        surface.to_image().save("face.png")
    """

    def __init__(
        self, width: int, height: int, background: Color = Color.BLACK
    ) -> None:
        self._image = Image.new("L", (width, height), int(background))
        self._draw = ImageDraw.Draw(self._image)
        # Two-tone display: no antialiased glyph edges.
        self._draw.fontmode = "1"

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def contains(self, point: Point) -> bool:
        width, height = self._image.size
        return 0 <= point.x < width and 0 <= point.y < height

    def get_pixel(self, point: Point) -> Color:
        return Color(self._image.getpixel((point.x, point.y)))

    def set_pixel(self, point: Point, color: Color) -> None:
        if self.contains(point):
            self._image.putpixel((point.x, point.y), int(color))

    def fill_circle(self, center: Point, radius: int, color: Color) -> None:
        if radius < 0:
            return
        self._draw.ellipse(
            (
                center.x - radius,
                center.y - radius,
                center.x + radius,
                center.y + radius,
            ),
            fill=int(color),
        )

    def fill_rect(self, rect: Rect, corner_radius: int, color: Color) -> None:
        if rect.w <= 0 or rect.h <= 0:
            return
        box = (rect.x, rect.y, rect.right - 1, rect.bottom - 1)
        if corner_radius > 0:
            self._draw.rounded_rectangle(box, radius=corner_radius, fill=int(color))
        else:
            self._draw.rectangle(box, fill=int(color))

    def draw_text(
        self,
        text: str,
        font: FontHandle,
        rect: Rect,
        overflow: TextOverflow,
        alignment: TextAlignment,
        color: Color = Color.WHITE,
    ) -> None:
        font = font if font is not None else ImageFont.load_default()
        line_height = self._draw.textbbox((0, 0), "Ag", font=font)[3]
        max_lines = max(1, rect.h // line_height) if line_height > 0 else 1
        lines = self._layout(text, font, rect.w, overflow, max_lines)

        y = rect.y
        for line in lines:
            width = self._draw.textlength(line, font=font)
            if alignment is TextAlignment.CENTER:
                x = rect.x + (rect.w - width) / 2
            elif alignment is TextAlignment.RIGHT:
                x = rect.right - width
            else:
                x = rect.x
            self._draw.text((x, y), line, font=font, fill=int(color))
            y += line_height

    def to_image(self, *, inverted: bool = False) -> Image.Image:
        """Return a copy of the canvas, optionally with tones inverted."""
        if inverted:
            return ImageOps.invert(self._image)
        return self._image.copy()

    # -- Internal -----------------------------------------------------------

    def _fits(self, line: str, font: FontHandle, width: int) -> bool:
        return self._draw.textlength(line, font=font) <= width

    def _layout(
        self,
        text: str,
        font: FontHandle,
        width: int,
        overflow: TextOverflow,
        max_lines: int,
    ) -> list[str]:
        if overflow is TextOverflow.FILL:
            return [" ".join(text.split())]

        lines: list[str] = []
        current = ""
        for word in text.split():
            candidate = f"{current} {word}" if current else word
            if current and not self._fits(candidate, font, width):
                lines.append(current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(current)

        if len(lines) <= max_lines:
            return lines
        kept = lines[:max_lines]
        if overflow is TextOverflow.TRAILING_ELLIPSIS:
            last = kept[-1]
            while last and not self._fits(last + _ELLIPSIS, font, width):
                last = last[:-1]
            kept[-1] = last.rstrip() + _ELLIPSIS
        return kept


# ---------------------------------------------------------------------------
# Recording / test-double adapter
# ---------------------------------------------------------------------------


@dataclass
class RecordingSurface:
    """In-memory test double that records draw calls.

    Pixels are kept in a dict, so painting the same point twice keeps
    the last colour; ``pixel_writes`` counts every call.  Primitive
    calls are recorded as tuples in ``calls``.
    """

    pixels: dict[Point, Color] = field(default_factory=dict)
    pixel_writes: int = 0
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def set_pixel(self, point: Point, color: Color) -> None:
        self.pixels[point] = color
        self.pixel_writes += 1

    def fill_circle(self, center: Point, radius: int, color: Color) -> None:
        self.calls.append(("fill_circle", center, radius, color))

    def fill_rect(self, rect: Rect, corner_radius: int, color: Color) -> None:
        self.calls.append(("fill_rect", rect, corner_radius, color))

    def draw_text(
        self,
        text: str,
        font: FontHandle,
        rect: Rect,
        overflow: TextOverflow,
        alignment: TextAlignment,
        color: Color = Color.WHITE,
    ) -> None:
        self.calls.append(("draw_text", text, rect, overflow, alignment, color))

    def painted(self, color: Color | None = None) -> set[Point]:
        """Points whose last recorded colour is *color* (any when ``None``)."""
        return {p for p, c in self.pixels.items() if color is None or c == color}

    def calls_named(self, name: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    @property
    def texts(self) -> list[str]:
        return [call[1] for call in self.calls_named("draw_text")]

    def reset(self) -> None:
        """Clear all recorded state."""
        self.pixels.clear()
        self.pixel_writes = 0
        self.calls.clear()
