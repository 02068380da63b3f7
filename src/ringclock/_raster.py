"""Arc rasterization by half-plane tests.

An arc is the part of an annulus between two boundary rays.  Rather
than computing each pixel's angle, every pixel of the bounding square
is classified against the two rays with integer cross products:

* the **start** ray keeps the pixels the arc sweeps *into*;
* the **end** ray keeps the pixels the arc sweeps *up to*.

Both tests are the same predicate, :func:`on_swept_side`, with the
sweep direction flipped.  Angles follow screen orientation: 0 points
right, 90 points down, 270 points up; sweeps run clockwise on screen.

The scan is a brute-force walk of the ``(2r + 1)^2`` bounding square.
Radii on a watch face are tens of pixels, so nothing incremental is
attempted.

Edge-case policy:

- ``thickness`` outside ``[0, outer_radius]`` is clamped, never raised.
- ``outer_radius <= 0`` paints nothing.
- A normalised ``start > end`` is drawn as ``[start, 360]`` then
  ``[0, end]``.
- The centre offset ``(0, 0)`` has no angle and is never painted.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ringclock._angles import (
    FULL_CIRCLE,
    HALF_CIRCLE,
    cos_lookup,
    normalize_arc,
    sin_lookup,
)
from ringclock._geometry import Color, Point

if TYPE_CHECKING:
    from ringclock._surface import DrawSurface

logger = logging.getLogger(__name__)


class Sweep(enum.IntEnum):
    """Which side of a boundary ray an arc occupies."""

    INTO = 1
    """Start boundary: keep what the arc sweeps into."""

    UP_TO = -1
    """End boundary: keep what the arc sweeps up to."""


def on_swept_side(offset: Point, boundary: int, sweep: Sweep, *, start: int) -> bool:
    """Classify *offset* (relative to the arc centre) against one ray.

    Args:
        offset: Pixel offset from the arc centre.
        boundary: Normalised boundary angle; ``360`` only as an end.
        sweep: :attr:`Sweep.INTO` for the start ray,
            :attr:`Sweep.UP_TO` for the end ray.
        start: The arc's normalised start angle.  Points on the
            positive x axis belong to an arc only when it starts at
            ``0``; this tie-break is shared by both rays.

    Returns:
        ``True`` when the point lies on the swept side of the ray.
    """
    x, y = offset.x, offset.y
    sign = int(sweep)
    past_half = (boundary - HALF_CIRCLE) * sign <= 0

    if y == 0:
        if x < 0:
            return past_half
        return x > 0 and start == 0

    # Half-plane lying entirely inside the sweep.
    if y * sign < 0 and past_half:
        return True

    # Half-plane containing the ray itself.
    if (y > 0 and boundary < HALF_CIRCLE) or (y < 0 and boundary > HALF_CIRCLE):
        if boundary in (0, FULL_CIRCLE):
            # Ray on the positive x axis: its whole half-plane is swept.
            return True
        cross = y * cos_lookup(boundary) - x * sin_lookup(boundary)
        return cross * sign >= 0

    return False


def _sector(
    center: Point,
    outer_radius: int,
    thickness: int,
    start: int,
    end: int,
) -> Iterator[Point]:
    ir2 = (outer_radius - thickness) ** 2
    or2 = outer_radius**2

    for x in range(-outer_radius, outer_radius + 1):
        for y in range(-outer_radius, outer_radius + 1):
            d2 = x * x + y * y
            if not ir2 <= d2 < or2:
                continue
            offset = Point(x, y)
            if on_swept_side(
                offset, start, Sweep.INTO, start=start
            ) and on_swept_side(offset, end, Sweep.UP_TO, start=start):
                yield center + offset


def arc_pixels(
    center: Point,
    outer_radius: int,
    thickness: int,
    start: int,
    end: int,
) -> Iterator[Point]:
    """Yield the absolute pixels of an annular sector.

    Annulus membership is ``inner^2 <= d^2 < outer^2`` (inclusive inner,
    exclusive outer), with ``inner = outer_radius - thickness``.
    """
    if outer_radius <= 0:
        return
    thickness = max(0, min(thickness, outer_radius))
    start, end = normalize_arc(start, end)

    if start > end:
        yield from _sector(center, outer_radius, thickness, start, FULL_CIRCLE)
        yield from _sector(center, outer_radius, thickness, 0, end)
        return
    yield from _sector(center, outer_radius, thickness, start, end)


def draw_arc(
    surface: DrawSurface,
    center: Point,
    outer_radius: int,
    thickness: int,
    start: int,
    end: int,
    *,
    color: Color = Color.WHITE,
) -> int:
    """Paint an arc onto *surface* pixel by pixel.

    Only :meth:`DrawSurface.set_pixel` is used.

    Returns:
        The number of pixels painted.
    """
    painted = 0
    for point in arc_pixels(center, outer_radius, thickness, start, end):
        surface.set_pixel(point, color)
        painted += 1
    logger.debug(
        "Arc r=%d t=%d [%d, %d] painted %d pixels",
        outer_radius,
        thickness,
        start,
        end,
        painted,
    )
    return painted


@dataclass(frozen=True, slots=True)
class ArcSpec:
    """Transient description of one arc draw call."""

    center: Point
    outer_radius: int
    thickness: int
    start: int
    end: int

    def pixels(self) -> Iterator[Point]:
        return arc_pixels(
            self.center, self.outer_radius, self.thickness, self.start, self.end
        )

    def draw(self, surface: DrawSurface, *, color: Color = Color.WHITE) -> int:
        return draw_arc(
            surface,
            self.center,
            self.outer_radius,
            self.thickness,
            self.start,
            self.end,
            color=color,
        )
