"""Degree normalisation and fixed-point trigonometry.

Angles are whole degrees.  After normalisation every angle lies in the
half-open range ``[0, 360)``, with one exception: an arc *end* that
lands exactly on ``0`` is promoted to :data:`FULL_CIRCLE` so that
"all the way round" stays distinguishable from a zero-length arc.

Trigonometry comes from a precomputed table scaled by
:data:`TRIG_SCALE`.  The table is exact at multiples of 90 degrees,
which keeps the rasterizer's axis-aligned boundaries free of
floating-point residue (``sin(180)`` is ``0``, not ``1.2e-16``).
"""

from __future__ import annotations

import math

FULL_CIRCLE = 360
"""Sentinel end angle meaning "close the full circle"."""

HALF_CIRCLE = 180

TRIG_SCALE = 1 << 16
"""Fixed-point scale of :func:`sin_lookup` / :func:`cos_lookup`."""

_SIN_TABLE: tuple[int, ...] = tuple(
    round(math.sin(math.radians(deg)) * TRIG_SCALE) for deg in range(FULL_CIRCLE)
)


def normalize(deg: int) -> int:
    """Reduce *deg* into ``[0, 360)``."""
    deg %= FULL_CIRCLE
    while deg < 0:
        deg += FULL_CIRCLE
    return deg


def normalize_arc(start: int, end: int) -> tuple[int, int]:
    """Normalise a start/end pair independently.

    The end angle gets the full-circle promotion (``0 -> 360``); the
    start angle never does.

    Example::

        >>> normalize_arc(-90, 720)
        (270, 360)
    """
    start = normalize(start)
    end = normalize(end)
    if end == 0:
        end = FULL_CIRCLE
    return start, end


def sin_lookup(deg: int) -> int:
    """Fixed-point sine of a whole-degree angle (any integer accepted)."""
    return _SIN_TABLE[deg % FULL_CIRCLE]


def cos_lookup(deg: int) -> int:
    """Fixed-point cosine of a whole-degree angle (any integer accepted)."""
    return _SIN_TABLE[(deg + 90) % FULL_CIRCLE]


def scale_lookup(value: int, radius: int) -> int:
    """Scale a fixed-point trig value to *radius*, truncating toward zero."""
    scaled = abs(value) * radius // TRIG_SCALE
    return scaled if value >= 0 else -scaled
