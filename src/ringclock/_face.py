"""Clock face composition: state, angles, and the render pass.

Three layers, each usable on its own:

* Pure angle helpers — :func:`minutes_angle`, :func:`hours_angle`,
  :func:`hand_arcs`, :func:`marker_points`.
* :func:`render_face` — one render pass over a :class:`ClockState`
  snapshot onto any :class:`~ringclock._surface.DrawSurface`.
* :class:`ClockFaceComposer` — owns the state, reacts to provider
  events, and raises a redraw request.  Event handlers never draw;
  a separate render pass consumes the latest state, so any number of
  changes between two passes collapse into one frame.

Hand angles use arc orientation (0 = right, 270 = up, clockwise).
Dot positions use clock orientation (0 = up, clockwise).
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from ringclock._angles import FULL_CIRCLE, cos_lookup, scale_lookup, sin_lookup
from ringclock._clock import ClockPort, TimeOfDay
from ringclock._connectivity import ConnectivityPort
from ringclock._errors import MissingProviderError
from ringclock._geometry import Color, Point, Rect, TextAlignment, TextOverflow
from ringclock._gestures import GesturePort
from ringclock._raster import draw_arc
from ringclock._timers import TimerService

if TYPE_CHECKING:
    from ringclock._settings import FaceSettings
    from ringclock._surface import DrawSurface, FontHandle

logger = logging.getLogger(__name__)

TWELVE_O_CLOCK = 270
"""Arc angle pointing straight up."""

MARKER_COUNT = 12

DEFAULT_MARKER_DELAY_S = 3.0

# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FaceLayout:
    """Pixel geometry of the face."""

    width: int = 144
    height: int = 168
    center: Point = Point(72, 74)
    outer_radius: int = 65
    outer_thickness: int = 4
    inner_radius: int = 55
    dot_radius: int = 6
    date_rect: Rect = Rect(0, 142, 144, 23)

    @classmethod
    def from_settings(cls, face: FaceSettings) -> FaceLayout:
        return cls(
            width=face.width,
            height=face.height,
            center=Point(face.center_x, face.center_y),
            outer_radius=face.outer_radius,
            outer_thickness=face.outer_thickness,
            inner_radius=face.inner_radius,
            dot_radius=face.dot_radius,
            date_rect=Rect(0, face.date_top, face.width, face.date_height),
        )

    @property
    def bounds(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    @property
    def pointer_radius(self) -> int:
        """Distance of the hour pointer dot from the centre."""
        return self.outer_radius - self.outer_thickness // 2

    @property
    def marker_radius(self) -> int:
        """Distance of the hour marker dots from the centre."""
        return self.pointer_radius - 1


@dataclass(frozen=True, slots=True)
class ClockState:
    """Everything a render pass needs to know."""

    hour: int = 0
    minute: int = 0
    bluetooth_connected: bool = False
    markers_visible: bool = False
    date_label: str = ""


class MarkerState(enum.Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


# ---------------------------------------------------------------------------
# Angle helpers
# ---------------------------------------------------------------------------


def minutes_angle(minute: int) -> int:
    """Sweep of the minute wedge: 0..354 in steps of 6."""
    return 360 * minute // 60


def hours_angle(hour: int, minute: int) -> int:
    """Sweep of the hour ring, advancing with the minutes: 0..359."""
    return 360 * ((hour % 12) * 60 + minute) // (12 * 60)


def hand_arcs(angle: int) -> list[tuple[int, int]]:
    """Split a sweep from twelve o'clock into rasterizer-safe arcs.

    No arc returned ever crosses the 0/360 seam.

    Example::

        >>> hand_arcs(90)
        [(270, 360)]
        >>> hand_arcs(270)
        [(270, 360), (0, 180)]
    """
    if angle <= 90:
        return [(TWELVE_O_CLOCK, TWELVE_O_CLOCK + angle)]
    return [(TWELVE_O_CLOCK, FULL_CIRCLE), (0, angle - 90)]


def dial_point(center: Point, radius: int, angle: int) -> Point:
    """Point at *radius* from *center*, *angle* degrees clockwise from twelve."""
    return Point(
        center.x + scale_lookup(sin_lookup(angle), radius),
        center.y - scale_lookup(cos_lookup(angle), radius),
    )


def marker_points(center: Point, radius: int) -> list[Point]:
    """The twelve hour-marker positions, twelve o'clock first."""
    step = FULL_CIRCLE // MARKER_COUNT
    return [dial_point(center, radius, i * step) for i in range(MARKER_COUNT)]


def format_date(weekday_name: str, day_of_month: int) -> str:
    """Date label such as ``"SUN 05"``."""
    return f"{weekday_name[:3].upper()} {day_of_month:02d}"


# ---------------------------------------------------------------------------
# Render pass
# ---------------------------------------------------------------------------


def _draw_hand(
    surface: DrawSurface,
    center: Point,
    radius: int,
    thickness: int,
    angle: int,
) -> None:
    for start, end in hand_arcs(angle):
        draw_arc(surface, center, radius, thickness, start, end, color=Color.WHITE)


def _draw_connectivity(
    surface: DrawSurface, center: Point, dot: int, connected: bool
) -> None:
    if connected:
        surface.fill_circle(center, dot + 3, Color.BLACK)
        surface.fill_circle(center, dot, Color.WHITE)
        surface.fill_circle(center, dot - 2, Color.BLACK)
    else:
        surface.fill_rect(Rect.centered(center, dot + 4), 0, Color.BLACK)
        surface.fill_rect(Rect.centered(center, dot), 0, Color.WHITE)
        surface.fill_rect(Rect.centered(center, dot - 2), 0, Color.BLACK)


def render_face(
    surface: DrawSurface,
    state: ClockState,
    layout: FaceLayout,
    font: FontHandle = None,
) -> None:
    """Draw one complete frame of *state* onto *surface*."""
    center = layout.center
    dot = layout.dot_radius

    surface.fill_rect(layout.bounds, 0, Color.BLACK)

    _draw_hand(
        surface,
        center,
        layout.inner_radius,
        layout.inner_radius,
        minutes_angle(state.minute),
    )
    _draw_hand(
        surface,
        center,
        layout.outer_radius,
        layout.outer_thickness,
        hours_angle(state.hour, state.minute),
    )
    # Round off the ring's start at twelve o'clock.
    surface.set_pixel(center.offset(-1, -layout.outer_radius + 2), Color.WHITE)
    surface.set_pixel(center.offset(-1, -layout.outer_radius + 3), Color.WHITE)

    if state.markers_visible:
        for point in marker_points(center, layout.marker_radius):
            surface.fill_circle(point, dot - 2, Color.WHITE)
        ring = layout.outer_radius + 5
        draw_arc(surface, center, ring, 5, 0, FULL_CIRCLE, color=Color.BLACK)

    hour_angle = hours_angle(state.hour, state.minute)
    pointer = dial_point(center, layout.pointer_radius, hour_angle)
    surface.fill_circle(pointer, dot, Color.WHITE)
    if state.hour >= 12:
        surface.fill_circle(pointer, dot - 2, Color.BLACK)

    _draw_connectivity(surface, center, dot, state.bluetooth_connected)

    surface.draw_text(
        state.date_label,
        font,
        layout.date_rect,
        TextOverflow.WORD_WRAP,
        TextAlignment.CENTER,
        Color.WHITE,
    )


# ---------------------------------------------------------------------------
# Composer
# ---------------------------------------------------------------------------


class ClockFaceComposer:
    """Owns :class:`ClockState` and turns provider events into redraws.

    Handlers only update state and raise the redraw request; call
    :meth:`render` to paint.  All handlers assume serialised delivery
    from a single event loop.

    Marker visibility is a two-state machine: a tap while hidden shows
    the markers and schedules exactly one timer; taps while visible are
    ignored; the timer hides them again.

    Args:
        clock: Source of the time of day.
        connectivity: Phone-link state and change notifications.
        gestures: Tap events.
        timers: One-shot timer service for hiding the markers.
        layout: Face geometry.
        marker_delay: Seconds the markers stay visible.
        on_redraw: Called every time a redraw is requested.
        font: Font handle for the date label.

    Raises:
        MissingProviderError: If any provider is ``None``.
    """

    def __init__(
        self,
        *,
        clock: ClockPort,
        connectivity: ConnectivityPort,
        gestures: GesturePort,
        timers: TimerService,
        layout: FaceLayout | None = None,
        marker_delay: float = DEFAULT_MARKER_DELAY_S,
        on_redraw: Callable[[], None] | None = None,
        font: FontHandle = None,
    ) -> None:
        providers = {
            "clock": clock,
            "connectivity": connectivity,
            "gesture": gestures,
            "timer": timers,
        }
        for name, provider in providers.items():
            if provider is None:
                raise MissingProviderError(name)

        self._clock = clock
        self._connectivity = connectivity
        self._gestures = gestures
        self._timers = timers
        self._layout = layout if layout is not None else FaceLayout()
        self._marker_delay = marker_delay
        self._on_redraw = on_redraw
        self._font = font

        self._state = ClockState()
        self._marker_timer: Any = None
        self._redraw_requested = False
        self._started = False

    # -- Read-only properties -----------------------------------------------

    @property
    def state(self) -> ClockState:
        """Latest state snapshot."""
        return self._state

    @property
    def layout(self) -> FaceLayout:
        return self._layout

    @property
    def marker_state(self) -> MarkerState:
        if self._state.markers_visible:
            return MarkerState.VISIBLE
        return MarkerState.HIDDEN

    @property
    def marker_timer_pending(self) -> bool:
        return self._marker_timer is not None

    @property
    def redraw_requested(self) -> bool:
        return self._redraw_requested

    # -- Lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Seed state from the providers and subscribe to their events."""
        if self._started:
            logger.debug("ClockFaceComposer.start() called while already running")
            return
        self._started = True
        connected = self._connectivity.is_connected()
        self._state = replace(self._state, bluetooth_connected=connected)
        self.handle_tick(self._clock.now())
        self._connectivity.subscribe(self.handle_connectivity)
        self._gestures.subscribe(self.handle_tap)
        logger.info(
            "Clock face started at %02d:%02d (connected=%s)",
            self._state.hour,
            self._state.minute,
            self._state.bluetooth_connected,
        )

    def stop(self) -> None:
        """Unsubscribe and cancel a pending marker timer without firing it.

        Markers shown by that timer are hidden, so a later ``start()``
        begins with them hidden.  Idempotent.
        """
        if self._marker_timer is not None:
            self._timers.cancel(self._marker_timer)
            self._marker_timer = None
            self._state = replace(self._state, markers_visible=False)
            logger.debug("Pending marker timer canceled")
        if self._started:
            self._connectivity.unsubscribe(self.handle_connectivity)
            self._gestures.unsubscribe(self.handle_tap)
            self._started = False

    # -- Event handlers -----------------------------------------------------

    def handle_tick(self, now: TimeOfDay) -> None:
        """Minute tick: refresh hour, minute and date label."""
        self._state = replace(
            self._state,
            hour=now.hour,
            minute=now.minute,
            date_label=format_date(now.weekday_name, now.day_of_month),
        )
        self._request_redraw()

    def handle_connectivity(self, connected: bool) -> None:
        """Connectivity change; redraws only when the value changes."""
        if connected == self._state.bluetooth_connected:
            return
        logger.info("Connectivity %s", "restored" if connected else "lost")
        self._state = replace(self._state, bluetooth_connected=connected)
        self._request_redraw()

    def handle_tap(self) -> None:
        """Show the hour markers; ignored while they are already shown."""
        if self._marker_timer is not None:
            logger.debug("Tap ignored, markers already visible")
            return
        self._marker_timer = self._timers.schedule_once(
            self._marker_delay, self._on_marker_timeout
        )
        self._state = replace(self._state, markers_visible=True)
        logger.debug("Markers shown for %.1fs", self._marker_delay)
        self._request_redraw()

    def _on_marker_timeout(self) -> None:
        self._marker_timer = None
        self._state = replace(self._state, markers_visible=False)
        logger.debug("Markers hidden")
        self._request_redraw()

    # -- Rendering ----------------------------------------------------------

    def render(self, surface: DrawSurface) -> ClockState:
        """Paint the latest state and clear the redraw request.

        Returns:
            The snapshot that was drawn.
        """
        snapshot = self._state
        self._redraw_requested = False
        render_face(surface, snapshot, self._layout, self._font)
        logger.debug("Rendered %02d:%02d", snapshot.hour, snapshot.minute)
        return snapshot

    def _request_redraw(self) -> None:
        self._redraw_requested = True
        if self._on_redraw is not None:
            self._on_redraw()
