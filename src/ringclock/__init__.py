"""ringclock.

An analog clock face drawn from rasterized arcs: a filled minute wedge,
an hour ring, and hour markers revealed by a tap.
"""

from importlib.metadata import PackageNotFoundError, version

from ringclock._angles import (
    FULL_CIRCLE,
    TRIG_SCALE,
    cos_lookup,
    normalize,
    normalize_arc,
    sin_lookup,
)
from ringclock._app import FaceApp, render_snapshot
from ringclock._clock import ClockPort, SystemClock, TimeOfDay
from ringclock._connectivity import ConnectivityPort, StaticConnectivity
from ringclock._errors import InvalidTimeError, MissingProviderError, RingclockError
from ringclock._face import (
    ClockFaceComposer,
    ClockState,
    FaceLayout,
    MarkerState,
    hand_arcs,
    hours_angle,
    marker_points,
    minutes_angle,
    render_face,
)
from ringclock._geometry import Color, Point, Rect, TextAlignment, TextOverflow
from ringclock._gestures import GesturePort, SignalGestures
from ringclock._logging import JsonFormatter, configure_logging
from ringclock._raster import ArcSpec, Sweep, arc_pixels, draw_arc, on_swept_side
from ringclock._settings import FaceSettings, LoggingSettings, OutputSettings, Settings
from ringclock._sink import FrameSink, PngFrameSink
from ringclock._surface import DrawSurface, ImageSurface, load_font
from ringclock._timers import AsyncioTimerService, TimerService

try:
    __version__ = version("ringclock")
except PackageNotFoundError:
    # Editable checkout without installed metadata
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Angles
    "FULL_CIRCLE",
    "TRIG_SCALE",
    "cos_lookup",
    "normalize",
    "normalize_arc",
    "sin_lookup",
    # Geometry
    "Color",
    "Point",
    "Rect",
    "TextAlignment",
    "TextOverflow",
    # Raster
    "ArcSpec",
    "Sweep",
    "arc_pixels",
    "draw_arc",
    "on_swept_side",
    # Face
    "ClockFaceComposer",
    "ClockState",
    "FaceLayout",
    "MarkerState",
    "hand_arcs",
    "hours_angle",
    "marker_points",
    "minutes_angle",
    "render_face",
    # App
    "FaceApp",
    "render_snapshot",
    # Ports and adapters
    "AsyncioTimerService",
    "ClockPort",
    "ConnectivityPort",
    "DrawSurface",
    "FrameSink",
    "GesturePort",
    "ImageSurface",
    "PngFrameSink",
    "SignalGestures",
    "StaticConnectivity",
    "SystemClock",
    "TimeOfDay",
    "TimerService",
    "load_font",
    # Errors
    "InvalidTimeError",
    "MissingProviderError",
    "RingclockError",
    # Logging
    "JsonFormatter",
    "configure_logging",
    # Settings
    "FaceSettings",
    "LoggingSettings",
    "OutputSettings",
    "Settings",
]
