"""Public test-support utilities for ringclock.

Re-exports test doubles and factories so that test suites can import
everything from a single ``ringclock.testing`` namespace.

Provided symbols:

- :class:`FaceHarness` — FaceApp wired entirely to test doubles.
- :class:`FakeClock` — manually set time of day.
- :class:`FakeTimerService` — one-shot timers driven by ``advance()``.
- :class:`MockConnectivity` / :class:`MockGestures` — scripted events.
- :class:`RecordingSurface` — draw surface that records calls.
- :class:`MockFrameSink` — keeps every shown frame in memory.
- :func:`make_settings` — ``Settings`` without ``.env`` or environment.
"""

from ringclock._connectivity import MockConnectivity
from ringclock._gestures import MockGestures
from ringclock._sink import MockFrameSink
from ringclock._surface import RecordingSurface
from ringclock._timers import FakeTimerService
from ringclock.testing._clock import FakeClock
from ringclock.testing._harness import FaceHarness
from ringclock.testing._settings import make_settings

__all__ = [
    "FaceHarness",
    "FakeClock",
    "FakeTimerService",
    "MockConnectivity",
    "MockFrameSink",
    "MockGestures",
    "RecordingSurface",
    "make_settings",
]
