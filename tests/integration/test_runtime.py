"""Integration tests — the live face end to end.

Validates the runtime: start → first frame → tap shows markers →
timer hides them → connectivity change → shutdown, using FaceHarness
so that no signal, real time or file output is involved.

Test Techniques Used:
    - Integration Testing: FaceApp driven through FaceHarness
    - State-based Testing: frames collected by MockFrameSink
    - Event Coalescing: several changes between passes, one frame
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest

from ringclock._clock import TimeOfDay
from ringclock._face import MarkerState
from ringclock.testing import FaceHarness

pytestmark = [
    pytest.mark.integration,
    pytest.mark.usefixtures("restore_root_logger"),
]


@pytest.fixture
async def harness() -> AsyncIterator[FaceHarness]:
    """A running harness at 10:42 on Sunday the 5th, first frame shown."""
    harness = FaceHarness.create(
        now=TimeOfDay(hour=10, minute=42, weekday_name="SUN", day_of_month=5),
    )
    task = asyncio.create_task(harness.run())
    await harness.wait_for_frames(1)
    yield harness
    harness.trigger_shutdown()
    await task


async def _settle() -> None:
    """Give the render task a few loop iterations."""
    for _ in range(10):
        await asyncio.sleep(0)


class TestStartup:
    """First frame after start.

    Technique: Integration Testing.
    """

    async def test_first_frame_shows_current_state(self, harness: FaceHarness) -> None:
        state = harness.composer.state

        assert (state.hour, state.minute) == (10, 42)
        assert state.date_label == "SUN 05"
        assert state.bluetooth_connected
        assert harness.sink.frame_count == 1
        assert harness.sink.frames[0].size == (144, 168)

    async def test_subscriptions_in_place(self, harness: FaceHarness) -> None:
        assert harness.connectivity.subscriber_count == 1
        assert harness.gestures.subscriber_count == 1


class TestMarkers:
    """Tap → markers visible → timer → hidden.

    Technique: State-based Testing — one frame per transition.
    """

    async def test_tap_and_timeout_each_produce_a_frame(
        self,
        harness: FaceHarness,
    ) -> None:
        harness.gestures.tap()
        await harness.wait_for_frames(2)
        assert harness.composer.marker_state is MarkerState.VISIBLE

        harness.timers.advance(3.0)
        await harness.wait_for_frames(3)
        assert harness.composer.marker_state is MarkerState.HIDDEN

        first, shown, hidden = harness.sink.frames
        assert shown.tobytes() != first.tobytes()
        assert hidden.tobytes() == first.tobytes()

    async def test_repeated_taps_schedule_one_timer(self, harness: FaceHarness) -> None:
        harness.gestures.tap()
        await harness.wait_for_frames(2)
        harness.gestures.tap()
        harness.gestures.tap()
        await _settle()

        assert harness.timers.scheduled_count == 1
        assert harness.sink.frame_count == 2


class TestConnectivity:
    """Connectivity changes reach the frame.

    Technique: State-based Testing.
    """

    async def test_loss_redraws(self, harness: FaceHarness) -> None:
        harness.connectivity.set(False)
        await harness.wait_for_frames(2)

        assert not harness.composer.state.bluetooth_connected
        assert harness.sink.frames[1].tobytes() != harness.sink.frames[0].tobytes()

    async def test_unchanged_value_does_not_redraw(self, harness: FaceHarness) -> None:
        harness.connectivity.set(True)
        await _settle()

        assert harness.sink.frame_count == 1


class TestCoalescing:
    """Changes between two passes collapse into one frame.

    Technique: Event Coalescing.
    """

    async def test_burst_renders_once(self, harness: FaceHarness) -> None:
        harness.gestures.tap()
        harness.connectivity.set(False)
        await harness.wait_for_frames(2)
        await _settle()

        assert harness.sink.frame_count == 2
        state = harness.composer.state
        assert state.markers_visible
        assert not state.bluetooth_connected


class TestShutdown:
    """Shutdown tears everything down.

    Technique: Integration Testing.
    """

    async def test_pending_timer_canceled_without_firing(self) -> None:
        harness = FaceHarness.create(now=TimeOfDay(hour=1, minute=5))
        task = asyncio.create_task(harness.run())
        await harness.wait_for_frames(1)
        harness.gestures.tap()
        await harness.wait_for_frames(2)
        timer = harness.timers.pending[0]

        harness.trigger_shutdown()
        await task

        assert timer.canceled
        assert harness.timers.advance(10.0) == 0
        assert harness.connectivity.subscriber_count == 0
        assert harness.gestures.subscriber_count == 0
        assert harness.sink.frame_count == 2

    async def test_inverted_frames(self) -> None:
        harness = FaceHarness.create(now=TimeOfDay(hour=1, minute=5))
        harness.sink.inverted = True
        task = asyncio.create_task(harness.run())
        await harness.wait_for_frames(1)
        harness.trigger_shutdown()
        await task

        assert harness.sink.frames[0].getpixel((0, 0)) == 255
