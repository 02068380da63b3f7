"""Unit tests for ringclock.testing — public test-support utilities.

Test Techniques Used:
    - Specification-based Testing: Public API surface, ``__all__``
      completeness, factory defaults and overrides.
    - Identity Testing: Re-exported symbols are the *same* objects
      as the originals in their private modules.
    - Fixture Injection: Plugin-registered fixtures are automatically
      available without local definitions.
"""

from __future__ import annotations

import asyncio

import pytest

import ringclock._connectivity as _connectivity_mod
import ringclock._surface as _surface_mod
import ringclock._timers as _timers_mod
import ringclock.testing as testing_mod
from ringclock._clock import TimeOfDay
from ringclock._face import ClockFaceComposer, ClockState
from ringclock._settings import FaceSettings, Settings
from ringclock.testing import (
    FaceHarness,
    FakeClock,
    FakeTimerService,
    MockConnectivity,
    MockFrameSink,
    MockGestures,
    RecordingSurface,
    make_settings,
)

# ---------------------------------------------------------------------------
# TestPublicAPI — __all__ and importability
# ---------------------------------------------------------------------------


class TestPublicAPI:
    """All expected symbols are importable and listed in ``__all__``."""

    EXPECTED_NAMES = {
        "FaceHarness",
        "FakeClock",
        "FakeTimerService",
        "MockConnectivity",
        "MockFrameSink",
        "MockGestures",
        "RecordingSurface",
        "make_settings",
    }

    def test_all_contains_expected_symbols(self) -> None:
        assert set(testing_mod.__all__) == self.EXPECTED_NAMES

    def test_all_symbols_importable(self) -> None:
        for name in testing_mod.__all__:
            assert hasattr(testing_mod, name), f"{name} not found on module"


class TestReExports:
    """Re-exports are the originals.

    Technique: Identity Testing.
    """

    def test_identity(self) -> None:
        assert MockConnectivity is _connectivity_mod.MockConnectivity
        assert RecordingSurface is _surface_mod.RecordingSurface
        assert FakeTimerService is _timers_mod.FakeTimerService


# ---------------------------------------------------------------------------
# make_settings
# ---------------------------------------------------------------------------


class TestMakeSettings:
    """make_settings() factory."""

    def test_returns_settings_instance(self) -> None:
        assert isinstance(make_settings(), Settings)

    def test_accepts_overrides(self) -> None:
        settings = make_settings(face=FaceSettings(marker_delay_s=1.0), connected=False)
        assert settings.face.marker_delay_s == 1.0
        assert settings.connected is False


# ---------------------------------------------------------------------------
# FaceHarness
# ---------------------------------------------------------------------------


class TestFaceHarness:
    """FaceHarness wiring.

    Technique: State-based Testing.
    """

    def test_create_defaults(self) -> None:
        harness = FaceHarness.create()

        assert harness.clock.now() == TimeOfDay(hour=0, minute=0)
        assert harness.connectivity.is_connected()
        assert isinstance(harness.gestures, MockGestures)
        assert isinstance(harness.sink, MockFrameSink)
        assert not harness.shutdown_event.is_set()

    def test_create_overrides(self) -> None:
        harness = FaceHarness.create(
            now=TimeOfDay(hour=7, minute=7),
            connected=False,
            face=FaceSettings(inverted=True),
        )

        assert harness.clock.now().hour == 7
        assert not harness.connectivity.is_connected()
        assert harness.settings.face.inverted

    def test_composer_before_run_raises(self) -> None:
        with pytest.raises(RuntimeError, match="not started"):
            _ = FaceHarness.create().composer

    def test_trigger_shutdown_sets_event(self) -> None:
        harness = FaceHarness.create()
        harness.trigger_shutdown()
        assert harness.shutdown_event.is_set()

    async def test_wait_for_frames_times_out(self) -> None:
        harness = FaceHarness.create()
        with pytest.raises(TimeoutError):
            await harness.wait_for_frames(1, timeout=0.05)


# ---------------------------------------------------------------------------
# Pytest plugin fixtures
# ---------------------------------------------------------------------------


class TestPytestPlugin:
    """Plugin-registered fixtures.

    Technique: Fixture Injection.
    """

    def test_fake_clock_fixture(self, fake_clock: FakeClock) -> None:
        now = fake_clock.now()
        assert (now.hour, now.minute, now.weekday_name, now.day_of_month) == (
            10,
            42,
            "SUN",
            5,
        )

    def test_fake_timers_fixture(self, fake_timers: FakeTimerService) -> None:
        assert fake_timers.now == 0.0
        assert fake_timers.pending == []

    def test_mock_connectivity_fixture(
        self, mock_connectivity: MockConnectivity
    ) -> None:
        assert mock_connectivity.is_connected()

    def test_recording_surface_fixture(
        self, recording_surface: RecordingSurface
    ) -> None:
        assert recording_surface.calls == []

    def test_composer_fixture_not_started(
        self,
        composer: ClockFaceComposer,
        mock_gestures: MockGestures,
    ) -> None:
        assert composer.state == ClockState()
        assert mock_gestures.subscriber_count == 0

    def test_fixtures_are_fresh_per_test(self, fake_timers: FakeTimerService) -> None:
        assert fake_timers.scheduled_count == 0
        fake_timers.schedule_once(1.0, lambda: None)


@pytest.mark.usefixtures("restore_root_logger")
async def test_harness_event_loop_smoke() -> None:
    harness = FaceHarness.create()
    task = asyncio.create_task(harness.run())
    await harness.wait_for_frames(1)
    harness.trigger_shutdown()
    await task
    assert harness.sink.frame_count == 1
