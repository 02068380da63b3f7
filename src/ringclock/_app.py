"""Application host for the live clock face.

:class:`FaceApp` is the composition root.  It wires the providers into
a :class:`~ringclock._face.ClockFaceComposer` and drives it from one
asyncio loop:

- a **tick task** sleeps until the next minute boundary and delivers
  the time;
- a **render task** waits for the composer's redraw request, paints
  one frame from the latest state and hands it to the frame sink.

Every event (tick, tap, connectivity change, timer expiry) runs to
completion on the loop before the next one, and a render pass is a
single synchronous call, so handlers never see a half-drawn frame.

Typical usage::

    app = FaceApp()
    app.run()
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ringclock._clock import ClockPort, SystemClock
from ringclock._connectivity import ConnectivityPort, StaticConnectivity
from ringclock._face import ClockFaceComposer, ClockState, FaceLayout, render_face
from ringclock._gestures import GesturePort, SignalGestures
from ringclock._logging import configure_logging
from ringclock._settings import Settings
from ringclock._sink import FrameSink, PngFrameSink
from ringclock._surface import ImageSurface, load_font
from ringclock._timers import AsyncioTimerService, TimerService

logger = logging.getLogger(__name__)


def render_snapshot(settings: Settings, state: ClockState) -> ImageSurface:
    """Render a single frame of *state* without starting the event loop."""
    layout = FaceLayout.from_settings(settings.face)
    surface = ImageSurface(layout.width, layout.height)
    font = load_font(settings.face.font_path, settings.face.font_size)
    render_face(surface, state, layout, font)
    return surface


async def _sleep_until(seconds: float, shutdown_event: asyncio.Event) -> None:
    """Sleep that returns early when shutdown is requested."""
    sleep_task = asyncio.ensure_future(asyncio.sleep(seconds))
    shutdown_task = asyncio.ensure_future(shutdown_event.wait())

    _done, pending = await asyncio.wait(
        {sleep_task, shutdown_task},
        return_when=asyncio.FIRST_COMPLETED,
    )

    for task in pending:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


class FaceApp:
    """Live clock face orchestrator.

    Args:
        name: Service name used in log lines.
        version: Version string used in log lines.
    """

    def __init__(self, *, name: str = "ringclock", version: str = "") -> None:
        self._name = name
        self._version = version
        self._composer: ClockFaceComposer | None = None

    @property
    def composer(self) -> ClockFaceComposer | None:
        """The composer of the current (or last) run."""
        return self._composer

    def run(self, *, settings: Settings | None = None) -> None:
        """Start the face (blocking) until SIGINT/SIGTERM."""
        with contextlib.suppress(KeyboardInterrupt):
            asyncio.run(self._run_async(settings=settings))

    async def _run_async(
        self,
        *,
        settings: Settings | None = None,
        shutdown_event: asyncio.Event | None = None,
        clock: ClockPort | None = None,
        connectivity: ConnectivityPort | None = None,
        gestures: GesturePort | None = None,
        timers: TimerService | None = None,
        sink: FrameSink | None = None,
    ) -> None:
        """Async orchestration.

        Orchestration order:

        1. Bootstrap settings, logging and providers.
        2. Start the composer (initial tick, connectivity peek).
        3. Run the tick and render tasks until shutdown.
        4. Tear down: cancel tasks, stop the composer, release gestures.

        Every provider can be injected; tests pass fakes and a manual
        shutdown event to avoid signals, real time and file output.
        """
        # --- Phase 1: Bootstrap ---
        resolved_settings = settings if settings is not None else Settings()
        configure_logging(
            resolved_settings.logging,
            service=self._name,
            version=self._version,
        )
        face = resolved_settings.face

        resolved_clock = clock if clock is not None else SystemClock()
        resolved_connectivity = (
            connectivity
            if connectivity is not None
            else StaticConnectivity(resolved_settings.connected)
        )
        resolved_gestures = gestures if gestures is not None else SignalGestures()
        resolved_timers = timers if timers is not None else AsyncioTimerService()
        resolved_sink = (
            sink
            if sink is not None
            else PngFrameSink(resolved_settings.output.path, inverted=face.inverted)
        )

        layout = FaceLayout.from_settings(face)
        redraw = asyncio.Event()
        composer = ClockFaceComposer(
            clock=resolved_clock,
            connectivity=resolved_connectivity,
            gestures=resolved_gestures,
            timers=resolved_timers,
            layout=layout,
            marker_delay=face.marker_delay_s,
            on_redraw=redraw.set,
            font=load_font(face.font_path, face.font_size),
        )
        self._composer = composer

        # --- Phase 2: Start ---
        shutdown_event = self._install_signal_handlers(shutdown_event)
        composer.start()

        # --- Phase 3: Run ---
        tasks = [
            asyncio.create_task(
                self._tick_loop(composer, resolved_clock, shutdown_event)
            ),
            asyncio.create_task(
                self._render_loop(
                    composer, layout, resolved_sink, redraw, shutdown_event
                )
            ),
        ]
        try:
            await shutdown_event.wait()
        finally:
            # --- Phase 4: Tear down ---
            # Task errors are logged but never skip the provider teardown.
            for task in tasks:
                task.cancel()
            try:
                for task in tasks:
                    try:
                        await task
                    except asyncio.CancelledError:
                        pass
                    except Exception:
                        logger.exception("Task %s failed", task.get_name())
            finally:
                composer.stop()
                if isinstance(resolved_gestures, SignalGestures):
                    resolved_gestures.close()

        logger.info("Shutdown complete")

    # --- _run_async helpers ------------------------------------------------

    def _install_signal_handlers(
        self,
        shutdown_event: asyncio.Event | None,
    ) -> asyncio.Event:
        """Install SIGTERM/SIGINT handlers. Returns the shutdown event."""
        if shutdown_event is not None:
            return shutdown_event
        event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, event.set)
        return event

    async def _tick_loop(
        self,
        composer: ClockFaceComposer,
        clock: ClockPort,
        shutdown_event: asyncio.Event,
    ) -> None:
        """Deliver the time once per minute, on the minute."""
        while not shutdown_event.is_set():
            await _sleep_until(clock.now().seconds_to_next_minute, shutdown_event)
            if shutdown_event.is_set():
                return
            composer.handle_tick(clock.now())

    async def _render_loop(
        self,
        composer: ClockFaceComposer,
        layout: FaceLayout,
        sink: FrameSink,
        redraw: asyncio.Event,
        shutdown_event: asyncio.Event,
    ) -> None:
        """One render pass per redraw request, coalescing bursts."""
        while not shutdown_event.is_set():
            await redraw.wait()
            redraw.clear()
            surface = ImageSurface(layout.width, layout.height)
            try:
                composer.render(surface)
                sink.show(surface)
            except Exception:
                logger.exception("Failed to show frame")
