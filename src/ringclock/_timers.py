"""One-shot timer port and adapters.

Provides TimerService (Protocol) and two implementations:

- AsyncioTimerService — ``loop.call_later`` on the running loop
- FakeTimerService — manual time; ``advance()`` fires due timers

A canceled timer never invokes its callback.  Canceling an already
fired or already canceled handle is a no-op.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], None]


@runtime_checkable
class TimerService(Protocol):
    """Port contract for one-shot timers."""

    def schedule_once(self, delay: float, callback: TimerCallback) -> Any:
        """Run *callback* once after *delay* seconds; return a handle."""
        ...

    def cancel(self, handle: Any) -> None:
        """Cancel a pending timer without running its callback."""
        ...


class AsyncioTimerService:
    """Timers on the running asyncio loop.

    Callbacks run as loop callbacks, serialised with every other event.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule_once(
        self, delay: float, callback: TimerCallback
    ) -> asyncio.TimerHandle:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return loop.call_later(delay, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


# ---------------------------------------------------------------------------
# Fake / test-double adapter
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class FakeTimer:
    """Handle returned by :class:`FakeTimerService`."""

    due: float
    callback: TimerCallback
    fired: bool = False
    canceled: bool = False

    @property
    def pending(self) -> bool:
        return not (self.fired or self.canceled)


@dataclass
class FakeTimerService:
    """Deterministic timer service driven by ``advance()``.

    Example::

        timers = FakeTimerService()
        handle = timers.schedule_once(3.0, on_timeout)
        timers.advance(2.9)   # nothing fires
        timers.advance(0.1)   # on_timeout() runs
    """

    now: float = 0.0
    timers: list[FakeTimer] = field(default_factory=list)

    def schedule_once(self, delay: float, callback: TimerCallback) -> FakeTimer:
        timer = FakeTimer(due=self.now + delay, callback=callback)
        self.timers.append(timer)
        return timer

    def cancel(self, handle: FakeTimer) -> None:
        if handle.pending:
            handle.canceled = True

    def advance(self, seconds: float) -> int:
        """Move time forward and fire due timers in due order.

        Returns:
            The number of callbacks invoked.
        """
        self.now += seconds
        fired = 0
        for timer in sorted(self.timers, key=lambda t: t.due):
            if timer.pending and timer.due <= self.now:
                timer.fired = True
                timer.callback()
                fired += 1
        return fired

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.pending]

    @property
    def scheduled_count(self) -> int:
        return len(self.timers)
