"""Gesture port and adapters.

Provides GesturePort (Protocol) and two implementations:

- SignalGestures — ``SIGUSR1`` delivered to the process counts as a tap
- MockGestures — test double with a ``tap()`` method

``SignalGestures`` hooks the running asyncio loop, so taps arrive as
ordinary loop callbacks and never interleave with a render pass.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

TapCallback = Callable[[], None]


@runtime_checkable
class GesturePort(Protocol):
    """Port contract for discrete tap events."""

    def subscribe(self, callback: TapCallback) -> None: ...

    def unsubscribe(self, callback: TapCallback) -> None: ...


class SignalGestures:
    """Treat ``SIGUSR1`` as a tap (``kill -USR1 <pid>``).

    Must be subscribed from inside a running event loop.  On platforms
    without ``SIGUSR1`` subscriptions are accepted but never fire.
    """

    def __init__(self) -> None:
        self._callbacks: list[TapCallback] = []
        self._loop: asyncio.AbstractEventLoop | None = None

    def subscribe(self, callback: TapCallback) -> None:
        self._callbacks.append(callback)
        if self._loop is None and hasattr(signal, "SIGUSR1"):
            self._loop = asyncio.get_running_loop()
            self._loop.add_signal_handler(signal.SIGUSR1, self._dispatch)
            logger.info("Send SIGUSR1 to simulate a tap")

    def unsubscribe(self, callback: TapCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def close(self) -> None:
        """Remove the signal handler.  Idempotent."""
        if self._loop is not None:
            self._loop.remove_signal_handler(signal.SIGUSR1)
            self._loop = None
        self._callbacks.clear()

    def _dispatch(self) -> None:
        logger.debug("Tap received")
        for callback in list(self._callbacks):
            callback()


@dataclass
class MockGestures:
    """Test double: ``tap()`` invokes every subscriber synchronously."""

    _callbacks: list[TapCallback] = field(default_factory=list, repr=False)

    def subscribe(self, callback: TapCallback) -> None:
        self._callbacks.append(callback)

    def unsubscribe(self, callback: TapCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def tap(self) -> None:
        for callback in list(self._callbacks):
            callback()

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)
