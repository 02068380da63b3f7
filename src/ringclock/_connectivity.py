"""Connectivity port and adapters.

Provides ConnectivityPort (Protocol) and two implementations:

- StaticConnectivity — fixed value, set from configuration
- MockConnectivity — test double whose state is flipped by hand
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

ConnectivityCallback = Callable[[bool], None]
"""Callback receiving the new connectivity value."""


@runtime_checkable
class ConnectivityPort(Protocol):
    """Port contract for the phone-link state shown on the face."""

    def is_connected(self) -> bool: ...

    def subscribe(self, callback: ConnectivityCallback) -> None: ...

    def unsubscribe(self, callback: ConnectivityCallback) -> None: ...


@dataclass
class StaticConnectivity:
    """Adapter reporting a fixed state; never notifies."""

    connected: bool = True

    def is_connected(self) -> bool:
        return self.connected

    def subscribe(self, callback: ConnectivityCallback) -> None:  # noqa: ARG002
        logger.debug("StaticConnectivity.subscribe() — state never changes")

    def unsubscribe(self, callback: ConnectivityCallback) -> None:  # noqa: ARG002
        pass


@dataclass
class MockConnectivity:
    """Test double: ``set()`` changes the state and notifies subscribers.

    Every ``set()`` notifies, even when the value is unchanged, so tests
    can check that consumers gate on real changes themselves.
    """

    connected: bool = True
    _callbacks: list[ConnectivityCallback] = field(default_factory=list, repr=False)

    def is_connected(self) -> bool:
        return self.connected

    def subscribe(self, callback: ConnectivityCallback) -> None:
        self._callbacks.append(callback)

    def unsubscribe(self, callback: ConnectivityCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def set(self, connected: bool) -> None:
        self.connected = connected
        for callback in list(self._callbacks):
            callback(connected)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)
