"""Exception hierarchy for ringclock.

Rendering itself never raises: out-of-range arc inputs are clamped and
empty arcs paint nothing.  What can fail is wiring (a provider missing
at construction) and user input at the CLI boundary.
"""

from __future__ import annotations


class RingclockError(Exception):
    """Base class for all ringclock errors."""


class MissingProviderError(RingclockError, TypeError):
    """A required provider was not supplied to the composer.

    Raised at construction time; there is no recovery.
    """

    def __init__(self, provider: str) -> None:
        super().__init__(f"ClockFaceComposer requires a {provider} provider")
        self.provider = provider


class InvalidTimeError(RingclockError, ValueError):
    """A time or date string could not be parsed."""
