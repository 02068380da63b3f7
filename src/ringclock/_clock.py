"""Wall-clock port and system adapter.

Provides :class:`ClockPort` (Protocol), the :class:`TimeOfDay` snapshot
it delivers, and :class:`SystemClock` for local wall time.

Unlike a monotonic timer this clock is meant to be *displayed*: it is
local time, and jumps when the system clock jumps.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

WEEKDAY_NAMES: tuple[str, ...] = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")
"""Three-letter weekday names, Sunday first."""


@dataclass(frozen=True, slots=True)
class TimeOfDay:
    """What the face needs to know about "now".

    Raises:
        ValueError: If any field is out of range.
    """

    hour: int
    minute: int
    weekday_name: str = "SUN"
    day_of_month: int = 1
    second: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            msg = f"hour must be in 0..23, got {self.hour}"
            raise ValueError(msg)
        if not 0 <= self.minute <= 59:
            msg = f"minute must be in 0..59, got {self.minute}"
            raise ValueError(msg)
        if not 0 <= self.second <= 59:
            msg = f"second must be in 0..59, got {self.second}"
            raise ValueError(msg)
        if not 1 <= self.day_of_month <= 31:
            msg = f"day_of_month must be in 1..31, got {self.day_of_month}"
            raise ValueError(msg)

    @classmethod
    def from_datetime(cls, moment: datetime) -> TimeOfDay:
        """Build a snapshot from a :class:`~datetime.datetime`."""
        return cls(
            hour=moment.hour,
            minute=moment.minute,
            weekday_name=WEEKDAY_NAMES[moment.isoweekday() % 7],
            day_of_month=moment.day,
            second=moment.second,
        )

    @property
    def seconds_to_next_minute(self) -> int:
        return 60 - self.second


@runtime_checkable
class ClockPort(Protocol):
    """Source of the current time of day.

    The default implementation reads local wall time.  Tests inject
    a fake whose time is set by hand.
    """

    def now(self) -> TimeOfDay:
        """Return the current time of day."""
        ...


class SystemClock:
    """Production clock reading the local time zone.

    Satisfies :class:`ClockPort` via structural subtyping.
    """

    def now(self) -> TimeOfDay:
        return TimeOfDay.from_datetime(datetime.now())
