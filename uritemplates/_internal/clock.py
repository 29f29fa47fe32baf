"""Wall-clock capability for ``now`` and ``last<unit>`` times.

Time strings such as ``now-P1D`` or ``lastday`` depend on the current
instant. Callers pass a clock instead of the library reading the system
time implicitly, so tests can pin the instant.

This module is not part of the public API; the clocks are re-exported
from the package root.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current UTC instant."""

    def now(self) -> datetime:
        """Return the current instant as an aware UTC datetime."""
        ...


class SystemClock:
    """Clock reading the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock:
    """Clock pinned to one instant.

    Naive datetimes are taken to be UTC.

    Examples:
        >>> clock = FixedClock(datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc))
        >>> clock.now().hour
        12
    """

    instant: datetime

    def now(self) -> datetime:
        if self.instant.tzinfo is None:
            return self.instant.replace(tzinfo=timezone.utc)
        return self.instant.astimezone(timezone.utc)


def now_components(clock: Clock | None = None) -> tuple[int, int, int, int, int, int, int]:
    """Return the clock's instant as seven components, to the millisecond."""
    instant = (clock or SystemClock()).now().astimezone(timezone.utc)
    return (
        instant.year,
        instant.month,
        instant.day,
        instant.hour,
        instant.minute,
        instant.second,
        (instant.microsecond // 1000) * 1_000_000,
    )


__all__ = ["Clock", "SystemClock", "FixedClock", "now_components"]
