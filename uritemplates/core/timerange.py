"""TimeRange: a start and stop decomposed time.

This module provides the TimeRange value and ``parse_time_range`` for
ISO 8601 ranges written as ``start/stop``, ``start/duration`` or
``duration/stop``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from uritemplates._internal.clock import Clock
from uritemplates._internal.constants import TIME_DIGITS
from uritemplates.core.decomposed import (
    DecomposedTime,
    add_duration,
    decompose,
    recompose,
    subtract_duration,
)
from uritemplates.core.duration import parse_duration
from uritemplates.errors import (
    MalformedDurationError,
    MalformedRangeError,
    MalformedTimeError,
)


@dataclass(frozen=True)
class TimeRange:
    """A span of time from ``start`` (inclusive) to ``stop`` (exclusive).

    The flat form is the 14 integers ``[start 7, stop 7]``.

    Raises:
        MalformedRangeError: If stop precedes start.

    Examples:
        >>> r = parse_time_range("1998-01-02/1998-01-17")
        >>> r.as_tuple()
        (1998, 1, 2, 0, 0, 0, 0, 1998, 1, 17, 0, 0, 0, 0)
        >>> str(r)
        '1998-01-02T00:00:00.000000000Z/1998-01-17T00:00:00.000000000Z'
    """

    start: DecomposedTime
    stop: DecomposedTime

    def __post_init__(self) -> None:
        if self.stop.normalize() < self.start.normalize():
            raise MalformedRangeError(
                f"stop {recompose(self.stop)} precedes start {recompose(self.start)}"
            )

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> TimeRange:
        """Create from the 14-integer flat form.

        Raises:
            ValueError: If the sequence does not have 14 components.
        """
        if len(values) != 2 * TIME_DIGITS:
            raise ValueError(
                f"time range needs {2 * TIME_DIGITS} components, got {len(values)}"
            )
        return cls(
            DecomposedTime.from_sequence(values[:TIME_DIGITS]),
            DecomposedTime.from_sequence(values[TIME_DIGITS:]),
        )

    def as_tuple(self) -> tuple[int, ...]:
        """Return the 14 integers: start components then stop components."""
        return self.start.as_tuple() + self.stop.as_tuple()

    def contains(self, time: DecomposedTime) -> bool:
        """True if ``start <= time < stop``."""
        return self.start.normalize() <= time.normalize() < self.stop.normalize()

    def __str__(self) -> str:
        return f"{recompose(self.start)}/{recompose(self.stop)}"


def _looks_like_time_or_duration(text: str) -> bool:
    return bool(text) and (text[0].isdigit() or text[0] == "P" or text.startswith(("now", "last")))


def parse_time_range(text: str, *, clock: Clock | None = None) -> TimeRange:
    """Parse an ISO 8601 time range such as ``1998-01-02/1998-01-17``.

    Either side may instead be a duration, giving the other end by
    addition or subtraction: ``2000-001/P1D`` or ``P1D/2000-002``.

    Args:
        text: The range, with exactly one slash.
        clock: Clock for ``now``/``last...`` times on either side.

    Returns:
        The parsed TimeRange, both ends normalized.

    Raises:
        MalformedRangeError: If the text is not a valid range.
    """
    parts = text.split("/")
    if len(parts) != 2:
        raise MalformedRangeError(
            f"expected one slash (/) splitting start and stop times in {text!r}"
        )
    first, second = parts
    if not _looks_like_time_or_duration(first):
        raise MalformedRangeError(
            f"first time/duration is misformatted in {text!r}. "
            "Should be ISO 8601 time or duration like P1D."
        )
    if not _looks_like_time_or_duration(second):
        raise MalformedRangeError(
            f"second time/duration is misformatted in {text!r}. "
            "Should be ISO 8601 time or duration like P1D."
        )
    if first.startswith("P") and second.startswith("P"):
        raise MalformedRangeError(f"a range needs at least one time, got {text!r}")

    try:
        if first.startswith("P"):
            stop = decompose(second, clock=clock)
            start = subtract_duration(stop, parse_duration(first))
        elif second.startswith("P"):
            start = decompose(first, clock=clock)
            stop = add_duration(start, parse_duration(second))
        else:
            start = decompose(first, clock=clock)
            stop = decompose(second, clock=clock)
    except (MalformedTimeError, MalformedDurationError) as exc:
        raise MalformedRangeError(f"cannot parse time range {text!r}: {exc}") from exc

    return TimeRange(start, stop)


__all__ = ["TimeRange", "parse_time_range"]
