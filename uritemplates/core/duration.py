"""Duration class and ISO 8601 duration parsing and formatting.

A Duration is a component-wise offset with the same seven-component
layout as a decomposed time: years, months, days, hours, minutes,
seconds and nanoseconds. It is not a calendar-exact span: adding
``P1M`` to a time adds one to its month and then normalizes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Iterator, Sequence

from uritemplates._internal.constants import (
    NANOS_PER_HOUR,
    NANOS_PER_MILLISECOND,
    NANOS_PER_MICROSECOND,
    NANOS_PER_MINUTE,
    NANOS_PER_DAY,
    NANOS_PER_SECOND,
    TIME_DIGITS,
)
from uritemplates.errors import MalformedDurationError

_DURATION_PATTERN = re.compile(
    r"P(?:(?P<years>\d+)Y)?(?:(?P<months>\d+)M)?(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?|\.\d+)S)?)?"
)


@dataclass(frozen=True)
class Duration:
    """An offset of years, months, days, hours, minutes, seconds and nanoseconds.

    Components are stored as given, without carrying, and may be negative
    when the duration is used as a signed offset.

    Examples:
        >>> d = Duration(hours=5, minutes=4)
        >>> d.as_tuple()
        (0, 0, 0, 5, 4, 0, 0)

        >>> (Duration(days=27) * 3).days
        81
    """

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    nanoseconds: int = 0

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> Duration:
        """Create a Duration from up to seven components, padding with zeros.

        Raises:
            ValueError: If more than seven components are given.
        """
        if len(values) > TIME_DIGITS:
            raise ValueError(
                f"a duration has at most {TIME_DIGITS} components, got {len(values)}"
            )
        padded = list(values) + [0] * (TIME_DIGITS - len(values))
        return cls(*padded)

    @classmethod
    def zero(cls) -> Duration:
        """Create a zero-length duration."""
        return cls()

    def as_tuple(self) -> tuple[int, ...]:
        """Return the seven components as a tuple."""
        return tuple(getattr(self, f.name) for f in fields(self))

    def __iter__(self) -> Iterator[int]:
        return iter(self.as_tuple())

    def __len__(self) -> int:
        return TIME_DIGITS

    def __getitem__(self, index: int) -> int:
        return self.as_tuple()[index]

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(*(a + b for a, b in zip(self.as_tuple(), other.as_tuple())))

    def __mul__(self, factor: int) -> Duration:
        if not isinstance(factor, int):
            return NotImplemented
        return Duration(*(value * factor for value in self.as_tuple()))

    __rmul__ = __mul__

    def __neg__(self) -> Duration:
        return self * -1

    @property
    def is_zero(self) -> bool:
        """True if every component is zero."""
        return not any(self.as_tuple())

    @property
    def has_calendar_units(self) -> bool:
        """True if the duration has a year or month component."""
        return self.years != 0 or self.months != 0

    @property
    def has_fixed_units(self) -> bool:
        """True if the duration has a day or finer component."""
        return any(self.as_tuple()[2:])

    @property
    def total_months(self) -> int:
        """Years and months expressed in months."""
        return self.years * 12 + self.months

    @property
    def fixed_nanoseconds(self) -> int:
        """Days and finer components expressed in nanoseconds."""
        return (
            self.days * NANOS_PER_DAY
            + self.hours * NANOS_PER_HOUR
            + self.minutes * NANOS_PER_MINUTE
            + self.seconds * NANOS_PER_SECOND
            + self.nanoseconds
        )

    def __str__(self) -> str:
        return format_duration(self)


def parse_duration(text: str) -> Duration:
    """Parse an ISO 8601 duration.

    Fractional days, hours and minutes are not allowed; fractional
    seconds are converted exactly to nanoseconds (digits past the
    ninth are dropped).

    Args:
        text: A duration such as ``P1D``, ``PT1M`` or ``PT0.5S``.

    Returns:
        The parsed Duration.

    Raises:
        MalformedDurationError: If the text is not an ISO 8601 duration.

    Examples:
        >>> parse_duration("PT5H4M").as_tuple()
        (0, 0, 0, 5, 4, 0, 0)

        >>> parse_duration("PT0.000123S").nanoseconds
        123000
    """
    match = _DURATION_PATTERN.fullmatch(text)
    if match is None:
        if "P" in text and "S" in text and "T" not in text:
            raise MalformedDurationError(
                f"ISO 8601 duration expected but not found in {text!r}. "
                "Was the T missing before S?"
            )
        raise MalformedDurationError(f"ISO 8601 duration expected but not found in {text!r}")

    def group(name: str) -> int:
        value = match.group(name)
        return int(value) if value else 0

    seconds = 0
    nanoseconds = 0
    seconds_text = match.group("seconds")
    if seconds_text:
        whole, _, fraction = seconds_text.partition(".")
        seconds = int(whole) if whole else 0
        if fraction:
            nanoseconds = int(fraction[:9].ljust(9, "0"))

    return Duration(
        years=group("years"),
        months=group("months"),
        days=group("days"),
        hours=group("hours"),
        minutes=group("minutes"),
        seconds=seconds,
        nanoseconds=nanoseconds,
    )


def _format_seconds(seconds: int, nanoseconds: int) -> str:
    if nanoseconds == 0:
        return str(seconds)
    if nanoseconds % NANOS_PER_MILLISECOND == 0:
        return f"{seconds}.{nanoseconds // NANOS_PER_MILLISECOND:03d}"
    if nanoseconds % NANOS_PER_MICROSECOND == 0:
        return f"{seconds}.{nanoseconds // NANOS_PER_MICROSECOND:06d}"
    return f"{seconds}.{nanoseconds:09d}"


def format_duration(duration: Duration | Sequence[int], *, date_only: bool = False) -> str:
    """Format a duration as ISO 8601.

    Only non-zero components are written. Seconds carry three, six or
    nine decimals depending on the smallest non-zero sub-second unit.

    Args:
        duration: A Duration, or up to seven components.
        date_only: Render a zero duration as ``P0D`` instead of ``PT0S``.

    Returns:
        The ISO 8601 duration string.

    Raises:
        ValueError: If any component is negative.

    Examples:
        >>> format_duration(Duration(days=7, seconds=6))
        'P7DT6S'
        >>> format_duration(Duration(nanoseconds=200_000))
        'PT0.000200S'
        >>> format_duration(Duration(), date_only=True)
        'P0D'
    """
    if not isinstance(duration, Duration):
        duration = Duration.from_sequence(duration)
    if any(value < 0 for value in duration.as_tuple()):
        raise ValueError(f"cannot format a negative duration: {duration.as_tuple()}")

    date_part = "".join(
        f"{value}{unit}"
        for value, unit in (
            (duration.years, "Y"),
            (duration.months, "M"),
            (duration.days, "D"),
        )
        if value
    )
    time_part = "".join(
        f"{value}{unit}"
        for value, unit in ((duration.hours, "H"), (duration.minutes, "M"))
        if value
    )
    if duration.seconds or duration.nanoseconds:
        time_part += _format_seconds(duration.seconds, duration.nanoseconds) + "S"

    if not date_part and not time_part:
        return "P0D" if date_only else "PT0S"
    result = "P" + date_part
    if time_part:
        result += "T" + time_part
    return result


__all__ = ["Duration", "parse_duration", "format_duration"]
