"""DecomposedTime: a calendar time as seven explicit integer components.

The components are ``[year, month, day, hour, minute, second, nanosecond]``.
A value may hold an unnormalized intermediate (a negative hour, a day of
32, a day-of-year in the day field with ``month=1``); ``normalize()``
returns the equivalent calendar time with every field in range.

Supported ISO 8601 input forms (``Z`` is always assumed):
    - YYYY
    - YYYY-MM
    - YYYY-DDD[Z]
    - YYYY-MM-DD[Z]
    - any date form followed by Thh[:mm[:ss[.fffffffff]]][Z]
    - now, now-P1D, lastday, lasthour+PT1H, ...
"""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Iterator, Sequence

from uritemplates._internal.calendar import (
    days_in_month,
    days_in_year,
    doy_to_md,
    from_julian_day as _from_julian_day,
    julian_day as _julian_day,
    ordinal_to_ymd,
    ymd_to_ordinal,
)
from uritemplates._internal.clock import Clock, now_components
from uritemplates._internal.constants import (
    HOURS_PER_DAY,
    MAX_MONTH_CARRIES,
    MILLIS_PER_DAY,
    MINUTES_PER_HOUR,
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MILLISECOND,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    SECONDS_PER_MINUTE,
    TIME_DIGITS,
)
from uritemplates.core.duration import Duration, parse_duration
from uritemplates.errors import (
    InvalidTimeComponentError,
    MalformedDurationError,
    MalformedTimeError,
)

logger = logging.getLogger(__name__)

_CLOCK_TIME = re.compile(r"(\d\d)(?::(\d\d)(?::(\d\d)(?:\.(\d{1,9}))?)?)?")
_RELATIVE_TIME = re.compile(
    r"(?:now|last(?P<unit>[a-z]+))(?:(?P<sign>[+-])(?P<duration>P.*))?"
)

# First component reset by last<unit>; everything finer goes to its default
_LAST_UNITS: dict[str, int] = {
    "year": 1,
    "month": 2,
    "day": 3,
    "hour": 4,
    "minute": 5,
    "second": 6,
}

_ORDINAL_1970 = ymd_to_ordinal(1970, 1, 1)


@dataclass(frozen=True, order=True)
class DecomposedTime:
    """A calendar time as year, month, day, hour, minute, second, nanosecond.

    Values are immutable; arithmetic and normalization return new
    instances. Ordering is lexicographic over the components, which is
    chronological for normalized values.

    Attributes:
        year: The year.
        month: The month, 1-12 when normalized.
        day: The day of month, or the day of year when month is 1.
        hour: The hour, 0-23 when normalized (24 is accepted as input).
        minute: The minute.
        second: The second.
        nanosecond: The nanosecond within the second.

    Examples:
        >>> t = DecomposedTime(2000, 1, 45, 23)
        >>> t.normalize()
        DecomposedTime(year=2000, month=2, day=14, hour=23, minute=0, second=0, nanosecond=0)

        >>> str(DecomposedTime(2020, 3, 4, 24).normalize())
        '2020-03-05T00:00:00.000000000Z'
    """

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    nanosecond: int = 0

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> DecomposedTime:
        """Create from exactly seven components.

        Raises:
            ValueError: If the sequence does not have seven components.
        """
        if len(values) != TIME_DIGITS:
            raise ValueError(
                f"decomposed time needs {TIME_DIGITS} components, got {len(values)}"
            )
        return cls(*(int(v) for v in values))

    def as_tuple(self) -> tuple[int, int, int, int, int, int, int]:
        """Return the seven components as a tuple."""
        return (
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.nanosecond,
        )

    def __iter__(self) -> Iterator[int]:
        return iter(self.as_tuple())

    def __len__(self) -> int:
        return TIME_DIGITS

    def __getitem__(self, index: int) -> int:
        return self.as_tuple()[index]

    def replace(self, **changes: int) -> DecomposedTime:
        """Return a copy with the given components replaced."""
        return dataclasses.replace(self, **changes)

    @property
    def is_day_of_year(self) -> bool:
        """True if the day field holds a day of year past January."""
        return self.month == 1 and self.day > 31

    def resolve_day_of_year(self) -> DecomposedTime:
        """Convert a day-of-year day field into month and day.

        Values that are not in day-of-year form are returned unchanged.
        """
        if not self.is_day_of_year:
            return self
        month, day = doy_to_md(self.year, self.day)
        return self.replace(month=month, day=day)

    def normalize(self) -> DecomposedTime:
        """Return the equivalent time with every component in range.

        Carries and borrows run from the finest component up: nanoseconds
        into seconds, seconds into minutes, minutes into hours and hours
        into days (so ``24:00`` becomes midnight of the next day). The
        month is then brought into 1-12 against the year, and finally the
        day is fitted to its month, borrowing from or carrying into
        neighbouring months with leap years taken into account.

        Normalizing an already normalized value returns an equal value.

        Raises:
            InvalidTimeComponentError: If a carry loop exceeds its bound or
                the result still has a component out of range.
        """
        year, month, day, hour, minute, second, nano = self.as_tuple()

        carry, nano = divmod(nano, NANOS_PER_SECOND)
        second += carry
        carry, second = divmod(second, SECONDS_PER_MINUTE)
        minute += carry
        carry, minute = divmod(minute, MINUTES_PER_HOUR)
        hour += carry
        carry, hour = divmod(hour, HOURS_PER_DAY)
        day += carry

        carry, month0 = divmod(month - 1, 12)
        year += carry
        month = month0 + 1

        if day < -27 or day > 366:
            # Large spans go through the ordinal day count
            year, month, day = ordinal_to_ymd(ymd_to_ordinal(year, month, 1) + day - 1)
        else:
            carries = 0
            while day < 1:
                month -= 1
                if month < 1:
                    month = 12
                    year -= 1
                day += days_in_month(year, month)
                carries += 1
            while day > days_in_month(year, month):
                day -= days_in_month(year, month)
                month += 1
                if month > 12:
                    month = 1
                    year += 1
                carries += 1
                if carries > MAX_MONTH_CARRIES:
                    raise InvalidTimeComponentError(
                        f"day carry did not settle after {MAX_MONTH_CARRIES} months: {self!r}"
                    )

        if hour >= HOURS_PER_DAY or not 1 <= day <= days_in_month(year, month):
            raise InvalidTimeComponentError(f"normalization left {self!r} out of range")

        return DecomposedTime(year, month, day, hour, minute, second, nano)

    @property
    def day_of_year(self) -> int:
        """The day of year of the normalized time."""
        t = self.normalize()
        return ymd_to_ordinal(t.year, t.month, t.day) - ymd_to_ordinal(t.year, 1, 0)

    def to_ordinal(self) -> int:
        """Days since 0001-01-00 of the normalized date (0001-01-01 is 1)."""
        t = self.normalize()
        return ymd_to_ordinal(t.year, t.month, t.day)

    def time_of_day_nanoseconds(self) -> int:
        """Nanoseconds since midnight of the normalized time."""
        t = self.normalize()
        return (
            t.hour * NANOS_PER_HOUR
            + t.minute * NANOS_PER_MINUTE
            + t.second * NANOS_PER_SECOND
            + t.nanosecond
        )

    def ordinal_nanoseconds(self) -> int:
        """Nanoseconds since 0001-01-01T00:00 of the normalized time."""
        return (self.to_ordinal() - 1) * NANOS_PER_DAY + self.time_of_day_nanoseconds()

    @classmethod
    def from_ordinal(cls, ordinal: int) -> DecomposedTime:
        """Midnight of the given ordinal day."""
        year, month, day = ordinal_to_ymd(ordinal)
        return cls(year, month, day)

    def __add__(self, other: object) -> DecomposedTime:
        if isinstance(other, Duration):
            return add_duration(self, other)
        return NotImplemented

    def __sub__(self, other: object) -> DecomposedTime:
        if isinstance(other, Duration):
            return subtract_duration(self, other)
        return NotImplemented

    def __str__(self) -> str:
        return recompose(self)


def normalize(time: DecomposedTime | Sequence[int]) -> DecomposedTime:
    """Return the normalized copy of a decomposed time.

    Examples:
        >>> normalize([1979, 12, 37, 0, 0, 0, 0]).as_tuple()
        (1980, 1, 6, 0, 0, 0, 0)
    """
    if not isinstance(time, DecomposedTime):
        time = DecomposedTime.from_sequence(time)
    return time.normalize()


def add_duration(base: DecomposedTime, offset: Duration | Sequence[int]) -> DecomposedTime:
    """Add an offset to a time component-wise and normalize.

    This should not be used to combine two offsets; the calendar
    normalization only makes sense when ``base`` is a time.

    Examples:
        >>> add_duration(DecomposedTime(1979, 12, 27), Duration(days=10)).as_tuple()
        (1980, 1, 6, 0, 0, 0, 0)
    """
    combined = [b + o for b, o in zip(base, _as_offset(offset))]
    return DecomposedTime.from_sequence(combined).normalize()


def subtract_duration(base: DecomposedTime, offset: Duration | Sequence[int]) -> DecomposedTime:
    """Subtract an offset from a time component-wise and normalize.

    Examples:
        >>> subtract_duration(DecomposedTime(2020, 7, 9, 1), Duration(hours=2)).as_tuple()
        (2020, 7, 8, 23, 0, 0, 0)
    """
    combined = [b - o for b, o in zip(base, _as_offset(offset))]
    return DecomposedTime.from_sequence(combined).normalize()


def _as_offset(offset: Duration | Sequence[int]) -> Duration:
    if isinstance(offset, Duration):
        return offset
    return Duration.from_sequence(offset)


def _require_digits(text: str, what: str, source: str) -> int:
    if not text.isdigit():
        raise MalformedTimeError(f"{what} must be digits in {source!r}, got {text!r}")
    return int(text)


def _decompose_relative(text: str, clock: Clock | None) -> DecomposedTime:
    match = _RELATIVE_TIME.fullmatch(text)
    if match is None:
        raise MalformedTimeError(f"expected now, lastday+P1D, etc, got {text!r}")

    components = list(now_components(clock))
    unit = match.group("unit")
    if unit is not None:
        if unit not in _LAST_UNITS:
            raise MalformedTimeError(f"unsupported unit in {text!r}: {unit}")
        first = _LAST_UNITS[unit]
        for i in range(first, TIME_DIGITS):
            components[i] = 1 if i < 3 else 0
    base = DecomposedTime.from_sequence(components)

    if match.group("sign") is None:
        return base
    try:
        offset = parse_duration(match.group("duration"))
    except MalformedDurationError as exc:
        raise MalformedTimeError(f"bad offset in {text!r}: {exc}") from exc
    if match.group("sign") == "-":
        result = subtract_duration(base, offset)
    else:
        result = add_duration(base, offset)
    logger.debug("resolved %r to %s", text, result)
    return result


def decompose(
    text: str,
    *,
    clock: Clock | None = None,
    keep_day_of_year: bool = False,
) -> DecomposedTime:
    """Decompose an ISO 8601 time string into its seven components.

    Args:
        text: The time, in one of the forms listed in the module docstring.
        clock: Clock consulted for ``now``/``last...`` times. Defaults to
            the system clock.
        keep_day_of_year: Leave a ``YYYY-DDD`` date as ``[Y, 1, DDD, ...]``
            instead of resolving it to month and day.

    Returns:
        The decomposed time, normalized unless ``keep_day_of_year`` is set.

    Raises:
        MalformedTimeError: If the text is not a supported time.

    Examples:
        >>> decompose("2020-034T06:07:08.000010001").as_tuple()
        (2020, 2, 3, 6, 7, 8, 10001)

        >>> decompose("2020-112Z", keep_day_of_year=True).as_tuple()
        (2020, 1, 112, 0, 0, 0, 0)
    """
    if text.startswith(("now", "last")):
        return _decompose_relative(text, clock)

    if len(text) == 4:
        return DecomposedTime(_require_digits(text, "year", text))
    if len(text) < 7:
        raise MalformedTimeError(f"time must have 4 or at least 7 characters: {text!r}")
    if text[4] != "-":
        raise MalformedTimeError(f"expected '-' after the year in {text!r}")

    year = _require_digits(text[0:4], "year", text)
    rest = ""
    if len(text) == 7:
        month = _require_digits(text[5:7], "month", text)
        day = 1
    elif len(text) == 8 or text[8] in "TZ":
        month = 1
        day = _require_digits(text[5:8], "day of year", text)
        if day < 1 or day > days_in_year(year):
            raise MalformedTimeError(f"day of year out of range in {text!r}")
        rest = text[8:]
    else:
        if text[7] != "-" or len(text) < 10:
            raise MalformedTimeError(f"expected YYYY-MM-DD in {text!r}")
        month = _require_digits(text[5:7], "month", text)
        day = _require_digits(text[8:10], "day", text)
        if len(text) > 10:
            if text[10] not in "TZ":
                raise MalformedTimeError(f"expected 'T' or 'Z' after the date in {text!r}")
            rest = text[10:]

    if month == 1 and day > 31:
        pass  # day of year, already range checked
    elif month < 1 or month > 12:
        raise MalformedTimeError(f"month out of range in {text!r}")
    elif day < 1 or day > days_in_month(year, month):
        raise MalformedTimeError(f"day out of range for {year}-{month:02d} in {text!r}")

    hour = minute = second = nano = 0
    if rest.startswith("T"):
        rest = rest[1:]
        if rest in ("", "Z"):
            raise MalformedTimeError(f"expected a time of day after 'T' in {text!r}")
    if rest.endswith("Z"):
        rest = rest[:-1]
    if rest:
        match = _CLOCK_TIME.fullmatch(rest)
        if match is None:
            raise MalformedTimeError(f"expected hh[:mm[:ss[.fraction]]] in {text!r}")
        hour = int(match.group(1))
        minute = int(match.group(2) or 0)
        second = int(match.group(3) or 0)
        fraction = match.group(4)
        if fraction:
            nano = int(fraction.ljust(9, "0"))
        if hour > 24 or minute > 59 or second > 59:
            raise MalformedTimeError(f"time of day out of range in {text!r}")

    result = DecomposedTime(year, month, day, hour, minute, second, nano)
    if keep_day_of_year:
        return result
    return result.normalize()


def recompose(time: DecomposedTime | Sequence[int]) -> str:
    """Format a decomposed time as ``YYYY-MM-DDThh:mm:ss.nnnnnnnnnZ``.

    A day-of-year in the day field (``month=1``, day past 31) is first
    resolved to month and day; nothing else is normalized.

    Examples:
        >>> recompose(DecomposedTime(2000, 1, 45, 23))
        '2000-02-14T23:00:00.000000000Z'
    """
    if not isinstance(time, DecomposedTime):
        time = DecomposedTime.from_sequence(time)
    t = time.resolve_day_of_year()
    return (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d}"
        f"T{t.hour:02d}:{t.minute:02d}:{t.second:02d}.{t.nanosecond:09d}Z"
    )


def now(clock: Clock | None = None) -> DecomposedTime:
    """Return the current UTC time, to the millisecond."""
    return DecomposedTime.from_sequence(now_components(clock))


def julian_day(year: int, month: int, day: int) -> int:
    """Return the Julian day number for a date after 1582.

    Examples:
        >>> julian_day(2020, 7, 9)
        2459040
    """
    return _julian_day(year, month, day)


def from_julian_day(julian: int) -> DecomposedTime:
    """Return midnight of a Julian day number as a decomposed time.

    Examples:
        >>> from_julian_day(2459040).as_tuple()
        (2020, 7, 9, 0, 0, 0, 0)
    """
    year, month, day = _from_julian_day(julian)
    return DecomposedTime(year, month, day)


def to_epoch_millis(time: DecomposedTime | str) -> int:
    """Milliseconds since 1970-01-01T00:00Z, not counting leap seconds.

    Examples:
        >>> to_epoch_millis("2020-07-09T16:35:27Z")
        1594312527000
    """
    if isinstance(time, str):
        time = decompose(time)
    t = time.normalize()
    days = ymd_to_ordinal(t.year, t.month, t.day) - _ORDINAL_1970
    return days * MILLIS_PER_DAY + t.time_of_day_nanoseconds() // NANOS_PER_MILLISECOND


__all__ = [
    "DecomposedTime",
    "decompose",
    "recompose",
    "normalize",
    "add_duration",
    "subtract_duration",
    "now",
    "julian_day",
    "from_julian_day",
    "to_epoch_millis",
]
