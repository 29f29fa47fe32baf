"""ISO 8601 time string helpers.

This module provides functions that take and return ISO 8601 time strings
directly, for callers that keep times as text:

Functions:
    normalize_time_string: Render any supported time in the full form.
    floor: Midnight at or before a time.
    ceil: Midnight at or after a time.
    next_day: The following day as ``YYYY-MM-DDZ``.
    previous_day: The preceding day as ``YYYY-MM-DDZ``.
    count_off_days: Every whole day in a range.
    reformat_iso_time: Render a time in the shape of an example time.

The full form is ``YYYY-MM-DDThh:mm:ss.nnnnnnnnnZ``; since every field is
zero padded, full-form strings (and ``YYYY-MM-DDZ`` days) sort
chronologically as plain strings.

Examples:
    >>> normalize_time_string("2020-03-04T24:00:00Z")
    '2020-03-05T00:00:00.000000000Z'

    >>> reformat_iso_time("2020-01-01T00:00Z", "2020-112Z")
    '2020-04-21T00:00Z'
"""

from __future__ import annotations

from uritemplates._internal.calendar import day_of_year, month_name_abbrev, month_number
from uritemplates.core.decomposed import DecomposedTime, decompose, recompose

_MIDNIGHT_SUFFIX = "T00:00:00.000000000Z"


def normalize_time_string(time: str) -> str:
    """Return ``YYYY-MM-DDThh:mm:ss.nnnnnnnnnZ`` for any supported time.

    Args:
        time: Any time accepted by ``decompose``.

    Returns:
        The normalized time in full form.

    Raises:
        MalformedTimeError: If the time cannot be parsed.
    """
    return recompose(decompose(time))


def _day_string(t: DecomposedTime) -> str:
    return f"{t.year:04d}-{t.month:02d}-{t.day:02d}Z"


def next_day(day: str) -> str:
    """Return the next day boundary as ``YYYY-MM-DDZ``.

    Hours, minutes, seconds and nanoseconds are ignored.

    Examples:
        >>> next_day("2019-12-31Z")
        '2020-01-01Z'
    """
    t = decompose(day)
    return _day_string(t.replace(day=t.day + 1, hour=0, minute=0, second=0, nanosecond=0).normalize())


def previous_day(day: str) -> str:
    """Return the previous day boundary as ``YYYY-MM-DDZ``.

    Hours, minutes, seconds and nanoseconds are ignored.

    Examples:
        >>> previous_day("2020-01-01")
        '2019-12-31Z'
    """
    t = decompose(day)
    return _day_string(t.replace(day=t.day - 1, hour=0, minute=0, second=0, nanosecond=0).normalize())


def ceil(time: str) -> str:
    """Return the next midnight, or the time itself if already at midnight.

    Examples:
        >>> ceil("2000-01-01T23:59")
        '2000-01-02T00:00:00.000000000Z'
    """
    normalized = normalize_time_string(time)
    if normalized.endswith(_MIDNIGHT_SUFFIX):
        return normalized
    return next_day(normalized[:10])[:10] + _MIDNIGHT_SUFFIX


def floor(time: str) -> str:
    """Return the previous midnight, or the time itself if already at midnight.

    Examples:
        >>> floor("2000-01-01T23:59")
        '2000-01-01T00:00:00.000000000Z'
    """
    return normalize_time_string(time)[:10] + _MIDNIGHT_SUFFIX


def count_off_days(start_time: str, stop_time: str) -> list[str]:
    """List the whole days from start_time up to, not including, stop_time.

    Args:
        start_time: Any supported time; its day is the first one listed.
        stop_time: A ``YYYY-MM-DD`` time; a partial last day is included.

    Returns:
        The days, each as ``YYYY-MM-DDZ``.

    Raises:
        ValueError: If stop_time is not in ``YYYY-MM-DD`` form.

    Examples:
        >>> count_off_days("1999-12-31Z", "2000-01-03Z")
        ['1999-12-31Z', '2000-01-01Z', '2000-01-02Z']
    """
    if len(stop_time) < 10 or stop_time[7] != "-" or (len(stop_time) > 10 and stop_time[10].isdigit()):
        raise ValueError(f"stop time must be YYYY-MM-DD, got {stop_time!r}")
    day = normalize_time_string(start_time)[:10] + "Z"
    last = ceil(stop_time)[:10] + "Z"
    days = []
    while day < last:
        days.append(day)
        day = next_day(day)
    return days


def reformat_iso_time(example_form: str, time: str) -> str:
    """Rewrite a time in the form of an example time.

    The example picks day-of-year (``2020-112Z``, ``2020-112T00:00Z``) or
    month and day (``2020-01-01Z``, ``2020-01-01T00:00Z``) and how many
    characters to keep. Rewriting times to a common form lets them be
    compared as strings.

    Args:
        example_form: A time in the desired form.
        time: Any supported time.

    Returns:
        The time, truncated to the example's length, ending in ``Z`` if the
        example does.

    Examples:
        >>> reformat_iso_time("2020-01-01T00:00Z", "2020-112Z")
        '2020-04-21T00:00Z'
        >>> reformat_iso_time("2020-001Z", "2020-04-21T12:00Z")
        '2020-112Z'
    """
    t = decompose(time)
    day_of_year_form = len(example_form) == 8 or (len(example_form) > 8 and example_form[8] in "TZ")
    if day_of_year_form:
        doy = day_of_year(t.year, t.month, t.day)
        if len(example_form) > 8 and example_form[8] == "T":
            text = (
                f"{t.year:04d}-{doy:03d}T{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
                f".{t.nanosecond:09d}Z"
            )
        else:
            text = f"{t.year:04d}-{doy:03d}Z"
    elif len(example_form) > 10 and example_form[10] == "T":
        text = recompose(t)
    else:
        text = _day_string(t)

    if example_form.endswith("Z"):
        return text[: len(example_form) - 1] + "Z"
    return text[: len(example_form)]


__all__ = [
    "normalize_time_string",
    "floor",
    "ceil",
    "next_day",
    "previous_day",
    "count_off_days",
    "reformat_iso_time",
    "month_name_abbrev",
    "month_number",
]
