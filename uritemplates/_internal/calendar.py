"""Calendar utilities for uritemplates.

This module provides internal functions for calendar calculations,
including ordinal and Julian day conversions, day-of-year tables and
leap year logic, all in the proleptic Gregorian calendar.

This module is not part of the public API.
"""

from __future__ import annotations

from uritemplates._internal.constants import (
    DAY_OFFSET,
    DAYS_IN_MONTH,
    GREGORIAN_REFORM_YEAR,
    JULIAN_DAY_ORDINAL_OFFSET,
    MONTH_NAMES,
)
from uritemplates.errors import InvalidTimeComponentError


def is_leap_year(year: int) -> bool:
    """Check if a year is a leap year in the proleptic Gregorian calendar.

    A year is a leap year if:
    - Divisible by 4, AND
    - NOT divisible by 100, unless also divisible by 400

    Args:
        year: The year to check.

    Returns:
        True if the year is a leap year.

    Examples:
        >>> is_leap_year(2000)  # Divisible by 400
        True
        >>> is_leap_year(1900)  # Divisible by 100 but not 400
        False
        >>> is_leap_year(2024)
        True
    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a given month.

    Args:
        year: The year (needed for February in leap years).
        month: The month (1-12).

    Returns:
        Number of days in the month.

    Raises:
        InvalidTimeComponentError: If month is not in 1-12.
    """
    if month < 1 or month > 12:
        raise InvalidTimeComponentError(f"month must be 1-12, got {month}")

    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month]


def days_in_year(year: int) -> int:
    """Return 366 for leap years, 365 otherwise."""
    return 366 if is_leap_year(year) else 365


def day_of_year(year: int, month: int, day: int) -> int:
    """Return the day of year for a month and day.

    ``month=1`` passes the day through unchanged, so a time already
    carrying a day-of-year in its day field is accepted.

    Args:
        year: The year.
        month: The month, from 1 to 12.
        day: The day of the month.

    Returns:
        The day of year, 1-366.

    Raises:
        InvalidTimeComponentError: If the month or day is out of range.

    Examples:
        >>> day_of_year(2020, 4, 21)
        112
        >>> day_of_year(2000, 3, 1)
        61
    """
    if month < 1 or month > 12:
        raise InvalidTimeComponentError(f"month must be 1-12, got {month}")
    limit = days_in_year(year) if month == 1 else days_in_month(year, month)
    if day < 1 or day > limit:
        raise InvalidTimeComponentError(
            f"day must be 1-{limit} for {year}-{month:02d}, got {day}"
        )
    return DAY_OFFSET[is_leap_year(year)][month] + day


def month_for_day_of_year(year: int, doy: int) -> int:
    """Return the month containing a day of year, e.g. 2 (February) for 45.

    Args:
        year: The year.
        doy: The day of year.

    Returns:
        The month, 1-12.

    Raises:
        InvalidTimeComponentError: If doy is outside the year.
    """
    offsets = DAY_OFFSET[is_leap_year(year)]
    if doy < 1 or doy > offsets[13]:
        raise InvalidTimeComponentError(
            f"day of year must be 1-{offsets[13]} for {year}, got {doy}"
        )
    for month in range(12, 1, -1):
        if offsets[month] < doy:
            return month
    return 1


def doy_to_md(year: int, doy: int) -> tuple[int, int]:
    """Convert day-of-year to (month, day of month)."""
    month = month_for_day_of_year(year, doy)
    return month, doy - DAY_OFFSET[is_leap_year(year)][month]


def ymd_to_ordinal(year: int, month: int, day: int) -> int:
    """Convert year, month, day to ordinal (days since year 1).

    The ordinal for 0001-01-01 is 1. ``day`` may exceed the month length
    (or be a day-of-year with ``month=1``); the excess simply counts on.

    Args:
        year: The year (astronomical, can be 0 or negative).
        month: The month (1-12).
        day: The day.

    Returns:
        The ordinal day number.
    """
    y = year - 1
    # Floor division keeps this valid for years <= 0
    days_before_year = y * 365 + y // 4 - y // 100 + y // 400
    return days_before_year + DAY_OFFSET[is_leap_year(year)][month] + day


def ordinal_to_ymd(ordinal: int) -> tuple[int, int, int]:
    """Convert ordinal (days since year 1) to year, month, day.

    Args:
        ordinal: The ordinal day number (ordinal 1 = 0001-01-01).

    Returns:
        Tuple of (year, month, day).
    """
    # n is 0-indexed (n=0 means ordinal=1); divmod floors for n < 0
    n = ordinal - 1

    # 400-year cycles: each has 146097 days
    n400, n = divmod(n, 146097)

    # 100-year cycles within the 400: each has 36524 days (except last which has 36525)
    n100, n = divmod(n, 36524)

    # 4-year cycles within the 100: each has 1461 days
    n4, n = divmod(n, 1461)

    # Years within the 4-year cycle: each has 365 days (except leap year)
    n1, n = divmod(n, 365)

    year = n400 * 400 + n100 * 100 + n4 * 4 + n1 + 1

    # Last day of a leap cycle
    if n1 == 4 or n100 == 4:
        return (year - 1, 12, 31)

    month, day = doy_to_md(year, n + 1)
    return (year, month, day)


def julian_day(year: int, month: int, day: int) -> int:
    """Return the Julian day number for a calendar date.

    For day of year, use ``month=1`` and the day of year for ``day``.

    Args:
        year: Calendar year greater than 1582.
        month: The month number 1 through 12.
        day: Day of month.

    Returns:
        The Julian day number.

    Raises:
        InvalidTimeComponentError: If the year is 1582 or earlier.

    Examples:
        >>> julian_day(2020, 7, 9)
        2459040
    """
    if year <= GREGORIAN_REFORM_YEAR:
        raise InvalidTimeComponentError(
            f"year must be more than {GREGORIAN_REFORM_YEAR}, got {year}"
        )
    return ymd_to_ordinal(year, month, day) + JULIAN_DAY_ORDINAL_OFFSET


def from_julian_day(julian: int) -> tuple[int, int, int]:
    """Break a Julian day number apart into (year, month, day).

    Raises:
        InvalidTimeComponentError: If the day falls in or before 1582.

    Examples:
        >>> from_julian_day(2459040)
        (2020, 7, 9)
    """
    result = ordinal_to_ymd(julian - JULIAN_DAY_ORDINAL_OFFSET)
    if result[0] <= GREGORIAN_REFORM_YEAR:
        raise InvalidTimeComponentError(
            f"julian day {julian} is not after {GREGORIAN_REFORM_YEAR}"
        )
    return result


def month_name_abbrev(month: int) -> str:
    """Return the three-letter English abbreviation, e.g. "Mar" for 3."""
    if month < 1 or month > 12:
        raise InvalidTimeComponentError(f"month must be 1-12, got {month}")
    return MONTH_NAMES[month - 1]


def month_number(name: str) -> int:
    """Return the month number for an English month name.

    Only the first three letters are used, case-insensitively, so "Dec"
    and "December" both give 12.

    Raises:
        ValueError: If the name is shorter than three letters or unknown.
    """
    if len(name) < 3:
        raise ValueError(f"need at least three letters for a month name, got {name!r}")
    prefix = name[:3].lower()
    for i, abbrev in enumerate(MONTH_NAMES):
        if abbrev.lower() == prefix:
            return i + 1
    raise ValueError(f"unable to parse month name: {name!r}")


__all__ = [
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "day_of_year",
    "month_for_day_of_year",
    "doy_to_md",
    "ymd_to_ordinal",
    "ordinal_to_ymd",
    "julian_day",
    "from_julian_day",
    "month_name_abbrev",
    "month_number",
]
