"""Internal constants for uritemplates.

These constants define the tables and magic numbers used throughout
the library. This module is not part of the public API.
"""

from __future__ import annotations

# Time unit conversions
NANOS_PER_MICROSECOND: int = 1_000
NANOS_PER_MILLISECOND: int = 1_000_000
NANOS_PER_SECOND: int = 1_000_000_000
NANOS_PER_MINUTE: int = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR: int = 60 * NANOS_PER_MINUTE
NANOS_PER_DAY: int = 24 * NANOS_PER_HOUR  # 86_400_000_000_000

SECONDS_PER_MINUTE: int = 60
MINUTES_PER_HOUR: int = 60
HOURS_PER_DAY: int = 24
MINUTES_PER_DAY: int = HOURS_PER_DAY * MINUTES_PER_HOUR
MILLIS_PER_DAY: int = 86_400_000

# Decomposed time layout: [year, month, day, hour, minute, second, nanosecond]
YEAR: int = 0
MONTH: int = 1
DAY: int = 2
HOUR: int = 3
MINUTE: int = 4
SECOND: int = 5
NANOSECOND: int = 6
TIME_DIGITS: int = 7

# Default value of each component in a freshly seeded time
COMPONENT_DEFAULTS: tuple[int, ...] = (0, 1, 1, 0, 0, 0, 0)

# Days in each month (non-leap year)
DAYS_IN_MONTH: tuple[int, ...] = (
    0,   # Placeholder for 1-indexed access
    31,  # January
    28,  # February (non-leap)
    31,  # March
    30,  # April
    31,  # May
    30,  # June
    31,  # July
    31,  # August
    30,  # September
    31,  # October
    30,  # November
    31,  # December
)

# Days before the first of each month, index 13 is the year length
DAY_OFFSET: tuple[tuple[int, ...], tuple[int, ...]] = (
    (0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365),
    (0, 0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335, 366),
)

MONTH_NAMES: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Julian day arithmetic is only defined after the Gregorian reform
GREGORIAN_REFORM_YEAR: int = 1582

# Julian day number of proleptic Gregorian 0001-01-01 minus its ordinal (1)
JULIAN_DAY_ORDINAL_OFFSET: int = 1_721_425

# Two-digit years below the pivot are 20xx, the rest 19xx
TWO_DIGIT_YEAR_PIVOT: int = 58

# Bound on month carries while normalizing a day overflow
MAX_MONTH_CARRIES: int = 12

# Average Gregorian month (30.436875 days), used only to rank step sizes
NOMINAL_MONTH_NANOS: int = 2_629_746 * NANOS_PER_SECOND

# Width of each fixed-width calendar field when no width prefix is given
DEFAULT_FIELD_WIDTHS: dict[str, int] = {
    "Y": 4,
    "y": 2,
    "m": 2,
    "b": 3,
    "d": 2,
    "j": 3,
    "H": 2,
    "M": 2,
    "S": 2,
}


__all__ = [
    "NANOS_PER_MICROSECOND",
    "NANOS_PER_MILLISECOND",
    "NANOS_PER_SECOND",
    "NANOS_PER_MINUTE",
    "NANOS_PER_HOUR",
    "NANOS_PER_DAY",
    "SECONDS_PER_MINUTE",
    "MINUTES_PER_HOUR",
    "HOURS_PER_DAY",
    "MINUTES_PER_DAY",
    "MILLIS_PER_DAY",
    "YEAR",
    "MONTH",
    "DAY",
    "HOUR",
    "MINUTE",
    "SECOND",
    "NANOSECOND",
    "TIME_DIGITS",
    "COMPONENT_DEFAULTS",
    "DAYS_IN_MONTH",
    "DAY_OFFSET",
    "MONTH_NAMES",
    "GREGORIAN_REFORM_YEAR",
    "JULIAN_DAY_ORDINAL_OFFSET",
    "TWO_DIGIT_YEAR_PIVOT",
    "MAX_MONTH_CARRIES",
    "NOMINAL_MONTH_NANOS",
    "DEFAULT_FIELD_WIDTHS",
]
