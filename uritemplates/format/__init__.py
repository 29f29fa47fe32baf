"""Formatting of time strings.

This module provides functions that work on ISO 8601 time strings:
    - normalization to the full nanosecond form
    - day boundaries (floor, ceil, next and previous day)
    - reformatting a time in the shape of an example
    - English month abbreviations

Examples:
    >>> from uritemplates.format import next_day, month_name_abbrev
    >>> next_day("2019-12-31Z")
    '2020-01-01Z'
    >>> month_name_abbrev(3)
    'Mar'
"""

from __future__ import annotations

from uritemplates.format.iso8601 import (
    ceil,
    count_off_days,
    floor,
    month_name_abbrev,
    month_number,
    next_day,
    normalize_time_string,
    previous_day,
    reformat_iso_time,
)

__all__: list[str] = [
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
