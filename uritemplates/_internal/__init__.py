"""Internal utilities for uritemplates.

This module contains private implementation details:
    - Constants and calendar tables
    - Calendar arithmetic (leap years, ordinals, Julian days)
    - The wall-clock capability used by ``now``/``last...`` times

Note: This module is not part of the public API.
"""

from __future__ import annotations

from uritemplates._internal.calendar import (
    day_of_year,
    days_in_month,
    is_leap_year,
    month_for_day_of_year,
)
from uritemplates._internal.clock import Clock, FixedClock, SystemClock

__all__: list[str] = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "day_of_year",
    "days_in_month",
    "is_leap_year",
    "month_for_day_of_year",
]
