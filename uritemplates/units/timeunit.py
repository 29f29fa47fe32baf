"""TimeUnit enumeration for the components of a decomposed time.

This module provides the TimeUnit enum naming the seven components,
from years down to nanoseconds, with their position in a decomposed
time and their one-unit durations.
"""

from __future__ import annotations

from enum import Enum

from uritemplates._internal.constants import (
    COMPONENT_DEFAULTS,
    NOMINAL_MONTH_NANOS,
    TIME_DIGITS,
)
from uritemplates.core.duration import Duration


class TimeUnit(Enum):
    """Units of a decomposed time.

    Each unit knows the index of its component in the seven-component
    layout and can build a Duration of N units.

    Note:
        YEAR and MONTH do not have fixed nanosecond equivalents; their
        nominal length (an average Gregorian month) is only used to
        compare step sizes, never for arithmetic.

    Examples:
        >>> TimeUnit.HOUR.component
        3

        >>> TimeUnit.DAY.duration(10).as_tuple()
        (0, 0, 10, 0, 0, 0, 0)

        >>> TimeUnit.from_name("minute")
        <TimeUnit.MINUTE: 'minute'>
    """

    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    NANOSECOND = "nanosecond"

    @classmethod
    def from_name(cls, name: str) -> TimeUnit:
        """Look up a unit by its lowercase name.

        Raises:
            ValueError: If the name is not a unit.
        """
        return cls(name)

    @classmethod
    def for_component(cls, component: int) -> TimeUnit:
        """Return the unit stored at a component index."""
        return list(cls)[component]

    @property
    def component(self) -> int:
        """Index of this unit in a decomposed time."""
        return list(TimeUnit).index(self)

    @property
    def default(self) -> int:
        """Value of this component in a freshly seeded time."""
        return COMPONENT_DEFAULTS[self.component]

    def duration(self, count: int = 1) -> Duration:
        """Return a Duration of ``count`` of this unit."""
        values = [0] * TIME_DIGITS
        values[self.component] = count
        return Duration.from_sequence(values)

    def nominal_nanoseconds(self) -> int:
        """Approximate length of one unit, for ordering step sizes."""
        return nominal_nanoseconds(self.duration())


def nominal_nanoseconds(duration: Duration) -> int:
    """Approximate length of a duration in nanoseconds.

    Years and months count as average Gregorian months; everything
    finer is exact.

    Examples:
        >>> nominal_nanoseconds(Duration(days=1)) < nominal_nanoseconds(Duration(months=1))
        True
    """
    return duration.total_months * NOMINAL_MONTH_NANOS + duration.fixed_nanoseconds


__all__ = ["TimeUnit", "nominal_nanoseconds"]
