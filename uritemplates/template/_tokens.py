"""Tokens of a compiled template.

A compiled template is a tuple of tokens, each either a Literal run of
text or a Field. Every Field carries a FieldKind and the typed qualifier
record for that kind.

This module is not part of the public API; FieldKind, Literal and Field
are re-exported from ``uritemplates.template``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from uritemplates._internal.constants import MINUTES_PER_DAY
from uritemplates.core.decomposed import DecomposedTime
from uritemplates.core.duration import Duration
from uritemplates.errors import UnknownFieldError


class FieldKind(Enum):
    """The closed set of template field kinds.

    The value is the canonical field name; ``from_name`` also accepts the
    aliases ``version``, ``X``, ``ignore`` and ``*``.

    Examples:
        >>> FieldKind.from_name("j")
        <FieldKind.DAY_OF_YEAR: 'j'>
        >>> FieldKind.from_name("ignore")
        <FieldKind.WILDCARD: 'x'>
    """

    YEAR = "Y"
    YEAR_2DIGIT = "y"
    MONTH = "m"
    MONTH_NAME = "b"
    DAY = "d"
    DAY_OF_YEAR = "j"
    HOUR = "H"
    MINUTE = "M"
    SECOND = "S"
    SUBSEC = "subsec"
    VERSION = "v"
    WILDCARD = "x"
    ENUM = "enum"
    PERIODIC = "periodic"
    HOUR_INTERVAL = "hrinterval"

    @classmethod
    def from_name(cls, name: str) -> FieldKind:
        """Return the kind for a field name or alias.

        Raises:
            UnknownFieldError: If the name is not a field.
        """
        alias = _ALIASES.get(name)
        if alias is not None:
            return alias
        try:
            return cls(name)
        except ValueError:
            raise UnknownFieldError(name) from None

    @property
    def is_calendar(self) -> bool:
        """True for the fields that hold one calendar component."""
        return self in _CALENDAR_KINDS

    @property
    def is_numeric(self) -> bool:
        """True if the field's text is always digits."""
        return self in _NUMERIC_KINDS


_ALIASES: dict[str, FieldKind] = {
    "version": FieldKind.VERSION,
    "X": FieldKind.WILDCARD,
    "ignore": FieldKind.WILDCARD,
    "*": FieldKind.WILDCARD,
}

_CALENDAR_KINDS = frozenset(
    {
        FieldKind.YEAR,
        FieldKind.YEAR_2DIGIT,
        FieldKind.MONTH,
        FieldKind.MONTH_NAME,
        FieldKind.DAY,
        FieldKind.DAY_OF_YEAR,
        FieldKind.HOUR,
        FieldKind.MINUTE,
        FieldKind.SECOND,
    }
)

_NUMERIC_KINDS = (_CALENDAR_KINDS - {FieldKind.MONTH_NAME}) | {
    FieldKind.SUBSEC,
    FieldKind.PERIODIC,
}


@dataclass(frozen=True)
class CalendarQualifiers:
    """Qualifiers of the calendar fields ``Y y m b d j H M S``.

    Attributes:
        shift: Units added to the written value to get the time it names.
        delta: Width of each value's span in units of the field.
        phasestart: Anchor making a day field a bucket index (d and j only).
    """

    shift: int = 0
    delta: int = 1
    phasestart: DecomposedTime | None = None


@dataclass(frozen=True)
class SubsecQualifiers:
    """Qualifiers of ``subsec``: the number of decimal places, 1 to 9."""

    places: int


@dataclass(frozen=True)
class EnumQualifiers:
    """Qualifiers of ``enum``.

    Attributes:
        values: The allowed strings, in order.
        id: Key of the value in the named captures.
        named: True if the template gave the id.
        ordinal_days: True if the value's position is also a day offset
            from the start, set for unnamed enums in templates without a
            day or finer field.
    """

    values: tuple[str, ...]
    id: str = "enum"
    named: bool = False
    ordinal_days: bool = False


@dataclass(frozen=True)
class PeriodicQualifiers:
    """Qualifiers of ``periodic``.

    Index ``offset`` names the period beginning at ``start``.
    """

    start: DecomposedTime
    period: Duration
    offset: int = 0


@dataclass(frozen=True)
class HourIntervalQualifiers:
    """Qualifiers of ``hrinterval``: one name per equal slice of the day."""

    names: tuple[str, ...]

    @property
    def bucket_minutes(self) -> int:
        return MINUTES_PER_DAY // len(self.names)


@dataclass(frozen=True)
class VersionQualifiers:
    id: str = "v"
    sep: bool = False
    alpha: bool = False


@dataclass(frozen=True)
class WildcardQualifiers:
    id: str | None = None


Qualifiers = Union[
    CalendarQualifiers,
    SubsecQualifiers,
    EnumQualifiers,
    PeriodicQualifiers,
    HourIntervalQualifiers,
    VersionQualifiers,
    WildcardQualifiers,
]


@dataclass(frozen=True)
class Literal:
    """Text that must appear verbatim."""

    text: str


@dataclass(frozen=True)
class Field:
    """One field of a template.

    Attributes:
        kind: The field kind.
        qualifiers: The typed qualifier record for the kind.
        width: Characters the field occupies, or None when variable.
        end: True if the field belongs to the stop time.
        constants: ``(component, value)`` pairs seeding the start time.
        source: The field as written in the template.
    """

    kind: FieldKind
    qualifiers: Qualifiers
    width: int | None = None
    end: bool = False
    constants: tuple[tuple[int, int], ...] = ()
    source: str = ""


Token = Union[Literal, Field]


__all__ = [
    "FieldKind",
    "CalendarQualifiers",
    "SubsecQualifiers",
    "EnumQualifiers",
    "PeriodicQualifiers",
    "HourIntervalQualifiers",
    "VersionQualifiers",
    "WildcardQualifiers",
    "Qualifiers",
    "Literal",
    "Field",
    "Token",
]
