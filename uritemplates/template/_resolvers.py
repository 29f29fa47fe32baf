"""Field resolvers: reading, writing and stepping for each field kind.

Every field kind has one resolver, a stateless object shared by all
templates. A resolver reads the text matched by its field into a
ParseState, renders its field from a FormatContext and, for fields that
carry a span of time, gives the span (``step``) and the start of the
span containing a time (``floor``).

Resolvers signal text they cannot read with ValueError; the engine turns
that into NoMatchError with the position of the field.

This module is not part of the public API.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field as dataclass_field
from typing import Iterable, Mapping

from uritemplates._internal.calendar import month_name_abbrev, month_number
from uritemplates._internal.constants import (
    COMPONENT_DEFAULTS,
    DAY,
    HOUR,
    MINUTE,
    MINUTES_PER_HOUR,
    MONTH,
    NANOS_PER_DAY,
    NANOSECOND,
    TIME_DIGITS,
    TWO_DIGIT_YEAR_PIVOT,
)
from uritemplates.core.decomposed import DecomposedTime, add_duration
from uritemplates.core.duration import Duration
from uritemplates.errors import NonIntegralPeriodError, UnboundedRangeError
from uritemplates.template._tokens import (
    CalendarQualifiers,
    EnumQualifiers,
    Field,
    FieldKind,
    HourIntervalQualifiers,
    PeriodicQualifiers,
    SubsecQualifiers,
    VersionQualifiers,
    WildcardQualifiers,
)
from uritemplates.units.timeunit import TimeUnit

_DIGITS = re.compile(r"[0-9]+")
_SEPARATED_VERSION = re.compile(r"[0-9]+(?:\.[0-9]+)*")
_ALPHA_VERSION = re.compile(r"[A-Za-z0-9]+(?:\.[A-Za-z0-9]+)*")

# Stand-in text for wildcards formatted without a value, by position
_STAND_INS = "xyzabcdefghijklmnopqrstuvw"


@dataclass
class ParseState:
    """Start and stop components accumulated while parsing one name.

    Attributes:
        start: Start components, seeded with defaults and constants.
        stop: Stop components written by ``end`` fields.
        start_offset: Shifts to add to the start once assembled.
        stop_offset: Shifts to add to the stop once assembled.
        stop_components: Indices of the stop components that were written.
        extra: Named captures of enum, version and wildcard fields.
    """

    start: list[int]
    stop: list[int] = dataclass_field(default_factory=lambda: list(COMPONENT_DEFAULTS))
    start_offset: list[int] = dataclass_field(default_factory=lambda: [0] * TIME_DIGITS)
    stop_offset: list[int] = dataclass_field(default_factory=lambda: [0] * TIME_DIGITS)
    stop_components: set[int] = dataclass_field(default_factory=set)
    extra: dict[str, str] = dataclass_field(default_factory=dict)

    @classmethod
    def seeded(cls, constants: Iterable[tuple[int, int]]) -> ParseState:
        """Create a state whose start holds the defaults overlaid with constants."""
        start = list(COMPONENT_DEFAULTS)
        for component, value in constants:
            start[component] = value
        return cls(start)

    def write(self, field: Field, component: int, value: int) -> None:
        if field.end:
            self.stop[component] = value
            self.stop_components.add(component)
        else:
            self.start[component] = value

    def write_time(self, field: Field, time: DecomposedTime) -> None:
        for component, value in enumerate(time):
            self.write(field, component, value)

    def shift(self, field: Field, component: int, amount: int) -> None:
        target = self.stop_offset if field.end else self.start_offset
        target[component] += amount

    def start_time(self) -> DecomposedTime:
        """The assembled, normalized start time."""
        return add_duration(DecomposedTime.from_sequence(self.start), self.start_offset)

    def stop_time(self) -> DecomposedTime | None:
        """The assembled, normalized stop time, or None if no stop field was read.

        Stop components coarser than the coarsest one written are taken
        from the start, so ``$Y$m$d-$(d;end)`` only needs the stop day.
        """
        if not self.stop_components:
            return None
        coarsest = min(self.stop_components)
        values = list(self.stop)
        values[:coarsest] = self.start[:coarsest]
        return add_duration(DecomposedTime.from_sequence(values), self.stop_offset)


@dataclass
class FormatContext:
    """The times and values one format call renders from."""

    start: DecomposedTime
    stop: DecomposedTime
    extra: Mapping[str, str]
    wildcards_seen: int = 0

    def time_for(self, field: Field) -> DecomposedTime:
        return self.stop if field.end else self.start

    def next_stand_in(self) -> str:
        stand_in = _STAND_INS[self.wildcards_seen % len(_STAND_INS)]
        self.wildcards_seen += 1
        return stand_in


def _read_digits(text: str) -> int:
    if not _DIGITS.fullmatch(text):
        raise ValueError(f"expected digits, got {text!r}")
    return int(text)


def _pad(value: int, width: int | None) -> str:
    if width is None:
        return str(value)
    return f"{value:0{width}d}"


class FieldResolver(ABC):
    """Reads and writes one kind of field.

    Subclasses implement ``parse`` and ``format``. Fields that carry a
    span of time also implement ``step`` and ``floor``; shifted fields
    implement ``shift``.
    """

    @abstractmethod
    def parse(self, field: Field, text: str, state: ParseState) -> None:
        """Read the text matched by the field into the state."""

    @abstractmethod
    def format(self, field: Field, context: FormatContext) -> str:
        """Render the field from the context."""

    def shift(self, field: Field) -> Duration:
        """Offset from the written time to the time it names."""
        return Duration()

    def step(self, field: Field) -> Duration | None:
        """The span of one value of the field, or None if it has no span."""
        return None

    def floor(self, field: Field, time: DecomposedTime) -> DecomposedTime:
        """The start of the span containing ``time``."""
        raise UnboundedRangeError(f"field {field.source!r} does not divide time into spans")


class CalendarResolver(FieldResolver):
    """A calendar component written as digits: ``$Y $m $d $H $M $S``."""

    def __init__(self, unit: TimeUnit) -> None:
        self.unit = unit

    def read(self, text: str) -> int:
        return _read_digits(text)

    def render(self, field: Field, value: int) -> str:
        return _pad(value, field.width)

    def value_of(self, time: DecomposedTime) -> int:
        return time[self.unit.component]

    def parse(self, field: Field, text: str, state: ParseState) -> None:
        state.write(field, self.unit.component, self.read(text))
        self._shift(field, state)

    def _shift(self, field: Field, state: ParseState) -> None:
        shift = field.qualifiers.shift
        if shift:
            state.shift(field, self.unit.component, shift)

    def format(self, field: Field, context: FormatContext) -> str:
        return self.render(field, self.value_of(context.time_for(field)))

    def shift(self, field: Field) -> Duration:
        return self.unit.duration(field.qualifiers.shift)

    def step(self, field: Field) -> Duration:
        return self.unit.duration(field.qualifiers.delta)

    def floor(self, field: Field, time: DecomposedTime) -> DecomposedTime:
        component = self.unit.component
        values = list(time.normalize())
        values[component + 1 :] = COMPONENT_DEFAULTS[component + 1 :]
        delta = field.qualifiers.delta
        if delta > 1:
            default = COMPONENT_DEFAULTS[component]
            values[component] = default + (values[component] - default) // delta * delta
        return DecomposedTime.from_sequence(values)


class TwoDigitYearResolver(CalendarResolver):
    """``$y``: years below the pivot are 20xx, the rest 19xx."""

    def __init__(self) -> None:
        super().__init__(TimeUnit.YEAR)

    def read(self, text: str) -> int:
        value = _read_digits(text)
        return 2000 + value if value < TWO_DIGIT_YEAR_PIVOT else 1900 + value

    def value_of(self, time: DecomposedTime) -> int:
        return time.year % 100


class MonthNameResolver(CalendarResolver):
    """``$b``: the English month abbreviation, ``Jan`` to ``Dec``."""

    def __init__(self) -> None:
        super().__init__(TimeUnit.MONTH)

    def read(self, text: str) -> int:
        return month_number(text)

    def render(self, field: Field, value: int) -> str:
        return month_name_abbrev(value)


class DayOfYearResolver(CalendarResolver):
    """``$j``: the day of year, written into the day with month 1."""

    def __init__(self) -> None:
        super().__init__(TimeUnit.DAY)

    def parse(self, field: Field, text: str, state: ParseState) -> None:
        doy = _read_digits(text)
        if not 1 <= doy <= 366:
            raise ValueError(f"day of year must be 1-366, got {doy}")
        state.write(field, MONTH, 1)
        state.write(field, DAY, doy)
        self._shift(field, state)

    def value_of(self, time: DecomposedTime) -> int:
        return time.day_of_year

    def floor(self, field: Field, time: DecomposedTime) -> DecomposedTime:
        t = time.normalize()
        delta = field.qualifiers.delta
        doy = 1 + (t.day_of_year - 1) // delta * delta
        return DecomposedTime(t.year, 1, doy).normalize()


class DeltaDayResolver(FieldResolver):
    """A ``d`` or ``j`` field with ``phasestart``: the index of a day bucket.

    Value ``v`` names the ``delta`` days starting ``v * delta`` days after
    ``phasestart``.
    """

    def _bucket_start(self, q: CalendarQualifiers, index: int) -> DecomposedTime:
        return add_duration(q.phasestart, Duration(days=index * q.delta))

    def _index_of(self, q: CalendarQualifiers, time: DecomposedTime) -> int:
        elapsed = time.ordinal_nanoseconds() - q.phasestart.ordinal_nanoseconds()
        return elapsed // (q.delta * NANOS_PER_DAY)

    def parse(self, field: Field, text: str, state: ParseState) -> None:
        q = field.qualifiers
        state.write_time(field, self._bucket_start(q, _read_digits(text)))
        if q.shift:
            state.shift(field, DAY, q.shift)

    def format(self, field: Field, context: FormatContext) -> str:
        q = field.qualifiers
        return _pad(self._index_of(q, context.time_for(field)), field.width)

    def shift(self, field: Field) -> Duration:
        return Duration(days=field.qualifiers.shift)

    def step(self, field: Field) -> Duration:
        return Duration(days=field.qualifiers.delta)

    def floor(self, field: Field, time: DecomposedTime) -> DecomposedTime:
        q = field.qualifiers
        return self._bucket_start(q, self._index_of(q, time))


class SubsecResolver(FieldResolver):
    """``$(subsec;places=N)``: the first N decimals of the second."""

    def _scale(self, q: SubsecQualifiers) -> int:
        return 10 ** (9 - q.places)

    def parse(self, field: Field, text: str, state: ParseState) -> None:
        state.write(field, NANOSECOND, _read_digits(text) * self._scale(field.qualifiers))

    def format(self, field: Field, context: FormatContext) -> str:
        q = field.qualifiers
        return _pad(context.time_for(field).nanosecond // self._scale(q), q.places)

    def step(self, field: Field) -> Duration:
        return Duration(nanoseconds=self._scale(field.qualifiers))

    def floor(self, field: Field, time: DecomposedTime) -> DecomposedTime:
        t = time.normalize()
        scale = self._scale(field.qualifiers)
        return t.replace(nanosecond=t.nanosecond // scale * scale)


class PeriodicResolver(FieldResolver):
    """``$(periodic;start=...;period=...;offset=N)``: a count of periods.

    Index ``offset`` names the period beginning at ``start``; index ``i``
    the one beginning ``i - offset`` periods later.
    """

    def index_of(self, q: PeriodicQualifiers, time: DecomposedTime) -> int:
        """Whole periods from ``q.start`` to the period containing ``time``.

        Raises:
            NonIntegralPeriodError: If the period is zero or mixes years or
                months with days or finer units.
        """
        period = q.period
        if period.is_zero:
            raise NonIntegralPeriodError("periodic field has a zero period")
        if period.has_calendar_units and period.has_fixed_units:
            raise NonIntegralPeriodError(
                f"period {period} mixes years or months with days or finer units"
            )
        start = q.start.normalize()
        t = time.normalize()
        if period.has_calendar_units:
            months = (t.year - start.year) * 12 + (t.month - start.month)
            if t.as_tuple()[DAY:] < start.as_tuple()[DAY:]:
                months -= 1
            return months // period.total_months
        return (t.ordinal_nanoseconds() - start.ordinal_nanoseconds()) // period.fixed_nanoseconds

    def parse(self, field: Field, text: str, state: ParseState) -> None:
        q = field.qualifiers
        index = _read_digits(text)
        state.write_time(field, add_duration(q.start, q.period * (index - q.offset)))

    def format(self, field: Field, context: FormatContext) -> str:
        q = field.qualifiers
        return _pad(self.index_of(q, context.time_for(field)) + q.offset, field.width)

    def step(self, field: Field) -> Duration:
        return field.qualifiers.period

    def floor(self, field: Field, time: DecomposedTime) -> DecomposedTime:
        q = field.qualifiers
        return add_duration(q.start, q.period * self.index_of(q, time))


class HourIntervalResolver(FieldResolver):
    """``$(hrinterval;names=a,b,...)``: a name for each equal slice of the day."""

    def parse(self, field: Field, text: str, state: ParseState) -> None:
        q: HourIntervalQualifiers = field.qualifiers
        if text not in q.names:
            raise ValueError(f"{text!r} is not one of {', '.join(q.names)}")
        minutes = q.names.index(text) * q.bucket_minutes
        state.write(field, HOUR, minutes // MINUTES_PER_HOUR)
        state.write(field, MINUTE, minutes % MINUTES_PER_HOUR)

    def _minute_of_day(self, time: DecomposedTime) -> int:
        return time.hour * MINUTES_PER_HOUR + time.minute

    def format(self, field: Field, context: FormatContext) -> str:
        q: HourIntervalQualifiers = field.qualifiers
        return q.names[self._minute_of_day(context.time_for(field)) // q.bucket_minutes]

    def step(self, field: Field) -> Duration:
        return Duration(minutes=field.qualifiers.bucket_minutes)

    def floor(self, field: Field, time: DecomposedTime) -> DecomposedTime:
        t = time.normalize()
        bucket = field.qualifiers.bucket_minutes
        minutes = self._minute_of_day(t) // bucket * bucket
        return DecomposedTime(
            t.year, t.month, t.day, minutes // MINUTES_PER_HOUR, minutes % MINUTES_PER_HOUR
        )


class EnumResolver(FieldResolver):
    """``$(enum;values=a,b,...;id=name)``: one of a fixed set of strings."""

    def parse(self, field: Field, text: str, state: ParseState) -> None:
        q: EnumQualifiers = field.qualifiers
        if text not in q.values:
            raise ValueError(f"{text!r} is not one of {', '.join(q.values)}")
        state.extra[q.id] = text
        if q.ordinal_days:
            state.shift(field, DAY, q.values.index(text))

    def day_offset(
        self,
        field: Field,
        start: DecomposedTime,
        span_start: DecomposedTime | None,
        extra: Mapping[str, str],
    ) -> int:
        """The position to write for a start time, in days after its span.

        A value given in ``extra`` wins. Otherwise the days elapsed since
        the start of the natural span are used when they name a value.
        """
        q: EnumQualifiers = field.qualifiers
        if extra.get(q.id) in q.values:
            return q.values.index(extra[q.id])
        if span_start is not None:
            elapsed = start.to_ordinal() - span_start.to_ordinal()
            if 0 <= elapsed < len(q.values):
                return elapsed
        return 0

    def format(self, field: Field, context: FormatContext) -> str:
        q: EnumQualifiers = field.qualifiers
        return context.extra.get(q.id, q.values[0])


class VersionResolver(FieldResolver):
    """``$v``: a version string, recorded under its id."""

    def parse(self, field: Field, text: str, state: ParseState) -> None:
        q: VersionQualifiers = field.qualifiers
        if not text:
            raise ValueError("empty version")
        if q.sep and not _SEPARATED_VERSION.fullmatch(text):
            raise ValueError(f"expected dot separated digits, got {text!r}")
        if q.alpha and not _ALPHA_VERSION.fullmatch(text):
            raise ValueError(f"expected letters and digits, got {text!r}")
        state.extra[q.id] = text

    def format(self, field: Field, context: FormatContext) -> str:
        return context.extra.get(field.qualifiers.id, "1")


class WildcardResolver(FieldResolver):
    """``$x``, ``$X``, ``$(ignore)``, ``*``: any text, kept only if it has an id."""

    def parse(self, field: Field, text: str, state: ParseState) -> None:
        q: WildcardQualifiers = field.qualifiers
        if q.id is not None:
            state.extra[q.id] = text

    def format(self, field: Field, context: FormatContext) -> str:
        q: WildcardQualifiers = field.qualifiers
        stand_in = context.next_stand_in()
        if q.id is not None:
            return context.extra.get(q.id, stand_in)
        return stand_in


_RESOLVERS: dict[FieldKind, FieldResolver] = {
    FieldKind.YEAR: CalendarResolver(TimeUnit.YEAR),
    FieldKind.YEAR_2DIGIT: TwoDigitYearResolver(),
    FieldKind.MONTH: CalendarResolver(TimeUnit.MONTH),
    FieldKind.MONTH_NAME: MonthNameResolver(),
    FieldKind.DAY: CalendarResolver(TimeUnit.DAY),
    FieldKind.DAY_OF_YEAR: DayOfYearResolver(),
    FieldKind.HOUR: CalendarResolver(TimeUnit.HOUR),
    FieldKind.MINUTE: CalendarResolver(TimeUnit.MINUTE),
    FieldKind.SECOND: CalendarResolver(TimeUnit.SECOND),
    FieldKind.SUBSEC: SubsecResolver(),
    FieldKind.VERSION: VersionResolver(),
    FieldKind.WILDCARD: WildcardResolver(),
    FieldKind.ENUM: EnumResolver(),
    FieldKind.PERIODIC: PeriodicResolver(),
    FieldKind.HOUR_INTERVAL: HourIntervalResolver(),
}

_DELTA_DAY = DeltaDayResolver()


def resolver_for(field: Field) -> FieldResolver:
    """Return the shared resolver for a field."""
    q = field.qualifiers
    if isinstance(q, CalendarQualifiers) and q.phasestart is not None:
        return _DELTA_DAY
    return _RESOLVERS[field.kind]


__all__ = [
    "ParseState",
    "FormatContext",
    "FieldResolver",
    "resolver_for",
]
