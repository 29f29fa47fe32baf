"""Compilation of canonical template strings into tokens.

The canonical string is scanned left to right into Literal runs and
Field tokens. Fields are written ``$c``, ``$Nc`` (fixed width N),
``$-Nc`` (variable width, unpadded) or ``$(name;q=v;...)``, where commas
may stand in for the semicolons.

This module is not part of the public API.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Callable, Sequence

from uritemplates._internal.constants import (
    DAY,
    DEFAULT_FIELD_WIDTHS,
    HOUR,
    MINUTE,
    MINUTES_PER_DAY,
    MONTH,
    SECOND,
    YEAR,
)
from uritemplates.core.decomposed import DecomposedTime, decompose
from uritemplates.core.duration import Duration, parse_duration
from uritemplates.errors import (
    MalformedDurationError,
    MalformedTimeError,
    MissingQualifierError,
    TemplateCompileError,
    UnknownQualifierError,
)
from uritemplates.template._canonical import split_qualifiers
from uritemplates.template._resolvers import resolver_for
from uritemplates.template._tokens import (
    CalendarQualifiers,
    EnumQualifiers,
    Field,
    FieldKind,
    HourIntervalQualifiers,
    Literal,
    PeriodicQualifiers,
    Qualifiers,
    SubsecQualifiers,
    Token,
    VersionQualifiers,
    WildcardQualifiers,
)
from uritemplates.units.timeunit import nominal_nanoseconds

_FIELD = re.compile(r"\$(?P<width>-?\d+)?(?:\((?P<body>[^)]*)\)|(?P<name>[A-Za-z*]))")

# Qualifiers setting a start component, as in $(j;Y=2012)
_CONSTANTS: dict[str, int] = {
    "Y": YEAR,
    "m": MONTH,
    "d": DAY,
    "H": HOUR,
    "M": MINUTE,
    "S": SECOND,
}

_DAY_KINDS = frozenset({FieldKind.DAY, FieldKind.DAY_OF_YEAR})

# Spans that outrank a calendar field of the same length
_BUCKET_KINDS = frozenset({FieldKind.PERIODIC, FieldKind.HOUR_INTERVAL})

# Fields that place a name within a day
_DAY_OR_FINER_KINDS = frozenset(
    {
        FieldKind.DAY,
        FieldKind.DAY_OF_YEAR,
        FieldKind.HOUR,
        FieldKind.MINUTE,
        FieldKind.SECOND,
        FieldKind.SUBSEC,
        FieldKind.PERIODIC,
        FieldKind.HOUR_INTERVAL,
    }
)


class _Options:
    """Qualifiers of one field, consumed as the field's record is built."""

    def __init__(self, field: str, options: dict[str, str | None]) -> None:
        self.field = field
        self._options = options

    def __contains__(self, key: str) -> bool:
        return key in self._options

    def text(self, key: str) -> str | None:
        if key not in self._options:
            return None
        value = self._options.pop(key)
        if value is None or value == "":
            raise TemplateCompileError(f"qualifier {key!r} of {self.field!r} needs a value")
        return value

    def required_text(self, key: str) -> str:
        value = self.text(key)
        if value is None:
            raise MissingQualifierError(self.field, key)
        return value

    def integer(self, key: str) -> int | None:
        value = self.text(key)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            raise TemplateCompileError(
                f"qualifier {key}={value!r} of {self.field!r} is not an integer"
            ) from None

    def flag(self, key: str) -> bool:
        if key not in self._options:
            return False
        self._options.pop(key)
        return True

    def time(self, key: str, text: str) -> DecomposedTime:
        try:
            return decompose(text)
        except MalformedTimeError as exc:
            raise TemplateCompileError(
                f"qualifier {key}={text!r} of {self.field!r} is not a time"
            ) from exc

    def finish(self) -> None:
        """Reject any qualifier that was not consumed."""
        if self._options:
            raise UnknownQualifierError(self.field, next(iter(self._options)))


def _calendar(kind: FieldKind, opts: _Options) -> CalendarQualifiers:
    shift = opts.integer("shift") or 0
    delta = opts.integer("delta")
    if delta is not None and delta < 1:
        raise TemplateCompileError(f"delta of {opts.field!r} must be positive, got {delta}")
    phasestart = None
    if "phasestart" in opts:
        if kind not in _DAY_KINDS:
            raise UnknownQualifierError(opts.field, "phasestart")
        if delta is None:
            raise MissingQualifierError(opts.field, "delta")
        phasestart = opts.time("phasestart", opts.required_text("phasestart"))
    return CalendarQualifiers(shift=shift, delta=delta or 1, phasestart=phasestart)


def _subsec(kind: FieldKind, opts: _Options) -> SubsecQualifiers:
    places = opts.integer("places")
    if places is None:
        raise MissingQualifierError(opts.field, "places")
    if not 1 <= places <= 9:
        raise TemplateCompileError(f"places of {opts.field!r} must be 1-9, got {places}")
    return SubsecQualifiers(places)


def _list(opts: _Options, key: str) -> tuple[str, ...]:
    items = tuple(opts.required_text(key).split(","))
    if "" in items:
        raise TemplateCompileError(f"qualifier {key!r} of {opts.field!r} has an empty entry")
    return items


def _enum(kind: FieldKind, opts: _Options) -> EnumQualifiers:
    values = _list(opts, "values")
    id = opts.text("id")
    return EnumQualifiers(values, id or "enum", named=id is not None)


def _periodic(kind: FieldKind, opts: _Options) -> PeriodicQualifiers:
    start = opts.time("start", opts.required_text("start"))
    period_text = opts.required_text("period")
    try:
        period = parse_duration(period_text)
    except MalformedDurationError as exc:
        raise TemplateCompileError(
            f"period={period_text!r} of {opts.field!r} is not a duration"
        ) from exc
    return PeriodicQualifiers(start, period, opts.integer("offset") or 0)


def _hour_interval(kind: FieldKind, opts: _Options) -> HourIntervalQualifiers:
    names = _list(opts, "names")
    if MINUTES_PER_DAY % len(names):
        raise TemplateCompileError(
            f"{len(names)} names do not divide the day evenly in {opts.field!r}"
        )
    return HourIntervalQualifiers(names)


def _version(kind: FieldKind, opts: _Options) -> VersionQualifiers:
    return VersionQualifiers(
        id=opts.text("id") or "v",
        sep=opts.flag("sep"),
        alpha=opts.flag("alpha"),
    )


def _wildcard(kind: FieldKind, opts: _Options) -> WildcardQualifiers:
    return WildcardQualifiers(opts.text("id"))


_QUALIFIER_BUILDERS: dict[FieldKind, Callable[[FieldKind, _Options], Qualifiers]] = {
    **{kind: _calendar for kind in FieldKind if kind.is_calendar},
    FieldKind.SUBSEC: _subsec,
    FieldKind.ENUM: _enum,
    FieldKind.PERIODIC: _periodic,
    FieldKind.HOUR_INTERVAL: _hour_interval,
    FieldKind.VERSION: _version,
    FieldKind.WILDCARD: _wildcard,
}


def _uniform_width(items: Sequence[str]) -> int | None:
    widths = {len(item) for item in items}
    return widths.pop() if len(widths) == 1 else None


def _width(kind: FieldKind, qualifiers: Qualifiers, prefix: str | None) -> int | None:
    if prefix is not None:
        width = int(prefix)
        if width == 0:
            raise TemplateCompileError("field width must not be zero")
        return width if width > 0 else None
    if isinstance(qualifiers, CalendarQualifiers) and qualifiers.phasestart is not None:
        return None
    if kind.value in DEFAULT_FIELD_WIDTHS:
        return DEFAULT_FIELD_WIDTHS[kind.value]
    if isinstance(qualifiers, SubsecQualifiers):
        return qualifiers.places
    if isinstance(qualifiers, EnumQualifiers):
        return _uniform_width(qualifiers.values)
    if isinstance(qualifiers, HourIntervalQualifiers):
        return _uniform_width(qualifiers.names)
    return None


def _constants(opts: dict[str, str | None], field: str) -> list[tuple[int, int]]:
    constants = []
    for key in [k for k in opts if k in _CONSTANTS or k == "j"]:
        value = opts.pop(key)
        try:
            number = int(value or "")
        except ValueError:
            raise TemplateCompileError(
                f"constant {key}={value!r} of {field!r} is not an integer"
            ) from None
        if key == "j":
            constants += [(MONTH, 1), (DAY, number)]
        else:
            constants.append((_CONSTANTS[key], number))
    return constants


def build_field(match: re.Match[str]) -> Field:
    """Build the Field for one ``$...`` match of a canonical template."""
    source = match.group(0)
    body = match.group("body")
    parts = split_qualifiers(body) if body is not None else [match.group("name")]
    name = parts[0]
    kind = FieldKind.from_name(name)

    options: dict[str, str | None] = {}
    for part in parts[1:]:
        key, sep, value = part.partition("=")
        if not key:
            raise TemplateCompileError(f"empty qualifier in {source!r}")
        options[key] = value if sep else None

    constants = _constants(options, name)
    end = "end" in options
    if end:
        if not (kind.is_calendar or kind is FieldKind.SUBSEC):
            raise UnknownQualifierError(name, "end")
        del options["end"]

    opts = _Options(name, options)
    qualifiers = _QUALIFIER_BUILDERS[kind](kind, opts)
    opts.finish()

    return Field(
        kind=kind,
        qualifiers=qualifiers,
        width=_width(kind, qualifiers, match.group("width")),
        end=end,
        constants=tuple(constants),
        source=source,
    )


def _propagate_end(tokens: list[Token]) -> list[Token]:
    # Once a field reads into the stop time, so do the calendar fields after it
    result: list[Token] = []
    in_stop = False
    for token in tokens:
        if isinstance(token, Field) and (token.kind.is_calendar or token.kind is FieldKind.SUBSEC):
            if token.end:
                in_stop = True
            elif in_stop:
                token = dataclasses.replace(token, end=True)
        result.append(token)
    return result


def _mark_enum_days(tokens: list[Token]) -> list[Token]:
    # Without a day or finer field, an unnamed enum's position counts days
    if any(isinstance(t, Field) and t.kind in _DAY_OR_FINER_KINDS for t in tokens):
        return tokens
    result: list[Token] = []
    for token in tokens:
        if isinstance(token, Field) and token.kind is FieldKind.ENUM and not token.qualifiers.named:
            qualifiers = dataclasses.replace(token.qualifiers, ordinal_days=True)
            token = dataclasses.replace(token, qualifiers=qualifiers)
        result.append(token)
    return result


def scan(canonical: str) -> tuple[Token, ...]:
    """Split a canonical template into Literal and Field tokens.

    Raises:
        TemplateCompileError: If a ``$`` does not begin a field, or a
            field or qualifier is invalid.

    Examples:
        >>> [type(t).__name__ for t in scan("data_$Y.dat")]
        ['Literal', 'Field', 'Literal']
    """
    tokens: list[Token] = []
    literal_start = 0
    while True:
        dollar = canonical.find("$", literal_start)
        if dollar < 0:
            break
        match = _FIELD.match(canonical, dollar)
        if match is None:
            raise TemplateCompileError(
                f"expected a field name or '(...)' after '$' at position {dollar} in {canonical!r}"
            )
        if dollar > literal_start:
            tokens.append(Literal(canonical[literal_start:dollar]))
        tokens.append(build_field(match))
        literal_start = match.end()
    if literal_start < len(canonical):
        tokens.append(Literal(canonical[literal_start:]))
    return tuple(_mark_enum_days(_propagate_end(tokens)))


def natural_field(tokens: Sequence[Token]) -> Field | None:
    """Return the field with the shortest span, which sets the range step.

    Start fields are preferred over ``end`` fields. On a tie, periodic and
    hrinterval fields win over calendar fields. Enum, version and wildcard
    fields carry no span and are never chosen.

    Returns:
        The natural field, or None if no field carries a span.
    """
    spanning = [
        token
        for token in tokens
        if isinstance(token, Field) and resolver_for(token).step(token) is not None
    ]
    candidates = [f for f in spanning if not f.end] or spanning
    best: Field | None = None
    best_key: tuple[int, int] | None = None
    for field in candidates:
        step: Duration = resolver_for(field).step(field)
        key = (nominal_nanoseconds(step), 0 if field.kind in _BUCKET_KINDS else 1)
        if best_key is None or key < best_key:
            best, best_key = field, key
    return best


def shift_offsets(tokens: Sequence[Token]) -> tuple[Duration, Duration]:
    """Return the total shift of the start fields and of the ``end`` fields.

    Examples:
        >>> start, stop = shift_offsets(scan("$Y$m$d-$(Y;end)$m$(d;shift=1)"))
        >>> start.is_zero, stop.days
        (True, 1)
    """
    start = stop = Duration()
    for token in tokens:
        if isinstance(token, Field):
            shift = resolver_for(token).shift(token)
            if token.end:
                stop = stop + shift
            else:
                start = start + shift
    return start, stop


__all__ = ["build_field", "natural_field", "scan", "shift_offsets"]
