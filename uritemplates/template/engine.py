"""Template: compile, parse, format and enumerate file names.

A Template is compiled once from its source string and is immutable
thereafter, so one instance may be shared freely between threads.

Examples:
    >>> t = Template("ace_mag_$Y_$j_to_$(Y;end)_$j.cdf")
    >>> str(t.parse("ace_mag_2005_001_to_2005_003.cdf").range)
    '2005-01-01T00:00:00.000000000Z/2005-01-03T00:00:00.000000000Z'

    >>> t.format("2005-001", "2005-003")
    'ace_mag_2005_001_to_2005_003.cdf'

    >>> format_range("data_$Y.dat", "2001-03-22", "2004-08-18")
    ['data_2001.dat', 'data_2002.dat', 'data_2003.dat', 'data_2004.dat']
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Iterator, Mapping, NamedTuple

from uritemplates.core.decomposed import DecomposedTime, add_duration, decompose, subtract_duration
from uritemplates.core.duration import Duration
from uritemplates.core.timerange import TimeRange
from uritemplates.errors import NoMatchError, UnboundedRangeError
from uritemplates.template._canonical import make_canonical
from uritemplates.template._compiler import natural_field, scan, shift_offsets
from uritemplates.template._resolvers import FormatContext, ParseState, resolver_for
from uritemplates.template._tokens import Field, FieldKind, Literal, Token

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")

TimeLike = DecomposedTime | str


class ParseResult(NamedTuple):
    """The time range named by a file name, and its named captures.

    Attributes:
        range: The start and stop times.
        extra: Values of enum, version and named wildcard fields, by id.
    """

    range: TimeRange
    extra: dict[str, str]

    @property
    def start(self) -> DecomposedTime:
        return self.range.start

    @property
    def stop(self) -> DecomposedTime:
        return self.range.stop


def _as_time(value: TimeLike) -> DecomposedTime:
    if isinstance(value, str):
        return decompose(value)
    return value.normalize()


class Template:
    """A compiled URI template.

    Templates mix literal text with fields such as ``$Y``, ``$(j;Y=2012)``
    or ``$(periodic;start=2000-001;period=P1D)``. Legacy ``%Y`` and
    ``%{Y,m=02}`` syntax is accepted and rewritten first.

    Attributes:
        spec: The template as given.
        canonical: The template in canonical syntax.
        tokens: The Literal and Field tokens, in order.
        natural_field: The field whose span sets the step of
            ``format_range``, or None.

    Raises:
        TemplateCompileError: If the template cannot be compiled.

    Examples:
        >>> t = Template("$Y-$j")
        >>> t.parse("2012-017").range.as_tuple()
        (2012, 1, 17, 0, 0, 0, 0, 2012, 1, 18, 0, 0, 0, 0)
        >>> t.natural_field.source
        '$j'
    """

    __slots__ = ("_spec", "_canonical", "_tokens", "_natural", "_start_shift", "_stop_shift")

    make_canonical = staticmethod(make_canonical)

    def __init__(self, spec: str) -> None:
        canonical = make_canonical(spec)
        tokens = scan(canonical)
        self._spec = spec
        self._canonical = canonical
        self._tokens: tuple[Token, ...] = tokens
        self._natural: Field | None = natural_field(tokens)
        self._start_shift, self._stop_shift = shift_offsets(tokens)
        logger.debug(
            "compiled %r into %d tokens, natural field %s",
            spec,
            len(tokens),
            self._natural.source if self._natural else None,
        )

    @property
    def spec(self) -> str:
        return self._spec

    @property
    def canonical(self) -> str:
        return self._canonical

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    @property
    def fields(self) -> tuple[Field, ...]:
        """The Field tokens, in order."""
        return tuple(t for t in self._tokens if isinstance(t, Field))

    @property
    def natural_field(self) -> Field | None:
        return self._natural

    def step(self) -> Duration | None:
        """The span of one name, or None if the template names no span."""
        if self._natural is None:
            return None
        return resolver_for(self._natural).step(self._natural)

    def __repr__(self) -> str:
        return f"Template({self._spec!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Template):
            return NotImplemented
        return self._canonical == other._canonical

    def __hash__(self) -> int:
        return hash(self._canonical)

    # =========================================================================
    # Parsing
    # =========================================================================

    def _field_end(self, field: Field, following: Token | None, text: str, position: int) -> int:
        if field.width is not None:
            end = position + field.width
            if end > len(text):
                raise NoMatchError(
                    f"{field.source} needs {field.width} characters at position {position} in {text!r}",
                    position,
                    field.source,
                )
            return end
        if following is None:
            return len(text)
        if isinstance(following, Literal):
            end = text.find(following.text, position)
            if end < 0:
                raise NoMatchError(
                    f"expected {following.text!r} after {field.source} at position {position} in {text!r}",
                    position,
                    field.source,
                )
            return end
        # Two fields with nothing between them: take what the first can hold
        if field.kind.is_numeric:
            match = _DIGITS.match(text, position)
            return match.end() if match else position
        return len(text)

    def _match(self, text: str) -> list[tuple[Field, str, int]]:
        pieces: list[tuple[Field, str, int]] = []
        position = 0
        tokens = self._tokens
        for index, token in enumerate(tokens):
            if isinstance(token, Literal):
                if not text.startswith(token.text, position):
                    raise NoMatchError(
                        f"expected {token.text!r} at position {position} in {text!r}",
                        position,
                        token.text,
                    )
                position += len(token.text)
                continue
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            end = self._field_end(token, following, text, position)
            pieces.append((token, text[position:end], position))
            position = end
        if position != len(text):
            raise NoMatchError(
                f"unexpected {text[position:]!r} at position {position} in {text!r}",
                position,
            )
        return pieces

    def parse(self, text: str) -> ParseResult:
        """Parse a name into the time range it covers.

        Fields marked ``end`` (and calendar fields after them) give the
        stop time. Without them the stop is the start plus the span of
        the natural field.

        Args:
            text: A name produced by this template.

        Returns:
            The range and the named captures.

        Raises:
            NoMatchError: If the text does not match, naming the position
                and the literal or field that failed.
            MalformedRangeError: If the stop read from the name precedes
                the start.

        Examples:
            >>> r = Template("$Y_sc$(enum;values=a,b,c,d;id=sc)").parse("2003_scd")
            >>> r.start.year, r.extra["sc"]
            (2003, 'd')
        """
        pieces = self._match(text)
        state = ParseState.seeded(c for field, _, _ in pieces for c in field.constants)
        for field, piece, position in pieces:
            try:
                resolver_for(field).parse(field, piece, state)
            except ValueError as exc:
                raise NoMatchError(
                    f"{field.source} cannot read {piece!r} at position {position} in {text!r}: {exc}",
                    position,
                    field.source,
                ) from exc

        start = state.start_time()
        stop = state.stop_time()
        if stop is None:
            step = self.step()
            stop = start if step is None else add_duration(start, step)
        result = ParseResult(TimeRange(start, stop), state.extra)
        logger.debug("parsed %r as %s", text, result.range)
        return result

    # =========================================================================
    # Formatting
    # =========================================================================

    def format(
        self,
        start: TimeLike,
        stop: TimeLike | None = None,
        extra: Mapping[str, str] | None = None,
    ) -> str:
        """Format the name for a time range.

        Args:
            start: Start time, as a DecomposedTime or ISO 8601 text.
            stop: Stop time; defaults to the start plus the natural span.
            extra: Values for enum, version and named wildcard fields.
                Missing enums use their first value, versions ``1`` and
                wildcards the stand-ins ``x``, ``y``, ``z``...

        Returns:
            The name.

        Raises:
            MalformedTimeError: If a time string cannot be parsed.
            NonIntegralPeriodError: If a periodic field's period cannot be
                counted in whole steps.

        Examples:
            >>> Template("$Y$m$d-$(Y;end)$m$(d;shift=1)").format("2013-02-02", "2014-03-04")
            '20130202-20140303'
        """
        start_time = _as_time(start)
        if stop is None:
            step = self.step()
            stop_time = start_time if step is None else add_duration(start_time, step)
        else:
            stop_time = _as_time(stop)

        extra = dict(extra or {})
        start_time = self._strip_enum_days(start_time, extra)
        context = FormatContext(
            subtract_duration(start_time, self._start_shift),
            subtract_duration(stop_time, self._stop_shift),
            extra,
        )
        parts = [
            token.text if isinstance(token, Literal) else resolver_for(token).format(token, context)
            for token in self._tokens
        ]
        name = "".join(parts)
        logger.debug("formatted %s/%s as %r", start_time, stop_time, name)
        return name

    def _strip_enum_days(self, start: DecomposedTime, extra: dict[str, str]) -> DecomposedTime:
        # Undo the day offset parse adds for an unnamed enum's position
        counting = [
            token
            for token in self._tokens
            if isinstance(token, Field)
            and token.kind is FieldKind.ENUM
            and token.qualifiers.ordinal_days
        ]
        if not counting:
            return start
        natural = self._natural
        span_start = resolver_for(natural).floor(natural, start) if natural else None
        for token in counting:
            q = token.qualifiers
            index = resolver_for(token).day_offset(token, start, span_start, extra)
            extra[q.id] = q.values[index]
            start = subtract_duration(start, Duration(days=index))
        return start

    def format_range(self, start: TimeLike, stop: TimeLike) -> Iterator[str]:
        """Yield the name of every span intersecting ``[start, stop)``.

        The first span is the one containing ``start``, found by flooring
        it to the natural field (the first of the month for a monthly
        template). Each call starts over.

        Raises:
            UnboundedRangeError: If the template has no field with a span,
                or its span is zero.

        Examples:
            >>> list(Template("$Y$m").format_range("2001-11-20", "2002-02-01"))
            ['200111', '200112', '200201']
        """
        natural = self._natural
        if natural is None:
            raise UnboundedRangeError(f"template {self._spec!r} has no field with a time span")
        resolver = resolver_for(natural)
        step = resolver.step(natural)
        if step.is_zero:
            raise UnboundedRangeError(f"field {natural.source!r} of {self._spec!r} has a zero span")
        first = resolver.floor(natural, _as_time(start))
        return self._iter_spans(first, _as_time(stop), step)

    def _iter_spans(
        self, span_start: DecomposedTime, query_stop: DecomposedTime, step: Duration
    ) -> Iterator[str]:
        while span_start < query_stop:
            span_stop = add_duration(span_start, step)
            if span_stop <= span_start:
                raise UnboundedRangeError(f"step {step} does not advance from {span_start}")
            logger.debug("span %s/%s", span_start, span_stop)
            yield self.format(span_start, span_stop)
            span_start = span_stop


@functools.lru_cache(maxsize=256)
def compile_template(spec: str) -> Template:
    """Compile a template, reusing an earlier compilation of the same string.

    The 256 most recently used templates are kept.

    Raises:
        TemplateCompileError: If the template cannot be compiled.
    """
    return Template(spec)


def format_range(spec: str, start: TimeLike, stop: TimeLike) -> list[str]:
    """List the names of ``spec`` covering ``[start, stop)``.

    Examples:
        >>> format_range("data_$Y.dat", "2001-03-22", "2004-08-18")
        ['data_2001.dat', 'data_2002.dat', 'data_2003.dat', 'data_2004.dat']
    """
    return list(compile_template(spec).format_range(start, stop))


def parse(spec: str, text: str) -> ParseResult:
    """Parse ``text`` with the compiled ``spec``."""
    return compile_template(spec).parse(text)


__all__ = [
    "Template",
    "ParseResult",
    "compile_template",
    "format_range",
    "parse",
    "make_canonical",
]

