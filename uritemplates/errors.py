"""uritemplates exception hierarchy.

All uritemplates-specific exceptions inherit from UriTemplatesError.
"""

from __future__ import annotations


class UriTemplatesError(Exception):
    """Base exception for all uritemplates errors."""

    pass


class MalformedTimeError(UriTemplatesError):
    """Failed to decompose a time string.

    Examples:
        - Length matches none of the supported ISO 8601 shapes
        - Non-digit characters where digits are expected
        - Month or day outside calendar bounds
        - ``last<unit>`` with an unrecognized unit
    """

    pass


class InvalidTimeComponentError(UriTemplatesError):
    """A decomposed time component violates a calendar invariant.

    Raised by the calendar arithmetic when its own contract is broken,
    e.g. the hour is still 24 or more after carrying, or when a
    day-of-year or Julian day argument is out of range.
    """

    pass


class MalformedDurationError(UriTemplatesError):
    """Failed to parse an ISO 8601 duration such as ``P1D`` or ``PT0.5S``."""

    pass


class MalformedRangeError(UriTemplatesError):
    """Failed to parse a time range, or its stop precedes its start."""

    pass


class TemplateCompileError(UriTemplatesError):
    """A template string could not be compiled."""

    pass


class UnsupportedLegacySyntaxError(TemplateCompileError):
    """A ``%{...}``/``${...}`` construct that has no canonical rewrite."""

    pass


class UnknownFieldError(TemplateCompileError):
    """A field name outside the supported set.

    Attributes:
        field: The offending field name.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"unknown field: {field!r}")


class UnknownQualifierError(TemplateCompileError):
    """A qualifier the field kind does not accept.

    Attributes:
        field: The field name the qualifier was attached to.
        qualifier: The offending qualifier name.
    """

    def __init__(self, field: str, qualifier: str) -> None:
        self.field = field
        self.qualifier = qualifier
        super().__init__(f"field {field!r} does not accept qualifier {qualifier!r}")


class MissingQualifierError(TemplateCompileError):
    """A qualifier the field kind requires was not given.

    Attributes:
        field: The field name.
        qualifier: The missing qualifier name.
    """

    def __init__(self, field: str, qualifier: str) -> None:
        self.field = field
        self.qualifier = qualifier
        super().__init__(f"field {field!r} requires qualifier {qualifier!r}")


class NoMatchError(UriTemplatesError):
    """Text does not match a compiled template.

    Attributes:
        position: Offset into the text where matching failed.
        token: Source text of the literal or field that failed.
    """

    def __init__(self, message: str, position: int = 0, token: str = "") -> None:
        self.position = position
        self.token = token
        super().__init__(message)


class NonIntegralPeriodError(UriTemplatesError):
    """A periodic field's period cannot be counted in whole steps.

    Raised when formatting a period that mixes calendar units (years,
    months) with fixed-length units (days and finer).
    """

    pass


class UnboundedRangeError(UriTemplatesError):
    """Range enumeration cannot determine or advance its step."""

    pass


__all__ = [
    "UriTemplatesError",
    "MalformedTimeError",
    "InvalidTimeComponentError",
    "MalformedDurationError",
    "MalformedRangeError",
    "TemplateCompileError",
    "UnsupportedLegacySyntaxError",
    "UnknownFieldError",
    "UnknownQualifierError",
    "MissingQualifierError",
    "NoMatchError",
    "NonIntegralPeriodError",
    "UnboundedRangeError",
]
