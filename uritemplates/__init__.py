"""uritemplates: HAPI URI templates and the calendar arithmetic behind them.

uritemplates converts between time ranges and file or resource names
built from URI templates such as ``ace_mag_$Y_$j_to_$(Y;end)_$j.cdf``.

Core Types:
    DecomposedTime: Calendar time as seven integer components
    Duration: ISO 8601 component-wise offset
    TimeRange: Start and stop times

Templates:
    Template: A compiled template with parse, format and format_range
    compile_template: Compile (and cache) a template
    format_range: Every name of a template covering a time range
    make_canonical: Rewrite legacy ``%Y``/``%{...}`` syntax

Time Functions:
    decompose, recompose, normalize: ISO 8601 text and seven components
    add_duration, subtract_duration: Offset arithmetic
    parse_duration, format_duration: ISO 8601 durations
    parse_time_range: ISO 8601 ``start/stop`` ranges

Exceptions:
    UriTemplatesError: Base exception

Logging:
    Records go to the ``uritemplates`` logger, which has a NullHandler;
    configure logging in the application to see them.

Example:
    >>> from uritemplates import Template
    >>> t = Template("$(periodic;offset=0;start=2000-001;period=P1D)")
    >>> str(t.parse("20").range)
    '2000-01-21T00:00:00.000000000Z/2000-01-22T00:00:00.000000000Z'
"""

from __future__ import annotations

import logging

__version__ = "0.1.0"

# Core types
from uritemplates.core.decomposed import (
    DecomposedTime,
    add_duration,
    decompose,
    from_julian_day,
    julian_day,
    normalize,
    now,
    recompose,
    subtract_duration,
    to_epoch_millis,
)
from uritemplates.core.duration import Duration, format_duration, parse_duration
from uritemplates.core.timerange import TimeRange, parse_time_range

# Calendar
from uritemplates._internal.calendar import day_of_year, month_for_day_of_year
from uritemplates._internal.clock import Clock, FixedClock, SystemClock

# Units
from uritemplates.units.timeunit import TimeUnit

# Exceptions
from uritemplates.errors import (
    InvalidTimeComponentError,
    MalformedDurationError,
    MalformedRangeError,
    MalformedTimeError,
    MissingQualifierError,
    NoMatchError,
    NonIntegralPeriodError,
    TemplateCompileError,
    UnboundedRangeError,
    UnknownFieldError,
    UnknownQualifierError,
    UnsupportedLegacySyntaxError,
    UriTemplatesError,
)

# Format functions
from uritemplates.format import (
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

# Templates
from uritemplates.template import (
    ParseResult,
    Template,
    compile_template,
    format_range,
    make_canonical,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = [
    "__version__",
    # Core types
    "DecomposedTime",
    "Duration",
    "TimeRange",
    "decompose",
    "recompose",
    "normalize",
    "add_duration",
    "subtract_duration",
    "now",
    "julian_day",
    "from_julian_day",
    "to_epoch_millis",
    "parse_duration",
    "format_duration",
    "parse_time_range",
    # Calendar
    "day_of_year",
    "month_for_day_of_year",
    "Clock",
    "FixedClock",
    "SystemClock",
    # Units
    "TimeUnit",
    # Exceptions
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
    # Format functions
    "normalize_time_string",
    "floor",
    "ceil",
    "next_day",
    "previous_day",
    "count_off_days",
    "reformat_iso_time",
    "month_name_abbrev",
    "month_number",
    # Templates
    "Template",
    "ParseResult",
    "compile_template",
    "format_range",
    "make_canonical",
]
