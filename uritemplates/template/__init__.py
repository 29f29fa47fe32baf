"""URI template engine.

This module provides the compiled Template and its operations:
    - parse: file name to time range
    - format: time range to file name
    - format_range: every file name covering a time range

Examples:
    >>> from uritemplates.template import Template
    >>> Template("$Y").parse("2012").range.as_tuple()
    (2012, 1, 1, 0, 0, 0, 0, 2013, 1, 1, 0, 0, 0, 0)
"""

from __future__ import annotations

from uritemplates.template._canonical import make_canonical
from uritemplates.template._tokens import Field, FieldKind, Literal
from uritemplates.template.engine import (
    ParseResult,
    Template,
    compile_template,
    format_range,
    parse,
)

__all__: list[str] = [
    "Template",
    "ParseResult",
    "compile_template",
    "format_range",
    "parse",
    "make_canonical",
    "Field",
    "FieldKind",
    "Literal",
]
