"""Rewriting of legacy template syntax into canonical form.

Older templates write fields as ``%Y``, ``%{Y,m=02}`` or ``${Y,m=02}``
and wildcards as ``*``. The canonical form is ``$Y``, ``$(Y;m=02)`` and
``$x``.

This module is not part of the public API; ``make_canonical`` is
re-exported from the package root.
"""

from __future__ import annotations

import logging
import re

from uritemplates.errors import UnsupportedLegacySyntaxError

logger = logging.getLogger(__name__)

_WIDTH_BRACE = re.compile(r"\$-?\d+\{")

# Qualifiers that take no value; a bare word after a list is one of these
_FLAGS = frozenset({"end", "sep", "alpha"})

# Qualifiers whose values are comma separated lists
_LIST_QUALIFIERS = ("values=", "names=")


def split_qualifiers(body: str) -> list[str]:
    """Split the inside of ``$(...)`` into the field name and its qualifiers.

    Semicolons separate qualifiers. When there are none, commas do, except
    that a bare word following a ``values=`` or ``names=`` list is another
    list entry rather than a new qualifier.

    Examples:
        >>> split_qualifiers("j;Y=2012")
        ['j', 'Y=2012']
        >>> split_qualifiers("enum,values=a,b,c,id=sc")
        ['enum', 'values=a,b,c', 'id=sc']
    """
    if ";" in body:
        return body.split(";")

    parts: list[str] = []
    in_list = False
    for piece in body.split(","):
        if parts and in_list and "=" not in piece and piece not in _FLAGS:
            parts[-1] += "," + piece
            continue
        parts.append(piece)
        in_list = piece.startswith(_LIST_QUALIFIERS)
    return parts


def make_canonical(spec: str) -> str:
    """Rewrite a template from legacy syntax into canonical syntax.

    Canonical templates are returned unchanged.

    Args:
        spec: The template, legacy or canonical.

    Returns:
        The canonical template.

    Raises:
        UnsupportedLegacySyntaxError: For ``$N{...}`` width forms and
            unbalanced braces.

    Examples:
        >>> make_canonical("%{Y,m=02}*.dat")
        '$(Y;m=02)$x.dat'
        >>> make_canonical("%Y%m%d.dat")
        '$Y$m$d.dat'
    """
    text = spec if "$" in spec else spec.replace("%", "$")

    width_brace = _WIDTH_BRACE.search(text)
    if width_brace is not None:
        raise UnsupportedLegacySyntaxError(
            f"width before a brace is not supported at position {width_brace.start()} in {spec!r}"
        )

    out: list[str] = []
    i = 0
    while i < len(text):
        c = text[i]
        if text.startswith("${", i):
            close = text.find("}", i + 2)
            if close < 0:
                raise UnsupportedLegacySyntaxError(
                    f"unbalanced brace at position {i} in {spec!r}"
                )
            body = text[i + 2 : close]
            if "{" in body:
                raise UnsupportedLegacySyntaxError(
                    f"nested brace at position {i} in {spec!r}"
                )
            out.append("$(" + ";".join(split_qualifiers(body)) + ")")
            i = close + 1
        elif c in "{}":
            raise UnsupportedLegacySyntaxError(f"unbalanced brace at position {i} in {spec!r}")
        elif text.startswith("$(", i):
            close = text.find(")", i + 2)
            end = len(text) if close < 0 else close + 1
            out.append(text[i:end])
            i = end
        elif c == "*" and not (i > 0 and text[i - 1] == "$"):
            out.append("$x")
            i += 1
        else:
            out.append(c)
            i += 1

    canonical = "".join(out)
    if canonical != spec:
        logger.debug("rewrote legacy template %r as %r", spec, canonical)
    return canonical


__all__ = ["make_canonical", "split_qualifiers"]
