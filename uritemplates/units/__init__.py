"""Time units.

This module provides the TimeUnit enumeration for the seven components
of a decomposed time.
"""

from __future__ import annotations

from uritemplates.units.timeunit import TimeUnit, nominal_nanoseconds

__all__: list[str] = [
    "TimeUnit",
    "nominal_nanoseconds",
]
