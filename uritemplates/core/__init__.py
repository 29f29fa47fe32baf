"""Core temporal types.

This module provides the value types the template engine works with:
    - DecomposedTime: Calendar time as seven integer components
    - Duration: ISO 8601 component-wise offset
    - TimeRange: Start and stop pair
"""

from __future__ import annotations

from uritemplates.core.decomposed import DecomposedTime
from uritemplates.core.duration import Duration
from uritemplates.core.timerange import TimeRange

__all__: list[str] = [
    "DecomposedTime",
    "Duration",
    "TimeRange",
]
