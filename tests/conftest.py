"""Pytest configuration and fixtures for uritemplates tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add the parent directory to sys.path so uritemplates can be imported
# without needing to install the package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def fixed_clock():
    """A clock pinned to 2020-07-09T16:35:27.123456Z."""
    from uritemplates import FixedClock

    return FixedClock(datetime(2020, 7, 9, 16, 35, 27, 123456, tzinfo=timezone.utc))
