"""Shared fixtures for Pact Cadence tests."""

from collections.abc import Iterator
from zoneinfo import ZoneInfo

import pytest

from pactcadence.utils import dt_utils


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Iterator[None]:
    """Run every test with UTC as the "today" timezone."""
    dt_utils.set_default_timezone(ZoneInfo("UTC"))
    yield
    dt_utils.set_default_timezone(ZoneInfo("UTC"))
