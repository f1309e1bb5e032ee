# File: utils/dt_utils.py
"""Date utilities for Pact Cadence.

Pure Python date functions shared by the engines.
All functions here can be unit tested without any clock mocking beyond
the explicit reference dates they accept.

Uses standard library: datetime, zoneinfo, plus dateutil.

Functions:
    - set_default_timezone / get_default_timezone: "today" configuration
    - dt_today_local: Get today's date in the configured timezone
    - dt_parse_date: Parse date strings
    - dt_parse_datetime: Parse ISO datetime strings (UTC when naive)
    - dt_weekday: Weekday number with 0=Sunday .. 6=Saturday
    - dt_days_between: Whole days from one date to another
    - dt_days_inclusive: Inclusive day count of a range
    - dt_iter_days: Iterate the dates of an inclusive range
    - dt_week_bounds: Monday-Sunday week containing a date
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

# Third-party date utilities
from dateutil.relativedelta import MO, SU, relativedelta
from dateutil.rrule import DAILY, rrule

if TYPE_CHECKING:
    from collections.abc import Iterator

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone used to resolve "today".

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Today's date in the specified timezone.
    """
    return datetime.now(tz or DEFAULT_TIME_ZONE).date()


def resolve_reference_date(reference_date: date | datetime | None) -> date:
    """Normalize an optional reference date to a plain `datetime.date`.

    None resolves to today (local). Datetimes are truncated to their date.
    """
    if reference_date is None:
        return dt_today_local()
    if isinstance(reference_date, datetime):
        return reference_date.date()
    return reference_date


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse_date(date_str: str | date | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts a `datetime.date` (returned as-is, datetimes truncated), an ISO
    date "2026-01-18" or the leading date of an ISO datetime
    "2026-01-18T12:30:00+00:00".

    Returns:
        datetime.date or None if parsing fails.
    """
    if isinstance(date_str, datetime):
        return date_str.date()
    if isinstance(date_str, date):
        return date_str
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str[:10])
    except ValueError:
        _LOGGER.debug("Unparseable date string: %s", date_str)
        return None


def dt_parse_datetime(dt_input: str | datetime | None) -> datetime | None:
    """Parse an ISO datetime string, assuming UTC when no offset is given.

    Returns:
        Timezone-aware datetime or None if parsing fails.
    """
    if dt_input is None:
        return None
    if isinstance(dt_input, datetime):
        parsed = dt_input
    else:
        try:
            parsed = datetime.fromisoformat(dt_input)
        except (TypeError, ValueError):
            _LOGGER.debug("Unparseable datetime string: %s", dt_input)
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


# ==============================================================================
# Calendar Arithmetic
# ==============================================================================


def dt_weekday(day: date) -> int:
    """Return the weekday number of a date with 0=Sunday .. 6=Saturday.

    Python's date.weekday() counts Monday as 0; this shifts it so that
    Sunday is 0, matching how pact weekday sets are stored.

    Examples:
        dt_weekday(date(2024, 1, 7)) → 0  # Sunday
        dt_weekday(date(2024, 1, 8)) → 1  # Monday
        dt_weekday(date(2024, 1, 13)) → 6  # Saturday
    """
    return (day.weekday() + 1) % 7


def dt_days_between(earlier: date, later: date) -> int:
    """Return the number of whole days from `earlier` to `later`.

    Negative when `later` precedes `earlier`.
    """
    return (later - earlier).days


def dt_days_inclusive(start: date, end: date) -> int:
    """Return the number of calendar days in [start, end], or 0 if inverted.

    Examples:
        dt_days_inclusive(date(2024, 1, 1), date(2024, 1, 10)) → 10
        dt_days_inclusive(date(2024, 1, 1), date(2024, 1, 1)) → 1
        dt_days_inclusive(date(2024, 1, 2), date(2024, 1, 1)) → 0
    """
    if end < start:
        return 0
    return dt_days_between(start, end) + 1


def dt_iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date in the inclusive range [start, end].

    Yields nothing when end precedes start.
    """
    if end < start:
        return
    for occurrence in rrule(DAILY, dtstart=start, until=end):
        yield occurrence.date()


def dt_week_bounds(day: date) -> tuple[date, date]:
    """Return the (Monday, Sunday) bounds of the week containing `day`.

    Examples:
        dt_week_bounds(date(2024, 1, 10)) → (date(2024, 1, 8), date(2024, 1, 14))
        dt_week_bounds(date(2024, 1, 14)) → (date(2024, 1, 8), date(2024, 1, 14))
    """
    week_start = day + relativedelta(weekday=MO(-1))
    week_end = day + relativedelta(weekday=SU(+1))
    return week_start, week_end
