# File: helpers/record_helpers.py
"""Boundary helpers turning data-store rows into engine records.

Rows arrive as plain dicts (see const.DATA_* keys). Each row kind has a
voluptuous schema; a row that fails validation raises RecordValidationError.
History ordering is also checked here so the streak engine can assume it.

Usage:
    pact = build_pact(pact_row)
    participants = [build_participant(row) for row in participant_rows]
    history = sort_history(build_check_in(row) for row in check_in_rows)
    ensure_sorted(history)
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from .. import const
from ..exceptions import HistoryOrderError, RecordValidationError
from ..type_defs import (
    CheckInRecord,
    CustomCadence,
    DailyCadence,
    Pact,
    Participant,
    WeeklyCadence,
)
from ..utils.dt_utils import dt_parse_date, dt_parse_datetime

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from ..type_defs import CadenceRule


# =============================================================================
# INPUT VALIDATION HELPERS
# =============================================================================


def validate_date(value: Any) -> date:
    """Coerce an ISO date string (or date) into a `datetime.date`.

    Raises:
        vol.Invalid: If the value is not a parseable date
    """
    parsed = dt_parse_date(value)
    if parsed is None:
        raise vol.Invalid(f"Invalid date: '{value}'. Expected format: 'YYYY-MM-DD'.")
    return parsed


def validate_datetime(value: Any) -> datetime:
    """Coerce an ISO datetime string (or datetime) into an aware datetime.

    Raises:
        vol.Invalid: If the value is not a parseable datetime
    """
    parsed = dt_parse_datetime(value)
    if parsed is None:
        raise vol.Invalid(f"Invalid datetime: '{value}'")
    return parsed


def validate_weekday_set(value: Any) -> frozenset[int]:
    """Coerce a list of weekday numbers (0=Sunday .. 6=Saturday) into a frozenset.

    Raises:
        vol.Invalid: If the value is not a list of integers in 0-6
    """
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise vol.Invalid(f"Weekdays must be a list, got {type(value).__name__}")
    weekdays: set[int] = set()
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            raise vol.Invalid(f"Weekday must be an integer, got '{item}'")
        if not const.WEEKDAY_SUNDAY <= item <= const.WEEKDAY_SATURDAY:
            raise vol.Invalid(f"Weekday {item} out of range 0-6")
        weekdays.add(item)
    return frozenset(weekdays)


# ----------------------------------------------------------------------------------
# ROW SCHEMAS
# ----------------------------------------------------------------------------------

WEEKDAY_SET = vol.Any(None, validate_weekday_set)

PACT_ROW_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_PACT_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(const.DATA_PACT_FREQUENCY): vol.In(const.CADENCE_OPTIONS),
        vol.Optional(const.DATA_PACT_FREQUENCY_DAYS, default=None): WEEKDAY_SET,
        vol.Required(const.DATA_PACT_TYPE): vol.In(const.PACT_MODE_OPTIONS),
        vol.Required(const.DATA_PACT_START_DATE): validate_date,
        vol.Optional(const.DATA_PACT_END_DATE, default=None): vol.Any(
            None, validate_date
        ),
        vol.Optional(const.DATA_PACT_NAME, default=""): vol.Any(None, str),
    },
    extra=vol.REMOVE_EXTRA,
)

PARTICIPANT_ROW_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_PARTICIPANT_PACT_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(const.DATA_PARTICIPANT_USER_ID): vol.All(str, vol.Length(min=1)),
        vol.Optional(const.DATA_PARTICIPANT_RELAY_DAYS, default=None): WEEKDAY_SET,
    },
    extra=vol.REMOVE_EXTRA,
)

CHECK_IN_ROW_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_CHECK_IN_PACT_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(const.DATA_CHECK_IN_USER_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(const.DATA_CHECK_IN_STATUS): vol.In(const.OUTCOME_OPTIONS),
        vol.Required(const.DATA_CHECK_IN_DATE): validate_date,
        vol.Optional(const.DATA_CHECK_IN_CREATED_AT, default=None): vol.Any(
            None, validate_datetime
        ),
        vol.Optional(const.DATA_CHECK_IN_EXCUSE, default=None): vol.Any(None, str),
    },
    extra=vol.REMOVE_EXTRA,
)


def _validate(schema: vol.Schema, row_kind: str, row: Mapping[str, Any]) -> dict:
    """Run a schema over a row, re-raising failures as RecordValidationError."""
    try:
        return schema(dict(row))
    except vol.Invalid as err:
        raise RecordValidationError(row_kind, str(err)) from err


# ----------------------------------------------------------------------------------
# RECORD BUILDERS
# ----------------------------------------------------------------------------------


def build_cadence_rule(
    frequency: str, frequency_days: Iterable[int] | None = None
) -> CadenceRule:
    """Build the cadence rule for a frequency name.

    frequency_days is only read for custom cadences; None becomes an empty
    (never due) weekday set.

    Raises:
        RecordValidationError: If the frequency is unknown
    """
    if frequency == const.CADENCE_DAILY:
        return DailyCadence()
    if frequency == const.CADENCE_WEEKLY:
        return WeeklyCadence()
    if frequency == const.CADENCE_CUSTOM:
        return CustomCadence(frozenset(frequency_days or ()))
    raise RecordValidationError(
        const.ROW_KIND_PACT, f"unknown frequency '{frequency}'"
    )


def build_pact(row: Mapping[str, Any]) -> Pact:
    """Validate a pact row and build a Pact."""
    data = _validate(PACT_ROW_SCHEMA, const.ROW_KIND_PACT, row)
    return Pact(
        pact_id=data[const.DATA_PACT_ID],
        cadence=build_cadence_rule(
            data[const.DATA_PACT_FREQUENCY], data[const.DATA_PACT_FREQUENCY_DAYS]
        ),
        mode=data[const.DATA_PACT_TYPE],
        start_date=data[const.DATA_PACT_START_DATE],
        end_date=data[const.DATA_PACT_END_DATE],
        name=data[const.DATA_PACT_NAME] or "",
    )


def build_participant(row: Mapping[str, Any]) -> Participant:
    """Validate a participant row and build a Participant."""
    data = _validate(PARTICIPANT_ROW_SCHEMA, const.ROW_KIND_PARTICIPANT, row)
    return Participant(
        pact_id=data[const.DATA_PARTICIPANT_PACT_ID],
        user_id=data[const.DATA_PARTICIPANT_USER_ID],
        relay_days=data[const.DATA_PARTICIPANT_RELAY_DAYS],
    )


def build_check_in(row: Mapping[str, Any]) -> CheckInRecord:
    """Validate a check-in row and build a CheckInRecord."""
    data = _validate(CHECK_IN_ROW_SCHEMA, const.ROW_KIND_CHECK_IN, row)
    return CheckInRecord(
        pact_id=data[const.DATA_CHECK_IN_PACT_ID],
        user_id=data[const.DATA_CHECK_IN_USER_ID],
        check_in_date=data[const.DATA_CHECK_IN_DATE],
        outcome=data[const.DATA_CHECK_IN_STATUS],
        created_at=data[const.DATA_CHECK_IN_CREATED_AT],
        excuse=data[const.DATA_CHECK_IN_EXCUSE],
    )


# ----------------------------------------------------------------------------------
# HISTORY ORDERING
# ----------------------------------------------------------------------------------


def sort_history(records: Iterable[CheckInRecord]) -> list[CheckInRecord]:
    """Return records sorted ascending by check_in_date, then created_at.

    Records without created_at sort first within their date.
    """
    return sorted(
        records,
        key=lambda r: (
            r.check_in_date,
            r.created_at is not None,
            r.created_at.timestamp() if r.created_at is not None else 0.0,
        ),
    )


def ensure_sorted(records: Sequence[CheckInRecord]) -> None:
    """Fail loudly if records are not ascending by check_in_date.

    Equal dates are allowed (different participants share dates).

    Raises:
        HistoryOrderError: At the first record that precedes its predecessor
    """
    for index in range(1, len(records)):
        previous = records[index - 1].check_in_date
        current = records[index].check_in_date
        if current < previous:
            raise HistoryOrderError(index, previous, current)
