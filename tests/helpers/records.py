"""Builders for engine records and raw rows used across tests.

Calendar anchors used throughout the suite (January 2024):
    Mon 1, Wed 3, Fri 5, Sun 7, Mon 8, Wed 10, Sun 14
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pactcadence import const
from pactcadence.type_defs import (
    CadenceRule,
    CheckInRecord,
    DailyCadence,
    Pact,
    Participant,
)

DEFAULT_PACT_ID = "pact-1"


def make_pact(
    cadence: CadenceRule | None = None,
    mode: str = const.PACT_MODE_INDIVIDUAL,
    start_date: date = date(2024, 1, 1),
    end_date: date | None = None,
    pact_id: str = DEFAULT_PACT_ID,
    name: str = "Morning run",
) -> Pact:
    """Create a Pact (daily individual pact starting Mon 2024-01-01 by default)."""
    return Pact(
        pact_id=pact_id,
        cadence=cadence or DailyCadence(),
        mode=mode,
        start_date=start_date,
        end_date=end_date,
        name=name,
    )


def make_participant(
    user_id: str,
    relay_days: set[int] | None = None,
    pact_id: str = DEFAULT_PACT_ID,
) -> Participant:
    """Create a Participant, optionally with a relay assignment."""
    return Participant(
        pact_id=pact_id,
        user_id=user_id,
        relay_days=frozenset(relay_days) if relay_days is not None else None,
    )


def make_check_in(
    user_id: str,
    check_in_date: date,
    outcome: str = const.OUTCOME_SUCCESS,
    pact_id: str = DEFAULT_PACT_ID,
    excuse: str | None = None,
) -> CheckInRecord:
    """Create a CheckInRecord (success by default)."""
    return CheckInRecord(
        pact_id=pact_id,
        user_id=user_id,
        check_in_date=check_in_date,
        outcome=outcome,
        excuse=excuse,
    )


def make_history(
    user_id: str,
    entries: list[tuple[date, str]],
    pact_id: str = DEFAULT_PACT_ID,
) -> list[CheckInRecord]:
    """Create records from (date, outcome) pairs, keeping the given order."""
    return [
        make_check_in(user_id, day, outcome, pact_id=pact_id) for day, outcome in entries
    ]


def make_pact_row(**overrides: Any) -> dict[str, Any]:
    """Create a raw pact row as returned by the data store."""
    row: dict[str, Any] = {
        const.DATA_PACT_ID: DEFAULT_PACT_ID,
        const.DATA_PACT_NAME: "Morning run",
        const.DATA_PACT_FREQUENCY: const.CADENCE_DAILY,
        const.DATA_PACT_FREQUENCY_DAYS: None,
        const.DATA_PACT_TYPE: const.PACT_MODE_GROUP,
        const.DATA_PACT_START_DATE: "2024-01-01",
        const.DATA_PACT_END_DATE: None,
        "group_id": "group-1",
        "status": "active",
    }
    row.update(overrides)
    return row


def make_participant_row(user_id: str, **overrides: Any) -> dict[str, Any]:
    """Create a raw participant row."""
    row: dict[str, Any] = {
        const.DATA_PARTICIPANT_PACT_ID: DEFAULT_PACT_ID,
        const.DATA_PARTICIPANT_USER_ID: user_id,
        const.DATA_PARTICIPANT_RELAY_DAYS: None,
    }
    row.update(overrides)
    return row


def make_check_in_row(
    user_id: str, check_in_date: str, status: str = const.OUTCOME_SUCCESS, **overrides: Any
) -> dict[str, Any]:
    """Create a raw check-in row."""
    row: dict[str, Any] = {
        const.DATA_CHECK_IN_PACT_ID: DEFAULT_PACT_ID,
        const.DATA_CHECK_IN_USER_ID: user_id,
        const.DATA_CHECK_IN_STATUS: status,
        const.DATA_CHECK_IN_DATE: check_in_date,
        const.DATA_CHECK_IN_CREATED_AT: f"{check_in_date}T08:00:00+00:00",
        const.DATA_CHECK_IN_EXCUSE: None,
        "proof_url": None,
    }
    row.update(overrides)
    return row
