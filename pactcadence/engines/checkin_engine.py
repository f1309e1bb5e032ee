"""Check-in Engine - Due status and missed check-in detection.

Pure logic used by daily views and by the scheduled "auto-fold" job:
- day_status: is a participant due on a date, and what did they record?
- find_missed_check_ins: which participants were due on a date and have
  no record for it?

The engine only reports; writing fold records for missed check-ins is the
caller's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from .cadence_engine import CadenceEngine

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date

    from ..type_defs import (
        CheckInRecord,
        DayStatus,
        MissedCheckIn,
        Pact,
        Participant,
    )


class CheckInEngine:
    """Stateless due-status checks over participants and check-in records."""

    @staticmethod
    def find_record(
        history: Iterable[CheckInRecord],
        pact_id: str,
        user_id: str,
        on_date: date,
    ) -> CheckInRecord | None:
        """Return the record for (pact, user, date), or None.

        At most one record per key is expected; the first match wins.
        """
        for record in history:
            if (
                record.check_in_date == on_date
                and record.user_id == user_id
                and record.pact_id == pact_id
            ):
                return record
        return None

    @staticmethod
    def day_status(
        pact: Pact,
        participant: Participant,
        history: Iterable[CheckInRecord],
        on_date: date,
    ) -> DayStatus:
        """Describe a participant's obligation and record for one date.

        A check-in recorded on a non-due date still counts as checked in.
        """
        record = CheckInEngine.find_record(
            history, pact.pact_id, participant.user_id, on_date
        )
        return {
            "pact_id": pact.pact_id,
            "user_id": participant.user_id,
            "date": on_date,
            "is_due": CadenceEngine.is_participant_due(pact, participant, on_date),
            "has_checked_in": record is not None,
            "outcome": record.outcome if record is not None else None,
        }

    @staticmethod
    def find_missed_check_ins(
        pact: Pact,
        participants: Sequence[Participant],
        history: Iterable[CheckInRecord],
        on_date: date,
    ) -> list[MissedCheckIn]:
        """List participants who were due on `on_date` but have no record.

        Args:
            pact: The pact to inspect. Nothing is missed while it is inactive.
            participants: Its participants. Entries for other pacts are skipped.
            history: Check-ins for the pact (any order, any date range).
            on_date: The date to inspect (usually yesterday).

        Returns:
            One MissedCheckIn per participant lacking a record, in participant order.
        """
        if not CadenceEngine.is_pact_active(pact, on_date):
            return []

        checked_in = {
            record.user_id
            for record in history
            if record.pact_id == pact.pact_id and record.check_in_date == on_date
        }

        missed: list[MissedCheckIn] = []
        for participant in participants:
            if participant.pact_id != pact.pact_id:
                continue
            if participant.user_id in checked_in:
                continue
            if not CadenceEngine.is_due(
                pact.cadence, pact.mode, participant.relay_days, on_date
            ):
                continue
            missed.append(
                {
                    "pact_id": pact.pact_id,
                    "user_id": participant.user_id,
                    "date": on_date,
                }
            )

        if missed:
            const.LOGGER.debug(
                "CheckInEngine: %d missed check-ins for pact %s on %s",
                len(missed),
                pact.pact_id,
                on_date,
            )
        return missed
