"""In-memory PactReader for manager tests."""

from __future__ import annotations

from typing import Any

from pactcadence import const


class InMemoryReader:
    """PactReader backed by plain row lists.

    Check-in rows are returned in insertion order (no sorting), so tests
    can prove the manager sorts them itself.
    """

    def __init__(
        self,
        pacts: list[dict[str, Any]] | None = None,
        participants: list[dict[str, Any]] | None = None,
        check_ins: list[dict[str, Any]] | None = None,
    ) -> None:
        """Store the rows."""
        self.pacts = pacts or []
        self.participants = participants or []
        self.check_ins = check_ins or []
        self.calls: list[tuple[str, str]] = []

    def get_pact(self, pact_id: str) -> dict[str, Any] | None:
        """Return the pact row with this id."""
        self.calls.append(("get_pact", pact_id))
        return next(
            (row for row in self.pacts if row[const.DATA_PACT_ID] == pact_id), None
        )

    def get_participants(self, pact_id: str) -> list[dict[str, Any]]:
        """Return participant rows for the pact."""
        self.calls.append(("get_participants", pact_id))
        return [
            row
            for row in self.participants
            if row[const.DATA_PARTICIPANT_PACT_ID] == pact_id
        ]

    def get_check_ins(
        self, pact_id: str, user_id: str | None = None
    ) -> list[dict[str, Any]]:
        """Return check-in rows for the pact, optionally for one user."""
        self.calls.append(("get_check_ins", pact_id))
        return [
            row
            for row in self.check_ins
            if row[const.DATA_CHECK_IN_PACT_ID] == pact_id
            and (user_id is None or row[const.DATA_CHECK_IN_USER_ID] == user_id)
        ]
