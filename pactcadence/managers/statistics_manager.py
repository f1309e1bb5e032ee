"""Statistics Manager - Fetches pact records and delegates to the engines.

This manager is the seam between data-store readers and the pure engines:
- Reads raw rows through a PactReader supplied by the application
- Validates them into records (helpers.record_helpers)
- Sorts history explicitly before streak logic runs
- Calls CadenceEngine / CheckInEngine / StatisticsEngine

NOT responsible for:
- Persisting anything (auto-fold writes, recap storage)
- Caching: every call recomputes from a fresh snapshot
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from .. import const
from ..engines.checkin_engine import CheckInEngine
from ..engines.statistics_engine import StatisticsEngine
from ..helpers.record_helpers import (
    build_check_in,
    build_participant,
    build_pact,
    sort_history,
)
from ..utils.dt_utils import resolve_reference_date

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import date, datetime

    from ..type_defs import (
        CheckInRecord,
        DayStatus,
        MissedCheckIn,
        Pact,
        PactAggregate,
        Participant,
    )


__all__ = ["PactReader", "StatisticsManager"]


class PactReader(Protocol):
    """Read access to pact rows, supplied by the surrounding application."""

    def get_pact(self, pact_id: str) -> Mapping[str, Any] | None:
        """Return the pact row, or None when the pact does not exist."""

    def get_participants(self, pact_id: str) -> Sequence[Mapping[str, Any]]:
        """Return the participant rows of a pact."""

    def get_check_ins(
        self, pact_id: str, user_id: str | None = None
    ) -> Sequence[Mapping[str, Any]]:
        """Return check-in rows of a pact, optionally for one user."""


class StatisticsManager:
    """Manager for on-demand pact statistics.

    Responsibilities:
    - Turn reader rows into validated, sorted snapshots
    - Expose pact stats, day status and missed check-ins per pact

    Example:
        manager = StatisticsManager(reader)
        stats = manager.get_pact_stats("pact-1", as_of_date=date(2024, 1, 10))
    """

    def __init__(
        self,
        reader: PactReader,
        stats_engine: StatisticsEngine | None = None,
    ) -> None:
        """Initialize the StatisticsManager.

        Args:
            reader: Source of pact, participant and check-in rows
            stats_engine: Optional engine instance (one is created by default)
        """
        self._reader = reader
        self._stats = stats_engine or StatisticsEngine()

    def get_pact_stats(
        self, pact_id: str, as_of_date: date | datetime | None = None
    ) -> PactAggregate:
        """Return per-participant and pact-level statistics for a pact.

        Unknown pacts give the all-zero aggregate.

        Raises:
            RecordValidationError: If a row read for the pact is malformed
        """
        as_of = resolve_reference_date(as_of_date)
        pact = self._load_pact(pact_id)
        if pact is None:
            const.LOGGER.debug("StatisticsManager: Pact %s not found", pact_id)
            return self._stats.aggregate(None, [], [], as_of)

        participants = self._load_participants(pact_id)
        history = self._load_history(pact_id)
        return self._stats.aggregate(pact, participants, history, as_of)

    def get_day_status(
        self,
        pact_id: str,
        user_id: str,
        on_date: date | datetime | None = None,
    ) -> DayStatus | None:
        """Return a participant's due status for a date.

        None when the pact does not exist or the user does not take part in it.
        """
        day = resolve_reference_date(on_date)
        pact = self._load_pact(pact_id)
        if pact is None:
            return None

        participant = next(
            (p for p in self._load_participants(pact_id) if p.user_id == user_id),
            None,
        )
        if participant is None:
            const.LOGGER.debug(
                "StatisticsManager: User %s is not in pact %s", user_id, pact_id
            )
            return None

        history = self._load_history(pact_id, user_id)
        return CheckInEngine.day_status(pact, participant, history, day)

    def get_missed_check_ins(
        self, pact_id: str, on_date: date | datetime
    ) -> list[MissedCheckIn]:
        """Return participants who were due on `on_date` without a record."""
        day = resolve_reference_date(on_date)
        pact = self._load_pact(pact_id)
        if pact is None:
            return []

        return CheckInEngine.find_missed_check_ins(
            pact,
            self._load_participants(pact_id),
            self._load_history(pact_id),
            day,
        )

    # ────────────────────────────────────────────────────────────────
    # Loading
    # ────────────────────────────────────────────────────────────────

    def _load_pact(self, pact_id: str) -> Pact | None:
        """Read and validate a pact row."""
        row = self._reader.get_pact(pact_id)
        if row is None:
            return None
        return build_pact(row)

    def _load_participants(self, pact_id: str) -> list[Participant]:
        """Read and validate a pact's participant rows."""
        return [build_participant(row) for row in self._reader.get_participants(pact_id)]

    def _load_history(
        self, pact_id: str, user_id: str | None = None
    ) -> list[CheckInRecord]:
        """Read, validate and sort check-in rows."""
        history = sort_history(
            build_check_in(row) for row in self._reader.get_check_ins(pact_id, user_id)
        )
        const.LOGGER.debug(
            "StatisticsManager: Loaded %d check-ins for pact %s", len(history), pact_id
        )
        return history
