"""Cadence Engine - Pure logic deciding when a pact is due.

This engine answers two questions for a participant:
- Is the pact due on a given calendar date? (is_due)
- How many due dates fall in a date range? (expected_occurrences)

Decision order for is_due:
    1. Relay mode with an assignment: due iff the weekday is assigned,
       regardless of the base cadence (daily/weekly/custom).
    2. Daily: due every date.
    3. Weekly: due on const.WEEKLY_DUE_WEEKDAY (Monday).
    4. Custom: due iff the weekday is in the rule's weekday set.

Degenerate inputs never raise. A custom rule with no weekdays, a relay
participant without an assignment, an unknown mode or an unknown rule all
resolve to "not due".

ARCHITECTURE: Stateless. All methods are static and operate on passed-in
records. Nothing is memoized; every call recomputes from scratch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..type_defs import CustomCadence, DailyCadence, WeeklyCadence
from ..utils.dt_utils import dt_days_inclusive, dt_iter_days, dt_weekday

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from datetime import date

    from ..type_defs import CadenceRule, Pact, Participant


class CadenceEngine:
    """Stateless evaluator for cadence rules and relay assignments.

    Example:
        rule = CustomCadence(frozenset({1, 3, 5}))
        CadenceEngine.is_due(rule, const.PACT_MODE_RELAY, frozenset({3}), day)
        CadenceEngine.expected_occurrences(
            rule, const.PACT_MODE_GROUP, None, start, as_of
        )
    """

    @staticmethod
    def is_due(
        rule: CadenceRule,
        mode: str,
        relay_days: Iterable[int] | None,
        on_date: date,
    ) -> bool:
        """Return True if the commitment is due on `on_date`.

        Args:
            rule: The pact's base cadence.
            mode: One of const.PACT_MODE_*.
            relay_days: The participant's relay assignment (0=Sunday..6=Saturday),
                or None when not assigned. Only consulted in relay mode.
            on_date: Calendar date to evaluate.

        Returns:
            True if due. Never raises.
        """
        weekday = dt_weekday(on_date)

        if mode == const.PACT_MODE_RELAY:
            # Relay overrides the base cadence entirely. No assignment = inert.
            return weekday in (relay_days or ())

        if mode not in const.PACT_MODE_OPTIONS:
            const.LOGGER.debug("CadenceEngine: Unknown pact mode %r, not due", mode)
            return False

        if isinstance(rule, DailyCadence):
            return True
        if isinstance(rule, WeeklyCadence):
            return weekday == const.WEEKLY_DUE_WEEKDAY
        if isinstance(rule, CustomCadence):
            return weekday in rule.weekdays

        const.LOGGER.debug("CadenceEngine: Unknown cadence rule %r, not due", rule)
        return False

    @staticmethod
    def is_participant_due(pact: Pact, participant: Participant, on_date: date) -> bool:
        """Return True if `participant` owes a check-in for `pact` on `on_date`.

        Unlike is_due(), this also requires the pact to be active on that date.
        """
        if not CadenceEngine.is_pact_active(pact, on_date):
            return False
        return CadenceEngine.is_due(
            pact.cadence, pact.mode, participant.relay_days, on_date
        )

    @staticmethod
    def is_pact_active(pact: Pact, on_date: date) -> bool:
        """Return True if `on_date` lies within the pact's start/end dates.

        end_date is inclusive; None means open-ended.
        """
        if on_date < pact.start_date:
            return False
        return pact.end_date is None or on_date <= pact.end_date

    @staticmethod
    def expected_occurrences(
        rule: CadenceRule,
        mode: str,
        relay_days: Iterable[int] | None,
        start_date: date,
        as_of_date: date,
    ) -> int:
        """Count due dates in the inclusive range [start_date, as_of_date].

        Daily non-relay participants use the closed form (number of days).
        Every other combination iterates day by day through is_due(), so
        relay overrides compose with the range without special cases.

        Returns:
            Count >= 0. An inverted range (as_of_date < start_date) gives 0.
        """
        if as_of_date < start_date:
            return 0

        if isinstance(rule, DailyCadence) and mode in (
            const.PACT_MODE_INDIVIDUAL,
            const.PACT_MODE_GROUP,
        ):
            return dt_days_inclusive(start_date, as_of_date)

        # Normalize once for the whole range
        assignment = frozenset(relay_days) if relay_days else None
        return sum(
            1
            for day in dt_iter_days(start_date, as_of_date)
            if CadenceEngine.is_due(rule, mode, assignment, day)
        )

    @staticmethod
    def expected_for_participant(
        pact: Pact,
        participant: Participant,
        as_of_date: date,
        window_start: date | None = None,
    ) -> int:
        """Count the participant's due dates from the pact start up to `as_of_date`.

        The counting window is clipped to the pact's active range
        (start_date .. end_date) and, when given, starts no earlier than
        `window_start`.
        """
        start = pact.start_date
        if window_start is not None and window_start > start:
            start = window_start

        end = as_of_date
        if pact.end_date is not None and pact.end_date < end:
            end = pact.end_date

        return CadenceEngine.expected_occurrences(
            pact.cadence, pact.mode, participant.relay_days, start, end
        )

    @staticmethod
    def due_dates(
        rule: CadenceRule,
        mode: str,
        relay_days: Iterable[int] | None,
        start_date: date,
        end_date: date,
    ) -> Iterator[date]:
        """Yield each due date in the inclusive range [start_date, end_date]."""
        assignment = frozenset(relay_days) if relay_days else None
        for day in dt_iter_days(start_date, end_date):
            if CadenceEngine.is_due(rule, mode, assignment, day):
                yield day
