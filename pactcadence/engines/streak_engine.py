"""Streak Engine - Gap-tolerant success runs over a check-in history.

Streak rules:
    - A run is a sequence of success records where each success falls within
      the gap tolerance (const.GAP_TOLERANCE_DAYS) of the previous one.
    - A fold always breaks the active run.
    - The tolerance is the same for every cadence: a daily pact can go six
      silent days and keep its streak.

Longest streak is a forward scan over the whole history. Current streak is a
backward scan from the most recent record, and expires when that record is
older than the tolerance relative to the reference date.

The history MUST already be sorted ascending by check_in_date. The engine
does not sort; see helpers.record_helpers.sort_history / ensure_sorted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_days_between, resolve_reference_date

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date, datetime

    from ..type_defs import CheckInRecord, StreakResult


class StreakEngine:
    """Stateless streak calculator.

    Example:
        history = sort_history(records_for_one_participant)
        result = StreakEngine.compute_streaks(history, as_of_date=date(2024, 1, 10))
        # {"current": 3, "longest": 5}
    """

    @staticmethod
    def compute_streaks(
        history: Sequence[CheckInRecord],
        as_of_date: date | datetime | None = None,
        gap_tolerance_days: int = const.GAP_TOLERANCE_DAYS,
    ) -> StreakResult:
        """Compute current and longest streaks for one participant's history.

        Args:
            history: Check-ins sorted ascending by check_in_date.
            as_of_date: Reference date for current-streak expiry. Defaults to today.
            gap_tolerance_days: Max days between successes. Callers in this
                package always pass the fixed constant.

        Returns:
            StreakResult with "current" and "longest". Empty history gives zeros.
        """
        if not history:
            return {"current": 0, "longest": 0}

        reference = resolve_reference_date(as_of_date)
        return {
            "current": StreakEngine.current_streak(
                history, reference, gap_tolerance_days
            ),
            "longest": StreakEngine.longest_streak(history, gap_tolerance_days),
        }

    @staticmethod
    def longest_streak(
        history: Sequence[CheckInRecord],
        gap_tolerance_days: int = const.GAP_TOLERANCE_DAYS,
    ) -> int:
        """Return the longest run of successes in a sorted history."""
        longest = 0
        run_length = 0
        last_success: date | None = None

        for record in history:
            if not record.is_success:
                # Fold breaks the run; already-recorded longest stays
                run_length = 0
                last_success = None
                continue

            if last_success is None:
                run_length = 1
            elif (
                dt_days_between(last_success, record.check_in_date)
                <= gap_tolerance_days
            ):
                run_length += 1
            else:
                run_length = 1

            last_success = record.check_in_date
            longest = max(longest, run_length)

        return longest

    @staticmethod
    def current_streak(
        history: Sequence[CheckInRecord],
        as_of_date: date,
        gap_tolerance_days: int = const.GAP_TOLERANCE_DAYS,
    ) -> int:
        """Return the run of successes ending at the most recent record.

        Zero when the most recent record is a fold, or when it is older than
        the tolerance relative to `as_of_date` (expired).
        """
        if not history:
            return 0

        latest = history[-1]
        if not latest.is_success:
            return 0

        if dt_days_between(latest.check_in_date, as_of_date) > gap_tolerance_days:
            const.LOGGER.debug(
                "StreakEngine: Streak expired (last success %s, as of %s)",
                latest.check_in_date,
                as_of_date,
            )
            return 0

        current = 1
        previous_date = latest.check_in_date
        for record in reversed(history[:-1]):
            if not record.is_success:
                break
            if dt_days_between(record.check_in_date, previous_date) > gap_tolerance_days:
                break
            current += 1
            previous_date = record.check_in_date

        return current
