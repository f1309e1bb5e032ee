"""Statistics Engine - Completion rates and summaries from check-in history.

This engine combines the cadence engine (expected occurrences) and the
streak engine with raw tallies to produce:
- Per-participant and pact-level statistics (aggregate)
- Weekly recap leaderboards, awards and the longest-streak highlight
  across a group's pacts (weekly_recap)
- Fold distribution by weekday (fold_patterns)
- Period keys for labelling summaries (get_period_keys)

Design Principles:
    - Stateless: operates on passed snapshots, never persists or caches
    - Total: unknown pacts, zero participants and zero expected occurrences
      resolve to zeros, never to errors
    - Single source of truth: every "expected" count goes through CadenceEngine
"""

from __future__ import annotations

from collections import Counter, defaultdict
from operator import attrgetter
from typing import TYPE_CHECKING

from dateutil.relativedelta import relativedelta

from .. import const
from ..utils.dt_utils import dt_week_bounds, dt_weekday, resolve_reference_date
from ..utils.math_utils import (
    calculate_percentage,
    clamp,
    completion_rate_percent,
    round_half_up,
)
from .cadence_engine import CadenceEngine
from .streak_engine import StreakEngine

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from datetime import date, datetime

    from ..type_defs import (
        CheckInRecord,
        ExcuseAward,
        FoldPattern,
        LeaderboardEntry,
        Pact,
        PactAggregate,
        PactStats,
        Participant,
        ParticipantStats,
        RecapAward,
        StreakHighlight,
        WeeklyRecap,
    )


class StatisticsEngine:
    """Unified engine for pact statistics.

    All methods are stateless - they operate on data structures passed as arguments.
    The engine does NOT persist data; the caller is responsible for fetching
    records and for any storage of the results.

    Example:
        stats = StatisticsEngine()
        result = stats.aggregate(pact, participants, sorted_history, date(2024, 1, 10))
        result["pact_level"]["overall_completion_rate"]  # 80
    """

    # ────────────────────────────────────────────────────────────────
    # Period Key Generation
    # ────────────────────────────────────────────────────────────────

    def get_period_keys(
        self, reference_date: date | datetime | None = None
    ) -> dict[str, str]:
        """Generate period keys for all time granularities.

        Args:
            reference_date: Date to generate keys for. Defaults to today (local).

        Returns:
            Dictionary with keys: "daily", "weekly", "monthly", "yearly"

        Example:
            >>> stats.get_period_keys(date(2026, 1, 19))
            {
                "daily": "2026-01-19",
                "weekly": "2026-W04",
                "monthly": "2026-01",
                "yearly": "2026"
            }
        """
        ref = resolve_reference_date(reference_date)
        return {
            const.PERIOD_DAILY: ref.strftime(const.PERIOD_FORMAT_DAILY),
            const.PERIOD_WEEKLY: ref.strftime(const.PERIOD_FORMAT_WEEKLY),
            const.PERIOD_MONTHLY: ref.strftime(const.PERIOD_FORMAT_MONTHLY),
            const.PERIOD_YEARLY: ref.strftime(const.PERIOD_FORMAT_YEARLY),
        }

    # ────────────────────────────────────────────────────────────────
    # Pact Aggregation
    # ────────────────────────────────────────────────────────────────

    def aggregate(
        self,
        pact: Pact | None,
        participants: Sequence[Participant],
        history: Sequence[CheckInRecord],
        as_of_date: date | datetime | None = None,
    ) -> PactAggregate:
        """Compute per-participant and pact-level statistics.

        Args:
            pact: The pact, or None when it could not be found.
            participants: Participants of the pact. Entries for other pacts are skipped.
            history: Check-ins sorted ascending by check_in_date. Records for
                other pacts, for non-participants or outside the pact's
                start_date .. as_of_date window are ignored.
            as_of_date: Inclusive end of the counting window. Defaults to today.

        Returns:
            PactAggregate. Unknown pact or no participants gives all zeros.
        """
        if pact is None:
            const.LOGGER.debug("StatisticsEngine: No pact supplied, zero aggregate")
            return self._empty_aggregate(None)

        as_of = resolve_reference_date(as_of_date)
        members = [p for p in participants if p.pact_id == pact.pact_id]
        if not members:
            return self._empty_aggregate(pact.pact_id)

        by_user = self._partition_by_user(pact, history, as_of)
        per_participant = [
            self.participant_stats(pact, member, by_user.get(member.user_id, []), as_of)
            for member in members
        ]

        total_expected = sum(s["expected_occurrences"] for s in per_participant)
        success_total = sum(s["success_count"] for s in per_participant)
        fold_total = sum(s["fold_count"] for s in per_participant)
        pact_level: PactStats = {
            "pact_id": pact.pact_id,
            "total_expected": total_expected,
            "total_check_ins": success_total + fold_total,
            "success_count": success_total,
            "fold_count": fold_total,
            "overall_completion_rate": completion_rate_percent(
                success_total, total_expected
            ),
        }

        const.LOGGER.debug(
            "StatisticsEngine: Aggregated pact %s for %d participants as of %s",
            pact.pact_id,
            len(per_participant),
            as_of,
        )
        return {"per_participant": per_participant, "pact_level": pact_level}

    def participant_stats(
        self,
        pact: Pact,
        participant: Participant,
        user_history: Sequence[CheckInRecord],
        as_of_date: date,
    ) -> ParticipantStats:
        """Compute statistics for one participant from their sorted sub-history."""
        success_count = sum(1 for r in user_history if r.is_success)
        fold_count = sum(1 for r in user_history if r.is_fold)
        expected = CadenceEngine.expected_for_participant(
            pact, participant, as_of_date
        )
        streaks = StreakEngine.compute_streaks(
            user_history, as_of_date, const.GAP_TOLERANCE_DAYS
        )

        return {
            "user_id": participant.user_id,
            "expected_occurrences": expected,
            "total_check_ins": success_count + fold_count,
            "success_count": success_count,
            "fold_count": fold_count,
            "completion_rate_percent": completion_rate_percent(success_count, expected),
            "current_streak": streaks["current"],
            "longest_streak": streaks["longest"],
        }

    # ────────────────────────────────────────────────────────────────
    # Weekly Recap
    # ────────────────────────────────────────────────────────────────

    def weekly_recap(
        self,
        pacts: Iterable[Pact],
        participants: Iterable[Participant],
        history: Iterable[CheckInRecord],
        week_of: date | datetime | None = None,
    ) -> WeeklyRecap:
        """Summarize the Monday-Sunday week containing `week_of`.

        Expected occurrences use the same cadence rules as aggregate(),
        clipped to the week and to each pact's active range. The comeback
        award compares against the previous Monday-Sunday week, and the
        longest-streak highlight reads the whole history up to the week's end.

        Args:
            pacts: The group's pacts. Pacts not active during the week are skipped.
            participants: Participants of those pacts.
            history: Check-ins of those pacts (any order, any date range).
            week_of: Any date inside the week. Defaults to today.

        Returns:
            WeeklyRecap with leaderboard sorted by completion rate descending.
        """
        reference = resolve_reference_date(week_of)
        week_start, week_end = dt_week_bounds(reference)
        prev_start, prev_end = dt_week_bounds(week_start + relativedelta(weeks=-1))

        active = {
            pact.pact_id: pact
            for pact in pacts
            if pact.start_date <= week_end
            and (pact.end_date is None or pact.end_date >= week_start)
        }
        members = [p for p in participants if p.pact_id in active]
        records = [r for r in history if r.pact_id in active]

        expected, successes, folds = self._tally_window(
            active, members, records, week_start, week_end
        )

        leaderboard: list[LeaderboardEntry] = [
            {
                "user_id": user_id,
                "expected": user_expected,
                "check_ins": successes[user_id],
                "folds": folds[user_id],
                "completion_rate": clamp(
                    calculate_percentage(successes[user_id], user_expected),
                    0,
                    const.MAX_COMPLETION_RATE,
                ),
            }
            for user_id, user_expected in expected.items()
            if user_expected > 0
        ]
        # Stable: ties keep first-seen participant order
        leaderboard.sort(key=lambda entry: entry["completion_rate"], reverse=True)

        total_expected = sum(entry["expected"] for entry in leaderboard)
        total_completed = sum(entry["check_ins"] for entry in leaderboard)

        prev_expected, prev_successes, prev_folds = self._tally_window(
            active, members, records, prev_start, prev_end
        )
        comeback_player: RecapAward | None = None
        if prev_successes or prev_folds:
            comeback_player = self._comeback_player(
                expected, successes, prev_expected, prev_successes
            )

        week_records = [
            r for r in records if week_start <= r.check_in_date <= week_end
        ]

        return {
            "week_key": self.get_period_keys(week_start)[const.PERIOD_WEEKLY],
            "week_start": week_start,
            "week_end": week_end,
            "active_pacts": len(active),
            "total_check_ins": sum(successes.values()),
            "total_folds": sum(folds.values()),
            "group_completion_rate": calculate_percentage(
                total_completed, total_expected
            ),
            "leaderboard": leaderboard,
            "most_consistent": self._most_consistent(leaderboard),
            "biggest_fold": self._biggest_fold(leaderboard),
            "excuse_hall_of_fame": self._excuse_hall_of_fame(week_records),
            "comeback_player": comeback_player,
            "longest_streak": self._longest_streak(active, records, week_end),
        }

    @staticmethod
    def _tally_window(
        active: Mapping[str, Pact],
        members: Iterable[Participant],
        records: Iterable[CheckInRecord],
        window_start: date,
        window_end: date,
    ) -> tuple[Counter[str], Counter[str], Counter[str]]:
        """Count expected occurrences, successes and folds per user in a window."""
        expected: Counter[str] = Counter()
        for participant in members:
            expected[participant.user_id] += CadenceEngine.expected_for_participant(
                active[participant.pact_id],
                participant,
                window_end,
                window_start=window_start,
            )

        successes: Counter[str] = Counter()
        folds: Counter[str] = Counter()
        for record in records:
            if not window_start <= record.check_in_date <= window_end:
                continue
            if record.is_success:
                successes[record.user_id] += 1
            elif record.is_fold:
                folds[record.user_id] += 1
        return expected, successes, folds

    @staticmethod
    def _most_consistent(leaderboard: Sequence[LeaderboardEntry]) -> RecapAward | None:
        """Top leaderboard entry, only when it completed anything."""
        if not leaderboard or leaderboard[0]["completion_rate"] <= 0:
            return None
        top = leaderboard[0]
        return {"user_id": top["user_id"], "value": top["completion_rate"]}

    @staticmethod
    def _biggest_fold(leaderboard: Sequence[LeaderboardEntry]) -> RecapAward | None:
        """Entry with the most folds, only when someone folded."""
        winner: RecapAward | None = None
        max_folds = 0
        for entry in leaderboard:
            if entry["folds"] > max_folds:
                max_folds = entry["folds"]
                winner = {"user_id": entry["user_id"], "value": entry["folds"]}
        return winner

    @staticmethod
    def _excuse_hall_of_fame(
        week_records: Iterable[CheckInRecord],
    ) -> ExcuseAward | None:
        """Most repeated (user, excuse) among folds; the longer excuse wins ties."""
        counts: Counter[tuple[str, str]] = Counter()
        for record in week_records:
            if record.is_fold and record.excuse:
                counts[(record.user_id, record.excuse)] += 1

        top: ExcuseAward | None = None
        for (user_id, excuse), count in counts.items():
            if (
                top is None
                or count > top["count"]
                or (count == top["count"] and len(excuse) > len(top["excuse"]))
            ):
                top = {"user_id": user_id, "excuse": excuse, "count": count}
        return top

    @staticmethod
    def _comeback_player(
        expected: Mapping[str, int],
        successes: Mapping[str, int],
        prev_expected: Mapping[str, int],
        prev_successes: Mapping[str, int],
    ) -> RecapAward | None:
        """Largest completion-rate gain over the previous week.

        Both weeks need expected occurrences, and the gain must exceed
        const.RECAP_COMEBACK_MIN_IMPROVEMENT percentage points.
        """
        winner: RecapAward | None = None
        best = 0.0
        for user_id, user_expected in expected.items():
            previous = prev_expected.get(user_id, 0)
            if user_expected <= 0 or previous <= 0:
                continue
            current_rate = successes.get(user_id, 0) / user_expected * 100
            prev_rate = prev_successes.get(user_id, 0) / previous * 100
            improvement = current_rate - prev_rate
            if improvement > best and improvement > const.RECAP_COMEBACK_MIN_IMPROVEMENT:
                best = improvement
                winner = {
                    "user_id": user_id,
                    "value": round(improvement, const.DATA_FLOAT_PRECISION),
                }
        return winner

    @staticmethod
    def _longest_streak(
        active: Mapping[str, Pact],
        records: Iterable[CheckInRecord],
        week_end: date,
    ) -> StreakHighlight | None:
        """Longest current streak on any active pact as of the end of the week."""
        runs: dict[tuple[str, str], list[CheckInRecord]] = defaultdict(list)
        for record in sorted(records, key=attrgetter("check_in_date")):
            if record.check_in_date <= week_end:
                runs[(record.pact_id, record.user_id)].append(record)

        highlight: StreakHighlight | None = None
        for (pact_id, user_id), user_history in runs.items():
            streak = StreakEngine.current_streak(
                user_history, week_end, const.GAP_TOLERANCE_DAYS
            )
            if streak > (highlight["streak_days"] if highlight else 0):
                highlight = {
                    "user_id": user_id,
                    "pact_id": pact_id,
                    "pact_name": active[pact_id].name,
                    "streak_days": streak,
                }
        return highlight

    # ────────────────────────────────────────────────────────────────
    # Fold Patterns
    # ────────────────────────────────────────────────────────────────

    def fold_patterns(
        self,
        history: Iterable[CheckInRecord],
        pact_names: Mapping[str, str] | None = None,
    ) -> list[FoldPattern]:
        """Distribute folds over weekdays (0=Sunday .. 6=Saturday).

        Args:
            history: Check-ins in any order. Only folds are counted.
            pact_names: Optional pact_id -> name lookup for the top pact label.

        Returns:
            Seven FoldPattern entries, Sunday first. Percentages are of all folds.
        """
        per_day: dict[int, Counter[str]] = defaultdict(Counter)
        for record in history:
            if record.is_fold:
                per_day[dt_weekday(record.check_in_date)][record.pact_id] += 1

        total_folds = sum(sum(counts.values()) for counts in per_day.values())
        names = pact_names or {}

        patterns: list[FoldPattern] = []
        for weekday, weekday_name in enumerate(const.WEEKDAY_NAMES):
            counts = per_day.get(weekday)
            fold_count = sum(counts.values()) if counts else 0
            top_pact_id = counts.most_common(1)[0][0] if counts else None
            patterns.append(
                {
                    "weekday": weekday,
                    "weekday_name": weekday_name,
                    "fold_count": fold_count,
                    "percentage": (
                        round_half_up(fold_count / total_folds * 100)
                        if total_folds
                        else 0
                    ),
                    "top_pact_id": top_pact_id,
                    "top_pact_name": names.get(top_pact_id) if top_pact_id else None,
                }
            )
        return patterns

    # ────────────────────────────────────────────────────────────────
    # Utility Methods
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def _partition_by_user(
        pact: Pact, history: Iterable[CheckInRecord], as_of_date: date
    ) -> dict[str, list[CheckInRecord]]:
        """Group a pact's records by user, preserving input order.

        Only records inside the counting window are kept: from the pact's
        start_date through as_of_date, clipped to end_date.
        """
        window_end = as_of_date
        if pact.end_date is not None and pact.end_date < window_end:
            window_end = pact.end_date

        by_user: dict[str, list[CheckInRecord]] = defaultdict(list)
        for record in history:
            if record.pact_id != pact.pact_id:
                continue
            if pact.start_date <= record.check_in_date <= window_end:
                by_user[record.user_id].append(record)
        return by_user

    @staticmethod
    def _empty_aggregate(pact_id: str | None) -> PactAggregate:
        """Return an all-zero aggregate."""
        return {
            "per_participant": [],
            "pact_level": {
                "pact_id": pact_id,
                "total_expected": 0,
                "total_check_ins": 0,
                "success_count": 0,
                "fold_count": 0,
                "overall_completion_rate": 0,
            },
        }
