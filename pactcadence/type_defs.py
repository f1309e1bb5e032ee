"""Type definitions for Pact Cadence data structures.

Two kinds of types live here:

1. **Frozen dataclasses for INPUT records** (snapshots handed to the engines):
   - Cadence rules: DailyCadence, WeeklyCadence, CustomCadence
   - Records: Pact, Participant, CheckInRecord
   - ✅ Hashable and immutable, so engines can never mutate caller state

2. **TypedDict for OUTPUT contracts** (derived facts returned to callers):
   - StreakResult, ParticipantStats, PactStats, PactAggregate
   - DayStatus, MissedCheckIn, WeeklyRecap and friends
   - ✅ Plain dicts, ready to serialize by whatever API wraps the engines

IMPORTANT: This file must NOT import from engines/ or managers/ to avoid
circular dependencies. Only import from const.py and typing machinery.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TypedDict

from . import const

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

PactId = str  # UUID string
UserId = str  # UUID string
Weekday = int  # 0=Sunday .. 6=Saturday
WeekdaySet = frozenset[Weekday]


# =============================================================================
# Cadence Rules (closed tagged union)
# =============================================================================


@dataclass(frozen=True, slots=True)
class DailyCadence:
    """Due on every calendar date."""

    kind: str = field(default=const.CADENCE_DAILY, init=False)


@dataclass(frozen=True, slots=True)
class WeeklyCadence:
    """Due once a week, on const.WEEKLY_DUE_WEEKDAY."""

    kind: str = field(default=const.CADENCE_WEEKLY, init=False)


@dataclass(frozen=True, slots=True)
class CustomCadence:
    """Due on an explicit set of weekdays.

    An empty weekday set is a valid (inert) rule: it is never due.
    Weekday values outside 0-6 are filtered out.
    """

    weekdays: WeekdaySet = frozenset()
    kind: str = field(default=const.CADENCE_CUSTOM, init=False)

    def __post_init__(self) -> None:
        """Normalize weekdays to a frozenset of valid values."""
        valid = frozenset(d for d in self.weekdays if 0 <= d <= 6)
        object.__setattr__(self, "weekdays", valid)


CadenceRule = DailyCadence | WeeklyCadence | CustomCadence


# =============================================================================
# Input Records
# =============================================================================


@dataclass(frozen=True, slots=True)
class Pact:
    """A recurring commitment shared by its participants."""

    pact_id: PactId
    cadence: CadenceRule
    mode: str
    start_date: date
    end_date: date | None = None  # Inclusive; None = open-ended
    name: str = ""


@dataclass(frozen=True, slots=True)
class Participant:
    """A user taking part in a pact.

    relay_days only matters in relay mode. None and an empty set both mean
    the participant is never due there.
    """

    pact_id: PactId
    user_id: UserId
    relay_days: WeekdaySet | None = None


@dataclass(frozen=True, slots=True)
class CheckInRecord:
    """One participant outcome for one calendar date.

    created_at orders same-day records and excuse feeds the weekly recap's
    excuse award. Cadence and streak logic only look at check_in_date and
    outcome.
    """

    pact_id: PactId
    user_id: UserId
    check_in_date: date
    outcome: str
    created_at: datetime | None = None
    excuse: str | None = None

    @property
    def is_success(self) -> bool:
        """Return True for a success outcome."""
        return self.outcome == const.OUTCOME_SUCCESS

    @property
    def is_fold(self) -> bool:
        """Return True for a fold outcome."""
        return self.outcome == const.OUTCOME_FOLD


# =============================================================================
# Output Contracts
# =============================================================================


class StreakResult(TypedDict):
    """Current and longest success runs for one history."""

    current: int
    longest: int


class ParticipantStats(TypedDict):
    """Derived statistics for one participant of a pact."""

    user_id: UserId
    expected_occurrences: int
    total_check_ins: int
    success_count: int
    fold_count: int
    completion_rate_percent: int
    current_streak: int
    longest_streak: int


class PactStats(TypedDict):
    """Pact-level sums across all participants (no streak notion)."""

    pact_id: PactId | None
    total_expected: int
    total_check_ins: int
    success_count: int
    fold_count: int
    overall_completion_rate: int


class PactAggregate(TypedDict):
    """Result of StatisticsEngine.aggregate()."""

    per_participant: list[ParticipantStats]
    pact_level: PactStats


class DayStatus(TypedDict):
    """Whether a participant is due on a date and what they recorded."""

    pact_id: PactId
    user_id: UserId
    date: date
    is_due: bool
    has_checked_in: bool
    outcome: str | None


class MissedCheckIn(TypedDict):
    """A due date with no record for a participant."""

    pact_id: PactId
    user_id: UserId
    date: date


class LeaderboardEntry(TypedDict):
    """One user's line in a weekly recap leaderboard."""

    user_id: UserId
    expected: int
    check_ins: int
    folds: int
    completion_rate: float


class RecapAward(TypedDict):
    """Award winner with the value that won it."""

    user_id: UserId
    value: float


class ExcuseAward(TypedDict):
    """Most repeated fold excuse of the week."""

    user_id: UserId
    excuse: str
    count: int


class StreakHighlight(TypedDict):
    """Longest running streak on any pact at the end of the week."""

    user_id: UserId
    pact_id: PactId
    pact_name: str
    streak_days: int


class WeeklyRecap(TypedDict):
    """Summary of one Monday-Sunday week across a group's pacts."""

    week_key: str
    week_start: date
    week_end: date
    active_pacts: int
    total_check_ins: int
    total_folds: int
    group_completion_rate: float
    leaderboard: list[LeaderboardEntry]
    most_consistent: RecapAward | None
    biggest_fold: RecapAward | None
    excuse_hall_of_fame: ExcuseAward | None
    comeback_player: RecapAward | None
    longest_streak: StreakHighlight | None


class FoldPattern(TypedDict):
    """Fold distribution for one weekday."""

    weekday: Weekday
    weekday_name: str
    fold_count: int
    percentage: int
    top_pact_id: PactId | None
    top_pact_name: str | None
