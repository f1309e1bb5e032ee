"""Pact Cadence - cadence, streak and completion statistics for pacts.

The four entry points below are the whole computation contract. They are
pure: callers pass already-fetched records and an explicit reference date.

    is_due(rule, mode, relay_days, on_date) -> bool
    expected_occurrences(rule, mode, relay_days, start_date, as_of_date) -> int
    compute_streaks(history, as_of_date) -> {"current": int, "longest": int}
    aggregate(pact, participants, history, as_of_date) -> PactAggregate
"""

from .engines import CadenceEngine, CheckInEngine, StatisticsEngine, StreakEngine
from .exceptions import HistoryOrderError, PactCadenceError, RecordValidationError
from .managers import PactReader, StatisticsManager
from .type_defs import (
    CadenceRule,
    CheckInRecord,
    CustomCadence,
    DailyCadence,
    Pact,
    Participant,
    WeeklyCadence,
)

is_due = CadenceEngine.is_due
expected_occurrences = CadenceEngine.expected_occurrences
compute_streaks = StreakEngine.compute_streaks
aggregate = StatisticsEngine().aggregate

__all__ = [
    "CadenceEngine",
    "CadenceRule",
    "CheckInEngine",
    "CheckInRecord",
    "CustomCadence",
    "DailyCadence",
    "HistoryOrderError",
    "Pact",
    "PactCadenceError",
    "PactReader",
    "Participant",
    "RecordValidationError",
    "StatisticsEngine",
    "StatisticsManager",
    "StreakEngine",
    "WeeklyCadence",
    "aggregate",
    "compute_streaks",
    "expected_occurrences",
    "is_due",
]
