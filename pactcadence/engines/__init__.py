"""Engine modules for Pact Cadence.

Contains specialized computation engines:
- cadence_engine: Due-date evaluation and expected-occurrence counting
- streak_engine: Gap-tolerant current/longest streaks
- statistics_engine: Completion rates, pact aggregates, weekly recaps
- checkin_engine: Day status and missed check-in detection
"""

# Use relative imports within package to avoid mypy module resolution issues
from .cadence_engine import CadenceEngine
from .checkin_engine import CheckInEngine
from .statistics_engine import StatisticsEngine
from .streak_engine import StreakEngine

__all__ = [
    "CadenceEngine",
    "CheckInEngine",
    "StatisticsEngine",
    "StreakEngine",
]
