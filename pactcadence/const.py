# File: const.py
"""Constants for the Pact Cadence engine.

This file centralizes cadence kinds, pact modes, check-in outcomes, raw row
keys, period formats and engine defaults for consistency across the package.
"""

import logging
from typing import Final

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Cadence Kinds
# ------------------------------------------------------------------------------------------------
CADENCE_DAILY: Final = "daily"
CADENCE_WEEKLY: Final = "weekly"
CADENCE_CUSTOM: Final = "custom"

CADENCE_OPTIONS = [
    CADENCE_DAILY,
    CADENCE_WEEKLY,
    CADENCE_CUSTOM,
]

# ------------------------------------------------------------------------------------------------
# Pact Modes
# ------------------------------------------------------------------------------------------------
PACT_MODE_INDIVIDUAL: Final = "individual"
PACT_MODE_GROUP: Final = "group"
PACT_MODE_RELAY: Final = "relay"

PACT_MODE_OPTIONS = [
    PACT_MODE_INDIVIDUAL,
    PACT_MODE_GROUP,
    PACT_MODE_RELAY,
]

# ------------------------------------------------------------------------------------------------
# Check-in Outcomes
# ------------------------------------------------------------------------------------------------
OUTCOME_SUCCESS: Final = "success"
OUTCOME_FOLD: Final = "fold"

OUTCOME_OPTIONS = [
    OUTCOME_SUCCESS,
    OUTCOME_FOLD,
]

# ------------------------------------------------------------------------------------------------
# Weekdays (0=Sunday .. 6=Saturday)
# ------------------------------------------------------------------------------------------------
WEEKDAY_SUNDAY: Final = 0
WEEKDAY_MONDAY: Final = 1
WEEKDAY_TUESDAY: Final = 2
WEEKDAY_WEDNESDAY: Final = 3
WEEKDAY_THURSDAY: Final = 4
WEEKDAY_FRIDAY: Final = 5
WEEKDAY_SATURDAY: Final = 6

WEEKDAY_NAMES: Final = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# Weekly pacts are due on this weekday
WEEKLY_DUE_WEEKDAY: Final = WEEKDAY_MONDAY

# ------------------------------------------------------------------------------------------------
# Streaks
# ------------------------------------------------------------------------------------------------
# Max days between consecutive successes (and between the latest success and
# the reference date) before a streak breaks. Same for every cadence.
GAP_TOLERANCE_DAYS: Final = 7

# ------------------------------------------------------------------------------------------------
# Statistics
# ------------------------------------------------------------------------------------------------
PERIOD_DAILY: Final = "daily"
PERIOD_WEEKLY: Final = "weekly"
PERIOD_MONTHLY: Final = "monthly"
PERIOD_YEARLY: Final = "yearly"

PERIOD_FORMAT_DAILY: Final = "%Y-%m-%d"
PERIOD_FORMAT_WEEKLY: Final = "%G-W%V"
PERIOD_FORMAT_MONTHLY: Final = "%Y-%m"
PERIOD_FORMAT_YEARLY: Final = "%Y"

# Recap leaderboard rates are capped here
MAX_COMPLETION_RATE: Final = 100

DATA_FLOAT_PRECISION: Final = 2

# Comeback award needs a gain above this many percentage points
RECAP_COMEBACK_MIN_IMPROVEMENT: Final = 10

# ------------------------------------------------------------------------------------------------
# Raw Row Keys (records as returned by the data store)
# ------------------------------------------------------------------------------------------------
DATA_PACT_ID: Final = "id"
DATA_PACT_NAME: Final = "name"
DATA_PACT_FREQUENCY: Final = "frequency"
DATA_PACT_FREQUENCY_DAYS: Final = "frequency_days"
DATA_PACT_TYPE: Final = "pact_type"
DATA_PACT_START_DATE: Final = "start_date"
DATA_PACT_END_DATE: Final = "end_date"

DATA_PARTICIPANT_PACT_ID: Final = "pact_id"
DATA_PARTICIPANT_USER_ID: Final = "user_id"
DATA_PARTICIPANT_RELAY_DAYS: Final = "relay_days"

DATA_CHECK_IN_PACT_ID: Final = "pact_id"
DATA_CHECK_IN_USER_ID: Final = "user_id"
DATA_CHECK_IN_STATUS: Final = "status"
DATA_CHECK_IN_DATE: Final = "check_in_date"
DATA_CHECK_IN_CREATED_AT: Final = "created_at"
DATA_CHECK_IN_EXCUSE: Final = "excuse"

# Row kinds (used in validation error messages)
ROW_KIND_PACT: Final = "pact"
ROW_KIND_PARTICIPANT: Final = "participant"
ROW_KIND_CHECK_IN: Final = "check_in"
