# File: utils/math_utils.py
"""Math and calculation utilities for Pact Cadence.

Pure Python math functions with no engine imports.

Functions:
    - round_half_up: Round to nearest integer, halves away from zero
    - completion_rate_percent: Whole-number completion percentage
    - calculate_percentage: Percentage with decimal precision
    - clamp: Bound a value to a range
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default float precision for percentage rounding
DATA_FLOAT_PRECISION = 2


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves rounding up.

    Python's round() uses banker's rounding (round(80.5) == 80). Completion
    rates are shown as whole percentages where 80.5 must read as 81.

    Examples:
        round_half_up(80.5) → 81
        round_half_up(80.49) → 80
        round_half_up(0.0) → 0
    """
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def completion_rate_percent(completed: int, expected: int) -> int:
    """Return completed/expected as a whole percentage, or 0 when nothing is expected.

    Not capped: more successes than expected occurrences reads above 100.

    Examples:
        completion_rate_percent(8, 10) → 80
        completion_rate_percent(2, 3) → 67
        completion_rate_percent(5, 0) → 0  # Division by zero protection
    """
    if expected <= 0:
        return 0
    return round_half_up(completed / expected * 100)


def calculate_percentage(
    current: float,
    target: float,
    precision: int = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate a percentage rounded to `precision` decimals.

    Returns:
        Percentage with proper rounding, or 0.0 if target is 0

    Examples:
        calculate_percentage(1, 3) → 33.33
        calculate_percentage(5, 0) → 0.0
    """
    if target <= 0:
        return 0.0
    return round((current / target) * 100, precision)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(150, 0, 100) → 100
        clamp(-10, 0, 100) → 0
        clamp(50, 0, 100) → 50
    """
    return max(min_val, min(value, max_val))
