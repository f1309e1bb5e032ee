# File: utils/__init__.py
"""Pure Python utilities for Pact Cadence.

Submodules:
    - dt_utils: Date parsing, weekday numbering, range iteration, week bounds
    - math_utils: Half-up rounding, completion percentages, clamping

Usage:
    from . import dt_utils
    from .math_utils import completion_rate_percent
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
