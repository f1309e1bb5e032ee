"""Exceptions raised at the Pact Cadence boundary.

The engines themselves never raise: degenerate inputs resolve to safe
defaults. These errors belong to the helpers that turn raw rows into
records and check caller preconditions.
"""

from __future__ import annotations

from datetime import date


class PactCadenceError(Exception):
    """Base class for all Pact Cadence errors."""


class RecordValidationError(PactCadenceError):
    """Raised when a raw row cannot be turned into a record.

    Attributes:
        row_kind: Kind of row being validated (const.ROW_KIND_*)
        reason: Validation message from the schema
    """

    def __init__(self, row_kind: str, reason: str) -> None:
        """Initialize RecordValidationError.

        Args:
            row_kind: Kind of row being validated (const.ROW_KIND_*)
            reason: Validation message from the schema
        """
        self.row_kind = row_kind
        self.reason = reason
        super().__init__(f"Invalid {row_kind} row: {reason}")


class HistoryOrderError(PactCadenceError):
    """Raised when a check-in history is not sorted ascending by date.

    Attributes:
        index: Position of the first record that precedes its predecessor
        previous_date: Date of the record at index - 1
        offending_date: Date of the record at index
    """

    def __init__(self, index: int, previous_date: date, offending_date: date) -> None:
        """Initialize HistoryOrderError."""
        self.index = index
        self.previous_date = previous_date
        self.offending_date = offending_date
        super().__init__(
            f"Check-in history out of order at index {index}: "
            f"{offending_date.isoformat()} follows {previous_date.isoformat()}"
        )
