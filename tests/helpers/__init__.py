"""Test helpers for Pact Cadence tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import (
        # Records
        make_pact, make_participant, make_check_in, make_history,

        # Rows
        make_pact_row, make_participant_row, make_check_in_row,

        # Reader
        InMemoryReader,
    )

See individual modules for full documentation:
- records.py: Builders for engine records and raw data-store rows
- reader.py: In-memory PactReader for manager tests
"""

from tests.helpers.reader import InMemoryReader
from tests.helpers.records import (
    make_check_in,
    make_check_in_row,
    make_history,
    make_pact,
    make_pact_row,
    make_participant,
    make_participant_row,
)

__all__ = [
    "InMemoryReader",
    "make_check_in",
    "make_check_in_row",
    "make_history",
    "make_pact",
    "make_pact_row",
    "make_participant",
    "make_participant_row",
]
