"""Tests for row validation and history ordering helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
import voluptuous as vol

from pactcadence import const
from pactcadence.exceptions import HistoryOrderError, RecordValidationError
from pactcadence.helpers.record_helpers import (
    build_cadence_rule,
    build_check_in,
    build_pact,
    build_participant,
    ensure_sorted,
    sort_history,
    validate_weekday_set,
)
from pactcadence.type_defs import CustomCadence, DailyCadence, WeeklyCadence
from tests.helpers import (
    make_check_in,
    make_check_in_row,
    make_pact_row,
    make_participant_row,
)


class TestBuildPact:
    """Tests for build_pact()."""

    def test_daily_group_pact(self) -> None:
        """A valid row becomes a Pact; unknown keys are dropped."""
        pact = build_pact(make_pact_row())

        assert pact.pact_id == "pact-1"
        assert pact.cadence == DailyCadence()
        assert pact.mode == const.PACT_MODE_GROUP
        assert pact.start_date == date(2024, 1, 1)
        assert pact.end_date is None
        assert pact.name == "Morning run"

    def test_custom_pact_weekdays(self) -> None:
        """frequency_days becomes the custom weekday set."""
        pact = build_pact(
            make_pact_row(
                frequency=const.CADENCE_CUSTOM, frequency_days=[1, 3, 5], end_date="2024-03-31"
            )
        )

        assert pact.cadence == CustomCadence(frozenset({1, 3, 5}))
        assert pact.end_date == date(2024, 3, 31)

    def test_custom_without_days_is_empty(self) -> None:
        """A custom pact without weekdays is never due."""
        pact = build_pact(make_pact_row(frequency=const.CADENCE_CUSTOM))

        assert pact.cadence == CustomCadence(frozenset())

    def test_start_date_from_timestamp(self) -> None:
        """Timestamp strings are reduced to their date."""
        pact = build_pact(make_pact_row(start_date="2024-01-05T09:30:00+00:00"))

        assert pact.start_date == date(2024, 1, 5)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"frequency": "hourly"},
            {"pact_type": "solo"},
            {"start_date": "not-a-date"},
            {"id": ""},
            {"frequency_days": [1, 9]},
            {"frequency_days": "1,3"},
        ],
    )
    def test_invalid_rows(self, overrides: dict) -> None:
        """Malformed rows raise RecordValidationError."""
        with pytest.raises(RecordValidationError) as exc_info:
            build_pact(make_pact_row(**overrides))

        assert exc_info.value.row_kind == const.ROW_KIND_PACT
        assert isinstance(exc_info.value.__cause__, vol.Invalid)

    def test_missing_start_date(self) -> None:
        """Required keys must be present."""
        row = make_pact_row()
        del row[const.DATA_PACT_START_DATE]

        with pytest.raises(RecordValidationError, match="Invalid pact row"):
            build_pact(row)


class TestBuildCadenceRule:
    """Tests for build_cadence_rule()."""

    def test_known_frequencies(self) -> None:
        """Each frequency name maps to its rule."""
        assert build_cadence_rule(const.CADENCE_DAILY) == DailyCadence()
        assert build_cadence_rule(const.CADENCE_WEEKLY, [2]) == WeeklyCadence()
        assert build_cadence_rule(const.CADENCE_CUSTOM, [0, 6]) == CustomCadence(
            frozenset({0, 6})
        )

    def test_unknown_frequency(self) -> None:
        """Unknown names are rejected."""
        with pytest.raises(RecordValidationError):
            build_cadence_rule("fortnightly")


class TestBuildParticipant:
    """Tests for build_participant()."""

    def test_relay_days(self) -> None:
        """relay_days becomes a frozenset."""
        participant = build_participant(make_participant_row("bob", relay_days=[3]))

        assert participant.user_id == "bob"
        assert participant.relay_days == frozenset({3})

    def test_no_relay_days(self) -> None:
        """Missing relay_days stays None."""
        assert build_participant(make_participant_row("bob")).relay_days is None

    def test_missing_user(self) -> None:
        """user_id is required."""
        with pytest.raises(RecordValidationError) as exc_info:
            build_participant({const.DATA_PARTICIPANT_PACT_ID: "pact-1"})

        assert exc_info.value.row_kind == const.ROW_KIND_PARTICIPANT


class TestBuildCheckIn:
    """Tests for build_check_in()."""

    def test_valid_row(self) -> None:
        """Dates, timestamps and excuses are carried over."""
        record = build_check_in(
            make_check_in_row(
                "alice", "2024-01-03", const.OUTCOME_FOLD, excuse="Sick"
            )
        )

        assert record.check_in_date == date(2024, 1, 3)
        assert record.created_at == datetime(2024, 1, 3, 8, tzinfo=UTC)
        assert record.is_fold
        assert record.excuse == "Sick"

    def test_naive_created_at_is_utc(self) -> None:
        """Naive timestamps are read as UTC."""
        record = build_check_in(
            make_check_in_row("alice", "2024-01-03", created_at="2024-01-03T10:00:00")
        )

        assert record.created_at.tzinfo is UTC

    def test_unknown_status(self) -> None:
        """Status must be success or fold."""
        with pytest.raises(RecordValidationError) as exc_info:
            build_check_in(make_check_in_row("alice", "2024-01-03", "pending"))

        assert exc_info.value.row_kind == const.ROW_KIND_CHECK_IN


class TestValidateWeekdaySet:
    """Tests for validate_weekday_set()."""

    def test_valid(self) -> None:
        """Duplicates collapse into a frozenset."""
        assert validate_weekday_set([1, 1, 3]) == frozenset({1, 3})

    @pytest.mark.parametrize("value", [[True], ["1"], [7], [-1], 3])
    def test_invalid(self, value) -> None:
        """Booleans, strings, out-of-range values and scalars fail."""
        with pytest.raises(vol.Invalid):
            validate_weekday_set(value)


class TestHistoryOrdering:
    """Tests for sort_history() and ensure_sorted()."""

    def test_sort_by_date_then_created_at(self) -> None:
        """Records sort by date, then creation time, untimed first."""
        late = make_check_in("alice", date(2024, 1, 2))
        early = make_check_in("alice", date(2024, 1, 1))
        timed_b = build_check_in(
            make_check_in_row("bob", "2024-01-01", created_at="2024-01-01T20:00:00Z")
        )
        timed_c = build_check_in(
            make_check_in_row("carol", "2024-01-01", created_at="2024-01-01T07:00:00Z")
        )

        result = sort_history([late, timed_b, early, timed_c])

        assert result == [early, timed_c, timed_b, late]

    def test_ensure_sorted_accepts_equal_dates(self) -> None:
        """Different participants may share a date."""
        history = [
            make_check_in("alice", date(2024, 1, 1)),
            make_check_in("bob", date(2024, 1, 1)),
            make_check_in("alice", date(2024, 1, 2)),
        ]

        ensure_sorted(history)

    def test_ensure_sorted_rejects_descending(self) -> None:
        """The first out-of-order record is reported."""
        history = [
            make_check_in("alice", date(2024, 1, 1)),
            make_check_in("alice", date(2024, 1, 5)),
            make_check_in("alice", date(2024, 1, 3)),
        ]

        with pytest.raises(HistoryOrderError) as exc_info:
            ensure_sorted(history)

        assert exc_info.value.index == 2
        assert exc_info.value.previous_date == date(2024, 1, 5)
        assert exc_info.value.offending_date == date(2024, 1, 3)
