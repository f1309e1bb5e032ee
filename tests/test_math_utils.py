"""Tests for math utilities."""

from __future__ import annotations

import pytest

from pactcadence.utils.math_utils import (
    calculate_percentage,
    clamp,
    completion_rate_percent,
    round_half_up,
)


@pytest.mark.parametrize(
    ("value", "expected"), [(80.5, 81), (80.49, 80), (12.5, 13), (0.0, 0)]
)
def test_round_half_up(value: float, expected: int) -> None:
    """Halves round up, unlike round()."""
    assert round_half_up(value) == expected


def test_completion_rate_percent() -> None:
    """Whole percentages, zero when nothing is expected, uncapped."""
    assert completion_rate_percent(8, 10) == 80
    assert completion_rate_percent(2, 3) == 67
    assert completion_rate_percent(5, 0) == 0
    assert completion_rate_percent(3, 2) == 150


def test_calculate_percentage() -> None:
    """Two decimals by default."""
    assert calculate_percentage(1, 3) == 33.33
    assert calculate_percentage(1, 3, precision=0) == 33.0
    assert calculate_percentage(5, 0) == 0.0


def test_clamp() -> None:
    """Values are bounded on both sides."""
    assert clamp(150, 0, 100) == 100
    assert clamp(-10, 0, 100) == 0
    assert clamp(50, 0, 100) == 50
