"""Unit tests for narration duration estimates and formatting."""

from __future__ import annotations

import math

import pytest

from chapterforge.text.durations import estimate_duration_seconds, format_duration


@pytest.mark.parametrize(
    ("characters", "seconds"),
    [(0, 0), (1, 1), (12, 1), (13, 2), (25, 2), (26, 3), (125, 10), (1000, 80), (1001, 81)],
)
def test_estimate_duration_is_ceiling_of_rate(characters: int, seconds: int) -> None:
    """Durations should equal `ceil(characters / 12.5)` exactly."""

    assert estimate_duration_seconds(characters) == seconds


def test_estimate_duration_is_monotonic() -> None:
    """More characters never means a shorter estimate."""

    estimates = [estimate_duration_seconds(count) for count in range(0, 2000)]

    assert estimates == sorted(estimates)
    assert all(value == math.ceil(count * 2 / 25) for count, value in enumerate(estimates))


def test_estimate_duration_rejects_negative_counts() -> None:
    """Negative character counts are invalid."""

    with pytest.raises(ValueError):
        estimate_duration_seconds(-1)


@pytest.mark.parametrize(
    ("seconds", "formatted"),
    [(0, "0s"), (45, "45s"), (200, "3m 20s"), (3900, "1h 5m"), (7200, "2h 0m")],
)
def test_format_duration(seconds: int, formatted: str) -> None:
    """Durations render as hours/minutes, minutes/seconds, or seconds."""

    assert format_duration(seconds) == formatted
