# Area: Shared Tests
"""Tests for live_engine._shared.formatting."""

import pytest

from live_engine._shared.formatting import format_countdown, format_time_until_game


@pytest.mark.parametrize("ms, expected", [
    (0, "0:00"),
    (-500, "0:00"),
    (1, "0:01"),
    (1_000, "0:01"),
    (1_001, "0:02"),
    (59_000, "0:59"),
    (60_000, "1:00"),
    (125_400, "2:06"),
])
def test_format_countdown(ms, expected):
    assert format_countdown(ms) == expected


def test_time_until_game_breakdown():
    ms = ((2 * 86400) + (3 * 3600) + (4 * 60) + 5) * 1000 + 999
    assert format_time_until_game(ms) == {
        "days": 2, "hours": 3, "minutes": 4, "seconds": 5,
    }


def test_time_until_game_after_kickoff():
    assert format_time_until_game(-1) == {
        "days": 0, "hours": 0, "minutes": 0, "seconds": 0,
    }
