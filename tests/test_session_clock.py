# Area: Engine Tests
"""Tests for live_engine._engine.clock — SessionClock."""

from datetime import datetime, timedelta, timezone

import pytest

from live_engine._engine.clock import DEFAULT_KICKOFF_AT, SessionClock, to_epoch_ms
from live_engine._engine.default_catalog import default_catalog
from live_engine._engine.enums import GameStatus, Quarter

KICKOFF = 1_000_000


@pytest.fixture
def clock():
    return SessionClock(kickoff_at=KICKOFF)


class TestGameStatus:
    """Tests for derived game status."""

    def test_pre_game_before_kickoff(self, clock):
        assert clock.game_status(KICKOFF - 1) == GameStatus.PRE_GAME
        assert clock.time_until_kickoff(KICKOFF - 1_500) == 1_500

    def test_in_progress_from_kickoff(self, clock):
        assert clock.game_status(KICKOFF) == GameStatus.IN_PROGRESS
        assert clock.time_until_kickoff(KICKOFF + 10) == 0

    def test_halftime_until_next_quarter(self, clock):
        clock.start_halftime()
        assert clock.game_status(KICKOFF + 1) == GameStatus.HALFTIME
        clock.set_current_quarter(Quarter.Q3)
        assert clock.game_status(KICKOFF + 1) == GameStatus.IN_PROGRESS

    def test_ended(self, clock):
        clock.end_game()
        assert clock.game_status(KICKOFF + 1) == GameStatus.POST_GAME
        assert clock.game_status(0) == GameStatus.POST_GAME

    def test_override_wins_until_cleared(self, clock):
        clock.set_game_status(GameStatus.IN_PROGRESS)
        assert clock.game_status(0) == GameStatus.IN_PROGRESS
        clock.set_game_status(None)
        assert clock.game_status(0) == GameStatus.PRE_GAME

    def test_reset(self, clock):
        clock.set_current_quarter(Quarter.Q4)
        clock.end_game()
        clock.set_game_status(GameStatus.HALFTIME)
        clock.reset()
        assert clock.current_quarter == Quarter.Q1
        assert clock.game_status(KICKOFF) == GameStatus.IN_PROGRESS


class TestQuarterGate:
    """Tests for is_quarter_active / may_drop."""

    def test_only_current_quarter_is_active(self, clock):
        clock.set_current_quarter(Quarter.Q2)
        assert clock.is_quarter_active(Quarter.Q2, KICKOFF) is True
        assert clock.is_quarter_active(Quarter.Q1, KICKOFF) is False

    def test_nothing_active_before_kickoff(self, clock):
        assert clock.is_quarter_active(Quarter.Q1, 0) is False

    def test_may_drop(self, clock):
        catalog = default_catalog()
        assert clock.may_drop(catalog.question_by_id("q1-1"), KICKOFF) is True
        assert clock.may_drop(catalog.question_by_id("q2-1"), KICKOFF) is False
        clock.start_halftime()
        assert clock.may_drop(catalog.question_by_id("q1-1"), KICKOFF) is False

    def test_moving_back_is_allowed(self, clock):
        clock.set_current_quarter(Quarter.Q3)
        clock.set_current_quarter(Quarter.Q2)
        assert clock.current_quarter == Quarter.Q2


class TestEpochHelpers:
    """Tests for kickoff constants and conversion."""

    def test_default_kickoff(self):
        expected = datetime(2026, 2, 8, 23, 30, tzinfo=timezone.utc)
        assert DEFAULT_KICKOFF_AT == int(expected.timestamp() * 1000)

    def test_to_epoch_ms(self):
        moment = datetime(1970, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=1)))
        assert to_epoch_ms(moment) == 0

    def test_naive_datetime_rejected(self):
        with pytest.raises(ValueError):
            to_epoch_ms(datetime(2026, 2, 8, 18, 30))
