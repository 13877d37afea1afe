# Area: Engine Tests
"""Tests for the question status transition table."""

from live_engine._engine.enums import QuestionEvent, QuestionStatus
from live_engine._engine.state_machine import (
    TRANSITIONS,
    can_transition,
    is_forward,
    next_status,
)


class TestTransitionTable:
    """Tests for can_transition / next_status."""

    def test_every_status_has_an_entry(self):
        assert set(TRANSITIONS) == set(QuestionStatus)

    def test_pending_only_drops(self):
        assert can_transition(QuestionStatus.PENDING, QuestionEvent.DROP) is True
        assert can_transition(QuestionStatus.PENDING, QuestionEvent.LOCK) is False
        assert can_transition(QuestionStatus.PENDING, QuestionEvent.RESOLVE) is False

    def test_active_locks_or_resolves(self):
        assert next_status(QuestionStatus.ACTIVE, QuestionEvent.LOCK) == QuestionStatus.LOCKED
        assert next_status(QuestionStatus.ACTIVE, QuestionEvent.RESOLVE) == QuestionStatus.RESOLVED
        assert can_transition(QuestionStatus.ACTIVE, QuestionEvent.DROP) is False

    def test_locked_only_resolves(self):
        assert next_status(QuestionStatus.LOCKED, QuestionEvent.RESOLVE) == QuestionStatus.RESOLVED
        assert next_status(QuestionStatus.LOCKED, QuestionEvent.LOCK) is None

    def test_resolved_is_terminal(self):
        """No event leaves RESOLVED."""
        for event in QuestionEvent:
            assert can_transition(QuestionStatus.RESOLVED, event) is False
            assert next_status(QuestionStatus.RESOLVED, event) is None


class TestIsForward:
    """Tests for the monotonic status order."""

    def test_forward_and_same(self):
        assert is_forward(QuestionStatus.PENDING, QuestionStatus.ACTIVE) is True
        assert is_forward(QuestionStatus.ACTIVE, QuestionStatus.RESOLVED) is True
        assert is_forward(QuestionStatus.LOCKED, QuestionStatus.LOCKED) is True

    def test_backward(self):
        assert is_forward(QuestionStatus.RESOLVED, QuestionStatus.ACTIVE) is False
        assert is_forward(QuestionStatus.LOCKED, QuestionStatus.PENDING) is False
