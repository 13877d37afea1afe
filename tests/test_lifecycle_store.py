# Area: Engine Tests
"""Tests for live_engine._engine.lifecycle — QuestionLifecycleStore."""

import pytest

from live_engine._engine.default_catalog import default_catalog
from live_engine._engine.enums import QuestionStatus, TransitionOutcome
from live_engine._engine.ledger import AnswerLedger
from live_engine._engine.lifecycle import QuestionLifecycleStore, QuestionRuntimeState
from live_engine.errors import ResolutionConflictError


@pytest.fixture
def store():
    return QuestionLifecycleStore(default_catalog())


class TestInitialState:
    """Tests for a freshly built store."""

    def test_everything_pending(self, store):
        assert all(s.status == QuestionStatus.PENDING for s in store.states())
        assert len(store.states()) == 25

    def test_unknown_question(self, store):
        assert store.state_for("zz-9") is None
        assert store.status_of("zz-9") is None
        assert store.time_remaining("zz-9", 0) == 0


class TestDrop:
    """Tests for drop (PENDING -> ACTIVE)."""

    def test_drop_sets_window(self, store):
        result = store.drop("q1-1", 1_000)
        assert result.applied
        assert result.state.status == QuestionStatus.ACTIVE
        assert result.state.dropped_at == 1_000
        assert result.state.expires_at == 61_000
        assert result.state.is_open

    def test_drop_uses_question_time_limit(self, store):
        result = store.drop("q1-2", 0)
        assert result.state.expires_at == 30_000

    def test_drop_at_time_zero(self, store):
        """Epoch 0 is a valid drop time."""
        result = store.drop("q1-1", 0)
        assert result.state.dropped_at == 0
        assert store.time_remaining("q1-1", 0) == 60_000

    def test_second_drop_is_noop(self, store):
        store.drop("q1-1", 0)
        result = store.drop("q1-1", 5_000)
        assert result.outcome == TransitionOutcome.NO_OP
        assert store.state_for("q1-1").dropped_at == 0

    def test_drop_unknown(self, store):
        result = store.drop("nope", 0)
        assert result.outcome == TransitionOutcome.NOT_FOUND
        assert result.state is None


class TestLock:
    """Tests for lock and lock_expired."""

    def test_lock_active(self, store):
        store.drop("q1-1", 0)
        result = store.lock("q1-1", 10_000)
        assert result.applied
        assert store.status_of("q1-1") == QuestionStatus.LOCKED
        assert store.time_remaining("q1-1", 10_000) == 0

    def test_lock_keeps_window_times(self, store):
        store.drop("q1-1", 0)
        state = store.lock("q1-1", 70_000).state
        assert state.dropped_at == 0
        assert state.expires_at == 60_000

    def test_lock_pending_is_noop(self, store):
        result = store.lock("q1-1", 0)
        assert result.outcome == TransitionOutcome.NO_OP
        assert store.status_of("q1-1") == QuestionStatus.PENDING

    def test_lock_unknown(self, store):
        assert store.lock("nope", 0).outcome == TransitionOutcome.NOT_FOUND

    def test_lock_expired_only_locks_past_window(self, store):
        store.drop("q1-1", 0)       # expires 60_000
        store.drop("q1-2", 0)       # expires 30_000
        assert store.lock_expired(29_999) == []
        assert store.lock_expired(30_000) == ["q1-2"]
        assert store.status_of("q1-1") == QuestionStatus.ACTIVE
        assert store.lock_expired(60_000) == ["q1-1"]
        assert store.active_questions() == []

    def test_time_remaining_clamps_at_zero(self, store):
        store.drop("q1-1", 0)
        assert store.time_remaining("q1-1", 59_000) == 1_000
        assert store.time_remaining("q1-1", 90_000) == 0


class TestResolve:
    """Tests for resolve (ACTIVE/LOCKED -> RESOLVED)."""

    def test_resolve_locked(self, store):
        store.drop("q1-1", 0)
        store.lock("q1-1", 60_000)
        result = store.resolve("q1-1", "yes", 70_000)
        assert result.applied
        assert result.state.status == QuestionStatus.RESOLVED
        assert result.state.correct_option_id == "yes"
        assert result.state.resolved_at == 70_000

    def test_resolve_active_locks_implicitly(self, store):
        store.drop("q1-1", 0)
        result = store.resolve("q1-1", "no", 5_000)
        assert result.applied
        assert store.status_of("q1-1") == QuestionStatus.RESOLVED

    def test_resolve_pending_is_invalid(self, store):
        result = store.resolve("q1-1", "yes", 0)
        assert result.outcome == TransitionOutcome.INVALID_TRANSITION
        assert store.status_of("q1-1") == QuestionStatus.PENDING

    def test_resolve_with_unknown_option(self, store):
        store.drop("q1-1", 0)
        result = store.resolve("q1-1", "maybe", 1_000)
        assert result.outcome == TransitionOutcome.INVALID_OPTION
        assert store.status_of("q1-1") == QuestionStatus.ACTIVE

    def test_resolve_unknown(self, store):
        assert store.resolve("nope", "yes", 0).outcome == TransitionOutcome.NOT_FOUND

    def test_same_answer_again_is_noop(self, store):
        store.drop("q1-1", 0)
        store.resolve("q1-1", "yes", 70_000)
        result = store.resolve("q1-1", "yes", 80_000)
        assert result.outcome == TransitionOutcome.NO_OP
        assert result.state.resolved_at == 70_000

    def test_different_answer_is_conflict(self, store, capsys):
        """The first answer stands and the conflict is reported."""
        store.drop("q1-1", 0)
        store.resolve("q1-1", "yes", 70_000)
        result = store.resolve("q1-1", "no", 80_000)

        assert result.is_conflict
        assert result.state.correct_option_id == "yes"
        assert isinstance(result.conflict, ResolutionConflictError)
        assert result.conflict.existing_option_id == "yes"
        assert result.conflict.attempted_option_id == "no"
        assert "RESOLUTION_CONFLICT" in capsys.readouterr().err

        with pytest.raises(ResolutionConflictError):
            result.raise_for_conflict()

    def test_resolved_at_not_before_drop(self, store):
        store.drop("q1-1", 50_000)
        result = store.resolve("q1-1", "yes", 10_000)
        assert result.state.resolved_at == 50_000

    def test_resolve_backfills_ledger(self, store):
        ledger = AnswerLedger(store.catalog, store)
        store.drop("q1-1", 0)
        ledger.submit_answer("q1-1", "yes", 10_000)
        store.resolve("q1-1", "yes", 70_000)
        assert ledger.answer_for("q1-1").correct is True


class TestSnapshotAndLoad:
    """Tests for snapshot / restore / load_states / reset."""

    def test_restore_undoes_changes(self, store):
        snap = store.snapshot()
        store.drop("q1-1", 0)
        store.restore(snap)
        assert store.status_of("q1-1") == QuestionStatus.PENDING

    def test_load_states_fills_missing_with_pending(self, store):
        store.drop("q2-1", 0)
        store.load_states({
            "q1-1": QuestionRuntimeState(
                question_id="q1-1", status=QuestionStatus.LOCKED,
                dropped_at=0, expires_at=60_000,
            ),
        })
        assert store.status_of("q1-1") == QuestionStatus.LOCKED
        assert store.status_of("q2-1") == QuestionStatus.PENDING

    def test_reset(self, store):
        store.drop("q1-1", 0)
        store.reset()
        assert store.status_of("q1-1") == QuestionStatus.PENDING

    def test_backward_status_write_is_rejected(self, store):
        """The store never moves a question back to an earlier status."""
        store.drop("q1-1", 0)
        store.lock("q1-1", 1_000)
        with pytest.raises(RuntimeError):
            store._set(QuestionRuntimeState(question_id="q1-1", status=QuestionStatus.ACTIVE,
                                            dropped_at=0, expires_at=60_000))
        assert store.status_of("q1-1") == QuestionStatus.LOCKED
