# Area: Engine
"""
live_engine._engine.lifecycle — Question Lifecycle Store
========================================================

Authoritative runtime status for every catalog question. Exposes the
operator transitions (drop, lock, resolve) and the countdown query.

The store owns no timers. The host re-evaluates ``now`` on its display
tick and calls ``lock_expired`` (or ``lock``) itself.

Dropping a question outside its quarter is not rejected here; keeping
drops in quarter order is the operator workflow's job (see
``SessionClock.may_drop``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Dict, List, Optional

from .catalog import QuestionCatalog
from .enums import QuestionEvent, QuestionStatus, TransitionOutcome
from .results import TransitionResult
from .state_machine import can_transition, is_forward, next_status
from ..errors import ResolutionConflictError
from .._shared.logging_config import log_engine_error

if TYPE_CHECKING:
    from .ledger import AnswerLedger

logger = logging.getLogger("live_engine.lifecycle")


@dataclass(frozen=True)
class QuestionRuntimeState:
    """
    Runtime record for one question.

    dropped_at / expires_at are set once the question leaves PENDING;
    correct_option_id only once it is RESOLVED. All timestamps are
    epoch milliseconds.
    """

    question_id: str
    status: QuestionStatus = QuestionStatus.PENDING
    dropped_at: Optional[int] = None
    expires_at: Optional[int] = None
    resolved_at: Optional[int] = None
    correct_option_id: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status == QuestionStatus.ACTIVE


class QuestionLifecycleStore:
    """
    State machine holder for every question in the catalog.

    Every question starts PENDING. Commands on unknown ids return
    NOT_FOUND; commands that do not apply return NO_OP or
    INVALID_TRANSITION. Nothing here raises for routine misuse.
    """

    def __init__(self, catalog: QuestionCatalog):
        self.catalog = catalog
        self._states: Dict[str, QuestionRuntimeState] = {
            q.id: QuestionRuntimeState(question_id=q.id) for q in catalog
        }
        self._ledger: Optional["AnswerLedger"] = None

    def attach_ledger(self, ledger: "AnswerLedger") -> None:
        """Register the ledger that receives correctness back-fills on resolve."""
        self._ledger = ledger

    # ── Queries ──────────────────────────────────────────────

    def state_for(self, question_id: str) -> Optional[QuestionRuntimeState]:
        return self._states.get(question_id)

    def status_of(self, question_id: str) -> Optional[QuestionStatus]:
        state = self._states.get(question_id)
        return state.status if state else None

    def states(self) -> List[QuestionRuntimeState]:
        """All runtime states in catalog order."""
        return [self._states[q.id] for q in self.catalog]

    def active_questions(self) -> List[QuestionRuntimeState]:
        return [s for s in self.states() if s.status == QuestionStatus.ACTIVE]

    def time_remaining(self, question_id: str, now: int) -> int:
        """Milliseconds left in the answer window; 0 unless ACTIVE."""
        state = self._states.get(question_id)
        if state is None or state.status != QuestionStatus.ACTIVE:
            return 0
        if state.expires_at is None:
            return 0
        return max(0, state.expires_at - now)

    # ── Transitions ──────────────────────────────────────────

    def drop(self, question_id: str, now: int) -> TransitionResult:
        """Open the answer window: PENDING -> ACTIVE."""
        question = self.catalog.question_by_id(question_id)
        state = self._states.get(question_id)
        if question is None or state is None:
            logger.info("Drop ignored: unknown question %s", question_id)
            return TransitionResult(question_id, TransitionOutcome.NOT_FOUND)

        if not can_transition(state.status, QuestionEvent.DROP):
            logger.debug("Drop ignored: %s already %s", question_id, state.status.value)
            return TransitionResult(question_id, TransitionOutcome.NO_OP, state)

        new_state = replace(
            state,
            status=QuestionStatus.ACTIVE,
            dropped_at=now,
            expires_at=now + question.time_limit_ms,
        )
        self._set(new_state)
        logger.info(
            "Dropped %s (%ss window, expires_at=%d)",
            question_id, question.time_limit, new_state.expires_at,
        )
        return TransitionResult(question_id, TransitionOutcome.APPLIED, new_state)

    def lock(self, question_id: str, now: int) -> TransitionResult:
        """Close the answer window: ACTIVE -> LOCKED. No-op otherwise."""
        state = self._states.get(question_id)
        if state is None:
            logger.info("Lock ignored: unknown question %s", question_id)
            return TransitionResult(question_id, TransitionOutcome.NOT_FOUND)

        if state.status != QuestionStatus.ACTIVE:
            logger.debug("Lock ignored: %s is %s", question_id, state.status.value)
            return TransitionResult(question_id, TransitionOutcome.NO_OP, state)

        new_state = replace(state, status=next_status(state.status, QuestionEvent.LOCK))
        self._set(new_state)
        if state.expires_at is not None and now < state.expires_at:
            logger.info("Locked %s early (%d ms before expiry)",
                        question_id, state.expires_at - now)
        else:
            logger.info("Locked %s", question_id)
        return TransitionResult(question_id, TransitionOutcome.APPLIED, new_state)

    def lock_expired(self, now: int) -> List[str]:
        """Lock every ACTIVE question whose window has run out; return their ids."""
        locked = []
        for state in self.active_questions():
            if state.expires_at is not None and now >= state.expires_at:
                if self.lock(state.question_id, now).applied:
                    locked.append(state.question_id)
        return locked

    def resolve(self, question_id: str, correct_option_id: str, now: int) -> TransitionResult:
        """
        Record the authoritative answer: ACTIVE/LOCKED -> RESOLVED.

        Resolving an ACTIVE question locks it implicitly. Re-resolving
        with the same option is a no-op; with a different option it is
        a RESOLUTION_CONFLICT and the stored answer is kept.
        """
        question = self.catalog.question_by_id(question_id)
        state = self._states.get(question_id)
        if question is None or state is None:
            logger.info("Resolve ignored: unknown question %s", question_id)
            return TransitionResult(question_id, TransitionOutcome.NOT_FOUND)

        if not question.has_option(correct_option_id):
            logger.warning(
                "Resolve ignored: %r is not an option of %s (options: %s)",
                correct_option_id, question_id, list(question.option_ids),
            )
            return TransitionResult(question_id, TransitionOutcome.INVALID_OPTION, state)

        if state.status == QuestionStatus.RESOLVED:
            if state.correct_option_id == correct_option_id:
                logger.debug("Resolve ignored: %s already resolved to %s",
                             question_id, correct_option_id)
                return TransitionResult(question_id, TransitionOutcome.NO_OP, state)
            conflict = ResolutionConflictError(
                question_id=question_id,
                existing_option_id=state.correct_option_id,
                attempted_option_id=correct_option_id,
            )
            log_engine_error(conflict)
            return TransitionResult(
                question_id, TransitionOutcome.RESOLUTION_CONFLICT, state, conflict
            )

        if not can_transition(state.status, QuestionEvent.RESOLVE):
            logger.info("Resolve ignored: %s is still %s", question_id, state.status.value)
            return TransitionResult(question_id, TransitionOutcome.INVALID_TRANSITION, state)

        if state.status == QuestionStatus.ACTIVE:
            logger.info("Resolving %s while still active; locking first", question_id)

        resolved_at = now
        if state.dropped_at is not None and now < state.dropped_at:
            logger.warning(
                "Resolve time %d precedes drop time %d for %s; clamping",
                now, state.dropped_at, question_id,
            )
            resolved_at = state.dropped_at

        new_state = replace(
            state,
            status=QuestionStatus.RESOLVED,
            resolved_at=resolved_at,
            correct_option_id=correct_option_id,
        )
        self._set(new_state)
        if self._ledger is not None:
            self._ledger.apply_resolution(question_id, correct_option_id)
        logger.info("Resolved %s -> %s", question_id, correct_option_id)
        return TransitionResult(question_id, TransitionOutcome.APPLIED, new_state)

    # ── Persistence support ──────────────────────────────────

    def snapshot(self) -> Dict[str, QuestionRuntimeState]:
        return dict(self._states)

    def restore(self, snapshot: Dict[str, QuestionRuntimeState]) -> None:
        self._states = dict(snapshot)

    def load_states(self, states: Dict[str, QuestionRuntimeState]) -> None:
        """Replace runtime states; questions missing from ``states`` become PENDING."""
        self._states = {
            q.id: states.get(q.id, QuestionRuntimeState(question_id=q.id))
            for q in self.catalog
        }

    def reset(self) -> None:
        logger.info("Resetting all questions to pending")
        self.load_states({})

    def _set(self, new_state: QuestionRuntimeState) -> None:
        old = self._states[new_state.question_id]
        if not is_forward(old.status, new_state.status):
            raise RuntimeError(
                f"Backward transition {old.status.value} -> {new_state.status.value} "
                f"for {new_state.question_id}"
            )
        self._states[new_state.question_id] = new_state
