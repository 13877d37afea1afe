"""
live_engine.engine — Live Question Engine facade
================================================

Wires the catalog, lifecycle store, answer ledger, scoring calculator,
session clock and persistence port into one object with three kinds of
calls:

- operator commands: drop, lock, resolve, lock_expired, reset and the
  clock controls
- the user command: submit_answer
- pure reads for rendering: scores, answers, countdowns, quarter lists

Every mutating call is all-or-nothing. The change is applied in memory,
the full document is saved through the persistence port, and if the
save fails the in-memory change is rolled back and the call reports
``persistence_failed``.

Time is never read from a global clock: every time-sensitive call takes
``now`` in epoch milliseconds.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from ._engine.catalog import Question, QuestionCatalog
from ._engine.clock import SessionClock
from ._engine.default_catalog import default_catalog
from ._engine.enums import GameStatus, Quarter, SubmitOutcome, TransitionOutcome
from ._engine.ledger import Answer, AnswerLedger
from ._engine.lifecycle import QuestionLifecycleStore, QuestionRuntimeState
from ._engine.results import SubmitResult, TransitionResult
from ._engine.scoring import QuarterScore, ScoringCalculator
from ._engine.snapshot import decode_state, encode_state
from ._shared.logging_config import log_engine_error
from ._shared.persistence import InMemoryPersistence, StatePersistence
from .errors import PersistenceError
from .types import PersistedState

logger = logging.getLogger("live_engine.engine")


class LiveQuestionEngine:
    """
    One user's live question session.

    Args:
        catalog: Question content. Defaults to the bundled catalog.
        persistence: Where the durable document lives. Defaults to memory.
        clock: Session clock. Defaults to the bundled kickoff time.
        reload_before_write: Reload persisted state before every mutating
            call. Use when several processes share one store, so the
            one-answer rule is checked against stored state rather than
            this process's cache.
    """

    def __init__(
        self,
        catalog: Optional[QuestionCatalog] = None,
        persistence: Optional[StatePersistence] = None,
        clock: Optional[SessionClock] = None,
        reload_before_write: bool = False,
    ):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.persistence = persistence if persistence is not None else InMemoryPersistence()
        self.clock = clock if clock is not None else SessionClock()
        self.reload_before_write = reload_before_write

        self.lifecycle = QuestionLifecycleStore(self.catalog)
        self.ledger = AnswerLedger(self.catalog, self.lifecycle)
        self.scoring = ScoringCalculator(self.catalog, self.ledger, self.lifecycle)

        self.reload()

    # ── State loading / export ───────────────────────────────

    def reload(self) -> None:
        """Replace in-memory state with what the persistence port holds."""
        document = self.persistence.load()
        states, answers = decode_state(
            document, self.catalog, source=type(self.persistence).__name__
        )
        self.lifecycle.load_states(states)
        self.ledger.load_answers(answers)
        if document:
            logger.info("Loaded state: %d answers, %d questions past pending",
                        len(answers), len(states))

    def export_state(self) -> PersistedState:
        """The durable document for the current state."""
        return encode_state(self.lifecycle.states(), self.ledger.answers())

    # ── Operator commands ────────────────────────────────────

    def drop(self, question_id: str, now: int) -> TransitionResult:
        question = self.catalog.question_by_id(question_id)
        if question is not None and not self.clock.may_drop(question, now):
            logger.warning(
                "Dropping %s outside its live quarter (status=%s, current=%s)",
                question_id, self.clock.game_status(now).value,
                self.clock.current_quarter.value,
            )
        return self._transition(question_id, lambda: self.lifecycle.drop(question_id, now))

    def lock(self, question_id: str, now: int) -> TransitionResult:
        return self._transition(question_id, lambda: self.lifecycle.lock(question_id, now))

    def resolve(self, question_id: str, correct_option_id: str, now: int) -> TransitionResult:
        return self._transition(
            question_id,
            lambda: self.lifecycle.resolve(question_id, correct_option_id, now),
        )

    def lock_expired(self, now: int) -> List[str]:
        """Lock every question whose window has closed. Call from the display tick."""
        if not self._maybe_reload():
            return []
        snapshot = self._snapshot()
        locked = self.lifecycle.lock_expired(now)
        if locked and not self._persist(snapshot):
            return []
        return locked

    def reset(self) -> bool:
        """Clear every answer and return all questions to pending."""
        snapshot = self._snapshot()
        self.lifecycle.reset()
        self.ledger.clear()
        if not self._persist(snapshot):
            return False
        self.clock.reset()
        logger.info("Live session reset")
        return True

    def set_current_quarter(self, quarter: Quarter) -> None:
        self.clock.set_current_quarter(quarter)

    def start_halftime(self) -> None:
        self.clock.start_halftime()

    def end_game(self) -> None:
        self.clock.end_game()

    def set_game_status(self, status: Optional[GameStatus]) -> None:
        self.clock.set_game_status(status)

    # ── User command ─────────────────────────────────────────

    def submit_answer(self, question_id: str, option_id: str, now: int) -> SubmitResult:
        """Record the user's answer. The result is truthy only if accepted."""
        if not self._maybe_reload():
            return SubmitResult(question_id, SubmitOutcome.PERSISTENCE_FAILED)
        snapshot = self._snapshot()
        result = self.ledger.submit_answer(question_id, option_id, now)
        if result.accepted and not self._persist(snapshot):
            return SubmitResult(question_id, SubmitOutcome.PERSISTENCE_FAILED)
        return result

    # ── Reads ────────────────────────────────────────────────

    def questions_for_quarter(self, quarter: Quarter) -> Tuple[Question, ...]:
        return self.catalog.questions_for_quarter(quarter)

    def question_states_for_quarter(
        self, quarter: Quarter
    ) -> List[Tuple[Question, QuestionRuntimeState]]:
        """Each question of the quarter paired with its runtime state."""
        return [
            (q, self.lifecycle.state_for(q.id))
            for q in self.catalog.questions_for_quarter(quarter)
        ]

    def state_for(self, question_id: str) -> Optional[QuestionRuntimeState]:
        return self.lifecycle.state_for(question_id)

    def time_remaining(self, question_id: str, now: int) -> int:
        return self.lifecycle.time_remaining(question_id, now)

    def has_answered(self, question_id: str) -> bool:
        return self.ledger.has_answered(question_id)

    def answer_for(self, question_id: str) -> Optional[Answer]:
        return self.ledger.answer_for(question_id)

    def quarter_score(self, quarter: Quarter) -> QuarterScore:
        return self.scoring.quarter_score(quarter)

    def total_score(self) -> int:
        return self.scoring.total_score()

    def score_summary(self) -> Dict[str, object]:
        return self.scoring.score_summary()

    def is_quarter_complete(self, quarter: Quarter) -> bool:
        return self.scoring.is_quarter_complete(quarter)

    def game_status(self, now: int) -> GameStatus:
        return self.clock.game_status(now)

    def time_until_kickoff(self, now: int) -> int:
        return self.clock.time_until_kickoff(now)

    def is_quarter_active(self, quarter: Quarter, now: int) -> bool:
        return self.clock.is_quarter_active(quarter, now)

    def may_drop(self, question_id: str, now: int) -> bool:
        question = self.catalog.question_by_id(question_id)
        return question is not None and self.clock.may_drop(question, now)

    # ── Internals ────────────────────────────────────────────

    def _transition(
        self, question_id: str, command: Callable[[], TransitionResult]
    ) -> TransitionResult:
        if not self._maybe_reload():
            return TransitionResult(
                question_id,
                TransitionOutcome.PERSISTENCE_FAILED,
                self.lifecycle.state_for(question_id),
            )
        snapshot = self._snapshot()
        result = command()
        if result.applied and not self._persist(snapshot):
            return TransitionResult(
                question_id,
                TransitionOutcome.PERSISTENCE_FAILED,
                self.lifecycle.state_for(question_id),
            )
        return result

    def _maybe_reload(self) -> bool:
        """Reload shared state if configured. False if the store is unreadable."""
        if not self.reload_before_write:
            return True
        try:
            self.reload()
        except PersistenceError as e:
            log_engine_error(e)
            return False
        return True

    def _snapshot(self):
        return self.lifecycle.snapshot(), self.ledger.snapshot()

    def _restore(self, snapshot) -> None:
        states, answers = snapshot
        self.lifecycle.restore(states)
        self.ledger.restore(answers)

    def _persist(self, snapshot) -> bool:
        """Save the current document; roll back to snapshot on failure."""
        document = self.export_state()
        try:
            saved = self.persistence.save(document)
        except (PersistenceError, OSError) as e:
            logger.error("Persistence failed: %s", e)
            saved = False
        except Exception:
            self._restore(snapshot)
            raise
        if not saved:
            logger.error("State not saved; rolling back")
            self._restore(snapshot)
        return saved
