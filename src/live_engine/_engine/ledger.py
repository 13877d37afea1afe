# Area: Engine
"""
live_engine._engine.ledger — Answer Ledger
==========================================

Holds the user's single answer per question and enforces admission
control on submission. Correctness is back-filled by the lifecycle
store when a question resolves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from .catalog import QuestionCatalog
from .enums import Quarter, QuestionStatus, SubmitOutcome
from .lifecycle import QuestionLifecycleStore
from .results import SubmitResult

logger = logging.getLogger("live_engine.ledger")


@dataclass(frozen=True)
class Answer:
    """
    One user answer.

    Attributes:
        question_id: Question answered
        option_id: Option chosen
        answered_at: Submission time, epoch milliseconds
        correct: None until the question resolves
    """

    question_id: str
    option_id: str
    answered_at: int
    correct: Optional[bool] = None


class AnswerLedger:
    """
    At most one answer per question, kept in submission order.

    Construction registers the ledger with the lifecycle store so that
    ``resolve`` can back-fill correctness.
    """

    def __init__(self, catalog: QuestionCatalog, lifecycle: QuestionLifecycleStore):
        self.catalog = catalog
        self.lifecycle = lifecycle
        self._answers: Dict[str, Answer] = {}
        lifecycle.attach_ledger(self)

    def submit_answer(self, question_id: str, option_id: str, now: int) -> SubmitResult:
        """
        Record an answer if every admission rule holds.

        Rules, checked in order:
        1. question exists and is ACTIVE
        2. no answer exists yet for it
        3. now <= expires_at (the host may not have locked it yet)
        4. option_id is one of the question's options

        A refused submission has no side effect.
        """
        question = self.catalog.question_by_id(question_id)
        state = self.lifecycle.state_for(question_id)
        if question is None or state is None:
            return self._refuse(question_id, SubmitOutcome.QUESTION_NOT_FOUND)
        if state.status != QuestionStatus.ACTIVE:
            return self._refuse(question_id, SubmitOutcome.NOT_ACTIVE)
        if question_id in self._answers:
            return self._refuse(question_id, SubmitOutcome.ALREADY_ANSWERED)
        if state.expires_at is None or now > state.expires_at:
            return self._refuse(question_id, SubmitOutcome.WINDOW_CLOSED)
        if not question.has_option(option_id):
            return self._refuse(question_id, SubmitOutcome.INVALID_OPTION)

        answer = Answer(question_id=question_id, option_id=option_id, answered_at=now)
        self._answers[question_id] = answer
        logger.info("Answer recorded: %s -> %s", question_id, option_id)
        return SubmitResult(question_id, SubmitOutcome.ACCEPTED, answer)

    def apply_resolution(self, question_id: str, correct_option_id: str) -> None:
        """Mark the existing answer correct or not. No-op if never answered."""
        answer = self._answers.get(question_id)
        if answer is None:
            return
        correct = answer.option_id == correct_option_id
        self._answers[question_id] = replace(answer, correct=correct)
        logger.debug("Answer for %s marked %s", question_id,
                     "correct" if correct else "incorrect")

    def answer_for(self, question_id: str) -> Optional[Answer]:
        return self._answers.get(question_id)

    def has_answered(self, question_id: str) -> bool:
        return question_id in self._answers

    def answers(self) -> List[Answer]:
        return list(self._answers.values())

    def answers_for_quarter(self, quarter: Quarter) -> List[Answer]:
        ids = [q.id for q in self.catalog.questions_for_quarter(quarter)]
        return [self._answers[i] for i in ids if i in self._answers]

    # ── Persistence support ──────────────────────────────────

    def snapshot(self) -> Dict[str, Answer]:
        return dict(self._answers)

    def restore(self, snapshot: Dict[str, Answer]) -> None:
        self._answers = dict(snapshot)

    def load_answers(self, answers: List[Answer]) -> None:
        """Replace the ledger; a later entry for the same question overwrites."""
        self._answers = {}
        for answer in answers:
            self._answers[answer.question_id] = answer

    def clear(self) -> None:
        self._answers = {}

    def _refuse(self, question_id: str, outcome: SubmitOutcome) -> SubmitResult:
        logger.info("Answer refused for %s: %s", question_id, outcome.value)
        return SubmitResult(question_id, outcome)
