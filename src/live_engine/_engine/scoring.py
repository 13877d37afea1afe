# Area: Engine
"""
live_engine._engine.scoring — Scoring Calculator
================================================

Derives per-quarter and total scores from the catalog and the answer
ledger. Nothing here is stored; every call recomputes from source.
"""

from dataclasses import dataclass
from typing import Dict

from .catalog import QuestionCatalog
from .enums import QUARTER_ORDER, Quarter, QuestionStatus
from .ledger import AnswerLedger
from .lifecycle import QuestionLifecycleStore


@dataclass(frozen=True)
class QuarterScore:
    """
    Score breakdown for one quarter.

    Attributes:
        answered_count: Answers submitted, resolved or not
        correct_count: Answers marked correct
        total_questions: Questions in the quarter
        points: Sum of points for correct answers
    """

    answered_count: int
    correct_count: int
    total_questions: int
    points: int


class ScoringCalculator:
    """Pure score queries over catalog + ledger."""

    def __init__(self, catalog: QuestionCatalog, ledger: AnswerLedger,
                 lifecycle: QuestionLifecycleStore):
        self.catalog = catalog
        self.ledger = ledger
        self.lifecycle = lifecycle

    def quarter_score(self, quarter: Quarter) -> QuarterScore:
        questions = self.catalog.questions_for_quarter(quarter)
        answered = correct = points = 0
        for question in questions:
            answer = self.ledger.answer_for(question.id)
            if answer is None:
                continue
            answered += 1
            if answer.correct is True:
                correct += 1
                points += question.points
        return QuarterScore(
            answered_count=answered,
            correct_count=correct,
            total_questions=len(questions),
            points=points,
        )

    def total_score(self) -> int:
        return sum(self.quarter_score(q).points for q in QUARTER_ORDER)

    def score_summary(self) -> Dict[str, object]:
        """Per-quarter scores keyed by quarter value, plus the total."""
        quarters = {q.value: self.quarter_score(q) for q in QUARTER_ORDER}
        return {
            "quarters": quarters,
            "total": sum(s.points for s in quarters.values()),
        }

    def is_quarter_complete(self, quarter: Quarter) -> bool:
        """True once every question in the quarter is resolved."""
        questions = self.catalog.questions_for_quarter(quarter)
        if not questions:
            return False
        return all(
            self.lifecycle.status_of(q.id) == QuestionStatus.RESOLVED
            for q in questions
        )
