# Area: Engine
"""
live_engine._engine.results — Command result values
===================================================

Every engine command reports what happened through one of these values
instead of raising. Hosts log-and-continue on routine refusals and
escalate only on a resolution conflict.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .enums import SubmitOutcome, TransitionOutcome
from ..errors import ResolutionConflictError

if TYPE_CHECKING:
    from .ledger import Answer
    from .lifecycle import QuestionRuntimeState


# Short explanations the UI can show instead of a generic error
SUBMIT_REASONS = {
    SubmitOutcome.ACCEPTED: "answer locked in",
    SubmitOutcome.QUESTION_NOT_FOUND: "unknown question",
    SubmitOutcome.NOT_ACTIVE: "question is not open",
    SubmitOutcome.ALREADY_ANSWERED: "already answered",
    SubmitOutcome.WINDOW_CLOSED: "too late",
    SubmitOutcome.INVALID_OPTION: "unknown option",
    SubmitOutcome.PERSISTENCE_FAILED: "could not save answer",
}


@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of drop / lock / resolve.

    Attributes:
        question_id: Question the command targeted
        outcome: What happened
        state: Runtime state after the command (None if question unknown)
        conflict: Populated only when outcome is RESOLUTION_CONFLICT
    """

    question_id: str
    outcome: TransitionOutcome
    state: Optional["QuestionRuntimeState"] = None
    conflict: Optional[ResolutionConflictError] = None

    @property
    def applied(self) -> bool:
        return self.outcome == TransitionOutcome.APPLIED

    @property
    def ok(self) -> bool:
        """True for APPLIED and NO_OP: the question is in the requested state."""
        return self.outcome in (TransitionOutcome.APPLIED, TransitionOutcome.NO_OP)

    @property
    def is_conflict(self) -> bool:
        return self.outcome == TransitionOutcome.RESOLUTION_CONFLICT

    def raise_for_conflict(self) -> None:
        """Raise ResolutionConflictError if this result reports one."""
        if self.conflict is not None:
            raise self.conflict


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of submit_answer. Truthy only when the answer was recorded."""

    question_id: str
    outcome: SubmitOutcome
    answer: Optional["Answer"] = None

    @property
    def accepted(self) -> bool:
        return self.outcome == SubmitOutcome.ACCEPTED

    @property
    def reason(self) -> str:
        return SUBMIT_REASONS[self.outcome]

    def __bool__(self) -> bool:
        return self.accepted
