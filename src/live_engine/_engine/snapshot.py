# Area: Engine
"""
live_engine._engine.snapshot — Persisted state codec
====================================================

Converts between in-memory runtime records and the durable document:

    {
      "answers": [{"questionId", "optionId", "answeredAt", "correct"?}],
      "questionRuntimeState": {
        "<questionId>": {"status", "droppedAt"?, "expiresAt"?,
                         "resolvedAt"?, "correctOptionId"?}
      }
    }

Questions missing from the map load as pending.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .catalog import QuestionCatalog
from .enums import QuestionStatus
from .ledger import Answer
from .lifecycle import QuestionRuntimeState
from ..errors import PersistenceError

logger = logging.getLogger("live_engine.snapshot")


class _AnswerEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId")
    option_id: str = Field(alias="optionId")
    answered_at: int = Field(alias="answeredAt")
    correct: Optional[bool] = None


class _RuntimeEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: QuestionStatus
    dropped_at: Optional[int] = Field(default=None, alias="droppedAt")
    expires_at: Optional[int] = Field(default=None, alias="expiresAt")
    resolved_at: Optional[int] = Field(default=None, alias="resolvedAt")
    correct_option_id: Optional[str] = Field(default=None, alias="correctOptionId")

    @model_validator(mode="after")
    def _check_invariants(self):
        opened = self.status != QuestionStatus.PENDING
        if opened != (self.dropped_at is not None and self.expires_at is not None):
            raise ValueError("droppedAt/expiresAt must be set exactly when not pending")
        resolved = self.status == QuestionStatus.RESOLVED
        if resolved != (self.correct_option_id is not None):
            raise ValueError("correctOptionId must be set exactly when resolved")
        if resolved != (self.resolved_at is not None):
            raise ValueError("resolvedAt must be set exactly when resolved")
        if opened and self.expires_at < self.dropped_at:
            raise ValueError("expiresAt precedes droppedAt")
        if resolved and self.resolved_at < self.dropped_at:
            raise ValueError("resolvedAt precedes droppedAt")
        return self


class _StateDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answers: List[_AnswerEntry] = Field(default_factory=list)
    question_runtime_state: Dict[str, _RuntimeEntry] = Field(
        default_factory=dict, alias="questionRuntimeState"
    )


def encode_state(
    states: Iterable[QuestionRuntimeState], answers: Iterable[Answer]
) -> Dict[str, Any]:
    """Build the durable document. Pending questions are omitted."""
    document = _StateDocument(
        answers=[
            _AnswerEntry(
                question_id=a.question_id,
                option_id=a.option_id,
                answered_at=a.answered_at,
                correct=a.correct,
            )
            for a in answers
        ],
        question_runtime_state={
            s.question_id: _RuntimeEntry(
                status=s.status,
                dropped_at=s.dropped_at,
                expires_at=s.expires_at,
                resolved_at=s.resolved_at,
                correct_option_id=s.correct_option_id,
            )
            for s in states
            if s.status != QuestionStatus.PENDING
        },
    )
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def decode_state(
    document: Optional[Dict[str, Any]], catalog: QuestionCatalog, source: str = "state"
) -> Tuple[Dict[str, QuestionRuntimeState], List[Answer]]:
    """
    Validate a durable document against the catalog.

    Entries for questions the catalog does not know are dropped with a
    warning, as are answers the admission rules could never have
    accepted (question never dropped, unknown option, past expiry).
    Answer correctness is recomputed from the resolved option rather
    than read from the document. Structurally invalid documents raise
    PersistenceError.
    """
    if not document:
        return {}, []

    try:
        parsed = _StateDocument.model_validate(document)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise PersistenceError("Persisted state is malformed", source, problems) from e

    states: Dict[str, QuestionRuntimeState] = {}
    for question_id, entry in parsed.question_runtime_state.items():
        question = catalog.question_by_id(question_id)
        if question is None:
            logger.warning("Dropping runtime state for unknown question %s", question_id)
            continue
        if entry.correct_option_id is not None and not question.has_option(entry.correct_option_id):
            raise PersistenceError(
                "Persisted state is malformed", source,
                [f"{question_id}: correctOptionId {entry.correct_option_id!r} is not an option"],
            )
        states[question_id] = QuestionRuntimeState(
            question_id=question_id,
            status=entry.status,
            dropped_at=entry.dropped_at,
            expires_at=entry.expires_at,
            resolved_at=entry.resolved_at,
            correct_option_id=entry.correct_option_id,
        )

    answers: List[Answer] = []
    for entry in parsed.answers:
        question = catalog.question_by_id(entry.question_id)
        state = states.get(entry.question_id)
        if question is None:
            logger.warning("Dropping answer for unknown question %s", entry.question_id)
            continue
        if state is None or state.status == QuestionStatus.PENDING:
            logger.warning("Dropping answer for %s: question was never dropped",
                           entry.question_id)
            continue
        if not question.has_option(entry.option_id):
            logger.warning("Dropping answer for %s: %r is not an option",
                           entry.question_id, entry.option_id)
            continue
        if entry.answered_at > state.expires_at:
            logger.warning("Dropping answer for %s: answeredAt %d after expiry %d",
                           entry.question_id, entry.answered_at, state.expires_at)
            continue
        # Stored correctness is ignored; it follows from the resolved option
        correct = None
        if state.status == QuestionStatus.RESOLVED:
            correct = entry.option_id == state.correct_option_id
        answers.append(Answer(
            question_id=entry.question_id,
            option_id=entry.option_id,
            answered_at=entry.answered_at,
            correct=correct,
        ))

    return states, answers
