"""
live_engine.types — TypedDict schemas for persisted and exported data
=====================================================================

This module documents the exact structure of the durable document the
engine hands to its persistence port, and of the plain-dict views the
CLI prints. All types are exported from the main package:

    from live_engine import PersistedState, PersistedAnswer, ...

Field names are camelCase because the document is shared with the web
client that reads the same store.
"""

from typing import Dict, List, Literal, TypedDict


# ============================================
# Durable document
# ============================================

class _PersistedAnswerRequired(TypedDict):
    questionId: str         # e.g., "q1-1"
    optionId: str           # e.g., "yes"
    answeredAt: int         # epoch milliseconds


class PersistedAnswer(_PersistedAnswerRequired, total=False):
    """One ledger entry.

    Fields
    ------
    questionId : str
        Question answered.
    optionId : str
        Option chosen.
    answeredAt : int
        Submission time, epoch milliseconds.
    correct : bool
        Present only once the question has resolved.
    """
    correct: bool


class _PersistedRuntimeStateRequired(TypedDict):
    status: Literal["pending", "active", "locked", "resolved"]


class PersistedRuntimeState(_PersistedRuntimeStateRequired, total=False):
    """Runtime record of one question.

    Fields
    ------
    status : str
        pending | active | locked | resolved
    droppedAt, expiresAt : int
        Present once the question has been dropped.
    resolvedAt : int
        Present once resolved.
    correctOptionId : str
        Present once resolved.
    """
    droppedAt: int
    expiresAt: int
    resolvedAt: int
    correctOptionId: str


class PersistedState(TypedDict):
    """Everything the engine persists.

    Questions absent from questionRuntimeState are pending.
    """
    answers: List[PersistedAnswer]
    questionRuntimeState: Dict[str, PersistedRuntimeState]


# ============================================
# Read views
# ============================================

class QuarterScoreView(TypedDict):
    """Plain-dict form of a QuarterScore."""
    answered_count: int
    correct_count: int
    total_questions: int
    points: int


class QuestionStatusView(TypedDict):
    """One row of the operator status listing."""
    id: str
    quarter: str
    number: int
    prompt: str
    status: str
    time_remaining_ms: int
    answered: bool
    correct_option_id: str
