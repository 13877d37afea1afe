# Area: Engine
"""
Live question engine core.

This package handles:
- Question catalog and bundled content
- Per-question lifecycle (drop / lock / resolve)
- Answer admission control
- Score derivation
- Session clock
- Persisted state encoding
"""

from .enums import (
    QUARTER_INFO,
    QUARTER_ORDER,
    GameStatus,
    Quarter,
    QuestionEvent,
    QuestionStatus,
    SubmitOutcome,
    TransitionOutcome,
)
from .catalog import AnswerOption, Question, QuestionCatalog
from .default_catalog import default_catalog
from .results import SubmitResult, TransitionResult
from .lifecycle import QuestionLifecycleStore, QuestionRuntimeState
from .ledger import Answer, AnswerLedger
from .scoring import QuarterScore, ScoringCalculator
from .clock import DEFAULT_KICKOFF_AT, SessionClock
from .snapshot import decode_state, encode_state

__all__ = [
    "QUARTER_INFO",
    "QUARTER_ORDER",
    "GameStatus",
    "Quarter",
    "QuestionEvent",
    "QuestionStatus",
    "SubmitOutcome",
    "TransitionOutcome",
    "AnswerOption",
    "Question",
    "QuestionCatalog",
    "default_catalog",
    "SubmitResult",
    "TransitionResult",
    "QuestionLifecycleStore",
    "QuestionRuntimeState",
    "Answer",
    "AnswerLedger",
    "QuarterScore",
    "ScoringCalculator",
    "DEFAULT_KICKOFF_AT",
    "SessionClock",
    "decode_state",
    "encode_state",
]
