"""
live_engine — Live Question Engine
==================================

Timed in-game trivia and prediction questions for a football watch
party: five per quarter, each open for a short window, one answer per
user, resolved later against the real outcome.

Quick Start:
    from live_engine import LiveQuestionEngine, JsonFilePersistence
    engine = LiveQuestionEngine(persistence=JsonFilePersistence("live.json"))

    engine.drop("q1-1", now)                  # operator
    engine.submit_answer("q1-1", "yes", now)  # user
    engine.lock_expired(now)                  # host display tick
    engine.resolve("q1-1", "yes", now)        # operator
    engine.total_score()

Every time-sensitive call takes ``now`` in epoch milliseconds. The
engine runs no timers of its own.

Operator console:
    live-engine --help
"""

from .engine import LiveQuestionEngine
from ._engine import (
    QUARTER_INFO,
    QUARTER_ORDER,
    Answer,
    AnswerLedger,
    AnswerOption,
    GameStatus,
    QuarterScore,
    Quarter,
    Question,
    QuestionCatalog,
    QuestionLifecycleStore,
    QuestionRuntimeState,
    QuestionStatus,
    ScoringCalculator,
    SessionClock,
    SubmitOutcome,
    SubmitResult,
    TransitionOutcome,
    TransitionResult,
    default_catalog,
)
from ._shared import (
    StatePersistence,
    InMemoryPersistence,
    JsonFilePersistence,
    SqlitePersistence,
    setup_logging,
    format_countdown,
    format_time_until_game,
)
from .errors import (
    LiveEngineError,
    ResolutionConflictError,
    PersistenceError,
    CatalogValidationError,
    ConfigError,
)
from .types import (
    PersistedAnswer,
    PersistedRuntimeState,
    PersistedState,
)

__all__ = [
    # Main class
    "LiveQuestionEngine",
    # Components
    "QuestionCatalog",
    "QuestionLifecycleStore",
    "AnswerLedger",
    "ScoringCalculator",
    "SessionClock",
    "default_catalog",
    # Data
    "Question",
    "AnswerOption",
    "QuestionRuntimeState",
    "Answer",
    "QuarterScore",
    # Enums
    "Quarter",
    "QUARTER_ORDER",
    "QUARTER_INFO",
    "QuestionStatus",
    "GameStatus",
    "TransitionOutcome",
    "SubmitOutcome",
    # Results
    "TransitionResult",
    "SubmitResult",
    # Persistence
    "StatePersistence",
    "InMemoryPersistence",
    "JsonFilePersistence",
    "SqlitePersistence",
    # Helpers
    "setup_logging",
    "format_countdown",
    "format_time_until_game",
    # Errors
    "LiveEngineError",
    "ResolutionConflictError",
    "PersistenceError",
    "CatalogValidationError",
    "ConfigError",
    # Persisted document types
    "PersistedAnswer",
    "PersistedRuntimeState",
    "PersistedState",
]
__version__ = "1.0.0"
