# Area: Engine
"""
live_engine._engine.enums — Live Question Engine Enums
======================================================

Quarters, question/game statuses, and the outcome codes returned by
every engine command.
"""

from enum import Enum


class Quarter(Enum):
    """Fixed, ordered time segments of the event."""
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"
    OT = "OT"


QUARTER_ORDER = (Quarter.Q1, Quarter.Q2, Quarter.Q3, Quarter.Q4, Quarter.OT)


QUARTER_INFO = {
    Quarter.Q1: {
        "name": "First Quarter",
        "short_name": "Q1",
        "description": "Opening drives",
        "color": "#69BE28",
    },
    Quarter.Q2: {
        "name": "Second Quarter",
        "short_name": "Q2",
        "description": "Building momentum",
        "color": "#00B4D8",
    },
    Quarter.Q3: {
        "name": "Third Quarter",
        "short_name": "Q3",
        "description": "Halftime adjustments",
        "color": "#FFD700",
    },
    Quarter.Q4: {
        "name": "Fourth Quarter",
        "short_name": "Q4",
        "description": "Crunch time",
        "color": "#FF6B6B",
    },
    Quarter.OT: {
        "name": "Overtime",
        "short_name": "OT",
        "description": "Sudden victory",
        "color": "#A855F7",
    },
}


class QuestionStatus(Enum):
    """
    Runtime status of a single question.

    State transitions:
    PENDING -> ACTIVE (on DROP)
    ACTIVE -> LOCKED (on LOCK)
    ACTIVE -> RESOLVED (on RESOLVE, implicit lock)
    LOCKED -> RESOLVED (on RESOLVE)
    RESOLVED is terminal.
    """
    PENDING = "pending"
    ACTIVE = "active"
    LOCKED = "locked"
    RESOLVED = "resolved"


class QuestionEvent(Enum):
    """Operator commands that move a question through its lifecycle."""
    DROP = "DROP"
    LOCK = "LOCK"
    RESOLVE = "RESOLVE"


class GameStatus(Enum):
    """Where the event stands relative to kickoff and operator actions."""
    PRE_GAME = "pre_game"
    IN_PROGRESS = "in_progress"
    HALFTIME = "halftime"
    POST_GAME = "post_game"


class TransitionOutcome(Enum):
    """Result code for drop / lock / resolve."""
    APPLIED = "applied"
    NO_OP = "no_op"
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    INVALID_OPTION = "invalid_option"
    RESOLUTION_CONFLICT = "resolution_conflict"
    PERSISTENCE_FAILED = "persistence_failed"


class SubmitOutcome(Enum):
    """Result code for submit_answer."""
    ACCEPTED = "accepted"
    QUESTION_NOT_FOUND = "question_not_found"
    NOT_ACTIVE = "not_active"
    ALREADY_ANSWERED = "already_answered"
    WINDOW_CLOSED = "window_closed"
    INVALID_OPTION = "invalid_option"
    PERSISTENCE_FAILED = "persistence_failed"
