# Area: Engine
"""
live_engine._engine.state_machine — Question status transitions
===============================================================

Transition table for a single question's lifecycle. The lifecycle store
consults it to decide whether a command applies; it holds no state of
its own.
"""

from typing import Optional

from .enums import QuestionEvent, QuestionStatus


# Valid state transitions: {current_status: {event: next_status}}
TRANSITIONS = {
    QuestionStatus.PENDING: {
        QuestionEvent.DROP: QuestionStatus.ACTIVE,
    },
    QuestionStatus.ACTIVE: {
        QuestionEvent.LOCK: QuestionStatus.LOCKED,
        QuestionEvent.RESOLVE: QuestionStatus.RESOLVED,
    },
    QuestionStatus.LOCKED: {
        QuestionEvent.RESOLVE: QuestionStatus.RESOLVED,
    },
    QuestionStatus.RESOLVED: {},
}

# Position of each status along pending -> active -> locked -> resolved
_RANK = {
    QuestionStatus.PENDING: 0,
    QuestionStatus.ACTIVE: 1,
    QuestionStatus.LOCKED: 2,
    QuestionStatus.RESOLVED: 3,
}


def can_transition(status: QuestionStatus, event: QuestionEvent) -> bool:
    """Check if an event is valid from the given status."""
    return event in TRANSITIONS.get(status, {})


def next_status(status: QuestionStatus, event: QuestionEvent) -> Optional[QuestionStatus]:
    """Status reached by applying event, or None if the event is not valid."""
    return TRANSITIONS.get(status, {}).get(event)


def is_forward(old: QuestionStatus, new: QuestionStatus) -> bool:
    """True if moving from old to new never goes backwards."""
    return _RANK[new] >= _RANK[old]
