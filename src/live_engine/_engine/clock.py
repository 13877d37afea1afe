# Area: Engine
"""
live_engine._engine.clock — Session / Game Clock
================================================

Single source of truth for where the event stands: before kickoff,
live, halftime, or over. Quarter changes are operator actions because
real games run long or short; nothing here advances quarters from
elapsed time.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from .catalog import Question
from .enums import QUARTER_ORDER, GameStatus, Quarter

logger = logging.getLogger("live_engine.clock")

# Sunday Feb 8, 2026 at 6:30 PM ET
DEFAULT_KICKOFF = datetime(2026, 2, 8, 18, 30, tzinfo=timezone(timedelta(hours=-5)))
DEFAULT_KICKOFF_AT = int(DEFAULT_KICKOFF.timestamp() * 1000)


def to_epoch_ms(moment: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    if moment.tzinfo is None:
        raise ValueError("kickoff datetime must be timezone-aware")
    return int(moment.timestamp() * 1000)


class SessionClock:
    """
    Event clock driven by a fixed kickoff plus operator actions.

    Attributes:
        kickoff_at: Kickoff time in epoch milliseconds
        current_quarter: Quarter the operator last advanced to
    """

    def __init__(self, kickoff_at: int = DEFAULT_KICKOFF_AT,
                 current_quarter: Quarter = Quarter.Q1):
        self.kickoff_at = kickoff_at
        self.current_quarter = current_quarter
        self._halftime = False
        self._ended = False
        self._override: Optional[GameStatus] = None

    def game_status(self, now: int) -> GameStatus:
        if self._override is not None:
            return self._override
        if self._ended:
            return GameStatus.POST_GAME
        if now < self.kickoff_at:
            return GameStatus.PRE_GAME
        if self._halftime:
            return GameStatus.HALFTIME
        return GameStatus.IN_PROGRESS

    def time_until_kickoff(self, now: int) -> int:
        return max(0, self.kickoff_at - now)

    def set_current_quarter(self, quarter: Quarter) -> None:
        """Operator advances (or corrects) the current quarter."""
        if QUARTER_ORDER.index(quarter) < QUARTER_ORDER.index(self.current_quarter):
            logger.warning("Quarter moved back: %s -> %s",
                           self.current_quarter.value, quarter.value)
        else:
            logger.info("Quarter: %s -> %s", self.current_quarter.value, quarter.value)
        self.current_quarter = quarter
        self._halftime = False

    def start_halftime(self) -> None:
        logger.info("Halftime started")
        self._halftime = True

    def end_game(self) -> None:
        logger.info("Game ended")
        self._ended = True

    def set_game_status(self, status: Optional[GameStatus]) -> None:
        """
        Pin the reported status regardless of kickoff and flags.

        Pass None to go back to the derived status.
        """
        logger.info("Game status override: %s", status.value if status else None)
        self._override = status

    def is_quarter_active(self, quarter: Quarter, now: int) -> bool:
        return (self.game_status(now) == GameStatus.IN_PROGRESS
                and self.current_quarter == quarter)

    def may_drop(self, question: Question, now: int) -> bool:
        """
        Advisory gate for the operator workflow.

        The lifecycle store does not enforce this; hosts and operator
        tools check it before calling drop.
        """
        return self.is_quarter_active(question.quarter, now)

    def reset(self) -> None:
        self.current_quarter = Quarter.Q1
        self._halftime = False
        self._ended = False
        self._override = None
