# Area: Shared
"""Countdown formatting for hosts that render engine timings."""

import math
from typing import Dict


def format_countdown(ms: int) -> str:
    """Milliseconds left -> 'M:SS', rounding partial seconds up."""
    if ms <= 0:
        return "0:00"
    total_seconds = math.ceil(ms / 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


def format_time_until_game(ms: int) -> Dict[str, int]:
    """Split a kickoff countdown into days / hours / minutes / seconds."""
    if ms <= 0:
        return {"days": 0, "hours": 0, "minutes": 0, "seconds": 0}
    total_seconds = ms // 1000
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return {"days": days, "hours": hours, "minutes": minutes, "seconds": seconds}
