# Area: Shared
"""
Shared utilities for the live question engine.

This package contains:
- Logging configuration
- State persistence ports (memory, JSON file, SQLite)
- Countdown formatting helpers
"""

from .logging_config import setup_logging, log_engine_error
from .persistence import (
    StatePersistence,
    InMemoryPersistence,
    JsonFilePersistence,
    SqlitePersistence,
)
from .formatting import format_countdown, format_time_until_game

__all__ = [
    "setup_logging",
    "log_engine_error",
    "StatePersistence",
    "InMemoryPersistence",
    "JsonFilePersistence",
    "SqlitePersistence",
    "format_countdown",
    "format_time_until_game",
]
