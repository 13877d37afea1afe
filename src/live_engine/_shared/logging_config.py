# Area: Shared
"""
live_engine._shared.logging_config — Structured logging setup
=============================================================

Configures dual logging: terminal (colored) + file (JSON).
Provides the structured error block output used for fatal engine
conditions such as resolution conflicts.
"""

from __future__ import annotations
import copy
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..errors import LiveEngineError

# Package logger
logger = logging.getLogger("live_engine")


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so other handlers see the plain level name
        record = copy.copy(record)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """JSON formatter for file output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("question_id", "error_type"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(
    log_file_path: Optional[str] = "live_engine.log",
    level: int = logging.INFO,
    stream=None,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str or None
        Path to the JSON log file. None disables file logging.
    level : int
        Logging level. Defaults to INFO.
    stream : file-like or None
        Terminal stream. Defaults to stdout.
    """
    pkg_logger = logging.getLogger("live_engine")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    pkg_logger.handlers.clear()

    terminal_handler = logging.StreamHandler(stream or sys.stdout)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger.addHandler(terminal_handler)

    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_engine_error(error: "LiveEngineError") -> None:
    """
    Log an engine error in the structured format.

    The formatted block goes straight to stderr so operators see it even
    when terminal logging is filtered; a single ERROR record goes to the
    configured handlers.
    """
    format_block = getattr(error, "format_error_log", None)
    if format_block is not None:
        print(format_block(), file=sys.stderr)

    logger.error(
        f"Engine error: {error.__class__.__name__}: {error}",
        extra={
            "question_id": getattr(error, "question_id", None),
            "error_type": error.__class__.__name__,
        },
    )
