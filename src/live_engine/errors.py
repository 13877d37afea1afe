"""
live_engine.errors — Custom exception classes
==============================================

Defines the exception hierarchy for the live question engine.

Routine refusals (unknown question, closed window, duplicate answer) are
returned as outcome codes, not raised. Only the conditions below are
exceptions; each stores full context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class LiveEngineError(Exception):
    """Base exception for all live_engine errors."""
    pass


class ResolutionConflictError(LiveEngineError):
    """Raised when a resolved question is resolved again with another answer."""

    def __init__(
        self,
        question_id: str,
        existing_option_id: str,
        attempted_option_id: str,
    ):
        self.question_id = question_id
        self.existing_option_id = existing_option_id
        self.attempted_option_id = attempted_option_id
        super().__init__(
            f"Question '{question_id}' already resolved to '{existing_option_id}', "
            f"refusing '{attempted_option_id}'"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="RESOLUTION_CONFLICT",
            subject=self.question_id,
            details={
                "question_id": self.question_id,
                "existing_correct_option_id": self.existing_option_id,
                "attempted_correct_option_id": self.attempted_option_id,
            },
            messages=[
                "Authoritative answer differs from the one already applied.",
                "Persisted state was left unchanged.",
            ],
        )


class PersistenceError(LiveEngineError):
    """Raised when persisted engine state cannot be read or decoded."""

    def __init__(self, message: str, source: Optional[str] = None,
                 problems: Optional[List[str]] = None):
        self.source = source
        self.problems = problems or []
        super().__init__(message)

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="PERSISTENCE_FAILURE",
            subject=self.source or "<unknown>",
            details={"message": str(self)},
            messages=self.problems,
        )


class CatalogValidationError(LiveEngineError):
    """Raised when question catalog content fails validation."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__(f"Question catalog failed validation: {problems}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="CATALOG_VALIDATION_FAILURE",
            subject="question catalog",
            details=None,
            messages=self.problems,
        )


class ConfigError(LiveEngineError, ValueError):
    """Raised when engine configuration is missing or malformed."""
    pass


def _format_error_block(
    error_type: str,
    subject: str,
    details: Optional[Dict[str, Any]],
    messages: Optional[List[str]],
) -> str:
    """Format a structured error block for terminal and log output."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " LIVE ENGINE ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Subject:      {subject}",
    ]

    if details is not None:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        lines.append(_indent_json(details))

    if messages:
        lines.append("")
        lines.append(" ── MESSAGES " + "─" * 51)
        for message in messages:
            lines.append(f" • {message}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
