# Area: Shared
"""
live_engine._engine_config — Engine Configuration
=================================================

Configuration loading, validation and engine construction for the
CLI and for hosts that configure the engine from a file.

Config keys:
    kickoff_at      ISO-8601 datetime with offset, or epoch milliseconds
    state_backend   "json" | "sqlite" | "memory"   (default "json")
    state_path      file for the json / sqlite backends
    state_key       row key for the sqlite backend
    catalog_path    JSON question file (default: bundled catalog)
    log_file        JSON log file (default: none)
    log_level       DEBUG | INFO | WARNING | ERROR  (default INFO)
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ._engine.catalog import QuestionCatalog
from ._engine.clock import DEFAULT_KICKOFF_AT, SessionClock, to_epoch_ms
from ._engine.default_catalog import default_catalog
from ._shared.persistence import (
    DEFAULT_STATE_KEY,
    InMemoryPersistence,
    JsonFilePersistence,
    SqlitePersistence,
    StatePersistence,
)
from .engine import LiveQuestionEngine
from .errors import ConfigError

logger = logging.getLogger("live_engine.config")

STATE_BACKENDS = {"json", "sqlite", "memory"}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}

DEFAULT_STATE_PATHS = {
    "json": "live_state.json",
    "sqlite": "live_engine.db",
}

# Environment variable -> config key
ENV_MAPPINGS = {
    "LIVE_KICKOFF_AT": "kickoff_at",
    "LIVE_STATE_BACKEND": "state_backend",
    "LIVE_STATE_PATH": "state_path",
    "LIVE_STATE_KEY": "state_key",
    "LIVE_CATALOG_PATH": "catalog_path",
    "LIVE_LOG_FILE": "log_file",
    "LIVE_LOG_LEVEL": "log_level",
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load config from a JSON file, then overlay environment variables."""
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        with open(path, encoding="utf-8") as f:
            try:
                config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Config file is not valid JSON: {e}") from e
        if not isinstance(config, dict):
            raise ConfigError("Config file must hold a JSON object")

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            config[config_key] = os.environ[env_key]

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration values.

    Raises:
        ConfigError: If a value is not usable
    """
    backend = config.get("state_backend", "json")
    if backend not in STATE_BACKENDS:
        raise ConfigError(
            f"Unknown state_backend {backend!r}; expected one of {sorted(STATE_BACKENDS)}"
        )
    log_level(config)
    if "kickoff_at" in config:
        parse_kickoff(config["kickoff_at"])


def parse_kickoff(value: Any) -> int:
    """Accept epoch milliseconds or an ISO-8601 string with a UTC offset."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid kickoff_at: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return int(text)
        try:
            moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as e:
            raise ConfigError(f"Invalid kickoff_at: {value!r}") from e
        if moment.tzinfo is None:
            raise ConfigError(f"kickoff_at needs a UTC offset: {value!r}")
        return to_epoch_ms(moment)
    raise ConfigError(f"Invalid kickoff_at: {value!r}")


def log_level(config: Dict[str, Any]) -> int:
    level = str(config.get("log_level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log_level {level!r}")
    return getattr(logging, level)


def build_persistence(config: Dict[str, Any]) -> StatePersistence:
    backend = config.get("state_backend", "json")
    if backend == "memory":
        return InMemoryPersistence()
    path = config.get("state_path") or DEFAULT_STATE_PATHS[backend]
    if backend == "sqlite":
        return SqlitePersistence(path, config.get("state_key") or DEFAULT_STATE_KEY)
    return JsonFilePersistence(path)


def build_catalog(config: Dict[str, Any]) -> QuestionCatalog:
    catalog_path = config.get("catalog_path")
    if catalog_path:
        return QuestionCatalog.from_json_file(catalog_path)
    return default_catalog()


def build_engine(config: Dict[str, Any]) -> LiveQuestionEngine:
    """Construct an engine from a validated config dict."""
    validate_config(config)
    kickoff_at = (
        parse_kickoff(config["kickoff_at"]) if "kickoff_at" in config else DEFAULT_KICKOFF_AT
    )
    engine = LiveQuestionEngine(
        catalog=build_catalog(config),
        persistence=build_persistence(config),
        clock=SessionClock(kickoff_at=kickoff_at),
        reload_before_write=bool(config.get("reload_before_write", False)),
    )
    logger.debug("Engine built with %s backend", config.get("state_backend", "json"))
    return engine
