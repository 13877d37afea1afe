# Area: Shared
"""
live_engine._shared.persistence — State persistence ports
=========================================================

The engine stores one JSON-compatible document and reads it back on
start. Any backing store that implements ``load`` / ``save`` will do:

- InMemoryPersistence: tests and throwaway sessions
- JsonFilePersistence: one file, replaced atomically on every save
- SqlitePersistence: one row per state key in a local SQLite file

``save`` returns False on failure (after logging) so the engine can roll
back the in-memory change. ``load`` raises PersistenceError if stored
data exists but cannot be read.
"""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import PersistenceError

logger = logging.getLogger("live_engine.persistence")

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

DEFAULT_STATE_KEY = "live-storage"


class StatePersistence(ABC):
    """Key/value persistence port for the engine's durable document."""

    @abstractmethod
    def load(self) -> Optional[Dict[str, Any]]:
        """Return the stored document, or None if nothing was saved yet."""
        pass

    @abstractmethod
    def save(self, state: Dict[str, Any]) -> bool:
        """Store the document. Return True once it is durable."""
        pass


class InMemoryPersistence(StatePersistence):
    """Keeps the serialized document in memory."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._raw: Optional[str] = json.dumps(initial) if initial is not None else None
        self.save_count = 0

    def load(self) -> Optional[Dict[str, Any]]:
        if self._raw is None:
            return None
        return json.loads(self._raw)

    def save(self, state: Dict[str, Any]) -> bool:
        try:
            self._raw = json.dumps(state)
        except (TypeError, ValueError) as e:
            logger.error("State is not serializable: %s", e)
            return False
        self.save_count += 1
        return True


class JsonFilePersistence(StatePersistence):
    """
    Stores the document as a JSON file.

    Writes go to a temp file in the same directory followed by
    ``os.replace`` so a crash never leaves a half-written file.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read state file: {e}", str(self.path)) from e
        if not isinstance(data, dict):
            raise PersistenceError("State file does not hold a JSON object", str(self.path))
        return data

    def save(self, state: Dict[str, Any]) -> bool:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(state, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Could not save state to %s: %s", self.path, e)
            return False
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)


class SqlitePersistence(StatePersistence):
    """
    Stores the document in the ``engine_state`` table of a SQLite file.

    The table is created from ``schema.sql`` on first use. Several
    sessions may share one file by using different state keys.
    """

    def __init__(self, db_path: str = "live_engine.db", state_key: str = DEFAULT_STATE_KEY):
        self.db_path = db_path
        self.state_key = state_key
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        if not self._initialized:
            with open(SCHEMA_PATH, "r") as f:
                conn.executescript(f.read())
            conn.commit()
            self._initialized = True
            logger.debug("State table ready in %s", self.db_path)
        return conn

    def load(self) -> Optional[Dict[str, Any]]:
        try:
            conn = self._connect()
            try:
                row = conn.execute(
                    "SELECT document FROM engine_state WHERE state_key = ?",
                    (self.state_key,),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot read state: {e}", self.db_path) from e
        if row is None:
            return None
        try:
            data = json.loads(row["document"])
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Stored document is not JSON: {e}", self.db_path) from e
        if not isinstance(data, dict):
            raise PersistenceError("Stored document is not a JSON object", self.db_path)
        return data

    def save(self, state: Dict[str, Any]) -> bool:
        try:
            document = json.dumps(state)
            conn = self._connect()
            try:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO engine_state (state_key, document, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    """,
                    (self.state_key, document),
                )
                conn.commit()
            finally:
                conn.close()
            return True
        except (sqlite3.Error, TypeError, ValueError) as e:
            logger.error("Could not save state to %s: %s", self.db_path, e)
            return False

    def clear(self) -> None:
        """Delete the stored document for this key."""
        conn = self._connect()
        try:
            conn.execute("DELETE FROM engine_state WHERE state_key = ?", (self.state_key,))
            conn.commit()
        finally:
            conn.close()
