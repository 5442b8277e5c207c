"""Persistence for the novel blob and the last-read chapter index."""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .models import Novel

log = logging.getLogger(__name__)

NOVEL_KEY = "novel"
INDEX_KEY = "current_chapter_index"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS reading_state (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at REAL NOT NULL
);
"""


class StorageError(Exception):
    """A write to durable storage failed."""


def decode_novel(raw: Optional[str]) -> Optional[Novel]:
    """Parse a serialized novel; None when absent or corrupt."""
    if raw is None:
        return None
    try:
        return Novel.from_dict(json.loads(raw))
    except (ValueError, TypeError, KeyError, RecursionError) as e:
        log.warning("Stored novel is unreadable, ignoring it: %s", e)
        return None


def decode_index(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = json.loads(raw)
    except (ValueError, RecursionError):
        log.warning("Stored chapter index is unreadable: %r", raw)
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        log.warning("Stored chapter index is not an integer: %r", value)
        return None
    return value


class NovelStorage(ABC):
    """Port through which the store reads and writes its state."""

    @abstractmethod
    def load_novel(self) -> Optional[Novel]:
        """Return the stored novel, or None if missing or corrupt."""

    @abstractmethod
    def save_novel(self, novel: Novel) -> None:
        """Persist the whole novel. Raises StorageError on failure."""

    @abstractmethod
    def load_current_index(self) -> Optional[int]:
        """Return the stored chapter index, or None if missing or corrupt."""

    @abstractmethod
    def save_current_index(self, index: int) -> None:
        """Persist the chapter index. Raises StorageError on failure."""

    def close(self) -> None:
        pass


class SqliteStorage(NovelStorage):
    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._init_schema()

    def _init_schema(self) -> None:
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    # ── Raw key/value ──────────────────────────────────────

    def get_value(self, key: str) -> Optional[str]:
        try:
            row = self._conn.execute(
                "SELECT value FROM reading_state WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            log.warning("Could not read %s from %s: %s", key, self._db_path, e)
            return None
        return row["value"] if row else None

    def set_value(self, key: str, value: str) -> None:
        try:
            self._conn.execute(
                """INSERT OR REPLACE INTO reading_state (key, value, updated_at)
                   VALUES (?, ?, ?)""",
                (key, value, time.time()),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Could not write {key}: {e}") from e

    # ── Novel / index ──────────────────────────────────────

    def load_novel(self) -> Optional[Novel]:
        return decode_novel(self.get_value(NOVEL_KEY))

    def save_novel(self, novel: Novel) -> None:
        self.set_value(NOVEL_KEY, json.dumps(novel.to_dict(), ensure_ascii=False))

    def load_current_index(self) -> Optional[int]:
        return decode_index(self.get_value(INDEX_KEY))

    def save_current_index(self, index: int) -> None:
        self.set_value(INDEX_KEY, json.dumps(index))


class MemoryStorage(NovelStorage):
    """Dict-backed storage holding the same serialized values as SqliteStorage."""

    def __init__(self, fail_writes: bool = False) -> None:
        self.values: dict[str, str] = {}
        self.fail_writes = fail_writes
        self.writes = 0

    def _set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError(f"Could not write {key}: storage unavailable")
        self.values[key] = value
        self.writes += 1

    def load_novel(self) -> Optional[Novel]:
        return decode_novel(self.values.get(NOVEL_KEY))

    def save_novel(self, novel: Novel) -> None:
        self._set(NOVEL_KEY, json.dumps(novel.to_dict(), ensure_ascii=False))

    def load_current_index(self) -> Optional[int]:
        return decode_index(self.values.get(INDEX_KEY))

    def save_current_index(self, index: int) -> None:
        self._set(INDEX_KEY, json.dumps(index))
