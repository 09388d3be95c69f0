"""Append-only attempt log."""

import logging
import sqlite3
from datetime import datetime
from typing import Callable, Optional

from kana_platform.models import AttemptRecord, Category, Script

from .database import get_connection

logger = logging.getLogger(__name__)

WarningHandler = Callable[[str], None]


class AttemptStore:
    """Append-only store of attempt records.

    Backed by SQLite when a connection is given, otherwise by an in-memory
    list scoped to the process. Any ``sqlite3.Error`` while writing or
    reading switches the store to memory-only for the rest of the run and
    raises a single warning through the registered handler.
    """

    def __init__(self, conn: Optional[sqlite3.Connection] = None, *,
                 buffered: bool = False,
                 on_warning: Optional[WarningHandler] = None):
        self._conn = conn
        self.buffered = buffered
        self._session: list[AttemptRecord] = []
        self._on_warning = on_warning
        self._pending_warning: Optional[str] = None
        self._warned = False

    @property
    def persistent(self) -> bool:
        return self._conn is not None

    @property
    def session_records(self) -> list[AttemptRecord]:
        """Records appended during this run, in insertion order."""
        return list(self._session)

    def set_warning_handler(self, handler: Optional[WarningHandler]) -> None:
        """Register *handler*; a warning raised before registration is delivered now."""
        self._on_warning = handler
        if handler is not None and self._pending_warning is not None:
            message, self._pending_warning = self._pending_warning, None
            handler(message)

    def warn(self, message: str) -> None:
        """Surface *message* once per store; later warnings are only logged."""
        if self._warned:
            logger.debug("Suppressed repeated store warning: %s", message)
            return
        self._warned = True
        if self._on_warning is None:
            self._pending_warning = message
        else:
            self._on_warning(message)

    def append(self, record: AttemptRecord) -> None:
        self._session.append(record)
        if self._conn is None:
            return
        try:
            self._conn.execute(
                """INSERT INTO attempt
                   (glyph, category, script, correct, latency_ms, response, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    record.glyph,
                    record.presented_category.value,
                    record.script.value,
                    int(record.correct),
                    record.latency_ms,
                    record.response,
                    record.timestamp.isoformat(),
                ),
            )
            if not self.buffered:
                self._conn.commit()
        except sqlite3.Error as exc:
            self._fall_back(exc)

    def recent(self, n: int) -> list[AttemptRecord]:
        """Return the most recent *n* records, oldest first."""
        if n <= 0:
            return []
        if self._conn is not None:
            try:
                rows = self._conn.execute(
                    "SELECT * FROM attempt ORDER BY id DESC LIMIT ?", (n,)
                ).fetchall()
                return [_row_to_record(r) for r in reversed(rows)]
            except sqlite3.Error as exc:
                self._fall_back(exc)
        return self._session[-n:]

    def count(self) -> int:
        if self._conn is not None:
            try:
                return self._conn.execute("SELECT COUNT(*) FROM attempt").fetchone()[0]
            except sqlite3.Error as exc:
                self._fall_back(exc)
        return len(self._session)

    def flush(self) -> None:
        """Commit buffered writes. A no-op for the in-memory store."""
        if self._conn is None:
            return
        try:
            self._conn.commit()
        except sqlite3.Error as exc:
            self._fall_back(exc)

    def close(self) -> None:
        """Flush and release the database connection, if any."""
        self.flush()
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _fall_back(self, exc: Exception) -> None:
        logger.warning("Attempt log unavailable, continuing in memory: %s", exc)
        conn, self._conn = self._conn, None
        if conn is not None:
            try:
                conn.rollback()
            except sqlite3.Error:
                logger.debug("Rollback after store failure also failed", exc_info=True)
        self.warn(
            f"Could not write to the attempt log ({exc}). "
            "Results from this session will not be saved."
        )


def _row_to_record(row: sqlite3.Row) -> AttemptRecord:
    return AttemptRecord(
        glyph=row["glyph"],
        presented_category=Category(row["category"]),
        correct=bool(row["correct"]),
        latency_ms=row["latency_ms"],
        timestamp=datetime.fromisoformat(row["created_at"]),
        response=row["response"] or "",
        script=Script(row["script"]),
    )


def open_attempt_store(settings, on_warning: Optional[WarningHandler] = None) -> AttemptStore:
    """Open the store described by *settings* (a ``TrainerSettings``).

    Falls back to a memory-only store, with a warning, when persistence is
    disabled or the database cannot be opened.
    """
    if not settings.persist or settings.db_path is None:
        logger.info("Persistence disabled; attempts kept in memory only")
        return AttemptStore(None, on_warning=on_warning)

    try:
        conn = get_connection(settings.db_path)
    except (sqlite3.Error, OSError) as exc:
        logger.warning("Could not open attempt log at %s: %s", settings.db_path, exc)
        store = AttemptStore(None, on_warning=on_warning)
        store.warn(
            f"Could not open the attempt log at {settings.db_path} ({exc}). "
            "Results from this session will not be saved."
        )
        return store

    logger.debug("Opened attempt log at %s", settings.db_path)
    return AttemptStore(conn, buffered=settings.buffered, on_warning=on_warning)
