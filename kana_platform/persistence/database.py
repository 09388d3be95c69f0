"""SQLite database primitives for the attempt log."""

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def get_connection(db_path: Path) -> sqlite3.Connection:
    """Open (or create) the attempt database and ensure the schema exists.

    Returns a ``sqlite3.Connection`` with WAL mode enabled. The parent
    directory is created if needed. The caller is responsible for closing
    the connection.
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    init_db(conn)
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create tables if they don't exist and record the schema version."""
    conn.executescript(_SCHEMA_SQL)

    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    current = row[0] if row[0] is not None else 0

    if current < SCHEMA_VERSION:
        logger.info("Initialising attempt log schema v%d", SCHEMA_VERSION)
        conn.execute(
            "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        conn.commit()


_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS attempt (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    glyph TEXT NOT NULL,
    category TEXT NOT NULL,
    script TEXT NOT NULL DEFAULT 'hiragana',
    correct INTEGER NOT NULL,
    latency_ms INTEGER NOT NULL CHECK (latency_ms >= 0),
    response TEXT DEFAULT '',
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_attempt_glyph ON attempt(glyph);
"""


__all__ = ["SCHEMA_VERSION", "get_connection", "init_db"]
