"""
Shared fixtures for kana-trainer tests.
"""

import random
import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from kana_platform.catalog import KanaCatalog, default_catalog
from kana_platform.models import AttemptRecord, Category, KanaEntry, Script
from kana_platform.persistence import AttemptStore, init_db


class ScriptedPresenter:
    """Presenter that replays queued input lines and captures every payload.

    When the queue runs out, ``read_line`` returns None (end-of-input).
    """

    def __init__(self, lines=None):
        self.lines = list(lines or [])
        self.prompts = []
        self.feedback = []
        self.summaries = []
        self.warnings = []
        self.reads = 0

    def read_line(self):
        self.reads += 1
        if not self.lines:
            return None
        return self.lines.pop(0)

    def show_prompt(self, prompt):
        self.prompts.append(prompt)

    def show_feedback(self, feedback):
        self.feedback.append(feedback)

    def show_summary(self, summary):
        self.summaries.append(summary)

    def show_warning(self, message):
        self.warnings.append(message)


class FakeClock:
    """Monotonic clock stand-in advancing by a fixed step per reading."""

    def __init__(self, start: float = 100.0, step: float = 0.75):
        self.value = start
        self.step = step
        self.readings = 0

    def __call__(self) -> float:
        current = self.value
        self.value += self.step
        self.readings += 1
        return current


def make_entry(glyph="あ", romaji=("a",), category=Category.MAIN, script=Script.HIRAGANA):
    return KanaEntry(
        glyph=glyph,
        accepted_romaji=frozenset(romaji),
        category=category,
        script=script,
    )


def make_record(glyph="あ", correct=True, latency_ms=900, response="a",
                category=Category.MAIN, script=Script.HIRAGANA, offset_s=0):
    return AttemptRecord(
        glyph=glyph,
        presented_category=category,
        correct=correct,
        latency_ms=latency_ms,
        timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=offset_s),
        response=response,
        script=script,
    )


@pytest.fixture
def catalog():
    """The full static catalog."""
    return default_catalog()


@pytest.fixture
def small_catalog():
    """A tiny catalog: one MAIN entry, two COMBINED entries, one DAKUTEN entry."""
    return KanaCatalog([
        make_entry("あ", ("a",)),
        make_entry("が", ("ga",), Category.DAKUTEN),
        make_entry("きゃ", ("kya",), Category.COMBINED),
        make_entry("しゃ", ("sha", "sya"), Category.COMBINED),
    ])


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def presenter():
    return ScriptedPresenter()


@pytest.fixture
def db_conn():
    """Create an in-memory SQLite connection with the attempt-log schema."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    init_db(conn)
    yield conn
    conn.close()


@pytest.fixture
def db_store(db_conn):
    return AttemptStore(db_conn)


@pytest.fixture
def memory_store():
    return AttemptStore(None)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the real user data directory."""
    monkeypatch.setenv("KANA_TRAINER_DB_PATH", str(tmp_path / "attempts.db"))
    for name in (
        "KANA_TRAINER_PERSIST",
        "KANA_TRAINER_BUFFERED",
        "KANA_TRAINER_RECENT_WINDOW",
        "KANA_TRAINER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def entry_factory():
    """Build a KanaEntry: ``entry_factory("し", ("shi", "si"))``."""
    return make_entry


@pytest.fixture
def record_factory():
    """Build an AttemptRecord: ``record_factory("し", correct=False, response="si")``."""
    return make_record


@pytest.fixture
def presenter_factory():
    """Build a ScriptedPresenter preloaded with input lines."""
    return ScriptedPresenter
