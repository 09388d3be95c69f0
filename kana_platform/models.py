"""
Data structures and exceptions for the kana-trainer system.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Script(str, Enum):
    HIRAGANA = "hiragana"
    KATAKANA = "katakana"


class Category(str, Enum):
    """Practice category. ``ALL`` is a computed union, never a stored partition."""
    MAIN = "main"
    DAKUTEN = "dakuten"
    COMBINED = "combined"
    ALL = "all"


# Partitions that entries may belong to, in the order ALL concatenates them.
PARTITIONS = (Category.MAIN, Category.DAKUTEN, Category.COMBINED)


class KanaTrainerError(Exception):
    """Base class for kana-trainer errors."""


class EmptyCategory(KanaTrainerError):
    """Raised at startup when the requested category has no entries."""

    def __init__(self, category: Category, script: Optional[Script] = None):
        label = category.value if script is None else f"{script.value}/{category.value}"
        super().__init__(f"No kana available for category '{label}'")
        self.category = category
        self.script = script


class UnknownGlyph(KanaTrainerError):
    """Raised when a glyph is validated that the catalog does not contain."""

    def __init__(self, glyph: str):
        super().__init__(f"Glyph not in catalog: {glyph!r}")
        self.glyph = glyph


def normalize_romaji(text: Optional[str]) -> str:
    """Trim surrounding whitespace and fold case."""
    return (text or "").strip().lower()


@dataclass(frozen=True)
class KanaEntry:
    """A single kana (or digraph) and every romaji spelling accepted for it.

    *accepted_romaji* may be given as any iterable of spellings; it is
    stored trimmed and lower-cased as a frozenset. ``spellings`` keeps the
    same spellings in display order: the order given for a sequence, or
    shortest-first for an unordered set.
    """
    glyph: str
    accepted_romaji: frozenset
    category: Category
    script: Script = Script.HIRAGANA
    spellings: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        given = [normalize_romaji(r) for r in self.accepted_romaji]
        if isinstance(self.accepted_romaji, (set, frozenset)):
            given.sort(key=lambda r: (len(r), r))
        spellings = tuple(dict.fromkeys(r for r in given if r))
        if not spellings:
            raise ValueError(f"{self.glyph!r} needs at least one accepted romaji")
        if self.category is Category.ALL:
            raise ValueError("entries belong to a concrete partition, not ALL")
        object.__setattr__(self, "accepted_romaji", frozenset(spellings))
        object.__setattr__(self, "spellings", spellings)


@dataclass(frozen=True)
class AttemptRecord:
    """One completed present → respond → judge cycle."""
    glyph: str
    presented_category: Category
    correct: bool
    latency_ms: int
    timestamp: datetime
    response: str = ""
    script: Script = Script.HIRAGANA


@dataclass
class SessionStats:
    """Running counters for the current run (not persisted)."""
    attempts: int = 0
    correct: int = 0
    total_latency_ms: int = 0

    @property
    def incorrect(self) -> int:
        return self.attempts - self.correct

    @property
    def accuracy_percent(self) -> float:
        if self.attempts == 0:
            return 0.0
        return self.correct / self.attempts * 100.0

    @property
    def average_latency_ms(self) -> float:
        if self.attempts == 0:
            return 0.0
        return self.total_latency_ms / self.attempts


@dataclass(frozen=True)
class SelectorState:
    last_glyph: Optional[str] = None


@dataclass
class GlyphHistory:
    """Per-glyph aggregate over stored attempts, smoothed with an EMA."""
    glyph: str
    attempts: int = 0
    correct: int = 0
    ema_accuracy: float = 0.0
    ema_latency_ms: float = 0.0
    last_seen: Optional[datetime] = None

    @property
    def accuracy_percent(self) -> float:
        if self.attempts == 0:
            return 0.0
        return self.correct / self.attempts * 100.0
