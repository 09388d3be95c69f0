"""Core of the kana-trainer: catalog, selection, session engine and attempt log."""

__version__ = "0.3.0"

from .catalog import KanaCatalog, default_catalog, normalize_romaji
from .models import (
    AttemptRecord,
    Category,
    EmptyCategory,
    GlyphHistory,
    KanaEntry,
    KanaTrainerError,
    Script,
    SelectorState,
    SessionStats,
    UnknownGlyph,
)
from .selector import Selector, next_entry
from .session_state_machine import (
    EngineState,
    apply_attempt,
    can_transition,
    elapsed_ms,
    is_stop_signal,
    stats_from_records,
)

__all__ = [
    "__version__",
    "AttemptRecord",
    "Category",
    "EmptyCategory",
    "EngineState",
    "GlyphHistory",
    "KanaCatalog",
    "KanaEntry",
    "KanaTrainerError",
    "Script",
    "Selector",
    "SelectorState",
    "SessionStats",
    "UnknownGlyph",
    "apply_attempt",
    "can_transition",
    "default_catalog",
    "elapsed_ms",
    "is_stop_signal",
    "next_entry",
    "normalize_romaji",
    "stats_from_records",
]
