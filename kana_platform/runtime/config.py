"""
Configuration constants for the kana-trainer system.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DB_FILE = "attempts.db"

# Redraws the selector makes on an immediate repeat before drawing from the
# remaining entries.
RESAMPLE_LIMIT = 10

# Window for the rolling "ms per character" average shown in summaries.
DEFAULT_RECENT_WINDOW = 100

# Smoothing factor for per-glyph exponential moving averages.
EMA_ALPHA = 0.2

# Number of rows shown per column of the history report.
REPORT_ROWS = 15

# Inputs that end the session instead of being scored. None of these is a
# valid romaji for any catalog entry.
EXIT_COMMANDS = frozenset({":q", ":quit", "quit", "exit"})

_DB_PATH_ENV = "KANA_TRAINER_DB_PATH"
_PERSIST_ENV = "KANA_TRAINER_PERSIST"
_BUFFERED_ENV = "KANA_TRAINER_BUFFERED"
_RECENT_WINDOW_ENV = "KANA_TRAINER_RECENT_WINDOW"
_LOG_LEVEL_ENV = "KANA_TRAINER_LOG_LEVEL"

_FALSY = {"0", "false", "no", "off"}


def _to_int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _to_bool_env(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw not in _FALSY


def get_data_dir() -> Path:
    """Return the per-user data directory for the attempt log."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
        return base / "kana-trainer"
    return Path.home() / ".config" / "kana-trainer"


def get_db_path() -> Path:
    """Return the attempt database path, honouring ``KANA_TRAINER_DB_PATH``."""
    override = os.environ.get(_DB_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return get_data_dir() / DB_FILE


def get_log_level() -> int:
    raw = os.environ.get(_LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(raw) if raw else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING


@dataclass
class TrainerSettings:
    """Resolved runtime settings for one run."""
    db_path: Optional[Path] = None
    persist: bool = True
    buffered: bool = False
    recent_window: int = DEFAULT_RECENT_WINDOW


def load_settings(db_path: Optional[str] = None,
                  persist: Optional[bool] = None,
                  recent_window: Optional[int] = None) -> TrainerSettings:
    """Build settings from the environment, letting explicit arguments win."""
    settings = TrainerSettings(
        db_path=get_db_path(),
        persist=_to_bool_env(_PERSIST_ENV, True),
        buffered=_to_bool_env(_BUFFERED_ENV, False),
        recent_window=_to_int_env(_RECENT_WINDOW_ENV, DEFAULT_RECENT_WINDOW),
    )
    if db_path:
        settings.db_path = Path(db_path).expanduser()
    if persist is not None:
        settings.persist = persist
    if recent_window is not None and recent_window > 0:
        settings.recent_window = recent_window
    return settings
