"""
CLI entry point for the kana-trainer.

Usage::

    kana-trainer --main | --daku | --comb | --all  [--katakana] [--no-persist]
    kana-trainer --stats [--window N] [--katakana]

Exactly one mode flag is required; argparse rejects a missing or unknown
flag before the core is touched.
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from contracts.v1.adapters import build_history_report
from kana_platform import __version__
from kana_platform.catalog import default_catalog
from kana_platform.models import Category, EmptyCategory, Script, UnknownGlyph
from kana_platform.persistence import open_attempt_store
from kana_platform.runtime.config import get_log_level, load_settings
from kana_platform.session_engine import PracticeSession

from .interface import ConsolePresenter, print_banner, print_history_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1

# (long flag, short flag, category, help)
CATEGORY_FLAGS = (
    ("--main", "-m", Category.MAIN, "Practice the main (gojūon) kana"),
    ("--daku", "-d", Category.DAKUTEN, "Practice dakuten/handakuten kana"),
    ("--comb", "-c", Category.COMBINED, "Practice combined (yōon) kana"),
    ("--all", "-a", Category.ALL, "Practice every category"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kana-trainer",
        description="kana-trainer — kana → romaji reaction-time trainer",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    for long_flag, short_flag, category, help_text in CATEGORY_FLAGS:
        mode.add_argument(
            long_flag, short_flag,
            dest="category", action="store_const", const=category, help=help_text,
        )
    mode.add_argument(
        "--stats", action="store_true",
        help="Show historical statistics from the attempt log and exit",
    )

    parser.add_argument(
        "--katakana", "-k", action="store_true",
        help="Practice katakana instead of hiragana",
    )
    parser.add_argument("--db", help="Path to the attempt log (or set KANA_TRAINER_DB_PATH)")
    parser.add_argument(
        "--no-persist", action="store_true",
        help="Keep attempts in memory only for this run",
    )
    parser.add_argument(
        "--window", type=int, default=None,
        help="Number of recent attempts used for rolling averages",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else get_log_level()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _settings_from_args(args):
    return load_settings(
        db_path=args.db,
        persist=False if args.no_persist else None,
        recent_window=args.window,
    )


def _script_from_args(args) -> Script:
    return Script.KATAKANA if args.katakana else Script.HIRAGANA


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

def cmd_practice(args, presenter=None, catalog=None) -> int:
    """Run one practice session for the selected category."""
    category = args.category
    script = _script_from_args(args)
    catalog = catalog or default_catalog()

    try:
        catalog.entries_for(category, script)
    except EmptyCategory as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR

    presenter = presenter or ConsolePresenter()
    settings = _settings_from_args(args)
    store = open_attempt_store(settings)
    try:
        print_banner(category.value, script.value)
        session = PracticeSession(
            catalog, category, store, presenter,
            script=script, recent_window=settings.recent_window,
        )
        session.run()
    except UnknownGlyph as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    finally:
        store.close()
    return EXIT_OK


def cmd_stats(args, presenter=None) -> int:
    """Print historical aggregates from the attempt log."""
    settings = _settings_from_args(args)
    presenter = presenter or ConsolePresenter()
    store = open_attempt_store(settings, on_warning=presenter.show_warning)
    try:
        records = store.recent(settings.recent_window)
        script = _script_from_args(args) if args.katakana else None
        report = build_history_report(records, store.count(), settings.recent_window, script)
    finally:
        store.close()
    print_history_report(report)
    return EXIT_OK


def main(argv=None) -> int:
    """Entry point for the CLI. Returns the process exit code."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.stats:
        return cmd_stats(args)
    return cmd_practice(args)
