"""
Console presenter for the kana-trainer CLI.
"""

import sys

from contracts.v1.schemas import (
    FeedbackPayload,
    GlyphRow,
    HistoryReport,
    PromptPayload,
    SummaryPayload,
)

BOLD = "\x1b[1m"
RED = "\x1b[1;31m"
YELLOW = "\x1b[33m"
RESET = "\x1b[0m"

WIDTH = 60


def _style(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{RESET}" if color else text


def print_banner(category: str, script: str):
    """Print the session header and the available commands."""
    print("=" * WIDTH)
    print(f"KANA TRAINER — {script.upper()} / {category.upper()}")
    print("=" * WIDTH)
    print("Type the romaji for each kana and press Enter.")
    print("Commands: :q | quit | exit  (or Ctrl-D) to finish")


def print_prompt(prompt: PromptPayload, color: bool = True):
    stats = prompt.stats
    if stats.attempts:
        print(
            f"\n[{stats.correct}/{stats.attempts}  "
            f"{stats.accuracy_percent:.1f}%  avg {stats.average_latency_ms:.0f} ms]"
        )
    else:
        print()
    print(f"Kana: {_style(prompt.glyph, BOLD, color)}")


def print_feedback(feedback: FeedbackPayload, color: bool = True):
    accuracy = feedback.stats.accuracy_percent
    if feedback.correct:
        line = f"Correct! Reaction time: {feedback.latency_ms} ms ({accuracy:.1f}% so far)"
        print(_style(line, BOLD, color))
    else:
        typed = feedback.response or "(nothing)"
        line = (
            f"Incorrect: {typed} — {feedback.glyph} is {' / '.join(feedback.expected)} "
            f"({feedback.latency_ms} ms, {accuracy:.1f}% so far)"
        )
        print(_style(line, RED, color))


def print_summary(summary: SummaryPayload):
    """Print the end-of-session summary."""
    stats = summary.stats
    print("\n" + "=" * WIDTH)
    print("SESSION SUMMARY")
    print("=" * WIDTH)
    print(f"  Attempts:          {stats.attempts}")
    print(f"  Correct:           {stats.correct}")
    print(f"  Accuracy:          {stats.accuracy_percent:.1f}%")
    if stats.attempts:
        print(f"  Average reaction:  {stats.average_latency_ms:.2f} ms")
    if summary.recent_average_ms is not None:
        print(f"  Last {summary.recent_attempts} attempts: {summary.recent_average_ms:.0f} ms/char")
    if not summary.persistent:
        print("  (results kept in memory only)")
    print("=" * WIDTH)


def _last_seen(row: GlyphRow) -> str:
    if row.last_seen is None:
        return ""
    return f", last {row.last_seen:%Y-%m-%d}"


def print_history_report(report: HistoryReport):
    """Print historical aggregates from the attempt log."""
    print("=" * WIDTH)
    print("PRACTICE HISTORY")
    print("=" * WIDTH)
    print(f"  Stored attempts: {report.total_attempts}")
    if not report.window_attempts:
        print("  No attempts recorded yet.")
        return

    print(f"  Last {report.window_attempts} attempts:")
    if report.average_latency_ms is not None:
        print(f"    Average response: {report.average_latency_ms:.0f} ms/char")
    if report.accuracy_percent is not None:
        print(f"    Accuracy:         {report.accuracy_percent:.1f}%")

    print("\nBy accuracy (EMA, weakest first):")
    for row in report.by_accuracy:
        print(
            f"  {row.glyph}: {row.ema_accuracy_percent:.1f}% "
            f"({row.accuracy_percent:.0f}% of {row.attempts} tests{_last_seen(row)})"
        )

    print("\nBy speed (EMA, slowest first):")
    for row in report.by_speed:
        print(f"  {row.glyph}: {row.ema_latency_ms:.0f}ms ({row.attempts} tests)")

    if report.mistakes:
        print("\nRecent mistakes:")
        for row in report.mistakes:
            typed = ", ".join(r or "(empty)" for r in row.responses)
            print(f"  {row.glyph} → {typed}")


def print_warning(message: str, color: bool = True):
    print(_style(f"Warning: {message}", YELLOW, color), file=sys.stderr)


class ConsolePresenter:
    """Presenter backed by ``input()`` and ``print()``."""

    def __init__(self, color: bool = None, prompt: str = "> "):
        self.color = sys.stdout.isatty() if color is None else color
        self.prompt = prompt

    def read_line(self):
        """Return the typed line, or None on end-of-input / Ctrl-C."""
        try:
            return input(self.prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            return None

    def show_prompt(self, prompt: PromptPayload):
        print_prompt(prompt, self.color)

    def show_feedback(self, feedback: FeedbackPayload):
        print_feedback(feedback, self.color)

    def show_summary(self, summary: SummaryPayload):
        print_summary(summary)

    def show_warning(self, message: str):
        print_warning(message, self.color)
