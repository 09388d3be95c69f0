"""Practice-session state machine helpers."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from kana_platform.models import AttemptRecord, SessionStats
from kana_platform.runtime.config import EXIT_COMMANDS


class EngineState(str, Enum):
    AWAITING_PRESENTATION = "awaiting_presentation"
    AWAITING_INPUT = "awaiting_input"
    JUDGING = "judging"
    RECORDED = "recorded"
    TERMINAL = "terminal"


# Legal transitions; RECORDED loops back to AWAITING_PRESENTATION.
TRANSITIONS = {
    EngineState.AWAITING_PRESENTATION: {EngineState.AWAITING_INPUT, EngineState.TERMINAL},
    EngineState.AWAITING_INPUT: {EngineState.JUDGING, EngineState.AWAITING_PRESENTATION},
    EngineState.JUDGING: {EngineState.RECORDED},
    EngineState.RECORDED: {EngineState.AWAITING_PRESENTATION},
    EngineState.TERMINAL: set(),
}


def can_transition(current: EngineState, target: EngineState) -> bool:
    """Return True when *target* is reachable from *current* in one step."""
    return target in TRANSITIONS[current]


def is_stop_signal(line: Optional[str]) -> bool:
    """Return True for end-of-input (``None``) or an exit command."""
    if line is None:
        return True
    return line.strip().lower() in EXIT_COMMANDS


def elapsed_ms(start: float, end: float) -> int:
    """Convert two monotonic clock readings (seconds) to whole milliseconds, never negative."""
    return max(0, round((end - start) * 1000))


def apply_attempt(stats: SessionStats, record: AttemptRecord) -> SessionStats:
    """Fold *record* into *stats* in place and return it."""
    stats.attempts += 1
    if record.correct:
        stats.correct += 1
    stats.total_latency_ms += record.latency_ms
    return stats


def stats_from_records(records: Iterable[AttemptRecord]) -> SessionStats:
    """Recompute session counters from a sequence of records."""
    stats = SessionStats()
    for record in records:
        apply_attempt(stats, record)
    return stats


def snapshot(stats: SessionStats) -> SessionStats:
    """Return an independent copy of *stats* for handing to the presenter."""
    return SessionStats(
        attempts=stats.attempts,
        correct=stats.correct,
        total_latency_ms=stats.total_latency_ms,
    )
