"""Adapters from domain objects to v1 presenter contracts."""

from __future__ import annotations

from typing import Optional, Sequence

from kana_platform.history import (
    glyph_histories,
    recent_accuracy,
    recent_average_latency,
    recent_mistakes,
    slowest_by_response,
    weakest_by_accuracy,
)
from kana_platform.models import (
    AttemptRecord,
    Category,
    GlyphHistory,
    KanaEntry,
    Script,
    SessionStats,
)

from .schemas import (
    FeedbackPayload,
    GlyphRow,
    HistoryReport,
    MistakeRow,
    PromptPayload,
    StatsSnapshot,
    SummaryPayload,
)


def stats_to_contract(stats: SessionStats) -> StatsSnapshot:
    return StatsSnapshot(
        attempts=stats.attempts,
        correct=stats.correct,
        total_latency_ms=stats.total_latency_ms,
        accuracy_percent=stats.accuracy_percent,
        average_latency_ms=stats.average_latency_ms,
    )


def build_prompt(entry: KanaEntry, category: Category, stats: SessionStats) -> PromptPayload:
    return PromptPayload(
        glyph=entry.glyph,
        category=category.value,
        script=entry.script.value,
        stats=stats_to_contract(stats),
    )


def build_feedback(record: AttemptRecord, entry: KanaEntry,
                   stats: SessionStats) -> FeedbackPayload:
    return FeedbackPayload(
        glyph=record.glyph,
        response=record.response,
        correct=record.correct,
        expected=list(entry.spellings),
        latency_ms=record.latency_ms,
        stats=stats_to_contract(stats),
    )


def build_summary(stats: SessionStats, recent: Sequence[AttemptRecord],
                  recent_window: int, persistent: bool) -> SummaryPayload:
    return SummaryPayload(
        stats=stats_to_contract(stats),
        recent_window=recent_window,
        recent_attempts=len(recent),
        recent_average_ms=recent_average_latency(recent),
        persistent=persistent,
    )


def _glyph_row(history: GlyphHistory) -> GlyphRow:
    return GlyphRow(
        glyph=history.glyph,
        attempts=history.attempts,
        accuracy_percent=history.accuracy_percent,
        last_seen=history.last_seen,
        ema_accuracy_percent=min(100.0, max(0.0, history.ema_accuracy * 100.0)),
        ema_latency_ms=history.ema_latency_ms,
    )


def build_history_report(records: Sequence[AttemptRecord], total_attempts: int,
                         window: int, script: Optional[Script] = None) -> HistoryReport:
    """Summarise *records* (the last *window* stored attempts, oldest first)."""
    if script is not None:
        records = [r for r in records if r.script is script]
    histories = glyph_histories(records)
    return HistoryReport(
        total_attempts=total_attempts,
        window=window,
        window_attempts=len(records),
        average_latency_ms=recent_average_latency(records),
        accuracy_percent=recent_accuracy(records),
        by_accuracy=[_glyph_row(h) for h in weakest_by_accuracy(histories)],
        by_speed=[_glyph_row(h) for h in slowest_by_response(histories)],
        mistakes=[
            MistakeRow(glyph=glyph, responses=responses)
            for glyph, responses in recent_mistakes(records)
        ],
    )
