"""
Historical aggregates over stored attempt records.

Per-glyph figures are smoothed with an exponential moving average so that
recent attempts weigh more than old ones; the first attempt seeds the
average.
"""

from __future__ import annotations

from typing import Iterable, Optional

from kana_platform.models import AttemptRecord, GlyphHistory
from kana_platform.runtime.config import EMA_ALPHA, REPORT_ROWS


def recent_average_latency(records: Iterable[AttemptRecord]) -> Optional[float]:
    """Mean latency in ms over *records*, or None when there are none."""
    latencies = [r.latency_ms for r in records]
    if not latencies:
        return None
    return sum(latencies) / len(latencies)


def recent_accuracy(records: Iterable[AttemptRecord]) -> Optional[float]:
    """Percentage of correct attempts over *records*, or None when empty."""
    records = list(records)
    if not records:
        return None
    return sum(1 for r in records if r.correct) / len(records) * 100.0


def ema(previous: float, value: float, alpha: float = EMA_ALPHA) -> float:
    return alpha * value + (1.0 - alpha) * previous


def record_into(history: GlyphHistory, record: AttemptRecord,
                alpha: float = EMA_ALPHA) -> GlyphHistory:
    """Fold one attempt into a glyph's history."""
    hit = 1.0 if record.correct else 0.0
    history.attempts += 1
    if record.correct:
        history.correct += 1

    if history.attempts == 1:
        history.ema_accuracy = hit
        history.ema_latency_ms = float(record.latency_ms)
    else:
        history.ema_accuracy = ema(history.ema_accuracy, hit, alpha)
        history.ema_latency_ms = ema(history.ema_latency_ms, record.latency_ms, alpha)

    if history.last_seen is None or record.timestamp > history.last_seen:
        history.last_seen = record.timestamp
    return history


def glyph_histories(records: Iterable[AttemptRecord],
                    alpha: float = EMA_ALPHA) -> dict[str, GlyphHistory]:
    """Group *records* (oldest first) by glyph and fold each group."""
    histories: dict[str, GlyphHistory] = {}
    for record in records:
        history = histories.get(record.glyph)
        if history is None:
            history = histories[record.glyph] = GlyphHistory(glyph=record.glyph)
        record_into(history, record, alpha)
    return histories


def weakest_by_accuracy(histories: dict[str, GlyphHistory],
                        limit: int = REPORT_ROWS) -> list[GlyphHistory]:
    return sorted(histories.values(), key=lambda h: (h.ema_accuracy, h.glyph))[:limit]


def slowest_by_response(histories: dict[str, GlyphHistory],
                        limit: int = REPORT_ROWS) -> list[GlyphHistory]:
    return sorted(histories.values(), key=lambda h: (-h.ema_latency_ms, h.glyph))[:limit]


def recent_mistakes(records: Iterable[AttemptRecord],
                    limit: int = REPORT_ROWS) -> list[tuple[str, list[str]]]:
    """Glyphs answered wrongly, most recently missed first, with the romaji typed.

    Each glyph appears once; its typed answers are listed newest first.
    """
    by_glyph: dict[str, list[str]] = {}
    order: list[str] = []
    for record in reversed(list(records)):
        if record.correct:
            continue
        if record.glyph not in by_glyph:
            by_glyph[record.glyph] = []
            order.append(record.glyph)
        by_glyph[record.glyph].append(record.response)
    return [(glyph, by_glyph[glyph]) for glyph in order[:limit]]
