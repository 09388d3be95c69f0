"""Contract validation and adapter tests for contracts.v1."""

import pytest
from pydantic import ValidationError

from contracts.v1.adapters import (
    build_feedback,
    build_history_report,
    build_prompt,
    build_summary,
    stats_to_contract,
)
from contracts.v1.schemas import FeedbackPayload, PromptPayload, StatsSnapshot
from kana_platform.models import Category, Script, SessionStats


def _snapshot(**overrides) -> dict:
    payload = {
        "attempts": 2,
        "correct": 1,
        "total_latency_ms": 2000,
        "accuracy_percent": 50.0,
        "average_latency_ms": 1000.0,
    }
    payload.update(overrides)
    return payload


class TestSchemaValidation:
    def test_prompt_valid(self):
        prompt = PromptPayload.model_validate(
            {"glyph": "あ", "category": "main", "stats": _snapshot()}
        )
        assert prompt.script == "hiragana"

    def test_prompt_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            PromptPayload.model_validate(
                {"glyph": "あ", "category": "main", "stats": _snapshot(), "extra": 1}
            )

    def test_prompt_rejects_unknown_category(self):
        with pytest.raises(ValidationError):
            PromptPayload.model_validate(
                {"glyph": "あ", "category": "handakuten", "stats": _snapshot()}
            )

    def test_stats_reject_negative_latency(self):
        with pytest.raises(ValidationError):
            StatsSnapshot.model_validate(_snapshot(total_latency_ms=-1))

    def test_feedback_requires_expected_romaji(self):
        with pytest.raises(ValidationError):
            FeedbackPayload.model_validate(
                {
                    "glyph": "あ",
                    "response": "a",
                    "correct": True,
                    "expected": [],
                    "latency_ms": 10,
                    "stats": _snapshot(),
                }
            )

    def test_payloads_are_frozen(self):
        snapshot = StatsSnapshot.model_validate(_snapshot())
        with pytest.raises(ValidationError):
            snapshot.attempts = 9


class TestAdapters:
    def test_stats_to_contract(self):
        snapshot = stats_to_contract(SessionStats(attempts=4, correct=3, total_latency_ms=4400))
        assert snapshot.accuracy_percent == 75.0
        assert snapshot.average_latency_ms == 1100.0

    def test_build_prompt(self, catalog):
        entry = catalog.lookup("ア")
        prompt = build_prompt(entry, Category.ALL, SessionStats())
        assert prompt.glyph == "ア"
        assert prompt.category == "all"
        assert prompt.script == "katakana"
        assert prompt.stats.attempts == 0

    def test_build_feedback_lists_hepburn_spelling_first(self, catalog, record_factory):
        entry = catalog.lookup("し")
        record = record_factory("し", correct=False, latency_ms=1300, response="chi")
        feedback = build_feedback(record, entry, SessionStats(attempts=1, total_latency_ms=1300))

        assert feedback.expected == ["shi", "si"]
        assert feedback.response == "chi"
        assert feedback.correct is False

    def test_build_summary(self, record_factory):
        recent = [record_factory(latency_ms=ms) for ms in (1000, 1400)]
        summary = build_summary(SessionStats(attempts=2, correct=2, total_latency_ms=2400),
                                recent, 100, persistent=True)
        assert summary.recent_average_ms == 1200.0
        assert summary.recent_window == 100
        assert summary.recent_attempts == 2
        assert summary.stats.accuracy_percent == 100.0

    def test_build_history_report(self, record_factory):
        records = [
            record_factory("か", correct=True, latency_ms=700),
            record_factory("き", correct=False, latency_ms=2100, response="ke"),
            record_factory("ア", correct=True, latency_ms=900, script=Script.KATAKANA),
        ]

        report = build_history_report(records, total_attempts=10, window=3)

        assert report.window_attempts == 3
        assert report.total_attempts == 10
        assert report.average_latency_ms == pytest.approx(1233.333, rel=1e-3)
        assert report.by_accuracy[0].glyph == "き"
        assert report.by_accuracy[0].accuracy_percent == 0.0
        assert report.by_accuracy[0].last_seen == records[1].timestamp
        assert report.by_speed[0].glyph == "き"
        assert report.mistakes[0].glyph == "き"
        assert report.mistakes[0].responses == ["ke"]

    def test_build_history_report_filters_script(self, record_factory):
        records = [
            record_factory("か", latency_ms=700),
            record_factory("ア", latency_ms=900, script=Script.KATAKANA),
        ]

        report = build_history_report(records, 2, 100, script=Script.KATAKANA)

        assert report.window_attempts == 1
        assert [row.glyph for row in report.by_speed] == ["ア"]

    def test_empty_history_report(self):
        report = build_history_report([], 0, 100)
        assert report.average_latency_ms is None
        assert report.by_accuracy == []
