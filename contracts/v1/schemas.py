"""Pydantic contracts for payloads crossing the presenter boundary."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class StatsSnapshot(_StrictModel):
    attempts: int = Field(ge=0)
    correct: int = Field(ge=0)
    total_latency_ms: int = Field(ge=0)
    accuracy_percent: float = Field(ge=0, le=100)
    average_latency_ms: float = Field(ge=0)


class PromptPayload(_StrictModel):
    glyph: str = Field(min_length=1)
    category: Literal["main", "dakuten", "combined", "all"]
    script: Literal["hiragana", "katakana"] = "hiragana"
    stats: StatsSnapshot


class FeedbackPayload(_StrictModel):
    glyph: str = Field(min_length=1)
    response: str
    correct: bool
    expected: list[str] = Field(min_length=1)
    latency_ms: int = Field(ge=0)
    stats: StatsSnapshot


class SummaryPayload(_StrictModel):
    stats: StatsSnapshot
    recent_window: int = Field(ge=0)
    recent_attempts: int = Field(ge=0)
    recent_average_ms: float | None = None
    persistent: bool = True


class GlyphRow(_StrictModel):
    glyph: str
    attempts: int = Field(ge=1)
    accuracy_percent: float = Field(ge=0, le=100)
    last_seen: datetime | None = None
    ema_accuracy_percent: float = Field(ge=0, le=100)
    ema_latency_ms: float = Field(ge=0)


class MistakeRow(_StrictModel):
    glyph: str
    responses: list[str] = Field(default_factory=list)


class HistoryReport(_StrictModel):
    total_attempts: int = Field(ge=0)
    window: int = Field(ge=0)
    window_attempts: int = Field(ge=0)
    average_latency_ms: float | None = None
    accuracy_percent: float | None = None
    by_accuracy: list[GlyphRow] = Field(default_factory=list)
    by_speed: list[GlyphRow] = Field(default_factory=list)
    mistakes: list[MistakeRow] = Field(default_factory=list)
