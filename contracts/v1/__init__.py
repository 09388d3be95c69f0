"""v1 presenter contract schemas and adapters."""

__version__ = "1.0.0"

from .adapters import (
    build_feedback,
    build_history_report,
    build_prompt,
    build_summary,
    stats_to_contract,
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

__all__ = [
    "__version__",
    "FeedbackPayload",
    "GlyphRow",
    "HistoryReport",
    "MistakeRow",
    "PromptPayload",
    "StatsSnapshot",
    "SummaryPayload",
    "build_feedback",
    "build_history_report",
    "build_prompt",
    "build_summary",
    "stats_to_contract",
]
