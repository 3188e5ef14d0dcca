"""Activity analysis helpers."""

from .tagging import (
    AUTO_TAGGING_RULES,
    ActivityAnalysis,
    TagRule,
    analysis_from_laps,
    analysis_from_training,
    evaluate_tags,
)

__all__ = [
    "AUTO_TAGGING_RULES",
    "ActivityAnalysis",
    "TagRule",
    "analysis_from_laps",
    "analysis_from_training",
    "evaluate_tags",
]
