"""
Automatic activity tagging.

Rules look at an activity summary (built from laps when available,
otherwise from the imported training) and decide which descriptive
tags such as "Climbing" or "Endurance" apply.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..models.fit import FitLap
from ..models.training import Training
from ..utils.time import time_string_to_minutes
from ..utils.units import MPS_TO_KMH, kmh_to_mps


logger = logging.getLogger(__name__)


@dataclass
class ActivityAnalysis:
    """Summary of one activity in raw units, as seen by the tagging rules."""
    id: str
    type: str = "ride"
    distance_m: Optional[float] = None
    elevation_gain_m: Optional[float] = None
    moving_time_s: Optional[float] = None
    avg_speed_ms: Optional[float] = None
    max_speed_ms: Optional[float] = None
    avg_heart_rate_bpm: Optional[float] = None
    max_heart_rate_bpm: Optional[float] = None
    trackpoints_count: int = 0


@dataclass
class TagRule:
    """A tag and the condition under which it is applied."""
    tag_name: str
    description: str
    color: str
    icon: str
    condition: Callable[[ActivityAnalysis], bool]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "tag_name": self.tag_name,
            "description": self.description,
            "color": self.color,
            "icon": self.icon,
        }


def _meters_per_km(data: ActivityAnalysis) -> float:
    distance = data.distance_m or 0
    if distance == 0:
        return 0.0
    return (data.elevation_gain_m or 0) / (distance / 1000)


AUTO_TAGGING_RULES: List[TagRule] = [
    TagRule(
        tag_name="Long Distance",
        description="Activities longer than 80km",
        color="#ef4444",
        icon="route",
        condition=lambda data: (data.distance_m or 0) > 80_000,
    ),
    TagRule(
        tag_name="Climbing",
        description="Activities with significant average elevation gain (>6m/km)",
        color="#8b5cf6",
        icon="mountain",
        condition=lambda data: _meters_per_km(data) > 6,
    ),
    TagRule(
        tag_name="High Intensity",
        description="Activities with high average heart rate (>150 bpm)",
        color="#f59e0b",
        icon="heart",
        condition=lambda data: (data.avg_heart_rate_bpm or 0) > 150,
    ),
    TagRule(
        tag_name="Low Intensity",
        description="Activities with low average heart rate (<135 bpm)",
        color="#3b82f6",
        icon="heart",
        condition=lambda data: 0 < (data.avg_heart_rate_bpm or 0) < 135,
    ),
    TagRule(
        tag_name="Speed Demon",
        description="Activities with high average speed (>24 km/h)",
        color="#dc2626",
        icon="gauge",
        condition=lambda data: (data.avg_speed_ms or 0) * MPS_TO_KMH > 24,
    ),
    TagRule(
        tag_name="Endurance",
        description="Activities longer than 3 hours",
        color="#059669",
        icon="clock",
        condition=lambda data: (data.moving_time_s or 0) > 10_800,
    ),
    TagRule(
        tag_name="Quick Ride",
        description="Activities shorter than 60 minutes",
        color="#06b6d4",
        icon="timer",
        condition=lambda data: 0 < (data.moving_time_s or 0) < 3_600,
    ),
    TagRule(
        tag_name="Recovery",
        description="Low intensity, short duration activities",
        color="#84cc16",
        icon="leaf",
        condition=lambda data: 0 < (data.avg_heart_rate_bpm or 0) < 130,
    ),
]


def analysis_from_training(training: Training, activity_id: Optional[str] = None) -> ActivityAnalysis:
    """Build the tagging view of an imported training (km and km/h to raw units)."""
    return ActivityAnalysis(
        id=activity_id or training.id or training.date.isoformat(),
        distance_m=training.distance_km * 1000,
        elevation_gain_m=training.elevation_gain_m,
        moving_time_s=time_string_to_minutes(training.moving_time) * 60,
        avg_speed_ms=kmh_to_mps(training.avg_speed_kmh),
        max_speed_ms=kmh_to_mps(training.max_speed_kmh),
        avg_heart_rate_bpm=training.avg_heart_rate_bpm,
        max_heart_rate_bpm=training.max_heart_rate_bpm,
    )


def analysis_from_laps(
    activity_id: str,
    laps: Sequence[FitLap],
    trackpoints_count: int = 0,
    fallback: Optional[Training] = None,
) -> ActivityAnalysis:
    """
    Build the tagging view of an activity from its laps.

    Lap totals win when they are non-zero; otherwise the imported
    training (if any) supplies distance, elevation, moving time and
    heart rate.
    """
    fallback_view = analysis_from_training(fallback, activity_id) if fallback else None

    total_distance = sum(lap.distance_m for lap in laps)
    total_moving_time = sum(lap.moving_time_s for lap in laps)
    total_elevation = sum(lap.total_elevation_gain_m or 0 for lap in laps)

    avg_speed = None
    max_speed = None
    max_heart_rate = None
    if laps:
        avg_speed = sum(lap.avg_speed_ms or 0 for lap in laps) / len(laps)
        max_speed = max(lap.max_speed_ms or 0 for lap in laps)
        max_heart_rate = max(lap.max_heart_rate_bpm or 0 for lap in laps)

    lap_heart_rates = [lap.avg_heart_rate_bpm for lap in laps if lap.avg_heart_rate_bpm]
    avg_heart_rate = sum(lap_heart_rates) / len(lap_heart_rates) if lap_heart_rates else None

    def pick(own, fallback_field: str):
        if own:
            return own
        return getattr(fallback_view, fallback_field) if fallback_view else None

    return ActivityAnalysis(
        id=activity_id,
        distance_m=pick(total_distance, "distance_m"),
        elevation_gain_m=pick(total_elevation, "elevation_gain_m"),
        moving_time_s=pick(total_moving_time, "moving_time_s"),
        avg_speed_ms=avg_speed,
        max_speed_ms=max_speed,
        avg_heart_rate_bpm=pick(avg_heart_rate, "avg_heart_rate_bpm"),
        max_heart_rate_bpm=pick(max_heart_rate, "max_heart_rate_bpm"),
        trackpoints_count=trackpoints_count,
    )


def evaluate_tags(
    analysis: ActivityAnalysis,
    rules: Sequence[TagRule] = AUTO_TAGGING_RULES,
) -> List[TagRule]:
    """Return the rules whose condition holds for the activity."""
    applicable = [rule for rule in rules if rule.condition(analysis)]
    logger.info(
        f"Activity {analysis.id}: {len(applicable)} applicable tag rules "
        f"{[rule.tag_name for rule in applicable]}"
    )
    return applicable
