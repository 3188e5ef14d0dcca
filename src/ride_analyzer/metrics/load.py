"""Composite training load (intensity) calculations."""

import math
from typing import List, Optional, Sequence

from ..config import MetricsConfig
from ..exceptions import InvalidNormalizationReferenceError
from ..models.training import MaxValues, Training, TrainingLoadResult
from .derived import round_half_up


def _check_reference(field: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidNormalizationReferenceError(field=field, value=value)


def normalize(value: float, maximum: float, field: str) -> float:
    """
    Scale a value against its reference maximum into [0, 1].

    Values above the maximum are capped at 1, not extrapolated.

    Raises:
        InvalidNormalizationReferenceError: If the maximum is not a positive number
    """
    _check_reference(field, maximum)
    return min(value / maximum, 1.0)


def heart_rate_score(
    avg_heart_rate_bpm: Optional[float],
    max_hr: float,
    neutral: float = 0.5,
) -> float:
    """
    Normalized heart rate component of the training load.

    A ride recorded without a heart rate sensor scores ``neutral``
    rather than zero. A recorded value of 0 is still a recorded value.

    Args:
        avg_heart_rate_bpm: Average heart rate, or None when not recorded
        max_hr: Reference heart rate
        neutral: Score used when no heart rate was recorded

    Returns:
        Score in [0, 1]
    """
    if avg_heart_rate_bpm is None:
        return neutral
    return normalize(avg_heart_rate_bpm, max_hr, "max_hr")


def calculate_training_load(
    training: Training,
    max_values: MaxValues,
    config: Optional[MetricsConfig] = None,
) -> TrainingLoadResult:
    """
    Calculate the composite intensity of a single training.

    Each of distance, average speed, average heart rate and elevation gain
    is normalized against the supplied maxima, then blended with the
    configured weights (by default 30/30/20/20) into a 0-100 score.

    Args:
        training: Training to score
        max_values: Reference maxima, typically the maxima of the collection
        config: Weights and heart rate default policy

    Returns:
        TrainingLoadResult with intensity and rounded component contributions

    Raises:
        InvalidNormalizationReferenceError: If a maximum that is needed is zero,
            negative or not finite
    """
    config = config or MetricsConfig()
    weights = config.weights

    distance_score = normalize(training.distance_km, max_values.max_distance, "max_distance")
    if training.avg_speed_kmh is None:
        speed_score = 0.0
    else:
        speed_score = normalize(training.avg_speed_kmh, max_values.max_speed, "max_speed")
    hr_score = heart_rate_score(
        training.avg_heart_rate_bpm,
        max_values.max_hr,
        neutral=config.neutral_heart_rate_score,
    )
    elevation_score = normalize(training.elevation_gain_m, max_values.max_elevation, "max_elevation")

    weighted_sum = (
        distance_score * weights.distance
        + speed_score * weights.speed
        + hr_score * weights.heart_rate
        + elevation_score * weights.elevation
    )

    return TrainingLoadResult(
        date=training.date,
        intensity=int(round_half_up(weighted_sum * 100)),
        distance_contribution=int(round_half_up(distance_score * weights.distance * 100)),
        speed_contribution=int(round_half_up(speed_score * weights.speed * 100)),
        heart_rate_contribution=int(round_half_up(hr_score * weights.heart_rate * 100)),
        elevation_contribution=int(round_half_up(elevation_score * weights.elevation * 100)),
    )


def derive_max_values(trainings: Sequence[Training], floor: float = 1e-6) -> MaxValues:
    """
    Componentwise maxima of a training collection.

    Every maximum is floored at ``floor`` so a degenerate collection
    (all zeros, no heart rate data, or empty) still yields a valid
    normalization reference.
    """
    def highest(values) -> float:
        return max([v for v in values if v is not None], default=0.0)

    return MaxValues(
        max_distance=max(highest(t.distance_km for t in trainings), floor),
        max_speed=max(highest(t.avg_speed_kmh for t in trainings), floor),
        max_hr=max(highest(t.avg_heart_rate_bpm for t in trainings), floor),
        max_elevation=max(highest(t.elevation_gain_m for t in trainings), floor),
    )


def get_intensity_metrics_over_time(
    trainings: Sequence[Training],
    config: Optional[MetricsConfig] = None,
) -> List[TrainingLoadResult]:
    """
    Score every training against the maxima of the whole collection.

    Args:
        trainings: Collection of trainings (not modified)
        config: Weights, heart rate default and max-value floor

    Returns:
        Training load results in chronological order
    """
    config = config or MetricsConfig()
    sorted_trainings = sorted(trainings, key=lambda t: t.date)
    if not sorted_trainings:
        return []

    max_values = derive_max_values(sorted_trainings, floor=config.max_value_floor)
    return [calculate_training_load(t, max_values, config) for t in sorted_trainings]
