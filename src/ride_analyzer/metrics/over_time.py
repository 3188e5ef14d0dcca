"""
Time-series projections of a training collection.

Every function sorts a copy of its input chronologically (stable, so
trainings on the same day keep their relative order) and returns one
point per training, ready for JSON serialization.
"""

from typing import List, Sequence

from ..models.training import (
    ZONE_NAMES,
    DistancePoint,
    ElevationPerKmPoint,
    ElevationPoint,
    HeartRateMetricsPoint,
    SpeedPoint,
    Training,
)
from ..utils.time import time_string_to_minutes
from .derived import elevation_gain_per_km


def sort_by_date(trainings: Sequence[Training]) -> List[Training]:
    """Return a new list of trainings in ascending date order."""
    return sorted(trainings, key=lambda t: t.date)


def get_heart_rate_metrics_over_time(
    trainings: Sequence[Training],
    truncate: bool = True,
) -> List[HeartRateMetricsPoint]:
    """
    Average heart rate and minutes spent in each zone, per training.

    Trainings without heart rate zones are left out rather than
    zero-filled. Zone durations are converted to whole minutes
    (seconds dropped) unless ``truncate`` is False.

    Args:
        trainings: Collection of trainings
        truncate: Whole minutes (True) or fractional minutes (False)

    Returns:
        One point per training with zones, in chronological order
    """
    points = []
    for training in sort_by_date(trainings):
        zones = training.heart_rate_zones
        if zones is None:
            continue
        zone_minutes = {
            name: time_string_to_minutes(getattr(zones, name), truncate=truncate)
            for name in ZONE_NAMES
        }
        points.append(
            HeartRateMetricsPoint(
                date=training.date,
                avg_heart_rate=training.avg_heart_rate_bpm if training.avg_heart_rate_bpm is not None else 0,
                **zone_minutes,
            )
        )
    return points


def get_elevation_per_km_metrics_over_time(trainings: Sequence[Training]) -> List[ElevationPerKmPoint]:
    """Elevation gain per km (2 decimals) for each training."""
    return [
        ElevationPerKmPoint(date=t.date, elevation=elevation_gain_per_km(t))
        for t in sort_by_date(trainings)
    ]


def get_elevation_metrics_over_time(trainings: Sequence[Training]) -> List[ElevationPoint]:
    """Absolute elevation gain alongside elevation gain per km."""
    return [
        ElevationPoint(
            date=t.date,
            elevation_gain=t.elevation_gain_m,
            elevation_per_km=elevation_gain_per_km(t),
        )
        for t in sort_by_date(trainings)
    ]


def get_distance_metrics_over_time(trainings: Sequence[Training]) -> List[DistancePoint]:
    """Distance per training and the running total."""
    points = []
    cumulative = 0.0
    for training in sort_by_date(trainings):
        cumulative += training.distance_km
        points.append(
            DistancePoint(
                date=training.date,
                distance=training.distance_km,
                cumulative_distance=round(cumulative, 2),
            )
        )
    return points


def get_speed_metrics_over_time(trainings: Sequence[Training]) -> List[SpeedPoint]:
    return [
        SpeedPoint(date=t.date, avg_speed=t.avg_speed_kmh, max_speed=t.max_speed_kmh)
        for t in sort_by_date(trainings)
    ]
