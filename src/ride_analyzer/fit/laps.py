"""Split a recorded track into fixed-distance laps."""

import logging
from typing import List, Optional, Sequence

from ..exceptions import TrainingDataError, ValidationError
from ..models.fit import FitLap, FitTrackpoint


logger = logging.getLogger(__name__)

MIN_LAP_DISTANCE_KM = 0.1
MAX_LAP_DISTANCE_KM = 50.0


def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def _round_or_none(value: Optional[float], digits: Optional[int] = None) -> Optional[float]:
    if value is None:
        return None
    return round(value, digits) if digits is not None else round(value)


def calculate_lap_stats(trackpoints: Sequence[FitTrackpoint], lap_number: int) -> FitLap:
    """
    Summarize the trackpoints of one lap.

    Averages and maxima only use samples that carry the value; elevation
    gain is the sum of positive altitude differences.
    """
    first, last = trackpoints[0], trackpoints[-1]
    duration = (last.timestamp - first.timestamp).total_seconds()
    distance = (last.distance_m or 0) - (first.distance_m or 0)

    speeds = [tp.speed_ms for tp in trackpoints if tp.speed_ms is not None]
    heart_rates = [tp.heart_rate_bpm for tp in trackpoints if tp.heart_rate_bpm is not None]
    cadences = [tp.cadence_rpm for tp in trackpoints if tp.cadence_rpm is not None]
    altitudes = [tp.altitude_m for tp in trackpoints if tp.altitude_m is not None]

    elevation_gain = sum(
        max(current - previous, 0) for previous, current in zip(altitudes, altitudes[1:])
    )

    return FitLap(
        lap_number=lap_number,
        start_time=first.timestamp,
        end_time=last.timestamp,
        distance_m=round(distance, 2) if distance > 0 else 0,
        moving_time_s=round(duration),
        elapsed_time_s=round(duration),
        avg_speed_ms=_round_or_none(_mean(speeds), 2),
        max_speed_ms=_round_or_none(max(speeds, default=None), 2),
        avg_heart_rate_bpm=_round_or_none(_mean(heart_rates)),
        max_heart_rate_bpm=max(heart_rates, default=None),
        avg_cadence_rpm=_round_or_none(_mean(cadences)),
        max_cadence_rpm=max(cadences, default=None),
        total_elevation_gain_m=round(elevation_gain, 2) if elevation_gain > 0 else None,
        start_latitude=_round_or_none(first.latitude, 6),
        start_longitude=_round_or_none(first.longitude, 6),
        end_latitude=_round_or_none(last.latitude, 6),
        end_longitude=_round_or_none(last.longitude, 6),
    )


def generate_laps(trackpoints: Sequence[FitTrackpoint], lap_distance_km: float) -> List[FitLap]:
    """
    Group trackpoints into laps of (at least) ``lap_distance_km``.

    A lap closes at the first sample whose cumulative distance reaches the
    target; that sample also opens the next lap. Whatever remains after
    the last full lap becomes a shorter final lap.

    Args:
        trackpoints: Recorded track; samples without distance are ignored
        lap_distance_km: Target lap length, 0.1-50 km

    Returns:
        Laps numbered from 1

    Raises:
        ValidationError: If the lap distance is out of range
        TrainingDataError: If the track has no distance data or is too short
    """
    if not MIN_LAP_DISTANCE_KM <= lap_distance_km <= MAX_LAP_DISTANCE_KM:
        raise ValidationError(
            f"Lap distance must be between {MIN_LAP_DISTANCE_KM} and {MAX_LAP_DISTANCE_KM} km",
            field="lap_distance_km",
            details={"value": lap_distance_km},
        )

    points = sorted(
        (tp for tp in trackpoints if tp.distance_m is not None),
        key=lambda tp: tp.timestamp,
    )
    if not points:
        raise TrainingDataError("No trackpoints with distance data found")

    target_m = lap_distance_km * 1000
    laps: List[FitLap] = []
    lap_start = 0
    lap_start_distance = points[0].distance_m

    for i in range(1, len(points)):
        if points[i].distance_m - lap_start_distance >= target_m:
            laps.append(calculate_lap_stats(points[lap_start:i + 1], lap_number=len(laps) + 1))
            lap_start = i
            lap_start_distance = points[i].distance_m

    if lap_start < len(points) - 1:
        laps.append(calculate_lap_stats(points[lap_start:], lap_number=len(laps) + 1))

    if not laps:
        raise TrainingDataError("Unable to generate laps. Training distance may be too short.")

    logger.info(f"Generated {len(laps)} laps of {lap_distance_km} km from {len(points)} trackpoints")
    return laps
