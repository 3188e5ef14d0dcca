"""Statistics over a collection of trainings (dashboard cards)."""

from typing import Sequence

from ..models.training import Training, TrainingSummary
from ..utils.time import minutes_to_time_string, time_string_to_minutes
from .derived import round_half_up


EMPTY_DURATION = "0:00:00"


def calculate_total_distance(trainings: Sequence[Training]) -> float:
    return sum(t.distance_km for t in trainings)


def calculate_total_elevation_gain(trainings: Sequence[Training]) -> float:
    return sum(t.elevation_gain_m for t in trainings)


def calculate_total_moving_time(trainings: Sequence[Training]) -> str:
    """Sum of moving times as "H:MM:SS"."""
    if not trainings:
        return EMPTY_DURATION
    total_minutes = sum(time_string_to_minutes(t.moving_time) for t in trainings)
    return minutes_to_time_string(total_minutes)


def calculate_average_speed(trainings: Sequence[Training], decimals: int = 1) -> float:
    """Mean of the average speeds of trainings that recorded one."""
    speeds = [t.avg_speed_kmh for t in trainings if t.avg_speed_kmh is not None]
    if not speeds:
        return 0.0
    return round_half_up(sum(speeds) / len(speeds), decimals)


def calculate_average_heart_rate(trainings: Sequence[Training]) -> float:
    """Mean of the average heart rates, ignoring rides without a usable reading."""
    heart_rates = [t.avg_heart_rate_bpm for t in trainings if t.avg_heart_rate_bpm]
    if not heart_rates:
        return 0.0
    return sum(heart_rates) / len(heart_rates)


def calculate_highest_average_heart_rate(trainings: Sequence[Training]) -> float:
    return max((t.avg_heart_rate_bpm for t in trainings if t.avg_heart_rate_bpm), default=0.0)


def calculate_highest_average_speed(trainings: Sequence[Training]) -> float:
    return max((t.avg_speed_kmh for t in trainings if t.avg_speed_kmh is not None), default=0.0)


def calculate_highest_distance(trainings: Sequence[Training]) -> float:
    return max((t.distance_km for t in trainings), default=0.0)


def calculate_max_speed(trainings: Sequence[Training]) -> float:
    return max((t.max_speed_kmh for t in trainings if t.max_speed_kmh is not None), default=0.0)


def calculate_elevation_gain_per_km(trainings: Sequence[Training]) -> float:
    """Total elevation over total distance; 0.0 when nothing was ridden."""
    total_distance = calculate_total_distance(trainings)
    if total_distance <= 0:
        return 0.0
    return calculate_total_elevation_gain(trainings) / total_distance


def calculate_average_time_per_km(trainings: Sequence[Training]) -> str:
    """Overall moving time per km as "H:MM:SS"."""
    total_distance = calculate_total_distance(trainings)
    if total_distance <= 0:
        return EMPTY_DURATION
    total_minutes = sum(time_string_to_minutes(t.moving_time) for t in trainings)
    return minutes_to_time_string(total_minutes / total_distance)


def calculate_shortest_time_per_km(trainings: Sequence[Training]) -> str:
    """Fastest per-km time of any single training as "H:MM:SS"."""
    times_per_km = [
        time_string_to_minutes(t.moving_time) / t.distance_km
        for t in trainings
        if t.distance_km > 0
    ]
    if not times_per_km:
        return EMPTY_DURATION
    return minutes_to_time_string(min(times_per_km))


def summarize(trainings: Sequence[Training]) -> TrainingSummary:
    """Bundle all collection statistics into one result."""
    return TrainingSummary(
        count=len(trainings),
        total_distance=round(calculate_total_distance(trainings), 2),
        total_elevation_gain=round(calculate_total_elevation_gain(trainings), 2),
        total_moving_time=calculate_total_moving_time(trainings),
        average_speed=calculate_average_speed(trainings),
        average_heart_rate=round_half_up(calculate_average_heart_rate(trainings), 1),
        highest_distance=calculate_highest_distance(trainings),
        highest_average_speed=calculate_highest_average_speed(trainings),
        highest_average_heart_rate=calculate_highest_average_heart_rate(trainings),
        max_speed=calculate_max_speed(trainings),
        elevation_gain_per_km=round_half_up(calculate_elevation_gain_per_km(trainings), 2),
        average_time_per_km=calculate_average_time_per_km(trainings),
        shortest_time_per_km=calculate_shortest_time_per_km(trainings),
    )
