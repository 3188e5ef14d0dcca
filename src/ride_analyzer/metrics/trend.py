"""Trend analysis: compare a recent period of training with the one before it."""

import calendar
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Union

from ..models.training import Training
from ..utils.time import time_string_to_minutes


class MetricType(str, Enum):
    """Metrics that trends are reported for."""
    DISTANCE = "distance"
    ELEVATION = "elevation"
    SPEED = "speed"
    MAX_SPEED = "maxSpeed"
    HEART_RATE = "heartRate"
    TIME = "time"
    TIME_PER_KM = "timePerKm"


class TrendProgress(str, Enum):
    PROGRESS = "progress"
    REGRESS = "regress"
    NEUTRAL = "neutral"


# Metrics where a lower value is the better one
LOWER_IS_BETTER = {MetricType.HEART_RATE, MetricType.TIME_PER_KM}


def _time_per_km(training: Training) -> float:
    if training.distance_km <= 0:
        return 0.0
    return time_string_to_minutes(training.moving_time) / training.distance_km


METRIC_VALUE_FUNCTIONS: Dict[MetricType, Callable[[Training], float]] = {
    MetricType.DISTANCE: lambda t: t.distance_km,
    MetricType.ELEVATION: lambda t: t.elevation_gain_m,
    MetricType.SPEED: lambda t: t.avg_speed_kmh or 0,
    MetricType.MAX_SPEED: lambda t: t.max_speed_kmh or 0,
    MetricType.HEART_RATE: lambda t: t.avg_heart_rate_bpm or 0,
    MetricType.TIME: lambda t: time_string_to_minutes(t.moving_time),
    MetricType.TIME_PER_KM: _time_per_km,
}


def subtract_months(moment: datetime, months: int) -> datetime:
    """Move back whole calendar months, clamping to the last day of shorter months."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month_zero = divmod(month_index, 12)
    month = month_zero + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _as_datetime(value: date, tz: Optional[tzinfo] = None) -> datetime:
    return datetime(value.year, value.month, value.day, tzinfo=tz)


def calculate_trend(
    trainings: Sequence[Training],
    value_fn: Callable[[Training], float],
    recent_months: int = 3,
    older_months: int = 3,
    custom_calculator: Optional[Callable[[List[Training], List[Training]], float]] = None,
    now: Optional[datetime] = None,
) -> float:
    """
    Percentage change between the recent period and the period before it.

    The recent period starts ``recent_months`` before ``now`` (inclusive);
    the older period covers the ``older_months`` before that, excluding the
    start of the recent period.

    Args:
        trainings: All trainings
        value_fn: Extracts the value to compare from a training
        recent_months: Length of the recent period
        older_months: Length of the comparison period
        custom_calculator: Receives (recent, older) trainings, newest first,
            and returns the trend itself
        now: Reference moment, defaults to the current time. Training dates
            are read as midnight in the zone of ``now``

    Returns:
        Trend in percent (positive for an increase). When the older average
        is 0 the trend is 100 if anything was recorded recently, else 0.
    """
    if not trainings:
        return 0.0

    now = now or datetime.now()
    recent_start = subtract_months(now, recent_months)
    older_start = subtract_months(recent_start, older_months)

    newest_first = sorted(trainings, key=lambda t: t.date, reverse=True)
    recent = [t for t in newest_first if _as_datetime(t.date, now.tzinfo) >= recent_start]
    older = [t for t in newest_first if older_start <= _as_datetime(t.date, now.tzinfo) < recent_start]

    if custom_calculator is not None:
        return custom_calculator(recent, older)

    def average(items: List[Training]) -> float:
        if not items:
            return 0.0
        return sum(value_fn(t) for t in items) / len(items)

    recent_avg = average(recent)
    older_avg = average(older)

    if older_avg == 0:
        return 100.0 if recent_avg > 0 else 0.0
    return (recent_avg - older_avg) / older_avg * 100


def format_trend(trend: float) -> str:
    """Format as a signed percentage, e.g. "+3.4%"."""
    sign = "+" if trend >= 0 else ""
    return f"{sign}{trend:.1f}%"


def is_positive_improvement(metric_type: MetricType) -> bool:
    """Whether an increase of this metric counts as an improvement."""
    return MetricType(metric_type) not in LOWER_IS_BETTER


def is_improvement(trend: float, metric: Union[MetricType, bool]) -> bool:
    """
    Whether a trend is an improvement.

    ``metric`` is either a MetricType or a plain flag saying whether a
    positive change is better.
    """
    is_positive = trend > 0
    if isinstance(metric, bool):
        positive_is_better = metric
    else:
        positive_is_better = is_positive_improvement(metric)
    return (positive_is_better and is_positive) or (not positive_is_better and not is_positive)


def get_trend_progress(trend: float, metric: Union[MetricType, bool] = True) -> TrendProgress:
    if trend == 0:
        return TrendProgress.NEUTRAL
    return TrendProgress.PROGRESS if is_improvement(trend, metric) else TrendProgress.REGRESS


def get_trend_message(trend: float, metric: Union[MetricType, bool] = True) -> str:
    """Human-readable description of a trend's size and direction."""
    magnitude = abs(trend)
    if magnitude == 0:
        return "No change"

    improved = is_improvement(trend, metric)
    lower_is_better = not isinstance(metric, bool) and MetricType(metric) in LOWER_IS_BETTER

    if lower_is_better:
        # Worded as decrease/increase rather than improvement/decline
        if magnitude <= 10:
            return "Slight decrease" if improved else "Slight increase"
        if magnitude <= 25:
            return "Moderate decrease" if improved else "Moderate increase"
        if magnitude <= 75:
            return "Significant decrease" if improved else "Significant increase"
        return "Spectacular decrease" if improved else "Worrying increase"

    if magnitude <= 10:
        return "Slight improvement" if improved else "Slight decline"
    if magnitude <= 25:
        return "Moderate improvement" if improved else "Moderate decline"
    if magnitude <= 75:
        return "Significant improvement" if improved else "Significant decline"
    return "Spectacular improvement" if improved else "Spectacular decline"
