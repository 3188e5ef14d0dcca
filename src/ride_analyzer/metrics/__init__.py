"""Training metrics calculations."""

from .derived import elevation_gain_per_km, round_half_up
from .load import (
    calculate_training_load,
    derive_max_values,
    get_intensity_metrics_over_time,
    heart_rate_score,
    normalize,
)
from .over_time import (
    get_distance_metrics_over_time,
    get_elevation_metrics_over_time,
    get_elevation_per_km_metrics_over_time,
    get_heart_rate_metrics_over_time,
    get_speed_metrics_over_time,
    sort_by_date,
)
from .summary import (
    calculate_average_heart_rate,
    calculate_average_speed,
    calculate_average_time_per_km,
    calculate_elevation_gain_per_km,
    calculate_highest_average_heart_rate,
    calculate_highest_average_speed,
    calculate_highest_distance,
    calculate_max_speed,
    calculate_shortest_time_per_km,
    calculate_total_distance,
    calculate_total_elevation_gain,
    calculate_total_moving_time,
    summarize,
)
from .trend import (
    METRIC_VALUE_FUNCTIONS,
    MetricType,
    TrendProgress,
    calculate_trend,
    format_trend,
    get_trend_message,
    get_trend_progress,
    is_improvement,
    is_positive_improvement,
)
from .zones import (
    calculate_zone_distribution,
    calculate_zone_seconds,
    get_zone_for_heart_rate,
    get_zone_ranges,
    suggest_heart_rate_zones,
)

__all__ = [
    # Per-training
    "elevation_gain_per_km",
    "round_half_up",
    # Training load
    "calculate_training_load",
    "derive_max_values",
    "get_intensity_metrics_over_time",
    "heart_rate_score",
    "normalize",
    # Over time
    "get_distance_metrics_over_time",
    "get_elevation_metrics_over_time",
    "get_elevation_per_km_metrics_over_time",
    "get_heart_rate_metrics_over_time",
    "get_speed_metrics_over_time",
    "sort_by_date",
    # Summary
    "calculate_average_heart_rate",
    "calculate_average_speed",
    "calculate_average_time_per_km",
    "calculate_elevation_gain_per_km",
    "calculate_highest_average_heart_rate",
    "calculate_highest_average_speed",
    "calculate_highest_distance",
    "calculate_max_speed",
    "calculate_shortest_time_per_km",
    "calculate_total_distance",
    "calculate_total_elevation_gain",
    "calculate_total_moving_time",
    "summarize",
    # Trend
    "METRIC_VALUE_FUNCTIONS",
    "MetricType",
    "TrendProgress",
    "calculate_trend",
    "format_trend",
    "get_trend_message",
    "get_trend_progress",
    "is_improvement",
    "is_positive_improvement",
    # HR zones
    "calculate_zone_distribution",
    "calculate_zone_seconds",
    "get_zone_for_heart_rate",
    "get_zone_ranges",
    "suggest_heart_rate_zones",
]
