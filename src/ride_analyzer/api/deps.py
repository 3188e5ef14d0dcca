"""Dependency injection for API routes."""

from functools import lru_cache

from ..config import MetricsConfig, get_settings


@lru_cache
def get_metrics_config() -> MetricsConfig:
    """Get the metrics configuration built from the application settings."""
    return get_settings().metrics_config()


def get_default_lap_distance_km() -> float:
    """Lap distance used when a request does not specify one."""
    return get_settings().default_lap_distance_km
