"""Metrics derived from a single training."""

import math

from ..models.training import Training


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round halves away from zero for positive values (2.5 -> 3, not 2)."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def elevation_gain_per_km(training: Training) -> float:
    """
    Elevation gain per kilometre, rounded to two decimals.

    Args:
        training: Training with distance and elevation gain

    Returns:
        Metres climbed per km, or 0.0 for a zero-distance training
    """
    if training.distance_km <= 0:
        return 0.0
    return round_half_up(training.elevation_gain_m / training.distance_km, 2)
