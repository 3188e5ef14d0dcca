"""Unit conversions between raw device / Strava units and display units."""

from typing import Optional


MPS_TO_KMH = 3.6

# FIT stores coordinates as semicircles: 2^31 semicircles == 180 degrees
SEMICIRCLES_TO_DEGREES = 180.0 / 2**31


def meters_to_kilometers(meters: float) -> float:
    return meters / 1000


def mps_to_kmh(speed_mps: Optional[float]) -> Optional[float]:
    """Convert metres per second to km/h, passing ``None`` through."""
    if speed_mps is None:
        return None
    return speed_mps * MPS_TO_KMH


def kmh_to_mps(speed_kmh: Optional[float]) -> Optional[float]:
    if speed_kmh is None:
        return None
    return speed_kmh / MPS_TO_KMH


def semicircles_to_degrees(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return value * SEMICIRCLES_TO_DEGREES
