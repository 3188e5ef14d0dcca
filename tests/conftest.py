"""Pytest configuration and fixtures."""

from datetime import date, datetime, timedelta
from typing import List, Optional

import pytest

from ride_analyzer.models.fit import FitTrackpoint
from ride_analyzer.models.training import Training


TRACK_START = datetime(2024, 5, 1, 7, 0, 0)


@pytest.fixture
def make_training():
    """Factory for trainings with sensible defaults; keyword overrides win."""
    def _make(**overrides) -> Training:
        data = {
            "date": date(2024, 1, 1),
            "distance_km": 40.0,
            "elevation_gain_m": 400.0,
            "moving_time": "1:30:00",
            "avg_speed_kmh": 26.0,
            "max_speed_kmh": 55.0,
            "avg_heart_rate_bpm": 140,
            "max_heart_rate_bpm": 170,
        }
        data.update(overrides)
        return Training(**data)

    return _make


@pytest.fixture
def make_track():
    """
    Factory for a straight-line track.

    Samples are ``step_s`` seconds and ``step_m`` metres apart.
    """
    def _make(
        count: int = 26,
        step_m: float = 100.0,
        step_s: int = 10,
        heart_rate: Optional[int] = 140,
        speed_ms: Optional[float] = 10.0,
        altitudes: Optional[List[float]] = None,
    ) -> List[FitTrackpoint]:
        return [
            FitTrackpoint(
                timestamp=TRACK_START + timedelta(seconds=i * step_s),
                latitude=45.0 + i * 0.001,
                longitude=7.0,
                altitude_m=altitudes[i] if altitudes else 200.0,
                distance_m=i * step_m,
                speed_ms=speed_ms,
                heart_rate_bpm=heart_rate,
                cadence_rpm=85,
            )
            for i in range(count)
        ]

    return _make


@pytest.fixture
def sample_zones() -> dict:
    return {
        "zone_1": "0:10:30",
        "zone_2": "1:05:59",
        "zone_3": "0:00:45",
        "zone_4": "0:00:00",
        "zone_5": "0:02:00",
    }
