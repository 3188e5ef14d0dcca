"""Configuration settings for the Ride Analyzer."""

import math
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/ride_analyzer/config.py
PACKAGE_ROOT = Path(__file__).parent.parent.parent

EPOCH = date(1970, 1, 1)


@dataclass(frozen=True)
class LoadWeights:
    """Weights of the four components of the composite training load."""

    distance: float = 0.30
    speed: float = 0.30
    heart_rate: float = 0.20
    elevation: float = 0.20

    def __post_init__(self):
        total = self.distance + self.speed + self.heart_rate + self.elevation
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Load weights must sum to 1.0, got {total}")


@dataclass(frozen=True)
class ZoneBands:
    """
    Heart rate boundaries (bpm) separating the five training zones.

    Zone 1 is below ``zone_1_below``; zones 2-4 end inclusively at
    their ``*_max`` value; anything above ``zone_4_max`` is zone 5.
    """

    zone_1_below: float = 113
    zone_2_max: float = 132
    zone_3_max: float = 151
    zone_4_max: float = 170

    def __post_init__(self):
        bounds = [self.zone_1_below, self.zone_2_max, self.zone_3_max, self.zone_4_max]
        if bounds != sorted(bounds):
            raise ValueError(f"Zone boundaries must be ascending, got {bounds}")


@dataclass(frozen=True)
class MetricsConfig:
    """Tunable parameters of the metric calculations."""

    weights: LoadWeights = field(default_factory=LoadWeights)
    neutral_heart_rate_score: float = 0.5
    max_value_floor: float = 1e-6
    past_trainings_epoch: date = EPOCH
    zone_bands: ZoneBands = field(default_factory=ZoneBands)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RIDE_ANALYZER_",
        env_file=str(PACKAGE_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Lap generation
    default_lap_distance_km: float = 1.0

    # Training load
    distance_weight: float = 0.30
    speed_weight: float = 0.30
    heart_rate_weight: float = 0.20
    elevation_weight: float = 0.20
    neutral_heart_rate_score: float = 0.5
    max_value_floor: float = 1e-6

    # Heart rate zones (bpm)
    zone_1_below: float = 113
    zone_2_max: float = 132
    zone_3_max: float = 151
    zone_4_max: float = 170

    # Lower bound used when selecting past trainings
    past_trainings_epoch: date = EPOCH

    def metrics_config(self) -> MetricsConfig:
        """Build the immutable metrics configuration from these settings."""
        return MetricsConfig(
            weights=LoadWeights(
                distance=self.distance_weight,
                speed=self.speed_weight,
                heart_rate=self.heart_rate_weight,
                elevation=self.elevation_weight,
            ),
            neutral_heart_rate_score=self.neutral_heart_rate_score,
            max_value_floor=self.max_value_floor,
            past_trainings_epoch=self.past_trainings_epoch,
            zone_bands=ZoneBands(
                zone_1_below=self.zone_1_below,
                zone_2_max=self.zone_2_max,
                zone_3_max=self.zone_3_max,
                zone_4_max=self.zone_4_max,
            ),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
