"""Training data models and the result shapes produced by the metrics."""

import datetime as dt
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.time import parse_time_string


ZONE_NAMES = ("zone_1", "zone_2", "zone_3", "zone_4", "zone_5")


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _coerce_date(value: Any) -> Any:
    """Accept full ISO timestamps (Strava start dates) where a date is expected."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class HeartRateZones(BaseModel):
    """Time spent in each of the five heart rate zones, as duration strings."""

    zone_1: str = Field(..., description="Time in zone 1 (H:MM:SS)")
    zone_2: str = Field(..., description="Time in zone 2 (H:MM:SS)")
    zone_3: str = Field(..., description="Time in zone 3 (H:MM:SS)")
    zone_4: str = Field(..., description="Time in zone 4 (H:MM:SS)")
    zone_5: str = Field(..., description="Time in zone 5 (H:MM:SS)")

    @field_validator(*ZONE_NAMES)
    @classmethod
    def validate_duration(cls, v: str) -> str:
        parse_time_string(v)
        return v


class Training(BaseModel):
    """One completed ride."""

    id: Optional[str] = Field(None, description="Training identifier")
    name: Optional[str] = Field(None, description="Activity name")
    strava_activity_id: Optional[int] = Field(None, description="Strava activity ID")
    date: dt.date = Field(..., description="Date of the training")
    distance_km: float = Field(..., ge=0, description="Distance in km")
    elevation_gain_m: float = Field(0.0, ge=0, description="Elevation gain in m")
    moving_time: str = Field("0:00:00", description="Moving time (H:MM:SS)")
    avg_speed_kmh: Optional[float] = Field(None, ge=0, description="Average speed in km/h")
    max_speed_kmh: Optional[float] = Field(None, ge=0, description="Maximum speed in km/h")
    avg_heart_rate_bpm: Optional[float] = Field(
        None, ge=0, description="Average heart rate in bpm; None when no sensor was worn, 0 is a recorded value"
    )
    max_heart_rate_bpm: Optional[float] = Field(
        None, ge=0, description="Maximum heart rate in bpm; None when no sensor was worn"
    )
    heart_rate_zones: Optional[HeartRateZones] = Field(None, description="Time in heart rate zones")
    fit_processed: Optional[bool] = Field(None, description="Whether FIT track data exists")
    summary: Optional[str] = Field(None, description="Free-text summary")
    device: Optional[str] = Field(None, description="Recording device")
    battery_percent_usage: Optional[float] = Field(
        None, ge=0, le=100, description="Battery usage during the ride in percent"
    )
    effort: Optional[int] = Field(
        None, ge=1, le=10, description="Perceived effort: 1-3 easy, 4-6 medium, 7-8 hard, 9-10 all out"
    )

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        return _coerce_date(v)

    @field_validator("moving_time")
    @classmethod
    def validate_moving_time(cls, v: str) -> str:
        parse_time_string(v)
        return v

    @field_validator("heart_rate_zones", mode="before")
    @classmethod
    def drop_partial_zones(cls, v: Any) -> Any:
        """Zones are all-or-nothing; an incomplete set is treated as absent."""
        if isinstance(v, dict) and not all(v.get(name) for name in ZONE_NAMES):
            return None
        return v


class MaxValues(BaseModel):
    """Normalization reference for the composite training load."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    max_distance: float = Field(..., description="Reference distance in km")
    max_speed: float = Field(..., description="Reference average speed in km/h")
    max_hr: float = Field(..., alias="maxHR", description="Reference average heart rate in bpm")
    max_elevation: float = Field(..., description="Reference elevation gain in m")


class TrainingLoadResult(BaseModel):
    """Composite intensity of one training and its per-component breakdown."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: dt.date
    intensity: int = Field(..., description="Composite score, 0-100")
    distance_contribution: int
    speed_contribution: int
    heart_rate_contribution: int
    elevation_contribution: int


# ============================================================================
# Time-series points
# ============================================================================

class HeartRateMetricsPoint(BaseModel):
    """Average heart rate and minutes per zone for one training."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: dt.date
    avg_heart_rate: float
    zone_1: Union[int, float] = Field(..., alias="zone_1")
    zone_2: Union[int, float] = Field(..., alias="zone_2")
    zone_3: Union[int, float] = Field(..., alias="zone_3")
    zone_4: Union[int, float] = Field(..., alias="zone_4")
    zone_5: Union[int, float] = Field(..., alias="zone_5")


class ElevationPerKmPoint(BaseModel):
    date: dt.date
    elevation: float


class ElevationPoint(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: dt.date
    elevation_gain: float
    elevation_per_km: float


class DistancePoint(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: dt.date
    distance: float
    cumulative_distance: float


class SpeedPoint(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: dt.date
    avg_speed: Optional[float] = None
    max_speed: Optional[float] = None


class TrainingSummary(BaseModel):
    """Dashboard statistics over a collection of trainings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    count: int
    total_distance: float
    total_elevation_gain: float
    total_moving_time: str
    average_speed: float
    average_heart_rate: float
    highest_distance: float
    highest_average_speed: float
    highest_average_heart_rate: float
    max_speed: float
    elevation_gain_per_km: float
    average_time_per_km: str
    shortest_time_per_km: str
