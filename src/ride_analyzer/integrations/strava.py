"""
Strava activity import.

Parses activity payloads as returned by the Strava API and maps them
onto Training records. Fetching the payloads (OAuth, HTTP) is left to
the caller.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..exceptions import ValidationError
from ..models.training import HeartRateZones, Training
from ..utils.time import seconds_to_time_string
from ..utils.units import meters_to_kilometers, mps_to_kmh


logger = logging.getLogger(__name__)


class StravaSport(str, Enum):
    """Strava sport types."""
    RIDE = "Ride"
    VIRTUAL_RIDE = "VirtualRide"
    GRAVEL_RIDE = "GravelRide"
    MOUNTAIN_BIKE_RIDE = "MountainBikeRide"
    E_BIKE_RIDE = "EBikeRide"
    RUN = "Run"
    WALK = "Walk"
    HIKE = "Hike"
    WORKOUT = "Workout"


@dataclass
class StravaActivity:
    """Strava activity data."""
    id: int
    name: str
    sport_type: StravaSport
    start_date: datetime
    moving_time_sec: int
    distance_m: float

    # Performance metrics
    average_speed_mps: Optional[float] = None
    max_speed_mps: Optional[float] = None
    average_heartrate: Optional[float] = None
    max_heartrate: Optional[float] = None

    # Elevation
    total_elevation_gain_m: Optional[float] = None

    device_name: Optional[str] = None
    has_heartrate: bool = False

    @property
    def is_ride(self) -> bool:
        return self.sport_type not in (
            StravaSport.RUN, StravaSport.WALK, StravaSport.HIKE, StravaSport.WORKOUT
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sport_type": self.sport_type.value,
            "start_date": self.start_date.isoformat(),
            "moving_time_sec": self.moving_time_sec,
            "distance_m": self.distance_m,
            "average_speed_mps": self.average_speed_mps,
            "max_speed_mps": self.max_speed_mps,
            "average_heartrate": self.average_heartrate,
            "max_heartrate": self.max_heartrate,
            "total_elevation_gain_m": self.total_elevation_gain_m,
            "device_name": self.device_name,
            "has_heartrate": self.has_heartrate,
        }

    @classmethod
    def from_api_response(cls, data: dict) -> "StravaActivity":
        """Parse from Strava API response."""
        try:
            sport_type = StravaSport(data.get("sport_type") or data.get("type") or "")
        except ValueError:
            sport_type = StravaSport.WORKOUT

        try:
            return cls(
                id=data["id"],
                name=data.get("name", ""),
                sport_type=sport_type,
                start_date=datetime.fromisoformat(data["start_date"].replace("Z", "+00:00")),
                moving_time_sec=data.get("moving_time", 0),
                distance_m=data.get("distance", 0),
                average_speed_mps=data.get("average_speed"),
                max_speed_mps=data.get("max_speed"),
                average_heartrate=data.get("average_heartrate"),
                max_heartrate=data.get("max_heartrate"),
                total_elevation_gain_m=data.get("total_elevation_gain"),
                device_name=data.get("device_name"),
                has_heartrate=data.get("has_heartrate", False),
            )
        except KeyError as e:
            raise ValidationError(
                f"Strava activity is missing required field {e.args[0]!r}",
                field=e.args[0],
            ) from e


def strava_activity_to_training(
    activity: StravaActivity,
    heart_rate_zones: Optional[HeartRateZones] = None,
    summary: Optional[str] = None,
    device: Optional[str] = None,
    battery_percent_usage: Optional[float] = None,
    effort: Optional[int] = None,
) -> Training:
    """
    Map a Strava activity onto a Training.

    Distances go from metres to kilometres, speeds from m/s to km/h and
    the moving time is rendered as ``HH:MM:SS``. Zones, summary, device,
    battery usage and effort are supplied by the user and not part of
    the Strava payload; the device falls back to Strava's device name.
    """
    training = Training(
        id=str(activity.id),
        name=activity.name,
        strava_activity_id=activity.id,
        date=activity.start_date.date(),
        distance_km=round(meters_to_kilometers(activity.distance_m), 2),
        elevation_gain_m=activity.total_elevation_gain_m or 0.0,
        moving_time=seconds_to_time_string(activity.moving_time_sec),
        avg_speed_kmh=_round_speed(mps_to_kmh(activity.average_speed_mps)),
        max_speed_kmh=_round_speed(mps_to_kmh(activity.max_speed_mps)),
        avg_heart_rate_bpm=activity.average_heartrate,
        max_heart_rate_bpm=activity.max_heartrate,
        heart_rate_zones=heart_rate_zones,
        summary=summary,
        device=device or activity.device_name,
        battery_percent_usage=battery_percent_usage,
        effort=effort,
    )
    logger.debug(f"Mapped Strava activity {activity.id} to training on {training.date}")
    return training


def _round_speed(value: Optional[float]) -> Optional[float]:
    return round(value, 2) if value is not None else None
