"""Data models for FIT track data: trackpoints, laps and parsed activities."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass
class FitTrackpoint:
    """A single recorded sample (typically one per second)."""
    timestamp: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    altitude_m: Optional[float] = None
    distance_m: Optional[float] = None
    speed_ms: Optional[float] = None
    heart_rate_bpm: Optional[int] = None
    cadence_rpm: Optional[int] = None
    power_watts: Optional[int] = None
    temperature_c: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "latitude": self.latitude,
            "longitude": self.longitude,
            "altitude_m": self.altitude_m,
            "distance_m": self.distance_m,
            "speed_ms": self.speed_ms,
            "heart_rate_bpm": self.heart_rate_bpm,
            "cadence_rpm": self.cadence_rpm,
            "power_watts": self.power_watts,
            "temperature_c": self.temperature_c,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FitTrackpoint":
        """Create from dictionary."""
        return cls(
            timestamp=_parse_timestamp(data["timestamp"]),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            altitude_m=data.get("altitude_m"),
            distance_m=data.get("distance_m"),
            speed_ms=data.get("speed_ms"),
            heart_rate_bpm=data.get("heart_rate_bpm"),
            cadence_rpm=data.get("cadence_rpm"),
            power_watts=data.get("power_watts"),
            temperature_c=data.get("temperature_c"),
        )


@dataclass
class FitLap:
    """
    Summary of one lap.

    Laps come either from the device (FIT lap messages) or are
    generated from trackpoints at a fixed distance.
    """
    lap_number: int
    start_time: datetime
    end_time: datetime
    distance_m: float
    moving_time_s: float
    elapsed_time_s: float
    avg_speed_ms: Optional[float] = None
    max_speed_ms: Optional[float] = None
    avg_heart_rate_bpm: Optional[int] = None
    max_heart_rate_bpm: Optional[int] = None
    avg_cadence_rpm: Optional[int] = None
    max_cadence_rpm: Optional[int] = None
    total_elevation_gain_m: Optional[float] = None
    start_latitude: Optional[float] = None
    start_longitude: Optional[float] = None
    end_latitude: Optional[float] = None
    end_longitude: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "lap_number": self.lap_number,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "distance_m": self.distance_m,
            "moving_time_s": self.moving_time_s,
            "elapsed_time_s": self.elapsed_time_s,
            "avg_speed_ms": self.avg_speed_ms,
            "max_speed_ms": self.max_speed_ms,
            "avg_heart_rate_bpm": self.avg_heart_rate_bpm,
            "max_heart_rate_bpm": self.max_heart_rate_bpm,
            "avg_cadence_rpm": self.avg_cadence_rpm,
            "max_cadence_rpm": self.max_cadence_rpm,
            "total_elevation_gain_m": self.total_elevation_gain_m,
            "start_latitude": self.start_latitude,
            "start_longitude": self.start_longitude,
            "end_latitude": self.end_latitude,
            "end_longitude": self.end_longitude,
        }


@dataclass
class FitActivity:
    """Session summary plus the full track of an activity."""
    start_time: datetime
    total_time_s: float
    distance_m: float
    avg_speed_ms: Optional[float] = None
    max_speed_ms: Optional[float] = None
    avg_heart_rate_bpm: Optional[int] = None
    max_heart_rate_bpm: Optional[int] = None
    total_elevation_gain_m: Optional[float] = None
    trackpoints: List[FitTrackpoint] = field(default_factory=list)
    laps: List[FitLap] = field(default_factory=list)

    def to_dict(self, include_trackpoints: bool = True) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "start_time": self.start_time.isoformat(),
            "total_time_s": self.total_time_s,
            "distance_m": self.distance_m,
            "avg_speed_ms": self.avg_speed_ms,
            "max_speed_ms": self.max_speed_ms,
            "avg_heart_rate_bpm": self.avg_heart_rate_bpm,
            "max_heart_rate_bpm": self.max_heart_rate_bpm,
            "total_elevation_gain_m": self.total_elevation_gain_m,
            "trackpoints_count": len(self.trackpoints),
            "laps": [lap.to_dict() for lap in self.laps],
        }
        if include_trackpoints:
            result["trackpoints"] = [tp.to_dict() for tp in self.trackpoints]
        return result


@dataclass
class ParsedFitFile:
    """Result of decoding a FIT activity file."""
    activity: FitActivity
    sport: str
    timestamp: datetime
    device: Optional[str] = None

    def to_dict(self, include_trackpoints: bool = True) -> dict:
        return {
            "sport": self.sport,
            "device": self.device,
            "timestamp": self.timestamp.isoformat(),
            "activity": self.activity.to_dict(include_trackpoints=include_trackpoints),
        }


@dataclass
class FitFileInfo:
    """Header fields of a FIT file."""
    header_size: int
    protocol_version: int
    profile_version: int
    data_size: int
    file_size: int

    def to_dict(self) -> dict:
        return {
            "header_size": self.header_size,
            "protocol_version": self.protocol_version,
            "profile_version": self.profile_version,
            "data_size": self.data_size,
            "file_size": self.file_size,
        }
