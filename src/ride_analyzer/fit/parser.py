"""
FIT activity file decoding.

Decoding of the binary format is delegated to fitparse; this module
maps its record, lap and session messages onto our FIT models and
converts device units (semicircles) on the way.
"""

import io
import logging
import struct
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import fitparse

from ..exceptions import FITDecodingError
from ..models.fit import FitActivity, FitFileInfo, FitLap, FitTrackpoint, ParsedFitFile
from ..utils.units import semicircles_to_degrees


logger = logging.getLogger(__name__)

# FIT Protocol constants
FIT_HEADER_SIZES = (12, 14)
FIT_SIGNATURE = b".FIT"
FIT_HEADER_FORMAT = "<BBHI4s"

DEFAULT_SPORT = "cycling"


def validate_fit_file(data: bytes) -> bool:
    """Check that the buffer starts with a FIT file header."""
    if len(data) < min(FIT_HEADER_SIZES):
        return False
    header_size, _, _, _, signature = struct.unpack_from(FIT_HEADER_FORMAT, data, 0)
    if header_size not in FIT_HEADER_SIZES or len(data) < header_size:
        return False
    return signature == FIT_SIGNATURE


def get_fit_file_info(data: bytes) -> FitFileInfo:
    """
    Read the FIT header without decoding any messages.

    Raises:
        FITDecodingError: If the buffer is not a FIT file
    """
    if not validate_fit_file(data):
        raise FITDecodingError("Invalid FIT file format")

    header_size, protocol_version, profile_version, data_size, _ = struct.unpack_from(
        FIT_HEADER_FORMAT, data, 0
    )
    return FitFileInfo(
        header_size=header_size,
        protocol_version=protocol_version,
        profile_version=profile_version,
        data_size=data_size,
        file_size=len(data),
    )


def _first(values: Dict[str, Any], *names: str) -> Any:
    """First non-None value among several field names (e.g. enhanced_speed, speed)."""
    for name in names:
        value = values.get(name)
        if value is not None:
            return value
    return None


def _record_to_trackpoint(values: Dict[str, Any]) -> Optional[FitTrackpoint]:
    timestamp = values.get("timestamp")
    if not isinstance(timestamp, datetime):
        return None
    return FitTrackpoint(
        timestamp=timestamp,
        latitude=semicircles_to_degrees(values.get("position_lat")),
        longitude=semicircles_to_degrees(values.get("position_long")),
        altitude_m=_first(values, "enhanced_altitude", "altitude"),
        distance_m=values.get("distance"),
        speed_ms=_first(values, "enhanced_speed", "speed"),
        heart_rate_bpm=values.get("heart_rate"),
        cadence_rpm=values.get("cadence"),
        power_watts=values.get("power"),
        temperature_c=values.get("temperature"),
    )


def _lap_from_values(values: Dict[str, Any], lap_number: int) -> FitLap:
    start_time = values.get("start_time") or values.get("timestamp")
    moving_time = values.get("total_timer_time") or 0
    if values.get("start_time") and moving_time:
        end_time = values["start_time"] + timedelta(seconds=moving_time)
    else:
        end_time = values.get("timestamp") or start_time

    return FitLap(
        lap_number=lap_number,
        start_time=start_time,
        end_time=end_time,
        distance_m=values.get("total_distance") or 0,
        moving_time_s=moving_time,
        elapsed_time_s=values.get("total_elapsed_time") or moving_time,
        avg_speed_ms=_first(values, "enhanced_avg_speed", "avg_speed"),
        max_speed_ms=_first(values, "enhanced_max_speed", "max_speed"),
        avg_heart_rate_bpm=values.get("avg_heart_rate"),
        max_heart_rate_bpm=values.get("max_heart_rate"),
        avg_cadence_rpm=values.get("avg_cadence"),
        max_cadence_rpm=values.get("max_cadence"),
        total_elevation_gain_m=values.get("total_ascent"),
        start_latitude=semicircles_to_degrees(values.get("start_position_lat")),
        start_longitude=semicircles_to_degrees(values.get("start_position_long")),
        end_latitude=semicircles_to_degrees(values.get("end_position_lat")),
        end_longitude=semicircles_to_degrees(values.get("end_position_long")),
    )


def _device_name(values: Dict[str, Any]) -> Optional[str]:
    name = _first(values, "product_name", "garmin_product")
    return str(name) if name is not None else None


def parse_fit_file(data: bytes) -> ParsedFitFile:
    """
    Decode a FIT activity file.

    Args:
        data: Raw FIT file bytes

    Returns:
        ParsedFitFile with session summary, trackpoints and laps

    Raises:
        FITDecodingError: If the file cannot be decoded or holds no activity
    """
    trackpoints: List[FitTrackpoint] = []
    laps: List[FitLap] = []
    sessions: List[Dict[str, Any]] = []
    activity_values: Optional[Dict[str, Any]] = None
    device: Optional[str] = None

    try:
        fit_file = fitparse.FitFile(io.BytesIO(data))
        for message in fit_file.get_messages():
            values = message.get_values()
            if message.name == "record":
                trackpoint = _record_to_trackpoint(values)
                if trackpoint is not None:
                    trackpoints.append(trackpoint)
            elif message.name == "lap":
                laps.append(_lap_from_values(values, lap_number=len(laps) + 1))
            elif message.name == "session":
                sessions.append(values)
            elif message.name == "activity":
                activity_values = values
            elif message.name == "device_info" and device is None:
                device = _device_name(values)
    except fitparse.FitParseError as e:
        raise FITDecodingError(f"Error parsing FIT file: {e}") from e

    if activity_values is None and not sessions:
        raise FITDecodingError("No activity data found in FIT file")

    session = sessions[0] if sessions else {}
    start_time = (
        session.get("start_time")
        or (activity_values or {}).get("timestamp")
        or (trackpoints[0].timestamp if trackpoints else None)
    )
    if start_time is None:
        raise FITDecodingError("FIT file has no start time")

    activity = FitActivity(
        start_time=start_time,
        total_time_s=session.get("total_timer_time") or 0,
        distance_m=session.get("total_distance") or 0,
        avg_speed_ms=_first(session, "enhanced_avg_speed", "avg_speed"),
        max_speed_ms=_first(session, "enhanced_max_speed", "max_speed"),
        avg_heart_rate_bpm=session.get("avg_heart_rate"),
        max_heart_rate_bpm=session.get("max_heart_rate"),
        total_elevation_gain_m=session.get("total_ascent"),
        trackpoints=trackpoints,
        laps=laps,
    )

    logger.info(
        f"Parsed FIT file: {len(trackpoints)} trackpoints, {len(laps)} laps, "
        f"{activity.distance_m} m"
    )

    return ParsedFitFile(
        activity=activity,
        sport=str(session.get("sport") or DEFAULT_SPORT),
        timestamp=start_time,
        device=device,
    )
