"""Shared conversion helpers."""

from .time import (
    format_minutes,
    minutes_to_time_string,
    parse_time_string,
    seconds_to_time_string,
    time_string_to_minutes,
    time_string_to_object,
    time_to_minutes,
)
from .units import (
    kmh_to_mps,
    meters_to_kilometers,
    mps_to_kmh,
    semicircles_to_degrees,
)

__all__ = [
    "format_minutes",
    "minutes_to_time_string",
    "parse_time_string",
    "seconds_to_time_string",
    "time_string_to_minutes",
    "time_string_to_object",
    "time_to_minutes",
    "kmh_to_mps",
    "meters_to_kilometers",
    "mps_to_kmh",
    "semicircles_to_degrees",
]
