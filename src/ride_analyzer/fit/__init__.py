"""FIT file decoding and track processing."""

from .laps import calculate_lap_stats, generate_laps
from .parser import get_fit_file_info, parse_fit_file, validate_fit_file

__all__ = [
    "calculate_lap_stats",
    "generate_laps",
    "get_fit_file_info",
    "parse_fit_file",
    "validate_fit_file",
]
