"""Conversions between duration strings ("H:MM:SS") and minute counts."""

import re
from typing import Dict, Tuple, Union


# Shorter forms ("MM:SS", "SS") are accepted; hours are not capped because
# summed durations can exceed a day.
DURATION_PATTERN = re.compile(r"^(?:(?:(\d+):)?([0-5]?\d):)?([0-5]?\d)$")


def parse_time_string(value: str) -> Tuple[int, int, int]:
    """
    Split a duration string into (hours, minutes, seconds).

    Raises:
        ValueError: If the string is not a valid duration
    """
    match = DURATION_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid duration {value!r}, expected H:MM:SS")
    hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    return hours, minutes, seconds


def time_string_to_minutes(value: str, truncate: bool = False) -> Union[float, int]:
    """
    Convert a duration string to minutes.

    Args:
        value: Duration such as "1:30:45"
        truncate: Drop the seconds and return whole minutes

    Returns:
        90.75 for "1:30:45", or 90 when truncating
    """
    hours, minutes, seconds = parse_time_string(value)
    if truncate:
        return hours * 60 + minutes
    return hours * 60 + minutes + seconds / 60


def time_to_minutes(value: str) -> int:
    """Whole minutes in a duration string; seconds are discarded."""
    return time_string_to_minutes(value, truncate=True)


def format_minutes(minutes: int) -> str:
    """Render minutes as "2h 5m", or "45m" below one hour."""
    hours, remaining = divmod(minutes, 60)
    if hours > 0:
        return f"{int(hours)}h {remaining}m"
    return f"{remaining}m"


def minutes_to_time_string(minutes: float) -> str:
    """Render a (fractional) minute count as "H:MM:SS"."""
    total_seconds = round(minutes * 60)
    hours, rest = divmod(total_seconds, 3600)
    mins, secs = divmod(rest, 60)
    return f"{hours}:{mins:02d}:{secs:02d}"


def seconds_to_time_string(seconds: float) -> str:
    """Render seconds as zero-padded "HH:MM:SS" (fractions are dropped)."""
    whole = int(seconds)
    hours, rest = divmod(whole, 3600)
    mins, secs = divmod(rest, 60)
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def time_string_to_object(value: str) -> Dict[str, Union[int, str]]:
    """
    Break a duration string into its parts plus a display label.

    "01:23:25" -> {"hours": 1, "minutes": 23, "seconds": 25, "label": "1h 23min 25s"}
    """
    hours, minutes, seconds = parse_time_string(value)
    return {
        "hours": hours,
        "minutes": minutes,
        "seconds": seconds,
        "label": f"{hours}h {minutes}min {seconds}s",
    }
