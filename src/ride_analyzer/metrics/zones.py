"""Heart rate zone classification and time-in-zone calculations."""

from typing import Dict, Iterable, List, Optional, Tuple

from ..config import ZoneBands
from ..exceptions import TrainingDataError
from ..models.fit import FitTrackpoint
from ..models.training import ZONE_NAMES, HeartRateZones
from ..utils.time import seconds_to_time_string, time_string_to_minutes


ZONE_LABELS = {
    1: "Recovery",
    2: "Aerobic",
    3: "Tempo",
    4: "Threshold",
    5: "VO2max",
}


def get_zone_ranges(bands: ZoneBands) -> List[Tuple[int, Optional[float], Optional[float], str]]:
    """Get all zones as list of (zone_num, min_hr, max_hr, name); open ends are None."""
    return [
        (1, None, bands.zone_1_below, ZONE_LABELS[1]),
        (2, bands.zone_1_below, bands.zone_2_max, ZONE_LABELS[2]),
        (3, bands.zone_2_max, bands.zone_3_max, ZONE_LABELS[3]),
        (4, bands.zone_3_max, bands.zone_4_max, ZONE_LABELS[4]),
        (5, bands.zone_4_max, None, ZONE_LABELS[5]),
    ]


def get_zone_for_heart_rate(hr: float, bands: Optional[ZoneBands] = None) -> int:
    """
    Return zone number (1-5) for a given heart rate.

    With the default bands: below 113 is zone 1, 113-132 zone 2,
    133-151 zone 3, 152-170 zone 4 and above 170 zone 5.
    """
    bands = bands or ZoneBands()
    if hr < bands.zone_1_below:
        return 1
    elif hr <= bands.zone_2_max:
        return 2
    elif hr <= bands.zone_3_max:
        return 3
    elif hr <= bands.zone_4_max:
        return 4
    else:
        return 5


def calculate_zone_seconds(
    trackpoints: Iterable[FitTrackpoint],
    bands: Optional[ZoneBands] = None,
) -> Dict[str, int]:
    """
    Seconds spent in each zone over a recorded track.

    Only samples with a heart rate are used. Each interval between two
    consecutive samples is attributed to the zone of the earlier one.

    Args:
        trackpoints: Track samples in any order
        bands: Zone boundaries

    Returns:
        Dictionary keyed zone_1..zone_5 with whole seconds
    """
    samples = sorted(
        (tp for tp in trackpoints if tp.heart_rate_bpm is not None),
        key=lambda tp: tp.timestamp,
    )
    zone_seconds = {name: 0 for name in ZONE_NAMES}

    for current, following in zip(samples, samples[1:]):
        elapsed = int((following.timestamp - current.timestamp).total_seconds())
        zone = get_zone_for_heart_rate(current.heart_rate_bpm, bands)
        zone_seconds[f"zone_{zone}"] += elapsed

    return zone_seconds


def suggest_heart_rate_zones(
    trackpoints: Iterable[FitTrackpoint],
    bands: Optional[ZoneBands] = None,
) -> HeartRateZones:
    """
    Suggest time-in-zone durations for a training from its track.

    Raises:
        TrainingDataError: If no trackpoint carries a heart rate
    """
    trackpoints = list(trackpoints)
    if not any(tp.heart_rate_bpm is not None for tp in trackpoints):
        raise TrainingDataError(
            "No heart rate data found in trackpoints",
            details={"trackpoints_count": len(trackpoints)},
        )

    zone_seconds = calculate_zone_seconds(trackpoints, bands)
    return HeartRateZones(
        **{name: seconds_to_time_string(seconds) for name, seconds in zone_seconds.items()}
    )


def calculate_zone_distribution(zones: HeartRateZones) -> Dict[str, float]:
    """
    Share of time spent in each zone.

    Args:
        zones: Time in zones of a training

    Returns:
        Dictionary with zone percentages and total minutes
    """
    minutes = {name: time_string_to_minutes(getattr(zones, name)) for name in ZONE_NAMES}
    total = sum(minutes.values())

    result = {
        f"{name}_pct": round(value / total * 100, 1) if total else 0.0
        for name, value in minutes.items()
    }
    result["total_minutes"] = round(total, 2)
    return result
