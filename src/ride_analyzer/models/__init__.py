"""Data models for the Ride Analyzer."""

from .training import (
    DistancePoint,
    ElevationPerKmPoint,
    ElevationPoint,
    HeartRateMetricsPoint,
    HeartRateZones,
    MaxValues,
    SpeedPoint,
    Training,
    TrainingLoadResult,
    TrainingSummary,
    ZONE_NAMES,
)
from .fit import (
    FitActivity,
    FitFileInfo,
    FitLap,
    FitTrackpoint,
    ParsedFitFile,
)

__all__ = [
    # Trainings
    "Training",
    "HeartRateZones",
    "MaxValues",
    "ZONE_NAMES",
    # Results
    "TrainingLoadResult",
    "TrainingSummary",
    "HeartRateMetricsPoint",
    "ElevationPerKmPoint",
    "ElevationPoint",
    "DistancePoint",
    "SpeedPoint",
    # FIT
    "FitActivity",
    "FitFileInfo",
    "FitLap",
    "FitTrackpoint",
    "ParsedFitFile",
]
