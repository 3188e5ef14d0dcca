"""
FIT file API routes.

Provides endpoints for:
- Decoding uploaded FIT activity files
- Generating fixed-distance laps from a track
- Suggesting time in heart rate zones from a track
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from pydantic import BaseModel, Field

from ..deps import get_default_lap_distance_km, get_metrics_config
from ...config import MetricsConfig
from ...exceptions import FITDecodingError
from ...fit import generate_laps, get_fit_file_info, parse_fit_file, validate_fit_file
from ...metrics import calculate_zone_distribution, suggest_heart_rate_zones
from ...models.fit import FitTrackpoint
from ...models.training import HeartRateZones


logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Pydantic models for API
# ============================================================================

class TrackpointInput(BaseModel):
    """Input model for a recorded track sample."""
    timestamp: datetime = Field(..., description="Sample time")
    latitude: Optional[float] = Field(None, description="Latitude in degrees")
    longitude: Optional[float] = Field(None, description="Longitude in degrees")
    altitude_m: Optional[float] = Field(None, description="Altitude in m")
    distance_m: Optional[float] = Field(None, ge=0, description="Cumulative distance in m")
    speed_ms: Optional[float] = Field(None, ge=0, description="Speed in m/s")
    heart_rate_bpm: Optional[int] = Field(None, ge=0, description="Heart rate in bpm")
    cadence_rpm: Optional[int] = Field(None, ge=0, description="Cadence in rpm")
    power_watts: Optional[int] = Field(None, ge=0, description="Power in W")
    temperature_c: Optional[float] = Field(None, description="Temperature in C")

    def to_trackpoint(self) -> FitTrackpoint:
        """Convert to FitTrackpoint dataclass."""
        return FitTrackpoint(**self.model_dump())


class LapsRequest(BaseModel):
    trackpoints: List[TrackpointInput]
    lap_distance_km: Optional[float] = Field(
        None,
        description="Lap length in km (0.1-50); defaults to the configured distance",
    )


class ZonesRequest(BaseModel):
    trackpoints: List[TrackpointInput]


class ZonesResponse(BaseModel):
    heart_rate_zones: HeartRateZones
    distribution: dict


# ============================================================================
# Routes
# ============================================================================

@router.post("/parse")
async def parse_fit(
    file: UploadFile = File(..., description="FIT activity file"),
    include_trackpoints: bool = Query(default=True, description="Include the full track"),
):
    """
    Decode an uploaded FIT activity file.

    Returns the header information, the session summary, the device laps
    and (optionally) every trackpoint.
    """
    data = await file.read()
    logger.info(f"Received FIT upload {file.filename} ({len(data)} bytes)")

    if not validate_fit_file(data):
        raise FITDecodingError(
            "Invalid FIT file format",
            details={"filename": file.filename},
        )

    parsed = parse_fit_file(data)
    result = parsed.to_dict(include_trackpoints=include_trackpoints)
    result["file_info"] = get_fit_file_info(data).to_dict()
    return result


@router.post("/laps")
async def get_laps(
    request: LapsRequest,
    default_lap_distance_km: float = Depends(get_default_lap_distance_km),
):
    """Split a track into laps of a fixed distance."""
    lap_distance_km = request.lap_distance_km
    if lap_distance_km is None:
        lap_distance_km = default_lap_distance_km
    laps = generate_laps(
        [tp.to_trackpoint() for tp in request.trackpoints],
        lap_distance_km,
    )
    return {
        "lap_distance_km": lap_distance_km,
        "count": len(laps),
        "laps": [lap.to_dict() for lap in laps],
    }


@router.post("/zones", response_model=ZonesResponse)
async def get_zones(
    request: ZonesRequest,
    config: MetricsConfig = Depends(get_metrics_config),
):
    """Suggest time spent in each heart rate zone from a track."""
    zones = suggest_heart_rate_zones(
        [tp.to_trackpoint() for tp in request.trackpoints],
        config.zone_bands,
    )
    return ZonesResponse(
        heart_rate_zones=zones,
        distribution=calculate_zone_distribution(zones),
    )
