"""Auto-tagging API routes."""

import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_default_lap_distance_km
from .fit import TrackpointInput
from ...analysis import (
    AUTO_TAGGING_RULES,
    analysis_from_laps,
    analysis_from_training,
    evaluate_tags,
)
from ...exceptions import ValidationError
from ...fit import generate_laps
from ...models.training import Training


logger = logging.getLogger(__name__)

router = APIRouter()


class TagEvaluationRequest(BaseModel):
    """
    Activity to tag.

    With trackpoints the activity is summarized from generated laps and
    the training only fills in what the laps lack; without trackpoints
    the training alone is used.
    """
    activity_id: Optional[str] = Field(None, description="Identifier echoed in the response")
    training: Optional[Training] = None
    trackpoints: Optional[List[TrackpointInput]] = None
    lap_distance_km: Optional[float] = Field(None, description="Lap length used for trackpoints")


@router.get("/rules")
async def list_rules():
    """The default auto-tagging rules."""
    return {"rules": [rule.to_dict() for rule in AUTO_TAGGING_RULES]}


@router.post("/evaluate")
async def evaluate(
    request: TagEvaluationRequest,
    default_lap_distance_km: float = Depends(get_default_lap_distance_km),
):
    """Evaluate the default rules against one activity."""
    if request.training is None and not request.trackpoints:
        raise ValidationError("Either training or trackpoints must be provided", field="training")

    activity_id = request.activity_id or (request.training.id if request.training else None) or "activity"

    if request.trackpoints:
        lap_distance_km = request.lap_distance_km
        if lap_distance_km is None:
            lap_distance_km = default_lap_distance_km
        laps = generate_laps([tp.to_trackpoint() for tp in request.trackpoints], lap_distance_km)
        analysis = analysis_from_laps(
            activity_id,
            laps,
            trackpoints_count=len(request.trackpoints),
            fallback=request.training,
        )
    else:
        analysis = analysis_from_training(request.training, activity_id)

    tags = evaluate_tags(analysis)
    return {
        "activity_id": activity_id,
        "analysis": asdict(analysis),
        "tags": [rule.to_dict() for rule in tags],
    }
