"""
Training metrics API routes.

Every endpoint is stateless: the training collection travels in the
request body and the computed metrics are returned directly.
"""

import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from ..deps import get_metrics_config
from ...config import MetricsConfig
from ...exceptions import ValidationError
from ...filters import (
    filter_trainings_with_fit_file,
    filter_trainings_with_heart_rate_data,
    filter_trainings_with_speed_data,
    get_only_past_trainings,
    get_trainings_between_dates,
)
from ...metrics import (
    METRIC_VALUE_FUNCTIONS,
    MetricType,
    TrendProgress,
    calculate_training_load,
    calculate_trend,
    format_trend,
    get_distance_metrics_over_time,
    get_elevation_metrics_over_time,
    get_elevation_per_km_metrics_over_time,
    get_heart_rate_metrics_over_time,
    get_intensity_metrics_over_time,
    get_speed_metrics_over_time,
    get_trend_message,
    get_trend_progress,
    is_improvement,
    summarize,
)
from ...models.training import (
    DistancePoint,
    ElevationPerKmPoint,
    ElevationPoint,
    HeartRateMetricsPoint,
    MaxValues,
    SpeedPoint,
    Training,
    TrainingLoadResult,
    TrainingSummary,
    to_camel,
)


logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Pydantic models for API
# ============================================================================

class TrainingsRequest(BaseModel):
    """A collection of trainings to aggregate."""
    trainings: List[Training] = Field(..., description="Trainings, in any order")


class TrainingLoadRequest(BaseModel):
    """A single training scored against explicit maxima."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    training: Training
    max_values: MaxValues


class TrendRequest(BaseModel):
    """Recent-vs-older comparison of one metric."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    trainings: List[Training]
    metric: MetricType = Field(..., description="Metric to compare")
    recent_months: int = Field(3, ge=1, le=24, description="Length of the recent period")
    older_months: int = Field(3, ge=1, le=24, description="Length of the comparison period")
    now: Optional[datetime] = Field(None, description="Reference moment, defaults to now")


class TrendResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    metric: MetricType
    trend: float = Field(..., description="Change in percent")
    formatted: str
    progress: TrendProgress
    is_improvement: bool
    message: str


class FilterRequest(BaseModel):
    """Trainings plus the filters to apply; filters combine with AND."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    trainings: List[Training]
    start_date: Optional[date] = Field(None, description="Exclusive lower bound")
    end_date: Optional[date] = Field(None, description="Exclusive upper bound")
    past_only: bool = Field(False, description="Only trainings before the anchor date")
    anchor_date: Optional[date] = Field(None, description="Upper bound for past_only, defaults to now")
    with_fit_file: bool = False
    with_heart_rate: bool = False
    with_speed: bool = False


# ============================================================================
# Routes
# ============================================================================

@router.post("/summary", response_model=TrainingSummary)
async def get_summary(request: TrainingsRequest):
    """Totals, averages and bests over the collection."""
    return summarize(request.trainings)


@router.post("/heart-rate", response_model=List[HeartRateMetricsPoint])
async def get_heart_rate_metrics(
    request: TrainingsRequest,
    precise: bool = Query(default=False, description="Keep the seconds of zone durations"),
):
    """
    Average heart rate and minutes in each zone, per training.

    Trainings without heart rate zones are omitted. Zone durations are
    whole minutes unless ``precise`` is set.
    """
    return get_heart_rate_metrics_over_time(request.trainings, truncate=not precise)


@router.post("/elevation-per-km", response_model=List[ElevationPerKmPoint])
async def get_elevation_per_km_metrics(request: TrainingsRequest):
    return get_elevation_per_km_metrics_over_time(request.trainings)


@router.post("/elevation", response_model=List[ElevationPoint])
async def get_elevation_metrics(request: TrainingsRequest):
    return get_elevation_metrics_over_time(request.trainings)


@router.post("/distance", response_model=List[DistancePoint])
async def get_distance_metrics(request: TrainingsRequest):
    return get_distance_metrics_over_time(request.trainings)


@router.post("/speed", response_model=List[SpeedPoint])
async def get_speed_metrics(request: TrainingsRequest):
    return get_speed_metrics_over_time(request.trainings)


@router.post("/intensity", response_model=List[TrainingLoadResult])
async def get_intensity_metrics(
    request: TrainingsRequest,
    config: MetricsConfig = Depends(get_metrics_config),
):
    """Composite intensity of every training, against the collection maxima."""
    return get_intensity_metrics_over_time(request.trainings, config)


@router.post("/training-load", response_model=TrainingLoadResult)
async def get_training_load(
    request: TrainingLoadRequest,
    config: MetricsConfig = Depends(get_metrics_config),
):
    """
    Composite intensity of one training against caller-supplied maxima.

    Responds 422 INVALID_NORMALIZATION_REFERENCE when a maximum that is
    needed is zero or negative.
    """
    return calculate_training_load(request.training, request.max_values, config)


@router.post("/trend", response_model=TrendResponse)
async def get_trend(request: TrendRequest):
    """Percentage change of a metric between the recent and the older period."""
    trend = calculate_trend(
        request.trainings,
        METRIC_VALUE_FUNCTIONS[request.metric],
        recent_months=request.recent_months,
        older_months=request.older_months,
        now=request.now,
    )
    return TrendResponse(
        metric=request.metric,
        trend=round(trend, 2),
        formatted=format_trend(trend),
        progress=get_trend_progress(trend, request.metric),
        is_improvement=is_improvement(trend, request.metric),
        message=get_trend_message(trend, request.metric),
    )


@router.post("/filter", response_model=List[Training])
async def filter_trainings(
    request: FilterRequest,
    config: MetricsConfig = Depends(get_metrics_config),
):
    """Select trainings by date range, recency and recorded data."""
    if (request.start_date is None) != (request.end_date is None):
        raise ValidationError(
            "start_date and end_date must be given together",
            field="start_date" if request.start_date is None else "end_date",
        )

    trainings = list(request.trainings)
    if request.start_date is not None:
        trainings = get_trainings_between_dates(trainings, request.start_date, request.end_date)
    if request.past_only:
        trainings = get_only_past_trainings(
            trainings,
            anchor_date=request.anchor_date,
            epoch=config.past_trainings_epoch,
        )

    predicates = []
    if request.with_fit_file:
        predicates.append(filter_trainings_with_fit_file())
    if request.with_heart_rate:
        predicates.append(filter_trainings_with_heart_rate_data())
    if request.with_speed:
        predicates.append(filter_trainings_with_speed_data())

    selected = [t for t in trainings if all(predicate(t) for predicate in predicates)]
    logger.debug(f"Filter kept {len(selected)} of {len(request.trainings)} trainings")
    return selected
