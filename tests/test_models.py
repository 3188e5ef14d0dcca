"""Tests for the training data models."""

import math
from datetime import date

import pytest
from pydantic import ValidationError

from ride_analyzer.models import (
    HeartRateMetricsPoint,
    HeartRateZones,
    MaxValues,
    Training,
    TrainingLoadResult,
)


class TestTraining:
    """Tests for Training validation."""

    def test_minimal_training(self):
        training = Training(date="2024-05-01", distance_km=42.5)

        assert training.date == date(2024, 5, 1)
        assert training.elevation_gain_m == 0.0
        assert training.moving_time == "0:00:00"
        assert training.avg_heart_rate_bpm is None
        assert training.heart_rate_zones is None

    def test_full_timestamp_becomes_date(self):
        training = Training(date="2024-05-01T07:30:00Z", distance_km=10)
        assert training.date == date(2024, 5, 1)

    def test_complete_zones(self, sample_zones):
        training = Training(date="2024-05-01", distance_km=10, heart_rate_zones=sample_zones)
        assert isinstance(training.heart_rate_zones, HeartRateZones)
        assert training.heart_rate_zones.zone_2 == "1:05:59"

    def test_partial_zones_are_treated_as_absent(self, sample_zones):
        del sample_zones["zone_5"]
        training = Training(date="2024-05-01", distance_km=10, heart_rate_zones=sample_zones)
        assert training.heart_rate_zones is None

    def test_invalid_zone_duration(self, sample_zones):
        sample_zones["zone_3"] = "not a time"
        with pytest.raises(ValidationError):
            Training(date="2024-05-01", distance_km=10, heart_rate_zones=sample_zones)

    def test_invalid_moving_time(self):
        with pytest.raises(ValidationError):
            Training(date="2024-05-01", distance_km=10, moving_time="1:75:00")

    def test_negative_distance(self):
        with pytest.raises(ValidationError):
            Training(date="2024-05-01", distance_km=-1)

    def test_effort_range(self):
        assert Training(date="2024-05-01", distance_km=10, effort=7).effort == 7
        with pytest.raises(ValidationError):
            Training(date="2024-05-01", distance_km=10, effort=11)

    def test_battery_range(self):
        with pytest.raises(ValidationError):
            Training(date="2024-05-01", distance_km=10, battery_percent_usage=101)

    def test_zero_heart_rate_is_kept(self):
        training = Training(date="2024-05-01", distance_km=10, avg_heart_rate_bpm=0)
        assert training.avg_heart_rate_bpm == 0

    def test_negative_heart_rate_rejected(self):
        with pytest.raises(ValidationError):
            Training(date="2024-05-01", distance_km=10, avg_heart_rate_bpm=-1)


class TestSerialization:
    """Tests for the camelCase wire format of result models."""

    def test_max_values_accepts_both_spellings(self):
        by_alias = MaxValues(maxDistance=20, maxSpeed=40, maxHR=180, maxElevation=200)
        by_name = MaxValues(max_distance=20, max_speed=40, max_hr=180, max_elevation=200)
        assert by_alias == by_name

    @pytest.mark.parametrize("maximum", [math.inf, math.nan])
    def test_non_finite_max_values_rejected(self, maximum):
        with pytest.raises(ValidationError):
            MaxValues(max_distance=maximum, max_speed=40, max_hr=180, max_elevation=200)

    def test_max_values_dump(self):
        values = MaxValues(max_distance=20, max_speed=40, max_hr=180, max_elevation=200)
        assert values.model_dump(by_alias=True) == {
            "maxDistance": 20,
            "maxSpeed": 40,
            "maxHR": 180,
            "maxElevation": 200,
        }

    def test_training_load_result_dump(self):
        result = TrainingLoadResult(
            date=date(2024, 5, 1),
            intensity=57,
            distance_contribution=15,
            speed_contribution=15,
            heart_rate_contribution=17,
            elevation_contribution=10,
        )
        dumped = result.model_dump(by_alias=True)
        assert dumped["heartRateContribution"] == 17
        assert dumped["intensity"] == 57

    def test_heart_rate_point_keeps_zone_keys(self):
        point = HeartRateMetricsPoint(
            date=date(2024, 5, 1),
            avg_heart_rate=140,
            zone_1=10, zone_2=65, zone_3=0, zone_4=0, zone_5=2,
        )
        dumped = point.model_dump(by_alias=True)
        assert dumped["avgHeartRate"] == 140
        assert dumped["zone_1"] == 10
        assert "zone1" not in dumped
