"""Tests for the composite training load."""

import json
import math
from datetime import date

import pytest

from ride_analyzer.config import LoadWeights, MetricsConfig
from ride_analyzer.exceptions import InvalidNormalizationReferenceError
from ride_analyzer.metrics import (
    calculate_training_load,
    derive_max_values,
    get_intensity_metrics_over_time,
    heart_rate_score,
    normalize,
    round_half_up,
)
from ride_analyzer.models import MaxValues


@pytest.fixture
def max_values():
    return MaxValues(max_distance=20, max_speed=40, max_hr=180, max_elevation=200)


class TestNormalize:
    """Tests for component normalization."""

    def test_ratio(self):
        assert normalize(10, 20, "max_distance") == 0.5

    def test_capped_at_one(self):
        assert normalize(40, 20, "max_distance") == 1.0

    @pytest.mark.parametrize("maximum", [0, -5, math.inf, math.nan])
    def test_invalid_reference(self, maximum):
        with pytest.raises(InvalidNormalizationReferenceError):
            normalize(10, maximum, "max_distance")

    def test_non_finite_reference_details_are_json_safe(self):
        with pytest.raises(InvalidNormalizationReferenceError) as exc_info:
            normalize(10, math.nan, "max_distance")

        assert exc_info.value.details["value"] == "nan"
        json.dumps(exc_info.value.to_dict(), allow_nan=False)


class TestHeartRateScore:
    """Tests for the heart rate default policy."""

    def test_absent_heart_rate_is_neutral(self):
        assert heart_rate_score(None, 180) == 0.5

    def test_absent_heart_rate_ignores_reference(self):
        assert heart_rate_score(None, 0) == 0.5

    def test_custom_neutral(self):
        assert heart_rate_score(None, 180, neutral=0.25) == 0.25

    def test_recorded_zero_is_not_neutral(self):
        assert heart_rate_score(0, 180) == 0.0

    def test_recorded_heart_rate(self):
        assert heart_rate_score(90, 180) == 0.5


class TestCalculateTrainingLoad:
    """Tests for the single-training load."""

    def test_reference_example(self, make_training, max_values):
        """0.5*0.3 + 0.5*0.3 + (150/180)*0.2 + 0.5*0.2 = 0.5667."""
        training = make_training(
            distance_km=10, avg_speed_kmh=20, avg_heart_rate_bpm=150, elevation_gain_m=100
        )

        result = calculate_training_load(training, max_values)

        assert result.intensity == 57
        assert result.distance_contribution == 15
        assert result.speed_contribution == 15
        assert result.heart_rate_contribution == 17
        assert result.elevation_contribution == 10
        assert result.date == training.date

    def test_absent_heart_rate_uses_neutral_score(self, make_training, max_values):
        training = make_training(
            distance_km=10, avg_speed_kmh=20, avg_heart_rate_bpm=None, elevation_gain_m=100
        )

        result = calculate_training_load(training, max_values)

        assert result.heart_rate_contribution == 10
        assert result.intensity == 50

    def test_absent_heart_rate_does_not_check_max_hr(self, make_training):
        training = make_training(distance_km=10, avg_speed_kmh=20, avg_heart_rate_bpm=None, elevation_gain_m=100)
        values = MaxValues(max_distance=20, max_speed=40, max_hr=0, max_elevation=200)

        assert calculate_training_load(training, values).intensity == 50

    def test_zero_max_hr_with_heart_rate(self, make_training):
        training = make_training(avg_heart_rate_bpm=150)
        values = MaxValues(max_distance=20, max_speed=40, max_hr=0, max_elevation=200)

        with pytest.raises(InvalidNormalizationReferenceError) as exc_info:
            calculate_training_load(training, values)
        assert exc_info.value.details["field"] == "max_hr"

    def test_zero_max_distance(self, make_training):
        values = MaxValues(max_distance=0, max_speed=40, max_hr=180, max_elevation=200)
        with pytest.raises(InvalidNormalizationReferenceError):
            calculate_training_load(make_training(), values)

    def test_absent_speed_scores_zero(self, make_training, max_values):
        training = make_training(
            distance_km=10, avg_speed_kmh=None, avg_heart_rate_bpm=150, elevation_gain_m=100
        )

        result = calculate_training_load(training, max_values)

        assert result.speed_contribution == 0
        assert result.intensity == 42

    def test_values_above_maxima_are_capped(self, make_training, max_values):
        training = make_training(
            distance_km=100, avg_speed_kmh=80, avg_heart_rate_bpm=200, elevation_gain_m=2000
        )

        result = calculate_training_load(training, max_values)

        assert result.intensity == 100
        assert result.distance_contribution == 30

    def test_custom_weights(self, make_training, max_values):
        config = MetricsConfig(weights=LoadWeights(distance=1.0, speed=0.0, heart_rate=0.0, elevation=0.0))
        training = make_training(distance_km=5)

        result = calculate_training_load(training, max_values, config)

        assert result.intensity == 25
        assert result.speed_contribution == 0


class TestIntensityOverTime:
    """Tests for scoring a whole collection."""

    def test_scores_against_collection_maxima(self, make_training):
        trainings = [
            make_training(date=date(2024, 1, 2), distance_km=20, avg_speed_kmh=30,
                          avg_heart_rate_bpm=160, elevation_gain_m=400),
            make_training(date=date(2024, 1, 1), distance_km=10, avg_speed_kmh=15,
                          avg_heart_rate_bpm=None, elevation_gain_m=100),
        ]

        results = get_intensity_metrics_over_time(trainings)

        assert [r.date for r in results] == [date(2024, 1, 1), date(2024, 1, 2)]
        assert results[0].intensity == 45
        assert results[1].intensity == 100

    def test_empty_collection(self):
        assert get_intensity_metrics_over_time([]) == []

    def test_all_zero_collection_does_not_fail(self, make_training):
        trainings = [
            make_training(distance_km=0, avg_speed_kmh=0, avg_heart_rate_bpm=None, elevation_gain_m=0),
        ]

        results = get_intensity_metrics_over_time(trainings)

        assert results[0].intensity == 10
        assert results[0].heart_rate_contribution == 10

    def test_input_not_mutated(self, make_training):
        trainings = [make_training(date=date(2024, 1, 2)), make_training(date=date(2024, 1, 1))]
        get_intensity_metrics_over_time(trainings)
        assert [t.date for t in trainings] == [date(2024, 1, 2), date(2024, 1, 1)]


class TestDeriveMaxValues:
    """Tests for collection maxima."""

    def test_componentwise_maxima(self, make_training):
        trainings = [
            make_training(distance_km=50, avg_speed_kmh=25, avg_heart_rate_bpm=None, elevation_gain_m=800),
            make_training(distance_km=30, avg_speed_kmh=32, avg_heart_rate_bpm=150, elevation_gain_m=100),
        ]

        values = derive_max_values(trainings)

        assert values.max_distance == 50
        assert values.max_speed == 32
        assert values.max_hr == 150
        assert values.max_elevation == 800

    def test_floor(self):
        values = derive_max_values([], floor=0.01)
        assert values.max_distance == 0.01
        assert values.max_hr == 0.01


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(1.25, 1) == 1.3
