"""Tests for trend analysis."""

from datetime import date, datetime, timezone

import pytest

from ride_analyzer.metrics import (
    METRIC_VALUE_FUNCTIONS,
    MetricType,
    TrendProgress,
    calculate_trend,
    format_trend,
    get_trend_message,
    get_trend_progress,
    is_improvement,
    is_positive_improvement,
)
from ride_analyzer.metrics.trend import subtract_months


NOW = datetime(2024, 6, 15)


def distance(training):
    return training.distance_km


@pytest.fixture
def trainings(make_training):
    return [
        make_training(date=date(2024, 5, 1), distance_km=50),
        make_training(date=date(2024, 3, 15), distance_km=30),
        make_training(date=date(2024, 1, 10), distance_km=20),
        make_training(date=date(2023, 12, 15), distance_km=20),
        make_training(date=date(2023, 12, 14), distance_km=1000),
    ]


class TestSubtractMonths:
    def test_simple(self):
        assert subtract_months(datetime(2024, 6, 15), 3) == datetime(2024, 3, 15)

    def test_across_year(self):
        assert subtract_months(datetime(2024, 1, 10), 1) == datetime(2023, 12, 10)

    def test_clamps_to_month_end(self):
        assert subtract_months(datetime(2024, 5, 31), 3) == datetime(2024, 2, 29)


class TestCalculateTrend:
    """Tests for the recent-vs-older comparison."""

    def test_percentage_change(self, trainings):
        # recent: 50, 30 -> 40; older: 20, 20 -> 20; 2023-12-14 is outside both windows
        assert calculate_trend(trainings, distance, now=NOW) == 100.0

    def test_negative_change(self, make_training):
        trainings = [
            make_training(date=date(2024, 5, 1), distance_km=30),
            make_training(date=date(2024, 2, 1), distance_km=40),
        ]
        assert calculate_trend(trainings, distance, now=NOW) == -25.0

    def test_no_older_data(self, make_training):
        trainings = [make_training(date=date(2024, 5, 1), distance_km=30)]
        assert calculate_trend(trainings, distance, now=NOW) == 100.0

    def test_no_data_in_either_window(self, make_training):
        trainings = [make_training(date=date(2020, 5, 1), distance_km=30)]
        assert calculate_trend(trainings, distance, now=NOW) == 0.0

    def test_empty(self):
        assert calculate_trend([], distance, now=NOW) == 0.0

    def test_timezone_aware_now(self, trainings):
        now = datetime(2024, 6, 15, tzinfo=timezone.utc)
        assert calculate_trend(trainings, distance, now=now) == 100.0

    def test_custom_windows(self, trainings):
        # recent: since 2024-05-15 -> nothing; older: 2024-04-15..2024-05-15 -> 50
        assert calculate_trend(trainings, distance, recent_months=1, older_months=1, now=NOW) == -100.0

    def test_custom_calculator(self, trainings):
        def count_difference(recent, older):
            return float(len(recent) * 10 + len(older))

        assert calculate_trend(trainings, distance, custom_calculator=count_difference, now=NOW) == 22.0

    def test_custom_calculator_receives_newest_first(self, trainings):
        seen = {}

        def capture(recent, older):
            seen["recent"] = [t.date for t in recent]
            return 0.0

        calculate_trend(trainings, distance, custom_calculator=capture, now=NOW)
        assert seen["recent"] == [date(2024, 5, 1), date(2024, 3, 15)]


class TestMetricValues:
    def test_time_per_km(self, make_training):
        value = METRIC_VALUE_FUNCTIONS[MetricType.TIME_PER_KM]
        assert value(make_training(distance_km=30, moving_time="1:00:00")) == 2.0
        assert value(make_training(distance_km=0, moving_time="1:00:00")) == 0.0

    def test_missing_heart_rate_counts_as_zero(self, make_training):
        value = METRIC_VALUE_FUNCTIONS[MetricType.HEART_RATE]
        assert value(make_training(avg_heart_rate_bpm=None)) == 0

    def test_every_metric_has_a_value_function(self):
        assert set(METRIC_VALUE_FUNCTIONS) == set(MetricType)


class TestTrendClassification:
    """Tests for formatting and classifying trends."""

    def test_format_trend(self):
        assert format_trend(3.44) == "+3.4%"
        assert format_trend(-12) == "-12.0%"
        assert format_trend(0) == "+0.0%"

    def test_positive_improvement_metrics(self):
        assert is_positive_improvement(MetricType.DISTANCE) is True
        assert is_positive_improvement(MetricType.HEART_RATE) is False
        assert is_positive_improvement(MetricType.TIME_PER_KM) is False

    def test_is_improvement(self):
        assert is_improvement(5, MetricType.DISTANCE) is True
        assert is_improvement(5, MetricType.HEART_RATE) is False
        assert is_improvement(-5, MetricType.HEART_RATE) is True
        assert is_improvement(5, False) is False

    def test_progress(self):
        assert get_trend_progress(0) == TrendProgress.NEUTRAL
        assert get_trend_progress(12, MetricType.SPEED) == TrendProgress.PROGRESS
        assert get_trend_progress(-3, MetricType.TIME_PER_KM) == TrendProgress.PROGRESS
        assert get_trend_progress(3, MetricType.TIME_PER_KM) == TrendProgress.REGRESS

    @pytest.mark.parametrize(
        "trend,metric,expected",
        [
            (0, MetricType.DISTANCE, "No change"),
            (5, MetricType.DISTANCE, "Slight improvement"),
            (10, MetricType.DISTANCE, "Slight improvement"),
            (-20, MetricType.DISTANCE, "Moderate decline"),
            (-30, MetricType.ELEVATION, "Significant decline"),
            (80, MetricType.SPEED, "Spectacular improvement"),
            (-80, MetricType.SPEED, "Spectacular decline"),
            (-20, MetricType.HEART_RATE, "Moderate decrease"),
            (20, MetricType.HEART_RATE, "Moderate increase"),
            (-80, MetricType.TIME_PER_KM, "Spectacular decrease"),
            (80, MetricType.HEART_RATE, "Worrying increase"),
        ],
    )
    def test_messages(self, trend, metric, expected):
        assert get_trend_message(trend, metric) == expected
