"""Tests for the FIT and tagging API routes."""

import struct
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from ride_analyzer.main import app
from ride_analyzer.models import FitActivity, FitTrackpoint, ParsedFitFile


START = datetime(2024, 5, 1, 7, 0, 0)


@pytest.fixture
def client():
    """Create a test client for the API."""
    return TestClient(app)


def track_payload(count: int = 26, heart_rate=140):
    return [
        {
            "timestamp": (START + timedelta(seconds=i * 10)).isoformat(),
            "distance_m": i * 100.0,
            "speed_ms": 10.0,
            "heart_rate_bpm": heart_rate,
            "altitude_m": 200.0 + i,
        }
        for i in range(count)
    ]


class TestParseFit:
    def test_rejects_non_fit_upload(self, client):
        response = client.post(
            "/api/v1/fit/parse",
            files={"file": ("ride.fit", b"garbage bytes", "application/octet-stream")},
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "FIT_DECODING_ERROR"
        assert error["details"]["filename"] == "ride.fit"

    def test_parses_upload(self, client):
        data = struct.pack("<BBHI4s", 14, 16, 2132, 0, b".FIT") + b"\x00\x00"
        activity = FitActivity(
            start_time=START,
            total_time_s=20,
            distance_m=200,
            trackpoints=[FitTrackpoint(timestamp=START, distance_m=0.0)],
        )
        parsed = ParsedFitFile(activity=activity, sport="cycling", timestamp=START, device="Edge 530")

        with patch("ride_analyzer.api.routes.fit.parse_fit_file", return_value=parsed) as parse:
            response = client.post(
                "/api/v1/fit/parse",
                params={"include_trackpoints": "false"},
                files={"file": ("ride.fit", data, "application/octet-stream")},
            )

        assert response.status_code == 200
        parse.assert_called_once_with(data)
        body = response.json()
        assert body["sport"] == "cycling"
        assert body["device"] == "Edge 530"
        assert body["activity"]["trackpoints_count"] == 1
        assert "trackpoints" not in body["activity"]
        assert body["file_info"]["header_size"] == 14


class TestLaps:
    def test_generate_laps(self, client):
        response = client.post("/api/v1/fit/laps", json={
            "trackpoints": track_payload(),
            "lap_distance_km": 1,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert [lap["distance_m"] for lap in data["laps"]] == [1000, 1000, 500]
        assert data["laps"][0]["total_elevation_gain_m"] == 10

    def test_default_lap_distance(self, client):
        response = client.post("/api/v1/fit/laps", json={"trackpoints": track_payload()})

        assert response.json()["lap_distance_km"] == 1.0

    def test_lap_distance_out_of_range(self, client):
        response = client.post("/api/v1/fit/laps", json={
            "trackpoints": track_payload(),
            "lap_distance_km": 0.01,
        })

        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "lap_distance_km"


class TestZones:
    def test_zones(self, client):
        response = client.post("/api/v1/fit/zones", json={"trackpoints": track_payload()})

        assert response.status_code == 200
        data = response.json()
        assert data["heart_rate_zones"]["zone_3"] == "00:04:10"
        assert data["distribution"]["zone_3_pct"] == 100.0

    def test_no_heart_rate(self, client):
        response = client.post("/api/v1/fit/zones", json={"trackpoints": track_payload(heart_rate=None)})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INSUFFICIENT_TRAINING_DATA"


class TestTags:
    """Tests for the tagging routes."""

    def test_rules(self, client):
        rules = client.get("/api/v1/tags/rules").json()["rules"]
        assert len(rules) == 8
        assert rules[1]["tag_name"] == "Climbing"

    def test_evaluate_training(self, client):
        response = client.post("/api/v1/tags/evaluate", json={
            "training": {
                "id": "ride-42",
                "date": "2024-05-01",
                "distance_km": 100,
                "moving_time": "3:30:00",
                "avg_speed_kmh": 20.0,
                "avg_heart_rate_bpm": 125,
            },
        })

        assert response.status_code == 200
        data = response.json()
        assert data["activity_id"] == "ride-42"
        assert [tag["tag_name"] for tag in data["tags"]] == [
            "Long Distance", "Low Intensity", "Endurance", "Recovery",
        ]
        assert data["analysis"]["distance_m"] == 100_000

    def test_evaluate_trackpoints(self, client):
        response = client.post("/api/v1/tags/evaluate", json={
            "activity_id": "short-one",
            "trackpoints": track_payload(),
        })

        assert response.status_code == 200
        data = response.json()
        assert data["analysis"]["distance_m"] == 2500
        assert data["analysis"]["trackpoints_count"] == 26
        # 250 s of riding at 36 km/h, climbing 25 m over 2.5 km
        assert [tag["tag_name"] for tag in data["tags"]] == ["Climbing", "Speed Demon", "Quick Ride"]

    def test_evaluate_requires_input(self, client):
        response = client.post("/api/v1/tags/evaluate", json={})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
