"""Third-party activity sources."""

from .strava import StravaActivity, StravaSport, strava_activity_to_training

__all__ = ["StravaActivity", "StravaSport", "strava_activity_to_training"]
