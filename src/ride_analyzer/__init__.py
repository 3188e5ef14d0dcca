"""
Ride Analyzer - cycling training metrics.

Aggregates a collection of rides into dashboard statistics, time series,
composite training load, trends and heart rate zone breakdowns, and
decodes FIT activity files into tracks and laps.
"""

__version__ = "0.1.0"
