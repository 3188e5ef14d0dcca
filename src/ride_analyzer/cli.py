#!/usr/bin/env python3
"""
Ride Analyzer CLI.

Cycling training metrics from a JSON export of rides, and FIT file
analysis.

Usage:
    ride-analyzer summary trainings.json
    ride-analyzer load trainings.json
    ride-analyzer fit ride.fit
    ride-analyzer laps ride.fit --distance 5
    ride-analyzer zones ride.fit
    ride-analyzer serve --port 8000
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from .config import get_settings
from .exceptions import RideAnalyzerError
from .fit import generate_laps, parse_fit_file
from .logging_config import configure_logging
from .metrics import (
    calculate_zone_distribution,
    get_intensity_metrics_over_time,
    suggest_heart_rate_zones,
    summarize,
)
from .models.training import ZONE_NAMES, Training
from .utils.time import format_minutes, seconds_to_time_string
from .utils.units import meters_to_kilometers, mps_to_kmh


# ANSI color codes
class Colors:
    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def get_intensity_color(intensity: int) -> str:
    """Get color for a composite intensity score."""
    if intensity >= 75:
        return Colors.RED
    elif intensity >= 50:
        return Colors.YELLOW
    elif intensity >= 25:
        return Colors.GREEN
    return Colors.BLUE


def print_header(title: str, width: int = 40) -> None:
    print()
    print(f"{Colors.BOLD}Ride Analyzer - {title}{Colors.RESET}")
    print("=" * width)
    print()


def load_trainings(path: Path) -> List[Training]:
    """Read trainings from a JSON list, or an object with a "trainings" key."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("trainings", [])
    return [Training.model_validate(item) for item in data]


def _format_optional(value: Optional[float], fmt: str = ".1f", unit: str = "") -> str:
    if value is None:
        return "-"
    return f"{value:{fmt}}{unit}"


def cmd_summary(args) -> None:
    """Show collection statistics."""
    trainings = load_trainings(args.file)
    summary = summarize(trainings)

    print_header("Summary")
    print(f"  {Colors.BOLD}Trainings:{Colors.RESET}          {summary.count}")
    print(f"  {Colors.BOLD}Total distance:{Colors.RESET}     {summary.total_distance:.1f} km")
    print(f"  {Colors.BOLD}Total elevation:{Colors.RESET}    {summary.total_elevation_gain:.0f} m")
    print(f"  {Colors.BOLD}Total moving time:{Colors.RESET}  {summary.total_moving_time}")
    print()
    print(f"  Average speed:       {summary.average_speed:.1f} km/h")
    print(f"  Average heart rate:  {summary.average_heart_rate:.0f} bpm")
    print(f"  Elevation per km:    {summary.elevation_gain_per_km:.2f} m")
    print(f"  Average time per km: {summary.average_time_per_km}")
    print()
    print(f"  Longest ride:        {summary.highest_distance:.1f} km")
    print(f"  Fastest average:     {summary.highest_average_speed:.1f} km/h")
    print(f"  Top speed:           {summary.max_speed:.1f} km/h")
    print(f"  Fastest km:          {summary.shortest_time_per_km}")
    print()


def cmd_load(args) -> None:
    """Show the composite intensity of every training."""
    trainings = load_trainings(args.file)
    config = get_settings().metrics_config()
    results = get_intensity_metrics_over_time(trainings, config)

    print_header("Training Load", width=60)
    if not results:
        print("No trainings found.")
        print()
        return

    print(f"{'Date':<12} {'Intensity':>9} {'Dist':>6} {'Speed':>6} {'HR':>6} {'Elev':>6}")
    print("-" * 60)
    for r in results:
        color = get_intensity_color(r.intensity)
        print(
            f"{r.date.isoformat():<12} "
            f"{color}{r.intensity:>9}{Colors.RESET} "
            f"{r.distance_contribution:>6} "
            f"{r.speed_contribution:>6} "
            f"{r.heart_rate_contribution:>6} "
            f"{r.elevation_contribution:>6}"
        )
    print()


def cmd_fit(args) -> None:
    """Show the session summary of a FIT file."""
    parsed = parse_fit_file(args.file.read_bytes())
    activity = parsed.activity

    print_header("FIT File")
    print(f"  Sport:        {parsed.sport}")
    print(f"  Device:       {parsed.device or '-'}")
    print(f"  Start:        {parsed.timestamp.isoformat()}")
    print(f"  Distance:     {meters_to_kilometers(activity.distance_m):.2f} km")
    print(f"  Moving time:  {seconds_to_time_string(activity.total_time_s)}")
    print(f"  Avg speed:    {_format_optional(mps_to_kmh(activity.avg_speed_ms), unit=' km/h')}")
    print(f"  Max speed:    {_format_optional(mps_to_kmh(activity.max_speed_ms), unit=' km/h')}")
    print(f"  Avg HR:       {_format_optional(activity.avg_heart_rate_bpm, '.0f', ' bpm')}")
    print(f"  Elevation:    {_format_optional(activity.total_elevation_gain_m, '.0f', ' m')}")
    print(f"  Trackpoints:  {len(activity.trackpoints)}")
    print(f"  Laps:         {len(activity.laps)}")
    print()


def cmd_laps(args) -> None:
    """Split a FIT file's track into fixed-distance laps."""
    parsed = parse_fit_file(args.file.read_bytes())
    distance = args.distance if args.distance is not None else get_settings().default_lap_distance_km
    laps = generate_laps(parsed.activity.trackpoints, distance)

    print_header(f"Laps ({distance} km)", width=60)
    print(f"{'Lap':>4} {'Distance':>10} {'Time':>10} {'Speed':>8} {'HR':>5} {'Elev':>6}")
    print("-" * 60)
    for lap in laps:
        print(
            f"{lap.lap_number:>4} "
            f"{meters_to_kilometers(lap.distance_m):>8.2f}km "
            f"{seconds_to_time_string(lap.moving_time_s):>10} "
            f"{_format_optional(mps_to_kmh(lap.avg_speed_ms)):>8} "
            f"{_format_optional(lap.avg_heart_rate_bpm, '.0f'):>5} "
            f"{_format_optional(lap.total_elevation_gain_m, '.0f'):>6}"
        )
    print()


def cmd_zones(args) -> None:
    """Show time in heart rate zones for a FIT file."""
    parsed = parse_fit_file(args.file.read_bytes())
    bands = get_settings().metrics_config().zone_bands
    zones = suggest_heart_rate_zones(parsed.activity.trackpoints, bands)
    distribution = calculate_zone_distribution(zones)

    print_header("Heart Rate Zones")
    for name in ZONE_NAMES:
        print(f"  {name.replace('_', ' ').title()}:  {getattr(zones, name)}  ({distribution[f'{name}_pct']:.1f}%)")
    print()
    print(f"  Total: {format_minutes(int(distribution['total_minutes']))}")
    print()


def cmd_serve(args) -> None:
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ride_analyzer.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
    )


COMMANDS = {
    "summary": cmd_summary,
    "load": cmd_load,
    "fit": cmd_fit,
    "laps": cmd_laps,
    "zones": cmd_zones,
    "serve": cmd_serve,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ride-analyzer",
        description="Ride Analyzer - cycling training metrics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ride-analyzer summary trainings.json
  ride-analyzer load trainings.json
  ride-analyzer laps ride.fit --distance 5
  ride-analyzer serve --port 8000
        """,
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    summary_p = subparsers.add_parser("summary", help="Show collection statistics")
    summary_p.add_argument("file", type=Path, help="JSON file with trainings")

    load_p = subparsers.add_parser("load", help="Show composite training load per ride")
    load_p.add_argument("file", type=Path, help="JSON file with trainings")

    fit_p = subparsers.add_parser("fit", help="Show the summary of a FIT file")
    fit_p.add_argument("file", type=Path, help="FIT activity file")

    laps_p = subparsers.add_parser("laps", help="Split a FIT track into laps")
    laps_p.add_argument("file", type=Path, help="FIT activity file")
    laps_p.add_argument(
        "--distance", "-d", type=float, default=None, help="Lap distance in km (0.1-50)"
    )

    zones_p = subparsers.add_parser("zones", help="Show time in heart rate zones")
    zones_p.add_argument("file", type=Path, help="FIT activity file")

    serve_p = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None, help="Bind address")
    serve_p.add_argument("--port", "-p", type=int, default=None, help="Port")
    serve_p.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or get_settings().log_level)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        command(args)
    except (RideAnalyzerError, PydanticValidationError, ValueError, OSError) as e:
        print(f"{Colors.RED}Error: {e}{Colors.RESET}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
