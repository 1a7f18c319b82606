"""Run one lap on the street-circuit demo layout and export KPIs and plots."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from f1lapsim.analysis import compute_kpis, export_kpi_json, export_standard_plots
from f1lapsim.simulation import build_simulation_config, simulate_lap
from f1lapsim.track import build_monaco_style_track, load_track_csv
from f1lapsim.utils import configure_logging
from f1lapsim.vehicle import default_vehicle_parameters


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the single-lap example.

    Returns:
        Parsed command-line namespace.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--track-csv",
        type=Path,
        default=None,
        help="Optional segment table CSV; defaults to the built-in layout.",
    )
    parser.add_argument(
        "--time-step",
        type=float,
        default=0.01,
        help="Integration time step [s].",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(__file__).resolve().parent / "output" / "monaco_style",
    )
    return parser.parse_args()


def main() -> None:
    """Simulate one lap and export plots plus KPI JSON."""
    args = _parse_args()
    configure_logging(logging.INFO)
    logger = logging.getLogger("monaco_style_example")

    track = load_track_csv(args.track_csv) if args.track_csv else build_monaco_style_track()
    vehicle = default_vehicle_parameters()
    config = build_simulation_config(time_step=args.time_step, log_segments=True)

    result = simulate_lap(vehicle, track, config)
    kpis = compute_kpis(result)

    export_standard_plots(result, args.output_dir)
    export_kpi_json(kpis, args.output_dir / "kpis.json")

    logger.info("Track: %s (%.0f m, %d segments)", track.name, track.length, len(track))
    logger.info("Lap time: %.3f s", kpis.lap_time)
    logger.info(
        "Max speed: %.1f km/h | Max accel: %.2f g | Max braking: %.2f g",
        kpis.max_speed_kph,
        kpis.max_accel_g,
        kpis.max_braking_g,
    )
    logger.info("Peak tire temperature: %.1f C", kpis.max_tire_temperature)


if __name__ == "__main__":
    main()
