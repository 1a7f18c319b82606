"""Sweep a vehicle parameter concurrently and report lap time per value."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from f1lapsim.analysis import export_sweep_json, plot_sweep_lap_times
from f1lapsim.simulation import (
    build_simulation_config,
    build_sweep_config,
    run_parameter_sweep,
    sweep_values,
)
from f1lapsim.track import build_monaco_style_track
from f1lapsim.utils import configure_logging
from f1lapsim.vehicle import VehicleParameters, default_vehicle_parameters


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the sweep example.

    Returns:
        Parsed command-line namespace.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--parameter",
        choices=VehicleParameters.field_names(),
        default="downforce_coefficient",
    )
    parser.add_argument("--start", type=float, default=2.5)
    parser.add_argument("--stop", type=float, default=4.5)
    parser.add_argument("--step", type=float, default=0.25)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument(
        "--backend",
        choices=("thread", "process"),
        default="thread",
    )
    parser.add_argument("--timeout", type=float, default=None)
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(__file__).resolve().parent / "output" / "sweep",
    )
    return parser.parse_args()


def main() -> None:
    """Run the sweep and export a JSON table plus lap-time plot."""
    args = _parse_args()
    configure_logging(logging.INFO)
    logger = logging.getLogger("sweep_example")

    values = sweep_values(args.start, args.stop, args.step)
    sweep = build_sweep_config(
        max_workers=args.workers,
        executor_backend=args.backend,
        timeout=args.timeout,
    )
    result = run_parameter_sweep(
        default_vehicle_parameters(),
        build_monaco_style_track(),
        values,
        parameter=args.parameter,
        config=build_simulation_config(record_telemetry=False),
        sweep=sweep,
    )

    for scenario in result:
        if scenario.succeeded:
            logger.info("%s=%.3f -> %.3f s", args.parameter, scenario.parameter, scenario.lap_time)
        else:
            logger.warning("%s=%.3f -> %s", args.parameter, scenario.parameter, scenario.status)

    best = result.best()
    if best is not None:
        logger.info("Fastest: %s=%.3f (%.3f s)", args.parameter, best.parameter, best.lap_time)

    export_sweep_json(result, args.output_dir / "sweep.json")
    plot_sweep_lap_times(result, args.output_dir / f"lap_time_vs_{args.parameter}")


if __name__ == "__main__":
    main()
