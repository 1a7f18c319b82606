"""Benchmark scenario sweep wall time across worker counts and pool backends."""

from __future__ import annotations

import argparse
import json
import os
import statistics
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from f1lapsim.simulation import (
    build_simulation_config,
    build_sweep_config,
    run_parameter_sweep,
    sweep_values,
)
from f1lapsim.track import build_monaco_style_track
from f1lapsim.vehicle import default_vehicle_parameters

DEFAULT_TIMED_RUNS = 3
DEFAULT_OUTPUT_PATH = (
    Path(__file__).resolve().parents[1]
    / "examples"
    / "output"
    / "sweep_benchmarks"
    / "sweep_workers.json"
)


@dataclass(frozen=True)
class SweepBenchmarkCaseResult:
    """Timing summary for one worker-count and backend combination."""

    backend: str
    workers: int
    scenarios: int
    mean_s: float
    median_s: float
    failed: int


def _worker_counts() -> tuple[int, ...]:
    """Return the worker counts to benchmark.

    Returns:
        Powers of two up to the CPU count, always including ``1``.
    """
    limit = os.cpu_count() or 1
    counts = [1]
    while counts[-1] * 2 <= limit:
        counts.append(counts[-1] * 2)
    return tuple(counts)


def run_sweep_benchmark(timed_runs: int, backends: tuple[str, ...]) -> list[SweepBenchmarkCaseResult]:
    """Time a fixed downforce sweep for every backend and worker count.

    Args:
        timed_runs: Number of timed sweeps per case.
        backends: Executor backends to benchmark.

    Returns:
        One timing summary per case.
    """
    vehicle = default_vehicle_parameters()
    track = build_monaco_style_track()
    config = build_simulation_config(record_telemetry=False)
    values = sweep_values(2.0, 5.0, 0.25)

    results: list[SweepBenchmarkCaseResult] = []
    for backend in backends:
        for workers in _worker_counts():
            sweep = build_sweep_config(max_workers=workers, executor_backend=backend)
            samples: list[float] = []
            failed = 0
            for _ in range(timed_runs):
                start = time.perf_counter()
                result = run_parameter_sweep(vehicle, track, values, config=config, sweep=sweep)
                samples.append(time.perf_counter() - start)
                failed = len(result.failed_indices)
            results.append(
                SweepBenchmarkCaseResult(
                    backend=backend,
                    workers=workers,
                    scenarios=len(values),
                    mean_s=statistics.fmean(samples),
                    median_s=statistics.median(samples),
                    failed=failed,
                )
            )
    return results


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the sweep benchmark.

    Returns:
        Parsed command-line namespace.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--timed-runs", type=int, default=DEFAULT_TIMED_RUNS)
    parser.add_argument(
        "--backend",
        action="append",
        choices=("thread", "process"),
        help="Backend to benchmark; repeat for several. Defaults to both.",
    )
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT_PATH)
    return parser.parse_args()


def main() -> None:
    """Run the sweep benchmark and export a JSON summary."""
    args = _parse_args()
    backends = tuple(args.backend or ("thread", "process"))
    results = run_sweep_benchmark(timed_runs=int(args.timed_runs), backends=backends)
    payload = {
        "metadata": {
            "generated_at_utc": datetime.now(UTC).isoformat(),
            "timed_runs": int(args.timed_runs),
            "cpu_count": os.cpu_count(),
        },
        "cases": [asdict(item) for item in results],
    }
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(payload, indent=2))
    print(f"Saved sweep benchmark to: {args.output}")
    print(f"Cases: {len(results)}")


if __name__ == "__main__":
    main()
