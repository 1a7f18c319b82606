"""Plot generation for simulation analysis."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from f1lapsim.simulation.runner import MPS_TO_KPH, LapResult
from f1lapsim.simulation.scenario import SweepResult

matplotlib.use("Agg")


def _save_dual_format(fig: Figure, out_base: Path) -> None:
    """Write a figure to PNG and PDF with a shared base path.

    Args:
        fig: Figure object to persist.
        out_base: Output path without suffix.
    """
    out_base.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_base.with_suffix(".png"), dpi=180, bbox_inches="tight")
    fig.savefig(out_base.with_suffix(".pdf"), bbox_inches="tight")


def plot_speed_trace(result: LapResult, out_base: Path) -> None:
    """Plot speed and tire temperature over distance.

    Args:
        result: Lap result with recorded telemetry.
        out_base: Output path without suffix.
    """
    telemetry = result.telemetry
    fig, ax = plt.subplots(figsize=(9, 4))
    ax.plot(telemetry.position, telemetry.velocity * MPS_TO_KPH, lw=2.0)
    ax.set_xlabel("s [m]")
    ax.set_ylabel("Speed [km/h]")
    ax.set_title(f"Speed Trace (lap time {result.lap_time:.3f} s)")
    ax.grid(True, alpha=0.3)

    temp_ax = ax.twinx()
    temp_ax.plot(telemetry.position, telemetry.tire_temperature, lw=1.0, color="tab:red", alpha=0.6)
    temp_ax.set_ylabel("Tire temperature [degC]")

    _save_dual_format(fig, out_base)
    plt.close(fig)


def plot_sweep_lap_times(result: SweepResult, out_base: Path) -> None:
    """Plot lap time against the swept parameter.

    Unsuccessful scenarios are left out of the line.

    Args:
        result: Sweep result.
        out_base: Output path without suffix.
    """
    parameters = result.parameters
    lap_times = result.lap_times
    valid = np.isfinite(lap_times)

    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(parameters[valid], lap_times[valid], marker="o", lw=1.5)
    ax.set_xlabel(result.parameter_name)
    ax.set_ylabel("Lap time [s]")
    ax.set_title(f"Lap Time vs {result.parameter_name}")
    ax.grid(True, alpha=0.3)
    _save_dual_format(fig, out_base)
    plt.close(fig)


def export_standard_plots(result: LapResult, output_dir: str | Path) -> None:
    """Generate the standard single-lap plot set.

    Args:
        result: Lap result with recorded telemetry.
        output_dir: Target directory for generated files.
    """
    out_dir = Path(output_dir)
    plot_speed_trace(result, out_dir / "speed_trace")
