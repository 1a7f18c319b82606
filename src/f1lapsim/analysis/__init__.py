"""Simulation analysis tools."""

from f1lapsim.analysis.export import export_kpi_json, export_sweep_json
from f1lapsim.analysis.kpi import KpiSummary, compute_kpis
from f1lapsim.analysis.plots import (
    export_standard_plots,
    plot_speed_trace,
    plot_sweep_lap_times,
)

__all__ = [
    "KpiSummary",
    "compute_kpis",
    "export_kpi_json",
    "export_standard_plots",
    "export_sweep_json",
    "plot_speed_trace",
    "plot_sweep_lap_times",
]
