"""Segment-based lap time simulation with concurrent parameter sweeps."""

from f1lapsim.analysis.kpi import KpiSummary, compute_kpis
from f1lapsim.simulation.runner import LapResult, LapSimulator, simulate_lap
from f1lapsim.simulation.scenario import ScenarioRunner, SweepResult, run_parameter_sweep

__all__ = [
    "KpiSummary",
    "LapResult",
    "LapSimulator",
    "ScenarioRunner",
    "SweepResult",
    "compute_kpis",
    "run_parameter_sweep",
    "simulate_lap",
]
