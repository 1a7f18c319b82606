"""Lap integration, configuration, and scenario sweeps."""

from __future__ import annotations

from f1lapsim.simulation.config import (
    NumericsConfig,
    RuntimeConfig,
    SimulationConfig,
    build_simulation_config,
)
from f1lapsim.simulation.controller import DriverCommand, driver_command
from f1lapsim.simulation.runner import LapResult, LapSimulator, simulate_lap
from f1lapsim.simulation.scenario import (
    ScenarioResult,
    ScenarioRunner,
    SweepConfig,
    SweepResult,
    build_sweep_config,
    run_parameter_sweep,
    sweep_values,
)
from f1lapsim.simulation.state import Telemetry, VehicleState
from f1lapsim.simulation.step import initial_state, integration_step

__all__ = [
    "DriverCommand",
    "LapResult",
    "LapSimulator",
    "NumericsConfig",
    "RuntimeConfig",
    "ScenarioResult",
    "ScenarioRunner",
    "SimulationConfig",
    "SweepConfig",
    "SweepResult",
    "Telemetry",
    "VehicleState",
    "build_simulation_config",
    "build_sweep_config",
    "driver_command",
    "initial_state",
    "integration_step",
    "run_parameter_sweep",
    "simulate_lap",
    "sweep_values",
]
