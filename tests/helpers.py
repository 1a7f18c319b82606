"""Shared test helpers."""

from __future__ import annotations

import importlib.util

from f1lapsim.simulation.config import SimulationConfig, build_simulation_config
from f1lapsim.track.models import TrackBuilder, TrackDefinition
from f1lapsim.utils.constants import STANDARD_AIR_DENSITY
from f1lapsim.vehicle.params import VehicleParameters

PANDAS_AVAILABLE = importlib.util.find_spec("pandas") is not None

DOWNFORCE_SWEEP = (2.5, 2.75, 3.0, 3.25, 3.5, 3.75, 4.0, 4.25, 4.5)


def sample_vehicle_parameters() -> VehicleParameters:
    """Create a representative F1-style vehicle parameter set.

    Returns:
        Vehicle parameter set used by unit and integration tests.
    """
    return VehicleParameters(
        mass=798.0,
        drag_coefficient=0.7,
        frontal_area=1.5,
        downforce_coefficient=3.5,
        max_power=750_000.0,
        max_brake_torque=5_000.0,
        tire_grip_coefficient=1.8,
        wheel_radius=0.33,
        front_weight_fraction=0.46,
        rear_weight_fraction=0.54,
        cg_height=0.31,
        wheelbase=3.6,
        suspension_stiffness=180_000.0,
        air_density=STANDARD_AIR_DENSITY,
    )


def short_test_track() -> TrackDefinition:
    """Build a short straight-corner-straight track for fast sweeps.

    Returns:
        Three-segment track of 400 m total length.
    """
    return (
        TrackBuilder(name="short")
        .append(200.0, 0.0, 0.0, "straight")
        .append(100.0, 60.0, 0.0, "right")
        .append(100.0, 0.0, 1.0, "straight")
        .build()
    )


def sample_config() -> SimulationConfig:
    """Default solver configuration with telemetry recording enabled.

    Returns:
        Validated simulation configuration.
    """
    return build_simulation_config(time_step=0.01)
