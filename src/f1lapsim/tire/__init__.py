"""Tire grip and thermal models."""

from f1lapsim.tire.thermal import (
    grip_multiplier,
    thermal_grip_factor,
    tire_temperature_derivative,
)

__all__ = [
    "grip_multiplier",
    "thermal_grip_factor",
    "tire_temperature_derivative",
]
