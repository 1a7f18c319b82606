"""Vehicle parameters and chassis sub-models."""

from f1lapsim.vehicle.aero import AeroForces, aero_forces, downforce, drag_force
from f1lapsim.vehicle.load_transfer import (
    AxleLoads,
    estimate_axle_loads,
    longitudinal_load_transfer,
    static_axle_loads,
)
from f1lapsim.vehicle.params import VehicleParameters, default_vehicle_parameters

__all__ = [
    "AeroForces",
    "AxleLoads",
    "VehicleParameters",
    "aero_forces",
    "default_vehicle_parameters",
    "downforce",
    "drag_force",
    "estimate_axle_loads",
    "longitudinal_load_transfer",
    "static_axle_loads",
]
