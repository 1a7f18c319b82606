"""Aerodynamic force calculations."""

from __future__ import annotations

from dataclasses import dataclass

from f1lapsim.vehicle.params import VehicleParameters


@dataclass(frozen=True)
class AeroForces:
    """Aerodynamic loads at a given speed.

    Args:
        drag: Aerodynamic drag force opposing motion [N].
        downforce: Total aerodynamic downforce [N].
    """

    drag: float
    downforce: float


def dynamic_pressure(vehicle: VehicleParameters, speed: float) -> float:
    """Dynamic pressure ``0.5 * rho * v^2`` at the given speed [Pa]."""
    return 0.5 * vehicle.air_density * speed * speed


def drag_force(vehicle: VehicleParameters, speed: float) -> float:
    """Aerodynamic drag ``0.5 * rho * A * Cd * v^2`` [N]."""
    return dynamic_pressure(vehicle, speed) * vehicle.frontal_area * vehicle.drag_coefficient


def downforce(vehicle: VehicleParameters, speed: float) -> float:
    """Aerodynamic downforce ``0.5 * rho * A * Cl * v^2`` [N]."""
    return (
        dynamic_pressure(vehicle, speed)
        * vehicle.frontal_area
        * vehicle.downforce_coefficient
    )


def aero_forces(vehicle: VehicleParameters, speed: float) -> AeroForces:
    """Compute drag and downforce at one speed.

    Args:
        vehicle: Vehicle parameter set containing aerodynamic coefficients.
        speed: Vehicle speed [m/s].

    Returns:
        Drag and downforce quantities [N].
    """
    return AeroForces(drag=drag_force(vehicle, speed), downforce=downforce(vehicle, speed))
