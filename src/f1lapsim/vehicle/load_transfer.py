"""Quasi-static axle normal loads with longitudinal load transfer."""

from __future__ import annotations

from dataclasses import dataclass

from f1lapsim.vehicle.aero import downforce
from f1lapsim.vehicle.params import VehicleParameters


@dataclass(frozen=True)
class AxleLoads:
    """Front/rear axle normal loads.

    Args:
        front: Front-axle normal load [N].
        rear: Rear-axle normal load [N].
    """

    front: float
    rear: float

    @property
    def total(self) -> float:
        """Total vertical load [N].

        Returns:
            Sum of front and rear axle loads [N].
        """
        return self.front + self.rear


def longitudinal_load_transfer(vehicle: VehicleParameters, longitudinal_accel: float) -> float:
    """Load moved from the front to the rear axle under acceleration [N].

    Args:
        vehicle: Vehicle parameter set.
        longitudinal_accel: Net longitudinal acceleration [m/s^2]. Negative
            values (braking) move load forward.

    Returns:
        Transferred load ``a * m * h_cg / L`` [N].
    """
    return longitudinal_accel * vehicle.mass * vehicle.cg_height / vehicle.wheelbase


def static_axle_loads(vehicle: VehicleParameters) -> AxleLoads:
    """Axle loads of the car at rest on level ground.

    Args:
        vehicle: Vehicle parameter set.

    Returns:
        Weight split by the static weight fractions [N].
    """
    weight = vehicle.static_load
    return AxleLoads(
        front=weight * vehicle.front_weight_fraction,
        rear=weight * vehicle.rear_weight_fraction,
    )


def estimate_axle_loads(
    vehicle: VehicleParameters,
    speed: float,
    longitudinal_accel: float,
) -> AxleLoads:
    """Estimate axle loads from weight, downforce and load transfer.

    Weight and downforce are split by the static weight fractions, then the
    transfer term is subtracted from the front and added to the rear, so the
    total always equals ``m * g + downforce(v)``.

    Args:
        vehicle: Vehicle parameter set.
        speed: Vehicle speed [m/s].
        longitudinal_accel: Net longitudinal acceleration [m/s^2].

    Returns:
        Front and rear axle normal loads [N].
    """
    total = vehicle.static_load + downforce(vehicle, speed)
    transfer = longitudinal_load_transfer(vehicle, longitudinal_accel)
    front = total * vehicle.front_weight_fraction - transfer
    return AxleLoads(front=front, rear=total - front)
