"""Stateless bang-bang driver model."""

from __future__ import annotations

from dataclasses import dataclass

ACCELERATE_BELOW_FRACTION = 0.95
BRAKE_ABOVE_FRACTION = 1.05
CRUISE_THROTTLE = 0.3
BRAKING_FRACTION = 0.8


@dataclass(frozen=True)
class DriverCommand:
    """Pedal positions requested by the driver model.

    Args:
        throttle: Throttle position in ``[0, 1]``.
        brake: Brake position in ``[0, 1]``.
    """

    throttle: float
    brake: float


FULL_THROTTLE = DriverCommand(throttle=1.0, brake=0.0)
FULL_BRAKING = DriverCommand(throttle=0.0, brake=BRAKING_FRACTION)
CRUISE = DriverCommand(throttle=CRUISE_THROTTLE, brake=0.0)


def driver_command(velocity: float, target_speed: float) -> DriverCommand:
    """Select throttle and brake from current and target speed.

    A +/-5 % band around the target keeps the car cruising instead of
    switching between full throttle and braking every step.

    Args:
        velocity: Current speed [m/s].
        target_speed: Speed the driver aims for [m/s].

    Returns:
        Full throttle below the band, fixed braking above it, cruise
        throttle inside it.
    """
    if velocity < ACCELERATE_BELOW_FRACTION * target_speed:
        return FULL_THROTTLE
    if velocity > BRAKE_ABOVE_FRACTION * target_speed:
        return FULL_BRAKING
    return CRUISE
