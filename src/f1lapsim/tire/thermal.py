"""Tire thermal model and load/temperature dependent grip."""

from __future__ import annotations

import math

from f1lapsim.utils.constants import (
    AMBIENT_TEMPERATURE,
    TIRE_COUNT,
    TIRE_HEAT_TRANSFER_COEFFICIENT,
    TIRE_MASS,
    TIRE_SPECIFIC_HEAT,
)

COLD_TIRE_TEMPERATURE = 80.0
OVERHEAT_TIRE_TEMPERATURE = 120.0
COLD_GRIP_FACTOR = 0.7
OVERHEAT_GRIP_LOSS = 0.5
OVERHEAT_RAMP_WIDTH = 80.0


def thermal_grip_factor(tire_temperature: float) -> float:
    """Scale factor on tire grip from tire temperature.

    Grip ramps linearly from ``0.7`` at 0 degC to ``1.0`` at 80 degC, stays at
    ``1.0`` up to 120 degC and then decays linearly, losing half of the grip
    at 200 degC. Both ramps are held at their end values outside the ramp.

    Args:
        tire_temperature: Tire temperature [degC].

    Returns:
        Grip scale factor in ``[0.5, 1.0]``.
    """
    if tire_temperature < COLD_TIRE_TEMPERATURE:
        fraction = max(tire_temperature, 0.0) / COLD_TIRE_TEMPERATURE
        return COLD_GRIP_FACTOR + (1.0 - COLD_GRIP_FACTOR) * fraction
    if tire_temperature > OVERHEAT_TIRE_TEMPERATURE:
        fraction = min(
            (tire_temperature - OVERHEAT_TIRE_TEMPERATURE) / OVERHEAT_RAMP_WIDTH,
            1.0,
        )
        return 1.0 - OVERHEAT_GRIP_LOSS * fraction
    return 1.0


def grip_multiplier(
    front_load: float,
    rear_load: float,
    static_load: float,
    tire_temperature: float,
) -> float:
    """Combined load and temperature grip multiplier.

    Args:
        front_load: Front-axle normal load [N].
        rear_load: Rear-axle normal load [N].
        static_load: Vehicle weight ``m * g`` [N].
        tire_temperature: Tire temperature [degC].

    Returns:
        ``sqrt((front + rear) / (m * g))`` scaled by the thermal grip factor.
    """
    load_ratio = max(front_load + rear_load, 0.0) / static_load
    return math.sqrt(load_ratio) * thermal_grip_factor(tire_temperature)


def tire_temperature_derivative(
    traction_force: float,
    speed: float,
    tire_temperature: float,
    ambient_temperature: float = AMBIENT_TEMPERATURE,
) -> float:
    """Rate of change of tire temperature [degC/s].

    Heating comes from slip-energy dissipation proportional to traction power
    over all four tires, cooling from convection towards ambient.

    Args:
        traction_force: Tractive force at the contact patches [N].
        speed: Vehicle speed [m/s].
        tire_temperature: Current tire temperature [degC].
        ambient_temperature: Ambient air temperature [degC].

    Returns:
        Temperature derivative [degC/s].
    """
    heating = TIRE_COUNT * traction_force * speed / (TIRE_MASS * TIRE_SPECIFIC_HEAT)
    cooling = TIRE_HEAT_TRANSFER_COEFFICIENT * (tire_temperature - ambient_temperature) / TIRE_MASS
    return heating - cooling
