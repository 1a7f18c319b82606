"""Single time step of the coupled longitudinal/thermal vehicle model."""

from __future__ import annotations

import math

import numpy as np

from f1lapsim.simulation.config import (
    DEFAULT_MAX_ACCELERATION,
    DEFAULT_MAX_SPEED,
    DEFAULT_MIN_SPEED,
)
from f1lapsim.simulation.controller import DriverCommand, driver_command
from f1lapsim.simulation.integrator import FloatArray, rk4_step
from f1lapsim.simulation.state import VehicleState
from f1lapsim.tire.thermal import grip_multiplier, tire_temperature_derivative
from f1lapsim.track.models import TrackSegment
from f1lapsim.utils.constants import AMBIENT_TEMPERATURE, GRAVITY
from f1lapsim.utils.exceptions import NonFiniteStateError
from f1lapsim.vehicle.aero import drag_force
from f1lapsim.vehicle.load_transfer import estimate_axle_loads, static_axle_loads
from f1lapsim.vehicle.params import VehicleParameters

UNLIMITED_CORNER_SPEED = 1_000.0


def corner_speed_limit(vehicle: VehicleParameters, radius: float, grip: float) -> float:
    """Maximum speed sustainable through a corner [m/s].

    Args:
        vehicle: Vehicle parameter set.
        radius: Corner radius [m]; ``0`` denotes a straight.
        grip: Grip multiplier from load and tire temperature.

    Returns:
        ``sqrt(mu * grip * g * r)``, or a large sentinel on straights.
    """
    if radius == 0.0:
        return UNLIMITED_CORNER_SPEED
    return math.sqrt(vehicle.tire_grip_coefficient * grip * GRAVITY * radius)


def traction_force(
    vehicle: VehicleParameters,
    velocity: float,
    throttle: float,
    grip: float,
    min_speed: float = DEFAULT_MIN_SPEED,
) -> float:
    """Power-limited tractive force capped by available tire grip [N].

    Args:
        vehicle: Vehicle parameter set.
        velocity: Vehicle speed [m/s], floored at ``min_speed``.
        throttle: Throttle position in ``[0, 1]``.
        grip: Grip multiplier from load and tire temperature.
        min_speed: Speed floor for the ``P / v`` term [m/s].

    Returns:
        Tractive force [N].
    """
    engine_force = vehicle.max_power / max(velocity, min_speed) * throttle
    grip_limit = vehicle.tire_grip_coefficient * grip * vehicle.static_load
    return min(engine_force, grip_limit)


def brake_force(vehicle: VehicleParameters, brake: float) -> float:
    """Braking force at the contact patches [N]."""
    return vehicle.max_brake_torque * brake / vehicle.wheel_radius


def grade_force(vehicle: VehicleParameters, inclination: float) -> float:
    """Weight component along the road, positive uphill [N]."""
    return vehicle.static_load * math.sin(math.radians(inclination))


def longitudinal_acceleration(
    vehicle: VehicleParameters,
    segment: TrackSegment,
    velocity: float,
    command: DriverCommand,
    grip: float,
    min_speed: float = DEFAULT_MIN_SPEED,
) -> float:
    """Net longitudinal acceleration for one driver command [m/s^2]."""
    net_force = (
        traction_force(vehicle, velocity, command.throttle, grip, min_speed)
        - drag_force(vehicle, velocity)
        - brake_force(vehicle, command.brake)
        - grade_force(vehicle, segment.inclination)
    )
    return net_force / vehicle.mass


def initial_state(
    vehicle: VehicleParameters,
    tire_temperature: float = AMBIENT_TEMPERATURE,
) -> VehicleState:
    """Vehicle at rest on the start line with static axle loads.

    Args:
        vehicle: Vehicle parameter set.
        tire_temperature: Tire temperature at the start [degC].

    Returns:
        State with zero position, speed and time.
    """
    loads = static_axle_loads(vehicle)
    return VehicleState(
        position=0.0,
        velocity=0.0,
        acceleration=0.0,
        time=0.0,
        throttle=0.0,
        brake=0.0,
        tire_temperature=tire_temperature,
        front_load=loads.front,
        rear_load=loads.rear,
    )


def integration_step(
    state: VehicleState,
    segment: TrackSegment,
    dt: float,
    vehicle: VehicleParameters,
    *,
    min_speed: float = DEFAULT_MIN_SPEED,
    max_speed: float = DEFAULT_MAX_SPEED,
    ambient_temperature: float = AMBIENT_TEMPERATURE,
    max_acceleration: float = DEFAULT_MAX_ACCELERATION,
) -> VehicleState:
    """Advance the vehicle state by one fixed time step.

    Position, speed and tire temperature are integrated together with RK4.
    Axle loads stay at their start-of-step values within the step and are
    recomputed from the new speed and the step-averaged acceleration. Stage
    speeds are floored at zero, so the car never rolls backwards and a car
    that cannot move holds its position.

    Args:
        state: State at the start of the step.
        segment: Track segment the car is on.
        dt: Time step [s].
        vehicle: Vehicle parameter set.
        min_speed: Speed floor for the traction force [m/s].
        max_speed: Numerical clamp on the integrated speed [m/s].
        ambient_temperature: Ambient temperature [degC].
        max_acceleration: Step-averaged acceleration magnitude treated as
            divergence [m/s^2].

    Returns:
        New state at ``state.time + dt``.

    Raises:
        f1lapsim.utils.exceptions.NonFiniteStateError: If the integration
            produces NaN or infinite values or diverges.
    """
    front_load = state.front_load
    rear_load = state.rear_load

    def command_at(velocity: float, tire_temperature: float) -> tuple[DriverCommand, float]:
        grip = grip_multiplier(front_load, rear_load, vehicle.static_load, tire_temperature)
        target_speed = corner_speed_limit(vehicle, segment.radius, grip)
        return driver_command(velocity, target_speed), grip

    def rhs(_: float, x: FloatArray) -> FloatArray:
        velocity = max(float(x[1]), 0.0)
        tire_temperature = float(x[2])
        command, grip = command_at(velocity, tire_temperature)
        acceleration = longitudinal_acceleration(
            vehicle, segment, velocity, command, grip, min_speed
        )
        if velocity == 0.0 and acceleration < 0.0:
            # At rest: brakes and grade hold the car in place.
            acceleration = 0.0
        traction = traction_force(vehicle, velocity, command.throttle, grip, min_speed)
        temperature_rate = tire_temperature_derivative(
            traction, velocity, tire_temperature, ambient_temperature
        )
        return np.array([velocity, acceleration, temperature_rate], dtype=np.float64)

    command, _ = command_at(state.velocity, state.tire_temperature)
    x0 = np.array([state.position, state.velocity, state.tire_temperature], dtype=np.float64)
    x1, slope = rk4_step(rhs=rhs, time=state.time, state=x0, dtime=dt)

    if not (np.all(np.isfinite(x1)) and np.all(np.isfinite(slope))):
        msg = (
            f"non-finite state at t={state.time + dt:.3f} s, "
            f"position={state.position:.2f} m, segment {segment.label!r}"
        )
        raise NonFiniteStateError(msg)

    acceleration = float(slope[1])
    if abs(acceleration) > max_acceleration:
        msg = (
            f"integration diverged at t={state.time + dt:.3f} s, "
            f"position={state.position:.2f} m, segment {segment.label!r}: "
            f"mean acceleration {acceleration:.3e} m/s^2 exceeds {max_acceleration:.1f} m/s^2"
        )
        raise NonFiniteStateError(msg)
    velocity = min(max(float(x1[1]), 0.0), max_speed)
    loads = estimate_axle_loads(vehicle, velocity, acceleration)

    next_state = VehicleState(
        position=float(x1[0]),
        velocity=velocity,
        acceleration=acceleration,
        time=state.time + dt,
        throttle=command.throttle,
        brake=command.brake,
        tire_temperature=float(x1[2]),
        front_load=loads.front,
        rear_load=loads.rear,
    )
    if not next_state.is_finite():
        msg = f"non-finite axle loads at t={next_state.time:.3f} s, segment {segment.label!r}"
        raise NonFiniteStateError(msg)
    return next_state
