"""Unit tests for the RK4 integrator and the single-step vehicle model."""

from __future__ import annotations

import math
import unittest
from dataclasses import replace

import numpy as np

from f1lapsim.simulation.integrator import rk4_step
from f1lapsim.simulation.step import (
    UNLIMITED_CORNER_SPEED,
    corner_speed_limit,
    initial_state,
    integration_step,
    traction_force,
)
from f1lapsim.track.models import TrackSegment
from f1lapsim.utils.constants import GRAVITY
from f1lapsim.utils.exceptions import NonFiniteStateError
from f1lapsim.vehicle import downforce, estimate_axle_loads
from tests.helpers import sample_vehicle_parameters

STRAIGHT = TrackSegment(length=500.0, radius=0.0, inclination=0.0, label="straight")
CORNER = TrackSegment(length=100.0, radius=50.0, inclination=0.0, label="right")


def _rolling_state(velocity: float, tire_temperature: float = 100.0):
    """Build a state cruising at ``velocity`` with quasi-static loads."""
    vehicle = sample_vehicle_parameters()
    loads = estimate_axle_loads(vehicle, velocity, 0.0)
    return replace(
        initial_state(vehicle, tire_temperature),
        velocity=velocity,
        front_load=loads.front,
        rear_load=loads.rear,
    )


class Rk4StepTests(unittest.TestCase):
    """Validate the generic RK4 integrator."""

    def test_rk4_matches_exponential_decay(self) -> None:
        """Integrate ``dx/dt = -x`` with fourth-order accuracy."""
        state = np.array([1.0], dtype=np.float64)
        next_state, slope = rk4_step(rhs=lambda _, x: -x, time=0.0, state=state, dtime=0.1)

        self.assertAlmostEqual(float(next_state[0]), math.exp(-0.1), delta=1e-6)
        self.assertAlmostEqual(float(slope[0]), (float(next_state[0]) - 1.0) / 0.1, places=12)


class ForceHelperTests(unittest.TestCase):
    """Validate corner speed cap and traction force."""

    def test_corner_speed_limit(self) -> None:
        """Return ``sqrt(mu * grip * g * r)`` and a sentinel on straights."""
        vehicle = sample_vehicle_parameters()

        self.assertAlmostEqual(
            corner_speed_limit(vehicle, 50.0, 1.0),
            math.sqrt(1.8 * GRAVITY * 50.0),
        )
        self.assertAlmostEqual(
            corner_speed_limit(vehicle, 50.0, 0.5),
            math.sqrt(1.8 * 0.5 * GRAVITY * 50.0),
        )
        self.assertEqual(corner_speed_limit(vehicle, 0.0, 1.0), UNLIMITED_CORNER_SPEED)

    def test_traction_is_grip_limited_at_standstill(self) -> None:
        """Floor the speed in ``P / v`` and cap traction by tire grip."""
        vehicle = sample_vehicle_parameters()

        at_rest = traction_force(vehicle, 0.0, 1.0, 1.0)
        self.assertTrue(math.isfinite(at_rest))
        self.assertAlmostEqual(at_rest, 1.8 * vehicle.mass * GRAVITY)
        self.assertAlmostEqual(traction_force(vehicle, 100.0, 1.0, 1.0), 7_500.0)
        self.assertEqual(traction_force(vehicle, 50.0, 0.0, 1.0), 0.0)


class IntegrationStepTests(unittest.TestCase):
    """Validate one integration step of the coupled model."""

    def test_standing_start_accelerates_with_full_throttle(self) -> None:
        """Advance time by dt and accelerate at the grip limit from rest."""
        vehicle = sample_vehicle_parameters()
        state = initial_state(vehicle, 25.0)
        next_state = integration_step(state, STRAIGHT, 0.01, vehicle)

        cold_grip = 0.7 + 0.3 * 25.0 / 80.0
        expected_accel = 1.8 * cold_grip * GRAVITY
        self.assertAlmostEqual(next_state.time, 0.01)
        self.assertAlmostEqual(next_state.acceleration, expected_accel, delta=1e-2)
        self.assertAlmostEqual(next_state.velocity, expected_accel * 0.01, delta=1e-3)
        self.assertGreater(next_state.position, 0.0)
        self.assertEqual((next_state.throttle, next_state.brake), (1.0, 0.0))
        self.assertGreater(next_state.rear_load, state.rear_load)
        self.assertGreater(next_state.tire_temperature, 25.0)

    def test_step_is_deterministic_and_does_not_mutate_input(self) -> None:
        """Return identical outputs for identical inputs."""
        vehicle = sample_vehicle_parameters()
        state = _rolling_state(35.0, 90.0)
        snapshot = replace(state)

        first = integration_step(state, CORNER, 0.01, vehicle)
        second = integration_step(state, CORNER, 0.01, vehicle)

        self.assertEqual(first, second)
        self.assertEqual(state, snapshot)

    def test_overspeed_in_corner_applies_brakes(self) -> None:
        """Brake when entering a corner above the speed cap."""
        vehicle = sample_vehicle_parameters()
        state = _rolling_state(60.0)
        next_state = integration_step(state, CORNER, 0.01, vehicle)

        self.assertEqual((next_state.throttle, next_state.brake), (0.0, 0.8))
        self.assertLess(next_state.velocity, 60.0)
        self.assertLess(next_state.acceleration, 0.0)
        self.assertGreater(next_state.front_load, next_state.rear_load * 0.46 / 0.54)

    def test_downhill_accelerates_harder_than_level(self) -> None:
        """Add the gravity component along the road to the net force."""
        vehicle = sample_vehicle_parameters()
        state = _rolling_state(50.0)
        downhill = TrackSegment(length=500.0, radius=0.0, inclination=-5.0)
        uphill = TrackSegment(length=500.0, radius=0.0, inclination=5.0)

        level_accel = integration_step(state, STRAIGHT, 0.01, vehicle).acceleration
        self.assertGreater(integration_step(state, downhill, 0.01, vehicle).acceleration, level_accel)
        self.assertLess(integration_step(state, uphill, 0.01, vehicle).acceleration, level_accel)

    def test_velocity_is_clamped_to_max_speed(self) -> None:
        """Clamp integrated speed to the numerical safety limit."""
        vehicle = sample_vehicle_parameters()
        state = _rolling_state(100.0)
        next_state = integration_step(state, STRAIGHT, 0.01, vehicle, max_speed=100.0)

        self.assertEqual(next_state.velocity, 100.0)

    def test_loads_sum_to_weight_plus_downforce(self) -> None:
        """Conserve total vertical load after the load update."""
        vehicle = sample_vehicle_parameters()
        next_state = integration_step(_rolling_state(45.0), CORNER, 0.01, vehicle)

        expected = vehicle.mass * GRAVITY + downforce(vehicle, next_state.velocity)
        self.assertAlmostEqual(next_state.total_load, expected, places=6)

    def test_non_finite_state_raises(self) -> None:
        """Abort with a dedicated error when values become NaN."""
        vehicle = sample_vehicle_parameters()
        state = replace(_rolling_state(30.0), tire_temperature=math.nan)

        with self.assertRaises(NonFiniteStateError):
            integration_step(state, STRAIGHT, 0.01, vehicle)

    def test_car_that_cannot_climb_holds_position(self) -> None:
        """Keep position and speed at rest when the grade exceeds drive force."""
        vehicle = replace(sample_vehicle_parameters(), max_power=200.0)
        climb = TrackSegment(length=100.0, radius=0.0, inclination=20.0, label="climb")
        state = initial_state(vehicle)

        for _ in range(50):
            next_state = integration_step(state, climb, 0.01, vehicle)
            self.assertGreaterEqual(next_state.position, state.position)
            state = next_state

        self.assertEqual(state.position, 0.0)
        self.assertEqual(state.velocity, 0.0)
        self.assertEqual(state.acceleration, 0.0)

    def test_runaway_acceleration_raises(self) -> None:
        """Treat an acceleration far beyond any physical bound as divergence."""
        vehicle = replace(sample_vehicle_parameters(), drag_coefficient=1e308)

        with self.assertRaisesRegex(NonFiniteStateError, "diverged"):
            integration_step(initial_state(vehicle), STRAIGHT, 0.01, vehicle)

    def test_divergence_bound_is_configurable(self) -> None:
        """Raise once the mean acceleration exceeds the configured bound."""
        vehicle = sample_vehicle_parameters()
        state = initial_state(vehicle)

        integration_step(state, STRAIGHT, 0.01, vehicle, max_acceleration=50.0)
        with self.assertRaises(NonFiniteStateError):
            integration_step(state, STRAIGHT, 0.01, vehicle, max_acceleration=1.0)


if __name__ == "__main__":
    unittest.main()
