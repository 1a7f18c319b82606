"""Unit tests for aerodynamic and axle-load models."""

from __future__ import annotations

import unittest

from f1lapsim.utils.constants import GRAVITY
from f1lapsim.vehicle import (
    aero_forces,
    downforce,
    drag_force,
    estimate_axle_loads,
    longitudinal_load_transfer,
    static_axle_loads,
)
from tests.helpers import sample_vehicle_parameters


class AeroTests(unittest.TestCase):
    """Validate quadratic aero force laws."""

    def test_drag_and_downforce_follow_dynamic_pressure(self) -> None:
        """Match ``0.5 * rho * A * C * v^2`` for drag and downforce."""
        vehicle = sample_vehicle_parameters()

        self.assertAlmostEqual(drag_force(vehicle, 50.0), 0.5 * 1.225 * 1.5 * 0.7 * 2_500.0)
        self.assertAlmostEqual(downforce(vehicle, 50.0), 0.5 * 1.225 * 1.5 * 3.5 * 2_500.0)
        self.assertEqual(drag_force(vehicle, 0.0), 0.0)

        forces = aero_forces(vehicle, 50.0)
        self.assertAlmostEqual(forces.downforce / forces.drag, 5.0)

    def test_drag_stays_quadratic_beyond_top_speed(self) -> None:
        """Apply the quadratic law at any speed without a hidden cap."""
        vehicle = sample_vehicle_parameters()

        self.assertAlmostEqual(
            drag_force(vehicle, 400.0), 0.5 * 1.225 * 1.5 * 0.7 * 160_000.0, places=6
        )
        self.assertAlmostEqual(drag_force(vehicle, 600.0) / drag_force(vehicle, 300.0), 4.0)


class AxleLoadTests(unittest.TestCase):
    """Validate static split, load transfer and conservation."""

    def test_static_loads_split_by_weight_fractions(self) -> None:
        """Split the vehicle weight by the static fractions at rest."""
        vehicle = sample_vehicle_parameters()
        loads = static_axle_loads(vehicle)

        self.assertAlmostEqual(loads.front, 0.46 * vehicle.mass * GRAVITY)
        self.assertAlmostEqual(loads.rear, 0.54 * vehicle.mass * GRAVITY)
        at_rest = estimate_axle_loads(vehicle, 0.0, 0.0)
        self.assertAlmostEqual(at_rest.front, loads.front, places=9)
        self.assertAlmostEqual(at_rest.rear, loads.rear, places=9)
        self.assertAlmostEqual(loads.total, vehicle.static_load)
        self.assertEqual(vehicle.static_load, vehicle.mass * GRAVITY)

    def test_acceleration_moves_load_rearward(self) -> None:
        """Shift load to the rear under acceleration and forward under braking."""
        vehicle = sample_vehicle_parameters()
        static = static_axle_loads(vehicle)
        transfer = longitudinal_load_transfer(vehicle, 5.0)

        self.assertAlmostEqual(transfer, 5.0 * 798.0 * 0.31 / 3.6)

        accelerating = estimate_axle_loads(vehicle, 0.0, 5.0)
        braking = estimate_axle_loads(vehicle, 0.0, -5.0)
        self.assertAlmostEqual(accelerating.front, static.front - transfer)
        self.assertAlmostEqual(accelerating.rear, static.rear + transfer)
        self.assertAlmostEqual(braking.front, static.front + transfer)

    def test_total_load_includes_downforce(self) -> None:
        """Conserve weight plus downforce independent of load transfer."""
        vehicle = sample_vehicle_parameters()
        expected = vehicle.mass * GRAVITY + downforce(vehicle, 60.0)

        for accel in (-20.0, 0.0, 12.0):
            loads = estimate_axle_loads(vehicle, 60.0, accel)
            self.assertAlmostEqual(loads.total, expected, places=6)


if __name__ == "__main__":
    unittest.main()
