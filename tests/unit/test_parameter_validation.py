"""Validation tests for parameter and configuration dataclasses."""

from __future__ import annotations

import math
import unittest
from dataclasses import FrozenInstanceError, replace

from f1lapsim.simulation.config import NumericsConfig, RuntimeConfig, build_simulation_config
from f1lapsim.simulation.scenario import SweepConfig, build_sweep_config
from f1lapsim.utils.exceptions import ConfigurationError
from f1lapsim.vehicle.params import VehicleParameters, default_vehicle_parameters
from tests.helpers import sample_vehicle_parameters


class VehicleParameterValidationTests(unittest.TestCase):
    """Unit tests for vehicle parameter validation branches."""

    def test_sample_and_default_parameters_are_valid(self) -> None:
        """Accept the shared fixture and the library default set."""
        sample_vehicle_parameters().validate()
        default_vehicle_parameters().validate()

    def test_vehicle_validation_rejects_invalid_values(self) -> None:
        """Raise configuration errors for invalid vehicle parameters."""
        base = sample_vehicle_parameters()

        with self.assertRaises(ConfigurationError):
            replace(base, mass=0.0).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, mass=-10.0).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, wheelbase=0.0).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, frontal_area=0.0).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, wheel_radius=0.0).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, max_power=0.0).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, tire_grip_coefficient=0.0).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, air_density=0.0).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, drag_coefficient=-0.1).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, max_brake_torque=math.nan).validate()

    def test_weight_distribution_must_be_fractions_summing_to_one(self) -> None:
        """Reject weight splits outside (0, 1) or not summing to one."""
        base = sample_vehicle_parameters()

        with self.assertRaises(ConfigurationError):
            replace(base, front_weight_fraction=0.5, rear_weight_fraction=0.6).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, front_weight_fraction=0.0, rear_weight_fraction=1.0).validate()
        with self.assertRaises(ConfigurationError):
            replace(base, front_weight_fraction=1.2, rear_weight_fraction=-0.2).validate()
        replace(base, front_weight_fraction=0.5, rear_weight_fraction=0.5).validate()

    def test_skipped_fields_are_left_unchecked(self) -> None:
        """Check every field except the skipped ones."""
        base = sample_vehicle_parameters()

        replace(base, mass=0.0).validate(skip=("mass",))
        replace(base, front_weight_fraction=0.9).validate(skip=("front_weight_fraction",))
        with self.assertRaisesRegex(ConfigurationError, "wheelbase"):
            replace(base, mass=0.0, wheelbase=0.0).validate(skip=("mass",))
        with self.assertRaisesRegex(ConfigurationError, "sum to 1"):
            replace(base, front_weight_fraction=0.9).validate(skip=("mass",))

    def test_parameters_are_immutable(self) -> None:
        """Forbid attribute assignment on frozen parameter sets."""
        vehicle = sample_vehicle_parameters()
        with self.assertRaises(FrozenInstanceError):
            vehicle.mass = 700.0  # type: ignore[misc]

    def test_field_names_list_sweepable_parameters(self) -> None:
        """Expose the overridable field names in declaration order."""
        names = VehicleParameters.field_names()
        self.assertEqual(names[0], "mass")
        self.assertIn("downforce_coefficient", names)
        self.assertIn("air_density", names)


class ConfigValidationTests(unittest.TestCase):
    """Unit tests for solver and sweep configuration validation."""

    def test_numerics_validation_rejects_invalid_values(self) -> None:
        """Raise configuration errors for invalid numerical settings."""
        with self.assertRaises(ConfigurationError):
            NumericsConfig(time_step=0.0).validate()
        with self.assertRaises(ConfigurationError):
            NumericsConfig(time_step=math.inf).validate()
        with self.assertRaises(ConfigurationError):
            NumericsConfig(min_speed=0.0).validate()
        with self.assertRaises(ConfigurationError):
            NumericsConfig(max_speed=0.05).validate()
        with self.assertRaises(ConfigurationError):
            NumericsConfig(max_steps=0).validate()
        with self.assertRaises(ConfigurationError):
            NumericsConfig(max_acceleration=0.0).validate()
        with self.assertRaises(ConfigurationError):
            NumericsConfig(max_acceleration=math.nan).validate()

    def test_runtime_validation_rejects_invalid_values(self) -> None:
        """Raise configuration errors for invalid runtime settings."""
        with self.assertRaises(ConfigurationError):
            RuntimeConfig(initial_tire_temperature=math.nan).validate()
        with self.assertRaises(ConfigurationError):
            RuntimeConfig(ambient_temperature=math.inf).validate()
        with self.assertRaises(ConfigurationError):
            RuntimeConfig(record_telemetry="yes").validate()  # type: ignore[arg-type]
        with self.assertRaises(ConfigurationError):
            RuntimeConfig(log_segments=1).validate()  # type: ignore[arg-type]

    def test_build_simulation_config_applies_defaults(self) -> None:
        """Build a validated config with the requested time step."""
        config = build_simulation_config(time_step=0.005, record_telemetry=False)

        self.assertEqual(config.numerics.time_step, 0.005)
        self.assertFalse(config.runtime.record_telemetry)
        self.assertFalse(config.runtime.log_segments)

    def test_sweep_config_validation_rejects_invalid_values(self) -> None:
        """Raise configuration errors for invalid worker-pool settings."""
        with self.assertRaises(ConfigurationError):
            build_sweep_config(max_workers=0)
        with self.assertRaises(ConfigurationError):
            build_sweep_config(executor_backend="greenlet")
        with self.assertRaises(ConfigurationError):
            build_sweep_config(timeout=0.0)
        with self.assertRaises(ConfigurationError):
            build_sweep_config(timeout=math.nan)

    def test_worker_count_is_bounded_by_scenario_count(self) -> None:
        """Never start more workers than there are scenarios."""
        self.assertEqual(SweepConfig(max_workers=8).worker_count(3), 3)
        self.assertEqual(SweepConfig(max_workers=2).worker_count(9), 2)
        self.assertGreaterEqual(SweepConfig().worker_count(9), 1)
        self.assertEqual(SweepConfig().worker_count(1), 1)


if __name__ == "__main__":
    unittest.main()
