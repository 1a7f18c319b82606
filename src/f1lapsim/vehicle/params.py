"""Vehicle parameter definitions for the longitudinal lap model."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, fields

import numpy as np

from f1lapsim.utils.constants import GRAVITY, STANDARD_AIR_DENSITY
from f1lapsim.utils.exceptions import ConfigurationError

WEIGHT_FRACTION_SUM_TOLERANCE = 1e-6
POSITIVE_FIELDS = (
    "mass",
    "wheelbase",
    "frontal_area",
    "wheel_radius",
    "max_power",
    "tire_grip_coefficient",
    "air_density",
)
WEIGHT_FRACTION_FIELDS = ("front_weight_fraction", "rear_weight_fraction")
NON_NEGATIVE_FIELDS = (
    "drag_coefficient",
    "downforce_coefficient",
    "max_brake_torque",
    "cg_height",
    "suspension_stiffness",
)


@dataclass(frozen=True)
class VehicleParameters:
    """Vehicle and chassis parameters for lap-time simulation.

    Args:
        mass: Vehicle mass [kg].
        drag_coefficient: Aerodynamic drag coefficient.
        frontal_area: Frontal reference area [m^2].
        downforce_coefficient: Aerodynamic downforce coefficient.
        max_power: Peak engine power at the wheels [W].
        max_brake_torque: Peak brake torque [N*m].
        tire_grip_coefficient: Tire friction coefficient ``mu``.
        wheel_radius: Loaded wheel radius [m].
        front_weight_fraction: Static front axle weight fraction in ``(0, 1)``.
        rear_weight_fraction: Static rear axle weight fraction in ``(0, 1)``.
        cg_height: Center-of-gravity height above ground [m].
        wheelbase: Wheelbase [m].
        suspension_stiffness: Combined front/rear spring rate [N/m].
        air_density: Air density [kg/m^3].
    """

    mass: float
    drag_coefficient: float
    frontal_area: float
    downforce_coefficient: float
    max_power: float
    max_brake_torque: float
    tire_grip_coefficient: float
    wheel_radius: float
    front_weight_fraction: float
    rear_weight_fraction: float
    cg_height: float
    wheelbase: float
    suspension_stiffness: float
    air_density: float = STANDARD_AIR_DENSITY

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of all scalar parameters that can be overridden.

        Returns:
            Field names in declaration order.
        """
        return tuple(item.name for item in fields(cls))

    def validate(self, skip: Collection[str] = ()) -> None:
        """Validate configuration values before simulation.

        Args:
            skip: Field names left unchecked, for templates whose listed
                fields are replaced before use. Skipping either weight
                fraction also skips their sum check.

        Raises:
            f1lapsim.utils.exceptions.ConfigurationError: If any parameter
                violates its defined bound.
        """
        checked = [name for name in self.field_names() if name not in skip]
        for name in checked:
            value = getattr(self, name)
            if not np.isfinite(value):
                msg = f"{name} must be finite, got: {value}"
                raise ConfigurationError(msg)
        for name in POSITIVE_FIELDS:
            if name in checked and getattr(self, name) <= 0.0:
                msg = f"{name} must be positive"
                raise ConfigurationError(msg)
        for name in WEIGHT_FRACTION_FIELDS:
            if name in checked and not 0.0 < getattr(self, name) < 1.0:
                msg = f"{name} must be between 0 and 1 (exclusive)"
                raise ConfigurationError(msg)
        if all(name in checked for name in WEIGHT_FRACTION_FIELDS):
            weight_sum = self.front_weight_fraction + self.rear_weight_fraction
            if abs(weight_sum - 1.0) > WEIGHT_FRACTION_SUM_TOLERANCE:
                msg = f"front and rear weight fractions must sum to 1, got: {weight_sum}"
                raise ConfigurationError(msg)
        for name in NON_NEGATIVE_FIELDS:
            if name in checked and getattr(self, name) < 0.0:
                msg = f"{name} must be non-negative"
                raise ConfigurationError(msg)

    @property
    def static_load(self) -> float:
        """Static vertical load without aerodynamic contribution [N].

        Returns:
            Vehicle weight ``m * g`` [N].
        """
        return self.mass * GRAVITY


def default_vehicle_parameters() -> VehicleParameters:
    """Create a representative F1-style parameter set.

    Returns:
        Vehicle parameters close to a minimum-weight modern F1 car.
    """
    return VehicleParameters(
        mass=798.0,
        drag_coefficient=0.7,
        frontal_area=1.5,
        downforce_coefficient=3.5,
        max_power=750_000.0,
        max_brake_torque=5_000.0,
        tire_grip_coefficient=1.8,
        wheel_radius=0.33,
        front_weight_fraction=0.46,
        rear_weight_fraction=0.54,
        cg_height=0.31,
        wheelbase=3.6,
        suspension_stiffness=180_000.0,
    )
