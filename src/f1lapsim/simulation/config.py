"""Simulation configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from f1lapsim.utils.constants import AMBIENT_TEMPERATURE, GRAVITY
from f1lapsim.utils.exceptions import ConfigurationError

DEFAULT_TIME_STEP = 0.01
DEFAULT_MIN_SPEED = 0.1
DEFAULT_MAX_SPEED = 100.0
DEFAULT_MAX_STEPS = 1_000_000
DEFAULT_MAX_ACCELERATION = 50.0 * GRAVITY
DEFAULT_INITIAL_TIRE_TEMPERATURE = AMBIENT_TEMPERATURE
DEFAULT_AMBIENT_TEMPERATURE = AMBIENT_TEMPERATURE
DEFAULT_RECORD_TELEMETRY = True
DEFAULT_LOG_SEGMENTS = False


@dataclass(frozen=True)
class NumericsConfig:
    """Numerical controls for the time-domain integrator.

    Args:
        time_step: Fixed RK4 integration step [s].
        min_speed: Speed floor used in the power-limited traction force to
            avoid division by zero [m/s].
        max_speed: Numerical safety clamp on integrated speed [m/s].
        max_steps: Upper bound on integration steps for one lap.
        max_acceleration: Step-averaged acceleration magnitude above which
            the integration is treated as diverged [m/s^2].
    """

    time_step: float = DEFAULT_TIME_STEP
    min_speed: float = DEFAULT_MIN_SPEED
    max_speed: float = DEFAULT_MAX_SPEED
    max_steps: int = DEFAULT_MAX_STEPS
    max_acceleration: float = DEFAULT_MAX_ACCELERATION

    def validate(self) -> None:
        """Validate numerical solver settings.

        Raises:
            f1lapsim.utils.exceptions.ConfigurationError: If any solver
                configuration value violates its bound.
        """
        if not np.isfinite(self.time_step) or self.time_step <= 0.0:
            msg = "time_step must be a positive, finite value"
            raise ConfigurationError(msg)
        if not np.isfinite(self.min_speed) or self.min_speed <= 0.0:
            msg = "min_speed must be a positive, finite value"
            raise ConfigurationError(msg)
        if not np.isfinite(self.max_speed) or self.max_speed <= self.min_speed:
            msg = "max_speed must be finite and greater than min_speed"
            raise ConfigurationError(msg)
        if self.max_steps < 1:
            msg = "max_steps must be at least 1"
            raise ConfigurationError(msg)
        if not np.isfinite(self.max_acceleration) or self.max_acceleration <= 0.0:
            msg = "max_acceleration must be a positive, finite value"
            raise ConfigurationError(msg)


@dataclass(frozen=True)
class RuntimeConfig:
    """Runtime controls that define one simulation run.

    Args:
        initial_tire_temperature: Tire temperature at the standing start [degC].
        ambient_temperature: Ambient temperature the tires cool towards [degC].
        record_telemetry: Keep one state snapshot per integration step.
        log_segments: Log the exit speed of every segment at INFO level.
    """

    initial_tire_temperature: float = DEFAULT_INITIAL_TIRE_TEMPERATURE
    ambient_temperature: float = DEFAULT_AMBIENT_TEMPERATURE
    record_telemetry: bool = DEFAULT_RECORD_TELEMETRY
    log_segments: bool = DEFAULT_LOG_SEGMENTS

    def validate(self) -> None:
        """Validate runtime controls.

        Raises:
            f1lapsim.utils.exceptions.ConfigurationError: If a temperature is
                non-finite or a flag is not boolean.
        """
        if not np.isfinite(self.initial_tire_temperature):
            msg = "initial_tire_temperature must be finite"
            raise ConfigurationError(msg)
        if not np.isfinite(self.ambient_temperature):
            msg = "ambient_temperature must be finite"
            raise ConfigurationError(msg)
        if not isinstance(self.record_telemetry, bool):
            msg = "record_telemetry must be a boolean"
            raise ConfigurationError(msg)
        if not isinstance(self.log_segments, bool):
            msg = "log_segments must be a boolean"
            raise ConfigurationError(msg)


@dataclass(frozen=True)
class SimulationConfig:
    """Top-level solver config composed of runtime and numerics.

    Args:
        runtime: Run controls, independent of physical car data.
        numerics: Discretization controls for numerical integration.
    """

    runtime: RuntimeConfig
    numerics: NumericsConfig

    def validate(self) -> None:
        """Validate combined simulation settings.

        Raises:
            f1lapsim.utils.exceptions.ConfigurationError: If runtime or
                numerical configuration values violate their bounds.
        """
        self.numerics.validate()
        self.runtime.validate()


def build_simulation_config(
    time_step: float = DEFAULT_TIME_STEP,
    numerics: NumericsConfig | None = None,
    initial_tire_temperature: float = DEFAULT_INITIAL_TIRE_TEMPERATURE,
    ambient_temperature: float = DEFAULT_AMBIENT_TEMPERATURE,
    record_telemetry: bool = DEFAULT_RECORD_TELEMETRY,
    log_segments: bool = DEFAULT_LOG_SEGMENTS,
) -> SimulationConfig:
    """Build a validated simulation config with sensible numerical defaults.

    Args:
        time_step: Fixed integration step [s]. Ignored when ``numerics`` is
            given.
        numerics: Optional numerical settings. Defaults to
            :class:`NumericsConfig` with ``time_step``.
        initial_tire_temperature: Tire temperature at the standing start [degC].
        ambient_temperature: Ambient temperature [degC].
        record_telemetry: Keep one state snapshot per integration step.
        log_segments: Log segment exit speeds at INFO level.

    Returns:
        Fully validated simulation configuration.

    Raises:
        f1lapsim.utils.exceptions.ConfigurationError: If assembled runtime or
            numerical settings are inconsistent.
    """
    config = SimulationConfig(
        runtime=RuntimeConfig(
            initial_tire_temperature=initial_tire_temperature,
            ambient_temperature=ambient_temperature,
            record_telemetry=record_telemetry,
            log_segments=log_segments,
        ),
        numerics=numerics or NumericsConfig(time_step=time_step),
    )
    config.validate()
    return config
