"""Vehicle state snapshots and per-run telemetry containers."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import astuple, dataclass, fields
from typing import Any

import numpy as np

from f1lapsim.utils.exceptions import ConfigurationError

TELEMETRY_CHANNELS = (
    "time",
    "position",
    "velocity",
    "acceleration",
    "throttle",
    "brake",
    "tire_temperature",
    "front_load",
    "rear_load",
)


@dataclass(frozen=True)
class VehicleState:
    """Instantaneous longitudinal vehicle state.

    Args:
        position: Distance travelled from the start line [m].
        velocity: Vehicle speed [m/s].
        acceleration: Net longitudinal acceleration over the last step [m/s^2].
        time: Elapsed lap time [s].
        throttle: Throttle command in ``[0, 1]``.
        brake: Brake command in ``[0, 1]``.
        tire_temperature: Lumped tire temperature [degC].
        front_load: Front-axle normal load [N].
        rear_load: Rear-axle normal load [N].
    """

    position: float
    velocity: float
    acceleration: float
    time: float
    throttle: float
    brake: float
    tire_temperature: float
    front_load: float
    rear_load: float

    @property
    def total_load(self) -> float:
        """Total vertical load on both axles [N].

        Returns:
            ``front_load + rear_load`` [N].
        """
        return self.front_load + self.rear_load

    def is_finite(self) -> bool:
        """Whether every state value is finite.

        Returns:
            ``False`` if any field is NaN or infinite.
        """
        return all(math.isfinite(value) for value in astuple(self))


class TelemetryRecorder:
    """Append-only buffer of state snapshots owned by a single run."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._states: list[VehicleState] = []

    def __len__(self) -> int:
        return len(self._states)

    def record(self, state: VehicleState) -> None:
        """Record one pre-step state when recording is enabled."""
        if self._enabled:
            self._states.append(state)

    def freeze(self) -> Telemetry:
        """Return an immutable view of everything recorded so far.

        Returns:
            Telemetry holding a tuple copy of the recorded states.
        """
        return Telemetry(states=tuple(self._states))


@dataclass(frozen=True)
class Telemetry:
    """Immutable ordered sequence of recorded vehicle states.

    Args:
        states: State snapshots, one per integration step.
    """

    states: tuple[VehicleState, ...] = ()

    def __iter__(self) -> Iterator[VehicleState]:
        return iter(self.states)

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, index: int) -> VehicleState:
        return self.states[index]

    def channel(self, name: str) -> np.ndarray:
        """Return one state field as an array over all samples.

        Args:
            name: Field name of :class:`VehicleState`.

        Returns:
            Float array with one entry per recorded state.

        Raises:
            f1lapsim.utils.exceptions.ConfigurationError: If ``name`` is not a
                telemetry channel.
        """
        if name not in TELEMETRY_CHANNELS:
            msg = f"unknown telemetry channel {name!r}, expected one of {TELEMETRY_CHANNELS}"
            raise ConfigurationError(msg)
        return np.fromiter(
            (getattr(state, name) for state in self.states),
            dtype=float,
            count=len(self.states),
        )

    @property
    def time(self) -> np.ndarray:
        """Elapsed-time trace [s]."""
        return self.channel("time")

    @property
    def position(self) -> np.ndarray:
        """Distance trace [m]."""
        return self.channel("position")

    @property
    def velocity(self) -> np.ndarray:
        """Speed trace [m/s]."""
        return self.channel("velocity")

    @property
    def acceleration(self) -> np.ndarray:
        """Longitudinal acceleration trace [m/s^2]."""
        return self.channel("acceleration")

    @property
    def tire_temperature(self) -> np.ndarray:
        """Tire temperature trace [degC]."""
        return self.channel("tire_temperature")

    def to_dataframe(self) -> Any:
        """Return the telemetry as a pandas table, one row per state.

        Returns:
            ``pandas.DataFrame`` with one column per telemetry channel.

        Raises:
            f1lapsim.utils.exceptions.ConfigurationError: If pandas is not
                installed.
        """
        try:
            import pandas as pd  # type: ignore[import-untyped]
        except ModuleNotFoundError as exc:
            msg = "Telemetry.to_dataframe requires pandas. Install with `pip install pandas`."
            raise ConfigurationError(msg) from exc

        columns = [item.name for item in fields(VehicleState)]
        return pd.DataFrame(
            [astuple(state) for state in self.states],
            columns=columns,
        )[list(TELEMETRY_CHANNELS)]
