"""Time-domain lap simulation across a segmented track."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from f1lapsim.simulation.config import SimulationConfig, build_simulation_config
from f1lapsim.simulation.state import Telemetry, TelemetryRecorder, VehicleState
from f1lapsim.simulation.step import initial_state, integration_step
from f1lapsim.track.models import TrackDefinition
from f1lapsim.utils.exceptions import NonFiniteStateError, SimulationStallError
from f1lapsim.vehicle.params import VehicleParameters

logger = logging.getLogger(__name__)

MPS_TO_KPH = 3.6


@dataclass(frozen=True)
class LapResult:
    """Outcome of one simulated lap.

    Args:
        telemetry: Pre-step state snapshots, one per integration step.
        lap_time: Elapsed time of the final state [s].
        final_state: State after the last integration step.
        segment_exit_speeds: Speed at the end of every track segment [m/s].
        step_count: Number of integration steps taken.
    """

    telemetry: Telemetry
    lap_time: float
    final_state: VehicleState
    segment_exit_speeds: tuple[float, ...]
    step_count: int


class LapSimulator:
    """Drive the integration step over every segment of a track.

    The simulator only holds immutable inputs, so :meth:`run` can be called
    repeatedly and always starts from a standing start.

    Args:
        vehicle: Vehicle parameter set.
        track: Track definition traversed in segment order.
        config: Solver configuration. Defaults to
            :func:`f1lapsim.simulation.config.build_simulation_config`.

    Raises:
        f1lapsim.utils.exceptions.ConfigurationError: If vehicle parameters or
            solver configuration are invalid.
        f1lapsim.utils.exceptions.TrackDataError: If the track is invalid.
    """

    def __init__(
        self,
        vehicle: VehicleParameters,
        track: TrackDefinition,
        config: SimulationConfig | None = None,
    ) -> None:
        self.config = config or build_simulation_config()
        vehicle.validate()
        track.validate()
        self.config.validate()
        self.vehicle = vehicle
        self.track = track

    def run(self) -> LapResult:
        """Simulate one lap from a standing start.

        Returns:
            Telemetry, lap time and per-segment exit speeds.

        Raises:
            f1lapsim.utils.exceptions.NonFiniteStateError: If the state
                becomes NaN or infinite.
            f1lapsim.utils.exceptions.SimulationStallError: If the lap needs
                more than ``numerics.max_steps`` integration steps.
        """
        runtime = self.config.runtime
        numerics = self.config.numerics
        recorder = TelemetryRecorder(enabled=runtime.record_telemetry)
        state = initial_state(self.vehicle, runtime.initial_tire_temperature)
        segment_ends = self.track.segment_end_positions
        exit_speeds: list[float] = []
        step_count = 0

        for index, segment in enumerate(self.track):
            if segment.length == 0.0:
                exit_speeds.append(state.velocity)
                continue

            segment_end = float(segment_ends[index])
            while state.position < segment_end:
                if step_count >= numerics.max_steps:
                    msg = (
                        f"lap not finished after {numerics.max_steps} steps "
                        f"(segment {index} {segment.label!r}, position {state.position:.2f} m, "
                        f"speed {state.velocity:.3f} m/s)"
                    )
                    raise SimulationStallError(msg)
                recorder.record(state)
                try:
                    state = integration_step(
                        state,
                        segment,
                        numerics.time_step,
                        self.vehicle,
                        min_speed=numerics.min_speed,
                        max_speed=numerics.max_speed,
                        ambient_temperature=runtime.ambient_temperature,
                        max_acceleration=numerics.max_acceleration,
                    )
                except NonFiniteStateError as exc:
                    msg = f"segment {index} step {step_count}: {exc}"
                    raise NonFiniteStateError(msg) from exc
                step_count += 1

            exit_speeds.append(state.velocity)
            if runtime.log_segments:
                logger.info(
                    "Segment %d (%s): %.0f m, R=%.0f m, exit speed %.1f km/h",
                    index + 1,
                    segment.label or "-",
                    segment.length,
                    segment.radius,
                    state.velocity * MPS_TO_KPH,
                )

        logger.debug(
            "Lap complete in %.3f s after %d steps (%d telemetry points)",
            state.time,
            step_count,
            len(recorder),
        )
        return LapResult(
            telemetry=recorder.freeze(),
            lap_time=state.time,
            final_state=state,
            segment_exit_speeds=tuple(exit_speeds),
            step_count=step_count,
        )


def simulate_lap(
    vehicle: VehicleParameters,
    track: TrackDefinition,
    config: SimulationConfig | None = None,
) -> LapResult:
    """Run one lap with a freshly constructed :class:`LapSimulator`.

    Args:
        vehicle: Vehicle parameter set.
        track: Track definition.
        config: Optional solver configuration.

    Returns:
        Lap result with telemetry and lap time.
    """
    return LapSimulator(vehicle=vehicle, track=track, config=config).run()
