"""Concurrent parameter sweeps over independent lap simulations."""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Iterator, Sequence
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, wait
from dataclasses import dataclass, replace
from typing import Any

import numpy as np

from f1lapsim.simulation.config import SimulationConfig, build_simulation_config
from f1lapsim.simulation.runner import LapSimulator
from f1lapsim.simulation.state import Telemetry
from f1lapsim.track.models import TrackDefinition
from f1lapsim.utils.exceptions import ConfigurationError
from f1lapsim.vehicle.params import VehicleParameters

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_PARAMETER = "downforce_coefficient"
DEFAULT_EXECUTOR_BACKEND = "thread"
VALID_EXECUTOR_BACKENDS = ("thread", "process")
DEFAULT_KEEP_TELEMETRY = False

STATUS_OK = "ok"
STATUS_FAILED = "failed"
STATUS_CANCELLED = "cancelled"


@dataclass(frozen=True)
class SweepConfig:
    """Worker-pool controls for a scenario sweep.

    Args:
        max_workers: Upper bound on concurrent scenarios. ``None`` uses the
            CPU count. The pool never exceeds the number of scenarios.
        executor_backend: ``thread`` or ``process`` worker pool.
        timeout: Optional wall-clock limit for the whole sweep [s]. Scenarios
            not yet started when it elapses are cancelled; running ones are
            allowed to finish.
        keep_telemetry: Return each scenario's telemetry with its result.
    """

    max_workers: int | None = None
    executor_backend: str = DEFAULT_EXECUTOR_BACKEND
    timeout: float | None = None
    keep_telemetry: bool = DEFAULT_KEEP_TELEMETRY

    def validate(self) -> None:
        """Validate worker-pool settings.

        Raises:
            f1lapsim.utils.exceptions.ConfigurationError: If worker count,
                backend or timeout are invalid.
        """
        if self.max_workers is not None and self.max_workers < 1:
            msg = "max_workers must be at least 1 when provided"
            raise ConfigurationError(msg)
        if self.executor_backend not in VALID_EXECUTOR_BACKENDS:
            msg = (
                "executor_backend must be one of "
                f"{VALID_EXECUTOR_BACKENDS}, got: {self.executor_backend!r}"
            )
            raise ConfigurationError(msg)
        if self.timeout is not None and not (np.isfinite(self.timeout) and self.timeout > 0.0):
            msg = "timeout must be a positive, finite value when provided"
            raise ConfigurationError(msg)
        if not isinstance(self.keep_telemetry, bool):
            msg = "keep_telemetry must be a boolean"
            raise ConfigurationError(msg)

    def worker_count(self, scenario_count: int) -> int:
        """Number of workers used for ``scenario_count`` scenarios.

        Args:
            scenario_count: Number of scenarios in the sweep.

        Returns:
            Worker count in ``[1, scenario_count]``.
        """
        limit = self.max_workers or os.cpu_count() or 1
        return max(1, min(limit, scenario_count))


def build_sweep_config(
    max_workers: int | None = None,
    executor_backend: str = DEFAULT_EXECUTOR_BACKEND,
    timeout: float | None = None,
    keep_telemetry: bool = DEFAULT_KEEP_TELEMETRY,
) -> SweepConfig:
    """Build a validated sweep configuration.

    Args:
        max_workers: Upper bound on concurrent scenarios.
        executor_backend: ``thread`` or ``process`` worker pool.
        timeout: Optional wall-clock limit for the whole sweep [s].
        keep_telemetry: Return each scenario's telemetry with its result.

    Returns:
        Validated sweep configuration.
    """
    config = SweepConfig(
        max_workers=max_workers,
        executor_backend=executor_backend,
        timeout=timeout,
        keep_telemetry=keep_telemetry,
    )
    config.validate()
    return config


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of one scenario in a sweep.

    Args:
        index: Position of the scenario in the input sequence.
        parameter: Swept parameter value used for this scenario.
        lap_time: Lap time [s], ``nan`` unless ``status == "ok"``.
        status: ``ok``, ``failed`` or ``cancelled``.
        error: Failure description naming index and parameter value.
        telemetry: Lap telemetry when requested by the sweep config.
    """

    index: int
    parameter: float
    lap_time: float
    status: str = STATUS_OK
    error: str | None = None
    telemetry: Telemetry | None = None

    @property
    def succeeded(self) -> bool:
        """Whether the lap completed.

        Returns:
            ``True`` for status ``ok``.
        """
        return self.status == STATUS_OK


@dataclass(frozen=True)
class SweepResult:
    """Index-ordered results of a scenario sweep.

    Args:
        parameter_name: Name of the swept vehicle parameter.
        scenarios: One result per input value, in input order.
    """

    parameter_name: str
    scenarios: tuple[ScenarioResult, ...]

    def __iter__(self) -> Iterator[ScenarioResult]:
        return iter(self.scenarios)

    def __len__(self) -> int:
        return len(self.scenarios)

    def __getitem__(self, index: int) -> ScenarioResult:
        return self.scenarios[index]

    @property
    def parameters(self) -> np.ndarray:
        """Swept parameter values in input order."""
        return np.array([item.parameter for item in self.scenarios], dtype=float)

    @property
    def lap_times(self) -> np.ndarray:
        """Lap times in input order, ``nan`` for unsuccessful scenarios [s]."""
        return np.array([item.lap_time for item in self.scenarios], dtype=float)

    @property
    def failed_indices(self) -> tuple[int, ...]:
        """Indices of scenarios that raised during simulation."""
        return tuple(item.index for item in self.scenarios if item.status == STATUS_FAILED)

    @property
    def cancelled_indices(self) -> tuple[int, ...]:
        """Indices of scenarios cancelled before they started."""
        return tuple(item.index for item in self.scenarios if item.status == STATUS_CANCELLED)

    @property
    def succeeded(self) -> bool:
        """Whether every scenario completed.

        Returns:
            ``True`` if no scenario failed or was cancelled.
        """
        return all(item.succeeded for item in self.scenarios)

    def best(self) -> ScenarioResult | None:
        """Scenario with the shortest lap time.

        Returns:
            Fastest successful scenario, or ``None`` if none succeeded.
        """
        completed = [item for item in self.scenarios if item.succeeded]
        if not completed:
            return None
        return min(completed, key=lambda item: (item.lap_time, item.index))

    def to_dataframe(self) -> Any:
        """Return sweep results as a pandas table, one row per scenario.

        Returns:
            ``pandas.DataFrame`` with index, parameter, lap time, status and
            error columns.

        Raises:
            f1lapsim.utils.exceptions.ConfigurationError: If pandas is not
                installed.
        """
        try:
            import pandas as pd  # type: ignore[import-untyped]
        except ModuleNotFoundError as exc:
            msg = "SweepResult.to_dataframe requires pandas. Install with `pip install pandas`."
            raise ConfigurationError(msg) from exc

        return pd.DataFrame(
            {
                "index": [item.index for item in self.scenarios],
                self.parameter_name: [item.parameter for item in self.scenarios],
                "lap_time_s": [item.lap_time for item in self.scenarios],
                "status": [item.status for item in self.scenarios],
                "error": [item.error for item in self.scenarios],
            }
        )


def _failed_result(index: int, parameter_name: str, value: float, exc: BaseException) -> ScenarioResult:
    """Build the result slot for a scenario that raised."""
    msg = f"scenario {index} ({parameter_name}={value!r}) failed: {type(exc).__name__}: {exc}"
    return ScenarioResult(
        index=index,
        parameter=value,
        lap_time=math.nan,
        status=STATUS_FAILED,
        error=msg,
    )


def _run_scenario(
    index: int,
    value: float,
    vehicle: VehicleParameters,
    track: TrackDefinition,
    parameter_name: str,
    config: SimulationConfig,
    keep_telemetry: bool,
) -> ScenarioResult:
    """Simulate one scenario on a private copy of the vehicle parameters.

    Module-level so that process pools can pickle it. Every exception is
    converted into a failed result so one scenario never affects another.
    """
    try:
        variant = replace(vehicle, **{parameter_name: value})
        result = LapSimulator(vehicle=variant, track=track, config=config).run()
    except Exception as exc:
        return _failed_result(index, parameter_name, value, exc)
    return ScenarioResult(
        index=index,
        parameter=value,
        lap_time=result.lap_time,
        telemetry=result.telemetry if keep_telemetry else None,
    )


class ScenarioRunner:
    """Run independent lap simulations for a sweep of one vehicle parameter.

    The base vehicle and track are shared read-only by all scenarios; each
    scenario simulates a copy of the vehicle with the swept field replaced.
    The template is checked up front except for the swept field, which is
    validated per scenario. Results are stored by input index, so
    ``result[i]`` always belongs to ``values[i]`` regardless of completion
    order. A failing scenario is reported in its own slot and never aborts
    the rest of the sweep.

    Args:
        vehicle: Base vehicle parameters used as a template.
        track: Track definition shared by all scenarios.
        parameter: Name of the :class:`VehicleParameters` field to sweep.
        config: Solver configuration shared by all scenarios.
        sweep: Worker-pool configuration.

    Raises:
        f1lapsim.utils.exceptions.ConfigurationError: If ``parameter`` is not
            a vehicle parameter, the template is invalid in any field other
            than the swept one, or a configuration is invalid.
        f1lapsim.utils.exceptions.TrackDataError: If the track is invalid.
    """

    def __init__(
        self,
        vehicle: VehicleParameters,
        track: TrackDefinition,
        parameter: str = DEFAULT_SWEEP_PARAMETER,
        config: SimulationConfig | None = None,
        sweep: SweepConfig | None = None,
    ) -> None:
        if parameter not in VehicleParameters.field_names():
            msg = (
                f"unknown sweep parameter {parameter!r}, expected one of "
                f"{VehicleParameters.field_names()}"
            )
            raise ConfigurationError(msg)
        self.config = config or build_simulation_config()
        self.sweep = sweep or SweepConfig()
        self.config.validate()
        self.sweep.validate()
        vehicle.validate(skip=(parameter,))
        track.validate()
        self.vehicle = vehicle
        self.track = track
        self.parameter = parameter

    def _scenario_config(self) -> SimulationConfig:
        """Solver config handed to workers, recording telemetry only if kept."""
        if self.sweep.keep_telemetry == self.config.runtime.record_telemetry:
            return self.config
        return replace(
            self.config,
            runtime=replace(self.config.runtime, record_telemetry=self.sweep.keep_telemetry),
        )

    def _make_executor(self, workers: int) -> Executor:
        if self.sweep.executor_backend == "process":
            return ProcessPoolExecutor(max_workers=workers)
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scenario")

    def run(self, values: Sequence[float]) -> SweepResult:
        """Simulate one lap per swept value and block until all are done.

        Args:
            values: Ordered parameter values, one scenario each.

        Returns:
            Results in the same order as ``values``.

        Raises:
            f1lapsim.utils.exceptions.ConfigurationError: If a value is not
                a real number.
        """
        try:
            parameters = [float(value) for value in values]
        except (TypeError, ValueError) as exc:
            msg = f"sweep values must be real numbers: {exc}"
            raise ConfigurationError(msg) from exc

        count = len(parameters)
        slots: list[ScenarioResult | None] = [None] * count
        if count == 0:
            return SweepResult(parameter_name=self.parameter, scenarios=())

        workers = self.sweep.worker_count(count)
        scenario_config = self._scenario_config()
        logger.info(
            "Dispatching %d %s scenarios on %d %s workers",
            count,
            self.parameter,
            workers,
            self.sweep.executor_backend,
        )

        futures: dict[Future[ScenarioResult], int] = {}
        executor = self._make_executor(workers)
        try:
            for index, value in enumerate(parameters):
                future = executor.submit(
                    _run_scenario,
                    index,
                    value,
                    self.vehicle,
                    self.track,
                    self.parameter,
                    scenario_config,
                    self.sweep.keep_telemetry,
                )
                futures[future] = index
            _, pending = wait(futures, timeout=self.sweep.timeout)
            if pending:
                cancelled = sum(1 for future in pending if future.cancel())
                logger.warning(
                    "Sweep timed out after %.3f s: cancelled %d queued scenarios, "
                    "waiting for %d running ones",
                    self.sweep.timeout,
                    cancelled,
                    len(pending) - cancelled,
                )
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        for future, index in futures.items():
            value = parameters[index]
            if future.cancelled():
                slots[index] = ScenarioResult(
                    index=index,
                    parameter=value,
                    lap_time=math.nan,
                    status=STATUS_CANCELLED,
                    error=f"scenario {index} ({self.parameter}={value!r}) cancelled before start",
                )
                continue
            try:
                slots[index] = future.result()
            except Exception as exc:
                slots[index] = _failed_result(index, self.parameter, value, exc)

        scenarios = tuple(slot for slot in slots if slot is not None)
        result = SweepResult(parameter_name=self.parameter, scenarios=scenarios)
        for item in result:
            if item.status == STATUS_FAILED:
                logger.warning("%s", item.error)
        logger.info(
            "Sweep finished: %d ok, %d failed, %d cancelled",
            count - len(result.failed_indices) - len(result.cancelled_indices),
            len(result.failed_indices),
            len(result.cancelled_indices),
        )
        return result


def sweep_values(start: float, stop: float, step: float) -> tuple[float, ...]:
    """Evenly spaced sweep values including both end points.

    Args:
        start: First value.
        stop: Last value; must be reachable from ``start`` in whole steps
            within rounding.
        step: Positive spacing.

    Returns:
        Values ``start, start + step, ..., stop``.

    Raises:
        f1lapsim.utils.exceptions.ConfigurationError: If ``step`` is not
            positive or ``stop < start``.
    """
    if not np.isfinite(step) or step <= 0.0:
        msg = "step must be a positive, finite value"
        raise ConfigurationError(msg)
    if not (np.isfinite(start) and np.isfinite(stop)) or stop < start:
        msg = "start and stop must be finite with stop >= start"
        raise ConfigurationError(msg)
    count = int(round((stop - start) / step)) + 1
    return tuple(float(start + step * index) for index in range(count))


def run_parameter_sweep(
    vehicle: VehicleParameters,
    track: TrackDefinition,
    values: Sequence[float],
    parameter: str = DEFAULT_SWEEP_PARAMETER,
    config: SimulationConfig | None = None,
    sweep: SweepConfig | None = None,
) -> SweepResult:
    """Run a one-parameter sweep with a freshly constructed runner.

    Args:
        vehicle: Base vehicle parameters.
        track: Track definition.
        values: Ordered parameter values.
        parameter: Name of the swept vehicle parameter.
        config: Optional solver configuration.
        sweep: Optional worker-pool configuration.

    Returns:
        Index-ordered sweep result.
    """
    runner = ScenarioRunner(
        vehicle=vehicle,
        track=track,
        parameter=parameter,
        config=config,
        sweep=sweep,
    )
    return runner.run(values)
