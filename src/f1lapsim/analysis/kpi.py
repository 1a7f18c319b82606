"""KPI calculation from simulation results."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from f1lapsim.simulation.runner import MPS_TO_KPH, LapResult
from f1lapsim.utils.constants import GRAVITY


@dataclass(frozen=True)
class KpiSummary:
    """Summary metrics for a lap simulation.

    Args:
        lap_time: Total lap time [s].
        max_speed_kph: Peak speed [km/h].
        max_accel_g: Peak positive longitudinal acceleration (g).
        max_braking_g: Peak deceleration magnitude (g).
        max_tire_temperature: Peak tire temperature [degC].
        telemetry_points: Number of recorded telemetry states.
    """

    lap_time: float
    max_speed_kph: float
    max_accel_g: float
    max_braking_g: float
    max_tire_temperature: float
    telemetry_points: int


def compute_kpis(result: LapResult) -> KpiSummary:
    """Compute headline KPIs from a lap result.

    Args:
        result: Lap result with recorded telemetry.

    Returns:
        Aggregated KPI summary. Telemetry-based values are ``0`` when the
        lap was run without telemetry recording.
    """
    telemetry = result.telemetry
    if len(telemetry) == 0:
        return KpiSummary(
            lap_time=float(result.lap_time),
            max_speed_kph=0.0,
            max_accel_g=0.0,
            max_braking_g=0.0,
            max_tire_temperature=0.0,
            telemetry_points=0,
        )

    speed = telemetry.velocity
    accel = telemetry.acceleration

    return KpiSummary(
        lap_time=float(result.lap_time),
        max_speed_kph=float(np.max(speed) * MPS_TO_KPH),
        max_accel_g=float(max(np.max(accel), 0.0) / GRAVITY),
        max_braking_g=float(abs(min(np.min(accel), 0.0)) / GRAVITY),
        max_tire_temperature=float(np.max(telemetry.tire_temperature)),
        telemetry_points=len(telemetry),
    )
