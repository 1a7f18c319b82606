"""Export helpers for simulation outputs."""

from __future__ import annotations

import json
import math
from dataclasses import asdict
from pathlib import Path

from f1lapsim.analysis.kpi import KpiSummary
from f1lapsim.simulation.scenario import SweepResult


def export_kpi_json(kpis: KpiSummary, path: str | Path) -> None:
    """Persist KPI summary as JSON.

    Args:
        kpis: KPI dataclass returned by :func:`f1lapsim.analysis.kpi.compute_kpis`.
        path: Output file path for the JSON document.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(asdict(kpis), indent=2), encoding="utf-8")


def export_sweep_json(result: SweepResult, path: str | Path) -> None:
    """Persist sweep results as JSON, one entry per scenario in input order.

    Telemetry is not exported. Missing lap times are written as ``null``.

    Args:
        result: Sweep result returned by a scenario runner.
        path: Output file path for the JSON document.
    """
    scenarios = [
        {
            "index": item.index,
            "parameter": item.parameter,
            "lap_time": None if math.isnan(item.lap_time) else item.lap_time,
            "status": item.status,
            "error": item.error,
        }
        for item in result
    ]
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(
        json.dumps({"parameter_name": result.parameter_name, "scenarios": scenarios}, indent=2),
        encoding="utf-8",
    )
