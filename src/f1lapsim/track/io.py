"""Track data loading from CSV files."""

from __future__ import annotations

import csv
from pathlib import Path

from f1lapsim.track.models import TrackBuilder, TrackDefinition
from f1lapsim.utils.exceptions import TrackDataError

REQUIRED_COLUMNS = ("length", "radius", "inclination")
OPTIONAL_LABEL_COLUMN = "label"


def load_track_csv(path: str | Path) -> TrackDefinition:
    """Load a segment table CSV into ``TrackDefinition``.

    Args:
        path: Path to a CSV containing ``length``, ``radius``, ``inclination``
            and optionally ``label`` columns, one row per segment.

    Returns:
        Parsed and validated track representation.

    Raises:
        f1lapsim.utils.exceptions.TrackDataError: If the file does not exist,
            has an invalid schema, or contains invalid segments.
    """
    file_path = Path(path)
    if not file_path.exists():
        msg = f"Track file not found: {file_path}"
        raise TrackDataError(msg)

    builder = TrackBuilder(name=file_path.stem)
    with file_path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            msg = f"CSV has no header: {file_path}"
            raise TrackDataError(msg)

        missing = [col for col in REQUIRED_COLUMNS if col not in reader.fieldnames]
        if missing:
            msg = f"Track CSV missing required columns: {missing}"
            raise TrackDataError(msg)

        for row_number, row in enumerate(reader, start=2):
            try:
                length = float(row["length"])
                radius = float(row["radius"])
                inclination = float(row["inclination"])
            except (TypeError, ValueError) as exc:
                msg = f"Invalid numeric value in {file_path} line {row_number}"
                raise TrackDataError(msg) from exc
            label = row.get(OPTIONAL_LABEL_COLUMN) or ""
            builder.append(length, radius, inclination, label)

    return builder.build()
