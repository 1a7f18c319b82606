"""Track segment models, synthetic layouts, and CSV loading."""

from f1lapsim.track.io import load_track_csv
from f1lapsim.track.layouts import (
    build_corner_track,
    build_monaco_style_track,
    build_straight_track,
)
from f1lapsim.track.models import TrackBuilder, TrackDefinition, TrackSegment

__all__ = [
    "TrackBuilder",
    "TrackDefinition",
    "TrackSegment",
    "build_corner_track",
    "build_monaco_style_track",
    "build_straight_track",
    "load_track_csv",
]
