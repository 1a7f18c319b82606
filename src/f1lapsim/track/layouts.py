"""Synthetic track layout builders for physics-focused test scenarios."""

from __future__ import annotations

from f1lapsim.track.models import TrackBuilder, TrackDefinition
from f1lapsim.utils.exceptions import TrackDataError

DEFAULT_STRAIGHT_LENGTH = 1_000.0
DEFAULT_CORNER_RADIUS = 50.0
DEFAULT_CORNER_LENGTH = 300.0

# (length [m], radius [m], inclination [deg], label)
MONACO_STYLE_SEGMENTS = (
    (200.0, 0.0, 0.0, "straight"),
    (80.0, 50.0, 0.0, "right"),
    (150.0, 0.0, -2.0, "straight"),
    (100.0, 80.0, 0.0, "left"),
    (300.0, 0.0, 0.0, "straight"),
    (60.0, 40.0, 0.0, "right"),
    (120.0, 0.0, 3.0, "straight"),
    (90.0, 120.0, 0.0, "left"),
)


def _validate_positive(name: str, value: float) -> None:
    """Validate that a scalar parameter is strictly positive.

    Args:
        name: Parameter name used in error messages.
        value: Parameter value to validate.

    Raises:
        f1lapsim.utils.exceptions.TrackDataError: If ``value`` is not
            strictly positive.
    """
    if value <= 0.0:
        msg = f"{name} must be positive"
        raise TrackDataError(msg)


def build_straight_track(
    length: float = DEFAULT_STRAIGHT_LENGTH,
    inclination: float = 0.0,
) -> TrackDefinition:
    """Build a single straight segment.

    Args:
        length: Straight length [m].
        inclination: Road inclination [deg].

    Returns:
        One-segment track without cornering speed cap.
    """
    _validate_positive("length", length)
    return TrackBuilder(name="straight").append(length, 0.0, inclination, "straight").build()


def build_corner_track(
    radius: float = DEFAULT_CORNER_RADIUS,
    length: float = DEFAULT_CORNER_LENGTH,
    label: str = "corner",
) -> TrackDefinition:
    """Build a single constant-radius corner.

    Args:
        radius: Corner radius [m].
        length: Arc length driven through the corner [m].
        label: Segment label.

    Returns:
        One-segment track capped by the cornering speed limit.
    """
    _validate_positive("radius", radius)
    _validate_positive("length", length)
    return TrackBuilder(name="corner").append(length, radius, 0.0, label).build()


def build_monaco_style_track() -> TrackDefinition:
    """Build the eight-segment street-circuit demo layout.

    Returns:
        Track with tight and fast corners plus downhill and uphill straights.
    """
    builder = TrackBuilder(name="monaco_style")
    for length, radius, inclination, label in MONACO_STYLE_SEGMENTS:
        builder.append(length, radius, inclination, label)
    return builder.build()
