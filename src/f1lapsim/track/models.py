"""Track data models."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from f1lapsim.utils.exceptions import TrackDataError

STRAIGHT_RADIUS = 0.0


@dataclass(frozen=True)
class TrackSegment:
    """One constant-radius, constant-grade piece of track.

    Args:
        length: Segment length along the racing line [m].
        radius: Corner radius [m]; ``0`` denotes a straight.
        inclination: Road inclination [deg], positive uphill.
        label: Free-form description such as ``"straight"`` or ``"left"``.
    """

    length: float
    radius: float = STRAIGHT_RADIUS
    inclination: float = 0.0
    label: str = ""

    @property
    def is_straight(self) -> bool:
        """Whether the segment carries no cornering speed cap.

        Returns:
            ``True`` for a zero corner radius.
        """
        return self.radius == STRAIGHT_RADIUS

    def validate(self) -> None:
        """Validate segment geometry.

        Raises:
            f1lapsim.utils.exceptions.TrackDataError: If length or radius is
                negative, or any geometric value is non-finite.
        """
        for name in ("length", "radius", "inclination"):
            value = getattr(self, name)
            if not np.isfinite(value):
                msg = f"segment {name} must be finite, got: {value}"
                raise TrackDataError(msg)
        if self.length < 0.0:
            msg = f"segment length must be non-negative, got: {self.length}"
            raise TrackDataError(msg)
        if self.radius < 0.0:
            msg = f"segment radius must be non-negative, got: {self.radius}"
            raise TrackDataError(msg)
        if abs(self.inclination) >= 90.0:
            msg = f"segment inclination must be within (-90, 90) deg, got: {self.inclination}"
            raise TrackDataError(msg)


@dataclass(frozen=True)
class TrackDefinition:
    """Ordered, immutable sequence of track segments.

    Args:
        segments: Segments in traversal order.
        name: Optional track name used in logs and exports.
    """

    segments: tuple[TrackSegment, ...] = field(default_factory=tuple)
    name: str = ""

    def __iter__(self) -> Iterator[TrackSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> TrackSegment:
        return self.segments[index]

    @property
    def segment_count(self) -> int:
        """Number of segments, including zero-length ones.

        Returns:
            Segment count.
        """
        return len(self.segments)

    @property
    def length(self) -> float:
        """Total track length [m].

        Returns:
            Sum of all segment lengths [m].
        """
        return float(sum(segment.length for segment in self.segments))

    @property
    def segment_end_positions(self) -> np.ndarray:
        """Cumulative end boundary of every segment [m].

        Returns:
            Array whose entry ``i`` is the distance from the start line to the
            end of segment ``i``.
        """
        return np.cumsum([segment.length for segment in self.segments], dtype=float)

    def validate(self) -> None:
        """Validate all segments and require at least one of them.

        Raises:
            f1lapsim.utils.exceptions.TrackDataError: If the track is empty or
                a segment is invalid.
        """
        if not self.segments:
            msg = "Track must contain at least one segment"
            raise TrackDataError(msg)
        for index, segment in enumerate(self.segments):
            try:
                segment.validate()
            except TrackDataError as exc:
                msg = f"segment {index}: {exc}"
                raise TrackDataError(msg) from exc


class TrackBuilder:
    """Incrementally assemble a :class:`TrackDefinition`.

    Segments are validated on :meth:`append`; an invalid segment is rejected
    and the builder keeps its previous contents.
    """

    def __init__(self, name: str = "") -> None:
        self._name = name
        self._segments: list[TrackSegment] = []

    def __len__(self) -> int:
        return len(self._segments)

    def append(
        self,
        length: float,
        radius: float = STRAIGHT_RADIUS,
        inclination: float = 0.0,
        label: str = "",
    ) -> TrackBuilder:
        """Append one segment at the end of the track.

        Args:
            length: Segment length [m].
            radius: Corner radius [m]; ``0`` denotes a straight.
            inclination: Road inclination [deg], positive uphill.
            label: Free-form description.

        Returns:
            The builder itself, for chaining.

        Raises:
            f1lapsim.utils.exceptions.TrackDataError: If the segment is
                invalid. Nothing is appended in that case.
        """
        segment = TrackSegment(
            length=float(length),
            radius=float(radius),
            inclination=float(inclination),
            label=label,
        )
        segment.validate()
        self._segments.append(segment)
        return self

    def build(self) -> TrackDefinition:
        """Freeze the appended segments into a track definition.

        Returns:
            Validated immutable track.

        Raises:
            f1lapsim.utils.exceptions.TrackDataError: If no segment was
                appended.
        """
        track = TrackDefinition(segments=tuple(self._segments), name=self._name)
        track.validate()
        return track
