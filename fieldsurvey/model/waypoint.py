"""Waypoint and ElevationSample - points placed by users or synthesized by samplers.

A Waypoint is a coordinate with a screen projection and an optional elevation.
An ElevationSample is a Waypoint whose elevation is resolved and whose
position along a path is fixed by sequence_index.

Both are frozen: once classified (marker, highest, lowest, intermediate) a
point never changes; reclassification produces a new object via with_kind().
"""

from dataclasses import dataclass, replace
from enum import Enum
from math import isnan

from fieldsurvey.errors import InvalidArgument
from fieldsurvey.model.geo_point import GeoPoint, validate_coordinates


class WaypointKind(Enum):
    """Semantic role of a point on the map."""

    MARKER = "marker"
    HIGHEST = "highest"
    LOWEST = "lowest"
    INTERMEDIATE = "intermediate"


@dataclass(frozen=True, kw_only=True)
class Waypoint:
    """A user-placed or synthesized point.

    Attributes:
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees
        x: Screen x projection (pixels), 0 when unknown
        y: Screen y projection (pixels), 0 when unknown
        elevation: Elevation in meters, None until resolved
        kind: Semantic role of the point
        label: Optional display label
    """

    lat: float
    lng: float
    x: float = 0.0
    y: float = 0.0
    elevation: float | None = None
    kind: WaypointKind = WaypointKind.MARKER
    label: str | None = None

    def __post_init__(self) -> None:
        """Validate coordinates."""
        validate_coordinates(lat=self.lat, lng=self.lng)

    @classmethod
    def at(cls, point: GeoPoint, x: float = 0.0, y: float = 0.0, label: str | None = None) -> "Waypoint":
        """Create a marker waypoint at a GeoPoint."""
        return cls(lat=point.lat, lng=point.lng, x=x, y=y, label=label)

    @property
    def point(self) -> GeoPoint:
        """Coordinates as a GeoPoint."""
        return GeoPoint(lat=self.lat, lng=self.lng)

    def with_kind(self, kind: WaypointKind, label: str | None = None) -> "Waypoint":
        """Return a copy with a new classification (and optionally label)."""
        return replace(self, kind=kind, label=label if label is not None else self.label)


@dataclass(frozen=True, kw_only=True)
class ElevationSample(Waypoint):
    """A waypoint with resolved elevation at a fixed position along a path.

    Attributes:
        elevation: Elevation in meters (mandatory)
        sequence_index: Position along the path, strictly increasing
        approximated: True when the synthetic fallback supplied the elevation
    """

    elevation: float
    sequence_index: int
    kind: WaypointKind = WaypointKind.INTERMEDIATE
    approximated: bool = False

    def __post_init__(self) -> None:
        """Validate coordinates, elevation and index."""
        super().__post_init__()
        if self.elevation is None or isnan(self.elevation):
            raise InvalidArgument(f"ElevationSample needs a numeric elevation at ({self.lat}, {self.lng})")
        if self.sequence_index < 0:
            raise InvalidArgument(f"sequence_index must be >= 0, got {self.sequence_index}")

    def __repr__(self) -> str:
        flag = "~" if self.approximated else ""
        return (
            f"ElevationSample(#{self.sequence_index}, lat={self.lat:.5f}, lng={self.lng:.5f}, "
            f"elev={flag}{self.elevation:.1f}m, {self.kind.value})"
        )
