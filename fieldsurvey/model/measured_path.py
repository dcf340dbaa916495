"""MeasuredPath - polyline captured by the distance tool with computed metrics.

Stores the clicked points and computes metrics on-the-fly from them, so the
numbers can never drift from the geometry.
"""

from dataclasses import dataclass, field

from fieldsurvey.constants import UnitConfig
from fieldsurvey.model.geo_point import GeoPoint


@dataclass
class MeasuredPath:
    """Ordered distance-tool points with computed distances.

    Attributes:
        points: Clicked points (source of truth for geometry)

    Computed Properties:
        segment_distances_km: Distance of each leg
        cumulative_distances_km: Running total at each point (starts at 0)
        total_distance_km: Sum of all legs
    """

    points: list[GeoPoint] = field(default_factory=list)

    def add(self, point: GeoPoint) -> None:
        self.points.append(point)

    def undo(self) -> GeoPoint | None:
        """Remove and return the last point, if any."""
        return self.points.pop() if self.points else None

    def clear(self) -> None:
        self.points = []

    @property
    def segment_distances_km(self) -> list[float]:
        """Distance of each leg between consecutive points."""
        from fieldsurvey.core.geo_calculator import GeoCalculator

        return [GeoCalculator.distance_km(a=self.points[i], b=self.points[i + 1]) for i in range(len(self.points) - 1)]

    @property
    def cumulative_distances_km(self) -> list[float]:
        """Running distance at each point, starting at 0."""
        if not self.points:
            return []
        cumulative = [0.0]
        for leg in self.segment_distances_km:
            cumulative.append(cumulative[-1] + leg)
        return cumulative

    @property
    def total_distance_km(self) -> float:
        return sum(self.segment_distances_km)

    def total_distance(self, unit: str = "km") -> float:
        """Total distance in the requested display unit ("km" or "miles")."""
        return UnitConfig.convert_distance(distance_km=self.total_distance_km, unit=unit)

    @property
    def has_data(self) -> bool:
        return len(self.points) > 0

    def __repr__(self) -> str:
        return f"MeasuredPath({len(self.points)} points, {self.total_distance_km:.3f}km)"
