"""Polygon measurement for the polygon drawing tool.

Area is geodesic (pyproj Geod on the WGS84 ellipsoid); perimeter is the closed
haversine loop so it matches the distance tool. Self-intersecting rings are
detected with Shapely and reported as invalid.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

import pyproj
from shapely.geometry import Polygon

from fieldsurvey.core.geo_calculator import GeoCalculator
from fieldsurvey.model.geo_point import GeoPoint

logger = logging.getLogger(__name__)

_GEOD = pyproj.Geod(ellps="WGS84")


@dataclass(frozen=True)
class PolygonMeasurement:
    """Area and perimeter of a drawn polygon.

    Attributes:
        vertices: Polygon vertices in drawing order (ring closed implicitly)
        area_km2: Geodesic area in square kilometers
        perimeter_km: Closed-loop haversine perimeter in kilometers
        is_simple: False if the ring intersects itself
    """

    vertices: tuple[GeoPoint, ...] = field(default=())
    area_km2: float = 0.0
    perimeter_km: float = 0.0
    is_simple: bool = True

    @property
    def is_valid(self) -> bool:
        """At least three vertices, a simple ring and a positive area."""
        return len(self.vertices) >= 3 and self.is_simple and self.area_km2 > 0


class PolygonMeasure:
    """Static helpers for polygon area and perimeter."""

    @staticmethod
    def perimeter_km(vertices: Sequence[GeoPoint]) -> float:
        """Closed-loop perimeter (last vertex connects back to the first)."""
        if len(vertices) < 2:
            return 0.0
        ring = list(vertices) + [vertices[0]]
        return GeoCalculator.path_length_km(ring)

    @staticmethod
    def area_km2(vertices: Sequence[GeoPoint]) -> float:
        """Geodesic area in square kilometers (0 for fewer than 3 vertices)."""
        if len(vertices) < 3:
            return 0.0
        lngs = [v.lng for v in vertices]
        lats = [v.lat for v in vertices]
        area_m2, _ = _GEOD.polygon_area_perimeter(lngs, lats)
        return abs(area_m2) / 1_000_000

    @staticmethod
    def measure(vertices: Sequence[GeoPoint]) -> PolygonMeasurement:
        """Measure a polygon given its vertices in drawing order."""
        vertices = tuple(vertices)
        is_simple = True
        if len(vertices) >= 3:
            is_simple = Polygon([v.lng_lat for v in vertices]).is_valid
            if not is_simple:
                logger.warning(f"Polygon with {len(vertices)} vertices intersects itself")
        return PolygonMeasurement(
            vertices=vertices,
            area_km2=PolygonMeasure.area_km2(vertices),
            perimeter_km=PolygonMeasure.perimeter_km(vertices),
            is_simple=is_simple,
        )
