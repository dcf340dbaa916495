"""Geodesic calculations on Earth's surface.

Provides the geographic helpers behind every measurement tool:
- Distance calculation (Haversine formula)
- Linear interpolation in lat/lng space (path sampling)
- Path length accumulation
- Coordinate validation

All calculations use a spherical Earth approximation (R = 6,371 km).
Interpolation is linear in lat/lng, which is not geodesic-exact but matches
the sub-kilometer spacing used for elevation sampling.
"""

from math import atan2, cos, isnan, radians, sin, sqrt
from typing import Iterable

from fieldsurvey.constants import GeoConfig, UnitConfig
from fieldsurvey.errors import InvalidArgument
from fieldsurvey.model.geo_point import GeoPoint, validate_coordinates

# Earth's radius in kilometers (spherical approximation)
EARTH_RADIUS_KM = GeoConfig.EARTH_RADIUS_KM


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    Coordinates are in decimal degrees (WGS84).
    Distances are in kilometers.
    """

    EARTH_RADIUS_KM = EARTH_RADIUS_KM

    @staticmethod
    def validate_coordinates(lat: float, lng: float) -> None:
        """Raise InvalidArgument if lat/lng are NaN or out of range."""
        validate_coordinates(lat=lat, lng=lng)

    @staticmethod
    def haversine_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lng1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lng2: Longitude of second point (decimal degrees)

        Returns:
            Distance in kilometers.

        Raises:
            InvalidArgument: If any coordinate is out of range.
        """
        GeoCalculator.validate_coordinates(lat=lat1, lng=lng1)
        GeoCalculator.validate_coordinates(lat=lat2, lng=lng2)
        dlat = radians(lat2 - lat1)
        dlng = radians(lng2 - lng1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng / 2) ** 2
        return EARTH_RADIUS_KM * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def distance_km(a: GeoPoint, b: GeoPoint) -> float:
        """Great-circle distance between two GeoPoints in kilometers.

        Symmetric, and zero for identical points.
        """
        return GeoCalculator.haversine_distance_km(lat1=a.lat, lng1=a.lng, lat2=b.lat, lng2=b.lng)

    @staticmethod
    def interpolate(a: GeoPoint, b: GeoPoint, t: float) -> GeoPoint:
        """Linear interpolation between two points in lat/lng space.

        Uses the (1 - t) * a + t * b form so both endpoints are reproduced exactly.

        Args:
            a: Start point (t = 0)
            b: End point (t = 1)
            t: Interpolation factor in [0, 1]

        Returns:
            Interpolated GeoPoint.

        Raises:
            InvalidArgument: If t is outside [0, 1].
        """
        if isnan(t) or not 0.0 <= t <= 1.0:
            raise InvalidArgument(f"Interpolation factor t={t} outside [0, 1]")
        return GeoPoint(
            lat=(1 - t) * a.lat + t * b.lat,
            lng=(1 - t) * a.lng + t * b.lng,
        )

    @staticmethod
    def path_length_km(points: Iterable[GeoPoint]) -> float:
        """Sum of great-circle distances between consecutive points."""
        total = 0.0
        previous: GeoPoint | None = None
        for point in points:
            if previous is not None:
                total += GeoCalculator.distance_km(a=previous, b=point)
            previous = point
        return total

    @staticmethod
    def km_to_miles(distance_km: float) -> float:
        """Convert kilometers to statute miles."""
        return distance_km * UnitConfig.KM_TO_MILES

    @staticmethod
    def approximate_pixel_to_geo(x: float, y: float, width: float, height: float) -> GeoPoint:
        """Approximate pixel -> geo projection over a fixed overview bounding box.

        Only meant for a non-production fallback map; real clicks arrive
        already resolved to GeoPoints from the map widget.

        Args:
            x: Pixel x from the left edge
            y: Pixel y from the top edge
            width: Map width in pixels
            height: Map height in pixels

        Returns:
            GeoPoint inside the fallback bounding box.
        """
        if width <= 0 or height <= 0:
            raise InvalidArgument(f"Map size must be positive, got {width}x{height}")
        fx = min(max(x / width, 0.0), 1.0)
        fy = min(max(y / height, 0.0), 1.0)
        lat = GeoConfig.FALLBACK_BBOX_NORTH - fy * (GeoConfig.FALLBACK_BBOX_NORTH - GeoConfig.FALLBACK_BBOX_SOUTH)
        lng = GeoConfig.FALLBACK_BBOX_WEST + fx * (GeoConfig.FALLBACK_BBOX_EAST - GeoConfig.FALLBACK_BBOX_WEST)
        return GeoPoint(lat=lat, lng=lng)
