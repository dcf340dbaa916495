"""GeoPoint - The coordinate atom of every measurement.

A GeoPoint is a validated WGS84 latitude/longitude pair. Map clicks arrive
as GeoPoints; waypoints and samples carry the same coordinates plus extra data.
"""

from dataclasses import dataclass
from math import isnan

from fieldsurvey.constants import GeoConfig
from fieldsurvey.errors import InvalidArgument


def validate_coordinates(lat: float, lng: float) -> None:
    """Raise InvalidArgument if lat/lng are NaN or outside the WGS84 ranges."""
    if isnan(lat) or isnan(lng):
        raise InvalidArgument(f"Coordinates must not be NaN (lat={lat}, lng={lng})")
    if not GeoConfig.MIN_LAT <= lat <= GeoConfig.MAX_LAT:
        raise InvalidArgument(f"Latitude {lat} outside [{GeoConfig.MIN_LAT}, {GeoConfig.MAX_LAT}]")
    if not GeoConfig.MIN_LNG <= lng <= GeoConfig.MAX_LNG:
        raise InvalidArgument(f"Longitude {lng} outside [{GeoConfig.MIN_LNG}, {GeoConfig.MAX_LNG}]")


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 coordinate.

    Attributes:
        lat: Latitude in decimal degrees, [-90, 90]
        lng: Longitude in decimal degrees, [-180, 180]

    Example:
        point = GeoPoint(lat=19.0760, lng=72.8777)
    """

    lat: float
    lng: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        validate_coordinates(lat=self.lat, lng=self.lng)

    @property
    def lat_lng(self) -> tuple[float, float]:
        """Return (lat, lng) tuple - standard geographic order."""
        return (self.lat, self.lng)

    @property
    def lng_lat(self) -> tuple[float, float]:
        """Return (lng, lat) tuple - GeoJSON/PyProj order."""
        return (self.lng, self.lat)

    def __repr__(self) -> str:
        return f"GeoPoint(lat={self.lat:.5f}, lng={self.lng:.5f})"
