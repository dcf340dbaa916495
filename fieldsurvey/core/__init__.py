"""Core measurement classes: geodesy, elevation sampling and analysis.

- GeoCalculator: Haversine distance, linear interpolation, path length
- ElevationProvider: Protocol plus HTTP, DEM and synthetic implementations
- SyntheticElevationModel: Deterministic fallback elevations
- ElevationSampler: Sampled path elevations with retry, fallback and supersede
- ProfileAnalyzer: Gain, loss, grade and extrema aggregates
- ExtremaLocator: Highest/lowest point between two markers
- PolygonMeasure: Polygon area and perimeter
- NotificationSink: Injected outlet for user-facing notifications
"""

from fieldsurvey.core.dem_service import DEMElevationProvider
from fieldsurvey.core.elevation_provider import (
    ElevationProvider,
    OpenMeteoElevationProvider,
    SyntheticElevationProvider,
)
from fieldsurvey.core.elevation_sampler import ElevationSampler
from fieldsurvey.core.extrema_locator import ExtremaLocator
from fieldsurvey.core.fallback_elevation import SyntheticElevationModel
from fieldsurvey.core.geo_calculator import GeoCalculator
from fieldsurvey.core.notifier import (
    LoggingNotificationSink,
    NotificationSink,
    RecordingNotificationSink,
    deliver,
)
from fieldsurvey.core.polygon_measure import PolygonMeasure, PolygonMeasurement
from fieldsurvey.core.profile_analyzer import ProfileAnalyzer

__all__ = [
    # Geodesy
    "GeoCalculator",
    # Elevation providers
    "ElevationProvider",
    "OpenMeteoElevationProvider",
    "SyntheticElevationProvider",
    "DEMElevationProvider",
    "SyntheticElevationModel",
    # Sampling and analysis
    "ElevationSampler",
    "ProfileAnalyzer",
    "ExtremaLocator",
    "PolygonMeasure",
    "PolygonMeasurement",
    # Notifications
    "NotificationSink",
    "LoggingNotificationSink",
    "RecordingNotificationSink",
    "deliver",
]
