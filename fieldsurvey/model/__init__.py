"""Data model classes for field survey measurements.

- GeoPoint: Coordinate atom (lat, lng)
- Waypoint: Placed or synthesized point (screen projection, elevation, kind)
- ElevationSample: Waypoint with resolved elevation and sequence position
- ElevationProfile: Ordered samples with derived aggregates
- ExtremaResult: Two markers plus highest/lowest intermediate samples
- MeasuredPath: Distance-tool polyline
- Suggestion: Cross-tool recommendation
- Notification: User-facing status events
"""

from fieldsurvey.model.elevation_profile import ElevationProfile
from fieldsurvey.model.extrema_result import ExtremaResult
from fieldsurvey.model.geo_point import GeoPoint
from fieldsurvey.model.measured_path import MeasuredPath
from fieldsurvey.model.notification import Notification, NotificationType
from fieldsurvey.model.suggestion import Suggestion, SuggestionPanelState, SuggestionPriority
from fieldsurvey.model.waypoint import ElevationSample, Waypoint, WaypointKind

__all__ = [
    "GeoPoint",
    "Waypoint",
    "WaypointKind",
    "ElevationSample",
    "ElevationProfile",
    "ExtremaResult",
    "MeasuredPath",
    "Suggestion",
    "SuggestionPriority",
    "SuggestionPanelState",
    "Notification",
    "NotificationType",
]
