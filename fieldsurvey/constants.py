"""Configuration constants for the field survey engine.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: Streamlit page settings
    GeoConfig: Earth model and coordinate limits
    UnitConfig: Distance/elevation unit conversion
    SamplingConfig: Elevation sampling plan, retry and pacing
    FallbackElevationConfig: Synthetic elevation model constants
    DEMConfig: GeoTIFF elevation data location
    HttpProviderConfig: Remote elevation API settings
    ToolConfig: Known measurement tools
    SuggestionConfig: Suggestion rules and debounce
    NotificationConfig: Notification durations
    ChartConfig: Profile chart rendering
"""

from pathlib import Path

# Package root directory (where fieldsurvey/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of fieldsurvey/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Data directory outside package (downloaded separately, not shipped with package)
DATA_DIR = PROJECT_ROOT / "data"


class AppConfig:
    """Streamlit page settings."""

    TITLE = "Field Survey - Measurement Workbench"
    ICON = "📐"
    LAYOUT = "wide"


class GeoConfig:
    """Earth model and coordinate limits."""

    # Mean Earth radius (spherical approximation used by the haversine formula)
    EARTH_RADIUS_KM = 6371.0
    EARTH_RADIUS_MILES = 3959.0

    MIN_LAT = -90.0
    MAX_LAT = 90.0
    MIN_LNG = -180.0
    MAX_LNG = 180.0

    # Non-production pixel -> geo projection bounding box (India overview map)
    FALLBACK_BBOX_NORTH = 37.6
    FALLBACK_BBOX_SOUTH = 6.4
    FALLBACK_BBOX_WEST = 68.1
    FALLBACK_BBOX_EAST = 97.25

    # Tolerance for "same point" comparisons in kilometers (~1 mm)
    DISTANCE_EPSILON_KM = 1e-6


class UnitConfig:
    """Unit conversions for display."""

    KM_TO_MILES = 0.621371
    METERS_TO_FEET = 3.28084

    DISTANCE_UNITS = ["km", "miles"]
    ELEVATION_UNITS = ["meters", "feet"]

    ELEVATION_SUFFIX = {"meters": "m", "feet": "ft"}
    assert set(ELEVATION_SUFFIX.keys()) == set(ELEVATION_UNITS)

    @staticmethod
    def convert_elevation(elevation_m: float, unit: str) -> float:
        """Convert an elevation in meters to the requested display unit."""
        if unit == "meters":
            return elevation_m
        if unit == "feet":
            return elevation_m * UnitConfig.METERS_TO_FEET
        raise ValueError(f"Unknown elevation unit: {unit}")

    @staticmethod
    def convert_distance(distance_km: float, unit: str) -> float:
        """Convert a distance in kilometers to the requested display unit."""
        if unit == "km":
            return distance_km
        if unit == "miles":
            return distance_km * UnitConfig.KM_TO_MILES
        raise ValueError(f"Unknown distance unit: {unit}")


class SamplingConfig:
    """Elevation sampling plan, retry and pacing."""

    # Samples between two endpoints (sample_count + 1 points inclusive of both ends)
    DEFAULT_SAMPLE_COUNT = 20

    # Provider attempts per point before the synthetic fallback is substituted
    MAX_LOOKUP_ATTEMPTS = 2

    # Advisory pacing between consecutive lookup starts (seconds)
    THROTTLE_S = 0.08

    # Per-lookup timeout; None keeps the platform default
    LOOKUP_TIMEOUT_S: float | None = None

    DEFAULT_PROFILE_ID = "default"


assert SamplingConfig.MAX_LOOKUP_ATTEMPTS >= 1
assert SamplingConfig.DEFAULT_SAMPLE_COUNT >= 1


class FallbackElevationConfig:
    """Synthetic elevation model used when the provider is unavailable.

    Latitude ramp plus two sinusoidal mountain ranges and bounded noise.
    The constants produce plausible values for the Indian subcontinent; they
    are a heuristic, not a validated geographic model.
    """

    # Baseline: max(0, (lat - RAMP_ORIGIN_LAT) * RAMP_M_PER_DEG)
    RAMP_ORIGIN_LAT = 20.0
    RAMP_M_PER_DEG = 200.0

    # Western range: |sin((lng - center) * pi / period)| * amplitude inside [west, east]
    WESTERN_RANGE = {"west": 73.0, "east": 77.0, "center": 75.0, "period": 2.0, "amplitude_m": 800.0}
    # Eastern range
    EASTERN_RANGE = {"west": 78.0, "east": 84.0, "center": 81.0, "period": 3.0, "amplitude_m": 400.0}

    # Noise in [-NOISE_AMPLITUDE_M / 2, +NOISE_AMPLITUDE_M / 2], seeded by rounded coordinates
    NOISE_AMPLITUDE_M = 100.0
    NOISE_SEED_DECIMALS = 5

    # Coastal damping
    COASTAL_MAX_LAT = 15.0
    COASTAL_MIN_LNG = 70.0
    COASTAL_MAX_LNG = 90.0
    COASTAL_FACTOR = 0.3


assert FallbackElevationConfig.WESTERN_RANGE["west"] < FallbackElevationConfig.WESTERN_RANGE["east"]
assert FallbackElevationConfig.EASTERN_RANGE["west"] < FallbackElevationConfig.EASTERN_RANGE["east"]


class DEMConfig:
    """Elevation data file paths."""

    # Any single-band GeoTIFF; reprojected lookups when CRS is not WGS84
    DEM_PATH = DATA_DIR / "survey_dem.tif"


class HttpProviderConfig:
    """Remote elevation API (Open-Meteo elevation endpoint)."""

    BASE_URL = "https://api.open-meteo.com/v1/elevation"
    TIMEOUT_S = 10
    # Open-Meteo answers this value for points without data
    NODATA_VALUE = -9999.0


class ToolConfig:
    """Measurement tools known to the activation machine."""

    DISTANCE = "distance"
    POLYGON = "polygon"
    ELEVATION = "elevation"

    TOOLS = [DISTANCE, POLYGON, ELEVATION]

    DISPLAY_NAMES = {
        DISTANCE: "Distance",
        POLYGON: "Polygon",
        ELEVATION: "Elevation",
    }
    assert set(DISPLAY_NAMES.keys()) == set(TOOLS)

    ICONS = {
        DISTANCE: "📏",
        POLYGON: "⬠",
        ELEVATION: "⛰️",
    }
    assert set(ICONS.keys()) == set(TOOLS)


class SuggestionConfig:
    """Suggestion rules and debounce timing."""

    DEBOUNCE_S = 1.0

    # Active tool with data -> complementary tool to suggest
    COMPLEMENTS = {
        ToolConfig.DISTANCE: ToolConfig.ELEVATION,
        ToolConfig.POLYGON: ToolConfig.DISTANCE,
        ToolConfig.ELEVATION: ToolConfig.POLYGON,
    }

    # The flagship combination surfaced with High priority
    FLAGSHIP_PAIR = (ToolConfig.DISTANCE, ToolConfig.ELEVATION)
    assert FLAGSHIP_PAIR[0] in COMPLEMENTS and COMPLEMENTS[FLAGSHIP_PAIR[0]] == FLAGSHIP_PAIR[1]

    WORKFLOW_ID = "comprehensive-analysis"
    WORKFLOW_TARGET = "workflow"
    EXPORT_ID = "export-combined-data"
    EXPORT_TARGET = "export"

    MIN_ACTIVE_FOR_WORKFLOW = 2
    MIN_WITH_DATA_FOR_EXPORT = 2

    # Copy for complement suggestions, keyed by (source, target)
    COMPLEMENT_TEXT = {
        (ToolConfig.DISTANCE, ToolConfig.ELEVATION): {
            "title": "Add Elevation Analysis",
            "description": "Enhance your distance measurement with elevation profile analysis",
            "rationale": "You have measured distances. Adding elevation data will show the terrain "
            "difficulty and total elevation changes along your measured path.",
            "action": "Activate Elevation Tool",
        },
        (ToolConfig.POLYGON, ToolConfig.DISTANCE): {
            "title": "Measure Perimeter & Internal Distances",
            "description": "Measure distances within and around your polygon areas",
            "rationale": "You have drawn polygons. Distance measurement can help analyze internal "
            "layouts, perimeter calculations, and access routes.",
            "action": "Activate Distance Tool",
        },
        (ToolConfig.ELEVATION, ToolConfig.POLYGON): {
            "title": "Define Elevation Zones",
            "description": "Create polygons around areas with similar elevation characteristics",
            "rationale": "You have elevation data. Drawing polygons can help you define terrain zones, "
            "watershed boundaries, or elevation-based coverage areas.",
            "action": "Activate Polygon Tool",
        },
    }
    assert set(COMPLEMENT_TEXT.keys()) == set(COMPLEMENTS.items())

    WORKFLOW_TEXT = {
        "title": "Comprehensive Site Analysis",
        "description": "You're using multiple tools - consider a systematic site analysis workflow",
        "rationale": "With multiple tools active, you can perform comprehensive site analysis including "
        "terrain, coverage areas, and infrastructure planning.",
        "action": "Open Analysis Guide",
    }
    EXPORT_TEXT = {
        "title": "Export Combined Analysis",
        "description": "Export all measurement data as a comprehensive report",
        "rationale": "You have data from multiple tools. Consider exporting everything as a combined "
        "analysis report for documentation or sharing.",
        "action": "Export All Data",
    }

    WORKFLOW_STEPS = (
        "1. Measure critical distances 2. Analyze elevation profiles "
        "3. Define coverage polygons 4. Export comprehensive data"
    )


class NotificationConfig:
    """Display durations for notifications (milliseconds)."""

    SHORT_MS = 2000
    DEFAULT_MS = 3000
    MEDIUM_MS = 4000
    LONG_MS = 5000
    WORKFLOW_MS = 8000

    # Streamlit toast icons by notification type
    ICONS = {
        "info": "ℹ️",
        "success": "✅",
        "warning": "⚠️",
        "error": "❌",
    }


class ChartConfig:
    """Chart rendering dimensions and settings."""

    DEFAULT_WIDTH = 800
    DEFAULT_HEIGHT = 320

    # Y-axis padding settings
    ELEVATION_PADDING_FACTOR = 0.1  # 10% padding above/below
    ELEVATION_PADDING_MIN_M = 20  # Minimum padding in meters

    PROFILE_COLOR = "#3B82F6"  # blue-500
    APPROXIMATED_COLOR = "#F97316"  # orange-500
    HIGHEST_COLOR = "#EF4444"  # red-500
    LOWEST_COLOR = "#22C55E"  # green-500
    MARKER_COLOR = "#1F2937"  # gray-800
