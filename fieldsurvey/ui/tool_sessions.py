"""Per-tool measurement sessions fed by map clicks.

Each session owns the points captured while its tool is primary and reports
has_data changes through on_data_change so the activation machine (and with
it the suggestion engine) stays in sync.

Elevation modes:
    SINGLE      each click replaces the previous spot elevation
    PROFILE     clicks append waypoints; >= 2 waypoints are sampled into a profile
    FOUR_POINT  two markers -> highest/lowest between them; a third click starts over
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional

from fieldsurvey.constants import SamplingConfig, ToolConfig
from fieldsurvey.core.elevation_sampler import ElevationSampler
from fieldsurvey.core.extrema_locator import ExtremaLocator
from fieldsurvey.core.polygon_measure import PolygonMeasure, PolygonMeasurement
from fieldsurvey.core.profile_analyzer import ProfileAnalyzer
from fieldsurvey.errors import Superseded
from fieldsurvey.model.elevation_profile import ElevationProfile
from fieldsurvey.model.extrema_result import ExtremaResult
from fieldsurvey.model.geo_point import GeoPoint
from fieldsurvey.model.measured_path import MeasuredPath
from fieldsurvey.model.waypoint import ElevationSample, Waypoint

logger = logging.getLogger(__name__)

DataChangeCallback = Callable[[bool], None]


class _DataTracking(ABC):
    """Calls on_data_change whenever has_data flips."""

    on_data_change: Optional[DataChangeCallback]
    _last_has_data: bool

    @property
    @abstractmethod
    def has_data(self) -> bool:
        """Whether the session holds a measurement worth reporting."""

    def _data_changed(self) -> None:
        has_data = self.has_data
        if has_data == self._last_has_data:
            return
        self._last_has_data = has_data
        if self.on_data_change is not None:
            self.on_data_change(has_data)


# =============================================================================
# ELEVATION
# =============================================================================


class ElevationMode(Enum):
    SINGLE = "single"
    PROFILE = "profile"
    FOUR_POINT = "four_point"


class ElevationToolSession(_DataTracking):
    """Elevation tool state: spot elevations, profiles and four-point extrema.

    Clicks resolve concurrently and keep their click order (stored as the spot
    sample's sequence_index), so a slow lookup never drops or reorders a placed
    point. Spot lookups run under `<profile_id>.points`; only clear() and
    invalidate() cancel them. Profile and extrema runs use profile_id, so a
    newer run supersedes an older one and leaves state untouched.
    """

    tool = ToolConfig.ELEVATION

    def __init__(
        self,
        sampler: ElevationSampler,
        locator: ExtremaLocator,
        mode: ElevationMode = ElevationMode.SINGLE,
        sample_count: int = SamplingConfig.DEFAULT_SAMPLE_COUNT,
        profile_id: str = ToolConfig.ELEVATION,
        on_data_change: Optional[DataChangeCallback] = None,
    ) -> None:
        self.sampler = sampler
        self.locator = locator
        self.mode = mode
        self.sample_count = sample_count
        self.profile_id = profile_id
        self.points_id = f"{profile_id}.points"
        self.on_data_change = on_data_change
        self._last_has_data = False
        self._clicks = 0

        self.points: list[ElevationSample] = []
        self.profile: ElevationProfile | None = None
        self.extrema: ExtremaResult | None = None
        self.progress: float = 0.0

    @property
    def has_data(self) -> bool:
        return bool(self.points) or self.profile is not None or self.extrema is not None

    @property
    def markers(self) -> list[ElevationSample]:
        return list(self.points)

    def set_mode(self, mode: ElevationMode) -> None:
        """Switch mode; captured points from another mode are discarded."""
        if mode == self.mode:
            return
        logger.info(f"Elevation mode {self.mode.value} -> {mode.value}")
        self.mode = mode
        self.clear()

    def invalidate(self) -> None:
        """Abandon in-flight lookups and runs without touching captured data."""
        self.sampler.invalidate(self.profile_id)
        self.sampler.invalidate(self.points_id)

    def clear(self) -> None:
        self.invalidate()
        self._clicks = 0
        self.points = []
        self.profile = None
        self.extrema = None
        self.progress = 0.0
        self._data_changed()

    def _on_progress(self, progress: float) -> None:
        self.progress = progress

    async def add_point(self, point: GeoPoint, x: float = 0.0, y: float = 0.0) -> None:
        """Handle a map click routed to the elevation tool."""
        order = self._clicks
        self._clicks += 1
        label = f"Marker {order % 2 + 1}" if self.mode is ElevationMode.FOUR_POINT else None
        waypoint = Waypoint.at(point, x=x, y=y, label=label)

        try:
            sample = await self.sampler.lookup(waypoint=waypoint, profile_id=self.points_id, sequence_index=order)
        except Superseded as exc:
            logger.debug(f"Elevation lookup dropped: {exc}")
            return

        if self.mode is ElevationMode.SINGLE:
            if self.points and self.points[0].sequence_index > order:
                logger.debug(f"Spot elevation for click {order} arrived after a newer click")
            else:
                self.points = [sample]
        elif self.mode is ElevationMode.PROFILE:
            self.points = sorted(self.points + [sample], key=lambda s: s.sequence_index)
            if len(self.points) >= 2:
                await self._build_profile()
        else:
            await self._add_marker(sample)
        self._data_changed()

    async def _build_profile(self) -> None:
        try:
            samples = await self.sampler.sample_path(
                path=self.points,
                sample_count=self.sample_count,
                profile_id=self.profile_id,
                progress_callback=self._on_progress,
            )
        except Superseded as exc:
            logger.debug(f"Profile run dropped: {exc}")
            return
        self.profile = ProfileAnalyzer.analyze(samples=samples)

    async def _add_marker(self, sample: ElevationSample) -> None:
        # Clicks 0-1 form the first pair, 2-3 the second, and so on
        pair = sample.sequence_index // 2
        current_pair = self.points[0].sequence_index // 2 if self.points else None

        if current_pair is not None and pair < current_pair:
            logger.debug(f"Marker from replaced pair {pair} ignored")
            return
        if current_pair is None or pair > current_pair:
            if current_pair is not None:
                self.sampler.invalidate(self.profile_id)
            self.points = [sample]
            self.extrema = None
            return

        self.points = sorted(self.points + [sample], key=lambda s: s.sequence_index)
        try:
            self.extrema = await self.locator.locate_extrema(
                marker_a=self.points[0],
                marker_b=self.points[1],
                sample_count=self.sample_count,
                profile_id=self.profile_id,
                progress_callback=self._on_progress,
            )
        except Superseded as exc:
            logger.debug(f"Extrema run dropped: {exc}")


# =============================================================================
# DISTANCE
# =============================================================================


class DistanceToolSession(_DataTracking):
    """Distance tool state: a polyline measured with haversine."""

    tool = ToolConfig.DISTANCE

    def __init__(self, on_data_change: Optional[DataChangeCallback] = None) -> None:
        self.path = MeasuredPath()
        self.on_data_change = on_data_change
        self._last_has_data = False

    @property
    def has_data(self) -> bool:
        return self.path.has_data

    def add_point(self, point: GeoPoint) -> None:
        self.path.add(point)
        self._data_changed()

    def undo(self) -> GeoPoint | None:
        removed = self.path.undo()
        self._data_changed()
        return removed

    def clear(self) -> None:
        self.path.clear()
        self._data_changed()


# =============================================================================
# POLYGON
# =============================================================================


class PolygonToolSession(_DataTracking):
    """Polygon tool state: vertices plus their latest measurement."""

    tool = ToolConfig.POLYGON

    def __init__(self, on_data_change: Optional[DataChangeCallback] = None) -> None:
        self.vertices: list[GeoPoint] = []
        self.measurement = PolygonMeasurement()
        self.on_data_change = on_data_change
        self._last_has_data = False

    @property
    def has_data(self) -> bool:
        return self.measurement.is_valid

    def add_vertex(self, point: GeoPoint) -> None:
        self.vertices.append(point)
        self._remeasure()

    def undo(self) -> GeoPoint | None:
        removed = self.vertices.pop() if self.vertices else None
        self._remeasure()
        return removed

    def clear(self) -> None:
        self.vertices = []
        self._remeasure()

    def _remeasure(self) -> None:
        self.measurement = PolygonMeasure.measure(vertices=self.vertices)
        self._data_changed()
