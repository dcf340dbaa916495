"""Extrema location between two markers (four-point elevation workflow).

Samples the straight line between two markers and classifies the highest and
lowest intermediate samples. The markers themselves are never candidates.
When several samples share the extreme elevation the first one in sequence
order wins.
"""

import logging
from typing import Callable, Optional

import numpy as np

from fieldsurvey.constants import SamplingConfig, UnitConfig
from fieldsurvey.core.elevation_sampler import ElevationSampler
from fieldsurvey.core.notifier import NotificationSink, deliver
from fieldsurvey.core.profile_analyzer import ProfileAnalyzer
from fieldsurvey.errors import InvalidArgument
from fieldsurvey.model.extrema_result import ExtremaResult
from fieldsurvey.model.notification import ExtremaFoundNotification, SamplingStartedNotification
from fieldsurvey.model.waypoint import ElevationSample, Waypoint, WaypointKind

logger = logging.getLogger(__name__)


class ExtremaLocator:
    """Finds highest/lowest intermediate points between two markers.

    Example:
        locator = ExtremaLocator(sampler=sampler)
        result = await locator.locate_extrema(marker_a=a, marker_b=b, sample_count=20)
        marker1, marker2, highest, lowest = result.points
    """

    def __init__(
        self,
        sampler: ElevationSampler,
        notifier: Optional[NotificationSink] = None,
        unit: str = "meters",
    ) -> None:
        self.sampler = sampler
        self.notifier = notifier
        self.unit = unit

    @staticmethod
    def select_extrema(intermediates: list[ElevationSample]) -> tuple[ElevationSample, ElevationSample]:
        """Pick (highest, lowest) from candidates; ties go to the earliest sample.

        Raises:
            InvalidArgument: If there are no candidates.
        """
        if not intermediates:
            raise InvalidArgument("No intermediate samples to classify")
        elevations = np.array([s.elevation for s in intermediates], dtype=float)
        # argmax/argmin return the first occurrence of the extreme value
        return intermediates[int(np.argmax(elevations))], intermediates[int(np.argmin(elevations))]

    def _label(self, prefix: str, elevation_m: float) -> str:
        value = UnitConfig.convert_elevation(elevation_m=elevation_m, unit=self.unit)
        return f"{prefix} ({value:.1f} {UnitConfig.ELEVATION_SUFFIX[self.unit]})"

    async def locate_extrema(
        self,
        marker_a: Waypoint,
        marker_b: Waypoint,
        sample_count: int = SamplingConfig.DEFAULT_SAMPLE_COUNT,
        profile_id: str = SamplingConfig.DEFAULT_PROFILE_ID,
        progress_callback: Optional[Callable[[float], None]] = None,
    ) -> ExtremaResult:
        """Sample between two markers and classify the extreme intermediate samples.

        Args:
            marker_a: First marker
            marker_b: Second marker
            sample_count: Intervals between the markers (>= 2 so intermediates exist)
            profile_id: Profile slot for supersede tracking
            progress_callback: Optional callback receiving progress 0.0-1.0

        Returns:
            ExtremaResult with the four fixed slots and the full-path profile.

        Raises:
            InvalidArgument: If sample_count < 2.
            Superseded: If a newer run replaced this one.
        """
        if sample_count < 2:
            raise InvalidArgument(f"sample_count must be >= 2 to have intermediate samples, got {sample_count}")

        deliver(self.notifier, SamplingStartedNotification(sample_count=sample_count))
        samples = await self.sampler.sample_path(
            path=[marker_a, marker_b],
            sample_count=sample_count,
            profile_id=profile_id,
            progress_callback=progress_callback,
        )

        intermediates = samples[1:-1]
        highest, lowest = self.select_extrema(intermediates=intermediates)

        result = ExtremaResult(
            marker1=samples[0].with_kind(WaypointKind.MARKER, label=marker_a.label or "Marker 1"),
            marker2=samples[-1].with_kind(WaypointKind.MARKER, label=marker_b.label or "Marker 2"),
            highest=highest.with_kind(WaypointKind.HIGHEST, label=self._label("Highest Point", highest.elevation)),
            lowest=lowest.with_kind(WaypointKind.LOWEST, label=self._label("Lowest Point", lowest.elevation)),
            intermediates=tuple(intermediates),
            profile=ProfileAnalyzer.analyze(samples=samples),
        )

        logger.info(
            f"Extrema between markers: highest #{highest.sequence_index} {highest.elevation:.1f}m, "
            f"lowest #{lowest.sequence_index} {lowest.elevation:.1f}m"
        )
        deliver(
            self.notifier,
            ExtremaFoundNotification(highest_m=highest.elevation, lowest_m=lowest.elevation, unit=self.unit),
        )
        return result
