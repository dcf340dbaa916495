"""ExtremaResult - output of the two-marker (four-point) elevation workflow."""

from dataclasses import dataclass

from fieldsurvey.model.elevation_profile import ElevationProfile
from fieldsurvey.model.waypoint import ElevationSample


@dataclass(frozen=True)
class ExtremaResult:
    """Two markers plus the highest and lowest intermediate samples between them.

    Attributes:
        marker1: First endpoint sample (kind MARKER)
        marker2: Second endpoint sample (kind MARKER)
        highest: Highest intermediate sample (kind HIGHEST)
        lowest: Lowest intermediate sample (kind LOWEST)
        intermediates: All samples strictly between the markers
        profile: Profile over the full sampled path, endpoints included
    """

    marker1: ElevationSample
    marker2: ElevationSample
    highest: ElevationSample
    lowest: ElevationSample
    intermediates: tuple[ElevationSample, ...]
    profile: ElevationProfile

    @property
    def points(self) -> tuple[ElevationSample, ElevationSample, ElevationSample, ElevationSample]:
        """The four fixed slots: Marker1, Marker2, Highest, Lowest."""
        return (self.marker1, self.marker2, self.highest, self.lowest)

    @property
    def relief_m(self) -> float:
        """Elevation difference between highest and lowest intermediate sample."""
        return self.highest.elevation - self.lowest.elevation
