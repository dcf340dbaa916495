"""ElevationProfile - ordered elevation samples with derived aggregates.

Profiles are built only by ProfileAnalyzer.analyze(), so the aggregate fields
always match the sample sequence. The dataclass is frozen: a changed sequence
means a new profile.
"""

from dataclasses import dataclass, field

from fieldsurvey.constants import UnitConfig
from fieldsurvey.model.waypoint import ElevationSample


@dataclass(frozen=True)
class ElevationProfile:
    """Read-only elevation profile snapshot for chart rendering.

    Attributes:
        samples: Ordered samples (sequence_index ascending)
        total_distance_km: Sum of haversine distances between consecutive samples
        elevation_gain_m: Sum of positive elevation deltas
        elevation_loss_m: Sum of absolute negative elevation deltas
        min_elevation_m: Lowest sample elevation
        max_elevation_m: Highest sample elevation
        average_elevation_m: Mean sample elevation
        grade_percent: Net elevation change over horizontal distance, in percent
    """

    samples: tuple[ElevationSample, ...]
    total_distance_km: float
    elevation_gain_m: float
    elevation_loss_m: float
    min_elevation_m: float
    max_elevation_m: float
    average_elevation_m: float
    grade_percent: float
    cumulative_distances_km: tuple[float, ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return len(self.samples) == 0

    @property
    def approximated_count(self) -> int:
        """Number of samples whose elevation came from the synthetic fallback."""
        return sum(1 for s in self.samples if s.approximated)

    @property
    def has_approximations(self) -> bool:
        return self.approximated_count > 0

    def elevations(self, unit: str = "meters") -> list[float]:
        """Sample elevations converted to the display unit."""
        return [UnitConfig.convert_elevation(elevation_m=s.elevation, unit=unit) for s in self.samples]

    def __repr__(self) -> str:
        return (
            f"ElevationProfile({len(self.samples)} samples, {self.total_distance_km:.2f}km, "
            f"+{self.elevation_gain_m:.0f}m/-{self.elevation_loss_m:.0f}m, grade={self.grade_percent:.1f}%)"
        )
