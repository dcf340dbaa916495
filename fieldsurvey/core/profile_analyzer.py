"""Profile analysis - aggregate statistics over an ordered elevation sequence.

Pure and deterministic: the same samples always produce the same profile.

    total_distance_km   = sum of haversine distances between consecutive samples
    elevation_gain_m    = sum of positive consecutive deltas
    elevation_loss_m    = sum of |negative consecutive deltas|
    min/max/average     = over all samples
    grade_percent       = (last - first) / (total_distance_km * 1000) * 100
                          (0 when the distance is 0 or there are fewer than 2 samples)
"""

import logging
from typing import Sequence

import numpy as np

from fieldsurvey.core.geo_calculator import GeoCalculator
from fieldsurvey.errors import InvalidArgument
from fieldsurvey.model.elevation_profile import ElevationProfile
from fieldsurvey.model.waypoint import ElevationSample

logger = logging.getLogger(__name__)


class ProfileAnalyzer:
    """Computes ElevationProfile aggregates from samples."""

    @staticmethod
    def _validate(samples: Sequence[ElevationSample]) -> None:
        for previous, current in zip(samples, samples[1:]):
            if current.sequence_index <= previous.sequence_index:
                raise InvalidArgument(
                    f"Samples must be ordered by strictly increasing sequence_index "
                    f"({previous.sequence_index} followed by {current.sequence_index})"
                )

    @staticmethod
    def analyze(samples: Sequence[ElevationSample]) -> ElevationProfile:
        """Build an ElevationProfile from ordered samples.

        Args:
            samples: Samples ordered by sequence_index

        Returns:
            Profile with all aggregates derived from the samples.

        Raises:
            InvalidArgument: If samples are not in strictly increasing sequence order.
        """
        samples = tuple(samples)
        ProfileAnalyzer._validate(samples)

        if not samples:
            return ElevationProfile(
                samples=(),
                total_distance_km=0.0,
                elevation_gain_m=0.0,
                elevation_loss_m=0.0,
                min_elevation_m=0.0,
                max_elevation_m=0.0,
                average_elevation_m=0.0,
                grade_percent=0.0,
                cumulative_distances_km=(),
            )

        elevations = np.array([s.elevation for s in samples], dtype=float)

        if len(samples) < 2:
            only = float(elevations[0])
            return ElevationProfile(
                samples=samples,
                total_distance_km=0.0,
                elevation_gain_m=0.0,
                elevation_loss_m=0.0,
                min_elevation_m=only,
                max_elevation_m=only,
                average_elevation_m=only,
                grade_percent=0.0,
                cumulative_distances_km=(0.0,),
            )

        legs_km = np.array(
            [GeoCalculator.distance_km(a=samples[i].point, b=samples[i + 1].point) for i in range(len(samples) - 1)]
        )
        cumulative = np.concatenate(([0.0], np.cumsum(legs_km)))
        total_distance_km = float(cumulative[-1])

        deltas = np.diff(elevations)
        gain = float(deltas[deltas > 0].sum())
        loss = float(-deltas[deltas < 0].sum())

        net_change = float(elevations[-1] - elevations[0])
        grade = net_change / (total_distance_km * 1000) * 100 if total_distance_km > 0 else 0.0

        profile = ElevationProfile(
            samples=samples,
            total_distance_km=total_distance_km,
            elevation_gain_m=gain,
            elevation_loss_m=loss,
            min_elevation_m=float(elevations.min()),
            max_elevation_m=float(elevations.max()),
            average_elevation_m=float(elevations.mean()),
            grade_percent=grade,
            cumulative_distances_km=tuple(float(d) for d in cumulative),
        )
        logger.debug(f"Analyzed {profile!r}")
        return profile
