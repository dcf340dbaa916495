"""Elevation sampling along a path.

Turns two or more waypoints into evenly spaced ElevationSamples:

1. Plan: interpolate sample_count + 1 points per segment (both ends included);
   consecutive segments share their joint, which is emitted once.
2. Resolve: look up every planned point concurrently, staggering lookup starts
   by `throttle_s` to respect provider rate limits.
3. Reassemble: results are placed by sequence index, not by arrival order.

Failure handling:
    Each point gets up to `max_attempts` provider attempts. After the last
    failure the synthetic model supplies the elevation and the sample is
    flagged approximated=True. Any provider exception counts as a failed
    attempt, so sampling never fails because of the provider.

Supersede handling:
    Every profile id has a generation counter. Starting a new run or calling
    invalidate() bumps it; a run whose generation is no longer current stops
    issuing lookups and raises Superseded instead of returning stale data.
"""

import asyncio
import logging
from math import isnan
from typing import Callable, Optional, Sequence

from fieldsurvey.constants import SamplingConfig
from fieldsurvey.core.elevation_provider import ElevationProvider
from fieldsurvey.core.fallback_elevation import SyntheticElevationModel
from fieldsurvey.core.geo_calculator import GeoCalculator
from fieldsurvey.core.notifier import NotificationSink, deliver
from fieldsurvey.errors import InvalidArgument, ProviderUnavailable, Superseded
from fieldsurvey.model.notification import FallbackElevationNotification
from fieldsurvey.model.waypoint import ElevationSample, Waypoint, WaypointKind

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


class ElevationSampler:
    """Resolves elevations for sampled paths with retry, fallback and supersede.

    Example:
        sampler = ElevationSampler(provider=OpenMeteoElevationProvider())
        samples = await sampler.sample_path(path=[a, b], sample_count=20, profile_id="elevation")
    """

    def __init__(
        self,
        provider: ElevationProvider,
        fallback: Optional[SyntheticElevationModel] = None,
        notifier: Optional[NotificationSink] = None,
        max_attempts: int = SamplingConfig.MAX_LOOKUP_ATTEMPTS,
        throttle_s: float = SamplingConfig.THROTTLE_S,
        lookup_timeout_s: Optional[float] = SamplingConfig.LOOKUP_TIMEOUT_S,
    ) -> None:
        """Initialize sampler.

        Args:
            provider: Elevation provider for lookups
            fallback: Synthetic model used after provider failures
            notifier: Optional sink for fallback notifications
            max_attempts: Provider attempts per point (>= 1)
            throttle_s: Delay between consecutive lookup starts
            lookup_timeout_s: Per-attempt timeout, None for the platform default
        """
        if max_attempts < 1:
            raise InvalidArgument(f"max_attempts must be >= 1, got {max_attempts}")
        if throttle_s < 0:
            raise InvalidArgument(f"throttle_s must be >= 0, got {throttle_s}")
        self.provider = provider
        self.fallback = fallback or SyntheticElevationModel()
        self.notifier = notifier
        self.max_attempts = max_attempts
        self.throttle_s = throttle_s
        self.lookup_timeout_s = lookup_timeout_s
        self._generations: dict[str, int] = {}

    # ==========================================================================
    # Generations
    # ==========================================================================

    def current_generation(self, profile_id: str) -> int:
        return self._generations.get(profile_id, 0)

    def invalidate(self, profile_id: str) -> int:
        """Invalidate any in-flight run for a profile; returns the new generation."""
        generation = self.current_generation(profile_id) + 1
        self._generations[profile_id] = generation
        logger.debug(f"Profile '{profile_id}' now at generation {generation}")
        return generation

    def _ensure_current(self, profile_id: str, generation: int) -> None:
        if self.current_generation(profile_id) != generation:
            raise Superseded(profile_id=profile_id, generation=generation)

    # ==========================================================================
    # Planning
    # ==========================================================================

    @staticmethod
    def plan_path(path: Sequence[Waypoint], sample_count: int) -> list[Waypoint]:
        """Compute the points to sample along a path.

        Args:
            path: Two or more waypoints
            sample_count: Intervals per segment (>= 1)

        Returns:
            Planned waypoints in sequence order. User waypoints keep kind MARKER
            and their labels; interpolated points are INTERMEDIATE.

        Raises:
            InvalidArgument: If fewer than two waypoints or sample_count < 1.
        """
        if len(path) < 2:
            raise InvalidArgument(f"Path needs at least 2 waypoints, got {len(path)}")
        if sample_count < 1:
            raise InvalidArgument(f"sample_count must be >= 1, got {sample_count}")

        planned: list[Waypoint] = []
        for seg_idx in range(len(path) - 1):
            start, end = path[seg_idx], path[seg_idx + 1]
            first_step = 0 if seg_idx == 0 else 1  # shared joint already emitted
            for step in range(first_step, sample_count + 1):
                if step == 0:
                    planned.append(start.with_kind(WaypointKind.MARKER))
                    continue
                if step == sample_count:
                    planned.append(end.with_kind(WaypointKind.MARKER))
                    continue
                t = step / sample_count
                point = GeoCalculator.interpolate(a=start.point, b=end.point, t=t)
                planned.append(
                    Waypoint(
                        lat=point.lat,
                        lng=point.lng,
                        x=start.x + (end.x - start.x) * t,
                        y=start.y + (end.y - start.y) * t,
                        kind=WaypointKind.INTERMEDIATE,
                    )
                )
        return planned

    # ==========================================================================
    # Lookups
    # ==========================================================================

    async def _query_provider(self, lat: float, lng: float) -> float | None:
        lookup = self.provider.get_elevation(lat=lat, lng=lng)
        if self.lookup_timeout_s is None:
            return await lookup
        return await asyncio.wait_for(lookup, timeout=self.lookup_timeout_s)

    async def resolve_elevation(self, lat: float, lng: float) -> tuple[float, bool]:
        """Resolve one elevation with bounded retry and synthetic fallback.

        Returns:
            Tuple (elevation_m, approximated).
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                value = await self._query_provider(lat=lat, lng=lng)
            except (ProviderUnavailable, OSError, asyncio.TimeoutError) as exc:
                logger.warning(
                    f"Elevation lookup attempt {attempt}/{self.max_attempts} failed at lat={lat:.5f}, lng={lng:.5f}: {exc}"
                )
                continue
            except Exception:
                logger.exception(
                    f"Elevation provider raised unexpectedly (attempt {attempt}/{self.max_attempts}) "
                    f"at lat={lat:.5f}, lng={lng:.5f}"
                )
                continue
            if value is not None and not isnan(value):
                return float(value), False
            logger.warning(
                f"Elevation unavailable (attempt {attempt}/{self.max_attempts}) at lat={lat:.5f}, lng={lng:.5f}"
            )

        elevation = self.fallback.elevation_at(lat=lat, lng=lng)
        logger.warning(f"[FALLBACK] Synthetic elevation {elevation:.0f}m substituted at lat={lat:.5f}, lng={lng:.5f}")
        return elevation, True

    async def lookup(
        self,
        waypoint: Waypoint,
        profile_id: str = SamplingConfig.DEFAULT_PROFILE_ID,
        sequence_index: int = 0,
    ) -> ElevationSample:
        """Resolve the elevation of a single waypoint.

        Does not start a new generation: concurrent lookups for one profile all
        complete, and only invalidate() drops them.

        Args:
            waypoint: Point to resolve
            profile_id: Profile whose invalidation cancels this lookup
            sequence_index: Stored on the returned sample (e.g. click order)

        Raises:
            Superseded: If the profile was invalidated while the lookup ran.
        """
        generation = self.current_generation(profile_id)
        elevation, approximated = await self.resolve_elevation(lat=waypoint.lat, lng=waypoint.lng)
        self._ensure_current(profile_id=profile_id, generation=generation)
        if approximated:
            deliver(self.notifier, FallbackElevationNotification(approximated=1, total=1))
        return ElevationSample(
            lat=waypoint.lat,
            lng=waypoint.lng,
            x=waypoint.x,
            y=waypoint.y,
            elevation=elevation,
            kind=waypoint.kind,
            label=waypoint.label,
            sequence_index=sequence_index,
            approximated=approximated,
        )

    async def sample_path(
        self,
        path: Sequence[Waypoint],
        sample_count: int = SamplingConfig.DEFAULT_SAMPLE_COUNT,
        profile_id: str = SamplingConfig.DEFAULT_PROFILE_ID,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> list[ElevationSample]:
        """Sample elevations along a path.

        Args:
            path: Two endpoints, or more waypoints for profile mode
            sample_count: Intervals per segment (>= 1)
            profile_id: Logical profile slot; a newer run for it supersedes this one
            progress_callback: Optional callback receiving progress 0.0-1.0

        Returns:
            Samples ordered by sequence_index.

        Raises:
            InvalidArgument: If fewer than two waypoints or sample_count < 1.
            Superseded: If a newer run or invalidate() replaced this generation.
        """
        planned = self.plan_path(path=path, sample_count=sample_count)
        generation = self.invalidate(profile_id)
        total = len(planned)
        completed = 0

        logger.info(
            f"Sampling {total} points over {len(path) - 1} segment(s) for profile '{profile_id}' "
            f"(generation {generation})"
        )

        async def resolve_at(index: int, waypoint: Waypoint) -> ElevationSample:
            nonlocal completed
            if index > 0 and self.throttle_s > 0:
                await asyncio.sleep(index * self.throttle_s)
            self._ensure_current(profile_id=profile_id, generation=generation)
            elevation, approximated = await self.resolve_elevation(lat=waypoint.lat, lng=waypoint.lng)
            completed += 1
            if progress_callback is not None:
                progress_callback(completed / total)
            return ElevationSample(
                lat=waypoint.lat,
                lng=waypoint.lng,
                x=waypoint.x,
                y=waypoint.y,
                elevation=elevation,
                kind=waypoint.kind,
                label=waypoint.label,
                sequence_index=index,
                approximated=approximated,
            )

        tasks = [asyncio.create_task(resolve_at(index=i, waypoint=wp)) for i, wp in enumerate(planned)]
        try:
            samples = await asyncio.gather(*tasks)
        except Superseded:
            logger.debug(f"Sampling generation {generation} for '{profile_id}' superseded mid-flight")
            raise
        finally:
            # No-op after success; after a failure the remaining lookups stop
            for task in tasks:
                if not task.done():
                    task.cancel()

        # Late results of a replaced generation are discarded
        self._ensure_current(profile_id=profile_id, generation=generation)

        approximated = sum(1 for s in samples if s.approximated)
        if approximated:
            logger.warning(f"{approximated}/{total} samples approximated for profile '{profile_id}'")
            deliver(self.notifier, FallbackElevationNotification(approximated=approximated, total=total))

        return list(samples)
