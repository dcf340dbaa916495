"""Shared pytest fixtures for fieldsurvey tests.

Provides mock elevation providers and a recording notification sink.
All fixtures use explicit values with documented rationale.

ELEVATION MODEL:
    The linear mock computes elevation = base + lat * m_per_deg_lat + lng * m_per_deg_lng,
    so expected profiles can be derived by hand without the code under test.
    Coordinates around Mumbai (19.07N, 72.87E) match the end-to-end scenarios.

ASYNC:
    Async code is driven with asyncio.run() inside the tests; sampler fixtures
    use throttle_s=0 so nothing sleeps.
"""

from typing import Callable, Optional

import pytest

from fieldsurvey.core.elevation_sampler import ElevationSampler
from fieldsurvey.core.extrema_locator import ExtremaLocator
from fieldsurvey.core.fallback_elevation import SyntheticElevationModel
from fieldsurvey.core.notifier import RecordingNotificationSink
from fieldsurvey.errors import ProviderUnavailable
from fieldsurvey.model.waypoint import Waypoint

# Mumbai -> north-east, the reference two-marker scenario
MUMBAI_A = (19.0760, 72.8777)
MUMBAI_B = (19.2000, 73.0000)


# =============================================================================
# MOCK ELEVATION PROVIDERS
# =============================================================================


class LinearElevationProvider:
    """Mock provider returning elevation from a linear formula.

    Elevation formula:
        elevation = base + lat * m_per_deg_lat + lng * m_per_deg_lng

    Every query is recorded in `calls` as (lat, lng).
    """

    def __init__(self, base: float, m_per_deg_lat: float, m_per_deg_lng: float) -> None:
        self.base = base
        self.m_per_deg_lat = m_per_deg_lat
        self.m_per_deg_lng = m_per_deg_lng
        self.calls: list[tuple[float, float]] = []

    def elevation_at(self, lat: float, lng: float) -> float:
        return self.base + lat * self.m_per_deg_lat + lng * self.m_per_deg_lng

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        self.calls.append((lat, lng))
        return self.elevation_at(lat=lat, lng=lng)


class FunctionElevationProvider:
    """Mock provider delegating to a function; the function may return None or raise."""

    def __init__(self, fn: Callable[[float, float], Optional[float]]) -> None:
        self.fn = fn
        self.calls: list[tuple[float, float]] = []

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        self.calls.append((lat, lng))
        return self.fn(lat, lng)


class UnavailableAtProvider(LinearElevationProvider):
    """Linear provider that answers None for a fixed set of coordinates."""

    def __init__(self, unavailable: set[tuple[float, float]], **kwargs: float) -> None:
        super().__init__(**kwargs)
        self.unavailable = unavailable

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        self.calls.append((lat, lng))
        if (lat, lng) in self.unavailable:
            return None
        return self.elevation_at(lat=lat, lng=lng)


class FailingElevationProvider:
    """Provider that is always down (raises ProviderUnavailable)."""

    def __init__(self) -> None:
        self.calls: list[tuple[float, float]] = []

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        self.calls.append((lat, lng))
        raise ProviderUnavailable(f"down at ({lat}, {lng})")


class FlakyElevationProvider(LinearElevationProvider):
    """Linear provider whose first `failures` calls per point raise ProviderUnavailable."""

    def __init__(self, failures: int, **kwargs: float) -> None:
        super().__init__(**kwargs)
        self.failures = failures
        self._attempts: dict[tuple[float, float], int] = {}

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        self.calls.append((lat, lng))
        attempts = self._attempts.get((lat, lng), 0) + 1
        self._attempts[(lat, lng)] = attempts
        if attempts <= self.failures:
            raise ProviderUnavailable("transient")
        return self.elevation_at(lat=lat, lng=lng)


# =============================================================================
# PROVIDER FIXTURES
# =============================================================================


@pytest.fixture
def linear_provider() -> LinearElevationProvider:
    """Terrain rising 1000 m per degree north and 500 m per degree east.

    At Mumbai A (19.0760, 72.8777): 19076 + 36438.85 = 55514.85 m. Not realistic,
    but exact, and strictly increasing towards Mumbai B.
    """
    return LinearElevationProvider(base=0.0, m_per_deg_lat=1000.0, m_per_deg_lng=500.0)


@pytest.fixture
def failing_provider() -> FailingElevationProvider:
    return FailingElevationProvider()


@pytest.fixture
def make_unavailable_provider() -> Callable[[set[tuple[float, float]]], UnavailableAtProvider]:
    """Factory: linear terrain (same slopes as linear_provider) with holes at given coordinates."""

    def factory(unavailable: set[tuple[float, float]]) -> UnavailableAtProvider:
        return UnavailableAtProvider(unavailable=unavailable, base=0.0, m_per_deg_lat=1000.0, m_per_deg_lng=500.0)

    return factory


@pytest.fixture
def make_flaky_provider() -> Callable[[int], FlakyElevationProvider]:
    """Factory: linear terrain whose first N attempts per point fail."""

    def factory(failures: int) -> FlakyElevationProvider:
        return FlakyElevationProvider(failures=failures, base=0.0, m_per_deg_lat=1000.0, m_per_deg_lng=500.0)

    return factory


@pytest.fixture
def make_function_provider() -> Callable[[Callable[[float, float], Optional[float]]], FunctionElevationProvider]:
    return FunctionElevationProvider


@pytest.fixture
def recording_sink() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture
def fallback_model() -> SyntheticElevationModel:
    return SyntheticElevationModel()


# =============================================================================
# SAMPLER FIXTURES
# =============================================================================


@pytest.fixture
def sampler(linear_provider: LinearElevationProvider, recording_sink: RecordingNotificationSink) -> ElevationSampler:
    """Sampler over the linear provider, no throttling."""
    return ElevationSampler(provider=linear_provider, notifier=recording_sink, throttle_s=0.0)


@pytest.fixture
def locator(sampler: ElevationSampler, recording_sink: RecordingNotificationSink) -> ExtremaLocator:
    return ExtremaLocator(sampler=sampler, notifier=recording_sink)


@pytest.fixture
def mumbai_markers() -> tuple[Waypoint, Waypoint]:
    """The two reference markers with screen projections."""
    return (
        Waypoint(lat=MUMBAI_A[0], lng=MUMBAI_A[1], x=100.0, y=400.0, label="Marker 1"),
        Waypoint(lat=MUMBAI_B[0], lng=MUMBAI_B[1], x=300.0, y=200.0, label="Marker 2"),
    )
