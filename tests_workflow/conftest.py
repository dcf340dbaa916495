"""Shared pytest fixtures for fieldsurvey workflow tests.

Provides a deterministic elevation provider and a workspace factory.
Minimal fixtures: scenarios build their own inputs from these.

COORDINATES:
    Scenarios use the Mumbai reference markers (19.0760N, 72.8777E) and
    (19.2000N, 73.0000E), roughly 18.9 km apart.

ELEVATION MODEL:
    elevation = 1000 * lat + 500 * lng, strictly rising towards the second marker,
    so the highest intermediate sample always sits next to Marker 2.
"""

from typing import Callable, Optional

import pytest

from fieldsurvey.core.notifier import RecordingNotificationSink
from fieldsurvey.model.geo_point import GeoPoint
from fieldsurvey.ui.tool_sessions import ElevationMode
from fieldsurvey.ui.workspace import SurveyWorkspace


class RampProvider:
    """Linear terrain with optional holes (coordinates answering None)."""

    def __init__(self, holes: Optional[set[tuple[float, float]]] = None) -> None:
        self.holes = holes or set()
        self.calls = 0

    @staticmethod
    def elevation_at(lat: float, lng: float) -> float:
        return 1000.0 * lat + 500.0 * lng

    async def get_elevation(self, lat: float, lng: float) -> float | None:
        self.calls += 1
        if (lat, lng) in self.holes:
            return None
        return self.elevation_at(lat=lat, lng=lng)


@pytest.fixture
def marker_a() -> GeoPoint:
    return GeoPoint(lat=19.0760, lng=72.8777)


@pytest.fixture
def marker_b() -> GeoPoint:
    return GeoPoint(lat=19.2000, lng=73.0000)


@pytest.fixture
def survey_sink() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture
def make_workspace(survey_sink: RecordingNotificationSink) -> Callable[..., SurveyWorkspace]:
    """Factory: workspace over RampProvider, no throttling, no debounce delay.

    Usage:
        workspace = make_workspace(mode=ElevationMode.PROFILE, holes={(lat, lng)})
    """

    def factory(
        mode: ElevationMode = ElevationMode.SINGLE,
        holes: Optional[set[tuple[float, float]]] = None,
    ) -> SurveyWorkspace:
        return SurveyWorkspace(
            provider=RampProvider(holes=holes),
            notifier=survey_sink,
            throttle_s=0.0,
            debounce_s=0.0,
            elevation_mode=mode,
        )

    return factory
