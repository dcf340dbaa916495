"""End-to-End Integration Test using Streamlit AppTest Framework.

Drives fieldsurvey/app.py through its widgets: tool buttons, the point form
and the suggestion panel. The workspace is injected into session_state with
an offline provider, so no DEM or network is needed.

Test Flow Mirrors Real User Interaction:
    1. Click the Distance tool button
    2. Submit two points through the form
    3. See the High-priority suggestion panel open
    4. Click the suggestion's apply button -> Elevation becomes primary
    5. Submit a point -> spot elevation listed
"""

from __future__ import annotations

import pytest
from streamlit.testing.v1 import AppTest

from fieldsurvey.constants import AppConfig, ToolConfig
from fieldsurvey.core.elevation_provider import SyntheticElevationProvider
from fieldsurvey.core.notifier import RecordingNotificationSink
from fieldsurvey.ui.workspace import SurveyWorkspace

APP_PATH = "../fieldsurvey/app.py"
ADD_POINT_LABEL = "📍 Add point"


@pytest.fixture
def apptest_workspace() -> SurveyWorkspace:
    """Workspace over the synthetic provider, recording notifications instead of toasts."""
    return SurveyWorkspace(
        provider=SyntheticElevationProvider(),
        notifier=RecordingNotificationSink(),
        throttle_s=0.0,
        debounce_s=0.0,
    )


@pytest.fixture
def at(apptest_workspace: SurveyWorkspace) -> AppTest:
    app = AppTest.from_file(APP_PATH, default_timeout=30)
    app.session_state["provider_name"] = "Synthetic (offline)"
    app.session_state["workspace"] = apptest_workspace
    app.run()
    return app


def _submit_point(at: AppTest, lat: float, lng: float) -> None:
    at.number_input[0].set_value(lat)
    at.number_input[1].set_value(lng)
    next(b for b in at.button if b.label == ADD_POINT_LABEL).click()
    at.run()


def _assert_clean(at: AppTest) -> None:
    assert not at.exception, [e.value for e in at.exception]
    assert not at.error, [e.value for e in at.error]


class TestAppSmoke:
    def test_initial_render(self, at: AppTest) -> None:
        _assert_clean(at)
        assert at.title[0].value == AppConfig.TITLE
        for tool in ToolConfig.TOOLS:
            assert at.button(key=f"tool_{tool}") is not None

    def test_point_without_tool_warns(self, at: AppTest, apptest_workspace: SurveyWorkspace) -> None:
        _submit_point(at, lat=19.0760, lng=72.8777)
        _assert_clean(at)
        assert any("Activate a tool first" in w.value for w in at.warning)
        assert not apptest_workspace.distance.has_data


class TestSurveyTour:
    """ONE user session from distance measurement to elevation via a suggestion."""

    def test_distance_suggestion_elevation(self, at: AppTest, apptest_workspace: SurveyWorkspace) -> None:
        at.button(key=f"tool_{ToolConfig.DISTANCE}").click()
        at.run()
        _assert_clean(at)
        assert apptest_workspace.machine.context.primary_tool == ToolConfig.DISTANCE

        _submit_point(at, lat=19.0760, lng=72.8777)
        _submit_point(at, lat=19.2000, lng=73.0000)
        _assert_clean(at)
        assert len(apptest_workspace.distance.path.points) == 2
        assert 18.5 < apptest_workspace.distance.path.total_distance_km < 19.2

        assert apptest_workspace.suggestions.panel.is_open
        assert [s.id for s in apptest_workspace.suggestions.suggestions] == ["distance-elevation-combo"]

        at.button(key="apply_distance-elevation-combo").click()
        at.run()
        _assert_clean(at)
        assert apptest_workspace.machine.context.primary_tool == ToolConfig.ELEVATION
        assert apptest_workspace.suggestions.suggestions == []

        _submit_point(at, lat=19.1000, lng=72.9000)
        _assert_clean(at)
        assert len(apptest_workspace.elevation.points) == 1
        assert any("Point at" in m.value for m in at.markdown)
