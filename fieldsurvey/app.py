"""Field Survey - Interactive measurement workbench.

Measure distances, polygon areas and elevation profiles, with cross-tool
suggestions. Points are entered as coordinates and routed to the primary tool.

Run: streamlit run fieldsurvey/app.py
"""

import asyncio
import logging
import traceback

import streamlit as st

from fieldsurvey.constants import AppConfig, ChartConfig, DEMConfig, ToolConfig, UnitConfig
from fieldsurvey.core.dem_service import DEMElevationProvider
from fieldsurvey.core.elevation_provider import OpenMeteoElevationProvider, SyntheticElevationProvider
from fieldsurvey.errors import SurveyError
from fieldsurvey.model.geo_point import GeoPoint
from fieldsurvey.model.suggestion import SuggestionPriority
from fieldsurvey.ui.notification_sink import StreamlitNotificationSink
from fieldsurvey.ui.profile_chart import ProfileChart
from fieldsurvey.ui.tool_sessions import ElevationMode
from fieldsurvey.ui.workspace import SurveyWorkspace

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PROVIDERS = {
    "Synthetic (offline)": SyntheticElevationProvider,
    "Open-Meteo API": OpenMeteoElevationProvider,
    "Local DEM": DEMElevationProvider,
}

MODE_LABELS = {
    ElevationMode.SINGLE: "Single point",
    ElevationMode.PROFILE: "Elevation profile",
    ElevationMode.FOUR_POINT: "4-point analysis",
}


# =============================================================================
# SESSION STATE
# =============================================================================


def build_workspace(provider_name: str) -> SurveyWorkspace:
    provider = PROVIDERS[provider_name]()
    logger.info(f"Building workspace with provider '{provider_name}'")
    return SurveyWorkspace(provider=provider, notifier=StreamlitNotificationSink())


def init_session_state() -> None:
    """Initialize session state with the workspace and display settings."""
    if "provider_name" not in st.session_state:
        st.session_state.provider_name = "Local DEM" if DEMConfig.DEM_PATH.exists() else "Synthetic (offline)"

    if "workspace" not in st.session_state:
        st.session_state.workspace = build_workspace(provider_name=st.session_state.provider_name)

    if "unit" not in st.session_state:
        st.session_state.unit = "meters"


# =============================================================================
# SIDEBAR
# =============================================================================


def render_sidebar(workspace: SurveyWorkspace) -> None:
    st.sidebar.header("Tools")
    context = workspace.machine.context

    for tool in ToolConfig.TOOLS:
        is_active = context.is_active(tool)
        primary = " (primary)" if context.primary_tool == tool else ""
        label = f"{ToolConfig.ICONS[tool]} {ToolConfig.DISPLAY_NAMES[tool]}{primary}"
        if st.sidebar.button(label, key=f"tool_{tool}", type="primary" if is_active else "secondary"):
            workspace.machine.activate(tool)
            st.rerun()

    multi = st.sidebar.toggle("Multi-tool mode", value=context.multi_tool_mode)
    if multi != context.multi_tool_mode:
        workspace.machine.toggle_multi_tool_mode()
        st.rerun()

    st.sidebar.divider()
    mode = st.sidebar.radio(
        "Elevation mode",
        options=list(MODE_LABELS),
        format_func=MODE_LABELS.get,
        index=list(MODE_LABELS).index(workspace.elevation.mode),
    )
    workspace.elevation.set_mode(mode)

    st.session_state.unit = st.sidebar.radio("Elevation unit", options=UnitConfig.ELEVATION_UNITS, horizontal=True)

    provider_name = st.sidebar.selectbox(
        "Elevation source",
        options=list(PROVIDERS),
        index=list(PROVIDERS).index(st.session_state.provider_name),
    )
    if provider_name != st.session_state.provider_name:
        st.session_state.provider_name = provider_name
        st.session_state.workspace = build_workspace(provider_name=provider_name)
        st.rerun()

    if st.sidebar.button("🗑️ Clear all"):
        workspace.clear_all()
        st.rerun()


# =============================================================================
# PANELS
# =============================================================================


def render_point_input(workspace: SurveyWorkspace) -> None:
    with st.form("point_input", clear_on_submit=False):
        col_lat, col_lng = st.columns(2)
        lat = col_lat.number_input("Latitude", min_value=-90.0, max_value=90.0, value=19.0760, format="%.5f")
        lng = col_lng.number_input("Longitude", min_value=-180.0, max_value=180.0, value=72.8777, format="%.5f")
        submitted = st.form_submit_button("📍 Add point")

    if submitted:
        tool = asyncio.run(workspace.handle_click(GeoPoint(lat=lat, lng=lng)))
        if tool is None:
            st.warning("Activate a tool first - clicks go to the primary tool.")


def render_results(workspace: SurveyWorkspace) -> None:
    unit = st.session_state.unit
    col_dist, col_poly = st.columns(2)

    with col_dist:
        st.subheader(f"{ToolConfig.ICONS[ToolConfig.DISTANCE]} Distance")
        path = workspace.distance.path
        st.metric("Total", f"{path.total_distance_km:.3f} km", f"{path.total_distance('miles'):.3f} mi")
        st.caption(f"{len(path.points)} points")

    with col_poly:
        st.subheader(f"{ToolConfig.ICONS[ToolConfig.POLYGON]} Polygon")
        measurement = workspace.polygon.measurement
        st.metric("Area", f"{measurement.area_km2:.4f} km²")
        st.caption(f"Perimeter {measurement.perimeter_km:.3f} km, {len(measurement.vertices)} vertices")
        if not measurement.is_simple:
            st.warning("Polygon edges intersect - area is not meaningful.")

    st.subheader(f"{ToolConfig.ICONS[ToolConfig.ELEVATION]} Elevation")
    elevation = workspace.elevation
    chart = ProfileChart(width=ChartConfig.DEFAULT_WIDTH, height=ChartConfig.DEFAULT_HEIGHT)
    suffix = UnitConfig.ELEVATION_SUFFIX[unit]

    if elevation.extrema is not None:
        st.plotly_chart(chart.render_extrema(result=elevation.extrema, unit=unit), key="extrema_profile")
    elif elevation.profile is not None:
        st.plotly_chart(chart.render_profile(profile=elevation.profile, unit=unit), key="elevation_profile")

    for sample in elevation.points:
        value = UnitConfig.convert_elevation(elevation_m=sample.elevation, unit=unit)
        flag = " (approximated)" if sample.approximated else ""
        st.write(f"{sample.label or 'Point'} at {sample.point}: **{value:.1f} {suffix}**{flag}")


def render_suggestions(workspace: SurveyWorkspace) -> None:
    engine = workspace.suggestions
    suggestions = engine.suggestions
    if not suggestions:
        return

    if not engine.panel.is_open:
        if st.button(f"💡 {len(suggestions)} suggestion(s) ({engine.panel.badge_count} new)"):
            engine.open_panel()
            st.rerun()
        return

    with st.expander("💡 Smart suggestions", expanded=True):
        for suggestion in suggestions:
            marker = "❗" if suggestion.priority is SuggestionPriority.HIGH else "•"
            st.markdown(f"{marker} **{suggestion.title}** - {suggestion.description}")
            st.caption(suggestion.rationale)
            col_apply, col_dismiss = st.columns(2)
            if col_apply.button(suggestion.action, key=f"apply_{suggestion.id}"):
                engine.apply(suggestion.id)
                st.rerun()
            if col_dismiss.button("Dismiss", key=f"dismiss_{suggestion.id}"):
                engine.dismiss(suggestion.id)
                st.rerun()
        if st.button("Close suggestions"):
            engine.close_panel()
            st.rerun()


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    init_session_state()

    st.title(AppConfig.TITLE)

    try:
        _run_app_ui()
    except SurveyError as e:
        logger.warning(f"[UI] Rejected input: {e}")
        st.error(f"⚠️ {e}")
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        logger.error(f"[UI] UI error caught: {error_msg}\n{traceback.format_exc()}")
        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")


def _run_app_ui() -> None:
    workspace: SurveyWorkspace = st.session_state.workspace
    render_sidebar(workspace=workspace)
    render_point_input(workspace=workspace)
    # Reruns are user-paced, so a pending suggestion update runs right away
    workspace.suggestions.flush()
    render_suggestions(workspace=workspace)
    render_results(workspace=workspace)


if __name__ == "__main__":
    main()
