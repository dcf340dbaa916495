"""Tool coordination and presentation for the field survey workbench.

File Structure:
- tool_activation.py: ToolActivationMachine (per-tool python-statemachine lifecycles) + ActivationContext
- suggestion_engine.py: SuggestionEngine, ranked cross-tool suggestions
- debounce.py: Debouncer used for suggestion regeneration
- tool_sessions.py: Distance, polygon and elevation sessions fed by map clicks
- workspace.py: SurveyWorkspace wiring everything for one user session
- profile_chart.py: Plotly elevation profile charts
- notification_sink.py: Streamlit toast sink

The Streamlit sink is not re-exported so that importing fieldsurvey.ui does
not require a Streamlit runtime.
"""

from fieldsurvey.ui.debounce import Debouncer
from fieldsurvey.ui.profile_chart import ProfileChart
from fieldsurvey.ui.suggestion_engine import SuggestionEngine
from fieldsurvey.ui.tool_activation import (
    Activate,
    ActivationChange,
    ActivationContext,
    ActivationResult,
    Deactivate,
    Reset,
    SetHasData,
    ToggleMultiToolMode,
    ToolActivationMachine,
    ToolId,
    ToolState,
)
from fieldsurvey.ui.tool_sessions import (
    DistanceToolSession,
    ElevationMode,
    ElevationToolSession,
    PolygonToolSession,
)
from fieldsurvey.ui.workspace import SurveyWorkspace

__all__ = [
    # Activation
    "ToolActivationMachine",
    "ToolId",
    "ToolState",
    "ActivationContext",
    "ActivationResult",
    "ActivationChange",
    "Activate",
    "Deactivate",
    "ToggleMultiToolMode",
    "SetHasData",
    "Reset",
    # Suggestions
    "SuggestionEngine",
    "Debouncer",
    # Sessions
    "ElevationMode",
    "ElevationToolSession",
    "DistanceToolSession",
    "PolygonToolSession",
    "SurveyWorkspace",
    # Charts
    "ProfileChart",
]
