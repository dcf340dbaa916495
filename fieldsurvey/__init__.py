"""Field Survey - distance, area and elevation measurement engine.

Measures paths and polygons on the WGS84 sphere, samples elevation profiles
from pluggable providers with a synthetic fallback, and coordinates several
measurement tools with ranked cross-tool suggestions.

Modules:
    core: Foundation classes (geodesy, elevation providers, sampling, analysis)
    model: Data structures (GeoPoint, Waypoint, ElevationProfile, Suggestion, notifications)
    ui: Tool activation, suggestions, sessions, Plotly charts and the Streamlit sink

Example:
    from fieldsurvey.core import ElevationSampler, SyntheticElevationProvider
    from fieldsurvey.ui import SurveyWorkspace
"""
