"""ProfileChart - Plotly elevation profile rendering.

Renders elevation profiles showing:
- Terrain elevation along the sampled path (area fill)
- Approximated (fallback) samples as a separate marker trace
- Highest/lowest points and markers for the four-point workflow
- A stats annotation (distance, gain, loss, grade)
"""

import logging
from typing import Optional

import plotly.graph_objects as go

from fieldsurvey.constants import ChartConfig, UnitConfig
from fieldsurvey.errors import InvalidArgument
from fieldsurvey.model.elevation_profile import ElevationProfile
from fieldsurvey.model.extrema_result import ExtremaResult
from fieldsurvey.model.waypoint import ElevationSample

logger = logging.getLogger(__name__)


class ProfileChart:
    """Renders elevation profiles using Plotly.

    Example:
        chart = ProfileChart(width=800, height=320)
        fig = chart.render_profile(profile=profile, unit="feet")
        st.plotly_chart(fig)
    """

    def __init__(
        self,
        width: int = ChartConfig.DEFAULT_WIDTH,
        height: int = ChartConfig.DEFAULT_HEIGHT,
    ) -> None:
        """Initialize profile chart renderer.

        Args:
            width: Chart width in pixels
            height: Chart height in pixels
        """
        self.width = width
        self.height = height

    def render_profile(
        self,
        profile: ElevationProfile,
        unit: str = "meters",
        title: Optional[str] = None,
    ) -> go.Figure:
        """Render elevation profile for a sampled path.

        Args:
            profile: Analyzed profile to visualize
            unit: "meters" or "feet"
            title: Optional chart title

        Returns:
            Plotly Figure object.
        """
        if profile.is_empty:
            raise InvalidArgument("Profile must have samples to render")

        suffix = UnitConfig.ELEVATION_SUFFIX[unit]
        distances = list(profile.cumulative_distances_km)
        elevations = profile.elevations(unit=unit)

        # Y-axis range does not start from 0
        min_elev = min(elevations)
        max_elev = max(elevations)
        padding = max(
            (max_elev - min_elev) * ChartConfig.ELEVATION_PADDING_FACTOR,
            UnitConfig.convert_elevation(elevation_m=ChartConfig.ELEVATION_PADDING_MIN_M, unit=unit),
        )

        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=distances,
                y=elevations,
                fill="tozeroy",
                fillcolor=f"rgba{self._hex_to_rgba(hex_color=ChartConfig.PROFILE_COLOR, alpha=0.3)}",
                line=dict(color=ChartConfig.PROFILE_COLOR, width=2),
                name="Elevation",
                hovertemplate=f"Distance: %{{x:.2f}}km<br>Elevation: %{{y:.0f}}{suffix}<extra></extra>",
            )
        )

        approximated = [
            (d, e) for d, e, s in zip(distances, elevations, profile.samples) if s.approximated
        ]
        if approximated:
            fig.add_trace(
                go.Scatter(
                    x=[d for d, _ in approximated],
                    y=[e for _, e in approximated],
                    mode="markers",
                    marker=dict(color=ChartConfig.APPROXIMATED_COLOR, size=9, symbol="diamond-open"),
                    name="Approximated",
                    hovertemplate=f"Approximated: %{{y:.0f}}{suffix}<extra></extra>",
                )
            )

        fig.update_layout(
            title=dict(text=title or "Elevation Profile", x=0.5),
            xaxis=dict(
                title="Distance (km)",
                showgrid=True,
                gridcolor="rgba(200, 200, 200, 0.3)",
            ),
            yaxis=dict(
                title=f"Elevation ({suffix})",
                showgrid=True,
                gridcolor="rgba(200, 200, 200, 0.3)",
                range=[min_elev - padding, max_elev + padding],
            ),
            showlegend=bool(approximated),
            width=self.width,
            height=self.height,
            margin=dict(l=50, r=30, t=50, b=50),
            plot_bgcolor="white",
        )

        gain = UnitConfig.convert_elevation(elevation_m=profile.elevation_gain_m, unit=unit)
        loss = UnitConfig.convert_elevation(elevation_m=profile.elevation_loss_m, unit=unit)
        stats_text = (
            f"Distance: {profile.total_distance_km:.2f}km | "
            f"Gain: {gain:.0f}{suffix} | "
            f"Loss: {loss:.0f}{suffix} | "
            f"Grade: {profile.grade_percent:.1f}%"
        )
        if approximated:
            stats_text += f" | {len(approximated)} approximated"

        fig.add_annotation(
            xref="paper",
            yref="paper",
            x=0.5,
            y=-0.15,
            text=stats_text,
            showarrow=False,
            font=dict(size=11),
        )

        return fig

    def render_extrema(self, result: ExtremaResult, unit: str = "meters") -> go.Figure:
        """Render the marker-to-marker profile with the four key points highlighted."""
        fig = self.render_profile(profile=result.profile, unit=unit, title="Highest & Lowest Points")
        distance_by_index = {
            s.sequence_index: d for s, d in zip(result.profile.samples, result.profile.cumulative_distances_km)
        }

        slots = [
            (result.marker1, ChartConfig.MARKER_COLOR, "circle"),
            (result.marker2, ChartConfig.MARKER_COLOR, "circle"),
            (result.highest, ChartConfig.HIGHEST_COLOR, "triangle-up"),
            (result.lowest, ChartConfig.LOWEST_COLOR, "triangle-down"),
        ]
        for sample, color, symbol in slots:
            self._add_point(
                fig=fig,
                sample=sample,
                distance_km=distance_by_index[sample.sequence_index],
                unit=unit,
                color=color,
                symbol=symbol,
            )
        fig.update_layout(showlegend=True)
        return fig

    @staticmethod
    def _add_point(
        fig: go.Figure,
        sample: ElevationSample,
        distance_km: float,
        unit: str,
        color: str,
        symbol: str,
    ) -> None:
        elevation = UnitConfig.convert_elevation(elevation_m=sample.elevation, unit=unit)
        fig.add_trace(
            go.Scatter(
                x=[distance_km],
                y=[elevation],
                mode="markers+text",
                marker=dict(color=color, size=12, symbol=symbol),
                text=[sample.label or ""],
                textposition="top center",
                name=sample.label or sample.kind.value,
                hoverinfo="skip",
            )
        )

    @staticmethod
    def _hex_to_rgba(hex_color: str, alpha: float) -> tuple[int, int, int, float]:
        """Convert hex color to RGBA tuple."""
        hex_color = hex_color.lstrip("#")
        r = int(hex_color[0:2], 16)
        g = int(hex_color[2:4], 16)
        b = int(hex_color[4:6], 16)
        return (r, g, b, alpha)
