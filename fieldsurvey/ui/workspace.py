"""SurveyWorkspace - wires tools, sessions and suggestions for one user session.

Map clicks enter through handle_click() and go to the session of the primary
tool. Session data changes flow into ToolActivationMachine.set_has_data(), and
every activation change reaches the SuggestionEngine through its listener.
"""

import logging
from typing import Optional

from fieldsurvey.constants import SamplingConfig, SuggestionConfig, ToolConfig
from fieldsurvey.core.elevation_provider import ElevationProvider
from fieldsurvey.core.elevation_sampler import ElevationSampler
from fieldsurvey.core.extrema_locator import ExtremaLocator
from fieldsurvey.core.fallback_elevation import SyntheticElevationModel
from fieldsurvey.core.notifier import LoggingNotificationSink, NotificationSink
from fieldsurvey.model.geo_point import GeoPoint
from fieldsurvey.ui.suggestion_engine import SuggestionEngine
from fieldsurvey.ui.tool_activation import ActivationChange, ToolActivationMachine
from fieldsurvey.ui.tool_sessions import DistanceToolSession, ElevationMode, ElevationToolSession, PolygonToolSession

logger = logging.getLogger(__name__)


class SurveyWorkspace:
    """Everything a measurement session needs, built from one provider.

    Example:
        workspace = SurveyWorkspace(provider=SyntheticElevationProvider())
        workspace.machine.activate(ToolConfig.DISTANCE)
        await workspace.handle_click(GeoPoint(lat=19.07, lng=72.87))
    """

    def __init__(
        self,
        provider: ElevationProvider,
        notifier: Optional[NotificationSink] = None,
        fallback: Optional[SyntheticElevationModel] = None,
        sample_count: int = SamplingConfig.DEFAULT_SAMPLE_COUNT,
        throttle_s: float = SamplingConfig.THROTTLE_S,
        debounce_s: float = SuggestionConfig.DEBOUNCE_S,
        unit: str = "meters",
        elevation_mode: ElevationMode = ElevationMode.SINGLE,
    ) -> None:
        self.notifier = notifier if notifier is not None else LoggingNotificationSink()
        self.sampler = ElevationSampler(
            provider=provider,
            fallback=fallback,
            notifier=self.notifier,
            throttle_s=throttle_s,
        )
        self.locator = ExtremaLocator(sampler=self.sampler, notifier=self.notifier, unit=unit)
        self.machine = ToolActivationMachine(notifier=self.notifier)
        self.suggestions = SuggestionEngine(machine=self.machine, notifier=self.notifier, debounce_s=debounce_s)

        self.distance = DistanceToolSession(on_data_change=self._data_callback(ToolConfig.DISTANCE))
        self.polygon = PolygonToolSession(on_data_change=self._data_callback(ToolConfig.POLYGON))
        self.elevation = ElevationToolSession(
            sampler=self.sampler,
            locator=self.locator,
            mode=elevation_mode,
            sample_count=sample_count,
            on_data_change=self._data_callback(ToolConfig.ELEVATION),
        )
        self.machine.add_listener(self._on_activation_change)

    def _data_callback(self, tool: str):
        def on_data_change(has_data: bool) -> None:
            self.machine.set_has_data(tool=tool, has_data=has_data)

        return on_data_change

    def _on_activation_change(self, change: ActivationChange) -> None:
        was_active = change.previous.is_active(ToolConfig.ELEVATION)
        if was_active and not change.current.is_active(ToolConfig.ELEVATION):
            self.elevation.invalidate()

    async def handle_click(self, point: GeoPoint, x: float = 0.0, y: float = 0.0) -> str | None:
        """Route a map click to the primary tool.

        Returns:
            Tool that consumed the click, or None if no tool is primary.
        """
        tool = self.machine.context.primary_tool
        if tool is None:
            logger.info(f"Click at {point} ignored: no primary tool")
            return None

        logger.info(f"Click at {point} -> {tool}")
        if tool == ToolConfig.DISTANCE:
            self.distance.add_point(point)
        elif tool == ToolConfig.POLYGON:
            self.polygon.add_vertex(point)
        elif tool == ToolConfig.ELEVATION:
            await self.elevation.add_point(point, x=x, y=y)
        return tool

    def clear_all(self) -> None:
        """Clear every session and reset activation and suggestions."""
        self.distance.clear()
        self.polygon.clear()
        self.elevation.clear()
        self.machine.reset()
        self.suggestions.reset_session()
