"""Notification - user-facing status events emitted by the engine.

Notifications are fire-and-forget: components hand them to a NotificationSink
and never depend on delivery. Each event is its own frozen dataclass that
stores the raw data and formats title/message as properties.

Types:
- INFO: status, tool toggles, sampling progress
- SUCCESS: completed analyses, applied suggestions
- WARNING: degraded (approximated) data
- ERROR: rejected requests
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from fieldsurvey.constants import NotificationConfig, ToolConfig, UnitConfig


class NotificationType(Enum):
    """Severity of a notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification(ABC):
    """Abstract base class for notifications handed to a NotificationSink."""

    @property
    @abstractmethod
    def type(self) -> NotificationType:
        """Severity."""
        raise NotImplementedError

    @property
    @abstractmethod
    def title(self) -> str:
        """Short heading."""
        raise NotImplementedError

    @property
    @abstractmethod
    def message(self) -> str:
        """Body text."""
        raise NotImplementedError

    @property
    def duration_ms(self) -> int:
        """How long a toast should stay visible."""
        return NotificationConfig.DEFAULT_MS

    def as_dict(self) -> dict:
        """Plain payload {type, title, message, durationMs} for UI bridges."""
        return {
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "durationMs": self.duration_ms,
        }

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.title}: {self.message}"


def _tool_name(tool: str) -> str:
    return ToolConfig.DISPLAY_NAMES.get(tool, tool.capitalize())


# =============================================================================
# TOOL ACTIVATION
# =============================================================================


@dataclass(frozen=True)
class ToolActivatedNotification(Notification):
    """A tool became active (and primary)."""

    tool: str
    multi_tool_mode: bool

    @property
    def type(self) -> NotificationType:
        return NotificationType.INFO

    @property
    def title(self) -> str:
        return f"{_tool_name(self.tool)} Tool Activated"

    @property
    def message(self) -> str:
        if self.multi_tool_mode:
            return f"{_tool_name(self.tool)} tool active (primary) - other tools remain available"
        return f"Click on the map to start using the {_tool_name(self.tool).lower()} tool"


@dataclass(frozen=True)
class ToolDeactivatedNotification(Notification):
    """A tool was switched off."""

    tool: str

    @property
    def type(self) -> NotificationType:
        return NotificationType.INFO

    @property
    def title(self) -> str:
        return f"{_tool_name(self.tool)} Tool Deactivated"

    @property
    def message(self) -> str:
        return f"{_tool_name(self.tool)} tool stopped"

    @property
    def duration_ms(self) -> int:
        return NotificationConfig.SHORT_MS


@dataclass(frozen=True)
class MultiToolModeNotification(Notification):
    """Multi-tool mode toggled."""

    enabled: bool

    @property
    def type(self) -> NotificationType:
        return NotificationType.INFO

    @property
    def title(self) -> str:
        return "Multi-Tool Mode Activated" if self.enabled else "Multi-Tool Mode Deactivated"

    @property
    def message(self) -> str:
        if self.enabled:
            return "You can now use multiple tools simultaneously with smart suggestions"
        return "Tools will now work in exclusive mode"

    @property
    def duration_ms(self) -> int:
        return NotificationConfig.MEDIUM_MS


# =============================================================================
# ELEVATION SAMPLING
# =============================================================================


@dataclass(frozen=True)
class SamplingStartedNotification(Notification):
    """Elevation sampling between markers started."""

    sample_count: int

    @property
    def type(self) -> NotificationType:
        return NotificationType.INFO

    @property
    def title(self) -> str:
        return "Finding Elevation Extremes"

    @property
    def message(self) -> str:
        return f"Analyzing {self.sample_count} elevation samples between markers to find highest and lowest points..."


@dataclass(frozen=True)
class FallbackElevationNotification(Notification):
    """Some samples used the synthetic elevation model."""

    approximated: int
    total: int

    @property
    def type(self) -> NotificationType:
        return NotificationType.WARNING

    @property
    def title(self) -> str:
        return "Approximated Elevation Data"

    @property
    def message(self) -> str:
        return (
            f"{self.approximated} of {self.total} elevation samples were unavailable and have been "
            f"approximated - flagged values are estimates"
        )

    @property
    def duration_ms(self) -> int:
        return NotificationConfig.LONG_MS


@dataclass(frozen=True)
class ExtremaFoundNotification(Notification):
    """Highest/lowest points between two markers were located."""

    highest_m: float
    lowest_m: float
    unit: str = "meters"

    @property
    def type(self) -> NotificationType:
        return NotificationType.SUCCESS

    @property
    def title(self) -> str:
        return "Elevation Analysis Complete"

    @property
    def message(self) -> str:
        high = UnitConfig.convert_elevation(elevation_m=self.highest_m, unit=self.unit)
        low = UnitConfig.convert_elevation(elevation_m=self.lowest_m, unit=self.unit)
        return f"Found highest point at {high:.1f} {self.unit} and lowest at {low:.1f} {self.unit}"

    @property
    def duration_ms(self) -> int:
        return NotificationConfig.LONG_MS


# =============================================================================
# SUGGESTIONS
# =============================================================================


@dataclass(frozen=True)
class SuggestionAppliedNotification(Notification):
    """User applied a suggestion."""

    action: str

    @property
    def type(self) -> NotificationType:
        return NotificationType.SUCCESS

    @property
    def title(self) -> str:
        return "Suggestion Applied"

    @property
    def message(self) -> str:
        return self.action


@dataclass(frozen=True)
class AnalysisWorkflowNotification(Notification):
    """Guide for the multi-step analysis workflow."""

    steps: str

    @property
    def type(self) -> NotificationType:
        return NotificationType.INFO

    @property
    def title(self) -> str:
        return "Analysis Workflow"

    @property
    def message(self) -> str:
        return self.steps

    @property
    def duration_ms(self) -> int:
        return NotificationConfig.WORKFLOW_MS


@dataclass(frozen=True)
class ExportInitiatedNotification(Notification):
    """Combined export requested for all tools with data."""

    tools: tuple[str, ...]

    @property
    def type(self) -> NotificationType:
        return NotificationType.SUCCESS

    @property
    def title(self) -> str:
        return "Export Initiated"

    @property
    def message(self) -> str:
        names = ", ".join(_tool_name(t) for t in self.tools)
        return f"Preparing combined data export from: {names}"

    @property
    def duration_ms(self) -> int:
        return NotificationConfig.LONG_MS


@dataclass(frozen=True)
class UnknownToolNotification(Notification):
    """Activation requested for a tool that does not exist."""

    tool: str

    @property
    def type(self) -> NotificationType:
        return NotificationType.ERROR

    @property
    def title(self) -> str:
        return "Unknown Tool"

    @property
    def message(self) -> str:
        return f"Tool '{self.tool}' is not available"
