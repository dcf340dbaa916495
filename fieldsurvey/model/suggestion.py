"""Suggestion - a ranked, dismissible cross-tool recommendation."""

from dataclasses import dataclass
from enum import Enum


class SuggestionPriority(Enum):
    """Priority of a suggestion. Lower rank sorts first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {SuggestionPriority.HIGH: 0, SuggestionPriority.MEDIUM: 1, SuggestionPriority.LOW: 2}[self]


@dataclass(frozen=True)
class Suggestion:
    """A recommendation surfaced in the suggestion panel.

    Attributes:
        id: Stable identifier (e.g., "distance-elevation-combo")
        target_tool: Tool to activate, or a pseudo-target ("workflow", "export")
        priority: HIGH, MEDIUM or LOW
        title: Short heading
        description: One-line summary
        rationale: Why the suggestion is made
        action: Label for the apply button
        dismissed: True once the user dismissed or applied it
    """

    id: str
    target_tool: str
    priority: SuggestionPriority
    title: str
    description: str
    rationale: str
    action: str
    dismissed: bool = False


@dataclass
class SuggestionPanelState:
    """Visibility of the suggestion panel.

    High-priority suggestions force the panel open; medium and low ones
    only show up in the badge counter.
    """

    is_open: bool = False
    badge_count: int = 0

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
