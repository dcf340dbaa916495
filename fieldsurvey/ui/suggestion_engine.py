"""Cross-tool suggestions derived from the activation state.

Rules (evaluated by generate()):
    complement  X active with data, COMPLEMENTS[X] inactive -> "<X>-<Y>-combo"
                HIGH for distance -> elevation, MEDIUM otherwise
    workflow    >= 2 tools active                        -> "comprehensive-analysis", MEDIUM
    export      >= 2 tools with data                     -> "export-combined-data", LOW

Dismissed ids are remembered for the whole session (until reset_session()),
including across panel open/close.
"""

import logging
from typing import Optional

from fieldsurvey.constants import SuggestionConfig
from fieldsurvey.core.notifier import NotificationSink, deliver
from fieldsurvey.model.notification import (
    AnalysisWorkflowNotification,
    ExportInitiatedNotification,
    SuggestionAppliedNotification,
)
from fieldsurvey.model.suggestion import Suggestion, SuggestionPanelState, SuggestionPriority
from fieldsurvey.ui.debounce import Debouncer
from fieldsurvey.ui.tool_activation import ActivationChange, ActivationContext, ToolActivationMachine, ToolState

logger = logging.getLogger(__name__)


def complement_id(source: str, target: str) -> str:
    return f"{source}-{target}-combo"


class SuggestionEngine:
    """Generates, ranks and applies suggestions for a ToolActivationMachine.

    The engine registers itself as a machine listener; every activation change
    schedules a debounced regeneration.
    """

    def __init__(
        self,
        machine: ToolActivationMachine,
        notifier: Optional[NotificationSink] = None,
        debounce_s: float = SuggestionConfig.DEBOUNCE_S,
    ) -> None:
        self.machine = machine
        self.notifier = notifier
        self.panel = SuggestionPanelState()
        self._suggestions: list[Suggestion] = []
        self._dismissed: set[str] = set()
        self._debouncer = Debouncer(delay_s=debounce_s, fn=self.regenerate)
        machine.add_listener(self._on_activation_change)

    # ==========================================================================
    # Rule evaluation
    # ==========================================================================

    def generate(self, context: ActivationContext, tool_states: dict[str, ToolState]) -> list[Suggestion]:
        """Evaluate all rules against a snapshot.

        Pure apart from reading the dismissed set; does not touch panel state.

        Returns:
            Non-dismissed suggestions ordered HIGH, MEDIUM, LOW (rule order within a priority).
        """
        candidates: list[Suggestion] = []

        for source, target in SuggestionConfig.COMPLEMENTS.items():
            source_state = tool_states.get(source)
            if source_state is None or target not in tool_states:
                continue
            if context.is_active(source) and source_state.has_data and not context.is_active(target):
                text = SuggestionConfig.COMPLEMENT_TEXT[(source, target)]
                is_flagship = (source, target) == SuggestionConfig.FLAGSHIP_PAIR
                candidates.append(
                    Suggestion(
                        id=complement_id(source, target),
                        target_tool=target,
                        priority=SuggestionPriority.HIGH if is_flagship else SuggestionPriority.MEDIUM,
                        **text,
                    )
                )

        if len(context.active_tools) >= SuggestionConfig.MIN_ACTIVE_FOR_WORKFLOW:
            candidates.append(
                Suggestion(
                    id=SuggestionConfig.WORKFLOW_ID,
                    target_tool=SuggestionConfig.WORKFLOW_TARGET,
                    priority=SuggestionPriority.MEDIUM,
                    **SuggestionConfig.WORKFLOW_TEXT,
                )
            )

        with_data = [tool for tool, state in tool_states.items() if state.has_data]
        if len(with_data) >= SuggestionConfig.MIN_WITH_DATA_FOR_EXPORT:
            candidates.append(
                Suggestion(
                    id=SuggestionConfig.EXPORT_ID,
                    target_tool=SuggestionConfig.EXPORT_TARGET,
                    priority=SuggestionPriority.LOW,
                    **SuggestionConfig.EXPORT_TEXT,
                )
            )

        seen: set[str] = set()
        unique = []
        for suggestion in candidates:
            if suggestion.id in seen or suggestion.id in self._dismissed:
                continue
            seen.add(suggestion.id)
            unique.append(suggestion)

        # sorted() is stable, so rule order is kept within a priority
        return sorted(unique, key=lambda s: s.priority.rank)

    def regenerate(self) -> list[Suggestion]:
        """Recompute suggestions from the machine and update the panel."""
        self._suggestions = self.generate(context=self.machine.context, tool_states=self.machine.tool_states)
        self._refresh_panel()
        logger.info(f"Suggestions: {[s.id for s in self._suggestions]}")
        return self.suggestions

    def schedule(self) -> None:
        """Debounced regenerate()."""
        self._debouncer.trigger()

    def poll(self) -> bool:
        """Run a scheduled regeneration whose quiet period has elapsed (loop-less callers)."""
        return self._debouncer.poll()

    def flush(self) -> None:
        """Run a scheduled regeneration immediately."""
        self._debouncer.flush()

    def _on_activation_change(self, change: ActivationChange) -> None:
        self.schedule()

    def _refresh_panel(self) -> None:
        if any(s.priority is SuggestionPriority.HIGH for s in self._suggestions):
            self.panel.open()
        self.panel.badge_count = sum(1 for s in self._suggestions if s.priority is not SuggestionPriority.HIGH)

    # ==========================================================================
    # Queries
    # ==========================================================================

    @property
    def suggestions(self) -> list[Suggestion]:
        return list(self._suggestions)

    @property
    def dismissed_ids(self) -> frozenset[str]:
        return frozenset(self._dismissed)

    def get(self, suggestion_id: str) -> Suggestion | None:
        return next((s for s in self._suggestions if s.id == suggestion_id), None)

    # ==========================================================================
    # User actions
    # ==========================================================================

    def dismiss(self, suggestion_id: str) -> None:
        """Hide a suggestion for the rest of the session."""
        self._dismissed.add(suggestion_id)
        self._suggestions = [s for s in self._suggestions if s.id != suggestion_id]
        self._refresh_panel()
        logger.info(f"Dismissed suggestion '{suggestion_id}'")

    def apply(self, suggestion_id: str) -> bool:
        """Carry out a suggestion's action, then dismiss it.

        Returns:
            False if no current suggestion has this id.
        """
        suggestion = self.get(suggestion_id)
        if suggestion is None:
            logger.warning(f"Cannot apply unknown or dismissed suggestion '{suggestion_id}'")
            return False

        if self.machine.is_known(suggestion.target_tool):
            self.machine.activate(suggestion.target_tool)
        elif suggestion.target_tool == SuggestionConfig.WORKFLOW_TARGET:
            deliver(self.notifier, AnalysisWorkflowNotification(steps=SuggestionConfig.WORKFLOW_STEPS))
        elif suggestion.target_tool == SuggestionConfig.EXPORT_TARGET:
            tools = tuple(tool for tool, state in self.machine.tool_states.items() if state.has_data)
            deliver(self.notifier, ExportInitiatedNotification(tools=tools))

        self.dismiss(suggestion_id)
        deliver(self.notifier, SuggestionAppliedNotification(action=suggestion.action))
        return True

    def reset_session(self) -> None:
        """Forget dismissals and close the panel."""
        self._debouncer.cancel()
        self._dismissed.clear()
        self._suggestions = []
        self.panel = SuggestionPanelState()

    def open_panel(self) -> None:
        self.panel.open()

    def close_panel(self) -> None:
        self.panel.close()
