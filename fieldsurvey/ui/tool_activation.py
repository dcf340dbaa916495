"""Tool activation state machine.

Decides which measurement tools receive map input and which one is primary.

Per tool (python-statemachine):
    Inactive --turn_on--> Active --turn_off--> Inactive

Machine level (ActivationContext):
    active_tools: tools currently Active
    primary_tool: most recently activated tool (routes map clicks), always in active_tools
    multi_tool_mode: whether several tools may be active at once

Transition rule for activate(tool):
    1. tool already active -> turn it off; clear primary_tool if it was primary.
    2. otherwise -> in exclusive mode turn every other tool off first;
       then turn tool on and make it primary.

toggle_multi_tool_mode() only flips the flag. Leaving multi-tool mode does not
deactivate anything: several tools may stay active until the next activate()
call enforces exclusivity (lazy exclusivity).

All writes go through apply(); readers get frozen snapshots. Unknown tools are
reported as an UnknownTool error value in ActivationResult, never raised.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from statemachine import State, StateMachine

from fieldsurvey.constants import ToolConfig
from fieldsurvey.core.notifier import NotificationSink, deliver
from fieldsurvey.errors import UnknownTool
from fieldsurvey.model.notification import (
    MultiToolModeNotification,
    ToolActivatedNotification,
    ToolDeactivatedNotification,
    UnknownToolNotification,
)

logger = logging.getLogger(__name__)


class ToolId:
    """Identifiers of the built-in measurement tools.

    Tool ids are plain strings, so new tools can be registered with
    ToolActivationMachine.register_tool() without touching this class.
    """

    DISTANCE = ToolConfig.DISTANCE
    POLYGON = ToolConfig.POLYGON
    ELEVATION = ToolConfig.ELEVATION

    ALL = list(ToolConfig.TOOLS)

    @staticmethod
    def display_name(tool: str) -> str:
        return ToolConfig.DISPLAY_NAMES.get(tool, tool.capitalize())


# =============================================================================
# SNAPSHOTS
# =============================================================================


@dataclass(frozen=True)
class ToolState:
    """Read-only state of one tool."""

    tool: str
    is_active: bool
    has_data: bool


@dataclass(frozen=True)
class ActivationContext:
    """Read-only snapshot of machine-level activation state."""

    active_tools: frozenset[str]
    primary_tool: str | None
    multi_tool_mode: bool

    def is_active(self, tool: str) -> bool:
        return tool in self.active_tools

    @property
    def is_exclusive_consistent(self) -> bool:
        """True unless exclusive mode currently has several active tools (lazy exclusivity window)."""
        return self.multi_tool_mode or len(self.active_tools) <= 1


# =============================================================================
# TRANSITIONS
# =============================================================================


@dataclass(frozen=True)
class Activate:
    """Toggle a tool (see module docstring for the rule)."""

    tool: str


@dataclass(frozen=True)
class Deactivate:
    """Turn a tool off if it is active."""

    tool: str


@dataclass(frozen=True)
class ToggleMultiToolMode:
    """Flip multi-tool mode without touching active tools."""


@dataclass(frozen=True)
class SetHasData:
    """Record whether a tool currently holds measurement data."""

    tool: str
    has_data: bool


@dataclass(frozen=True)
class Reset:
    """Deactivate everything, clear data flags and leave multi-tool mode."""


Transition = Union[Activate, Deactivate, ToggleMultiToolMode, SetHasData, Reset]


@dataclass(frozen=True)
class ActivationResult:
    """Outcome of apply(): ok flag, optional error value and the resulting context."""

    ok: bool
    context: ActivationContext
    error: UnknownTool | None = None


@dataclass(frozen=True)
class ActivationChange:
    """Delivered to listeners after every effective change."""

    transition: Transition
    previous: ActivationContext
    current: ActivationContext
    tool_states: dict[str, ToolState]


ActivationListener = Callable[[ActivationChange], None]


# =============================================================================
# PER-TOOL LIFECYCLE
# =============================================================================


@dataclass
class ToolModel:
    """Mutable per-tool model driven by ToolLifecycle.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model.
    """

    tool: str
    state: str | None = None
    has_data: bool = False


class ToolLifecycle(StateMachine):
    """Inactive <-> Active lifecycle of a single tool."""

    inactive = State("Inactive", initial=True)
    active = State("Active")

    turn_on = inactive.to(active)
    turn_off = active.to(inactive)

    def __init__(self, model: ToolModel) -> None:
        super().__init__(model=model)

    @property
    def is_on(self) -> bool:
        return self.active.is_active

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[TOOL {self.model.tool}] {source.name} --({event})--> {target.name}")


# =============================================================================
# MACHINE
# =============================================================================


class ToolActivationMachine:
    """Single writer of ActivationContext.

    Example:
        machine = ToolActivationMachine()
        machine.activate(ToolId.DISTANCE)
        machine.context.primary_tool  # "distance"
    """

    def __init__(
        self,
        tools: Iterable[str] = ToolId.ALL,
        notifier: Optional[NotificationSink] = None,
        multi_tool_mode: bool = False,
    ) -> None:
        """Initialize machine with all tools inactive.

        Args:
            tools: Known tool ids
            notifier: Optional sink for activation notifications
            multi_tool_mode: Initial multi-tool mode
        """
        self.notifier = notifier
        self._lifecycles: dict[str, ToolLifecycle] = {}
        self._primary_tool: str | None = None
        self._multi_tool_mode = multi_tool_mode
        self._listeners: list[ActivationListener] = []
        for tool in tools:
            self.register_tool(tool)

    # ==========================================================================
    # Registry
    # ==========================================================================

    def register_tool(self, tool: str) -> None:
        """Add a tool id (inactive, no data). Re-registering is a no-op."""
        if tool in self._lifecycles:
            return
        self._lifecycles[tool] = ToolLifecycle(model=ToolModel(tool=tool))
        logger.debug(f"Registered tool '{tool}'")

    def is_known(self, tool: str) -> bool:
        return tool in self._lifecycles

    @property
    def tools(self) -> list[str]:
        return list(self._lifecycles)

    # ==========================================================================
    # Snapshots
    # ==========================================================================

    @property
    def context(self) -> ActivationContext:
        return ActivationContext(
            active_tools=frozenset(t for t, sm in self._lifecycles.items() if sm.is_on),
            primary_tool=self._primary_tool,
            multi_tool_mode=self._multi_tool_mode,
        )

    @property
    def tool_states(self) -> dict[str, ToolState]:
        return {
            tool: ToolState(tool=tool, is_active=sm.is_on, has_data=sm.model.has_data)
            for tool, sm in self._lifecycles.items()
        }

    def tool_state(self, tool: str) -> ToolState | None:
        return self.tool_states.get(tool)

    # ==========================================================================
    # Listeners
    # ==========================================================================

    def add_listener(self, listener: ActivationListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ActivationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_listeners(self, change: ActivationChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception(f"Activation listener {listener!r} failed")

    # ==========================================================================
    # Transition function
    # ==========================================================================

    def apply(self, transition: Transition) -> ActivationResult:
        """Apply a transition; the only way to change activation state.

        Returns:
            ActivationResult with ok=False and an UnknownTool error for unknown tools.
        """
        tool = getattr(transition, "tool", None)
        if tool is not None and not self.is_known(tool):
            logger.warning(f"Ignoring {type(transition).__name__} for unknown tool '{tool}'")
            deliver(self.notifier, UnknownToolNotification(tool=tool))
            return ActivationResult(ok=False, context=self.context, error=UnknownTool(tool))

        previous = self.context
        previous_states = self.tool_states

        if isinstance(transition, Activate):
            self._activate(tool=transition.tool)
        elif isinstance(transition, Deactivate):
            self._turn_off(tool=transition.tool, announce=True)
        elif isinstance(transition, ToggleMultiToolMode):
            self._multi_tool_mode = not self._multi_tool_mode
            logger.info(f"Multi-tool mode {'enabled' if self._multi_tool_mode else 'disabled'}")
            deliver(self.notifier, MultiToolModeNotification(enabled=self._multi_tool_mode))
        elif isinstance(transition, SetHasData):
            self._lifecycles[transition.tool].model.has_data = transition.has_data
        elif isinstance(transition, Reset):
            for name in self.tools:
                self._turn_off(tool=name, announce=False)
                self._lifecycles[name].model.has_data = False
            self._multi_tool_mode = False
        else:
            raise TypeError(f"Unsupported transition: {transition!r}")

        current = self.context
        current_states = self.tool_states
        if current != previous or current_states != previous_states:
            self._notify_listeners(
                ActivationChange(
                    transition=transition,
                    previous=previous,
                    current=current,
                    tool_states=current_states,
                )
            )
        return ActivationResult(ok=True, context=current)

    def _turn_off(self, tool: str, announce: bool) -> None:
        lifecycle = self._lifecycles[tool]
        if not lifecycle.is_on:
            return
        lifecycle.turn_off()
        if self._primary_tool == tool:
            self._primary_tool = None
        if announce:
            deliver(self.notifier, ToolDeactivatedNotification(tool=tool))

    def _activate(self, tool: str) -> None:
        if self._lifecycles[tool].is_on:
            self._turn_off(tool=tool, announce=True)
            return

        if not self._multi_tool_mode:
            for other in self.tools:
                if other != tool:
                    self._turn_off(tool=other, announce=False)

        self._lifecycles[tool].turn_on()
        self._primary_tool = tool
        deliver(self.notifier, ToolActivatedNotification(tool=tool, multi_tool_mode=self._multi_tool_mode))

    # ==========================================================================
    # Convenience wrappers
    # ==========================================================================

    def activate(self, tool: str) -> ActivationResult:
        return self.apply(Activate(tool=tool))

    def deactivate(self, tool: str) -> ActivationResult:
        return self.apply(Deactivate(tool=tool))

    def toggle_multi_tool_mode(self) -> ActivationResult:
        return self.apply(ToggleMultiToolMode())

    def set_has_data(self, tool: str, has_data: bool) -> ActivationResult:
        return self.apply(SetHasData(tool=tool, has_data=has_data))

    def reset(self) -> ActivationResult:
        return self.apply(Reset())

    def __repr__(self) -> str:
        ctx = self.context
        return (
            f"ToolActivationMachine(active={sorted(ctx.active_tools)}, primary={ctx.primary_tool}, "
            f"multi={ctx.multi_tool_mode})"
        )
