"""Error taxonomy for the field survey engine.

- InvalidArgument: bad coordinates, interpolation factors or sample counts
- UnknownTool: activation request for a tool the machine does not know
- ProviderUnavailable: elevation provider failed (degraded to fallback, never surfaced)
- Superseded: a sampling generation was replaced by a newer request (informational)
"""


class SurveyError(Exception):
    """Base class for all field survey errors."""


class InvalidArgument(SurveyError, ValueError):
    """Input outside the accepted domain (coordinates, t, sample counts)."""


class UnknownTool(SurveyError, LookupError):
    """Tool id not registered with the activation machine.

    Returned as an error value inside ActivationResult, not raised.
    """

    def __init__(self, tool: str) -> None:
        super().__init__(f"Unknown tool '{tool}'")
        self.tool = tool


class ProviderUnavailable(SurveyError):
    """Elevation provider could not answer for a point."""


class Superseded(SurveyError):
    """A sampling run was invalidated by a newer one for the same profile."""

    def __init__(self, profile_id: str, generation: int) -> None:
        super().__init__(f"Sampling generation {generation} for profile '{profile_id}' was superseded")
        self.profile_id = profile_id
        self.generation = generation
