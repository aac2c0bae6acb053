"""
Error taxonomy for the routing and orchestration core.

Every failure carries the stage it happened in plus a details dict, so a
caller can reconstruct where an operation stopped without parsing messages.
"""

from typing import Any, Optional


class TutorCoreError(Exception):
    """Base class for all tutorcore errors."""

    def __init__(self, message: str, stage: str = "", **details: Any):
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.details = details

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "stage": self.stage,
            "details": dict(self.details),
        }


class SessionNotFound(TutorCoreError):
    """No session is registered under the given id."""


class SessionInactive(SessionNotFound):
    """The session was closed explicitly or by inactivity timeout.

    Subclasses SessionNotFound: a closed session is not a usable session.
    """


class AgentTemplateNotFound(TutorCoreError):
    """No agent template is registered under the given id."""


class AgentMissing(TutorCoreError):
    """A plan step targets a template with no instance in the session."""


class CapacityExceeded(TutorCoreError):
    """A session agent or tool limit was reached."""


class ModelNotFound(TutorCoreError):
    """No routable model survived scoring."""


class BackendUnavailable(TutorCoreError):
    """The model backend could not be reached or returned an error."""


class InvocationTimeout(TutorCoreError):
    """The model backend did not answer in time."""


class ToolUnavailable(TutorCoreError):
    """A tool is unknown or its capability failed."""


class PlanExecutionFailed(TutorCoreError):
    """Wraps the first failing step of a plan together with the partial execution."""

    def __init__(self, message: str, execution, step_id: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, stage="execute_step", step_id=step_id,
                         plan_id=getattr(execution, "plan_id", None))
        self.execution = execution
        self.step_id = step_id
        self.cause = cause

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["execution"] = self.execution.to_dict() if self.execution else None
        if isinstance(self.cause, TutorCoreError):
            d["cause"] = self.cause.to_dict()
        elif self.cause is not None:
            d["cause"] = {"error": type(self.cause).__name__, "message": str(self.cause)}
        return d
