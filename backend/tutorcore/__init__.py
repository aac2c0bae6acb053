"""
tutorcore: model routing and multi-agent orchestration for AI tutoring.
"""

from tutorcore.core import TutorCore
from tutorcore.errors import (
    AgentMissing,
    AgentTemplateNotFound,
    BackendUnavailable,
    CapacityExceeded,
    InvocationTimeout,
    ModelNotFound,
    PlanExecutionFailed,
    SessionInactive,
    SessionNotFound,
    ToolUnavailable,
    TutorCoreError,
)

__version__ = "0.1.0"

__all__ = [
    "AgentMissing",
    "AgentTemplateNotFound",
    "BackendUnavailable",
    "CapacityExceeded",
    "InvocationTimeout",
    "ModelNotFound",
    "PlanExecutionFailed",
    "SessionInactive",
    "SessionNotFound",
    "ToolUnavailable",
    "TutorCore",
    "TutorCoreError",
]
