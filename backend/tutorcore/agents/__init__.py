"""
Agent System: import all agent variants to trigger registration.

Each variant module registers its template with @builtin_template and its
step actions with @step_action on import. Importing this package makes all
of them available to AgentRegistry.with_builtin_templates().
"""

from tutorcore.agents.base import (
    AgentInstance,
    AgentState,
    AgentTemplate,
    AgentVariant,
    builtin_templates,
)
from tutorcore.agents.registry import AgentRegistry

from tutorcore.agents import research  # noqa: F401
from tutorcore.agents import analysis  # noqa: F401
from tutorcore.agents import creative  # noqa: F401
from tutorcore.agents import problem_solver  # noqa: F401

__all__ = [
    "AgentInstance",
    "AgentRegistry",
    "AgentState",
    "AgentTemplate",
    "AgentVariant",
    "builtin_templates",
]
