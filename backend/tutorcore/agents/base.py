"""
Base agent abstractions for the tutoring orchestration core.

Provides AgentVariant, AgentState, AgentTemplate and AgentInstance. Templates
are immutable definitions; instances are session-scoped copies that own
their memory and execution history.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class AgentVariant(Enum):
    RESEARCH = "research"
    ANALYSIS = "analysis"
    CREATIVE = "creative"
    PROBLEM_SOLVER = "problem_solver"


class AgentState(Enum):
    IDLE = "idle"
    BUSY = "busy"


@dataclass(frozen=True)
class AgentTemplate:
    template_id: str
    variant: AgentVariant
    name: str
    description: str = ""
    capabilities: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()  # allowed tool ids
    default_config: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "capabilities", tuple(self.capabilities))
        object.__setattr__(self, "tools", tuple(self.tools))
        object.__setattr__(self, "default_config",
                           MappingProxyType(dict(self.default_config)))

    def instantiate(self, session_id: str, config: Optional[dict] = None) -> "AgentInstance":
        """Create a session-scoped instance with template defaults merged under overrides."""
        merged = dict(self.default_config)
        merged.update(config or {})
        return AgentInstance(
            instance_id=f"{self.template_id}_{uuid.uuid4()}",
            template_id=self.template_id,
            session_id=session_id,
            config=merged,
            capabilities=list(self.capabilities),
            tools=list(self.tools),
        )

    def to_dict(self) -> dict:
        return {
            "template_id": self.template_id,
            "variant": self.variant.value,
            "name": self.name,
            "description": self.description,
            "capabilities": list(self.capabilities),
            "tools": list(self.tools),
            "default_config": dict(self.default_config),
        }


@dataclass
class AgentInstance:
    instance_id: str
    template_id: str  # lookup only, never lifecycle control
    session_id: str
    config: dict = field(default_factory=dict)
    capabilities: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    state: AgentState = AgentState.IDLE
    memory: dict = field(default_factory=dict)
    # append-only; callers cap externally
    execution_history: list = field(default_factory=list)
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def record(self, entry):
        self.execution_history.append(entry)

    def to_dict(self) -> dict:
        return {
            "instance_id": self.instance_id,
            "template_id": self.template_id,
            "session_id": self.session_id,
            "config": dict(self.config),
            "capabilities": list(self.capabilities),
            "tools": list(self.tools),
            "state": self.state.value,
            "history_length": len(self.execution_history),
            "created_at": self.created_at,
        }


# Class-level registry of built-in templates: template_id -> factory
_BUILTIN_TEMPLATES: dict[str, Any] = {}


def builtin_template(factory):
    """Decorator to register a built-in template factory.

    Usage:
        @builtin_template
        def research_agent() -> AgentTemplate:
            return AgentTemplate(template_id="research_agent", ...)
    """
    template = factory()
    if not isinstance(template, AgentTemplate):
        raise ValueError(f"{factory.__name__} must return an AgentTemplate")
    _BUILTIN_TEMPLATES[template.template_id] = factory
    return factory


def builtin_templates() -> list[AgentTemplate]:
    """Fresh instances of every registered built-in template."""
    return [factory() for factory in _BUILTIN_TEMPLATES.values()]
