"""
AgentRegistry: central registry for agent templates.
"""

import logging
from typing import Optional

from tutorcore.agents.base import AgentTemplate, builtin_templates
from tutorcore.errors import AgentTemplateNotFound

logger = logging.getLogger(__name__)


class AgentRegistry:
    """Manages registration and lookup of agent templates.

    Registration is additive. Re-registering an id replaces the template for
    future spawns only; instances already spawned keep the copy they were
    created from.
    """

    def __init__(self, tool_registry=None):
        self._templates: dict[str, AgentTemplate] = {}
        self._tools = tool_registry

    @classmethod
    def with_builtin_templates(cls, tool_registry=None) -> "AgentRegistry":
        registry = cls(tool_registry)
        for template in builtin_templates():
            registry.register(template)
        return registry

    def register(self, template: AgentTemplate):
        """Register a template by its template_id."""
        if template.template_id in self._templates:
            logger.warning("Replacing agent template: %s", template.template_id)
        if self._tools is not None:
            unknown = [t for t in template.tools if t not in self._tools]
            if unknown:
                logger.warning("Agent %s references unregistered tools: %s",
                               template.template_id, ", ".join(unknown))
        self._templates[template.template_id] = template
        logger.info("Registered agent: %s", template.template_id)

    def get(self, template_id: str) -> Optional[AgentTemplate]:
        return self._templates.get(template_id)

    def require(self, template_id: str) -> AgentTemplate:
        """Get a template or raise AgentTemplateNotFound."""
        template = self._templates.get(template_id)
        if template is None:
            raise AgentTemplateNotFound(f"Agent {template_id} not found",
                                        stage="lookup_template", template_id=template_id)
        return template

    def all(self) -> list[AgentTemplate]:
        return list(self._templates.values())

    def ids(self) -> list[str]:
        return list(self._templates.keys())

    def by_capability(self, capability: str) -> list[AgentTemplate]:
        """Find templates that declare a specific capability."""
        return [t for t in self._templates.values() if capability in t.capabilities]

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)
