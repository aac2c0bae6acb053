"""
Tests for agent templates, instances and the agent registry.
"""

import pytest

from tutorcore.agents import (
    AgentRegistry, AgentState, AgentTemplate, AgentVariant, builtin_templates,
)
from tutorcore.errors import AgentTemplateNotFound
from tutorcore.orchestration.actions import StepAction, registered_actions


class TestTemplates:
    """Test the built-in templates."""

    def test_builtin_templates(self):
        ids = {t.template_id for t in builtin_templates()}
        assert ids == {"research_agent", "analysis_agent", "creative_agent", "problem_solver_agent"}

    def test_every_step_action_has_a_handler(self):
        assert set(registered_actions()) == set(StepAction)

    def test_template_is_immutable(self):
        template = AgentTemplate("t", AgentVariant.RESEARCH, "T", default_config={"a": 1})
        with pytest.raises(AttributeError):
            template.name = "other"
        with pytest.raises(TypeError):
            template.default_config["a"] = 2

    def test_to_dict(self):
        research = next(t for t in builtin_templates() if t.template_id == "research_agent")
        d = research.to_dict()
        assert d["variant"] == "research"
        assert "web_search" in d["tools"]
        assert d["default_config"]["max_sources"] == 10


class TestInstances:
    """Test template instantiation."""

    def test_instance_copies_template(self):
        template = AgentTemplate("t", AgentVariant.ANALYSIS, "T",
                                 tools=("calculation",), default_config={"depth": "basic"})
        instance = template.instantiate("s1", {"depth": "deep", "extra": True})

        assert instance.instance_id.startswith("t_")
        assert instance.session_id == "s1"
        assert instance.template_id == "t"
        assert instance.config == {"depth": "deep", "extra": True}
        assert instance.tools == ["calculation"]
        assert instance.state is AgentState.IDLE

    def test_instance_ids_never_repeat(self):
        template = AgentTemplate("t", AgentVariant.CREATIVE, "T")
        ids = {template.instantiate("s").instance_id for _ in range(20)}
        assert len(ids) == 20

    def test_instance_history(self):
        instance = AgentTemplate("t", AgentVariant.CREATIVE, "T").instantiate("s")
        instance.record({"action": "plan_content"})
        assert instance.to_dict()["history_length"] == 1


class TestAgentRegistry:
    """Test registration and lookup."""

    def test_with_builtin_templates(self):
        registry = AgentRegistry.with_builtin_templates()
        assert len(registry) == 4
        assert "creative_agent" in registry

    def test_require_unknown(self):
        with pytest.raises(AgentTemplateNotFound) as exc_info:
            AgentRegistry().require("ghost")
        assert exc_info.value.details["template_id"] == "ghost"

    def test_by_capability(self, agent_registry):
        found = [t.template_id for t in agent_registry.by_capability("logical_reasoning")]
        assert found == ["problem_solver_agent"]

    @pytest.mark.asyncio
    async def test_reregistering_keeps_spawned_instances(self, session_store, agent_registry):
        sid = await session_store.create_session("u")
        iid = await session_store.spawn_agent(sid, "creative_agent")

        agent_registry.register(AgentTemplate(
            "creative_agent", AgentVariant.CREATIVE, "Creative v2",
            default_config={"tone": "playful"}))

        old = session_store.get(sid).context.agent_instances[iid]
        assert old.config["tone"] == "professional"

        new_iid = await session_store.spawn_agent(sid, "creative_agent")
        new = session_store.get(sid).context.agent_instances[new_iid]
        assert new.config == {"tone": "playful"}

    def test_unregistered_tool_warning(self, tool_registry, caplog):
        registry = AgentRegistry(tool_registry)
        registry.register(AgentTemplate("t", AgentVariant.RESEARCH, "T", tools=("telepathy",)))
        assert "telepathy" in caplog.text
