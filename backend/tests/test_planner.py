"""
Tests for PlanBuilder's intent -> plan table.
"""

import pytest

from tutorcore.agents import AgentRegistry
from tutorcore.errors import AgentTemplateNotFound
from tutorcore.orchestration.actions import StepAction
from tutorcore.orchestration.intent import Intent
from tutorcore.orchestration.planner import DEFAULT_PLAN, PlanBuilder


class TestPlanTable:
    """Each intent maps to a fixed ordered step list."""

    def test_content_creation(self, agent_registry):
        plan = PlanBuilder(agent_registry).build(Intent(type="content_creation"))
        assert [s.action for s in plan.steps] == [
            StepAction.PLAN_CONTENT, StepAction.GENERATE_CONTENT,
        ]
        assert plan.required_agents == ["creative_agent"]
        assert plan.required_tools == ["content_generation"]

    def test_information_retrieval_uses_both_agents(self, agent_registry):
        plan = PlanBuilder(agent_registry).build(Intent(type="information_retrieval"))
        assert plan.required_agents == ["research_agent", "analysis_agent"]
        assert plan.required_tools == ["web_search", "content_generation"]

    def test_problem_solving_tools(self, agent_registry):
        plan = PlanBuilder(agent_registry).build(Intent(type="problem_solving"))
        assert plan.required_agents == ["problem_solver_agent"]
        assert plan.required_tools == ["calculation", "code_execution"]

    @pytest.mark.parametrize("intent_type", ["unknown", "educational"])
    def test_fallback_plan(self, agent_registry, intent_type):
        plan = PlanBuilder(agent_registry).build(Intent(type=intent_type))
        assert tuple(plan.steps) == DEFAULT_PLAN
        assert plan.required_agents == ["research_agent", "analysis_agent"]

    def test_estimated_duration(self, agent_registry):
        plan = PlanBuilder(agent_registry, step_cost_ms=1500).build(Intent(type="analysis"))
        assert plan.estimated_duration_ms == 3000

    def test_plans_are_fresh(self, agent_registry):
        builder = PlanBuilder(agent_registry)
        first = builder.build(Intent(type="analysis"))
        second = builder.build(Intent(type="analysis"))
        assert first.plan_id != second.plan_id
        assert first.steps is not second.steps


class TestPlanValidation:
    def test_missing_template_raises(self):
        with pytest.raises(AgentTemplateNotFound):
            PlanBuilder(AgentRegistry()).build(Intent(type="analysis"))

    def test_without_registry_skips_validation(self):
        plan = PlanBuilder().build(Intent(type="analysis"))
        assert len(plan.steps) == 2

    def test_to_dict(self, agent_registry):
        d = PlanBuilder(agent_registry).build(Intent(type="content_creation")).to_dict()
        assert d["steps"][0] == {"action": "plan_content", "agent_id": "creative_agent", "tools": []}
        assert d["intent"]["type"] == "content_creation"
