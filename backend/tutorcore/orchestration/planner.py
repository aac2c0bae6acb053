"""
PlanBuilder: turns an Intent into an ordered step plan.

Plans come from a fixed table keyed by intent type; unknown intents fall back
to a research -> analysis plan. A plan is built fresh for every message.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional

from tutorcore.orchestration.actions import StepAction
from tutorcore.orchestration.intent import Intent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    action: StepAction
    agent_id: str  # target agent template
    tools: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "agent_id": self.agent_id,
            "tools": list(self.tools),
        }


@dataclass
class Plan:
    intent: Intent
    steps: list[Step]
    estimated_duration_ms: int = 0
    plan_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def required_agents(self) -> list[str]:
        """Templates the steps target, in first-use order."""
        return list(dict.fromkeys(s.agent_id for s in self.steps))

    @property
    def required_tools(self) -> list[str]:
        return list(dict.fromkeys(t for s in self.steps for t in s.tools))

    def to_dict(self) -> dict:
        return {
            "plan_id": self.plan_id,
            "intent": self.intent.to_dict(),
            "steps": [s.to_dict() for s in self.steps],
            "required_agents": self.required_agents,
            "required_tools": self.required_tools,
            "estimated_duration_ms": self.estimated_duration_ms,
        }


PLAN_TABLE: dict[str, tuple[Step, ...]] = {
    "information_retrieval": (
        Step(StepAction.SEARCH_INFORMATION, "research_agent", ("web_search",)),
        Step(StepAction.SYNTHESIZE_RESULTS, "analysis_agent", ("content_generation",)),
    ),
    "analysis": (
        Step(StepAction.ANALYZE_DATA, "analysis_agent", ("file_analysis",)),
        Step(StepAction.GENERATE_INSIGHTS, "analysis_agent", ("calculation",)),
    ),
    "content_creation": (
        Step(StepAction.PLAN_CONTENT, "creative_agent"),
        Step(StepAction.GENERATE_CONTENT, "creative_agent", ("content_generation",)),
    ),
    "problem_solving": (
        Step(StepAction.ANALYZE_PROBLEM, "problem_solver_agent"),
        Step(StepAction.SOLVE_PROBLEM, "problem_solver_agent", ("calculation", "code_execution")),
    ),
}

DEFAULT_PLAN: tuple[Step, ...] = (
    Step(StepAction.GATHER_INFORMATION, "research_agent", ("web_search",)),
    Step(StepAction.PROCESS_RESPONSE, "analysis_agent", ("content_generation",)),
)


class PlanBuilder:
    """Deterministic intent -> plan lookup.

    When an agent registry is supplied, every template a plan targets must be
    registered; otherwise AgentTemplateNotFound is raised at build time.
    """

    def __init__(self, agent_registry=None, step_cost_ms: int = 5000,
                 table: Optional[dict[str, tuple[Step, ...]]] = None):
        self._agents = agent_registry
        self._step_cost_ms = step_cost_ms
        self._table = table if table is not None else PLAN_TABLE

    def build(self, intent: Intent, session=None) -> Plan:
        steps = list(self._table.get(intent.type, DEFAULT_PLAN))
        plan = Plan(intent=intent, steps=steps,
                    estimated_duration_ms=len(steps) * self._step_cost_ms)

        if self._agents is not None:
            for template_id in plan.required_agents:
                self._agents.require(template_id)

        logger.debug("Built plan %s for %s intent%s: %s", plan.plan_id, intent.type,
                     f" in session {session.session_id}" if session else "",
                     ", ".join(s.action.value for s in steps))
        return plan
