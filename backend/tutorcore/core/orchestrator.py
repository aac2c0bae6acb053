"""
TutorCore: the orchestration façade.

Wires the model router, agent and tool registries, session store, intent
classifier, plan builder and plan executor into the operation set callers
use: sessions, agents, message processing, routing and stats.

Flow for process_message():
  1. Record the user message (refreshes session activity)
  2. Classify intent
  3. Build a plan for the intent
  4. Execute it: ensure agents, run steps in order, synthesize a reply
"""

import logging
import time
from typing import Any, Callable, Optional

from tutorcore.agents import AgentRegistry, AgentTemplate, builtin_templates
from tutorcore.inference import ModelInvoker, ModelRegistry, ModelRouter, OpenAICompatInvoker
from tutorcore.inference.models import RoutingDecision
from tutorcore.orchestration.events import Event, EventHub
from tutorcore.orchestration.executor import ExecutionResult, PlanExecutor
from tutorcore.orchestration.intent import IntentClassifier
from tutorcore.orchestration.planner import PlanBuilder
from tutorcore.orchestration.session import SessionStore
from tutorcore.profile import Profile, get_profile
from tutorcore.tools import RegistryToolExecutor, ToolExecutor, ToolRegistry, register_default_tools

logger = logging.getLogger(__name__)


class TutorCore:
    """Routing and multi-agent orchestration over injected registries."""

    def __init__(self, models: ModelRegistry, agents: AgentRegistry, tools: ToolRegistry,
                 invoker: Optional[ModelInvoker] = None,
                 tool_executor: Optional[ToolExecutor] = None,
                 profile: Optional[Profile] = None,
                 events: Optional[EventHub] = None,
                 clock: Callable[[], float] = time.time):
        profile = profile or get_profile()
        self.profile = profile
        self.events = events or EventHub()
        self.models = models
        self.agents = agents
        self.tools = tools

        self.router = ModelRouter(models, invoker, self.events,
                                  default_urgency=profile.routing.default_urgency)
        self.sessions = SessionStore(agents, profile.sessions, self.events, clock)
        self.classifier = IntentClassifier()
        self.planner = PlanBuilder(agents, step_cost_ms=profile.executor.step_cost_ms)
        self.executor = PlanExecutor(self.sessions, tool_executor or RegistryToolExecutor(tools))

    @classmethod
    def from_profile(cls, profile: Optional[Profile] = None,
                     invoker: Optional[ModelInvoker] = None,
                     clock: Callable[[], float] = time.time) -> "TutorCore":
        """Build a core with the profile's models, default tools and built-in agents."""
        profile = profile or get_profile()
        if invoker is None and profile.routing.backend_url:
            invoker = OpenAICompatInvoker(profile.routing.backend_url,
                                          default_timeout=profile.routing.invoke_timeout_seconds)

        tools = ToolRegistry()
        agents = AgentRegistry(tools)
        core = cls(ModelRegistry.from_profile(profile), agents, tools,
                   invoker=invoker, profile=profile, clock=clock)

        register_default_tools(tools, core.router)
        for template in builtin_templates():
            agents.register(template)

        logger.info("TutorCore ready: %d models, %d agents, %d tools",
                    len(core.models), len(agents), len(tools))
        return core

    # ── Sessions ──

    async def create_session(self, user_id: str, config: Optional[dict] = None) -> str:
        return await self.sessions.create_session(user_id, config)

    async def close_session(self, session_id: str):
        await self.sessions.close_session(session_id)

    async def spawn_agent(self, session_id: str, template_id: str,
                          config: Optional[dict] = None) -> str:
        return await self.sessions.spawn_agent(session_id, template_id, config)

    def get_session_info(self, session_id: str) -> dict:
        session = self.sessions.get(session_id)
        info = session.info()
        if session.context is not None:
            info["agents"] = [i.to_dict() for i in session.context.agent_instances.values()]
        return info

    def get_session_history(self, session_id: str) -> list[dict]:
        return self.sessions.history(session_id)

    async def expire_idle_sessions(self) -> list[str]:
        return await self.sessions.expire_idle()

    # ── Messages ──

    async def process_message(self, session_id: str, message: str, sender: str = "user",
                              msg_type: str = "query",
                              metadata: Optional[dict] = None) -> ExecutionResult:
        """Classify, plan and execute one message. Raises PlanExecutionFailed on step failure."""
        session = await self.sessions.require_active(session_id)
        await self.sessions.append_message(session_id, message, sender, msg_type, metadata)

        intent = self.classifier.classify(message)
        plan = self.planner.build(intent, session)
        logger.info("Session %s: %s intent (%.1f), %d-step plan %s", session_id,
                    intent.type, intent.confidence, len(plan.steps), plan.plan_id)

        result = await self.executor.execute(plan, session_id, message)
        result.metadata["intent"] = intent.to_dict()
        self.events.emit("message_processed", session_id=session_id,
                         plan_id=plan.plan_id, intent=intent.type,
                         status=result.execution.status.value)
        return result

    # ── Routing ──

    async def route(self, request_type: str, content: str,
                    user_context: Optional[dict] = None) -> RoutingDecision:
        return await self.router.route(request_type, content, user_context)

    async def record_outcome(self, model_name: str, latency_ms: float, success: bool,
                             user_rating: Optional[float] = None):
        await self.router.record_outcome(model_name, latency_ms, success, user_rating)

    def get_model_status(self) -> list[dict]:
        return self.router.get_model_status()

    # ── Registration ──

    def register_agent(self, template: AgentTemplate):
        self.agents.register(template)

    def register_tool(self, tool_id: str, handler: Callable[[dict, dict], Any],
                      description: str = ""):
        self.tools.register(tool_id, handler, description)

    def subscribe(self, callback: Callable[[Event], None]):
        self.events.subscribe(callback)

    # ── Stats ──

    def get_system_stats(self) -> dict:
        stats = self.sessions.stats()
        return {
            "active_sessions": stats["active_sessions"],
            "total_sessions": stats["total_sessions"],
            "registered_agents": len(self.agents),
            "registered_tools": len(self.tools),
            "registered_models": len(self.models),
            "total_contexts": stats["total_contexts"],
        }
