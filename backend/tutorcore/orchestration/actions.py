"""
Step actions: the closed set of things a plan step can ask an agent to do.

Each action is a named coroutine registered with @step_action and satisfies
the same contract: handler(step, ctx) -> result data. Agent modules register
the actions their variant performs.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable

from tutorcore.errors import TutorCoreError

logger = logging.getLogger(__name__)


class StepAction(Enum):
    SEARCH_INFORMATION = "search_information"
    GATHER_INFORMATION = "gather_information"
    SYNTHESIZE_RESULTS = "synthesize_results"
    PROCESS_RESPONSE = "process_response"
    ANALYZE_DATA = "analyze_data"
    GENERATE_INSIGHTS = "generate_insights"
    PLAN_CONTENT = "plan_content"
    GENERATE_CONTENT = "generate_content"
    ANALYZE_PROBLEM = "analyze_problem"
    SOLVE_PROBLEM = "solve_problem"


@dataclass
class ActionContext:
    """Everything an action handler may use while running one step."""
    session_id: str
    user_id: str
    message: str
    agent_id: str
    instance_id: str
    agent_config: dict
    shared: dict  # snapshot of the session's shared context
    run_tool: Callable[[str, dict], Awaitable[Any]]
    memory: dict = field(default_factory=dict)  # snapshot of the instance memory

    def payload(self, step, **extra) -> dict:
        base = {
            "query": self.message,
            "action": step.action.value,
            "agent_id": self.agent_id,
            "instance_id": self.instance_id,
            "user_id": self.user_id,
        }
        base.update(extra)
        return base

    async def use_tools(self, step, payload: dict) -> list:
        """Run the step's tools in order and collect their outputs."""
        outputs = []
        for tool_id in step.tools:
            outputs.append(await self.run_tool(tool_id, payload))
        return outputs

    def previous(self, action: StepAction) -> Any:
        """Result an earlier step stored in shared memory, if any."""
        return self.shared.get("shared_memory", {}).get(action.value)


ActionHandler = Callable[[Any, ActionContext], Awaitable[Any]]

_HANDLERS: dict[StepAction, ActionHandler] = {}


def step_action(action: StepAction):
    """Decorator registering the handler for one step action.

    Usage:
        @step_action(StepAction.SEARCH_INFORMATION)
        async def search_information(step, ctx):
            ...
    """
    def decorator(fn: ActionHandler) -> ActionHandler:
        _HANDLERS[action] = fn
        return fn
    return decorator


def combine(outputs: list, fallback: str) -> Any:
    """Collapse tool outputs into one step result."""
    if not outputs:
        return fallback
    if len(outputs) == 1:
        return outputs[0]
    if all(isinstance(o, str) for o in outputs):
        return "\n".join(outputs)
    return outputs


def registered_actions() -> list[StepAction]:
    return list(_HANDLERS.keys())


async def dispatch(step, ctx: ActionContext) -> Any:
    """Run the handler registered for step.action."""
    handler = _HANDLERS.get(step.action)
    if handler is None:
        raise TutorCoreError(f"No handler registered for action {step.action.value}",
                             stage="dispatch_action", action=step.action.value)
    logger.debug("Dispatching %s to %s", step.action.value, ctx.instance_id)
    return await handler(step, ctx)
