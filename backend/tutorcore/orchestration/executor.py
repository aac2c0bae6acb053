"""
PlanExecutor: runs a plan's steps against the session's agent instances.

State machine:
  Execution: created -> executing -> completed | failed
  Step:      pending -> executing -> completed | failed

Steps run strictly in order; a step may read what earlier steps wrote to
shared memory. The session lock is held only while reading or writing
session state, never across a tool call. The first failing step aborts the
rest and surfaces as PlanExecutionFailed carrying the partial Execution.
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from tutorcore.agents.base import AgentState
from tutorcore.config import SYNTHESIS_CLOSING, SYNTHESIS_HEADER
from tutorcore.errors import (
    AgentMissing, CapacityExceeded, PlanExecutionFailed, SessionInactive, TutorCoreError,
)
from tutorcore.orchestration import actions
from tutorcore.orchestration.actions import ActionContext
from tutorcore.orchestration.planner import Plan, Step

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ExecutionStatus(Enum):
    CREATED = "created"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


class StepStatus(Enum):
    PENDING = "pending"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


def _error_dict(exc: BaseException) -> dict:
    if isinstance(exc, TutorCoreError):
        return exc.to_dict()
    return {"error": type(exc).__name__, "message": str(exc)}


@dataclass
class StepExecution:
    step_id: str
    action: str
    agent_id: str
    tools: list[str] = field(default_factory=list)
    instance_id: Optional[str] = None
    status: StepStatus = StepStatus.PENDING
    result: Any = None
    error: Optional[dict] = None
    started_at: Optional[str] = None
    finished_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "step_id": self.step_id,
            "action": self.action,
            "agent_id": self.agent_id,
            "tools": list(self.tools),
            "instance_id": self.instance_id,
            "status": self.status.value,
            "result": self.result,
            "error": self.error,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }


@dataclass
class Execution:
    plan_id: str
    session_id: str
    required_agents: list[str] = field(default_factory=list)
    required_tools: list[str] = field(default_factory=list)
    steps: list[StepExecution] = field(default_factory=list)
    status: ExecutionStatus = ExecutionStatus.CREATED
    execution_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_ms: Optional[float] = None
    error: Optional[dict] = None
    _t0: float = field(default=0.0, repr=False)

    @classmethod
    def for_plan(cls, plan: Plan, session_id: str) -> "Execution":
        return cls(plan_id=plan.plan_id, session_id=session_id,
                   required_agents=plan.required_agents,
                   required_tools=plan.required_tools)

    @property
    def results(self) -> list[Any]:
        return [s.result for s in self.steps if s.status is StepStatus.COMPLETED]

    def start(self):
        self.status = ExecutionStatus.EXECUTING
        self.start_time = _now()
        self._t0 = time.monotonic()

    def finish(self, status: ExecutionStatus, error: Optional[dict] = None):
        self.status = status
        self.error = error
        self.end_time = _now()
        self.duration_ms = round((time.monotonic() - self._t0) * 1000, 2)

    def to_dict(self) -> dict:
        return {
            "execution_id": self.execution_id,
            "plan_id": self.plan_id,
            "session_id": self.session_id,
            "required_agents": list(self.required_agents),
            "required_tools": list(self.required_tools),
            "steps": [s.to_dict() for s in self.steps],
            "status": self.status.value,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration_ms": self.duration_ms,
            "error": self.error,
        }


@dataclass
class ExecutionResult:
    response: str
    execution: Execution
    metadata: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "response": self.response,
            "execution": self.execution.to_dict(),
            "metadata": dict(self.metadata),
        }


def _render(result: Any) -> str:
    if isinstance(result, (dict, list, tuple)):
        return json.dumps(result, indent=2, default=str)
    return str(result)


def synthesize_response(results: list[Any]) -> str:
    """Enumerate step results under a fixed header and closing remark.

    Empty results are skipped but keep their position in the numbering.
    Structured results are rendered as indented JSON.
    """
    body = "".join(f"{i}. {_render(r)}\n" for i, r in enumerate(results, start=1)
                   if r is not None and r != "")
    return SYNTHESIS_HEADER + body + "\n" + SYNTHESIS_CLOSING


class PlanExecutor:
    """Executes plans inside sessions owned by a SessionStore."""

    def __init__(self, sessions, tool_executor):
        self._sessions = sessions
        self._tools = tool_executor

    async def execute(self, plan: Plan, session_id: str,
                      original_message: str) -> ExecutionResult:
        session = await self._sessions.require_active(session_id)
        # close_session() drops session.context; this run keeps its own reference
        context = session.context
        execution = Execution.for_plan(plan, session_id)
        execution.start()

        # ── Ensure agents ──
        try:
            for template_id in plan.required_agents:
                await self._sessions.ensure_agent(session_id, template_id)
        except TutorCoreError as e:
            execution.finish(ExecutionStatus.FAILED, _error_dict(e))
            logger.error("Plan %s could not prepare agents in session %s: %s",
                         plan.plan_id, session_id, e)
            raise

        # ── Run steps ──
        for index, step in enumerate(plan.steps, start=1):
            record = StepExecution(step_id=f"step_{index}", action=step.action.value,
                                   agent_id=step.agent_id, tools=list(step.tools))
            execution.steps.append(record)
            try:
                await self._run_step(session, context, step, record, original_message)
            except Exception as e:
                record.status = StepStatus.FAILED
                record.error = _error_dict(e)
                record.finished_at = _now()
                execution.finish(ExecutionStatus.FAILED, record.error)
                logger.error("Step %s (%s) of plan %s failed: %s",
                             record.step_id, record.action, plan.plan_id, e)
                raise PlanExecutionFailed(
                    f"Step {record.step_id} ({record.action}) failed: {e}",
                    execution, step_id=record.step_id, cause=e,
                ) from e

        execution.finish(ExecutionStatus.COMPLETED)
        response = synthesize_response(execution.results)
        metadata = {
            "plan_id": plan.plan_id,
            "duration_ms": execution.duration_ms,
            "steps_executed": len(execution.steps),
            "agents_used": plan.required_agents,
            "agent_instances": list(dict.fromkeys(s.instance_id for s in execution.steps)),
            "tools_used": plan.required_tools,
        }

        if session.is_active:
            try:
                await self._sessions.append_message(
                    session_id, response, sender="assistant", msg_type="response",
                    metadata={"plan_id": plan.plan_id,
                              "execution_id": execution.execution_id},
                )
            except SessionInactive:
                logger.info("Session %s closed before reply for plan %s was stored",
                            session_id, plan.plan_id)

        logger.info("Plan %s completed in session %s (%d steps, %.0fms)",
                    plan.plan_id, session_id, len(execution.steps), execution.duration_ms)
        return ExecutionResult(response=response, execution=execution, metadata=metadata)

    async def _run_step(self, session, context, step: Step, record: StepExecution,
                        message: str):
        async with session.lock:
            instance = context.instance_for(step.agent_id)
            if instance is None:
                raise AgentMissing(
                    f"No {step.agent_id} instance in session {session.session_id}",
                    stage="locate_agent", session_id=session.session_id,
                    agent_id=step.agent_id, step_id=record.step_id,
                )
            used = session.tools_used | set(step.tools)
            if len(used) > session.config.max_tools:
                raise CapacityExceeded(
                    "Maximum number of tools reached for this session",
                    stage="reserve_tools", session_id=session.session_id,
                    limit=session.config.max_tools, step_id=record.step_id,
                )
            session.tools_used = used
            context.current_task = step.action.value
            context.execution_stack.append(record.step_id)
            instance.state = AgentState.BUSY
            shared = context.snapshot()
            memory = dict(instance.memory)

        for tool_id in step.tools:
            if tool_id not in instance.tools:
                logger.debug("Step %s uses %s outside %s's allowed tools",
                             record.step_id, tool_id, step.agent_id)

        record.instance_id = instance.instance_id
        record.status = StepStatus.EXECUTING
        record.started_at = _now()

        async def run_tool(tool_id: str, payload: dict) -> Any:
            return await self._tools.run(tool_id, payload, shared)

        ctx = ActionContext(
            session_id=session.session_id,
            user_id=session.user_id,
            message=message,
            agent_id=step.agent_id,
            instance_id=instance.instance_id,
            agent_config=dict(instance.config),
            shared=shared,
            run_tool=run_tool,
            memory=memory,
        )

        try:
            result = await actions.dispatch(step, ctx)
        finally:
            async with session.lock:
                instance.state = AgentState.IDLE
                if record.step_id in context.execution_stack:
                    context.execution_stack.remove(record.step_id)
                context.current_task = None

        async with session.lock:
            context.shared_memory[step.action.value] = result
            instance.memory["last_result"] = result
            instance.record({
                "step_id": record.step_id,
                "action": step.action.value,
                "tools": list(step.tools),
                "result": result,
                "timestamp": _now(),
            })
            context.touch()
            session.last_activity = self._sessions.now()

        record.result = result
        record.status = StepStatus.COMPLETED
        record.finished_at = _now()
