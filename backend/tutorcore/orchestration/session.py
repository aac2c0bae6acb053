"""
SessionStore: per-session state: spawned agents, shared context, history.

Architecture:
  - One asyncio.Lock per session guards its agent set, context and history.
    Sessions never share a lock, so work on one never blocks another.
  - Sessions close explicitly or after config.timeout_seconds without
    activity. A closed session rejects every further operation and drops its
    context (and with it the agent instances it owned).
  - Message history is bounded; the oldest entries fall off past history_cap.
"""

import asyncio
import dataclasses
import logging
import time
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from tutorcore.agents.base import AgentInstance, AgentTemplate
from tutorcore.errors import CapacityExceeded, SessionInactive, SessionNotFound
from tutorcore.profile import SessionsConfig

logger = logging.getLogger(__name__)


def _iso(ts: Optional[float]) -> Optional[str]:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, timezone.utc).isoformat()


@dataclass
class SessionConfig:
    max_agents: int = 5
    max_tools: int = 10
    timeout_seconds: float = 300.0
    history_cap: int = 100
    extra: dict = field(default_factory=dict)  # caller keys we do not interpret

    @classmethod
    def merged(cls, defaults: SessionsConfig, overrides: Optional[dict] = None) -> "SessionConfig":
        """Profile defaults with caller overrides applied on top."""
        known = {f.name for f in dataclasses.fields(cls)} - {"extra"}
        values = {name: getattr(defaults, name) for name in known}
        extra = {}
        for key, value in (overrides or {}).items():
            if key in known:
                if value is not None:
                    values[key] = value
            else:
                extra[key] = value
        return cls(extra=extra, **values)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass
class MessageRecord:
    message_id: str
    session_id: str
    content: str
    timestamp: str
    sender: str = "user"
    type: str = "query"
    metadata: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


class SessionContext:
    """Shared memory, per-agent state and the execution stack of one session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.global_context: dict[str, Any] = {}
        self.shared_memory: dict[str, Any] = {}
        self.agent_instances: dict[str, AgentInstance] = {}  # instance_id -> instance
        self.execution_stack: list[str] = []
        self.current_task: Optional[str] = None
        self.created_at = datetime.now(timezone.utc).isoformat()
        self.last_updated = self.created_at

    def touch(self):
        self.last_updated = datetime.now(timezone.utc).isoformat()

    def instance_for(self, template_id: str) -> Optional[AgentInstance]:
        """First instance spawned from a template, if any."""
        for instance in self.agent_instances.values():
            if instance.template_id == template_id:
                return instance
        return None

    def snapshot(self) -> dict:
        """Copy handed to tools and actions while no lock is held."""
        return {
            "session_id": self.session_id,
            "global_context": dict(self.global_context),
            "shared_memory": dict(self.shared_memory),
            "current_task": self.current_task,
        }


class Session:
    def __init__(self, session_id: str, user_id: str, config: SessionConfig, now: float):
        self.session_id = session_id
        self.user_id = user_id
        self.config = config
        self.created_at = now
        self.last_activity = now
        self.closed_at: Optional[float] = None
        self.close_reason: Optional[str] = None
        self.is_active = True
        self.active_agents: list[str] = []  # instance ids in spawn order
        self.context: Optional[SessionContext] = SessionContext(session_id)
        self.messages: deque[MessageRecord] = deque(maxlen=config.history_cap)
        self.tools_used: set[str] = set()
        self.lock = asyncio.Lock()

    def is_idle(self, now: float) -> bool:
        return now - self.last_activity > self.config.timeout_seconds

    def info(self) -> dict:
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "created_at": _iso(self.created_at),
            "last_activity": _iso(self.last_activity),
            "closed_at": _iso(self.closed_at),
            "active_agents": list(self.active_agents),
            "message_count": len(self.messages),
            "tools_used": sorted(self.tools_used),
            "is_active": self.is_active,
            "config": self.config.to_dict(),
        }


class SessionStore:
    """Owns every session, keyed by session id."""

    def __init__(self, agent_registry, defaults: Optional[SessionsConfig] = None,
                 events=None, clock: Callable[[], float] = time.time):
        self._agents = agent_registry
        self._defaults = defaults or SessionsConfig()
        self._events = events
        self._clock = clock
        self._sessions: dict[str, Session] = {}

    def now(self) -> float:
        return self._clock()

    def _emit(self, kind: str, **payload):
        if self._events:
            self._events.emit(kind, **payload)

    # ── Lifecycle ──

    async def create_session(self, user_id: str, config: Optional[dict] = None) -> str:
        session_id = str(uuid.uuid4())
        session = Session(session_id, user_id,
                          SessionConfig.merged(self._defaults, config), self._clock())
        self._sessions[session_id] = session
        self._emit("session_created", session_id=session_id, user_id=user_id)
        logger.info("Created session %s for user %s", session_id, user_id)
        return session_id

    def get(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(f"Session {session_id} not found",
                                  stage="lookup_session", session_id=session_id)
        return session

    async def require_active(self, session_id: str) -> Session:
        """Return an open session, closing it first if it has gone idle."""
        session = self.get(session_id)
        if session.is_active and session.is_idle(self._clock()):
            await self._close(session, "timeout")
        if not session.is_active:
            raise SessionInactive(f"Session {session_id} is inactive",
                                  stage="lookup_session", session_id=session_id,
                                  reason=session.close_reason)
        return session

    async def close_session(self, session_id: str, reason: str = "closed"):
        """Close a session. Closing an already-closed session is a no-op."""
        await self._close(self.get(session_id), reason)

    async def _close(self, session: Session, reason: str):
        async with session.lock:
            if not session.is_active:
                return
            session.is_active = False
            session.closed_at = self._clock()
            session.close_reason = reason
            session.context = None
        self._emit("session_closed", session_id=session.session_id, reason=reason)
        logger.info("Closed session %s (%s)", session.session_id, reason)

    async def expire_idle(self) -> list[str]:
        """Close every session idle past its timeout. Returns the closed ids."""
        now = self._clock()
        expired = [s for s in self._sessions.values() if s.is_active and s.is_idle(now)]
        for session in expired:
            await self._close(session, "timeout")
        return [s.session_id for s in expired]

    # ── Agents ──

    async def spawn_agent(self, session_id: str, template_id: str,
                          config: Optional[dict] = None) -> str:
        session = await self.require_active(session_id)
        template = self._agents.require(template_id)
        async with session.lock:
            instance = self._spawn_locked(session, template, config)
        self._after_spawn(session, instance)
        return instance.instance_id

    async def ensure_agent(self, session_id: str, template_id: str) -> str:
        """Reuse the session's instance of a template, spawning one if missing."""
        session = await self.require_active(session_id)
        template = self._agents.require(template_id)
        async with session.lock:
            existing = session.context.instance_for(template_id) if session.context else None
            if existing is not None:
                return existing.instance_id
            instance = self._spawn_locked(session, template, None)
        self._after_spawn(session, instance)
        return instance.instance_id

    def _spawn_locked(self, session: Session, template: AgentTemplate,
                      config: Optional[dict]) -> AgentInstance:
        # re-check: the session may have closed while we waited for the lock
        if not session.is_active:
            raise SessionInactive(f"Session {session.session_id} is inactive",
                                  stage="spawn_agent", session_id=session.session_id)
        if len(session.active_agents) >= session.config.max_agents:
            raise CapacityExceeded(
                "Maximum number of agents reached for this session",
                stage="spawn_agent", session_id=session.session_id,
                limit=session.config.max_agents, template_id=template.template_id,
            )
        instance = template.instantiate(session.session_id, config)
        session.active_agents.append(instance.instance_id)
        session.context.agent_instances[instance.instance_id] = instance
        session.context.touch()
        session.last_activity = self._clock()
        return instance

    def _after_spawn(self, session: Session, instance: AgentInstance):
        self._emit("agent_spawned", session_id=session.session_id,
                   instance_id=instance.instance_id, template_id=instance.template_id)
        logger.info("Spawned agent %s as %s in session %s", instance.template_id,
                    instance.instance_id, session.session_id)

    # ── Messages ──

    async def append_message(self, session_id: str, content: str, sender: str = "user",
                             msg_type: str = "query",
                             metadata: Optional[dict] = None) -> MessageRecord:
        session = await self.require_active(session_id)
        async with session.lock:
            record = MessageRecord(
                message_id=str(uuid.uuid4()),
                session_id=session_id,
                content=content,
                timestamp=datetime.now(timezone.utc).isoformat(),
                sender=sender,
                type=msg_type,
                metadata=metadata or {},
            )
            session.messages.append(record)
            session.last_activity = self._clock()
        return record

    # ── Introspection ──

    def info(self, session_id: str) -> dict:
        return self.get(session_id).info()

    def history(self, session_id: str) -> list[dict]:
        return [m.to_dict() for m in self.get(session_id).messages]

    def stats(self) -> dict:
        sessions = list(self._sessions.values())
        return {
            "active_sessions": sum(1 for s in sessions if s.is_active),
            "total_sessions": len(sessions),
            "total_contexts": sum(1 for s in sessions if s.context is not None),
        }

    def __len__(self) -> int:
        return len(self._sessions)
