"""
ToolRegistry: maps tool ids to callable capabilities plus usage metadata.
"""

import inspect
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from tutorcore.errors import ToolUnavailable, TutorCoreError
from tutorcore.tools.base import ToolExecutor

logger = logging.getLogger(__name__)


@dataclass
class ToolSpec:
    tool_id: str
    handler: Callable[[dict, dict], Any]
    description: str = ""
    registered_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    usage_count: int = 0
    last_used: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "tool_id": self.tool_id,
            "description": self.description,
            "registered_at": self.registered_at,
            "usage_count": self.usage_count,
            "last_used": self.last_used,
        }


class ToolRegistry:
    """Additive tool registration. Re-registering an id replaces the handler."""

    def __init__(self):
        self._tools: dict[str, ToolSpec] = {}

    def register(self, tool_id: str, handler: Callable[[dict, dict], Any],
                 description: str = "") -> ToolSpec:
        if tool_id in self._tools:
            logger.warning("Replacing tool definition: %s", tool_id)
        spec = ToolSpec(tool_id=tool_id, handler=handler,
                        description=description or (handler.__doc__ or "").strip())
        self._tools[tool_id] = spec
        logger.info("Registered tool: %s", tool_id)
        return spec

    def get(self, tool_id: str) -> Optional[ToolSpec]:
        return self._tools.get(tool_id)

    def ids(self) -> list[str]:
        return list(self._tools.keys())

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def record_usage(self, tool_id: str):
        spec = self._tools.get(tool_id)
        if spec:
            spec.usage_count += 1
            spec.last_used = datetime.now(timezone.utc).isoformat()

    def describe(self) -> list[dict]:
        return [s.to_dict() for s in self._tools.values()]


class RegistryToolExecutor(ToolExecutor):
    """Runs tools by calling the handlers held in a ToolRegistry.

    Handlers may be sync or async. Core errors raised by a handler pass
    through unchanged; anything else is wrapped in ToolUnavailable.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def run(self, tool_id: str, payload: dict, shared_context: dict) -> Any:
        spec = self.registry.get(tool_id)
        if spec is None:
            raise ToolUnavailable(f"Tool {tool_id} is not registered",
                                  stage="run_tool", tool=tool_id)

        self.registry.record_usage(tool_id)
        try:
            result = spec.handler(payload, shared_context)
            if inspect.isawaitable(result):
                result = await result
        except TutorCoreError:
            raise
        except Exception as e:
            logger.error("Tool %s failed: %s", tool_id, e)
            raise ToolUnavailable(f"Tool {tool_id} failed: {e}",
                                  stage="run_tool", tool=tool_id) from e
        return result
