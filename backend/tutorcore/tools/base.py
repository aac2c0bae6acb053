"""
Tool execution contract.

Tool implementations (search, analysis, generation) live outside the core.
The executor only sees this interface.
"""

from abc import ABC, abstractmethod
from typing import Any


class ToolExecutor(ABC):
    """Tool execution capability.

    Implementations must raise ToolUnavailable when a tool is unknown or
    cannot run.
    """

    @abstractmethod
    async def run(self, tool_id: str, payload: dict, shared_context: dict) -> Any:
        """Run one tool.

        Args:
            tool_id: Registered tool identifier.
            payload: Step-specific input (query, action, agent ids, ...).
            shared_context: Read-only snapshot of the session's shared context.

        Returns:
            The tool result (text or a JSON-serializable structure).
        """
        ...
