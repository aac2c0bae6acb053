"""
Tools package: tool registry and the tool execution contract.
"""

from tutorcore.tools.base import ToolExecutor
from tutorcore.tools.builtin import register_default_tools
from tutorcore.tools.registry import RegistryToolExecutor, ToolRegistry, ToolSpec

__all__ = [
    "RegistryToolExecutor",
    "ToolExecutor",
    "ToolRegistry",
    "ToolSpec",
    "register_default_tools",
]
