"""
Tests for ToolRegistry, RegistryToolExecutor and the default tools.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from tutorcore.errors import BackendUnavailable, ToolUnavailable
from tutorcore.inference.models import GenerationResult
from tutorcore.tools import RegistryToolExecutor, ToolRegistry, register_default_tools
from tutorcore.tools.builtin import ContentGenerationTool


class TestToolRegistry:
    """Test registration and usage metadata."""

    def test_default_tools(self, tool_registry):
        assert tool_registry.ids() == [
            "web_search", "file_analysis", "content_generation", "calculation", "code_execution",
        ]

    def test_description_from_docstring(self, tool_registry):
        assert tool_registry.get("web_search").description.startswith("Search the web")

    def test_reregister_overwrites(self):
        registry = ToolRegistry()
        registry.register("echo", lambda p, c: "old")
        registry.register("echo", lambda p, c: "new")
        assert len(registry) == 1
        assert registry.get("echo").handler({}, {}) == "new"

    def test_describe(self, tool_registry):
        described = tool_registry.describe()
        assert described[0]["tool_id"] == "web_search"
        assert described[0]["usage_count"] == 0
        assert described[0]["last_used"] is None


class TestRegistryToolExecutor:
    """Test tool dispatch through the registry."""

    @pytest.mark.asyncio
    async def test_runs_async_handler_and_counts_usage(self, tool_registry):
        executor = RegistryToolExecutor(tool_registry)
        result = await executor.run("web_search", {"query": "gears"}, {})

        assert result == "Web search results for: gears"
        spec = tool_registry.get("web_search")
        assert spec.usage_count == 1
        assert spec.last_used is not None

    @pytest.mark.asyncio
    async def test_runs_sync_handler(self):
        registry = ToolRegistry()
        registry.register("upper", lambda payload, ctx: payload["query"].upper())
        assert await RegistryToolExecutor(registry).run("upper", {"query": "ab"}, {}) == "AB"

    @pytest.mark.asyncio
    async def test_handler_receives_shared_context(self):
        handler = MagicMock(return_value="ok")
        registry = ToolRegistry()
        registry.register("spy", handler, "spy tool")

        await RegistryToolExecutor(registry).run("spy", {"query": "q"}, {"shared_memory": {"a": 1}})
        handler.assert_called_once_with({"query": "q"}, {"shared_memory": {"a": 1}})

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        with pytest.raises(ToolUnavailable) as exc_info:
            await RegistryToolExecutor(ToolRegistry()).run("nope", {}, {})
        assert exc_info.value.details["tool"] == "nope"

    @pytest.mark.asyncio
    async def test_handler_error_is_wrapped(self):
        def broken(payload, ctx):
            raise ValueError("bad input")

        registry = ToolRegistry()
        registry.register("broken", broken)
        with pytest.raises(ToolUnavailable) as exc_info:
            await RegistryToolExecutor(registry).run("broken", {}, {})
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_core_errors_pass_through(self):
        registry = ToolRegistry()
        registry.register("gen", AsyncMock(side_effect=BackendUnavailable("down")))
        with pytest.raises(BackendUnavailable):
            await RegistryToolExecutor(registry).run("gen", {}, {})


class TestContentGenerationTool:
    @pytest.mark.asyncio
    async def test_offline_fallback(self):
        tool = ContentGenerationTool()
        assert await tool({"prompt": "a lesson"}, {}) == "Generated content for: a lesson"

    @pytest.mark.asyncio
    async def test_uses_router_when_invoker_present(self):
        router = MagicMock()
        router.invoker = object()
        router.generate = AsyncMock(return_value=GenerationResult(
            text="Lesson plan", model_name="gemini-pro", latency_ms=12.0))
        tool = ContentGenerationTool(router)

        text = await tool({"query": "gears", "user_id": "u1"}, {})

        assert text == "Lesson plan"
        router.generate.assert_awaited_once_with(
            "content_generation", "gears", {"user_id": "u1"})

    @pytest.mark.asyncio
    async def test_router_without_invoker_falls_back(self):
        router = MagicMock()
        router.invoker = None
        tool = ContentGenerationTool(router)
        assert await tool({"query": "gears"}, {}) == "Generated content for: gears"

    def test_register_default_tools_with_router(self):
        registry = ToolRegistry()
        router = MagicMock()
        register_default_tools(registry, router)
        assert registry.get("content_generation").handler._router is router
