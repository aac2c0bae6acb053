"""
Offline tool capabilities registered by default.

Real search, analysis and execution services are external collaborators.
These stand-ins describe what they were asked to do so that plans can run
end to end without them. content_generation is the exception: when a model
router with an invoker is supplied it generates text through a routed model.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


def _query(payload: dict) -> str:
    return payload.get("query", "")


async def web_search(payload: dict, context: dict) -> str:
    """Search the web for information related to the query."""
    return f"Web search results for: {_query(payload)}"


async def file_analysis(payload: dict, context: dict) -> str:
    """Analyze supplied files or data for patterns."""
    return f"File analysis completed for: {_query(payload)}"


async def calculation(payload: dict, context: dict) -> str:
    """Evaluate a mathematical expression or quantitative problem."""
    return f"Calculation result for: {_query(payload)}"


async def code_execution(payload: dict, context: dict) -> str:
    """Run code in a sandbox and report the outcome."""
    return f"Code execution result for: {_query(payload)}"


class ContentGenerationTool:
    """Generate text content, through a routed model when one is available."""

    def __init__(self, router=None):
        self._router = router

    async def __call__(self, payload: dict, context: dict) -> str:
        prompt = payload.get("prompt") or _query(payload)
        if self._router is None or self._router.invoker is None:
            return f"Generated content for: {prompt}"

        user_context = {"user_id": payload.get("user_id", "anonymous")}
        result = await self._router.generate("content_generation", prompt, user_context)
        logger.debug("content_generation served by %s in %.0fms",
                     result.model_name, result.latency_ms)
        return result.text


def register_default_tools(registry, router: Optional[object] = None):
    """Register the default tool set on a ToolRegistry."""
    registry.register("web_search", web_search)
    registry.register("file_analysis", file_analysis)
    registry.register("content_generation", ContentGenerationTool(router),
                      description=ContentGenerationTool.__doc__)
    registry.register("calculation", calculation)
    registry.register("code_execution", code_execution)
