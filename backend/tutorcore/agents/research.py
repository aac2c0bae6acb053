"""
Research agent: information gathering through search tools.
"""

from tutorcore.agents.base import AgentTemplate, AgentVariant, builtin_template
from tutorcore.orchestration.actions import StepAction, combine, step_action


@builtin_template
def research_agent() -> AgentTemplate:
    return AgentTemplate(
        template_id="research_agent",
        variant=AgentVariant.RESEARCH,
        name="Research Agent",
        description="Specialized in information gathering and research",
        capabilities=("web_search", "data_collection", "source_verification"),
        tools=("web_search", "file_analysis"),
        default_config={
            "max_sources": 10,
            "search_depth": "comprehensive",
            "verify_facts": True,
        },
    )


@step_action(StepAction.SEARCH_INFORMATION)
async def search_information(step, ctx):
    outputs = await ctx.use_tools(step, ctx.payload(
        step, max_sources=ctx.agent_config.get("max_sources")))
    return combine(outputs, "Web search not available.")


@step_action(StepAction.GATHER_INFORMATION)
async def gather_information(step, ctx):
    outputs = await ctx.use_tools(step, ctx.payload(step))
    return combine(outputs, f"Gathered context for: {ctx.message}")
