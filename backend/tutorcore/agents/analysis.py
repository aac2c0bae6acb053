"""
Analysis agent: data analysis, insight generation and result synthesis.

The synthesis actions read what earlier research steps stored in shared
memory and pass it to their tools as source material.
"""

from tutorcore.agents.base import AgentTemplate, AgentVariant, builtin_template
from tutorcore.orchestration.actions import StepAction, combine, step_action


@builtin_template
def analysis_agent() -> AgentTemplate:
    return AgentTemplate(
        template_id="analysis_agent",
        variant=AgentVariant.ANALYSIS,
        name="Analysis Agent",
        description="Specialized in data analysis and pattern recognition",
        capabilities=("data_analysis", "pattern_recognition", "insight_generation"),
        tools=("file_analysis", "calculation"),
        default_config={
            "analysis_depth": "detailed",
            "include_visualization": False,
            "confidence_threshold": 0.8,
        },
    )


@step_action(StepAction.ANALYZE_DATA)
async def analyze_data(step, ctx):
    outputs = await ctx.use_tools(step, ctx.payload(
        step, depth=ctx.agent_config.get("analysis_depth")))
    return combine(outputs, "Data analysis not available.")


@step_action(StepAction.GENERATE_INSIGHTS)
async def generate_insights(step, ctx):
    analysis = ctx.previous(StepAction.ANALYZE_DATA)
    outputs = await ctx.use_tools(step, ctx.payload(step, source=analysis))
    return combine(outputs, "No insights could be derived.")


@step_action(StepAction.SYNTHESIZE_RESULTS)
async def synthesize_results(step, ctx):
    findings = ctx.previous(StepAction.SEARCH_INFORMATION)
    outputs = await ctx.use_tools(step, ctx.payload(
        step, prompt=f"Summarize for a student: {ctx.message}", source=findings))
    return combine(outputs, "Nothing to synthesize.")


@step_action(StepAction.PROCESS_RESPONSE)
async def process_response(step, ctx):
    gathered = ctx.previous(StepAction.GATHER_INFORMATION)
    outputs = await ctx.use_tools(step, ctx.payload(step, source=gathered))
    return combine(outputs, f"Executed {step.action.value} with agent {ctx.agent_id}")
