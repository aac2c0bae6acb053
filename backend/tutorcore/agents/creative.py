"""
Creative agent: content planning and generation.
"""

from tutorcore.agents.base import AgentTemplate, AgentVariant, builtin_template
from tutorcore.orchestration.actions import StepAction, combine, step_action


@builtin_template
def creative_agent() -> AgentTemplate:
    return AgentTemplate(
        template_id="creative_agent",
        variant=AgentVariant.CREATIVE,
        name="Creative Agent",
        description="Specialized in content creation and creative tasks",
        capabilities=("content_generation", "creative_writing", "ideation"),
        tools=("content_generation",),
        default_config={
            "creativity_level": "high",
            "tone": "professional",
            "include_examples": True,
        },
    )


@step_action(StepAction.PLAN_CONTENT)
async def plan_content(step, ctx):
    outputs = await ctx.use_tools(step, ctx.payload(step))
    tone = ctx.agent_config.get("tone", "professional")
    return combine(outputs, f"Outlined a {tone} structure for: {ctx.message}")


@step_action(StepAction.GENERATE_CONTENT)
async def generate_content(step, ctx):
    outline = ctx.previous(StepAction.PLAN_CONTENT)
    outputs = await ctx.use_tools(step, ctx.payload(
        step, prompt=ctx.message, outline=outline,
        tone=ctx.agent_config.get("tone")))
    return combine(outputs, "Content generation not available.")
