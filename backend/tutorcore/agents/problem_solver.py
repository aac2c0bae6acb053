"""
Problem solver agent: decomposes a problem, then solves it with calculation
and code execution tools.
"""

from tutorcore.agents.base import AgentTemplate, AgentVariant, builtin_template
from tutorcore.orchestration.actions import StepAction, combine, step_action


@builtin_template
def problem_solver_agent() -> AgentTemplate:
    return AgentTemplate(
        template_id="problem_solver_agent",
        variant=AgentVariant.PROBLEM_SOLVER,
        name="Problem Solver Agent",
        description="Specialized in problem-solving and logical reasoning",
        capabilities=("logical_reasoning", "problem_decomposition", "solution_synthesis"),
        tools=("calculation", "code_execution"),
        default_config={
            "approach_style": "systematic",
            "show_working_steps": True,
            "verify_results": True,
        },
    )


@step_action(StepAction.ANALYZE_PROBLEM)
async def analyze_problem(step, ctx):
    outputs = await ctx.use_tools(step, ctx.payload(step))
    style = ctx.agent_config.get("approach_style", "systematic")
    return combine(outputs, f"Broke the problem down ({style}): {ctx.message}")


@step_action(StepAction.SOLVE_PROBLEM)
async def solve_problem(step, ctx):
    breakdown = ctx.previous(StepAction.ANALYZE_PROBLEM)
    outputs = await ctx.use_tools(step, ctx.payload(
        step, breakdown=breakdown,
        show_working=ctx.agent_config.get("show_working_steps", True)))
    return combine(outputs, "Problem solving tools not available.")
