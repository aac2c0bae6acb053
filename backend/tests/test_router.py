"""
Tests for ModelRouter: routing decisions, feedback and model-backed generation.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from conftest import make_model
from tutorcore.errors import BackendUnavailable, InvocationTimeout
from tutorcore.inference.registry import ModelRegistry
from tutorcore.inference.router import ModelRouter
from tutorcore.orchestration.events import EventHub, EventKind


@pytest.fixture
def registry():
    return ModelRegistry([
        make_model("llama-chat", type_="llama", specialization="chat"),
        make_model("gemini-pro", type_="gemini", specialization="creative"),
    ])


class TestRoute:
    """Test route() decisions."""

    @pytest.mark.asyncio
    async def test_decision_carries_reason_and_score(self, registry):
        router = ModelRouter(registry)
        decision = await router.route("content_generation", "Write a poem about gears")

        assert decision.model.name == "gemini-pro"
        assert decision.routing_reason == (
            "Selected gemini-pro (gemini) for content_generation "
            "based on specialization: creative"
        )
        assert decision.score == pytest.approx(230.0)
        assert decision.criteria.requires_creativity is True
        assert decision.estimated_latency_ms == 0.0

    @pytest.mark.asyncio
    async def test_route_takes_load(self, registry):
        router = ModelRouter(registry)
        await router.route("chat", "hi")
        assert registry.current_load("llama-chat") == 1

    @pytest.mark.asyncio
    async def test_route_emits_event(self, registry):
        events = EventHub()
        seen = []
        events.subscribe(seen.append)
        router = ModelRouter(registry, events=events)

        await router.route("chat", "hi", {"user_id": "u1"})

        assert len(seen) == 1
        assert seen[0].kind is EventKind.MODEL_ROUTED
        assert seen[0].payload["model"] == "llama-chat"

    @pytest.mark.asyncio
    async def test_default_urgency_applies(self, registry):
        router = ModelRouter(registry, default_urgency="low")
        decision = await router.route("chat", "hi")
        assert decision.criteria.urgency == "low"


class TestRecordOutcome:
    @pytest.mark.asyncio
    async def test_records_and_emits(self, registry):
        events = EventHub()
        seen = []
        events.subscribe(seen.append)
        router = ModelRouter(registry, events=events)

        await router.record_outcome("llama-chat", 200.0, True, user_rating=4.0)

        perf = registry.get("llama-chat").performance
        assert perf.total_requests == 1
        assert perf.average_latency == 200.0
        assert seen[-1].kind is EventKind.OUTCOME_RECORDED

    def test_model_status(self, registry):
        router = ModelRouter(registry)
        names = [s["name"] for s in router.get_model_status()]
        assert names == ["llama-chat", "gemini-pro"]


class TestGenerate:
    """Test generate(): route, invoke, report."""

    @pytest.mark.asyncio
    async def test_success_is_recorded(self, registry):
        invoker = MagicMock()
        invoker.invoke = AsyncMock(return_value="Gears transmit torque.")
        router = ModelRouter(registry, invoker=invoker)

        result = await router.generate("chat", "What do gears do?")

        assert result.text == "Gears transmit torque."
        assert result.model_name == "llama-chat"
        assert result.decision.model.name == "llama-chat"
        invoker.invoke.assert_awaited_once()
        args = invoker.invoke.await_args.args
        assert args[0].name == "llama-chat"
        assert args[1] == "What do gears do?"

        perf = registry.get("llama-chat").performance
        assert perf.total_requests == 1
        assert perf.error_count == 0
        assert registry.current_load("llama-chat") == 0

    @pytest.mark.asyncio
    async def test_failure_is_recorded_then_raised(self, registry):
        invoker = MagicMock()
        invoker.invoke = AsyncMock(side_effect=InvocationTimeout("slow", stage="invoke"))
        router = ModelRouter(registry, invoker=invoker)

        with pytest.raises(InvocationTimeout):
            await router.generate("chat", "hi")

        perf = registry.get("llama-chat").performance
        assert perf.total_requests == 1
        assert perf.error_count == 1
        assert perf.success_rate == 0.0
        assert registry.current_load("llama-chat") == 0

    @pytest.mark.asyncio
    async def test_unexpected_error_still_releases_load(self, registry):
        invoker = MagicMock()
        invoker.invoke = AsyncMock(side_effect=RuntimeError("boom"))
        router = ModelRouter(registry, invoker=invoker)

        with pytest.raises(RuntimeError):
            await router.generate("chat", "hi")
        assert registry.current_load("llama-chat") == 0

    @pytest.mark.asyncio
    async def test_without_invoker_raises(self, registry):
        router = ModelRouter(registry)
        with pytest.raises(BackendUnavailable):
            await router.generate("chat", "hi")
        assert registry.current_load("llama-chat") == 0
