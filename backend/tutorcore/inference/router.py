"""
ModelRouter: selects a backend model per request and records feedback.

Usage:
    router = ModelRouter(ModelRegistry.from_profile(profile), invoker=OpenAICompatInvoker())
    decision = await router.route("educational", "Explain torque", {"preferred_model_type": "llama"})
    result = await router.generate("content_generation", "Outline a lesson on gears")
"""

import logging
import time
from typing import Optional

from tutorcore.errors import BackendUnavailable
from tutorcore.inference.base import ModelInvoker
from tutorcore.inference.criteria import analyze_request_criteria
from tutorcore.inference.models import GenerationResult, ModelDescriptor, RoutingDecision
from tutorcore.inference.registry import ModelRegistry

logger = logging.getLogger(__name__)


def routing_reason(request_type: str, model: ModelDescriptor) -> str:
    return (f"Selected {model.name} ({model.type}) for {request_type} "
            f"based on specialization: {model.specialization.value}")


class ModelRouter:
    """Routing façade over the model registry and a model invoker."""

    def __init__(self, registry: ModelRegistry, invoker: Optional[ModelInvoker] = None,
                 events=None, default_urgency: str = "normal"):
        self.registry = registry
        self.invoker = invoker
        self._events = events
        self._default_urgency = default_urgency

    async def route(self, request_type: str, content: str,
                    user_context: Optional[dict] = None) -> RoutingDecision:
        """Pick a model for the request and take one unit of its load."""
        user_context = user_context or {}
        criteria = analyze_request_criteria(
            request_type, content, user_context, default_urgency=self._default_urgency)
        model, score = await self.registry.dispatch(
            criteria, user_context.get("preferred_model_type"))

        user_id = user_context.get("user_id", "anonymous")
        logger.info("Routing %s request to %s for user %s", request_type, model.name, user_id)
        if self._events:
            self._events.emit("model_routed", model=model.name,
                              request_type=request_type, score=score)

        return RoutingDecision(
            model=model,
            routing_reason=routing_reason(request_type, model),
            estimated_latency_ms=model.performance.average_latency,
            score=score,
            criteria=criteria,
        )

    async def record_outcome(self, model_name: str, latency_ms: float, success: bool,
                             user_rating: Optional[float] = None):
        await self.registry.record_outcome(model_name, latency_ms, success, user_rating)
        if self._events:
            self._events.emit("outcome_recorded", model=model_name,
                              latency_ms=latency_ms, success=success)

    async def generate(self, request_type: str, prompt: str,
                       user_context: Optional[dict] = None,
                       generation_config: Optional[dict] = None) -> GenerationResult:
        """Route, invoke the chosen model and report the outcome.

        Invocation errors are recorded as failures and then re-raised.
        """
        if self.invoker is None:
            raise BackendUnavailable("No model invoker configured", stage="invoke")

        decision = await self.route(request_type, prompt, user_context)
        model = decision.model
        t0 = time.monotonic()
        try:
            text = await self.invoker.invoke(model, prompt, generation_config)
        except Exception:
            latency_ms = (time.monotonic() - t0) * 1000
            logger.error("Invocation of %s failed after %.0fms", model.name, latency_ms)
            await self.record_outcome(model.name, latency_ms, success=False)
            raise

        latency_ms = (time.monotonic() - t0) * 1000
        await self.record_outcome(model.name, latency_ms, success=True)
        return GenerationResult(text=text, model_name=model.name,
                                latency_ms=latency_ms, decision=decision)

    def get_model_status(self) -> list[dict]:
        return self.registry.status()
