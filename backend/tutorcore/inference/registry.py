"""
ModelRegistry: routable model descriptors, scoring and outcome feedback.

Architecture:
  - Descriptors are kept in registration order; that order breaks score ties.
  - Each model has its own lock. Load counters and performance statistics
    are only mutated under that lock, so feedback for one model never
    blocks routing or feedback for another.
  - Running means are updated incrementally from the post-increment request
    count; full history is never stored.
"""

import asyncio
import logging
from typing import Optional

from tutorcore.config import (
    REQUEST_SPECIALIZATION,
    SPECIALIZATION_BONUS, LATENCY_BASELINE, LATENCY_DIVISOR,
    SUCCESS_RATE_WEIGHT, SATISFACTION_WEIGHT, PREFERENCE_BONUS,
    LOAD_PENALTY, CONTEXT_OVERFLOW_PENALTY,
)
from tutorcore.errors import ModelNotFound
from tutorcore.inference.criteria import analyze_request_criteria
from tutorcore.inference.models import ModelDescriptor, RequestCriteria

logger = logging.getLogger(__name__)


class ModelRegistry:
    """Holds model descriptors and their in-flight load counters."""

    def __init__(self, descriptors: Optional[list[ModelDescriptor]] = None,
                 default_urgency: str = "normal"):
        self._models: dict[str, ModelDescriptor] = {}
        self._loads: dict[str, int] = {}  # model name -> in-flight requests
        self._locks: dict[str, asyncio.Lock] = {}  # model name -> stats lock
        self._default_urgency = default_urgency
        for d in descriptors or []:
            self.register(d)

    @classmethod
    def from_profile(cls, profile) -> "ModelRegistry":
        """Build a registry seeded with the profile's model list.

        Models with an unknown specialization are logged and skipped.
        """
        descriptors = []
        for m in profile.models:
            try:
                descriptors.append(ModelDescriptor.from_config(m))
            except ValueError:
                logger.warning("Skipping model %s with unknown specialization: %r",
                               m.name, m.specialization)
        return cls(descriptors, default_urgency=profile.routing.default_urgency)

    # ── Registration & Lookup ──

    def register(self, descriptor: ModelDescriptor):
        """Register a model. Re-registering a name replaces the descriptor."""
        if descriptor.name in self._models:
            logger.warning("Replacing model descriptor: %s", descriptor.name)
        self._models[descriptor.name] = descriptor
        self._loads.setdefault(descriptor.name, 0)
        self._locks.setdefault(descriptor.name, asyncio.Lock())
        logger.info("Registered model %s (%s, %s)", descriptor.name,
                    descriptor.type, descriptor.specialization.value)

    def get(self, name: str) -> Optional[ModelDescriptor]:
        return self._models.get(name)

    def names(self) -> list[str]:
        return list(self._models.keys())

    def list_active(self) -> list[ModelDescriptor]:
        """Active descriptors in registration order."""
        return [m for m in self._models.values() if m.is_active]

    def current_load(self, name: str) -> int:
        return self._loads.get(name, 0)

    def __len__(self) -> int:
        return len(self._models)

    # ── Scoring ──

    def score(self, descriptor: ModelDescriptor, criteria: RequestCriteria,
              preferred_model_type: Optional[str] = None) -> float:
        """Score one candidate for a request. Higher is better."""
        score = 0.0
        perf = descriptor.performance

        if REQUEST_SPECIALIZATION.get(criteria.type) == descriptor.specialization.value:
            score += SPECIALIZATION_BONUS

        score += LATENCY_BASELINE - perf.average_latency / LATENCY_DIVISOR
        score += perf.success_rate * SUCCESS_RATE_WEIGHT
        score += perf.user_satisfaction * SATISFACTION_WEIGHT

        if preferred_model_type and preferred_model_type == descriptor.type:
            score += PREFERENCE_BONUS

        score -= self.current_load(descriptor.name) * LOAD_PENALTY

        if criteria.content_length > descriptor.max_context_length:
            score -= CONTEXT_OVERFLOW_PENALTY

        return score

    def rank(self, criteria: RequestCriteria,
             preferred_model_type: Optional[str] = None) -> list[tuple[ModelDescriptor, float]]:
        """Score every active model, best first. Ties keep registration order."""
        scored = [(m, self.score(m, criteria, preferred_model_type))
                  for m in self.list_active()]
        # sorted() is stable, so equal scores keep registry order
        return sorted(scored, key=lambda pair: pair[1], reverse=True)

    def best(self, criteria: RequestCriteria,
             preferred_model_type: Optional[str] = None) -> tuple[ModelDescriptor, float]:
        """Pick the highest-scoring candidate without dispatching it.

        Raises ModelNotFound when there are no active models, or when the
        content overflows every candidate's context window.
        """
        ranked = self.rank(criteria, preferred_model_type)
        if not ranked:
            raise ModelNotFound("No active models registered", stage="select",
                                request_type=criteria.type)

        if all(criteria.content_length > m.max_context_length for m, _ in ranked):
            raise ModelNotFound(
                f"No model can hold {criteria.content_length} characters of content",
                stage="select",
                request_type=criteria.type,
                content_length=criteria.content_length,
            )

        for m, s in ranked:
            logger.debug("Score %s -> %.2f", m.name, s)
        return ranked[0]

    async def dispatch(self, criteria: RequestCriteria,
                       preferred_model_type: Optional[str] = None) -> tuple[ModelDescriptor, float]:
        """Select the best model and take one unit of its in-flight load."""
        descriptor, score = self.best(criteria, preferred_model_type)
        async with self._locks[descriptor.name]:
            self._loads[descriptor.name] = self._loads.get(descriptor.name, 0) + 1
        return descriptor, score

    async def select(self, request_type: str, content: str,
                     user_context: Optional[dict] = None) -> ModelDescriptor:
        """Derive criteria from the request, then dispatch the best model."""
        user_context = user_context or {}
        criteria = analyze_request_criteria(
            request_type, content, user_context, default_urgency=self._default_urgency)
        descriptor, _ = await self.dispatch(
            criteria, user_context.get("preferred_model_type"))
        return descriptor

    # ── Outcome Feedback ──

    async def record_outcome(self, model_name: str, latency_ms: float,
                             success: bool, user_rating: Optional[float] = None):
        """Fold one request outcome into the model's running statistics.

        Also releases one unit of in-flight load taken by dispatch().
        """
        descriptor = self._models.get(model_name)
        if descriptor is None:
            raise ModelNotFound(f"Unknown model: {model_name}", stage="record_outcome",
                                model=model_name)

        async with self._locks[model_name]:
            perf = descriptor.performance
            perf.total_requests += 1
            n = perf.total_requests

            perf.average_latency = (perf.average_latency * (n - 1) + latency_ms) / n

            # a failure counts as a 0% sample
            sample = 100.0 if success else 0.0
            if not success:
                perf.error_count += 1
            perf.success_rate = (perf.success_rate * (n - 1) + sample) / n

            if user_rating is not None:
                perf.user_satisfaction = (perf.user_satisfaction * (n - 1) + user_rating) / n

            self._loads[model_name] = max(0, self._loads.get(model_name, 0) - 1)

        logger.info("Recorded outcome for %s: %.0fms success=%s", model_name,
                    latency_ms, success)

    # ── Status ──

    def status(self) -> list[dict]:
        return [
            {
                "name": m.name,
                "type": m.type,
                "specialization": m.specialization.value,
                "is_active": m.is_active,
                "current_load": self.current_load(m.name),
                "performance": m.performance.to_dict(),
            }
            for m in self._models.values()
        ]
