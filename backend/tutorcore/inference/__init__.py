"""
Inference package: model registry, scoring and routing.

Quick start:
    from tutorcore.inference import ModelRegistry, ModelRouter
    router = ModelRouter(ModelRegistry.from_profile(get_profile()))
    decision = await router.route("chat", "hello there")
"""

from tutorcore.inference.base import ModelInvoker
from tutorcore.inference.models import (
    GenerationResult,
    ModelDescriptor,
    PerformanceStats,
    RequestCriteria,
    RoutingDecision,
    Specialization,
)
from tutorcore.inference.openai_compat import OpenAICompatInvoker
from tutorcore.inference.registry import ModelRegistry
from tutorcore.inference.router import ModelRouter

__all__ = [
    "GenerationResult",
    "ModelDescriptor",
    "ModelInvoker",
    "ModelRegistry",
    "ModelRouter",
    "OpenAICompatInvoker",
    "PerformanceStats",
    "RequestCriteria",
    "RoutingDecision",
    "Specialization",
]
