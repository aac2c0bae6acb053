"""
Model descriptors, performance statistics and routing records.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from tutorcore.config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DEFAULT_TOP_P


class Specialization(Enum):
    CHAT = "chat"
    REASONING = "reasoning"
    TECHNICAL = "technical"
    CREATIVE = "creative"
    ACADEMIC = "academic"


@dataclass
class PerformanceStats:
    average_latency: float = 0.0  # ms
    success_rate: float = 100.0  # percent
    user_satisfaction: float = 5.0  # 0-5
    total_requests: int = 0
    error_count: int = 0

    def to_dict(self) -> dict:
        return {
            "average_latency": self.average_latency,
            "success_rate": self.success_rate,
            "user_satisfaction": self.user_satisfaction,
            "total_requests": self.total_requests,
            "error_count": self.error_count,
        }


@dataclass
class GenerationSettings:
    endpoint: str = ""
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    top_p: float = DEFAULT_TOP_P


@dataclass
class ModelDescriptor:
    name: str
    type: str
    specialization: Specialization
    max_context_length: int = 4096
    version: str = "1.0"
    is_active: bool = True
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    performance: PerformanceStats = field(default_factory=PerformanceStats)

    @classmethod
    def from_config(cls, cfg) -> "ModelDescriptor":
        """Build a descriptor from a profile ModelConfig."""
        return cls(
            name=cfg.name,
            type=cfg.type,
            specialization=Specialization(cfg.specialization),
            max_context_length=cfg.max_context_length,
            version=cfg.version,
            is_active=cfg.is_active,
            generation=GenerationSettings(
                endpoint=cfg.endpoint,
                max_tokens=cfg.max_tokens,
                temperature=cfg.temperature,
                top_p=cfg.top_p,
            ),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "version": self.version,
            "specialization": self.specialization.value,
            "max_context_length": self.max_context_length,
            "is_active": self.is_active,
            "performance": self.performance.to_dict(),
        }


@dataclass
class RequestCriteria:
    type: str
    complexity: str  # low | medium | high
    domain: str
    requires_reasoning: bool
    is_conversational: bool
    is_technical: bool
    requires_creativity: bool
    content_length: int
    urgency: str = "normal"

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "complexity": self.complexity,
            "domain": self.domain,
            "requires_reasoning": self.requires_reasoning,
            "is_conversational": self.is_conversational,
            "is_technical": self.is_technical,
            "requires_creativity": self.requires_creativity,
            "content_length": self.content_length,
            "urgency": self.urgency,
        }


@dataclass
class RoutingDecision:
    model: ModelDescriptor
    routing_reason: str
    estimated_latency_ms: float
    score: float
    criteria: Optional[RequestCriteria] = None

    def to_dict(self) -> dict:
        return {
            "model": self.model.to_dict(),
            "routing_reason": self.routing_reason,
            "estimated_latency_ms": self.estimated_latency_ms,
            "score": self.score,
            "criteria": self.criteria.to_dict() if self.criteria else None,
        }


@dataclass
class GenerationResult:
    text: str
    model_name: str
    latency_ms: float
    decision: Optional[RoutingDecision] = None
