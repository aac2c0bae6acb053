"""
IntentClassifier: bounded keyword classifier mapping a message to an Intent.

Rules are checked in order and the first match wins. Matching is plain
substring containment on the lower-cased message.
"""

from dataclasses import dataclass, field

from tutorcore.config import (
    INTENT_HIGH_COMPLEXITY_LENGTH, INTENT_LOW_COMPLEXITY_LENGTH,
    INTENT_HIGH_COMPLEXITY_KEYWORDS, UNKNOWN_INTENT_CONFIDENCE,
)

UNKNOWN_INTENT = "unknown"


@dataclass(frozen=True)
class IntentRule:
    intent_type: str
    keywords: tuple[str, ...]
    confidence: float
    capabilities: tuple[str, ...]


INTENT_RULES = (
    IntentRule("information_retrieval", ("search", "find", "look up"), 0.8,
               ("web_search", "data_analysis")),
    IntentRule("analysis", ("analyze", "examine", "study"), 0.8,
               ("data_analysis", "pattern_recognition")),
    IntentRule("content_creation", ("create", "generate", "make"), 0.8,
               ("content_generation", "creative_writing")),
    IntentRule("problem_solving", ("solve", "calculate", "compute"), 0.8,
               ("calculation", "logical_reasoning")),
    IntentRule("educational", ("explain", "teach", "how"), 0.7,
               ("knowledge_synthesis", "explanation")),
)


@dataclass
class Intent:
    type: str = UNKNOWN_INTENT
    confidence: float = UNKNOWN_INTENT_CONFIDENCE
    required_capabilities: list[str] = field(default_factory=list)
    complexity: str = "medium"  # low | medium | high
    entities: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "confidence": self.confidence,
            "required_capabilities": list(self.required_capabilities),
            "complexity": self.complexity,
            "entities": list(self.entities),
        }


def assess_intent_complexity(message: str) -> str:
    lowered = message.lower()
    if (len(message) > INTENT_HIGH_COMPLEXITY_LENGTH
            or any(k in lowered for k in INTENT_HIGH_COMPLEXITY_KEYWORDS)):
        return "high"
    if len(message) < INTENT_LOW_COMPLEXITY_LENGTH:
        return "low"
    return "medium"


class IntentClassifier:
    """Pure function over text; holds only its rule table."""

    def __init__(self, rules: tuple[IntentRule, ...] = INTENT_RULES):
        self._rules = rules

    def classify(self, message: str) -> Intent:
        lowered = message.lower()
        intent = Intent(complexity=assess_intent_complexity(message))
        for rule in self._rules:
            if any(k in lowered for k in rule.keywords):
                intent.type = rule.intent_type
                intent.confidence = rule.confidence
                intent.required_capabilities = list(rule.capabilities)
                break
        return intent
