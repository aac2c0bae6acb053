"""
Configuration constants: scoring weights, keyword tables and templates.

User-configurable values (session limits, model list, logging) come from the
YAML profile via get_profile(). The values here are fixed for compatibility
with existing routing behavior and are not meant to be tuned per deployment.
"""

import re

# ── Model Scoring Weights ──
SPECIALIZATION_BONUS = 50
LATENCY_BASELINE = 100
LATENCY_DIVISOR = 10
SUCCESS_RATE_WEIGHT = 0.3
SATISFACTION_WEIGHT = 10
PREFERENCE_BONUS = 20
LOAD_PENALTY = 2
CONTEXT_OVERFLOW_PENALTY = 100

# ── Request Criteria ──
COMPLEXITY_HIGH_THRESHOLD = 5
COMPLEXITY_MEDIUM_THRESHOLD = 2

COMPLEXITY_PATTERNS = [
    re.compile(r"\b(analyze|compare|evaluate|synthesize|integrate)\b", re.IGNORECASE),
    re.compile(r"\b(algorithm|equation|formula|theorem)\b", re.IGNORECASE),
    re.compile(r"\b(hypothesis|methodology|framework)\b", re.IGNORECASE),
]

# Checked in order; first match wins.
DOMAIN_PATTERNS = {
    "engineering": re.compile(
        r"\b(engineering|mechanical|electrical|civil|software|design|circuit|system)\b",
        re.IGNORECASE),
    "mathematics": re.compile(
        r"\b(math|calculus|algebra|geometry|statistics|equation|theorem)\b",
        re.IGNORECASE),
    "science": re.compile(
        r"\b(physics|chemistry|biology|research|experiment|hypothesis)\b",
        re.IGNORECASE),
    "programming": re.compile(
        r"\b(code|programming|algorithm|function|variable|loop|array)\b",
        re.IGNORECASE),
    "business": re.compile(
        r"\b(business|marketing|finance|management|strategy|revenue)\b",
        re.IGNORECASE),
}
DEFAULT_DOMAIN = "general"

REASONING_PATTERN = re.compile(
    r"\b(why|how|analyze|explain|compare|evaluate|reason|logic|cause|effect)\b",
    re.IGNORECASE)
TECHNICAL_PATTERN = re.compile(
    r"\b(technical|specification|implementation|architecture|protocol|algorithm)\b",
    re.IGNORECASE)

CONVERSATIONAL_REQUEST_TYPES = frozenset({"chat", "conversation", "casual"})
CREATIVE_REQUEST_TYPES = frozenset({
    "creative", "content_generation", "story", "poem", "presentation",
})

# request type -> model specialization
REQUEST_SPECIALIZATION = {
    "chat": "chat",
    "conversation": "chat",
    "reasoning": "reasoning",
    "analysis": "reasoning",
    "problem_solving": "reasoning",
    "technical": "technical",
    "code": "technical",
    "engineering": "technical",
    "creative": "creative",
    "content_generation": "creative",
    "academic": "academic",
    "educational": "academic",
}

# ── Intent Classification ──
INTENT_HIGH_COMPLEXITY_LENGTH = 500
INTENT_LOW_COMPLEXITY_LENGTH = 50
INTENT_HIGH_COMPLEXITY_KEYWORDS = ("complex", "detailed")
UNKNOWN_INTENT_CONFIDENCE = 0.5

# ── Synthesis ──
SYNTHESIS_HEADER = "Based on my analysis:\n\n"
SYNTHESIS_CLOSING = (
    "This response was generated using multiple AI agents working together "
    "through the Model Context Protocol."
)

# ── Defaults for generation calls ──
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.9
DEFAULT_INVOKE_TIMEOUT = 60
