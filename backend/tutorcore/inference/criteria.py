"""
Request criteria derivation: keyword heuristics over the request content.

These are bounded heuristics that feed the model scorer; their outputs are
part of the routing contract, their accuracy is not.
"""

from typing import Optional

from tutorcore.config import (
    COMPLEXITY_PATTERNS, COMPLEXITY_HIGH_THRESHOLD, COMPLEXITY_MEDIUM_THRESHOLD,
    DOMAIN_PATTERNS, DEFAULT_DOMAIN,
    REASONING_PATTERN, TECHNICAL_PATTERN,
    CONVERSATIONAL_REQUEST_TYPES, CREATIVE_REQUEST_TYPES,
)
from tutorcore.inference.models import RequestCriteria


def assess_complexity(content: str) -> str:
    """Count keyword hits across the complexity classes: >5 high, >2 medium."""
    score = sum(len(p.findall(content)) for p in COMPLEXITY_PATTERNS)
    if score > COMPLEXITY_HIGH_THRESHOLD:
        return "high"
    if score > COMPLEXITY_MEDIUM_THRESHOLD:
        return "medium"
    return "low"


def identify_domain(content: str) -> str:
    for domain, pattern in DOMAIN_PATTERNS.items():
        if pattern.search(content):
            return domain
    return DEFAULT_DOMAIN


def requires_reasoning(content: str) -> bool:
    return REASONING_PATTERN.search(content) is not None


def is_conversational(request_type: str) -> bool:
    return request_type in CONVERSATIONAL_REQUEST_TYPES


def is_technical(content: str) -> bool:
    return TECHNICAL_PATTERN.search(content) is not None


def requires_creativity(request_type: str) -> bool:
    return request_type in CREATIVE_REQUEST_TYPES


def analyze_request_criteria(request_type: str, content: str,
                             context: Optional[dict] = None,
                             default_urgency: str = "normal") -> RequestCriteria:
    """Derive the scoring criteria for a request."""
    context = context or {}
    return RequestCriteria(
        type=request_type,
        complexity=assess_complexity(content),
        domain=identify_domain(content),
        requires_reasoning=requires_reasoning(content),
        is_conversational=is_conversational(request_type),
        is_technical=is_technical(content),
        requires_creativity=requires_creativity(request_type),
        content_length=len(content),
        urgency=context.get("urgency") or default_urgency,
    )
