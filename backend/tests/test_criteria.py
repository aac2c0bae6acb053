"""
Tests for request criteria derivation.
"""

from tutorcore.inference.criteria import (
    analyze_request_criteria,
    assess_complexity,
    identify_domain,
    is_technical,
    requires_reasoning,
)


class TestComplexity:
    """Keyword hit counts: >5 high, >2 medium, else low."""

    def test_plain_text_is_low(self):
        assert assess_complexity("tell me a joke") == "low"

    def test_two_hits_is_still_low(self):
        assert assess_complexity("analyze this equation") == "low"

    def test_three_hits_is_medium(self):
        assert assess_complexity("analyze the equation with a framework") == "medium"

    def test_six_hits_is_high(self):
        text = ("Compare and evaluate the algorithm, the formula and the theorem "
                "using a sound methodology")
        assert assess_complexity(text) == "high"

    def test_repeated_keyword_counts_each_time(self):
        assert assess_complexity("formula formula formula") == "medium"


class TestDomain:
    """First matching domain wins, else general."""

    def test_engineering(self):
        assert identify_domain("design a gear train") == "engineering"

    def test_mathematics(self):
        assert identify_domain("help with calculus homework") == "mathematics"

    def test_first_match_wins(self):
        # "system" (engineering) is checked before "algebra" (mathematics)
        assert identify_domain("a system of algebra problems") == "engineering"

    def test_general_fallback(self):
        assert identify_domain("what should I cook tonight") == "general"


class TestFlags:
    def test_reasoning(self):
        assert requires_reasoning("Why do gears mesh?")
        assert not requires_reasoning("List three gears")

    def test_technical(self):
        assert is_technical("Describe the protocol architecture")
        assert not is_technical("Describe a sunset")


class TestAnalyzeRequestCriteria:
    def test_full_record(self):
        c = analyze_request_criteria("chat", "Why is the sky blue?")
        assert c.type == "chat"
        assert c.is_conversational is True
        assert c.requires_creativity is False
        assert c.requires_reasoning is True
        assert c.content_length == len("Why is the sky blue?")
        assert c.urgency == "normal"

    def test_urgency_from_context(self):
        c = analyze_request_criteria("creative", "a poem", {"urgency": "high"})
        assert c.urgency == "high"
        assert c.requires_creativity is True

    def test_default_urgency_override(self):
        c = analyze_request_criteria("chat", "hi", default_urgency="low")
        assert c.urgency == "low"
