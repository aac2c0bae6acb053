"""
Tests for the keyword intent classifier.
"""

import pytest

from tutorcore.orchestration.intent import IntentClassifier, assess_intent_complexity


@pytest.fixture
def classifier():
    return IntentClassifier()


class TestClassify:
    """First matching rule wins; no match is 'unknown' at 0.5."""

    def test_information_retrieval(self, classifier):
        intent = classifier.classify("search for thermodynamics papers")
        assert intent.type == "information_retrieval"
        assert intent.confidence == 0.8
        assert intent.required_capabilities == ["web_search", "data_analysis"]

    @pytest.mark.parametrize("message,expected", [
        ("Please analyze my lab results", "analysis"),
        ("Create a presentation about gears", "content_creation"),
        ("Calculate the gear ratio", "problem_solving"),
        ("Explain Newton's third law", "educational"),
        ("look up the boiling point of water", "information_retrieval"),
    ])
    def test_rule_table(self, classifier, message, expected):
        assert classifier.classify(message).type == expected

    def test_educational_confidence(self, classifier):
        assert classifier.classify("teach me torque").confidence == 0.7

    def test_first_rule_wins(self, classifier):
        # matches both information_retrieval ("find") and problem_solving ("solve")
        intent = classifier.classify("find a way to solve this")
        assert intent.type == "information_retrieval"

    def test_unknown(self, classifier):
        intent = classifier.classify("good morning")
        assert intent.type == "unknown"
        assert intent.confidence == 0.5
        assert intent.required_capabilities == []

    def test_case_insensitive(self, classifier):
        assert classifier.classify("SEARCH gears").type == "information_retrieval"


class TestIntentComplexity:
    def test_short_is_low(self):
        assert assess_intent_complexity("search gears") == "low"

    def test_long_is_high(self):
        assert assess_intent_complexity("a" * 501) == "high"

    def test_keyword_is_high(self):
        assert assess_intent_complexity("give me a detailed answer") == "high"

    def test_middle_is_medium(self):
        assert assess_intent_complexity("x" * 120) == "medium"

    def test_to_dict(self):
        d = IntentClassifier().classify("Explain gears").to_dict()
        assert d["type"] == "educational"
        assert d["complexity"] == "low"
