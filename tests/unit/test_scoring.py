"""Tests for keyword scoring and score blending."""
from src.core.frameworks.scoring import combine, detect_signals, keyword_score, structured_boost
from src.core.intent.models import StructuredPrompt

EXPLAIN_PROMPT = "Explain quantum computing in simple terms for beginners"


class TestSignals:
    def test_explain_prompt(self):
        signals = detect_signals(EXPLAIN_PROMPT)
        assert signals.classes == frozenset({"reasoning", "instructional"})
        assert signals.word_count == 8
        assert signals.leading_verb is True

    def test_empty_prompt(self):
        signals = detect_signals("")
        assert signals.classes == frozenset()
        assert signals.word_count == 0
        assert signals.leading_verb is False


class TestKeywordScore:
    def test_explain_prompt(self):
        signals = detect_signals(EXPLAIN_PROMPT)
        assert keyword_score("cot", signals) == 35
        assert keyword_score("guide", signals) == 45
        assert keyword_score("ape", signals) == 35
        assert keyword_score("roses", signals) == 0

    def test_professional_report(self):
        signals = detect_signals("Write a professional quarterly report for our business clients")
        assert keyword_score("race", signals) == 80

    def test_content_penalises_cot(self):
        signals = detect_signals("Write a blog post about travel")
        assert keyword_score("cot", signals) == -20
        assert keyword_score("roses", signals) == 35

    def test_unknown_framework_scores_zero(self):
        assert keyword_score("nope", detect_signals(EXPLAIN_PROMPT)) == 0


class TestCombine:
    def test_neutral_semantic(self):
        assert combine("race", 50, 0, 0) == 20.0
        assert combine("create", 50, 0, 0) == 25.0
        assert combine("guide", 50, 45, 0) == 47.0

    def test_rounds_to_two_places(self):
        assert combine("cot", 33.333, 0, 0) == 13.33


class TestStructuredBoost:
    def test_role_and_format(self):
        structured = StructuredPrompt(role="Editor", topic="AI ethics", format="essay", is_structured=True)
        assert structured_boost("race", structured) == 25
        assert structured_boost("roses", structured) == 35
        assert structured_boost("cot", structured) == 0

    def test_unstructured(self):
        assert structured_boost("race", None) == 0
        assert structured_boost("race", StructuredPrompt(role="Editor")) == 0
