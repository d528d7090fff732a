"""Tests for the rule-based intent extractor."""
import pytest

from src.core.intent.extractor import SHORT_LENGTH, extract_intent, extract_with_trace
from src.core.intent.models import UNRESOLVED_TOPIC


class TestEdgeCases:
    def test_empty_input(self):
        for text in ("", "   ", "\n\t"):
            intent = extract_intent(text)
            assert intent.action == "write"
            assert intent.topic == ""

    def test_single_action_verb(self):
        intent = extract_intent("summarize")
        assert intent.action == "summarize"
        assert intent.topic == ""

    def test_single_non_verb(self):
        intent = extract_intent("blockchain")
        assert intent.action == "write"
        assert intent.topic == "blockchain"

    def test_verb_and_object(self):
        intent = extract_intent("write article")
        assert intent.action == "write"
        assert intent.topic == "article"

    def test_two_word_topic(self):
        intent = extract_intent("quantum computing")
        assert intent.action == "write"
        assert intent.topic == "quantum computing"

    def test_very_long_input_is_truncated(self):
        result = extract_with_trace("Write about dogs. " * 3400)
        assert result.trace["truncated"] == "10200->5000"
        assert result.intent.action == "write"
        assert result.intent.topic == "dogs"

    def test_garbage_never_raises(self):
        for text in ("?!?!", "1234 5678 91011", "::: ;;; ,,,", "a b c d e f g"):
            intent = extract_intent(text)
            assert intent.action
            assert isinstance(intent.topic, str)


class TestStatements:
    def test_normalized_messy_prompt(self, messy_prompt):
        from src.core.intent.normalizer import normalize
        intent = extract_intent(normalize(messy_prompt).corrected)
        assert intent.action == "write"
        assert "technology" in intent.topic
        assert "future" in intent.topic
        assert "stuff" not in intent.topic
        assert intent.tone == "clear, engaging"

    def test_want_you_to(self):
        intent = extract_intent("I want you to summarize the quarterly report for executives")
        assert intent.action == "summarize"
        assert intent.topic == "quarterly report"
        assert intent.audience == "executives"
        assert intent.format == "report"

    def test_responsibility_phrasing(self):
        result = extract_with_trace("It's my responsibility to review the onboarding checklist")
        assert result.intent.action == "review"
        assert result.intent.topic == "onboarding checklist"
        assert result.trace["action_rule"] == "responsibility"

    def test_verb_found_early_in_text(self):
        result = extract_with_trace(
            "The board meeting is tomorrow so please prepare talking points, thanks"
        )
        assert result.intent.action == "prepare"
        assert result.trace["action_rule"] == "early_verb"

    def test_verb_beyond_scan_window_is_ignored(self):
        prefix = "My notes from the offsite are long and messy and there is quite a lot going on " * 2
        result = extract_with_trace(prefix + "so summarize them")
        assert result.intent.action == "write"
        assert result.trace["action_rule"] == "default"

    def test_topic_drops_filler(self):
        intent = extract_intent("write a poem about the ocean and stuff")
        assert intent.topic == "ocean"
        assert intent.format == "poem"

    def test_explain_for_beginners(self):
        intent = extract_intent("Explain quantum computing in simple terms for beginners")
        assert intent.action == "explain"
        assert intent.topic == "quantum computing"
        assert intent.audience == "beginners"
        assert intent.tone == "simple and accessible"

    def test_unresolved_topic_sentinel(self):
        intent = extract_intent("is it ok?")
        assert intent.topic == UNRESOLVED_TOPIC

    def test_long_topic_is_capped(self):
        intent = extract_intent(
            "Write about the history of the printing press and its influence on literacy "
            "and religion and politics and science across every country in Europe"
        )
        assert intent.topic == "history of the printing press and its influence on literacy and religion"
        assert len(intent.topic.split()) <= 12


class TestNounPhraseTopics:
    @pytest.fixture(autouse=True)
    def _no_model(self, monkeypatch):
        from src.core.intent import noun_phrases
        monkeypatch.setattr(noun_phrases, "get_nlp", lambda: None)

    def test_predicate_is_not_part_of_topic(self):
        result = extract_with_trace("Our quarterly revenue dropped sharply last month")
        assert result.intent.topic == "quarterly revenue"
        assert result.trace["topic_rule"] == "noun_phrases"

    def test_subject_noun_is_topic(self):
        result = extract_with_trace("Honestly my team keeps missing deadlines lately")
        assert result.intent.topic == "team"
        assert result.trace["topic_rule"] == "noun_phrases"

    def test_repeated_name_survives_rendering(self):
        from src.core.frameworks.templates import render_ape
        intent = extract_intent("Write a travel guide about Bora Bora for honeymooners")
        assert intent.topic == "Bora Bora"
        text = render_ape(intent)
        assert "Bora Bora" in text
        assert "Key Terms" not in text


class TestQuestions:
    def test_embedded_modal_verb(self):
        intent = extract_intent("How should I structure my essay about climate change?")
        assert intent.action == "structure"
        assert intent.topic == "climate change"

    def test_polite_request(self):
        intent = extract_intent("Can you write a cover letter for a marketing role?")
        assert intent.action == "write"
        assert intent.topic == "cover letter"
        assert intent.format == "cover letter"

    def test_knowledge_question(self):
        result = extract_with_trace("What is quantum entanglement?")
        assert result.trace["form"] == "question"
        assert result.intent.action == "explain"
        assert result.intent.topic == "quantum entanglement"

    def test_how_does_it_work(self):
        intent = extract_intent("How does photosynthesis work?")
        assert intent.action == "explain"
        assert intent.topic == "how photosynthesis works"

    def test_how_to(self):
        intent = extract_intent("Do you know how to bake sourdough bread?")
        assert intent.action == "explain"
        assert intent.topic == "how to bake sourdough bread"


class TestAttributes:
    def test_format(self):
        from src.core.intent.extractor import extract_format
        assert extract_format("Write a quarterly report") == "report"
        assert extract_format("Write a blog post about travel") == "blog post"
        assert extract_format("Tell me a joke") is None

    def test_audience_keyword_fallback(self):
        from src.core.intent.extractor import extract_audience
        assert extract_audience("Draft a professional summary of the launch") == "professional audience"

    def test_word_count(self):
        from src.core.intent.extractor import extract_constraints
        assert extract_constraints("Write 500 words on cats").word_count == 500

    def test_qualitative_length(self):
        from src.core.intent.extractor import extract_constraints
        assert extract_constraints("Write a short bio").length == SHORT_LENGTH

    def test_no_constraints(self):
        from src.core.intent.extractor import extract_constraints
        assert extract_constraints("Write a bio") is None

    def test_role(self):
        from src.core.intent.extractor import extract_role
        assert extract_role("Act as a senior data scientist and explain regression") == "a senior data scientist"
        assert extract_role("Explain regression") is None

    def test_examples(self):
        from src.core.intent.extractor import extract_examples
        assert extract_examples("Write a tagline, for example: Fresh every morning.") == [
            "Fresh every morning"
        ]

    def test_context(self):
        from src.core.intent.extractor import extract_context
        assert extract_context("Given that our budget is small, suggest marketing ideas").startswith(
            "our budget is small"
        )

    def test_key_terms(self):
        from src.core.intent.extractor import extract_key_terms
        terms = extract_key_terms('Compare "zero trust" security with VPN access for Acme Corp')
        assert terms == ["zero trust", "VPN", "Acme Corp"]
