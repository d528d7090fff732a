"""Tests for the framework template engine."""
import pytest

from src.core.intent.models import IntentConstraints, ParsedIntent


def _intent(**kwargs) -> ParsedIntent:
    kwargs.setdefault("action", "write")
    kwargs.setdefault("topic", "remote work")
    return ParsedIntent(**kwargs)


class TestHelpers:
    def test_dedupe(self):
        from src.core.frameworks.templates import dedupe
        assert dedupe("Write write about AI about AI") == "Write about AI"
        assert dedupe("Plan a trip to Bora Bora") == "Plan a trip to Bora Bora"
        assert dedupe("Explain Walla Walla wine") == "Explain Walla Walla wine"

    def test_role_phrase_strips_you_are(self):
        from src.core.frameworks.templates import role_phrase, you_are
        assert role_phrase("You are an expert editor.") == "an expert editor"
        assert you_are("you are You are a coach") == "You are a coach"
        assert role_phrase("") is None

    def test_task_phrase(self):
        from src.core.frameworks.templates import task_phrase
        assert task_phrase(_intent(topic="article", format="article")) == "Write an article"
        assert task_phrase(_intent(format="blog post")) == "Write a blog post about remote work"
        assert task_phrase(_intent(action="explain", topic="quantum computing")) == "Explain quantum computing"
        assert task_phrase(_intent()) == "Write about remote work"

    def test_empty_topic_uses_placeholder(self):
        from src.core.frameworks.templates import task_phrase
        assert task_phrase(_intent(action="summarize", topic="")) == "Summarize the specified topic"


class TestRenderers:
    @pytest.mark.parametrize("framework_id", ["cot", "tot", "ape", "race", "roses", "guide", "smart", "create"])
    def test_render_is_deterministic(self, framework_id):
        from src.core.frameworks.templates import render
        intent = _intent(format="blog post", audience="remote teams", tone="friendly")
        first = render(framework_id, intent)
        second = render(framework_id, intent)
        assert first.optimized == second.optimized
        assert first.framework == framework_id
        assert first.optimized.strip()
        assert "\n\n" in first.optimized

    def test_unknown_framework(self):
        from src.core.frameworks.templates import render
        from src.utils.exceptions import FrameworkNotFoundError
        with pytest.raises(FrameworkNotFoundError):
            render("xyz", _intent())

    @pytest.mark.parametrize("role", ["Expert", "You are Expert", "you are an expert editor"])
    def test_role_prefixed_once(self, role):
        from src.core.frameworks.templates import RENDERERS
        intent = _intent(role=role)
        for renderer in RENDERERS.values():
            text = renderer(intent)
            assert "You are You are" not in text
            assert text.lower().count("you are") <= 1

    def test_race_uses_default_role(self):
        from src.core.frameworks.templates import render_race
        text = render_race(_intent(action="analyze", topic="sales data", format="report"))
        assert text.startswith("Role: You are an experienced analyst")

    def test_cot_has_reasoning_steps(self):
        from src.core.frameworks.templates import render_cot
        text = render_cot(_intent(action="solve", topic="a scheduling problem"))
        assert "Chain of Thought" in text
        for step in ("1.", "2.", "3.", "4.", "5."):
            assert step in text
        assert "Expected Output" not in text

    def test_tot_approaches_follow_task_type(self):
        from src.core.frameworks.templates import render_tot
        assert "Narrative" in render_tot(_intent(format="article"))
        problem = render_tot(_intent(action="solve", topic="supply chain delays"))
        assert "Analytical" in problem
        assert "Narrative" not in problem

    def test_example_is_synthesized(self):
        from src.core.frameworks.templates import render_roses
        text = render_roses(_intent(format="blog post"))
        assert 'Example: "Remote work: What You Need to Know"' in text

    def test_email_example(self):
        from src.core.frameworks.templates import render_roses
        text = render_roses(_intent(topic="project delay", format="email"))
        assert "Example: Subject: Project delay." in text

    def test_user_example_is_kept(self):
        from src.core.frameworks.templates import render_create
        text = render_create(_intent(examples=["Fresh every morning"]))
        assert "Examples: Fresh every morning" in text
        assert "What You Need to Know" not in text

    def test_constraints_block_is_optional(self):
        from src.core.frameworks.templates import render_race
        assert "Constraints" not in render_race(_intent())
        text = render_race(_intent(constraints=IntentConstraints(word_count=500, style="casual")))
        assert "- Length: around 500 words" in text
        assert "- Style: casual" in text

    def test_missing_key_terms_are_listed(self):
        from src.core.frameworks.templates import render_ape
        text = render_ape(_intent(action="explain", topic="container orchestration", key_terms=["Kubernetes"]))
        assert text.endswith("Key Terms: Kubernetes")
        text = render_ape(_intent(action="explain", topic="Kubernetes basics", key_terms=["Kubernetes"]))
        assert "Key Terms" not in text

    def test_repeated_name_in_topic_is_kept(self):
        from src.core.frameworks.templates import render_ape
        text = render_ape(_intent(format="guide", topic="Bora Bora", key_terms=["Bora Bora"]))
        assert "Write a guide about Bora Bora" in text
        assert "Key Terms" not in text

    def test_messy_prompt_renders_clean(self, messy_prompt):
        from src.core.frameworks.templates import RENDERERS
        from src.core.intent.extractor import extract_intent
        from src.core.intent.normalizer import normalize
        intent = extract_intent(normalize(messy_prompt).corrected)
        for renderer in RENDERERS.values():
            text = renderer(intent).lower()
            for typo in ("plz", "wrte", "gud", "abt"):
                assert f" {typo} " not in f" {text} "
