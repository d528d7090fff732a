"""Tests for the 'Label: value' parser."""
from src.core.intent.models import StructuredPrompt


class TestParseStructured:
    def test_parses_labelled_fields(self, structured_prompt):
        from src.core.intent.structured_parser import parse_structured
        result = parse_structured(structured_prompt)
        assert result.is_structured is True
        assert result.role == "Marketing Manager"
        assert result.action == "Write"
        assert result.topic == "Social media strategy for Q4"

    def test_single_label_is_not_structured(self):
        from src.core.intent.structured_parser import parse_structured
        result = parse_structured("Topic: renewable energy")
        assert result.is_structured is False
        assert result.topic is None

    def test_aliases_and_last_value_wins(self):
        from src.core.intent.structured_parser import parse_structured
        result = parse_structured("Task: Draft\nTopic: first\nConstraint: no jargon\nTopic: second")
        assert result.action == "Draft"
        assert result.topic == "second"
        assert result.constraints == "no jargon"

    def test_unknown_labels_are_ignored(self):
        from src.core.intent.structured_parser import parse_structured
        result = parse_structured("Note: hello\nTopic: AI\nTone: warm")
        assert result.is_structured is True
        assert result.topic == "AI"
        assert result.tone == "warm"


class TestTemplateOnly:
    def test_bare_labels_are_template_only(self):
        from src.core.intent.structured_parser import is_template_only, parse_structured
        assert is_template_only("Role:\nAction:\nTopic:") is True
        result = parse_structured("Role:\nAction:\nTopic:")
        assert result.is_template_only is True
        assert result.is_structured is False

    def test_labels_with_values_are_not_template_only(self, structured_prompt):
        from src.core.intent.structured_parser import is_template_only
        assert is_template_only(structured_prompt) is False

    def test_unrecognised_bare_labels(self):
        from src.core.intent.structured_parser import is_template_only
        assert is_template_only("Foo:\nBar:") is False

    def test_empty_text(self):
        from src.core.intent.structured_parser import is_template_only
        assert is_template_only("") is False


class TestConvertToNatural:
    def test_all_fields(self):
        from src.core.intent.structured_parser import convert_to_natural
        structured = StructuredPrompt(
            role="Editor",
            action="Write",
            topic="AI ethics",
            audience="students",
            format="essay",
            tone="formal",
            length="short",
            constraints="No jargon",
            context="University course",
        )
        assert convert_to_natural(structured) == (
            "You are Editor. Write AI ethics for students in the format of essay. "
            "Use a formal tone. Keep it short. No jargon. Context: University course."
        )

    def test_topic_only(self):
        from src.core.intent.structured_parser import convert_to_natural
        assert convert_to_natural(StructuredPrompt(topic="AI")) == "Write about AI."

    def test_action_only(self):
        from src.core.intent.structured_parser import convert_to_natural
        assert convert_to_natural(StructuredPrompt(action="Summarize")) == "Summarize."


class TestPreferredFrameworks:
    def test_role_format_and_many_fields(self):
        from src.core.intent.structured_parser import detect_preferred_frameworks
        structured = StructuredPrompt(
            role="Editor", action="Write", topic="Social media", format="blog post",
            is_structured=True,
        )
        assert detect_preferred_frameworks(structured) == ["race", "roses", "create"]

    def test_non_write_action(self):
        from src.core.intent.structured_parser import detect_preferred_frameworks
        structured = StructuredPrompt(action="Analyze", topic="sales data", is_structured=True)
        assert detect_preferred_frameworks(structured) == ["ape", "race"]

    def test_placeholder_topic_is_not_specific(self):
        from src.core.intent.structured_parser import detect_preferred_frameworks
        structured = StructuredPrompt(action="Write", topic="TBD", tone="warm", is_structured=True)
        assert detect_preferred_frameworks(structured) == []

    def test_unstructured_prompt(self):
        from src.core.intent.structured_parser import detect_preferred_frameworks
        assert detect_preferred_frameworks(StructuredPrompt(role="Editor")) == []
