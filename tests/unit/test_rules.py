"""Tests for the first-match-wins rule engine."""
from src.core.intent.rules import Rule, RuleContext, apply_rules, regex_rule


class TestApplyRules:
    def test_first_matching_rule_wins(self):
        rules = [
            Rule("never", lambda ctx: False, lambda ctx: "skipped"),
            Rule("first", lambda ctx: True, lambda ctx: "one"),
            Rule("second", lambda ctx: True, lambda ctx: "two"),
        ]
        match = apply_rules(rules, RuleContext("anything"))
        assert match.rule == "first"
        assert match.value == "one"

    def test_empty_extraction_falls_through(self):
        rules = [
            Rule("empty", lambda ctx: True, lambda ctx: None),
            Rule("blank", lambda ctx: True, lambda ctx: ""),
            Rule("real", lambda ctx: True, lambda ctx: "value"),
        ]
        assert apply_rules(rules, RuleContext("x")).rule == "real"

    def test_no_match(self):
        assert apply_rules([Rule("no", lambda ctx: True, lambda ctx: None)], RuleContext("x")) is None

    def test_regex_rule(self):
        rule = regex_rule("verb", r"please\s+(\w+)", lambda m, ctx: m.group(1).lower())
        match = apply_rules([rule], RuleContext("Please SUMMARIZE this"))
        assert match.value == "summarize"

    def test_context_words_are_lowercase(self):
        ctx = RuleContext("Write ABOUT it's AI")
        assert ctx.words == ("write", "about", "it's", "ai")
        assert ctx.lower == "write about it's ai"
