"""Tests for the dictionary-based normalizer."""
import pytest


class TestNormalize:
    def test_corrects_text_speak_and_typos(self):
        from src.core.intent.normalizer import normalize
        result = normalize("plz wrte abt tech")
        assert result.corrected == "please write about technology"
        assert [c.original for c in result.corrections] == ["plz", "wrte", "abt", "tech"]

    def test_preserves_capitalisation(self):
        from src.core.intent.normalizer import normalize
        assert normalize("Plz help").corrected == "Please help"
        assert normalize("Teh plan").corrected == "The plan"

    def test_records_positions_in_cleaned_text(self):
        from src.core.intent.normalizer import normalize
        result = normalize("plz   wrte")
        assert result.corrected == "please write"
        assert [c.position for c in result.corrections] == [0, 4]

    def test_whole_words_only(self):
        from src.core.intent.normalizer import normalize
        text = "update the code for ultimate results"
        result = normalize(text)
        assert result.corrected == text
        assert result.corrections == []

    def test_valid_words_are_not_rewritten(self):
        from src.core.intent.normalizer import normalize
        text = "make it interesting stuff not boring"
        assert normalize(text).corrected == text

    def test_dotted_abbreviations_untouched(self):
        from src.core.intent.normalizer import normalize
        assert normalize("the U.S. economy").corrected == "the U.S. economy"

    def test_canonical_form_is_not_recorded(self):
        from src.core.intent.normalizer import normalize
        result = normalize("AI safety")
        assert result.corrected == "AI safety"
        assert result.corrections == []

    def test_collapses_whitespace(self):
        from src.core.intent.normalizer import normalize
        result = normalize("  write   about\t AI\n\n\n\nfor   students  ")
        assert result.corrected == "write about AI\nfor students"

    def test_slash_shorthand(self):
        from src.core.intent.normalizer import normalize
        assert normalize("coffee w/ milk w/o sugar").corrected == "coffee with milk without sugar"

    @pytest.mark.parametrize(
        "text",
        [
            "plz wrte abt tech future ai robots and stuff make it gud not boring",
            "U shld recieve teh  report asap thx",
            "idk   wat 2 do btw",
            "Ty for the info, pls send it w/o delay",
            "",
            "AI ML tech",
        ],
    )
    def test_idempotent(self, text):
        from src.core.intent.normalizer import normalize
        once = normalize(text).corrected
        assert normalize(once).corrected == once

    def test_whitespace_cleanup_commutes_with_correction(self):
        from src.core.intent.normalizer import clean_whitespace, normalize
        text = "plz    wrte \n\n abt   tech"
        assert normalize(clean_whitespace(text)).corrected == normalize(text).corrected
