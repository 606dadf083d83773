"""Unit tests for readability and keyword density."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from seo_auditor.parser.document import parse_document
from seo_auditor.parser.readability import (
    analyze_document,
    analyze_text,
    approximate_reading_ease,
    count_sentences,
    count_syllables,
    count_words,
    flesch_reading_ease,
    keyword_density,
)


class TestCounting:
    """Tests for word, sentence and syllable counts."""

    def test_count_words(self):
        assert count_words("one two  three\nfour") == 4
        assert count_words("") == 0

    def test_count_sentences_ignores_blank_segments(self):
        assert count_sentences("One. Two! Three?") == 3
        assert count_sentences("Wait... what?!") == 2

    def test_count_sentences_minimum_one(self):
        assert count_sentences("") == 1
        assert count_sentences("no punctuation here") == 1

    @pytest.mark.parametrize("word,expected", [
        ("the", 1),
        ("cat", 1),
        ("table", 2),
        ("reading", 2),
        ("beautiful", 3),
        ("jumped", 1),
        ("yellow", 2),
        ("Hello!", 2),
    ])
    def test_count_syllables(self, word, expected):
        assert count_syllables(word) == expected

    def test_count_syllables_minimum_one(self):
        assert count_syllables("rhythm") >= 1
        assert count_syllables("") == 1


class TestReadingEase:
    """Tests for the Flesch reading ease variants."""

    def test_flesch_formula(self):
        # 206.835 - 1.015 * 10 - 84.6 * 1.5
        assert flesch_reading_ease(100, 10, 150) == 69.8

    def test_flesch_not_clamped(self):
        assert flesch_reading_ease(10, 1, 40) < 0

    def test_flesch_no_words(self):
        assert flesch_reading_ease(0, 1, 0) == 0.0

    def test_approximate_is_clamped(self):
        long_sentence = " ".join(["word"] * 200)
        assert approximate_reading_ease(long_sentence) == 0.0

    def test_approximate_counts_trailing_segment(self):
        # "A b. C d." splits into three segments: 4 words / 3 sentences
        expected = round(206.835 - 1.015 * (4 / 3) - 84.6 * 1.5, 1)
        assert approximate_reading_ease("A b. C d.") == expected

    def test_approximate_empty(self):
        assert approximate_reading_ease("   ") == 0.0


class TestKeywordDensity:
    """Tests for keyword density."""

    def test_short_tokens_ignored(self):
        assert keyword_density("a an the and") == {}

    def test_density_percentages(self):
        density = keyword_density("apple apple banana cherry")
        assert density == {"apple": 50.0, "banana": 25.0, "cherry": 25.0}

    def test_case_insensitive_and_limit(self):
        density = keyword_density("Apple apple APPLE pear pear plum", limit=2)
        assert list(density) == ["apple", "pear"]
        assert density["apple"] == 50.0

    def test_ties_keep_first_occurrence(self):
        density = keyword_density("zeta alpha zeta alpha")
        assert list(density) == ["zeta", "alpha"]


class TestAnalyze:
    """Tests for analyze_text and analyze_document."""

    def test_analyze_text_figures(self):
        analysis = analyze_text("The cat sat. The dog ran.", estimate_syllables=True)
        assert analysis.word_count == 6
        assert analysis.sentence_count == 2
        assert analysis.syllable_count == 6
        assert analysis.average_sentence_length == 3.0
        assert analysis.syllables_estimated is True

    def test_analyze_text_approximate_mode(self):
        analysis = analyze_text("The cat sat. The dog ran.", estimate_syllables=False)
        assert analysis.syllables_estimated is False
        assert analysis.syllable_count == 9
        assert 0 <= analysis.reading_ease <= 100

    def test_mode_follows_settings(self):
        with patch("seo_auditor.parser.readability.settings") as mock_settings:
            mock_settings.content.estimate_syllables = False
            mock_settings.content.keyword_limit = 10
            mock_settings.content.keyword_min_length = 4
            analysis = analyze_text("Some words here.")
        assert analysis.syllables_estimated is False

    def test_empty_text(self):
        analysis = analyze_text("")
        assert analysis.word_count == 0
        assert analysis.reading_ease == 0.0
        assert analysis.keyword_density == {}

    def test_analyze_document_uses_body_text_only(self):
        doc = parse_document(
            "<html><head><title>Ignored title words</title></head>"
            "<body><p>Visible words only.</p><script>hidden()</script></body></html>"
        )
        analysis = analyze_document(doc)
        assert analysis.word_count == 3

    def test_analyze_document_keeps_inline_words_whole(self):
        doc = parse_document("<body><p>Un<em>believ</em>able H<sub>2</sub>O</p></body>")
        analysis = analyze_document(doc)
        assert analysis.word_count == 2
        assert analysis.keyword_density == {"unbelievable": 100.0}

    def test_analyze_document_without_body(self):
        doc = parse_document("")
        assert analyze_document(doc).word_count == 0
