"""Unit tests for edit distance and similarity."""

import pytest

from newsfinder.core.services.similarity import edit_distance, similarity

pytestmark = pytest.mark.unit


class TestEditDistance:
    @pytest.mark.parametrize("text", ["", "a", "openai", "인공지능", "Deep Learning"])
    def test_identity_is_zero(self, text):
        assert edit_distance(text, text) == 0

    def test_classic_example(self):
        assert edit_distance("kitten", "sitting") == 3

    def test_against_empty_is_length(self):
        assert edit_distance("", "google") == 6
        assert edit_distance("google", "") == 6

    def test_symmetric(self):
        assert edit_distance("openal", "openai") == edit_distance("openai", "openal") == 1

    def test_case_sensitive(self):
        assert edit_distance("AI", "ai") == 2

    def test_multibyte_counts_characters(self):
        """Each Hangul syllable is one edit, not several bytes."""
        assert edit_distance("인공지능", "인공지눙") == 1


class TestSimilarity:
    def test_identity_is_one(self):
        assert similarity("transformer", "transformer") == 1.0

    def test_both_empty_is_one(self):
        assert similarity("", "") == 1.0

    def test_one_empty_is_zero(self):
        assert similarity("", "abc") == 0.0

    def test_case_insensitive(self):
        assert similarity("OpenAI", "openai") == 1.0

    def test_single_typo(self):
        assert similarity("openal", "openai") == pytest.approx(5 / 6)

    def test_symmetric_and_bounded(self):
        pairs = [("gogle", "google"), ("nvidai", "nvidia"), ("x", "anthropic")]
        for a, b in pairs:
            value = similarity(a, b)
            assert value == similarity(b, a)
            assert 0.0 <= value <= 1.0
