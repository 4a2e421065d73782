"""Unit tests for the local fuzzy matcher."""

import pytest

from newsfinder.core.domain import ArticleDocument, Tier
from newsfinder.core.services.fuzzy_matcher import FuzzyMatch, LocalFuzzyMatcher
from newsfinder.core.services.typo_dictionary import TypoDictionary

pytestmark = pytest.mark.unit


@pytest.fixture
def matcher():
    return LocalFuzzyMatcher(TypoDictionary.default())


class TestScore:
    def test_exact_substring_scores_higher_than_typo(self, matcher, sample_articles):
        openai = sample_articles[0]
        exact = matcher.score(openai, "openai", "openai")
        typo = matcher.score(openai, "openal", "openai")
        assert exact > typo > 0

    def test_tags_count_as_haystack(self, matcher):
        doc = ArticleDocument(id="t", title="Quarterly results", tags=("nvidia",))
        assert matcher.score(doc, "nvidia", "nvidia") > 3.5


class TestSearch:
    def test_typo_query_ranks_relevant_article_first(self, matcher, sample_articles):
        """'OpenAl' finds the OpenAI article; the bakery story is filtered out."""
        matches = matcher.search(sample_articles, "OpenAl", threshold=0.3)

        ids = [match.document.id for match in matches]
        assert ids[0] == "openai-1"
        assert "bakery-1" not in ids
        assert all(match.corrected for match in matches)

    def test_unrelated_document_below_threshold(self, matcher, sample_articles):
        bakery = sample_articles[2]
        assert matcher.score(bakery, "openal", "openai") <= 0.3

    def test_exact_query_not_flagged_corrected(self, matcher, sample_articles):
        matches = matcher.search(sample_articles, "nvidia")
        assert matches
        assert not any(match.corrected for match in matches)

    def test_blank_query_returns_nothing(self, matcher, sample_articles):
        assert matcher.search(sample_articles, "   ") == []

    def test_max_results_caps_output(self, matcher):
        docs = [ArticleDocument(id=f"n{i}", title=f"Nvidia news {i}") for i in range(10)]
        assert len(matcher.search(docs, "nvidia", max_results=4)) == 4

    def test_ties_keep_input_order(self, matcher):
        docs = [ArticleDocument(id=f"n{i}", title="Nvidia news") for i in range(3)]
        matches = matcher.search(docs, "nvidia")
        assert [match.document.id for match in matches] == ["n0", "n1", "n2"]


class TestToResults:
    def test_results_are_local_tier(self, sample_articles):
        match = FuzzyMatch(document=sample_articles[0], score=3.2, corrected=True)
        [result] = LocalFuzzyMatcher.to_results([match])

        assert result.tier is Tier.LOCAL
        assert result.article_id == "openai-1"
        assert result.raw_score == 3.2
        assert result.corrected is True
        assert result.source_url == "https://techdaily.example/openai-model"
