"""Unit tests for the index document mapper."""

import pytest

from newsfinder.core.domain import ArticleDocument
from newsfinder.core.domain.exceptions import MalformedDocumentError
from newsfinder.core.services.document_mapper import (
    INDEX_MAPPINGS,
    article_from_record,
    build_suggestion_input,
    to_index_document,
)
from newsfinder.core.services.query_planner import QueryPlanner

pytestmark = pytest.mark.unit


@pytest.fixture
def raw_article():
    return {
        "id": "a-1",
        "title": "\ufeffAnthropic ships Claude update",
        "description": "New model version.",
        "category": "ai",
        "source": "TechDaily",
        "sourceUrl": "https://techdaily.example/claude",
        "publishedAt": "2024-06-01T10:00:00Z",
        "tags": ["claude", "llm", "claude"],
    }


class TestArticleFromRecord:
    def test_camel_case_keys(self, raw_article):
        article = article_from_record(raw_article)
        assert article.source_url == "https://techdaily.example/claude"
        assert article.published_at == "2024-06-01T10:00:00Z"

    def test_snake_case_and_link_aliases(self):
        article = article_from_record({"id": 7, "title": "T", "link": "https://x", "pubDate": "d"})
        assert article.id == "7"
        assert article.source_url == "https://x"
        assert article.published_at == "d"

    def test_bom_is_stripped(self, raw_article):
        assert article_from_record(raw_article).title == "Anthropic ships Claude update"

    def test_comma_separated_tags(self):
        article = article_from_record({"id": "x", "tags": "ai, chips ,"})
        assert article.tags == ("ai", "chips")

    def test_missing_id_raises(self):
        with pytest.raises(MalformedDocumentError) as exc_info:
            article_from_record({"title": "No id here"})
        assert exc_info.value.error_code == "NS_ING_002"

    def test_non_mapping_raises(self):
        with pytest.raises(MalformedDocumentError):
            article_from_record(["not", "a", "dict"])

    def test_accepts_article_document(self):
        article = ArticleDocument(id="d", title="Doc")
        assert article_from_record(article) == article


class TestToIndexDocument:
    def test_deterministic(self, raw_article):
        assert to_index_document(raw_article) == to_index_document(raw_article)
        assert to_index_document(raw_article).to_dict() == to_index_document(raw_article).to_dict()

    def test_suggestion_field(self, raw_article):
        body = to_index_document(raw_article).to_dict()
        assert body["suggest"] == {
            "input": ["Anthropic ships Claude update", "claude", "llm", "TechDaily", "ai"],
            "weight": 1,
        }

    def test_body_uses_index_field_names(self, raw_article):
        body = to_index_document(raw_article).to_dict()
        assert body["sourceUrl"] == "https://techdaily.example/claude"
        assert body["publishedAt"] == "2024-06-01T10:00:00Z"
        assert "content" not in body
        assert set(body) <= set(INDEX_MAPPINGS["properties"]) | {"id"}

    def test_category_matches_planner_filter(self):
        body = to_index_document({"id": "c-1", "category": "Technology"}).to_dict()
        planned = QueryPlanner().build_query("nvidia", category="Technology")

        assert body["category"] == "technology"
        assert planned.query["bool"]["filter"] == [{"term": {"category": body["category"]}}]

    def test_minimal_article(self):
        body = to_index_document({"id": "m"}).to_dict()
        assert body["suggest"]["input"] == []
        assert "publishedAt" not in body


class TestBuildSuggestionInput:
    def test_drops_empty_and_duplicates(self):
        assert build_suggestion_input(["a", "", "b", "a"]) == ("a", "b")
