"""Domain models for the news search service.

- article: ArticleDocument, IndexDocument and KeywordRecord
- search: QueryRequest, SearchResult, SearchResponse and suggestion types

    from newsfinder.core.domain import ArticleDocument, SearchResult
"""

from .article import ArticleDocument, IndexDocument, KeywordRecord
from .search import (
    ALL_CATEGORIES,
    MIN_QUERY_LENGTH,
    BackendSearchResult,
    CorrectionSuggestion,
    QueryRequest,
    SearchResponse,
    SearchResult,
    SuggestionProvenance,
    SuggestionSet,
    Tier,
)

__all__ = [
    # Article models
    "ArticleDocument",
    "IndexDocument",
    "KeywordRecord",
    # Search models
    "ALL_CATEGORIES",
    "MIN_QUERY_LENGTH",
    "BackendSearchResult",
    "CorrectionSuggestion",
    "QueryRequest",
    "SearchResponse",
    "SearchResult",
    "SuggestionProvenance",
    "SuggestionSet",
    "Tier",
]
