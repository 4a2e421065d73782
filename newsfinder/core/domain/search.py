"""Query, result and response models for the search cascade."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ALL_CATEGORIES = "all"
MIN_QUERY_LENGTH = 2


class Tier(str, Enum):
    """Retrieval tier that produced a result."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    LOCAL = "local"
    NONE = "none"


class SuggestionProvenance(str, Enum):
    """Where a correction suggestion came from."""

    CLIENT = "client"
    BACKEND = "backend"


@dataclass(frozen=True)
class QueryRequest:
    """A single search request.

    Attributes:
        text: Raw user input.
        category: Optional category filter; "all" or None means no filter.
        size: Result cap.
        spell_check: Whether backend correction suggesters are requested.
        from_: Result offset for the primary backend.
    """

    text: str
    category: str | None = None
    size: int = 20
    spell_check: bool = True
    from_: int = 0

    @property
    def category_filter(self) -> str | None:
        """Lowercased category, or None when no filter applies."""
        if not self.category or self.category.strip().lower() == ALL_CATEGORIES:
            return None
        return self.category.strip().lower()


@dataclass
class SearchResult:
    """One ranked hit in the merged result list."""

    article_id: str | None
    title: str
    description: str = ""
    source: str = ""
    source_url: str = ""
    category: str = ""
    published_at: str = ""
    score: float = 0.0
    raw_score: float = 0.0
    highlighted_title: str | None = None
    highlighted_description: str | None = None
    corrected: bool = False
    tier: Tier = Tier.PRIMARY

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.article_id,
            "title": self.title,
            "description": self.description,
            "source": self.source,
            "source_url": self.source_url,
            "category": self.category,
            "published_at": self.published_at,
            "score": self.score,
            "raw_score": self.raw_score,
            "highlighted_title": self.highlighted_title,
            "highlighted_description": self.highlighted_description,
            "corrected": self.corrected,
            "tier": self.tier.value,
        }


@dataclass(frozen=True)
class CorrectionSuggestion:
    """Candidate replacement for the whole query."""

    text: str
    provenance: SuggestionProvenance


@dataclass
class SuggestionSet:
    """Spelling corrections and autocomplete completions for a query."""

    spelling: list[str] = field(default_factory=list)
    autocomplete: list[str] = field(default_factory=list)


@dataclass
class BackendSearchResult:
    """Raw outcome of a primary backend query."""

    hits: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    took_ms: int = 0
    suggest: dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResponse:
    """Merged response returned to callers.

    ``degraded`` is True when at least one tier failed; with ``tier`` set to
    ``Tier.NONE`` it means no tier could serve the request at all.
    """

    query: str
    results: list[SearchResult] = field(default_factory=list)
    corrected_query: str | None = None
    suggestions: SuggestionSet = field(default_factory=SuggestionSet)
    corrections: list[CorrectionSuggestion] = field(default_factory=list)
    took_ms: float = 0.0
    tier: Tier = Tier.NONE
    degraded: bool = False
    failed_tiers: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @classmethod
    def empty(cls, query: str) -> "SearchResponse":
        """Well-formed response with no results."""
        return cls(query=query)
