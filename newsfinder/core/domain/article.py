"""Article models for indexing and local matching."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ArticleDocument:
    """A news article, the unit of search.

    Attributes:
        id: Stable unique identifier, used for upsert idempotence and dedup.
        title: Headline text.
        description: Summary or lead paragraph.
        content: Optional full body text.
        category: Single facet value, compared case-insensitively.
        source: Publisher name.
        source_url: Link to the original article.
        published_at: ISO-8601 timestamp, freshness tie-break.
        tags: Free-form labels.
    """

    id: str
    title: str = ""
    description: str = ""
    content: str = ""
    category: str = ""
    source: str = ""
    source_url: str = ""
    published_at: str = ""
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class IndexDocument:
    """Backend-ready shape of an article with its suggestion field."""

    id: str
    title: str
    description: str
    content: str
    category: str
    source: str
    source_url: str
    published_at: str
    tags: tuple[str, ...]
    suggestion_input: tuple[str, ...]
    suggestion_weight: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the document body stored in the index."""
        body: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "source": self.source,
            "sourceUrl": self.source_url,
            "tags": list(self.tags),
            "suggest": {
                "input": list(self.suggestion_input),
                "weight": self.suggestion_weight,
            },
        }
        if self.content:
            body["content"] = self.content
        if self.published_at:
            body["publishedAt"] = self.published_at
        return body


@dataclass
class KeywordRecord:
    """Flat record returned by a plain keyword search endpoint."""

    title: str
    id: str = ""
    source: str = ""
    time: str = ""
    link: str = ""
    description: str = ""
    category: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
