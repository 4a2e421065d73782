"""Maps raw article records to the index document schema."""

from collections.abc import Iterable, Mapping
from typing import Any

from ..domain import ArticleDocument, IndexDocument
from ..domain.exceptions import MalformedDocumentError
from ..domain.utils import clean_text

SUGGESTION_WEIGHT = 1

# Edge n-gram analyzer powers partial-word matching on title/description
INDEX_SETTINGS: dict[str, Any] = {
    "analysis": {
        "analyzer": {
            "autocomplete": {"tokenizer": "autocomplete", "filter": ["lowercase"]},
            "autocomplete_search": {"tokenizer": "keyword", "filter": ["lowercase"]},
        },
        "tokenizer": {
            "autocomplete": {
                "type": "edge_ngram",
                "min_gram": 2,
                "max_gram": 10,
                "token_chars": ["letter", "digit"],
            }
        },
    }
}

INDEX_MAPPINGS: dict[str, Any] = {
    "properties": {
        "title": {
            "type": "text",
            "analyzer": "autocomplete",
            "search_analyzer": "autocomplete_search",
        },
        "description": {
            "type": "text",
            "analyzer": "autocomplete",
            "search_analyzer": "autocomplete_search",
        },
        "content": {"type": "text", "analyzer": "standard"},
        "category": {"type": "keyword"},
        "source": {"type": "keyword"},
        "sourceUrl": {"type": "keyword"},
        "publishedAt": {"type": "date"},
        "tags": {"type": "keyword"},
        "suggest": {
            "type": "completion",
            "analyzer": "simple",
            "preserve_separators": True,
            "preserve_position_increments": True,
            "max_input_length": 50,
        },
    }
}

# Raw record keys accepted for each article field, first match wins
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "_id"),
    "title": ("title",),
    "description": ("description", "summary"),
    "content": ("content", "body"),
    "category": ("category",),
    "source": ("source",),
    "source_url": ("source_url", "sourceUrl", "link", "url"),
    "published_at": ("published_at", "publishedAt", "pubDate", "time"),
    "tags": ("tags",),
}


def _pick(record: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_ALIASES[field]:
        value = record.get(key)
        if value not in (None, ""):
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return clean_text(str(value))


def _as_tags(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    tags = (_as_text(tag) for tag in value)
    return tuple(tag for tag in tags if tag)


def article_from_record(record: Mapping[str, Any] | ArticleDocument) -> ArticleDocument:
    """Build an ArticleDocument from a loose ingestion record.

    Accepts camelCase or snake_case keys. Only a missing identifier is an
    error; every other field falls back to an empty value.

    Args:
        record: Raw article mapping or an existing ArticleDocument.

    Returns:
        Cleaned ArticleDocument.

    Raises:
        MalformedDocumentError: If the record has no usable ``id``.
    """
    if isinstance(record, ArticleDocument):
        record = {
            "id": record.id,
            "title": record.title,
            "description": record.description,
            "content": record.content,
            "category": record.category,
            "source": record.source,
            "source_url": record.source_url,
            "published_at": record.published_at,
            "tags": record.tags,
        }

    if not isinstance(record, Mapping):
        raise MalformedDocumentError(
            "Article record must be a mapping",
            context={"type": type(record).__name__},
        )

    article_id = _as_text(_pick(record, "id"))
    if not article_id:
        raise MalformedDocumentError(
            "Article record is missing an id",
            context={"title": _as_text(_pick(record, "title"))[:80]},
        )

    return ArticleDocument(
        id=article_id,
        title=_as_text(_pick(record, "title")),
        description=_as_text(_pick(record, "description")),
        content=_as_text(_pick(record, "content")),
        category=_as_text(_pick(record, "category")).lower(),
        source=_as_text(_pick(record, "source")),
        source_url=_as_text(_pick(record, "source_url")),
        published_at=_as_text(_pick(record, "published_at")),
        tags=_as_tags(_pick(record, "tags")),
    )


def build_suggestion_input(values: Iterable[str]) -> tuple[str, ...]:
    """Drop empty values and duplicates, keeping first occurrences."""
    return tuple(dict.fromkeys(value for value in values if value))


def to_index_document(article: Mapping[str, Any] | ArticleDocument) -> IndexDocument:
    """Shape an article into the document stored in the search index.

    Pure and deterministic: the same article always maps to the same
    document, and the suggestion field is rebuilt on every call.
    """
    document = article_from_record(article)
    suggestion_input = build_suggestion_input(
        [document.title, *document.tags, document.source, document.category]
    )
    return IndexDocument(
        id=document.id,
        title=document.title,
        description=document.description,
        content=document.content,
        category=document.category,
        source=document.source,
        source_url=document.source_url,
        published_at=document.published_at,
        tags=document.tags,
        suggestion_input=suggestion_input,
        suggestion_weight=SUGGESTION_WEIGHT,
    )
