"""Structured query construction for the primary search backend.

A query is a disjunction of four strategies, each weighted so the
backend scorer prefers precision over recall:

1. exact phrase across title/description/content/tags
2. weighted best-fields match
3. fuzzy best-fields match (up to 2 edits per term)
4. substring wildcard for partial words

Category is a hard filter, never a scored clause. Ties on relevance are
broken by recency.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from ..domain import ALL_CATEGORIES

TERM_SUGGESTER = "term_suggest"
PHRASE_SUGGESTER = "phrase_suggest"
COMPLETION_SUGGESTER = "completion_suggest"
AUTOCOMPLETE_SUGGESTER = "autocomplete"
SPELL_CHECK_SUGGESTER = "spell_check"

# query_string reserved characters; whitespace is left alone
_QUERY_STRING_SPECIAL = re.compile(r'([+\-=&|><!(){}\[\]^"~*?:\\/])')


@dataclass(frozen=True)
class PlannerConfig:
    """Immutable weights and limits used to build backend queries."""

    phrase_fields: tuple[str, ...] = ("title^5", "description^3", "content^2", "tags^4")
    best_fields: tuple[str, ...] = ("title^4", "description^2", "content", "tags^3")
    fuzzy_fields: tuple[str, ...] = ("title^3", "description^2", "content", "tags^2")
    wildcard_fields: tuple[str, ...] = ("title^2", "description", "tags^2")
    phrase_boost: float = 3.0
    best_fields_boost: float = 2.0
    fuzzy_boost: float = 1.5
    wildcard_boost: float = 1.0
    fuzziness: int = 2
    fuzzy_prefix_length: int = 0
    fuzzy_max_expansions: int = 100
    category_field: str = "category"
    recency_field: str = "publishedAt"
    suggestion_field: str = "title"
    completion_field: str = "suggest"
    highlight_pre_tag: str = "<mark>"
    highlight_post_tag: str = "</mark>"
    highlight_fragment_size: int = 150
    phrase_suggestion_size: int = 3
    completion_size: int = 5


@dataclass
class StructuredQuery:
    """A fully planned backend request."""

    query: dict[str, Any]
    sort: list[dict[str, Any]]
    size: int
    from_: int = 0
    highlight: dict[str, Any] | None = None
    suggest: dict[str, Any] | None = None
    text: str = ""
    category: str | None = None
    strategies: list[str] = field(default_factory=list)

    def to_search_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``Elasticsearch.search``."""
        kwargs: dict[str, Any] = {
            "query": self.query,
            "sort": self.sort,
            "size": self.size,
            "from_": self.from_,
            # scores are dropped from hits whenever an explicit sort is given
            "track_scores": True,
        }
        if self.highlight:
            kwargs["highlight"] = self.highlight
        if self.suggest:
            kwargs["suggest"] = self.suggest
        return kwargs


def escape_query_string(text: str) -> str:
    """Escape query_string syntax characters."""
    return _QUERY_STRING_SPECIAL.sub(r"\\\1", text)


class QueryPlanner:
    """Builds multi-strategy queries and suggester requests."""

    def __init__(self, config: PlannerConfig | None = None) -> None:
        self.config = config or PlannerConfig()

    def _strategies(self, text: str) -> list[tuple[str, dict[str, Any]]]:
        cfg = self.config
        return [
            (
                "phrase",
                {
                    "multi_match": {
                        "query": text,
                        "fields": list(cfg.phrase_fields),
                        "type": "phrase",
                        "boost": cfg.phrase_boost,
                    }
                },
            ),
            (
                "best_fields",
                {
                    "multi_match": {
                        "query": text,
                        "fields": list(cfg.best_fields),
                        "type": "best_fields",
                        "boost": cfg.best_fields_boost,
                    }
                },
            ),
            (
                "fuzzy",
                {
                    "multi_match": {
                        "query": text,
                        "fields": list(cfg.fuzzy_fields),
                        "type": "best_fields",
                        "fuzziness": cfg.fuzziness,
                        "prefix_length": cfg.fuzzy_prefix_length,
                        "max_expansions": cfg.fuzzy_max_expansions,
                        "operator": "or",
                        "boost": cfg.fuzzy_boost,
                    }
                },
            ),
            (
                "wildcard",
                {
                    "query_string": {
                        "query": f"*{escape_query_string(text.lower())}*",
                        "fields": list(cfg.wildcard_fields),
                        "boost": cfg.wildcard_boost,
                    }
                },
            ),
        ]

    def _highlight(self) -> dict[str, Any]:
        cfg = self.config
        tags = {"pre_tags": [cfg.highlight_pre_tag], "post_tags": [cfg.highlight_post_tag]}
        return {
            "fields": {"title": dict(tags), "description": dict(tags)},
            "fragment_size": cfg.highlight_fragment_size,
            "number_of_fragments": 1,
        }

    def _suggesters(self, text: str) -> dict[str, Any]:
        cfg = self.config
        return {
            "text": text,
            TERM_SUGGESTER: {
                "term": {
                    "field": cfg.suggestion_field,
                    "suggest_mode": "always",
                    "max_term_freq": 5,
                    "prefix_length": 0,
                    "min_word_length": 2,
                    "max_inspections": 20,
                    "min_doc_freq": 1,
                    "max_edits": 2,
                    "sort": "frequency",
                }
            },
            PHRASE_SUGGESTER: {
                "phrase": {
                    "field": cfg.suggestion_field,
                    "size": cfg.phrase_suggestion_size,
                    "real_word_error_likelihood": 0.95,
                    "max_errors": 2,
                    "gram_size": 2,
                    "direct_generator": [
                        {
                            "field": cfg.suggestion_field,
                            "suggest_mode": "always",
                            "min_word_length": 2,
                            "prefix_length": 0,
                            "max_edits": 2,
                        }
                    ],
                }
            },
            COMPLETION_SUGGESTER: {
                "prefix": text,
                "completion": {
                    "field": cfg.completion_field,
                    "size": cfg.completion_size,
                    "skip_duplicates": True,
                },
            },
        }

    def build_query(
        self,
        text: str,
        category: str | None = None,
        size: int = 20,
        from_: int = 0,
        spell_check: bool = True,
    ) -> StructuredQuery:
        """Plan the primary backend query.

        Args:
            text: Effective query text (already corrected when applicable).
            category: Category filter; None or "all" disables filtering.
            size: Number of hits to request.
            from_: Hit offset.
            spell_check: Whether to attach the term, phrase and completion
                suggesters.

        Returns:
            StructuredQuery ready for the backend adapter.
        """
        cfg = self.config
        text = text.strip()

        must: list[dict[str, Any]] = []
        strategy_names: list[str] = []
        if text:
            strategies = self._strategies(text)
            strategy_names = [name for name, _ in strategies]
            must.append(
                {
                    "bool": {
                        "should": [clause for _, clause in strategies],
                        "minimum_should_match": 1,
                    }
                }
            )

        filters: list[dict[str, Any]] = []
        category_value = (category or "").strip().lower()
        if category_value and category_value != ALL_CATEGORIES:
            filters.append({"term": {cfg.category_field: category_value}})
        else:
            category_value = ""

        return StructuredQuery(
            query={"bool": {"must": must or [{"match_all": {}}], "filter": filters}},
            sort=[
                {"_score": {"order": "desc"}},
                {cfg.recency_field: {"order": "desc", "unmapped_type": "date"}},
            ],
            size=size,
            from_=from_,
            highlight=self._highlight(),
            suggest=self._suggesters(text) if spell_check and text else None,
            text=text,
            category=category_value or None,
            strategies=strategy_names,
        )

    def build_autocomplete(self, prefix: str, size: int | None = None) -> dict[str, Any]:
        """Completion-only suggester body for prefix autocomplete."""
        return {
            AUTOCOMPLETE_SUGGESTER: {
                "prefix": prefix,
                "completion": {
                    "field": self.config.completion_field,
                    "size": size or self.config.completion_size,
                    "skip_duplicates": True,
                },
            }
        }

    def build_spell_check(self, text: str) -> dict[str, Any]:
        """Conservative term suggester that only proposes more popular terms."""
        return {
            SPELL_CHECK_SUGGESTER: {
                "text": text,
                "term": {
                    "field": self.config.suggestion_field,
                    "suggest_mode": "popular",
                    "max_term_freq": 3,
                    "prefix_length": 1,
                    "min_word_length": 4,
                    "max_inspections": 16,
                    "min_doc_freq": 1,
                    "max_edits": 2,
                },
            }
        }


def _entries(raw: dict[str, Any], name: str) -> list[dict[str, Any]]:
    entries = raw.get(name) or []
    return [entry for entry in entries if isinstance(entry, dict)]


def _join_term_corrections(entries: list[dict[str, Any]]) -> str:
    words = []
    for entry in entries:
        options = entry.get("options") or []
        word = entry.get("text", "")
        if options:
            word = options[0].get("text", word)
        words.append(word)
    return " ".join(word for word in words if word)


def parse_suggestions(raw: dict[str, Any] | None, original: str) -> tuple[list[str], list[str]]:
    """Flatten a backend ``suggest`` section.

    Args:
        raw: The ``suggest`` part of a backend response.
        original: The text the suggesters ran against.

    Returns:
        ``(spelling, autocomplete)`` lists, deduplicated, best first.
    """
    if not raw:
        return [], []

    original_lower = original.strip().lower()
    spelling: list[str] = []

    for name in (TERM_SUGGESTER, SPELL_CHECK_SUGGESTER):
        entries = _entries(raw, name)
        if entries:
            corrected = _join_term_corrections(entries)
            if corrected and corrected.lower() != original_lower:
                spelling.append(corrected)

    for entry in _entries(raw, PHRASE_SUGGESTER):
        for option in entry.get("options") or []:
            text = option.get("text", "")
            if text and text.lower() != original_lower:
                spelling.append(text)

    autocomplete: list[str] = []
    for name in (COMPLETION_SUGGESTER, AUTOCOMPLETE_SUGGESTER):
        for entry in _entries(raw, name):
            for option in entry.get("options") or []:
                text = option.get("text") or (option.get("_source") or {}).get("title", "")
                if text:
                    autocomplete.append(text)

    return list(dict.fromkeys(spelling)), list(dict.fromkeys(autocomplete))
