"""Fallback orchestration across the primary, secondary and local tiers.

One search runs a short cascade modelled as a state machine:

    NOT_STARTED -> PRIMARY_TRIED -> SECONDARY_TRIED -> LOCAL_AUGMENTED -> DONE

Each later tier runs only when the earlier output is insufficient. A tier
that raises or times out is recorded as failed and the cascade advances;
callers never see tier exceptions.
"""

import hashlib
import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..domain import (
    MIN_QUERY_LENGTH,
    ArticleDocument,
    CorrectionSuggestion,
    KeywordRecord,
    QueryRequest,
    SearchResponse,
    SearchResult,
    SuggestionProvenance,
    SuggestionSet,
    Tier,
)
from ..domain.exceptions import SearchBackendError
from ..domain.utils import clean_text
from ..ports import SearchBackendPort, SecondarySearchPort
from .document_mapper import to_index_document
from .fuzzy_matcher import DEFAULT_THRESHOLD, LocalFuzzyMatcher
from .query_planner import QueryPlanner, parse_suggestions
from .typo_dictionary import TypoDictionary

logger = logging.getLogger(__name__)

TIER_PRIORITY: tuple[Tier, ...] = (Tier.PRIMARY, Tier.SECONDARY, Tier.LOCAL)
TIER_WEIGHTS: dict[Tier, float] = {Tier.PRIMARY: 1.0, Tier.SECONDARY: 0.8, Tier.LOCAL: 0.6}


class CascadeState(str, Enum):
    """Progress of one search through the fallback tiers."""

    NOT_STARTED = "not_started"
    PRIMARY_TRIED = "primary_tried"
    SECONDARY_TRIED = "secondary_tried"
    LOCAL_AUGMENTED = "local_augmented"
    DONE = "done"


@dataclass
class CascadeRun:
    """Per-call state of a search cascade. Never shared between calls."""

    request: QueryRequest
    text: str
    effective_text: str
    correction: str | None = None
    state: CascadeState = CascadeState.NOT_STARTED
    history: list[CascadeState] = field(default_factory=list)
    tier_results: dict[Tier, list[SearchResult]] = field(default_factory=dict)
    succeeded_tiers: list[Tier] = field(default_factory=list)
    failed_tiers: list[Tier] = field(default_factory=list)
    candidates: list[ArticleDocument] = field(default_factory=list)
    backend_suggest: dict[str, Any] = field(default_factory=dict)

    @property
    def corrected(self) -> bool:
        return self.correction is not None

    def tier_count(self, tier: Tier) -> int:
        return len(self.tier_results.get(tier, []))

    def merged(self) -> list[SearchResult]:
        return merge_results(
            [(tier, self.tier_results.get(tier, [])) for tier in TIER_PRIORITY],
            size=self.request.size,
        )


def external_article_id(record: KeywordRecord) -> str:
    """Stable id for records that come without one."""
    if record.id:
        return record.id
    key = record.link or record.title
    return f"ext-{hashlib.md5(key.encode('utf-8')).hexdigest()[:12]}"


def record_to_article(record: KeywordRecord) -> ArticleDocument:
    """Candidate article built from a flat keyword record."""
    return ArticleDocument(
        id=external_article_id(record),
        title=record.title,
        description=record.description,
        category=record.category,
        source=record.source,
        source_url=record.link,
        published_at=record.time,
    )


def hit_to_result(hit: dict[str, Any], corrected: bool = False) -> SearchResult:
    """Normalize a backend hit into a SearchResult."""
    source = hit.get("_source") or {}
    highlight = hit.get("highlight") or {}

    raw_score = hit.get("_score")
    if raw_score is None:
        sort_values = hit.get("sort") or []
        raw_score = sort_values[0] if sort_values else 0.0

    titles = highlight.get("title") or []
    descriptions = highlight.get("description") or []
    return SearchResult(
        article_id=hit.get("_id") or source.get("id"),
        title=source.get("title", ""),
        description=source.get("description", ""),
        source=source.get("source", ""),
        source_url=source.get("sourceUrl", ""),
        category=source.get("category", ""),
        published_at=source.get("publishedAt", ""),
        raw_score=float(raw_score or 0.0),
        highlighted_title=titles[0] if titles else None,
        highlighted_description=descriptions[0] if descriptions else None,
        corrected=corrected,
        tier=Tier.PRIMARY,
    )


def records_to_results(
    records: Sequence[KeywordRecord], corrected: bool = False
) -> list[SearchResult]:
    """Normalize keyword records, scoring them by their returned position."""
    total = len(records)
    return [
        SearchResult(
            article_id=external_article_id(record),
            title=record.title,
            description=record.description,
            source=record.source,
            source_url=record.link,
            category=record.category,
            published_at=record.time,
            raw_score=float(total - position),
            corrected=corrected,
            tier=Tier.SECONDARY,
        )
        for position, record in enumerate(records)
    ]


def _normalize_scores(tier: Tier, results: list[SearchResult]) -> None:
    if not results:
        return
    weight = TIER_WEIGHTS.get(tier, 1.0)
    top = max(result.raw_score for result in results)
    total = len(results)
    for position, result in enumerate(results):
        if top > 0:
            result.score = result.raw_score / top * weight
        else:
            result.score = (total - position) / total * weight


def merge_results(
    tiers: Iterable[tuple[Tier, list[SearchResult]]],
    size: int,
) -> list[SearchResult]:
    """Merge tier outputs, dedupe and rank.

    Tiers must be given in priority order. An item is dropped when its id,
    source URL or exact title was already seen in an earlier item, so the
    higher-priority tier keeps its score and highlighting.

    Args:
        tiers: ``(tier, results)`` pairs, highest priority first.
        size: Maximum number of merged results.

    Returns:
        Deduplicated results sorted by descending normalized score.
    """
    seen_ids: set[str] = set()
    seen_urls: set[str] = set()
    seen_titles: set[str] = set()
    merged: list[SearchResult] = []

    for tier, results in tiers:
        _normalize_scores(tier, results)
        for result in results:
            if result.article_id and result.article_id in seen_ids:
                continue
            if result.source_url and result.source_url in seen_urls:
                continue
            if result.title and result.title in seen_titles:
                continue

            if result.article_id:
                seen_ids.add(result.article_id)
            if result.source_url:
                seen_urls.add(result.source_url)
            if result.title:
                seen_titles.add(result.title)
            merged.append(result)

    merged.sort(key=lambda result: result.score, reverse=True)
    return merged[: max(size, 0)]


class SearchService:
    """Typo-tolerant search entry point with tiered fallback."""

    def __init__(
        self,
        backend: SearchBackendPort | None,
        dictionary: TypoDictionary | None = None,
        planner: QueryPlanner | None = None,
        matcher: LocalFuzzyMatcher | None = None,
        secondary: SecondarySearchPort | None = None,
        local_corpus: Iterable[ArticleDocument] = (),
        min_primary_results: int = 3,
        min_combined_results: int = 5,
        fuzzy_threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        """Initialize the service.

        Args:
            backend: Primary index adapter; None runs without a backend.
            dictionary: Typo correction dictionary (defaults to the built-in one).
            planner: Query planner for the primary backend.
            matcher: Local fuzzy matcher (built from ``dictionary`` if omitted).
            secondary: Optional keyword search fallback.
            local_corpus: Articles always available to the local matcher.
            min_primary_results: Below this many primary hits, query the secondary.
            min_combined_results: Below this many merged hits, pad with local matches.
            fuzzy_threshold: Minimum local matcher score.
        """
        self.backend = backend
        self.dictionary = dictionary or TypoDictionary.default()
        self.planner = planner or QueryPlanner()
        self.matcher = matcher or LocalFuzzyMatcher(self.dictionary)
        self.secondary = secondary
        self.local_corpus: tuple[ArticleDocument, ...] = tuple(local_corpus)
        self.min_primary_results = min_primary_results
        self.min_combined_results = min_combined_results
        self.fuzzy_threshold = fuzzy_threshold

        self._handlers = {
            CascadeState.NOT_STARTED: self._run_primary,
            CascadeState.PRIMARY_TRIED: self._after_primary,
            CascadeState.SECONDARY_TRIED: self._pad_or_finish,
            CascadeState.LOCAL_AUGMENTED: lambda run: CascadeState.DONE,
        }

    # ------------------------------------------------------------------
    # Query path
    # ------------------------------------------------------------------

    def search(self, request: QueryRequest) -> SearchResponse:
        """Run the search cascade for one request.

        Args:
            request: Query text, category filter, size and spell-check flag.

        Returns:
            SearchResponse; empty (never an exception) when nothing matched
            or every tier failed.
        """
        started = time.perf_counter()
        text = clean_text(request.text)

        if len(text) < MIN_QUERY_LENGTH:
            logger.debug("Rejected query %r: shorter than %d characters", text, MIN_QUERY_LENGTH)
            return SearchResponse.empty(request.text)

        corrected = self.dictionary.correct_query(text)
        correction = corrected if corrected != " ".join(text.lower().split()) else None

        run = CascadeRun(
            request=request,
            text=text,
            effective_text=correction or text,
            correction=correction,
        )
        while run.state is not CascadeState.DONE:
            run.history.append(run.state)
            run.state = self._handlers[run.state](run)

        response = self._build_response(run)
        response.took_ms = round((time.perf_counter() - started) * 1000, 2)

        logger.info(
            "Search %r answered by %s tier: %d results in %.1fms (failed tiers: %s)",
            text,
            response.tier.value,
            response.total,
            response.took_ms,
            ", ".join(response.failed_tiers) or "none",
        )
        return response

    def _run_primary(self, run: CascadeRun) -> CascadeState:
        if self.backend is None:
            logger.debug("No primary backend configured")
            run.failed_tiers.append(Tier.PRIMARY)
            return CascadeState.PRIMARY_TRIED

        planned = self.planner.build_query(
            run.effective_text,
            category=run.request.category,
            size=run.request.size,
            from_=run.request.from_,
            spell_check=run.request.spell_check,
        )
        try:
            outcome = self.backend.search(planned.to_search_kwargs())
        except Exception as e:
            self._record_failure(run, Tier.PRIMARY, e)
            return CascadeState.PRIMARY_TRIED

        run.succeeded_tiers.append(Tier.PRIMARY)
        run.tier_results[Tier.PRIMARY] = [
            hit_to_result(hit, corrected=run.corrected) for hit in outcome.hits
        ]
        run.backend_suggest = dict(outcome.suggest or {})
        logger.debug(
            "Primary tier returned %d hits for %r (category %s, strategies %s)",
            run.tier_count(Tier.PRIMARY),
            planned.text,
            planned.category or "all",
            ", ".join(planned.strategies),
        )

        thin = run.tier_count(Tier.PRIMARY) < self.min_primary_results
        if thin and run.request.spell_check and not run.corrected:
            spelling, _ = parse_suggestions(run.backend_suggest, run.effective_text)
            if not spelling:
                run.backend_suggest.update(self._spell_check(run.effective_text))
        return CascadeState.PRIMARY_TRIED

    def _spell_check(self, text: str) -> dict[str, Any]:
        try:
            return self.backend.suggest(self.planner.build_spell_check(text)) or {}
        except Exception as e:
            logger.warning("Spell check failed for %r: %s", text, e)
            return {}

    def _after_primary(self, run: CascadeRun) -> CascadeState:
        primary_ok = Tier.PRIMARY in run.succeeded_tiers
        if primary_ok and run.tier_count(Tier.PRIMARY) >= self.min_primary_results:
            return self._pad_or_finish(run)

        if self.secondary is None:
            logger.debug("No secondary search configured")
            return CascadeState.SECONDARY_TRIED

        try:
            records = self.secondary.search(
                run.effective_text,
                category=run.request.category_filter,
                limit=run.request.size,
            )
        except Exception as e:
            self._record_failure(run, Tier.SECONDARY, e)
            return CascadeState.SECONDARY_TRIED

        run.succeeded_tiers.append(Tier.SECONDARY)
        run.tier_results[Tier.SECONDARY] = records_to_results(records, corrected=run.corrected)
        run.candidates.extend(record_to_article(record) for record in records)
        logger.debug("Secondary tier returned %d records", len(records))
        return CascadeState.SECONDARY_TRIED

    def _pad_or_finish(self, run: CascadeRun) -> CascadeState:
        if len(run.merged()) >= self.min_combined_results:
            return CascadeState.DONE

        candidates = self._local_candidates(run)
        if not candidates:
            logger.debug("No local candidates to pad results for %r", run.text)
            return CascadeState.DONE

        matches = self.matcher.search(
            candidates,
            run.text,
            threshold=self.fuzzy_threshold,
            max_results=run.request.size,
        )
        run.succeeded_tiers.append(Tier.LOCAL)
        run.tier_results[Tier.LOCAL] = self.matcher.to_results(matches)
        logger.debug("Local tier matched %d of %d candidates", len(matches), len(candidates))
        return CascadeState.LOCAL_AUGMENTED

    def _local_candidates(self, run: CascadeRun) -> list[ArticleDocument]:
        category = run.request.category_filter
        corpus = [
            article
            for article in self.local_corpus
            if category is None or article.category.lower() == category
        ]
        return run.candidates + corpus

    @staticmethod
    def _record_failure(run: CascadeRun, tier: Tier, error: Exception) -> None:
        run.failed_tiers.append(tier)
        code = getattr(error, "error_code", type(error).__name__)
        logger.warning(
            "%s tier failed for %r [%s]: %s",
            tier.value,
            run.effective_text,
            code,
            error,
            extra={"tier": tier.value, "query": run.effective_text, "error_code": code},
        )

    def _build_response(self, run: CascadeRun) -> SearchResponse:
        results = run.merged()
        any_tier_ok = bool(run.succeeded_tiers)

        tier = Tier.NONE
        for candidate in TIER_PRIORITY:
            if any(result.tier is candidate for result in results):
                tier = candidate
                break
        if tier is Tier.NONE and any_tier_ok:
            tier = run.succeeded_tiers[0]

        suggestions, corrections = self._collect_suggestions(run)
        return SearchResponse(
            query=run.request.text,
            results=results,
            corrected_query=run.correction if any_tier_ok else None,
            suggestions=suggestions,
            corrections=corrections,
            tier=tier,
            degraded=bool(run.failed_tiers),
            failed_tiers=[failed.value for failed in run.failed_tiers],
        )

    def _collect_suggestions(
        self, run: CascadeRun
    ) -> tuple[SuggestionSet, list[CorrectionSuggestion]]:
        spelling, autocomplete = parse_suggestions(run.backend_suggest, run.effective_text)
        corrections = [
            CorrectionSuggestion(text=text, provenance=SuggestionProvenance.BACKEND)
            for text in spelling
        ]

        if not spelling and run.correction:
            spelling = [run.correction]
            corrections = [
                CorrectionSuggestion(text=run.correction, provenance=SuggestionProvenance.CLIENT)
            ]

        if not autocomplete:
            autocomplete = [
                term for term in self.dictionary.suggest(run.text) if term not in spelling
            ]

        return SuggestionSet(spelling=spelling, autocomplete=autocomplete), corrections

    def autocomplete(self, prefix: str, size: int = 5) -> list[str]:
        """Prefix completions from the backend, or dictionary suggestions."""
        prefix = clean_text(prefix)
        if not prefix:
            return []

        if self.backend is not None:
            try:
                raw = self.backend.suggest(self.planner.build_autocomplete(prefix, size))
                _, completions = parse_suggestions(raw, prefix)
                if completions:
                    return completions[:size]
            except Exception as e:
                logger.warning("Autocomplete backend call failed for %r: %s", prefix, e)

        return self.dictionary.suggest(prefix, limit=size)

    # ------------------------------------------------------------------
    # Ingestion path
    # ------------------------------------------------------------------

    def ensure_index(self) -> bool:
        """Create the backend index if needed. Returns True if it was created."""
        if self.backend is None:
            raise SearchBackendError("No search backend configured")
        return self.backend.ensure_index()

    def index_article(self, article: dict[str, Any] | ArticleDocument) -> bool:
        """Map and upsert one article.

        Raises:
            MalformedDocumentError: If the article has no id.

        Returns:
            True when the backend accepted the document.
        """
        document = to_index_document(article)
        if self.backend is None:
            logger.warning("Dropping article %s: no search backend configured", document.id)
            return False

        try:
            return self.backend.upsert(document)
        except SearchBackendError as e:
            logger.error("Failed to index article %s [%s]: %s", document.id, e.error_code, e)
            return False

    def sync_articles(self, articles: Iterable[dict[str, Any] | ArticleDocument]) -> int:
        """Ensure the index exists and upsert each article in turn.

        Returns:
            Number of articles the backend accepted.
        """
        self.ensure_index()
        indexed = 0
        for article in articles:
            if self.index_article(article):
                indexed += 1
        logger.info("Synced %d articles to the search index", indexed)
        return indexed
