"""Composition root wiring adapters to the search service."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from ..adapters.outbound.news_sources import KeywordSearchAdapter, NaverNewsAdapter
from ..adapters.outbound.search_backend import ElasticsearchAdapter
from ..config import settings
from ..core.domain import ArticleDocument
from ..core.domain.exceptions import ConfigurationError, DataIngestionError, MalformedDocumentError
from ..core.ports import SecondarySearchPort
from ..core.services import QueryPlanner, SearchService, TypoDictionary, article_from_record

logger = logging.getLogger(__name__)


def read_articles(path: Path) -> list[Any]:
    """Read raw article records from a JSON file.

    Accepts a top-level list or an object with an ``articles`` list.

    Raises:
        DataIngestionError: If the file cannot be read or parsed.
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8-sig"))
    except (OSError, ValueError) as e:
        raise DataIngestionError(
            f"Cannot read articles from {path}", cause=e, context={"path": str(path)}
        ) from e

    if isinstance(payload, dict):
        payload = payload.get("articles", [])
    if not isinstance(payload, list):
        raise DataIngestionError(
            "Article file must hold a JSON list", context={"path": str(path)}
        )
    return payload


def load_local_corpus(path: Path | None) -> list[ArticleDocument]:
    """Load the local fallback corpus, skipping records without an id."""
    if path is None:
        return []
    if not Path(path).exists():
        raise ConfigurationError(
            f"Local corpus file not found: {path}", context={"path": str(path)}
        )

    corpus = []
    for record in read_articles(path):
        try:
            corpus.append(article_from_record(record))
        except MalformedDocumentError as e:
            logger.warning("Skipping local corpus record [%s]: %s", e.error_code, e)
    logger.info("Loaded %d local corpus articles from %s", len(corpus), path)
    return corpus


@lru_cache
def get_backend() -> ElasticsearchAdapter:
    logger.info("Initializing ElasticsearchAdapter for index %s...", settings.news_index)
    return ElasticsearchAdapter(
        url=settings.elasticsearch_url,
        index_name=settings.news_index,
        username=settings.elasticsearch_username,
        password=settings.elasticsearch_password,
        timeout=settings.backend_timeout_seconds,
    )


@lru_cache
def get_secondary() -> SecondarySearchPort | None:
    if settings.naver_enabled:
        logger.info("Initializing NaverNewsAdapter...")
        return NaverNewsAdapter(
            settings.naver_client_id,
            settings.naver_client_secret,
            timeout=settings.secondary_timeout_seconds,
        )
    if settings.secondary_search_url:
        logger.info("Initializing KeywordSearchAdapter for %s...", settings.secondary_search_url)
        return KeywordSearchAdapter(
            settings.secondary_search_url, timeout=settings.secondary_timeout_seconds
        )
    logger.info("No secondary search configured")
    return None


@lru_cache
def get_dictionary() -> TypoDictionary:
    return TypoDictionary.default(threshold=settings.correction_threshold)


@lru_cache
def get_search_service() -> SearchService:
    logger.info("Initializing SearchService...")
    return SearchService(
        backend=get_backend(),
        dictionary=get_dictionary(),
        planner=QueryPlanner(),
        secondary=get_secondary(),
        local_corpus=load_local_corpus(settings.local_corpus_path),
        min_primary_results=settings.min_primary_results,
        min_combined_results=settings.min_combined_results,
        fuzzy_threshold=settings.fuzzy_threshold,
    )
