"""Ingestion endpoints: index creation and article upserts."""

import logging

from fastapi import APIRouter

from .....config import settings
from ..deps import get_search_service
from ..models import (
    ArticleRequest,
    CreateIndexResponse,
    ErrorResponse,
    IndexArticleResponse,
    SyncRequest,
    SyncResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["articles"])

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Malformed article"},
    503: {"model": ErrorResponse, "description": "Search backend unavailable"},
}


@router.post("/index", response_model=CreateIndexResponse, responses=_ERRORS)
def create_index() -> CreateIndexResponse:
    """Create the news index if it does not exist yet."""
    created = get_search_service().ensure_index()
    return CreateIndexResponse(index=settings.news_index, created=created)


@router.post("/articles", response_model=IndexArticleResponse, responses=_ERRORS)
def index_article(article: ArticleRequest) -> IndexArticleResponse:
    """Upsert a single article.

    A missing id is rejected with 400; a backend failure is reported as
    ``indexed: false``.
    """
    indexed = get_search_service().index_article(article.to_record())
    return IndexArticleResponse(id=article.id, indexed=indexed)


@router.post("/articles/sync", response_model=SyncResponse, responses=_ERRORS)
def sync_articles(request: SyncRequest) -> SyncResponse:
    """Ensure the index exists and upsert a batch of articles."""
    indexed = get_search_service().sync_articles(a.to_record() for a in request.articles)
    logger.info("Sync request: %d of %d articles indexed", indexed, len(request.articles))
    return SyncResponse(received=len(request.articles), indexed=indexed)
