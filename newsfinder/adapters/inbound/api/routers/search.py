"""Search and autocomplete endpoints."""

import logging

from fastapi import APIRouter, Query

from .....config import settings
from .....core.domain import QueryRequest
from .....core.domain.exceptions import QueryTooShortError, ValidationError
from ..deps import get_search_service
from ..models import AutocompleteResponse, ErrorResponse, SearchResponseModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["search"])

MAX_RESULT_SIZE = 100


def _validate_size(size: int) -> int:
    if size < 1 or size > MAX_RESULT_SIZE:
        raise ValidationError(
            f"size must be between 1 and {MAX_RESULT_SIZE}",
            context={"size": size},
        )
    return size


@router.get(
    "/search",
    response_model=SearchResponseModel,
    responses={400: {"model": ErrorResponse, "description": "Invalid parameters"}},
)
def search_news(
    q: str = Query("", description="Search text; shorter than 2 characters returns nothing"),
    category: str = Query("all", description="Category filter, 'all' for none"),
    size: int | None = Query(None, description="Maximum number of results"),
    spell_check: bool = Query(True, description="Request backend spelling suggestions"),
) -> SearchResponseModel:
    """Typo-tolerant news search with tiered fallback."""
    request = QueryRequest(
        text=q,
        category=category,
        size=_validate_size(size if size is not None else settings.default_result_size),
        spell_check=spell_check,
    )
    response = get_search_service().search(request)
    return SearchResponseModel.from_domain(response)


@router.get(
    "/suggestions",
    response_model=AutocompleteResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid parameters"}},
)
def suggest(
    q: str = Query("", description="Prefix to complete"),
    size: int = Query(5, description="Maximum number of completions"),
) -> AutocompleteResponse:
    """Autocomplete completions for a prefix."""
    if not q.strip():
        raise QueryTooShortError("q must not be empty", context={"q": q})
    completions = get_search_service().autocomplete(q, size=_validate_size(size))
    return AutocompleteResponse(query=q, suggestions=completions)
