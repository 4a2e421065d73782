"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field

from ....core.domain import SearchResponse, SearchResult


class ArticleRequest(BaseModel):
    """A news article submitted for indexing."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field("", description="Unique article identifier")
    title: str = Field("", description="Headline")
    description: str = Field("", description="Short summary")
    content: str = Field("", description="Full body text")
    category: str = Field("", description="Category label, e.g. 'ai' or 'technology'")
    source: str = Field("", description="Publisher name")
    source_url: str = Field("", alias="sourceUrl", description="Canonical article URL")
    published_at: str = Field("", alias="publishedAt", description="ISO-8601 timestamp")
    tags: list[str] = Field(default_factory=list, description="Free-form labels")

    def to_record(self) -> dict:
        return self.model_dump()


class SyncRequest(BaseModel):
    """Batch of articles to upsert."""

    articles: list[ArticleRequest] = Field(default_factory=list)


class IndexArticleResponse(BaseModel):
    id: str
    indexed: bool


class SyncResponse(BaseModel):
    received: int = Field(..., description="Articles in the request")
    indexed: int = Field(..., description="Articles accepted by the search backend")


class CreateIndexResponse(BaseModel):
    index: str
    created: bool = Field(..., description="False when the index already existed")


class SearchResultModel(BaseModel):
    """One ranked search hit."""

    id: str | None = None
    title: str
    description: str = ""
    source: str = ""
    source_url: str = ""
    category: str = ""
    published_at: str = ""
    score: float = Field(..., description="Score normalized across tiers")
    highlighted_title: str | None = None
    highlighted_description: str | None = None
    corrected: bool = Field(False, description="Matched through a corrected query")
    tier: str = Field(..., description="primary, secondary or local")

    @classmethod
    def from_domain(cls, result: SearchResult) -> "SearchResultModel":
        return cls(
            id=result.article_id,
            title=result.title,
            description=result.description,
            source=result.source,
            source_url=result.source_url,
            category=result.category,
            published_at=result.published_at,
            score=round(result.score, 4),
            highlighted_title=result.highlighted_title,
            highlighted_description=result.highlighted_description,
            corrected=result.corrected,
            tier=result.tier.value,
        )


class SuggestionsModel(BaseModel):
    spelling: list[str] = Field(default_factory=list)
    autocomplete: list[str] = Field(default_factory=list)


class CorrectionModel(BaseModel):
    text: str
    provenance: str = Field(..., description="client (dictionary) or backend (suggester)")


class SearchResponseModel(BaseModel):
    """Response model for a search."""

    query: str
    results: list[SearchResultModel] = Field(default_factory=list)
    corrected_query: str | None = None
    suggestions: SuggestionsModel = Field(default_factory=SuggestionsModel)
    corrections: list[CorrectionModel] = Field(default_factory=list)
    total: int = 0
    took_ms: float = 0.0
    tier: str = Field("none", description="Highest-priority tier present in the results")
    degraded: bool = Field(False, description="True when at least one tier failed")
    failed_tiers: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, response: SearchResponse) -> "SearchResponseModel":
        return cls(
            query=response.query,
            results=[SearchResultModel.from_domain(result) for result in response.results],
            corrected_query=response.corrected_query,
            suggestions=SuggestionsModel(
                spelling=response.suggestions.spelling,
                autocomplete=response.suggestions.autocomplete,
            ),
            corrections=[
                CorrectionModel(text=c.text, provenance=c.provenance.value)
                for c in response.corrections
            ],
            total=response.total,
            took_ms=response.took_ms,
            tier=response.tier.value,
            degraded=response.degraded,
            failed_tiers=response.failed_tiers,
        )


class AutocompleteResponse(BaseModel):
    query: str
    suggestions: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    search_backend: str = Field(..., description="Search backend status")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., NS_BCK_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str = Field(..., description="Method/function name")
    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="Line number")
    timestamp: str | None = Field(None, description="When the error occurred")


class ErrorResponse(BaseModel):
    """Response model for structured errors.

    Example:
        {
            "error": {"type": "MalformedDocumentError", "code": "NS_ING_002", "message": "..."},
            "location": {"class": "<module>", "method": "article_from_record", ...},
            "context": {"title": "..."}
        }
    """

    error: ErrorDetail
    location: ErrorLocation | None = None
    context: dict | None = None
    cause: dict | None = None
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
