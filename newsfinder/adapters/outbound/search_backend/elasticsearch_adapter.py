"""Elasticsearch backend for the primary search tier.

Wraps the official client so that every transport or API failure surfaces
as a ``SearchBackendError`` subclass the orchestrator can fall back on.
"""

import logging
from typing import Any

from elasticsearch import (
    ApiError,
    ConnectionTimeout,
    Elasticsearch,
    TransportError,
)
from elasticsearch import (
    ConnectionError as ESConnectionError,
)

from ....core.domain import BackendSearchResult, IndexDocument
from ....core.domain.exceptions import (
    BackendConnectionError,
    BackendQueryError,
    BackendTimeoutError,
    SearchBackendError,
)
from ....core.ports.search_backend_port import SearchBackendPort
from ....core.services.document_mapper import INDEX_MAPPINGS, INDEX_SETTINGS

logger = logging.getLogger(__name__)

DEFAULT_INDEX = "ai_news"
DEFAULT_TIMEOUT = 5.0


class ElasticsearchAdapter(SearchBackendPort):
    """Primary search backend over a single Elasticsearch index."""

    def __init__(
        self,
        url: str,
        index_name: str = DEFAULT_INDEX,
        username: str = "",
        password: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        client: Elasticsearch | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            url: Elasticsearch node URL.
            index_name: Index holding news articles.
            username: Optional basic-auth user.
            password: Optional basic-auth password.
            timeout: Per-request timeout in seconds.
            client: Pre-built client (tests, shared connection pools).
        """
        self.url = url
        self.index_name = index_name
        self.username = username
        self.password = password
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> Elasticsearch:
        """Get or create the Elasticsearch client."""
        if self._client is None:
            try:
                self._client = Elasticsearch(
                    self.url,
                    basic_auth=(self.username, self.password) if self.username else None,
                    request_timeout=self.timeout,
                )
                logger.info("Elasticsearch client created for %s", self.url)
            except Exception as e:
                raise BackendConnectionError(
                    f"Failed to create Elasticsearch client for {self.url}",
                    cause=e,
                    context={"url": self.url},
                ) from e
        return self._client

    def _wrap_error(self, operation: str, error: Exception) -> SearchBackendError:
        context = {"url": self.url, "index": self.index_name, "operation": operation}
        if isinstance(error, ConnectionTimeout):
            return BackendTimeoutError(
                f"Elasticsearch {operation} timed out after {self.timeout}s",
                cause=error,
                context=context,
            )
        if isinstance(error, ApiError):
            context["status"] = getattr(error, "status_code", None)
            return BackendQueryError(
                f"Elasticsearch rejected {operation}: {error}",
                cause=error,
                context=context,
            )
        if isinstance(error, ESConnectionError | TransportError):
            return BackendConnectionError(
                f"Elasticsearch unreachable during {operation}",
                cause=error,
                context=context,
            )
        return SearchBackendError(
            f"Unexpected Elasticsearch failure during {operation}",
            cause=error,
            context=context,
        )

    @staticmethod
    def _body(response: Any) -> dict[str, Any]:
        body = getattr(response, "body", response)
        return body if isinstance(body, dict) else {}

    def ensure_index(self) -> bool:
        """Create the news index with autocomplete analyzers if it is missing."""
        client = self._get_client()
        try:
            if client.indices.exists(index=self.index_name):
                return False
            client.indices.create(
                index=self.index_name,
                settings=INDEX_SETTINGS,
                mappings=INDEX_MAPPINGS,
            )
        except (ApiError, TransportError) as e:
            raise self._wrap_error("create_index", e) from e

        logger.info("Created index %s", self.index_name)
        return True

    def upsert(self, document: IndexDocument) -> bool:
        """Index a document under its id, replacing any previous version."""
        client = self._get_client()
        try:
            response = client.index(
                index=self.index_name,
                id=document.id,
                document=document.to_dict(),
            )
        except (ApiError, TransportError) as e:
            raise self._wrap_error("upsert", e) from e

        result = self._body(response).get("result", "")
        logger.debug("Upserted %s into %s (%s)", document.id, self.index_name, result)
        return result in ("created", "updated", "noop")

    def search(self, search_kwargs: dict[str, Any]) -> BackendSearchResult:
        """Run a planned query and return hits plus raw suggestions."""
        client = self._get_client()
        try:
            response = client.search(index=self.index_name, **search_kwargs)
        except (ApiError, TransportError) as e:
            raise self._wrap_error("search", e) from e

        body = self._body(response)
        hits_section = body.get("hits") or {}
        total = hits_section.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)

        return BackendSearchResult(
            hits=list(hits_section.get("hits") or []),
            total=int(total or 0),
            took_ms=int(body.get("took", 0) or 0),
            suggest=body.get("suggest") or {},
        )

    def suggest(self, suggest_body: dict[str, Any]) -> dict[str, Any]:
        """Run suggesters without fetching hits."""
        client = self._get_client()
        try:
            response = client.search(index=self.index_name, suggest=suggest_body, size=0)
        except (ApiError, TransportError) as e:
            raise self._wrap_error("suggest", e) from e
        return self._body(response).get("suggest") or {}

    def count(self) -> int:
        """Number of documents in the index."""
        client = self._get_client()
        try:
            response = client.count(index=self.index_name)
        except (ApiError, TransportError) as e:
            raise self._wrap_error("count", e) from e
        return int(self._body(response).get("count", 0))

    def is_available(self) -> bool:
        """Check whether the cluster answers a ping."""
        try:
            return bool(self._get_client().ping())
        except Exception as e:
            logger.warning("Elasticsearch ping failed: %s", e)
            return False
