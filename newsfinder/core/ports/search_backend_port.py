"""Search Backend Port Interface."""

from abc import ABC, abstractmethod
from typing import Any

from ..domain import BackendSearchResult, IndexDocument


class SearchBackendPort(ABC):
    """Abstract interface for the primary inverted-index backend."""

    @abstractmethod
    def ensure_index(self) -> bool:
        """Create the index if it does not exist. Returns True if created."""
        ...

    @abstractmethod
    def upsert(self, document: IndexDocument) -> bool:
        """Insert or replace a document by id."""
        ...

    @abstractmethod
    def search(self, search_kwargs: dict[str, Any]) -> BackendSearchResult:
        """Run a structured query built by the query planner."""
        ...

    @abstractmethod
    def suggest(self, suggest_body: dict[str, Any]) -> dict[str, Any]:
        """Run suggesters only and return the raw suggest section."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of documents in the index."""
        ...
