"""Secondary Search Port Interface."""

from abc import ABC, abstractmethod

from ..domain import KeywordRecord


class SecondarySearchPort(ABC):
    """Plain keyword search used when the primary backend is insufficient."""

    name: str = "secondary"

    @abstractmethod
    def search(
        self, query: str, category: str | None = None, limit: int = 20
    ) -> list[KeywordRecord]:
        """Return flat keyword matches for a query."""
        ...
