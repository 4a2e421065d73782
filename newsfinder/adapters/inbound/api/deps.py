"""FastAPI dependency accessors backed by the composition root."""

from ....composition.container import get_backend, get_search_service

__all__ = ["get_backend", "get_search_service"]
