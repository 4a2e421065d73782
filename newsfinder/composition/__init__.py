"""Composition root."""

from .container import get_backend, get_search_service, get_secondary, load_local_corpus

__all__ = ["get_backend", "get_search_service", "get_secondary", "load_local_corpus"]
