"""Primary search backend adapters."""

from .elasticsearch_adapter import ElasticsearchAdapter

__all__ = ["ElasticsearchAdapter"]
