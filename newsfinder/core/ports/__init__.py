"""Port interfaces implemented by outbound adapters."""

from .search_backend_port import SearchBackendPort
from .secondary_search_port import SecondarySearchPort

__all__ = ["SearchBackendPort", "SecondarySearchPort"]
