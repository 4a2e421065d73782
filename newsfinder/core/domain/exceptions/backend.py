"""Search backend exceptions."""

from .base import NewsSearchError


class SearchBackendError(NewsSearchError):
    """Base error for primary search backend operations."""

    error_code = "NS_BCK_001"
    http_status = 503


class BackendConnectionError(SearchBackendError):
    """Failed to reach the search backend.

    Common causes:
    - Elasticsearch is not running or the URL is wrong
    - Connection refused or DNS failure
    - Invalid credentials
    """

    error_code = "NS_BCK_002"


class BackendQueryError(SearchBackendError):
    """The search backend rejected or failed a request.

    Common causes:
    - Index does not exist
    - Malformed query DSL
    - Mapping conflict on upsert
    """

    error_code = "NS_BCK_003"


class BackendTimeoutError(SearchBackendError):
    """The search backend did not answer within the configured timeout."""

    error_code = "NS_BCK_004"


class SecondarySearchError(NewsSearchError):
    """The secondary keyword search failed, timed out or returned garbage."""

    error_code = "NS_SEC_001"
    http_status = 503
