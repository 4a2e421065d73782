"""Exception hierarchy for the news search service.

All exceptions are re-exported here:

    from newsfinder.core.domain.exceptions import NewsSearchError, BackendConnectionError
"""

from .backend import (
    BackendConnectionError,
    BackendQueryError,
    BackendTimeoutError,
    SearchBackendError,
    SecondarySearchError,
)
from .base import ExceptionContext, NewsSearchError
from .configuration import ConfigurationError, MissingCredentialsError
from .ingestion import DataIngestionError, MalformedDocumentError
from .validation import QueryTooShortError, ValidationError

__all__ = [
    # Base
    "ExceptionContext",
    "NewsSearchError",
    # Configuration
    "ConfigurationError",
    "MissingCredentialsError",
    # Backend
    "SearchBackendError",
    "BackendConnectionError",
    "BackendQueryError",
    "BackendTimeoutError",
    "SecondarySearchError",
    # Ingestion
    "DataIngestionError",
    "MalformedDocumentError",
    # Validation
    "ValidationError",
    "QueryTooShortError",
]
