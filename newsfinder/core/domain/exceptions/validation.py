"""Validation exceptions."""

from .base import NewsSearchError


class ValidationError(NewsSearchError):
    """Input validation failed."""

    error_code = "NS_VAL_001"
    http_status = 400


class QueryTooShortError(ValidationError):
    """Query is shorter than the minimum searchable length."""

    error_code = "NS_VAL_002"
