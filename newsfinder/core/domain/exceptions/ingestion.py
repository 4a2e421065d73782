"""Ingestion exceptions."""

from .base import NewsSearchError


class DataIngestionError(NewsSearchError):
    """Error while preparing or upserting an article."""

    error_code = "NS_ING_001"
    http_status = 400


class MalformedDocumentError(DataIngestionError):
    """Article record cannot be indexed (missing identifier)."""

    error_code = "NS_ING_002"
