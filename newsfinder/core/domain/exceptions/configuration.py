"""Configuration exceptions."""

from .base import NewsSearchError


class ConfigurationError(NewsSearchError):
    """Invalid or missing configuration."""

    error_code = "NS_CFG_001"


class MissingCredentialsError(ConfigurationError):
    """Credentials for an external search API are not configured."""

    error_code = "NS_CFG_002"
