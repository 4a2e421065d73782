"""Configuration management for the news search service."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets injected through the environment may carry BOM characters
    that break HTTP basic auth and API key headers.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Elasticsearch (primary tier)
    elasticsearch_url: str = "http://localhost:9200"
    elasticsearch_username: str = ""
    elasticsearch_password: str = ""
    news_index: str = "ai_news"
    backend_timeout_seconds: float = 5.0

    # Secondary keyword search
    secondary_search_url: str = ""
    naver_client_id: str = ""
    naver_client_secret: str = ""
    secondary_timeout_seconds: float = 5.0

    @field_validator(
        "elasticsearch_password",
        "naver_client_id",
        "naver_client_secret",
        "secondary_search_url",
        mode="after",
    )
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Local fallback corpus (JSON list of articles)
    local_corpus_path: Path | None = None

    # Cascade tuning
    default_result_size: int = 20
    min_primary_results: int = 3
    min_combined_results: int = 5
    fuzzy_threshold: float = 0.3
    correction_threshold: float = 0.6

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def naver_enabled(self) -> bool:
        """Whether Naver open API credentials are configured."""
        return bool(self.naver_client_id and self.naver_client_secret)


# Global settings instance
settings = Settings()
