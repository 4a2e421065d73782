"""Unit tests for settings and the composition root."""

import json
from unittest.mock import MagicMock, patch

import pytest

from newsfinder.adapters.outbound.news_sources import KeywordSearchAdapter, NaverNewsAdapter
from newsfinder.composition import container
from newsfinder.config.settings import Settings
from newsfinder.core.domain.exceptions import ConfigurationError, DataIngestionError

pytestmark = pytest.mark.unit


class TestSettings:
    def test_defaults(self):
        config = Settings(_env_file=None)
        assert config.news_index == "ai_news"
        assert config.min_primary_results == 3
        assert config.min_combined_results == 5
        assert config.fuzzy_threshold == 0.3
        assert config.naver_enabled is False

    def test_secrets_are_sanitized(self):
        config = Settings(
            _env_file=None,
            naver_client_id="\ufeffclient-id ",
            naver_client_secret=" secret\n",
        )
        assert config.naver_client_id == "client-id"
        assert config.naver_client_secret == "secret"
        assert config.naver_enabled is True

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("NEWS_INDEX", "news_v2")
        monkeypatch.setenv("MIN_PRIMARY_RESULTS", "1")
        config = Settings(_env_file=None)
        assert config.news_index == "news_v2"
        assert config.min_primary_results == 1


class TestLocalCorpus:
    def test_none_path(self):
        assert container.load_local_corpus(None) == []

    def test_loads_list_and_skips_records_without_id(self, tmp_path):
        path = tmp_path / "corpus.json"
        path.write_text(
            json.dumps([{"id": "a", "title": "Nvidia"}, {"title": "no id"}]), encoding="utf-8"
        )

        corpus = container.load_local_corpus(path)

        assert [article.id for article in corpus] == ["a"]

    def test_articles_envelope(self, tmp_path):
        path = tmp_path / "corpus.json"
        path.write_text(json.dumps({"articles": [{"id": "b"}]}), encoding="utf-8")
        assert [article.id for article in container.load_local_corpus(path)] == ["b"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            container.load_local_corpus(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DataIngestionError):
            container.read_articles(path)


class TestSecondarySelection:
    @pytest.fixture(autouse=True)
    def clear_cache(self):
        container.get_secondary.cache_clear()
        yield
        container.get_secondary.cache_clear()

    @staticmethod
    def _settings(**overrides):
        fake = MagicMock()
        fake.naver_enabled = False
        fake.secondary_search_url = ""
        fake.secondary_timeout_seconds = 3.0
        for key, value in overrides.items():
            setattr(fake, key, value)
        return fake

    def test_naver_preferred(self):
        fake = self._settings(
            naver_enabled=True,
            naver_client_id="id",
            naver_client_secret="secret",
            secondary_search_url="https://k",
        )
        with patch.object(container, "settings", fake):
            assert isinstance(container.get_secondary(), NaverNewsAdapter)

    def test_keyword_endpoint(self):
        with patch.object(container, "settings", self._settings(secondary_search_url="https://k")):
            secondary = container.get_secondary()
        assert isinstance(secondary, KeywordSearchAdapter)
        assert secondary.timeout == 3.0

    def test_none_configured(self):
        with patch.object(container, "settings", self._settings()):
            assert container.get_secondary() is None
