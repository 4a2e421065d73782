"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import pytest

from newsfinder.core.domain import ArticleDocument, BackendSearchResult
from newsfinder.core.ports import SearchBackendPort, SecondarySearchPort


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP surface)")


@pytest.fixture
def mock_backend():
    """Search backend returning no hits."""
    backend = MagicMock(spec=SearchBackendPort)
    backend.search.return_value = BackendSearchResult()
    backend.suggest.return_value = {}
    backend.ensure_index.return_value = True
    backend.upsert.return_value = True
    return backend


@pytest.fixture
def mock_secondary():
    """Secondary keyword search returning no records."""
    secondary = MagicMock(spec=SecondarySearchPort)
    secondary.search.return_value = []
    return secondary


@pytest.fixture
def sample_articles():
    """A small mixed-category corpus."""
    return [
        ArticleDocument(
            id="openai-1",
            title="OpenAI releases new model",
            description="OpenAI announced a new language model for developers.",
            category="ai",
            source="TechDaily",
            source_url="https://techdaily.example/openai-model",
            published_at="2024-05-01T09:00:00Z",
            tags=("openai", "llm"),
        ),
        ArticleDocument(
            id="nvidia-1",
            title="Nvidia unveils faster AI chips",
            description="The new accelerators target large model training.",
            category="technology",
            source="ChipWire",
            source_url="https://chipwire.example/nvidia",
            published_at="2024-04-20T12:00:00Z",
            tags=("nvidia", "hardware"),
        ),
        ArticleDocument(
            id="bakery-1",
            title="Local bakery wins regional bread competition for the third time",
            description=(
                "The family-run shop on Main Street took first prize again with a "
                "sourdough recipe passed down through generations."
            ),
            category="society",
            source="Town Gazette",
            source_url="https://gazette.example/bakery",
            published_at="2024-03-02T08:00:00Z",
        ),
    ]
