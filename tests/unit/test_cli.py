"""Unit tests for the Typer CLI."""

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from newsfinder.adapters.inbound.cli.commands import app
from newsfinder.core.domain import SearchResponse, SearchResult, SuggestionSet, Tier
from newsfinder.core.domain.exceptions import BackendConnectionError, MalformedDocumentError

pytestmark = pytest.mark.unit

runner = CliRunner()


@pytest.fixture
def service():
    mock = MagicMock()
    mock.search.return_value = SearchResponse(
        query="nvidai",
        results=[
            SearchResult(
                article_id="n1",
                title="Nvidia unveils faster AI chips",
                source="ChipWire",
                category="technology",
                score=0.8,
                tier=Tier.SECONDARY,
            )
        ],
        corrected_query="nvidia",
        suggestions=SuggestionSet(spelling=["nvidia"]),
        tier=Tier.SECONDARY,
        degraded=True,
        failed_tiers=["primary"],
    )
    return mock


@pytest.fixture
def patched(service):
    with patch("newsfinder.adapters.inbound.cli.commands.get_service", return_value=service):
        yield service


def test_search_renders_results(patched):
    result = runner.invoke(app, ["search", "nvidai", "--category", "technology", "--size", "5"])

    assert result.exit_code == 0
    assert "Nvidia" in result.output
    assert "ChipWire" in result.output
    assert "nvidia" in result.output
    assert "Degraded" in result.output

    request = patched.search.call_args[0][0]
    assert request.text == "nvidai"
    assert request.category == "technology"
    assert request.size == 5


def test_search_without_spell_check(patched):
    runner.invoke(app, ["search", "openai", "--no-spell-check"])
    assert patched.search.call_args[0][0].spell_check is False


def test_create_index(patched):
    patched.ensure_index.return_value = False

    result = runner.invoke(app, ["create-index"])

    assert result.exit_code == 0
    assert "already exists" in result.output


def test_create_index_backend_down(patched):
    patched.ensure_index.side_effect = BackendConnectionError("connection refused")

    result = runner.invoke(app, ["create-index"])

    assert result.exit_code == 1
    assert "NS_BCK_002" in result.output


def test_ingest_counts_malformed(patched, tmp_path):
    path = tmp_path / "articles.json"
    path.write_text(json.dumps([{"id": "a"}, {"title": "no id"}, {"id": "c"}]), encoding="utf-8")
    patched.index_article.side_effect = [True, MalformedDocumentError("missing id"), True]

    result = runner.invoke(app, ["ingest", str(path)])

    assert result.exit_code == 0
    assert "Indexed 2" in result.output
    assert "1 malformed" in result.output
    patched.ensure_index.assert_called_once()


def test_ingest_fails_on_backend_rejections(patched, tmp_path):
    path = tmp_path / "articles.json"
    path.write_text(json.dumps([{"id": "a"}]), encoding="utf-8")
    patched.index_article.return_value = False

    result = runner.invoke(app, ["ingest", str(path)])

    assert result.exit_code == 1
