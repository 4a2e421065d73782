"""HTTP client for a plain keyword news search endpoint.

The endpoint answers ``GET <url>?q=<text>&category=<category>`` with either
a JSON list of records or an envelope ``{"success": ..., "data": [...]}``.
Each record carries at least a title plus optional source, time, link,
description and category.
"""

import logging
from collections.abc import Mapping
from typing import Any

import requests

from ....core.domain import KeywordRecord
from ....core.domain.exceptions import SecondarySearchError
from ....core.domain.utils import clean_text
from ....core.ports.secondary_search_port import SecondarySearchPort

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 5.0
USER_AGENT = "NewsFinder/1.0"

_RECORD_FIELDS = ("id", "title", "source", "time", "link", "description", "category")


def parse_keyword_record(item: Mapping[str, Any]) -> KeywordRecord | None:
    """Build a KeywordRecord from one raw item, or None when it has no title."""
    title = clean_text(str(item.get("title") or ""))
    if not title:
        return None

    values = {name: clean_text(str(item.get(name) or "")) for name in _RECORD_FIELDS}
    values["title"] = title
    extra = {key: value for key, value in item.items() if key not in _RECORD_FIELDS}
    return KeywordRecord(**values, extra=extra)


class KeywordSearchAdapter(SecondarySearchPort):
    """Secondary search over a generic JSON keyword endpoint."""

    name = "keyword"

    def __init__(self, url: str, timeout: float = REQUEST_TIMEOUT) -> None:
        self.url = url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})

    def __enter__(self) -> "KeywordSearchAdapter":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def _get(self, params: dict[str, Any]) -> Any:
        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.Timeout as e:
            raise SecondarySearchError(
                f"Keyword search timed out after {self.timeout}s",
                cause=e,
                context={"url": self.url},
            ) from e
        except requests.RequestException as e:
            raise SecondarySearchError(
                f"Keyword search request failed: {e}",
                cause=e,
                context={"url": self.url},
            ) from e
        except ValueError as e:
            raise SecondarySearchError(
                "Keyword search returned invalid JSON",
                cause=e,
                context={"url": self.url},
            ) from e

    def search(
        self, query: str, category: str | None = None, limit: int = 20
    ) -> list[KeywordRecord]:
        """Query the endpoint and return at most ``limit`` records.

        Raises:
            SecondarySearchError: On transport failure, timeout or a payload
                that is not a list of records.
        """
        params: dict[str, Any] = {"q": query, "category": category or "all"}
        payload = self._get(params)

        items = payload.get("data") if isinstance(payload, dict) else payload
        if items is None:
            items = []
        if not isinstance(items, list):
            raise SecondarySearchError(
                "Keyword search payload is not a list",
                context={"url": self.url, "type": type(items).__name__},
            )

        records = []
        for item in items:
            if not isinstance(item, Mapping):
                continue
            record = parse_keyword_record(item)
            if record is not None:
                records.append(record)

        logger.debug("Keyword search for %r returned %d records", query, len(records))
        return records[:limit]
