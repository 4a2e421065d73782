"""Naver open API news search client."""

import logging
from typing import Any
from urllib.parse import urlparse

import requests

from ....core.domain import KeywordRecord
from ....core.domain.exceptions import MissingCredentialsError, SecondarySearchError
from ....core.domain.utils import clean_text, strip_html
from ....core.ports.secondary_search_port import SecondarySearchPort

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 5.0
MAX_DISPLAY = 100


def _source_from_link(link: str) -> str:
    host = urlparse(link).hostname or ""
    return host[4:] if host.startswith("www.") else host


class NaverNewsAdapter(SecondarySearchPort):
    """Secondary search backed by the Naver news search API."""

    name = "naver"
    BASE_URL = "https://openapi.naver.com/v1/search/news.json"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout: float = REQUEST_TIMEOUT,
        sort: str = "date",
    ) -> None:
        """Initialize the client.

        Args:
            client_id: Naver application client id.
            client_secret: Naver application client secret.
            timeout: Request timeout in seconds.
            sort: "date" (newest first) or "sim" (relevance).

        Raises:
            MissingCredentialsError: If either credential is empty.
        """
        if not client_id or not client_secret:
            raise MissingCredentialsError(
                "Naver API credentials not configured",
                context={"missing": "NAVER_CLIENT_ID/NAVER_CLIENT_SECRET"},
            )
        self.timeout = timeout
        self.sort = sort
        self.session = requests.Session()
        self.session.headers.update(
            {
                "X-Naver-Client-Id": client_id,
                "X-Naver-Client-Secret": client_secret,
                "User-Agent": "NewsFinder/1.0",
            }
        )

    def __enter__(self) -> "NaverNewsAdapter":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def search(
        self, query: str, category: str | None = None, limit: int = 20
    ) -> list[KeywordRecord]:
        """Search Naver news.

        The API has no category filter; ``category`` is copied onto the
        returned records so downstream filtering keeps working.
        """
        params = {
            "query": query,
            "display": max(1, min(limit, MAX_DISPLAY)),
            "start": 1,
            "sort": self.sort,
        }
        try:
            response = self.session.get(self.BASE_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise SecondarySearchError(
                f"Naver news request failed: {e}",
                cause=e,
                context={"query": query},
            ) from e
        except ValueError as e:
            raise SecondarySearchError(
                "Naver news returned invalid JSON", cause=e, context={"query": query}
            ) from e

        records = []
        for item in data.get("items") or []:
            title = strip_html(clean_text(item.get("title")))
            if not title:
                continue
            link = item.get("originallink") or item.get("link") or ""
            records.append(
                KeywordRecord(
                    title=title,
                    source=_source_from_link(link),
                    time=item.get("pubDate", ""),
                    link=link,
                    description=strip_html(clean_text(item.get("description"))),
                    category=category or "",
                    extra={"naver_link": item.get("link", "")},
                )
            )

        logger.debug("Naver news for %r returned %d of %s", query, len(records), data.get("total"))
        return records[:limit]
