"""Text helpers shared by the mapper, dictionary and adapters."""

import unicodedata

from bs4 import BeautifulSoup


def clean_text(text: str | None, *, normalize: bool = True) -> str:
    """Remove BOM markers and optionally apply NFKC normalization.

    Args:
        text: Input text that may contain BOM or replacement characters.
        normalize: Whether to apply NFKC normalization.

    Returns:
        Cleaned text; empty string for None.
    """
    if not text:
        return ""

    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    if normalize:
        cleaned = unicodedata.normalize("NFKC", cleaned)
    return cleaned.strip()


def strip_html(text: str | None) -> str:
    """Plain text of an HTML snippet, entities decoded and whitespace collapsed."""
    if not text:
        return ""
    # Naver wraps matched keywords in inline tags, so no separator between strings
    return " ".join(BeautifulSoup(text, "lxml").get_text().split())
