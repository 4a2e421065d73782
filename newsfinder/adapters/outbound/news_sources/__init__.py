"""Secondary keyword search adapters."""

from .keyword_search_adapter import KeywordSearchAdapter
from .naver_adapter import NaverNewsAdapter

__all__ = ["KeywordSearchAdapter", "NaverNewsAdapter"]
