"""Local fuzzy matching over an in-memory candidate list.

Works without any search backend: scores each candidate with exact
substring hits, typo-corrected substring hits, title/description
similarity and keyword overlap.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..domain import ArticleDocument, SearchResult, Tier
from .similarity import similarity
from .typo_dictionary import TypoDictionary

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.3
DEFAULT_MAX_RESULTS = 20

# Score components
RAW_SUBSTRING_BONUS = 2.0
CORRECTED_SUBSTRING_BONUS = 1.5
TITLE_SIMILARITY_WEIGHT = 2.0
DESCRIPTION_SIMILARITY_WEIGHT = 1.0
KEYWORD_BONUS = 0.5


@dataclass(frozen=True)
class FuzzyMatch:
    """A candidate document with its composite score."""

    document: ArticleDocument
    score: float
    corrected: bool = False


class LocalFuzzyMatcher:
    """Ranks candidate articles against a query with typo tolerance."""

    def __init__(self, dictionary: TypoDictionary) -> None:
        self.dictionary = dictionary

    def score(self, document: ArticleDocument, query: str, corrected_query: str) -> float:
        """Composite relevance score of one document.

        Args:
            document: Candidate article.
            query: Lowercased literal query.
            corrected_query: Dictionary-corrected query.

        Returns:
            Non-negative score, higher is more relevant.
        """
        title = document.title.lower()
        description = document.description.lower()
        tags = " ".join(document.tags).lower()
        haystack = f"{title} {description} {tags}"

        total = 0.0
        if query in haystack:
            total += RAW_SUBSTRING_BONUS
        if corrected_query in haystack:
            total += CORRECTED_SUBSTRING_BONUS

        title_similarity = max(similarity(query, title), similarity(corrected_query, title))
        description_similarity = max(
            similarity(query, description), similarity(corrected_query, description)
        )
        total += TITLE_SIMILARITY_WEIGHT * title_similarity
        total += DESCRIPTION_SIMILARITY_WEIGHT * description_similarity

        total += KEYWORD_BONUS * sum(1 for word in corrected_query.split() if word in haystack)
        return total

    def search(
        self,
        documents: Iterable[ArticleDocument],
        query: str,
        threshold: float = DEFAULT_THRESHOLD,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[FuzzyMatch]:
        """Score, filter and rank candidate documents.

        Args:
            documents: Candidate articles, in priority order.
            query: Raw user query.
            threshold: Documents scoring at or below this are dropped.
            max_results: Maximum number of matches returned.

        Returns:
            Matches sorted by descending score; ties keep input order.
        """
        original = query.strip().lower()
        if not original:
            return []

        corrected_query = self.dictionary.correct_query(original)
        is_corrected = corrected_query != original

        matches = []
        for document in documents:
            score = self.score(document, original, corrected_query)
            if score > threshold:
                matches.append(FuzzyMatch(document=document, score=score, corrected=is_corrected))

        matches.sort(key=lambda match: match.score, reverse=True)
        logger.debug(
            "Local fuzzy match for %r (corrected %r): %d candidates above %.2f",
            original,
            corrected_query,
            len(matches),
            threshold,
        )
        return matches[:max_results]

    @staticmethod
    def to_results(matches: Iterable[FuzzyMatch]) -> list[SearchResult]:
        """Convert matches into local-tier search results."""
        return [
            SearchResult(
                article_id=match.document.id,
                title=match.document.title,
                description=match.document.description,
                source=match.document.source,
                source_url=match.document.source_url,
                category=match.document.category,
                published_at=match.document.published_at,
                score=match.score,
                raw_score=match.score,
                corrected=match.corrected,
                tier=Tier.LOCAL,
            )
            for match in matches
        ]
