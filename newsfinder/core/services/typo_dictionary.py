"""Dictionary-based typo correction for search queries."""

from collections.abc import Iterable, Iterator

from .similarity import similarity

DEFAULT_CORRECTION_THRESHOLD = 0.6

# AI and technology vocabulary (English and Korean)
AI_KEYWORDS: tuple[str, ...] = (
    "ai", "artificial intelligence", "인공지능",
    "machine learning", "머신러닝", "ml",
    "deep learning", "딥러닝", "dl",
    "neural network", "신경망",
    "chatgpt", "gpt", "gpt-4", "gpt-3",
    "openai", "anthropic", "claude",
    "llm", "large language model",
    "generative ai", "생성형ai",
    "computer vision", "컴퓨터비전",
    "natural language processing", "nlp", "자연어처리",
    "robotics", "로봇공학",
    "automation", "자동화",
    "algorithm", "알고리즘",
    "data science", "데이터사이언스",
    "tensorflow", "pytorch", "keras",
    "transformer", "트랜스포머",
    "attention", "bert", "resnet",
    "apple", "google", "microsoft", "amazon", "meta", "facebook",
    "nvidia", "intel", "amd", "tesla", "samsung", "sony",
    "blockchain", "블록체인", "cryptocurrency", "암호화폐",
    "quantum computing", "양자컴퓨팅", "edge computing", "엣지컴퓨팅",
    "cloud computing", "클라우드컴퓨팅", "iot", "internet of things",
)  # fmt: skip

# Frequently searched technology companies
TECH_COMPANIES: tuple[str, ...] = (
    "apple", "google", "microsoft", "amazon", "meta", "facebook",
    "nvidia", "intel", "amd", "tesla", "samsung", "sony", "lg",
    "openai", "anthropic", "deepmind", "huggingface",
    "netflix", "spotify", "uber", "airbnb", "twitter", "x",
)  # fmt: skip


class TypoDictionary:
    """Immutable set of known terms used to snap noisy tokens.

    Lookup is a linear scan, so the term list should stay in the low
    hundreds. Terms keep their first-occurrence order; when two terms score
    the same similarity the one scanned first wins.
    """

    def __init__(
        self,
        terms: Iterable[str],
        threshold: float = DEFAULT_CORRECTION_THRESHOLD,
    ) -> None:
        """Initialize the dictionary.

        Args:
            terms: Known vocabulary; lowercased, blanks and duplicates dropped.
            threshold: Minimum similarity a candidate must exceed.
        """
        seen: dict[str, None] = {}
        for term in terms:
            normalized = term.strip().lower()
            if normalized:
                seen.setdefault(normalized, None)
        self._terms: tuple[str, ...] = tuple(seen)
        self._lookup: frozenset[str] = frozenset(self._terms)
        self.threshold = threshold

    @classmethod
    def default(cls, threshold: float = DEFAULT_CORRECTION_THRESHOLD) -> "TypoDictionary":
        """Dictionary of AI vocabulary followed by company names."""
        return cls(AI_KEYWORDS + TECH_COMPANIES, threshold=threshold)

    @property
    def terms(self) -> tuple[str, ...]:
        return self._terms

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and term.lower() in self._lookup

    def correct_token(self, word: str) -> str:
        """Return the closest known term, or ``word`` when nothing is close.

        Args:
            word: A single query token.

        Returns:
            ``word`` unchanged on an exact (case-insensitive) match or when no
            term exceeds the threshold, otherwise the best-scoring term.
        """
        if word in self:
            return word

        best_match = word
        best_score = self.threshold
        for term in self._terms:
            score = similarity(word, term)
            if score > best_score:
                best_score = score
                best_match = term
        return best_match

    def correct_query(self, text: str) -> str:
        """Lowercase, correct each whitespace token and rejoin with single spaces."""
        return " ".join(self.correct_token(word) for word in text.lower().split())

    def suggest(self, text: str, limit: int = 5) -> list[str]:
        """Client-side query suggestions.

        Combines the corrected query, terms that contain or are contained in
        the query, and terms that are similar but not near-identical.

        Args:
            text: Raw query text.
            limit: Maximum number of suggestions.

        Returns:
            Deduplicated suggestions, best first.
        """
        query = text.strip().lower()
        if not query:
            return []

        suggestions: list[str] = []

        corrected = self.correct_query(query)
        if corrected != query:
            suggestions.append(corrected)

        partial = [term for term in self._terms if term in query or query in term]
        suggestions.extend(partial[:3])

        scored = [(term, similarity(query, term)) for term in self._terms]
        similar = sorted(
            (pair for pair in scored if 0.4 < pair[1] < 0.9),
            key=lambda pair: pair[1],
            reverse=True,
        )
        suggestions.extend(term for term, _ in similar[:2])

        return list(dict.fromkeys(suggestions))[:limit]
