"""Edit distance and normalized string similarity.

Python strings index by code point, so CJK and other multi-byte scripts
compare one character at a time.
"""

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions and
    substitutions turning ``a`` into ``b``. Case-sensitive."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Similarity in [0, 1] derived from case-insensitive edit distance.

    Returns 1.0 when both strings are empty.
    """
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0

    distance = edit_distance(a.lower(), b.lower())
    # lower() can lengthen a few code points, keep the ratio non-negative
    return max(0.0, (max_length - distance) / max_length)
