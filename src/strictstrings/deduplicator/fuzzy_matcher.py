"""
Normalized string similarity functions.

Every function returns a score in ``[0, 1]``, is symmetric, and returns 1.0
for identical strings.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from rapidfuzz.distance import Indel, JaroWinkler, Levenshtein


def normalized_similarity(a: str, b: str) -> float:
    """``1 - levenshtein(a, b) / max(len(a), len(b))``; 1.0 for two empty strings."""
    return float(Levenshtein.normalized_similarity(a, b))


def indel_similarity(a: str, b: str) -> float:
    """Insertion/deletion-only edit distance, normalized by ``len(a) + len(b)``."""
    return float(Indel.normalized_similarity(a, b))


def jaro_winkler_similarity(a: str, b: str) -> float:
    return float(JaroWinkler.normalized_similarity(a, b))


_ALGORITHMS: Dict[str, Callable[[str, str], float]] = {
    "levenshtein": normalized_similarity,
    "indel": indel_similarity,
    "jaro_winkler": jaro_winkler_similarity,
}


def available_algorithms() -> List[str]:
    return sorted(_ALGORITHMS)


def get_similarity_function(algorithm: str = "levenshtein") -> Callable[[str, str], float]:
    """Look up a similarity function by name."""
    try:
        return _ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None
