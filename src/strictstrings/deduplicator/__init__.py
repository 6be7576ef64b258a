"""Similarity-based deduplication of the filtered strings."""

from .deduplicator import (
    DeduplicationResult,
    SimilarityDeduplicator,
    case_insensitive_key,
    sort_case_insensitive,
)
from .fuzzy_matcher import (
    available_algorithms,
    get_similarity_function,
    indel_similarity,
    jaro_winkler_similarity,
    normalized_similarity,
)

__all__ = [
    "DeduplicationResult",
    "SimilarityDeduplicator",
    "available_algorithms",
    "case_insensitive_key",
    "get_similarity_function",
    "indel_similarity",
    "jaro_winkler_similarity",
    "normalized_similarity",
    "sort_case_insensitive",
]
