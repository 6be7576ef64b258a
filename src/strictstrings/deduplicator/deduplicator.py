"""
Near-duplicate suppression for the surviving strings.

Strings are sorted by their lowercase form, which places most variants of
the same text (case changes, small edits near the end) next to each other.
A single greedy pass then compares each string with the current
representative and folds it in when the similarity reaches the threshold.

Only neighbours under the sort order are compared. Two near-duplicates that
sort far apart, for example because they differ in their first character,
both survive. This keeps the pass linear after the O(n log n) sort.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

import structlog

from strictstrings.deduplicator.fuzzy_matcher import normalized_similarity
from strictstrings.protocols import ProgressCallback, SimilarityFunction

logger = structlog.get_logger(__name__)


def case_insensitive_key(text: str) -> str:
    return text.lower()


def sort_case_insensitive(strings: Iterable[str]) -> List[str]:
    return sorted(strings, key=case_insensitive_key)


@dataclass
class DeduplicationResult:
    """Representatives in presentation order plus the strings folded into them."""

    representatives: List[str]
    duplicates: List[str] = field(default_factory=list)
    comparisons: int = 0


class SimilarityDeduplicator:
    """Greedy adjacent-pair deduplication under a normalized similarity."""

    name = "leven"

    def __init__(
        self,
        threshold: float = 0.8,
        similarity: SimilarityFunction = normalized_similarity,
    ) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("threshold must be between 0.0 and 1.0")
        self.threshold = threshold
        self.similarity = similarity

    def deduplicate(
        self,
        strings: Iterable[str],
        progress: Optional[ProgressCallback] = None,
    ) -> DeduplicationResult:
        """
        Collapse runs of similar neighbours into their first member.

        Args:
            strings: Strings to deduplicate, in any order
            progress: Called once per comparison

        Returns:
            DeduplicationResult with representatives sorted case-insensitively

        Raises:
            ValueError: If *strings* is empty
        """
        ordered = sort_case_insensitive(strings)
        if not ordered:
            raise ValueError("Cannot deduplicate an empty sequence")

        result = self._collapse(ordered, progress)
        result.representatives = sort_case_insensitive(result.representatives)

        logger.info(
            "Similarity deduplication applied",
            threshold=self.threshold,
            kept=len(result.representatives),
            rejected=len(result.duplicates),
        )
        return result

    def _collapse(self, ordered: Sequence[str], progress: Optional[ProgressCallback]) -> DeduplicationResult:
        result = DeduplicationResult(representatives=[])
        current = ordered[0]

        for candidate in ordered[1:]:
            score = self.similarity(current, candidate)
            result.comparisons += 1
            if score >= self.threshold:
                # Folded into current; current does not advance
                result.duplicates.append(candidate)
            else:
                result.representatives.append(current)
                current = candidate
            if progress is not None:
                progress(1)

        result.representatives.append(current)
        return result
