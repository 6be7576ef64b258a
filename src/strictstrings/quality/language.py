"""
Natural-language plausibility filter.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Optional

import structlog

from strictstrings.protocols import ConfidenceOracle, ProgressCallback, StageResult

logger = structlog.get_logger(__name__)


class LanguageFilter:
    """
    Keeps strings whose confidence for ``target_language`` exceeds ``threshold``.

    The oracle scores every string against all of ``languages``; only the
    target language's entry decides the outcome.
    """

    name = "language"

    def __init__(
        self,
        oracle: ConfidenceOracle,
        languages: AbstractSet[str],
        *,
        target_language: str = "en",
        threshold: float = 0.5,
    ) -> None:
        if target_language not in languages:
            raise ValueError(f"Target language '{target_language}' is not among {sorted(languages)}")
        self.oracle = oracle
        self.languages = frozenset(languages)
        self.target_language = target_language
        self.threshold = threshold

    def confidence(self, text: str) -> float:
        scores = self.oracle.score(text, self.languages)
        return float(scores.get(self.target_language, 0.0))

    def accepts(self, text: str) -> bool:
        return self.confidence(text) > self.threshold

    def apply(self, strings: Iterable[str], progress: Optional[ProgressCallback] = None) -> StageResult:
        result = StageResult(name=self.name)
        for text in strings:
            if self.accepts(text):
                result.kept.add(text)
            else:
                result.rejected.add(text)
            if progress is not None:
                progress(1)

        logger.info(
            "Language filter applied",
            target=self.target_language,
            threshold=self.threshold,
            kept=result.kept_count,
            rejected=result.rejected_count,
        )
        return result
