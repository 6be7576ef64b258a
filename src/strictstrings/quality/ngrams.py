"""
Letter-pair plausibility filter.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Optional

import structlog

from strictstrings.protocols import ProgressCallback, StageResult
from strictstrings.quality.tables import IMPOSSIBLE_BIGRAMS

logger = structlog.get_logger(__name__)


class NgramFilter:
    """
    Drops strings containing a bigram from ``denylist``.

    Strings with a literal '.' are kept unconditionally: URLs, paths and
    dotted identifiers routinely contain pairs that never occur in words.
    Matching is case-sensitive and looks at two-character windows only.
    """

    name = "ngram"

    def __init__(self, denylist: AbstractSet[str] = IMPOSSIBLE_BIGRAMS) -> None:
        self.denylist = frozenset(denylist)

    def find_bigram(self, text: str) -> Optional[str]:
        """Return the first denylisted pair in *text*, if any."""
        for i in range(len(text) - 1):
            pair = text[i : i + 2]
            if pair in self.denylist:
                return pair
        return None

    def accepts(self, text: str) -> bool:
        if "." in text:
            return True
        return self.find_bigram(text) is None

    def apply(self, strings: Iterable[str], progress: Optional[ProgressCallback] = None) -> StageResult:
        result = StageResult(name=self.name)
        for text in strings:
            if self.accepts(text):
                result.kept.add(text)
            else:
                result.rejected.add(text)
            if progress is not None:
                progress(1)

        logger.info("Ngram filter applied", kept=result.kept_count, rejected=result.rejected_count)
        return result
