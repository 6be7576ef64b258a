"""
Whitespace density filter.

Long runs without any whitespace are usually opcode or table data that
happens to fall in the printable range. Percent-encoded separators count as
whitespace so URL-encoded text survives.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import structlog

from strictstrings.protocols import ProgressCallback, StageResult
from strictstrings.quality.tables import ENCODED_SEPARATORS

logger = structlog.get_logger(__name__)


class WhitespaceDensityFilter:
    """Rejects strings of at least ``wslen`` characters that have no separators."""

    name = "whitespace"

    def __init__(self, wslen: int = 30, markers: Sequence[str] = ENCODED_SEPARATORS) -> None:
        self.wslen = wslen
        self.markers = tuple(markers)

    def has_separator(self, text: str) -> bool:
        if any(ch.isspace() for ch in text):
            return True
        return any(marker in text for marker in self.markers)

    def accepts(self, text: str) -> bool:
        if len(text) < self.wslen:
            return True
        return self.has_separator(text)

    def apply(self, strings: Iterable[str], progress: Optional[ProgressCallback] = None) -> StageResult:
        result = StageResult(name=self.name)
        for text in strings:
            if self.accepts(text):
                result.kept.add(text)
            else:
                result.rejected.add(text)
            if progress is not None:
                progress(1)

        logger.info("Whitespace filter applied", wslen=self.wslen, kept=result.kept_count, rejected=result.rejected_count)
        return result
