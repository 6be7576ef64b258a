"""
Protocols and dataclasses shared by the StrictStrings pipeline.

Architecture Overview:
- Byte Scanner turns a binary stream into a set of candidate strings
- Density, language and letter-pair filters partition that set
- Similarity deduplicator collapses adjacent near-duplicates after sorting

The confidence oracle and the similarity function are injected capabilities,
so alternate language models or distance metrics can be substituted without
touching the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Mapping, Optional, Protocol, Set

# ============================================================================
# Capability Protocols
# ============================================================================


class ConfidenceOracle(Protocol):
    """Scores how plausible a text is for each of a set of languages."""

    def score(self, text: str, languages: AbstractSet[str]) -> Mapping[str, float]:
        """Return a confidence in ``[0, 1]`` per language code."""
        ...


class SimilarityFunction(Protocol):
    """Symmetric normalized similarity; 1.0 iff both strings are equal."""

    def __call__(self, a: str, b: str) -> float: ...


class ProgressCallback(Protocol):
    """Receives the number of units processed since the previous call."""

    def __call__(self, advance: int) -> None: ...


# ============================================================================
# Stage Results
# ============================================================================


@dataclass
class StageResult:
    """Partition produced by a filtering stage."""

    name: str
    kept: Set[str] = field(default_factory=set)
    rejected: Set[str] = field(default_factory=set)

    @property
    def kept_count(self) -> int:
        return len(self.kept)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)


@dataclass
class ScanStats:
    """Bookkeeping for a single scan of a byte stream."""

    bytes_read: int = 0
    flushes: int = 0
    decode_failures: int = 0


@dataclass
class PipelineResult:
    """Everything a single pipeline run produced."""

    final_strings: List[str]
    unique_count: int
    whitespace_count: int
    language_count: int
    ngram_count: int
    filtered_by_leven: List[str] = field(default_factory=list)
    scan_stats: Optional[ScanStats] = None
    stages: Dict[str, StageResult] = field(default_factory=dict)
    duration_seconds: float = 0.0

    @property
    def final_count(self) -> int:
        return len(self.final_strings)


class PipelineObserver(Protocol):
    """Receives stage lifecycle events, e.g. to drive progress bars."""

    def stage_started(self, stage: str, total: Optional[int]) -> ProgressCallback:
        """Return the callback advanced while *stage* processes *total* units."""
        ...

    def stage_finished(self, stage: str, remaining: int) -> None: ...

    def stage_failed(self, stage: str) -> None:
        """Called instead of :meth:`stage_finished` when *stage* raises."""
        ...
