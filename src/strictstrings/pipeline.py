"""
Pipeline orchestration for StrictStrings.

Stages run strictly one after another, each consuming the full output of
the previous one:

    scan -> whitespace -> language -> ngram -> leven

An empty set after scanning, language filtering or ngram filtering ends the
run with :class:`NoStringsFoundError`.
"""

from __future__ import annotations

import os
import time
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Callable, Iterable, Optional

import structlog

from strictstrings.config import Config
from strictstrings.deduplicator import SimilarityDeduplicator, get_similarity_function
from strictstrings.extractor import ByteScanner, LanguageDetector
from strictstrings.protocols import (
    ConfidenceOracle,
    PipelineObserver,
    PipelineResult,
    ProgressCallback,
    SimilarityFunction,
    StageResult,
)
from strictstrings.quality import LanguageFilter, NgramFilter, WhitespaceDensityFilter
from strictstrings.storage import RejectionLog

logger = structlog.get_logger(__name__)


class PipelineStage(str, Enum):
    """Pipeline processing stages."""

    SCAN = "scan"
    WHITESPACE = "whitespace"
    LANGUAGE = "language"
    NGRAM = "ngram"
    DEDUPLICATE = "leven"


class NoStringsFoundError(RuntimeError):
    """Raised when a stage leaves nothing for the next one to work on."""

    def __init__(self, stage: PipelineStage | str) -> None:
        self.stage = PipelineStage(stage)
        super().__init__(f"No strings found after stage '{self.stage.value}'")


def _noop(advance: int) -> None:
    return None


class _SilentObserver:
    def stage_started(self, stage: str, total: Optional[int]) -> ProgressCallback:
        return _noop

    def stage_finished(self, stage: str, remaining: int) -> None:
        return None

    def stage_failed(self, stage: str) -> None:
        return None


class Pipeline:
    """Runs the full extraction and filtering chain over one input."""

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        oracle: Optional[ConfidenceOracle] = None,
        similarity: Optional[SimilarityFunction] = None,
        observer: Optional[PipelineObserver] = None,
    ) -> None:
        self.config = config or Config()
        self._oracle = oracle
        self.similarity = similarity or get_similarity_function(self.config.dedup.algorithm)
        self.observer: PipelineObserver = observer or _SilentObserver()

        log_dir = self.config.output.log_dir
        self.rejection_log: Optional[RejectionLog] = RejectionLog(log_dir) if log_dir else None

    @property
    def oracle(self) -> ConfidenceOracle:
        # langdetect profiles are loaded on first use
        if self._oracle is None:
            filters = self.config.filters
            self._oracle = LanguageDetector(filters.languages, seed=filters.seed)
        return self._oracle

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def run(self, path: Path) -> PipelineResult:
        """Process the file at *path*. ``OSError`` propagates unchanged."""
        path = Path(path)
        with open(path, "rb") as fh:
            total = os.fstat(fh.fileno()).st_size
            logger.info("Processing file", path=str(path), size=total)
            return self.run_stream(fh, total_bytes=total)

    def run_bytes(self, data: bytes) -> PipelineResult:
        start_time = time.perf_counter()
        scanner = self._make_scanner()
        scan = self._observe(PipelineStage.SCAN, len(data), lambda cb: scanner.scan_bytes(data, cb))
        return self._run_stages(scan, scanner, start_time)

    def run_stream(self, stream: BinaryIO, total_bytes: Optional[int] = None) -> PipelineResult:
        start_time = time.perf_counter()
        scanner = self._make_scanner()
        scan = self._observe(PipelineStage.SCAN, total_bytes, lambda cb: scanner.scan_stream(stream, cb))
        return self._run_stages(scan, scanner, start_time)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _run_stages(self, scan: StageResult, scanner: ByteScanner, start_time: float) -> PipelineResult:
        stages = {PipelineStage.SCAN.value: scan}
        self._log_rejections(PipelineStage.SCAN, scan.rejected)
        if not scan.kept:
            raise NoStringsFoundError(PipelineStage.SCAN)
        unique_count = scan.kept_count

        density = WhitespaceDensityFilter(self.config.filters.wslen)
        whitespace = self._observe(PipelineStage.WHITESPACE, unique_count, lambda cb: density.apply(scan.kept, cb))
        stages[PipelineStage.WHITESPACE.value] = whitespace
        self._log_rejections(PipelineStage.WHITESPACE, whitespace.rejected)

        language_filter = LanguageFilter(
            self.oracle,
            set(self.config.filters.languages),
            target_language=self.config.filters.target_language,
            threshold=self.config.filters.lang_threshold,
        )
        language = self._observe(
            PipelineStage.LANGUAGE, whitespace.kept_count, lambda cb: language_filter.apply(whitespace.kept, cb)
        )
        stages[PipelineStage.LANGUAGE.value] = language
        self._log_rejections(PipelineStage.LANGUAGE, language.rejected)
        if not language.kept:
            raise NoStringsFoundError(PipelineStage.LANGUAGE)

        ngram_filter = NgramFilter()
        ngram = self._observe(PipelineStage.NGRAM, language.kept_count, lambda cb: ngram_filter.apply(language.kept, cb))
        stages[PipelineStage.NGRAM.value] = ngram
        self._log_rejections(PipelineStage.NGRAM, ngram.rejected)
        if not ngram.kept:
            raise NoStringsFoundError(PipelineStage.NGRAM)

        deduplicator = SimilarityDeduplicator(self.config.dedup.leven_threshold, self.similarity)
        dedup = self._observe(
            PipelineStage.DEDUPLICATE,
            max(ngram.kept_count - 1, 0),
            lambda cb: deduplicator.deduplicate(ngram.kept, cb),
            remaining=lambda r: len(r.representatives),
        )
        self._log_rejections(PipelineStage.DEDUPLICATE, dedup.duplicates)

        result = PipelineResult(
            final_strings=dedup.representatives,
            unique_count=unique_count,
            whitespace_count=whitespace.kept_count,
            language_count=language.kept_count,
            ngram_count=ngram.kept_count,
            filtered_by_leven=dedup.duplicates,
            scan_stats=scanner.stats,
            stages=stages,
            duration_seconds=time.perf_counter() - start_time,
        )
        logger.info(
            "Pipeline completed",
            unique=result.unique_count,
            language=result.language_count,
            ngram=result.ngram_count,
            final=result.final_count,
        )
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _make_scanner(self) -> ByteScanner:
        if self.rejection_log is not None:
            self.rejection_log.prepare()
        scanner_config = self.config.scanner
        return ByteScanner(
            scanner_config.min_length,
            scanner_config.max_length,
            chunk_size=scanner_config.chunk_size,
            record_rejections=self.rejection_log is not None,
        )

    def _observe(
        self,
        stage: PipelineStage,
        total: Optional[int],
        action: Callable[[ProgressCallback], Any],
        remaining: Optional[Callable[[Any], int]] = None,
    ) -> Any:
        callback = self.observer.stage_started(stage.value, total)
        try:
            outcome = action(callback)
        except BaseException:
            self.observer.stage_failed(stage.value)
            raise
        count = remaining(outcome) if remaining is not None else outcome.kept_count
        self.observer.stage_finished(stage.value, count)
        return outcome

    def _log_rejections(self, stage: PipelineStage, strings: Iterable[str]) -> None:
        if self.rejection_log is None:
            return
        if isinstance(strings, (set, frozenset)):
            strings = sorted(strings)
        self.rejection_log.write(stage.value, strings)
