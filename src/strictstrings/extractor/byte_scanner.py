"""
Byte scanner turning raw binary input into candidate strings.

A run of text-like bytes (printable ASCII plus tab, newline and carriage
return) is accumulated until the first byte outside that class. The run is
then decoded, split into lines on ``\\n`` and ``\\r``, trimmed, and every line
whose length lies in ``[min_length, max_length]`` joins the candidate set.
Input is consumed in fixed-size chunks so memory for the raw bytes stays
bounded by the chunk size.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Set

import structlog

from strictstrings.protocols import ProgressCallback, ScanStats, StageResult

logger = structlog.get_logger(__name__)

# One or more bytes that are not text-like
_RE_NON_TEXT = re.compile(rb"[^\t\n\r\x20-\x7e]+")
_RE_LINE_BREAK = re.compile(r"[\n\r]")

DEFAULT_CHUNK_SIZE = 1024


class ByteScanner:
    """
    Streaming extractor for candidate strings.

    The scanner is stateful while a stream is fed through :meth:`feed`; call
    :meth:`finish` once the input is exhausted to flush the last run. The
    convenience methods :meth:`scan_bytes`, :meth:`scan_stream` and
    :meth:`scan_file` wrap the whole cycle.
    """

    def __init__(
        self,
        min_length: int = 6,
        max_length: int = 200,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        record_rejections: bool = False,
    ) -> None:
        if min_length < 0 or max_length < min_length:
            raise ValueError(f"Invalid length bounds: [{min_length}, {max_length}]")
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self.min_length = min_length
        self.max_length = max_length
        self.chunk_size = chunk_size
        self.record_rejections = record_rejections

        self._buffer = bytearray()
        self._strings: Set[str] = set()
        self._rejected: Set[str] = set()
        self.stats = ScanStats()

    # ------------------------------------------------------------------
    # Streaming interface
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Forget everything seen so far."""
        self._buffer.clear()
        self._strings = set()
        self._rejected = set()
        self.stats = ScanStats()

    def feed(self, chunk: bytes) -> None:
        """Consume the next chunk of input."""
        self.stats.bytes_read += len(chunk)
        parts = _RE_NON_TEXT.split(chunk)
        # The first part continues the run left over from the previous chunk
        self._buffer.extend(parts[0])
        for part in parts[1:]:
            self._flush()
            self._buffer.extend(part)

    def finish(self) -> StageResult:
        """Flush the pending run and return the candidate partition."""
        self._flush()
        result = StageResult(name="scan", kept=self._strings, rejected=self._rejected)
        logger.debug(
            "Byte scan complete",
            bytes_read=self.stats.bytes_read,
            flushes=self.stats.flushes,
            decode_failures=self.stats.decode_failures,
            kept=result.kept_count,
            rejected=result.rejected_count,
        )
        self._strings = set()
        self._rejected = set()
        return result

    # ------------------------------------------------------------------
    # Whole-input helpers
    # ------------------------------------------------------------------

    def scan_chunks(self, chunks: Iterable[bytes], progress: Optional[ProgressCallback] = None) -> StageResult:
        self.reset()
        for chunk in chunks:
            self.feed(chunk)
            if progress is not None:
                progress(len(chunk))
        return self.finish()

    def scan_bytes(self, data: bytes, progress: Optional[ProgressCallback] = None) -> StageResult:
        chunks = (data[i : i + self.chunk_size] for i in range(0, len(data), self.chunk_size))
        return self.scan_chunks(chunks, progress)

    def scan_stream(self, stream: BinaryIO, progress: Optional[ProgressCallback] = None) -> StageResult:
        """Read *stream* in ``chunk_size`` pieces until it is exhausted."""
        return self.scan_chunks(iter(lambda: stream.read(self.chunk_size), b""), progress)

    def scan_file(self, path: Path, progress: Optional[ProgressCallback] = None) -> StageResult:
        """Scan the file at *path*. ``OSError`` from opening or reading propagates."""
        with open(path, "rb") as fh:
            return self.scan_stream(fh, progress)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _flush(self) -> None:
        if not self._buffer:
            return
        self.stats.flushes += 1
        try:
            text = self._buffer.decode("utf-8")
        except UnicodeDecodeError:
            # Malformed runs are dropped whole
            self.stats.decode_failures += 1
            text = None
        finally:
            self._buffer.clear()

        if text is None:
            return

        for line in _RE_LINE_BREAK.split(text):
            cleaned = line.strip()
            if cleaned and self.min_length <= len(cleaned) <= self.max_length:
                self._strings.add(cleaned)
            elif self.record_rejections:
                self._rejected.add(cleaned)
