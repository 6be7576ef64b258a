"""
Per-stage logs of the strings each filter rejected.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List

import structlog

from strictstrings.utils.atomic import atomic_write_lines

logger = structlog.get_logger(__name__)

# Stage name -> file name inside the log directory
LOG_FILES: Dict[str, str] = {
    "scan": "filtered_by_len.txt",
    "whitespace": "filtered_by_whitespace.txt",
    "language": "filtered_by_lang.txt",
    "ngram": "filtered_by_ngram.txt",
    "leven": "filtered_by_leven.txt",
}


class RejectionLog:
    """Writes one newline-separated file per stage into ``log_dir``."""

    def __init__(self, log_dir: Path) -> None:
        self.log_dir = Path(log_dir)
        self.written: List[Path] = []

    def prepare(self) -> None:
        """Create the log directory. Failures propagate as ``OSError``."""
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, stage: str) -> Path:
        try:
            return self.log_dir / LOG_FILES[stage]
        except KeyError:
            raise ValueError(f"Unknown stage: {stage}") from None

    def write(self, stage: str, strings: Iterable[str]) -> Path:
        path = self.path_for(stage)
        count = atomic_write_lines(path, strings)
        self.written.append(path)
        logger.debug("Rejection log written", stage=stage, path=str(path), count=count)
        return path
