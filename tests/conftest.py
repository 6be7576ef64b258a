"""
Shared fixtures for the StrictStrings test suite.

The language stage is exercised with a keyword-based oracle so pipeline
and CLI tests do not depend on langdetect's statistical output.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import AbstractSet, Dict, Iterable

import pytest
import structlog

from strictstrings.config import Config

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Tests running the whole pipeline or CLI")


# ============================================================================
# Test Doubles
# ============================================================================


class KeywordOracle:
    """Scores English high when the text contains one of a few known words."""

    WORDS = ("hello", "world", "the", "open", "file", "config", "error", "failed")

    def __init__(self, words: Iterable[str] = WORDS, hit: float = 0.9, miss: float = 0.05) -> None:
        self.words = tuple(words)
        self.hit = hit
        self.miss = miss
        self.calls: list[tuple[str, frozenset[str]]] = []

    def score(self, text: str, languages: AbstractSet[str]) -> Dict[str, float]:
        self.calls.append((text, frozenset(languages)))
        lowered = text.lower()
        english = self.hit if any(word in lowered for word in self.words) else self.miss
        return {lang: (english if lang == "en" else (1.0 - english) / max(len(languages) - 1, 1)) for lang in languages}


class RecordingObserver:
    """Collects pipeline stage events."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, int | None]] = []
        self.advanced: dict[str, int] = {}

    def stage_started(self, stage: str, total):
        self.events.append(("start", stage, total))
        self.advanced[stage] = 0

        def advance(amount: int) -> None:
            self.advanced[stage] += amount

        return advance

    def stage_finished(self, stage: str, remaining: int) -> None:
        self.events.append(("finish", stage, remaining))

    def stage_failed(self, stage: str) -> None:
        self.events.append(("failed", stage, None))


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI runs."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep STRICTSTRINGS_* variables from the environment out of tests."""
    for name in list(os.environ):
        if name.upper().startswith("STRICTSTRINGS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def keyword_oracle() -> KeywordOracle:
    return KeywordOracle()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def default_config() -> Config:
    return Config()


@pytest.fixture
def sample_binary() -> bytes:
    """A small binary mixing text runs with opcode-like noise."""
    return b"\x00".join(
        [
            b"\x7f\x45\x4c\x46\x02\x01",
            b"Hello world from the firmware",
            b"\x90\x90\xff\xfe",
            b"Hello world from the firmwar",
            b"Failed to open config file\r\n",
            b"ab",
            b"xkcdqzjvbnmplk",
            b"A" * 40,
            b"the jk error",
            b"www.the-jk.com",
            b"\x01\x02\x03",
        ]
    )


@pytest.fixture
def sample_file(tmp_path: Path, sample_binary: bytes) -> Path:
    path = tmp_path / "firmware.bin"
    path.write_bytes(sample_binary)
    return path
