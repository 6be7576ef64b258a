"""Configuration models for StrictStrings."""

from __future__ import annotations

from .config import (
    DEFAULT_LANGUAGES,
    Config,
    DedupConfig,
    FilterConfig,
    MonitoringConfig,
    OutputConfig,
    ScannerConfig,
)

__all__ = [
    "DEFAULT_LANGUAGES",
    "Config",
    "DedupConfig",
    "FilterConfig",
    "MonitoringConfig",
    "OutputConfig",
    "ScannerConfig",
]
