"""
StrictStrings - Strict filtering of human-readable strings found in binaries.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .pipeline import NoStringsFoundError, Pipeline

__all__ = ["__version__", "Config", "NoStringsFoundError", "Pipeline"]
