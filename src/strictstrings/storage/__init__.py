"""Persistence of rejected strings."""

from .rejection_log import LOG_FILES, RejectionLog

__all__ = ["LOG_FILES", "RejectionLog"]
