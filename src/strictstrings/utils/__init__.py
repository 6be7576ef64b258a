"""Utility helpers for StrictStrings."""

from .atomic import atomic_write_lines, atomic_write_text

__all__ = ["atomic_write_lines", "atomic_write_text"]
