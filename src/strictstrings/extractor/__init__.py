"""Extraction of candidate strings and language confidence scoring."""

from .byte_scanner import ByteScanner
from .language_detector import LanguageDetector

__all__ = ["ByteScanner", "LanguageDetector"]
