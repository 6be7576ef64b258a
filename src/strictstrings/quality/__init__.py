"""Filtering stages deciding which candidate strings look like real text."""

from .density import WhitespaceDensityFilter
from .language import LanguageFilter
from .ngrams import NgramFilter
from .tables import ENCODED_SEPARATORS, IMPOSSIBLE_BIGRAMS

__all__ = [
    "ENCODED_SEPARATORS",
    "IMPOSSIBLE_BIGRAMS",
    "LanguageFilter",
    "NgramFilter",
    "WhitespaceDensityFilter",
]
