"""
Language confidence scoring with langdetect.

Provides per-language confidence values for short strings, restricted to a
fixed set of candidate languages so that the scores are normalized across
exactly those languages.
"""

from __future__ import annotations

from typing import AbstractSet, Dict, Iterable, Optional

import structlog
from langdetect.detector_factory import PROFILES_DIRECTORY, DetectorFactory
from langdetect.lang_detect_exception import LangDetectException

logger = structlog.get_logger(__name__)


class LanguageDetector:
    """
    Confidence oracle backed by langdetect's n-gram profiles.

    Features:
    - Profiles are loaded once per detector instance
    - A fixed seed makes the randomized detection reproducible
    - Candidate languages are enforced through a uniform prior map
    - Texts without usable features score 0.0 for every language
    """

    def __init__(self, languages: Iterable[str], *, seed: Optional[int] = 0) -> None:
        self._factory = DetectorFactory()
        self._factory.load_profile(PROFILES_DIRECTORY)
        self._factory.set_seed(seed)

        available = set(self._factory.get_lang_list())
        self.languages = frozenset(lang.lower() for lang in languages)
        unknown = sorted(self.languages - available)
        if unknown:
            raise ValueError(f"Unsupported language codes: {', '.join(unknown)}")
        if not self.languages:
            raise ValueError("At least one language is required")

        self._prior_map = {lang: 1.0 for lang in self.languages}

        logger.info("LanguageDetector initialized", languages=sorted(self.languages), seed=seed)

    def score(self, text: str, languages: AbstractSet[str]) -> Dict[str, float]:
        """
        Return a confidence in ``[0, 1]`` for each code in *languages*.

        Detection always runs across the detector's full language set; the
        requested codes only select which entries are returned.
        """
        scores = {lang: 0.0 for lang in languages}

        detector = self._factory.create()
        detector.set_prior_map(self._prior_map)
        detector.append(text)
        try:
            probabilities = detector.get_probabilities()
        except LangDetectException:
            logger.debug("No usable features for language detection", length=len(text))
            return scores

        for candidate in probabilities:
            if candidate.lang in scores:
                scores[candidate.lang] = float(candidate.prob)
        return scores
