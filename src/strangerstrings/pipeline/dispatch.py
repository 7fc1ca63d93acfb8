"""Stage: route a string to the scorer for its script.

Latin text (and Unknown text, when a model is loaded) goes to the trigram
scorer.  Han, Arabic and Cyrillic text goes to the matching frequency
analyzer, which needs no model.  Mixed text is scored by every analyzer
whose script occurs in it and keeps the best result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from strangerstrings.enums import ScriptType
from strangerstrings.errors import ModelNotLoadedError
from strangerstrings.models import TrigramModel
from strangerstrings.pipeline import (
    DEFAULT_LOG_VALUE,
    UNREACHABLE_THRESHOLD,
    LanguageDetectionResult,
    ScoringResult,
)
from strangerstrings.pipeline.arabic import is_likely_arabic, score_arabic_text
from strangerstrings.pipeline.cyrillic import (
    is_likely_cyrillic,
    score_cyrillic_text,
)
from strangerstrings.pipeline.han import is_likely_chinese, score_chinese_text
from strangerstrings.pipeline.script import ScriptDetector
from strangerstrings.pipeline.trigram import TrigramScorer

logger = logging.getLogger(__name__)

#: Threshold used by the frequency analyzers when their script is likely.
LIKELY_SCRIPT_THRESHOLD: float = -3.0


class StringScorer(Protocol):
    name: str
    script_type: ScriptType

    def score(self, text: str) -> ScoringResult: ...


class _FrequencyScorer:
    """Adapts a script analyzer to the uniform :class:`ScoringResult`."""

    name: str
    script_type: ScriptType
    _score_text: Callable[[str], float]
    _is_likely: Callable[[str], bool]

    def score(self, text: str) -> ScoringResult:
        if self._is_likely(text):
            threshold = LIKELY_SCRIPT_THRESHOLD
        else:
            threshold = UNREACHABLE_THRESHOLD
        return ScoringResult(
            self._score_text(text), threshold, self.script_type, self.name
        )


class ChineseScorer(_FrequencyScorer):
    name = "Chinese"
    script_type = ScriptType.HAN
    _score_text = staticmethod(score_chinese_text)
    _is_likely = staticmethod(is_likely_chinese)


class ArabicScorer(_FrequencyScorer):
    name = "Arabic"
    script_type = ScriptType.ARABIC
    _score_text = staticmethod(score_arabic_text)
    _is_likely = staticmethod(is_likely_arabic)


class CyrillicScorer(_FrequencyScorer):
    name = "Cyrillic"
    script_type = ScriptType.CYRILLIC
    _score_text = staticmethod(score_cyrillic_text)
    _is_likely = staticmethod(is_likely_cyrillic)


class GenericScorer:
    """Last-resort scorer for text in an unrecognised script.

    Its threshold can never be met, so it only ranks strings; it never
    accepts one.
    """

    name = "Generic"
    script_type = ScriptType.UNKNOWN

    def score(self, text: str) -> ScoringResult:
        length = len(text)
        score = -10.0
        if length >= 3:
            score += 1.0
        if length >= 5:
            score += 1.0
        if length < 3:
            score -= 5.0
        if length:
            score += len(set(text)) / length * 2.0
            printable = sum(1 for ch in text if not _is_control(ch))
            score += printable / length * 2.0
        return ScoringResult(
            score, UNREACHABLE_THRESHOLD, self.script_type, self.name
        )


def _is_control(ch: str) -> bool:
    cp = ord(ch)
    return cp < 0x20 or 0x7F <= cp <= 0x9F


_ANALYZERS: dict[ScriptType, StringScorer] = {
    ScriptType.HAN: ChineseScorer(),
    ScriptType.ARABIC: ArabicScorer(),
    ScriptType.CYRILLIC: CyrillicScorer(),
}


class ScoringDispatcher:
    """Select and run the scorer for a string's script.

    :param model: Trigram model for Latin text, or ``None``.
    :param generic_fallback: Score Unknown text with :class:`GenericScorer`
        when no model is loaded instead of raising.
    """

    def __init__(
        self,
        model: TrigramModel | None = None,
        *,
        generic_fallback: bool = False,
        detector: ScriptDetector | None = None,
    ) -> None:
        self.model = model
        self.generic_fallback = generic_fallback
        self.detector = detector if detector is not None else ScriptDetector()
        self._trigram = TrigramScorer(model) if model is not None else None
        self._generic = GenericScorer()

    @property
    def has_trigram_model(self) -> bool:
        return self._trigram is not None

    def detect(self, text: str) -> LanguageDetectionResult:
        return self.detector.detect(text)

    def scorer_for(self, script: ScriptType) -> StringScorer:
        """Return the scorer used for text in *script*.

        :raises ModelNotLoadedError: For Latin text without a model, and for
            Unknown text without a model when the generic fallback is off.
        :raises ValueError: For :attr:`ScriptType.MIXED`, which has no single
            scorer; use :meth:`score_with_script` instead.
        """
        analyzer = _ANALYZERS.get(script)
        if analyzer is not None:
            return analyzer
        if script is ScriptType.MIXED:
            msg = "Mixed text is scored by several scorers, not one"
            raise ValueError(msg)
        if self._trigram is not None:
            return self._trigram
        if script is ScriptType.UNKNOWN and self.generic_fallback:
            return self._generic
        raise ModelNotLoadedError

    def score(self, text: str) -> ScoringResult:
        """Detect the script of *text* and score it accordingly."""
        detection = self.detect(text)
        logger.debug(
            "Detected %s (confidence %.2f) for %r",
            detection.primary_script,
            detection.confidence,
            text,
        )
        if detection.primary_script is ScriptType.MIXED:
            return self._score_mixed(text, detection)
        return self.score_with_script(text, detection.primary_script)

    def score_with_script(self, text: str, script: ScriptType) -> ScoringResult:
        """Score *text* as if it were written in *script*."""
        if script is ScriptType.MIXED:
            return self._score_mixed(text, self.detect(text))
        return self.scorer_for(script).score(text)

    def _score_mixed(
        self, text: str, detection: LanguageDetectionResult
    ) -> ScoringResult:
        best = ScoringResult(
            DEFAULT_LOG_VALUE, UNREACHABLE_THRESHOLD, ScriptType.MIXED, "Mixed"
        )
        for script in ScriptType.all():
            if detection.distribution.get(script, 0) <= 0:
                continue
            try:
                result = self.scorer_for(script).score(text)
            except ModelNotLoadedError:
                logger.debug("Skipping %s scorer for mixed text: no model", script)
                continue
            if result.score > best.score:
                best = result
        return best.with_script(ScriptType.MIXED)
