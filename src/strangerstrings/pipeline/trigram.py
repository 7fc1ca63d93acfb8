"""Stage: mean trigram log-likelihood scoring against a length threshold.

A string's score is the sum of its begin, interior and end trigram
log-probabilities divided by its length.  Longer genuine text drifts toward
lower means, so the acceptance threshold loosens with length up to 100
characters and stays flat beyond that.
"""

from __future__ import annotations

from strangerstrings.enums import ScriptType
from strangerstrings.models import TrigramModel
from strangerstrings.pipeline import (
    DEFAULT_LOG_VALUE,
    UNREACHABLE_THRESHOLD,
    NormalizedString,
    ScoringResult,
)
from strangerstrings.pipeline.normalize import normalize

#: Shortest symbol sequence that can be scored at all.
MINIMUM_STRING_LENGTH: int = 3

#: Acceptance threshold indexed by normalized length.  Lengths 0-3 can never
#: pass.
NG_THRESHOLDS: tuple[float, ...] = (
    UNREACHABLE_THRESHOLD, UNREACHABLE_THRESHOLD, UNREACHABLE_THRESHOLD,
    UNREACHABLE_THRESHOLD, -2.71, -3.26, -3.52, -3.84, -4.23, -4.49,
    -4.55, -4.74, -4.88, -5.03, -5.06, -5.2, -5.24, -5.29, -5.29, -5.42,
    -5.51, -5.52, -5.53, -5.6, -5.6, -5.62, -5.7, -5.7, -5.78, -5.79,
    -5.81, -5.81, -5.84, -5.85, -5.86, -5.88, -5.92, -5.92, -5.93, -5.95,
    -5.99, -6.0, -6.0, -6.0, -6.02, -6.02, -6.02, -6.05, -6.06, -6.07,
    -6.08, -6.1, -6.12, -6.12, -6.13, -6.13, -6.13, -6.13, -6.13, -6.13,
    -6.13, -6.15, -6.15, -6.16, -6.16, -6.16, -6.17, -6.19, -6.19, -6.21,
    -6.21, -6.21, -6.21, -6.21, -6.21, -6.25, -6.25, -6.25, -6.25, -6.25,
    -6.25, -6.25, -6.26, -6.26, -6.26, -6.26, -6.26, -6.26, -6.26, -6.26,
    -6.26, -6.29, -6.29, -6.3, -6.3, -6.3, -6.3, -6.3, -6.3, -6.3,
    -6.3,
)  # fmt: skip

#: Threshold applied to every length past the end of :data:`NG_THRESHOLDS`.
MAX_NG_THRESHOLD: float = -6.3


def threshold_for_length(length: int) -> float:
    """Return the acceptance threshold for a normalized string of *length*."""
    if length < len(NG_THRESHOLDS):
        return NG_THRESHOLDS[length]
    return MAX_NG_THRESHOLD


def mean_log_likelihood(codes: bytes, model: TrigramModel) -> float:
    """Average per-character log10 probability of *codes* under *model*.

    Sequences shorter than :data:`MINIMUM_STRING_LENGTH` get
    :data:`~strangerstrings.pipeline.DEFAULT_LOG_VALUE`.
    """
    length = len(codes)
    if length < MINIMUM_STRING_LENGTH:
        return DEFAULT_LOG_VALUE
    total = model.begin_prob(codes[0], codes[1])
    for i in range(1, length - 2):
        total += model.trigram_prob(codes[i], codes[i + 1], codes[i + 2])
    total += model.end_prob(codes[length - 2], codes[length - 1])
    return total / length


def score_normalized(
    normalized: NormalizedString, model: TrigramModel
) -> tuple[float, float]:
    """Return ``(score, threshold)`` for an already-normalized string."""
    codes = normalized.symbol_codes
    return mean_log_likelihood(codes, model), threshold_for_length(len(codes))


class TrigramScorer:
    """Scores Latin-script text with a shared, read-only trigram model."""

    name = "Trigram"
    script_type = ScriptType.LATIN

    def __init__(self, model: TrigramModel) -> None:
        self.model = model

    def normalize(self, text: str) -> NormalizedString:
        return normalize(text, lowercase=self.model.is_lowercase)

    def score(self, text: str) -> ScoringResult:
        score, threshold = score_normalized(self.normalize(text), self.model)
        return ScoringResult(score, threshold, self.script_type, self.name)
