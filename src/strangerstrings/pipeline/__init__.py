"""Extraction and scoring pipeline stages and shared types."""

from __future__ import annotations

import dataclasses
from dataclasses import field

from strangerstrings.enums import EncodingKind, ScriptType

#: Sentinel score for strings that cannot be scored at all.
DEFAULT_LOG_VALUE: float = -20.0

#: Threshold that no score can exceed, used to force rejection.
UNREACHABLE_THRESHOLD: float = 10.0


@dataclasses.dataclass(frozen=True, slots=True)
class EncodedString:
    """A printable run decoded from a byte buffer.

    Two runs are duplicates when both ``offset`` and ``content`` match;
    ``encoding`` and ``byte_length`` do not take part in that comparison.
    """

    content: str
    offset: int
    encoding: EncodingKind
    byte_length: int

    @property
    def dedup_key(self) -> tuple[int, str]:
        return (self.offset, self.content)

    def to_dict(self) -> dict[str, str | int]:
        return {
            "string": self.content,
            "offset": self.offset,
            "encoding": str(self.encoding),
            "byte_length": self.byte_length,
        }


@dataclasses.dataclass(frozen=True, slots=True)
class BinaryString:
    """A plain ASCII run extracted without filtering."""

    string: str
    offset: int


@dataclasses.dataclass(frozen=True, slots=True)
class NormalizedString:
    """A candidate string prepared for trigram scoring.

    ``symbol_codes`` holds one 7-bit code per character of ``normalized``.
    """

    original: str
    normalized: str
    symbol_codes: bytes

    def __len__(self) -> int:
        return len(self.symbol_codes)


@dataclasses.dataclass(frozen=True, slots=True)
class ScoringResult:
    """Uniform score produced by every scorer."""

    score: float
    threshold: float
    script_type: ScriptType
    scorer_name: str

    @property
    def is_valid(self) -> bool:
        return self.score > self.threshold

    def with_script(self, script_type: ScriptType) -> ScoringResult:
        """Return a copy tagged with *script_type*."""
        return dataclasses.replace(self, script_type=script_type)

    def to_dict(self) -> dict[str, str | float | bool]:
        return {
            "score": self.score,
            "threshold": self.threshold,
            "is_valid": self.is_valid,
            "script_type": str(self.script_type),
            "scorer_name": self.scorer_name,
        }


# (minimum confidence, minimum analyzed characters) per primary script.
_LIKELY_VALID_LIMITS: dict[ScriptType, tuple[float, int]] = {
    ScriptType.LATIN: (0.6, 3),
    ScriptType.HAN: (0.7, 2),
    ScriptType.ARABIC: (0.7, 3),
    ScriptType.CYRILLIC: (0.6, 3),
    ScriptType.MIXED: (0.4, 4),
}


@dataclasses.dataclass(frozen=True, slots=True)
class LanguageDetectionResult:
    """Dominant script of a string and the per-script character tally.

    ``distribution`` counts analyzed characters (whitespace and ASCII
    punctuation excluded) per script, in first-seen order.
    """

    primary_script: ScriptType
    confidence: float
    distribution: dict[ScriptType, int] = field(default_factory=dict)
    is_homogeneous: bool = False
    total_chars: int = 0

    def is_likely_valid(self) -> bool:
        """Whether the detection is confident enough to trust.

        :returns: ``False`` for :attr:`ScriptType.UNKNOWN`; otherwise whether
            the per-script confidence and size minimums are met.
        """
        limits = _LIKELY_VALID_LIMITS.get(self.primary_script)
        if limits is None:
            return False
        min_confidence, min_chars = limits
        return self.confidence >= min_confidence and self.total_chars >= min_chars

    def to_dict(self) -> dict[str, object]:
        return {
            "primary_script": str(self.primary_script),
            "confidence": self.confidence,
            "distribution": {
                str(script): count for script, count in self.distribution.items()
            },
            "is_homogeneous": self.is_homogeneous,
            "total_chars": self.total_chars,
        }


@dataclasses.dataclass(frozen=True, slots=True)
class StringAnalysisResult:
    """Outcome of analyzing one candidate string.

    ``detected_script`` and ``scorer_name`` are only set when script-aware
    scoring produced the result; ``offset`` and ``encoding`` only when the
    string came from a byte buffer.
    """

    original_string: str
    normalized_string: str
    score: float
    threshold: float
    offset: int | None = None
    encoding: EncodingKind | None = None
    detected_script: ScriptType | None = None
    scorer_name: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.score > self.threshold

    def to_dict(self) -> dict[str, object]:
        """Convert this result to a plain, JSON-serializable dict."""
        return {
            "original_string": self.original_string,
            "score": self.score,
            "threshold": self.threshold,
            "is_valid": self.is_valid,
            "normalized_string": self.normalized_string,
            "offset": self.offset,
            "encoding": None if self.encoding is None else str(self.encoding),
            "detected_script": (
                None if self.detected_script is None else str(self.detected_script)
            ),
            "scorer_name": self.scorer_name,
        }
