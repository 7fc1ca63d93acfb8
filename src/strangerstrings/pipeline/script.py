"""Stage: classify the dominant writing system of a string.

Whitespace and ASCII punctuation are ignored.  Every other character is
tallied under Latin, Han, Arabic or Cyrillic according to its Unicode
``Script`` property, or under Unknown (digits, symbols, combining marks and
all other scripts).
"""

from __future__ import annotations

import bisect
import string
from collections.abc import Iterator

from strangerstrings.enums import ScriptType
from strangerstrings.pipeline import LanguageDetectionResult

#: Confidence below which a string with several scripts is called Mixed.
MIXED_CONFIDENCE: float = 0.6

#: Confidence at or above which a detection counts as homogeneous.
HOMOGENEOUS_CONFIDENCE: float = 0.8

_ASCII_PUNCTUATION = frozenset(string.punctuation)

# str.isspace() also accepts U+001C..U+001F, which are not White_Space.
_NOT_WHITE_SPACE = frozenset("\x1c\x1d\x1e\x1f")

# (first, last, script) code point ranges taken from Scripts.txt for the
# scripts the scorers care about.  Hiragana and Katakana only matter when
# grouping Japanese kana with Han.  Combining marks shared across scripts
# (Inherited) and punctuation, digits and symbols (Common) are absent.
_SCRIPT_RANGES: list[tuple[int, int, str]] = sorted(
    [
        # Latin
        (0x0041, 0x005A, "Latin"),
        (0x0061, 0x007A, "Latin"),
        (0x00AA, 0x00AA, "Latin"),
        (0x00BA, 0x00BA, "Latin"),
        (0x00C0, 0x00D6, "Latin"),
        (0x00D8, 0x00F6, "Latin"),
        (0x00F8, 0x02B8, "Latin"),
        (0x02E0, 0x02E4, "Latin"),
        (0x1D00, 0x1D25, "Latin"),
        (0x1D2C, 0x1D5C, "Latin"),
        (0x1D62, 0x1D65, "Latin"),
        (0x1D6B, 0x1D77, "Latin"),
        (0x1D79, 0x1DBE, "Latin"),
        (0x1E00, 0x1EFF, "Latin"),
        (0x2071, 0x2071, "Latin"),
        (0x207F, 0x207F, "Latin"),
        (0x2090, 0x209C, "Latin"),
        (0x212A, 0x212B, "Latin"),
        (0x2132, 0x2132, "Latin"),
        (0x214E, 0x214E, "Latin"),
        (0x2160, 0x2188, "Latin"),
        (0x2C60, 0x2C7F, "Latin"),
        (0xA722, 0xA787, "Latin"),
        (0xA78B, 0xA7FF, "Latin"),
        (0xAB30, 0xAB5A, "Latin"),
        (0xAB5C, 0xAB64, "Latin"),
        (0xAB66, 0xAB69, "Latin"),
        (0xFB00, 0xFB06, "Latin"),
        (0xFF21, 0xFF3A, "Latin"),
        (0xFF41, 0xFF5A, "Latin"),
        (0x10780, 0x107BA, "Latin"),
        (0x1DF00, 0x1DF2A, "Latin"),
        # Cyrillic
        (0x0400, 0x0484, "Cyrillic"),
        (0x0487, 0x052F, "Cyrillic"),
        (0x1C80, 0x1C8A, "Cyrillic"),
        (0x1D2B, 0x1D2B, "Cyrillic"),
        (0x1D78, 0x1D78, "Cyrillic"),
        (0x2DE0, 0x2DFF, "Cyrillic"),
        (0xA640, 0xA69F, "Cyrillic"),
        (0xFE2E, 0xFE2F, "Cyrillic"),
        (0x1E030, 0x1E06D, "Cyrillic"),
        (0x1E08F, 0x1E08F, "Cyrillic"),
        # Arabic
        (0x0600, 0x0604, "Arabic"),
        (0x0606, 0x060B, "Arabic"),
        (0x060D, 0x061A, "Arabic"),
        (0x061C, 0x061E, "Arabic"),
        (0x0620, 0x063F, "Arabic"),
        (0x0641, 0x064A, "Arabic"),
        (0x0656, 0x066F, "Arabic"),
        (0x0671, 0x06DC, "Arabic"),
        (0x06DE, 0x06FF, "Arabic"),
        (0x0750, 0x077F, "Arabic"),
        (0x0870, 0x088E, "Arabic"),
        (0x0890, 0x0891, "Arabic"),
        (0x0897, 0x08E1, "Arabic"),
        (0x08E3, 0x08FF, "Arabic"),
        (0xFB50, 0xFBC2, "Arabic"),
        (0xFBD3, 0xFD3D, "Arabic"),
        (0xFD40, 0xFDCF, "Arabic"),
        (0xFDF0, 0xFDFF, "Arabic"),
        (0xFE70, 0xFE74, "Arabic"),
        (0xFE76, 0xFEFC, "Arabic"),
        (0x10E60, 0x10E7E, "Arabic"),
        (0x1EE00, 0x1EEF1, "Arabic"),
        # Han
        (0x2E80, 0x2E99, "Han"),
        (0x2E9B, 0x2EF3, "Han"),
        (0x2F00, 0x2FD5, "Han"),
        (0x3005, 0x3005, "Han"),
        (0x3007, 0x3007, "Han"),
        (0x3021, 0x3029, "Han"),
        (0x3038, 0x303B, "Han"),
        (0x3400, 0x4DBF, "Han"),
        (0x4E00, 0x9FFF, "Han"),
        (0xF900, 0xFA6D, "Han"),
        (0xFA70, 0xFAD9, "Han"),
        (0x16FE2, 0x16FE3, "Han"),
        (0x16FF0, 0x16FF1, "Han"),
        (0x20000, 0x2A6DF, "Han"),
        (0x2A700, 0x2EE5D, "Han"),
        (0x2F800, 0x2FA1D, "Han"),
        (0x30000, 0x323AF, "Han"),
        # Kana
        (0x3041, 0x3096, "Hiragana"),
        (0x309D, 0x309F, "Hiragana"),
        (0x1B001, 0x1B11F, "Hiragana"),
        (0x1B150, 0x1B152, "Hiragana"),
        (0x30A1, 0x30FA, "Katakana"),
        (0x30FD, 0x30FF, "Katakana"),
        (0x31F0, 0x31FF, "Katakana"),
        (0x32D0, 0x32FE, "Katakana"),
        (0x3300, 0x3357, "Katakana"),
        (0xFF66, 0xFF6F, "Katakana"),
        (0xFF71, 0xFF9D, "Katakana"),
        (0x1B000, 0x1B000, "Katakana"),
        (0x1B164, 0x1B167, "Katakana"),
    ]
)
_RANGE_STARTS = [start for start, _, _ in _SCRIPT_RANGES]

_SCRIPT_TYPES: dict[str, ScriptType] = {
    "Latin": ScriptType.LATIN,
    "Han": ScriptType.HAN,
    "Arabic": ScriptType.ARABIC,
    "Cyrillic": ScriptType.CYRILLIC,
}

# Script families used when deciding whether text mixes writing systems.
_FAMILIES: dict[str, ScriptType] = {
    **_SCRIPT_TYPES,
    "Hiragana": ScriptType.HAN,
    "Katakana": ScriptType.HAN,
}

_LATIN_VOWELS = frozenset("aeiouAEIOU")
_CYRILLIC_VOWELS = frozenset("аеиоуыэюяАЕИОУЫЭЮЯ")


def unicode_script(ch: str) -> str | None:
    """Return the Unicode script name of *ch* if it is one we track."""
    cp = ord(ch)
    index = bisect.bisect_right(_RANGE_STARTS, cp) - 1
    if index >= 0:
        first, last, name = _SCRIPT_RANGES[index]
        if first <= cp <= last:
            return name
    return None


def script_of(ch: str) -> ScriptType:
    """Map *ch* to Latin, Han, Arabic, Cyrillic or Unknown."""
    name = unicode_script(ch)
    if name is None:
        return ScriptType.UNKNOWN
    return _SCRIPT_TYPES.get(name, ScriptType.UNKNOWN)


def is_script(ch: str, script: ScriptType) -> bool:
    return unicode_script(ch) == script.value


def is_white_space(ch: str) -> bool:
    """Unicode ``White_Space``, which excludes the ASCII separators."""
    return ch.isspace() and ch not in _NOT_WHITE_SPACE


def is_ignored(ch: str) -> bool:
    """True for characters left out of every script tally."""
    return ch in _ASCII_PUNCTUATION or is_white_space(ch)


def analyzable_chars(text: str) -> Iterator[str]:
    """Yield the characters of *text* that take part in script statistics."""
    return (ch for ch in text if not is_ignored(ch))


def get_script_stats(text: str) -> dict[ScriptType, int]:
    """Count analyzable characters per script, in first-seen order."""
    counts: dict[ScriptType, int] = {}
    for ch in analyzable_chars(text):
        script = script_of(ch)
        counts[script] = counts.get(script, 0) + 1
    return counts


def _dominant(counts: dict[ScriptType, int]) -> tuple[ScriptType, int]:
    # Ties go to the script declared first in ScriptType.
    best, best_count = ScriptType.UNKNOWN, 0
    for script in ScriptType:
        count = counts.get(script, 0)
        if count > best_count:
            best, best_count = script, count
    return best, best_count


class ScriptDetector:
    """Detects the dominant script of a string.

    :param min_length: Inputs shorter than this many UTF-8 bytes are
        reported as Unknown without being analyzed.
    """

    def __init__(self, min_length: int = 2) -> None:
        self.min_length = min_length

    def detect(self, text: str) -> LanguageDetectionResult:
        """Classify *text*.

        :returns: Unknown with zero confidence when nothing can be analyzed;
            Mixed when several scripts occur and none reaches a 60% share;
            otherwise the most frequent script.
        """
        if len(text.encode("utf-8")) < self.min_length:
            return LanguageDetectionResult(ScriptType.UNKNOWN, 0.0)

        counts = get_script_stats(text)
        total = sum(counts.values())
        if total == 0:
            return LanguageDetectionResult(ScriptType.UNKNOWN, 0.0, counts)

        dominant, dominant_count = _dominant(counts)
        confidence = dominant_count / total
        if confidence < MIXED_CONFIDENCE and len(counts) > 1:
            primary = ScriptType.MIXED
        else:
            primary = dominant
        return LanguageDetectionResult(
            primary_script=primary,
            confidence=confidence,
            distribution=counts,
            is_homogeneous=confidence >= HOMOGENEOUS_CONFIDENCE,
            total_chars=total,
        )

    def is_homogeneous_script(
        self, text: str, threshold: float = HOMOGENEOUS_CONFIDENCE
    ) -> bool:
        return self.detect(text).confidence >= threshold

    def get_script_stats(self, text: str) -> dict[ScriptType, int]:
        return get_script_stats(text)


_DEFAULT_DETECTOR = ScriptDetector()


def detect_script(text: str) -> LanguageDetectionResult:
    """Detect the dominant script of *text* with default settings."""
    return _DEFAULT_DETECTOR.detect(text)


def script_families(text: str) -> dict[ScriptType, int]:
    """Count analyzable characters per script family.

    Kana count toward the Han family; characters outside every family are
    left out.
    """
    counts: dict[ScriptType, int] = {}
    for ch in analyzable_chars(text):
        name = unicode_script(ch)
        family = _FAMILIES.get(name) if name is not None else None
        if family is not None:
            counts[family] = counts.get(family, 0) + 1
    return counts


def has_significant_script(
    text: str, script: ScriptType, min_ratio: float
) -> bool:
    """True if *script* makes up at least *min_ratio* of the family counts."""
    counts = script_families(text)
    total = sum(counts.values())
    if total == 0:
        return False
    return counts.get(script, 0) / total >= min_ratio


def validate_script_authenticity(text: str, script: ScriptType) -> bool:
    """Cheap plausibility check that *text* really is written in *script*."""
    byte_length = len(text.encode("utf-8"))
    if script is ScriptType.LATIN:
        has_vowel = any(ch in _LATIN_VOWELS for ch in text)
        has_consonant = any(
            ch.isascii() and ch.isalpha() and ch not in _LATIN_VOWELS
            for ch in text
        )
        return has_vowel and has_consonant and byte_length >= 2
    if script is ScriptType.HAN:
        return any(is_script(ch, ScriptType.HAN) for ch in text)
    if script is ScriptType.ARABIC:
        return any(is_script(ch, ScriptType.ARABIC) for ch in text) and byte_length >= 2
    if script is ScriptType.CYRILLIC:
        has_vowel = any(ch in _CYRILLIC_VOWELS for ch in text)
        has_consonant = any(
            is_script(ch, ScriptType.CYRILLIC) and ch not in _CYRILLIC_VOWELS
            for ch in text
        )
        return has_vowel and has_consonant and byte_length >= 2
    if script is ScriptType.MIXED:
        return len(script_families(text)) >= 2 and byte_length >= 3
    return False
