"""Stage: frequency heuristics for Arabic text.

Besides the script share and the frequency of common letters, Arabic text
is rewarded for letters that join to the following letter, since runs of
isolated forms are unusual in real words.
"""

from __future__ import annotations

import dataclasses

from strangerstrings.enums import ScriptType
from strangerstrings.pipeline import DEFAULT_LOG_VALUE
from strangerstrings.pipeline.script import analyzable_chars, is_script

#: Common letters, hamza carriers and short-vowel marks.
COMMON_ARABIC_CHARS: frozenset[str] = frozenset(
    "ابتثجحخدذرزسشصضطظعغفقكلمنهوي"
    "أإآةىؤئ"
    "ًٌٍَُِْ"
)

# Letters that never join to the letter after them.
_NON_CONNECTING = frozenset("ادذرزو")

# Short vowels, tanwin and shadda.
_HARAKAT = frozenset("ًٌٍَُِّْ")

_LETTER_FOLDING = str.maketrans(
    {
        "أ": "ا",
        "إ": "ا",
        "آ": "ا",
        "ة": "ه",
        "ى": "ي",
        "ؤ": "و",
        "ئ": "ي",
        **{mark: None for mark in _HARAKAT},
    }
)


@dataclasses.dataclass(frozen=True, slots=True)
class ArabicTextStats:
    """Character counts over the non-whitespace, non-punctuation text."""

    arabic_characters: int
    total_characters: int
    unique_characters: int
    common_characters: int
    connecting_characters: int

    @property
    def arabic_ratio(self) -> float:
        if self.total_characters == 0:
            return 0.0
        return self.arabic_characters / self.total_characters

    @property
    def diversity(self) -> float:
        if self.total_characters == 0:
            return 0.0
        return self.unique_characters / self.total_characters

    def is_likely_valid(self) -> bool:
        return (
            self.arabic_characters >= 2
            and self.arabic_ratio >= 0.6
            and (self.arabic_characters < 4 or self.common_characters > 0)
        )


def is_arabic_character(ch: str) -> bool:
    return is_script(ch, ScriptType.ARABIC)


def is_connecting_arabic_char(ch: str) -> bool:
    return ch not in _NON_CONNECTING and is_arabic_character(ch)


def get_arabic_stats(text: str) -> ArabicTextStats:
    arabic = total = common = connecting = 0
    unique: set[str] = set()
    for ch in analyzable_chars(text):
        total += 1
        unique.add(ch)
        if is_arabic_character(ch):
            arabic += 1
            if ch in COMMON_ARABIC_CHARS:
                common += 1
            if ch not in _NON_CONNECTING:
                connecting += 1
    return ArabicTextStats(arabic, total, len(unique), common, connecting)


def is_likely_arabic(text: str) -> bool:
    """At least 60% of the analyzable characters, and two or more, are Arabic."""
    stats = get_arabic_stats(text)
    if stats.total_characters == 0:
        return False
    return stats.arabic_ratio >= 0.6 and stats.arabic_characters >= 2


def is_likely_rtl(text: str) -> bool:
    """True when more than half of the analyzable characters are Arabic."""
    return get_arabic_stats(text).arabic_ratio > 0.5


def validate_arabic_text(text: str) -> bool:
    if not text.strip():
        return False
    stats = get_arabic_stats(text)
    if stats.arabic_characters < 2 or stats.arabic_ratio < 0.6:
        return False
    if stats.arabic_characters > 3 and stats.common_characters == 0:
        return False
    return not (stats.total_characters > 10 and stats.diversity < 0.2)


def score_arabic_text(text: str) -> float:
    """Score *text* on the same negative scale as trigram scores.

    The length bonuses stop at six letters, so a long text with many
    repeated letters can score below a shorter, more varied one.
    """
    if not text.strip():
        return DEFAULT_LOG_VALUE
    stats = get_arabic_stats(text)
    if stats.arabic_characters == 0:
        return DEFAULT_LOG_VALUE

    score = stats.arabic_ratio * 5.0
    score += min(stats.common_characters, 5) * 0.4
    score += min(stats.common_characters / stats.arabic_characters, 0.8) * 2.5
    if stats.arabic_characters >= 3:
        score += 1.0
    if stats.arabic_characters >= 6:
        score += 0.5
    if stats.arabic_characters > 1:
        score += stats.connecting_characters / stats.arabic_characters * 1.5
    score += stats.diversity * 2.0
    if stats.arabic_characters < 3:
        score -= 1.0
    return -5.0 + score


def normalize_arabic_text(text: str) -> str:
    """Drop harakat and fold hamza, teh marbuta and alef maksura variants."""
    return text.translate(_LETTER_FOLDING)
