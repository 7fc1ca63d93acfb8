"""Stage: frequency and pattern heuristics for Cyrillic (Russian) text.

On top of the script share, common letters and variety, Cyrillic text is
rewarded for a natural vowel share (about 43% in Russian) and for frequent
Russian letter sequences, words and endings.
"""

from __future__ import annotations

import dataclasses

from strangerstrings.enums import ScriptType
from strangerstrings.pipeline import DEFAULT_LOG_VALUE
from strangerstrings.pipeline.script import (
    analyzable_chars,
    is_script,
    is_white_space,
)

#: The 33 letters of the Russian alphabet, in both cases.
COMMON_CYRILLIC_CHARS: frozenset[str] = frozenset(
    "аеиорнтлсвкмпудяызбгчйхжшюцщэфёьъ"
    "АЕИОРНТЛСВКМПУДЯЫЗБГЧЙХЖШЮЦЩЭФЁЬЪ"
)

CYRILLIC_VOWELS: frozenset[str] = frozenset("аеёиоуыэюяАЕЁИОУЫЭЮЯ")

# Soft and hard signs are neither vowels nor consonants.
_SIGNS = frozenset("ьъ")

_TARGET_VOWEL_RATIO = 0.43

_COMMON_BIGRAMS = (
    "ст", "но", "то", "на", "ен", "ко", "ни", "ти", "во", "ов",
    "ер", "ос", "го", "ро", "ль", "ра", "ле", "ри", "ел", "ор",
)  # fmt: skip
_COMMON_TRIGRAMS = ("ост", "сто", "про", "при", "ние", "тся", "что", "ово", "его", "тор")
_COMMON_WORDS = frozenset(("это", "что", "для", "они", "есть", "его", "ее"))
_COMMON_ENDINGS = ("ать", "ить", "еть", "ный", "ная", "ное", "ием", "ого", "его", "ому")
_MAX_PATTERN_BONUS = 2.0


@dataclasses.dataclass(frozen=True, slots=True)
class CyrillicTextStats:
    """Character counts over the non-whitespace, non-punctuation text."""

    cyrillic_characters: int
    total_characters: int
    unique_characters: int
    common_characters: int
    vowels: int
    consonants: int

    @property
    def cyrillic_ratio(self) -> float:
        if self.total_characters == 0:
            return 0.0
        return self.cyrillic_characters / self.total_characters

    @property
    def diversity(self) -> float:
        if self.total_characters == 0:
            return 0.0
        return self.unique_characters / self.total_characters

    def is_likely_valid(self) -> bool:
        return (
            self.cyrillic_characters >= 2
            and self.cyrillic_ratio >= 0.7
            and (
                self.cyrillic_characters < 4
                or (self.vowels > 0 and self.consonants > 0)
            )
        )

    def vowel_consonant_ratio(self) -> float:
        """Vowels per consonant, or 0.0 when there are no consonants."""
        if self.consonants == 0:
            return 0.0
        return self.vowels / self.consonants


def is_cyrillic_character(ch: str) -> bool:
    return is_script(ch, ScriptType.CYRILLIC)


def is_cyrillic_consonant(ch: str) -> bool:
    return (
        is_cyrillic_character(ch)
        and ch not in CYRILLIC_VOWELS
        and ch not in _SIGNS
    )


def get_cyrillic_stats(text: str) -> CyrillicTextStats:
    cyrillic = total = common = vowels = consonants = 0
    unique: set[str] = set()
    for ch in analyzable_chars(text):
        total += 1
        unique.add(ch)
        if not is_cyrillic_character(ch):
            continue
        cyrillic += 1
        if ch in COMMON_CYRILLIC_CHARS:
            common += 1
        if ch in CYRILLIC_VOWELS:
            vowels += 1
        elif ch not in _SIGNS:
            consonants += 1
    return CyrillicTextStats(cyrillic, total, len(unique), common, vowels, consonants)


def is_likely_cyrillic(text: str) -> bool:
    """At least 70% of the analyzable characters, and two or more, are Cyrillic."""
    stats = get_cyrillic_stats(text)
    if stats.total_characters == 0:
        return False
    return stats.cyrillic_ratio >= 0.7 and stats.cyrillic_characters >= 2


def validate_cyrillic_text(text: str) -> bool:
    if not text.strip():
        return False
    stats = get_cyrillic_stats(text)
    if stats.cyrillic_characters < 2 or stats.cyrillic_ratio < 0.7:
        return False
    if stats.cyrillic_characters > 3 and (stats.vowels == 0 or stats.consonants == 0):
        return False
    if stats.cyrillic_characters > 4 and stats.common_characters == 0:
        return False
    return not (stats.total_characters > 10 and stats.diversity < 0.25)


def score_cyrillic_patterns(text: str) -> float:
    """Bonus for frequent Russian sequences, capped at 2.0."""
    lowered = text.lower()
    bonus = 0.0
    bonus += sum(1.0 for bigram in _COMMON_BIGRAMS if bigram in lowered)
    bonus += sum(1.5 for trigram in _COMMON_TRIGRAMS if trigram in lowered)
    if lowered in _COMMON_WORDS:
        bonus += 2.0
    bonus += sum(0.4 for ending in _COMMON_ENDINGS if lowered.endswith(ending))
    return min(bonus, _MAX_PATTERN_BONUS)


def score_cyrillic_text(text: str) -> float:
    """Score *text* on the same negative scale as trigram scores."""
    if not text.strip():
        return DEFAULT_LOG_VALUE
    stats = get_cyrillic_stats(text)
    if stats.cyrillic_characters == 0:
        return DEFAULT_LOG_VALUE

    score = stats.cyrillic_ratio * 6.0
    score += min(stats.common_characters, 6) * 0.4
    score += min(stats.common_characters / stats.cyrillic_characters, 0.8) * 3.0
    if stats.vowels > 0 and stats.consonants > 0:
        vowel_ratio = stats.vowels / (stats.vowels + stats.consonants)
        balance = 1.0 - abs(vowel_ratio - _TARGET_VOWEL_RATIO) * 2.0
        score += max(balance, 0.0) * 2.0
    if stats.cyrillic_characters >= 4:
        score += 1.5
    if stats.cyrillic_characters >= 8:
        score += 1.0
    score += min(stats.diversity, 0.9) * 2.0
    if stats.unique_characters >= 6:
        score += 0.5
    score += score_cyrillic_patterns(text)
    if stats.cyrillic_characters < 3:
        score -= 1.5
    return -5.0 + score


def normalize_cyrillic_text(text: str) -> str:
    """Lowercase and drop every whitespace character except the space."""
    return "".join(
        ch for ch in text.lower() if ch == " " or not is_white_space(ch)
    )
