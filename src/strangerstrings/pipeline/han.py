"""Stage: frequency heuristics for Chinese (Han) text.

No trained model is involved; the score rewards a high share of Han
characters, frequent everyday characters and character variety.
"""

from __future__ import annotations

import dataclasses

from strangerstrings.enums import ScriptType
from strangerstrings.pipeline import DEFAULT_LOG_VALUE
from strangerstrings.pipeline.script import analyzable_chars, is_script

#: Very frequent Chinese characters.
COMMON_HAN_CHARS: frozenset[str] = frozenset(
    "的一是在不了有和人这中大为上个国我以要他"
    "时来用生到作地于出就分对成会可主发年动"
    "同工也能下过子说产种好天水火土木金日月"
    "山川田目口手足心头身你世界家学校老师朋友"
)


@dataclasses.dataclass(frozen=True, slots=True)
class HanTextStats:
    """Character counts over the non-whitespace, non-punctuation text."""

    han_characters: int
    total_characters: int
    unique_characters: int
    common_characters: int

    @property
    def han_ratio(self) -> float:
        if self.total_characters == 0:
            return 0.0
        return self.han_characters / self.total_characters

    @property
    def diversity(self) -> float:
        if self.total_characters == 0:
            return 0.0
        return self.unique_characters / self.total_characters

    def is_likely_valid(self) -> bool:
        return (
            self.han_characters > 0
            and self.han_ratio >= 0.6
            and (self.han_characters < 5 or self.common_characters > 0)
        )


def is_han_character(ch: str) -> bool:
    return is_script(ch, ScriptType.HAN)


def get_chinese_stats(text: str) -> HanTextStats:
    han = total = common = 0
    unique: set[str] = set()
    for ch in analyzable_chars(text):
        total += 1
        unique.add(ch)
        if is_han_character(ch):
            han += 1
            if ch in COMMON_HAN_CHARS:
                common += 1
    return HanTextStats(han, total, len(unique), common)


def is_likely_chinese(text: str) -> bool:
    """At least 60% of the analyzable characters are Han."""
    stats = get_chinese_stats(text)
    if stats.total_characters == 0:
        return False
    return stats.han_ratio >= 0.6 and stats.han_characters >= 1


def validate_chinese_text(text: str) -> bool:
    """Stricter check used to confirm text really is Chinese.

    Longer text must contain common characters and must not be too
    repetitive.
    """
    if not text.strip():
        return False
    stats = get_chinese_stats(text)
    if stats.han_characters == 0 or stats.han_ratio < 0.6:
        return False
    if stats.han_characters > 5 and stats.common_characters == 0:
        return False
    return not (stats.total_characters > 10 and stats.diversity < 0.3)


def score_chinese_text(text: str) -> float:
    """Score *text* on the same negative scale as trigram scores.

    Empty input, or input without any Han character, scores
    :data:`~strangerstrings.pipeline.DEFAULT_LOG_VALUE`.
    """
    if not text.strip():
        return DEFAULT_LOG_VALUE
    stats = get_chinese_stats(text)
    if stats.han_characters == 0:
        return DEFAULT_LOG_VALUE

    score = stats.han_ratio * 5.0
    score += min(stats.common_characters, 4) * 0.5
    score += min(stats.common_characters / stats.han_characters, 0.8) * 2.0
    if stats.han_characters >= 2:
        score += 1.0
    if stats.han_characters >= 4:
        score += 0.5
    score += stats.diversity * 2.0
    if stats.han_characters < 2:
        score -= 2.0
    return -5.0 + score
