# tests/test_cyrillic.py
from __future__ import annotations

import pytest

from strangerstrings.pipeline import DEFAULT_LOG_VALUE
from strangerstrings.pipeline.cyrillic import (
    COMMON_CYRILLIC_CHARS,
    CYRILLIC_VOWELS,
    get_cyrillic_stats,
    is_cyrillic_character,
    is_cyrillic_consonant,
    is_likely_cyrillic,
    normalize_cyrillic_text,
    score_cyrillic_patterns,
    score_cyrillic_text,
    validate_cyrillic_text,
)


def test_alphabet_tables():
    assert len(COMMON_CYRILLIC_CHARS) == 66
    assert "ё" in CYRILLIC_VOWELS
    assert "Ё" in CYRILLIC_VOWELS


def test_character_classes():
    assert is_cyrillic_character("Ж")
    assert not is_cyrillic_character("x")
    assert is_cyrillic_consonant("б")
    assert not is_cyrillic_consonant("а")
    assert not is_cyrillic_consonant("ь")
    assert not is_cyrillic_consonant("b")


def test_stats():
    stats = get_cyrillic_stats("Привет, мир!")
    assert stats.cyrillic_characters == 9
    assert stats.total_characters == 9
    assert stats.vowels == 3
    assert stats.consonants == 6
    assert stats.vowel_consonant_ratio() == pytest.approx(0.5)


def test_signs_are_neither_vowels_nor_consonants():
    stats = get_cyrillic_stats("день")
    assert stats.vowels == 1
    assert stats.consonants == 2


def test_vowel_consonant_ratio_without_consonants():
    assert get_cyrillic_stats("ааа").vowel_consonant_ratio() == 0.0


def test_is_likely_cyrillic():
    assert is_likely_cyrillic("привет")
    assert is_likely_cyrillic("мир1")
    assert not is_likely_cyrillic("я")
    assert not is_likely_cyrillic("мир hello")
    assert not is_likely_cyrillic("")


def test_validate_cyrillic_text():
    assert validate_cyrillic_text("привет")
    assert not validate_cyrillic_text("hello")
    assert not validate_cyrillic_text("бвгд")
    assert not validate_cyrillic_text("аааааааааааа")


def test_stats_likely_valid():
    assert get_cyrillic_stats("да").is_likely_valid()
    assert not get_cyrillic_stats("бвгд").is_likely_valid()


def test_pattern_bonus_is_capped():
    assert score_cyrillic_patterns("что") == 2.0
    assert score_cyrillic_patterns("Сто") == 2.0


def test_pattern_bonus():
    assert score_cyrillic_patterns("ни") == 1.0
    assert score_cyrillic_patterns("xyz") == 0.0


def test_score_word():
    assert score_cyrillic_text("привет") > 10.0


def test_score_without_cyrillic_is_default():
    assert score_cyrillic_text("") == DEFAULT_LOG_VALUE
    assert score_cyrillic_text("hello") == DEFAULT_LOG_VALUE


def test_short_text_is_penalized():
    assert score_cyrillic_text("да") < score_cyrillic_text("дом")


def test_normalize_cyrillic_text():
    assert normalize_cyrillic_text("При\tвет Мир\n") == "привет мир"


def test_cyrillic_outscores_english():
    assert score_cyrillic_text("привет") > score_cyrillic_text("hello")
    assert score_cyrillic_text("hello") < -10.0
