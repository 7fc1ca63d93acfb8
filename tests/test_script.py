# tests/test_script.py
from __future__ import annotations

import pytest

from strangerstrings.enums import ScriptType
from strangerstrings.pipeline import LanguageDetectionResult
from strangerstrings.pipeline.script import (
    ScriptDetector,
    detect_script,
    get_script_stats,
    has_significant_script,
    is_white_space,
    script_families,
    script_of,
    unicode_script,
    validate_script_authenticity,
)

_NIHAO = chr(0x4F60) + chr(0x597D)
_SHIJIE = chr(0x4E16) + chr(0x754C)
_PRIVET = "".join(chr(c) for c in (0x43F, 0x440, 0x438, 0x432, 0x435, 0x442))
_MIR = "".join(chr(c) for c in (0x43C, 0x438, 0x440))
_MARHABA = "".join(chr(c) for c in (0x645, 0x631, 0x62D, 0x628, 0x627))
_HIRAGANA = "".join(chr(c) for c in (0x3072, 0x3089, 0x304C, 0x306A))


@pytest.mark.parametrize(
    ("ch", "expected"),
    [
        ("a", ScriptType.LATIN),
        (chr(0xE9), ScriptType.LATIN),
        (chr(0x1E9E), ScriptType.LATIN),
        (chr(0x4E2D), ScriptType.HAN),
        (chr(0x20000), ScriptType.HAN),
        (chr(0x627), ScriptType.ARABIC),
        (chr(0xFEFB), ScriptType.ARABIC),
        (chr(0x416), ScriptType.CYRILLIC),
        ("7", ScriptType.UNKNOWN),
        ("%", ScriptType.UNKNOWN),
        (chr(0x3B1), ScriptType.UNKNOWN),
        (chr(0x3042), ScriptType.UNKNOWN),
        (chr(0x64E), ScriptType.UNKNOWN),
    ],
)
def test_script_of(ch: str, expected: ScriptType):
    assert script_of(ch) is expected


def test_unicode_script_names_kana():
    assert unicode_script(chr(0x3042)) == "Hiragana"
    assert unicode_script(chr(0x30A2)) == "Katakana"
    assert unicode_script("1") is None


def test_white_space():
    assert is_white_space(" ")
    assert is_white_space(chr(0x3000))
    assert not is_white_space("\x1c")
    assert not is_white_space("a")


def test_detect_latin():
    result = detect_script("hello")
    assert result.primary_script is ScriptType.LATIN
    assert result.confidence == 1.0
    assert result.is_homogeneous
    assert result.total_chars == 5
    assert result.distribution == {ScriptType.LATIN: 5}


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (_NIHAO + _SHIJIE, ScriptType.HAN),
        (_PRIVET, ScriptType.CYRILLIC),
        (_MARHABA, ScriptType.ARABIC),
    ],
)
def test_detect_single_script(text: str, expected: ScriptType):
    assert detect_script(text).primary_script is expected


def test_punctuation_and_whitespace_are_ignored():
    result = detect_script("hi, there!  ")
    assert result.total_chars == 7
    assert result.primary_script is ScriptType.LATIN


def test_dominant_script_above_sixty_percent():
    result = detect_script("hello " + _MIR)
    assert result.primary_script is ScriptType.LATIN
    assert result.confidence == pytest.approx(5 / 8)
    assert not result.is_homogeneous


def test_exactly_sixty_percent_is_not_mixed():
    result = detect_script("ab " + _MIR)
    assert result.primary_script is ScriptType.CYRILLIC
    assert result.confidence == pytest.approx(0.6)


def test_mixed_when_no_script_dominates():
    result = detect_script("abc " + _MIR)
    assert result.primary_script is ScriptType.MIXED
    assert result.confidence == pytest.approx(0.5)


def test_distribution_is_in_first_seen_order():
    assert list(get_script_stats(_MIR + " hi 42")) == [
        ScriptType.CYRILLIC,
        ScriptType.LATIN,
        ScriptType.UNKNOWN,
    ]


def test_short_input_is_unknown():
    result = detect_script("a")
    assert result.primary_script is ScriptType.UNKNOWN
    assert result.confidence == 0.0
    assert result.distribution == {}


def test_single_han_character_is_long_enough():
    assert detect_script(chr(0x4E2D)).primary_script is ScriptType.HAN


def test_nothing_analyzable_is_unknown():
    result = detect_script("!?, ...")
    assert result.primary_script is ScriptType.UNKNOWN
    assert result.confidence == 0.0
    assert result.total_chars == 0


def test_digits_only_are_unknown():
    result = detect_script("12345")
    assert result.primary_script is ScriptType.UNKNOWN
    assert result.distribution == {ScriptType.UNKNOWN: 5}


def test_detector_min_length():
    detector = ScriptDetector(min_length=6)
    assert detector.detect("hello").primary_script is ScriptType.UNKNOWN
    assert detector.detect("hellos").primary_script is ScriptType.LATIN


def test_is_homogeneous_script():
    detector = ScriptDetector()
    assert detector.is_homogeneous_script("hello")
    assert not detector.is_homogeneous_script("hello " + _MIR)
    assert detector.is_homogeneous_script("hello " + _MIR, threshold=0.6)


def test_is_likely_valid():
    assert LanguageDetectionResult(ScriptType.LATIN, 0.9, total_chars=5).is_likely_valid()
    assert not LanguageDetectionResult(ScriptType.LATIN, 0.9, total_chars=2).is_likely_valid()
    assert LanguageDetectionResult(ScriptType.HAN, 0.7, total_chars=2).is_likely_valid()
    assert not LanguageDetectionResult(ScriptType.ARABIC, 0.65, total_chars=9).is_likely_valid()
    assert not LanguageDetectionResult(ScriptType.UNKNOWN, 1.0, total_chars=9).is_likely_valid()


def test_kana_counts_toward_han_family():
    assert script_families(_HIRAGANA + _NIHAO) == {ScriptType.HAN: 6}
    assert has_significant_script(_HIRAGANA + "ab", ScriptType.HAN, 0.6)
    assert not has_significant_script("12", ScriptType.HAN, 0.1)


@pytest.mark.parametrize(
    ("text", "script", "expected"),
    [
        ("hello", ScriptType.LATIN, True),
        ("xyz", ScriptType.LATIN, False),
        ("aei", ScriptType.LATIN, False),
        (_NIHAO, ScriptType.HAN, True),
        ("hi", ScriptType.HAN, False),
        (_MARHABA, ScriptType.ARABIC, True),
        (_MIR, ScriptType.CYRILLIC, True),
        ("hi " + _MIR, ScriptType.MIXED, True),
        ("hello", ScriptType.MIXED, False),
        ("hello", ScriptType.UNKNOWN, False),
    ],
)
def test_validate_script_authenticity(text: str, script: ScriptType, expected: bool):
    assert validate_script_authenticity(text, script) is expected


def test_detect_english_phrase():
    result = detect_script("Hello World")
    assert result.primary_script is ScriptType.LATIN
    assert result.confidence > 0.8


def test_detect_empty():
    result = detect_script("")
    assert result.primary_script is ScriptType.UNKNOWN
    assert result.confidence == 0.0


def test_detect_latin_with_han():
    result = detect_script("Hello " + _NIHAO)
    assert result.confidence < 0.8 or result.primary_script is ScriptType.MIXED
    assert len(result.distribution) >= 2
