# tests/test_enums.py
from __future__ import annotations

import pytest

from strangerstrings.enums import EncodingKind, ScriptType
from strangerstrings.errors import InvalidInputError


def test_encoding_display_names():
    assert str(EncodingKind.UTF8) == "UTF-8"
    assert str(EncodingKind.UTF16LE) == "UTF-16LE"
    assert str(EncodingKind.LATIN9) == "Latin-9"
    assert str(EncodingKind.ASCII) == "ASCII"


def test_encoding_all_in_extraction_order():
    assert EncodingKind.all() == (
        EncodingKind.UTF8,
        EncodingKind.UTF16LE,
        EncodingKind.UTF16BE,
        EncodingKind.LATIN1,
        EncodingKind.LATIN9,
        EncodingKind.ASCII,
    )


def test_unit_width():
    assert EncodingKind.UTF16LE.unit_width == 2
    assert EncodingKind.UTF16BE.unit_width == 2
    assert EncodingKind.UTF8.unit_width == 1
    assert EncodingKind.LATIN1.unit_width == 1


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("utf-8", EncodingKind.UTF8),
        ("UTF8", EncodingKind.UTF8),
        ("utf-16le", EncodingKind.UTF16LE),
        ("UTF16-BE", EncodingKind.UTF16BE),
        ("ISO-8859-1", EncodingKind.LATIN1),
        ("latin9", EncodingKind.LATIN9),
        ("ascii", EncodingKind.ASCII),
    ],
)
def test_encoding_from_name(name: str, expected: EncodingKind):
    assert EncodingKind.from_name(name) is expected


def test_encoding_from_name_passes_members_through():
    assert EncodingKind.from_name(EncodingKind.LATIN1) is EncodingKind.LATIN1


def test_encoding_from_name_rejects_unknown():
    with pytest.raises(InvalidInputError, match="Unsupported encoding: ebcdic"):
        EncodingKind.from_name("ebcdic")


def test_script_all_excludes_mixed_and_unknown():
    assert ScriptType.all() == (
        ScriptType.LATIN,
        ScriptType.HAN,
        ScriptType.ARABIC,
        ScriptType.CYRILLIC,
    )


def test_script_from_name():
    assert ScriptType.from_name("Chinese") is ScriptType.HAN
    assert ScriptType.from_name("cyrillic") is ScriptType.CYRILLIC
    assert ScriptType.from_name(ScriptType.ARABIC) is ScriptType.ARABIC
    with pytest.raises(InvalidInputError):
        ScriptType.from_name("klingon")


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        EncodingKind.from_name("nope")
