# tests/test_api.py
from __future__ import annotations

import json
from pathlib import Path

import pytest

import strangerstrings
from strangerstrings import (
    EncodingKind,
    InvalidInputError,
    ModelNotLoadedError,
    ScriptType,
    TrigramModel,
)


def test_version():
    assert strangerstrings.__version__ == "0.1.0"


def test_load_model_from_content(model_content: str):
    model = strangerstrings.load_model(content=model_content)
    assert isinstance(model, TrigramModel)
    assert model.is_lowercase


def test_load_model_from_path(model_file: Path):
    assert strangerstrings.load_model(model_file).model_type == "lowercase"
    assert strangerstrings.load_model(str(model_file)).model_type == "lowercase"


def test_load_model_requires_a_source():
    with pytest.raises(InvalidInputError):
        strangerstrings.load_model()


def test_analyze_string(model: TrigramModel):
    assert strangerstrings.analyze_string("hello", model).is_valid
    assert not strangerstrings.analyze_string("xqzj", model).is_valid


def test_analyze_string_script_scoring_without_model():
    result = strangerstrings.analyze_string("你好世界", use_script_scoring=True)
    assert result.scorer_name == "Chinese"
    assert result.is_valid


def test_analyze_string_force_script_without_model():
    result = strangerstrings.analyze_string("привет", force_script=ScriptType.CYRILLIC)
    assert result.scorer_name == "Cyrillic"


def test_analyze_string_without_model_raises():
    with pytest.raises(ModelNotLoadedError):
        strangerstrings.analyze_string("hello")
    with pytest.raises(ModelNotLoadedError):
        strangerstrings.analyze_string("hello", use_script_scoring=True)


def test_extract_candidates_accepts_bytearray():
    found = strangerstrings.extract_candidates(bytearray(b"Hello\x00World"))
    assert [s.content for s in found] == ["Hello", "World"]


def test_extract_candidates_with_encodings():
    data = "Wide text".encode("utf-16-be")
    found = strangerstrings.extract_candidates(data, encodings=[EncodingKind.UTF16BE])
    assert [(s.offset, s.content) for s in found] == [(0, "Wide text")]


def test_analyze_buffer(model: TrigramModel):
    results = strangerstrings.analyze_buffer(b"hello\x00xqzjx\x00world", model)
    assert [r.original_string for r in results if r.is_valid] == ["hello", "world"]


def test_analyze_buffer_results_serialize(model: TrigramModel):
    results = strangerstrings.analyze_buffer(b"hello\x00world", model, min_length=5)
    payload = json.loads(json.dumps([r.to_dict() for r in results]))
    assert payload[0]["original_string"] == "hello"
    assert payload[0]["offset"] == 0
    assert payload[0]["encoding"] == "ASCII"
    assert payload[0]["is_valid"] is True


def test_detect_script_is_exported():
    assert strangerstrings.detect_script("hello").primary_script is ScriptType.LATIN


def test_thresholds_are_exported():
    assert strangerstrings.threshold_for_length(4) == strangerstrings.NG_THRESHOLDS[4]


def test_all_exports_exist():
    for name in strangerstrings.__all__:
        assert hasattr(strangerstrings, name), name
