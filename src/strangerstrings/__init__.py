"""Find human-readable strings in binary data with trigram and script scoring."""

from __future__ import annotations

import os
from collections.abc import Iterable

from strangerstrings._utils import DEFAULT_MIN_LENGTH
from strangerstrings.analyzer import (
    AnalysisOptions,
    BinaryAnalysisOptions,
    StrangerStrings,
)
from strangerstrings.enums import EncodingKind, ScriptType
from strangerstrings.errors import (
    InvalidInputError,
    ModelNotLoadedError,
    ModelParsingError,
    StrangerStringsError,
)
from strangerstrings.models import TrigramModel, parse_model_file, parse_model_string
from strangerstrings.pipeline import (
    EncodedString,
    LanguageDetectionResult,
    ScoringResult,
    StringAnalysisResult,
)
from strangerstrings.pipeline.extract import extract_strings
from strangerstrings.pipeline.script import detect_script
from strangerstrings.pipeline.trigram import NG_THRESHOLDS, threshold_for_length

__version__ = "0.1.0"
__all__ = [
    "NG_THRESHOLDS",
    "AnalysisOptions",
    "BinaryAnalysisOptions",
    "EncodedString",
    "EncodingKind",
    "InvalidInputError",
    "LanguageDetectionResult",
    "ModelNotLoadedError",
    "ModelParsingError",
    "ScoringResult",
    "ScriptType",
    "StrangerStrings",
    "StrangerStringsError",
    "StringAnalysisResult",
    "TrigramModel",
    "analyze_buffer",
    "analyze_string",
    "detect_script",
    "extract_candidates",
    "load_model",
    "threshold_for_length",
]


def load_model(
    path: str | os.PathLike[str] | None = None, *, content: str | None = None
) -> TrigramModel:
    """Load a trigram model from a ``.sng`` file or from inline text.

    :raises InvalidInputError: If neither *path* nor *content* is given.
    :raises ModelParsingError: If the description is malformed.
    """
    if path is not None:
        return parse_model_file(path)
    if content is not None:
        return parse_model_string(content)
    msg = "Either a model path or model content must be provided"
    raise InvalidInputError(msg)


def _analyzer(model: TrigramModel | None, use_script_scoring: bool) -> StrangerStrings:
    analyzer = StrangerStrings()
    if model is not None:
        analyzer.set_model(model)
    elif use_script_scoring:
        analyzer.enable_script_scoring()
    return analyzer


def analyze_string(
    text: str,
    model: TrigramModel | None = None,
    *,
    use_script_scoring: bool = False,
    force_script: str | ScriptType | None = None,
) -> StringAnalysisResult:
    """Score a single candidate string.

    :param text: The candidate string.
    :param model: Trigram model for Latin text.  Optional with script
        scoring, as long as the text is not routed to the trigram scorer.
    :param use_script_scoring: Route the string by its detected script.
    :param force_script: Score as this script; implies script scoring.
    :raises ModelNotLoadedError: If trigram scoring is needed without a model.
    """
    scripted = use_script_scoring or force_script is not None
    return _analyzer(model, scripted).analyze_string(
        text, use_script_scoring=use_script_scoring, force_script=force_script
    )


def extract_candidates(
    data: bytes | bytearray,
    min_length: int = DEFAULT_MIN_LENGTH,
    encodings: Iterable[str | EncodingKind] | None = None,
) -> list[EncodedString]:
    """Extract filtered candidate strings from raw bytes.

    :param data: The bytes to scan.
    :param min_length: Minimum run length.
    :param encodings: Encoding names or members (default: ASCII only).
    :returns: Candidates ordered by ``(offset, content)``, without duplicates.
    """
    return extract_strings(bytes(data), min_length, encodings)


def analyze_buffer(
    data: bytes | bytearray,
    model: TrigramModel | None = None,
    *,
    min_length: int = DEFAULT_MIN_LENGTH,
    encodings: Iterable[str | EncodingKind] | None = None,
    use_script_scoring: bool = False,
) -> list[StringAnalysisResult]:
    """Extract candidate strings from raw bytes and score every one of them.

    :raises ModelNotLoadedError: On the first candidate that needs a model
        when none is given.
    """
    options = BinaryAnalysisOptions(
        min_length=min_length,
        encodings=None if encodings is None else tuple(encodings),
        use_script_scoring=use_script_scoring,
    )
    return _analyzer(model, use_script_scoring).analyze_binary(bytes(data), options)
