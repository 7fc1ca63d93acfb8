"""Stage: canonicalize a candidate string for trigram scoring."""

from __future__ import annotations

import re

from strangerstrings.pipeline import NormalizedString

# ASCII whitespace as trimmed before scoring; U+001C..U+001F are kept.
_TRIM_CHARS = " \t\n\r\x0b\x0c"

_SPACE_RUN_RE = re.compile(" {2,}")
_TAB_RUN_RE = re.compile("\t{2,}")
_NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")


def normalize_spaces(text: str) -> str:
    """Trim *text* and collapse runs of spaces and runs of tabs."""
    text = text.strip(_TRIM_CHARS)
    text = _SPACE_RUN_RE.sub(" ", text)
    return _TAB_RUN_RE.sub("\t", text)


def normalize(text: str, lowercase: bool = False) -> NormalizedString:
    """Prepare *text* for scoring against a trigram model.

    :param text: The candidate string.
    :param lowercase: Lowercase first (for models trained on lowercase text).
    :returns: The original, the normalized form and its symbol codes.
    """
    scored = text.lower() if lowercase else text
    if not scored.isascii():
        scored = _NON_ASCII_RE.sub(" ", scored)
    scored = normalize_spaces(scored)
    return NormalizedString(
        original=text,
        normalized=scored,
        symbol_codes=scored.encode("ascii"),
    )
