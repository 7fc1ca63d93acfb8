# tests/conftest.py
"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from strangerstrings.models import TrigramModel, parse_model_string

# Every begin pair, trigram and end pair of these words gets a large count, so
# they (and text built from them) score far above the thresholds while
# anything unseen falls back to the smoothed floor.
_TRAINING_WORDS = ("hello", "world", "string", "function")
_COUNT = 100000


def _model_lines(words: Iterable[str], model_type: str) -> list[str]:
    lines = ["# Synthetic model for tests", f"# Model Type: {model_type}"]
    for word in words:
        lines.append(f"[^]\t{word[0]}\t{word[1]}\t{_COUNT}")
        for i in range(len(word) - 2):
            lines.append(f"{word[i]}\t{word[i + 1]}\t{word[i + 2]}\t{_COUNT}")
        lines.append(f"{word[-2]}\t{word[-1]}\t[$]\t{_COUNT}")
    return lines


@pytest.fixture(scope="session")
def make_model_content() -> Callable[..., str]:
    """Return a builder for ``.sng`` text trained on a handful of words."""

    def build(
        words: Iterable[str] = _TRAINING_WORDS, model_type: str = "lowercase"
    ) -> str:
        return "\n".join(_model_lines(words, model_type)) + "\n"

    return build


@pytest.fixture(scope="session")
def model_content(make_model_content: Callable[..., str]) -> str:
    return make_model_content()


@pytest.fixture(scope="session")
def model(model_content: str) -> TrigramModel:
    return parse_model_string(model_content)


@pytest.fixture
def model_file(tmp_path: Path, model_content: str) -> Path:
    path = tmp_path / "StringModel.sng"
    path.write_text(model_content, encoding="utf-8")
    return path
