"""Internal shared utilities for strangerstrings."""

from __future__ import annotations

from collections.abc import Iterable

from strangerstrings.enums import EncodingKind
from strangerstrings.errors import InvalidInputError

#: Default minimum run length for binary extraction.
DEFAULT_MIN_LENGTH: int = 4

#: Encodings used for binary analysis when the caller names none.
DEFAULT_ENCODINGS: tuple[EncodingKind, ...] = (EncodingKind.ASCII,)

#: Bytes decoded per window when a whole-buffer decode reports errors.
WINDOW_SIZE: int = 1024

#: Distance between consecutive window starts (50% overlap).
WINDOW_STEP: int = 512


def _validate_min_length(min_length: int) -> None:
    """Raise InvalidInputError if *min_length* is not a positive integer."""
    if (
        isinstance(min_length, bool)
        or not isinstance(min_length, int)
        or min_length < 1
    ):
        msg = "min_length must be a positive integer"
        raise InvalidInputError(msg)


def _resolve_encodings(
    encodings: Iterable[str | EncodingKind] | None,
    default: tuple[EncodingKind, ...] = DEFAULT_ENCODINGS,
) -> tuple[EncodingKind, ...]:
    """Turn a mix of names and members into a de-duplicated tuple of kinds."""
    if encodings is None:
        return default
    resolved: list[EncodingKind] = []
    for name in encodings:
        kind = EncodingKind.from_name(name)
        if kind not in resolved:
            resolved.append(kind)
    if not resolved:
        msg = "at least one encoding is required"
        raise InvalidInputError(msg)
    return tuple(resolved)
