"""Stage: multi-encoding candidate extraction.

Runs the decoder and the garbage filter for each requested encoding, then
merges everything into one list ordered by ``(offset, content)`` with exact
duplicates removed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from strangerstrings._utils import (
    DEFAULT_MIN_LENGTH,
    _resolve_encodings,
    _validate_min_length,
)
from strangerstrings.enums import EncodingKind
from strangerstrings.pipeline import BinaryString, EncodedString
from strangerstrings.pipeline.decode import ascii_runs, codec_name, encoded_runs
from strangerstrings.pipeline.garbage import is_garbage

logger = logging.getLogger(__name__)


def dedup_sorted(strings: Iterable[EncodedString]) -> list[EncodedString]:
    """Sort by ``(offset, content)`` and keep the first of each duplicate."""
    ordered = sorted(strings, key=lambda s: s.dedup_key)
    result: list[EncodedString] = []
    for item in ordered:
        if not result or result[-1].dedup_key != item.dedup_key:
            result.append(item)
    return result


def _byte_length(run: str, encoding: EncodingKind) -> int:
    if encoding is EncodingKind.ASCII:
        return len(run)
    return len(run.encode(codec_name(encoding)))


def extract_with_encoding(
    data: bytes, encoding: EncodingKind, min_length: int = DEFAULT_MIN_LENGTH
) -> list[EncodedString]:
    """Extract filtered runs from *data* decoded as a single encoding.

    A run is kept when its UTF-8 length reaches *min_length* and
    :func:`~strangerstrings.pipeline.garbage.is_garbage` does not flag it.
    """
    found = [
        EncodedString(
            content=run,
            offset=offset,
            encoding=encoding,
            byte_length=_byte_length(run, encoding),
        )
        for offset, run in encoded_runs(data, encoding)
        if len(run.encode("utf-8")) >= min_length and not is_garbage(run)
    ]
    return dedup_sorted(found)


class MultiEncodingExtractor:
    """Extract candidate strings from a byte buffer under several encodings.

    :param encodings: Encoding names or :class:`EncodingKind` members, tried
        in order.  ``None`` means ASCII only.
    :param min_length: Minimum run length (in UTF-8 bytes).
    """

    def __init__(
        self,
        encodings: Iterable[str | EncodingKind] | None = None,
        min_length: int = DEFAULT_MIN_LENGTH,
    ) -> None:
        _validate_min_length(min_length)
        self.encodings = _resolve_encodings(encodings)
        self.min_length = min_length

    @classmethod
    def with_all_encodings(
        cls, min_length: int = DEFAULT_MIN_LENGTH
    ) -> MultiEncodingExtractor:
        return cls(EncodingKind.all(), min_length)

    def extract_strings(self, data: bytes) -> list[EncodedString]:
        """Return the merged, de-duplicated runs found in *data*."""
        merged: list[EncodedString] = []
        for encoding in self.encodings:
            found = extract_with_encoding(data, encoding, self.min_length)
            logger.debug("%s: %d candidate strings", encoding, len(found))
            merged.extend(found)
        return dedup_sorted(merged)


def extract_strings(
    data: bytes,
    min_length: int = DEFAULT_MIN_LENGTH,
    encodings: Iterable[str | EncodingKind] | None = None,
) -> list[EncodedString]:
    """Extract candidate strings from *data*.

    :param data: Raw bytes to scan.
    :param min_length: Minimum run length.
    :param encodings: Encodings to decode with (default: ASCII only).
    :returns: Runs sorted by ``(offset, content)``, without duplicates.
    """
    return MultiEncodingExtractor(encodings, min_length).extract_strings(data)


def extract_ascii_strings(
    data: bytes, min_length: int = DEFAULT_MIN_LENGTH
) -> list[BinaryString]:
    """Return every printable ASCII run of *min_length* or more, unfiltered."""
    _validate_min_length(min_length)
    return [
        BinaryString(string=run, offset=offset)
        for offset, run in ascii_runs(data)
        if len(run) >= min_length
    ]
