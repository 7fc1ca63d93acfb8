"""Stage: decode a byte buffer under one encoding and find printable runs.

ASCII is scanned directly on the bytes.  Every other encoding is decoded
as a whole first; if that reports errors, the buffer is decoded again in
overlapping windows with replacement so a corrupt region only spoils the
windows that contain it.
"""

from __future__ import annotations

import codecs
import logging
import re
from collections.abc import Iterator

from strangerstrings._utils import WINDOW_SIZE, WINDOW_STEP
from strangerstrings.enums import EncodingKind

logger = logging.getLogger(__name__)

# Bytes 0x20..0x7E and tab.
_ASCII_RUN_RE = re.compile(rb"[\x20-\x7e\t]+")

# Excludes C0 controls other than tab, DEL, C1 controls, the BOM, U+FFFD,
# the two BMP noncharacters and the private-use areas.
_PRINTABLE_RUN_RE = re.compile(
    r"[^\x00-\x08\x0a-\x1f\x7f-\x9f\ufeff\ufffd-\uffff\ue000-\uf8ff"
    r"\U000f0000-\U000ffffd\U00100000-\U0010fffd]+"
)

_C1_PASSTHROUGH = "strangerstrings.c1-passthrough"

# Latin-1 is decoded the way web browsers decode it: as windows-1252, with
# the five bytes that code page leaves undefined mapped to C1 controls.
_CODEC_NAMES: dict[EncodingKind, str] = {
    EncodingKind.UTF8: "utf-8",
    EncodingKind.UTF16LE: "utf-16-le",
    EncodingKind.UTF16BE: "utf-16-be",
    EncodingKind.LATIN1: "cp1252",
    EncodingKind.LATIN9: "iso8859-15",
    EncodingKind.ASCII: "ascii",
}


def _c1_passthrough(exc: UnicodeError) -> tuple[str, int]:
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    return chr(exc.object[exc.start]), exc.start + 1


codecs.register_error(_C1_PASSTHROUGH, _c1_passthrough)


def codec_name(encoding: EncodingKind) -> str:
    """Return the Python codec used to decode *encoding*."""
    return _CODEC_NAMES[encoding]


def is_printable_char(ch: str) -> bool:
    """Return True if *ch* may be part of an extracted run.

    ASCII characters must be graphic, space or tab.  Other characters must
    not be controls, U+FFFD, a BOM, U+FFFE/U+FFFF or private use.
    """
    return _PRINTABLE_RUN_RE.fullmatch(ch) is not None


def decode(data: bytes, encoding: EncodingKind, *, replace: bool = False) -> str:
    """Decode *data* strictly, or with U+FFFD substitution if *replace* is set.

    :raises UnicodeDecodeError: In strict mode, if *data* is not valid in
        *encoding*.  Latin-1 and Latin-9 never fail.
    """
    if encoding is EncodingKind.LATIN1:
        return data.decode("cp1252", errors=_C1_PASSTHROUGH)
    return data.decode(_CODEC_NAMES[encoding], "replace" if replace else "strict")


def ascii_runs(data: bytes) -> Iterator[tuple[int, str]]:
    """Yield ``(byte_offset, run)`` for every printable ASCII run in *data*."""
    for match in _ASCII_RUN_RE.finditer(data):
        yield match.start(), match.group().decode("ascii")


def text_runs(
    text: str, base_offset: int, unit_width: int
) -> Iterator[tuple[int, str]]:
    """Yield ``(byte_offset, run)`` for every printable run in decoded *text*.

    The offset of a run is ``base_offset + char_index * unit_width``.
    """
    for match in _PRINTABLE_RUN_RE.finditer(text):
        yield base_offset + match.start() * unit_width, match.group()


def encoded_runs(
    data: bytes, encoding: EncodingKind
) -> Iterator[tuple[int, str]]:
    """Yield ``(byte_offset, run)`` pairs for *data* decoded as *encoding*.

    When the whole buffer does not decode cleanly, runs come from
    :data:`~strangerstrings._utils.WINDOW_SIZE`-byte windows taken every
    :data:`~strangerstrings._utils.WINDOW_STEP` bytes.  Overlapping windows
    report some runs more than once; callers de-duplicate by
    ``(offset, run)``.
    """
    if encoding is EncodingKind.ASCII:
        yield from ascii_runs(data)
        return

    width = encoding.unit_width
    try:
        text = decode(data, encoding)
    except UnicodeDecodeError as exc:
        logger.debug(
            "%s: decode error at byte %d, falling back to %d-byte windows",
            encoding,
            exc.start,
            WINDOW_SIZE,
        )
    else:
        yield from text_runs(text, 0, width)
        return

    for start in range(0, len(data), WINDOW_STEP):
        window = decode(data[start : start + WINDOW_SIZE], encoding, replace=True)
        yield from text_runs(window, start, width)
