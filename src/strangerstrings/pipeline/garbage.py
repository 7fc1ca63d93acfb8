"""Stage: reject decoded runs that look like binary noise.

Bytes misdecoded as Latin text produce runs full of replacement characters,
C0/C1 controls and U+0080..U+00FF letters.  Once normalization folds every
non-ASCII character to a space, such runs could pass for short words, so
they are dropped before they ever become candidates.
"""

from __future__ import annotations

import dataclasses
import unicodedata

_MAX_REPLACEMENT_RATIO = 0.05
_MAX_CONTROL_RATIO = 0.15
_MIN_ASCII_RATIO = 0.6
_MAX_NON_ASCII_RATIO = 0.4
_MAX_SUSPICIOUS_RATIO = 0.2


@dataclasses.dataclass(frozen=True, slots=True)
class CharClassCounts:
    """Per-class character tallies of one run.

    Tab falls into no class; CR and LF count as non-control but are not
    ASCII-printable either.
    """

    length: int
    replacement: int
    control: int
    ascii_printable: int
    non_ascii: int
    suspicious: int


def classify_chars(text: str) -> CharClassCounts:
    """Tally the character classes the garbage heuristic looks at."""
    replacement = control = ascii_printable = non_ascii = suspicious = 0
    for ch in text:
        cp = ord(ch)
        if cp == 0xFFFD:
            replacement += 1
        elif unicodedata.category(ch) == "Cc" and ch not in "\t\n\r":
            control += 1
        elif 0x21 <= cp <= 0x7E or cp == 0x20:
            ascii_printable += 1
        elif cp > 0x7F:
            non_ascii += 1
            if cp <= 0xFF:
                suspicious += 1
    return CharClassCounts(
        length=len(text),
        replacement=replacement,
        control=control,
        ascii_printable=ascii_printable,
        non_ascii=non_ascii,
        suspicious=suspicious,
    )


def is_garbage(text: str) -> bool:
    """Return True if *text* is more likely binary noise than natural text.

    A run is garbage when it is empty or when any of these hold: more than
    5% replacement characters, more than 15% control characters, less than
    60% printable ASCII, more than 40% non-ASCII, or more than 20% characters
    in U+0080..U+00FF.

    :param text: A decoded run.
    :returns: ``True`` if the run should be discarded.
    """
    counts = classify_chars(text)
    if counts.length == 0:
        return True
    n = counts.length
    return (
        counts.replacement / n > _MAX_REPLACEMENT_RATIO
        or counts.control / n > _MAX_CONTROL_RATIO
        or counts.ascii_printable / n < _MIN_ASCII_RATIO
        or counts.non_ascii / n > _MAX_NON_ASCII_RATIO
        or counts.suspicious / n > _MAX_SUSPICIOUS_RATIO
    )
