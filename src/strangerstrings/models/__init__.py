"""Trigram model parsing and smoothed log-probability tables.

A model description (``.sng`` format) is a text file of ``#`` comment lines,
one of which declares ``Model Type: <label>``, and tab-separated data lines::

    [^]	h	e	10
    h	e	l	20
    l	o	[$]	5

The three tables are stored flat in :class:`array.array` buffers indexed by
raw symbol codes, ``(c1 << 7) | c2`` for the boundary tables and
``(c1 << 14) | (c2 << 7) | c3`` for the trigram table.
"""

from __future__ import annotations

import logging
import math
import os
from array import array
from collections.abc import Iterable
from pathlib import Path

from strangerstrings.errors import ModelParsingError

logger = logging.getLogger(__name__)

#: Number of symbols in the model alphabet (7-bit ASCII).
ALPHABET_SIZE: int = 128

#: Token marking the beginning of a string in a model file.
BEGIN_MARKER: str = "[^]"

#: Token marking the end of a string in a model file.
END_MARKER: str = "[$]"

MODEL_TYPE_PREFIX: str = "Model Type: "

_PAIR_CELLS = ALPHABET_SIZE * ALPHABET_SIZE
_TRIPLE_CELLS = _PAIR_CELLS * ALPHABET_SIZE

# Mnemonics for the ASCII control characters, space and DEL, as written in
# model files: code -> (token, description).
ASCII_DESCRIPTIONS: dict[int, tuple[str, str]] = {
    0: ("[NUL]", "null"),
    1: ("[SOH]", "start of header"),
    2: ("[STX]", "start of text"),
    3: ("[ETX]", "end of text"),
    4: ("[EOT]", "end of transmission"),
    5: ("[ENQ]", "enquiry"),
    6: ("[ACK]", "acknowledgement"),
    7: ("[BEL]", "bell"),
    8: ("[BS]", "backspace"),
    9: ("[HT]", "horizontal tab"),
    10: ("[LF]", "line feed"),
    11: ("[VT]", "vertical tab"),
    12: ("[FF]", "form feed"),
    13: ("[CR]", "carriage return"),
    14: ("[SO]", "shift out"),
    15: ("[SI]", "shift in"),
    16: ("[DLE]", "data link escape"),
    17: ("[DC1]", "device control 1"),
    18: ("[DC2]", "device control 2"),
    19: ("[DC3]", "device control 3"),
    20: ("[DC4]", "device control 4"),
    21: ("[NAK]", "negative acknowledge"),
    22: ("[SYN]", "synchronous idle"),
    23: ("[ETB]", "end of transmission block"),
    24: ("[CAN]", "cancel"),
    25: ("[EM]", "end of medium"),
    26: ("[SUB]", "substitute"),
    27: ("[ESC]", "escape"),
    28: ("[FS]", "file separator"),
    29: ("[GS]", "group separator"),
    30: ("[RS]", "record separator"),
    31: ("[US]", "unit separator"),
    32: ("[SP]", "space"),
    127: ("[DEL]", "delete"),
}

#: Reverse lookup used while parsing: mnemonic token -> symbol code.
DESCRIPTION_TO_CODE: dict[str, int] = {
    token: code for code, (token, _) in ASCII_DESCRIPTIONS.items()
}


class TrigramCounts:
    """Raw trigram counts accumulated while reading a model description.

    Counts are kept sparse; every absent key is a zero count.
    """

    __slots__ = ("begin", "end", "total", "trigram")

    def __init__(self) -> None:
        self.begin: dict[tuple[int, int], int] = {}
        self.end: dict[tuple[int, int], int] = {}
        self.trigram: dict[tuple[int, int, int], int] = {}
        self.total: int = 0

    def add_begin(self, c1: int, c2: int, count: int) -> None:
        key = (c1, c2)
        self.begin[key] = self.begin.get(key, 0) + count

    def add_end(self, c1: int, c2: int, count: int) -> None:
        key = (c1, c2)
        self.end[key] = self.end.get(key, 0) + count

    def add_trigram(self, c1: int, c2: int, c3: int, count: int) -> None:
        key = (c1, c2, c3)
        self.trigram[key] = self.trigram.get(key, 0) + count


def _smoothed_table(
    nonzero: dict[int, int], cells: int, total: float
) -> array:
    """Build a log10 table where every zero count has been raised to one."""
    table = array("d", [math.log10(1 / total)]) * cells
    for index, count in nonzero.items():
        table[index] = math.log10(count / total)
    return table


class TrigramModel:
    """Immutable table of smoothed log10 trigram probabilities.

    Built once from :class:`TrigramCounts` and then shared read-only, so a
    single instance can serve any number of concurrent scoring calls.
    """

    __slots__ = ("_begin", "_end", "_is_lowercase", "_model_type", "_trigram")

    def __init__(self, counts: TrigramCounts, model_type: str) -> None:
        """Apply add-one smoothing to *counts* and convert to log10 probabilities.

        :param counts: Accumulated raw counts.
        :param model_type: The label declared by the model file.
        """
        begin = {
            (c1 << 7) | c2: n for (c1, c2), n in counts.begin.items() if n > 0
        }
        end = {(c1 << 7) | c2: n for (c1, c2), n in counts.end.items() if n > 0}
        trigram = {
            (c1 << 14) | (c2 << 7) | c3: n
            for (c1, c2, c3), n in counts.trigram.items()
            if n > 0
        }
        # Every cell still at zero is raised to one, and the denominator
        # grows by one for each of them.
        zero_cells = (
            (_PAIR_CELLS - len(begin))
            + (_PAIR_CELLS - len(end))
            + (_TRIPLE_CELLS - len(trigram))
        )
        total = float(counts.total + zero_cells)

        self._begin = _smoothed_table(begin, _PAIR_CELLS, total)
        self._end = _smoothed_table(end, _PAIR_CELLS, total)
        self._trigram = _smoothed_table(trigram, _TRIPLE_CELLS, total)
        self._model_type = model_type
        self._is_lowercase = model_type == "lowercase"

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, name):
            msg = f"TrigramModel is immutable; cannot set {name!r}"
            raise AttributeError(msg)
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return (
            f"TrigramModel(model_type={self._model_type!r}, "
            f"is_lowercase={self._is_lowercase})"
        )

    @property
    def model_type(self) -> str:
        return self._model_type

    @property
    def is_lowercase(self) -> bool:
        """True iff the declared model type is exactly ``"lowercase"``."""
        return self._is_lowercase

    def trigram_prob(self, c1: int, c2: int, c3: int) -> float:
        return self._trigram[(c1 << 14) | (c2 << 7) | c3]

    def begin_prob(self, c1: int, c2: int) -> float:
        return self._begin[(c1 << 7) | c2]

    def end_prob(self, c1: int, c2: int) -> float:
        return self._end[(c1 << 7) | c2]


def _symbol_code(token: str, line: str) -> int:
    """Resolve a symbol token that must stand for a real character."""
    if token in (BEGIN_MARKER, END_MARKER):
        msg = f"Unexpected marker in ASCII position: {token} (line: {line!r})"
        raise ModelParsingError(msg)
    if len(token) == 1 and ord(token) < ALPHABET_SIZE:
        return ord(token)
    code = DESCRIPTION_TO_CODE.get(token)
    if code is None:
        msg = f"Unknown character representation: {token} (line: {line!r})"
        raise ModelParsingError(msg)
    return code


def _parse_count(field: str, line: str) -> int:
    # int() would also accept whitespace, underscores and non-ASCII digits.
    digits = field[1:] if field.startswith("+") else field
    if not (digits.isascii() and digits.isdigit()):
        msg = f"Invalid count in line: {line!r}"
        raise ModelParsingError(msg)
    return int(digits)


def parse_model_lines(lines: Iterable[str]) -> TrigramModel:
    """Parse a model description given as an iterable of lines.

    :param lines: Lines of a ``.sng`` description, with or without newlines.
    :returns: The smoothed, immutable :class:`TrigramModel`.
    :raises ModelParsingError: On a malformed line, a bad count, an unknown
        symbol token, or a missing ``Model Type:`` declaration.
    """
    counts = TrigramCounts()
    model_type = ""
    data_lines = 0

    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue

        if line.startswith("#"):
            index = line.find(MODEL_TYPE_PREFIX)
            if index >= 0:
                model_type = line[index + len(MODEL_TYPE_PREFIX) :]
            continue

        fields = line.split("\t")
        if len(fields) != 4:
            msg = f"Invalid line format: {line!r}"
            raise ModelParsingError(msg)
        first, second, third, count_field = fields
        count = _parse_count(count_field, line)

        if first == BEGIN_MARKER:
            # [^] x [$] describes a string of at most one character; it has
            # no pair to record but still counts toward the total.
            if third != END_MARKER:
                counts.add_begin(
                    _symbol_code(second, line), _symbol_code(third, line), count
                )
            elif second not in (BEGIN_MARKER, END_MARKER):
                _symbol_code(second, line)
        elif third == END_MARKER:
            counts.add_end(
                _symbol_code(first, line), _symbol_code(second, line), count
            )
        else:
            counts.add_trigram(
                _symbol_code(first, line),
                _symbol_code(second, line),
                _symbol_code(third, line),
                count,
            )
        counts.total += count
        data_lines += 1

    if not model_type:
        msg = "Model file does not contain model type"
        raise ModelParsingError(msg)

    model = TrigramModel(counts, model_type)
    logger.debug(
        "Parsed %s model: %d data lines, %d observations",
        model_type,
        data_lines,
        counts.total,
    )
    return model


def parse_model_string(content: str) -> TrigramModel:
    """Parse a model description held in memory."""
    return parse_model_lines(content.splitlines())


def parse_model_file(path: str | os.PathLike[str]) -> TrigramModel:
    """Parse a model description from disk.

    :raises OSError: If the file cannot be read.
    :raises ModelParsingError: If its content is malformed or not UTF-8.
    """
    with Path(path).open(encoding="utf-8", newline="") as f:
        try:
            return parse_model_lines(f)
        except UnicodeDecodeError as e:
            msg = f"Model file is not valid UTF-8: {path}"
            raise ModelParsingError(msg) from e
