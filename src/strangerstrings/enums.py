"""Enumerations for strangerstrings."""

from __future__ import annotations

import enum

from strangerstrings.errors import InvalidInputError


class EncodingKind(enum.Enum):
    """Character encodings the extractor can decode candidate strings from.

    Each member's value is its display name.
    """

    UTF8 = "UTF-8"
    UTF16LE = "UTF-16LE"
    UTF16BE = "UTF-16BE"
    LATIN1 = "Latin-1"
    LATIN9 = "Latin-9"
    ASCII = "ASCII"

    def __str__(self) -> str:
        return self.value

    @property
    def unit_width(self) -> int:
        """Bytes per code unit, used to turn character positions into offsets."""
        if self in (EncodingKind.UTF16LE, EncodingKind.UTF16BE):
            return 2
        return 1

    @classmethod
    def all(cls) -> tuple[EncodingKind, ...]:
        """Return every supported encoding, in extraction order."""
        return tuple(cls)

    @classmethod
    def from_name(cls, name: str | EncodingKind) -> EncodingKind:
        """Resolve a user-supplied encoding name.

        :param name: An alias such as ``"utf-8"``, ``"utf16le"`` or
            ``"iso-8859-15"`` (case-insensitive), or an :class:`EncodingKind`.
        :raises InvalidInputError: If the name is not recognised.
        """
        if isinstance(name, EncodingKind):
            return name
        kind = _ENCODING_ALIASES.get(name.lower())
        if kind is None:
            msg = f"Unsupported encoding: {name}"
            raise InvalidInputError(msg)
        return kind


_ENCODING_ALIASES: dict[str, EncodingKind] = {
    "utf8": EncodingKind.UTF8,
    "utf-8": EncodingKind.UTF8,
    "utf16le": EncodingKind.UTF16LE,
    "utf-16le": EncodingKind.UTF16LE,
    "utf16-le": EncodingKind.UTF16LE,
    "utf-16-le": EncodingKind.UTF16LE,
    "utf16be": EncodingKind.UTF16BE,
    "utf-16be": EncodingKind.UTF16BE,
    "utf16-be": EncodingKind.UTF16BE,
    "utf-16-be": EncodingKind.UTF16BE,
    "latin1": EncodingKind.LATIN1,
    "latin-1": EncodingKind.LATIN1,
    "iso-8859-1": EncodingKind.LATIN1,
    "windows-1252": EncodingKind.LATIN1,
    "latin9": EncodingKind.LATIN9,
    "latin-9": EncodingKind.LATIN9,
    "iso-8859-15": EncodingKind.LATIN9,
    "ascii": EncodingKind.ASCII,
}


class ScriptType(enum.Enum):
    """Writing-system families the scorers distinguish."""

    LATIN = "Latin"
    HAN = "Han"
    ARABIC = "Arabic"
    CYRILLIC = "Cyrillic"
    MIXED = "Mixed"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def all(cls) -> tuple[ScriptType, ...]:
        """Return the concrete scripts that have a dedicated scorer."""
        return (cls.LATIN, cls.HAN, cls.ARABIC, cls.CYRILLIC)

    @classmethod
    def from_name(cls, name: str | ScriptType) -> ScriptType:
        """Resolve a user-supplied script name.

        :raises InvalidInputError: If the name is not recognised.
        """
        if isinstance(name, ScriptType):
            return name
        script = _SCRIPT_ALIASES.get(name.lower())
        if script is None:
            msg = f"Unsupported script: {name}"
            raise InvalidInputError(msg)
        return script


_SCRIPT_ALIASES: dict[str, ScriptType] = {
    "latin": ScriptType.LATIN,
    "han": ScriptType.HAN,
    "chinese": ScriptType.HAN,
    "cjk": ScriptType.HAN,
    "arabic": ScriptType.ARABIC,
    "cyrillic": ScriptType.CYRILLIC,
    "russian": ScriptType.CYRILLIC,
    "mixed": ScriptType.MIXED,
}
