"""Exception hierarchy shared by the font parsers, renderer and converter."""
from __future__ import annotations


class FontError(ValueError):
    """Base class for every font decoding, rendering or conversion failure."""


class FileTooShortError(FontError):
    """Raised when a buffer cannot hold even the fixed file header."""

    def __init__(self, length: int, minimum: int) -> None:
        super().__init__(f"file too short: {length} bytes (need at least {minimum})")
        self.length = length
        self.minimum = minimum


class SignatureMismatchError(FontError):
    """Raised when a magic value or signature does not match the format."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"signature mismatch: {detail}")
        self.detail = detail


class TruncatedFieldError(FontError):
    """Raised when the buffer ends inside a named header field."""

    def __init__(self, field: str) -> None:
        super().__init__(f"truncated {field}")
        self.field = field


class UnsupportedFontTypeError(FontError):
    """Raised for a TDF font type byte outside ``0..2``."""

    def __init__(self, code: int) -> None:
        super().__init__(f"unsupported font type {code}")
        self.code = code


class GlyphOffsetError(FontError):
    """Raised when a lookup table entry points outside the glyph block."""

    def __init__(self, offset: int, block_size: int) -> None:
        super().__init__(f"glyph offset {offset} outside font data of {block_size} bytes")
        self.offset = offset
        self.block_size = block_size


class EmptyBundleError(FontError):
    """Raised when a font bundle carries no fonts at all."""

    def __init__(self) -> None:
        super().__init__("font bundle contains no fonts")


class NameTooLongError(FontError):
    """Raised when a font name does not fit the fixed TDF name field."""

    def __init__(self, name: str, length: int, limit: int) -> None:
        super().__init__(f"font name {name!r} too long: {length} bytes (limit {limit})")
        self.name = name
        self.length = length
        self.limit = limit


class UnrecognizedFormatError(FontError):
    """Raised when a buffer matches neither the FIGlet nor the TDF signature."""

    def __init__(self) -> None:
        super().__init__("unrecognized font format")


class UnknownCharacterError(FontError):
    """Raised when rendering a character the font does not define."""

    def __init__(self, char: str) -> None:
        super().__init__(f"unknown character: {char!r}")
        self.char = char


class CharacterRangeError(FontError):
    """Raised when storing a glyph for a character the font cannot hold."""

    def __init__(self, char: str) -> None:
        super().__init__(f"character {char!r} outside the font's storable range")
        self.char = char


class UnsupportedConversionError(FontError):
    """Raised when converting into a font type the converter cannot produce."""

    def __init__(self, target: object) -> None:
        super().__init__(f"unsupported conversion target: {target}")
        self.target = target


class IncompatibleConversionError(FontError):
    """Raised when no glyph of the source font fits the target format."""

    def __init__(self, detail: str = "no printable glyph fits the target dimensions") -> None:
        super().__init__(f"incompatible font: {detail}")


class FigletParseError(FontError):
    """Raised for structural problems in a FIGlet ``flf2a`` font."""


class SerializationError(FontError):
    """Raised when a font cannot be represented in the binary TDF layout."""


__all__ = [
    "CharacterRangeError",
    "EmptyBundleError",
    "FigletParseError",
    "FileTooShortError",
    "FontError",
    "GlyphOffsetError",
    "IncompatibleConversionError",
    "NameTooLongError",
    "SerializationError",
    "SignatureMismatchError",
    "TruncatedFieldError",
    "UnknownCharacterError",
    "UnrecognizedFormatError",
    "UnsupportedConversionError",
    "UnsupportedFontTypeError",
]
