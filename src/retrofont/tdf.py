"""TheDraw font (TDF) bundle parser, lazy glyph decoder and serializer."""
from __future__ import annotations

import enum
import logging
import struct
from dataclasses import dataclass
from typing import Final, Iterable, Sequence

from .cp437 import HARD_BLANK_CODE, decode_bytes, encode_text, from_unicode, to_unicode
from .errors import (
    FileTooShortError,
    GlyphOffsetError,
    NameTooLongError,
    SerializationError,
    SignatureMismatchError,
    TruncatedFieldError,
    UnsupportedFontTypeError,
)
from .font import BaseFont
from .glyph import (
    END_MARKER,
    FILL_MARKER,
    HARD_BLANK,
    NEW_LINE,
    OUTLINE_HOLE,
    SKIP,
    AnsiChar,
    Char,
    EndMarker,
    FillMarker,
    Glyph,
    GlyphPart,
    HardBlank,
    NewLine,
    OutlineHole,
    OutlinePlaceholder,
    Skip,
)
from .lazy import LazyGlyphSource
from .outline import is_placeholder

LOGGER = logging.getLogger(__name__)

THE_DRAW_FONT_ID: Final[bytes] = b"TheDraw FONTS file"
ID_LENGTH: Final[int] = len(THE_DRAW_FONT_ID) + 1
TDF_SIGNATURE: Final[bytes] = bytes([ID_LENGTH]) + THE_DRAW_FONT_ID
CTRL_Z: Final[int] = 0x1A
HEADER_SIZE: Final[int] = len(TDF_SIGNATURE) + 1

FONT_INDICATOR: Final[int] = 0xFF00AA55
FONT_NAME_LEN: Final[int] = 12
FONT_NAME_LEN_MAX: Final[int] = 16
RESERVED_LEN: Final[int] = 4

FIRST_CHAR: Final[int] = ord("!")
LAST_CHAR: Final[int] = ord("~")
CHAR_TABLE_SIZE: Final[int] = LAST_CHAR - FIRST_CHAR + 1
NO_GLYPH: Final[int] = 0xFFFF
MAX_BLOCK_SIZE: Final[int] = 0xFFFF

GLYPH_TERMINATOR: Final[int] = 0x00
GLYPH_HEADER_SIZE: Final[int] = 2
LINE_BREAK: Final[int] = 13
END_MARK: Final[int] = ord("&")
FILL_MARK: Final[int] = ord("@")
HOLE_MARK: Final[int] = ord("O")
SPACE: Final[int] = ord(" ")

DEFAULT_FG: Final[int] = 7
DEFAULT_BG: Final[int] = 0
DEFAULT_ATTRIBUTE: Final[int] = DEFAULT_FG | (DEFAULT_BG << 4)

_LOOKUP_STRUCT = struct.Struct(f"<{CHAR_TABLE_SIZE}H")


class TdfFontType(enum.IntEnum):
    OUTLINE = 0
    BLOCK = 1
    COLOR = 2


def pack_attribute(fg: int, bg: int, blink: bool = False) -> int:
    """Pack colours into a TDF attribute byte (fg bits 0-3, bg bits 4-6, blink bit 7)."""

    attribute = (fg & 0x0F) | ((bg & 0x07) << 4)
    if blink:
        attribute |= 0x80
    return attribute


def unpack_attribute(attribute: int) -> tuple[int, int, bool]:
    """Return ``(fg, bg, blink)`` from a TDF attribute byte."""

    return attribute & 0x0F, (attribute >> 4) & 0x07, bool(attribute & 0x80)


@dataclass(frozen=True)
class GlyphLocator:
    """Absolute position of one glyph body inside its font's block window."""

    start: int
    block_end: int
    font_type: TdfFontType


def _color_part(code: int, attribute: int) -> GlyphPart:
    if code == HARD_BLANK_CODE:
        return HARD_BLANK
    fg, bg, blink = unpack_attribute(attribute)
    if code == SPACE and bg == 0:
        return SKIP
    return AnsiChar(to_unicode(code), fg, bg, blink)


def _block_part(code: int) -> GlyphPart:
    if code == HARD_BLANK_CODE:
        return HARD_BLANK
    if code == SPACE:
        return SKIP
    return Char(to_unicode(code))


def _outline_part(code: int) -> GlyphPart:
    if code == FILL_MARK:
        return FILL_MARKER
    if code == HOLE_MARK:
        return OUTLINE_HOLE
    if is_placeholder(code):
        return OutlinePlaceholder(code)
    if code == SPACE:
        return SKIP
    return Char(to_unicode(code))


def decode_glyph(data: bytes, locator: GlyphLocator) -> Glyph:
    """Decode one glyph body.

    The parser has already checked that ``locator.start`` leaves room for the
    width and height bytes inside the block, so reads only need bounding by
    ``locator.block_end``. Running out of bytes before the terminator ends the
    glyph early instead of failing.
    """

    cursor = locator.start
    end = locator.block_end
    if cursor + GLYPH_HEADER_SIZE > end:
        LOGGER.warning("glyph header at offset %d cut off by block end %d", cursor, end)
        return Glyph(width=0, height=1)

    width = data[cursor]
    declared_height = data[cursor + 1]
    cursor += GLYPH_HEADER_SIZE

    font_type = locator.font_type
    parts: list[GlyphPart] = []
    newlines = 0
    terminated = False
    while cursor < end:
        code = data[cursor]
        cursor += 1
        if code == GLYPH_TERMINATOR:
            terminated = True
            break
        if code == LINE_BREAK:
            parts.append(NEW_LINE)
            newlines += 1
            continue
        if code == END_MARK:
            parts.append(END_MARKER)
            continue
        if font_type is TdfFontType.COLOR:
            if cursor >= end:
                break
            attribute = data[cursor]
            cursor += 1
            parts.append(_color_part(code, attribute))
        elif font_type is TdfFontType.BLOCK:
            parts.append(_block_part(code))
        else:
            parts.append(_outline_part(code))

    if not terminated:
        # TODO: offer a strict mode that raises TruncatedFieldError here.
        LOGGER.debug("glyph at offset %d ended without terminator", locator.start)
    height = newlines + 1
    if height != declared_height:
        LOGGER.debug(
            "glyph at offset %d declares height %d but has %d lines",
            locator.start,
            declared_height,
            height,
        )
    return Glyph(width=width, height=height, parts=tuple(parts))


class TdfFont(BaseFont):
    """One font from a TheDraw bundle, covering the printable ``!``..``~`` range."""

    format_name = "tdf"
    slot_count = CHAR_TABLE_SIZE

    def __init__(
        self,
        name: str,
        font_type: TdfFontType = TdfFontType.COLOR,
        spacing: int = 0,
        *,
        source: LazyGlyphSource[GlyphLocator] | None = None,
    ) -> None:
        super().__init__(name, source=source)
        self.font_type = TdfFontType(font_type)
        self._spacing = int(spacing)

    @property
    def spacing(self) -> int:
        return self._spacing

    @spacing.setter
    def spacing(self, value: int) -> None:
        self._spacing = int(value)

    @property
    def type_name(self) -> str:
        return self.font_type.name.lower()

    def slot_index(self, char: str) -> int | None:
        if len(char) != 1:
            return None
        code = ord(char)
        if FIRST_CHAR <= code <= LAST_CHAR:
            return code - FIRST_CHAR
        return None

    def slot_char(self, index: int) -> str:
        return chr(FIRST_CHAR + index)

    # -- parsing -----------------------------------------------------------

    @classmethod
    def load(cls, data: bytes | bytearray | memoryview) -> list["TdfFont"]:
        """Parse every font of a TDF bundle without decoding glyph bodies."""

        buffer = bytes(data)
        length = len(buffer)
        if length < HEADER_SIZE:
            raise FileTooShortError(length, HEADER_SIZE)
        if buffer[0] != ID_LENGTH:
            raise SignatureMismatchError(f"id length {buffer[0]} (expected {ID_LENGTH})")
        if buffer[1:ID_LENGTH] != THE_DRAW_FONT_ID:
            raise SignatureMismatchError("missing 'TheDraw FONTS file' id")
        if buffer[ID_LENGTH] != CTRL_Z:
            raise SignatureMismatchError("missing CTRL-Z after id")

        fonts: list[TdfFont] = []
        cursor = HEADER_SIZE
        while cursor < length:
            if buffer[cursor] == 0:
                break
            font, cursor = cls._parse_font(buffer, cursor)
            fonts.append(font)
        LOGGER.debug("parsed %d font(s) from %d byte TDF bundle", len(fonts), length)
        return fonts

    @classmethod
    def _parse_font(cls, buffer: bytes, cursor: int) -> tuple["TdfFont", int]:
        length = len(buffer)

        if cursor + 4 > length:
            raise TruncatedFieldError("font indicator")
        (indicator,) = struct.unpack_from("<I", buffer, cursor)
        if indicator != FONT_INDICATOR:
            raise SignatureMismatchError(f"font indicator 0x{indicator:08X} at offset {cursor}")
        cursor += 4

        if cursor >= length:
            raise TruncatedFieldError("name length")
        name_len = min(buffer[cursor], FONT_NAME_LEN_MAX)
        cursor += 1
        if cursor + name_len > length:
            raise TruncatedFieldError("name")
        raw_name = buffer[cursor : cursor + name_len]
        nul = raw_name.find(b"\x00")
        if nul >= 0:
            raw_name = raw_name[:nul]
        name = decode_bytes(raw_name)
        if cursor + FONT_NAME_LEN + RESERVED_LEN > length:
            raise TruncatedFieldError("reserved bytes")
        cursor += FONT_NAME_LEN + RESERVED_LEN

        if cursor >= length:
            raise TruncatedFieldError("font type")
        type_code = buffer[cursor]
        try:
            font_type = TdfFontType(type_code)
        except ValueError:
            raise UnsupportedFontTypeError(type_code) from None
        cursor += 1

        if cursor >= length:
            raise TruncatedFieldError("spacing")
        spacing = buffer[cursor]
        cursor += 1

        if cursor + 2 > length:
            raise TruncatedFieldError("block size")
        (block_size,) = struct.unpack_from("<H", buffer, cursor)
        cursor += 2

        if cursor + _LOOKUP_STRUCT.size > length:
            raise TruncatedFieldError("character table")
        lookup = _LOOKUP_STRUCT.unpack_from(buffer, cursor)
        cursor += _LOOKUP_STRUCT.size

        for offset in lookup:
            if offset != NO_GLYPH and offset >= block_size:
                raise GlyphOffsetError(offset, block_size)

        block_base = cursor
        block_end = block_base + block_size
        if block_end > length:
            raise TruncatedFieldError("glyph block")

        locators: list[GlyphLocator | None] = []
        for index, offset in enumerate(lookup):
            if offset == NO_GLYPH:
                locators.append(None)
            elif offset + GLYPH_HEADER_SIZE > block_size:
                LOGGER.warning(
                    "font %r: glyph %r at offset %d has no room for its header; treating as absent",
                    name,
                    chr(FIRST_CHAR + index),
                    offset,
                )
                locators.append(None)
            else:
                locators.append(GlyphLocator(block_base + offset, block_end, font_type))
        source = LazyGlyphSource(buffer, locators, decode_glyph)
        font = cls(name, font_type, spacing, source=source)
        LOGGER.debug(
            "font %r: type=%s spacing=%d block=%d bytes glyphs=%d",
            name,
            font_type.name,
            spacing,
            block_size,
            sum(1 for locator in locators if locator is not None),
        )
        return font, block_end

    # -- serialization -----------------------------------------------------

    def to_bytes(self) -> bytes:
        """Serialize this font as a single-font bundle."""

        return self.create_bundle([self])

    @staticmethod
    def create_bundle(fonts: Iterable["TdfFont"]) -> bytes:
        """Serialize ``fonts`` into one bundle terminated by a zero byte."""

        out = bytearray(TDF_SIGNATURE)
        out.append(CTRL_Z)
        for font in fonts:
            font._append_font_data(out)
        out.append(0)
        return bytes(out)

    def _append_font_data(self, out: bytearray) -> None:
        raw_name = encode_text(self.name)
        if len(raw_name) > FONT_NAME_LEN:
            raise NameTooLongError(self.name, len(raw_name), FONT_NAME_LEN)

        lookup: list[int] = []
        block = bytearray()
        for index in range(CHAR_TABLE_SIZE):
            glyph = self._slot_glyph(index)
            if glyph is None:
                lookup.append(NO_GLYPH)
                continue
            if len(block) >= NO_GLYPH:
                raise SerializationError(f"font {self.name!r}: glyph block exceeds {MAX_BLOCK_SIZE} bytes")
            lookup.append(len(block))
            block.extend(encode_glyph(glyph, self.font_type))
        if len(block) > MAX_BLOCK_SIZE:
            raise SerializationError(f"font {self.name!r}: glyph block exceeds {MAX_BLOCK_SIZE} bytes")

        out.extend(struct.pack("<I", FONT_INDICATOR))
        out.append(FONT_NAME_LEN)
        out.extend(raw_name.ljust(FONT_NAME_LEN, b"\x00"))
        out.extend(bytes(RESERVED_LEN))
        out.append(int(self.font_type))
        out.append(self._spacing & 0xFF)
        out.extend(struct.pack("<H", len(block)))
        out.extend(_LOOKUP_STRUCT.pack(*lookup))
        out.extend(block)


def _encode_part(part: GlyphPart) -> tuple[int, int]:
    """Return ``(code, attribute)`` for a drawable part."""

    if isinstance(part, AnsiChar):
        return from_unicode(part.ch), pack_attribute(part.fg, part.bg, part.blink)
    if isinstance(part, Char):
        return from_unicode(part.ch), DEFAULT_ATTRIBUTE
    if isinstance(part, Skip):
        return SPACE, DEFAULT_ATTRIBUTE
    if isinstance(part, HardBlank):
        return HARD_BLANK_CODE, DEFAULT_ATTRIBUTE
    if isinstance(part, FillMarker):
        return FILL_MARK, DEFAULT_ATTRIBUTE
    if isinstance(part, OutlineHole):
        return HOLE_MARK, DEFAULT_ATTRIBUTE
    if isinstance(part, OutlinePlaceholder):
        return part.code & 0xFF, DEFAULT_ATTRIBUTE
    raise TypeError(f"unsupported glyph part {part!r}")


def encode_glyph(glyph: Glyph, font_type: TdfFontType) -> bytes:
    """Encode ``glyph`` as a TDF glyph body including its terminator."""

    if not 0 <= glyph.width <= 0xFF or not 0 <= glyph.height <= 0xFF:
        raise SerializationError(f"glyph {glyph.width}x{glyph.height} exceeds 255x255")
    body = bytearray((glyph.width, glyph.height))
    for part in glyph.parts:
        if isinstance(part, NewLine):
            body.append(LINE_BREAK)
        elif isinstance(part, EndMarker):
            body.append(END_MARK)
        else:
            code, attribute = _encode_part(part)
            body.append(code)
            if font_type is TdfFontType.COLOR:
                body.append(attribute)
    body.append(GLYPH_TERMINATOR)
    return bytes(body)


def create_bundle(fonts: Sequence[TdfFont]) -> bytes:
    return TdfFont.create_bundle(fonts)


__all__ = [
    "CHAR_TABLE_SIZE",
    "DEFAULT_ATTRIBUTE",
    "FONT_INDICATOR",
    "GlyphLocator",
    "TDF_SIGNATURE",
    "TdfFont",
    "TdfFontType",
    "create_bundle",
    "decode_glyph",
    "encode_glyph",
    "pack_attribute",
    "unpack_attribute",
]
