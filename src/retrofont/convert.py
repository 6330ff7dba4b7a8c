"""Convert FIGlet fonts into TheDraw fonts."""
from __future__ import annotations

import logging
from typing import Final, Iterator

from .errors import IncompatibleConversionError, UnsupportedConversionError
from .figlet import FigletFont
from .glyph import SKIP, AnsiChar, Char, Glyph, GlyphPart
from .tdf import CHAR_TABLE_SIZE, DEFAULT_BG, DEFAULT_FG, FONT_NAME_LEN, TdfFont, TdfFontType

LOGGER = logging.getLogger(__name__)

MAX_GLYPH_WIDTH: Final[int] = 30
MAX_GLYPH_HEIGHT: Final[int] = 12
CONVERTED_SPACING: Final[int] = 1

_PRINTABLE: Final[tuple[str, ...]] = tuple(chr(ord("!") + index) for index in range(CHAR_TABLE_SIZE))


def _fits(glyph: Glyph) -> bool:
    return glyph.width <= MAX_GLYPH_WIDTH and glyph.height <= MAX_GLYPH_HEIGHT


def _printable_glyphs(fig: FigletFont) -> Iterator[tuple[str, Glyph]]:
    for char in _PRINTABLE:
        glyph = fig.glyph(char)
        if glyph is not None:
            yield char, glyph


def can_convert_figlet_to_tdf(fig: FigletFont, target: TdfFontType) -> bool:
    """Return whether at least one printable glyph fits the TDF dimension limits."""

    return any(_fits(glyph) for _, glyph in _printable_glyphs(fig))


def _convert_part(part: GlyphPart, target: TdfFontType) -> GlyphPart:
    if isinstance(part, Char):
        if part.ch == " ":
            return SKIP
        if target is TdfFontType.COLOR:
            return AnsiChar(part.ch, DEFAULT_FG, DEFAULT_BG, False)
        return part
    if isinstance(part, AnsiChar):
        if part.ch == " " and part.bg == 0:
            return SKIP
        if target is TdfFontType.BLOCK:
            return Char(part.ch)
        return part
    return part


def figlet_to_tdf(fig: FigletFont, target: TdfFontType) -> TdfFont:
    """Convert ``fig`` into a Block or Color TDF font.

    Only ``!``..``~`` is carried over; glyphs larger than
    ``MAX_GLYPH_WIDTH`` x ``MAX_GLYPH_HEIGHT`` are dropped.
    """

    target = TdfFontType(target)
    if target is TdfFontType.OUTLINE:
        raise UnsupportedConversionError(target.name.lower())
    if not can_convert_figlet_to_tdf(fig, target):
        raise IncompatibleConversionError(
            f"no glyph within {MAX_GLYPH_WIDTH}x{MAX_GLYPH_HEIGHT} in {fig.name!r}"
        )

    tdf = TdfFont(fig.name[:FONT_NAME_LEN], target, CONVERTED_SPACING)
    skipped = 0
    for char, glyph in _printable_glyphs(fig):
        if not _fits(glyph):
            skipped += 1
            LOGGER.debug("skipping %r: %dx%d exceeds limits", char, glyph.width, glyph.height)
            continue
        tdf.add_glyph(char, Glyph.from_parts(_convert_part(part, target) for part in glyph.parts))
    LOGGER.info(
        "converted %r to %s TDF: %d glyphs, %d skipped",
        fig.name,
        target.name.lower(),
        tdf.glyph_count(),
        skipped,
    )
    return tdf


__all__ = [
    "MAX_GLYPH_HEIGHT",
    "MAX_GLYPH_WIDTH",
    "can_convert_figlet_to_tdf",
    "figlet_to_tdf",
]
