"""Public retrofont API: TDF and FIGlet codecs, glyph rendering and conversion."""
from __future__ import annotations

from .convert import MAX_GLYPH_HEIGHT, MAX_GLYPH_WIDTH, can_convert_figlet_to_tdf, figlet_to_tdf
from .cp437 import CP437_TO_UNICODE, from_unicode, to_unicode
from .errors import (
    CharacterRangeError,
    EmptyBundleError,
    FigletParseError,
    FileTooShortError,
    FontError,
    GlyphOffsetError,
    IncompatibleConversionError,
    NameTooLongError,
    SerializationError,
    SignatureMismatchError,
    TruncatedFieldError,
    UnknownCharacterError,
    UnrecognizedFormatError,
    UnsupportedConversionError,
    UnsupportedFontTypeError,
)
from .figlet import FigletFont, FigletHeader
from .font import BaseFont
from .glyph import (
    AnsiChar,
    Cell,
    Char,
    EndMarker,
    FillMarker,
    FontTarget,
    Glyph,
    GlyphPart,
    HardBlank,
    NewLine,
    OutlineHole,
    OutlinePlaceholder,
    RenderMode,
    RenderOptions,
    Skip,
    render_glyph,
)
from .loader import Font, FontFormat, detect_format, load_font_file, load_fonts
from .outline import OUTLINE_STYLE_COUNT, OUTLINE_STYLES, transform_outline
from .tdf import TdfFont, TdfFontType, create_bundle

__all__ = [
    "AnsiChar",
    "BaseFont",
    "CP437_TO_UNICODE",
    "Cell",
    "Char",
    "CharacterRangeError",
    "EmptyBundleError",
    "EndMarker",
    "FigletFont",
    "FigletHeader",
    "FigletParseError",
    "FileTooShortError",
    "FillMarker",
    "Font",
    "FontError",
    "FontFormat",
    "FontTarget",
    "Glyph",
    "GlyphOffsetError",
    "GlyphPart",
    "HardBlank",
    "IncompatibleConversionError",
    "MAX_GLYPH_HEIGHT",
    "MAX_GLYPH_WIDTH",
    "NameTooLongError",
    "NewLine",
    "OUTLINE_STYLES",
    "OUTLINE_STYLE_COUNT",
    "OutlineHole",
    "OutlinePlaceholder",
    "RenderMode",
    "RenderOptions",
    "SerializationError",
    "SignatureMismatchError",
    "Skip",
    "TdfFont",
    "TdfFontType",
    "TruncatedFieldError",
    "UnknownCharacterError",
    "UnrecognizedFormatError",
    "UnsupportedConversionError",
    "UnsupportedFontTypeError",
    "can_convert_figlet_to_tdf",
    "create_bundle",
    "detect_format",
    "figlet_to_tdf",
    "from_unicode",
    "load_font_file",
    "load_fonts",
    "render_glyph",
    "to_unicode",
    "transform_outline",
]
