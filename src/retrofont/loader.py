"""Format detection and the single entry point for loading font files."""
from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Union

from .errors import EmptyBundleError, UnrecognizedFormatError
from .figlet import FIGLET_SIGNATURE, GZIP_MAGIC, ZIP_MAGIC, FigletFont
from .tdf import TDF_SIGNATURE, TdfFont

LOGGER = logging.getLogger(__name__)

Font = Union[TdfFont, FigletFont]


class FontFormat(enum.Enum):
    TDF = "tdf"
    FIGLET = "figlet"


def detect_format(data: bytes) -> FontFormat:
    """Identify the font format from the leading signature bytes."""

    if data.startswith(TDF_SIGNATURE):
        return FontFormat.TDF
    if data.startswith((FIGLET_SIGNATURE, ZIP_MAGIC, GZIP_MAGIC)):
        return FontFormat.FIGLET
    raise UnrecognizedFormatError()


def load_fonts(data: bytes | bytearray | memoryview, name: str | None = None) -> list[Font]:
    """Load every font contained in ``data``.

    ``name`` only applies to FIGlet input, which carries no name of its own.
    """

    buffer = bytes(data)
    font_format = detect_format(buffer)
    if font_format is FontFormat.TDF:
        fonts: list[Font] = list(TdfFont.load(buffer))
        if not fonts:
            raise EmptyBundleError()
        return fonts
    return [FigletFont.load(buffer, name=name)]


def load_font_file(path: Path | str) -> list[Font]:
    """Read ``path`` and load its fonts; FIGlet fonts are named after the file."""

    font_path = Path(path)
    LOGGER.debug("loading fonts from %s", font_path)
    return load_fonts(font_path.read_bytes(), name=font_path.stem)


__all__ = ["Font", "FontFormat", "detect_format", "load_font_file", "load_fonts"]
