"""FIGlet ``flf2a`` font parser with deferred glyph decoding."""
from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass
from functools import partial
from pathlib import PurePosixPath
from typing import Final, Sequence

from .errors import FigletParseError, SignatureMismatchError, TruncatedFieldError
from .font import BaseFont
from .glyph import HARD_BLANK, NEW_LINE, Char, Glyph, GlyphPart
from .lazy import LazyGlyphSource
from .lines import line_ranges

LOGGER = logging.getLogger(__name__)

FIGLET_SIGNATURE: Final[bytes] = b"flf2a"
GZIP_MAGIC: Final[bytes] = b"\x1f\x8b"
ZIP_MAGIC: Final[bytes] = b"PK\x03\x04"

END_MARK: Final[int] = ord("@")
REQUIRED_CHARS: Final[range] = range(32, 127)
OPTIONAL_CHAR: Final[int] = 127
SLOT_COUNT: Final[int] = 256

Range = tuple[int, int]


def decode_text(raw: bytes) -> str:
    """Decode FIGlet text as UTF-8, falling back to Latin-1 for legacy fonts."""

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def _parse_int(tokens: Sequence[str], index: int, field: str) -> int:
    try:
        return int(tokens[index])
    except ValueError as exc:
        raise FigletParseError(f"invalid header field {field}: {tokens[index]!r}") from exc


def _optional_int(tokens: Sequence[str], index: int) -> int | None:
    if index >= len(tokens):
        return None
    try:
        return int(tokens[index])
    except ValueError:
        return None


@dataclass(frozen=True)
class FigletHeader:
    """Fields of the ``flf2a`` header line."""

    hard_blank: str
    height: int
    baseline: int
    max_length: int
    old_layout: int
    comment_count: int
    print_direction: int | None = None
    full_layout: int | None = None
    codetag_count: int | None = None

    @classmethod
    def parse(cls, line: str) -> "FigletHeader":
        if not line.startswith(FIGLET_SIGNATURE.decode("ascii")):
            raise SignatureMismatchError("missing 'flf2a' header")
        if len(line) < 6:
            raise FigletParseError("header lacks a hard blank character")
        tokens = line.split()
        if len(tokens) < 6:
            raise FigletParseError(f"incomplete header: {len(tokens)} fields (need 6)")

        height = _parse_int(tokens, 1, "height")
        if height <= 0:
            raise FigletParseError(f"invalid glyph height {height}")
        comment_count = _parse_int(tokens, 5, "comment count")
        if comment_count < 0:
            raise FigletParseError(f"invalid comment count {comment_count}")
        return cls(
            hard_blank=line[5],
            height=height,
            baseline=_parse_int(tokens, 2, "baseline"),
            max_length=_parse_int(tokens, 3, "max length"),
            old_layout=_parse_int(tokens, 4, "old layout"),
            comment_count=comment_count,
            print_direction=_optional_int(tokens, 6),
            full_layout=_optional_int(tokens, 7),
            codetag_count=_optional_int(tokens, 8),
        )

    def to_line(self) -> str:
        fields = [
            f"flf2a{self.hard_blank}",
            str(self.height),
            str(self.baseline),
            str(self.max_length),
            str(self.old_layout),
            str(self.comment_count),
        ]
        for extra in (self.print_direction, self.full_layout, self.codetag_count):
            if extra is None:
                break
            fields.append(str(extra))
        return " ".join(fields)


def decode_figlet_glyph(data: bytes, ranges: tuple[Range, ...], *, hard_blank: str | None) -> Glyph:
    """Turn the recorded line ranges of one glyph into glyph parts."""

    parts: list[GlyphPart] = []
    width = 0
    for index, (start, end) in enumerate(ranges):
        if index:
            parts.append(NEW_LINE)
        text = decode_text(data[start:end])
        width = max(width, len(text))
        parts.extend(HARD_BLANK if char == hard_blank else Char(char) for char in text)
    return Glyph(width=width, height=max(len(ranges), 1), parts=tuple(parts))


def _glyph_line(data: bytes, start: int, end: int, line_number: int) -> tuple[Range, bool]:
    """Strip the ``@``/``@@`` end mark; returns the content range and glyph-end flag."""

    while end > start and data[end - 1] in (0x20, 0x09):
        end -= 1
    if end == start or data[end - 1] != END_MARK:
        raise FigletParseError(f"line {line_number}: missing '@' end marker")
    end -= 1
    if end > start and data[end - 1] == END_MARK:
        return (start, end - 1), True
    return (start, end), False


def _read_glyph(
    data: bytes,
    ranges: Sequence[Range],
    cursor: int,
    height: int,
    code: int,
) -> tuple[tuple[Range, ...], int]:
    glyph_ranges: list[Range] = []
    for _ in range(height):
        if cursor >= len(ranges):
            raise TruncatedFieldError(f"glyph for character {code}")
        start, end = ranges[cursor]
        cursor += 1
        content, finished = _glyph_line(data, start, end, cursor)
        glyph_ranges.append(content)
        if finished:
            break
    return tuple(glyph_ranges), cursor


def _extract_flf(buffer: bytes) -> tuple[bytes, str]:
    try:
        with zipfile.ZipFile(io.BytesIO(buffer)) as archive:
            for info in archive.infolist():
                if info.filename.lower().endswith(".flf"):
                    LOGGER.debug("extracting %s from zip archive", info.filename)
                    return archive.read(info), PurePosixPath(info.filename).stem
    except zipfile.BadZipFile as exc:
        raise FigletParseError(f"unreadable zip archive: {exc}") from exc
    raise FigletParseError("zip archive contains no .flf entry")


class FigletFont(BaseFont):
    """A single FIGlet font; slots cover the 8-bit range, parsed files fill 32..127."""

    format_name = "figlet"
    slot_count = SLOT_COUNT

    def __init__(
        self,
        name: str = "figlet",
        *,
        header: FigletHeader | None = None,
        comments: Sequence[str] = (),
        source: LazyGlyphSource[tuple[Range, ...]] | None = None,
        average_width: int | None = None,
    ) -> None:
        super().__init__(name, source=source)
        self.header = header
        self.comments = list(comments)
        self._average_width = average_width

    @property
    def type_name(self) -> str:
        return "figlet"

    @property
    def hard_blank(self) -> str | None:
        return self.header.hard_blank if self.header is not None else None

    @property
    def spacing(self) -> int:
        """Average glyph width; precomputed for parsed fonts."""

        if self._average_width is not None:
            return self._average_width
        widths = [glyph.width for _, glyph in self.iter_glyphs()]
        return round(sum(widths) / len(widths)) if widths else 0

    @property
    def average_width(self) -> int:
        return self.spacing

    def slot_index(self, char: str) -> int | None:
        if len(char) != 1:
            return None
        code = ord(char)
        return code if code < SLOT_COUNT else None

    def slot_char(self, index: int) -> str:
        return chr(index)

    def add_raw_char(self, code: int | str, rows: Sequence[str]) -> None:
        """Add a glyph from plain text rows, honouring the font's hard blank."""

        char = chr(code) if isinstance(code, int) else code
        hard_blank = self.hard_blank
        parts: list[GlyphPart] = []
        for index, row in enumerate(rows):
            if index:
                parts.append(NEW_LINE)
            parts.extend(HARD_BLANK if item == hard_blank else Char(item) for item in row)
        self.add_glyph(char, Glyph.from_parts(parts))

    @classmethod
    def load(cls, data: bytes | bytearray | memoryview, name: str | None = None) -> "FigletFont":
        """Parse a FIGlet font, unpacking it from a ZIP archive when needed."""

        buffer = bytes(data)
        if buffer.startswith(GZIP_MAGIC):
            raise FigletParseError("gzip compressed FIGlet fonts are not supported; provide .flf or .zip")
        if buffer.startswith(ZIP_MAGIC):
            buffer, member_name = _extract_flf(buffer)
            name = name or member_name
        return cls._parse(buffer, name or "figlet")

    @classmethod
    def _parse(cls, buffer: bytes, name: str) -> "FigletFont":
        ranges = line_ranges(buffer)
        if not ranges:
            raise FigletParseError("missing header line")
        header_start, header_end = ranges[0]
        header = FigletHeader.parse(decode_text(buffer[header_start:header_end]))

        cursor = 1
        if cursor + header.comment_count > len(ranges):
            raise TruncatedFieldError("comment lines")
        comments = [decode_text(buffer[start:end]) for start, end in ranges[cursor : cursor + header.comment_count]]
        cursor += header.comment_count

        locators: list[tuple[Range, ...] | None] = [None] * SLOT_COUNT
        for code in REQUIRED_CHARS:
            locators[code], cursor = _read_glyph(buffer, ranges, cursor, header.height, code)
        try:
            locators[OPTIONAL_CHAR], cursor = _read_glyph(buffer, ranges, cursor, header.height, OPTIONAL_CHAR)
        except (FigletParseError, TruncatedFieldError) as exc:
            LOGGER.debug("font %r has no optional glyph %d: %s", name, OPTIONAL_CHAR, exc)

        present = [glyph_ranges for glyph_ranges in locators if glyph_ranges is not None]
        widths = [
            max(len(decode_text(buffer[start:end])) for start, end in glyph_ranges) for glyph_ranges in present
        ]
        average_width = round(sum(widths) / len(widths)) if widths else 0

        decoder = partial(decode_figlet_glyph, hard_blank=header.hard_blank)
        source = LazyGlyphSource(buffer, locators, decoder)
        LOGGER.debug(
            "FIGlet font %r: height=%d glyphs=%d comments=%d",
            name,
            header.height,
            len(present),
            len(comments),
        )
        return cls(
            name,
            header=header,
            comments=comments,
            source=source,
            average_width=average_width,
        )


__all__ = [
    "FIGLET_SIGNATURE",
    "FigletFont",
    "FigletHeader",
    "GZIP_MAGIC",
    "ZIP_MAGIC",
    "decode_figlet_glyph",
    "decode_text",
]
