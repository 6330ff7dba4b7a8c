"""Lay glyphs out side by side and turn the cell grid into ANSI text."""
from __future__ import annotations

import logging
from typing import Final, Iterable

from .errors import UnknownCharacterError
from .font import BaseFont
from .glyph import Cell, RenderOptions

LOGGER = logging.getLogger(__name__)

RESET: Final[str] = "\x1b[0m"

# VGA text mode palette, indexed by DOS colour number.
DOS_PALETTE: Final[tuple[tuple[int, int, int], ...]] = (
    (0x00, 0x00, 0x00),  # black
    (0x00, 0x00, 0xAA),  # blue
    (0x00, 0xAA, 0x00),  # green
    (0x00, 0xAA, 0xAA),  # cyan
    (0xAA, 0x00, 0x00),  # red
    (0xAA, 0x00, 0xAA),  # magenta
    (0xAA, 0x55, 0x00),  # brown
    (0xAA, 0xAA, 0xAA),  # light gray
    (0x55, 0x55, 0x55),  # dark gray
    (0x55, 0x55, 0xFF),  # light blue
    (0x55, 0xFF, 0x55),  # light green
    (0x55, 0xFF, 0xFF),  # light cyan
    (0xFF, 0x55, 0x55),  # light red
    (0xFF, 0x55, 0xFF),  # light magenta
    (0xFF, 0xFF, 0x55),  # yellow
    (0xFF, 0xFF, 0xFF),  # white
)


def _sgr(fg: int | None, bg: int | None, blink: bool) -> str:
    codes: list[str] = []
    if fg is not None:
        r, g, b = DOS_PALETTE[fg % 16]
        codes.append(f"38;2;{r};{g};{b}")
    if bg is not None:
        r, g, b = DOS_PALETTE[bg % 16]
        codes.append(f"48;2;{r};{g};{b}")
    if blink:
        codes.append("5")
    return f"\x1b[{';'.join(codes)}m" if codes else ""


class ConsoleRenderer:
    """Font target that places consecutive glyphs next to each other.

    ``next_line`` moves down within the current glyph while keeping the X
    origin; ``next_char`` moves the origin past the widest line so far.
    Transparent cells are stored as ``None``.
    """

    def __init__(self) -> None:
        self.lines: list[list[Cell | None]] = [[]]
        self._line = 0
        self._x = 0

    def _current_row(self) -> list[Cell | None]:
        while self._line >= len(self.lines):
            self.lines.append([])
        row = self.lines[self._line]
        if len(row) < self._x:
            row.extend([None] * (self._x - len(row)))
        return row

    def draw(self, cell: Cell) -> None:
        self._current_row().append(cell)

    def skip(self) -> None:
        self._current_row().append(None)

    def next_line(self) -> None:
        self._line += 1

    @property
    def width(self) -> int:
        return max((len(row) for row in self.lines), default=0)

    def next_char(self, gap: int = 0) -> None:
        """Start the next glyph ``gap`` columns right of the widest line."""

        self._x = max(self.width, self._x) + max(gap, 0)
        self._line = 0

    def to_text(self) -> str:
        return "\n".join(
            "".join(" " if cell is None else cell.ch for cell in row).rstrip(" ") for row in self.lines
        )

    def to_ansi(self, default_fg: int | None = None, default_bg: int | None = None) -> str:
        """Encode the grid with 24-bit SGR sequences, resetting at each line end."""

        out: list[str] = []
        for index, row in enumerate(self.lines):
            if index:
                out.append("\n")
            style: tuple[int | None, int | None, bool] | None = None
            for cell in row:
                if cell is None:
                    if style is not None and style != (None, None, False):
                        out.append(RESET)
                    style = (None, None, False)
                    out.append(" ")
                    continue
                fg = cell.fg if cell.fg is not None else default_fg
                bg = cell.bg if cell.bg is not None else default_bg
                wanted = (fg, bg, cell.blink)
                if wanted != style:
                    if style is not None and style != (None, None, False):
                        out.append(RESET)
                    out.append(_sgr(*wanted))
                    style = wanted
                out.append(cell.ch)
            out.append(RESET)
        return "".join(out)


def render_text(
    font: BaseFont,
    text: str,
    options: RenderOptions | None = None,
    renderer: ConsoleRenderer | None = None,
) -> ConsoleRenderer:
    """Render ``text`` horizontally; a missing space advances by the font spacing."""

    renderer = renderer or ConsoleRenderer()
    for char in text:
        if char == " " and not font.has_char(char):
            renderer.next_char(font.spacing)
            continue
        font.render_char(renderer, char, options)
        renderer.next_char()
    LOGGER.debug("rendered %d characters into %d columns", len(text), renderer.width)
    return renderer


def render_to_ansi(
    font: BaseFont,
    text: str,
    options: RenderOptions | None = None,
    *,
    default_fg: int | None = None,
    default_bg: int | None = None,
) -> str:
    return render_text(font, text, options).to_ansi(default_fg, default_bg)


def missing_chars(font: BaseFont, text: Iterable[str]) -> list[str]:
    """Return characters of ``text`` the font cannot render, in order of first use."""

    missing: list[str] = []
    for char in text:
        if char == " " or char in missing:
            continue
        try:
            font.resolve_glyph(char)
        except UnknownCharacterError:
            missing.append(char)
    return missing


__all__ = [
    "ConsoleRenderer",
    "DOS_PALETTE",
    "RESET",
    "missing_chars",
    "render_text",
    "render_to_ansi",
]
