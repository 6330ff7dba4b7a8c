"""Glyph data model and the render state machine that projects it onto cells."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Protocol, Sequence, Union

from .cp437 import HARD_BLANK_CODE, to_unicode
from .outline import transform_outline


@dataclass(frozen=True)
class NewLine:
    """Logical line break (CR in TDF data, a new source line in FIGlet)."""


@dataclass(frozen=True)
class EndMarker:
    """TDF ``&`` marker, only visible in edit mode."""


@dataclass(frozen=True)
class HardBlank:
    """Space that takes part in layout; shown as NBSP in edit mode."""


@dataclass(frozen=True)
class FillMarker:
    """Outline-font fill cell (``@``)."""


@dataclass(frozen=True)
class OutlineHole:
    """Outline-font hole cell (``O``)."""


@dataclass(frozen=True)
class Skip:
    """Transparent cell that advances the cursor without drawing."""


@dataclass(frozen=True)
class OutlinePlaceholder:
    """Outline style letter ``A``..``R`` resolved at render time."""

    code: int


@dataclass(frozen=True)
class Char:
    """Plain character cell."""

    ch: str


@dataclass(frozen=True)
class AnsiChar:
    """Colour font cell carrying foreground, background and blink attributes."""

    ch: str
    fg: int = 7
    bg: int = 0
    blink: bool = False


GlyphPart = Union[
    NewLine,
    EndMarker,
    HardBlank,
    FillMarker,
    OutlineHole,
    Skip,
    OutlinePlaceholder,
    Char,
    AnsiChar,
]

NEW_LINE = NewLine()
END_MARKER = EndMarker()
HARD_BLANK = HardBlank()
FILL_MARKER = FillMarker()
OUTLINE_HOLE = OutlineHole()
SKIP = Skip()


def part_width(part: GlyphPart) -> int:
    """Return the number of columns ``part`` occupies in display mode."""

    if isinstance(part, (NewLine, EndMarker)):
        return 0
    return 1


@dataclass(frozen=True)
class Glyph:
    """A decoded multi-line glyph.

    ``height`` always equals the number of :class:`NewLine` parts plus one;
    ``width`` is the widest rendered line.
    """

    width: int
    height: int
    parts: tuple[GlyphPart, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(self.parts))

    @classmethod
    def from_parts(cls, parts: Iterable[GlyphPart]) -> "Glyph":
        """Build a glyph, measuring width and height from ``parts``."""

        collected = tuple(parts)
        width = 0
        line_width = 0
        height = 1
        for part in collected:
            if isinstance(part, NewLine):
                width = max(width, line_width)
                line_width = 0
                height += 1
            else:
                line_width += part_width(part)
        return cls(width=max(width, line_width), height=height, parts=collected)

    def lines(self) -> list[list[GlyphPart]]:
        """Split the parts into logical lines (newlines removed)."""

        rows: list[list[GlyphPart]] = [[]]
        for part in self.parts:
            if isinstance(part, NewLine):
                rows.append([])
            else:
                rows[-1].append(part)
        return rows


class RenderMode(enum.Enum):
    DISPLAY = "display"
    EDIT = "edit"


@dataclass(frozen=True)
class RenderOptions:
    """Per-render switches: display vs. edit mode and the outline style."""

    render_mode: RenderMode = RenderMode.DISPLAY
    outline_style: int = 0

    @classmethod
    def display(cls, outline_style: int = 0) -> "RenderOptions":
        return cls(RenderMode.DISPLAY, outline_style)

    @classmethod
    def edit(cls, outline_style: int = 0) -> "RenderOptions":
        return cls(RenderMode.EDIT, outline_style)

    @property
    def is_edit(self) -> bool:
        return self.render_mode is RenderMode.EDIT


@dataclass(frozen=True)
class Cell:
    """One styled character cell emitted by the renderer."""

    ch: str
    fg: int | None = None
    bg: int | None = None
    blink: bool = False


class FontTarget(Protocol):
    """Sink the renderer draws into.

    Targets may additionally provide ``skip()`` to advance past a transparent
    cell without drawing; targets without it receive a blank cell instead.
    """

    def draw(self, cell: Cell) -> None:
        ...

    def next_line(self) -> None:
        ...


_EDIT_HARD_BLANK = to_unicode(HARD_BLANK_CODE)


def iter_cells(glyph: Glyph, options: RenderOptions) -> Iterator[Cell | NewLine | Skip]:
    """Yield the cells for ``glyph``; line breaks and skips pass through as parts."""

    edit = options.is_edit
    for part in glyph.parts:
        if isinstance(part, NewLine):
            yield part
        elif isinstance(part, Char):
            yield Cell(part.ch)
        elif isinstance(part, AnsiChar):
            yield Cell(part.ch, part.fg, part.bg, part.blink)
        elif isinstance(part, Skip):
            yield part
        elif isinstance(part, EndMarker):
            if edit:
                yield Cell("&")
        elif isinstance(part, HardBlank):
            yield Cell(_EDIT_HARD_BLANK if edit else " ")
        elif isinstance(part, FillMarker):
            yield Cell("@" if edit else " ")
        elif isinstance(part, OutlineHole):
            yield Cell("O" if edit else " ")
        elif isinstance(part, OutlinePlaceholder):
            yield Cell(transform_outline(options.outline_style, part.code))
        else:  # pragma: no cover - closed union
            raise TypeError(f"unsupported glyph part {part!r}")


def render_glyph(glyph: Glyph, target: FontTarget, options: RenderOptions | None = None) -> None:
    """Draw ``glyph`` onto ``target`` according to ``options``."""

    options = options or RenderOptions()
    skip = getattr(target, "skip", None)
    for item in iter_cells(glyph, options):
        if isinstance(item, NewLine):
            target.next_line()
        elif isinstance(item, Skip):
            if callable(skip):
                skip()
            else:
                target.draw(Cell(" "))
        else:
            target.draw(item)


def glyph_text(glyph: Glyph, options: RenderOptions | None = None) -> list[str]:
    """Render ``glyph`` to plain text lines, skips drawn as spaces."""

    options = options or RenderOptions()
    lines = [""]
    for item in iter_cells(glyph, options):
        if isinstance(item, NewLine):
            lines.append("")
        elif isinstance(item, Skip):
            lines[-1] += " "
        else:
            lines[-1] += item.ch
    return lines


def parts_from_text(rows: Sequence[str]) -> tuple[GlyphPart, ...]:
    """Convert plain text rows into :class:`Char` parts separated by newlines."""

    parts: list[GlyphPart] = []
    for index, row in enumerate(rows):
        if index:
            parts.append(NEW_LINE)
        parts.extend(Char(char) for char in row)
    return tuple(parts)


__all__ = [
    "AnsiChar",
    "Cell",
    "Char",
    "END_MARKER",
    "EndMarker",
    "FILL_MARKER",
    "FillMarker",
    "FontTarget",
    "Glyph",
    "GlyphPart",
    "HARD_BLANK",
    "HardBlank",
    "NEW_LINE",
    "NewLine",
    "OUTLINE_HOLE",
    "OutlineHole",
    "OutlinePlaceholder",
    "RenderMode",
    "RenderOptions",
    "SKIP",
    "Skip",
    "glyph_text",
    "iter_cells",
    "part_width",
    "parts_from_text",
    "render_glyph",
]
