from __future__ import annotations

from retrofont.console import RESET, ConsoleRenderer, missing_chars, render_text, render_to_ansi
from retrofont.glyph import SKIP, AnsiChar, Cell, Glyph, RenderOptions
from retrofont.tdf import TdfFont, TdfFontType


def test_glyphs_are_laid_out_side_by_side(block_font: TdfFont) -> None:
    renderer = render_text(block_font, "AB")

    assert renderer.to_text() == "AAB\nA BB"
    assert renderer.width == 4


def test_missing_space_advances_by_font_spacing(block_font: TdfFont) -> None:
    renderer = render_text(block_font, "A B")

    assert renderer.to_text() == "AA  B\nA   BB"


def test_consecutive_spaces_accumulate(block_font: TdfFont) -> None:
    renderer = render_text(block_font, "A  B")

    assert renderer.to_text() == "AA    B\nA     BB"


def test_lowercase_renders_with_uppercase_glyph(block_font: TdfFont) -> None:
    assert render_text(block_font, "ab").to_text() == render_text(block_font, "AB").to_text()


def test_missing_chars_reports_each_once(block_font: TdfFont) -> None:
    assert missing_chars(block_font, "AxB x?a") == ["x", "?"]


def test_skip_leaves_transparent_cell() -> None:
    renderer = ConsoleRenderer()
    renderer.draw(Cell("a"))
    renderer.skip()
    renderer.draw(Cell("b"))

    assert renderer.lines == [[Cell("a"), None, Cell("b")]]
    assert renderer.to_text() == "a b"


def test_to_ansi_uses_dos_palette_and_resets_each_line() -> None:
    font = TdfFont("ANSI", TdfFontType.COLOR)
    font.add_glyph("A", Glyph.from_parts([AnsiChar("█", 4, 1), AnsiChar("█", 4, 1), SKIP]))

    output = render_to_ansi(font, "A")

    assert output == "\x1b[38;2;170;0;0;48;2;0;0;170m██" + RESET + " " + RESET


def test_to_ansi_applies_defaults_to_plain_cells(block_font: TdfFont) -> None:
    output = render_to_ansi(block_font, "B", RenderOptions(), default_fg=15)

    assert output == "\x1b[38;2;255;255;255mB" + RESET + "\n\x1b[38;2;255;255;255mBB" + RESET


def test_blink_attribute_in_sgr() -> None:
    renderer = ConsoleRenderer()
    renderer.draw(Cell("x", 7, 9, True))

    assert renderer.to_ansi() == "\x1b[38;2;170;170;170;48;2;85;85;255;5mx" + RESET
