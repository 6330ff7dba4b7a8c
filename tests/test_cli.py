from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from retrofont.cli import main, parse_args
from retrofont.glyph import AnsiChar, Char, Glyph, parts_from_text
from retrofont.loader import load_font_file
from retrofont.tdf import TdfFont, TdfFontType, create_bundle


def _write_bundle(tmp_path: Path) -> Path:
    block = TdfFont("BLOCKY", TdfFontType.BLOCK, spacing=1)
    block.add_glyph("H", Glyph.from_parts(parts_from_text(["H H", "HHH"])))
    block.add_glyph("I", Glyph.from_parts(parts_from_text(["I", "I"])))
    colour = TdfFont("SHINY", TdfFontType.COLOR)
    colour.add_glyph("H", Glyph.from_parts([AnsiChar("█", 12, 0)]))
    outline = TdfFont("LINES", TdfFontType.OUTLINE)
    outline.add_glyph("H", Glyph.from_parts([Char("A"), Char("B")]))
    font_path = tmp_path / "fonts.tdf"
    font_path.write_bytes(create_bundle([block, colour, outline]))
    return font_path


def test_parse_args_render_options() -> None:
    args = parse_args(["render", "font.tdf", "HI", "--outline", "7", "--edit", "-n", "2", "--fg", "3"])

    assert args.command == "render"
    assert args.font == Path("font.tdf")
    assert (args.outline, args.edit, args.num, args.fg, args.bg) == (7, True, 2, 3, None)
    assert args.log_level == "WARNING"


@pytest.mark.parametrize(
    "argv",
    [
        ["render", "font.tdf", "HI", "--outline", "19"],
        ["render", "font.tdf", "HI", "--fg", "16"],
        ["convert", "in.flf", "out.tdf", "--type", "zigzag"],
    ],
)
def test_parse_args_rejects_out_of_range_values(argv: list[str]) -> None:
    with pytest.raises(SystemExit):
        parse_args(argv)


def test_inspect_lists_bundle(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["inspect", str(_write_bundle(tmp_path))]) == 0

    out = capsys.readouterr().out
    assert "TDF bundle: 3 fonts" in out
    assert "Font #1: BLOCKY (block)" in out
    assert "Font #2: SHINY (color)" in out
    assert "Font #3: LINES (outline)" in out
    assert "  Defined characters: 2" in out


def test_inspect_figlet(tmp_path: Path, figlet_source, capsys: pytest.CaptureFixture[str]) -> None:
    font_path = tmp_path / "mini.flf"
    font_path.write_bytes(figlet_source())

    assert main(["inspect", str(font_path)]) == 0

    out = capsys.readouterr().out
    assert "FIGLET font: mini (figlet)" in out
    assert "  Defined characters: 96" in out
    assert "  Height: 2" in out


def test_render_plain(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["render", str(_write_bundle(tmp_path)), "hi", "--plain"]) == 0

    assert capsys.readouterr().out == "H HI\nHHHI\n"


def test_render_outline_style(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    font_path = _write_bundle(tmp_path)

    assert main(["render", str(font_path), "H", "--plain", "-n", "3", "--outline", "3"]) == 0

    assert capsys.readouterr().out == "══\n"


def test_render_colour_emits_ansi(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["render", str(_write_bundle(tmp_path)), "H", "--num", "2"]) == 0

    assert capsys.readouterr().out == "\x1b[38;2;255;85;85;48;2;0;0;0m█\x1b[0m\n"


def test_render_uses_config_defaults(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "retrofont.toml"
    config_path.write_text(
        textwrap.dedent(
            """
            [render]
            font_number = 3
            outline_style = 0
            """
        ),
        encoding="utf-8",
    )

    argv = ["--config", str(config_path), "render", str(_write_bundle(tmp_path)), "H", "--plain"]
    assert main(argv) == 0

    assert capsys.readouterr().out == "──\n"


def test_render_reports_missing_characters(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["render", str(_write_bundle(tmp_path)), "HEY"]) == 1

    assert "cannot render 'EY'" in capsys.readouterr().err


def test_render_rejects_unknown_font_number(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["render", str(_write_bundle(tmp_path)), "H", "-n", "4"]) == 1

    assert "font #4 does not exist" in capsys.readouterr().err


def test_render_rejects_unrecognized_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    font_path = tmp_path / "notes.txt"
    font_path.write_text("just text", encoding="utf-8")

    assert main(["render", str(font_path), "H"]) == 1

    assert "unrecognized font format" in capsys.readouterr().err


def test_convert_writes_tdf(tmp_path: Path, figlet_source) -> None:
    source = tmp_path / "mini.flf"
    source.write_bytes(figlet_source())
    target = tmp_path / "mini.tdf"

    assert main(["convert", str(source), str(target), "--type", "block"]) == 0

    (font,) = load_font_file(target)
    assert font.name == "mini"
    assert font.font_type is TdfFontType.BLOCK
    assert font.glyph_count() == 94


def test_convert_rejects_tdf_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["convert", str(_write_bundle(tmp_path)), str(tmp_path / "out.tdf")]) == 1

    assert "only accepts FIGlet input" in capsys.readouterr().err


def test_convert_outline_target_fails(tmp_path: Path, figlet_source, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "mini.flf"
    source.write_bytes(figlet_source())

    assert main(["convert", str(source), str(tmp_path / "out.tdf"), "--type", "outline"]) == 1

    assert "unsupported conversion target" in capsys.readouterr().err
