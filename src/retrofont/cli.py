"""Command-line front end for rendering, converting and inspecting fonts."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, Sequence

from .config import RetrofontConfig, load_config, parse_font_type
from .console import missing_chars, render_text
from .convert import figlet_to_tdf
from .figlet import FigletFont
from .glyph import RenderMode, RenderOptions
from .loader import Font, load_font_file
from .outline import OUTLINE_STYLE_COUNT
from .tdf import TdfFontType

LOGGER = logging.getLogger(__name__)


def _outline_style(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{raw!r} is not a valid number") from exc
    if not 0 <= value < OUTLINE_STYLE_COUNT:
        raise argparse.ArgumentTypeError(
            f"outline style {value} is out of range (valid: 0..{OUTLINE_STYLE_COUNT - 1})"
        )
    return value


def _color(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{raw!r} is not a valid colour") from exc
    if not 0 <= value <= 15:
        raise argparse.ArgumentTypeError(f"colour {value} is out of range (valid: 0..15)")
    return value


def _font_type(raw: str) -> TdfFontType:
    try:
        return parse_font_type(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed command-line arguments for the retrofont CLI."""

    parser = argparse.ArgumentParser(prog="retrofont", description="Retro terminal font toolkit")
    parser.add_argument("--config", type=Path, help="Path to a retrofont TOML configuration file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    render = commands.add_parser("render", help="Render text with a font")
    render.add_argument("font", type=Path, help="TDF bundle or FIGlet font file")
    render.add_argument("text", help="Text to render")
    render.add_argument(
        "--outline",
        type=_outline_style,
        help=f"Outline style index (0..{OUTLINE_STYLE_COUNT - 1}) for outline fonts",
    )
    render.add_argument("--edit", action="store_true", default=None, help="Show editor markers")
    render.add_argument("-n", "--num", type=int, help="Font number within a TDF bundle (1-based)")
    render.add_argument("--fg", type=_color, help="Foreground for cells without colour")
    render.add_argument("--bg", type=_color, help="Background for cells without colour")
    render.add_argument("--plain", action="store_true", help="Print text without ANSI escapes")

    convert = commands.add_parser("convert", help="Convert a FIGlet font to TDF")
    convert.add_argument("input", type=Path, help="FIGlet .flf (or zipped .flf) input")
    convert.add_argument("output", type=Path, help="TDF output path")
    convert.add_argument("--type", dest="font_type", type=_font_type, help="block or color")

    inspect = commands.add_parser("inspect", help="Show font metadata")
    inspect.add_argument("font", type=Path, help="TDF bundle or FIGlet font file")

    return parser.parse_args(argv)


def _select_font(fonts: list[Font], number: int) -> Font:
    if number < 1:
        raise ValueError("font number must be 1 or greater (1-based index)")
    if number > len(fonts):
        raise ValueError(
            f"font #{number} does not exist; file contains {len(fonts)} font(s), use 'inspect' to list them"
        )
    return fonts[number - 1]


def run_render(args: argparse.Namespace, config: RetrofontConfig) -> int:
    settings = config.render
    number = args.num if args.num is not None else settings.font_number
    edit = args.edit if args.edit is not None else settings.edit
    outline = args.outline if args.outline is not None else settings.outline_style

    font = _select_font(load_font_file(args.font), number)
    missing = missing_chars(font, args.text)
    if missing:
        LOGGER.error("font %r lacks characters: %s", font.name, "".join(missing))
        print(f"error: font {font.name!r} cannot render {''.join(missing)!r}", file=sys.stderr)
        return 1

    options = RenderOptions(RenderMode.EDIT if edit else RenderMode.DISPLAY, outline)
    renderer = render_text(font, args.text, options)
    if args.plain:
        print(renderer.to_text())
    else:
        fg = args.fg if args.fg is not None else settings.fg
        bg = args.bg if args.bg is not None else settings.bg
        print(renderer.to_ansi(fg, bg))
    return 0


def run_convert(args: argparse.Namespace, config: RetrofontConfig) -> int:
    fonts = load_font_file(args.input)
    source = fonts[0]
    if not isinstance(source, FigletFont):
        print("error: convert only accepts FIGlet input", file=sys.stderr)
        return 1
    font_type = args.font_type if args.font_type is not None else config.convert.font_type
    tdf = figlet_to_tdf(source, font_type)
    args.output.write_bytes(tdf.to_bytes())
    LOGGER.info("wrote %s (%d glyphs)", args.output, tdf.glyph_count())
    return 0


def run_inspect(args: argparse.Namespace, config: RetrofontConfig) -> int:
    fonts = load_font_file(args.font)
    if len(fonts) > 1:
        print(f"TDF bundle: {len(fonts)} fonts")
    for index, font in enumerate(fonts, start=1):
        label = f"Font #{index}" if len(fonts) > 1 else f"{font.format_name.upper()} font"
        print(f"{label}: {font.name} ({font.type_name})")
        print(f"  Defined characters: {font.glyph_count()}")
        print(f"  Spacing: {font.spacing}")
        if isinstance(font, FigletFont) and font.header is not None:
            print(f"  Height: {font.header.height}")
            print(f"  Hard blank: {font.header.hard_blank!r}")
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, RetrofontConfig], int]] = {
    "render": run_render,
    "convert": run_convert,
    "inspect": run_inspect,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the retrofont CLI."""

    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    try:
        config = load_config(args.config) if args.config is not None else RetrofontConfig()
        return COMMANDS[args.command](args, config)
    except (ValueError, OSError) as exc:
        LOGGER.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())


__all__ = ["COMMANDS", "main", "parse_args", "run_convert", "run_inspect", "run_render"]
