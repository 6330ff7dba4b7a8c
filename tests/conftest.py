"""Pytest configuration to ensure the retrofont package is importable."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Mapping, Sequence

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_root_str = str(_REPO_ROOT)
if _root_str not in sys.path:
    sys.path.insert(0, _root_str)

import sitecustomize  # noqa: F401  # Ensure src/ is on sys.path via sitecustomize hook.

from retrofont.glyph import Glyph, parts_from_text  # noqa: E402
from retrofont.tdf import TdfFont, TdfFontType  # noqa: E402


def _glyph_rows(code: int, height: int, hard_blank: str) -> list[str]:
    char = chr(code)
    if code == 32:
        rows = [hard_blank] * height
    else:
        fill = "#" if char in ("@", hard_blank) else char
        rows = [fill * 2] * height
    return [row + "@" for row in rows[:-1]] + [rows[-1] + "@@"]


def build_figlet(
    *,
    height: int = 2,
    hard_blank: str = "$",
    comments: Sequence[str] = ("retrofont test font",),
    include_127: bool = True,
    overrides: Mapping[int, Sequence[str]] | None = None,
    line_ending: str = "\n",
) -> bytes:
    """Return ``flf2a`` text covering 32..126 (and 127) with two-column glyphs.

    ``overrides`` maps a character code to raw glyph lines, end marks included.
    """

    overrides = overrides or {}
    lines = [f"flf2a{hard_blank} {height} {height - 1} 10 0 {len(comments)}", *comments]
    last = 127 if include_127 else 126
    for code in range(32, last + 1):
        lines.extend(overrides.get(code, _glyph_rows(code, height, hard_blank)))
    return (line_ending.join(lines) + line_ending).encode("utf-8")


@pytest.fixture
def figlet_source():
    return build_figlet


@pytest.fixture
def block_font() -> TdfFont:
    """Block font with two small glyphs and a two column space."""

    font = TdfFont("BLOCKY", TdfFontType.BLOCK, spacing=2)
    font.add_glyph("A", Glyph.from_parts(parts_from_text(["AA", "A"])))
    font.add_glyph("B", Glyph.from_parts(parts_from_text(["B", "BB"])))
    return font
