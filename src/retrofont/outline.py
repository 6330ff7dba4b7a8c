"""Outline style table used to resolve outline-font placeholder letters."""
from __future__ import annotations

from typing import Final

from .cp437 import to_unicode

# TheDraw's 19 outline styles, 17 characters each, already converted from
# CP437. Column ``n`` resolves placeholder letter ``chr(ord("A") + n)``.
OUTLINE_STYLES: Final[tuple[str, ...]] = (
    "──││┌┐┌┐└┘└┘┤├   ",
    "═─││╒╕┌┐╘╛└┘╡├   ",
    "─═││┌┐╒╕└┘╘╛┤╞   ",
    "══││╒╕╒╕╘╛╘╛╡╞   ",
    "──║│╓┐┌╖└╜╙┘╢├   ",
    "═─║│╔╕┌╖╘╝╙┘╣├   ",
    "─═║│╓┐╒╗└╜╚╛╢╞   ",
    "══║│╔╕╒╗╘╝╚╛╣╞   ",
    "──│║┌╖╓┐╙┘└╜┤╟   ",
    "═─│║╒╗╓┐╚╛└╜╡╟   ",
    "─═│║┌╖╔╕╙┘╘╝┤╠   ",
    "══│║╒╗╔╕╚╛╘╝╡╠   ",
    "──║║╓╖╓╖╙╜╙╜╢╟   ",
    "═─║║╔╗╓╖╚╝╙╜╣╟   ",
    "─═║║╓╖╔╗╙╜╚╝╢╠   ",
    "══║║╔╗╔╗╚╝╚╝╣╠   ",
    "▄▄██▄▄▄▄██████   ",
    "▀▀██████▀▀▀▀██   ",
    "▀▄▐▌▐▌▄▄▀▀▐▌██   ",
)

OUTLINE_STYLE_COUNT: Final[int] = len(OUTLINE_STYLES)
OUTLINE_COLUMNS: Final[int] = 17

PLACEHOLDER_FIRST: Final[int] = ord("A")
PLACEHOLDER_LAST: Final[int] = ord("R")


def is_placeholder(code: int) -> bool:
    return PLACEHOLDER_FIRST <= code <= PLACEHOLDER_LAST


def transform_outline(style: int, code: int) -> str:
    """Resolve outline placeholder ``code`` through outline ``style``.

    Letters past the table's 17 columns resolve to a blank. A ``style`` outside
    the table falls back to the plain CP437 character for ``code``.
    """

    column = code - PLACEHOLDER_FIRST
    if not 0 <= column < OUTLINE_COLUMNS:
        return " "
    if not 0 <= style < OUTLINE_STYLE_COUNT:
        return to_unicode(code)
    return OUTLINE_STYLES[style][column]


__all__ = [
    "OUTLINE_COLUMNS",
    "OUTLINE_STYLES",
    "OUTLINE_STYLE_COUNT",
    "PLACEHOLDER_FIRST",
    "PLACEHOLDER_LAST",
    "is_placeholder",
    "transform_outline",
]
