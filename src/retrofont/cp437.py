"""Code page 437 translation helpers shared by the font codecs."""
from __future__ import annotations

from functools import lru_cache
from typing import Final, Mapping

# Glyph-oriented CP437: control codes that TheDraw displays as symbols map to
# those symbols, the few it treats as real controls stay as themselves.
CP437_TO_UNICODE: Final[tuple[str, ...]] = tuple(
    "\x00☺☻♥♦♣♠•\x08\x09\x0a♂♀\x0d♫☼"
    "►◄↕‼¶§▬↨↑↓\x1a\x1b∟↔▲▼"
    " !\"#$%&'()*+,-./"
    "0123456789:;<=>?"
    "@ABCDEFGHIJKLMNO"
    "PQRSTUVWXYZ[\\]^_"
    "`abcdefghijklmno"
    "pqrstuvwxyz{|}~\x7f"
    "ÇüéâäàåçêëèïîìÄÅ"
    "ÉæÆôöòûùÿÖÜ¢£¥₧ƒ"
    "áíóúñÑªº¿⌐¬½¼¡«»"
    "░▒▓│┤╡╢╖╕╣║╗╝╜╛┐"
    "└┴┬├─┼╞╟╚╔╩╦╠═╬╧"
    "╨╤╥╙╘╒╓╫╪┘┌█▄▌▐▀"
    "αßΓπΣσµτΦΘΩδ∞φε∩"
    "≡±≥≤⌠⌡÷≈°∙·√ⁿ²■\u00a0"
)

HARD_BLANK_CODE: Final[int] = 0xFF
UNMAPPED_CODE: Final[int] = ord("?")


@lru_cache(maxsize=None)
def _reverse_table() -> Mapping[str, int]:
    """Build the Unicode to CP437 map once; NUL is left out on purpose."""

    return {char: code for code, char in enumerate(CP437_TO_UNICODE) if code != 0}


def to_unicode(code: int) -> str:
    """Return the Unicode character for the CP437 byte ``code``."""

    return CP437_TO_UNICODE[int(code) & 0xFF]


def from_unicode(char: str, default: int = UNMAPPED_CODE) -> int:
    """Return the CP437 byte for ``char`` or ``default`` when unmapped."""

    return _reverse_table().get(char, default)


def decode_bytes(raw: bytes) -> str:
    return "".join(CP437_TO_UNICODE[byte] for byte in raw)


def encode_text(text: str) -> bytes:
    return bytes(from_unicode(char) for char in text)


__all__ = [
    "CP437_TO_UNICODE",
    "HARD_BLANK_CODE",
    "UNMAPPED_CODE",
    "decode_bytes",
    "encode_text",
    "from_unicode",
    "to_unicode",
]
