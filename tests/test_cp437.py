from __future__ import annotations

import pytest

from retrofont.cp437 import (
    CP437_TO_UNICODE,
    HARD_BLANK_CODE,
    UNMAPPED_CODE,
    decode_bytes,
    encode_text,
    from_unicode,
    to_unicode,
)


def test_table_covers_every_byte() -> None:
    assert len(CP437_TO_UNICODE) == 256
    assert all(len(char) == 1 for char in CP437_TO_UNICODE)


@pytest.mark.parametrize(
    ("code", "char"),
    [
        (0x01, "☺"),
        (0x20, " "),
        (0x41, "A"),
        (0x80, "Ç"),
        (0xB0, "░"),
        (0xC4, "─"),
        (0xDB, "█"),
        (0xDF, "▀"),
        (0xE1, "ß"),
        (0xFE, "■"),
        (HARD_BLANK_CODE, "\u00a0"),
    ],
)
def test_known_code_points(code: int, char: str) -> None:
    assert to_unicode(code) == char
    assert from_unicode(char) == code


def test_box_drawing_round_trip() -> None:
    assert decode_bytes(b"\xc9\xcd\xbb") == "╔═╗"
    assert encode_text("╚═╝") == b"\xc8\xcd\xbc"


def test_unmapped_characters_use_default() -> None:
    assert from_unicode("€") == UNMAPPED_CODE
    assert from_unicode("€", default=0) == 0


def test_nul_is_not_a_reverse_target() -> None:
    assert to_unicode(0) == "\x00"
    assert from_unicode("\x00") == UNMAPPED_CODE
